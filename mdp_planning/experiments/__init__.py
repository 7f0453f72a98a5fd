"""Planning experiments: configs, runner and result I/O."""
