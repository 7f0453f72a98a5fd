"""Result files for planning experiments.

A run writes one JSON document holding the summary and the run metadata,
plus a ``<name>_tidy.csv`` with one row per policy evaluation pass.
"""

import csv
import json
import os
import platform
import subprocess
from dataclasses import fields, is_dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import numpy as np

# columns of the per-pass convergence table
TIDY_COLUMNS = ["pass", "sweeps", "last_delta", "num_states"]


def describe_source_revision() -> Optional[str]:
    """`git describe` of the working tree ("-dirty" if modified), or None."""
    try:
        out = subprocess.check_output(
            ["git", "describe", "--always", "--dirty"],
            stderr=subprocess.DEVNULL, text=True, timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return out.strip() or None


def build_metadata(config: Any, extra: Optional[Dict] = None) -> Dict[str, Any]:
    """Build a metadata dict from a config object.

    Parameters
    ----------
    config : dataclass or object
        Experiment config. Callable fields are stored by their qualified name.
    extra : dict, optional
        Additional metadata to merge in.
    """
    meta = {
        "created": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "revision": describe_source_revision(),
        "python": platform.python_version(),
        "numpy": np.__version__,
        "config": _serialize_value(config),
    }
    meta.update(extra or {})
    return meta


def _serialize_value(val: Any) -> Any:
    if val is None or isinstance(val, (bool, int, float, str)):
        return val
    if isinstance(val, np.generic):
        return val.item()
    if isinstance(val, np.ndarray):
        return val.tolist()
    if is_dataclass(val) and not isinstance(val, type):
        return {f.name: _serialize_value(getattr(val, f.name)) for f in fields(val)}
    if isinstance(val, dict):
        return {str(k): _serialize_value(v) for k, v in val.items()}
    if isinstance(val, (list, tuple)):
        return [_serialize_value(v) for v in val]
    if callable(val) and hasattr(val, "__qualname__"):
        return f"{val.__module__}.{val.__qualname__}"
    return str(val)


def save_experiment_results(
    path: str,
    results: Dict[str, Any],
    metadata: Dict[str, Any],
    tidy_rows: Optional[List[Dict]] = None,
) -> None:
    """Write results and metadata to ``path`` as JSON.

    If ``tidy_rows`` is given, the per-pass table is written next to it
    with columns ``TIDY_COLUMNS``.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w") as f:
        json.dump({"metadata": metadata, "results": _serialize_value(results)}, f, indent=2)

    if not tidy_rows:
        return
    stem, _ = os.path.splitext(path)
    with open(stem + "_tidy.csv", "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=TIDY_COLUMNS)
        writer.writeheader()
        for row in tidy_rows:
            writer.writerow({c: _serialize_value(row[c]) for c in TIDY_COLUMNS})
