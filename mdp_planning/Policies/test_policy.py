"""Tests for enumerable policies."""

from collections import Counter

import numpy as np
import pytest

from mdp_planning.Models import SimpleHashableStateFactory
from mdp_planning.Policies import GreedyQPolicy, TabularPolicy, UniformRandomPolicy
from mdp_planning.CaseStudies.GridWorld import GridWorld


class FixedQ:
    """Q-value source with hard-coded values."""

    def __init__(self, table):
        self.table = table

    def q_values(self, state):
        return list(self.table.get(state, []))


def test_greedy_single_best_action():
    policy = GreedyQPolicy(FixedQ({"s": [("a", 1.0), ("b", 3.0), ("c", 2.0)]}))
    assert policy.action_distribution("s") == [("b", 1.0)]
    assert policy.sample_action("s") == "b"


def test_greedy_ties_are_uniform():
    policy = GreedyQPolicy(
        FixedQ({"s": [("a", 5.0), ("b", 5.0), ("c", 1.0)]}),
        rng=np.random.default_rng(0),
    )
    assert policy.action_distribution("s") == [("a", 0.5), ("b", 0.5)]

    counts = Counter(policy.sample_action("s") for _ in range(400))
    assert set(counts) == {"a", "b"}
    assert 120 < counts["a"] < 280


def test_greedy_undefined_state():
    policy = GreedyQPolicy(FixedQ({}))
    assert policy.action_distribution("s") == []
    assert not policy.is_defined_for("s")
    with pytest.raises(ValueError):
        policy.sample_action("s")


def test_uniform_random_policy():
    world = GridWorld(2, 2, goal=(1, 1))
    policy = UniformRandomPolicy(world, rng=np.random.default_rng(0))
    dist = policy.action_distribution((0, 0))
    assert len(dist) == 4
    assert sum(p for _, p in dist) == pytest.approx(1.0)
    assert policy.sample_action((0, 0)) in {a for a, _ in dist}
    assert policy.action_distribution((1, 1)) == []


def test_tabular_policy():
    policy = TabularPolicy(
        {"s": "a", "t": {"x": 3.0, "y": 1.0, "z": 0.0}},
        rng=np.random.default_rng(0),
    )
    assert policy.action_distribution("s") == [("a", 1.0)]
    assert policy.action_distribution("t") == [("x", 0.75), ("y", 0.25)]
    assert policy.action_distribution("u") == []
    assert policy.sample_action("t") in {"x", "y"}

    with pytest.raises(ValueError):
        policy.set_action("v", {"x": 0.0})


def test_tabular_policy_uses_hashing():
    policy = TabularPolicy({(1, 2): "go"}, hashing=SimpleHashableStateFactory())
    assert policy.action_distribution([1, 2]) == [("go", 1.0)]
