"""Tests for state hashing and transition models."""

import numpy as np
import pytest

from mdp_planning.Models import (
    MDP,
    TabularModel,
    IdentityHashing,
    SimpleHashableStateFactory,
    mdp_check_distributions,
)


def coin_mdp(p_heads: float = 0.5) -> MDP:
    return MDP(
        states=["start", "heads", "tails"],
        actions={"start": ["flip"]},
        P={("start", "flip"): {"heads": p_heads, "tails": 1.0 - p_heads}},
        R={("start", "flip", "heads"): 1.0},
        terminals={"heads", "tails"},
    )


# ============================================================
# Hashing
# ============================================================

def test_identity_hashing():
    assert IdentityHashing().key((1, 2)) == (1, 2)


def test_simple_hashing_canonicalises_containers():
    hashing = SimpleHashableStateFactory()
    assert hashing.key([1, [2, 3]]) == (1, (2, 3))
    assert hashing.key({"b": 1, "a": [2]}) == hashing.key({"a": [2], "b": 1})
    assert hashing.key({3, 1}) == hashing.key({1, 3})
    assert hashing.key(np.array([[1, 2], [3, 4]])) == ("ndarray", (2, 2), (1, 2, 3, 4))
    assert hash(hashing.key({"pos": np.array([0, 1])})) is not None


def test_simple_hashing_distinguishes_shapes():
    hashing = SimpleHashableStateFactory()
    assert hashing.key(np.zeros((2, 2))) != hashing.key(np.zeros(4))


def test_simple_hashing_distinguishes_container_kinds():
    hashing = SimpleHashableStateFactory()
    assert hashing.key(np.zeros(2)) != hashing.key(((2,), (0.0, 0.0)))
    assert hashing.key({"a": 1}) != hashing.key([("a", 1)])
    assert hashing.key({1, 2}) != hashing.key([1, 2])
    assert hashing.key({1, 2}) != hashing.key({"x": 1})


# ============================================================
# TabularModel
# ============================================================

def test_tabular_model_transitions():
    model = TabularModel(coin_mdp(0.25))
    outcomes = {tp.state: tp for tp in model.transitions("start", "flip")}
    assert outcomes["heads"].p == 0.25
    assert outcomes["heads"].reward == 1.0
    assert outcomes["tails"].reward == 0.0
    assert model.terminal("heads")
    assert not model.terminal("start")
    assert model.applicable_actions("heads") == []


def test_tabular_model_drops_zero_probability_outcomes():
    model = TabularModel(coin_mdp(1.0))
    outcomes = model.transitions("start", "flip")
    assert [tp.state for tp in outcomes] == ["heads"]


def test_sample_by_enumeration():
    model = TabularModel(coin_mdp(0.5), rng=np.random.default_rng(3))
    draws = [model.sample("start", "flip") for _ in range(200)]
    seen = {s for s, _ in draws}
    assert seen == {"heads", "tails"}
    assert all(r == (1.0 if s == "heads" else 0.0) for s, r in draws)


def test_bad_row_warns():
    mdp = coin_mdp()
    mdp.P[("start", "flip")] = {"heads": 0.5, "tails": 0.2}
    with pytest.warns(RuntimeWarning):
        TabularModel(mdp).transitions("start", "flip")


def test_check_distributions():
    assert mdp_check_distributions(coin_mdp())

    mdp = coin_mdp()
    mdp.P[("start", "flip")] = {"heads": 0.9, "tails": 0.9}
    with pytest.raises(ValueError):
        mdp_check_distributions(mdp)

    mdp = coin_mdp()
    del mdp.P[("start", "flip")]
    with pytest.raises(ValueError):
        mdp_check_distributions(mdp)
