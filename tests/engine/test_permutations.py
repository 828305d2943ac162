"""Tests for outcome permutation enumeration."""

from math import prod

from hypothesis import given, settings
from hypothesis import strategies as st

from callorder.engine.permutations import (
    all_permutations,
    count_permutations,
    iter_permutations,
)
from callorder.model.action import Action, action, returns


def _actions(counts: list[int]) -> list[Action]:
    return [
        Action(f"a{i}", tuple(returns(j, name=f"o{j}") for j in range(c)))
        for i, c in enumerate(counts)
    ]


def test_no_actions_yield_one_empty_permutation() -> None:
    assert all_permutations([]) == [()]
    assert count_permutations([]) == 1


def test_action_without_outcomes_yields_nothing() -> None:
    actions = [action("A", returns()), Action("B")]
    assert all_permutations(actions) == []
    assert count_permutations(actions) == 0


def test_last_action_varies_fastest(two_actions) -> None:
    x1, x2 = returns(name="x1"), returns(name="x2")
    X = action("X", x1, x2)
    perms = all_permutations([two_actions.A, X])
    assert [[c.outcome for c in p] for p in perms] == [
        [two_actions.ok, x1],
        [two_actions.ok, x2],
        [two_actions.fail, x1],
        [two_actions.fail, x2],
    ]


def test_iter_permutations_is_lazy(two_actions) -> None:
    it = iter_permutations([two_actions.A, two_actions.B])
    first = next(it)
    assert [c.outcome for c in first] == [two_actions.ok, two_actions.b_ok]


def test_duplicate_outcomes_are_not_deduplicated() -> None:
    ok = returns(name="ok")
    A = action("A", ok, ok)
    assert len(all_permutations([A])) == 2


@settings(max_examples=100, deadline=None)
@given(st.lists(st.integers(min_value=0, max_value=3), max_size=5))
def test_permutation_count_is_product_of_outcome_counts(counts: list[int]) -> None:
    actions = _actions(counts)
    perms = all_permutations(actions)
    assert len(perms) == prod(counts) == count_permutations(actions)
    for p in perms:
        assert len(p) == len(actions)
        assert [c.action for c in p] == actions


@settings(max_examples=50, deadline=None)
@given(st.lists(st.integers(min_value=1, max_value=3), min_size=1, max_size=4))
def test_every_combination_appears_once(counts: list[int]) -> None:
    actions = _actions(counts)
    seen = {tuple(id(c.outcome) for c in p) for p in iter_permutations(actions)}
    assert len(seen) == prod(counts)
