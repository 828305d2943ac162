"""Tests for tracked callables and per-scenario call sequences."""

import asyncio

import pytest

from callorder.engine.instrument import CallRecord, CallSequence, instrument
from callorder.engine.permutations import all_permutations
from callorder.model.action import action, rejects


def test_instrument_builds_one_callable_per_action(two_actions) -> None:
    permutation = all_permutations([two_actions.A, two_actions.B])[0]
    callables, sequence = instrument(permutation)
    assert len(callables) == 2
    assert [c.action for c in callables] == [two_actions.A, two_actions.B]
    assert len(sequence) == 0


def test_calls_are_recorded_in_call_order(two_actions) -> None:
    permutation = all_permutations([two_actions.A, two_actions.B])[0]
    (a, b), sequence = instrument(permutation)
    assert b() == "b"
    assert a() == "a"
    assert sequence.names() == ["B", "A"]
    assert sequence[1] == CallRecord(two_actions.A, two_actions.ok)


def test_call_is_recorded_before_outcome_raises(two_actions) -> None:
    permutation = all_permutations([two_actions.A])[1]
    (a,), sequence = instrument(permutation)
    with pytest.raises(RuntimeError, match="boom"):
        a()
    assert [r.outcome_name for r in sequence] == ["fail"]


def test_awaitable_outcome_is_returned_unchanged() -> None:
    down = rejects(OSError("down"), name="down")
    (call,), sequence = instrument(all_permutations([action("net", down)])[0])
    pending = call()
    assert asyncio.iscoroutine(pending)
    assert sequence.names() == ["net"]
    with pytest.raises(OSError):
        asyncio.run(pending)


def test_arguments_from_pattern_are_ignored(two_actions) -> None:
    (a,), sequence = instrument(all_permutations([two_actions.A])[0])
    assert a(1, key="value") == "a"
    assert len(sequence) == 1


def test_repeated_calls_are_all_recorded(two_actions) -> None:
    (a,), sequence = instrument(all_permutations([two_actions.A])[0])
    a()
    a()
    assert sequence.names() == ["A", "A"]


def test_each_scenario_gets_a_fresh_sequence(two_actions) -> None:
    permutation = all_permutations([two_actions.A])[0]
    (first,), seq1 = instrument(permutation)
    (second,), seq2 = instrument(permutation)
    first()
    assert len(seq1) == 1
    assert len(seq2) == 0
    assert seq1 is not seq2


def test_call_sequence_basics() -> None:
    seq = CallSequence()
    assert list(seq) == []
    assert seq.names() == []
