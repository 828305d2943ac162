"""Tests for Result and ScenarioFailure."""

import json

from callorder.results import Result, ScenarioFailure


def _failure(index: int) -> ScenarioFailure:
    return ScenarioFailure(
        index=index,
        scenario=(("A", "fail"),),
        sequence=("A", "B"),
        message=f"failure {index}",
    )


def test_from_failures_empty_passes() -> None:
    result = Result.from_failures((), scenarios=4)
    assert result == Result(passed=True, scenarios=4)
    assert result.description is None


def test_from_failures_joins_messages() -> None:
    result = Result.from_failures((_failure(0), _failure(2)), scenarios=3)
    assert not result.passed
    assert result.description == "failure 0\nfailure 2"


def test_from_fault() -> None:
    err = KeyError("x")
    result = Result.from_fault(err, scenarios=1)
    assert not result.passed
    assert result.fault is err
    assert result.description == "Engine fault: KeyError: 'x'"


def test_to_dict_is_json_serializable() -> None:
    result = Result.from_failures((_failure(1),), scenarios=2)
    data = json.loads(json.dumps(result.to_dict()))
    assert data["passed"] is False
    assert data["scenarios"] == 2
    assert data["failures"][0] == {
        "index": 1,
        "scenario": [{"action": "A", "outcome": "fail"}],
        "sequence": ["A", "B"],
        "message": "failure 1",
    }


def test_to_dict_passed_is_minimal() -> None:
    assert Result(passed=True, scenarios=1).to_dict() == {"passed": True, "scenarios": 1}


def test_fault_excluded_from_equality() -> None:
    assert Result.from_fault(ValueError("a")) == Result.from_fault(ValueError("a"))
