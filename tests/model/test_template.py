"""Tests for valid-sequence template parsing and constraints."""

import logging

import pytest

from callorder.engine.instrument import CallRecord
from callorder.errors import TemplateError
from callorder.model.action import action, returns
from callorder.model.template import (
    ActionConstraint,
    SequenceTemplate,
    parse_constraint,
    parse_template,
    parse_templates,
    template,
)


def test_parse_unconstrained_and_constrained_entries(two_actions) -> None:
    t = parse_template([[two_actions.A, two_actions.ok], [two_actions.B]])
    assert len(t) == 2
    assert t[0] == ActionConstraint(two_actions.A, (two_actions.ok,))
    assert t[1].unconstrained
    assert t[1].action is two_actions.B


def test_parse_accepts_tuples_bare_actions_and_constraints(two_actions) -> None:
    c = ActionConstraint(two_actions.B)
    t = parse_template(((two_actions.A, two_actions.fail), two_actions.B, c))
    assert [x.action.name for x in t] == ["A", "B", "B"]
    assert t[2] is c


def test_empty_template_is_valid() -> None:
    assert parse_template([]) == SequenceTemplate(())
    assert len(parse_template([])) == 0


def test_template_helper_matches_parse_template(two_actions) -> None:
    entries = [[two_actions.A, two_actions.ok], [two_actions.B]]
    assert template(*entries) == parse_template(entries)


def test_parse_templates_preserves_order(two_actions) -> None:
    templates = parse_templates([[[two_actions.A]], [[two_actions.B]], []])
    assert [len(t) for t in templates] == [1, 1, 0]
    assert templates[1][0].action is two_actions.B


@pytest.mark.parametrize(
    "entry, message",
    [
        ([], "must not be empty"),
        (["A"], "must start with an Action"),
        ("A", "must be a list"),
    ],
)
def test_parse_constraint_rejects_malformed_entries(entry, message) -> None:
    with pytest.raises(TemplateError, match=message):
        parse_constraint(entry)


def test_parse_constraint_rejects_non_callable_outcome(two_actions) -> None:
    with pytest.raises(TemplateError, match="not callable"):
        parse_constraint([two_actions.A, "ok"])


def test_parse_template_rejects_non_list() -> None:
    with pytest.raises(TemplateError):
        parse_template("AB")


def test_template_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_constraint([])


def test_undeclared_outcome_logs_warning(two_actions, caplog) -> None:
    stranger = returns(name="stranger")
    with caplog.at_level(logging.WARNING, logger="callorder"):
        parse_constraint([two_actions.A, stranger])
    assert any("never match" in r.getMessage() for r in caplog.records)


def test_constraint_accepts_by_name_and_identity(two_actions) -> None:
    c = ActionConstraint(two_actions.A, (two_actions.ok,))
    assert c.accepts(CallRecord(two_actions.A, two_actions.ok))
    assert not c.accepts(CallRecord(two_actions.A, two_actions.fail))
    assert not c.accepts(CallRecord(two_actions.B, two_actions.b_ok))


def test_constraint_matches_action_by_name() -> None:
    ok = returns(name="ok")
    original = action("A", ok)
    same_name = action("A", ok)
    c = ActionConstraint(original, (ok,))
    assert c.accepts(CallRecord(same_name, ok))


def test_constraint_compares_outcomes_by_identity_not_value() -> None:
    ok = returns(1, name="ok")
    twin = returns(1, name="ok")
    a = action("A", ok, twin)
    c = ActionConstraint(a, (ok,))
    assert not c.accepts(CallRecord(a, twin))


def test_unconstrained_accepts_any_outcome(two_actions) -> None:
    c = ActionConstraint(two_actions.A)
    for producer in two_actions.A.outcomes:
        assert c.accepts(CallRecord(two_actions.A, producer))


def test_describe(two_actions) -> None:
    t = parse_template([[two_actions.A, two_actions.ok, two_actions.fail], [two_actions.B]])
    assert t.describe() == "A(ok|fail), B(*)"
    assert parse_template([]).describe() == "<empty>"
