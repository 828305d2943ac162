"""Declarative inputs: actions, outcome producers, and valid-sequence templates."""

from __future__ import annotations

from .action import (
    Action,
    ActionChoice,
    OutcomeProducer,
    action,
    outcome_name,
    raises,
    rejects,
    resolves,
    returns,
)
from .template import (
    ActionConstraint,
    SequenceTemplate,
    parse_template,
    parse_templates,
    template,
)

__all__ = [
    "Action",
    "ActionChoice",
    "ActionConstraint",
    "OutcomeProducer",
    "SequenceTemplate",
    "action",
    "outcome_name",
    "parse_template",
    "parse_templates",
    "raises",
    "rejects",
    "resolves",
    "returns",
    "template",
]
