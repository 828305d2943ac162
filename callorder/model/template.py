"""Valid-sequence templates.

A template is a fixed-length, ordered list of constraints. Each constraint
names an action and optionally restricts which of its outcomes are allowed at
that position. Templates are authored as nested lists::

    [[fetch, ok], [store]]          # fetch must succeed, store may do anything
    [[fetch, fail]]                 # or fetch fails and nothing else is called

and normalized into `SequenceTemplate` objects by `parse_templates`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Tuple

from callorder.errors import TemplateError
from callorder.logging import get_logger
from callorder.model.action import Action, OutcomeProducer, outcome_name

if TYPE_CHECKING:
    from callorder.engine.instrument import CallRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActionConstraint:
    """One template position.

    Attributes:
        action: The action expected at this position. Matched by name.
        allowed_outcomes: Outcome producers allowed at this position, compared
            by identity. Empty means any outcome is accepted.
    """

    action: Action
    allowed_outcomes: Tuple[OutcomeProducer, ...] = ()

    @property
    def unconstrained(self) -> bool:
        return not self.allowed_outcomes

    def accepts(self, record: "CallRecord") -> bool:
        """Return True if ``record`` satisfies this constraint."""
        if record.action.name != self.action.name:
            return False
        if self.unconstrained:
            return True
        return any(allowed is record.outcome for allowed in self.allowed_outcomes)

    def describe(self) -> str:
        if self.unconstrained:
            return f"{self.action.name}(*)"
        names = "|".join(outcome_name(p) for p in self.allowed_outcomes)
        return f"{self.action.name}({names})"


@dataclass(frozen=True)
class SequenceTemplate:
    """An ordered list of constraints describing one acceptable call sequence."""

    constraints: Tuple[ActionConstraint, ...] = ()

    def __len__(self) -> int:
        return len(self.constraints)

    def __iter__(self):
        return iter(self.constraints)

    def __getitem__(self, index: int) -> ActionConstraint:
        return self.constraints[index]

    def describe(self) -> str:
        if not self.constraints:
            return "<empty>"
        return ", ".join(c.describe() for c in self.constraints)


def parse_constraint(entry: Any) -> ActionConstraint:
    """Normalize one authored template entry.

    Accepted forms: ``[action]``, ``[action, outcome, ...]`` (list or tuple),
    a bare `Action`, or an existing `ActionConstraint`.

    Raises:
        TemplateError: If the entry does not have one of those shapes.
    """
    if isinstance(entry, ActionConstraint):
        return entry
    if isinstance(entry, Action):
        return ActionConstraint(entry)
    if not isinstance(entry, (list, tuple)):
        raise TemplateError(
            f"Template entry must be a list [action, *outcomes], got {type(entry).__name__}"
        )
    if not entry:
        raise TemplateError("Template entry must not be empty")

    head, *allowed = entry
    if not isinstance(head, Action):
        raise TemplateError(
            f"Template entry must start with an Action, got {type(head).__name__}"
        )
    for producer in allowed:
        if not callable(producer):
            raise TemplateError(
                f"Allowed outcome {producer!r} for action '{head.name}' is not callable"
            )
        if not head.declares(producer):
            logger.warning(
                "Allowed outcome '%s' is not declared by action '%s'; "
                "this template position can never match",
                outcome_name(producer),
                head.name,
            )
    return ActionConstraint(head, tuple(allowed))


def parse_template(entries: Any) -> SequenceTemplate:
    """Normalize one authored template (an ordered list of entries)."""
    if isinstance(entries, SequenceTemplate):
        return entries
    if not isinstance(entries, (list, tuple)):
        raise TemplateError(
            f"Valid sequence must be a list of entries, got {type(entries).__name__}"
        )
    return SequenceTemplate(tuple(parse_constraint(e) for e in entries))


def parse_templates(valid_sequences: Iterable[Any]) -> Tuple[SequenceTemplate, ...]:
    """Normalize every authored template, preserving order."""
    return tuple(parse_template(entries) for entries in valid_sequences)


def template(*entries: Any) -> SequenceTemplate:
    """Build a template from entries given as positional arguments.

    ``template([a, ok], [b])`` is equivalent to ``parse_template([[a, ok], [b]])``.
    """
    return parse_template(list(entries))
