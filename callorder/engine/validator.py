"""Sequence validation against valid-sequence templates.

Matching is strictly positional: a recorded sequence fits a template only if
both have the same length and every recorded call satisfies the constraint at
the same index. A sequence is valid if it fits at least one template.
"""

from __future__ import annotations

from typing import List, Sequence

from callorder.engine.instrument import CallRecord
from callorder.model.template import ActionConstraint, SequenceTemplate


def action_fits_constraint(record: CallRecord, constraint: ActionConstraint) -> bool:
    """Return True if ``record`` matches ``constraint`` by name and outcome identity."""
    return constraint.accepts(record)


def sequence_fits_template(
    sequence: Sequence[CallRecord], template: SequenceTemplate
) -> bool:
    """Return True if ``sequence`` matches ``template`` position by position."""
    if len(sequence) != len(template):
        return False
    return all(
        action_fits_constraint(record, constraint)
        for record, constraint in zip(sequence, template)
    )


def matching_templates(
    sequence: Sequence[CallRecord], templates: Sequence[SequenceTemplate]
) -> List[int]:
    """Return the indices of every template ``sequence`` fits."""
    return [i for i, t in enumerate(templates) if sequence_fits_template(sequence, t)]


def is_valid_sequence(
    sequence: Sequence[CallRecord], templates: Sequence[SequenceTemplate]
) -> bool:
    """Return True if ``sequence`` fits any of ``templates``."""
    return any(sequence_fits_template(sequence, t) for t in templates)
