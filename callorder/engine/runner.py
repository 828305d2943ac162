"""Execution of a single scenario.

A scenario is one permutation of outcomes. The runner hands the pattern one
tracked callable per action, waits for whatever it returns to settle, and
validates the calls it recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from callorder.engine.instrument import CallSequence, instrument
from callorder.engine.permutations import Permutation
from callorder.engine.settle import Err, Settled, settle_call
from callorder.engine.validator import matching_templates
from callorder.logging import get_logger
from callorder.model.template import SequenceTemplate

logger = get_logger(__name__)

# Continuation lines of a scenario description align under the first entry.
_SCENARIO_INDENT = " " * len("  Scenario: ")


def describe_permutation(permutation: Permutation) -> str:
    """Describe a permutation as ``name -> outcome`` lines."""
    return ("\n" + _SCENARIO_INDENT).join(
        f"{choice.name} -> {choice.outcome_name}" for choice in permutation
    )


def describe_sequence(sequence: CallSequence) -> str:
    """Describe a recorded sequence as comma-separated action names."""
    return ", ".join(sequence.names())


@dataclass
class ScenarioReport:
    """Outcome of running the pattern under one permutation.

    Attributes:
        index: Position of the scenario in enumeration order (0-based).
        permutation: The outcome chosen for every action.
        sequence: Calls the pattern made, in order.
        settled: How the pattern's invocation settled. Informational only.
        matches: Indices of the templates ``sequence`` fits, in template
            order. Empty means the scenario failed validation.
    """

    index: int
    permutation: Permutation
    sequence: CallSequence
    settled: Settled
    matches: Tuple[int, ...] = ()

    @property
    def valid(self) -> bool:
        return bool(self.matches)

    def describe(self) -> str:
        """Return the human-readable failure block for this scenario."""
        return (
            "Pattern failed validation\n"
            f"  Scenario: {describe_permutation(self.permutation)}\n"
            f"  Sequence: {describe_sequence(self.sequence)}"
        )


async def run_scenario(
    permutation: Permutation,
    templates: Sequence[SequenceTemplate],
    pattern: Callable[..., Any],
    *,
    index: int = 0,
    timeout: Optional[float] = None,
) -> ScenarioReport:
    """Run ``pattern`` once under ``permutation`` and validate its calls.

    Args:
        permutation: One outcome choice per action, in declaration order.
        templates: Parsed valid-sequence templates.
        pattern: The pattern under test; receives the tracked callables as
            positional arguments.
        index: Scenario index, used for reporting.
        timeout: Optional bound in seconds on waiting for the returned value.

    Returns:
        The `ScenarioReport`.
    """
    callables, sequence = instrument(permutation)

    settled = await settle_call(pattern, *callables, timeout=timeout)
    if isinstance(settled, Err):
        if settled.timed_out:
            logger.warning(
                "Scenario %d did not settle within %ss; validating %d recorded call(s)",
                index,
                timeout,
                len(sequence),
            )
        else:
            logger.debug(
                "Scenario %d settled with %s: %s",
                index,
                type(settled.error).__name__,
                settled.error,
            )

    matches = tuple(matching_templates(sequence.records, templates))
    return ScenarioReport(
        index=index,
        permutation=permutation,
        sequence=sequence,
        settled=settled,
        matches=matches,
    )
