"""Tracked callables handed to the pattern under test.

Each scenario gets one fresh `CallSequence` and one `TrackedCallable` per
action. Calling a tracked callable records the call before the outcome runs,
so attempted calls are captured even when the outcome raises or rejects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple

from callorder.engine.permutations import Permutation
from callorder.model.action import Action, ActionChoice, OutcomeProducer, outcome_name


@dataclass(frozen=True)
class CallRecord:
    """Which action was invoked and which outcome it took."""

    action: Action
    outcome: OutcomeProducer

    @property
    def name(self) -> str:
        return self.action.name

    @property
    def outcome_name(self) -> str:
        return outcome_name(self.outcome)


@dataclass
class CallSequence:
    """Ordered record of calls made during one scenario."""

    records: List[CallRecord] = field(default_factory=list)

    def append(self, record: CallRecord) -> None:
        self.records.append(record)

    def names(self) -> List[str]:
        return [r.name for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CallRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> CallRecord:
        return self.records[index]


class TrackedCallable:
    """Callable standing in for one action during one scenario.

    Arguments passed by the pattern are accepted and ignored; outcome
    producers take no arguments.
    """

    __slots__ = ("_choice", "_sequence")

    def __init__(self, choice: ActionChoice, sequence: CallSequence) -> None:
        self._choice = choice
        self._sequence = sequence

    @property
    def action(self) -> Action:
        return self._choice.action

    @property
    def outcome(self) -> OutcomeProducer:
        return self._choice.outcome

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        # Record first: the producer may raise.
        self._sequence.append(CallRecord(self._choice.action, self._choice.outcome))
        return self._choice.outcome()

    def __repr__(self) -> str:
        return f"<tracked {self._choice.name} -> {self._choice.outcome_name}>"


def instrument(
    permutation: Permutation,
) -> Tuple[List[TrackedCallable], CallSequence]:
    """Build tracked callables for ``permutation`` over one fresh sequence.

    Returns:
        The tracked callables, in permutation order, and the shared sequence
        they append to.
    """
    sequence = CallSequence()
    callables = [TrackedCallable(choice, sequence) for choice in permutation]
    return callables, sequence
