"""Action descriptors and outcome producers.

An `Action` is a named extension point the pattern under test may invoke. Each
action declares an ordered set of outcome producers: zero-argument callables
that return a value, return an awaitable, or raise. Producers are compared by
identity when templates restrict outcomes, so two producers that happen to
return equal values are still distinct outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Tuple, Type, Union

OutcomeProducer = Callable[[], Any]


def outcome_name(producer: OutcomeProducer) -> str:
    """Return the diagnostic name of an outcome producer."""
    name = getattr(producer, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return repr(producer)


@dataclass(frozen=True)
class Action:
    """An immutable declaration of one action and its possible outcomes.

    Attributes:
        name: Identity key used when matching recorded calls to templates.
        outcomes: Ordered outcome producers. Use `action()` to construct
            validated instances; direct construction permits an empty tuple,
            which makes the permutation product empty.
    """

    name: str
    outcomes: Tuple[OutcomeProducer, ...] = ()

    def for_each(self, callback: Callable[["ActionChoice"], Any]) -> None:
        """Apply ``callback`` once per declared outcome, in declaration order."""
        for producer in self.outcomes:
            callback(ActionChoice(self, producer))

    def choices(self) -> List["ActionChoice"]:
        """Return the (action, outcome) pairings this action contributes."""
        return [ActionChoice(self, producer) for producer in self.outcomes]

    def declares(self, producer: OutcomeProducer) -> bool:
        """Return True if ``producer`` is one of this action's outcomes (by identity)."""
        return any(candidate is producer for candidate in self.outcomes)

    def __repr__(self) -> str:
        names = ", ".join(outcome_name(p) for p in self.outcomes)
        return f"Action({self.name!r}, [{names}])"


@dataclass(frozen=True)
class ActionChoice:
    """One action paired with one of its outcomes.

    This is the atomic unit combined by the permutation generator.
    """

    action: Action
    outcome: OutcomeProducer

    @property
    def name(self) -> str:
        return self.action.name

    @property
    def outcome_name(self) -> str:
        return outcome_name(self.outcome)


def action(name: str, *outcomes: OutcomeProducer) -> Action:
    """Declare an action with one or more outcome producers.

    Args:
        name: Action name, unique within one `test_correctness` call.
        *outcomes: Zero-argument callables, at least one.

    Returns:
        The immutable `Action`.

    Raises:
        ValueError: If ``name`` is empty or no outcomes are given.
        TypeError: If an outcome is not callable.
    """
    if not isinstance(name, str) or not name:
        raise ValueError("action name must be a non-empty string")
    if not outcomes:
        raise ValueError(f"action '{name}' must declare at least one outcome")
    for producer in outcomes:
        if not callable(producer):
            raise TypeError(
                f"outcome {producer!r} of action '{name}' is not callable"
            )
    return Action(name=name, outcomes=tuple(outcomes))


ErrorSpec = Union[BaseException, Type[BaseException]]


def _named(fn: OutcomeProducer, name: str) -> OutcomeProducer:
    fn.__name__ = name
    fn.__qualname__ = name
    return fn


def returns(value: Any = None, name: str = "ok") -> OutcomeProducer:
    """Create an outcome that returns ``value`` synchronously."""

    def producer() -> Any:
        return value

    return _named(producer, name)


def _fresh(error: ErrorSpec) -> BaseException:
    # A shared instance would otherwise accumulate frames on every raise.
    if isinstance(error, type):
        return error()
    return error.with_traceback(None)


def raises(error: ErrorSpec, name: str = "fail") -> OutcomeProducer:
    """Create an outcome that raises ``error`` synchronously.

    ``error`` may be an exception instance or class. A class is instantiated
    on every call; an instance is re-raised with its traceback cleared.
    """

    def producer() -> Any:
        raise _fresh(error)

    return _named(producer, name)


def resolves(value: Any = None, name: str = "ok") -> OutcomeProducer:
    """Create an outcome that returns a coroutine resolving to ``value``."""

    async def producer() -> Any:
        return value

    return _named(producer, name)


def rejects(error: ErrorSpec, name: str = "fail") -> OutcomeProducer:
    """Create an outcome that returns a coroutine raising ``error``."""

    async def producer() -> Any:
        raise _fresh(error)

    return _named(producer, name)
