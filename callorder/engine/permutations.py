"""Exhaustive enumeration of outcome permutations.

A permutation picks one outcome per action. Permutations are yielded in nested
order: the first action's outcome varies slowest and the last action's
outcome varies fastest. With no actions there is exactly one (empty)
permutation; if any action declares no outcomes there are none.
"""

from __future__ import annotations

from math import prod
from typing import Iterator, List, Sequence, Tuple

from callorder.model.action import Action, ActionChoice

Permutation = Tuple[ActionChoice, ...]


def iter_permutations(actions: Sequence[Action]) -> Iterator[Permutation]:
    """Yield every permutation of outcome choices for ``actions``.

    Args:
        actions: Actions in declaration order.

    Yields:
        Tuples of `ActionChoice`, one per action, in declaration order.
    """
    if not actions:
        yield ()
        return

    first, rest = actions[0], actions[1:]
    for choice in first.choices():
        for tail in iter_permutations(rest):
            yield (choice,) + tail


def all_permutations(actions: Sequence[Action]) -> List[Permutation]:
    """Return every permutation as a list."""
    return list(iter_permutations(actions))


def count_permutations(actions: Sequence[Action]) -> int:
    """Return the number of permutations without enumerating them."""
    return prod(len(a.outcomes) for a in actions)
