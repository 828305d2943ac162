"""Named bundles of actions, templates and a pattern under test."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from callorder.config import HarnessConfig
from callorder.engine.harness import test_correctness
from callorder.engine.permutations import (
    Permutation,
    all_permutations,
    count_permutations,
)
from callorder.model.action import Action
from callorder.model.template import SequenceTemplate, parse_templates
from callorder.results import Result


@dataclass
class Contract:
    """The three inputs of `test_correctness` under one name.

    Contracts are what suite files and the CLI refer to by ``module:attr``.

    Attributes:
        name: Display name.
        actions: Actions in the order the pattern receives them.
        valid_sequences: Authored valid-sequence templates.
        pattern: The pattern under test.
        description: Optional free text shown by ``callorder inspect``.
    """

    name: str
    actions: Sequence[Action]
    valid_sequences: Sequence[Any]
    pattern: Callable[..., Any]
    description: str = ""
    _templates: Optional[Tuple[SequenceTemplate, ...]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def templates(self) -> Tuple[SequenceTemplate, ...]:
        """Return the parsed templates (parsed once, on first use)."""
        if self._templates is None:
            self._templates = parse_templates(self.valid_sequences)
        return self._templates

    def scenario_count(self) -> int:
        return count_permutations(self.actions)

    def scenarios(self) -> List[Permutation]:
        return all_permutations(self.actions)

    async def verify(self, config: Optional[HarnessConfig] = None) -> Result:
        """Await `test_correctness` for this contract."""
        return await test_correctness(
            self.actions, self.valid_sequences, self.pattern, config=config
        )

    def run(self, config: Optional[HarnessConfig] = None) -> Result:
        """Verify this contract in a new event loop."""
        return asyncio.run(self.verify(config))
