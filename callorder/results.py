"""Verdicts produced by the harness.

`Result` is the single aggregated report of one `test_correctness` call.
Failing scenarios are kept as `ScenarioFailure` entries in enumeration order;
`Result.description` joins their messages for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

if TYPE_CHECKING:
    from callorder.engine.runner import ScenarioReport


@dataclass(frozen=True)
class ScenarioFailure:
    """A scenario whose recorded sequence matched no template.

    Attributes:
        index: Scenario position in enumeration order (0-based).
        scenario: ``(action name, outcome name)`` pairs in declaration order.
        sequence: Names of the actions called, in call order.
        message: Human-readable failure block.
    """

    index: int
    scenario: Tuple[Tuple[str, str], ...]
    sequence: Tuple[str, ...]
    message: str

    @classmethod
    def from_report(cls, report: "ScenarioReport") -> "ScenarioFailure":
        return cls(
            index=report.index,
            scenario=tuple((c.name, c.outcome_name) for c in report.permutation),
            sequence=tuple(report.sequence.names()),
            message=report.describe(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "scenario": [{"action": a, "outcome": o} for a, o in self.scenario],
            "sequence": list(self.sequence),
            "message": self.message,
        }


@dataclass(frozen=True)
class Result:
    """Aggregated verdict of one harness run.

    Attributes:
        passed: True when every scenario produced a valid sequence.
        description: Newline-joined failure messages; None when passed.
        failures: Failing scenarios in enumeration order.
        scenarios: Number of scenarios that ran to completion.
        fault: Engine fault that aborted the run, if any. Never set for
            ordinary scenario failures.
    """

    passed: bool
    description: Optional[str] = None
    failures: Tuple[ScenarioFailure, ...] = ()
    scenarios: int = 0
    fault: Optional[BaseException] = field(default=None, compare=False)

    @classmethod
    def from_failures(
        cls, failures: Tuple[ScenarioFailure, ...], scenarios: int
    ) -> "Result":
        if not failures:
            return cls(passed=True, scenarios=scenarios)
        return cls(
            passed=False,
            description="\n".join(f.message for f in failures),
            failures=failures,
            scenarios=scenarios,
        )

    @classmethod
    def from_fault(cls, fault: BaseException, scenarios: int = 0) -> "Result":
        return cls(
            passed=False,
            description=f"Engine fault: {type(fault).__name__}: {fault}",
            scenarios=scenarios,
            fault=fault,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        out: Dict[str, Any] = {"passed": self.passed, "scenarios": self.scenarios}
        if self.description is not None:
            out["description"] = self.description
        if self.failures:
            out["failures"] = [f.to_dict() for f in self.failures]
        if self.fault is not None:
            out["fault"] = f"{type(self.fault).__name__}: {self.fault}"
        return out
