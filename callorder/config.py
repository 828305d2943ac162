"""Configuration classes for callorder components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

FaultMode = Literal["result", "raise"]

_FAULT_MODES = ("result", "raise")


@dataclass(frozen=True)
class HarnessConfig:
    """Configuration for `test_correctness` runs.

    Attributes:
        fault_mode: How an engine fault surfaces. ``"result"`` returns a failing
            `Result` with `Result.fault` set; ``"raise"`` raises `EngineFault`.
        scenario_timeout: Optional bound in seconds on waiting for the value a
            pattern returns. ``None`` waits indefinitely.
        log_scenarios: Log every scenario at INFO instead of DEBUG.
    """

    fault_mode: FaultMode = "result"
    scenario_timeout: Optional[float] = None
    log_scenarios: bool = False

    def __post_init__(self) -> None:
        if self.fault_mode not in _FAULT_MODES:
            raise ValueError(
                f"fault_mode={self.fault_mode!r} must be one of {list(_FAULT_MODES)}"
            )
        if self.scenario_timeout is not None and self.scenario_timeout <= 0:
            raise ValueError(
                f"scenario_timeout={self.scenario_timeout} must be positive when set"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "HarnessConfig":
        """Build a config from a mapping such as a suite file's ``config`` section."""
        if not data:
            return cls()
        unknown = set(data) - {"fault_mode", "scenario_timeout", "log_scenarios"}
        if unknown:
            raise ValueError(
                f"Unrecognized config key(s): {', '.join(sorted(unknown))}"
            )
        timeout = data.get("scenario_timeout")
        return cls(
            fault_mode=data.get("fault_mode", "result"),
            scenario_timeout=float(timeout) if timeout is not None else None,
            log_scenarios=bool(data.get("log_scenarios", False)),
        )


# Global configuration instance
HARNESS_CONFIG = HarnessConfig()
