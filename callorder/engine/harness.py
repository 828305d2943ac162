"""Entry point that verifies a pattern against every outcome permutation.

`test_correctness` enumerates all permutations of action outcomes, runs the
pattern under test once per permutation, strictly one scenario after another,
and folds the per-scenario verdicts into a single `Result`.
"""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any, Callable, Iterable, List, Optional, Sequence

from callorder.config import HARNESS_CONFIG, HarnessConfig
from callorder.engine.permutations import count_permutations, iter_permutations
from callorder.engine.runner import ScenarioReport, describe_sequence, run_scenario
from callorder.errors import EngineFault
from callorder.logging import get_logger
from callorder.model.action import Action
from callorder.model.template import parse_templates
from callorder.results import Result, ScenarioFailure

logger = get_logger(__name__)


async def test_correctness(
    actions: Sequence[Action],
    valid_sequences: Iterable[Any],
    pattern_under_test: Callable[..., Any],
    *,
    config: Optional[HarnessConfig] = None,
) -> Result:
    """Verify that ``pattern_under_test`` only ever calls actions in a valid order.

    The pattern is run once for every combination of action outcomes. It
    receives one callable per action, positionally and in the order of
    ``actions``. Each call is recorded before the chosen outcome runs. Once the
    value the pattern returned has settled, successfully or not, the recorded
    sequence must fit one of ``valid_sequences``.

    Args:
        actions: Actions in the order the pattern receives them.
        valid_sequences: Authored templates, each a list of ``[action]`` or
            ``[action, outcome, ...]`` entries.
        pattern_under_test: Callable, sync or async, taking one argument per
            action.
        config: Harness configuration. Defaults to `HARNESS_CONFIG`.

    Returns:
        `Result` with ``passed=True``, or ``passed=False`` and a description
        naming every failing scenario.

    Raises:
        EngineFault: Only when ``config.fault_mode == "raise"`` and an error
            escapes the scenario loop.
    """
    cfg = config or HARNESS_CONFIG
    scenario_level = logging.INFO if cfg.log_scenarios else logging.DEBUG

    failures: List[ScenarioFailure] = []
    completed = 0
    start = perf_counter()

    try:
        templates = parse_templates(valid_sequences)
        actions = list(actions)
        logger.debug(
            "Checking %d scenario(s) over %d action(s) against %d template(s)",
            count_permutations(actions),
            len(actions),
            len(templates),
        )

        for index, permutation in enumerate(iter_permutations(actions)):
            report: ScenarioReport = await run_scenario(
                permutation,
                templates,
                pattern_under_test,
                index=index,
                timeout=cfg.scenario_timeout,
            )
            completed += 1
            logger.log(
                scenario_level,
                "Scenario %d [%s]: sequence [%s] settled %s -> %s",
                index,
                ", ".join(f"{c.name}={c.outcome_name}" for c in permutation),
                describe_sequence(report.sequence),
                report.settled.kind,
                f"valid (templates {list(report.matches)})"
                if report.valid
                else "INVALID",
            )
            if not report.valid:
                failures.append(ScenarioFailure.from_report(report))
    except Exception as exc:
        logger.error(
            "Engine fault after %d scenario(s): %s: %s",
            completed,
            type(exc).__name__,
            exc,
        )
        if cfg.fault_mode == "raise":
            raise EngineFault(f"{type(exc).__name__}: {exc}") from exc
        return Result.from_fault(exc, scenarios=completed)

    result = Result.from_failures(tuple(failures), scenarios=completed)
    logger.info(
        "Checked %d scenario(s) in %.3fs: %s",
        completed,
        perf_counter() - start,
        "passed" if result.passed else f"{len(failures)} failed",
    )
    return result


# Keep pytest from collecting this when imported into a test module.
test_correctness.__test__ = False  # type: ignore[attr-defined]


def check(
    actions: Sequence[Action],
    valid_sequences: Iterable[Any],
    pattern_under_test: Callable[..., Any],
    *,
    config: Optional[HarnessConfig] = None,
) -> Result:
    """Run `test_correctness` to completion in a new event loop.

    Must not be called from inside a running event loop; await
    `test_correctness` there instead.
    """
    return asyncio.run(
        test_correctness(
            actions, valid_sequences, pattern_under_test, config=config
        )
    )
