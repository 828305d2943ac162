"""callorder: verification of asynchronous call-ordering contracts.

A pattern under test is a callable that receives one function per declared
action. callorder runs the pattern once for every combination of action
outcomes, records the order in which it called the actions, and checks each
recorded order against a whitelist of valid sequences.

Primary API:
    action() - Declare an action and its possible outcomes
    test_correctness() - Await verification of a pattern
    check() - Synchronous wrapper around test_correctness()
    Contract - Named bundle of actions, templates and pattern
    Result - Aggregated verdict

Example:
    from callorder import action, check, raises, returns

    ok, fail = returns(name="ok"), raises(IOError, name="fail")
    fetch = action("fetch", ok, fail)
    store = action("store", returns(name="ok"))

    def pattern(fetch, store):
        try:
            fetch()
        except IOError:
            pass
        store()

    result = check(
        [fetch, store],
        [[[fetch, ok], [store]], [[fetch, fail]]],
        pattern,
    )
    assert not result.passed  # store is called even when fetch fails
"""

from __future__ import annotations

from callorder import cli, logging
from callorder._version import __version__
from callorder.config import HARNESS_CONFIG, HarnessConfig
from callorder.contract import Contract
from callorder.engine.harness import check, test_correctness
from callorder.errors import CallOrderError, EngineFault, SuiteError, TemplateError
from callorder.model.action import (
    Action,
    action,
    raises,
    rejects,
    resolves,
    returns,
)
from callorder.model.template import ActionConstraint, SequenceTemplate, template
from callorder.results import Result, ScenarioFailure
from callorder.suite import Suite, SuiteResult

__all__ = [
    # Version
    "__version__",
    # Declarations
    "Action",
    "action",
    "returns",
    "raises",
    "resolves",
    "rejects",
    "ActionConstraint",
    "SequenceTemplate",
    "template",
    "Contract",
    # Verification (primary API)
    "test_correctness",
    "check",
    "HarnessConfig",
    "HARNESS_CONFIG",
    # Results
    "Result",
    "ScenarioFailure",
    "Suite",
    "SuiteResult",
    # Errors
    "CallOrderError",
    "EngineFault",
    "SuiteError",
    "TemplateError",
    # Utilities
    "cli",
    "logging",
]
