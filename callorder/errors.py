"""Exception types raised by callorder.

Failures of the pattern under test are never raised; they are recorded as
data (see `callorder.engine.settle` and `callorder.results`). The exceptions
here cover invalid inputs and faults inside the engine itself.
"""

from __future__ import annotations


class CallOrderError(Exception):
    """Base class for callorder errors."""


class TemplateError(CallOrderError, ValueError):
    """A valid-sequence template entry is malformed."""


class SuiteError(CallOrderError, ValueError):
    """A suite file or contract target cannot be loaded."""


class EngineFault(CallOrderError):
    """An error escaped the scenario loop and is not attributable to the pattern.

    Only raised when the harness runs with ``fault_mode="raise"``; otherwise the
    fault is reported through `Result.fault`.
    """
