"""Scenario enumeration, instrumentation, validation and aggregation."""

from __future__ import annotations

from .harness import check, test_correctness
from .instrument import CallRecord, CallSequence, TrackedCallable, instrument
from .permutations import (
    Permutation,
    all_permutations,
    count_permutations,
    iter_permutations,
)
from .runner import ScenarioReport, describe_permutation, run_scenario
from .settle import Err, Ok, Settled, invoke, settle, settle_call
from .validator import is_valid_sequence, matching_templates, sequence_fits_template

__all__ = [
    "CallRecord",
    "CallSequence",
    "Err",
    "Ok",
    "Permutation",
    "ScenarioReport",
    "Settled",
    "TrackedCallable",
    "all_permutations",
    "check",
    "count_permutations",
    "describe_permutation",
    "instrument",
    "invoke",
    "is_valid_sequence",
    "iter_permutations",
    "matching_templates",
    "run_scenario",
    "sequence_fits_template",
    "settle",
    "settle_call",
    "test_correctness",
]
