"""
Core Models Package

Small, validated data models passed between the harness stages.

Fixtures, rotation cases, outcomes and summaries are frozen dataclasses so
they can be shared between worker threads. The only mutable model is
TallyTable, which guards its counters with a lock.
"""

from .fixtures import FixtureImage
from .cases import DecodeMode, RotationCase
from .outcomes import DecodeOutcome, MismatchReason
from .results import CaseReport, SummaryResult, TallyTable, ThresholdViolation

__all__ = [
    "FixtureImage",
    "DecodeMode",
    "RotationCase",
    "DecodeOutcome",
    "MismatchReason",
    "CaseReport",
    "SummaryResult",
    "TallyTable",
    "ThresholdViolation",
]
