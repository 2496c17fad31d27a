"""Core data models shared across the harness."""

from .models import (
    CaseReport,
    DecodeMode,
    DecodeOutcome,
    FixtureImage,
    MismatchReason,
    RotationCase,
    SummaryResult,
    TallyTable,
    ThresholdViolation,
)

__all__ = [
    "CaseReport",
    "DecodeMode",
    "DecodeOutcome",
    "FixtureImage",
    "MismatchReason",
    "RotationCase",
    "SummaryResult",
    "TallyTable",
    "ThresholdViolation",
]
