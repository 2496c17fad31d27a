"""
Module: runner.thresholds

Purpose:
    Compare final tallies with the configured minimums. Every (case, mode)
    below its minimum becomes its own violation; counts above the minimum
    produce a non-fatal "too lax" advisory so thresholds can be tightened.

Key Functions:
    - evaluate(): Case reports -> (violations, advisories)
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from blackbox_harness.core.models import CaseReport, DecodeMode, ThresholdViolation
from blackbox_harness.core.models.cases import format_rotation

MODES: Tuple[DecodeMode, ...] = (DecodeMode.NORMAL, DecodeMode.TRY_HARDER)


def lax_advisory(report: CaseReport, mode: DecodeMode) -> str:
    prefix = f"{mode.label}, " if mode.try_harder else ""
    achieved = report.achieved(mode)
    required = report.required(mode)
    return (
        f"{prefix}Rotation {format_rotation(report.rotation)} degrees: "
        f"test too lax by {achieved - required} images ({achieved} passed, {required} required)"
    )


def evaluate(
    reports: Sequence[CaseReport],
) -> Tuple[List[ThresholdViolation], List[str]]:
    """
    Check every case in both modes.

    All violations are collected; evaluation never stops at the first.

    Returns:
        (violations, advisories) in case registration order, normal mode
        before try-harder within a case

    Example:
        >>> violations, advisories = evaluate(case_reports)
        >>> [v.message for v in violations]
        ['Rotation 0 degrees: Too many images failed (2 passed, 3 required)']
    """
    violations: List[ThresholdViolation] = []
    advisories: List[str] = []
    for report in reports:
        for mode in MODES:
            achieved = report.achieved(mode)
            required = report.required(mode)
            if achieved < required:
                violations.append(
                    ThresholdViolation(report.rotation, mode, achieved, required)
                )
            elif achieved > required:
                advisories.append(lax_advisory(report, mode))
    return violations, advisories
