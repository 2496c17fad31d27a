"""
Module: results

Purpose:
    Counters filled during a run and the aggregate values derived from
    them once the run is complete.

Key Classes:
    - TallyTable: Per-case pass counters for both modes (lock guarded)
    - CaseReport: Achieved vs required counts for one rotation case
    - ThresholdViolation: One (case, mode) below its minimum
    - SummaryResult: Totals that can be merged across suites

Dependencies:
    - threading (std): Counter lock for parallel runs
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable, List

from .cases import DecodeMode, RotationCase, format_rotation


class TallyTable:
    """
    Pass counters indexed by rotation case position.

    Counters only grow: the sole mutators are increment() and merge().
    Once finalize() is called the table is read-only.

    Example:
        >>> tally = TallyTable(2)
        >>> tally.increment(1, DecodeMode.TRY_HARDER)
        >>> tally.count(1, DecodeMode.TRY_HARDER)
        1
    """

    def __init__(self, case_count: int):
        if case_count < 0:
            raise ValueError(f"case_count cannot be negative: {case_count}")
        self._normal: List[int] = [0] * case_count
        self._try_harder: List[int] = [0] * case_count
        self._lock = threading.Lock()
        self._finalized = False

    def __len__(self) -> int:
        return len(self._normal)

    def _counters(self, mode: DecodeMode) -> List[int]:
        return self._try_harder if mode is DecodeMode.TRY_HARDER else self._normal

    def increment(self, index: int, mode: DecodeMode) -> None:
        """Record one successful decode for case ``index`` in ``mode``."""
        with self._lock:
            if self._finalized:
                raise RuntimeError("Tally table is finalized")
            self._counters(mode)[index] += 1

    def merge(self, other: "TallyTable") -> None:
        """Add another table's counts (a worker's partial tally) into this one."""
        if len(other) != len(self):
            raise ValueError(f"Cannot merge tally of {len(other)} cases into {len(self)}")
        with self._lock:
            if self._finalized:
                raise RuntimeError("Tally table is finalized")
            for i in range(len(self)):
                self._normal[i] += other._normal[i]
                self._try_harder[i] += other._try_harder[i]

    def finalize(self) -> None:
        with self._lock:
            self._finalized = True

    @property
    def finalized(self) -> bool:
        return self._finalized

    def count(self, index: int, mode: DecodeMode) -> int:
        with self._lock:
            return self._counters(mode)[index]

    def total(self) -> int:
        with self._lock:
            return sum(self._normal) + sum(self._try_harder)


@dataclass(frozen=True)
class CaseReport:
    """
    Final counts of one rotation case.

    Attributes:
        case: The registered rotation case
        image_count: Fixtures attempted for this case
        passed: Normal-mode successes
        try_harder_passed: Try-harder-mode successes
    """

    case: RotationCase
    image_count: int
    passed: int
    try_harder_passed: int

    @property
    def rotation(self) -> float:
        return self.case.rotation

    def achieved(self, mode: DecodeMode) -> int:
        if mode is DecodeMode.TRY_HARDER:
            return self.try_harder_passed
        return self.passed

    def required(self, mode: DecodeMode) -> int:
        return self.case.required(mode)

    @property
    def found(self) -> int:
        return self.passed + self.try_harder_passed

    def to_dict(self) -> dict:
        return {
            "rotation": self.case.rotation,
            "image_count": self.image_count,
            "passed": self.passed,
            "must_pass": self.case.must_pass,
            "try_harder_passed": self.try_harder_passed,
            "try_harder_must_pass": self.case.try_harder_must_pass,
        }


@dataclass(frozen=True)
class ThresholdViolation:
    """A rotation case that decoded fewer images than required in one mode."""

    rotation: float
    mode: DecodeMode
    achieved: int
    required: int

    @property
    def message(self) -> str:
        prefix = f"{self.mode.label}, " if self.mode.try_harder else ""
        return (
            f"{prefix}Rotation {format_rotation(self.rotation)} degrees: "
            f"Too many images failed ({self.achieved} passed, {self.required} required)"
        )

    def to_dict(self) -> dict:
        return {
            "rotation": self.rotation,
            "mode": str(self.mode),
            "achieved": self.achieved,
            "required": self.required,
        }


@dataclass(frozen=True)
class SummaryResult:
    """
    Totals of one or more runs.

    Attributes:
        total_found: Successful decodes over all cases and both modes
        total_must_pass: Sum of all configured minimums
        total_tests: Attempts made (images x cases x 2)

    Example:
        >>> a = SummaryResult(6, 6, 6)
        >>> b = SummaryResult(3, 4, 8)
        >>> (a + b).total_tests
        14
    """

    total_found: int = 0
    total_must_pass: int = 0
    total_tests: int = 0

    def __add__(self, other: "SummaryResult") -> "SummaryResult":
        if not isinstance(other, SummaryResult):
            return NotImplemented
        return SummaryResult(
            self.total_found + other.total_found,
            self.total_must_pass + other.total_must_pass,
            self.total_tests + other.total_tests,
        )

    @classmethod
    def combine(cls, results: Iterable["SummaryResult"]) -> "SummaryResult":
        """Merge results from several suites into one."""
        total = cls()
        for result in results:
            total = total + result
        return total

    @property
    def percentage(self) -> int:
        """Whole-number percentage decoded; 0 when nothing was attempted."""
        if self.total_tests == 0:
            return 0
        return self.total_found * 100 // self.total_tests

    def to_dict(self) -> dict:
        return {
            "total_found": self.total_found,
            "total_must_pass": self.total_must_pass,
            "total_tests": self.total_tests,
            "percentage": self.percentage,
        }

    def __str__(self) -> str:
        return (
            f"\nSUMMARY RESULTS:\n  Decoded {self.total_found} images out of "
            f"{self.total_tests} ({self.percentage}%, {self.total_must_pass} required)"
        )
