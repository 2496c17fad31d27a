"""
Module: runner.report

Purpose:
    Summary of a completed (or cancelled) run: per-rotation pass counts
    against their minimums, totals, threshold violations and "too lax"
    advisories. Rendered as log lines for operators and as JSON for
    tooling.

Key Classes:
    - SuiteReport: Complete result of one suite run

Key Functions:
    - build_report(): Tally table -> SuiteReport
    - log_report(): Emit the summary block

Used By:
    - runner.suite: Built and logged after every run
    - cli: Saved with --json-report
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from blackbox_harness.core.models import (
    CaseReport,
    DecodeMode,
    RotationCase,
    SummaryResult,
    TallyTable,
    ThresholdViolation,
)
from blackbox_harness.core.models.cases import format_rotation

from .thresholds import evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuiteReport:
    """
    Result of one suite run.

    Attributes:
        corpus: Corpus directory that was replayed
        expected_format: Format every fixture had to decode as
        corpus_size: Fixtures found in the corpus
        image_count: Fixtures actually processed (less than corpus_size
            only when the run was cancelled)
        cases: Final counts per rotation case, in registration order
        summary: Totals across all cases and both modes
        violations: Every (case, mode) below its minimum
        advisories: Every (case, mode) above its minimum
        cancelled: True when the run stopped before the last fixture
    """

    corpus: str
    expected_format: str
    corpus_size: int
    image_count: int
    cases: Tuple[CaseReport, ...]
    summary: SummaryResult
    violations: Tuple[ThresholdViolation, ...] = ()
    advisories: Tuple[str, ...] = ()
    cancelled: bool = False
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def passed(self) -> bool:
        return not self.cancelled and not self.violations

    def format_lines(self) -> List[str]:
        """Per-rotation blocks followed by the TOTALS block."""
        lines: List[str] = []
        for case in self.cases:
            lines.append(f"Rotation {format_rotation(case.rotation)} degrees:")
            lines.append(
                f"  {case.passed} of {case.image_count} images passed "
                f"({case.case.must_pass} required)"
            )
            lines.append(
                f"  {case.try_harder_passed} of {case.image_count} images passed with "
                f"try harder ({case.case.try_harder_must_pass} required)"
            )

        summary = self.summary
        lines.append("TOTALS:")
        lines.append(
            f"  Decoded {summary.total_found} images out of {summary.total_tests} "
            f"({summary.percentage}%)"
        )
        if summary.total_found > summary.total_must_pass:
            lines.append(
                f"  *** Test too lax by {summary.total_found - summary.total_must_pass} images"
            )
        if self.cancelled:
            lines.append(
                f"  Run cancelled after {self.image_count} of {self.corpus_size} images; "
                f"thresholds not checked"
            )
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "corpus": self.corpus,
            "expected_format": self.expected_format,
            "corpus_size": self.corpus_size,
            "image_count": self.image_count,
            "cancelled": self.cancelled,
            "passed": self.passed,
            "cases": [case.to_dict() for case in self.cases],
            "summary": self.summary.to_dict(),
            "violations": [v.to_dict() for v in self.violations],
            "advisories": list(self.advisories),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Report saved: {path}")


def build_report(
    corpus: str,
    expected_format: Any,
    corpus_size: int,
    image_count: int,
    cases: Sequence[RotationCase],
    tally: TallyTable,
    *,
    cancelled: bool = False,
) -> SuiteReport:
    """
    Derive the report from a finalized tally.

    Totals: found is the sum of both modes' counts, must-pass the sum of
    both minimums, and tests is images x cases x 2. Thresholds are not
    evaluated for a cancelled run.

    Raises:
        RuntimeError: If the tally is still open
    """
    if not tally.finalized:
        raise RuntimeError("Report requires a finalized tally")

    case_reports = tuple(
        CaseReport(
            case=case,
            image_count=image_count,
            passed=tally.count(i, DecodeMode.NORMAL),
            try_harder_passed=tally.count(i, DecodeMode.TRY_HARDER),
        )
        for i, case in enumerate(cases)
    )
    summary = SummaryResult(
        total_found=sum(r.found for r in case_reports),
        total_must_pass=sum(c.total_required for c in cases),
        total_tests=image_count * len(cases) * 2,
    )

    violations: List[ThresholdViolation] = []
    advisories: List[str] = []
    if not cancelled:
        violations, advisories = evaluate(case_reports)

    return SuiteReport(
        corpus=corpus,
        expected_format=str(expected_format),
        corpus_size=corpus_size,
        image_count=image_count,
        cases=case_reports,
        summary=summary,
        violations=tuple(violations),
        advisories=tuple(advisories),
        cancelled=cancelled,
    )


def log_report(report: SuiteReport) -> None:
    """Log the summary block, then advisories and violations."""
    for line in report.format_lines():
        logger.info(line)
    for advisory in report.advisories:
        logger.warning(f"  *** {advisory}")
    for violation in report.violations:
        logger.warning(violation.message)
