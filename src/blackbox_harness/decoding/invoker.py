"""
Module: decoding.invoker

Purpose:
    Make exactly one reader call per attempt and fold every way it can go
    wrong into a DecodeOutcome. ReaderError never escapes, so the runner's
    loop treats all outcomes alike.

Key Classes:
    - DecodeInvoker: Reader, expected format and baseline hints of a suite

Dependencies:
    - decoding.hints: Fresh hint bundle per call
    - decoding.comparator: Format and text checks

Used By:
    - runner.suite: Normal and try-harder attempt per rotated bitmap
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from blackbox_harness.core.models import DecodeMode, DecodeOutcome, MismatchReason
from blackbox_harness.core.models.cases import format_rotation

from .comparator import compare
from .hints import Hints, build_hints
from .reader import Reader, ReaderError

logger = logging.getLogger(__name__)


def attempt_suffix(mode: DecodeMode, rotation: float) -> str:
    """Diagnostic suffix such as ``(try harder, rotation: 90)``."""
    prefix = "try harder, " if mode.try_harder else ""
    return f"({prefix}rotation: {format_rotation(rotation)})"


class DecodeInvoker:
    """
    Runs decode attempts for one suite.

    Args:
        reader: Decoder under test
        expected_format: Format every fixture of the suite must decode as
        baseline_hints: Suite hints sent with every call (may be None)

    Example:
        >>> invoker = DecodeInvoker(reader, BarcodeFormat.QR_CODE)
        >>> outcome = invoker.attempt(bitmap, "Hello", DecodeMode.TRY_HARDER, rotation=90)
        >>> outcome.success
        True
    """

    def __init__(
        self,
        reader: Reader,
        expected_format: Any,
        baseline_hints: Optional[Hints] = None,
    ):
        self.reader = reader
        self.expected_format = expected_format
        self.baseline_hints = baseline_hints

    def hints_for(self, mode: DecodeMode) -> Optional[Hints]:
        return build_hints(self.baseline_hints, mode.try_harder)

    def attempt(
        self,
        bitmap: Any,
        expected_text: str,
        mode: DecodeMode,
        *,
        rotation: float = 0.0,
        label: str = "",
    ) -> DecodeOutcome:
        """
        Decode ``bitmap`` once and compare against the expectations.

        Args:
            bitmap: Prepared bitmap for the rotated fixture
            expected_text: Exact text the fixture must decode to
            mode: NORMAL or TRY_HARDER
            rotation: Clockwise angle, for diagnostics
            label: Fixture name, for diagnostics

        Returns:
            Outcome of the attempt; failures are logged
        """
        suffix = attempt_suffix(mode, rotation)
        where = f"{label} " if label else ""

        try:
            result = self.reader.decode(bitmap, self.hints_for(mode))
        except ReaderError as e:
            detail = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            logger.info(f"{where}{detail} {suffix}")
            return DecodeOutcome.failed(MismatchReason.DECODE_FAILURE, detail)

        outcome = compare(result, self.expected_format, expected_text)
        if outcome.success:
            logger.debug(f"{where}decoded {suffix}")
        else:
            logger.info(f"{where}{outcome.detail} {suffix}")
        return outcome
