"""
Module: decoding.hints

Purpose:
    Decode hint types and construction of per-call hint bundles. A fresh
    read-only mapping is built for every attempt; the suite's baseline
    hints are never mutated.

Key Functions:
    - build_hints(): Baseline hints plus the try-harder flag when requested
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class DecodeHintType(str, Enum):
    """Hints a reader may honour."""
    OTHER = "OTHER"
    PURE_BARCODE = "PURE_BARCODE"
    POSSIBLE_FORMATS = "POSSIBLE_FORMATS"
    TRY_HARDER = "TRY_HARDER"
    CHARACTER_SET = "CHARACTER_SET"
    ALLOWED_LENGTHS = "ALLOWED_LENGTHS"
    ASSUME_CODE_39_CHECK_DIGIT = "ASSUME_CODE_39_CHECK_DIGIT"
    NEED_RESULT_POINT_CALLBACK = "NEED_RESULT_POINT_CALLBACK"

    def __str__(self) -> str:
        return self.value


Hints = Mapping[DecodeHintType, Any]


def build_hints(
    baseline: Optional[Hints],
    try_harder: bool,
) -> Optional[Hints]:
    """
    Build the hint bundle for one decode call.

    Args:
        baseline: Suite hints, or None
        try_harder: Whether to request extra decoding effort

    Returns:
        None when there is no baseline and try-harder is off; otherwise a
        new read-only mapping of the baseline with ``TRY_HARDER: True``
        added when requested

    Example:
        >>> build_hints(None, False) is None
        True
        >>> dict(build_hints(None, True))
        {<DecodeHintType.TRY_HARDER: 'TRY_HARDER'>: True}
    """
    if baseline is None and not try_harder:
        return None
    hints = dict(baseline or {})
    if try_harder:
        hints[DecodeHintType.TRY_HARDER] = True
    return MappingProxyType(hints)
