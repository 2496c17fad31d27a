"""
Module: decoding.comparator

Purpose:
    Decide whether a reader result is correct. Format must be equal and
    text must match character for character; nothing is trimmed or
    normalised.

Key Functions:
    - compare(): Result -> DecodeOutcome
"""

from __future__ import annotations

from typing import Any

from blackbox_harness.core.models import DecodeOutcome, MismatchReason

from .reader import Result


def compare(result: Result, expected_format: Any, expected_text: str) -> DecodeOutcome:
    """
    Check a result against the fixture's expectations.

    The format is checked first, so a result with both the wrong format
    and the wrong text reports FORMAT_MISMATCH.

    Example:
        >>> compare(Result("abc", BarcodeFormat.QR_CODE), BarcodeFormat.QR_CODE, "abc").success
        True
    """
    if result.format != expected_format:
        return DecodeOutcome.failed(
            MismatchReason.FORMAT_MISMATCH,
            f"Format mismatch: expected '{expected_format}' but got '{result.format}'",
            text=result.text,
            fmt=result.format,
        )
    if result.text != expected_text:
        return DecodeOutcome.failed(
            MismatchReason.TEXT_MISMATCH,
            f"Mismatch: expected '{expected_text}' but got '{result.text}'",
            text=result.text,
            fmt=result.format,
        )
    return DecodeOutcome.passed(result.text, result.format)
