"""
Module: outcomes

Purpose:
    Result value of a single decode attempt. A failed decode is normal
    and frequent, so it is an outcome rather than an exception.

Key Classes:
    - MismatchReason: Why an attempt failed
    - DecodeOutcome: Success flag with diagnostic detail
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class MismatchReason(str, Enum):
    """Reason a decode attempt did not count as a pass."""
    DECODE_FAILURE = "decode_failure"    # Reader raised ReaderError
    FORMAT_MISMATCH = "format_mismatch"  # Wrong symbology reported
    TEXT_MISMATCH = "text_mismatch"      # Right symbology, wrong text

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DecodeOutcome:
    """
    Outcome of one (fixture, rotation, mode) attempt.

    Attributes:
        success: True only when format and text both matched
        reason: Failure reason, None on success
        detail: Diagnostic message for failures
        decoded_text: Text the reader returned, if any
        decoded_format: Format the reader returned, if any
    """

    success: bool
    reason: Optional[MismatchReason] = None
    detail: str = ""
    decoded_text: Optional[str] = None
    decoded_format: Any = None

    def __post_init__(self) -> None:
        if self.success and self.reason is not None:
            raise ValueError(f"Successful outcome cannot carry a reason: {self.reason}")
        if not self.success and self.reason is None:
            raise ValueError("Failed outcome requires a reason")

    @classmethod
    def passed(cls, text: str, fmt: Any) -> "DecodeOutcome":
        return cls(True, decoded_text=text, decoded_format=fmt)

    @classmethod
    def failed(
        cls,
        reason: MismatchReason,
        detail: str,
        *,
        text: Optional[str] = None,
        fmt: Any = None,
    ) -> "DecodeOutcome":
        return cls(False, reason, detail, text, fmt)

    def __bool__(self) -> bool:
        return self.success
