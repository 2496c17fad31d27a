"""
Module: cases

Purpose:
    Rotation cases registered on a suite and the two decoding-effort modes
    every case is attempted in.

Key Classes:
    - DecodeMode: NORMAL or TRY_HARDER
    - RotationCase: Rotation angle plus minimum pass counts per mode
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DecodeMode(str, Enum):
    """Decoding effort used for an attempt."""
    NORMAL = "normal"
    TRY_HARDER = "try_harder"

    def __str__(self) -> str:
        return self.value

    @property
    def try_harder(self) -> bool:
        return self is DecodeMode.TRY_HARDER

    @property
    def label(self) -> str:
        """Human-readable prefix used in diagnostics ("" for normal)."""
        return "Try harder" if self.try_harder else ""


@dataclass(frozen=True)
class RotationCase:
    """
    A clockwise rotation and the pass counts it must reach.

    Attributes:
        rotation: Degrees clockwise applied to every fixture
        must_pass: Minimum images decoded in normal mode
        try_harder_must_pass: Minimum images decoded in try-harder mode

    Example:
        >>> case = RotationCase(rotation=90.0, must_pass=2, try_harder_must_pass=3)
        >>> case.required(DecodeMode.TRY_HARDER)
        3
    """

    rotation: float
    must_pass: int
    try_harder_must_pass: int

    def __post_init__(self) -> None:
        """Validate minimum counts on construction."""
        if self.must_pass < 0:
            raise ValueError(f"must_pass cannot be negative: {self.must_pass}")
        if self.try_harder_must_pass < 0:
            raise ValueError(
                f"try_harder_must_pass cannot be negative: {self.try_harder_must_pass}"
            )

    def required(self, mode: DecodeMode) -> int:
        """Minimum pass count for the given mode."""
        if mode is DecodeMode.TRY_HARDER:
            return self.try_harder_must_pass
        return self.must_pass

    @property
    def total_required(self) -> int:
        return self.must_pass + self.try_harder_must_pass


def format_rotation(rotation: float) -> str:
    """Render an angle without a trailing ``.0`` (90.0 -> "90", 22.5 -> "22.5")."""
    return f"{rotation:g}"
