"""
Module: decoding

Purpose:
    Everything between a prepared bitmap and a pass/fail outcome: the
    reader protocol, decode hints, result comparison and the invoker that
    ties them together.
"""

from .reader import (
    BarcodeFormat,
    ChecksumError,
    FormatError,
    NotFoundError,
    Reader,
    ReaderError,
    Result,
    load_reader,
)
from .hints import DecodeHintType, build_hints
from .comparator import compare
from .invoker import DecodeInvoker, attempt_suffix

__all__ = [
    "BarcodeFormat",
    "ChecksumError",
    "FormatError",
    "NotFoundError",
    "Reader",
    "ReaderError",
    "Result",
    "load_reader",
    "DecodeHintType",
    "build_hints",
    "compare",
    "DecodeInvoker",
    "attempt_suffix",
]
