"""
Module: decoding.reader

Purpose:
    The narrow interface between the harness and the decoder under test.
    A reader takes a bitmap and an optional hint mapping and returns a
    Result, or raises ReaderError when nothing could be decoded.

Key Classes:
    - BarcodeFormat: Symbologies a reader may report
    - Result: Decoded text and format
    - Reader: Protocol every reader satisfies
    - ReaderError: Base of expected decode failures

Key Functions:
    - load_reader(): Resolve "package.module:attribute" to a reader

Dependencies:
    - importlib (std): Reader lookup for the command line

Used By:
    - decoding.invoker: Calls Reader.decode()
    - cli: Loads the reader named on the command line
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, runtime_checkable

from blackbox_harness.errors import ReaderLoadError

if TYPE_CHECKING:
    from blackbox_harness.decoding.hints import DecodeHintType

logger = logging.getLogger(__name__)


class BarcodeFormat(str, Enum):
    """Symbology reported alongside decoded text."""
    AZTEC = "AZTEC"
    CODABAR = "CODABAR"
    CODE_39 = "CODE_39"
    CODE_93 = "CODE_93"
    CODE_128 = "CODE_128"
    DATA_MATRIX = "DATA_MATRIX"
    EAN_8 = "EAN_8"
    EAN_13 = "EAN_13"
    ITF = "ITF"
    MAXICODE = "MAXICODE"
    PDF_417 = "PDF_417"
    QR_CODE = "QR_CODE"
    RSS_14 = "RSS_14"
    RSS_EXPANDED = "RSS_EXPANDED"
    UPC_A = "UPC_A"
    UPC_E = "UPC_E"
    UPC_EAN_EXTENSION = "UPC_EAN_EXTENSION"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Result:
    """
    A successful decode.

    Attributes:
        text: Decoded payload
        format: Symbology the reader detected
    """
    text: str
    format: BarcodeFormat


class ReaderError(Exception):
    """Reader could not produce a result for the bitmap."""
    pass


class NotFoundError(ReaderError):
    """No symbol located in the bitmap."""
    pass


class ChecksumError(ReaderError):
    """Symbol located but its checksum failed."""
    pass


class FormatError(ReaderError):
    """Symbol located but its contents violate the format rules."""
    pass


@runtime_checkable
class Reader(Protocol):
    """Decoder under test."""

    def decode(
        self,
        bitmap: Any,
        hints: Optional[Mapping["DecodeHintType", Any]] = None,
    ) -> Result:
        """
        Decode one bitmap.

        Args:
            bitmap: Prepared bitmap (a BinaryBitmap with the default factory)
            hints: Read-only hint mapping, or None for defaults

        Returns:
            Decoded text and format

        Raises:
            ReaderError: If nothing could be decoded
        """
        ...


def load_reader(target: str) -> Reader:
    """
    Resolve a reader from an import path.

    ``target`` is ``package.module:attribute`` where the attribute is a
    reader instance, a reader class, or a zero-argument factory.

    Raises:
        ReaderLoadError: If the path is malformed, the import fails or the
            object has no ``decode`` method

    Example:
        >>> reader = load_reader("my_project.readers:QRCodeReader")
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ReaderLoadError(f"Reader must be given as 'module:attribute': {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ReaderLoadError(f"Cannot import reader module {module_name!r}: {e}") from e

    for name in attr_path.split("."):
        try:
            obj = getattr(obj, name)
        except AttributeError as e:
            raise ReaderLoadError(f"{module_name!r} has no attribute {attr_path!r}") from e

    if isinstance(obj, type) or (callable(obj) and not hasattr(obj, "decode")):
        obj = obj()

    if not isinstance(obj, Reader):
        raise ReaderLoadError(f"{target!r} does not provide a decode() method")

    logger.debug(f"Loaded reader {type(obj).__name__} from {target}")
    return obj
