"""Top-level package for the reader black-box harness.

Provides subpackages:
- blackbox_harness.corpus – fixture discovery and expected-text pairing
- blackbox_harness.imaging – rotation variants and bitmap preparation
- blackbox_harness.decoding – reader protocol, hints, comparison, invocation
- blackbox_harness.runner – suite execution, thresholds and reporting
"""

from __future__ import annotations


def _get_version() -> str:
    """Get version from installed package metadata."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("blackbox-harness")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .config import HarnessConfig
from .errors import (
    ConfigurationError,
    EmptySuiteError,
    ExpectedTextError,
    HarnessError,
    MissingExpectedTextError,
    MissingFixtureDirectoryError,
    ThresholdViolationError,
)
from .decoding.hints import DecodeHintType
from .decoding.reader import BarcodeFormat, Reader, ReaderError, Result
from .runner.suite import BlackBoxSuite, RunState
from .runner.report import SuiteReport
from .core.models import RotationCase, DecodeMode, SummaryResult

__all__: list[str] = [
    "__version__",
    "HarnessConfig",
    "HarnessError",
    "ConfigurationError",
    "EmptySuiteError",
    "ExpectedTextError",
    "MissingExpectedTextError",
    "MissingFixtureDirectoryError",
    "ThresholdViolationError",
    "DecodeHintType",
    "BarcodeFormat",
    "Reader",
    "ReaderError",
    "Result",
    "BlackBoxSuite",
    "RunState",
    "SuiteReport",
    "RotationCase",
    "DecodeMode",
    "SummaryResult",
]
