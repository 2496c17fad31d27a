"""
Module: errors

Purpose:
    Exception taxonomy for the harness. Configuration problems abort a run
    before any decode attempt; threshold violations are raised once, after
    the full run, and fail the surrounding test.

Key Classes:
    - ConfigurationError: Base for fatal setup problems
    - ThresholdViolationError: Pass counts below configured minimums

Used By:
    - corpus.loader, runner.suite, decoding.reader, cli
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from blackbox_harness.core.models import ThresholdViolation
    from blackbox_harness.runner.report import SuiteReport


class HarnessError(Exception):
    """Base class for harness errors."""
    pass


class ConfigurationError(HarnessError):
    """Fatal setup problem detected before decoding starts."""
    pass


class MissingFixtureDirectoryError(ConfigurationError):
    """Corpus directory does not exist under any known root."""
    pass


class MissingExpectedTextError(ConfigurationError):
    """Fixture image has no paired expected-text file."""
    pass


class ExpectedTextError(ConfigurationError):
    """Expected-text file cannot be decoded with the configured encoding."""
    pass


class FixtureImageError(ConfigurationError):
    """Fixture image cannot be read."""
    pass


class EmptySuiteError(ConfigurationError):
    """Run started with no rotation cases registered."""
    pass


class ReaderLoadError(ConfigurationError):
    """Reader import path cannot be resolved."""
    pass


class ThresholdViolationError(AssertionError):
    """
    One or more rotation cases decoded fewer images than required.

    Subclasses AssertionError so test runners report a failure rather
    than an error. Every violation of the run is carried, not only the
    first one.

    Attributes:
        violations: All (rotation, mode) combinations below their minimum
        report: Complete report of the run that failed
    """

    def __init__(
        self,
        violations: Sequence["ThresholdViolation"],
        report: "SuiteReport",
    ) -> None:
        self.violations = tuple(violations)
        self.report = report
        lines = [f"{len(self.violations)} threshold violation(s):"]
        lines.extend(f"  {v.message}" for v in self.violations)
        super().__init__("\n".join(lines))
