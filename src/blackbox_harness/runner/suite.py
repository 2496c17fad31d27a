"""
Module: runner.suite

Purpose:
    Replay a fixture corpus through a reader under every registered
    rotation case, in normal and try-harder mode, and hold the result to
    the configured minimum pass counts.

Key Classes:
    - BlackBoxSuite: Corpus, reader, expected format and rotation cases
    - RunState: Lifecycle of a run

Process:
    1. Reject an empty case list
    2. Pair every image with its expected text and verify it opens
       (fatal if any text is missing or any image is unreadable)
    3. For each fixture, for each case: rotate once, build one bitmap,
       attempt normal then try-harder, count successes
    4. After the last fixture (the barrier), log the summary and raise
       ThresholdViolationError listing every case/mode below its minimum

Dependencies:
    - concurrent.futures: Optional per-fixture parallelism
    - corpus.loader, imaging, decoding, runner.report

Used By:
    - Test modules defining reader suites
    - cli: run / run-all commands
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from PIL import Image

from blackbox_harness.config import HarnessConfig
from blackbox_harness.core.models import (
    FixtureImage,
    RotationCase,
    SummaryResult,
    TallyTable,
)
from blackbox_harness.corpus import (
    fixtures_from_manifest,
    load_fixtures,
    resolve_corpus_dir,
    verify_fixture_images,
)
from blackbox_harness.decoding import DecodeInvoker, Reader, ReaderError, attempt_suffix
from blackbox_harness.decoding.hints import Hints
from blackbox_harness.errors import EmptySuiteError, ThresholdViolationError
from blackbox_harness.imaging import build_bitmap, rotate_image

from .report import SuiteReport, build_report, log_report
from .thresholds import MODES

logger = logging.getLogger(__name__)

BitmapFactory = Callable[[Image.Image], Any]
Rotator = Callable[[Image.Image, float], Image.Image]


class RunState(str, Enum):
    """Lifecycle of a suite run."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ABORTED = "aborted"  # Configuration error or unexpected reader exception

    def __str__(self) -> str:
        return self.value


class BlackBoxSuite:
    """
    Black-box conformance suite for one reader and one corpus.

    Rotation cases are registered with add_test() before run(). Baseline
    hints can be passed to the constructor or supplied by overriding
    baseline_hints() in a subclass.

    Args:
        corpus_dir: Directory of fixture images and expected-text files
        reader: Decoder under test
        expected_format: Format every fixture must decode as
        hints: Baseline decode hints (read, never mutated)
        manifest: Explicit image -> expected text pairing used instead of
            the file-name convention; relative image paths are taken
            from the corpus directory
        config: Harness configuration
        bitmap_factory: Image -> bitmap handed to the reader
        rotate: Image, clockwise degrees -> rotated image

    Example:
        >>> suite = BlackBoxSuite("test/data/blackbox/qrcode-1", QRCodeReader(),
        ...                       BarcodeFormat.QR_CODE)
        >>> suite.add_test(20, 20, 0.0)
        >>> suite.add_test(20, 20, 90.0)
        >>> report = suite.run()  # raises ThresholdViolationError on failure
    """

    def __init__(
        self,
        corpus_dir: Union[str, Path],
        reader: Reader,
        expected_format: Any,
        *,
        hints: Optional[Hints] = None,
        manifest: Optional[Mapping[Union[str, Path], str]] = None,
        config: Optional[HarnessConfig] = None,
        bitmap_factory: BitmapFactory = build_bitmap,
        rotate: Rotator = rotate_image,
    ):
        self.corpus_dir = Path(corpus_dir)
        self.reader = reader
        self.expected_format = expected_format
        self.config = config or HarnessConfig()
        self.bitmap_factory = bitmap_factory
        self.rotate = rotate
        self._hints = hints
        self.manifest = dict(manifest) if manifest is not None else None
        self._cases: List[RotationCase] = []
        self._state = RunState.NOT_STARTED
        self.last_report: Optional[SuiteReport] = None

    def add_test(
        self,
        must_pass: int,
        try_harder_must_pass: int,
        rotation: float = 0.0,
    ) -> RotationCase:
        """
        Register a rotation case.

        Args:
            must_pass: Images that must decode in normal mode
            try_harder_must_pass: Images that must decode with try harder
            rotation: Clockwise degrees applied to every fixture
        """
        case = RotationCase(float(rotation), must_pass, try_harder_must_pass)
        self._cases.append(case)
        return case

    @property
    def cases(self) -> Tuple[RotationCase, ...]:
        return tuple(self._cases)

    @property
    def state(self) -> RunState:
        return self._state

    def baseline_hints(self) -> Optional[Hints]:
        """Hints sent with every decode call (None for reader defaults)."""
        return self._hints

    def load_fixtures(self) -> Tuple[FixtureImage, ...]:
        """Corpus scan, or the manifest pairing when one was given."""
        if self.manifest is None:
            return load_fixtures(self.corpus_dir, self.config)
        corpus = resolve_corpus_dir(self.corpus_dir, self.config)
        fixtures = fixtures_from_manifest(
            {corpus / Path(image): text for image, text in self.manifest.items()}
        )
        verify_fixture_images(fixtures)
        return fixtures

    # ─────────────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────────────

    def run(self, cancel_event: Optional[threading.Event] = None) -> SuiteReport:
        """
        Run every fixture through every case in both modes.

        Args:
            cancel_event: When set, no further fixtures are started; the
                partial summary is logged and thresholds are skipped

        Returns:
            Report of the run (also kept as ``last_report``)

        Raises:
            EmptySuiteError: If no rotation case is registered
            MissingFixtureDirectoryError: If the corpus cannot be found
            MissingExpectedTextError: If an image has no expected text
            ExpectedTextError: If an expected-text file cannot be decoded
            FixtureImageError: If an image cannot be opened
            ThresholdViolationError: If any case/mode is below its minimum
        """
        cases = self.cases
        if not cases:
            raise EmptySuiteError(f"No rotation cases registered for {self.corpus_dir}")

        try:
            fixtures = self.load_fixtures()
        except Exception:
            self._state = RunState.ABORTED
            raise

        invoker = DecodeInvoker(self.reader, self.expected_format, self.baseline_hints())
        tally = TallyTable(len(cases))
        self._state = RunState.RUNNING
        try:
            processed = self._process_all(fixtures, cases, invoker, tally, cancel_event)
        except Exception:
            self._state = RunState.ABORTED
            raise
        tally.finalize()

        cancelled = processed < len(fixtures)
        self._state = RunState.CANCELLED if cancelled else RunState.COMPLETED

        report = build_report(
            str(self.corpus_dir),
            self.expected_format,
            len(fixtures),
            processed,
            cases,
            tally,
            cancelled=cancelled,
        )
        self.last_report = report
        log_report(report)

        if report.violations:
            raise ThresholdViolationError(report.violations, report)
        return report

    def run_counting_results(self) -> SummaryResult:
        """Run and return only the totals, for aggregating several suites."""
        return self.run().summary

    def _process_all(
        self,
        fixtures: Sequence[FixtureImage],
        cases: Sequence[RotationCase],
        invoker: DecodeInvoker,
        tally: TallyTable,
        cancel_event: Optional[threading.Event],
    ) -> int:
        """Process fixtures; returns how many were fully processed."""
        if not self.config.parallel:
            processed = 0
            for fixture in fixtures:
                if cancel_event is not None and cancel_event.is_set():
                    break
                tally.merge(self._process_fixture(fixture, cases, invoker))
                processed += 1
            return processed

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                executor.submit(self._process_unless_cancelled, f, cases, invoker, cancel_event)
                for f in fixtures
            ]
            # Barrier: every worker finishes before any count is read
            partials = [future.result() for future in futures]

        processed = 0
        for partial in partials:
            if partial is not None:
                tally.merge(partial)
                processed += 1
        return processed

    def _process_unless_cancelled(
        self,
        fixture: FixtureImage,
        cases: Sequence[RotationCase],
        invoker: DecodeInvoker,
        cancel_event: Optional[threading.Event],
    ) -> Optional[TallyTable]:
        if cancel_event is not None and cancel_event.is_set():
            return None
        return self._process_fixture(fixture, cases, invoker)

    def _process_fixture(
        self,
        fixture: FixtureImage,
        cases: Sequence[RotationCase],
        invoker: DecodeInvoker,
    ) -> TallyTable:
        """
        Attempt one fixture under every case and mode.

        Returns:
            Partial tally holding this fixture's successes only
        """
        logger.info(f"Starting {fixture.path.resolve()}")
        image = fixture.load_image()
        partial = TallyTable(len(cases))

        for index, case in enumerate(cases):
            rotated = self.rotate(image, case.rotation)
            try:
                bitmap = self.bitmap_factory(rotated)
            except ReaderError as e:
                # Counts as a failed attempt in both modes
                for mode in MODES:
                    suffix = attempt_suffix(mode, case.rotation)
                    logger.info(f"{fixture.name} {type(e).__name__}: {e} {suffix}")
                continue

            for mode in MODES:
                outcome = invoker.attempt(
                    bitmap,
                    fixture.expected_text,
                    mode,
                    rotation=case.rotation,
                    label=fixture.name,
                )
                if outcome.success:
                    partial.increment(index, mode)

        return partial
