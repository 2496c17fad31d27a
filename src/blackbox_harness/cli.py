"""
Module: cli

Purpose:
    Command line entry point. Runs one suite from arguments, or every
    suite listed in a JSON file, and maps the outcome to an exit code.

Commands:
    - run: One corpus, one reader, rotation cases from --case
    - run-all: Suites from a JSON file; totals combined across suites

Exit codes:
    0 all thresholds met, 1 threshold violation, 2 configuration error,
    130 interrupted (partial summary still logged)

Example:
    blackbox-harness run test/data/blackbox/qrcode-1 \\
        --reader my_project.readers:QRCodeReader --format QR_CODE \\
        --case 0:18:18 --case 90:18:18 --hint PURE_BARCODE=true
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from blackbox_harness import __version__
from blackbox_harness.config import HarnessConfig
from blackbox_harness.core.models import SummaryResult
from blackbox_harness.decoding import BarcodeFormat, DecodeHintType, load_reader
from blackbox_harness.errors import ConfigurationError, ThresholdViolationError
from blackbox_harness.runner import BlackBoxSuite, SuiteReport

logger = logging.getLogger("blackbox_harness")

EXIT_OK = 0
EXIT_THRESHOLD = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130


def parse_case(text: str) -> Tuple[float, int, int]:
    """Parse ``ROTATION:MUST_PASS:TRY_HARDER_MUST_PASS`` (e.g. ``90:18:19``)."""
    parts = text.split(":")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(
            f"case must be ROTATION:MUST_PASS:TRY_HARDER_MUST_PASS: {text!r}"
        )
    try:
        return float(parts[0]), int(parts[1]), int(parts[2])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid case {text!r}: {e}") from e


def parse_hint_value(raw: str) -> Any:
    """JSON literal when possible (true, 3, ["QR_CODE"]), otherwise the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_hint(text: str) -> Tuple[DecodeHintType, Any]:
    """Parse ``NAME=VALUE`` into a hint entry."""
    name, sep, raw = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"hint must be NAME=VALUE: {text!r}")
    try:
        key = DecodeHintType[name.strip().upper()]
    except KeyError as e:
        raise argparse.ArgumentTypeError(f"unknown hint {name!r}") from e
    return key, parse_hint_value(raw)


def parse_format(text: str) -> BarcodeFormat:
    try:
        return BarcodeFormat[text.strip().upper()]
    except KeyError as e:
        raise argparse.ArgumentTypeError(f"unknown format {text!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blackbox-harness",
        description="Replay a fixture corpus through a barcode reader and check pass thresholds.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every attempt")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run one suite")
    run.add_argument("corpus", type=Path, help="Directory of images and expected-text files")
    run.add_argument("--reader", required=True, help="Reader as module:attribute")
    run.add_argument("--format", required=True, type=parse_format, help="Expected barcode format")
    run.add_argument(
        "--case",
        dest="cases",
        action="append",
        type=parse_case,
        required=True,
        metavar="ROT:MIN:MIN_TH",
        help="Rotation case (repeatable)",
    )
    run.add_argument(
        "--hint",
        dest="hints",
        action="append",
        type=parse_hint,
        default=[],
        metavar="NAME=VALUE",
        help="Baseline decode hint (repeatable)",
    )
    run.add_argument("--workers", type=int, default=1, help="Fixtures processed concurrently")
    run.add_argument("--json-report", type=Path, help="Write the report as JSON")

    run_all = sub.add_parser("run-all", help="Run every suite listed in a JSON file")
    run_all.add_argument("suite_file", type=Path)
    run_all.add_argument("--json-report", type=Path, help="Write all reports as JSON")

    return parser


def suites_from_file(path: Path) -> List[BlackBoxSuite]:
    """
    Build suites from a JSON suite file.

    Format::

        {"suites": [{"corpus": "qrcode-1", "reader": "pkg.mod:Reader",
                     "format": "QR_CODE", "cases": [[0, 18, 18], [90, 18, 18]],
                     "hints": {"PURE_BARCODE": true}, "workers": 1,
                     "manifest": {"a.png": "Hello"}}]}

    Relative corpus paths are resolved against the suite file's directory.
    The optional manifest pairs images (relative to the corpus) with their
    expected text instead of the file-name convention.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read suite file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in suite file {path}: {e}") from e

    entries = data.get("suites") if isinstance(data, dict) else None
    if not entries:
        raise ConfigurationError(f"Suite file {path} lists no suites")

    suites = []
    for i, entry in enumerate(entries):
        try:
            corpus = Path(entry["corpus"])
            if not corpus.is_absolute():
                corpus = path.parent / corpus
            hints: Dict[DecodeHintType, Any] = {
                DecodeHintType[name.upper()]: value
                for name, value in (entry.get("hints") or {}).items()
            }
            suite = BlackBoxSuite(
                corpus,
                load_reader(entry["reader"]),
                BarcodeFormat[entry["format"].upper()],
                hints=hints or None,
                manifest=entry.get("manifest"),
                config=HarnessConfig(max_workers=int(entry.get("workers", 1))),
            )
            for rotation, must_pass, try_harder in entry["cases"]:
                suite.add_test(int(must_pass), int(try_harder), float(rotation))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid suite #{i + 1} in {path}: {e!r}") from e
        suites.append(suite)
    return suites


def _run_suite(
    suite: BlackBoxSuite,
    cancel_event: threading.Event,
) -> Tuple[int, SuiteReport]:
    try:
        report = suite.run(cancel_event=cancel_event)
    except ThresholdViolationError as e:
        return EXIT_THRESHOLD, e.report
    if report.cancelled:
        return EXIT_INTERRUPTED, report
    return EXIT_OK, report


def _install_interrupt(cancel_event: threading.Event) -> Any:
    def handler(signum, frame):
        logger.warning("Interrupted; finishing current image and skipping thresholds")
        cancel_event.set()

    return signal.signal(signal.SIGINT, handler)


def _suites_from_args(args: argparse.Namespace) -> List[BlackBoxSuite]:
    if args.command == "run-all":
        return suites_from_file(args.suite_file)
    suite = BlackBoxSuite(
        args.corpus,
        load_reader(args.reader),
        args.format,
        hints=dict(args.hints) or None,
        config=HarnessConfig(max_workers=args.workers),
    )
    for rotation, must_pass, try_harder in args.cases:
        suite.add_test(must_pass, try_harder, rotation)
    return [suite]


def _write_json_report(path: Path, reports: Sequence[SuiteReport]) -> None:
    if len(reports) == 1:
        reports[0].save(path)
        return
    payload = {
        "reports": [r.to_dict() for r in reports],
        "summary": SummaryResult.combine(r.summary for r in reports).to_dict(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Report saved: {path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        suites = _suites_from_args(args)
    except (ConfigurationError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG

    cancel_event = threading.Event()
    previous = _install_interrupt(cancel_event)
    exit_code = EXIT_OK
    reports: List[SuiteReport] = []
    try:
        for suite in suites:
            if cancel_event.is_set():
                break
            try:
                code, report = _run_suite(suite, cancel_event)
            except ConfigurationError as e:
                # Remaining suites still run; the failure sets the exit code
                logger.error(f"Configuration error in {suite.corpus_dir}: {e}")
                exit_code = max(exit_code, EXIT_CONFIG)
                continue
            exit_code = max(exit_code, code)
            reports.append(report)
    finally:
        signal.signal(signal.SIGINT, previous)

    if len(reports) > 1:
        logger.info(str(SummaryResult.combine(r.summary for r in reports)))
    if args.json_report is not None and reports:
        _write_json_report(args.json_report, reports)
    return exit_code
