"""
Tests for the command line entry point.

Test Coverage:
- Argument parsing helpers (cases, hints, formats)
- run: exit codes for pass, violation and configuration errors
- run-all: suite files, combined summary, JSON report
"""

import argparse
import json
import sys
import types

import pytest

from blackbox_harness.cli import (
    EXIT_CONFIG,
    EXIT_OK,
    EXIT_THRESHOLD,
    main,
    parse_case,
    parse_hint,
    suites_from_file,
)
from blackbox_harness.decoding import BarcodeFormat, DecodeHintType
from blackbox_harness.errors import ConfigurationError


@pytest.fixture
def cli_readers(monkeypatch, make_reader):
    """Importable module with a perfect reader and a failing one."""
    module = types.ModuleType("cli_test_readers")
    module.good = make_reader()
    module.bad = make_reader(fail=lambda gray, landscape, try_harder: True)
    monkeypatch.setitem(sys.modules, "cli_test_readers", module)
    return module


class TestParsers:
    """Tests for argument parsing helpers."""

    def test_parse_case_when_valid_then_tuple(self):
        assert parse_case("90:2:3") == (90.0, 2, 3)

    @pytest.mark.parametrize("text", ["90:2", "a:1:1", "0:1:x"])
    def test_parse_case_when_invalid_then_raises(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_case(text)

    def test_parse_hint_when_json_value_then_decoded(self):
        assert parse_hint("pure_barcode=true") == (DecodeHintType.PURE_BARCODE, True)
        assert parse_hint("POSSIBLE_FORMATS=[\"QR_CODE\"]") == (
            DecodeHintType.POSSIBLE_FORMATS,
            ["QR_CODE"],
        )

    def test_parse_hint_when_plain_string_then_kept(self):
        assert parse_hint("CHARACTER_SET=ISO-8859-1") == (DecodeHintType.CHARACTER_SET, "ISO-8859-1")

    def test_parse_hint_when_unknown_then_raises(self):
        with pytest.raises(argparse.ArgumentTypeError, match="unknown hint"):
            parse_hint("FAST=1")


class TestRunCommand:
    """Tests for `blackbox-harness run`."""

    def test_run_when_thresholds_met_then_exit_ok(self, corpus_dir, cli_readers):
        code = main([
            "run", str(corpus_dir),
            "--reader", "cli_test_readers:good",
            "--format", "QR_CODE",
            "--case", "0:3:3",
            "--case", "90:3:3",
        ])
        assert code == EXIT_OK

    def test_run_when_threshold_missed_then_exit_one(self, corpus_dir, cli_readers, tmp_path):
        # Arrange
        report_path = tmp_path / "report.json"

        # Act
        code = main([
            "run", str(corpus_dir),
            "--reader", "cli_test_readers:bad",
            "--format", "qr_code",
            "--case", "0:1:0",
            "--json-report", str(report_path),
        ])

        # Assert
        assert code == EXIT_THRESHOLD
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["passed"] is False
        assert len(data["violations"]) == 1

    def test_run_when_corpus_missing_then_exit_config(self, tmp_path, cli_readers):
        code = main([
            "run", str(tmp_path / "missing"),
            "--reader", "cli_test_readers:good",
            "--format", "QR_CODE",
            "--case", "0:0:0",
        ])
        assert code == EXIT_CONFIG

    def test_run_when_expected_text_not_utf8_then_exit_config(self, corpus_dir, cli_readers):
        # Arrange
        (corpus_dir / "2.txt").write_bytes(b"\xff\xfe bad")

        # Act
        code = main([
            "run", str(corpus_dir),
            "--reader", "cli_test_readers:good",
            "--format", "QR_CODE",
            "--case", "0:3:3",
        ])

        # Assert
        assert code == EXIT_CONFIG
        assert cli_readers.good.calls == []

    def test_run_when_image_corrupt_then_exit_config_without_decoding(
        self, corpus_dir, cli_readers
    ):
        (corpus_dir / "3.png").write_bytes(b"not an image")
        code = main([
            "run", str(corpus_dir),
            "--reader", "cli_test_readers:good",
            "--format", "QR_CODE",
            "--case", "0:3:3",
        ])
        assert code == EXIT_CONFIG
        assert cli_readers.good.calls == []

    def test_run_when_reader_unknown_then_exit_config(self, corpus_dir):
        code = main([
            "run", str(corpus_dir),
            "--reader", "no_such_module_for_tests:Reader",
            "--format", "QR_CODE",
            "--case", "0:0:0",
        ])
        assert code == EXIT_CONFIG

    def test_run_when_workers_invalid_then_exit_config(self, corpus_dir, cli_readers):
        code = main([
            "run", str(corpus_dir),
            "--reader", "cli_test_readers:good",
            "--format", "QR_CODE",
            "--case", "0:0:0",
            "--workers", "0",
        ])
        assert code == EXIT_CONFIG


class TestRunAllCommand:
    """Tests for `blackbox-harness run-all`."""

    def _write_suite_file(self, tmp_path, suites):
        path = tmp_path / "suites.json"
        path.write_text(json.dumps({"suites": suites}), encoding="utf-8")
        return path

    def test_suites_from_file_when_valid_then_builds_suites(self, tmp_path, corpus_dir, cli_readers):
        # Arrange
        path = self._write_suite_file(tmp_path, [{
            "corpus": corpus_dir.name,
            "reader": "cli_test_readers:good",
            "format": "QR_CODE",
            "cases": [[0, 3, 3], [90, 2, 3]],
            "hints": {"pure_barcode": True},
        }])

        # Act
        suites = suites_from_file(path)

        # Assert
        assert len(suites) == 1
        suite = suites[0]
        assert suite.corpus_dir == corpus_dir
        assert suite.expected_format is BarcodeFormat.QR_CODE
        assert [c.rotation for c in suite.cases] == [0.0, 90.0]
        assert suite.baseline_hints() == {DecodeHintType.PURE_BARCODE: True}

    def test_suites_from_file_when_malformed_then_configuration_error(self, tmp_path):
        path = self._write_suite_file(tmp_path, [{"corpus": "x"}])
        with pytest.raises(ConfigurationError, match="Invalid suite #1"):
            suites_from_file(path)

    def test_suites_from_file_when_empty_then_configuration_error(self, tmp_path):
        path = self._write_suite_file(tmp_path, [])
        with pytest.raises(ConfigurationError, match="lists no suites"):
            suites_from_file(path)

    def test_run_all_when_one_suite_fails_then_runs_rest_and_combines(
        self, tmp_path, make_corpus, cli_readers, caplog
    ):
        # Arrange
        make_corpus("qr-a")
        make_corpus("qr-b")
        path = self._write_suite_file(tmp_path, [
            {"corpus": "qr-a", "reader": "cli_test_readers:bad", "format": "QR_CODE",
             "cases": [[0, 1, 1]]},
            {"corpus": "qr-b", "reader": "cli_test_readers:good", "format": "QR_CODE",
             "cases": [[0, 3, 3]]},
        ])
        report_path = tmp_path / "all.json"

        # Act
        with caplog.at_level("INFO", logger="blackbox_harness"):
            code = main(["run-all", str(path), "--json-report", str(report_path)])

        # Assert
        assert code == EXIT_THRESHOLD
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert len(data["reports"]) == 2
        assert data["summary"] == {
            "total_found": 6,
            "total_must_pass": 8,
            "total_tests": 12,
            "percentage": 50,
        }
        assert "SUMMARY RESULTS:" in caplog.text

    def test_suites_from_file_when_manifest_then_suite_uses_it(
        self, tmp_path, corpus_dir, cli_readers
    ):
        # Arrange
        path = self._write_suite_file(tmp_path, [{
            "corpus": corpus_dir.name,
            "reader": "cli_test_readers:good",
            "format": "QR_CODE",
            "cases": [[0, 1, 1]],
            "manifest": {"2.png": "Text 2"},
        }])

        # Act
        suite = suites_from_file(path)[0]

        # Assert
        assert suite.manifest == {"2.png": "Text 2"}
        assert [f.name for f in suite.load_fixtures()] == ["2.png"]

    def test_run_all_when_suite_misconfigured_then_others_still_run(
        self, tmp_path, make_corpus, cli_readers, caplog
    ):
        # Arrange
        make_corpus("qr-a")
        make_corpus("qr-c")
        path = self._write_suite_file(tmp_path, [
            {"corpus": "qr-a", "reader": "cli_test_readers:good", "format": "QR_CODE",
             "cases": [[0, 3, 3]]},
            {"corpus": "qr-missing", "reader": "cli_test_readers:good", "format": "QR_CODE",
             "cases": [[0, 3, 3]]},
            {"corpus": "qr-c", "reader": "cli_test_readers:good", "format": "QR_CODE",
             "cases": [[0, 3, 3]]},
        ])
        report_path = tmp_path / "all.json"

        # Act
        with caplog.at_level("INFO", logger="blackbox_harness"):
            code = main(["run-all", str(path), "--json-report", str(report_path)])

        # Assert
        assert code == EXIT_CONFIG
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert [r["corpus"] for r in data["reports"]] == [
            str(tmp_path / "qr-a"),
            str(tmp_path / "qr-c"),
        ]
        assert data["summary"]["total_found"] == 12
        assert "qr-missing" in caplog.text
        assert "SUMMARY RESULTS:" in caplog.text
