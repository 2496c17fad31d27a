"""
Tests for decoding.hints

Test Coverage:
- build_hints(): None passthrough, try-harder only, baseline merge,
  fresh immutable bundle per call, baseline never mutated
"""

import pytest

from blackbox_harness.decoding import DecodeHintType, build_hints


def test_build_hints_when_no_baseline_and_normal_then_none():
    assert build_hints(None, False) is None


def test_build_hints_when_no_baseline_and_try_harder_then_only_flag():
    hints = build_hints(None, True)
    assert dict(hints) == {DecodeHintType.TRY_HARDER: True}


def test_build_hints_when_baseline_and_normal_then_copy_of_baseline():
    baseline = {DecodeHintType.PURE_BARCODE: True}
    hints = build_hints(baseline, False)
    assert dict(hints) == baseline
    assert DecodeHintType.TRY_HARDER not in hints


def test_build_hints_when_baseline_and_try_harder_then_both():
    """Baseline hints and try harder are combined, not exclusive."""
    # Arrange
    baseline = {DecodeHintType.POSSIBLE_FORMATS: ["QR_CODE"]}

    # Act
    hints = build_hints(baseline, True)

    # Assert
    assert hints[DecodeHintType.POSSIBLE_FORMATS] == ["QR_CODE"]
    assert hints[DecodeHintType.TRY_HARDER] is True


def test_build_hints_when_try_harder_then_baseline_not_mutated():
    baseline = {DecodeHintType.PURE_BARCODE: True}
    build_hints(baseline, True)
    assert baseline == {DecodeHintType.PURE_BARCODE: True}


def test_build_hints_when_called_twice_then_distinct_bundles():
    assert build_hints(None, True) is not build_hints(None, True)


def test_build_hints_when_returned_then_read_only():
    hints = build_hints(None, True)
    with pytest.raises(TypeError):
        hints[DecodeHintType.OTHER] = 1  # type: ignore
