"""Tests for HarnessConfig validation."""

from dataclasses import FrozenInstanceError

import pytest

from blackbox_harness.config import HarnessConfig, IMAGE_EXTENSIONS


class TestHarnessConfig:
    """Tests for HarnessConfig."""

    def test_defaults_when_constructed_then_sequential_standard_extensions(self):
        config = HarnessConfig()
        assert config.image_extensions == IMAGE_EXTENSIONS
        assert config.expected_text_suffix == ".txt"
        assert config.alternate_roots == ("core",)
        assert not config.parallel

    def test_parallel_when_several_workers_then_true(self):
        assert HarnessConfig(max_workers=4).parallel

    def test_max_workers_when_zero_then_raises(self):
        with pytest.raises(ValueError, match="max_workers"):
            HarnessConfig(max_workers=0)

    @pytest.mark.parametrize("ext", ["png", ".PNG"])
    def test_image_extensions_when_not_lower_dotted_then_raises(self, ext):
        with pytest.raises(ValueError, match="lower-case suffix"):
            HarnessConfig(image_extensions=(ext,))

    def test_image_extensions_when_empty_then_raises(self):
        with pytest.raises(ValueError, match="must not be empty"):
            HarnessConfig(image_extensions=())

    def test_expected_text_suffix_when_undotted_then_raises(self):
        with pytest.raises(ValueError, match="expected_text_suffix"):
            HarnessConfig(expected_text_suffix="txt")

    def test_config_when_assigned_then_frozen(self):
        config = HarnessConfig()
        with pytest.raises(FrozenInstanceError):
            config.max_workers = 2
