"""
Module: corpus

Purpose:
    Fixture discovery for a corpus directory: image files filtered by
    extension, each paired with a sibling expected-text file.
"""

from .loader import (
    discover_image_files,
    expected_text_path,
    fixtures_from_manifest,
    load_fixtures,
    read_expected_text,
    resolve_corpus_dir,
    verify_fixture_images,
)

__all__ = [
    "discover_image_files",
    "expected_text_path",
    "fixtures_from_manifest",
    "load_fixtures",
    "read_expected_text",
    "resolve_corpus_dir",
    "verify_fixture_images",
]
