"""
Module: config

Purpose:
    Configuration dataclass and constants for the black-box harness.
    Immutable configuration with validation on construction.

Key Classes:
    - HarnessConfig: Corpus lookup, file pairing and execution settings

Dependencies:
    - dataclasses (std)

Used By:
    - corpus.loader: Extension allow-list, alternate roots, text suffix
    - runner.suite: Worker count
    - cli: Built from command line arguments
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Image suffixes accepted as fixtures (compared lower-case)
IMAGE_EXTENSIONS: Tuple[str, ...] = (".jpg", ".jpeg", ".gif", ".png")

# Sibling file holding the expected decoded text
EXPECTED_TEXT_SUFFIX = ".txt"
EXPECTED_TEXT_ENCODING = "utf-8"

# Corpus paths are often given relative to the project root
DEFAULT_ALTERNATE_ROOTS: Tuple[str, ...] = ("core",)


@dataclass(frozen=True)
class HarnessConfig:
    """
    Configuration for a black-box run (immutable).

    Attributes:
        image_extensions: Lower-case suffixes treated as fixture images
        expected_text_suffix: Suffix of the paired expected-text file
        text_encoding: Encoding of expected-text files
        alternate_roots: Prefixes tried when the corpus path does not exist
        max_workers: Fixtures processed concurrently (1 = sequential)

    Example:
        >>> config = HarnessConfig(max_workers=4)
        >>> config.image_extensions
        ('.jpg', '.jpeg', '.gif', '.png')
    """

    image_extensions: Tuple[str, ...] = IMAGE_EXTENSIONS
    expected_text_suffix: str = EXPECTED_TEXT_SUFFIX
    text_encoding: str = EXPECTED_TEXT_ENCODING
    alternate_roots: Tuple[str, ...] = DEFAULT_ALTERNATE_ROOTS
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1: {self.max_workers}")
        if not self.image_extensions:
            raise ValueError("image_extensions must not be empty")
        for ext in self.image_extensions:
            if not ext.startswith(".") or ext != ext.lower():
                raise ValueError(f"image extension must be a lower-case suffix: {ext!r}")
        if not self.expected_text_suffix.startswith("."):
            raise ValueError(
                f"expected_text_suffix must start with '.': {self.expected_text_suffix!r}"
            )

    @property
    def parallel(self) -> bool:
        return self.max_workers > 1
