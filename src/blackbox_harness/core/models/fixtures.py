"""
Module: fixtures

Purpose:
    Provides the FixtureImage dataclass - one ground-truth pair of an
    image file and the exact text a reader must decode from it.

Key Functions:
    - FixtureImage.verify(): Check the file is a readable image
    - FixtureImage.load_image(): Read pixel data with Pillow

Dependencies:
    - PIL: Image decoding

Used By:
    - corpus.loader: Builds fixtures while scanning a corpus
    - runner.suite: Loads pixels once per fixture
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from blackbox_harness.errors import FixtureImageError

# Modes the imaging stage works with directly; anything else is converted
_NATIVE_MODES = ("L", "RGB", "RGBA")


@dataclass(frozen=True)
class FixtureImage:
    """
    Fixture image paired with its expected decoded text.

    Identity is the file path. A corpus scan only verifies the image
    header and structure; pixel data is read on demand.

    Attributes:
        path: Image file path
        expected_text: Exact text the reader must return

    Example:
        >>> fixture = FixtureImage(Path("qrcode-1/1.png"), "Hello")
        >>> fixture.name
        '1.png'
    """

    path: Path
    expected_text: str

    @property
    def name(self) -> str:
        return self.path.name

    def load_image(self) -> Image.Image:
        """
        Decode the fixture's pixels.

        Palette, bi-level and other exotic modes are converted to RGB so
        the rotation and luminance stages see a small set of modes.

        Returns:
            Fully loaded Pillow image (file handle already closed)

        Raises:
            FixtureImageError: If the file is missing or not a readable image
        """
        try:
            with Image.open(self.path) as img:
                img.load()
                if img.mode in _NATIVE_MODES:
                    return img.copy()
                return img.convert("RGB")
        except OSError as e:
            raise FixtureImageError(f"Cannot read fixture image {self.path}: {e}") from e

    def verify(self) -> None:
        """
        Check the file is a readable image without decoding its pixels.

        Raises:
            FixtureImageError: If the file is missing, truncated or not an image
        """
        try:
            with Image.open(self.path) as img:
                img.verify()
        except (OSError, SyntaxError) as e:
            raise FixtureImageError(f"Cannot read fixture image {self.path}: {e}") from e
