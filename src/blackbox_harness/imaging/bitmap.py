"""
Module: imaging.bitmap

Purpose:
    Default luminance source and binarizer. Converts a Pillow image into a
    BinaryBitmap: 8-bit luminance plus a lazily computed black/white
    matrix. Suites with their own preprocessing pass a different bitmap
    factory to the runner; readers only ever see the resulting object.

Key Classes:
    - GlobalHistogramBinarizer: Single black point from a luminance histogram
    - BinaryBitmap: Immutable bitmap shared by both decode modes

Key Functions:
    - luminance_from_image(): Pillow image -> uint8 luminance array
    - build_bitmap(): Default bitmap factory

Dependencies:
    - numpy: Luminance arrays and histogram
    - PIL: Mode conversion

Used By:
    - runner.suite: Bitmap built once per (fixture, rotation case)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

import numpy as np
from PIL import Image

from blackbox_harness.decoding.reader import NotFoundError

# Histogram resolution: 32 buckets of 8 luminance levels each
LUMINANCE_BITS = 5
LUMINANCE_SHIFT = 8 - LUMINANCE_BITS
LUMINANCE_BUCKETS = 1 << LUMINANCE_BITS

# Integer RGB weights (sum 1024) with rounding offset
_R_WEIGHT, _G_WEIGHT, _B_WEIGHT = 306, 601, 117
_ROUNDING = 0x200


def luminance_from_image(image: Image.Image) -> np.ndarray:
    """
    Compute per-pixel luminance.

    Grayscale images are used as-is. Colour images use integer weights
    ``(306 R + 601 G + 117 B + 0x200) >> 10``; fully transparent pixels are
    treated as white.

    Returns:
        Read-only uint8 array of shape (height, width)
    """
    if image.mode == "L":
        lum = np.array(image, dtype=np.uint8)
    else:
        rgba = np.array(image.convert("RGBA"), dtype=np.uint32)
        lum = (
            _R_WEIGHT * rgba[..., 0]
            + _G_WEIGHT * rgba[..., 1]
            + _B_WEIGHT * rgba[..., 2]
            + _ROUNDING
        ) >> 10
        lum[rgba[..., 3] == 0] = 0xFF
        lum = lum.astype(np.uint8)
    lum.setflags(write=False)
    return lum


def estimate_black_point(buckets: np.ndarray) -> int:
    """
    Pick a black point from a luminance histogram.

    Finds the tallest peak, then a second peak weighted by squared distance
    from the first, then the deepest valley between them biased towards
    the brighter side.

    Raises:
        NotFoundError: If the two peaks are too close to separate ink from paper
    """
    num_buckets = len(buckets)
    counts = [int(c) for c in buckets]
    max_bucket_count = max(counts) if counts else 0
    first_peak = int(np.argmax(buckets)) if counts else 0

    second_peak = 0
    second_peak_score = 0
    for x, count in enumerate(counts):
        distance = x - first_peak
        score = count * distance * distance
        if score > second_peak_score:
            second_peak = x
            second_peak_score = score

    if second_peak_score == 0:
        raise NotFoundError("Luminance histogram has a single level")
    if first_peak > second_peak:
        first_peak, second_peak = second_peak, first_peak

    if second_peak - first_peak <= num_buckets // 16:
        raise NotFoundError("Luminance histogram has no distinct light and dark peaks")

    best_valley = second_peak - 1
    best_valley_score = -1
    for x in range(second_peak - 1, first_peak, -1):
        from_first = x - first_peak
        score = from_first * from_first * (second_peak - x) * (max_bucket_count - counts[x])
        if score > best_valley_score:
            best_valley = x
            best_valley_score = score

    return best_valley << LUMINANCE_SHIFT


class GlobalHistogramBinarizer:
    """
    Binarizer using one black point for the whole image.

    Fast and adequate for evenly lit fixtures; suites needing local
    thresholds supply their own bitmap factory.
    """

    def histogram(self, luminance: np.ndarray) -> np.ndarray:
        return np.bincount(
            (luminance >> LUMINANCE_SHIFT).ravel(),
            minlength=LUMINANCE_BUCKETS,
        )

    def black_point(self, luminance: np.ndarray) -> int:
        return estimate_black_point(self.histogram(luminance))

    def black_matrix(self, luminance: np.ndarray) -> np.ndarray:
        """Boolean matrix, True where the pixel is darker than the black point."""
        matrix = luminance < self.black_point(luminance)
        matrix.setflags(write=False)
        return matrix


@dataclass(frozen=True, eq=False)
class BinaryBitmap:
    """
    Bitmap handed to a reader.

    Built once per rotated variant and shared by the normal and try-harder
    attempts. The black matrix is computed on first access and cached;
    when the image cannot be binarized the access raises NotFoundError,
    which the decode invoker treats like any other reader failure.

    Attributes:
        source: Rotated Pillow image the bitmap was built from
        luminance: Read-only uint8 luminance array
        binarizer: Strategy producing the black matrix
    """

    source: Image.Image
    luminance: np.ndarray
    binarizer: GlobalHistogramBinarizer = field(default_factory=GlobalHistogramBinarizer)

    @property
    def width(self) -> int:
        return int(self.luminance.shape[1])

    @property
    def height(self) -> int:
        return int(self.luminance.shape[0])

    @cached_property
    def black_matrix(self) -> np.ndarray:
        return self.binarizer.black_matrix(self.luminance)


def build_bitmap(image: Image.Image) -> BinaryBitmap:
    """Default bitmap factory: luminance plus global histogram binarizer."""
    return BinaryBitmap(source=image, luminance=luminance_from_image(image))
