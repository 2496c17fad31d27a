"""
Module: imaging.rotation

Purpose:
    Produce rotated variants of fixture images. Angles are clockwise
    degrees; zero returns the source untouched.

Key Functions:
    - rotate_image(): Clockwise bicubic rotation about the image centre

Dependencies:
    - PIL: Affine rotation

Used By:
    - runner.suite: One variant per (fixture, rotation case)
"""

from __future__ import annotations

from typing import Tuple, Union

from PIL import Image

Fill = Union[int, Tuple[int, ...]]

_WHITE: dict = {
    "L": 255,
    "RGB": (255, 255, 255),
    "RGBA": (255, 255, 255, 255),
}


def _background(mode: str) -> Fill:
    """White in the image's mode, used for corners uncovered by rotation."""
    return _WHITE.get(mode, 255)


def rotate_image(image: Image.Image, degrees: float) -> Image.Image:
    """
    Rotate an image clockwise about its centre.

    The canvas expands to hold the whole rotated image so no symbol is
    cropped; newly exposed corners are white. Multiples of 90 degrees are
    exact pixel transposes, other angles use bicubic resampling.

    Args:
        image: Source image (never modified)
        degrees: Clockwise angle

    Returns:
        The same object for 0 degrees, otherwise a new image

    Example:
        >>> img = Image.new("L", (40, 20))
        >>> rotate_image(img, 90).size
        (20, 40)
        >>> rotate_image(img, 0) is img
        True
    """
    if degrees == 0:
        return image
    # PIL rotates counter-clockwise
    return image.rotate(
        -degrees,
        resample=Image.Resampling.BICUBIC,
        expand=True,
        fillcolor=_background(image.mode),
    )
