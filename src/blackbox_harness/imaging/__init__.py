"""
Module: imaging

Purpose:
    Image preparation ahead of decoding: clockwise rotation variants and
    the luminance/binarization step that turns pixels into a bitmap.
"""

from .bitmap import BinaryBitmap, GlobalHistogramBinarizer, build_bitmap, luminance_from_image
from .rotation import rotate_image

__all__ = [
    "BinaryBitmap",
    "GlobalHistogramBinarizer",
    "build_bitmap",
    "luminance_from_image",
    "rotate_image",
]
