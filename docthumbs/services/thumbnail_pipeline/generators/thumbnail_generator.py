# docthumbs/services/thumbnail_pipeline/generators/thumbnail_generator.py
"""
Thumbnail Scaler Component

Fits rendered pages and extracted video frames into a bounding box while
preserving aspect ratio. Pure image operations: no I/O, and the input image
is never modified.
"""

from typing import Tuple, Union

from PIL import Image

from ..utils.thumbnail_utils import (
    calculate_thumbnail_dimensions,
    parse_thumbnail_size,
    validate_box_size,
)


def _scale(
    image: Image.Image, target_size: Tuple[int, int], allow_upscale: bool
) -> Image.Image:
    new_size = calculate_thumbnail_dimensions(image.size, target_size, allow_upscale)
    if new_size == image.size:
        return image.copy()

    # High-quality resampling for both reduction and enlargement
    return image.resize(new_size, Image.Resampling.LANCZOS)


def scale_to_box(
    image: Image.Image, size: int, allow_upscale: bool = False
) -> Image.Image:
    """
    Fit an image within a size x size square.

    Args:
        image: Source image (left untouched)
        size: Edge of the square bounding box in pixels
        allow_upscale: Enlarge images smaller than the box

    Returns:
        New image whose longer edge is at most size

    Raises:
        InvalidThumbnailSizeError: if size is not a positive integer
    """
    validate_box_size(size)
    return _scale(image, (size, size), allow_upscale)


def scale_to_size(
    image: Image.Image,
    size: Union[str, Tuple[int, int]],
    allow_upscale: bool = False,
) -> Image.Image:
    """
    Fit an image within a "WxH" box.

    Args:
        image: Source image (left untouched)
        size: "320x240" style string or (width, height)
        allow_upscale: Enlarge images smaller than the box

    Returns:
        New image with width <= W and height <= H

    Raises:
        InvalidThumbnailSizeError: if size is malformed
    """
    return _scale(image, parse_thumbnail_size(size), allow_upscale)
