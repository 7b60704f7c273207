# docthumbs/services/thumbnail_pipeline/utils/thumbnail_utils.py
"""
Thumbnail Utility Functions
"""

import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, Tuple, Union

from ....constants import THUMBNAIL_SIZE_SEPARATOR
from ....exceptions import InvalidThumbnailSizeError


def parse_thumbnail_size(size: Union[str, Tuple[int, int]]) -> Tuple[int, int]:
    """
    Parse a "WxH" size string.

    Args:
        size: "320x240" style string, or an already parsed (width, height)

    Returns:
        (width, height) tuple of positive integers

    Raises:
        InvalidThumbnailSizeError: if the value is malformed or not positive
    """
    if isinstance(size, tuple):
        width, height = size
    else:
        parts = str(size).strip().lower().split(THUMBNAIL_SIZE_SEPARATOR)
        if len(parts) != 2:
            raise InvalidThumbnailSizeError(
                f"Invalid thumbnail size '{size}', expected WIDTHxHEIGHT"
            )
        try:
            width, height = int(parts[0]), int(parts[1])
        except ValueError as e:
            raise InvalidThumbnailSizeError(
                f"Invalid thumbnail size '{size}', expected WIDTHxHEIGHT"
            ) from e

    if width <= 0 or height <= 0:
        raise InvalidThumbnailSizeError(
            f"Thumbnail size must be positive, got {width}x{height}"
        )
    return width, height


def validate_box_size(size: int) -> int:
    """Validate a square bounding box size in pixels."""
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidThumbnailSizeError(
            f"Thumbnail size must be a positive integer, got {size!r}"
        )
    return size


def calculate_thumbnail_dimensions(
    source_size: Tuple[int, int],
    target_size: Tuple[int, int],
    allow_upscale: bool = False,
) -> Tuple[int, int]:
    """
    Calculate dimensions that fit within target size while preserving aspect ratio.

    Args:
        source_size: (width, height) of source image
        target_size: (width, height) of bounding box
        allow_upscale: Whether images smaller than the box may be enlarged

    Returns:
        (width, height) of calculated thumbnail, never below 1x1
    """
    source_width, source_height = source_size
    target_width, target_height = target_size

    if not allow_upscale and source_width <= target_width and source_height <= target_height:
        return (source_width, source_height)

    # Calculate aspect ratios
    source_ratio = source_width / source_height
    target_ratio = target_width / target_height

    if source_ratio > target_ratio:
        # Source is wider - fit to width
        new_width = target_width
        new_height = round(target_width / source_ratio)
    else:
        # Source is taller - fit to height
        new_height = target_height
        new_width = round(target_height * source_ratio)

    return (max(1, new_width), max(1, new_height))


class KeyedLock:
    """
    Registry of per-key locks.

    Serialises work that shares a key (one thumbnail of one node) while
    letting different keys proceed in parallel.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = defaultdict(threading.Lock)
        self._holders: Dict[Hashable, int] = defaultdict(int)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks[key]
            self._holders[key] += 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                if self._holders[key] == 0:
                    del self._holders[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
