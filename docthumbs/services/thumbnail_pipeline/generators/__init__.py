"""
Thumbnail Generators
"""

from .thumbnail_generator import scale_to_box, scale_to_size

__all__ = ["scale_to_box", "scale_to_size"]
