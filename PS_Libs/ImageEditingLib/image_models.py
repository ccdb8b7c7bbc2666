"""
Image editing data models for Packshot Studio.

This module defines core data structures used throughout the editing engine.

Classes:
    Frame: Immutable image payload plus its MIME type and natural size
    ObjectBounds: Tight bounding box of non-background pixels
    MarginInfo: Distance from detected content to each canvas edge
    CropRect: Integer rectangle (rendered or natural pixel space)
    Point: 2D point (rendered or natural pixel space)

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Tuple

from PS_Libs.constants import MIME_PNG
from PS_Libs.pillow_compat import Image

RgbaColor = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Frame:
    """An image that is never mutated once created.

    Operations return new frames; ``image`` must not be drawn on in place.
    """
    image: 'Image.Image'
    mime: str = MIME_PNG

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size


@dataclass(frozen=True)
class ObjectBounds:
    top: int
    left: int
    bottom: int
    right: int
    image_width: int
    image_height: int
    empty: bool

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1


@dataclass(frozen=True)
class MarginInfo:
    top: int
    right: int
    bottom: int
    left: int


@dataclass(frozen=True)
class CropRect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Inclusive hit test used when grabbing the rectangle."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_box(self) -> Tuple[int, int, int, int]:
        """Return (left, upper, right, lower) as Pillow expects."""
        return (self.x, self.y, self.right, self.bottom)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)
