"""
Rendered-to-natural pixel coordinate scaling.

Selections are drawn on the on-screen (rendered) image, whose size can
differ from the image's natural size. Before any geometry operation the
rendered coordinates are multiplied by natural/rendered per axis and
rounded half up.
"""

import math
from typing import Iterable, Tuple

from PS_Libs.ImageEditingLib.image_models import CropRect, Point

Size = Tuple[int, int]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def _scale_factors(rendered_size: Size, natural_size: Size) -> Tuple[float, float]:
    rendered_width, rendered_height = rendered_size
    natural_width, natural_height = natural_size
    if rendered_width <= 0 or rendered_height <= 0:
        raise ValueError(f"rendered size must be positive, got {rendered_size}")
    return natural_width / rendered_width, natural_height / rendered_height


def scale_rect_to_natural(rect: CropRect, rendered_size: Size, natural_size: Size) -> CropRect:
    """
    Map a rendered-space rectangle to natural pixels.

    Example:
        >>> scale_rect_to_natural(CropRect(10, 10, 50, 50), (200, 200), (400, 400))
        CropRect(x=20, y=20, width=100, height=100)
    """
    scale_x, scale_y = _scale_factors(rendered_size, natural_size)
    return CropRect(
        x=round_half_up(rect.x * scale_x),
        y=round_half_up(rect.y * scale_y),
        width=round_half_up(rect.width * scale_x),
        height=round_half_up(rect.height * scale_y),
    )


def scale_points_to_natural(
    points: Iterable[Point],
    rendered_size: Size,
    natural_size: Size,
) -> Tuple[Point, ...]:
    """Map rendered-space lasso points to natural pixels."""
    scale_x, scale_y = _scale_factors(rendered_size, natural_size)
    return tuple(
        Point(round_half_up(p.x * scale_x), round_half_up(p.y * scale_y))
        for p in points
    )


def clamp_rect(rect: CropRect, width: int, height: int) -> CropRect:
    """Clamp a rectangle to [0, width] x [0, height]; may return an empty rect."""
    left = min(max(rect.x, 0), width)
    top = min(max(rect.y, 0), height)
    right = min(max(rect.right, left), width)
    bottom = min(max(rect.bottom, top), height)
    return CropRect(left, top, right - left, bottom - top)
