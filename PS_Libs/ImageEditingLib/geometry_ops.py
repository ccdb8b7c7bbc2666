"""
Core pixel geometry operations for Packshot Studio.

Every function takes a Frame and returns a new Frame; inputs are never
modified. All coordinates are natural image pixels.

Functions:
    detect_object_bounds: Find the tight box around non-background pixels
    object_margin_info: Distance from detected content to each canvas edge
    composite_with_margin: Re-center and scale content inside a margin
    fit_in_square: Pad the short side with white to make a square
    resize_to_fit: Aspect-preserving scale into a bounding box
    resize_to_square: resize_to_fit then pad to an exact square canvas
    rotate90: Rotate 90 degrees clockwise
    crop_rect: Extract a sub-rectangle
    crop_to_object_bounds: Crop to the detected content box
    blur_with_mask: Gaussian blur clipped to a lasso polygon
    adjust_color: Brightness/contrast correction
"""

import logging
from typing import Any, Sequence

import numpy as np

from PS_Libs.constants import (
    ALPHA_BACKGROUND_THRESHOLD,
    BACKGROUND_COLOR,
    DEFAULT_BOUNDS_TOLERANCE,
    MIME_PNG,
)
from PS_Libs.errors import ContextUnavailableError, TransformError
from PS_Libs.ImageEditingLib.blur_filter import apply_masked_blur, build_polygon_mask
from PS_Libs.ImageEditingLib.image_models import (
    CropRect,
    Frame,
    MarginInfo,
    ObjectBounds,
    Point,
)
from PS_Libs.pillow_compat import RESAMPLE, Image, ImageEnhance

logger = logging.getLogger(__name__)


def _rgba(frame: Frame) -> Any:
    """Return an RGBA copy of the frame's pixels."""
    try:
        return frame.image.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise ContextUnavailableError(f"Could not read frame pixels: {exc}") from exc


def _blank_canvas(width: int, height: int) -> Any:
    return Image.new("RGBA", (width, height), BACKGROUND_COLOR)


def _png_frame(image: Any) -> Frame:
    return Frame(image=image, mime=MIME_PNG)


# ============================================================================
# Object bounds
# ============================================================================

def _find_bounds(rgba: Any, tolerance: int) -> ObjectBounds:
    width, height = rgba.size
    pixels = np.asarray(rgba)

    # Mostly transparent or near-white pixels count as background
    transparent = pixels[:, :, 3] < ALPHA_BACKGROUND_THRESHOLD
    near_white = np.all(pixels[:, :, :3] > 255 - tolerance, axis=2)
    foreground = ~(transparent | near_white)

    rows = np.flatnonzero(foreground.any(axis=1))
    cols = np.flatnonzero(foreground.any(axis=0))
    if rows.size == 0:
        return ObjectBounds(0, 0, 0, 0, width, height, empty=True)

    return ObjectBounds(
        top=int(rows[0]),
        left=int(cols[0]),
        bottom=int(rows[-1]),
        right=int(cols[-1]),
        image_width=width,
        image_height=height,
        empty=False,
    )


def detect_object_bounds(
    frame: Frame,
    tolerance: int = DEFAULT_BOUNDS_TOLERANCE,
) -> ObjectBounds:
    """
    Find the bounding box of all non-background pixels.

    A pixel is background when its alpha is below 128 or all three color
    channels exceed ``255 - tolerance``.

    Args:
        frame: Frame to analyze
        tolerance: How far from pure white a pixel may be and still count
                   as background

    Returns:
        ObjectBounds with inclusive coordinates; ``empty`` is True when the
        whole frame is background
    """
    return _find_bounds(_rgba(frame), tolerance)


def object_margin_info(bounds: ObjectBounds) -> MarginInfo:
    """Convert object bounds into distances from each canvas edge."""
    if bounds.empty:
        return MarginInfo(top=0, right=0, bottom=0, left=0)
    return MarginInfo(
        top=bounds.top,
        right=bounds.image_width - bounds.right - 1,
        bottom=bounds.image_height - bounds.bottom - 1,
        left=bounds.left,
    )


# ============================================================================
# Compositing
# ============================================================================

def composite_with_margin(frame: Frame, margin: int) -> Frame:
    """
    Scale the detected object to fill the canvas minus ``margin`` on each side.

    The output has the input's dimensions and a white background. The object
    keeps its aspect ratio and is centered inside the margin-inset area.
    A blank white canvas is returned when the frame has no foreground or the
    margin leaves no room.

    Args:
        frame: Source frame
        margin: Margin in pixels on every side

    Returns:
        New Frame of the same size
    """
    source = _rgba(frame)
    width, height = source.size
    bounds = _find_bounds(source, DEFAULT_BOUNDS_TOLERANCE)
    canvas = _blank_canvas(width, height)

    if bounds.empty:
        logger.debug("composite_with_margin: no foreground, returning blank canvas")
        return _png_frame(canvas)

    if margin * 2 >= width or margin * 2 >= height:
        logger.debug(f"composite_with_margin: margin {margin} too large for {width}x{height}")
        return _png_frame(canvas)

    inner_width = width - margin * 2
    inner_height = height - margin * 2
    scale = min(inner_width / bounds.width, inner_height / bounds.height)
    scaled_width = bounds.width * scale
    scaled_height = bounds.height * scale

    x = margin + int((inner_width - scaled_width) // 2)
    y = margin + int((inner_height - scaled_height) // 2)

    target_size = (
        min(inner_width, max(1, round(scaled_width))),
        min(inner_height, max(1, round(scaled_height))),
    )
    obj = source.crop((bounds.left, bounds.top, bounds.right + 1, bounds.bottom + 1))
    obj = obj.resize(target_size, RESAMPLE)
    canvas.alpha_composite(obj, (x, y))
    return _png_frame(canvas)


def fit_in_square(frame: Frame) -> Frame:
    """Pad the shorter side with white so the result is max(w, h) square."""
    source = _rgba(frame)
    size = max(source.width, source.height)
    canvas = _blank_canvas(size, size)
    canvas.alpha_composite(
        source,
        ((size - source.width) // 2, (size - source.height) // 2),
    )
    return _png_frame(canvas)


# ============================================================================
# Resizing
# ============================================================================

def resize_to_fit(frame: Frame, max_width: int, max_height: int) -> Frame:
    """
    Scale the frame so it fits inside max_width x max_height.

    The limiting dimension matches the box exactly; the other one is
    truncated to a whole pixel.

    Raises:
        ValueError: If the box is not positive
    """
    if max_width <= 0 or max_height <= 0:
        raise ValueError(f"target box must be positive, got {max_width}x{max_height}")

    source = _rgba(frame)
    image_ratio = source.width / source.height
    target_ratio = max_width / max_height

    if image_ratio > target_ratio:
        new_width = max_width
        new_height = int(new_width / image_ratio)
    else:
        new_height = max_height
        new_width = int(new_height * image_ratio)

    size = (max(1, new_width), max(1, new_height))
    return _png_frame(source.resize(size, RESAMPLE))


def resize_to_square(frame: Frame, size: int) -> Frame:
    """Fit the frame inside size x size and pad it to exactly that square."""
    fitted = _rgba(resize_to_fit(frame, size, size))
    canvas = _blank_canvas(size, size)
    canvas.alpha_composite(
        fitted,
        ((size - fitted.width) // 2, (size - fitted.height) // 2),
    )
    return _png_frame(canvas)


# ============================================================================
# Rotate / crop
# ============================================================================

def rotate90(frame: Frame) -> Frame:
    """Rotate 90 degrees clockwise; width and height swap."""
    # Pillow's ROTATE_270 is a clockwise quarter turn
    return _png_frame(_rgba(frame).transpose(Image.Transpose.ROTATE_270))


def crop_rect(frame: Frame, rect: CropRect) -> Frame:
    """
    Extract ``rect`` as a new frame of size rect.width x rect.height.

    Raises:
        TransformError: If the rectangle is empty or leaves the frame
    """
    if rect.is_empty():
        raise TransformError(f"Crop rectangle is empty: {rect}")

    if rect.x < 0 or rect.y < 0 or rect.right > frame.width or rect.bottom > frame.height:
        raise TransformError(
            f"Crop rectangle {rect} exceeds frame bounds {frame.width}x{frame.height}"
        )

    return _png_frame(_rgba(frame).crop(rect.as_box()))


def crop_to_object_bounds(
    frame: Frame,
    tolerance: int = DEFAULT_BOUNDS_TOLERANCE,
) -> Frame:
    """Crop to the detected object; the input is returned as-is when empty."""
    source = _rgba(frame)
    bounds = _find_bounds(source, tolerance)
    if bounds.empty:
        return frame

    return _png_frame(
        source.crop((bounds.left, bounds.top, bounds.right + 1, bounds.bottom + 1))
    )


# ============================================================================
# Blur / color
# ============================================================================

def blur_with_mask(frame: Frame, polygon: Sequence[Point], intensity: float) -> Frame:
    """
    Gaussian-blur the area inside ``polygon``; pixels outside stay identical.

    The polygon is closed implicitly. Fewer than 3 points is a no-op and the
    input frame is returned unchanged.

    Args:
        frame: Source frame
        polygon: Lasso points in natural pixel coordinates
        intensity: Gaussian radius in pixels

    Raises:
        ValueError: If intensity is not in 0 < intensity <= 100 (checked only
                    when the polygon is actionable)
    """
    if len(polygon) < 3:
        return frame

    source = _rgba(frame)
    mask = build_polygon_mask(source.size, [p.as_tuple() for p in polygon])
    return _png_frame(apply_masked_blur(source, mask, intensity))


def adjust_color(frame: Frame, brightness: float = 100.0, contrast: float = 100.0) -> Frame:
    """
    Apply brightness then contrast, both given as percentages (100 = unchanged).

    Alpha is left untouched.

    Raises:
        ValueError: If either percentage is negative
    """
    if brightness < 0 or contrast < 0:
        raise ValueError(
            f"brightness and contrast must be >= 0, got {brightness}, {contrast}"
        )

    source = _rgba(frame)
    alpha = source.getchannel("A")
    rgb = source.convert("RGB")
    rgb = ImageEnhance.Brightness(rgb).enhance(brightness / 100.0)
    rgb = ImageEnhance.Contrast(rgb).enhance(contrast / 100.0)
    result = rgb.convert("RGBA")
    result.putalpha(alpha)
    return _png_frame(result)
