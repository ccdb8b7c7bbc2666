"""
Blur Filter Operations.

Provides the blur primitives used by the lasso blur tool:
- Gaussian blur: Natural smooth blur with circular falloff
- Polygon mask: Filled lasso polygon rendered as an 8-bit mask
- Masked blur: Gaussian blur composited strictly inside a mask

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.png").convert("RGBA")
    >>>
    >>> # Whole-image Gaussian blur
    >>> blurred = apply_gaussian_blur(img, radius=10)
    >>>
    >>> # Blur only inside a triangle
    >>> mask = build_polygon_mask(img.size, [(10, 10), (90, 10), (50, 80)])
    >>> result = apply_masked_blur(img, mask, radius=5)
"""

from typing import Any, Sequence, Tuple

from PS_Libs.pillow_compat import Image, ImageDraw, ImageFilter


# ============================================================================
# Gaussian Blur
# ============================================================================

def apply_gaussian_blur(
    image: Any,
    radius: float = 5.0,
) -> Any:
    """
    Apply Gaussian blur to image.

    Args:
        image: PIL Image
        radius: Blur radius in pixels (1-100, typical 1-50)
                Higher values = stronger blur

    Returns:
        Blurred PIL Image (same mode as input)

    Raises:
        ValueError: If radius <= 0 or > 100
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if not (0 < radius <= 100):
        raise ValueError(f"radius must be 0 < r <= 100, got {radius}")

    # Palette images cannot be filtered directly
    if image.mode == "P":
        image = image.convert("RGBA")

    return image.filter(ImageFilter.GaussianBlur(radius=radius))


# ============================================================================
# Polygon Mask
# ============================================================================

def build_polygon_mask(
    size: Tuple[int, int],
    points: Sequence[Tuple[float, float]],
) -> Any:
    """
    Render a closed, filled polygon into an "L" mode mask.

    The last point is joined back to the first. Pixels inside the polygon
    are 255, everything else 0.

    Args:
        size: (width, height) of the mask
        points: Polygon vertices in pixel coordinates (at least 3)

    Returns:
        PIL Image in mode "L"

    Raises:
        ValueError: If fewer than 3 points are given
    """
    if len(points) < 3:
        raise ValueError(f"polygon needs at least 3 points, got {len(points)}")

    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).polygon([tuple(p) for p in points], fill=255)
    return mask


# ============================================================================
# Masked Blur
# ============================================================================

def apply_masked_blur(
    image: Any,
    mask: Any,
    radius: float = 5.0,
) -> Any:
    """
    Blur image only where mask is set.

    The whole image is blurred (so edge samples come from real neighbours),
    then the blurred copy is composited over the original through the mask.
    Pixels where the mask is 0 are copied unchanged from the original.

    Args:
        image: PIL Image
        mask: "L" mode PIL Image of the same size
        radius: Gaussian blur radius in pixels

    Returns:
        New PIL Image (RGBA)

    Raises:
        ValueError: If mask size differs from image size or radius invalid
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if mask.size != image.size:
        raise ValueError(
            f"mask size {mask.size} does not match image size {image.size}"
        )

    original = image.convert("RGBA")
    blurred = apply_gaussian_blur(original, radius)
    return Image.composite(blurred, original, mask)
