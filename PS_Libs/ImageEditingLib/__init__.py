"""
ImageEditingLib - Core image editing functionality

This module provides the pixel geometry operations, masked blur, frame
models and frame encoding used by the Packshot Studio editor.
"""

from PS_Libs.ImageEditingLib.image_models import (
    CropRect,
    Frame,
    MarginInfo,
    ObjectBounds,
    Point,
    RgbaColor,
)
from PS_Libs.ImageEditingLib.geometry_ops import (
    adjust_color,
    blur_with_mask,
    composite_with_margin,
    crop_rect,
    crop_to_object_bounds,
    detect_object_bounds,
    fit_in_square,
    object_margin_info,
    resize_to_fit,
    resize_to_square,
    rotate90,
)
from PS_Libs.ImageEditingLib.frame_codec import (
    SaveCounter,
    decode_ai_result,
    decode_upload,
    download_filename,
    encode_frame,
)

__all__ = [
    "CropRect",
    "Frame",
    "MarginInfo",
    "ObjectBounds",
    "Point",
    "RgbaColor",
    "adjust_color",
    "blur_with_mask",
    "composite_with_margin",
    "crop_rect",
    "crop_to_object_bounds",
    "detect_object_bounds",
    "fit_in_square",
    "object_margin_info",
    "resize_to_fit",
    "resize_to_square",
    "rotate90",
    "SaveCounter",
    "decode_ai_result",
    "decode_upload",
    "download_filename",
    "encode_frame",
]
