"""
SelectionLib - Pointer-driven selection

This module provides the crop rectangle and blur lasso state machines,
the controller that switches between them, and rendered-to-natural
coordinate scaling.
"""

from PS_Libs.SelectionLib.selection_models import (
    Corner,
    CropAction,
    CropMode,
    CropState,
    LassoState,
    PointerEvent,
    PointerKind,
)
from PS_Libs.SelectionLib.crop_selector import cursor_for, hit_corner, reduce_crop
from PS_Libs.SelectionLib.lasso_selector import reduce_lasso
from PS_Libs.SelectionLib.coordinate_scaling import (
    clamp_rect,
    round_half_up,
    scale_points_to_natural,
    scale_rect_to_natural,
)
from PS_Libs.SelectionLib.selection_controller import SelectionController, SelectionMode

__all__ = [
    "Corner",
    "CropAction",
    "CropMode",
    "CropState",
    "LassoState",
    "PointerEvent",
    "PointerKind",
    "cursor_for",
    "hit_corner",
    "reduce_crop",
    "reduce_lasso",
    "clamp_rect",
    "round_half_up",
    "scale_points_to_natural",
    "scale_rect_to_natural",
    "SelectionController",
    "SelectionMode",
]
