"""
Crop rectangle selection as a pure reducer.

``reduce_crop(state, event)`` turns one pointer event into the next
CropState. Gestures:

- Pointer-down on a corner handle starts resizing from that corner
- Pointer-down inside the rectangle starts moving it
- Pointer-down anywhere else starts drawing a new rectangle
- Pointer-move updates the rectangle for the gesture in progress
- Pointer-up / leave ends the gesture; the rectangle stays selected

All positions are clamped to the rendered image and every rectangle is
rounded to whole pixels.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

from PS_Libs.constants import HANDLE_HIT_RADIUS, MIN_CROP_SIZE, PRIMARY_BUTTON
from PS_Libs.ImageEditingLib.image_models import CropRect, Point
from PS_Libs.SelectionLib.coordinate_scaling import round_half_up
from PS_Libs.SelectionLib.selection_models import (
    Corner,
    CropAction,
    CropMode,
    CropState,
    PointerEvent,
    PointerKind,
)

logger = logging.getLogger(__name__)

CURSOR_DEFAULT = "crosshair"
CURSOR_MOVE = "move"
CURSOR_NWSE = "nwse-resize"
CURSOR_NESW = "nesw-resize"


def _rounded(x: float, y: float, width: float, height: float) -> CropRect:
    return CropRect(
        round_half_up(x),
        round_half_up(y),
        round_half_up(width),
        round_half_up(height),
    )


def _clamp_point(state: CropState, x: float, y: float) -> Tuple[float, float]:
    return (
        max(0.0, min(x, state.container_width)),
        max(0.0, min(y, state.container_height)),
    )


def _corner_position(rect: CropRect, corner: Corner) -> Tuple[int, int]:
    return {
        Corner.TOP_LEFT: (rect.x, rect.y),
        Corner.TOP_RIGHT: (rect.right, rect.y),
        Corner.BOTTOM_LEFT: (rect.x, rect.bottom),
        Corner.BOTTOM_RIGHT: (rect.right, rect.bottom),
    }[corner]


def hit_corner(
    rect: Optional[CropRect],
    x: float,
    y: float,
    radius: float = HANDLE_HIT_RADIUS,
) -> Optional[Corner]:
    """Return the handle under (x, y), preferring the nearest one."""
    if rect is None:
        return None

    best = None
    best_distance = None
    for corner in Corner:
        cx, cy = _corner_position(rect, corner)
        if abs(x - cx) < radius and abs(y - cy) < radius:
            distance = (x - cx) ** 2 + (y - cy) ** 2
            if best_distance is None or distance < best_distance:
                best, best_distance = corner, distance
    return best


def cursor_for(state: CropState, x: float, y: float) -> str:
    """Hover cursor for an idle crop selection at rendered position (x, y)."""
    rect = state.rect
    if rect is None or state.action is not CropAction.IDLE:
        return CURSOR_DEFAULT

    x, y = _clamp_point(state, x, y)
    corner = hit_corner(rect, x, y)
    if corner in (Corner.TOP_LEFT, Corner.BOTTOM_RIGHT):
        return CURSOR_NWSE
    if corner in (Corner.TOP_RIGHT, Corner.BOTTOM_LEFT):
        return CURSOR_NESW
    if rect.x < x < rect.right and rect.y < y < rect.bottom:
        return CURSOR_MOVE
    return CURSOR_DEFAULT


# ============================================================================
# Gesture handlers
# ============================================================================

def _begin(state: CropState, event: PointerEvent) -> CropState:
    if event.button != PRIMARY_BUTTON:
        return state

    x, y = _clamp_point(state, event.x, event.y)
    rect = state.rect

    corner = hit_corner(rect, x, y)
    if corner is not None:
        return replace(state, action=CropAction.RESIZING, corner=corner)

    if rect is not None and rect.contains(x, y):
        return replace(
            state,
            action=CropAction.MOVING,
            corner=None,
            move_offset=Point(x - rect.x, y - rect.y),
        )

    return replace(
        state,
        action=CropAction.DRAWING,
        corner=None,
        anchor=Point(x, y),
        rect=_rounded(x, y, 0, 0),
    )


def _draw(state: CropState, x: float, y: float) -> CropRect:
    ax, ay = state.anchor.x, state.anchor.y

    if state.mode is CropMode.FREE:
        return _rounded(min(ax, x), min(ay, y), abs(x - ax), abs(y - ay))

    # Square: grow away from the anchor, limited by the room on that side
    room_x = ax if x < ax else state.container_width - ax
    room_y = ay if y < ay else state.container_height - ay
    size = min(max(abs(x - ax), abs(y - ay)), room_x, room_y)
    left = ax - size if x < ax else ax
    top = ay - size if y < ay else ay
    return _rounded(left, top, size, size)


def _move(state: CropState, x: float, y: float) -> CropRect:
    rect = state.rect
    new_x = x - state.move_offset.x
    new_y = y - state.move_offset.y
    new_x = max(0, min(new_x, state.container_width - rect.width))
    new_y = max(0, min(new_y, state.container_height - rect.height))
    return _rounded(new_x, new_y, rect.width, rect.height)


def _resize(state: CropState, x: float, y: float) -> CropRect:
    rect = state.rect
    corner = state.corner

    # The opposite corner stays put; dir_* point from it toward the handle
    dir_x = 1 if corner in (Corner.TOP_RIGHT, Corner.BOTTOM_RIGHT) else -1
    dir_y = 1 if corner in (Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT) else -1
    fixed_x = rect.x if dir_x > 0 else rect.right
    fixed_y = rect.y if dir_y > 0 else rect.bottom

    reach_x = (x - fixed_x) * dir_x
    reach_y = (y - fixed_y) * dir_y
    room_x = state.container_width - fixed_x if dir_x > 0 else fixed_x
    room_y = state.container_height - fixed_y if dir_y > 0 else fixed_y

    if state.mode is CropMode.SQUARE:
        size = min(max(MIN_CROP_SIZE, min(reach_x, reach_y)), room_x, room_y)
        width = height = size
    else:
        width = min(max(MIN_CROP_SIZE, reach_x), room_x)
        height = min(max(MIN_CROP_SIZE, reach_y), room_y)

    left = fixed_x if dir_x > 0 else fixed_x - width
    top = fixed_y if dir_y > 0 else fixed_y - height
    return _rounded(left, top, width, height)


def _drag(state: CropState, event: PointerEvent) -> CropState:
    if state.action is CropAction.IDLE:
        return state

    x, y = _clamp_point(state, event.x, event.y)
    if state.action is CropAction.DRAWING:
        return replace(state, rect=_draw(state, x, y))

    if state.rect is None:
        return state
    if state.action is CropAction.MOVING:
        return replace(state, rect=_move(state, x, y))
    return replace(state, rect=_resize(state, x, y))


def reduce_crop(state: CropState, event: PointerEvent) -> CropState:
    """Apply one pointer event to a crop selection and return the new state."""
    if event.kind is PointerKind.DOWN:
        return _begin(state, event)
    if event.kind is PointerKind.MOVE:
        return _drag(state, event)

    if state.action is CropAction.IDLE:
        return state
    logger.debug(f"Crop gesture {state.action.value} ended with {state.rect}")
    return replace(state, action=CropAction.IDLE, corner=None)
