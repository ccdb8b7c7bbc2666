"""
Blur lasso selection as a pure reducer.

Pointer-down starts a new path, pointer-move appends points while the
gesture is active (no resampling), pointer-up or leave freezes the path.
The path is only closed when the blur is applied.
"""

from dataclasses import replace

from PS_Libs.constants import PRIMARY_BUTTON
from PS_Libs.ImageEditingLib.image_models import Point
from PS_Libs.SelectionLib.selection_models import LassoState, PointerEvent, PointerKind


def reduce_lasso(state: LassoState, event: PointerEvent) -> LassoState:
    """Apply one pointer event to a lasso and return the new state."""
    if event.kind is PointerKind.DOWN:
        if event.button != PRIMARY_BUTTON:
            return state
        return LassoState(points=(Point(event.x, event.y),), drawing=True)

    if event.kind is PointerKind.MOVE:
        if not state.drawing:
            return state
        return replace(state, points=state.points + (Point(event.x, event.y),))

    if not state.drawing:
        return state
    return replace(state, drawing=False)
