"""
Selection data models for Packshot Studio.

Pointer input is modelled as an explicit stream of PointerEvent values and
every selection state is an immutable dataclass, so gestures can be replayed
through the reducers without any rendering surface.

Classes:
    PointerKind: down / move / up / leave
    PointerEvent: One pointer sample in rendered-pixel coordinates
    CropMode: Square or free rectangle drawing
    CropAction: What the current crop gesture is doing
    Corner: Resize handle identifiers
    CropState: Crop selection state
    LassoState: Blur lasso state
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from PS_Libs.constants import MIN_LASSO_POINTS, PRIMARY_BUTTON
from PS_Libs.ImageEditingLib.image_models import CropRect, Point


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    x: float
    y: float
    button: int = PRIMARY_BUTTON

    @classmethod
    def down(cls, x: float, y: float, button: int = PRIMARY_BUTTON) -> "PointerEvent":
        return cls(PointerKind.DOWN, x, y, button)

    @classmethod
    def move(cls, x: float, y: float) -> "PointerEvent":
        return cls(PointerKind.MOVE, x, y)

    @classmethod
    def up(cls, x: float = 0.0, y: float = 0.0) -> "PointerEvent":
        return cls(PointerKind.UP, x, y)


class CropMode(Enum):
    SQUARE = "square"
    FREE = "free"


class CropAction(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    MOVING = "moving"
    RESIZING = "resizing"


class Corner(Enum):
    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"


@dataclass(frozen=True)
class CropState:
    """Crop selection over a rendered image of container_width x container_height.

    Attributes:
        container_width: Rendered image width in pixels
        container_height: Rendered image height in pixels
        mode: Square or free drawing
        action: Gesture in progress
        corner: Handle being dragged while resizing
        rect: Current (or last committed) rectangle
        anchor: Pointer-down position while drawing
        move_offset: Pointer offset from the rectangle origin while moving
    """
    container_width: int
    container_height: int
    mode: CropMode = CropMode.FREE
    action: CropAction = CropAction.IDLE
    corner: Optional[Corner] = None
    rect: Optional[CropRect] = None
    anchor: Point = Point(0, 0)
    move_offset: Point = Point(0, 0)

    @property
    def has_selection(self) -> bool:
        return self.rect is not None and not self.rect.is_empty()


@dataclass(frozen=True)
class LassoState:
    points: Tuple[Point, ...] = field(default_factory=tuple)
    drawing: bool = False

    @property
    def is_actionable(self) -> bool:
        return len(self.points) >= MIN_LASSO_POINTS
