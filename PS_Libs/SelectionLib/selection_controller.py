"""
Interactive selection controller.

Owns the two mutually exclusive selection modes (crop rectangle and blur
lasso), feeds pointer events to the matching reducer, and hands the
finished selection over in natural pixel coordinates.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional, Tuple

from PS_Libs.ImageEditingLib.image_models import CropRect, Point
from PS_Libs.SelectionLib.coordinate_scaling import (
    Size,
    clamp_rect,
    scale_points_to_natural,
    scale_rect_to_natural,
)
from PS_Libs.SelectionLib.crop_selector import CURSOR_DEFAULT, cursor_for, reduce_crop
from PS_Libs.SelectionLib.lasso_selector import reduce_lasso
from PS_Libs.SelectionLib.selection_models import (
    CropMode,
    CropState,
    LassoState,
    PointerEvent,
)

logger = logging.getLogger(__name__)


class SelectionMode(Enum):
    NONE = "none"
    CROP = "crop"
    LASSO = "lasso"


class SelectionController:
    """
    Routes pointer events to the active selection.

    Example:
        >>> controller = SelectionController(200, 200)
        >>> controller.start_crop()
        >>> for event in (PointerEvent.down(10, 10), PointerEvent.move(60, 60), PointerEvent.up()):
        ...     controller.handle(event)
        >>> controller.take_crop((400, 400))
        CropRect(x=20, y=20, width=100, height=100)
    """

    def __init__(self, rendered_width: int = 0, rendered_height: int = 0):
        self._rendered_size: Size = (rendered_width, rendered_height)
        self._mode = SelectionMode.NONE
        self._crop = CropState(rendered_width, rendered_height)
        self._lasso = LassoState()

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @property
    def rendered_size(self) -> Size:
        return self._rendered_size

    @property
    def crop_state(self) -> CropState:
        return self._crop

    @property
    def lasso_state(self) -> LassoState:
        return self._lasso

    @property
    def is_cropping(self) -> bool:
        return self._mode is SelectionMode.CROP

    @property
    def is_blurring(self) -> bool:
        return self._mode is SelectionMode.LASSO

    def set_rendered_size(self, width: int, height: int) -> None:
        """Update the on-screen image size (responsive layout changed)."""
        self._rendered_size = (width, height)
        self._crop = replace(self._crop, container_width=width, container_height=height)

    # ------------------------------------------------------------------
    # Mode switching
    # ------------------------------------------------------------------

    def start_crop(self, mode: CropMode = CropMode.FREE) -> None:
        width, height = self._rendered_size
        self._crop = CropState(width, height, mode=mode)
        self._lasso = LassoState()
        self._mode = SelectionMode.CROP
        logger.debug(f"Crop selection started ({mode.value})")

    def set_crop_mode(self, mode: CropMode) -> None:
        self._crop = replace(self._crop, mode=mode)

    def start_lasso(self) -> None:
        width, height = self._rendered_size
        self._crop = CropState(width, height)
        self._lasso = LassoState()
        self._mode = SelectionMode.LASSO
        logger.debug("Lasso selection started")

    def cancel(self) -> None:
        width, height = self._rendered_size
        self._crop = CropState(width, height, mode=self._crop.mode)
        self._lasso = LassoState()
        self._mode = SelectionMode.NONE

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def handle(self, event: PointerEvent) -> None:
        """Feed one pointer event to the active selection; ignored when none."""
        if self._mode is SelectionMode.CROP:
            self._crop = reduce_crop(self._crop, event)
        elif self._mode is SelectionMode.LASSO:
            self._lasso = reduce_lasso(self._lasso, event)

    def cursor_at(self, x: float, y: float) -> str:
        if self._mode is not SelectionMode.CROP:
            return CURSOR_DEFAULT
        return cursor_for(self._crop, x, y)

    @property
    def crop_rect(self) -> Optional[CropRect]:
        """Current crop rectangle in rendered pixels, if non-empty."""
        return self._crop.rect if self._crop.has_selection else None

    @property
    def lasso_points(self) -> Tuple[Point, ...]:
        return self._lasso.points

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def take_crop(self, natural_size: Size) -> Optional[CropRect]:
        """
        Leave crop mode and return the selection in natural pixels.

        Returns None (a cancel) when crop mode is not active or nothing
        non-empty was selected.
        """
        rect = self.crop_rect if self.is_cropping else None
        self.cancel()
        if rect is None:
            return None

        natural = scale_rect_to_natural(rect, self._rendered_size, natural_size)
        natural = clamp_rect(natural, *natural_size)
        return None if natural.is_empty() else natural

    def take_lasso(self, natural_size: Size) -> Optional[Tuple[Point, ...]]:
        """
        Leave lasso mode and return the path in natural pixels.

        Returns None (a cancel) when fewer than 3 points were collected.
        """
        lasso = self._lasso if self.is_blurring else LassoState()
        self.cancel()
        if not lasso.is_actionable:
            return None
        return scale_points_to_natural(lasso.points, self._rendered_size, natural_size)
