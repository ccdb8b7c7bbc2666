"""
Unit tests for SelectionController.

Tests cover:
- Mutually exclusive crop and lasso modes
- Handing over selections in natural pixels
- Cancel semantics
"""

import pytest

from PS_Libs.ImageEditingLib.image_models import CropRect, Point
from PS_Libs.SelectionLib.crop_selector import CURSOR_DEFAULT, CURSOR_MOVE
from PS_Libs.SelectionLib.selection_controller import SelectionController, SelectionMode
from PS_Libs.SelectionLib.selection_models import CropMode, PointerEvent


def drag(controller, start, end):
    controller.handle(PointerEvent.down(*start))
    controller.handle(PointerEvent.move(*end))
    controller.handle(PointerEvent.up(*end))


@pytest.fixture
def controller():
    return SelectionController(200, 200)


class TestModes:
    def test_starts_without_mode(self, controller):
        """Should start without a selection mode."""
        assert controller.mode is SelectionMode.NONE
        assert not controller.is_cropping
        assert not controller.is_blurring

    def test_crop_and_lasso_are_exclusive(self, controller):
        """Should keep crop and lasso exclusive."""
        controller.start_crop()
        drag(controller, (10, 10), (60, 60))
        controller.start_lasso()

        assert controller.is_blurring
        assert not controller.is_cropping
        assert controller.crop_rect is None

    def test_start_crop_clears_lasso(self, controller):
        """Should clear the lasso when crop starts."""
        controller.start_lasso()
        drag(controller, (10, 10), (60, 60))
        controller.start_crop(CropMode.SQUARE)

        assert controller.lasso_points == ()
        assert controller.crop_state.mode is CropMode.SQUARE

    def test_events_ignored_without_mode(self, controller):
        """Should ignore events without a mode."""
        drag(controller, (10, 10), (60, 60))

        assert controller.crop_rect is None
        assert controller.lasso_points == ()

    def test_cancel(self, controller):
        """Should clear the selection on cancel."""
        controller.start_crop()
        drag(controller, (10, 10), (60, 60))
        controller.cancel()

        assert controller.mode is SelectionMode.NONE
        assert controller.crop_rect is None

    def test_set_crop_mode_keeps_rect(self, controller):
        """Should keep the rectangle when the crop mode changes."""
        controller.start_crop()
        drag(controller, (10, 10), (60, 40))
        controller.set_crop_mode(CropMode.SQUARE)

        assert controller.crop_state.mode is CropMode.SQUARE
        assert controller.crop_rect == CropRect(10, 10, 50, 30)


class TestTakeCrop:
    """Tests for take_crop."""

    def test_scaled_to_natural(self, controller):
        """Should scale the crop to natural pixels."""
        controller.start_crop()
        drag(controller, (10, 10), (60, 60))

        assert controller.take_crop((400, 400)) == CropRect(20, 20, 100, 100)
        assert controller.mode is SelectionMode.NONE

    def test_no_drag_is_cancel(self, controller):
        """Should cancel without a drag."""
        controller.start_crop()

        assert controller.take_crop((400, 400)) is None
        assert controller.mode is SelectionMode.NONE

    def test_click_without_drag_is_cancel(self, controller):
        """Should cancel a click without a drag."""
        controller.start_crop()
        controller.handle(PointerEvent.down(10, 10))
        controller.handle(PointerEvent.up(10, 10))

        assert controller.take_crop((400, 400)) is None

    def test_not_in_crop_mode(self, controller):
        """Should cancel outside crop mode."""
        assert controller.take_crop((400, 400)) is None

    def test_follows_rendered_size_changes(self, controller):
        """Should follow rendered size changes."""
        controller.set_rendered_size(100, 100)
        controller.start_crop()
        drag(controller, (10, 10), (60, 60))

        assert controller.take_crop((400, 400)) == CropRect(40, 40, 200, 200)


class TestTakeLasso:
    def test_scaled_points(self, controller):
        """Should scale lasso points to natural pixels."""
        controller.start_lasso()
        controller.handle(PointerEvent.down(10, 10))
        controller.handle(PointerEvent.move(50, 10))
        controller.handle(PointerEvent.move(50, 50))
        controller.handle(PointerEvent.up())

        points = controller.take_lasso((400, 100))

        assert points == (Point(20, 5), Point(100, 5), Point(100, 25))
        assert controller.mode is SelectionMode.NONE

    def test_too_few_points_is_cancel(self, controller):
        """Should cancel with too few points."""
        controller.start_lasso()
        controller.handle(PointerEvent.down(10, 10))
        controller.handle(PointerEvent.move(50, 10))

        assert controller.take_lasso((400, 400)) is None
        assert controller.mode is SelectionMode.NONE


class TestCursor:
    def test_move_cursor_over_selection(self, controller):
        """Should show the move cursor over the selection."""
        controller.start_crop()
        drag(controller, (10, 10), (110, 110))

        assert controller.cursor_at(60, 60) == CURSOR_MOVE

    def test_default_outside_crop_mode(self, controller):
        """Should show the default cursor outside crop mode."""
        assert controller.cursor_at(60, 60) == CURSOR_DEFAULT
