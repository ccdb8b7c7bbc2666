"""
Unit tests for status notifications.
"""

from PS_Libs.constants import STATUS_ERROR, STATUS_SUCCESS
from PS_Libs.EditorLib.status import StatusNotifier, status_text


class TestStatusText:
    def test_formats_params(self):
        """Should format message parameters."""
        assert status_text("resizeSuccess", size=500) == "Resized to 500px (Auto Margin)."

    def test_error_messages(self):
        """Should map error keys to messages."""
        assert status_text("quotaExceeded") == "AI limit exceeded."

    def test_unknown_key_falls_back(self):
        """Should fall back to a generic error for unknown keys."""
        assert status_text("nope") == "Error."

    def test_history_restored(self):
        """Should name the restored action."""
        assert status_text("historyRestored", action="Crop") == 'Restored: "Crop"'


class TestStatusNotifier:
    """Tests for StatusNotifier."""

    def test_success_message(self, clock):
        """Should post a success message."""
        notifier = StatusNotifier(clock=clock)
        notifier.success("rotateSuccess")

        assert notifier.current.text == "Rotated 90°."
        assert notifier.current.kind == STATUS_SUCCESS

    def test_error_message(self, clock):
        """Should post an error message."""
        notifier = StatusNotifier(clock=clock)
        notifier.error("noImageData")

        assert notifier.current.kind == STATUS_ERROR

    def test_auto_dismiss(self, clock):
        """Should dismiss after the timeout."""
        notifier = StatusNotifier(duration=3.0, clock=clock)
        notifier.success("saveSuccess")

        clock.advance(2.9)
        assert notifier.current is not None

        clock.advance(0.2)
        assert notifier.current is None

    def test_new_message_replaces_old(self, clock):
        """Should replace the old message."""
        notifier = StatusNotifier(clock=clock)
        notifier.success("saveSuccess")
        clock.advance(2)
        notifier.success("undoSuccess")
        clock.advance(2)

        assert notifier.current.text == "Undone."

    def test_dismiss(self, clock):
        """Should dismiss on request."""
        notifier = StatusNotifier(clock=clock)
        notifier.success("saveSuccess")
        notifier.dismiss()

        assert notifier.current is None
