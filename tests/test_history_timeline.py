"""
Unit tests for the undo/redo history timeline.
"""

import pytest

from PS_Libs.EditorLib.history_timeline import HistoryTimeline

from conftest import make_frame


@pytest.fixture
def frames():
    return {name: make_frame(10 + i, 10) for i, name in enumerate("ABCDE")}


@pytest.fixture
def timeline(frames):
    history = HistoryTimeline()
    history.load("A", frames["A"])
    history.commit("B", frames["B"])
    history.commit("C", frames["C"])
    return history


def labels(history):
    return [entry.label for entry in history.entries]


class TestEmptyTimeline:
    def test_initial_state(self):
        """Should start empty with no cursor."""
        history = HistoryTimeline()

        assert history.is_empty
        assert history.cursor == -1
        assert history.current() is None
        assert not history.can_undo
        assert not history.can_redo

    def test_commit_requires_original(self, frames):
        """Should refuse a commit before an original is loaded."""
        with pytest.raises(RuntimeError):
            HistoryTimeline().commit("A", frames["A"])

    def test_undo_redo_are_noops(self):
        """Should ignore undo and redo on an empty timeline."""
        history = HistoryTimeline()

        assert history.undo() is False
        assert history.redo() is False


class TestCommit:
    def test_commit_moves_cursor_to_end(self, timeline):
        """Should move the cursor to a new commit."""
        assert labels(timeline) == ["A", "B", "C"]
        assert timeline.cursor == 2
        assert timeline.current().label == "C"

    def test_commit_after_undo_truncates_redo(self, timeline, frames):
        """Should drop the redo tail when committing after undo."""
        timeline.undo()
        timeline.commit("D", frames["D"])

        assert labels(timeline) == ["A", "B", "D"]
        assert timeline.cursor == 2
        assert not timeline.can_redo

    def test_commit_after_go_to_original(self, timeline, frames):
        """Should drop later entries when committing from the original."""
        timeline.go_to(0)
        timeline.commit("E", frames["E"])

        assert labels(timeline) == ["A", "E"]

    def test_load_replaces_everything(self, timeline, frames):
        """Should replace the whole timeline on load."""
        timeline.load("Original", frames["E"])

        assert labels(timeline) == ["Original"]
        assert timeline.cursor == 0


class TestNavigation:
    """Tests for undo, redo and go_to."""

    def test_undo_then_redo_restores_same_frame(self, timeline, frames):
        """Should restore the same frame after undo and redo."""
        before = timeline.current().frame
        timeline.undo()
        timeline.redo()

        assert timeline.current().frame is before
        assert timeline.cursor == 2

    def test_undo_stops_at_original(self, timeline):
        """Should stop undo at the original."""
        assert timeline.undo()
        assert timeline.undo()
        assert not timeline.undo()
        assert timeline.cursor == 0

    def test_redo_stops_at_end(self, timeline):
        """Should stop redo at the latest entry."""
        assert not timeline.redo()

    def test_undo_keeps_entries(self, timeline):
        """Should keep entries after undo."""
        timeline.undo()

        assert labels(timeline) == ["A", "B", "C"]
        assert timeline.can_redo

    def test_go_to(self, timeline, frames):
        """Should jump to any entry."""
        entry = timeline.go_to(1)

        assert entry.label == "B"
        assert entry.frame is frames["B"]
        assert timeline.cursor == 1
        assert len(timeline) == 3

    def test_go_to_out_of_range(self, timeline):
        """Should raise for an index outside the timeline."""
        with pytest.raises(IndexError):
            timeline.go_to(3)
        with pytest.raises(IndexError):
            timeline.go_to(-1)

    def test_reset_to_original(self, timeline):
        """Should drop every entry after the original."""
        timeline.reset_to_original()

        assert labels(timeline) == ["A"]
        assert timeline.cursor == 0

    def test_clear(self, timeline):
        """Should empty the timeline."""
        timeline.clear()

        assert timeline.is_empty
        assert timeline.current() is None
