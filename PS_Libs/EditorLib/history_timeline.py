"""
Linear undo/redo history.

The timeline is an ordered list of labelled frames plus a cursor. Undo and
redo only move the cursor; committing after an undo drops every entry past
the cursor, so there is never more than one path to redo along.
Entry 0 is the original upload and is only removed by a reset or a new
upload.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PS_Libs.ImageEditingLib.image_models import Frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    label: str
    frame: Frame


class HistoryTimeline:
    """
    Cursor-addressable edit history.

    Example:
        >>> timeline = HistoryTimeline()
        >>> timeline.load("Original", original)
        >>> timeline.commit("Rotate 90°", rotated)
        >>> timeline.undo()
        True
        >>> timeline.current().label
        'Original'
    """

    def __init__(self):
        self._entries: List[HistoryEntry] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        """Index of the current entry; -1 when no image is loaded."""
        return self._cursor

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def current(self) -> Optional[HistoryEntry]:
        if not self._entries:
            return None
        return self._entries[self._cursor]

    def load(self, label: str, frame: Frame) -> None:
        """Replace the whole timeline with a single original entry."""
        self._entries = [HistoryEntry(label, frame)]
        self._cursor = 0
        logger.debug(f"History loaded with original '{label}' ({frame.width}x{frame.height})")

    def clear(self) -> None:
        self._entries = []
        self._cursor = -1

    def commit(self, label: str, frame: Frame) -> HistoryEntry:
        """
        Append a new entry after the cursor, discarding any redo entries.

        Raises:
            RuntimeError: If no original has been loaded
        """
        if not self._entries:
            raise RuntimeError("Cannot commit to an empty history; load an image first")

        dropped = len(self._entries) - self._cursor - 1
        entry = HistoryEntry(label, frame)
        self._entries = self._entries[:self._cursor + 1] + [entry]
        self._cursor = len(self._entries) - 1
        logger.debug(f"History commit '{label}' at {self._cursor} (dropped {dropped} redo entries)")
        return entry

    def undo(self) -> bool:
        """Step back one entry; returns False when already at the original."""
        if self._cursor <= 0:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        """Step forward one entry; returns False when already at the end."""
        if not self.can_redo:
            return False
        self._cursor += 1
        return True

    def go_to(self, index: int) -> HistoryEntry:
        """
        Move the cursor to any existing entry without changing the list.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"History index {index} out of range 0..{len(self._entries) - 1}")
        self._cursor = index
        return self._entries[index]

    def reset_to_original(self) -> None:
        """Keep only the original entry."""
        if not self._entries:
            return
        self._entries = self._entries[:1]
        self._cursor = 0
