"""
Daily action counter.

Counts committed edits for display. Stored as ``{count, date}``; a stored
date other than today's local date means the count starts again at 0.
"""

import logging
from datetime import date
from typing import Callable

from PS_Libs.constants import ACTION_COUNTER_KEY, FIELD_COUNT, FIELD_DATE
from PS_Libs.ProjStoreLib.persistence import KeyValueStore

logger = logging.getLogger(__name__)


class ActionCounter:
    def __init__(self, store: KeyValueStore, today: Callable[[], date] = date.today):
        self._store = store
        self._today = today
        self._count = 0
        self._load()

    def _today_key(self) -> str:
        return self._today().isoformat()

    def _load(self) -> None:
        stored = self._store.get(ACTION_COUNTER_KEY)
        try:
            if stored is not None and stored[FIELD_DATE] == self._today_key():
                self._count = int(stored[FIELD_COUNT])
                return
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Discarding corrupt action counter {stored!r}: {exc}")
        self._write(0)

    def _write(self, count: int) -> None:
        self._count = count
        self._store.set(ACTION_COUNTER_KEY, {FIELD_COUNT: count, FIELD_DATE: self._today_key()})

    @property
    def count(self) -> int:
        """Today's count; 0 once the local date has rolled over."""
        stored = self._store.get(ACTION_COUNTER_KEY) or {}
        if stored.get(FIELD_DATE) != self._today_key():
            return 0
        return self._count

    def increment(self) -> int:
        stored = self._store.get(ACTION_COUNTER_KEY) or {}
        base = self._count if stored.get(FIELD_DATE) == self._today_key() else 0
        self._write(base + 1)
        return self._count

    def reset(self) -> None:
        self._write(0)
        logger.debug("Action counter reset")
