"""
AI quota governor.

Two independent budgets guard every AI-backed operation:

- Daily: starts at ``daily_limit`` and loses one credit per attempted
  operation. The first attempt after the window expires arms a new
  24 hour window. Persisted as ``{count, resetAt}``.
- Per minute: at most ``minute_limit`` attempts per rolling minute. The
  counter lives only in this session; a 1 Hz timer (``run_minute_timer``)
  clears it once its window has passed.

Both windows are re-armed lazily; nothing ticks while no one asks.
Credits are spent when an operation is attempted, not when it succeeds.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from PS_Libs.constants import (
    CREDITS_STORAGE_KEY,
    DAILY_WINDOW_SECONDS,
    FIELD_COUNT,
    FIELD_RESET_AT,
    INITIAL_DAILY_CREDITS,
    MINUTE_CREDIT_LIMIT,
    MINUTE_WINDOW_SECONDS,
    QUOTA_TIMER_INTERVAL,
)
from PS_Libs.errors import QuotaExceededError
from PS_Libs.ProjStoreLib.persistence import KeyValueStore

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class QuotaState:
    """Snapshot of both budgets; timestamps are epoch seconds."""
    daily_remaining: int
    daily_reset_at: Optional[float]
    minute_used: int
    minute_reset_at: Optional[float]


class QuotaGovernor:
    """
    Admission control for AI-backed operations.

    Example:
        >>> governor = QuotaGovernor(InMemoryStore())
        >>> governor.acquire()      # raises QuotaExceededError when exhausted
        >>> governor.daily_remaining
        249
    """

    def __init__(
        self,
        store: KeyValueStore,
        daily_limit: int = INITIAL_DAILY_CREDITS,
        minute_limit: int = MINUTE_CREDIT_LIMIT,
        clock: Clock = time.time,
    ):
        self._store = store
        self.daily_limit = daily_limit
        self.minute_limit = minute_limit
        self._clock = clock

        self._daily_remaining = daily_limit
        self._daily_reset_at: Optional[float] = None
        self._minute_used = 0
        self._minute_reset_at: Optional[float] = None

        self._load()

    def _load(self) -> None:
        stored = self._store.get(CREDITS_STORAGE_KEY)
        if stored is None:
            return

        try:
            count = int(stored[FIELD_COUNT])
            reset_at = stored.get(FIELD_RESET_AT)
            reset_at = float(reset_at) if reset_at is not None else None
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning(f"Discarding corrupt quota state {stored!r}: {exc}")
            self._store.remove(CREDITS_STORAGE_KEY)
            return

        if reset_at is not None and self._clock() > reset_at:
            logger.info("Daily AI quota window expired, restoring full budget")
            self._store.remove(CREDITS_STORAGE_KEY)
            return

        self._daily_remaining = max(0, count)
        self._daily_reset_at = reset_at

    def _persist(self) -> None:
        self._store.set(
            CREDITS_STORAGE_KEY,
            {FIELD_COUNT: self._daily_remaining, FIELD_RESET_AT: self._daily_reset_at},
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def daily_remaining(self) -> int:
        return self._daily_remaining

    @property
    def minute_used(self) -> int:
        return self._minute_used

    @property
    def minute_remaining(self) -> int:
        return max(0, self.minute_limit - self._minute_used)

    def snapshot(self) -> QuotaState:
        self.tick()
        return QuotaState(
            daily_remaining=self._daily_remaining,
            daily_reset_at=self._daily_reset_at,
            minute_used=self._minute_used,
            minute_reset_at=self._minute_reset_at,
        )

    # ------------------------------------------------------------------
    # Window maintenance
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Clear any budget whose window has passed."""
        now = self._clock()

        if self._minute_reset_at is not None and now > self._minute_reset_at:
            logger.debug("Minute AI quota window elapsed")
            self._minute_used = 0
            self._minute_reset_at = None

        if self._daily_reset_at is not None and now > self._daily_reset_at:
            logger.info("Daily AI quota window elapsed, restoring full budget")
            self._daily_remaining = self.daily_limit
            self._daily_reset_at = None
            self._store.remove(CREDITS_STORAGE_KEY)

    async def run_minute_timer(self, interval: float = QUOTA_TIMER_INTERVAL) -> None:
        """Re-check the windows every ``interval`` seconds until cancelled."""
        while True:
            self.tick()
            await asyncio.sleep(interval)

    # ------------------------------------------------------------------
    # Admission
    # ------------------------------------------------------------------

    def check_admission(self) -> None:
        """
        Reject an AI operation before it starts; spends nothing.

        Raises:
            QuotaExceededError: If either budget is exhausted
        """
        self.tick()
        if self._daily_remaining <= 0 or self.minute_remaining <= 0:
            logger.info(
                f"AI operation rejected: daily={self._daily_remaining}, "
                f"minute_used={self._minute_used}/{self.minute_limit}"
            )
            raise QuotaExceededError("AI usage limit reached")

    def record_attempt(self) -> None:
        """Spend one credit from each budget, arming windows as needed."""
        now = self._clock()

        self._daily_remaining = max(0, self._daily_remaining - 1)
        if self._daily_reset_at is None or now > self._daily_reset_at:
            self._daily_reset_at = now + DAILY_WINDOW_SECONDS

        self._minute_used += 1
        if self._minute_reset_at is None or now > self._minute_reset_at:
            self._minute_reset_at = now + MINUTE_WINDOW_SECONDS

        self._persist()
        logger.debug(
            f"AI credit spent: daily={self._daily_remaining}, "
            f"minute_used={self._minute_used}/{self.minute_limit}"
        )

    def acquire(self) -> None:
        """Admission check followed by spending a credit."""
        self.check_admission()
        self.record_attempt()

    def reset(self) -> None:
        """Restore the full daily budget and forget persisted state."""
        self._daily_remaining = self.daily_limit
        self._daily_reset_at = None
        self._store.remove(CREDITS_STORAGE_KEY)
        logger.info("Daily AI quota reset")
