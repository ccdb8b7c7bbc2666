"""
Transient status notifications.

At most one message is visible; it disappears on its own after a fixed
duration, and posting a new one replaces it.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from PS_Libs.constants import (
    ERROR_MESSAGES,
    STATUS_DURATION_SECONDS,
    STATUS_ERROR,
    STATUS_MESSAGES,
    STATUS_SUCCESS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: str
    posted_at: float


def status_text(key: str, **params) -> str:
    """Look up a status or error text by key, falling back to the generic error."""
    template = STATUS_MESSAGES.get(key) or ERROR_MESSAGES.get(key) or ERROR_MESSAGES["default"]
    return template.format(**params)


class StatusNotifier:
    def __init__(
        self,
        duration: float = STATUS_DURATION_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.duration = duration
        self._clock = clock
        self._message: Optional[StatusMessage] = None

    def show(self, text: str, kind: str = STATUS_SUCCESS) -> StatusMessage:
        self._message = StatusMessage(text, kind, self._clock())
        if kind == STATUS_ERROR:
            logger.warning(f"Status: {text}")
        else:
            logger.info(f"Status: {text}")
        return self._message

    def success(self, key: str, **params) -> StatusMessage:
        return self.show(status_text(key, **params), STATUS_SUCCESS)

    def error(self, key: str, **params) -> StatusMessage:
        return self.show(status_text(key, **params), STATUS_ERROR)

    @property
    def current(self) -> Optional[StatusMessage]:
        """The visible message, or None once it has been dismissed."""
        if self._message is None:
            return None
        if self._clock() - self._message.posted_at >= self.duration:
            self._message = None
        return self._message

    def dismiss(self) -> None:
        self._message = None
