from __future__ import annotations

import logging
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, recipients: Iterable[int], title: str, body: str, payload: dict) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Default dispatcher: records the message in the application log."""

    def notify(self, recipients: Iterable[int], title: str, body: str, payload: dict) -> None:
        logger.info("notify %s: %s - %s %s", list(recipients), title, body, payload)
