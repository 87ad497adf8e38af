from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)

ChangeListener = Callable[[int], None]


class ChangeNotifier:
    """In-process "records for user X may have changed" channel.

    Callers register a listener per user and re-run their aggregation when it
    fires. The notifier keeps no record data.
    """

    def __init__(self):
        self._listeners: dict[int, list[ChangeListener]] = defaultdict(list)

    def subscribe(self, user_id: int, listener: ChangeListener) -> Callable[[], None]:
        self._listeners[int(user_id)].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(int(user_id), [])
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(int(user_id), None)

        return unsubscribe

    def notify(self, user_id: int) -> None:
        for listener in list(self._listeners.get(int(user_id), [])):
            try:
                listener(int(user_id))
            except Exception:
                logger.exception("change listener failed for user_id=%s", user_id)

    def listener_count(self, user_id: int) -> int:
        return len(self._listeners.get(int(user_id), []))
