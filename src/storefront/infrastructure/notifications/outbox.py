"""Notification outbox.

Events are appended, one JSON object per line, to an outbox file that a
separate mailer drains.  Delivery is at-most-once: an event that fails
to be written is logged by the caller and dropped.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from storefront.domain.ports import NotificationDispatcher, OrderEvent

logger = logging.getLogger(__name__)


class OutboxNotificationDispatcher(NotificationDispatcher):

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._lock = threading.Lock()

    def dispatch(self, event: OrderEvent) -> None:
        record = {
            "type": event.type.value,
            "order_id": event.order_id,
            "order_number": event.order_number,
            "user_id": event.user_id,
            "total_amount": event.total_amount,
            "occurred_at": event.occurred_at.isoformat(),
        }
        with self._lock:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(record) + "\n")
        logger.info(
            "notification queued",
            extra={"event": event.type.value, "order_number": event.order_number},
        )

    def pending(self) -> list[dict]:
        """Events written so far, oldest first."""
        if not self._file_path.exists():
            return []
        with self._file_path.open(encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
