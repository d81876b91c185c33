"""Bounded security event journal, newest entry first"""

import itertools
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Collection, Deque, List, Optional

from jarvis.config import SECURITY_LOG_LIMIT
from jarvis.models import SecurityLogEntry, Severity

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SecurityLog:
    """
    Append-only journal capped at `limit` entries

    Entries are stored newest first. Once the cap is reached, each append
    silently drops the oldest entry.
    """

    def __init__(self, limit: int = SECURITY_LOG_LIMIT):
        if limit < 1:
            raise ValueError("Security log limit must be at least 1")
        self.limit = limit
        self._entries: Deque[SecurityLogEntry] = deque(maxlen=limit)
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, event: str, severity: Severity, source: str) -> SecurityLogEntry:
        with self._lock:
            entry = SecurityLogEntry(
                id=f"log-{next(self._counter)}",
                timestamp=utc_now_iso(),
                event=event,
                severity=severity,
                source=source,
            )
            # deque(maxlen) discards from the opposite end on appendleft
            self._entries.appendleft(entry)
        log_fn = logger.warning if severity in ("alert", "critical") else logger.debug
        log_fn(f"Security event [{severity}] from {source}: {event}")
        return entry

    def entries(self, limit: Optional[int] = None) -> List[SecurityLogEntry]:
        with self._lock:
            entries = list(self._entries)
        return entries if limit is None else entries[:limit]

    def recent_by_severity(self, severities: Collection[str], limit: int) -> List[SecurityLogEntry]:
        """First `limit` entries, newest first, whose severity is in severities"""
        if limit <= 0:
            return []
        matched = []
        for entry in self.entries():
            if entry.severity in severities:
                matched.append(entry)
                if len(matched) == limit:
                    break
        return matched
