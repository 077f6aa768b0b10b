"""
Share links - short-lived key/value store for shared outlines.

Entries expire after a TTL (30 days by default). The store is injected where
needed; InMemoryShareStore sweeps expired entries on write and evicts on read, with
an injectable clock.
"""

import secrets
import string
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from reportcraft.config import get_settings
from reportcraft.logging_config import get_logger

logger = get_logger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_SUFFIX_LENGTH = 7
SECONDS_PER_DAY = 24 * 60 * 60


class ShareStore(Protocol):
    def put(self, key: str, value: Dict[str, Any], ttl: float) -> None: ...

    def get(self, key: str) -> Optional[Dict[str, Any]]: ...


class InMemoryShareStore:
    """
    Process-local share store. Expired entries are swept on every write and
    dropped when read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def put(self, key: str, value: Dict[str, Any], ttl: float) -> None:
        with self._lock:
            now = self._clock()
            self._cleanup_expired(now)
            self._entries[key] = (now + ttl, value)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def cleanup_expired(self) -> None:
        """Drop every entry whose TTL has passed."""
        with self._lock:
            self._cleanup_expired(self._clock())

    def _cleanup_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]

    def __len__(self) -> int:
        return len(self._entries)


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def new_report_id(now_ms: Optional[int] = None) -> str:
    """`<base36 millisecond timestamp>-<7 random base36 chars>`."""
    timestamp = to_base36(now_ms if now_ms is not None else int(time.time() * 1000))
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(RANDOM_SUFFIX_LENGTH))
    return f"{timestamp}-{suffix}"


def save_share_data(store: ShareStore, data: Dict[str, Any], ttl: Optional[float] = None) -> str:
    """Store shared content and return its report id."""
    report_id = new_report_id()
    if ttl is None:
        ttl = get_settings().share_ttl_days * SECONDS_PER_DAY
    store.put(report_id, data, ttl)
    logger.info("Stored share data %s", report_id)
    return report_id


def get_share_data(store: ShareStore, report_id: str) -> Optional[Dict[str, Any]]:
    return store.get(report_id)
