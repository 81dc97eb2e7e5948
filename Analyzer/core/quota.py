"""
Per-caller daily request quota
In-memory ledger guarding the LLM provider against abuse
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaDecision:
    """
    Outcome of an admission check.

    count is the caller's usage for the day after the decision
    (unchanged when denied).
    """
    allowed: bool
    count: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.count, 0)


class QuotaLedger:
    """
    Daily request counter keyed by (caller_id, calendar date).

    Quota is a cost-control heuristic, not a security control: caller ids
    are whatever the client sends (or its network address) and are never
    verified.

    Pattern:
    1. Derive the date key from the service clock
    2. Check and increment under one lock so concurrent requests for the
       same caller cannot overshoot the ceiling
    3. Drop buckets from earlier dates the first time a new date is seen
    """

    def __init__(self, limit: int = 50):
        """
        Initialize the ledger.

        Args:
            limit: Maximum admitted requests per caller per calendar day
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._counts: Dict[Tuple[str, str], int] = {}
        self._current_date: Optional[str] = None
        self._lock = threading.Lock()

    @staticmethod
    def date_key(now: datetime) -> str:
        """Calendar date of now, shared by every request on that day"""
        return now.date().isoformat()

    def admit(self, caller_id: str, now: datetime) -> QuotaDecision:
        """
        Admit or deny one request for caller_id.

        Denied requests leave the ledger untouched.

        Args:
            caller_id: Quota bucket identifier
            now: Current service time

        Returns:
            QuotaDecision with the resulting count
        """
        with self._lock:
            key = (caller_id, self._roll_over(self.date_key(now)))
            count = self._counts.get(key, 0)
            if count >= self.limit:
                logger.warning(f"Quota exceeded for {caller_id} ({count}/{self.limit})")
                return QuotaDecision(allowed=False, count=count, limit=self.limit)
            count += 1
            self._counts[key] = count
        return QuotaDecision(allowed=True, count=count, limit=self.limit)

    def current_usage(self, caller_id: str, now: datetime) -> int:
        """Admitted requests for caller_id on the current day, or 0"""
        key = (caller_id, self.date_key(now))
        with self._lock:
            return self._counts.get(key, 0)

    def prune(self, now: datetime) -> int:
        """
        Evict buckets dated before now.

        Returns:
            Number of evicted entries
        """
        with self._lock:
            return self._evict_before(self.date_key(now))

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)

    def _roll_over(self, date_key: str) -> str:
        # Caller must hold the lock; returns the bucket date to charge.
        # Back-dated requests are charged to the current day.
        if self._current_date is None or date_key > self._current_date:
            if self._current_date is not None:
                self._evict_before(date_key)
            self._current_date = date_key
        return self._current_date

    def _evict_before(self, date_key: str) -> int:
        # Caller must hold the lock; ISO dates compare lexically
        stale = [key for key in self._counts if key[1] < date_key]
        for key in stale:
            del self._counts[key]
        if stale:
            logger.info(f"Evicted {len(stale)} quota entries older than {date_key}")
        return len(stale)
