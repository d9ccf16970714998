"""
Time-boxed cache in front of a lender rate source.
Owned by whoever constructs it and injected where rates are needed.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from homecalc.services.rates.lender_rates import LenderRate, static_rates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateSnapshot:
    rates: List[LenderRate] = field(default_factory=list)
    cached: bool = False
    fallback: bool = False
    last_updated: Optional[float] = None  # POSIX timestamp
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rates": [r.to_dict() for r in self.rates],
            "cached": self.cached,
            "fallback": self.fallback,
            "last_updated": (
                datetime.fromtimestamp(self.last_updated, tz=timezone.utc).isoformat()
                if self.last_updated is not None
                else None
            ),
            "error": self.error,
        }


class RateCache:
    """Holds the last successful fetch and its timestamp behind a lock."""

    def __init__(
        self,
        fetch: Callable[[], List[LenderRate]],
        ttl_seconds: float,
        fallback: Callable[[], List[LenderRate]] = static_rates,
    ):
        self._fetch = fetch
        self._fallback = fallback
        self.ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._value: Optional[List[LenderRate]] = None
        self._fetched_at: Optional[float] = None

    def get_or_refresh(self, now: float) -> RateSnapshot:
        """
        Return cached rates while they are younger than the TTL, otherwise
        fetch again. Empty or failed fetches fall back to the static table and
        leave the cache as it was.
        """
        with self._lock:
            if self._value is not None and now - self._fetched_at < self.ttl_seconds:
                return RateSnapshot(
                    rates=list(self._value), cached=True, last_updated=self._fetched_at
                )

            try:
                rates = list(self._fetch() or [])
            except Exception as e:
                logger.warning(f"Rate source failed, using fallback rates: {e}")
                return RateSnapshot(rates=self._fallback(), fallback=True, last_updated=now, error=str(e))

            if not rates:
                logger.warning("Rate source returned no rates, using fallback rates")
                return RateSnapshot(rates=self._fallback(), fallback=True, last_updated=now)

            self._value = rates
            self._fetched_at = now
            logger.info(f"Refreshed {len(rates)} lender rates")
            return RateSnapshot(rates=list(rates), last_updated=now)

    def clear(self) -> None:
        with self._lock:
            self._value = None
            self._fetched_at = None
