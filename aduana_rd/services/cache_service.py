"""
Explicitly owned cache for the exchange rate.
"""
from datetime import datetime, timedelta
from typing import Optional
from loguru import logger

from aduana_rd.config.settings import Config
from aduana_rd.models.import_models import RateInfo

class RateCache:
    """Holds the latest exchange rate and when it was stored."""

    def __init__(self, ttl_seconds: int = None):
        """Initialize an empty cache."""
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else Config.RATE_CACHE_SECONDS)
        self._rate: Optional[float] = None
        self._stored_at: Optional[datetime] = None
        self._source: Optional[str] = None

    def get(self, now: datetime) -> Optional[float]:
        """Return the cached rate if it is younger than the TTL."""
        if not self._rate or self._stored_at is None:
            return None
        if now - self._stored_at >= self.ttl:
            logger.debug(f"Cached exchange rate expired (stored at {self._stored_at})")
            return None
        return self._rate

    def set(self, rate: float, now: datetime, source: str) -> None:
        """Overwrite the cached rate and timestamp unconditionally."""
        self._rate = rate
        self._stored_at = now
        self._source = source

    def info(self, fallback_source: str) -> RateInfo:
        return RateInfo(
            rate=self._rate,
            last_fetched=self._stored_at,
            source=self._source,
            is_fallback=self._source == fallback_source
        )

    def clear(self) -> None:
        """Drop the cached rate."""
        self._rate = None
        self._stored_at = None
        self._source = None
        logger.info("Cleared exchange rate cache")
