"""
USD to DOP exchange rate service.

Sources are tried in order: Banco Central (BCRD) indicator feed,
ExchangeRate-API, then a fixed fallback rate. The result is cached
for one hour in an owned RateCache.
"""
import math
import threading
from datetime import datetime
from typing import Any, Callable, Optional

import requests
from loguru import logger

from aduana_rd.config.settings import Config
from aduana_rd.models.import_models import RateInfo
from aduana_rd.services.cache_service import RateCache
from aduana_rd.utils.formatters import is_number
from aduana_rd.utils.logging_utils import log_rate_source

SOURCE_BCRD = "BCRD"
SOURCE_EXCHANGE_RATE_API = "ExchangeRate-API"
SOURCE_FALLBACK = "fallback"

# Handled per source; any of these means "no rate from this source"
_FETCH_ERRORS = (requests.RequestException, ValueError, TypeError, AttributeError, KeyError)

def get_selling_rate_from_bcrd(indicators: Any) -> Optional[float]:
    """Pick the USD selling rate ("Dólar Estadounidense Venta") out of a BCRD indicator list."""
    if not indicators or not isinstance(indicators, list):
        return None

    for entry in indicators:
        if not isinstance(entry, dict):
            continue
        name = (entry.get('indicatorName') or '').lower()
        if 'dólar estadounidense' in name and 'venta' in name:
            return entry.get('value')
    return None

def usable_rate(value: Any) -> Optional[float]:
    """A source value as a positive, finite float; None when it is anything else."""
    if isinstance(value, bool):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate

def convert_usd_to_dop(amount_usd: Any, rate: Any) -> float:
    """Convert a USD amount with the given rate; 0 when either is not a number."""
    if not is_number(amount_usd) or not is_number(rate):
        return 0
    return amount_usd * rate

class ExchangeRateService:
    """Service resolving the current DOP per USD rate."""

    def __init__(self, cache: RateCache = None, session: requests.Session = None,
                 clock: Callable[[], datetime] = None):
        """
        Initialize the exchange rate service.

        Args:
            cache: Rate cache owned by the caller; a private one is created if omitted
            session: HTTP session used for both sources
            clock: Returns the current time when `now` is not passed explicitly
        """
        self.cache = cache or RateCache()
        self.session = session or requests.Session()
        self.clock = clock or datetime.now
        self.timeout = Config.RATE_TIMEOUT_SECONDS

    def fetch_from_bcrd(self) -> Optional[float]:
        try:
            response = self.session.get(Config.BCRD_API_URL, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
            indicators = payload.get('data') if isinstance(payload, dict) else payload
            raw = get_selling_rate_from_bcrd(indicators)
            rate = usable_rate(raw)
            if rate:
                return rate
            logger.warning(f"Could not find a usable USD selling rate in BCRD response (value={raw!r}).")
            return None
        except _FETCH_ERRORS as e:
            logger.error(f"Error fetching from BCRD: {str(e)}")
            return None

    def fetch_from_exchange_rate_api(self) -> Optional[float]:
        try:
            response = self.session.get(Config.exchange_rate_api_url(), timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
            raw = (payload.get('conversion_rates') or {}).get('DOP')
            rate = usable_rate(raw)
            if rate:
                return rate
            logger.warning(f"Could not find a usable DOP rate in ExchangeRate-API response (value={raw!r}).")
            return None
        except _FETCH_ERRORS as e:
            logger.error(f"Error fetching from ExchangeRate-API: {str(e)}")
            return None

    def get_rate(self, now: datetime = None) -> float:
        """
        Return the DOP per USD rate, using the cache while it is fresh.

        Args:
            now: Current time; defaults to the service clock

        Returns:
            A positive rate. Falls back to Config.FALLBACK_EXCHANGE_RATE when both sources fail.
        """
        now = now or self.clock()
        cached = self.cache.get(now)
        if cached:
            logger.debug(f"Using cached exchange rate: {cached}")
            return cached

        source = SOURCE_BCRD
        rate = self.fetch_from_bcrd()

        if not rate:
            logger.info("BCRD fetch failed or rate not found, trying ExchangeRate-API...")
            source = SOURCE_EXCHANGE_RATE_API
            rate = self.fetch_from_exchange_rate_api()

        if not rate:
            logger.warning("All API fetches failed, using manual fallback rate.")
            source = SOURCE_FALLBACK
            rate = Config.FALLBACK_EXCHANGE_RATE

        self.cache.set(rate, now, source)
        log_rate_source(source, rate)
        return rate

    def get_rate_info(self) -> RateInfo:
        """Describe the cached rate: value, fetch time, source and whether it is the fallback."""
        return self.cache.info(SOURCE_FALLBACK)

    def warm_up(self) -> threading.Thread:
        """Fetch the rate once in the background so it is ready for the first calculation."""
        thread = threading.Thread(target=self._warm, name="exchange-rate-warmup", daemon=True)
        thread.start()
        return thread

    def _warm(self) -> None:
        try:
            self.get_rate()
        except Exception as e:
            logger.error(f"Initial exchange rate fetch failed: {str(e)}")
