from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from ..core.constants import DEFAULT_RATE_REFRESH_SECONDS
from .model import ExchangeRates, RateDefaults
from .provider import RateProvider


def effective(rates: ExchangeRates, defaults: RateDefaults = RateDefaults()) -> ExchangeRates:
    """Replace unknown (0) rates with the configured defaults."""

    return rates.with_defaults(defaults)


class RateCache:
    """Process-wide holder of the latest rates.

    ``current()`` fetches when nothing is cached or the cached value is older
    than ``refresh_seconds``. Fetches are serialized by a lock, so concurrent
    callers wait for the in-flight fetch and then reuse its result.
    """

    def __init__(
        self,
        provider: RateProvider,
        refresh_seconds: float = DEFAULT_RATE_REFRESH_SECONDS,
        *,
        defaults: RateDefaults = RateDefaults(),
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._refresh_seconds = float(refresh_seconds)
        self._defaults = defaults
        self._clock = clock
        self._lock = threading.Lock()
        self._rates: Optional[ExchangeRates] = None
        self._loaded_at: float = 0.0

    @property
    def defaults(self) -> RateDefaults:
        return self._defaults

    @property
    def provider(self) -> RateProvider:
        return self._provider

    def _is_stale(self) -> bool:
        return self._rates is None or (self._clock() - self._loaded_at) >= self._refresh_seconds

    def _load(self) -> ExchangeRates:
        self._rates = self._provider.get_rates()
        self._loaded_at = self._clock()
        return self._rates

    def current(self) -> ExchangeRates:
        with self._lock:
            if self._rates is None or self._is_stale():
                return self._load()
            return self._rates

    def refresh(self) -> ExchangeRates:
        with self._lock:
            return self._load()

    def effective_rates(self) -> ExchangeRates:
        return effective(self.current(), self._defaults)
