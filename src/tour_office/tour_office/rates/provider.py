from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

import httpx

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_RATE_HTTP_TIMEOUT
from ..core.enums import Currency
from .model import ExchangeRates
from .sources import RateSource, default_history_sources, default_sources

logger = logging.getLogger(__name__)


class RateProvider:
    """Ask the ranked sources for USD/TRY and SAR/TRY.

    A value obtained from an earlier source is never replaced by a later
    one; the chain stops as soon as both values are known.
    """

    def __init__(
        self,
        sources: Optional[Sequence[RateSource]] = None,
        *,
        history_sources: Optional[Sequence[RateSource]] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_RATE_HTTP_TIMEOUT,
        enabled: bool = True,
    ):
        self._sources = list(sources) if sources is not None else default_sources()
        self._history_sources = (
            list(history_sources) if history_sources is not None else default_history_sources()
        )
        self._client = client
        self._timeout = timeout
        self._enabled = enabled

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def get_rates(self) -> ExchangeRates:
        if not self._enabled:
            return ExchangeRates.build(usd_try=0.0, sar_try=0.0, source="disabled", fetched_at=now_local())

        usd_try = 0.0
        sar_try = 0.0
        source = "none"
        client = self._get_client()

        for src in self._sources:
            quote = src.fetch(client)
            source = quote.source
            if usd_try <= 0 and quote.usd_try > 0:
                usd_try = quote.usd_try
            if sar_try <= 0 and quote.sar_try > 0:
                sar_try = quote.sar_try
            if usd_try > 0 and sar_try > 0:
                break

        rates = ExchangeRates.build(usd_try=usd_try, sar_try=sar_try, source=source, fetched_at=now_local())
        if not rates.complete:
            logger.warning("Exchange rates incomplete after all sources: USDTRY=%s SARTRY=%s", usd_try, sar_try)
        else:
            logger.info("Exchange rates fetched from %s: USDTRY=%.4f SARTRY=%.4f", source, usd_try, sar_try)
        return rates

    def historical_rate(self, on: date, base: Currency) -> float:
        """TRY value of one ``base`` unit on a past date; 0 when no source knows it."""

        if base == Currency.TRY:
            return 1.0
        if not self._enabled:
            return 0.0

        client = self._get_client()
        for src in self._history_sources:
            value = src.historical(client, on, base)
            if value > 0:
                return value
        return 0.0
