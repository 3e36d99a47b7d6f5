"""HTTP rate sources, ranked TCMB → exchangerate.host → Frankfurter.

A source never raises: network, HTTP and parse failures are logged and
reported as a zero quote so the provider can fall through to the next one.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date

import httpx

from ..core.enums import Currency
from .model import SourceQuote
from .parsing import parse_tcmb_xml, positive_or_zero

logger = logging.getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


class RateSource(ABC):
    name: str = "base"

    def fetch(self, client: httpx.Client) -> SourceQuote:
        try:
            usd_try, sar_try = self._fetch(client)
        except _FETCH_ERRORS as e:
            logger.warning("Rate source %s failed: %s", self.name, e)
            return SourceQuote(usd_try=0.0, sar_try=0.0, source=self.name)
        return SourceQuote(
            usd_try=positive_or_zero(usd_try),
            sar_try=positive_or_zero(sar_try),
            source=self.name,
        )

    def historical(self, client: httpx.Client, on: date, base: Currency) -> float:
        """TRY value of one unit of ``base`` on ``on``; 0 when unavailable."""

        try:
            return positive_or_zero(self._historical(client, on, base))
        except _FETCH_ERRORS as e:
            logger.warning("Historical rate from %s failed for %s %s: %s", self.name, base.value, on, e)
            return 0.0

    @abstractmethod
    def _fetch(self, client: httpx.Client) -> tuple[float, float]:
        raise NotImplementedError

    def _historical(self, client: httpx.Client, on: date, base: Currency) -> float:
        return 0.0


def _json_try_rate(client: httpx.Client, url: str, params: dict) -> float:
    resp = client.get(url, params=params)
    resp.raise_for_status()
    data = resp.json() or {}
    return positive_or_zero((data.get("rates") or {}).get("TRY"))


class TcmbSource(RateSource):
    name = "tcmb"

    def __init__(self, url: str = "https://www.tcmb.gov.tr/kurlar/today.xml"):
        self.url = url

    def _fetch(self, client: httpx.Client) -> tuple[float, float]:
        resp = client.get(self.url)
        resp.raise_for_status()
        return parse_tcmb_xml(resp.text)


class ExchangerateHostSource(RateSource):
    name = "exchangerate.host"

    def __init__(self, base_url: str = "https://api.exchangerate.host"):
        self.base_url = base_url.rstrip("/")

    def _fetch(self, client: httpx.Client) -> tuple[float, float]:
        usd_try = _json_try_rate(client, f"{self.base_url}/latest", {"base": "USD", "symbols": "TRY"})
        sar_try = _json_try_rate(client, f"{self.base_url}/latest", {"base": "SAR", "symbols": "TRY"})
        return usd_try, sar_try

    def _historical(self, client: httpx.Client, on: date, base: Currency) -> float:
        return _json_try_rate(client, f"{self.base_url}/{on.isoformat()}", {"base": base.value, "symbols": "TRY"})


class FrankfurterSource(RateSource):
    name = "frankfurter"

    def __init__(self, base_url: str = "https://api.frankfurter.app"):
        self.base_url = base_url.rstrip("/")

    def _fetch(self, client: httpx.Client) -> tuple[float, float]:
        usd_try = _json_try_rate(client, f"{self.base_url}/latest", {"from": "USD", "to": "TRY"})
        sar_try = _json_try_rate(client, f"{self.base_url}/latest", {"from": "SAR", "to": "TRY"})
        return usd_try, sar_try

    def _historical(self, client: httpx.Client, on: date, base: Currency) -> float:
        return _json_try_rate(client, f"{self.base_url}/{on.isoformat()}", {"from": base.value, "to": "TRY"})


def default_sources() -> list[RateSource]:
    return [TcmbSource(), ExchangerateHostSource(), FrankfurterSource()]


def default_history_sources() -> list[RateSource]:
    return [FrankfurterSource(), ExchangerateHostSource()]
