from __future__ import annotations

from datetime import date

import httpx
import pytest

from src.tour_office.tour_office.core.enums import Currency
from src.tour_office.tour_office.rates.provider import RateProvider
from src.tour_office.tour_office.rates.sources import (
    ExchangerateHostSource,
    FrankfurterSource,
    TcmbSource,
)

TCMB_USD_ONLY = '<Tarih_Date><Currency Kod="USD"><Unit>1</Unit><ForexSelling>36.20</ForexSelling></Currency></Tarih_Date>'


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _provider(handler, **kwargs) -> RateProvider:
    return RateProvider(
        [TcmbSource(), ExchangerateHostSource(), FrankfurterSource()],
        history_sources=[FrankfurterSource(), ExchangerateHostSource()],
        client=_client(handler),
        **kwargs,
    )


def test_tcmb_complete_stops_the_chain():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.host)
        xml = TCMB_USD_ONLY.replace(
            "</Tarih_Date>",
            '<Currency Kod="SAR"><Unit>1</Unit><ForexSelling>9.65</ForexSelling></Currency></Tarih_Date>',
        )
        return httpx.Response(200, text=xml)

    rates = _provider(handler).get_rates()

    assert rates.usd_try == pytest.approx(36.2)
    assert rates.sar_try == pytest.approx(9.65)
    assert rates.usd_sar == pytest.approx(36.2 / 9.65)
    assert rates.source == "tcmb"
    assert seen == ["www.tcmb.gov.tr"]


def test_missing_value_is_filled_by_next_source_without_overwriting():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "www.tcmb.gov.tr":
            return httpx.Response(200, text=TCMB_USD_ONLY)
        base = request.url.params.get("base")
        return httpx.Response(200, json={"rates": {"TRY": 40.0 if base == "USD" else 9.9}})

    rates = _provider(handler).get_rates()

    assert rates.usd_try == pytest.approx(36.2)
    assert rates.sar_try == pytest.approx(9.9)
    assert rates.source == "exchangerate.host"


def test_all_sources_failing_gives_zero_rates():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "www.tcmb.gov.tr":
            raise httpx.ConnectError("down", request=request)
        if request.url.host == "api.exchangerate.host":
            return httpx.Response(500)
        return httpx.Response(200, text="not json")

    rates = _provider(handler).get_rates()

    assert (rates.usd_try, rates.sar_try, rates.usd_sar) == (0.0, 0.0, 0.0)
    assert not rates.complete
    assert rates.source == "frankfurter"


def test_disabled_provider_makes_no_requests():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no network expected")

    provider = _provider(handler, enabled=False)
    rates = provider.get_rates()

    assert rates.source == "disabled"
    assert rates.usd_try == 0.0
    assert provider.historical_rate(date(2025, 1, 2), Currency.USD) == 0.0


def test_historical_rate_uses_frankfurter_then_exchangerate_host():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/2025-01-02"
        if request.url.host == "api.frankfurter.app":
            return httpx.Response(200, json={"rates": {}})
        return httpx.Response(200, json={"rates": {"TRY": 35.4}})

    provider = _provider(handler)

    assert provider.historical_rate(date(2025, 1, 2), Currency.USD) == pytest.approx(35.4)
    assert provider.historical_rate(date(2025, 1, 2), Currency.TRY) == 1.0
