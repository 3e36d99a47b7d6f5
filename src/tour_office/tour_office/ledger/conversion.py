from __future__ import annotations

from ..core.constants import REFERENCE_CURRENCY
from ..core.enums import Currency
from ..rates.model import ExchangeRates, RateDefaults


def try_per_unit(currency: Currency, rates: ExchangeRates, defaults: RateDefaults = RateDefaults()) -> float:
    """TRY value of one unit of ``currency``; unknown (0) rates use the defaults."""

    if currency == Currency.TRY:
        return 1.0
    if currency == Currency.USD:
        return rates.usd_try if rates.usd_try > 0 else defaults.usd_try
    if currency == Currency.SAR:
        return rates.sar_try if rates.sar_try > 0 else defaults.sar_try
    raise ValueError(f"Unsupported currency: {currency!r}")


def convert(
    amount: float,
    source: Currency,
    target: Currency,
    rates: ExchangeRates,
    defaults: RateDefaults = RateDefaults(),
) -> float:
    """Convert through TRY cross rates (e.g. USD→SAR = USDTRY / SARTRY)."""

    if source == target:
        return float(amount)
    return float(amount) * try_per_unit(source, rates, defaults) / try_per_unit(target, rates, defaults)


def to_reference(
    amount: float,
    currency: Currency,
    rates: ExchangeRates,
    defaults: RateDefaults = RateDefaults(),
) -> float:
    return convert(amount, currency, REFERENCE_CURRENCY, rates, defaults)
