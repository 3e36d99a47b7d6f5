from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_SARTRY, DEFAULT_USDTRY


def derive_usd_sar(usd_try: float, sar_try: float) -> float:
    """USD/SAR is never fetched; it is the cross rate of the two TRY rates."""

    if usd_try > 0 and sar_try > 0:
        return usd_try / sar_try
    return 0.0


@dataclass(frozen=True)
class SourceQuote:
    """What one rate source returned. Zero means unknown."""

    usd_try: float
    sar_try: float
    source: str


@dataclass(frozen=True)
class RateDefaults:
    usd_try: float = DEFAULT_USDTRY
    sar_try: float = DEFAULT_SARTRY


@dataclass(frozen=True)
class ExchangeRates:
    usd_try: float
    sar_try: float
    usd_sar: float
    source: str
    fetched_at: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        *,
        usd_try: float,
        sar_try: float,
        source: str,
        fetched_at: Optional[datetime] = None,
    ) -> "ExchangeRates":
        return cls(
            usd_try=usd_try,
            sar_try=sar_try,
            usd_sar=derive_usd_sar(usd_try, sar_try),
            source=source,
            fetched_at=fetched_at,
        )

    @property
    def complete(self) -> bool:
        return self.usd_try > 0 and self.sar_try > 0

    def with_defaults(self, defaults: RateDefaults) -> "ExchangeRates":
        usd_try = self.usd_try if self.usd_try > 0 else defaults.usd_try
        sar_try = self.sar_try if self.sar_try > 0 else defaults.sar_try
        return replace(self, usd_try=usd_try, sar_try=sar_try, usd_sar=derive_usd_sar(usd_try, sar_try))

    def to_dict(self) -> dict:
        return {
            "USDTRY": self.usd_try,
            "SARTRY": self.sar_try,
            "USDSAR": self.usd_sar,
            "source": self.source,
            "fetched_at": self.fetched_at.isoformat() if self.fetched_at else None,
        }
