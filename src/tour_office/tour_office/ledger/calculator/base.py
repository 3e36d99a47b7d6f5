from __future__ import annotations

from abc import ABC, abstractmethod

from ...groups.model import Group
from ...participants.model import Participant
from ...rates.model import ExchangeRates, RateDefaults
from ..conversion import to_reference


class FeeCalculator(ABC):
    """Calculator interface (Strategy Pattern for participant fees)."""

    @abstractmethod
    def fee(self, group: Group, participant: Participant) -> float:
        """Fee in the group's currency."""
        raise NotImplementedError

    def fee_in_reference_currency(
        self,
        group: Group,
        participant: Participant,
        rates: ExchangeRates,
        defaults: RateDefaults = RateDefaults(),
    ) -> float:
        return to_reference(self.fee(group, participant), group.currency, rates, defaults)
