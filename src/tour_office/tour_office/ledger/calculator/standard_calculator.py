from __future__ import annotations

from .base import FeeCalculator
from ...groups.model import Group
from ...participants.model import Participant


class StandardFeeCalculator(FeeCalculator):
    """Standard rule: fees[day_count][room_type] - discount, not below 0.

    A day/room combination missing from the table resolves to 0.
    """

    def fee(self, group: Group, participant: Participant) -> float:
        base = group.fees.fee(participant.day_count, participant.room_type)
        return max(base - float(participant.discount or 0), 0.0)
