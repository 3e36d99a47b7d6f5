from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_optional_date
from ..common.validators import (
    is_email,
    is_passport,
    is_phone_tr,
    is_tc,
    normalize_passport,
    normalize_phone,
    require_amount,
    require_choice,
    require_enum,
    require_non_empty,
)
from ..core.constants import DAY_COUNTS, FEE_ROOM_TYPES
from ..core.enums import Gender
from ..core.exceptions import NotFoundError, ValidationError
from ..groups.repository import GroupRepository
from ..rooms.repository import RoomRepository
from .model import Participant
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None


def build_participant(data: Mapping[str, Any], *, participant_id: int = 0) -> Participant:
    """Validate and normalize raw participant input."""

    full_name = require_non_empty(data.get("full_name"), "Ad Soyad")
    if data.get("group_id") in (None, ""):
        raise ValidationError("Grup seçin")
    try:
        group_id = int(data["group_id"])
    except (TypeError, ValueError):
        raise ValidationError("Grup seçin")
    if data.get("room_type") in (None, ""):
        raise ValidationError("Oda tipi seçin")
    if data.get("day_count") in (None, ""):
        raise ValidationError("Gün seçin")

    id_number = _optional_text(data.get("id_number"))
    if id_number and not is_tc(id_number):
        raise ValidationError("TC No 11 haneli sayı olmalı")

    email = _optional_text(data.get("email"))
    if email and not is_email(email):
        raise ValidationError("Geçerli e-posta girin")

    phone = _optional_text(data.get("phone"))
    if phone:
        if not is_phone_tr(phone):
            raise ValidationError("Telefon 0 olmadan 10 hane olmalı (5xx...)")
        phone = normalize_phone(phone)

    passport_no = _optional_text(data.get("passport_no"))
    if passport_no:
        if not is_passport(passport_no):
            raise ValidationError("Pasaport: 1 büyük harf + 8 rakam (9 hane)")
        passport_no = normalize_passport(passport_no)

    room_id = data.get("room_id")
    return Participant(
        participant_id=participant_id,
        group_id=group_id,
        full_name=full_name,
        room_type=require_choice(data.get("room_type"), FEE_ROOM_TYPES, "oda tipi"),
        day_count=require_choice(data.get("day_count"), DAY_COUNTS, "gün sayısı"),
        gender=require_enum(data.get("gender") or Gender.MR, Gender, "cinsiyet"),
        discount=require_amount(data.get("discount") or 0, "İndirim", allow_zero=True),
        phone=phone,
        email=email,
        id_number="".join(ch for ch in id_number if ch.isdigit()) if id_number else None,
        passport_no=passport_no,
        passport_valid_until=coerce_optional_date(data.get("passport_valid_until"), "Pasaport geçerlilik tarihi"),
        birth_date=coerce_optional_date(data.get("birth_date"), "Doğum tarihi"),
        room_id=int(room_id) if room_id not in (None, "") else None,
        reference=_optional_text(data.get("reference")),
    )


class ParticipantService:
    def __init__(self, participants: ParticipantRepository, groups: GroupRepository, rooms: RoomRepository):
        self._participants = participants
        self._groups = groups
        self._rooms = rooms

    def list_participants(self, *, group_id: Optional[int] = None, search: Optional[str] = None) -> Sequence[Participant]:
        return self._participants.list(group_id=group_id, search=(search or "").strip() or None)

    def get_participant(self, participant_id: int) -> Participant:
        participant = self._participants.get_by_id(participant_id)
        if not participant:
            raise NotFoundError("Katılımcı bulunamadı")
        return participant

    def remaining_capacity(self, group_id: int) -> int:
        group = self._groups.get_by_id(group_id)
        if not group:
            return 0
        return max(group.capacity - self._participants.count_by_group(group_id), 0)

    def _check_references(self, participant: Participant, *, previous_group_id: Optional[int]) -> None:
        if not self._groups.get_by_id(participant.group_id):
            raise ValidationError("Grup bulunamadı")

        # Read-then-act: two concurrent enrolments can both pass this check.
        needed = 0 if previous_group_id == participant.group_id else 1
        if self.remaining_capacity(participant.group_id) < needed:
            raise ValidationError("Kontenjan dolu: bu gruba yeni kayıt yapılamaz")

        if participant.room_id is not None:
            room = self._rooms.get_by_id(participant.room_id)
            if not room or room.group_id != participant.group_id:
                raise ValidationError("Oda bu gruba ait değil")

    def create_participant(self, data: Mapping[str, Any]) -> Participant:
        participant = build_participant(data)
        self._check_references(participant, previous_group_id=None)
        participant_id = self._participants.create(participant)
        logger.info("Enrolled participant %s in group %s", participant_id, participant.group_id)
        return self.get_participant(participant_id)

    def update_participant(self, participant_id: int, data: Mapping[str, Any]) -> Participant:
        existing = self.get_participant(participant_id)
        merged = {**existing.to_dict(), **dict(data)}
        if str(merged.get("group_id")) != str(existing.group_id) and "room_id" not in data:
            # A room belongs to the old group.
            merged["room_id"] = None

        participant = build_participant(merged, participant_id=participant_id)
        self._check_references(participant, previous_group_id=existing.group_id)
        self._participants.update(participant)
        return self.get_participant(participant_id)

    def delete_participant(self, participant_id: int) -> None:
        self.get_participant(participant_id)
        if not self._participants.delete_by_id(participant_id):
            raise NotFoundError("Katılımcı bulunamadı")
