from __future__ import annotations

import io
import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import coerce_date, coerce_optional_date, now_local
from ..common.validators import require_enum, require_non_empty
from ..core.enums import Currency, GroupStatus, GroupType
from ..core.exceptions import NotFoundError, ValidationError
from ..exports.spreadsheet import sheets_to_xlsx
from ..participants.repository import ParticipantRepository
from ..payments.repository import PaymentRepository
from .model import FeeSchedule, Group
from .repository import GroupRepository

logger = logging.getLogger(__name__)


def _capacity(value: Any) -> int:
    try:
        capacity = int(value or 0)
    except (TypeError, ValueError):
        raise ValidationError("Kapasite sayı olmalı")
    if capacity < 0:
        raise ValidationError("Kapasite negatif olamaz")
    return capacity


def build_group(data: Mapping[str, Any], *, group_id: int = 0) -> Group:
    """Validate raw input and build a Group."""

    name = require_non_empty(data.get("name"), "Grup adı")
    group_type = require_enum(data.get("group_type"), GroupType, "grup türü")
    start_date = coerce_date(data.get("start_date"), "Başlangıç tarihi")
    end_date = coerce_optional_date(data.get("end_date"), "Bitiş tarihi")
    if end_date and end_date < start_date:
        raise ValidationError("Bitiş tarihi başlangıç tarihinden önce olamaz")

    fees = data.get("fees_by_duration")
    schedule = fees if isinstance(fees, FeeSchedule) else FeeSchedule.from_dict(fees)
    if any(v < 0 for v in schedule.values()):
        raise ValidationError("Ücretler negatif olamaz")

    return Group(
        group_id=group_id,
        name=name,
        group_type=group_type,
        start_date=start_date,
        end_date=end_date,
        capacity=_capacity(data.get("capacity")),
        currency=require_enum(data.get("currency") or Currency.TRY, Currency, "para birimi"),
        fees=schedule,
        notes=(data.get("notes") or None),
        status=require_enum(data.get("status") or GroupStatus.PLANNING, GroupStatus, "durum"),
    )


class GroupService:
    def __init__(
        self,
        groups: GroupRepository,
        participants: ParticipantRepository,
        payments: PaymentRepository,
    ):
        self._groups = groups
        self._participants = participants
        self._payments = payments

    def list_groups(self, *, status: Optional[str] = None) -> Sequence[Group]:
        status_enum = require_enum(status, GroupStatus, "durum") if status else None
        return self._groups.list_all(status=status_enum)

    def get_group(self, group_id: int) -> Group:
        group = self._groups.get_by_id(group_id)
        if not group:
            raise NotFoundError("Grup bulunamadı")
        return group

    def create_group(self, data: Mapping[str, Any]) -> Group:
        group = build_group(data)
        group_id = self._groups.create(group)
        logger.info("Created group %s (%s)", group_id, group.name)
        return self.get_group(group_id)

    def update_group(self, group_id: int, data: Mapping[str, Any]) -> Group:
        existing = self.get_group(group_id)
        merged = {**existing.to_dict(), **dict(data)}
        group = replace(build_group(merged, group_id=group_id), archived_at=existing.archived_at)
        self._groups.update(group)
        return self.get_group(group_id)

    def delete_group(self, group_id: int) -> None:
        self.get_group(group_id)
        if not self._groups.delete_cascade(group_id):
            raise NotFoundError("Grup bulunamadı")
        logger.info("Deleted group %s with its participants, rooms, payments and expenses", group_id)

    def archive_group(self, group_id: int) -> Tuple[Group, io.BytesIO]:
        """Mark the group archived and return its XLSX snapshot."""

        group = self.get_group(group_id)
        if group.status == GroupStatus.ARCHIVED:
            raise ValidationError("Grup zaten arşivlendi")

        archived_at = now_local()
        archived = replace(group, status=GroupStatus.ARCHIVED, archived_at=archived_at)
        workbook = sheets_to_xlsx(self._archive_sheets(archived))

        self._groups.set_status(group_id, status=GroupStatus.ARCHIVED, archived_at=archived_at)
        logger.info("Archived group %s", group_id)
        return archived, workbook

    def _archive_sheets(self, group: Group) -> dict:
        participants = self._participants.list(group_id=group.group_id)
        names = {p.participant_id: p.full_name for p in participants}
        payments = self._payments.list(group_id=group.group_id)

        info = [
            {"Alan": "Grup Adı", "Değer": group.name},
            {"Alan": "Türü", "Değer": group.group_type.value},
            {"Alan": "Başlangıç Tarihi", "Değer": group.start_date.isoformat()},
            {"Alan": "Bitiş Tarihi", "Değer": group.end_date.isoformat() if group.end_date else ""},
            {"Alan": "Kapasite", "Değer": group.capacity},
            {"Alan": "Para Birimi", "Değer": group.currency.value},
            {"Alan": "Notlar", "Değer": group.notes or ""},
            {"Alan": "Arşivlenme Tarihi", "Değer": group.archived_at.strftime("%Y-%m-%d %H:%M") if group.archived_at else ""},
        ]
        participant_rows = [
            {
                "Sıra No": i,
                "Ad Soyad": p.full_name,
                "Telefon": p.phone or "",
                "E-posta": p.email or "",
                "TC No": p.id_number or "",
                "Pasaport No": p.passport_no or "",
                "Doğum Tarihi": p.birth_date.isoformat() if p.birth_date else "",
                "Cinsiyet": p.gender.value,
                "Oda Tipi": p.room_type,
                "Gün": p.day_count,
                "İndirim": p.discount,
            }
            for i, p in enumerate(participants, start=1)
        ]
        payment_rows = [
            {
                "Tarih": pay.paid_on.isoformat(),
                "Katılımcı": names.get(pay.participant_id, ""),
                "Tutar": pay.amount,
                "Para Birimi": pay.currency.value,
                "TL Karşılığı": pay.amount_try,
                "Yöntem": pay.method.value,
                "Not": pay.notes or "",
            }
            for pay in payments
        ]
        return {"Grup Bilgileri": info, "Katılımcılar": participant_rows, "Ödemeler": payment_rows}
