import re

import pytest

from src.tour_office.tour_office.core.exceptions import NotFoundError, ValidationError
from src.tour_office.tour_office.participants.service import build_participant
from src.tour_office.tour_office.rooms.model import Room


def _data(gid, **kw):
    data = {"full_name": "Ayşe Yılmaz", "group_id": gid, "room_type": "3", "day_count": "10"}
    data.update(kw)
    return data


def test_build_participant_normalizes_contact_fields():
    p = build_participant(
        _data(1, phone="532 123 45 67", passport_no="u1234 5678", id_number="12345678901", email="a@b.co")
    )

    assert p.phone == "5321234567"
    assert p.passport_no == "U12345678"
    assert p.room_type == 3
    assert p.day_count == 10
    assert p.discount == 0


@pytest.mark.parametrize(
    "override, message",
    [
        ({"full_name": ""}, "Ad Soyad zorunlu"),
        ({"group_id": None}, "Grup seçin"),
        ({"room_type": ""}, "Oda tipi seçin"),
        ({"day_count": None}, "Gün seçin"),
        ({"id_number": "123"}, "TC No 11 haneli sayı olmalı"),
        ({"email": "nope"}, "Geçerli e-posta girin"),
        ({"phone": "05321234567"}, "Telefon 0 olmadan 10 hane olmalı (5xx...)"),
        ({"passport_no": "12345678"}, "Pasaport: 1 büyük harf + 8 rakam (9 hane)"),
    ],
)
def test_build_participant_messages(override, message):
    with pytest.raises(ValidationError, match=re.escape(message)):
        build_participant(_data(1, **override))


def test_invalid_choices_are_rejected():
    with pytest.raises(ValidationError):
        build_participant(_data(1, room_type=5))
    with pytest.raises(ValidationError):
        build_participant(_data(1, day_count=9))
    with pytest.raises(ValidationError):
        build_participant(_data(1, discount=-10))


def test_capacity_is_enforced_on_create(container, add_group):
    group = add_group(capacity=1)
    container.participant_service.create_participant(_data(group.group_id))

    assert container.participant_service.remaining_capacity(group.group_id) == 0
    with pytest.raises(ValidationError, match="Kontenjan dolu"):
        container.participant_service.create_participant(_data(group.group_id, full_name="Fatma"))


def test_editing_within_a_full_group_is_allowed(container, add_group):
    group = add_group(capacity=1)
    p = container.participant_service.create_participant(_data(group.group_id))

    updated = container.participant_service.update_participant(p.participant_id, {"discount": 25})

    assert updated.discount == 25


def test_moving_into_a_full_group_is_rejected(container, add_group, add_participant):
    full = add_group(capacity=1)
    add_participant(full)
    other = add_group(name="Boş")
    p = add_participant(other)

    with pytest.raises(ValidationError, match="Kontenjan dolu"):
        container.participant_service.update_participant(p.participant_id, {"group_id": full.group_id})


def test_unknown_group_is_a_validation_error(container):
    with pytest.raises(ValidationError, match="Grup bulunamadı"):
        container.participant_service.create_participant(_data(404))


def test_room_must_belong_to_the_group(container, repos, add_group, add_participant):
    group = add_group()
    other = add_group(name="Gezi")
    foreign_room = repos.rooms.create(Room(0, other.group_id, "101", 2))

    with pytest.raises(ValidationError, match="Oda bu gruba ait değil"):
        container.participant_service.create_participant(_data(group.group_id, room_id=foreign_room))


def test_changing_group_clears_the_room(container, repos, add_group, add_participant):
    group = add_group()
    other = add_group(name="Gezi")
    room_id = repos.rooms.create(Room(0, group.group_id, "101", 2))
    p = add_participant(group, room_id=room_id)

    moved = container.participant_service.update_participant(p.participant_id, {"group_id": other.group_id})

    assert moved.group_id == other.group_id
    assert moved.room_id is None


def test_search_and_delete(container, add_group, add_participant):
    group = add_group()
    add_participant(group, full_name="Mehmet Kaya", phone="5551112233")
    target = add_participant(group, full_name="Zeynep Demir")

    assert [p.full_name for p in container.participant_service.list_participants(search="5551")] == ["Mehmet Kaya"]
    assert len(container.participant_service.list_participants(group_id=group.group_id, search="  ")) == 2

    container.participant_service.delete_participant(target.participant_id)
    with pytest.raises(NotFoundError):
        container.participant_service.get_participant(target.participant_id)
