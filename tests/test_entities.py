from __future__ import annotations

import pytest
from pydantic import ValidationError

from medisync.entities import (
    AuthUser,
    Chat,
    ChatMessage,
    ChatWithMessages,
    DayPart,
    Medicine,
    Reminder,
    ReminderWithDetails,
)
from tests.factories import chat_row, medicine_row, message_row


def _reminder(**extra) -> dict:
    row = {
        "id": "r1",
        "medicine_id": "m1",
        "user_id": "u1",
        "scheduled_time": "morning",
        "scheduled_hour": 9,
        "start_date": "2025-01-01T00:00:00.000Z",
        "end_date": "2025-01-06T00:00:00.000Z",
        "is_active": True,
        "created_at": "2025-01-01T00:00:00.000Z",
        "updated_at": "2025-01-01T00:00:00.000Z",
    }
    row.update(extra)
    return row


def test_chat_with_messages_drops_back_to_chat():
    chat = Chat.model_validate(chat_row("c1", title="Headache"))
    messages = [
        ChatMessage.model_validate(message_row("m1", "c1", "user")),
        ChatMessage.model_validate(message_row("m2", "c1", "ai", suggested_follow_ups=["More?"])),
    ]
    full = ChatWithMessages.from_chat(chat, messages)

    assert [m.id for m in full.messages] == ["m1", "m2"]
    assert full.to_chat() == chat


def test_from_chat_accepts_chat_with_messages():
    chat = Chat.model_validate(chat_row("c1"))
    first = ChatWithMessages.from_chat(chat, [ChatMessage.model_validate(message_row("m1", "c1"))])

    rebuilt = ChatWithMessages.from_chat(first, [])

    assert rebuilt.messages == []
    assert rebuilt.to_chat() == chat
    assert [m.id for m in first.messages] == ["m1"]


def test_message_sender_must_be_user_or_ai():
    with pytest.raises(ValidationError):
        ChatMessage.model_validate(message_row("m1", "c1", "system"))


def test_message_follow_ups_absent_or_null_is_none():
    absent = ChatMessage.model_validate(message_row("m1", "c1"))
    null = ChatMessage.model_validate(message_row("m2", "c1", suggested_follow_ups=None))
    assert absent.suggested_follow_ups is None
    assert null.suggested_follow_ups is None


def test_medicine_reads_wire_name_and_writes_it_back():
    medicine = Medicine.model_validate(medicine_row("m1"))
    assert medicine.name == "Paracetamol"
    assert medicine.model_dump(by_alias=True)["medicine"] == "Paracetamol"


def test_medicine_defaults():
    row = medicine_row("m1")
    for key in ("dosage", "duration", "morning", "noon", "night", "notes", "instructions"):
        row.pop(key)
    medicine = Medicine.model_validate(row)
    assert medicine.duration == 1
    assert (medicine.morning, medicine.noon, medicine.night) == (False, False, False)
    assert medicine.dosage is None
    assert medicine.day_parts() == []


def test_day_parts_order_and_hours():
    medicine = Medicine.model_validate(medicine_row("m1", morning=True, noon=True, night=True))
    assert medicine.day_parts() == [DayPart.MORNING, DayPart.NOON, DayPart.NIGHT]
    assert [p.hour for p in medicine.day_parts()] == [9, 12, 20]


def test_reminder_hour_is_a_day_part_hour():
    assert Reminder.model_validate(_reminder(scheduled_hour=20)).scheduled_hour == 20
    with pytest.raises(ValidationError):
        Reminder.model_validate(_reminder(scheduled_hour=7))


def test_reminder_with_details_projection():
    reminder = Reminder.model_validate(_reminder())
    medicine = Medicine.model_validate(medicine_row("m1"))

    details = ReminderWithDetails.from_reminder(reminder, medicine, "u1@example.com")

    assert details.medicine_name == "Paracetamol"
    assert details.dosage == "500mg"
    assert details.notes is None
    assert details.user_email == "u1@example.com"
    assert details.scheduled_hour == 9


def test_reminder_with_details_rejects_other_medicine():
    reminder = Reminder.model_validate(_reminder(medicine_id="m9"))
    medicine = Medicine.model_validate(medicine_row("m1"))
    with pytest.raises(ValueError):
        ReminderWithDetails.from_reminder(reminder, medicine, "u1@example.com")


def test_auth_user_keeps_extra_fields():
    user = AuthUser.model_validate({"id": "u1", "email": "a@b.c", "role": "authenticated"})
    assert user.model_dump()["role"] == "authenticated"
