"""Backend row builders shared by the tests."""

from __future__ import annotations


def chat_row(chat_id: str, title: str = "Chat", user_id: str = "u1") -> dict:
    return {
        "id": chat_id,
        "user_id": user_id,
        "title": title,
        "created_at": "2025-01-01T10:00:00.000Z",
        "updated_at": "2025-01-02T10:00:00.000Z",
    }


def message_row(message_id: str, chat_id: str, sender: str = "user", **extra) -> dict:
    return {
        "id": message_id,
        "chat_id": chat_id,
        "content": f"message {message_id}",
        "sender": sender,
        "created_at": "2025-01-01T10:00:00.000Z",
        **extra,
    }


def prescription_row(prescription_id: str, title: str = "Rx", user_id: str = "u1") -> dict:
    return {
        "id": prescription_id,
        "user_id": user_id,
        "title": title,
        "created_at": "2025-01-01T10:00:00.000Z",
        "updated_at": "2025-01-01T10:00:00.000Z",
    }


def medicine_row(medicine_id: str, prescription_id: str = "p1", **extra) -> dict:
    row = {
        "id": medicine_id,
        "user_id": "u1",
        "prescription_id": prescription_id,
        "medicine": "Paracetamol",
        "dosage": "500mg",
        "duration": 5,
        "morning": True,
        "noon": False,
        "night": True,
        "notes": None,
        "instructions": "After food",
        "created_at": "2025-01-01T10:00:00.000Z",
        "updated_at": "2025-01-01T10:00:00.000Z",
    }
    row.update(extra)
    return row
