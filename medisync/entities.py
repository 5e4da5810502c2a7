from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DayPart(str, Enum):
    """Fixed dosing windows; the value is the label sent to the backend."""

    MORNING = "morning"
    NOON = "noon"
    NIGHT = "night"

    @property
    def hour(self) -> int:
        return _DAY_PART_HOURS[self]


_DAY_PART_HOURS: dict[DayPart, int] = {
    DayPart.MORNING: 9,
    DayPart.NOON: 12,
    DayPart.NIGHT: 20,
}


class AuthUser(BaseModel):
    # The auth backend returns many more fields; keep them as-is.
    model_config = ConfigDict(extra="allow")

    id: str
    email: Optional[str] = None


class Chat(BaseModel):
    id: str
    user_id: str
    title: str
    created_at: str
    updated_at: str


class ChatMessage(BaseModel):
    id: str
    chat_id: str
    content: str
    sender: Literal["user", "ai"]
    suggested_follow_ups: Optional[list[str]] = None
    created_at: str


class ChatWithMessages(Chat):
    messages: list[ChatMessage] = Field(default_factory=list)

    @classmethod
    def from_chat(cls, chat: Chat, messages: list[ChatMessage]) -> "ChatWithMessages":
        """Denormalize a chat with its messages, kept in the order given."""
        # Only the Chat fields: a ChatWithMessages passed in brings its own messages.
        return cls(**chat.model_dump(include=set(Chat.model_fields)), messages=list(messages))

    def to_chat(self) -> Chat:
        return Chat(**self.model_dump(exclude={"messages"}))


class PrescriptionList(BaseModel):
    id: str
    user_id: str
    title: str
    created_at: str
    updated_at: str


class Medicine(BaseModel):
    """
    A medicine row belonging to a prescription list.

    The backend names the medicine column ``medicine``; it is exposed here
    as ``name`` and serialized back under the wire key with ``by_alias``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str
    prescription_id: str
    name: str = Field(alias="medicine")
    dosage: Optional[str] = None
    duration: int = 1
    morning: bool = False
    noon: bool = False
    night: bool = False
    notes: Optional[str] = None
    instructions: Optional[str] = None
    created_at: str
    updated_at: str

    def day_parts(self) -> list[DayPart]:
        """Selected dosing windows in morning -> noon -> night order."""
        selected = {
            DayPart.MORNING: self.morning,
            DayPart.NOON: self.noon,
            DayPart.NIGHT: self.night,
        }
        return [part for part, on in selected.items() if on]


class Reminder(BaseModel):
    id: str
    medicine_id: str
    user_id: str
    scheduled_time: str
    scheduled_hour: Literal[9, 12, 20]
    start_date: str
    end_date: str
    is_active: bool
    created_at: str
    updated_at: str


class ReminderWithDetails(Reminder):
    medicine_name: str
    dosage: Optional[str] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None
    user_email: str

    @classmethod
    def from_reminder(
        cls,
        reminder: Reminder,
        medicine: Medicine,
        user_email: str,
    ) -> "ReminderWithDetails":
        if medicine.id != reminder.medicine_id:
            raise ValueError(
                f"Reminder {reminder.id} references medicine {reminder.medicine_id}, "
                f"got {medicine.id}"
            )
        return cls(
            **reminder.model_dump(),
            medicine_name=medicine.name,
            dosage=medicine.dosage,
            instructions=medicine.instructions,
            notes=medicine.notes,
            user_email=user_email,
        )
