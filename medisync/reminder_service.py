from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from medisync.entities import DayPart, Medicine
from medisync.http_client import ApiClient

logger = logging.getLogger(__name__)


class ScheduledTime(BaseModel):
    time: DayPart
    hour: int


class ScheduleResult(BaseModel):
    success: bool
    message: str
    reminders_created: Optional[int] = None
    scheduled_times: list[ScheduledTime] = []


def scheduled_times(medicine: Medicine) -> list[ScheduledTime]:
    return [ScheduledTime(time=part, hour=part.hour) for part in medicine.day_parts()]


class ReminderService:
    """Schedule, cancel and inspect e-mail reminders for a medicine."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def schedule(self, medicine: Medicine) -> ScheduleResult:
        """
        Ask the backend to (re)create reminders for every selected day-part.

        Raises:
            ValueError: If no day-part is selected or the duration is not
                positive; the backend would reject the request with a 400.
        """
        if not medicine.day_parts():
            raise ValueError(
                "At least one time slot (morning, noon, or night) must be selected"
            )
        if medicine.duration < 1:
            raise ValueError(f"Duration must be at least 1 day, got {medicine.duration}")

        data = await self.client.post(
            "reminders/schedule",
            json={
                "medicine_id": medicine.id,
                "user_id": medicine.user_id,
                "duration": medicine.duration,
                "morning": medicine.morning,
                "noon": medicine.noon,
                "night": medicine.night,
            },
        )
        result = ScheduleResult.model_validate(data)
        logger.info(
            "Scheduled %s reminders for medicine %s",
            result.reminders_created,
            medicine.id,
        )
        return result

    async def cancel(self, medicine_id: str) -> None:
        await self.client.delete("reminders/cancel", params={"medicine_id": medicine_id})
        logger.info("Cancelled reminders for medicine %s", medicine_id)

    async def has_active_reminder(self, medicine_id: str) -> bool:
        data = await self.client.get("reminders/status", params={"medicine_id": medicine_id})
        return bool((data or {}).get("hasActiveReminder"))
