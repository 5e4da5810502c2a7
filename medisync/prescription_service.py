from __future__ import annotations

import logging
from typing import Optional

from medisync.entities import Medicine, PrescriptionList
from medisync.http_client import ApiClient
from medisync.stores import PrescriptionListStore

logger = logging.getLogger(__name__)


def _medicine_payload(medicine: Medicine) -> dict:
    return medicine.model_dump(
        by_alias=True,
        include={
            "name",
            "dosage",
            "duration",
            "morning",
            "noon",
            "night",
            "instructions",
            "notes",
        },
    )


class PrescriptionService:
    """
    Backend calls for prescription lists and the medicines inside them.

    Every method goes through the shared ApiClient; ``httpx.HTTPError`` and
    ``pydantic.ValidationError`` on malformed rows reach the caller unchanged.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    # --- Prescription lists ---

    async def list_prescriptions(self, user_id: str) -> list[PrescriptionList]:
        """Prescription lists of *user_id*, newest first as the backend orders them."""
        data = await self.client.get("prescriptions", params={"user_id": user_id})
        return [PrescriptionList.model_validate(row) for row in data or []]

    async def create_prescription(self, user_id: str, title: str) -> PrescriptionList:
        # The backend only echoes id and timestamps back.
        data = await self.client.post("prescriptions", json={"user_id": user_id, "title": title})
        return PrescriptionList.model_validate({"user_id": user_id, "title": title, **data})

    async def rename_prescription(self, prescription_id: str, title: str) -> None:
        """Change the title of a prescription list."""
        await self.client.patch("prescriptions", json={"id": prescription_id, "title": title})

    async def delete_prescription(self, prescription_id: str) -> None:
        """Delete a prescription list by id."""
        await self.client.delete("prescriptions", params={"id": prescription_id})

    # --- Medicines ---

    async def list_medicines(self, prescription_id: str) -> list[Medicine]:
        """Medicines of one prescription list, oldest first."""
        data = await self.client.get("medicines", params={"id": prescription_id})
        return [Medicine.model_validate(row) for row in data or []]

    async def add_medicine(
        self,
        user_id: str,
        prescription_id: str,
        name: str,
        *,
        dosage: Optional[str] = None,
        duration: int = 1,
        morning: bool = False,
        noon: bool = False,
        night: bool = False,
        instructions: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Medicine:
        """
        Add a medicine to a prescription list.

        Args:
            user_id:         Owner of the medicine.
            prescription_id: Prescription list it belongs to.
            name:            Medicine name, sent under the ``medicine`` key.

        Returns:
            The inserted Medicine row.

        Raises:
            httpx.HTTPStatusError: 400 when a required field is missing.
        """
        data = await self.client.post(
            "medicines",
            json={
                "user_id": user_id,
                "prescription_id": prescription_id,
                "medicine": name,
                "dosage": dosage,
                "duration": duration,
                "morning": morning,
                "noon": noon,
                "night": night,
                "instructions": instructions,
                "notes": notes,
            },
        )
        # Insert returns the inserted rows as a list.
        row = data[0] if isinstance(data, list) else data
        return Medicine.model_validate(row)

    async def update_medicine(self, medicine: Medicine) -> Medicine:
        """
        Send the editable fields of *medicine* and return the stored row.

        Raises:
            httpx.HTTPStatusError: 404 when the medicine no longer exists.
        """
        data = await self.client.patch(
            "medicines", json={"id": medicine.id, **_medicine_payload(medicine)}
        )
        return Medicine.model_validate(data)

    async def delete_medicine(self, medicine_id: str) -> None:
        """Delete a medicine by id; 404 when it no longer exists."""
        await self.client.delete("medicines", params={"id": medicine_id})


async def refresh_prescriptions(
    service: PrescriptionService, store: PrescriptionListStore, user_id: str
) -> list[PrescriptionList]:
    """
    Replace the held prescription lists with the backend snapshot.

    Medicines are left as they are.

    Raises:
        httpx.HTTPError: Backend failure; the store keeps its previous lists.
    """
    prescriptions = await service.list_prescriptions(user_id)
    store.set_prescription_list(prescriptions)
    logger.info("Loaded %d prescription lists for user %s", len(prescriptions), user_id)
    return prescriptions


async def refresh_medicines(
    service: PrescriptionService, store: PrescriptionListStore, prescription_id: Optional[str]
) -> list[Medicine]:
    """Load the medicines of one prescription; no prescription clears them."""
    medicines = await service.list_medicines(prescription_id) if prescription_id else []
    store.set_medicines(medicines)
    return medicines


async def remove_prescription(
    service: PrescriptionService, store: PrescriptionListStore, prescription_id: str
) -> None:
    """Delete on the backend, then resupply the lists without that one."""
    await service.delete_prescription(prescription_id)
    store.set_prescription_list([p for p in store.prescription_list if p.id != prescription_id])


async def save_medicine(
    service: PrescriptionService, store: PrescriptionListStore, medicine: Medicine
) -> Medicine:
    """Update on the backend, then swap the stored row into the held medicines."""
    updated = await service.update_medicine(medicine)
    store.set_medicines([updated if m.id == updated.id else m for m in store.medicines])
    return updated


async def remove_medicine(
    service: PrescriptionService, store: PrescriptionListStore, medicine_id: str
) -> None:
    """Delete on the backend, then resupply the medicines without that one."""
    await service.delete_medicine(medicine_id)
    store.set_medicines([m for m in store.medicines if m.id != medicine_id])
