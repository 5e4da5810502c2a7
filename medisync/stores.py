from __future__ import annotations

import logging
from typing import Callable, Optional

from medisync.entities import AuthUser, Chat, Medicine, PrescriptionList

logger = logging.getLogger(__name__)

Listener = Callable[["Store"], None]


class Store:
    """
    Base for snapshot stores.

    Every setter replaces state wholesale and then calls the subscribers
    synchronously, in subscription order, with the store itself.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


class AuthStore(Store):
    def __init__(self) -> None:
        super().__init__()
        self._user: Optional[AuthUser] = None

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    def set_user(self, user: Optional[AuthUser]) -> None:
        self._user = user
        logger.debug("Auth user set to %s", user.id if user else None)
        self._notify()


class ChatListStore(Store):
    def __init__(self) -> None:
        super().__init__()
        self._chats: list[Chat] = []

    @property
    def chats(self) -> list[Chat]:
        return list(self._chats)

    def set_chats(self, chats: list[Chat]) -> None:
        # Order is the caller's; no sorting or dedup.
        self._chats = list(chats)
        logger.debug("Chat list replaced (%d chats)", len(self._chats))
        self._notify()


class PrescriptionListStore(Store):
    """
    Holds prescription lists and medicines as two independent snapshots.

    Nothing ties ``medicines`` to ``prescription_list``: a medicine may point
    at a prescription id that is not held. Use ``orphaned_medicines`` to see
    which ones.
    """

    def __init__(self) -> None:
        super().__init__()
        self._prescription_list: list[PrescriptionList] = []
        self._medicines: list[Medicine] = []

    @property
    def prescription_list(self) -> list[PrescriptionList]:
        return list(self._prescription_list)

    @property
    def medicines(self) -> list[Medicine]:
        return list(self._medicines)

    def set_prescription_list(self, prescription_list: list[PrescriptionList]) -> None:
        self._prescription_list = list(prescription_list)
        logger.debug("Prescription list replaced (%d lists)", len(self._prescription_list))
        self._notify()

    def set_medicines(self, medicines: list[Medicine]) -> None:
        self._medicines = list(medicines)
        logger.debug("Medicines replaced (%d medicines)", len(self._medicines))
        self._notify()

    def orphaned_medicines(self) -> list[Medicine]:
        known = {p.id for p in self._prescription_list}
        return [m for m in self._medicines if m.prescription_id not in known]
