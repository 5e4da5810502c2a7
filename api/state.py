from __future__ import annotations

import logging
from typing import Optional

import httpx

from medisync.chat_service import ChatService
from medisync.config import Config
from medisync.http_client import ApiClient, create_http_client
from medisync.images import ImageAllowList
from medisync.prescription_service import PrescriptionService
from medisync.reminder_service import ReminderService
from medisync.stores import AuthStore, ChatListStore, PrescriptionListStore

logger = logging.getLogger(__name__)


class AppState:
    """
    Application context owning config, the shared HTTP client and the stores.

    One instance per app (or per test); handed to whatever needs it instead
    of living in module globals.

    Attributes:
        cfg:           Config resolved once at construction.
        auth:          AuthStore with the signed-in user.
        chat_list:     ChatListStore with the user's chats.
        prescriptions: PrescriptionListStore with lists and medicines.
        images:        ImageAllowList built from cfg.
        client:        ApiClient, available between load() and close().
    """

    def __init__(self, cfg: Optional[Config] = None) -> None:
        self.cfg = cfg or Config.from_env()
        self.auth = AuthStore()
        self.chat_list = ChatListStore()
        self.prescriptions = PrescriptionListStore()
        self.images = ImageAllowList.from_config(self.cfg)
        self.client: Optional[ApiClient] = None

    def load(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """Open the HTTP client. Called once during FastAPI lifespan startup."""
        logger.info("Environment: %s", self.cfg.environment)
        if not self.cfg.backend.is_configured:
            logger.warning(
                "Backend connection is not configured for environment '%s'.",
                self.cfg.environment,
            )
        self.client = create_http_client(self.cfg, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client. Called once during FastAPI lifespan shutdown."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    def _require_client(self) -> ApiClient:
        if self.client is None:
            raise RuntimeError("AppState.load() must be called before using services.")
        return self.client

    @property
    def chat_service(self) -> ChatService:
        """
        ChatService on the shared client.

        Raises:
            RuntimeError: If load() has not been called.
        """
        return ChatService(self._require_client())

    @property
    def prescription_service(self) -> PrescriptionService:
        """PrescriptionService on the shared client; needs load()."""
        return PrescriptionService(self._require_client())

    @property
    def reminder_service(self) -> ReminderService:
        """ReminderService on the shared client; needs load()."""
        return ReminderService(self._require_client())
