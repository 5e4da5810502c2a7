from __future__ import annotations

import logging
from typing import Literal, Optional, get_args

from medisync.entities import Chat, ChatMessage, ChatWithMessages
from medisync.http_client import ApiClient
from medisync.stores import ChatListStore

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 50

Sender = Literal["user", "ai"]
SENDERS: tuple[str, ...] = get_args(Sender)


def generate_chat_title(first_message: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """Title a new chat after its first user message, truncated with an ellipsis."""
    if len(first_message) <= max_length:
        return first_message
    return first_message[:max_length].strip() + "..."


class ChatService:
    """
    Backend calls for chats and their messages.

    Every method goes through the shared ApiClient; ``httpx.HTTPError`` and
    ``pydantic.ValidationError`` on malformed rows reach the caller unchanged.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def list_chats(self, user_id: str) -> list[Chat]:
        """Chats of *user_id*, most recently updated first as the backend orders them."""
        data = await self.client.get("chats", params={"user_id": user_id})
        return [Chat.model_validate(row) for row in data or []]

    async def create_chat(self, user_id: str, title: str) -> Chat:
        data = await self.client.post("chats", json={"user_id": user_id, "title": title})
        return Chat.model_validate(data)

    async def delete_chat(self, chat_id: str) -> None:
        """Delete a chat; the backend removes its messages first."""
        await self.client.delete("chats", json={"id": chat_id})

    async def update_title(self, chat_id: str, title: str) -> None:
        await self.client.patch(
            "chats/update-title", json={"chat_id": chat_id, "new_title": title}
        )

    async def list_messages(self, chat_id: str) -> list[ChatMessage]:
        """Messages of *chat_id* in conversation order."""
        data = await self.client.get("chats/messages", params={"chat_id": chat_id})
        return [ChatMessage.model_validate(row) for row in data or []]

    async def add_message(
        self,
        chat_id: str,
        content: str,
        sender: Sender,
        suggested_follow_ups: Optional[list[str]] = None,
    ) -> ChatMessage:
        """
        Store one message in a chat. The backend also bumps the chat's updated_at.

        Args:
            chat_id:              Chat the message belongs to.
            content:              Message text.
            sender:               ``"user"`` or ``"ai"``.
            suggested_follow_ups: Follow-up prompts offered with an AI reply.

        Returns:
            The stored ChatMessage as echoed by the backend.

        Raises:
            ValueError: If *sender* is not one of the two allowed values;
                nothing is sent.
            httpx.HTTPError: Any backend failure, unchanged.
        """
        if sender not in SENDERS:
            raise ValueError(f"sender must be one of {SENDERS}, got {sender!r}")

        data = await self.client.post(
            "chats/messages",
            json={
                "chat_id": chat_id,
                "content": content,
                "sender": sender,
                "suggested_follow_ups": suggested_follow_ups,
            },
        )
        row = data[0] if isinstance(data, list) else data
        return ChatMessage.model_validate(row)

    async def get_chat_with_messages(self, chat: Chat) -> ChatWithMessages:
        messages = await self.list_messages(chat.id)
        return ChatWithMessages.from_chat(chat, messages)


async def refresh_chats(service: ChatService, store: ChatListStore, user_id: str) -> list[Chat]:
    """
    Replace the chat list with the backend's current snapshot.

    Raises:
        httpx.HTTPError: Backend failure; the store keeps its previous list.
    """
    chats = await service.list_chats(user_id)
    store.set_chats(chats)
    logger.info("Loaded %d chats for user %s", len(chats), user_id)
    return chats


async def remove_chat(service: ChatService, store: ChatListStore, chat_id: str) -> None:
    """Delete on the backend, then resupply the list without that chat."""
    await service.delete_chat(chat_id)
    store.set_chats([c for c in store.chats if c.id != chat_id])


async def rename_chat(
    service: ChatService, store: ChatListStore, chat_id: str, title: str
) -> None:
    """Retitle on the backend, then resupply the list with the new title."""
    await service.update_title(chat_id, title)
    store.set_chats(
        [c.model_copy(update={"title": title}) if c.id == chat_id else c for c in store.chats]
    )


async def append_message(
    service: ChatService,
    chat: ChatWithMessages,
    content: str,
    sender: Sender,
    suggested_follow_ups: Optional[list[str]] = None,
) -> ChatWithMessages:
    """
    Send a message and return a new snapshot of *chat* ending with it.

    *chat* itself is left as it was.

    Raises:
        ValueError: Invalid *sender*; nothing is sent.
        httpx.HTTPError: Backend failure, unchanged.
    """
    message = await service.add_message(chat.id, content, sender, suggested_follow_ups)
    return ChatWithMessages.from_chat(chat, [*chat.messages, message])
