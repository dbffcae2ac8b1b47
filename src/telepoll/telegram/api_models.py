"""Msgspec models for Telegram Bot API responses."""

from __future__ import annotations

from typing import Literal

import msgspec

__all__ = [
    "UPDATE_KINDS",
    "CallbackQuery",
    "Chat",
    "ChosenInlineResult",
    "Contact",
    "InlineQuery",
    "Location",
    "Message",
    "MessageEntity",
    "ResponseParameters",
    "Update",
    "UpdateKind",
    "User",
    "Venue",
    "WebhookInfo",
]

UpdateKind = Literal[
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "inline_query",
    "chosen_inline_result",
    "callback_query",
]

UPDATE_KINDS: tuple[UpdateKind, ...] = (
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "inline_query",
    "chosen_inline_result",
    "callback_query",
)


class User(msgspec.Struct, forbid_unknown_fields=False):
    id: int
    is_bot: bool = False
    first_name: str = ""
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None


class Chat(msgspec.Struct, forbid_unknown_fields=False):
    id: int
    type: str
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    all_members_are_administrators: bool = False
    description: str | None = None
    invite_link: str | None = None
    pinned_message: Message | None = None


class MessageEntity(msgspec.Struct, forbid_unknown_fields=False):
    type: str
    offset: int
    length: int
    url: str | None = None
    user: User | None = None


class Contact(msgspec.Struct, forbid_unknown_fields=False):
    phone_number: str
    first_name: str
    last_name: str | None = None
    user_id: int | None = None


class Location(msgspec.Struct, forbid_unknown_fields=False):
    latitude: float
    longitude: float


class Venue(msgspec.Struct, forbid_unknown_fields=False):
    location: Location
    title: str
    address: str
    foursquare_id: str | None = None


class Message(msgspec.Struct, forbid_unknown_fields=False):
    message_id: int
    chat: Chat | None = None
    date: int = 0
    from_: User | None = msgspec.field(default=None, name="from")
    forward_from: User | None = None
    forward_from_chat: Chat | None = None
    forward_from_message_id: int | None = None
    forward_signature: str | None = None
    forward_date: int | None = None
    reply_to_message: Message | None = None
    edit_date: int | None = None
    media_group_id: str | None = None
    author_signature: str | None = None
    text: str | None = None
    entities: list[MessageEntity] | None = None
    caption_entities: list[MessageEntity] | None = None
    caption: str | None = None
    contact: Contact | None = None
    location: Location | None = None
    venue: Venue | None = None
    new_chat_members: list[User] | None = None
    left_chat_member: User | None = None
    new_chat_title: str | None = None
    pinned_message: Message | None = None
    connected_website: str | None = None


class CallbackQuery(msgspec.Struct, forbid_unknown_fields=False):
    id: str
    from_: User | None = msgspec.field(default=None, name="from")
    message: Message | None = None
    inline_message_id: str | None = None
    chat_instance: str = ""
    data: str | None = None


class InlineQuery(msgspec.Struct, forbid_unknown_fields=False):
    id: str
    from_: User | None = msgspec.field(default=None, name="from")
    location: Location | None = None
    query: str = ""
    offset: str = ""


class ChosenInlineResult(msgspec.Struct, forbid_unknown_fields=False):
    result_id: str
    from_: User | None = msgspec.field(default=None, name="from")
    location: Location | None = None
    inline_message_id: str | None = None
    query: str = ""


class Update(msgspec.Struct, forbid_unknown_fields=False):
    """One incoming event. At most one of the kind slots is populated."""

    update_id: int
    message: Message | None = None
    edited_message: Message | None = None
    channel_post: Message | None = None
    edited_channel_post: Message | None = None
    inline_query: InlineQuery | None = None
    chosen_inline_result: ChosenInlineResult | None = None
    callback_query: CallbackQuery | None = None

    @property
    def kind(self) -> UpdateKind | None:
        for kind in UPDATE_KINDS:
            if getattr(self, kind) is not None:
                return kind
        return None


class WebhookInfo(msgspec.Struct, forbid_unknown_fields=False):
    url: str = ""
    has_custom_certificate: bool = False
    pending_update_count: int = 0
    last_error_date: int | None = None
    last_error_message: str | None = None
    max_connections: int | None = None
    allowed_updates: list[str] | None = None


class ResponseParameters(msgspec.Struct, forbid_unknown_fields=False):
    migrate_to_chat_id: int | None = None
    retry_after: int | None = None
