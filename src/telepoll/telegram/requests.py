"""Request payloads for Telegram Bot API calls.

Every payload is a msgspec struct encoded with ``omit_defaults`` so unset
optional fields never reach the wire. Polymorphic payloads are closed
variant sets: send requests carry their remote method name in ``method``,
inline query results carry a ``type`` tag field.
"""

from __future__ import annotations

from typing import ClassVar, Literal, TypeAlias

import msgspec

from .api_models import UpdateKind

ParseMode = Literal["Markdown", "HTML"]


class _Request(msgspec.Struct, omit_defaults=True):
    pass


class GetUpdates(_Request):
    """Parameters for ``getUpdates``.

    Pollers mutate ``offset`` in place, so a request must not back two
    polling sessions at once.
    """

    offset: int = 0
    limit: int = 0
    timeout: int = 0
    allowed_updates: list[UpdateKind] = msgspec.field(default_factory=list)


class SetWebhook(_Request):
    url: str
    max_connections: int | None = None
    allowed_updates: list[UpdateKind] | None = None


# Reply markup


class KeyboardButton(_Request):
    text: str
    request_contact: bool = False
    request_location: bool = False


class ReplyKeyboardMarkup(_Request):
    keyboard: list[list[KeyboardButton]]
    resize_keyboard: bool = False
    one_time_keyboard: bool = False
    selective: bool = False


class ReplyKeyboardRemove(msgspec.Struct):
    remove_keyboard: Literal[True] = True
    selective: bool = False


class ForceReply(msgspec.Struct):
    force_reply: Literal[True] = True
    selective: bool = False


class InlineKeyboardButton(_Request):
    """Exactly one of the optional fields must be set."""

    text: str
    url: str | None = None
    callback_data: str | None = None
    switch_inline_query: str | None = None
    switch_inline_query_current_chat: str | None = None


class InlineKeyboardMarkup(_Request):
    inline_keyboard: list[list[InlineKeyboardButton]]


ReplyMarkup: TypeAlias = (
    InlineKeyboardMarkup | ReplyKeyboardMarkup | ReplyKeyboardRemove | ForceReply
)


# Send family


class _SendRequest(_Request):
    method: ClassVar[str]


class SendMessage(_SendRequest):
    method: ClassVar[str] = "sendMessage"

    chat_id: int
    text: str
    parse_mode: ParseMode | None = None
    disable_web_page_preview: bool = False
    disable_notification: bool = False
    reply_to_message_id: int | None = None
    reply_markup: ReplyMarkup | None = None


class ForwardMessage(_SendRequest):
    method: ClassVar[str] = "forwardMessage"

    chat_id: int
    from_chat_id: int
    message_id: int
    disable_notification: bool = False


class SendLocation(_SendRequest):
    method: ClassVar[str] = "sendLocation"

    chat_id: int
    latitude: float
    longitude: float
    live_period: int | None = None
    disable_notification: bool = False
    reply_to_message_id: int | None = None
    reply_markup: ReplyMarkup | None = None


class EditMessageLiveLocation(_SendRequest):
    method: ClassVar[str] = "editMessageLiveLocation"

    latitude: float
    longitude: float
    chat_id: int | None = None
    message_id: int | None = None
    inline_message_id: str | None = None
    reply_markup: InlineKeyboardMarkup | None = None


class StopMessageLiveLocation(_SendRequest):
    method: ClassVar[str] = "stopMessageLiveLocation"

    chat_id: int | None = None
    message_id: int | None = None
    inline_message_id: str | None = None
    reply_markup: InlineKeyboardMarkup | None = None


class SendVenue(_SendRequest):
    method: ClassVar[str] = "sendVenue"

    chat_id: int
    latitude: float
    longitude: float
    title: str
    address: str
    foursquare_id: str | None = None
    disable_notification: bool = False
    reply_to_message_id: int | None = None
    reply_markup: ReplyMarkup | None = None


class SendContact(_SendRequest):
    method: ClassVar[str] = "sendContact"

    chat_id: int
    phone_number: str
    first_name: str
    last_name: str | None = None
    disable_notification: bool = False
    reply_to_message_id: int | None = None
    reply_markup: ReplyMarkup | None = None


class EditMessageText(_SendRequest):
    method: ClassVar[str] = "editMessageText"

    text: str
    chat_id: int | None = None
    message_id: int | None = None
    inline_message_id: str | None = None
    parse_mode: ParseMode | None = None
    disable_web_page_preview: bool = False
    reply_markup: ReplyMarkup | None = None


class EditMessageCaption(_SendRequest):
    method: ClassVar[str] = "editMessageCaption"

    caption: str
    chat_id: int | None = None
    message_id: int | None = None
    inline_message_id: str | None = None
    parse_mode: ParseMode | None = None
    reply_markup: ReplyMarkup | None = None


class EditMessageReplyMarkup(_SendRequest):
    method: ClassVar[str] = "editMessageReplyMarkup"

    chat_id: int | None = None
    message_id: int | None = None
    inline_message_id: str | None = None
    reply_markup: ReplyMarkup | None = None


SendRequest: TypeAlias = (
    SendMessage
    | ForwardMessage
    | SendLocation
    | EditMessageLiveLocation
    | StopMessageLiveLocation
    | SendVenue
    | SendContact
    | EditMessageText
    | EditMessageCaption
    | EditMessageReplyMarkup
)


class AnswerCallbackQuery(_Request):
    callback_query_id: str
    text: str | None = None
    show_alert: bool = False
    url: str | None = None
    cache_time: int = 0


class DeleteMessage(_Request):
    chat_id: int
    message_id: int


# Inline mode


class InputTextMessageContent(_Request):
    message_text: str
    parse_mode: ParseMode | None = None
    disable_web_page_preview: bool = False


class InputLocationMessageContent(_Request):
    latitude: float
    longitude: float
    live_period: int | None = None


class InputVenueMessageContent(_Request):
    latitude: float
    longitude: float
    title: str
    address: str
    foursquare_id: str | None = None


class InputContactMessageContent(_Request):
    phone_number: str
    first_name: str
    last_name: str | None = None


InputMessageContent: TypeAlias = (
    InputTextMessageContent
    | InputLocationMessageContent
    | InputVenueMessageContent
    | InputContactMessageContent
)


class _InlineQueryResult(_Request, tag_field="type"):
    id: str


class InlineQueryResultArticle(_InlineQueryResult, tag="article"):
    title: str
    input_message_content: InputMessageContent
    reply_markup: InlineKeyboardMarkup | None = None
    url: str | None = None
    hide_url: bool = False
    description: str | None = None
    thumb_url: str | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None


class InlineQueryResultPhoto(_InlineQueryResult, tag="photo"):
    photo_url: str
    thumb_url: str
    photo_width: int | None = None
    photo_height: int | None = None
    title: str | None = None
    description: str | None = None
    caption: str | None = None
    parse_mode: ParseMode | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None


class InlineQueryResultGif(_InlineQueryResult, tag="gif"):
    gif_url: str
    gif_width: int | None = None
    gif_height: int | None = None
    gif_duration: int | None = None
    thumb_url: str | None = None
    title: str | None = None
    caption: str | None = None
    parse_mode: ParseMode | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None


class InlineQueryResultMpeg4Gif(_InlineQueryResult, tag="mpeg4_gif"):
    mpeg4_url: str
    mpeg4_width: int | None = None
    mpeg4_height: int | None = None
    mpeg4_duration: int | None = None
    thumb_url: str | None = None
    title: str | None = None
    caption: str | None = None
    parse_mode: ParseMode | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None


class InlineQueryResultVideo(_InlineQueryResult, tag="video"):
    video_url: str
    mime_type: Literal["text/html", "video/mp4"]
    thumb_url: str
    title: str
    caption: str | None = None
    parse_mode: ParseMode | None = None
    video_width: int | None = None
    video_height: int | None = None
    video_duration: int | None = None
    description: str | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None


class InlineQueryResultAudio(_InlineQueryResult, tag="audio"):
    audio_url: str
    title: str
    caption: str | None = None
    parse_mode: ParseMode | None = None
    performer: str | None = None
    audio_duration: int | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None


class InlineQueryResultVoice(_InlineQueryResult, tag="voice"):
    voice_url: str
    title: str
    caption: str | None = None
    parse_mode: ParseMode | None = None
    voice_duration: int | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None


class InlineQueryResultDocument(_InlineQueryResult, tag="document"):
    title: str
    document_url: str
    mime_type: Literal["application/pdf", "application/zip"]
    caption: str | None = None
    parse_mode: ParseMode | None = None
    description: str | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None
    thumb_url: str | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None


class InlineQueryResultLocation(_InlineQueryResult, tag="location"):
    latitude: float
    longitude: float
    title: str
    live_period: int | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None
    thumb_url: str | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None


class InlineQueryResultVenue(_InlineQueryResult, tag="venue"):
    latitude: float
    longitude: float
    title: str
    address: str
    foursquare_id: str | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None
    thumb_url: str | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None


class InlineQueryResultContact(_InlineQueryResult, tag="contact"):
    phone_number: str
    first_name: str
    last_name: str | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    input_message_content: InputMessageContent | None = None
    thumb_url: str | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None


InlineQueryResult: TypeAlias = (
    InlineQueryResultArticle
    | InlineQueryResultPhoto
    | InlineQueryResultGif
    | InlineQueryResultMpeg4Gif
    | InlineQueryResultVideo
    | InlineQueryResultAudio
    | InlineQueryResultVoice
    | InlineQueryResultDocument
    | InlineQueryResultLocation
    | InlineQueryResultVenue
    | InlineQueryResultContact
)


class AnswerInlineQuery(_Request):
    inline_query_id: str
    results: list[InlineQueryResult]
    cache_time: int | None = None
    is_personal: bool = False
    next_offset: str | None = None
    switch_pm_text: str | None = None
    switch_pm_parameter: str | None = None
