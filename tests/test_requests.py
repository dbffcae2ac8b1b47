import msgspec

from telepoll.telegram.requests import (
    EditMessageCaption,
    EditMessageLiveLocation,
    EditMessageReplyMarkup,
    EditMessageText,
    ForceReply,
    ForwardMessage,
    GetUpdates,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    InlineQueryResultContact,
    InlineQueryResultPhoto,
    InputVenueMessageContent,
    KeyboardButton,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
    SendContact,
    SendLocation,
    SendMessage,
    SendVenue,
    StopMessageLiveLocation,
)


def _json(value: object) -> dict:
    return msgspec.json.decode(msgspec.json.encode(value))


def test_get_updates_omits_unset_fields() -> None:
    assert _json(GetUpdates()) == {}
    assert _json(
        GetUpdates(offset=8, limit=50, timeout=60, allowed_updates=["message"])
    ) == {"offset": 8, "limit": 50, "timeout": 60, "allowed_updates": ["message"]}


def test_send_variants_carry_their_method() -> None:
    variants = {
        SendMessage: "sendMessage",
        ForwardMessage: "forwardMessage",
        SendLocation: "sendLocation",
        EditMessageLiveLocation: "editMessageLiveLocation",
        StopMessageLiveLocation: "stopMessageLiveLocation",
        SendVenue: "sendVenue",
        SendContact: "sendContact",
        EditMessageText: "editMessageText",
        EditMessageCaption: "editMessageCaption",
        EditMessageReplyMarkup: "editMessageReplyMarkup",
    }
    for variant, method in variants.items():
        assert variant.method == method


def test_method_is_not_part_of_the_body() -> None:
    body = _json(ForwardMessage(chat_id=1, from_chat_id=2, message_id=3))

    assert body == {"chat_id": 1, "from_chat_id": 2, "message_id": 3}


def test_reply_markup_variants_encode_their_own_shape() -> None:
    inline = SendMessage(
        chat_id=1,
        text="pick",
        reply_markup=InlineKeyboardMarkup(
            inline_keyboard=[[InlineKeyboardButton(text="a", callback_data="a")]]
        ),
    )
    keyboard = SendMessage(
        chat_id=1,
        text="pick",
        reply_markup=ReplyKeyboardMarkup(
            keyboard=[[KeyboardButton(text="share", request_contact=True)]],
            one_time_keyboard=True,
        ),
    )

    assert _json(inline)["reply_markup"] == {
        "inline_keyboard": [[{"text": "a", "callback_data": "a"}]]
    }
    assert _json(keyboard)["reply_markup"] == {
        "keyboard": [[{"text": "share", "request_contact": True}]],
        "one_time_keyboard": True,
    }


def test_remove_and_force_reply_always_send_their_flag() -> None:
    assert _json(ReplyKeyboardRemove())["remove_keyboard"] is True
    assert _json(ForceReply(selective=True)) == {"force_reply": True, "selective": True}


def test_inline_results_are_tagged() -> None:
    photo = InlineQueryResultPhoto(
        id="p1", photo_url="https://x/p.jpg", thumb_url="https://x/t.jpg"
    )
    contact = InlineQueryResultContact(
        id="c1",
        phone_number="+100",
        first_name="Ada",
        input_message_content=InputVenueMessageContent(
            latitude=1.5, longitude=2.5, title="HQ", address="1 Main St"
        ),
    )

    assert _json(photo) == {
        "type": "photo",
        "id": "p1",
        "photo_url": "https://x/p.jpg",
        "thumb_url": "https://x/t.jpg",
    }
    body = _json(contact)
    assert body["type"] == "contact"
    assert body["input_message_content"] == {
        "latitude": 1.5,
        "longitude": 2.5,
        "title": "HQ",
        "address": "1 Main St",
    }
