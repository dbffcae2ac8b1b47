"""Telegram Bot API transport, models, and update polling."""

from .api_models import Update, UpdateKind, User
from .bot import Bot
from .caller import Caller
from .errors import (
    DecodeError,
    RemoteError,
    TelegramError,
    TransportError,
    TransportTimeout,
)
from .poller import PollSession, UpdatePoller
from .requests import GetUpdates

__all__ = [
    "Bot",
    "Caller",
    "DecodeError",
    "GetUpdates",
    "PollSession",
    "RemoteError",
    "TelegramError",
    "TransportError",
    "TransportTimeout",
    "Update",
    "UpdateKind",
    "UpdatePoller",
    "User",
]
