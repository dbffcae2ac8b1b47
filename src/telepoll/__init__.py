"""Telegram Bot API client with a cancellable long-polling update stream."""

__version__ = "0.1.0"
