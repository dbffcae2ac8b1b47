from __future__ import annotations

from pathlib import Path

ENDPOINT_URL = "https://api.telegram.org/bot"

CALL_TIMEOUT_S = 10.0
POLL_CALL_TIMEOUT_S = 5 * 60.0

DEFAULT_BACKOFF_S = 5.0
DEFAULT_POLL_TIMEOUT_S = 60

HOME_CONFIG_PATH = Path.home() / ".config" / "telepoll" / "telepoll.toml"
