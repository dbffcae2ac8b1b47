from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    StringConstraints,
    ValidationError,
    model_validator,
)
from pydantic.types import NonNegativeInt, StrictInt
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import TomlConfigSettingsSource

from .config import ConfigError, read_config
from .constants import (
    CALL_TIMEOUT_S,
    DEFAULT_BACKOFF_S,
    DEFAULT_POLL_TIMEOUT_S,
    ENDPOINT_URL,
    HOME_CONFIG_PATH,
    POLL_CALL_TIMEOUT_S,
)
from .telegram.api_models import UpdateKind
from .telegram.requests import GetUpdates

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class PollingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    timeout: StrictInt = DEFAULT_POLL_TIMEOUT_S
    limit: NonNegativeInt = 0
    allowed_updates: list[UpdateKind] = Field(default_factory=list)

    def to_request(self) -> GetUpdates:
        return GetUpdates(
            limit=self.limit,
            timeout=self.timeout,
            allowed_updates=list(self.allowed_updates),
        )


class TelepollSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="TELEPOLL__",
        env_nested_delimiter="__",
        str_strip_whitespace=True,
    )

    bot_token: NonEmptyStr
    endpoint: NonEmptyStr = ENDPOINT_URL
    call_timeout_s: PositiveFloat = CALL_TIMEOUT_S
    poll_timeout_s: PositiveFloat = POLL_CALL_TIMEOUT_S
    backoff_s: PositiveFloat = DEFAULT_BACKOFF_S
    polling: PollingSettings = Field(default_factory=PollingSettings)

    @model_validator(mode="after")
    def _poll_fits_budget(self) -> TelepollSettings:
        timeout = self.polling.timeout
        if timeout <= 0:
            timeout = DEFAULT_POLL_TIMEOUT_S
        if timeout >= self.poll_timeout_s:
            raise ValueError(
                f"polling.timeout ({timeout}s) must be shorter than "
                f"poll_timeout_s ({self.poll_timeout_s:g}s)"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(path: str | Path | None = None) -> tuple[TelepollSettings, Path]:
    cfg_path = _resolve_config_path(path)
    _ensure_config_file(cfg_path)
    return _load_settings_from_path(cfg_path), cfg_path


def load_settings_if_exists(
    path: str | Path | None = None,
) -> tuple[TelepollSettings, Path] | None:
    cfg_path = _resolve_config_path(path)
    if cfg_path.exists():
        _ensure_config_file(cfg_path)
        return _load_settings_from_path(cfg_path), cfg_path
    return None


def _resolve_config_path(path: str | Path | None) -> Path:
    return Path(path).expanduser() if path else HOME_CONFIG_PATH


def _ensure_config_file(cfg_path: Path) -> None:
    if cfg_path.exists() and not cfg_path.is_file():
        raise ConfigError(f"Config path {cfg_path} exists but is not a file.") from None
    # surfaces missing files and malformed TOML as ConfigError
    read_config(cfg_path)


def _load_settings_from_path(cfg_path: Path) -> TelepollSettings:
    cfg = dict(TelepollSettings.model_config)
    cfg["toml_file"] = cfg_path
    Bound = type(
        "TelepollSettingsBound",
        (TelepollSettings,),
        {"model_config": SettingsConfigDict(**cfg)},
    )
    try:
        return Bound()
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {cfg_path}: {exc}") from exc
