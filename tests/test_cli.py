from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog
import typer
from typer.testing import CliRunner

from telepoll import __version__, cli
from telepoll.settings import TelepollSettings
from telepoll.telegram.api_models import Message, Update, User
from telepoll.telegram.poller import UpdatePoller
from telepoll.telegram.requests import GetUpdates

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    monkeypatch.setenv("TELEPOLL_LOG_LEVEL", "error")
    monkeypatch.delenv("TELEPOLL__BOT_TOKEN", raising=False)
    yield
    structlog.reset_defaults()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "telepoll.toml"
    path.write_text('bot_token = "123:abc"\n[polling]\ntimeout = 20\n', encoding="utf-8")
    return path


class _CountingSource:
    def __init__(self) -> None:
        self.next_id = 1

    async def get_updates(self, request: GetUpdates) -> list[Update]:
        update = Update(update_id=self.next_id, message=Message(message_id=self.next_id))
        self.next_id += 1
        return [update]


class _FakeBot:
    instances: list[_FakeBot] = []

    def __init__(self) -> None:
        self.self_user = User(id=7, is_bot=True, first_name="Poller")
        self.source = _CountingSource()
        self.requests: list[GetUpdates] = []
        self.closed = False

    @classmethod
    async def from_settings(cls, settings: TelepollSettings) -> _FakeBot:
        bot = cls()
        cls.instances.append(bot)
        return bot

    async def __aenter__(self) -> _FakeBot:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True

    def poll_updates(self, request: GetUpdates):
        self.requests.append(request)

        async def no_sleep(delay: float) -> None:
            _ = delay

        return UpdatePoller(self.source, sleep=no_sleep).session(request)

    async def delete_webhook(self) -> bool:
        return True


@pytest.fixture
def fake_bot(monkeypatch) -> type[_FakeBot]:
    _FakeBot.instances = []
    monkeypatch.setattr(cli, "Bot", _FakeBot)
    return _FakeBot


def test_version_flag() -> None:
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_missing_config_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["--config", str(tmp_path / "none.toml"), "me"])

    assert result.exit_code == 1
    assert "Missing config file" in result.output


def test_me_prints_bot_identity(config_path: Path, fake_bot) -> None:
    result = runner.invoke(cli.app, ["--config", str(config_path), "me"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["first_name"] == "Poller"
    assert fake_bot.instances[0].closed


def test_delete_webhook(config_path: Path, fake_bot) -> None:
    result = runner.invoke(cli.app, ["--config", str(config_path), "delete-webhook"])

    assert result.exit_code == 0, result.output
    assert "webhook deleted" in result.output


def test_poll_stops_after_max(config_path: Path, fake_bot) -> None:
    result = runner.invoke(
        cli.app,
        ["--config", str(config_path), "poll", "--max", "3", "--allowed", "message"],
    )

    assert result.exit_code == 0, result.output
    lines = [json.loads(line) for line in result.output.splitlines() if line.strip()]
    assert [line["update_id"] for line in lines] == [1, 2, 3]
    (request,) = fake_bot.instances[0].requests
    assert request.timeout == 20
    assert request.allowed_updates == ["message"]
    assert request.offset >= 4


def test_poll_rejects_unknown_kind(config_path: Path, fake_bot) -> None:
    result = runner.invoke(
        cli.app, ["--config", str(config_path), "poll", "--allowed", "shipping_query"]
    )

    assert result.exit_code == 2
    assert fake_bot.instances == []


def test_build_poll_request_overrides_settings() -> None:
    settings = TelepollSettings(
        bot_token="t", polling={"timeout": 30, "limit": 5, "allowed_updates": ["message"]}
    )

    request = cli.build_poll_request(
        settings, limit=10, timeout=None, allowed=["callback_query", "inline_query"]
    )

    assert request == GetUpdates(
        limit=10, timeout=30, allowed_updates=["callback_query", "inline_query"]
    )


def test_build_poll_request_keeps_settings_when_not_overridden() -> None:
    settings = TelepollSettings(bot_token="t", polling={"allowed_updates": ["message"]})

    request = cli.build_poll_request(settings, limit=None, timeout=None, allowed=[])

    assert request.allowed_updates == ["message"]
    assert request.timeout == 60


def test_build_poll_request_rejects_unknown_kind() -> None:
    settings = TelepollSettings(bot_token="t")

    with pytest.raises(typer.BadParameter, match="poll_answer"):
        cli.build_poll_request(settings, limit=None, timeout=None, allowed=["poll_answer"])


def test_build_poll_request_rejects_timeout_over_http_budget() -> None:
    settings = TelepollSettings(bot_token="t", poll_timeout_s=90)

    with pytest.raises(typer.BadParameter, match="poll_timeout_s"):
        cli.build_poll_request(settings, limit=None, timeout=90, allowed=[])
