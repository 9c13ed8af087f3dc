"""
Pytest設定と共有フィクスチャ。

プロジェクト全体で共有されるフィクスチャと設定を定義します。
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from src.meeting.gateway import ChatGateway
from src.meeting.models import BotIdentity, Channel, ChannelKind, PostPage

BOT_USER_ID = "U_BOT"
BOT_USER_NAME = "bot"


@pytest.fixture
def bot_identity() -> BotIdentity:
    """テスト用のボット情報を提供。"""
    return BotIdentity(user_id=BOT_USER_ID, user_name=BOT_USER_NAME)


@pytest.fixture
def mock_gateway() -> MagicMock:
    """ChatGatewayのモックを提供。

    既定ではチャンネルはグループ、履歴は空。
    """
    gateway = MagicMock(spec=ChatGateway)
    gateway.get_user = AsyncMock()
    gateway.get_channel = AsyncMock(
        side_effect=lambda channel_id: Channel(id=channel_id, kind=ChannelKind.GROUP)
    )
    gateway.get_posts = AsyncMock(return_value=PostPage(messages=[]))
    gateway.create_post = AsyncMock(return_value="1700000000.999999")
    gateway.save_reaction = AsyncMock()
    return gateway


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """Slackのmessageイベントを生成する関数を提供。"""
    counter = iter(range(1, 10_000))

    def _make(
        text: str,
        user: str = "U12345",
        channel: str = "C12345",
        ts: str | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {
            "type": "message",
            "user": user,
            "text": text,
            "ts": ts or f"1700000000.{next(counter):06d}",
            "channel": channel,
        }
        event.update(extra)
        return event

    return _make
