"""
Slackイベントハンドラモジュール。

messageイベントをCommandDispatcherへ渡すハンドラを提供する。
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from slack_bolt.async_app import AsyncApp

logger = logging.getLogger(__name__)

# 型エイリアス
MessageHandler = Callable[[dict[str, Any]], Awaitable[None]]


class DispatcherProtocol(Protocol):
    """CommandDispatcher用のProtocol型。"""

    async def handle_event(self, event: dict[str, Any]) -> None:
        """イベントを1件処理する。

        Args:
            event: Slackから受信したイベントデータ
        """
        ...


def build_message_handler(dispatcher: DispatcherProtocol) -> MessageHandler:
    """messageイベント用のハンドラを生成する。

    slack-boltは引数名でイベントデータを注入するため、
    dispatcherをクロージャで包んだ関数を返す。

    Args:
        dispatcher: イベントの処理先

    Returns:
        AsyncApp.event("message")に登録するハンドラ
    """

    async def handle_message(event: dict[str, Any]) -> None:
        logger.debug(
            "Received message event",
            extra={"channel_id": event.get("channel"), "ts": event.get("ts")},
        )
        await dispatcher.handle_event(event)

    return handle_message


def register_handlers(app: AsyncApp, dispatcher: DispatcherProtocol) -> None:
    """AsyncAppにイベントハンドラを登録する。

    Args:
        app: slack-boltのAsyncAppインスタンス
        dispatcher: イベントの処理先
    """
    app.event("message")(build_message_handler(dispatcher))
    logger.info("Registered message event handler")
