"""
アプリケーションのエントリーポイント。

Slack BotをSocket Modeで起動する。
環境変数の読み込み、ボット情報の取得、ディスパッチャの構築、
ハンドラの登録、Socket Mode接続を行う。
"""

import asyncio
import logging

from slack_bolt.async_app import AsyncApp
from slack_sdk.web.async_client import AsyncWebClient

from src.config import Settings, get_settings
from src.meeting import CacheFailurePolicy, CommandDispatcher, EntityCache, TopicCollector
from src.slack import SlackBotImpl, register_handlers

logger = logging.getLogger(__name__)


async def build_dispatcher(bot: SlackBotImpl, settings: Settings) -> CommandDispatcher:
    """ボットセッション用のCommandDispatcherを構築する。

    Args:
        bot: ChatGatewayとして使うSlackBotImpl
        settings: アプリケーション設定

    Returns:
        構築されたCommandDispatcher

    Raises:
        FetchError: ボット自身のアカウント情報を取得できない場合
    """
    identity = await bot.get_bot_identity()
    logger.info("Authenticated as %s (%s)", identity.user_name, identity.user_id)

    policy = CacheFailurePolicy.CACHE if settings.cache_failed_lookups else CacheFailurePolicy.RETRY
    cache = EntityCache(bot, policy=policy)
    topics = TopicCollector(
        bot,
        bot_user_id=identity.user_id,
        page_size=settings.history_page_size,
        max_pages=settings.history_max_pages,
    )
    return CommandDispatcher(bot, cache, topics, identity)


async def main() -> None:
    """アプリケーションのエントリーポイント。

    以下の処理を順次実行する:
    1. 環境変数から設定を読み込み
    2. AsyncAppとAsyncWebClientを作成
    3. ボット情報を取得してCommandDispatcherを構築(失敗時はプロセス終了)
    4. messageイベントハンドラを登録
    5. Socket Modeで起動
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    # AsyncAppの作成
    app = AsyncApp(token=settings.slack_bot_token)

    # AsyncWebClientの作成
    client = AsyncWebClient(token=settings.slack_bot_token)

    bot = SlackBotImpl(
        app=app,
        web_client=client,
        app_token=settings.slack_app_token,
    )

    dispatcher = await build_dispatcher(bot, settings)

    # ハンドラの登録
    register_handlers(app, dispatcher)

    logger.info("Starting Meeting Bot...")
    await bot.start()


def run() -> None:
    """コンソールスクリプト用のエントリーポイント。"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
