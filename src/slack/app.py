"""
SlackBot実装モジュール。

ChatGatewayプロトコルのSlack実装を提供する。
- Protocol型でインターフェースを定義
- AsyncAppを使用し、全ハンドラをasync defで統一
- 依存性注入パターン(外部依存は引数で注入)
- SlackApiErrorはFetchError/ReplyErrorに変換する
"""

import logging
from typing import Protocol

from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler as SocketModeHandler
from slack_bolt.async_app import AsyncApp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from src.meeting.errors import FetchError, ReplyError
from src.meeting.gateway import ChatGateway
from src.meeting.models import BotIdentity, Channel, Message, PostPage, User

logger = logging.getLogger(__name__)

# reactions.addで同じ絵文字を付け直した場合のエラー(冪等な成功として扱う)
ALREADY_REACTED = "already_reacted"


def _error_code(error: SlackApiError) -> str | None:
    """SlackApiErrorからエラーコードを取り出す。"""
    response = error.response
    if response is None:
        return None
    code: str | None = response.get("error")
    return code


class SlackBot(ChatGateway, Protocol):
    """SlackBotのインターフェース定義。

    ChatGatewayにSocket Mode接続とボット情報の取得を加えたもの。
    """

    async def start(self) -> None:
        """Socket Mode接続を開始する。"""
        ...

    async def get_bot_identity(self) -> BotIdentity:
        """ボット自身のアカウント情報を取得する。"""
        ...


class SlackBotImpl:
    """SlackBotプロトコルの具体的な実装。

    slack-boltのAsyncAppとAsyncWebClientを使用してSlack APIと通信する。
    Socket Modeで接続し、リアルタイムでイベントを受信する。

    Attributes:
        _app: slack-boltのAsyncAppインスタンス
        _web_client: Slack Web APIクライアント
        _app_token: Socket Mode用のアプリトークン
        _handler: Socket Modeハンドラ
    """

    def __init__(
        self,
        app: AsyncApp,
        web_client: AsyncWebClient,
        app_token: str | None = None,
    ) -> None:
        """SlackBotImplを初期化する。

        Args:
            app: slack-boltのAsyncAppインスタンス
            web_client: Slack Web APIクライアント
            app_token: Socket Mode用のアプリトークン(xapp-で始まる)
        """
        self._app = app
        self._web_client = web_client
        self._app_token = app_token
        self._handler: SocketModeHandler | None = None

    async def start(self) -> None:
        """Socket Mode接続を開始する。

        Socket Modeを使用してSlackとのリアルタイム接続を確立する。
        この接続はWebSocket経由で維持され、切断時はSDKが再接続する。

        Raises:
            ValueError: app_tokenが設定されていない場合
        """
        if self._app_token is None:
            msg = "app_token is required for Socket Mode"
            raise ValueError(msg)

        self._handler = SocketModeHandler(app=self._app, app_token=self._app_token)
        logger.info("Starting Socket Mode connection...")
        await self._handler.start_async()
        logger.info("Socket Mode connection closed")

    async def get_bot_identity(self) -> BotIdentity:
        """auth.testでボット自身のアカウント情報を取得する。

        Returns:
            ボットのユーザーIDとユーザー名

        Raises:
            FetchError: 認証に失敗した場合
        """
        try:
            response = await self._web_client.auth_test()
        except SlackApiError as e:
            raise FetchError(f"Could not get bot account: {e}", _error_code(e)) from e
        return BotIdentity(user_id=response["user_id"], user_name=response.get("user") or "")

    async def get_user(self, user_id: str) -> User:
        """users.infoでユーザーを取得する。

        Args:
            user_id: ユーザーID

        Returns:
            取得したユーザー

        Raises:
            FetchError: 取得に失敗した場合
        """
        try:
            response = await self._web_client.users_info(user=user_id)
        except SlackApiError as e:
            raise FetchError(f"Could not fetch user {user_id}: {e}", _error_code(e)) from e
        return User.from_slack(response["user"])

    async def get_channel(self, channel_id: str) -> Channel:
        """conversations.infoでチャンネルを取得する。

        Args:
            channel_id: チャンネルID

        Returns:
            取得したチャンネル

        Raises:
            FetchError: 取得に失敗した場合
        """
        try:
            response = await self._web_client.conversations_info(channel=channel_id)
        except SlackApiError as e:
            raise FetchError(f"Could not fetch channel {channel_id}: {e}", _error_code(e)) from e
        return Channel.from_slack(response["channel"])

    async def get_posts(self, channel_id: str, cursor: str | None, limit: int) -> PostPage:
        """conversations.historyでチャンネル履歴を1ページ取得する。

        Args:
            channel_id: チャンネルID
            cursor: 前ページのnext_cursor(先頭ページはNone)
            limit: 1ページの最大件数

        Returns:
            取得したページ(Slackの返却順、新しい順)

        Raises:
            FetchError: 取得に失敗した場合
        """
        try:
            response = await self._web_client.conversations_history(
                channel=channel_id,
                cursor=cursor,
                limit=limit,
            )
        except SlackApiError as e:
            raise FetchError(f"Could not fetch posts for {channel_id}: {e}", _error_code(e)) from e

        messages = [Message.from_slack(m, channel_id=channel_id) for m in response.get("messages") or []]
        metadata = response.get("response_metadata") or {}
        return PostPage(messages=messages, next_cursor=metadata.get("next_cursor") or None)

    async def create_post(self, channel_id: str, root_id: str | None, text: str) -> str:
        """メッセージを投稿する。

        Args:
            channel_id: 投稿先チャンネルID
            root_id: スレッドの親メッセージのts(スレッド返信でない場合はNone)
            text: 投稿するテキスト

        Returns:
            投稿されたメッセージのタイムスタンプ

        Raises:
            ReplyError: 投稿に失敗した場合
        """
        try:
            response = await self._web_client.chat_postMessage(
                channel=channel_id,
                text=text,
                thread_ts=root_id,
            )
        except SlackApiError as e:
            raise ReplyError(f"Could not post to {channel_id}: {e}", _error_code(e)) from e
        ts: str = response["ts"]
        return ts

    async def save_reaction(self, channel_id: str, post_id: str, emoji_name: str) -> None:
        """メッセージにリアクションを付ける。

        既に同じ絵文字が付いている場合は成功として扱う。

        Args:
            channel_id: チャンネルID
            post_id: 対象メッセージのts
            emoji_name: 絵文字名

        Raises:
            ReplyError: リアクションに失敗した場合
        """
        try:
            await self._web_client.reactions_add(
                channel=channel_id,
                timestamp=post_id,
                name=emoji_name,
            )
        except SlackApiError as e:
            code = _error_code(e)
            if code == ALREADY_REACTED:
                logger.debug("Reaction already present: post_id=%s, emoji=%s", post_id, emoji_name)
                return
            raise ReplyError(f"Could not react to {post_id}: {e}", code) from e
