"""
ミーティングボットの型定義モジュール。

Slackから受信した生のペイロードを境界で一度だけデコードし、
以降は型付きのモデルとして扱う:
- ChannelKind: チャンネル種別を表すEnum
- Channel, User, Reaction, Message: プラットフォーム上のエンティティ
- BotIdentity: ボット自身のアカウント情報
- PostPage: 履歴取得の1ページ分
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.meeting.errors import DecodeError
from src.meeting.text import extract_hashtags


class ChannelKind(Enum):
    """チャンネル種別。

    - DIRECT: ユーザーとボットの1対1の会話
    - GROUP: 複数人のダイレクトメッセージ(ボットへのメンションが必要)
    - OTHER: 公開・非公開チャンネルなど上記以外(未対応)
    """

    DIRECT = "direct"
    GROUP = "group"
    OTHER = "other"


class Channel(BaseModel):
    """チャンネル情報。

    Attributes:
        id: SlackチャンネルID
        kind: チャンネル種別
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: ChannelKind

    @classmethod
    def from_slack(cls, data: dict[str, Any]) -> "Channel":
        """conversations.infoの`channel`オブジェクトから生成する。"""
        if data.get("is_im"):
            kind = ChannelKind.DIRECT
        elif data.get("is_mpim"):
            kind = ChannelKind.GROUP
        else:
            kind = ChannelKind.OTHER
        return cls(id=data["id"], kind=kind)


class User(BaseModel):
    """ユーザー情報。

    Attributes:
        id: SlackユーザーID
        name: 表示名
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str

    @classmethod
    def from_slack(cls, data: dict[str, Any]) -> "User":
        """users.infoの`user`オブジェクトから生成する。

        表示名はprofile.display_name、real_name、nameの順で最初の空でない値を使う。
        """
        profile = data.get("profile") or {}
        name = profile.get("display_name") or data.get("real_name") or data.get("name") or ""
        return cls(id=data["id"], name=name)


class Reaction(BaseModel):
    """メッセージに付いたリアクション。

    Attributes:
        user_id: リアクションしたユーザーのID
        emoji_name: 絵文字名(コロンなし、例: "white_check_mark")
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    emoji_name: str


class Message(BaseModel):
    """投稿されたメッセージ。

    Attributes:
        id: メッセージID(Slackではts)
        channel_id: 投稿先チャンネルID
        user_id: 投稿者のユーザーID
        text: 本文
        hashtags: 本文中のハッシュタグを半角スペースで連結した文字列
        reactions: 付与されたリアクション(順序を保持)
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    channel_id: str = Field(..., min_length=1)
    user_id: str = ""
    text: str = ""
    hashtags: str = ""
    reactions: tuple[Reaction, ...] = ()

    @classmethod
    def from_slack(cls, payload: dict[str, Any], channel_id: str | None = None) -> "Message":
        """Slackのメッセージペイロードをデコードする。

        messageイベントとconversations.historyの要素の両方を受け付ける。
        履歴の要素はchannelを持たないため、channel_idで補う。

        Args:
            payload: Slackのメッセージペイロード
            channel_id: ペイロードにchannelがない場合に使うチャンネルID

        Returns:
            デコードされたMessage

        Raises:
            DecodeError: ペイロードの形式が不正な場合
        """
        if not isinstance(payload, dict):
            raise DecodeError(f"Message payload must be an object, got {type(payload).__name__}")

        text = payload.get("text") or ""
        try:
            reactions = tuple(
                Reaction(user_id=user_id, emoji_name=reaction["name"])
                for reaction in payload.get("reactions") or []
                for user_id in reaction.get("users") or []
            )
            return cls(
                id=payload.get("ts") or "",
                channel_id=payload.get("channel") or channel_id or "",
                user_id=payload.get("user") or "",
                text=text,
                hashtags=extract_hashtags(text) if isinstance(text, str) else "",
                reactions=reactions,
            )
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"Could not decode message: {e}") from e


class BotIdentity(BaseModel):
    """ボット自身のアカウント情報(auth.testの結果)。

    Attributes:
        user_id: ボットのユーザーID
        user_name: ボットのユーザー名
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    user_name: str


class PostPage(BaseModel):
    """チャンネル履歴の1ページ分。

    Attributes:
        messages: 取得したメッセージ(取得元の順序を保持)
        next_cursor: 次ページのカーソル。最終ページではNone
    """

    messages: list[Message]
    next_cursor: str | None = None
