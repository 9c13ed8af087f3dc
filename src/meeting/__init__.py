"""
ミーティングボットのコアモジュール。

メッセージの分類・コマンド処理、トピック収集、エンティティキャッシュを担当する。
"""

from src.meeting.cache import CacheFailurePolicy, EntityCache
from src.meeting.dispatcher import HELP_TEXT, CommandDispatcher
from src.meeting.errors import DecodeError, FetchError, MeetingBotError, ReplyError
from src.meeting.gateway import ChatGateway
from src.meeting.models import (
    BotIdentity,
    Channel,
    ChannelKind,
    Message,
    PostPage,
    Reaction,
    User,
)
from src.meeting.topics import TopicCollector, is_open_topic

__all__ = [
    "HELP_TEXT",
    "BotIdentity",
    "CacheFailurePolicy",
    "Channel",
    "ChannelKind",
    "ChatGateway",
    "CommandDispatcher",
    "DecodeError",
    "EntityCache",
    "FetchError",
    "Message",
    "MeetingBotError",
    "PostPage",
    "Reaction",
    "ReplyError",
    "TopicCollector",
    "User",
    "is_open_topic",
]
