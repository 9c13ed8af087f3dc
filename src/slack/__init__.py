"""
Slackモジュール。

ChatGatewayのSlack実装とイベントハンドラを提供する。
"""

from src.slack.app import SlackBot, SlackBotImpl
from src.slack.handlers import build_message_handler, register_handlers

__all__ = [
    "SlackBot",
    "SlackBotImpl",
    "build_message_handler",
    "register_handlers",
]
