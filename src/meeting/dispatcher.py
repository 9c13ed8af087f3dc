"""
Command dispatcher module.

Classifies each message event by channel kind and command text and issues
the matching replies:
- Direct channel: "ping" (reaction) and "help" (threaded help post)
- Group channel: #topic/#agenda and #todo/#task acknowledgement reactions,
  plus "list topics" and "complete all" when the bot is mentioned

Events are handled one at a time, in arrival order. A failed platform call
abandons the current event; nothing is retried.
"""

import asyncio
import logging
from typing import Any

from src.meeting.cache import EntityCache
from src.meeting.errors import DecodeError, MeetingBotError
from src.meeting.gateway import ChatGateway
from src.meeting.models import BotIdentity, ChannelKind, Message
from src.meeting.text import mentions_user, strip_hashtags, strip_mentions_and_hashtags
from src.meeting.topics import TASK_MARKERS, TOPIC_MARKERS, TopicCollector

logger = logging.getLogger(__name__)

# Reaction emoji names
PING_EMOJI = "ping_pong"
TOPIC_EMOJI = "pencil2"
TASK_EMOJI = "memo"
COMPLETED_EMOJI = "white_check_mark"

# Message subtypes that carry a regular user post
HANDLED_SUBTYPES = frozenset({None, "thread_broadcast", "file_share"})

HELP_TEXT = """
# Meeting Bot

Supported commands:

To the bot account:
* ping: Check if the bot is up, will respond with a reaction
* help: This message

In a group chat:
* Add the #topic or #agenda hashtag to a message to add a topic
* Add the #todo or #task hashtag to a message to note a task
* "@bot list topics" to list all non completed topics
* "@bot complete all" to mark all topics as complete
"""


class CommandDispatcher:
    """Routes message events to reply actions.

    Attributes:
        _gateway: Chat platform gateway
        _cache: User/channel cache
        _topics: Topic collector
        _bot: The bot's own identity
        _lock: Serializes event handling
    """

    def __init__(
        self,
        gateway: ChatGateway,
        cache: EntityCache,
        topics: TopicCollector,
        bot: BotIdentity,
    ) -> None:
        """Initialize CommandDispatcher.

        Args:
            gateway: Chat platform gateway
            cache: User/channel cache
            topics: Topic collector
            bot: The bot's own identity
        """
        self._gateway = gateway
        self._cache = cache
        self._topics = topics
        self._bot = bot
        self._lock = asyncio.Lock()

    async def handle_event(self, event: dict[str, Any]) -> None:
        """Handle a single message event.

        Errors are logged and end the handling of this event only.

        Args:
            event: Message event payload received from Slack
        """
        async with self._lock:
            try:
                await self._dispatch(event)
            except DecodeError as e:
                logger.warning("Dropping undecodable event: %s", e)
            except MeetingBotError as e:
                logger.error(
                    "Event handling aborted: %s",
                    e,
                    extra={"error_type": type(e).__name__, "error_code": e.code},
                )

    def _is_ignored(self, event: dict[str, Any]) -> bool:
        subtype = event.get("subtype")
        if not isinstance(subtype, str | None):
            raise DecodeError(f"Message subtype must be a string, got {type(subtype).__name__}")
        if subtype not in HANDLED_SUBTYPES:
            logger.debug("Ignoring message subtype: %s", subtype)
            return True
        if event.get("user") == self._bot.user_id:
            logger.debug("Ignoring own message: ts=%s", event.get("ts"))
            return True
        return False

    async def _dispatch(self, event: dict[str, Any]) -> None:
        if not isinstance(event, dict):
            raise DecodeError(f"Event must be an object, got {type(event).__name__}")
        if self._is_ignored(event):
            return

        message = Message.from_slack(event)
        channel = await self._cache.get_channel(message.channel_id)

        logger.info(
            "Received message",
            extra={
                "channel_id": message.channel_id,
                "channel_kind": channel.kind.value,
                "user_id": message.user_id,
                "ts": message.id,
            },
        )

        match channel.kind:
            case ChannelKind.DIRECT:
                await self._handle_direct(message)
            case ChannelKind.GROUP:
                await self._handle_group(message)
            case _:
                logger.debug("Ignoring message in unsupported channel: %s", channel.id)

    async def _handle_direct(self, message: Message) -> None:
        match message.text:
            case "ping":
                await self._react(message, PING_EMOJI)
            case "help":
                await self._gateway.create_post(message.channel_id, message.id, HELP_TEXT)
            case _:
                pass

    async def _handle_group(self, message: Message) -> None:
        if message.hashtags in TOPIC_MARKERS:
            await self._react(message, TOPIC_EMOJI)
        elif message.hashtags in TASK_MARKERS:
            await self._react(message, TASK_EMOJI)

        if not mentions_user(message.text, self._bot.user_id, self._bot.user_name):
            return

        match strip_mentions_and_hashtags(message.text):
            case "list topics":
                await self._list_topics(message)
            case "complete all":
                await self._complete_all(message)
            case command:
                logger.debug("Unknown command: %r", command)

    async def _list_topics(self, message: Message) -> None:
        topics = await self._topics.list_open_topics(message.channel_id)
        body = "\n".join(f"* {strip_hashtags(topic.text)}" for topic in topics)
        await self._gateway.create_post(message.channel_id, message.id, body)
        logger.info("Listed %d open topics in %s", len(topics), message.channel_id)

    async def _complete_all(self, message: Message) -> None:
        topics = await self._topics.list_open_topics(message.channel_id)
        for topic in topics:
            await self._react(topic, COMPLETED_EMOJI)
        await self._react(message, COMPLETED_EMOJI)
        logger.info("Completed %d topics in %s", len(topics), message.channel_id)

    async def _react(self, message: Message, emoji_name: str) -> None:
        await self._gateway.save_reaction(message.channel_id, message.id, emoji_name)
