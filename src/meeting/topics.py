"""
Topic collector module.

A topic is a message tagged #topic or #agenda that the bot did not write
and that nobody has marked done with a "check" reaction yet.
"""

import logging

from src.meeting.gateway import ChatGateway
from src.meeting.models import Message

TOPIC_MARKERS = frozenset({"#topic", "#agenda"})
TASK_MARKERS = frozenset({"#todo", "#task"})

# Any reaction whose name contains this marks a topic done
# (white_check_mark, heavy_check_mark, ballot_box_with_check, ...)
COMPLETION_MARKER = "check"

DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_PAGES = 1

logger = logging.getLogger(__name__)


def is_open_topic(message: Message, bot_user_id: str) -> bool:
    """Return True if message is a topic that has not been completed.

    Args:
        message: Message to check
        bot_user_id: The bot's own user ID

    Returns:
        True if the hashtag string is exactly a topic marker, the author is
        not the bot and no reaction name contains "check".
    """
    if message.hashtags not in TOPIC_MARKERS:
        return False
    if message.user_id == bot_user_id:
        return False
    return not any(COMPLETION_MARKER in reaction.emoji_name for reaction in message.reactions)


class TopicCollector:
    """Collects open topics from a channel's recent history.

    Only the newest page_size * max_pages posts are scanned.

    Attributes:
        _gateway: Chat platform gateway
        _bot_user_id: The bot's own user ID
        _page_size: Posts per history page
        _max_pages: Maximum number of pages to read
    """

    def __init__(
        self,
        gateway: ChatGateway,
        bot_user_id: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        """Initialize TopicCollector.

        Args:
            gateway: Chat platform gateway
            bot_user_id: The bot's own user ID
            page_size: Posts per history page (default: 100)
            max_pages: Maximum number of pages to read (default: 1)
        """
        if page_size < 1 or max_pages < 1:
            msg = "page_size and max_pages must be positive"
            raise ValueError(msg)
        self._gateway = gateway
        self._bot_user_id = bot_user_id
        self._page_size = page_size
        self._max_pages = max_pages

    async def list_open_topics(self, channel_id: str) -> list[Message]:
        """Return the open topics of a channel in history order.

        Args:
            channel_id: Channel to scan

        Returns:
            Open topic messages, in the order the history pages returned them

        Raises:
            FetchError: If any history page cannot be fetched
        """
        topics: list[Message] = []
        cursor: str | None = None
        scanned = 0

        for _ in range(self._max_pages):
            page = await self._gateway.get_posts(channel_id, cursor, self._page_size)
            scanned += len(page.messages)
            topics.extend(m for m in page.messages if is_open_topic(m, self._bot_user_id))

            cursor = page.next_cursor
            if not cursor:
                break

        logger.debug(
            "Collected open topics: channel_id=%s, scanned=%d, open=%d",
            channel_id,
            scanned,
            len(topics),
        )
        return topics
