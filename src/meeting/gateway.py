"""
Chat platform interface used by the meeting bot.

The dispatcher, cache and topic collector only depend on this protocol;
SlackBotImpl in src.slack.app provides the concrete implementation.
"""

from typing import Protocol

from src.meeting.models import Channel, PostPage, User


class ChatGateway(Protocol):
    """Chat platform operations needed by the meeting bot.

    Read operations raise FetchError and write operations raise ReplyError
    when the platform does not report success.
    """

    async def get_user(self, user_id: str) -> User:
        """Fetch a user by ID."""
        ...

    async def get_channel(self, channel_id: str) -> Channel:
        """Fetch a channel by ID."""
        ...

    async def get_posts(self, channel_id: str, cursor: str | None, limit: int) -> PostPage:
        """Fetch one page of channel history.

        Args:
            channel_id: Channel to read
            cursor: Continuation cursor from the previous page, None for the first
            limit: Maximum number of posts in the page

        Returns:
            The page, in the order the platform returned it
        """
        ...

    async def create_post(self, channel_id: str, root_id: str | None, text: str) -> str:
        """Create a post, threaded under root_id when given.

        Returns:
            ID of the created post
        """
        ...

    async def save_reaction(self, channel_id: str, post_id: str, emoji_name: str) -> None:
        """Add an emoji reaction from the bot to a post."""
        ...
