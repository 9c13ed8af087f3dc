"""
Entity cache module.

Memoizes user and channel lookups for the lifetime of a bot session.
Entries are never evicted; users and channels are treated as immutable
while the session runs.
"""

import logging
from enum import Enum

from src.meeting.errors import FetchError
from src.meeting.gateway import ChatGateway
from src.meeting.models import Channel, ChannelKind, User

logger = logging.getLogger(__name__)


class CacheFailurePolicy(Enum):
    """What the cache does when a lookup fails.

    - RETRY: raise FetchError and store nothing, so the next lookup refetches
    - CACHE: store a placeholder entity and return it for the rest of the session
    """

    RETRY = "retry"
    CACHE = "cache"


class EntityCache:
    """User and channel cache backed by a ChatGateway.

    Attributes:
        _gateway: Chat platform gateway
        _policy: Failure policy
        _users: Cached users (user_id -> User)
        _channels: Cached channels (channel_id -> Channel)
    """

    def __init__(
        self,
        gateway: ChatGateway,
        policy: CacheFailurePolicy = CacheFailurePolicy.RETRY,
    ) -> None:
        """Initialize EntityCache.

        Args:
            gateway: Chat platform gateway
            policy: Failure policy (default: RETRY)
        """
        self._gateway = gateway
        self._policy = policy
        self._users: dict[str, User] = {}
        self._channels: dict[str, Channel] = {}

    @property
    def policy(self) -> CacheFailurePolicy:
        """Return the failure policy."""
        return self._policy

    async def get_user(self, user_id: str) -> User:
        """Return the user, fetching it on the first lookup.

        Raises:
            FetchError: If the fetch fails under the RETRY policy
        """
        user = self._users.get(user_id)
        if user is not None:
            return user

        try:
            user = await self._gateway.get_user(user_id)
        except FetchError as e:
            if self._policy is CacheFailurePolicy.RETRY:
                raise
            logger.warning("User lookup failed, caching placeholder: user_id=%s, error=%s", user_id, e)
            user = User(id=user_id, name="")

        self._users[user_id] = user
        return user

    async def get_channel(self, channel_id: str) -> Channel:
        """Return the channel, fetching it on the first lookup.

        Raises:
            FetchError: If the fetch fails under the RETRY policy
        """
        channel = self._channels.get(channel_id)
        if channel is not None:
            return channel

        try:
            channel = await self._gateway.get_channel(channel_id)
        except FetchError as e:
            if self._policy is CacheFailurePolicy.RETRY:
                raise
            logger.warning(
                "Channel lookup failed, caching placeholder: channel_id=%s, error=%s",
                channel_id,
                e,
            )
            channel = Channel(id=channel_id, kind=ChannelKind.OTHER)

        self._channels[channel_id] = channel
        return channel
