"""Error types raised while handling chat events."""


class MeetingBotError(Exception):
    """Base class for errors that abort handling of a single event.

    Attributes:
        code: Platform error code, if the platform reported one
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class DecodeError(MeetingBotError):
    """The event payload could not be decoded into a Message."""


class FetchError(MeetingBotError):
    """A user, channel or history lookup did not succeed."""


class ReplyError(MeetingBotError):
    """Creating a post or adding a reaction did not succeed."""
