"""
Message text helpers.

Strips routing metadata (mentions and hashtags) from message bodies and
extracts the hashtag string the dispatcher matches commands against.
"""

import re

# Slack encodes user mentions as <@U123> or <@U123|label>
MENTION_OR_HASHTAG_PATTERN = re.compile(r"<@[^>\s]+>|[@#]\S+")
HASHTAG_PATTERN = re.compile(r"#\S+")

# Hashtags start a token; <#C123|name> is a channel link, not a hashtag
HASHTAG_TOKEN_PATTERN = re.compile(r"(?<!\S)#\S+")
TRAILING_PUNCTUATION_PATTERN = re.compile(r"[^\w\-]+$")


def strip_mentions_and_hashtags(text: str) -> str:
    """Remove every mention and hashtag token from text.

    Args:
        text: Raw message body

    Returns:
        The body without mention/hashtag tokens, trimmed.
    """
    return MENTION_OR_HASHTAG_PATTERN.sub("", text).strip()


def strip_hashtags(text: str) -> str:
    """Remove hashtag tokens from text, keeping mentions.

    Args:
        text: Raw message body

    Returns:
        The body without hashtag tokens, trimmed.
    """
    return HASHTAG_PATTERN.sub("", text).strip()


def extract_hashtags(text: str) -> str:
    """Return the hashtags of a message joined by single spaces.

    A body of "#topic #agenda Plan" yields "#topic #agenda"; a body without
    hashtags yields "". Trailing punctuation is not part of a tag, so
    "#topic." and "#topic:" both yield "#topic".
    """
    tags = (TRAILING_PUNCTUATION_PATTERN.sub("", token) for token in HASHTAG_TOKEN_PATTERN.findall(text))
    return " ".join(tag for tag in tags if tag)


def mentions_user(text: str, user_id: str, user_name: str) -> bool:
    """Check whether text mentions the given user.

    Both the Slack markup form (<@U123> / <@U123|label>) and a plain
    @name token count as a mention.

    Args:
        text: Raw message body
        user_id: User ID to look for
        user_name: User name to look for

    Returns:
        True if the user is mentioned.
    """
    if re.search(rf"<@{re.escape(user_id)}(\|[^>]*)?>", text):
        return True
    if not user_name:
        return False
    return re.search(rf"(?<!\S)@{re.escape(user_name)}(?![\w.-])", text) is not None
