"""Tests for message text helpers."""

import pytest
from src.meeting.text import (
    extract_hashtags,
    mentions_user,
    strip_hashtags,
    strip_mentions_and_hashtags,
)


class TestStripMentionsAndHashtags:
    """strip_mentions_and_hashtags tests."""

    def test_text_without_tokens_is_unchanged(self) -> None:
        assert strip_mentions_and_hashtags("Hello") == "Hello"

    def test_removes_all_mentions(self) -> None:
        assert strip_mentions_and_hashtags("@test Hello @test") == "Hello"

    def test_removes_hashtag(self) -> None:
        assert strip_mentions_and_hashtags("Hello #topic") == "Hello"

    def test_removes_all_hashtags(self) -> None:
        assert strip_mentions_and_hashtags("Hello #topic #topic-2") == "Hello"

    def test_removes_slack_mention_markup(self) -> None:
        assert strip_mentions_and_hashtags("<@U_BOT> list topics") == "list topics"
        assert strip_mentions_and_hashtags("<@U_BOT|bot> complete all") == "complete all"

    def test_only_tokens_yields_empty_string(self) -> None:
        assert strip_mentions_and_hashtags("  @a #b  @c ") == ""


class TestStripHashtags:
    """strip_hashtags tests."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("#topic Plan release", "Plan release"),
            ("@alice #topic review @bob", "@alice  review @bob"),
            ("<@U1> #agenda budget", "<@U1>  budget"),
            ("no tags here", "no tags here"),
        ],
    )
    def test_removes_hashtags_and_keeps_mentions(self, text: str, expected: str) -> None:
        assert strip_hashtags(text) == expected

    def test_every_mention_survives(self) -> None:
        text = "@alice #topic @bob #x @carol"
        result = strip_hashtags(text)

        for mention in ("@alice", "@bob", "@carol"):
            assert mention in result
        assert "#" not in result


class TestExtractHashtags:
    """extract_hashtags tests."""

    def test_single_hashtag(self) -> None:
        assert extract_hashtags("#topic Plan release") == "#topic"

    def test_multiple_hashtags_joined_by_space(self) -> None:
        assert extract_hashtags("Plan #topic and #agenda") == "#topic #agenda"

    def test_no_hashtags(self) -> None:
        assert extract_hashtags("Plan release") == ""

    def test_channel_link_is_not_a_hashtag(self) -> None:
        assert extract_hashtags("see <#C123|general> #todo") == "#todo"


class TestMentionsUser:
    """mentions_user tests."""

    def test_slack_markup(self) -> None:
        assert mentions_user("<@U_BOT> list topics", "U_BOT", "bot")

    def test_slack_markup_with_label(self) -> None:
        assert mentions_user("<@U_BOT|bot> list topics", "U_BOT", "bot")

    def test_plain_name(self) -> None:
        assert mentions_user("@bot list topics", "U_BOT", "bot")

    def test_other_user_is_not_a_mention(self) -> None:
        assert not mentions_user("<@U_OTHER> list topics", "U_BOT", "bot")

    def test_longer_name_is_not_a_mention(self) -> None:
        assert not mentions_user("@botty list topics", "U_BOT", "bot")

    def test_no_mention(self) -> None:
        assert not mentions_user("list topics", "U_BOT", "bot")


class TestExtractHashtagsPunctuation:
    """Trailing punctuation handling in extract_hashtags."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Plan release #topic.", "#topic"),
            ("#topic: fix bug", "#topic"),
            ("(see #agenda), budget", "#agenda"),
            ("#topic-2!", "#topic-2"),
            ("#task_list?", "#task_list"),
        ],
    )
    def test_trailing_punctuation_is_trimmed(self, text: str, expected: str) -> None:
        assert extract_hashtags(text) == expected

    def test_punctuation_only_tag_is_dropped(self) -> None:
        assert extract_hashtags("what #?! #topic") == "#topic"
