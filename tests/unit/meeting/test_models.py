"""
ミーティングボットのモデルの単体テスト。

- ChannelKind Enum
- Channel, User のSlackペイロードからの生成
- Message のデコード(正常・異常ケース)
"""

import pytest
from pydantic import ValidationError
from src.meeting.errors import DecodeError
from src.meeting.models import Channel, ChannelKind, Message, Reaction, User


class TestChannelKind:
    """ChannelKind Enumのテスト。"""

    def test_all_kind_values_exist(self) -> None:
        assert ChannelKind.DIRECT.value == "direct"
        assert ChannelKind.GROUP.value == "group"
        assert ChannelKind.OTHER.value == "other"


class TestChannel:
    """Channelのテスト。"""

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"is_im": True}, ChannelKind.DIRECT),
            ({"is_mpim": True}, ChannelKind.GROUP),
            ({"is_channel": True}, ChannelKind.OTHER),
            ({"is_group": True}, ChannelKind.OTHER),
            ({}, ChannelKind.OTHER),
        ],
    )
    def test_from_slack_maps_kind(self, flags: dict, expected: ChannelKind) -> None:
        channel = Channel.from_slack({"id": "C1", **flags})

        assert channel.id == "C1"
        assert channel.kind is expected

    def test_channel_is_immutable(self) -> None:
        channel = Channel(id="C1", kind=ChannelKind.GROUP)

        with pytest.raises(ValidationError):
            channel.kind = ChannelKind.DIRECT


class TestUser:
    """Userのテスト。"""

    def test_prefers_display_name(self) -> None:
        user = User.from_slack(
            {"id": "U1", "name": "alice", "real_name": "Alice A", "profile": {"display_name": "ali"}}
        )
        assert user.name == "ali"

    def test_falls_back_to_real_name_then_name(self) -> None:
        assert User.from_slack({"id": "U1", "name": "alice", "real_name": "Alice A"}).name == "Alice A"
        assert User.from_slack({"id": "U1", "name": "alice", "profile": {}}).name == "alice"


class TestMessage:
    """Message.from_slackのテスト。"""

    def test_decodes_message_event(self) -> None:
        message = Message.from_slack(
            {
                "type": "message",
                "channel": "C1",
                "user": "U1",
                "text": "#topic Plan release",
                "ts": "1700000000.000100",
            }
        )

        assert message.id == "1700000000.000100"
        assert message.channel_id == "C1"
        assert message.user_id == "U1"
        assert message.text == "#topic Plan release"
        assert message.hashtags == "#topic"
        assert message.reactions == ()

    def test_history_item_uses_given_channel(self) -> None:
        message = Message.from_slack({"user": "U1", "text": "hi", "ts": "1.0"}, channel_id="C9")

        assert message.channel_id == "C9"

    def test_reactions_are_expanded_per_user_in_order(self) -> None:
        message = Message.from_slack(
            {
                "channel": "C1",
                "ts": "1.0",
                "text": "#topic x",
                "reactions": [
                    {"name": "eyes", "users": ["U1", "U2"], "count": 2},
                    {"name": "white_check_mark", "users": ["U3"], "count": 1},
                ],
            }
        )

        assert message.reactions == (
            Reaction(user_id="U1", emoji_name="eyes"),
            Reaction(user_id="U2", emoji_name="eyes"),
            Reaction(user_id="U3", emoji_name="white_check_mark"),
        )

    def test_missing_ts_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            Message.from_slack({"channel": "C1", "text": "hi"})

    def test_missing_channel_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            Message.from_slack({"ts": "1.0", "text": "hi"})

    def test_non_string_text_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            Message.from_slack({"channel": "C1", "ts": "1.0", "text": ["not", "text"]})

    def test_malformed_reaction_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            Message.from_slack({"channel": "C1", "ts": "1.0", "reactions": [{"users": ["U1"]}]})

    def test_non_dict_payload_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            Message.from_slack("not a payload")  # type: ignore[arg-type]
