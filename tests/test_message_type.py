"""Tests for wire message type conversion and raw record decoding."""

import pytest

from padmap.message_type import WechatMessageType, convert_message_type
from padmap.models import MessageType, WechatContact, WechatMessage


@pytest.mark.parametrize(
    ("wire", "expected"),
    [
        (WechatMessageType.Text, MessageType.Text),
        (WechatMessageType.Image, MessageType.Image),
        (WechatMessageType.Voice, MessageType.Audio),
        (WechatMessageType.ShareCard, MessageType.Contact),
        (WechatMessageType.MicroVideo, MessageType.Video),
        (WechatMessageType.Emoticon, MessageType.Emoticon),
        (WechatMessageType.App, MessageType.Attachment),
        (WechatMessageType.File, MessageType.Attachment),
        (WechatMessageType.Transfer, MessageType.Attachment),
        (WechatMessageType.VoipMsg, MessageType.Recalled),
        (WechatMessageType.Sys, MessageType.Unknown),
        (WechatMessageType.SysTemplate, MessageType.Unknown),
        (12345, MessageType.Unknown),
    ],
)
def test_convert_message_type(wire: int, expected: MessageType) -> None:
    assert convert_message_type(wire) == expected


def test_message_from_dict() -> None:
    """Raw records use the protocol client's lower-case field names."""
    message = WechatMessage.from_dict(
        {
            "id": 77,
            "createtime": 1700000000,
            "type": 1,
            "content": "hello",
            "fromusername": "wxid_a",
            "tousername": "wxid_b",
            "atList": ["wxid_c"],
        }
    )
    assert message.id == "77"
    assert message.create_time == 1700000000
    assert message.from_username == "wxid_a"
    assert message.to_username == "wxid_b"
    assert message.at_list == ("wxid_c",)
    assert WechatMessage.from_dict(message.to_dict()) == message


def test_message_from_dict_defaults() -> None:
    message = WechatMessage.from_dict({"id": "1"})
    assert message.content == ""
    assert message.at_list == ()
    assert message.type == 0


def test_contact_from_dict_with_members() -> None:
    contact = WechatContact.from_dict(
        {
            "username": "1@chatroom",
            "nickname": "Room",
            "chatroomownerusername": "wxid_a",
            "chatroommemberList": [
                {"username": "wxid_a", "displayname": "A"},
                {"username": "wxid_b", "inviterusername": "wxid_a"},
            ],
            "phoneList": [],
            "stranger": False,
        }
    )
    assert contact.chatroom_owner_username == "wxid_a"
    assert [m.username for m in contact.chatroom_member_list] == ["wxid_a", "wxid_b"]
    assert contact.chatroom_member_list[1].inviterusername == "wxid_a"
