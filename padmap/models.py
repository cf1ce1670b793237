"""Shared data types: raw pad-protocol records and the normalized payloads."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class MessageType(IntEnum):
    """Normalized (puppet-facing) message type."""

    Unknown = 0
    Attachment = 1
    Audio = 2
    Contact = 3
    ChatHistory = 4
    Emoticon = 5
    Image = 6
    Text = 7
    Location = 8
    MiniProgram = 9
    GroupNote = 10
    Transfer = 11
    RedEnvelope = 12
    Recalled = 13
    Url = 14
    Video = 15
    Post = 16


class ContactType(IntEnum):
    Unknown = 0
    Individual = 1
    Official = 2
    Corporation = 3


class ContactGender(IntEnum):
    Unknown = 0
    Male = 1
    Female = 2


# --- Raw records (as decoded by the protocol client) ---


@dataclass(frozen=True)
class WechatMessage:
    """Raw message record. Read-only; owned by the caller."""

    # Server message id
    id: str
    # Unix timestamp (seconds) at which the server created the message
    create_time: int
    # Wire message type (see padmap.message_type.WechatMessageType)
    type: int
    # Free text; may carry a "sender:\n" prefix and/or raw XML
    content: str
    from_username: str
    to_username: str
    # Mentioned usernames; ["announcement@all"] means everyone
    at_list: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WechatMessage":
        """Build from the protocol client's object form (``Message.AsObject``)."""
        return cls(
            id=str(raw.get("id", "")),
            create_time=int(raw.get("createtime", raw.get("createTime", 0)) or 0),
            type=int(raw.get("type", 0) or 0),
            content=raw.get("content") or "",
            from_username=raw.get("fromusername", raw.get("fromUsername")) or "",
            to_username=raw.get("tousername", raw.get("toUsername")) or "",
            at_list=tuple(raw.get("atList") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of from_dict; used for log context."""
        return {
            "id": self.id,
            "createtime": self.create_time,
            "type": self.type,
            "content": self.content,
            "fromusername": self.from_username,
            "tousername": self.to_username,
            "atList": list(self.at_list),
        }


@dataclass(frozen=True)
class ChatRoomMember:
    """Raw room member record."""

    username: str
    nickname: str = ""
    # Member's alias inside this room
    displayname: str = ""
    avatar: str = ""
    inviterusername: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ChatRoomMember":
        return cls(
            username=raw.get("username") or "",
            nickname=raw.get("nickname") or "",
            displayname=raw.get("displayname") or "",
            avatar=raw.get("avatar") or "",
            inviterusername=raw.get("inviterusername") or "",
        )


@dataclass(frozen=True)
class WechatContact:
    """Raw contact record. Rooms are contacts too (with member fields set)."""

    username: str
    nickname: str = ""
    avatar: str = ""
    gender: int = ContactGender.Unknown
    signature: str = ""
    # WeChat id chosen by the user (not the internal username)
    alias: str = ""
    # Remark set by the logged-in account
    remark: str = ""
    city: str = ""
    province: str = ""
    phone_list: tuple[str, ...] = ()
    stranger: bool = False
    chatroom_owner_username: str = ""
    chatroom_member_list: tuple[ChatRoomMember, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WechatContact":
        """Build from the protocol client's object form (``Contact.AsObject``)."""
        members = raw.get("chatroommemberList") or ()
        return cls(
            username=raw.get("username") or "",
            nickname=raw.get("nickname") or "",
            avatar=raw.get("avatar") or "",
            gender=int(raw.get("gender", 0) or 0),
            signature=raw.get("signature") or "",
            alias=raw.get("alias") or "",
            remark=raw.get("remark") or "",
            city=raw.get("city") or "",
            province=raw.get("province") or "",
            phone_list=tuple(raw.get("phoneList") or ()),
            stranger=bool(raw.get("stranger", False)),
            chatroom_owner_username=raw.get("chatroomownerusername") or "",
            chatroom_member_list=tuple(ChatRoomMember.from_dict(m) for m in members),
        )


# --- Normalized payloads ---


@dataclass
class MessagePayload:
    """Normalized message.

    from_id is always set; room_id and/or to_id is set (room_id means a group
    context).
    """

    id: str
    timestamp: int
    type: MessageType
    from_id: str
    text: str
    mention_id_list: list[str] = field(default_factory=list)
    room_id: str | None = None
    to_id: str | None = None
    # Only set for file attachments
    filename: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": int(self.type),
            "fromId": self.from_id,
            "text": self.text,
            "mentionIdList": list(self.mention_id_list),
        }
        if self.room_id is not None:
            data["roomId"] = self.room_id
        if self.to_id is not None:
            data["toId"] = self.to_id
        if self.filename is not None:
            data["filename"] = self.filename
        return data


@dataclass
class ContactPayload:
    id: str
    gender: int
    type: ContactType
    name: str
    avatar: str
    alias: str
    weixin: str
    city: str
    friend: bool
    province: str
    signature: str
    phone: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gender": self.gender,
            "type": int(self.type),
            "name": self.name,
            "avatar": self.avatar,
            "alias": self.alias,
            "weixin": self.weixin,
            "city": self.city,
            "friend": self.friend,
            "province": self.province,
            "signature": self.signature,
            "phone": list(self.phone),
        }


@dataclass
class RoomPayload:
    id: str
    topic: str
    avatar: str
    owner_id: str
    member_id_list: list[str] = field(default_factory=list)
    # Not derivable from the contact record; always empty
    admin_id_list: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "topic": self.topic,
            "avatar": self.avatar,
            "ownerId": self.owner_id,
            "memberIdList": list(self.member_id_list),
            "adminIdList": list(self.admin_id_list),
        }


@dataclass
class RoomMemberPayload:
    id: str
    room_alias: str
    inviter_id: str
    avatar: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "roomAlias": self.room_alias,
            "inviterId": self.inviter_id,
            "avatar": self.avatar,
            "name": self.name,
        }
