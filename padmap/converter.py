"""Conversion from raw pad-protocol records to normalized payloads."""

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from padmap.appmsg import AppMessagePayload, AppMessageType, decode_app_message
from padmap.errors import AddressingError, PatParseError
from padmap.is_type import is_any_contact_id, is_any_room_id, is_contact_official_id
from padmap.message_type import convert_message_type
from padmap.models import (
    ChatRoomMember,
    ContactPayload,
    ContactType,
    MessagePayload,
    MessageType,
    RoomMemberPayload,
    RoomPayload,
    WechatContact,
    WechatMessage,
)
from padmap.pat import is_pat_message, parse_pat_message
from padmap.room_lookup import RoomMembershipLookup
from padmap.xml_utils import CONTENT_DELIMITER

logger = logging.getLogger("padmap.converter")

# Sole at_list entry meaning "everyone in the room"
MENTION_ALL = "announcement@all"

QUOTE_SEPARATOR = "- - - - - - - - - - - - - - - -"


# --- Content disambiguation ---


@dataclass(frozen=True)
class PlainContent:
    """Content with no recognizable sender prefix."""

    text: str


@dataclass(frozen=True)
class PrefixedContent:
    """Room message with its real sender up front: "wxid_xxx:\\nbody"."""

    sender: str
    text: str


@dataclass(frozen=True)
class SystemNoticeContent:
    """Notice posted on behalf of a room: "xxx@chatroom:\\n<sysmsg ...>"."""

    room_id: str
    body: str


SplitContent = PlainContent | PrefixedContent | SystemNoticeContent


def split_content(content: str) -> SplitContent:
    """Classify content by the prefix before its first ":\\n"."""
    prefix, sep, rest = content.partition(CONTENT_DELIMITER)
    if sep:
        if is_any_contact_id(prefix):
            return PrefixedContent(sender=prefix, text=rest)
        if is_any_room_id(prefix):
            return SystemNoticeContent(room_id=prefix, body=rest)
    return PlainContent(text=content)


@dataclass(frozen=True)
class MessageAddressing:
    """Who sent a message, where it went, and its text."""

    from_id: str
    text: str
    room_id: str | None = None
    to_id: str | None = None


def _dump(message: WechatMessage) -> str:
    return json.dumps(message.to_dict(), ensure_ascii=False)


def split_message(message: WechatMessage) -> MessageAddressing:
    """Resolve sender, room or recipient, and text of a raw message.

    Raises:
        AddressingError: Neither a room nor a direct recipient was found
    """
    from_id: str | None = None
    room_id: str | None = None
    to_id: str | None = None
    text: str | None = None

    if is_any_room_id(message.from_username):
        # Received in a room:
        #   text:   "wxid_xxx:\nnihao"
        #   appmsg: "wxid_xxx:\n<?xml version="1.0"?><msg><appmsg ...>"
        #   pat:    "xxx@chatroom:\n<sysmsg type="pat"><pat>...</pat></sysmsg>"
        room_id = message.from_username
        part = split_content(message.content)
        if isinstance(part, PrefixedContent):
            from_id = part.sender
            text = part.text
        elif isinstance(part, SystemNoticeContent) and is_pat_message(message):
            try:
                pat = parse_pat_message(message)
            except PatParseError as e:
                logger.warning("Error occurred while parsing pat message: %s, %s", _dump(message), e)
            else:
                from_id = pat.from_username
                text = pat.template
        # Notices with no resolvable actor are attributed to the room itself
        if from_id is None:
            from_id = room_id

    elif is_any_room_id(message.to_username):
        # Sent to a room by the logged-in account
        room_id = message.to_username
        from_id = message.from_username
        _, sep, rest = message.content.partition(CONTENT_DELIMITER)
        text = rest if sep else message.content

    else:
        from_id = message.from_username
        to_id = message.to_username or None

    if room_id is None and to_id is None:
        raise AddressingError(message.id)

    if text is None:
        text = message.content

    return MessageAddressing(from_id=from_id, text=text, room_id=room_id, to_id=to_id)


# --- Mentions ---


async def resolve_mention_list(
    room_id: str | None,
    at_list: Sequence[str],
    room_lookup: RoomMembershipLookup,
) -> list[str]:
    """Mentioned ids for a message; "@all" expands to the room's members."""
    if not room_id:
        return []
    if len(at_list) == 1 and at_list[0] == MENTION_ALL:
        return list(await room_lookup.room_member_ids(room_id))
    return list(at_list)


# --- App message adjustment ---


def format_quote(display_name: str, quoted: str, title: str) -> str:
    return f"「{display_name}：{quoted}」\n{QUOTE_SEPARATOR}\n{title}"


def _text_from_title(app: AppMessagePayload) -> dict[str, Any]:
    return {"text": app.title}


def _filename_from_title(app: AppMessagePayload) -> dict[str, Any]:
    return {"filename": app.title}


def _quote_text(app: AppMessagePayload) -> dict[str, Any]:
    # parse_app_message guarantees refer_msg for ReferMsg
    refer = app.refer_msg
    return {"text": format_quote(refer.display_name, refer.content, app.title)}


_AppRule = tuple[MessageType, Callable[[AppMessagePayload], dict[str, Any]] | None]

# Sub-kinds not listed here become MessageType.Unknown
APP_MESSAGE_RULES: dict[AppMessageType, _AppRule] = {
    AppMessageType.Text: (MessageType.Text, _text_from_title),
    AppMessageType.Audio: (MessageType.Url, None),
    AppMessageType.Video: (MessageType.Url, None),
    AppMessageType.Url: (MessageType.Url, None),
    AppMessageType.Attach: (MessageType.Attachment, _filename_from_title),
    AppMessageType.ChatHistory: (MessageType.ChatHistory, None),
    AppMessageType.MiniProgram: (MessageType.MiniProgram, None),
    AppMessageType.MiniProgramApp: (MessageType.MiniProgram, None),
    AppMessageType.RedEnvelopes: (MessageType.RedEnvelope, None),
    AppMessageType.Transfers: (MessageType.Transfer, None),
    AppMessageType.RealtimeShareLocation: (MessageType.Location, None),
    AppMessageType.GroupNote: (MessageType.GroupNote, _text_from_title),
    AppMessageType.ReferMsg: (MessageType.Text, _quote_text),
}


def adjust_message_by_app_msg(
    payload: MessagePayload, app_payload: AppMessagePayload
) -> MessagePayload:
    """Return a copy of payload with type/text/filename refined by the app sub-kind."""
    msg_type, rule = APP_MESSAGE_RULES.get(app_payload.type, (MessageType.Unknown, None))
    changes = rule(app_payload) if rule else {}
    return replace(payload, type=msg_type, **changes)


# --- Public mappers ---


async def wechat_message_to_payload(
    message: WechatMessage, room_lookup: RoomMembershipLookup
) -> MessagePayload:
    """
    Convert a raw message into a MessagePayload.

    Args:
        message: The raw message record
        room_lookup: Used to expand "@all" mentions in rooms

    Raises:
        AddressingError: The message has neither a room nor a recipient
    """
    addressing = split_message(message)
    mention_id_list = await resolve_mention_list(
        addressing.room_id, message.at_list, room_lookup
    )

    payload = MessagePayload(
        id=message.id,
        timestamp=message.create_time,
        type=convert_message_type(message.type),
        from_id=addressing.from_id,
        text=addressing.text,
        mention_id_list=mention_id_list,
        room_id=addressing.room_id,
        to_id=addressing.to_id,
    )

    if payload.type != MessageType.Attachment:
        return payload

    decoded = decode_app_message(message)
    if decoded.payload is None:
        logger.warning(
            "Error occurred while parsing message attachment: %s, %s",
            _dump(message),
            decoded.error,
        )
        return payload
    return adjust_message_by_app_msg(payload, decoded.payload)


def wechat_contact_to_payload(contact: WechatContact) -> ContactPayload:
    return ContactPayload(
        id=contact.username,
        gender=contact.gender,
        type=(
            ContactType.Official
            if is_contact_official_id(contact.username)
            else ContactType.Individual
        ),
        name=contact.nickname,
        avatar=contact.avatar,
        alias=contact.remark,
        weixin=contact.alias,
        city=contact.city,
        friend=not contact.stranger,
        province=contact.province,
        signature=contact.signature,
        phone=list(contact.phone_list),
    )


def wechat_room_to_payload(contact: WechatContact) -> RoomPayload:
    """Project a room (a contact whose username is a room id)."""
    return RoomPayload(
        id=contact.username,
        topic=contact.nickname,
        avatar=contact.avatar,
        owner_id=contact.chatroom_owner_username,
        member_id_list=[member.username for member in contact.chatroom_member_list],
        admin_id_list=[],
    )


def wechat_room_member_to_payload(member: ChatRoomMember) -> RoomMemberPayload:
    return RoomMemberPayload(
        id=member.username,
        room_alias=member.displayname,
        inviter_id=member.inviterusername,
        avatar=member.avatar,
        name=member.nickname,
    )


def room_member_to_contact(member: ChatRoomMember) -> WechatContact:
    """Minimal contact for a room member who is not (yet) a friend."""
    return WechatContact(
        username=member.username,
        nickname=member.nickname,
        avatar=member.avatar,
        stranger=True,
    )
