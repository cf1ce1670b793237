"""Wire message types and their provisional normalized MessageType."""

import logging
from enum import IntEnum

from padmap.models import MessageType

logger = logging.getLogger("padmap.message_type")


class WechatMessageType(IntEnum):
    """Numeric `type` field of a raw pad-protocol message."""

    Text = 1
    Image = 3
    Voice = 34
    VerifyMsg = 37
    PossibleFriendMsg = 40
    ShareCard = 42
    Video = 43
    Emoticon = 47
    Location = 48
    App = 49
    VoipMsg = 50
    StatusNotify = 51
    VoipNotify = 52
    VoipInvite = 53
    MicroVideo = 62
    VerifyMsgEnterprise = 65
    Transfer = 2000
    RedEnvelope = 2001
    MiniProgram = 2002
    GroupInvite = 2003
    File = 2004
    SysNotice = 9999
    Sys = 10000
    SysTemplate = 10002


# Everything carrying an <appmsg> payload is provisionally an Attachment;
# the app-message adjuster refines it afterwards.
_TYPE_MAP: dict[WechatMessageType, MessageType] = {
    WechatMessageType.Text: MessageType.Text,
    WechatMessageType.Image: MessageType.Image,
    WechatMessageType.Voice: MessageType.Audio,
    WechatMessageType.ShareCard: MessageType.Contact,
    WechatMessageType.Video: MessageType.Video,
    WechatMessageType.MicroVideo: MessageType.Video,
    WechatMessageType.Emoticon: MessageType.Emoticon,
    WechatMessageType.Location: MessageType.Location,
    WechatMessageType.App: MessageType.Attachment,
    WechatMessageType.File: MessageType.Attachment,
    WechatMessageType.Transfer: MessageType.Attachment,
    WechatMessageType.RedEnvelope: MessageType.Attachment,
    WechatMessageType.MiniProgram: MessageType.Attachment,
    WechatMessageType.VoipMsg: MessageType.Recalled,
}


def convert_message_type(wechat_type: int) -> MessageType:
    """Map a wire type number to the provisional MessageType.

    Known-but-unmapped types (system notices, verify requests, ...) and
    unknown numbers both yield MessageType.Unknown.
    """
    try:
        known = WechatMessageType(wechat_type)
    except ValueError:
        logger.debug("Unknown wire message type: %s", wechat_type)
        return MessageType.Unknown
    return _TYPE_MAP.get(known, MessageType.Unknown)
