"""Decoder for app messages: structured XML embedded in message content.

Links, files, transfers, mini programs, quotes and the like all travel as an
``<msg><appmsg>...</appmsg></msg>`` document. In rooms the document is
preceded by a "sender:\\n" line.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import IntEnum

from padmap.errors import AppMessageParseError
from padmap.models import WechatMessage
from padmap.xml_utils import child_text, parse_xml, strip_sender_prefix


class AppMessageType(IntEnum):
    """``<appmsg><type>`` sub-kind."""

    Text = 1
    Img = 2
    Audio = 3
    Video = 4
    Url = 5
    Attach = 6
    Open = 7
    Emoji = 8
    VoiceRemind = 9
    ScanGood = 10
    Good = 13
    Emotion = 15
    CardTicket = 16
    RealtimeShareLocation = 17
    ChatHistory = 19
    MiniProgram = 33
    MiniProgramApp = 36
    GroupNote = 53
    ReferMsg = 57
    Transfers = 2000
    RedEnvelopes = 2001
    ReaderType = 100001


@dataclass(frozen=True)
class AppAttachPayload:
    total_len: int = 0
    attach_id: str = ""
    file_ext: str = ""
    cdn_attach_url: str = ""
    aes_key: str = ""


@dataclass(frozen=True)
class ReferMsgPayload:
    """The message being quoted by a ReferMsg."""

    type: int
    svrid: str
    from_usr: str
    chat_usr: str
    display_name: str
    content: str


@dataclass(frozen=True)
class AppMessagePayload:
    # Raw sub-kind number; may be outside AppMessageType
    type: int
    title: str = ""
    des: str = ""
    url: str = ""
    thumb_url: str = ""
    md5: str = ""
    from_username: str = ""
    app_attach: AppAttachPayload | None = None
    refer_msg: ReferMsgPayload | None = None


@dataclass(frozen=True)
class AppMessageDecodeResult:
    """Either a decoded payload or the reason decoding failed."""

    payload: AppMessagePayload | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def _int(text: str | None, default: int = 0) -> int:
    try:
        return int(text) if text else default
    except ValueError:
        return default


def _parse_app_attach(appmsg: ET.Element) -> AppAttachPayload | None:
    attach = appmsg.find("appattach")
    if attach is None:
        return None
    return AppAttachPayload(
        total_len=_int(child_text(attach, "totallen")),
        attach_id=child_text(attach, "attachid") or "",
        file_ext=child_text(attach, "fileext") or "",
        cdn_attach_url=child_text(attach, "cdnattachurl") or "",
        aes_key=child_text(attach, "aeskey") or "",
    )


def _parse_refer_msg(appmsg: ET.Element) -> ReferMsgPayload | None:
    refer = appmsg.find("refermsg")
    if refer is None:
        return None
    return ReferMsgPayload(
        type=_int(child_text(refer, "type")),
        svrid=child_text(refer, "svrid") or "",
        from_usr=child_text(refer, "fromusr") or "",
        chat_usr=child_text(refer, "chatusr") or "",
        display_name=child_text(refer, "displayname") or "",
        content=child_text(refer, "content") or "",
    )


def parse_app_message(message: WechatMessage) -> AppMessagePayload:
    """Decode the app-message XML carried by message.

    Raises:
        AppMessageParseError: malformed XML, no <appmsg>, no usable <type>,
            or a quote without the quoted message
    """
    body = strip_sender_prefix(message.content)
    try:
        root = parse_xml(body)
    except ET.ParseError as e:
        raise AppMessageParseError(f"malformed appmsg xml: {e}") from e

    appmsg = root if root.tag == "appmsg" else root.find("appmsg")
    if appmsg is None:
        raise AppMessageParseError(f"no <appmsg> element under <{root.tag}>")

    type_text = child_text(appmsg, "type")
    try:
        app_type = int(type_text) if type_text else None
    except ValueError:
        app_type = None
    if app_type is None:
        raise AppMessageParseError(f"invalid appmsg type: {type_text!r}")

    refer_msg = _parse_refer_msg(appmsg)
    if app_type == AppMessageType.ReferMsg and refer_msg is None:
        raise AppMessageParseError("quote message without <refermsg>")

    return AppMessagePayload(
        type=app_type,
        title=child_text(appmsg, "title") or "",
        des=child_text(appmsg, "des") or "",
        url=child_text(appmsg, "url") or "",
        thumb_url=child_text(appmsg, "thumburl") or "",
        md5=child_text(appmsg, "md5") or "",
        # <fromusername> sits beside <appmsg>, under <msg>
        from_username=child_text(root, "fromusername") or "",
        app_attach=_parse_app_attach(appmsg),
        refer_msg=refer_msg,
    )


def decode_app_message(message: WechatMessage) -> AppMessageDecodeResult:
    """Like parse_app_message, but reports failure as a value instead of raising."""
    try:
        return AppMessageDecodeResult(payload=parse_app_message(message))
    except AppMessageParseError as e:
        return AppMessageDecodeResult(error=str(e))
