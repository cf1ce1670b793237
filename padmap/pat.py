"""Decoder for "pat" (tap) system notifications posted into rooms.

Wire shape (room prefix, then XML)::

    19850419xxx@chatroom:
    <sysmsg type="pat"><pat>
      <fromusername>wxid_a</fromusername>
      <chatusername>19850419xxx@chatroom</chatusername>
      <pattedusername>wxid_b</pattedusername>
      <template><![CDATA["${wxid_a}" 拍了拍 "${wxid_b}"]]></template>
    </pat></sysmsg>
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from padmap.errors import PatParseError
from padmap.models import WechatMessage
from padmap.xml_utils import child_text, parse_xml, strip_sender_prefix

logger = logging.getLogger("padmap.pat")


@dataclass(frozen=True)
class PatMessagePayload:
    """Decoded pat notification."""

    # Who patted
    from_username: str
    # Room the pat happened in
    chat_username: str
    # Who was patted
    patted_username: str
    # Human-readable template, with ${username} placeholders left as-is
    template: str


def is_pat_message(message: WechatMessage) -> bool:
    """Whether message content embeds a pat notification. Never raises."""
    body = strip_sender_prefix(message.content)
    if not body.startswith("<sysmsg"):
        return False
    try:
        root = parse_xml(body)
    except ET.ParseError:
        logger.debug("Content looks like a sysmsg but is not valid XML: %s", message.id)
        return False
    return root.tag == "sysmsg" and root.get("type") == "pat"


def parse_pat_message(message: WechatMessage) -> PatMessagePayload:
    """Decode a pat notification. Call only after is_pat_message() accepted it.

    Raises:
        PatParseError: malformed XML or a missing mandatory field
    """
    body = strip_sender_prefix(message.content)
    try:
        root = parse_xml(body)
    except ET.ParseError as e:
        raise PatParseError(f"malformed pat xml: {e}") from e

    pat = root.find("pat")
    if pat is None:
        raise PatParseError("missing <pat> element")

    fields = {
        name: child_text(pat, name)
        for name in ("fromusername", "chatusername", "pattedusername", "template")
    }
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise PatParseError(f"pat message missing fields: {', '.join(missing)}")

    return PatMessagePayload(
        from_username=fields["fromusername"],
        chat_username=fields["chatusername"],
        patted_username=fields["pattedusername"],
        template=fields["template"],
    )
