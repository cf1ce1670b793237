"""Helpers shared by the embedded-XML decoders (pat, appmsg)."""

import xml.etree.ElementTree as ET

# Separates the sender prefix from the body in room message content
CONTENT_DELIMITER = ":\n"


def strip_sender_prefix(content: str) -> str:
    """Return the XML body of content, dropping a leading "sender:\\n" line.

    Content that already starts with markup is returned unchanged (trimmed).
    """
    content = content.strip()
    if content.startswith("<"):
        return content
    _, sep, body = content.partition(CONTENT_DELIMITER)
    if not sep:
        # Some backends drop the colon and only keep the newline
        _, sep, body = content.partition("\n")
    return body.strip() if sep else content


def parse_xml(text: str) -> ET.Element:
    """Parse text into an Element; raises ET.ParseError on malformed input.

    Text that cannot be encoded (e.g. a lone surrogate left by a truncated
    emoji) is reported as a ParseError too.
    """
    try:
        return ET.fromstring(text)
    except UnicodeEncodeError as e:
        raise ET.ParseError(f"unencodable content: {e}") from e


def child_text(element: ET.Element | None, path: str) -> str | None:
    """Stripped text of the sub-element at path, or None when missing/empty."""
    if element is None:
        return None
    found = element.find(path)
    if found is None or found.text is None:
        return None
    text = found.text.strip()
    return text or None
