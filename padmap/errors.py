"""Exception types raised by padmap.

Only AddressingError is expected to reach callers of the message mapper;
the XML decode errors are caught and logged inside the mapper.
"""


class PadmapError(Exception):
    """Base class for all padmap errors."""


class AddressingError(PadmapError):
    """A message resolved to neither a room nor a direct recipient."""

    def __init__(self, message_id: str) -> None:
        super().__init__(f"neither toId nor roomId (message {message_id})")
        self.message_id = message_id


class PatParseError(PadmapError):
    """A pat system notification could not be decoded."""


class AppMessageParseError(PadmapError):
    """Embedded app-message XML is malformed or missing mandatory fields."""


class RoomNotFoundError(PadmapError, LookupError):
    """The room-membership lookup does not know the requested room."""

    def __init__(self, room_id: str) -> None:
        super().__init__(f"room not found: {room_id}")
        self.room_id = room_id
