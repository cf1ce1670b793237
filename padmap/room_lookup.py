"""Room-membership lookups used to expand "@all" mentions.

The mapper only depends on the RoomMembershipLookup protocol. Two
implementations are provided: an in-memory RoomStore fed with RoomPayloads,
and an HTTP client for a room-state service.
"""

import logging
from typing import Any, Protocol

import httpx

from padmap.errors import RoomNotFoundError
from padmap.models import RoomPayload

logger = logging.getLogger("padmap.room_lookup")


class RoomMembershipLookup(Protocol):
    async def room_member_ids(self, room_id: str) -> list[str]:
        """Current member ids of room_id. Raises RoomNotFoundError if unknown."""
        ...


class RoomStore:
    """In-memory room state, keyed by room id."""

    def __init__(self) -> None:
        self._rooms: dict[str, RoomPayload] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def put(self, room: RoomPayload) -> None:
        """Insert or replace a room."""
        self._rooms[room.id] = room

    async def room_member_ids(self, room_id: str) -> list[str]:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return list(room.member_id_list)


class HttpRoomLookup:
    """Room-state service HTTP client.

    Expects ``GET {base_url}/rooms/{room_id}`` to answer with a room payload
    object containing ``memberIdList``.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the room-state service (e.g., "http://127.0.0.1:8788")
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def get_room(self, room_id: str) -> dict[str, Any]:
        """Fetch the raw room payload.

        Raises:
            RoomNotFoundError: The service answered 404
            httpx.HTTPError: Any other failed request
        """
        resp = await self._client.get(f"{self.base_url}/rooms/{room_id}")
        if resp.status_code == 404:
            raise RoomNotFoundError(room_id)
        resp.raise_for_status()
        return resp.json()  # type: ignore[no-any-return]

    async def room_member_ids(self, room_id: str) -> list[str]:
        data = await self.get_room(room_id)
        members = data.get("memberIdList") or []
        logger.debug("Fetched %d members for room %s", len(members), room_id)
        return [str(m) for m in members]
