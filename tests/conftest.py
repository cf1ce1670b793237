"""Shared pytest fixtures for padmap tests."""

from pathlib import Path

import pytest

from padmap.models import WechatMessage
from tests.mock_room_lookup import MockRoomLookup

ROOM_ID = "19850419001@chatroom"
IM_ROOM_ID = "10696051001@im.chatroom"
SELF_ID = "wxid_self"
ALICE = "wxid_alice"
BOB = "wxid_bob"
CAROL = "wxid_carol"


def make_message(
    content: str,
    from_username: str,
    to_username: str,
    msg_type: int = 1,
    at_list: tuple[str, ...] = (),
    msg_id: str = "1001",
) -> WechatMessage:
    """Build a raw message record with sensible defaults."""
    return WechatMessage(
        id=msg_id,
        create_time=1700000000,
        type=msg_type,
        content=content,
        from_username=from_username,
        to_username=to_username,
        at_list=at_list,
    )


@pytest.fixture
def room_lookup() -> MockRoomLookup:
    """Room lookup knowing one standard room with three members."""
    return MockRoomLookup({ROOM_ID: [ALICE, BOB, CAROL]})


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Create a temporary config.toml for testing."""
    config = tmp_path / "config.toml"
    config.write_text(
        "[room_lookup]\n"
        'base_url = "http://127.0.0.1:8788"\n'
        "timeout_seconds = 3\n\n"
        "[replay]\n"
        'messages = "' + str(tmp_path / "messages.jsonl").replace("\\", "/") + '"\n'
        'rooms = "' + str(tmp_path / "rooms.jsonl").replace("\\", "/") + '"\n\n'
        "[logging]\n"
        'level = "DEBUG"\n'
        'dir = "' + str(tmp_path / "logs").replace("\\", "/") + '"\n'
        "keep_days = 7\n"
    )
    return config
