"""Tests for the replay entry point."""

import json
from pathlib import Path

import pytest

from main import build_room_store, replay
from padmap.config import PadmapConfig, ReplayConfig
from padmap.converter import MENTION_ALL
from tests.conftest import ALICE, BOB, ROOM_ID, SELF_ID

pytestmark = pytest.mark.asyncio


def _write_jsonl(path: Path, records: list[dict]) -> None:
    path.write_text(
        "\n".join(json.dumps(r, ensure_ascii=False) for r in records) + "\n", encoding="utf-8"
    )


async def test_replay_writes_payload_lines(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    rooms = tmp_path / "rooms.jsonl"
    messages = tmp_path / "messages.jsonl"
    _write_jsonl(
        rooms,
        [
            {
                "username": ROOM_ID,
                "nickname": "Room",
                "chatroommemberList": [{"username": ALICE}, {"username": BOB}],
            }
        ],
    )
    _write_jsonl(
        messages,
        [
            {
                "id": "1",
                "createtime": 1,
                "type": 1,
                "content": f"{ALICE}:\nhi all",
                "fromusername": ROOM_ID,
                "tousername": SELF_ID,
                "atList": [MENTION_ALL],
            },
            # No recipient at all: skipped
            {"id": "2", "createtime": 2, "type": 1, "content": "x", "fromusername": ALICE},
        ],
    )
    # Invalid lines are skipped too
    with open(messages, "a", encoding="utf-8") as f:
        f.write("{not json\n")

    config = PadmapConfig(replay=ReplayConfig(messages=str(messages), rooms=str(rooms)))
    written = await replay(config, build_room_store(config.replay.rooms))

    assert written == 1
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["fromId"] == ALICE
    assert payload["roomId"] == ROOM_ID
    assert payload["text"] == "hi all"
    assert payload["mentionIdList"] == [ALICE, BOB]


async def test_build_room_store_without_file() -> None:
    assert len(build_room_store("")) == 0
