"""padmap entry point - replays raw pad-protocol messages as normalized payloads.

Reads the JSON-lines message file named in the config, converts each record
and prints one payload JSON object per line to stdout.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from padmap.config import PadmapConfig, get_config_path, load_config
from padmap.converter import wechat_message_to_payload, wechat_room_to_payload
from padmap.errors import AddressingError
from padmap.log import setup_logging
from padmap.models import WechatContact, WechatMessage
from padmap.room_lookup import HttpRoomLookup, RoomMembershipLookup, RoomStore

logger = logging.getLogger("padmap.main")


def _read_jsonl(path: Path) -> list[dict]:
    records: list[dict] = []
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                logger.warning("Skipping invalid JSON at %s:%d (%s)", path, line_no, e)
    return records


def build_room_store(rooms_path: str) -> RoomStore:
    """Seed an in-memory room store from a JSON-lines file of room contacts."""
    store = RoomStore()
    if not rooms_path:
        return store
    for raw in _read_jsonl(Path(rooms_path)):
        store.put(wechat_room_to_payload(WechatContact.from_dict(raw)))
    logger.info("Loaded %d rooms from %s", len(store), rooms_path)
    return store


async def replay(config: PadmapConfig, room_lookup: RoomMembershipLookup) -> int:
    """Convert every message in the replay file; returns the number written."""
    written = 0
    for raw in _read_jsonl(Path(config.replay.messages)):
        message = WechatMessage.from_dict(raw)
        try:
            payload = await wechat_message_to_payload(message, room_lookup)
        except AddressingError as e:
            logger.error("Skipping message: %s", e)
            continue
        sys.stdout.write(json.dumps(payload.to_dict(), ensure_ascii=False) + "\n")
        written += 1
    return written


async def main() -> None:
    """Load config, set up logging, and replay the configured message file."""
    config_path = get_config_path()
    config = load_config(config_path)

    setup_logging(config.logging)
    logger.info("padmap starting up (config: %s)", config_path)

    http_lookup: HttpRoomLookup | None = None
    room_lookup: RoomMembershipLookup
    if config.room_lookup.base_url:
        http_lookup = HttpRoomLookup(
            config.room_lookup.base_url,
            timeout_seconds=config.room_lookup.timeout_seconds,
        )
        room_lookup = http_lookup
        logger.info("Room lookup via %s", config.room_lookup.base_url)
    else:
        room_lookup = build_room_store(config.replay.rooms)

    try:
        written = await replay(config, room_lookup)
        logger.info("Replayed %d messages from %s", written, config.replay.messages)
    finally:
        if http_lookup:
            await http_lookup.close()
        logger.info("padmap shut down.")


if __name__ == "__main__":
    import contextlib

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
