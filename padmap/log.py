"""Logging setup: console at the configured level, daily-rotated DEBUG file."""

import logging
import logging.handlers
from pathlib import Path

from padmap.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_NAME = "padmap.log"

logger = logging.getLogger("padmap.log")


def _enforce_size_cap(log_dir: Path, max_total_mb: int) -> None:
    """Delete the oldest rotated log files until the directory fits the cap."""
    if max_total_mb <= 0:
        return
    limit = max_total_mb * 1024 * 1024
    # The active file is never deleted; rotated ones go oldest first
    rotated = sorted(
        (p for p in log_dir.glob(f"{LOG_FILE_NAME}.*") if p.is_file()),
        key=lambda p: p.stat().st_mtime,
    )
    active = log_dir / LOG_FILE_NAME
    total = sum(p.stat().st_size for p in rotated)
    if active.exists():
        total += active.stat().st_size
    while rotated and total > limit:
        oldest = rotated.pop(0)
        total -= oldest.stat().st_size
        oldest.unlink()


def setup_logging(config: LoggingConfig) -> None:
    """Configure the "padmap" logger hierarchy from config."""
    log_dir = Path(config.dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    _enforce_size_cap(log_dir, config.max_total_mb)

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(config.level.upper())
    console.setFormatter(formatter)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        when="midnight",
        backupCount=config.keep_days,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    root = logging.getLogger("padmap")
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(console)
    root.addHandler(file_handler)
    root.propagate = False

    logger.debug("Logging initialized (dir=%s, level=%s)", log_dir, config.level)
