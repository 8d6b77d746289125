"""Console and NDJSON logging for flappy_rounds, with per-module levels."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

ROOT_LOGGER = "flappy_rounds"


def _level(name: str) -> int:
    return getattr(logging, name.strip().upper(), logging.INFO)


def parse_module_levels(raw: Optional[str]) -> Dict[str, str]:
    """Parse ``"match=debug,scheduler=warning"`` into a module -> level mapping."""
    levels: Dict[str, str] = {}
    if not raw:
        return levels
    for item in raw.split(","):
        if not item.strip():
            continue
        module, sep, level = item.partition("=")
        if not sep or not module.strip() or not level.strip():
            raise ValueError(f"expected module=level, got {item.strip()!r}")
        levels[module.strip()] = level.strip().lower()
    return levels


class NdjsonFormatter(logging.Formatter):
    """One JSON object per line, structured ``data`` kept as a nested object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "module": record.name.replace(f"{ROOT_LOGGER}.", ""),
            "msg": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """``12:00:01 [I] match: Match started  {...}`` with the level letter coloured."""

    COLORS = {
        logging.DEBUG: "\033[90m",
        logging.WARNING: "\033[33m",
    }
    ALERT = "\033[31m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.ALERT if record.levelno >= logging.ERROR else self.COLORS.get(record.levelno, "")
        module = record.name.replace(f"{ROOT_LOGGER}.", "")
        line = f"{datetime.now():%H:%M:%S} [{record.levelname[0]}] {module}: {record.getMessage()}"
        data = getattr(record, "data", None)
        if data:
            line += f"  {json.dumps(data, default=str)}"
        return f"{color}{line}{self.RESET}" if color else line


def setup_logging(level: str = "info", log_file: Optional[str] = None,
                  module_levels: Optional[Mapping[str, str]] = None) -> None:
    """
    Configure the flappy_rounds root logger. ``module_levels`` overrides the
    level of single modules, e.g. ``{"scheduler": "debug"}``.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(_level(level))
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ConsoleFormatter())
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(NdjsonFormatter())
        root.addHandler(fh)

    for module, module_level in (module_levels or {}).items():
        get_logger(module).setLevel(_level(module_level))


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the flappy_rounds namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
