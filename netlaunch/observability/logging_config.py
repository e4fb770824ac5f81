"""
Logging setup for netlaunch.

Modules log with plain logging.getLogger(__name__) and put identifiers in
`extra`. configure_logging() decides how those records are rendered:

- NETLAUNCH_ENV=production: one JSON object per line on stdout
- anything else: rich console output on stderr, with the launch/campaign
  identifiers of the record appended as key=value pairs

Each workflow run binds a short run id with run_context(). The id lives in
a ContextVar, so it follows the run into awaited coroutines and into
chain binary calls pushed to worker threads with asyncio.to_thread.

Usage:
    configure_logging()

    with run_context("3f9a1c"):
        logger.info("chain_init_stage", extra={"launch_id": 42, "stage": "done"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler

_run_id: ContextVar[Optional[str]] = ContextVar("netlaunch_run_id", default=None)

# Attributes every LogRecord has; anything else on a record came from `extra`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Shown inline by the console formatter, in this order
DISPLAY_KEYS = (
    "run_id", "launch_id", "campaign_id", "chain_id", "stage", "txhash", "path",
)


@contextmanager
def run_context(run_id: str) -> Iterator[str]:
    """Bind `run_id` to every record logged until the block exits."""
    token = _run_id.set(run_id)
    try:
        yield run_id
    finally:
        _run_id.reset(token)


def current_run_id() -> Optional[str]:
    return _run_id.get()


class RunIdFilter(logging.Filter):
    """Copies the bound run id onto records that do not carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        run_id = _run_id.get()
        if run_id and not hasattr(record, "run_id"):
            record.run_id = run_id  # type: ignore[attr-defined]
        return True


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record: timestamp, level, logger, message, the
    record's extra fields and, when present, the formatted exception.
    Values JSON cannot encode are rendered with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Message followed by the DISPLAY_KEYS the record carries."""

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        pairs = [
            f"{key}={getattr(record, key)}"
            for key in DISPLAY_KEYS
            if getattr(record, key, None) is not None
        ]
        return f"{text} [{' '.join(pairs)}]" if pairs else text


def configure_logging(env: Optional[str] = None, level: int = logging.INFO) -> None:
    """
    Replace the root logger's handlers with one for `env`.

    `env` defaults to NETLAUNCH_ENV, and to "development" when unset.
    """
    env = (env or os.environ.get("NETLAUNCH_ENV", "development")).lower().strip()

    handler: logging.Handler
    if env == "production":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(ConsoleFormatter())
    handler.addFilter(RunIdFilter())

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
