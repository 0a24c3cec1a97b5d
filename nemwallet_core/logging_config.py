"""
Logging setup for nemwallet.

Every handler installed here carries a ``KeyMaterialFilter``: private keys
travel through this code base as long hex strings (serialized big
integers) or long decimal integers, and neither may reach a log sink.
Error messages from the codec quote the offending field value, so the
filter runs on the fully rendered message rather than trusting callers.

Two output formats:
  - **human** – coloured single line on stderr
  - **json**  – one JSON object per line; log files always use this

Usage:
    from nemwallet_core.logging_config import setup_logging
    setup_logging(level="DEBUG", fmt="json", log_file="nemwallet.log")
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

REDACTED = "<redacted>"

# 32+ hex digits or 30+ decimal digits counts as key material; a 34-character
# Base58 address does not hold such a run in practice.
_KEY_MATERIAL = re.compile(r"(?:0x)?(?:[0-9a-fA-F]{32,}|[0-9]{30,})")


def redact(text: str) -> str:
    return _KEY_MATERIAL.sub(REDACTED, text)


class KeyMaterialFilter(logging.Filter):
    """Rewrite each record so its message carries no key-sized numbers."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = ()
        if record.exc_info and record.exc_info[1] and not record.exc_text:
            record.exc_text = redact(logging.Formatter().formatException(record.exc_info))
        return True


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_text:
            log_obj["exception"] = record.exc_text
        elif record.exc_info and record.exc_info[1]:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


class _HumanFormatter(logging.Formatter):
    COLOURS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.COLOURS.get(record.levelname, "")
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{colour}{ts} [{record.levelname:<7}]{self.RESET} {record.name}: {record.getMessage()}"
        if record.exc_text:
            line += "\n" + record.exc_text
        return line


def _handler(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    handler.addFilter(KeyMaterialFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    fmt: str = "human",
    log_file: Optional[str] = None,
) -> None:
    """
    Replace the root logger's handlers with redacting console (and file) handlers.

    Unknown level names fall back to INFO.  Raises OSError when *log_file*
    cannot be created.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    # stdout is reserved for command output
    console_fmt = _JSONFormatter() if fmt == "json" else _HumanFormatter()
    root.addHandler(_handler(logging.StreamHandler(sys.stderr), console_fmt))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(_handler(logging.FileHandler(str(path)), _JSONFormatter()))
