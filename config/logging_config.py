"""Logging configuration for the Unit Design Planner.

Streamlit installs its own handler on the "streamlit" logger and re-executes
app.py on every interaction, so setup here must be idempotent and must leave
handlers it did not create alone.
"""

import json
import logging
import sys
from datetime import datetime, timezone

HANDLER_NAME = "unit_planner"
CONTEXT_FIELDS = ("block_id", "floor_id")
QUIET_LOGGERS = ["httpcore", "httpx", "watchdog", "urllib3"]


def _context(record) -> dict:
    return {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with block/floor context when the call supplied it."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        log_entry.update(_context(record))
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Streamlit-style console lines, suffixed with [block=.. floor=..] context."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S")

    def format(self, record):
        line = super().format(record)
        context = _context(record)
        if context:
            tags = " ".join(f"{k.split('_')[0]}={v}" for k, v in context.items())
            line = f"{line} [{tags}]"
        return line


def setup_logging(level: str = "INFO", json_output: bool = False, stream=None):
    """Install the app's handler on the root logger, replacing one from an earlier rerun.

    Handlers owned by Streamlit or by the test runner are kept.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if json_output else ConsoleFormatter())

    root.handlers = [h for h in root.handlers if h.get_name() != HANDLER_NAME]
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # Streamlit already prints its own records through its handler
    logging.getLogger("streamlit").propagate = False
    return handler
