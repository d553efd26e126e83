"""
gatelock.logger
~~~~~~~~~~~~~~~
JSON-lines decision log with daily rotation.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

_ISO = "%Y-%m-%dT%H:%M:%SZ"


def _now() -> str:  # RFC-3339 without microseconds
    return datetime.now(tz=timezone.utc).strftime(_ISO)


class _JSONFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        if isinstance(record.msg, dict):
            return json.dumps(record.msg, separators=(",", ":"))
        return super().format(record)


class DecisionLogger:
    def __init__(self, basename: str | Path):
        log = logging.getLogger("gatelock.decisions")
        log.setLevel(logging.INFO)
        log.propagate = False

        for old in list(log.handlers):
            log.removeHandler(old)
            old.close()

        jsonl_file = Path(basename).with_suffix(".jsonl")
        h = logging.handlers.TimedRotatingFileHandler(
            jsonl_file, when="midnight", backupCount=7, encoding="utf-8"
        )
        h.setFormatter(_JSONFormatter())
        log.addHandler(h)

        self.path = jsonl_file
        self.log = log

    def decision(self, scope: str, allowed: bool) -> None:
        self.log.info(
            {
                "event": "allow" if allowed else "deny",
                "ts": _now(),
                "scope": scope,
                "allowed": allowed,
            }
        )

    def close(self) -> None:
        for h in list(self.log.handlers):
            self.log.removeHandler(h)
            h.close()
