from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

LOGGER_NAME = "dentdirectory"

# Fields attached to every event of the current run (run_id).
_bound: Dict[str, Any] = {}


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = getattr(record, "payload", None) or {"event": record.getMessage()}
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """`event key=value ...` without the bookkeeping fields."""

    _skip = {"ts", "level", "event", "run_id", "traceback"}

    def format(self, record: logging.LogRecord) -> str:
        payload = getattr(record, "payload", None)
        if not payload:
            return record.getMessage()
        parts = [f"{k}={v}" for k, v in payload.items() if k not in self._skip]
        head = payload.get("event", "")
        if record.levelno >= logging.ERROR:
            head = f"ERROR {head}"
        return " ".join([head, *parts])


def setup_logging(run_id: str, log_dir: str = "logs", level: str = "INFO") -> Path:
    """Human-readable lines on stdout, full JSON events in logs/run_<id>.jsonl."""
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_path = Path(log_dir) / f"run_{run_id}.jsonl"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(root.level)
    ch.setFormatter(ConsoleFormatter())
    root.addHandler(ch)

    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setLevel(root.level)
    fh.setFormatter(JsonLineFormatter())
    root.addHandler(fh)

    _bound.clear()
    _bound["run_id"] = run_id
    log_event("logging_initialized", log_path=str(log_path))
    return log_path


def _ts() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _emit(level: int, event: str, fields: Dict[str, Any]) -> None:
    payload: Dict[str, Any] = {"ts": _ts(), "level": logging.getLevelName(level), "event": event}
    payload.update(_bound)
    payload.update(fields)
    logging.getLogger(LOGGER_NAME).log(level, event, extra={"payload": payload})


def log_event(event: str, **fields: Any) -> None:
    _emit(logging.INFO, event, fields)


def log_error(event: str, **fields: Any) -> None:
    _emit(logging.ERROR, event, fields)
