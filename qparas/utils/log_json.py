from __future__ import annotations

"""Structured JSON logger writing one event per line to stderr."""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, MutableMapping

URL_QUERY_RE = re.compile(r"https?://[^\s?]+\?[^\s]+")

ROOT_LOGGER = "qparas"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def set_level(level: str | int) -> None:
    """Set the threshold shared by every ``JsonLogger``."""

    if isinstance(level, str):
        level = _LEVEL_MAP.get(level.upper(), logging.WARNING)
    logging.getLogger(ROOT_LOGGER).setLevel(level)


def _scrub(value: str) -> str:
    return URL_QUERY_RE.sub(lambda m: m.group(0).split("?")[0], value)


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k): _sanitize(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, (int, float, bool)):
        return obj
    if obj is None:
        return None
    return _scrub(str(obj))


def _truncate(details: Mapping[str, Any] | Iterable[Any], max_bytes: int) -> Any:
    if max_bytes <= 0:
        return details
    serialized = json.dumps(details, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    blob = serialized.encode("utf-8")
    if len(blob) <= max_bytes:
        return details
    preview = blob[:max_bytes].decode("utf-8", errors="ignore")
    return {"note": "truncated", "preview": preview}


class JsonLogger:
    """Emit structured JSON events with consistent keys."""

    def __init__(
        self,
        service: str,
        *,
        logger: logging.Logger | None = None,
        max_details_bytes: int = 4096,
    ) -> None:
        self._service = service
        self._logger = logger or logging.getLogger(f"{ROOT_LOGGER}.{service}.json")
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)
        self._logger.propagate = False
        self._max_details_bytes = max(0, int(max_details_bytes))

    def debug(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("WARNING", event, fields)

    def error(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("ERROR", event, fields)

    def _emit(self, level: str, event: str, fields: MutableMapping[str, Any]) -> dict[str, Any] | None:
        levelno = _LEVEL_MAP.get(level, logging.INFO)
        if not self._logger.isEnabledFor(levelno):
            return None
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "service": self._service,
            "event": event,
        }
        if fields:
            entry["details"] = _truncate(_sanitize(fields), self._max_details_bytes)
        payload = json.dumps(entry, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
        self._logger.log(levelno, payload)
        return entry


__all__ = ["JsonLogger", "set_level"]
