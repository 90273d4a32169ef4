from __future__ import annotations

import json
import logging

from qparas.utils.log_json import JsonLogger, set_level


def _logger(name: str, **kwargs) -> tuple[JsonLogger, list[str]]:
    records: list[str] = []

    class _Collect(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record.getMessage())

    base = logging.getLogger(f"qparas.test-{name}.json")
    base.handlers[:] = [_Collect()]
    return JsonLogger(f"test-{name}", logger=base, **kwargs), records


def test_emits_json_event():
    set_level("INFO")
    log, records = _logger("emit")
    log.info("api.request", url="https://paras.test/token?x=1", params=[("a", "b")], skip=None)
    entry = json.loads(records[0])
    assert entry["event"] == "api.request"
    assert entry["level"] == "INFO"
    assert entry["service"] == "test-emit"
    assert entry["details"] == {"url": "https://paras.test/token", "params": [["a", "b"]]}


def test_level_threshold():
    set_level("WARNING")
    log, records = _logger("threshold")
    assert log.info("quiet") is None
    assert log.error("loud", error="boom") is not None
    assert len(records) == 1


def test_truncates_large_details():
    set_level("INFO")
    log, records = _logger("trunc", max_details_bytes=32)
    log.info("big", blob="x" * 200)
    entry = json.loads(records[0])
    assert entry["details"]["note"] == "truncated"
