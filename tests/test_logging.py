import json
import logging

import pytest

from torrentcodec.common.logging import LOGGING_CONFIG, JSONLogFormatter, config_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "torrentcodec.torrent.parser", logging.INFO, __file__, 12, "Parsed %s", ("x",), None
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_renders_requested_keys():
    formatter = JSONLogFormatter(fmt_keys={"level": "levelname", "logger": "name", "msg": "message"})
    payload = json.loads(formatter.format(_record()))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "torrentcodec.torrent.parser"
    assert payload["msg"] == "Parsed x"
    assert "timestamp" in payload
    assert "message" not in payload


def test_json_formatter_includes_extra_fields():
    formatter = JSONLogFormatter()
    payload = json.loads(formatter.format(_record(info_hash="abc")))
    assert payload["info_hash"] == "abc"
    assert payload["message"] == "Parsed x"
    assert "lineno" not in payload


def test_json_formatter_includes_exception():
    formatter = JSONLogFormatter()
    try:
        raise ValueError("boom")
    except ValueError:
        import sys

        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(formatter.format(record))
    assert "ValueError: boom" in payload["exc_info"]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    queue_handler = logging.getHandlerByName("queue_handler")
    if queue_handler is not None and queue_handler.listener is not None:
        queue_handler.listener.stop()
        root.removeHandler(queue_handler)
    root.setLevel(level)


def test_config_logging_writes_json_lines(tmp_path, restore_root_logger):
    log_path = config_logging("test.log", tmp_path / "logs")
    logging.getLogger("torrentcodec.test").info("hello", extra={"torrent": "sample"})
    logging.getHandlerByName("queue_handler").listener.stop()

    lines = log_path.read_text().splitlines()
    entry = json.loads(lines[-1])
    assert entry["message"] == "hello"
    assert entry["torrent"] == "sample"
    assert entry["level"] == "INFO"


def test_config_logging_does_not_mutate_defaults(tmp_path, restore_root_logger):
    config_logging("test.log", tmp_path, verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    assert LOGGING_CONFIG["handlers"]["file_json"]["filename"] == "torrentcodec.log"
