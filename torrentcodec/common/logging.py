import datetime as dt
import json
import copy
from typing import override
import logging
import logging.config
import atexit
from pathlib import Path

# attributes every LogRecord carries; anything else arrived through extra={...}
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class JSONLogFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def __init__(self, *, fmt_keys: dict[str, str] | None = None):
        super().__init__()
        # output key -> LogRecord attribute
        self.fmt_keys = fmt_keys if fmt_keys is not None else {}

    @override
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.to_dict(record), default=str)

    def to_dict(self, record: logging.LogRecord) -> dict:
        computed = {
            "message": record.getMessage(),
            "timestamp": dt.datetime.fromtimestamp(
                record.created, tz=dt.timezone.utc
            ).isoformat(),
        }
        if record.exc_info is not None:
            computed["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info is not None:
            computed["stack_info"] = self.formatStack(record.stack_info)

        payload = {}
        for key, attr in self.fmt_keys.items():
            if attr in computed:
                payload[key] = computed.pop(attr)
            else:
                payload[key] = getattr(record, attr, None)
        payload.update(computed)

        for key, val in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = val

        return payload


LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[%(levelname)s|%(module)s|L%(lineno)d] %(asctime)s: %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "json": {
            "()": JSONLogFormatter,
            "fmt_keys": {
                "level": "levelname",
                "message": "message",
                "timestamp": "timestamp",
                "logger": "name",
                "module": "module",
                "function": "funcName",
                "line": "lineno",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "WARNING",
            "formatter": "simple",
            "stream": "ext://sys.stderr",
        },
        "file_json": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "json",
            "filename": "torrentcodec.log",
            "maxBytes": 1_000_000,
            "backupCount": 3,
        },
        "queue_handler": {
            "class": "logging.handlers.QueueHandler",
            "handlers": ["console", "file_json"],
            "respect_handler_level": True,
        },
    },
    "loggers": {"root": {"level": "INFO", "handlers": ["queue_handler"]}},
}


def config_logging(
    file_name: str,
    log_dir: Path = Path("data") / "logs",
    verbose: bool = False,
) -> Path:
    """
    Configure the root logger for a command-line run.

    Records go through a queue to a stderr console handler and a rotating
    JSON-lines file under ``log_dir``. Returns the log file path.
    """
    log_path = log_dir / file_name
    log_path.parent.mkdir(parents=True, exist_ok=True)

    config = copy.deepcopy(LOGGING_CONFIG)
    config["handlers"]["file_json"]["filename"] = str(log_path)
    if verbose:
        config["loggers"]["root"]["level"] = "DEBUG"
        config["handlers"]["console"]["level"] = "DEBUG"

    logging.config.dictConfig(config)
    queue_handler = logging.getHandlerByName("queue_handler")
    if queue_handler is not None:
        queue_handler.listener.start()
        atexit.register(queue_handler.listener.stop)

    return log_path
