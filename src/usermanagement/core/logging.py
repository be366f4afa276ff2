import logging, sys, json, time
from typing import Any, MutableMapping, Mapping, Sequence


RESERVED_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
}


def _coerce_for_json(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(k): _coerce_for_json(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_coerce_for_json(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return repr(value)


class AppNameFilter(logging.Filter):
    """Stamp every record with the service name (``app`` key in the JSON line)."""

    def __init__(self, app_name: str):
        super().__init__()
        self.app_name = app_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "app"):
            record.app = self.app_name
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base: MutableMapping[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)),
        }
        for key, value in record.__dict__.items():
            if key in RESERVED_LOG_RECORD_ATTRS or key in base or key.startswith("_"):
                continue
            base[key] = _coerce_for_json(value)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: str = "INFO", app_name: str = "user-management", stream=None) -> None:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(AppNameFilter(app_name))
    # force=True so a second call (tests, reloads) replaces rather than stacks handlers
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
