import json
import logging
from datetime import UTC, datetime

# Extra attributes the API clients attach via ``extra=``
_CONTEXT_FIELDS = ("client", "method", "url", "attempt", "status_code", "duration_ms", "headers")


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for structured logging systems (ELK, Datadog, etc.)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for field in _CONTEXT_FIELDS:
            if hasattr(record, field):
                log_obj[field] = getattr(record, field)

        return json.dumps(log_obj, default=str)


def setup_structured_logging(level: str | int = "INFO", json_output: bool = True) -> None:
    """
    Configure the root logger, optionally with JSON formatting
    """
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace existing handlers to avoid duplicate lines
    if root_logger.handlers:
        root_logger.handlers = []

    root_logger.addHandler(handler)
