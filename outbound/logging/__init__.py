from .safe_logging import redact_headers, token_presence
from .structured import JSONFormatter, setup_structured_logging

__all__ = ["JSONFormatter", "redact_headers", "setup_structured_logging", "token_presence"]
