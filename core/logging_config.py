"""
Structured logging for the Shop Admin client and mock server.

Every event passes through a redaction step so passwords, tokens and API
keys never reach the log stream, whether they arrive as event fields or
as arguments of a decorated service call.
"""

import inspect
import logging
import sys
from functools import wraps
from typing import Any, Dict, Optional
import structlog
from config.app_config import get_config

SENSITIVE_KEYS = ("password", "token", "apikey", "api_key")
MASK = "***"

def is_sensitive(key: Any) -> bool:
    name = str(key).lower()
    return any(s in name for s in SENSITIVE_KEYS)

def redact(value: Any) -> Any:
    """Mask sensitive keys at any depth of a dict/list structure."""
    if isinstance(value, dict):
        return {k: MASK if is_sensitive(k) else redact(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact(v) for v in value]
    return value

def redact_event(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """structlog processor applying `redact` to the event fields."""
    return {k: v if k == "event" else (MASK if is_sensitive(k) else redact(v))
            for k, v in event_dict.items()}

def setup_structured_logging(log_level: Optional[str] = None) -> None:
    level = log_level or get_config().monitoring.log_level

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_event,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)

class LoggerMixin:
    """Gives a class a `self.logger` named after it."""

    @property
    def logger(self) -> structlog.BoundLogger:
        return get_logger(self.__class__.__name__)

def _call_params(func, args, kwargs) -> Dict[str, Any]:
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return {"args": list(args), **kwargs}
    params = dict(bound.arguments)
    params.pop("self", None)
    return params

def log_function_call(func):
    """Log a service mutation, its (redacted) parameters and its outcome."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        logger.info("Service call", function=func.__qualname__,
                    params=redact(_call_params(func, args, kwargs)))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error("Service call failed", function=func.__qualname__,
                         error=str(e), error_type=type(e).__name__)
            raise
        logger.info("Service call completed", function=func.__qualname__)
        return result
    return wrapper
