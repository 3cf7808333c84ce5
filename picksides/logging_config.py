"""
Structured logging for picksides.

Every record is tagged with the debate scope it was emitted in: which
debate, which round, which side and which persona. The scope is opened
with LogContext and captured when the record is created, so the
formatters can lift it to top-level keys without the caller repeating it.

Usage:
    from picksides.logging_config import LogContext, configure_logging, get_logger

    configure_logging(level="DEBUG", json_output=False)
    logger = get_logger(__name__)

    with LogContext(debate_id="d123", round=2):
        with LogContext(side="pro", persona="Socrates"):
            logger.info("Emotional state transition", new_state="engaged")

    # JSON: {"ts": ..., "level": "INFO", ..., "debate_id": "d123", "round": 2,
    #        "side": "pro", "persona": "Socrates", "new_state": "engaged"}
    # text: 2024-01-01 00:00:00 [INFO] [engine] [d123 r2 pro:Socrates] ...
"""

import inspect
import json
import logging
import logging.handlers
import sys
import threading
import time
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, Optional

from picksides.config import LoggingConfig, get_logging_config

# Keys that describe where in a debate a record was emitted.
SCOPE_KEYS = ("debate_id", "round", "side", "persona")

_debate_scope: ContextVar[Dict[str, Any]] = ContextVar("picksides_debate_scope", default={})


def get_context() -> Dict[str, Any]:
    """Fields of the innermost open LogContext."""
    return _debate_scope.get()


class LogContext:
    """Context manager that adds fields to every record logged inside it.

    Nested contexts merge, the inner value winning. Scope keys (debate_id,
    round, side, persona) are lifted to the top of each record; any other
    key is logged as an ordinary field.
    """

    def __init__(self, **fields: Any):
        self._fields = fields
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _debate_scope.set({**_debate_scope.get(), **self._fields})
        return self

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _debate_scope.reset(self._token)
            self._token = None


@dataclass
class LogRecord:
    """One formatted record: header, debate scope and extra fields."""

    timestamp: str
    level: str
    logger: str
    message: str
    scope: Dict[str, Any] = field(default_factory=dict)
    fields: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "ts": self.timestamp,
            "level": self.level,
            "logger": self.logger,
            "msg": self.message,
        }
        for key in SCOPE_KEYS:
            if self.scope.get(key) is not None:
                result[key] = self.scope[key]
        result.update(self.fields)
        if self.exception:
            result["exception"] = self.exception
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)

    def scope_tag(self) -> str:
        """Compact scope label, e.g. ``d123 r2 pro:Socrates``."""
        parts = []
        if self.scope.get("debate_id"):
            parts.append(str(self.scope["debate_id"]))
        if self.scope.get("round") is not None:
            parts.append(f"r{self.scope['round']}")
        side = self.scope.get("side")
        persona = self.scope.get("persona")
        if side and persona:
            parts.append(f"{side}:{persona}")
        elif side or persona:
            parts.append(str(side or persona))
        return " ".join(parts)

    def to_text(self) -> str:
        parts = [self.timestamp, f"[{self.level}]", f"[{self.logger}]"]
        tag = self.scope_tag()
        if tag:
            parts.append(f"[{tag}]")
        parts.append(self.message)
        if self.fields:
            parts.append(" ".join(f"{k}={v}" for k, v in self.fields.items()))
        if self.exception:
            parts.append(f"\n{self.exception.get('traceback', '')}")
        return " ".join(parts)


def _split_record(record: logging.LogRecord) -> tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a record's context and call fields into (scope, other fields).

    Records from StructuredLogger carry the scope captured at log time;
    plain stdlib records fall back to the scope open while formatting.
    Fields passed on the call win over context fields of the same name.
    """
    context = getattr(record, "debate_scope", None)
    if context is None:
        context = get_context()
    merged = {**context, **getattr(record, "structured_fields", {})}
    scope = {key: merged.pop(key) for key in SCOPE_KEYS if key in merged}
    return scope, merged


class JSONFormatter(logging.Formatter):
    """One JSON object per record, scope keys at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        scope, fields = _split_record(record)
        log_record = LogRecord(
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            scope=scope,
            fields=fields,
        )
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_record.exception = {
                "type": exc_type.__name__ if exc_type else "Unknown",
                "message": str(exc_value) if exc_value else "",
                "traceback": self.formatException(record.exc_info),
            }
        return log_record.to_json()


class TextFormatter(logging.Formatter):
    """Single-line human-readable records with a bracketed scope tag."""

    def format(self, record: logging.LogRecord) -> str:
        scope, fields = _split_record(record)
        log_record = LogRecord(
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            level=record.levelname,
            logger=record.name.rsplit(".", 1)[-1],
            message=record.getMessage(),
            scope=scope,
            fields=fields,
        )
        if record.exc_info:
            log_record.exception = {"traceback": self.formatException(record.exc_info)}
        return log_record.to_text()


class StructuredLogger:
    """Logger taking keyword fields, stamping each record with the debate scope."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)
        self._name = name

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = {"structured_fields": fields, "debate_scope": dict(get_context())}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)


_loggers: Dict[str, StructuredLogger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str) -> StructuredLogger:
    """Get or create the structured logger for ``name`` (thread-safe)."""
    with _loggers_lock:
        if name not in _loggers:
            _loggers[name] = StructuredLogger(name)
        return _loggers[name]


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
    log_file: str | None = None,
    propagate: bool = True,
    config: LoggingConfig | None = None,
) -> None:
    """
    Install picksides log handlers on the root logger.

    Explicit arguments override ``config``, which defaults to
    get_logging_config() (the PICKSIDES_LOG_* environment variables).

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: True for JSON lines, False for text
        log_file: Path of a rotating log file
        propagate: Whether the ``picksides`` logger propagates to root
        config: Base settings
    """
    settings = config or get_logging_config()
    log_level = getattr(logging, (level or settings.level).upper(), logging.INFO)
    use_json = json_output if json_output is not None else settings.log_format == "json"
    file_path = log_file or settings.log_file
    formatter = JSONFormatter() if use_json else TextFormatter()

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if file_path:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                file_path,
                maxBytes=settings.max_bytes,
                backupCount=settings.backup_count,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root.addHandler(handler)

    package_logger = logging.getLogger("picksides")
    package_logger.setLevel(log_level)
    package_logger.propagate = propagate


def log_function(level: str = "DEBUG", log_result: bool = False):
    """
    Decorator logging a call's duration, or its failure at ERROR.

    Works on plain and async functions. Failures are logged and re-raised.

    Args:
        level: Level for the completion record
        log_result: Also log the type of the returned value
    """
    log_level = getattr(logging, level.upper(), logging.DEBUG)

    def decorator(func: Callable) -> Callable:
        logger = get_logger(func.__module__)

        def _completed(start: float, result: Any) -> None:
            fields: Dict[str, Any] = {
                "function": func.__qualname__,
                "duration_ms": round((time.monotonic() - start) * 1000, 3),
            }
            if log_result and result is not None:
                fields["result_type"] = type(result).__name__
            logger._log(log_level, f"Completed {func.__qualname__}", **fields)

        def _failed(start: float, error: Exception) -> None:
            logger.error(
                f"Failed {func.__qualname__}",
                exc_info=True,
                function=func.__qualname__,
                duration_ms=round((time.monotonic() - start) * 1000, 3),
                error=str(error) or type(error).__name__,
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = time.monotonic()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _failed(start, e)
                    raise
                _completed(start, result)
                return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(start, e)
                raise
            _completed(start, result)
            return result

        return wrapper

    return decorator


__all__ = [
    "SCOPE_KEYS",
    "LogRecord",
    "JSONFormatter",
    "TextFormatter",
    "StructuredLogger",
    "LogContext",
    "get_context",
    "get_logger",
    "configure_logging",
    "log_function",
]
