"""
Structured JSON logging for the inventory engine.

Every engine record is written as one JSON object per line::

    {"ts": "...", "level": "INFO", "logger": "inventory_engine.services.ledger",
     "message": "transaction_recorded", "operation": "record_transaction",
     "product_id": 7, "actor_id": 2, "previous_stock": 5, "new_stock": 2}

``operation``, ``product_id`` and ``actor_id`` come from the operation
context InventoryService binds around each call; everything else comes from
the call site's ``extra`` mapping.  Context wins over ``extra`` on a clash.

A record logged with ``exc_info`` gets an ``error`` object.  Engine errors
contribute their ``code`` and diagnostic attributes (product name, requested
and available quantities, failed store operation, field errors), so a log
consumer never has to parse the message text.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "describe_error",
    "get_logger",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from inventory_engine.exceptions import InventoryEngineError

LOGGER_NAMESPACE = "inventory_engine"

# Fields an operation may bind for its duration
CONTEXT_FIELDS = ("operation", "product_id", "actor_id")

_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "inventory_log_context", default=None
)


class LogContext:
    """Operation-scoped fields stamped on every record logged inside ``bind``."""

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[None]:
        """
        Add fields for the duration of the block, then restore the previous set.

        ``None`` values are skipped so optional ids can be passed straight
        through.  Nested binds layer on top of the outer one.

        Raises:
            ValueError: for a field not in CONTEXT_FIELDS.
        """
        unknown = set(fields) - set(CONTEXT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown log context fields: {sorted(unknown)}")

        merged = dict(_context.get() or {})
        merged.update((k, v) for k, v in fields.items() if v is not None)
        token = _context.set(merged)
        try:
            yield
        finally:
            _context.reset(token)

    @staticmethod
    def current() -> dict[str, Any]:
        return dict(_context.get() or {})

    @staticmethod
    def clear() -> None:
        _context.set(None)


def describe_error(exc: BaseException) -> dict[str, Any]:
    """
    The ``error`` object for a logged exception.

    InventoryEngineError subclasses add ``code`` plus every public attribute
    they carry; other exceptions give only type and message.
    """
    described: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, InventoryEngineError):
        described["code"] = exc.code
        described.update(
            (key, value) for key, value in vars(exc).items() if not key.startswith("_")
        )
    return described


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    # Decimal prices and valuations keep their exact digits
    return str(value)


# Attributes every LogRecord has; anything else arrived through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: base fields, context, extras, error."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_context.get() or {})

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload["error"] = describe_error(record.exc_info[1])
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


def get_logger(name: str) -> logging.Logger:
    """Logger under the inventory_engine namespace, e.g. ``services.ledger``."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


_setup_lock = threading.Lock()


def _engine_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h.formatter, StructuredFormatter)]


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Attach the JSON handler to the ``inventory_engine`` logger.

    Idempotent: once a StructuredFormatter handler is attached, later calls
    leave the configuration alone.  Engine records do not propagate to the
    root logger.
    """
    engine_logger = logging.getLogger(LOGGER_NAMESPACE)
    with _setup_lock:
        if _engine_handlers(engine_logger):
            return engine_logger
        target = handler if handler is not None else logging.StreamHandler(
            stream or sys.stderr
        )
        target.setFormatter(StructuredFormatter())
        engine_logger.addHandler(target)
        engine_logger.setLevel(level)
        engine_logger.propagate = False
    return engine_logger


def reset_logging() -> None:
    """Detach the engine handlers and restore defaults. For tests."""
    engine_logger = logging.getLogger(LOGGER_NAMESPACE)
    with _setup_lock:
        for h in _engine_handlers(engine_logger):
            engine_logger.removeHandler(h)
        engine_logger.setLevel(logging.WARNING)
        engine_logger.propagate = True
