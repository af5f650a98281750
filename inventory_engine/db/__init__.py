"""Database layer - engine, pool, base classes, money helpers."""

from inventory_engine.db.base import Base, Identifier, TrackedBase
from inventory_engine.db.engine import (
    create_engine_from_url,
    create_tables,
    drop_tables,
    get_engine,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from inventory_engine.db.types import round_money, to_decimal

__all__ = [
    "create_engine_from_url",
    "init_engine_from_url",
    "get_engine",
    "get_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "reset_engine",
    "Base",
    "Identifier",
    "TrackedBase",
    "round_money",
    "to_decimal",
]
