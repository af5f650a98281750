"""
Wiring: turn an EngineConfig into a ready InventoryService.

Callers that own their process (CLI, an HTTP app's startup hook) call
``bootstrap()`` once and share the returned service across threads.
"""

from inventory_engine.config import EngineConfig
from inventory_engine.db.engine import (
    create_tables,
    get_session_factory,
    init_engine_from_url,
)
from inventory_engine.domain.clock import Clock
from inventory_engine.logging_config import configure_logging
from inventory_engine.services.inventory_service import InventoryService


def bootstrap(
    config: EngineConfig,
    clock: Clock | None = None,
    create_schema: bool = True,
) -> InventoryService:
    """
    Configure logging, build the pooled engine, optionally create tables.

    Args:
        config: Engine settings.
        clock: Time source for ledger timestamps (SystemClock if None).
        create_schema: Create missing tables before returning.
    """
    configure_logging(level=config.log_level)
    engine = init_engine_from_url(
        config.database_url,
        echo=config.echo,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_recycle=config.pool_recycle,
    )
    if create_schema:
        create_tables(engine)
    return InventoryService(get_session_factory(), clock=clock, config=config)
