"""Composition root: build a ready modifier store from configuration."""

import structlog

from agent_drugs.config.models import AgentDrugsConfig
from agent_drugs.modifiers.seed import resolve_definitions
from agent_drugs.persistence.store import SQLModifierStore

log = structlog.get_logger(__name__)


async def open_store(
    config: AgentDrugsConfig,
    *,
    database_url: str | None = None,
) -> SQLModifierStore:
    """Create the engine, create tables and seed an empty catalog.

    Args:
        config: Application configuration.
        database_url: Overrides the configured database location.

    Returns:
        An initialized store. The caller owns it and must ``close()`` it.

    Raises:
        PersistenceError: If the database cannot be opened or seeded.
        ValidationError: If the configured seed file is invalid.
    """
    store = SQLModifierStore(database_url or config.persistence.resolve_url())
    await store.initialize()

    if config.catalog.seed_on_startup:
        try:
            inserted = await store.seed_definitions(
                resolve_definitions(config.catalog.seed_file)
            )
        except Exception:
            await store.close()
            raise
        log.info("bootstrap.store.ready", url=store.database_url, seeded=inserted)
    return store
