"""Tests for building a store from configuration."""

from pathlib import Path

import pytest

from agent_drugs.bootstrap import open_store
from agent_drugs.config.models import AgentDrugsConfig, CatalogConfig, PersistenceConfig
from agent_drugs.core.errors import ValidationError
from agent_drugs.modifiers.seed import DEFAULT_DEFINITIONS


def make_config(tmp_path: Path, **catalog) -> AgentDrugsConfig:
    return AgentDrugsConfig(
        persistence=PersistenceConfig(database_path=str(tmp_path / "boot.db")),
        catalog=CatalogConfig(**catalog),
    )


async def test_seeds_defaults(tmp_path: Path) -> None:
    store = await open_store(make_config(tmp_path))
    try:
        definitions = await store.list_definitions()
    finally:
        await store.close()

    assert len(definitions) == len(DEFAULT_DEFINITIONS)


async def test_reopen_keeps_catalog(tmp_path: Path) -> None:
    config = make_config(tmp_path)
    await (await open_store(config)).close()

    store = await open_store(config)
    try:
        assert len(await store.list_definitions()) == len(DEFAULT_DEFINITIONS)
    finally:
        await store.close()


async def test_seed_disabled(tmp_path: Path) -> None:
    store = await open_store(make_config(tmp_path, seed_on_startup=False))
    try:
        assert await store.list_definitions() == []
    finally:
        await store.close()


async def test_database_url_override(tmp_path: Path) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'override.db'}"

    store = await open_store(make_config(tmp_path), database_url=url)
    await store.close()

    assert store.database_url == url
    assert (tmp_path / "override.db").exists()
    assert not (tmp_path / "boot.db").exists()


async def test_invalid_seed_file(tmp_path: Path) -> None:
    seed_file = tmp_path / "seed.yaml"
    seed_file.write_text("drugs: {}\n")

    with pytest.raises(ValidationError):
        await open_store(make_config(tmp_path, seed_file=str(seed_file)))
