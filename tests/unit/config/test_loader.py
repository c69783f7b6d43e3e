"""Unit tests for agent_drugs.config.loader module."""

from pathlib import Path

import pytest
import yaml

from agent_drugs.config.loader import (
    apply_env_overrides,
    create_default_config,
    ensure_config_dir,
    load_config,
)
from agent_drugs.config.models import AgentDrugsConfig
from agent_drugs.core.errors import ConfigError
from agent_drugs.observability.logging import LogMode


@pytest.fixture(autouse=True)
def fake_home(tmp_path: Path, monkeypatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "server": {"port": 4000, "transport": "stdio"},
                "scope": {"user_id": "alice"},
            }
        )
    )
    return path


class TestEnsureConfigDir:
    def test_creates_directories(self, fake_home: Path) -> None:
        config_dir = ensure_config_dir()

        assert config_dir == fake_home / ".agent-drugs"
        assert (config_dir / "data").is_dir()
        assert (config_dir / "logs").is_dir()


class TestCreateDefaultConfig:
    def test_writes_loadable_defaults(self, tmp_path: Path) -> None:
        path = create_default_config(tmp_path / "cfg")

        assert path.name == "config.yaml"
        assert load_config(path, environ={}) == AgentDrugsConfig()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        create_default_config(tmp_path)

        with pytest.raises(ConfigError, match="already exists"):
            create_default_config(tmp_path)

    def test_overwrite(self, tmp_path: Path) -> None:
        path = create_default_config(tmp_path)
        path.write_text("server: {port: 1234}\n")

        create_default_config(tmp_path, overwrite=True)

        assert load_config(path, environ={}).server.port == 3001


class TestApplyEnvOverrides:
    def test_overrides_sections(self) -> None:
        merged = apply_env_overrides(
            {"server": {"host": "127.0.0.1"}},
            {"PORT": "9000", "AGENT_DRUGS_AGENT_ID": "bot"},
        )

        assert merged == {
            "server": {"host": "127.0.0.1", "port": "9000"},
            "scope": {"agent_id": "bot"},
        }

    def test_prefixed_variable_wins(self) -> None:
        merged = apply_env_overrides(
            {},
            {"AGENT_DRUGS_DATABASE_URL": "sqlite+aiosqlite:///a.db", "DATABASE_URL": "other"},
        )
        assert merged["persistence"]["database_url"] == "sqlite+aiosqlite:///a.db"

    def test_empty_values_ignored(self) -> None:
        assert apply_env_overrides({}, {"PORT": ""}) == {}

    def test_input_not_mutated(self) -> None:
        original = {"server": {"port": 1}}
        apply_env_overrides(original, {"PORT": "2"})
        assert original == {"server": {"port": 1}}


class TestLoadConfig:
    def test_defaults_without_file(self) -> None:
        assert load_config(environ={}) == AgentDrugsConfig()

    def test_reads_default_location(self, fake_home: Path) -> None:
        config_dir = fake_home / ".agent-drugs"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("scope:\n  agent_id: home-agent\n")

        assert load_config(environ={}).scope.agent_id == "home-agent"

    def test_reads_explicit_file(self, config_file: Path) -> None:
        config = load_config(config_file, environ={})

        assert config.server.port == 4000
        assert config.server.transport == "stdio"
        assert config.scope.user_id == "alice"
        assert config.scope.agent_id == "mock-agent"

    def test_environment_overrides_file(self, config_file: Path) -> None:
        config = load_config(
            config_file,
            environ={"AGENT_DRUGS_PORT": "5000", "AGENT_DRUGS_LOG_MODE": "prod"},
        )

        assert config.server.port == 5000
        assert config.logging.mode == LogMode.PROD

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml", environ={})

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path, environ={}) == AgentDrugsConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("server: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config(path, environ={})

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config(path, environ={})

    def test_validation_error_names_key(self, tmp_path: Path) -> None:
        path = tmp_path / "invalid.yaml"
        path.write_text("server:\n  port: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path, environ={})

        assert exc_info.value.config_key == "server.port"
        assert "server.port" in str(exc_info.value)

    def test_short_sqlite_url_from_environment(self) -> None:
        config = load_config(environ={"DATABASE_URL": "sqlite:./mock-agent-drugs.db"})

        assert config.persistence.resolve_url() == "sqlite+aiosqlite:///./mock-agent-drugs.db"

    def test_unparsable_database_url_names_key(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(environ={"AGENT_DRUGS_DATABASE_URL": "not a database url"})

        assert exc_info.value.config_key == "persistence.database_url"
