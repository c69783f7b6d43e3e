"""Configuration loading and management for agent-drugs.

Functions:
    load_config: Load configuration from ~/.agent-drugs/config.yaml plus
        environment overrides
    create_default_config: Write a default config.yaml
    ensure_config_dir: Ensure ~/.agent-drugs/ exists
"""

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError
import yaml

from agent_drugs.config.models import AgentDrugsConfig, get_config_dir, get_default_config
from agent_drugs.core.errors import ConfigError

# Environment variable -> (section, key). The first variable set wins.
ENV_OVERRIDES: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("AGENT_DRUGS_DATABASE_URL", "DATABASE_URL"), "persistence", "database_url"),
    (("AGENT_DRUGS_PORT", "PORT"), "server", "port"),
    (("AGENT_DRUGS_HOST",), "server", "host"),
    (("AGENT_DRUGS_USER_ID",), "scope", "user_id"),
    (("AGENT_DRUGS_AGENT_ID",), "scope", "agent_id"),
    (("AGENT_DRUGS_LOG_LEVEL",), "logging", "level"),
    (("AGENT_DRUGS_LOG_MODE",), "logging", "mode"),
)


def ensure_config_dir() -> Path:
    """Create ~/.agent-drugs/ and its data/ and logs/ subdirectories."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "data").mkdir(exist_ok=True)
    (config_dir / "logs").mkdir(exist_ok=True)
    return config_dir


def create_default_config(
    config_dir: Path | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """Write config.yaml with default values.

    Args:
        config_dir: Directory to create the file in. Defaults to ~/.agent-drugs/
        overwrite: If True, overwrite an existing file.

    Returns:
        Path to the written config.yaml.

    Raises:
        ConfigError: If the file exists and overwrite is False.
    """
    if config_dir is None:
        config_dir = ensure_config_dir()
    else:
        config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / "config.yaml"
    if config_path.exists() and not overwrite:
        raise ConfigError(
            f"Configuration file already exists: {config_path}",
            config_file=str(config_path),
        )

    with config_path.open("w") as f:
        yaml.dump(
            get_default_config().model_dump(mode="json"),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    return config_path


def apply_env_overrides(
    config_dict: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return a copy of ``config_dict`` with environment overrides applied."""
    if environ is None:
        environ = os.environ

    merged = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in config_dict.items()
    }
    for names, section, key in ENV_OVERRIDES:
        value = next((environ[name] for name in names if environ.get(name)), None)
        if value is None:
            continue
        target = merged.get(section)
        if not isinstance(target, dict):
            target = {}
            merged[section] = target
        target[key] = value
    return merged


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AgentDrugsConfig:
    """Load configuration from YAML and the environment.

    Without an explicit path, ~/.agent-drugs/config.yaml is read when it
    exists and defaults are used otherwise. ``.env`` files in the current
    directory and in ~/.agent-drugs/ are loaded first; they never replace
    variables already set.

    Args:
        config_path: Path to a config file. Must exist when given.
        environ: Environment to read overrides from. Defaults to os.environ.

    Returns:
        Validated AgentDrugsConfig instance.

    Raises:
        ConfigError: If the file is missing, malformed, or fails validation.
    """
    if environ is None:
        load_dotenv()
        load_dotenv(get_config_dir() / ".env")

    config_dict: Any = {}
    if config_path is None:
        default_path = get_config_dir() / "config.yaml"
        if default_path.exists():
            config_path = default_path
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}. "
            "Run `agent-drugs config init` to create default configuration.",
            config_file=str(config_path),
        )

    if config_path is not None:
        try:
            with config_path.open() as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse configuration file: {e}",
                config_file=str(config_path),
                details={"yaml_error": str(e)},
            ) from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigError(
                "Configuration file must contain a mapping",
                config_file=str(config_path),
            )

    try:
        return AgentDrugsConfig.model_validate(apply_env_overrides(config_dict, environ))
    except PydanticValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            error_messages.append(f"  - {loc}: {error['msg']}")

        first_loc = ".".join(str(x) for x in e.errors()[0]["loc"]) if e.errors() else None
        raise ConfigError(
            "Configuration validation failed:\n" + "\n".join(error_messages),
            config_key=first_loc,
            config_file=str(config_path) if config_path else None,
            details={"validation_errors": e.errors()},
        ) from e
