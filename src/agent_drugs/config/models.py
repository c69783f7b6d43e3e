"""Pydantic models for agent-drugs configuration.

All configuration validation happens through these models.

Classes:
    ServerConfig: HTTP/stdio transport settings
    PersistenceConfig: Database location
    ScopeConfig: Default user/agent scope for requests
    CatalogConfig: Seeding of modifier definitions
    AgentDrugsConfig: Top-level configuration combining all sections
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from agent_drugs.modifiers.models import ScopeKey
from agent_drugs.observability.logging import LoggingConfig

DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"
DEFAULT_USER_ID = "mock-user"
DEFAULT_AGENT_ID = "mock-agent"


def get_config_dir() -> Path:
    """Return the agent-drugs configuration directory, ~/.agent-drugs/."""
    return Path.home() / ".agent-drugs"


def normalize_database_url(url: str) -> str:
    """Return ``url`` with SQLite forms rewritten to the aiosqlite driver.

    Accepts ``sqlite:///path``, ``sqlite://`` (in memory) and the short
    ``sqlite:path`` form; other URLs are returned unchanged.
    """
    if not url.startswith("sqlite:"):
        return url
    rest = url.removeprefix("sqlite:")
    if rest == "//":
        return "sqlite+aiosqlite://"
    return "sqlite+aiosqlite:///" + rest.removeprefix("///")


class ServerConfig(BaseModel, frozen=True):
    """Transport configuration.

    Attributes:
        host: Interface the HTTP transport binds to.
        port: Port the HTTP transport listens on.
        transport: "http" for the JSON endpoint, "stdio" for an MCP client.
    """

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    transport: Literal["http", "stdio"] = "http"


class PersistenceConfig(BaseModel, frozen=True):
    """Persistence configuration.

    Attributes:
        database_url: SQLAlchemy async URL; takes precedence when set.
        database_path: SQLite path, relative to the config dir unless absolute.
    """

    database_url: str | None = None
    database_path: str = "data/agent-drugs.db"

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        """Map SQLite URLs onto the aiosqlite driver and reject unparsable URLs."""
        if not v:
            return None
        url = normalize_database_url(v)
        try:
            make_url(url)
        except ArgumentError as e:
            msg = f"Invalid database URL: {v}"
            raise ValueError(msg) from e
        return url

    def resolve_url(self) -> str:
        """Return the database URL, building a SQLite URL from the path if needed."""
        if self.database_url:
            return self.database_url
        path = Path(self.database_path).expanduser()
        if not path.is_absolute():
            path = get_config_dir() / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+aiosqlite:///{path}"


class ScopeConfig(BaseModel, frozen=True):
    """Scope used when a request does not name one."""

    user_id: str = Field(default=DEFAULT_USER_ID, min_length=1)
    agent_id: str = Field(default=DEFAULT_AGENT_ID, min_length=1)

    def to_key(self) -> ScopeKey:
        return ScopeKey(user_id=self.user_id, agent_id=self.agent_id)


class CatalogConfig(BaseModel, frozen=True):
    """Modifier catalog configuration.

    Attributes:
        seed_file: YAML file with definitions; the built-in set when None.
        seed_on_startup: Whether to seed an empty catalog when the store opens.
    """

    seed_file: str | None = None
    seed_on_startup: bool = True


class AgentDrugsConfig(BaseModel, frozen=True):
    """Top-level agent-drugs configuration, validated from config.yaml."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    scope: ScopeConfig = Field(default_factory=ScopeConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_config() -> AgentDrugsConfig:
    return AgentDrugsConfig()
