"""Error hierarchy for agent-drugs.

Exceptions here describe failures that propagate (hard failures) and, where
noted, the error values carried inside Result for expected outcomes.

Exception Hierarchy:
    AgentDrugsError (base)
    ├── ConfigError            - Configuration loading and validation
    ├── PersistenceError       - Database and storage failures
    ├── ValidationError        - Malformed input data
    └── ModifierNotFoundError  - Unknown modifier name (carried in Result)
"""

from typing import Any


class AgentDrugsError(Exception):
    """Base exception for all agent-drugs errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigError(AgentDrugsError):
    """Error raised while loading or validating configuration.

    Attributes:
        config_key: The configuration key that caused the error.
        config_file: Path to the config file if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        config_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


class PersistenceError(AgentDrugsError):
    """Error from database operations.

    Every store failure is wrapped in this type so the dispatcher can report it
    as a hard failure without knowing about the storage engine.

    Attributes:
        operation: The operation that failed (e.g., "upsert", "select").
        table: The database table involved if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        table: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation
        self.table = table


class ValidationError(AgentDrugsError):
    """Input data failed validation.

    Attributes:
        field: The field that failed validation.
        value: The offending value.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value

    def __str__(self) -> str:
        base = self.message
        if self.field:
            base = f"{base} (field: {self.field})"
        if self.details:
            base = f"{base} (details: {self.details})"
        return base


class ModifierNotFoundError(AgentDrugsError):
    """No modifier definition exists under the requested name.

    Used as the Err value of the take lifecycle operation; the caller supplied
    a well-formed but unknown name, so this is a soft outcome.

    Attributes:
        name: The requested modifier name.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Drug not found: {name}")
        self.name = name
