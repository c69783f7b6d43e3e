"""Structured logging configuration for agent-drugs.

Configures structlog for the whole application. Development mode renders
human-readable console output, production mode renders JSON.

Features:
- ISO 8601 UTC timestamps
- Log level in all entries
- contextvars integration for cross-async context propagation
- Optional daily log rotation with configurable retention
- Console output on stderr; stdout belongs to the stdio transport

Standard log keys:
- method: Protocol method being dispatched
- tool: Tool name for tools/call requests
- user_id, agent_id: Scope of the request

Event naming convention:
- Use dot.notation (e.g., "lifecycle.take.applied", "store.assignment.upserted")
- Format: domain.entity.verb_past_tense

Usage:
    from agent_drugs.observability.logging import configure_logging, get_logger

    configure_logging(LoggingConfig(mode=LogMode.PROD))
    log = get_logger()
    bind_context(user_id="u1", agent_id="a1")
    log.info("lifecycle.take.applied", name="focus")
"""

from __future__ import annotations

from enum import Enum
import logging
from logging.handlers import TimedRotatingFileHandler
import os
from pathlib import Path
import sys
from typing import Any

from pydantic import BaseModel, Field
import structlog


class LogMode(str, Enum):
    """Logging output mode."""

    DEV = "dev"
    PROD = "prod"


class LoggingConfig(BaseModel):
    """Configuration for structured logging.

    Attributes:
        mode: Output mode (dev for human-readable, prod for JSON).
        level: Minimum log level to output.
        log_dir: Directory for log files. Defaults to ~/.agent-drugs/logs/.
        max_log_days: Number of days to retain log files.
        enable_file_logging: Whether to write logs to files.
    """

    mode: LogMode = Field(default=LogMode.DEV)
    level: str = Field(default="INFO")
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".agent-drugs" / "logs")
    max_log_days: int = Field(default=7, ge=1, le=365)
    enable_file_logging: bool = Field(default=False)

    model_config = {"frozen": True}


_configured: bool = False
_current_config: LoggingConfig | None = None


def _get_mode_from_env() -> LogMode:
    """Return the mode from AGENT_DRUGS_LOG_MODE, defaulting to DEV."""
    env_mode = os.environ.get("AGENT_DRUGS_LOG_MODE", "dev").lower()
    if env_mode == "prod":
        return LogMode.PROD
    return LogMode.DEV


def _get_log_level(level_str: str) -> int:
    """Convert a log level string to the logging constant (INFO if unknown)."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def _setup_file_handler(config: LoggingConfig) -> TimedRotatingFileHandler | None:
    """Set up the daily rotating file handler, or None if disabled."""
    if not config.enable_file_logging:
        return None

    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(config.log_dir / "agent-drugs.log"),
        when="midnight",
        interval=1,
        backupCount=config.max_log_days,
        encoding="utf-8",
        utc=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(_get_log_level(config.level))
    return handler


def _get_processors(mode: LogMode) -> list[Any]:
    """Return the processor chain, ending with the renderer for ``mode``."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if mode == LogMode.DEV:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    return processors


class _StderrFileLogger:
    """Logger writing rendered lines to stderr and optionally to a file handler."""

    def __init__(self, file_handler: TimedRotatingFileHandler | None = None) -> None:
        self._file_handler = file_handler

    def _log(self, message: str, level: int = logging.INFO) -> None:
        print(message, file=sys.stderr)

        if self._file_handler:
            record = logging.LogRecord(
                name="agent_drugs",
                level=level,
                pathname="",
                lineno=0,
                msg=message,
                args=(),
                exc_info=None,
            )
            self._file_handler.emit(record)

    def msg(self, message: str) -> None:
        self._log(message, logging.INFO)

    def __call__(self, message: str) -> None:
        self.msg(message)

    def debug(self, message: str) -> None:
        self._log(message, logging.DEBUG)

    def info(self, message: str) -> None:
        self._log(message, logging.INFO)

    def warning(self, message: str) -> None:
        self._log(message, logging.WARNING)

    warn = warning

    def error(self, message: str) -> None:
        self._log(message, logging.ERROR)

    def critical(self, message: str) -> None:
        self._log(message, logging.CRITICAL)

    fatal = critical

    def exception(self, message: str) -> None:
        self._log(message, logging.ERROR)


class _StderrFileLoggerFactory:
    """Factory for structlog; ignores the logger name structlog passes in."""

    def __init__(self, file_handler: TimedRotatingFileHandler | None = None) -> None:
        self._file_handler = file_handler

    def __call__(self, *_args: Any) -> _StderrFileLogger:
        return _StderrFileLogger(self._file_handler)


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog for the application.

    Call once at startup. Calling again reconfigures from scratch.

    Args:
        config: Logging configuration. If None, uses defaults with the mode
            taken from AGENT_DRUGS_LOG_MODE.
    """
    global _configured, _current_config

    if config is None:
        config = LoggingConfig(mode=_get_mode_from_env())

    _current_config = config
    log_level = _get_log_level(config.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = _setup_file_handler(config)
    if file_handler:
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=_get_processors(config.mode),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_StderrFileLoggerFactory(file_handler),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables for cross-async propagation.

    Bound keys are included in every subsequent log entry within the same
    async context until unbound.

    Example:
        bind_context(user_id="u1", agent_id="a1")
        log.info("dispatcher.request.received")  # includes user_id, agent_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove context variables from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def get_current_config() -> LoggingConfig | None:
    return _current_config


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Reset logging state. Intended for tests."""
    global _configured, _current_config
    _configured = False
    _current_config = None
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
