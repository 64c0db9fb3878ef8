"""
Structured logging configuration for the Neo4j REST client.

Key Features:
- Structured JSON output with consistent, filterable field names
- Tiered handlers (Critical/Operational/Debug) in non-dev environments
- Automatic log level management by environment
- Request logging helper carrying method, URL, status and timing
"""

import json
import logging
import logging.config
import traceback
from datetime import datetime, timezone
from typing import Any

from neo4j_rest.config.env import EnvConfig

PACKAGE_LOGGER = "neo4j_rest"


class StructuredFormatter(logging.Formatter):
  """
  JSON formatter producing one searchable object per log record.

  - Timestamp in ISO format
  - Component/action structure for filtering
  - HTTP context (method, url, status_code, duration_ms) when present
  """

  def format(self, record: logging.LogRecord) -> str:
    log_entry = {
      "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
      .isoformat()
      .replace("+00:00", "Z"),
      "level": record.levelname,
      "component": getattr(record, "component", record.name),
      "message": record.getMessage(),
    }

    if hasattr(record, "action"):
      log_entry["action"] = record.action

    for attr in ("method", "url", "status_code", "duration_ms", "entity_id"):
      if hasattr(record, attr):
        log_entry[attr] = getattr(record, attr)

    if record.levelno >= logging.ERROR and record.exc_info:
      log_entry["error"] = {
        "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
        "message": str(record.exc_info[1]) if record.exc_info[1] else "",
        "traceback": traceback.format_exception(*record.exc_info),
      }

    if hasattr(record, "metadata"):
      log_entry["metadata"] = record.metadata

    return json.dumps(log_entry, default=str, separators=(",", ":"))


class TieredLogFilter:
  """
  Filter logs by tier.

  Tier 1 (Critical): ERROR, CRITICAL
  Tier 2 (Operational): INFO, WARNING
  Tier 3 (Debug): DEBUG
  """

  def __init__(self, tier: str):
    self.tier = tier

  def filter(self, record: logging.LogRecord) -> bool:
    if self.tier == "critical":
      return record.levelno >= logging.ERROR
    elif self.tier == "operational":
      return logging.INFO <= record.levelno < logging.ERROR
    elif self.tier == "debug":
      return record.levelno == logging.DEBUG
    return True


def get_logging_config(environment: str | None = None) -> dict[str, Any]:
  """
  Generate logging configuration based on environment.

  - prod: INFO level, structured output, no debug logs
  - test: WARNING level, minimal output for clean test runs
  - dev: DEBUG level with plain console output (unless LOG_LEVEL overrides)
  """
  log_level_override = EnvConfig.LOG_LEVEL or None
  is_development = EnvConfig.is_development(environment)

  if EnvConfig.is_production(environment):
    default_level = log_level_override or "INFO"
  elif EnvConfig.is_test(environment):
    default_level = "WARNING"
  else:
    default_level = log_level_override or "DEBUG"

  handlers = ["console"] if is_development else ["critical", "operational"]
  if not is_development and default_level == "DEBUG":
    handlers.append("debug")

  return {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
      "structured": {"()": StructuredFormatter},
      "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
    },
    "filters": {
      "critical_filter": {"()": TieredLogFilter, "tier": "critical"},
      "operational_filter": {"()": TieredLogFilter, "tier": "operational"},
      "debug_filter": {"()": TieredLogFilter, "tier": "debug"},
    },
    "handlers": {
      "critical": {
        "class": "logging.StreamHandler",
        "level": "ERROR",
        "formatter": "structured",
        "filters": ["critical_filter"],
        "stream": "ext://sys.stderr",
      },
      "operational": {
        "class": "logging.StreamHandler",
        "level": "INFO",
        "formatter": "structured",
        "filters": ["operational_filter"],
        "stream": "ext://sys.stdout",
      },
      "debug": {
        "class": "logging.StreamHandler",
        "level": "DEBUG",
        "formatter": "structured",
        "filters": ["debug_filter"],
        "stream": "ext://sys.stdout",
      },
      "console": {
        "class": "logging.StreamHandler",
        "level": default_level,
        "formatter": "simple",
        "stream": "ext://sys.stdout",
      },
    },
    "loggers": {
      PACKAGE_LOGGER: {
        "level": default_level,
        "handlers": handlers,
        "propagate": False,
      },
      # Third-party loggers (reduced verbosity)
      "httpx": {"level": "WARNING", "propagate": True},
      "httpcore": {"level": "WARNING", "propagate": True},
    },
  }


def setup_logging(environment: str | None = None) -> None:
  """Initialize structured logging for the `neo4j_rest` logger tree."""
  logging.config.dictConfig(get_logging_config(environment))


def get_logger(name: str) -> logging.Logger:
  """Get a logger with structured logging capabilities."""
  return logging.getLogger(name)


def log_request(
  logger: logging.Logger,
  method: str,
  url: str,
  status_code: int,
  duration_ms: float,
) -> None:
  """Log a completed HTTP exchange with structured data."""
  logger.debug(
    f"{method} {url} - {status_code} ({duration_ms:.2f}ms)",
    extra={
      "component": "http",
      "action": "request_completed",
      "method": method,
      "url": url,
      "status_code": status_code,
      "duration_ms": duration_ms,
    },
  )


def log_error(
  logger: logging.Logger,
  error: Exception,
  action: str,
  metadata: dict[str, Any] | None = None,
) -> None:
  """Log a client error with context before it is raised to the caller."""
  logger.warning(
    f"{action} failed: {error}",
    extra={
      "component": "client",
      "action": action,
      "metadata": {"error_type": type(error).__name__, **(metadata or {})},
    },
  )
