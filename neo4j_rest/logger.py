"""
Neo4j REST client logging.

The package logs through the `neo4j_rest` logger tree. Nothing is configured
on import so a host application's logging setup is left alone; call
`setup_logging()` to install the structured handlers.
"""

from .config.logging import (
  get_logger,
  log_error,
  log_request,
  setup_logging,
)

# Main package logger
logger = get_logger("neo4j_rest")

# HTTP exchange logger
http_logger = get_logger("neo4j_rest.http")

__all__ = [
  "logger",
  "http_logger",
  "get_logger",
  "log_error",
  "log_request",
  "setup_logging",
]
