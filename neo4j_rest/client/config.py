"""
Neo4j REST Client Configuration.

Connection parameters for a single Neo4j server.
"""

import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Optional

from neo4j_rest.config.env import EnvConfig, get_bool_env, get_float_env, get_int_env
from .exceptions import ConfigurationError


class Neo4jProtocol(str, Enum):
  """Transport protocol for the REST endpoint."""

  HTTP = "http"
  HTTPS = "https"


@dataclass
class Neo4jClientConfig:
  """Configuration for a Neo4j REST client."""

  # Connection settings
  protocol: Neo4jProtocol = Neo4jProtocol.HTTP
  host: str = "localhost"
  port: int = EnvConfig.NEO4J_DEFAULT_PORT
  timeout: float = EnvConfig.NEO4J_DEFAULT_TIMEOUT

  # Basic auth (applied only when both are strings)
  username: Optional[str] = None
  password: Optional[str] = None

  # None leaves the client's current streaming flag untouched on connect
  streaming: Optional[bool] = None

  # Request settings
  headers: Dict[str, str] = field(default_factory=dict)
  verify_ssl: bool = True

  @classmethod
  def from_env(cls, prefix: str = "NEO4J_") -> "Neo4jClientConfig":
    """
    Create configuration from environment variables.

    Args:
        prefix: Environment variable prefix

    Returns:
        Neo4jClientConfig instance
    """
    config = cls()

    protocol = os.environ.get(prefix + "PROTOCOL")
    if protocol is not None:
      try:
        config.protocol = Neo4jProtocol(protocol.lower())
      except ValueError:
        raise ConfigurationError(
          f"Invalid {prefix}PROTOCOL {protocol!r}; expected 'http' or 'https'"
        ) from None

    host = os.environ.get(prefix + "HOST")
    if host is not None:
      config.host = host

    config.port = get_int_env(prefix + "PORT", config.port)
    config.timeout = get_float_env(prefix + "TIMEOUT", config.timeout)
    config.username = os.environ.get(prefix + "USERNAME", config.username)
    config.password = os.environ.get(prefix + "PASSWORD", config.password)
    config.verify_ssl = get_bool_env(prefix + "VERIFY_SSL", config.verify_ssl)

    if os.environ.get(prefix + "STREAMING") is not None:
      config.streaming = get_bool_env(prefix + "STREAMING")

    return config

  def with_overrides(self, **kwargs: Any) -> "Neo4jClientConfig":
    """
    Create a new config with overridden values.

    Args:
        **kwargs: Values to override

    Returns:
        New Neo4jClientConfig instance
    """
    known = {f.name for f in fields(self)}
    unknown = set(kwargs) - known
    if unknown:
      raise TypeError(f"Unknown config fields: {', '.join(sorted(unknown))}")

    config = replace(self, headers=self.headers.copy())
    for key, value in kwargs.items():
      setattr(config, key, value)
    return config
