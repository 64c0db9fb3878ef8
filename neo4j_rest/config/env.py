"""
Centralized environment variable configuration.

This module provides a single source of truth for the environment variables
read by the client, with type conversions and default values.

Organization:
- Helper functions for type-safe env var access
- Core library settings (environment, log level)
- Neo4j connection defaults
"""

import os


# ==========================================================================
# HELPER FUNCTIONS FOR TYPE-SAFE ENVIRONMENT VARIABLE ACCESS
# ==========================================================================


def get_int_env(key: str, default: int) -> int:
  """
  Get an integer environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Integer value from environment or default
  """
  try:
    return int(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    # Use print instead of logger to avoid circular import
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_float_env(key: str, default: float) -> float:
  """
  Get a float environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Float value from environment or default
  """
  try:
    return float(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_bool_env(key: str, default: bool = False) -> bool:
  """
  Get a boolean environment variable.

  Args:
      key: Environment variable name
      default: Default value if not set

  Returns:
      Boolean value from environment or default
  """
  value = os.getenv(key, str(default)).lower()
  return value in ("true", "1", "yes", "on")


def get_str_env(key: str, default: str = "") -> str:
  """Get a string environment variable."""
  return os.getenv(key, default)


class EnvConfig:
  """
  Centralized environment variable configuration.

  Values are read once at import time. Client connection settings are read
  per call by `Neo4jClientConfig.from_env` so tests can monkeypatch them.
  """

  # ==========================================================================
  # CORE LIBRARY SETTINGS
  # ==========================================================================

  ENVIRONMENT = get_str_env("NEO4J_REST_ENV", "dev")
  LOG_LEVEL = get_str_env("LOG_LEVEL", "")

  # ==========================================================================
  # NEO4J CONNECTION DEFAULTS
  # ==========================================================================

  NEO4J_DEFAULT_PORT = 7474
  NEO4J_DEFAULT_TIMEOUT = 30.0

  @classmethod
  def is_production(cls, environment: str | None = None) -> bool:
    """Check if running in production environment."""
    return (environment or cls.ENVIRONMENT).lower() in ["prod", "production"]

  @classmethod
  def is_development(cls, environment: str | None = None) -> bool:
    """Check if running in development environment."""
    return (environment or cls.ENVIRONMENT).lower() in ["dev", "development", "local"]

  @classmethod
  def is_test(cls, environment: str | None = None) -> bool:
    return (environment or cls.ENVIRONMENT).lower() == "test"


env = EnvConfig()
