"""
Centralized configuration package for the Neo4j REST client.

Environment variable access lives in `env`; logging setup lives in `logging`.
"""

from .env import EnvConfig, env

__all__ = ["EnvConfig", "env"]
