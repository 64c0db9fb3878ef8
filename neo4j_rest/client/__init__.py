"""
Neo4j REST Client - Async client for the Neo4j REST API.

This module provides an asynchronous client that performs the /db/data/
handshake, caches the server's endpoint map and exposes node, property,
relationship, schema index and Cypher operations.
"""

from .client import Neo4jClient
from .config import Neo4jClientConfig, Neo4jProtocol
from .exceptions import (
  ConfigurationError,
  ConflictError,
  ConnectionError,
  InvalidReferenceError,
  Neo4jRestError,
  Neo4jTimeoutError,
  NotConnectedError,
  ProtocolError,
  QueryError,
)
from .resolver import (
  ById,
  ByReference,
  ByUrl,
  EntityKind,
  EntityRef,
  extract_entity_id,
  resolve_entity_url,
)

__all__ = [
  "ById",
  "ByReference",
  "ByUrl",
  "ConfigurationError",
  "ConflictError",
  "ConnectionError",
  "EntityKind",
  "EntityRef",
  "InvalidReferenceError",
  "Neo4jClient",
  "Neo4jClientConfig",
  "Neo4jProtocol",
  "Neo4jRestError",
  "Neo4jTimeoutError",
  "NotConnectedError",
  "ProtocolError",
  "QueryError",
  "extract_entity_id",
  "resolve_entity_url",
]
