"""
neo4j-rest - Typed async client for the Neo4j REST API.

Example:
    >>> from neo4j_rest import Neo4jClient, Neo4jClientConfig
    >>>
    >>> config = Neo4jClientConfig(host="localhost", username="neo4j", password="neo4j")
    >>> async with Neo4jClient(config) as db:
    ...     await db.connect()
    ...     node = await db.create_node({"firstName": "John"})
    ...     await db.set_property(node.id, "node", "lastName", "Doe")
"""

__version__ = "1.0.0"

from .client import (
  ById,
  ByReference,
  ByUrl,
  ConfigurationError,
  ConflictError,
  ConnectionError,
  EntityKind,
  EntityRef,
  InvalidReferenceError,
  Neo4jClient,
  Neo4jClientConfig,
  Neo4jProtocol,
  Neo4jRestError,
  Neo4jTimeoutError,
  NotConnectedError,
  ProtocolError,
  QueryError,
  extract_entity_id,
  resolve_entity_url,
)
from .models import (
  CypherRequest,
  CypherResponse,
  CypherStatement,
  EndpointPaths,
  IndexDefinition,
  Node,
  Relationship,
)

__all__ = [
  "__version__",
  # Client
  "Neo4jClient",
  "Neo4jClientConfig",
  "Neo4jProtocol",
  # References
  "ById",
  "ByReference",
  "ByUrl",
  "EntityKind",
  "EntityRef",
  "extract_entity_id",
  "resolve_entity_url",
  # Models
  "CypherRequest",
  "CypherResponse",
  "CypherStatement",
  "EndpointPaths",
  "IndexDefinition",
  "Node",
  "Relationship",
  # Errors
  "Neo4jRestError",
  "ConfigurationError",
  "NotConnectedError",
  "ConnectionError",
  "Neo4jTimeoutError",
  "ProtocolError",
  "ConflictError",
  "InvalidReferenceError",
  "QueryError",
]
