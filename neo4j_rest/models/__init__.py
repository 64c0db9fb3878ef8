"""
Pydantic models for Neo4j REST request/response validation.
"""

from .cypher import (
  CypherDatum,
  CypherErrorDetail,
  CypherRequest,
  CypherResponse,
  CypherResult,
  CypherStatement,
  ResultDataContent,
)
from .entities import (
  EndpointPaths,
  Entity,
  EntityMetadata,
  Node,
  PropertyValue,
  Relationship,
)
from .schema import IndexDefinition

__all__ = [
  # Entities
  "EndpointPaths",
  "Entity",
  "EntityMetadata",
  "Node",
  "PropertyValue",
  "Relationship",
  # Cypher
  "CypherDatum",
  "CypherErrorDetail",
  "CypherRequest",
  "CypherResponse",
  "CypherResult",
  "CypherStatement",
  "ResultDataContent",
  # Schema
  "IndexDefinition",
]
