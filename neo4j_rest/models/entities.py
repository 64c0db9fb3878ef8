"""
Entity models returned by the Neo4j REST API.

Nodes and relationships are ephemeral DTOs materialized per response. Every
entity carries its canonical `self` URL, which the reference resolver prefers
over rebuilding a URL from a numeric id.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PropertyValue = Union[
  str, int, float, bool, List[str], List[int], List[float], List[bool]
]


class EndpointPaths(BaseModel):
  """Service root advertised by the server at /db/data/ (the handshake response)."""

  model_config = ConfigDict(extra="allow", frozen=True)

  node: str = Field(..., description="Node collection URL")
  node_index: Optional[str] = Field(None, description="Legacy node index URL")
  relationship_index: Optional[str] = Field(
    None, description="Legacy relationship index URL"
  )
  extensions_info: Optional[str] = Field(None, description="Extensions info URL")
  relationship_types: Optional[str] = Field(
    None, description="Relationship types listing URL"
  )
  batch: Optional[str] = Field(None, description="Batch operations URL")
  cypher: Optional[str] = Field(None, description="Legacy Cypher endpoint URL")
  indexes: Optional[str] = Field(None, description="Schema index URL")
  constraints: Optional[str] = Field(None, description="Schema constraints URL")
  transaction: Optional[str] = Field(None, description="Transactional Cypher URL")
  node_labels: Optional[str] = Field(None, description="Label listing URL")
  neo4j_version: Optional[str] = Field(None, description="Server version")
  extensions: Dict[str, Any] = Field(default_factory=dict)


class EntityMetadata(BaseModel):
  """Server-assigned identity of an entity."""

  model_config = ConfigDict(extra="allow")

  id: int
  labels: List[str] = Field(default_factory=list)
  type: Optional[str] = None


class Entity(BaseModel):
  """Fields shared by nodes and relationships."""

  model_config = ConfigDict(extra="allow", populate_by_name=True)

  self_url: str = Field(..., alias="self", description="Canonical entity URL")
  metadata: EntityMetadata
  data: Dict[str, Any] = Field(default_factory=dict, description="Property bag")
  property_url: Optional[str] = Field(None, alias="property")
  properties_url: Optional[str] = Field(None, alias="properties")
  extensions: Dict[str, Any] = Field(default_factory=dict)

  @property
  def id(self) -> int:
    return self.metadata.id


class Node(Entity):
  """A graph vertex."""

  labels: Optional[str] = None
  create_relationship: Optional[str] = None
  all_relationships: Optional[str] = None
  incoming_relationships: Optional[str] = None
  outgoing_relationships: Optional[str] = None
  all_typed_relationships: Optional[str] = None
  incoming_typed_relationships: Optional[str] = None
  outgoing_typed_relationships: Optional[str] = None
  traverse: Optional[str] = None
  paged_traverse: Optional[str] = None


class Relationship(Entity):
  """A directed, typed edge between two nodes."""

  start: str = Field(..., description="Start node URL")
  end: str = Field(..., description="End node URL")
  type: str = Field(..., description="Relationship type")
