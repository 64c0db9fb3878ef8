"""
Asynchronous Neo4j REST Client.

Exposes the Neo4j REST API (/db/data/) as async methods. Each operation
issues exactly one HTTP exchange; transport errors and status codes are
checked before the body is parsed.
"""

import json
import time
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from neo4j_rest.logger import http_logger, log_request, logger
from neo4j_rest.models import (
  CypherRequest,
  CypherResponse,
  CypherStatement,
  EndpointPaths,
  IndexDefinition,
  Node,
  PropertyValue,
  Relationship,
)
from .base import (
  PROPERTY_KEYS_PATH,
  BaseNeo4jClient,
  check_direction,
  check_properties,
  check_property_value,
  normalize_types,
)
from .config import Neo4jClientConfig
from .exceptions import (
  ConnectionError,
  InvalidReferenceError,
  Neo4jTimeoutError,
  ProtocolError,
  QueryError,
)
from .resolver import EntityKind
from .state import RequestDescriptor

CypherInput = Union[
  CypherRequest,
  CypherStatement,
  str,
  Dict[str, Any],
  Sequence[Union[CypherStatement, str, Dict[str, Any]]],
]


class Neo4jClient(BaseNeo4jClient):
  """Asynchronous client for the Neo4j REST API."""

  def __init__(
    self,
    config: Optional[Neo4jClientConfig] = None,
    **kwargs,
  ):
    """
    Initialize asynchronous Neo4j client.

    Args:
        config: Client configuration
        **kwargs: Additional config overrides
    """
    super().__init__(config, **kwargs)

    self.client = httpx.AsyncClient(
      timeout=httpx.Timeout(self.config.timeout),
      verify=self.config.verify_ssl,
    )

  async def __aenter__(self):
    """Async context manager entry."""
    return self

  async def __aexit__(self, exc_type, exc_val, exc_tb):
    """Async context manager exit."""
    await self.close()

  async def close(self):
    """Close the client and cleanup resources."""
    await self.client.aclose()

  async def _send(self, request: RequestDescriptor, action: str) -> httpx.Response:
    """
    Dispatch one request descriptor.

    Raises:
        Neo4jTimeoutError: If the request timed out
        ConnectionError: On any other transport failure
    """
    request_kwargs: Dict[str, Any] = {
      "method": request.method,
      "url": request.url,
      "headers": dict(request.headers),
    }
    if request.auth is not None:
      request_kwargs["auth"] = request.auth
    if request.body is not None:
      request_kwargs["json"] = request.body

    logger.debug(f"Making request: {request.method} {request.url}")
    start = time.monotonic()

    try:
      response = await self.client.request(**request_kwargs)
    except httpx.TimeoutException as e:
      raise self._fail(
        Neo4jTimeoutError(f"Request timeout during {action}: {e}"), action
      ) from e
    except httpx.RequestError as e:
      raise self._fail(
        ConnectionError(f"Error requesting {request.url} during {action}: {e}"),
        action,
      ) from e

    log_request(
      http_logger,
      request.method,
      request.url,
      response.status_code,
      (time.monotonic() - start) * 1000,
    )
    return response

  async def _exchange(
    self, method: str, url: str, action: str, body: Any = None
  ) -> httpx.Response:
    return await self._send(self._build_request(method, url, body), action)

  def _check_status(
    self,
    response: httpx.Response,
    expected: Sequence[int],
    message: str,
    action: str,
  ) -> None:
    if response.status_code not in expected:
      raise self._fail(self._handle_response_error(response, message), action)

  def _parse(self, model, body: Any, action: str):
    try:
      return model.model_validate(body)
    except ValidationError as e:
      raise self._fail(
        ProtocolError(f"Unexpected response shape for {action}: {e}", None, body),
        action,
      ) from e

  # Session

  async def connect(self, config: Optional[Neo4jClientConfig] = None) -> EndpointPaths:
    """
    Perform the handshake and cache the server's endpoint map.

    A second call for the same hostname returns the cached endpoint map
    without a network call, regardless of protocol or port. A different host
    triggers a new handshake that replaces all connection state.

    Args:
        config: Connection settings; defaults to the client's config

    Returns:
        Endpoint map advertised at /db/data/

    Raises:
        ConfigurationError: Bad protocol/host/port, raised before any request
        ConnectionError: The server could not be reached
        ProtocolError: The handshake returned an error status or bad body
    """
    config = config or self.config

    if self._is_cached_host(config.host):
      logger.debug(f"Reusing cached Neo4j endpoints for host {config.host}")
      return self.state.endpoints

    config_url = self._build_config_url(config)

    # Streaming is sticky: only an explicit value on a new handshake changes it
    streaming = self.state.streaming if config.streaming is None else config.streaming
    defaults = self._handshake_defaults(config, bool(streaming))

    request = self._build_request("GET", config_url, defaults=defaults)
    response = await self._send(request, "connect")
    if response.status_code >= 400:
      raise self._fail(
        self._handle_response_error(
          response, "Error requesting database config REST endpoint"
        ),
        "connect",
      )

    endpoints = self._parse(EndpointPaths, self._decode_body(response), "connect")

    self.config = config
    self.state.establish(endpoints, config_url, defaults)
    logger.info(
      f"Connected to Neo4j at {config_url} (version {endpoints.neo4j_version or 'unknown'})"
    )
    return endpoints

  async def get_relationship_types(self) -> List[str]:
    """List every relationship type known to the server."""
    endpoints = self._require_connection()
    url = endpoints.relationship_types or self._url("relationship/types")

    response = await self._exchange("GET", url, "get_relationship_types")
    self._check_status(
      response, (200,), "Error getting relationship types", "get_relationship_types"
    )

    types = self._decode_body(response)
    if types is None:
      types = []
    if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
      raise self._fail(
        ProtocolError(f"Unexpected relationship types value: {types!r}", 200, types),
        "get_relationship_types",
      )
    self.state.relationship_types = list(types)
    return types

  async def get_all_property_keys(self) -> List[str]:
    """List every property key in use in the graph."""
    url = self._url(PROPERTY_KEYS_PATH)

    response = await self._exchange("GET", url, "get_all_property_keys")
    if response.status_code >= 400:
      raise self._fail(
        self._handle_response_error(response, "Error getting property keys"),
        "get_all_property_keys",
      )
    return self._decode_body(response) or []

  async def get_labels(self) -> List[str]:
    """List every node label in use in the graph."""
    endpoints = self._require_connection()
    url = endpoints.node_labels or self._url("labels")

    response = await self._exchange("GET", url, "get_labels")
    self._check_status(response, (200,), "Error getting labels", "get_labels")
    return self._decode_body(response) or []

  # Index schema

  def _index_url(self, label: str, *parts: str) -> str:
    if not isinstance(label, str) or not label:
      raise InvalidReferenceError("Index label must be a non-empty string")
    endpoints = self._require_connection()
    base = endpoints.indexes or self._url("schema/index")
    segments = [quote(label, safe="")] + [quote(p, safe="") for p in parts]
    return f"{base.rstrip('/')}/{'/'.join(segments)}"

  async def create_index(
    self, label: str, properties: Union[str, Sequence[str]]
  ) -> IndexDefinition:
    """
    Create a schema index on a label.

    Args:
        label: Node label
        properties: Property key, or list of keys for a composite index
    """
    property_keys = normalize_types(properties)
    if not property_keys:
      raise InvalidReferenceError("At least one property key is required")
    url = self._index_url(label)

    response = await self._exchange(
      "POST", url, "create_index", body={"property_keys": property_keys}
    )
    self._check_status(
      response, (200,), f"Error creating index on :{label}", "create_index"
    )
    return self._parse(IndexDefinition, self._decode_body(response), "create_index")

  async def list_indexes_for_label(self, label: str) -> List[IndexDefinition]:
    url = self._index_url(label)

    response = await self._exchange("GET", url, "list_indexes_for_label")
    self._check_status(
      response,
      (200,),
      f"Error listing indexes for :{label}",
      "list_indexes_for_label",
    )
    return [
      self._parse(IndexDefinition, item, "list_indexes_for_label")
      for item in self._decode_body(response) or []
    ]

  async def drop_index(self, label: str, property: str) -> bool:
    if not isinstance(property, str) or not property:
      raise InvalidReferenceError("Index property must be a non-empty string")
    url = self._index_url(label, property)

    response = await self._exchange("DELETE", url, "drop_index")
    self._check_status(
      response, (204,), f"Error dropping index on :{label}({property})", "drop_index"
    )
    return True

  # Cypher

  @staticmethod
  def _to_cypher_request(request: CypherInput) -> CypherRequest:
    def to_statement(item: Any) -> CypherStatement:
      if isinstance(item, CypherStatement):
        return item
      if isinstance(item, str):
        return CypherStatement(statement=item)
      return CypherStatement.model_validate(item)

    try:
      if isinstance(request, CypherRequest):
        return request
      if isinstance(request, dict) and "statements" in request:
        return CypherRequest.model_validate(request)
      if isinstance(request, (str, dict, CypherStatement)):
        return CypherRequest(statements=[to_statement(request)])
      return CypherRequest(statements=[to_statement(item) for item in request])
    except (ValidationError, TypeError) as e:
      raise InvalidReferenceError(f"Invalid Cypher request: {e}") from e

  async def cypher(self, request: CypherInput) -> CypherResponse:
    """
    Execute statements in a single committed transaction.

    Args:
        request: A CypherRequest, a statement, a Cypher string, or a list of them

    Returns:
        Column names and row data per statement

    Raises:
        QueryError: If the server reported any statement errors
    """
    endpoints = self._require_connection()
    payload = self._to_cypher_request(request).to_payload()
    transaction = endpoints.transaction or self._url("transaction")
    url = f"{transaction.rstrip('/')}/commit"

    response = await self._exchange("POST", url, "cypher", body=payload)
    self._check_status(response, (200,), "Error executing Cypher", "cypher")

    result = self._parse(CypherResponse, self._decode_body(response), "cypher")
    if result.errors:
      errors = [error.model_dump() for error in result.errors]
      raise self._fail(
        QueryError(
          "; ".join(f"{e['code']}: {e['message']}" for e in errors),
          errors=errors,
          status_code=response.status_code,
          response_data=errors,
        ),
        "cypher",
      )
    return result

  # Nodes

  async def get_node(self, node: Any) -> Node:
    """Fetch a node by id, entity or URL."""
    url = self.resolve_entity_url(node, EntityKind.NODE)

    response = await self._exchange("GET", url, "get_node")
    self._check_status(
      response, (200,), f"Error getting Node: {self._describe(node)}", "get_node"
    )
    return self._parse(Node, self._decode_body(response), "get_node")

  async def create_node(self, data: Any = None) -> Node:
    """
    Create a node with an optional property map.

    Args:
        data: Property map, or a JSON object string
    """
    endpoints = self._require_connection()
    if data is None:
      data = {}
    elif isinstance(data, str):
      data = self._load_json_object(data)
    data = check_properties(data)

    response = await self._exchange("POST", endpoints.node, "create_node", body=data)
    if response.status_code != 201:
      raise self._fail(
        self._handle_response_error(
          response,
          f"Invalid HTTP Response when inserting Node: {response.status_code}",
        ),
        "create_node",
      )
    return self._parse(Node, self._decode_body(response), "create_node")

  async def delete_node(self, node: Any) -> bool:
    """
    Delete a node.

    Raises:
        ConflictError: If the node still has relationships (409)
    """
    url = self.resolve_entity_url(node, EntityKind.NODE)
    node_id = self._describe(node)

    response = await self._exchange("DELETE", url, "delete_node")
    if response.status_code == 409:
      raise self._fail(
        self._handle_response_error(
          response,
          f"All relationships for Node id {node_id} must be deleted prior to deleting node itself",
        ),
        "delete_node",
      )
    self._check_status(response, (204,), f"Error deleting Node {node_id}", "delete_node")
    return True

  async def get_node_degree(
    self,
    node: Any,
    direction: str = "all",
    types: Optional[Union[str, Sequence[str]]] = None,
  ) -> int:
    """
    Count a node's relationships.

    Args:
        node: Node entity, id or URL
        direction: "all", "in" or "out"
        types: Optional relationship type filter
    """
    check_direction(direction)
    type_filter = normalize_types(types)
    url = f"{self.resolve_entity_url(node, EntityKind.NODE)}/degree/{direction}"
    if type_filter:
      url += "/" + "&".join(quote(t, safe="") for t in type_filter)

    response = await self._exchange("GET", url, "get_node_degree")
    self._check_status(
      response,
      (200,),
      f"Error getting degree of Node {self._describe(node)}",
      "get_node_degree",
    )
    degree = self._decode_body(response)
    if isinstance(degree, bool) or not isinstance(degree, int):
      raise self._fail(
        ProtocolError(f"Unexpected degree value: {degree!r}", 200, degree),
        "get_node_degree",
      )
    return degree

  # Properties

  @staticmethod
  def _load_json_object(payload: str) -> Any:
    try:
      return json.loads(payload)
    except ValueError as e:
      raise InvalidReferenceError(f"Invalid JSON payload: {e}") from e

  def _properties_url(
    self, entity: Any, entity_kind: Any, name: Optional[str] = None
  ) -> str:
    url = f"{self.resolve_entity_url(entity, entity_kind)}/properties"
    if name is None:
      return url
    if not isinstance(name, str) or not name:
      raise InvalidReferenceError("Property name must be a non-empty string")
    return f"{url}/{quote(name, safe='')}"

  async def set_property(
    self,
    entity: Any,
    entity_kind: Any,
    property_name: str,
    value: PropertyValue,
  ) -> bool:
    """
    Set a single property on a node or relationship.

    Raises:
        InvalidReferenceError: Null value, nested map or bad reference
    """
    check_property_value(property_name, value)
    url = self._properties_url(entity, entity_kind, property_name)

    response = await self._exchange(
      "PUT",
      url,
      "set_property",
      body=list(value) if isinstance(value, tuple) else value,
    )
    self._check_status(
      response,
      (204,),
      f"Error setting property: {property_name} on {self._describe(entity)}",
      "set_property",
    )
    return True

  async def update_properties(self, entity: Any, entity_kind: Any, data: Any) -> bool:
    """
    Replace all properties of a node or relationship.

    Args:
        entity: Entity, id or URL
        entity_kind: "node" or "relationship"
        data: Property map, or a JSON object string
    """
    if isinstance(data, str):
      data = self._load_json_object(data)
    data = check_properties(data)
    url = self._properties_url(entity, entity_kind)

    response = await self._exchange("PUT", url, "update_properties", body=data)
    self._check_status(
      response,
      (204,),
      f"Error setting properties on {self._describe(entity)}",
      "update_properties",
    )
    return True

  async def get_properties(self, entity: Any, entity_kind: Any) -> Dict[str, Any]:
    url = self._properties_url(entity, entity_kind)

    response = await self._exchange("GET", url, "get_properties")
    self._check_status(
      response,
      (200,),
      f"Error getting properties on {self._describe(entity)}",
      "get_properties",
    )
    return self._decode_body(response) or {}

  async def get_property(
    self, entity: Any, entity_kind: Any, property_name: str
  ) -> PropertyValue:
    url = self._properties_url(entity, entity_kind, property_name)

    response = await self._exchange("GET", url, "get_property")
    self._check_status(
      response,
      (200,),
      f"Error getting property {property_name} on {self._describe(entity)}",
      "get_property",
    )
    return self._decode_body(response)

  async def delete_property(
    self, entity: Any, entity_kind: Any, property_name: str
  ) -> bool:
    url = self._properties_url(entity, entity_kind, property_name)

    response = await self._exchange("DELETE", url, "delete_property")
    self._check_status(
      response,
      (204,),
      f"Error deleting property {property_name} on {self._describe(entity)}",
      "delete_property",
    )
    return True

  async def delete_all_properties(self, entity: Any, entity_kind: Any) -> bool:
    url = self._properties_url(entity, entity_kind)

    response = await self._exchange("DELETE", url, "delete_all_properties")
    self._check_status(
      response,
      (204,),
      f"Error deleting properties on {self._describe(entity)}",
      "delete_all_properties",
    )
    return True

  # Relationships

  async def get_relationship(
    self,
    relationship: Any,
    direction: Optional[str] = None,
    types: Optional[Union[str, Sequence[str]]] = None,
  ) -> Relationship:
    """
    Fetch a relationship by id, entity or URL.

    Args:
        relationship: Relationship entity, id or URL
        direction: Validated against "all", "in" and "out"
        types: If given, the relationship's type must be one of these
    """
    check_direction(direction)
    type_filter = normalize_types(types)
    url = self.resolve_entity_url(relationship, EntityKind.RELATIONSHIP)
    relationship_id = self._describe(relationship)

    response = await self._exchange("GET", url, "get_relationship")
    self._check_status(
      response,
      (200,),
      f"Error getting relationship by ID {relationship_id}",
      "get_relationship",
    )

    result = self._parse(Relationship, self._decode_body(response), "get_relationship")
    if type_filter and result.type not in type_filter:
      raise InvalidReferenceError(
        f"Relationship {relationship_id} has type {result.type}, not one of: {', '.join(type_filter)}"
      )
    return result

  async def get_node_relationships(
    self,
    node: Any,
    direction: str = "all",
    types: Optional[Union[str, Sequence[str]]] = None,
  ) -> List[Relationship]:
    """List a node's relationships, optionally filtered by direction and type."""
    check_direction(direction)
    type_filter = normalize_types(types)
    url = f"{self.resolve_entity_url(node, EntityKind.NODE)}/relationships/{direction}"
    if type_filter:
      url += "/" + "&".join(quote(t, safe="") for t in type_filter)

    response = await self._exchange("GET", url, "get_node_relationships")
    self._check_status(
      response,
      (200,),
      f"Error getting relationships of Node {self._describe(node)}",
      "get_node_relationships",
    )
    return [
      self._parse(Relationship, item, "get_node_relationships")
      for item in self._decode_body(response) or []
    ]

  async def create_relationship(
    self,
    start_node: Any,
    end_node: Any,
    type: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
  ) -> Relationship:
    """
    Create a relationship from start_node to end_node.

    Args:
        start_node: Node entity, id or URL
        end_node: Node entity, id or URL
        type: Relationship type
        data: Optional property map
    """
    start_url = f"{self.resolve_entity_url(start_node, EntityKind.NODE)}/relationships"
    end_url = self.resolve_entity_url(end_node, EntityKind.NODE)

    body: Dict[str, Any] = {"to": end_url}
    if type is not None:
      body["type"] = type
    if data is not None:
      body["data"] = check_properties(data)

    response = await self._exchange(
      "POST", start_url, "create_relationship", body=body
    )
    if response.status_code != 201:
      raise self._fail(
        self._handle_response_error(
          response,
          f"Error inserting relationship ({response.status_code} {response.reason_phrase})",
        ),
        "create_relationship",
      )
    return self._parse(
      Relationship, self._decode_body(response), "create_relationship"
    )

  async def delete_relationship(self, relationship: Any) -> bool:
    url = self.resolve_entity_url(relationship, EntityKind.RELATIONSHIP)

    response = await self._exchange("DELETE", url, "delete_relationship")
    self._check_status(
      response,
      (204,),
      f"Error deleting relationship {self._describe(relationship)}",
      "delete_relationship",
    )
    return True
