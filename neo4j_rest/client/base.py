"""
Base Neo4j REST Client.

Connection-state management shared by client implementations: handshake URL
construction, the reconnect check, request defaults, per-call request
descriptors, reference resolution and status-code mapping.
"""

import ipaddress
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

import httpx

from neo4j_rest.logger import logger, log_error
from neo4j_rest.models import EndpointPaths
from .config import Neo4jClientConfig, Neo4jProtocol
from .exceptions import (
  ConfigurationError,
  ConflictError,
  InvalidReferenceError,
  Neo4jRestError,
  NotConnectedError,
  ProtocolError,
)
from .resolver import extract_entity_id, resolve_entity_url
from .state import ConnectionState, RequestDefaults, RequestDescriptor

CONFIG_PATH = "/db/data/"
PROPERTY_KEYS_PATH = "propertykeys"
RELATIONSHIP_DIRECTIONS = ("all", "in", "out")


def check_property_value(name: str, value: Any) -> None:
  """
  Validate a single property value before it is sent.

  Neo4j accepts strings, numbers, booleans and homogeneous arrays of those.
  Null values and nested maps are rejected here instead of by the server.

  Raises:
      InvalidReferenceError: If the value cannot be stored as a property
  """
  if value is None:
    raise InvalidReferenceError(f"Property '{name}' cannot have null value.")

  if isinstance(value, (str, bool, int, float)):
    return

  if isinstance(value, Mapping):
    raise InvalidReferenceError(
      f"Property '{name}' cannot be a nested map; only primitives and arrays are allowed."
    )

  if isinstance(value, (list, tuple)):
    kinds = set()
    for item in value:
      if item is None or not isinstance(item, (str, bool, int, float)):
        raise InvalidReferenceError(
          f"Property '{name}' arrays may only contain strings, numbers or booleans."
        )
      if isinstance(item, bool):
        kinds.add("boolean")
      elif isinstance(item, str):
        kinds.add("string")
      else:
        kinds.add("number")
    if len(kinds) > 1:
      raise InvalidReferenceError(
        f"Property '{name}' arrays must be homogeneous; got {', '.join(sorted(kinds))}."
      )
    return

  raise InvalidReferenceError(
    f"Property '{name}' has unsupported type {type(value).__name__}."
  )


def check_properties(data: Any) -> dict:
  """Validate a property map and return it as a plain dict."""
  if not isinstance(data, Mapping):
    raise InvalidReferenceError(
      f"Properties must be a JSON object; got {type(data).__name__}."
    )
  for name, value in data.items():
    if not isinstance(name, str) or not name:
      raise InvalidReferenceError(f"Property names must be non-empty strings; got {name!r}.")
    check_property_value(name, value)
  return dict(data)


def check_direction(direction: Optional[str]) -> None:
  if direction is not None and direction not in RELATIONSHIP_DIRECTIONS:
    raise InvalidReferenceError(
      f"Relationship 'direction' must be one of: {', '.join(RELATIONSHIP_DIRECTIONS)}"
    )


def normalize_types(types: Optional[Iterable[str]]) -> list:
  """Relationship type filters may be given as one string or a list of strings."""
  if types is None:
    return []
  if isinstance(types, str):
    types = [types]
  types = list(types)
  if not all(isinstance(t, str) and t for t in types):
    raise InvalidReferenceError("Relationship types must be non-empty strings")
  return types


class BaseNeo4jClient:
  """Base class for Neo4j REST clients with shared session-state handling."""

  def __init__(
    self,
    config: Optional[Neo4jClientConfig] = None,
    **kwargs,
  ):
    """
    Initialize the client.

    Args:
        config: Client configuration; read from NEO4J_* env vars if omitted
        **kwargs: Config overrides (host, port, username, ...)
    """
    self.config = config or Neo4jClientConfig.from_env()

    if kwargs:
      self.config = self.config.with_overrides(**kwargs)

    self.state = ConnectionState()

  # Session accessors

  def is_connected(self) -> bool:
    return self.state.connected

  def is_streaming(self) -> bool:
    return self.state.streaming

  def set_streaming(self, streaming: bool) -> bool:
    """
    Enable or disable the X-Stream header for subsequent requests.

    Returns:
        The new streaming flag
    """
    streaming = bool(streaming)
    self.state.streaming = streaming
    self.state.defaults = self.state.defaults.evolve(streaming=streaming)
    return streaming

  def set_base_url(self, base_url: Optional[str]) -> None:
    """
    Redirect every request to another scheme/host/port, or None to reset.

    Intended for testing and error injection.
    """
    if base_url is not None:
      parts = urlsplit(base_url)
      if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Invalid base URL override: {base_url!r}")
    self.state.defaults = self.state.defaults.evolve(base_url=base_url)

  @property
  def relationship_types(self) -> list:
    """Relationship types from the last get_relationship_types() on this connection."""
    return list(self.state.relationship_types)

  @property
  def endpoints(self) -> EndpointPaths:
    return self._require_connection()

  def _require_connection(self) -> EndpointPaths:
    if not self.state.connected or self.state.endpoints is None:
      raise NotConnectedError("Not connected to Neo4j; call connect() first")
    return self.state.endpoints

  # Handshake helpers

  def _is_cached_host(self, host: Optional[str]) -> bool:
    """
    Check whether a connect() for this host can reuse the cached endpoints.

    Only the hostname is compared; protocol and port are ignored.
    """
    if not isinstance(host, str) or not host:
      return False
    if not self.state.connected or self.state.endpoints is None:
      return False
    cached_host = urlsplit(self.state.endpoints.node).hostname
    return cached_host is not None and cached_host == host.strip("[]").lower()

  def _build_config_url(self, config: Neo4jClientConfig) -> str:
    """
    Build and validate the handshake URL.

    Raises:
        ConfigurationError: Before any network call, on a bad protocol, host or port
    """
    try:
      protocol = Neo4jProtocol(config.protocol)
    except ValueError:
      raise ConfigurationError(
        f"Invalid protocol {config.protocol!r}; expected 'http' or 'https'"
      ) from None

    host = config.host
    if not isinstance(host, str) or not host.strip():
      raise ConfigurationError("Neo4j host must be a non-empty string")
    host = host.strip()
    if any(c in host for c in "/?#@ "):
      raise ConfigurationError(f"Invalid Neo4j host: {host!r}")

    port = config.port
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
      raise ConfigurationError(f"Invalid Neo4j port: {port!r}")

    try:
      if ipaddress.ip_address(host).version == 6:
        host = f"[{host}]"
    except ValueError:
      if ":" in host:
        raise ConfigurationError(f"Invalid Neo4j host: {host!r}") from None

    endpoint = urljoin(f"{protocol.value}://{host}:{port}", CONFIG_PATH)
    try:
      parts = urlsplit(endpoint)
      parts.port
    except ValueError as e:
      raise ConfigurationError(f"Error parsing Neo4j connection endpoint: {e}") from e
    if not parts.hostname:
      raise ConfigurationError(f"Error parsing Neo4j connection endpoint: {endpoint}")

    return endpoint

  def _handshake_defaults(
    self, config: Neo4jClientConfig, streaming: bool
  ) -> RequestDefaults:
    auth = None
    if isinstance(config.username, str) and isinstance(config.password, str):
      auth = (config.username, config.password)
      logger.debug("Neo4j client configured with basic auth")

    return RequestDefaults(
      port=config.port,
      auth=auth,
      streaming=streaming,
      base_url=self.state.defaults.base_url,
    ).evolve(extra_headers=config.headers)

  # Request construction

  def _build_request(
    self,
    method: str,
    url: str,
    body: Any = None,
    defaults: Optional[RequestDefaults] = None,
  ) -> RequestDescriptor:
    """Derive a fresh request descriptor from the current defaults snapshot."""
    defaults = defaults or self.state.defaults

    if defaults.base_url:
      override = urlsplit(defaults.base_url)
      parts = urlsplit(url)
      url = urlunsplit(
        (override.scheme, override.netloc, parts.path, parts.query, parts.fragment)
      )

    return RequestDescriptor(
      method=method,
      url=url,
      headers=defaults.headers,
      auth=defaults.auth,
      body=body,
    )

  def _url(self, path: str) -> str:
    """Resolve a path relative to the handshake URL (/db/data/)."""
    self._require_connection()
    return urljoin(self.state.base_config_url, path)

  def resolve_entity_url(self, reference: Any, entity_kind: Any = None) -> str:
    """Resolve a node/relationship reference against this session's endpoints."""
    self._require_connection()
    return resolve_entity_url(
      reference, entity_kind, self.state.endpoints, self.state.base_config_url
    )

  @staticmethod
  def _describe(reference: Any) -> str:
    """Human-readable entity identifier for error messages."""
    try:
      return str(extract_entity_id(reference))
    except InvalidReferenceError:
      return str(reference)

  # Response handling

  @staticmethod
  def _decode_body(response: httpx.Response) -> Any:
    """
    Parse a response body as JSON.

    Returns:
        Parsed JSON, or None for an empty body

    Raises:
        ProtocolError: If the body is not valid JSON
    """
    if not response.content:
      return None
    try:
      return response.json()
    except ValueError as e:
      raise ProtocolError(
        f"Invalid JSON string returned: {e}",
        response.status_code,
        response.text,
      ) from e

  @staticmethod
  def _error_data(response: httpx.Response) -> Any:
    try:
      return response.json() if response.content else None
    except ValueError:
      return response.text

  def _handle_response_error(
    self, response: httpx.Response, message: str
  ) -> ProtocolError:
    """
    Convert an unexpected HTTP status code to the appropriate exception.

    Args:
        response: The HTTP response
        message: Operation-specific description

    Returns:
        ConflictError for 409, ProtocolError otherwise
    """
    error_data = self._error_data(response)
    error_class = ConflictError if response.status_code == 409 else ProtocolError
    return error_class(
      f"{message}. Received HTTP status code: {response.status_code}. HTTP body: {response.text}",
      response.status_code,
      error_data,
    )

  def _fail(self, error: Neo4jRestError, action: str) -> Neo4jRestError:
    """Log an error that is about to be raised to the caller."""
    log_error(logger, error, action, {"status_code": error.status_code})
    return error
