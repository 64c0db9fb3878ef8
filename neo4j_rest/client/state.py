"""
Connection state and request descriptors.

`ConnectionState` is owned by one client object and written only by
`connect`, `set_streaming` and `set_base_url`. Request defaults are an
immutable snapshot; every call derives its own `RequestDescriptor` from it,
so in-flight requests never share mutable request options.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from neo4j_rest.models import EndpointPaths

BASE_HEADERS = {
  "Content-Type": "application/json",
  "Accept": "application/json; charset=UTF-8",
}
STREAM_HEADER = "X-Stream"


@dataclass(frozen=True)
class RequestDefaults:
  """Shared request settings, replaced wholesale whenever they change."""

  port: Optional[int] = None
  auth: Optional[Tuple[str, str]] = None
  streaming: bool = False
  extra_headers: Mapping[str, str] = field(
    default_factory=lambda: MappingProxyType({})
  )
  # Overrides scheme/host/port of every request; used for testing and error injection
  base_url: Optional[str] = None

  @property
  def headers(self) -> Mapping[str, str]:
    headers = dict(BASE_HEADERS)
    headers.update(self.extra_headers)
    if self.streaming:
      headers[STREAM_HEADER] = "true"
    return MappingProxyType(headers)

  def evolve(self, **changes: Any) -> "RequestDefaults":
    if "extra_headers" in changes:
      changes["extra_headers"] = MappingProxyType(dict(changes["extra_headers"]))
    return replace(self, **changes)


@dataclass(frozen=True)
class RequestDescriptor:
  """Everything needed for one HTTP exchange."""

  method: str
  url: str
  headers: Mapping[str, str]
  auth: Optional[Tuple[str, str]] = None
  body: Any = None


@dataclass
class ConnectionState:
  """Per-client connection state populated by the handshake."""

  connected: bool = False
  endpoints: Optional[EndpointPaths] = None
  streaming: bool = False
  defaults: RequestDefaults = field(default_factory=RequestDefaults)
  base_config_url: Optional[str] = None
  relationship_types: List[str] = field(default_factory=list)

  def establish(
    self,
    endpoints: EndpointPaths,
    base_config_url: str,
    defaults: RequestDefaults,
  ) -> None:
    """Install a completed handshake; all fields change together."""
    self.endpoints = endpoints
    self.base_config_url = base_config_url
    self.defaults = defaults
    self.streaming = defaults.streaming
    self.relationship_types = []
    self.connected = True
