"""
Entity reference resolution.

Operations that accept "an entity or an entity id" funnel the argument
through `resolve_entity_url`, so callers can pass around full entity objects,
bare numeric ids or raw URLs interchangeably.

References are modelled as a tagged union:

- ByReference: an object (entity model or mapping) carrying a `self` URL
- ById: a numeric id plus the entity kind needed to place it
- ByUrl: a URL; absolute URLs are used verbatim, relative ones resolve
  against the handshake URL

Raw arguments are coerced into one of the variants by `as_entity_ref`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union
from urllib.parse import urljoin, urlsplit

from neo4j_rest.models import EndpointPaths
from .exceptions import InvalidReferenceError


class EntityKind(str, Enum):
  """Discriminator required to place a bare numeric id."""

  NODE = "node"
  RELATIONSHIP = "relationship"


@dataclass(frozen=True)
class ByReference:
  entity: Any


@dataclass(frozen=True)
class ById:
  id: int
  kind: Optional[EntityKind] = None


@dataclass(frozen=True)
class ByUrl:
  url: str


EntityRef = Union[ByReference, ById, ByUrl]


def parse_entity_kind(kind: Any) -> Optional[EntityKind]:
  """Normalize an entity kind tag; None stays None."""
  if kind is None or isinstance(kind, EntityKind):
    return kind
  try:
    return EntityKind(kind)
  except ValueError:
    raise InvalidReferenceError(
      f"Entity kind must be one of: {', '.join(k.value for k in EntityKind)}; got {kind!r}"
    ) from None


def _is_identifier(value: Any) -> bool:
  return isinstance(value, int) and not isinstance(value, bool)


def _self_url(entity: Any) -> Optional[str]:
  if isinstance(entity, Mapping):
    return entity.get("self")
  # Entity models expose the aliased field as self_url
  return getattr(entity, "self_url", None) or getattr(entity, "self", None)


def as_entity_ref(reference: Any, entity_kind: Any = None) -> EntityRef:
  """
  Coerce a raw call argument into an EntityRef variant.

  Args:
      reference: Entity object, mapping, int id, URL string or an EntityRef
      entity_kind: "node" or "relationship"; applied to bare ids only

  Returns:
      ByReference, ById or ByUrl

  Raises:
      InvalidReferenceError: If the argument has no usable shape
  """
  kind = parse_entity_kind(entity_kind)

  if isinstance(reference, ById):
    return ById(reference.id, parse_entity_kind(reference.kind) or kind)
  if isinstance(reference, (ByReference, ByUrl)):
    return reference
  if isinstance(reference, str):
    return ByUrl(reference)
  if _is_identifier(reference):
    return ById(reference, kind)
  if reference is not None and not isinstance(reference, (bool, int, float)):
    return ByReference(reference)

  raise InvalidReferenceError(
    f"Entity reference must be an entity, an id or a URL; got {type(reference).__name__}"
  )


def validate_url(url: str) -> str:
  """Ensure a string is an absolute http(s) URL and return it unchanged."""
  parts = _split_url(url)
  if parts.scheme not in ("http", "https") or not parts.hostname:
    raise InvalidReferenceError(f"Invalid entity URL {url!r}: not an absolute http(s) URL")
  return url


def _split_url(url: str):
  if not url or any(c.isspace() for c in url):
    raise InvalidReferenceError(f"Invalid entity URL {url!r}")
  try:
    parts = urlsplit(url)
    # Accessing .port validates the port component
    parts.port
  except ValueError as e:
    raise InvalidReferenceError(f"Invalid entity URL {url!r}: {e}") from e
  return parts


def _resolve_url(url: str, base_config_url: Optional[str]) -> str:
  """Absolute URLs are used verbatim; relative ones resolve against /db/data/."""
  parts = _split_url(url)
  if parts.scheme or parts.netloc:
    return validate_url(url)
  if base_config_url is None:
    raise InvalidReferenceError(f"Cannot resolve relative URL {url!r}: not connected")
  return validate_url(urljoin(base_config_url, url))


def resolve_entity_url(
  reference: Any,
  entity_kind: Any,
  endpoints: Optional[EndpointPaths],
  base_config_url: Optional[str],
) -> str:
  """
  Compute the canonical request URL for a node or relationship.

  Args:
      reference: Entity object, mapping, id, URL or EntityRef
      entity_kind: "node" or "relationship"; required for bare ids
      endpoints: Endpoint map cached by the handshake
      base_config_url: Handshake URL, e.g. http://host:7474/db/data/

  Returns:
      Absolute entity URL

  Raises:
      InvalidReferenceError: If the reference cannot be resolved
  """
  ref = as_entity_ref(reference, entity_kind)

  if isinstance(ref, ByReference):
    url = _self_url(ref.entity)
    if not url:
      raise InvalidReferenceError("Entity object must have a non-empty 'self' URL")
    return url

  if isinstance(ref, ByUrl):
    return _resolve_url(ref.url, base_config_url)

  if ref.kind is None:
    raise InvalidReferenceError(
      f"Entity kind ('node' or 'relationship') is required to resolve id {ref.id}"
    )

  if ref.kind is EntityKind.NODE:
    if endpoints is None:
      raise InvalidReferenceError(f"Cannot resolve node {ref.id}: not connected")
    return f"{endpoints.node.rstrip('/')}/{ref.id}"

  # Relationships are addressed off the handshake URL, not the endpoint map
  if base_config_url is None:
    raise InvalidReferenceError(f"Cannot resolve relationship {ref.id}: not connected")
  return urljoin(base_config_url, f"relationship/{ref.id}")


def extract_entity_id(entity_or_id: Any) -> int:
  """
  Return the numeric id of an entity or id argument.

  Used for error messages; request URLs always come from resolve_entity_url.
  """
  if isinstance(entity_or_id, ById):
    return entity_or_id.id
  if isinstance(entity_or_id, ByReference):
    entity_or_id = entity_or_id.entity
  if _is_identifier(entity_or_id):
    return entity_or_id

  metadata = (
    entity_or_id.get("metadata")
    if isinstance(entity_or_id, Mapping)
    else getattr(entity_or_id, "metadata", None)
  )
  entity_id = (
    metadata.get("id") if isinstance(metadata, Mapping) else getattr(metadata, "id", None)
  )
  if _is_identifier(entity_id):
    return entity_id

  raise InvalidReferenceError(
    f"Cannot extract an entity id from {type(entity_or_id).__name__}"
  )
