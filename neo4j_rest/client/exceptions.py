"""
Neo4j REST Client Exceptions.

Defines the exception hierarchy for client operations.
"""

from typing import Optional, Dict, Any, List


class Neo4jRestError(Exception):
  """Base exception for all Neo4j REST client errors."""

  def __init__(
    self,
    message: str,
    status_code: Optional[int] = None,
    response_data: Optional[Any] = None,
  ):
    super().__init__(message)
    self.message = message
    self.status_code = status_code
    self.response_data = response_data


class ConfigurationError(Neo4jRestError):
  """
  Bad connection parameters.

  Examples: missing host, invalid port, unknown protocol, unparsable endpoint URL
  """

  pass


class NotConnectedError(ConfigurationError):
  """An operation was attempted before a successful connect()."""

  pass


class ConnectionError(Neo4jRestError):
  """
  Transport-level failure reaching the server.

  The underlying httpx error is chained as __cause__.
  """

  pass


class Neo4jTimeoutError(ConnectionError):
  """Request timeout errors."""

  pass


class ProtocolError(Neo4jRestError):
  """
  Unexpected HTTP status code or undecodable response body.

  Examples: 404 Not Found on get_node, 400 on a rejected property payload
  """

  pass


class ConflictError(ProtocolError):
  """
  409 Conflict.

  Raised when deleting a node that still has relationships attached.
  """

  pass


class InvalidReferenceError(Neo4jRestError):
  """
  An argument could not be turned into a valid request.

  Examples: unresolvable entity reference, missing entity kind for a numeric
  id, null or nested property value, malformed JSON payload string
  """

  pass


class QueryError(Neo4jRestError):
  """
  The transactional Cypher endpoint returned a non-empty error list.

  Attributes:
      errors: List of {"code": ..., "message": ...} entries from the server
  """

  def __init__(
    self,
    message: str,
    errors: Optional[List[Dict[str, Any]]] = None,
    status_code: Optional[int] = None,
    response_data: Optional[Any] = None,
  ):
    super().__init__(message, status_code, response_data)
    self.errors = errors or []
