"""Fake Neo4j server payloads and httpx responses for client tests."""

from typing import Any, Optional

import httpx

DB_URL = "http://localhost:7474/db/data/"

SERVICE_ROOT = {
  "extensions": {},
  "node": f"{DB_URL}node",
  "relationship": f"{DB_URL}relationship",
  "node_index": f"{DB_URL}index/node",
  "relationship_index": f"{DB_URL}index/relationship",
  "extensions_info": f"{DB_URL}ext",
  "relationship_types": f"{DB_URL}relationship/types",
  "batch": f"{DB_URL}batch",
  "cypher": f"{DB_URL}cypher",
  "indexes": f"{DB_URL}schema/index",
  "constraints": f"{DB_URL}schema/constraint",
  "transaction": f"{DB_URL}transaction",
  "node_labels": f"{DB_URL}labels",
  "neo4j_version": "3.5.35",
}


def service_root(host: str = "localhost", port: int = 7474) -> dict:
  """Service root as advertised by a server at host:port."""
  return {
    key: value.replace("localhost:7474", f"{host}:{port}")
    if isinstance(value, str) and value.startswith("http")
    else value
    for key, value in SERVICE_ROOT.items()
  }


def make_response(
  status_code: int,
  body: Any = None,
  method: str = "GET",
  url: str = DB_URL,
) -> httpx.Response:
  """Build a real httpx.Response; body is JSON-encoded unless None or bytes."""
  request = httpx.Request(method, url)
  if body is None:
    return httpx.Response(status_code, request=request)
  if isinstance(body, bytes):
    return httpx.Response(status_code, content=body, request=request)
  return httpx.Response(status_code, json=body, request=request)


def node_json(node_id: int, data: Optional[dict] = None, labels=None) -> dict:
  self_url = f"{DB_URL}node/{node_id}"
  return {
    "self": self_url,
    "property": f"{self_url}/properties/{{key}}",
    "properties": f"{self_url}/properties",
    "labels": f"{self_url}/labels",
    "create_relationship": f"{self_url}/relationships",
    "all_relationships": f"{self_url}/relationships/all",
    "extensions": {},
    "metadata": {"id": node_id, "labels": labels or []},
    "data": data or {},
  }


def relationship_json(
  rel_id: int,
  start: int,
  end: int,
  rel_type: str = "MET",
  data: Optional[dict] = None,
) -> dict:
  self_url = f"{DB_URL}relationship/{rel_id}"
  return {
    "self": self_url,
    "property": f"{self_url}/properties/{{key}}",
    "properties": f"{self_url}/properties",
    "start": f"{DB_URL}node/{start}",
    "end": f"{DB_URL}node/{end}",
    "type": rel_type,
    "extensions": {},
    "metadata": {"id": rel_id, "type": rel_type},
    "data": data or {},
  }


def sent(mock_request, call: int = -1) -> dict:
  """Keyword arguments of a recorded client.request call."""
  return mock_request.call_args_list[call].kwargs
