"""Tests for schema index operations."""

from unittest.mock import patch

import pytest

from fakes import DB_URL, make_response, sent
from neo4j_rest.client.exceptions import (
  InvalidReferenceError,
  NotConnectedError,
  ProtocolError,
)
from neo4j_rest.models import IndexDefinition


class TestIndexes:
  """Test cases for index creation, listing and removal."""

  @pytest.mark.asyncio
  async def test_create_index(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(
        200, {"label": "Person", "property_keys": ["name"]}, "POST"
      ),
    ) as mock_request:
      index = await connected_client.create_index("Person", "name")

    assert index == IndexDefinition(label="Person", property_keys=["name"])
    request = sent(mock_request)
    assert request["method"] == "POST"
    assert request["url"] == f"{DB_URL}schema/index/Person"
    assert request["json"] == {"property_keys": ["name"]}

  @pytest.mark.asyncio
  async def test_create_composite_index(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(
        200, {"label": "Person", "property_keys": ["first", "last"]}, "POST"
      ),
    ) as mock_request:
      index = await connected_client.create_index("Person", ["first", "last"])

    assert index.property_keys == ["first", "last"]
    assert sent(mock_request)["json"] == {"property_keys": ["first", "last"]}

  @pytest.mark.asyncio
  async def test_create_index_requires_keys(self, connected_client):
    with patch.object(connected_client.client, "request") as mock_request:
      with pytest.raises(InvalidReferenceError):
        await connected_client.create_index("Person", [])

    mock_request.assert_not_called()

  @pytest.mark.asyncio
  async def test_create_index_requires_label(self, connected_client):
    with pytest.raises(InvalidReferenceError, match="label"):
      await connected_client.create_index("", "name")

  @pytest.mark.asyncio
  async def test_list_indexes(self, connected_client):
    body = [
      {"label": "Person", "property_keys": ["name"]},
      {"label": "Person", "property_keys": ["age"]},
    ]

    with patch.object(
      connected_client.client, "request", return_value=make_response(200, body)
    ) as mock_request:
      indexes = await connected_client.list_indexes_for_label("Person")

    assert [i.property_keys for i in indexes] == [["name"], ["age"]]
    assert sent(mock_request)["url"] == f"{DB_URL}schema/index/Person"

  @pytest.mark.asyncio
  async def test_list_indexes_escapes_label(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(200, [])
    ) as mock_request:
      assert await connected_client.list_indexes_for_label("My Label") == []

    assert sent(mock_request)["url"] == f"{DB_URL}schema/index/My%20Label"

  @pytest.mark.asyncio
  async def test_drop_index(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(204, None, "DELETE"),
    ) as mock_request:
      assert await connected_client.drop_index("Person", "name") is True

    assert sent(mock_request)["method"] == "DELETE"
    assert sent(mock_request)["url"] == f"{DB_URL}schema/index/Person/name"

  @pytest.mark.asyncio
  async def test_drop_missing_index(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(404, {}, "DELETE"),
    ):
      with pytest.raises(ProtocolError, match="Person"):
        await connected_client.drop_index("Person", "name")

  @pytest.mark.asyncio
  async def test_requires_connection(self, client):
    with pytest.raises(NotConnectedError):
      await client.list_indexes_for_label("Person")
