"""Tests for property operations on nodes and relationships."""

from unittest.mock import patch

import pytest

from fakes import DB_URL, make_response, node_json, relationship_json, sent
from neo4j_rest.client.exceptions import InvalidReferenceError, ProtocolError
from neo4j_rest.models import Node, Relationship


class TestSetProperty:
  """Test cases for set_property."""

  @pytest.mark.asyncio
  async def test_set_node_property(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      result = await connected_client.set_property(5, "node", "lastName", "Pennetta")

    assert result is True
    request = sent(mock_request)
    assert request["method"] == "PUT"
    assert request["url"] == f"{DB_URL}node/5/properties/lastName"
    assert request["json"] == "Pennetta"

  @pytest.mark.asyncio
  async def test_set_relationship_property_uses_base_config_url(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      await connected_client.set_property(9, "relationship", "since", 2016)

    assert sent(mock_request)["url"] == f"{DB_URL}relationship/9/properties/since"
    assert sent(mock_request)["json"] == 2016

  @pytest.mark.asyncio
  async def test_set_property_false_is_a_value(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      await connected_client.set_property(5, "node", "active", False)

    assert sent(mock_request)["json"] is False

  @pytest.mark.asyncio
  async def test_set_property_on_entity_object(self, connected_client):
    relationship = Relationship.model_validate(relationship_json(3, 1, 2))

    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      await connected_client.set_property(relationship, None, "weight", 0.5)

    assert sent(mock_request)["url"] == f"{DB_URL}relationship/3/properties/weight"

  @pytest.mark.asyncio
  async def test_set_property_escapes_name(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      await connected_client.set_property(5, "node", "first name", "x")

    assert sent(mock_request)["url"] == f"{DB_URL}node/5/properties/first%20name"

  @pytest.mark.asyncio
  async def test_null_value_rejected_before_request(self, connected_client):
    with patch.object(connected_client.client, "request") as mock_request:
      with pytest.raises(InvalidReferenceError, match="null"):
        await connected_client.set_property(5, "node", "x", None)

    mock_request.assert_not_called()

  @pytest.mark.asyncio
  async def test_missing_kind_for_id_rejected(self, connected_client):
    with patch.object(connected_client.client, "request") as mock_request:
      with pytest.raises(InvalidReferenceError):
        await connected_client.set_property(5, None, "x", "y")

    mock_request.assert_not_called()

  @pytest.mark.asyncio
  async def test_unexpected_status(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(400, {"message": "bad"}, "PUT"),
    ):
      with pytest.raises(ProtocolError) as exc_info:
        await connected_client.set_property(5, "node", "x", "y")

    assert "x" in str(exc_info.value)
    assert exc_info.value.status_code == 400
    assert exc_info.value.response_data == {"message": "bad"}


class TestUpdateProperties:
  """Test cases for update_properties."""

  @pytest.mark.asyncio
  async def test_update_properties(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      result = await connected_client.update_properties(
        5, "node", {"newProperty": "My Property"}
      )

    assert result is True
    assert sent(mock_request)["url"] == f"{DB_URL}node/5/properties"
    assert sent(mock_request)["json"] == {"newProperty": "My Property"}

  @pytest.mark.asyncio
  async def test_nested_properties_rejected_client_side(self, connected_client):
    with patch.object(connected_client.client, "request") as mock_request:
      with pytest.raises(InvalidReferenceError, match="nested"):
        await connected_client.update_properties(5, "node", {"nested": {"a": 1}})

    mock_request.assert_not_called()

  @pytest.mark.asyncio
  async def test_json_string_payload(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(204, None, "PUT")
    ) as mock_request:
      await connected_client.update_properties(5, "node", '{"a": [1, 2]}')

    assert sent(mock_request)["json"] == {"a": [1, 2]}

  @pytest.mark.asyncio
  async def test_malformed_json_string_rejected(self, connected_client):
    with pytest.raises(InvalidReferenceError, match="Invalid JSON"):
      await connected_client.update_properties(5, "node", "{oops")

  @pytest.mark.asyncio
  async def test_non_object_payload_rejected(self, connected_client):
    with pytest.raises(InvalidReferenceError):
      await connected_client.update_properties(5, "node", "[1, 2]")


class TestReadAndDeleteProperties:
  """Test cases for property reads and deletes."""

  @pytest.mark.asyncio
  async def test_get_properties(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(200, {"newProperty": "My Property"}),
    ) as mock_request:
      properties = await connected_client.get_properties(5, "node")

    assert properties == {"newProperty": "My Property"}
    assert sent(mock_request)["url"] == f"{DB_URL}node/5/properties"

  @pytest.mark.asyncio
  async def test_get_properties_empty_body(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(200)
    ):
      assert await connected_client.get_properties(5, "node") == {}

  @pytest.mark.asyncio
  async def test_get_property(self, connected_client):
    node = Node.model_validate(node_json(5))

    with patch.object(
      connected_client.client, "request", return_value=make_response(200, "My Property")
    ) as mock_request:
      value = await connected_client.get_property(node, "node", "newProperty")

    assert value == "My Property"
    assert sent(mock_request)["url"] == f"{DB_URL}node/5/properties/newProperty"

  @pytest.mark.asyncio
  async def test_get_property_missing(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(404, {})
    ):
      with pytest.raises(ProtocolError, match="missing"):
        await connected_client.get_property(5, "node", "missing")

  @pytest.mark.asyncio
  async def test_delete_property(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(204, None, "DELETE"),
    ) as mock_request:
      assert await connected_client.delete_property(5, "node", "newProperty") is True

    assert sent(mock_request)["method"] == "DELETE"
    assert sent(mock_request)["url"] == f"{DB_URL}node/5/properties/newProperty"

  @pytest.mark.asyncio
  async def test_delete_all_properties(self, connected_client):
    with patch.object(
      connected_client.client,
      "request",
      return_value=make_response(204, None, "DELETE"),
    ) as mock_request:
      assert await connected_client.delete_all_properties(8, "relationship") is True

    assert sent(mock_request)["url"] == f"{DB_URL}relationship/8/properties"

  @pytest.mark.asyncio
  async def test_delete_all_properties_error(self, connected_client):
    with patch.object(
      connected_client.client, "request", return_value=make_response(404, {}, "DELETE")
    ):
      with pytest.raises(ProtocolError):
        await connected_client.delete_all_properties(8, "node")
