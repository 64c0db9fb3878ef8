"""Tests for the transactional Cypher models."""

import pytest
from pydantic import ValidationError

from neo4j_rest.models import CypherRequest, CypherResponse, CypherStatement


class TestCypherRequest:
  def test_payload_uses_camel_case_aliases(self):
    request = CypherRequest(
      statements=[
        CypherStatement(
          statement="RETURN 1",
          result_data_contents=["row", "graph"],
          include_stats=True,
        )
      ]
    )

    assert request.to_payload() == {
      "statements": [
        {
          "statement": "RETURN 1",
          "resultDataContents": ["row", "graph"],
          "includeStats": True,
        }
      ]
    }

  def test_statement_accepts_wire_names(self):
    statement = CypherStatement.model_validate(
      {"statement": "RETURN 1", "resultDataContents": ["REST"]}
    )

    assert statement.result_data_contents == ["REST"]

  def test_unknown_result_content_rejected(self):
    with pytest.raises(ValidationError):
      CypherStatement(statement="RETURN 1", result_data_contents=["table"])

  def test_at_least_one_statement(self):
    with pytest.raises(ValidationError):
      CypherRequest(statements=[])


class TestCypherResponse:
  def test_parse_rows_and_stats(self):
    response = CypherResponse.model_validate(
      {
        "results": [
          {
            "columns": ["a", "b"],
            "data": [{"row": [1, "x"], "meta": [None, None]}],
            "stats": {"nodes_created": 0},
          }
        ],
        "errors": [],
      }
    )

    result = response.results[0]
    assert result.columns == ["a", "b"]
    assert result.data[0].row == [1, "x"]
    assert result.stats == {"nodes_created": 0}
    assert response.errors == []

  def test_parse_errors(self):
    response = CypherResponse.model_validate(
      {"results": [], "errors": [{"code": "Neo.X", "message": "failed"}]}
    )

    assert response.errors[0].code == "Neo.X"
    assert response.errors[0].message == "failed"

  def test_empty_body_defaults(self):
    response = CypherResponse.model_validate({})

    assert response.results == []
    assert response.errors == []
