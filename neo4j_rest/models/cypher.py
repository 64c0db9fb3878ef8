"""
Transactional Cypher endpoint models.

Requests are sent to `{transaction}/commit`; each statement may ask for any
of the "row", "graph" and "REST" result shapes.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ResultDataContent = Literal["REST", "row", "graph"]


class CypherStatement(BaseModel):
  """A single Cypher statement with optional parameters."""

  model_config = ConfigDict(populate_by_name=True)

  statement: str = Field(..., description="Cypher text")
  parameters: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
  result_data_contents: Optional[List[ResultDataContent]] = Field(
    None, alias="resultDataContents", description="Requested result shapes"
  )
  include_stats: Optional[bool] = Field(None, alias="includeStats")


class CypherRequest(BaseModel):
  """One or more statements executed in a single committed transaction."""

  statements: List[CypherStatement] = Field(..., min_length=1)

  def to_payload(self) -> Dict[str, Any]:
    return self.model_dump(by_alias=True, exclude_none=True)


class CypherDatum(BaseModel):
  """One result row, in every shape the statement requested."""

  model_config = ConfigDict(extra="allow")

  row: Optional[List[Any]] = None
  rest: Optional[List[Any]] = None
  graph: Optional[Dict[str, Any]] = None
  meta: Optional[List[Any]] = None


class CypherResult(BaseModel):
  """Column names plus row data for one statement."""

  model_config = ConfigDict(extra="allow")

  columns: List[str] = Field(default_factory=list)
  data: List[CypherDatum] = Field(default_factory=list)
  stats: Optional[Dict[str, Any]] = None


class CypherErrorDetail(BaseModel):
  """A server-reported statement error."""

  code: str
  message: str


class CypherResponse(BaseModel):
  """Response body of the transactional endpoint."""

  model_config = ConfigDict(extra="allow")

  results: List[CypherResult] = Field(default_factory=list)
  errors: List[CypherErrorDetail] = Field(default_factory=list)
