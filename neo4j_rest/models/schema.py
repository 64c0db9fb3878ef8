"""
Schema index models.
"""

from typing import List

from pydantic import BaseModel, Field


class IndexDefinition(BaseModel):
  """A label/property index as reported by /db/data/schema/index."""

  label: str = Field(..., description="Indexed label")
  property_keys: List[str] = Field(..., description="Indexed property keys")
