# src/archive/models.py

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field


class RawRecord(BaseModel):
    """
    Repository as listed by GitHub. Never persisted.
    """

    id: int
    full_name: str                  # owner/name
    description: str = ""
    html_url: str = ""
    homepage: str = ""
    topics: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class NormalizedRecord(BaseModel):
    """
    One row of the repos table, also one element of the JSON snapshot.
    """

    owner: str
    name: str
    category: str
    description: str
    html_url: str = Field(serialization_alias="htmlurl")
    homepage: str
    topics: str
    created_at: str = Field(serialization_alias="createdAt")
    updated_at: str = Field(serialization_alias="updatedAt")
    uid: int

    def to_row(self) -> dict:
        """Column values for the repos table (keys match column names)."""
        return self.model_dump()
