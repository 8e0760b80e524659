# gallery/models.py
from __future__ import annotations
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

# ----- Stored record -----
class Record(BaseModel):
    id: int = 0
    title: str = ""
    description: str = ""
    filename: str = ""          # last path segment of source_url
    source_url: str = ""

    @classmethod
    def zero(cls) -> "Record":
        """The empty record returned when a query has no match."""
        return cls()

# ----- Queries (POST /q) -----
class RecordQuery(BaseModel):
    """One equality query; unset or empty fields are not filtered on."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    filename: Optional[str] = None
    source_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("source_url", "src"),
    )

QueryList = TypeAdapter(Optional[List[RecordQuery]])

class ErrorMessage(BaseModel):
    message: str

# ----- Ingestion report -----
class IngestError(BaseModel):
    stage: str        # creators | projects | project | save | download
    target: str       # page number, username, project id or URL
    message: str

class IngestReport(BaseModel):
    pages: int = 0
    creators: int = 0
    saved: int = 0
    downloaded: int = 0
    errors: List[IngestError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
