"""Document models consumed and produced by the indexer."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A source document handed to the index builder."""

    path: str = Field(..., description="Document identifier, usually a relative file name")
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Field name to raw value (title, date, keywords, contents, ...)"
    )

    @property
    def title(self) -> Any:
        return self.metadata.get("title")

    @property
    def date(self) -> Any:
        return self.metadata.get("date")


class DocumentEntry(BaseModel):
    """Indexed record referenced by id from the inverted index."""

    id: int = Field(..., ge=0, exclude=True, description="Position in the entry sequence")
    title: Optional[str] = Field(None, description="Document title")
    url: str = Field(..., description="URL of the document")
    date: Optional[str] = Field(None, description="Formatted document date")

    model_config = ConfigDict(frozen=True)

    def to_artifact(self) -> Dict[str, str]:
        """Serialize without the id and without absent optional fields."""
        return self.model_dump(exclude_none=True)
