import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Entities ---
class Restaurant(BaseModel):
    """
    A restaurant document from the remote collection.
    Missing optional fields are defaulted instead of left absent.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str
    name: str = ""
    notes: str = ""
    images: list[str] = Field(default_factory=list)
    show_reviews: bool = Field(default=False, alias="showReviews")

    @field_validator("name", "notes", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    @field_validator("show_reviews", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("images", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def thumbnail(self) -> str | None:
        return self.images[0] if self.images else None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "Restaurant":
        # The document id always wins over an "id" field stored in the body.
        return cls.model_validate({**data, "id": doc_id})

    @classmethod
    def placeholder(cls, doc_id: str, data: dict[str, Any]) -> "Restaurant":
        """Stand-in for a document whose fields cannot be read."""
        name = data.get("name")
        return cls(id=doc_id, name=name if isinstance(name, str) else "")


# --- (Data Transfer Objects) ---
@dataclass(frozen=True)
class DocumentSnapshot:
    """
    One document inside a collection snapshot,
    decoupled from the remote store implementation.
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PreferenceOverride:
    """
    Result of looking up the on-device showReviews override.
    `present` is kept apart from `value` so an override of False is never
    confused with a missing one.
    """

    present: bool
    value: bool | None = None

    @classmethod
    def absent(cls) -> "PreferenceOverride":
        return cls(present=False)

    @classmethod
    def parse(cls, raw: str | None) -> "PreferenceOverride":
        """
        Raises json.JSONDecodeError for corrupt values.
        Valid JSON that is not a boolean counts as no override.
        """
        if raw is None:
            return cls.absent()
        decoded = json.loads(raw)
        if isinstance(decoded, bool):
            return cls(present=True, value=decoded)
        return cls.absent()

    def resolve(self, server_value: bool) -> bool:
        if self.present and self.value is not None:
            return self.value
        return server_value


def serialize_preference(value: bool) -> str:
    return json.dumps(bool(value))
