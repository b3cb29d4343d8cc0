"""Data models for group content entities."""

from dataclasses import dataclass, field
from typing import Any, Optional

FIELD_FORMATS = ("plain", "markdown", "html")


@dataclass
class Field:
    """Single field value of an entity."""

    name: str
    value: Any
    format: str = "plain"  # "plain", "markdown" or "html"

    def __post_init__(self) -> None:
        if self.format not in FIELD_FORMATS:
            raise ValueError(f"Unknown field format: {self.format}")


@dataclass
class GroupContent:
    """Relationship entity placing a piece of content inside a group."""

    id: str
    label: str
    bundle: str
    group_id: Optional[str]
    fields: dict[str, Field] = field(default_factory=dict)
    url: Optional[str] = None
    view_mode: str = "default"
    metadata: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.metadata is None:
            self.metadata = {}

    @property
    def canonical_url(self) -> str:
        """explicit URL, or the canonical group content path."""
        if self.url:
            return self.url
        if not self.group_id:
            # no owning group, so no group-scoped path
            return f"/group-content/{self.id}"
        return f"/group/{self.group_id}/content/{self.id}"
