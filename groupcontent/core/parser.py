"""Parser for exported group content JSON."""

from typing import Any

from groupcontent.core.models import Field, GroupContent


def process_entity(json_data: dict[str, Any]) -> GroupContent:
    """
    Process a group content entity from its JSON export.

    Args:
        json_data: Raw entity JSON

    Returns:
        GroupContent object

    Raises:
        KeyError: if the entity has no id
        ValueError: if a field declares an unknown format
    """
    entity_id = str(json_data["id"])
    group_id = json_data.get("group_id")
    label = json_data.get("label") or "Untitled"

    return GroupContent(
        id=entity_id,
        label=label,
        bundle=json_data.get("bundle", "group_content"),
        group_id=str(group_id) if group_id not in (None, "") else None,
        fields=_extract_fields(json_data.get("fields", {})),
        url=json_data.get("url"),
        view_mode=json_data.get("view_mode", "default"),
        metadata=json_data.get("metadata", {}),
    )


def _extract_fields(fields_data: Any) -> dict[str, Field]:
    """Extract fields in declaration order.

    Accepts either a bare value or a {"value": ..., "format": ...} mapping.
    """
    fields: dict[str, Field] = {}

    for name, raw in fields_data.items():
        if isinstance(raw, dict) and "value" in raw:
            fields[name] = Field(
                name=name,
                value=raw["value"],
                format=raw.get("format", "plain"),
            )
        else:
            fields[name] = Field(name=name, value=raw)

    return fields
