"""HTML attribute collections for theme templates."""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from markupsafe import Markup

from groupcontent.rendering.markup import escape

AttributeValue = Union[str, int, bool, None, list[str]]

CLASS_SEPARATORS = re.compile(r"[\s_/\[\]]+")
INVALID_CLASS_CHARS = re.compile(r"[^a-z0-9\-]")


def html_class(name: str) -> str:
    """
    normalizes an identifier into a CSS class name.

    Args:
        name: raw identifier, e.g. a bundle or view mode machine name

    Returns:
        lower-case class with separators collapsed to '-'
    """
    cleaned = CLASS_SEPARATORS.sub("-", name.strip().lower())
    return INVALID_CLASS_CHARS.sub("", cleaned)


class Attribute:
    """ordered collection of HTML attributes, rendered with a leading space per pair."""

    def __init__(self, attributes: Optional[Mapping[str, AttributeValue]] = None) -> None:
        self._storage: dict[str, AttributeValue] = {}
        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)

    def set_attribute(self, name: str, value: AttributeValue) -> "Attribute":
        """sets an attribute, replacing any previous value."""
        if name == "class":
            self._storage.pop("class", None)
            classes = value.split() if isinstance(value, str) else value
            if classes:
                self.add_class(*classes)  # type: ignore[arg-type]
            return self
        self._storage[name] = value
        return self

    def remove_attribute(self, *names: str) -> "Attribute":
        """removes attributes by name, ignoring missing ones."""
        for name in names:
            self._storage.pop(name, None)
        return self

    def add_class(self, *classes: Union[str, Iterable[str]]) -> "Attribute":
        """appends classes, keeping first occurrence order."""
        current = list(self._classes())
        for item in classes:
            names = [item] if isinstance(item, str) else list(item)
            for name in names:
                if name and name not in current:
                    current.append(name)
        self._storage["class"] = current
        return self

    def remove_class(self, *classes: str) -> "Attribute":
        """removes classes; drops the class attribute when it empties."""
        remaining = [c for c in self._classes() if c not in classes]
        if remaining:
            self._storage["class"] = remaining
        else:
            self._storage.pop("class", None)
        return self

    def has_class(self, name: str) -> bool:
        """checks whether a class is present."""
        return name in self._classes()

    def _classes(self) -> list[str]:
        value = self._storage.get("class")
        if isinstance(value, list):
            return value
        return []

    def to_dict(self) -> dict[str, Any]:
        """returns a plain copy of the stored attributes."""
        return {
            name: list(value) if isinstance(value, list) else value
            for name, value in self._storage.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._storage

    def __getitem__(self, name: str) -> AttributeValue:
        return self._storage[name]

    def __len__(self) -> int:
        return len(self._storage)

    def __str__(self) -> str:
        parts = []
        for name, value in self._storage.items():
            if value is None or value is False:
                continue
            if value is True:
                parts.append(f" {escape(name)}")
                continue
            if isinstance(value, list):
                value = " ".join(value)
            parts.append(f' {escape(name)}="{escape(value)}"')
        return "".join(parts)

    def __html__(self) -> Markup:
        return Markup(str(self))

    def __repr__(self) -> str:
        return f"Attribute({self._storage!r})"
