"""HTML escaping and trusted fragments."""

from typing import Any

from markupsafe import Markup
from markupsafe import escape as _escape

# variables the host hands over as pre-rendered markup
FRAGMENT_VARIABLES = ("title_prefix", "title_suffix", "content")


def escape(value: Any) -> Markup:
    """
    HTML-escapes a scalar value for insertion into markup.

    Encodes <, >, &, " and '. Values that are already safe markup
    (anything exposing __html__, such as Attribute) are passed through.

    Args:
        value: value to escape, None renders as empty

    Returns:
        escaped markup
    """
    if value is None:
        return Markup("")
    return _escape(value)


def fragment(value: Any) -> Markup:
    """marks a caller-trusted fragment safe for verbatim insertion."""
    if value is None:
        return Markup("")
    if hasattr(value, "__html__"):
        return Markup(value.__html__())
    return Markup(str(value))


def mark_fragments(context: dict[str, Any]) -> dict[str, Any]:
    """returns a copy of context with fragment variables marked safe."""
    marked = dict(context)
    for name in FRAGMENT_VARIABLES:
        if name in marked:
            marked[name] = fragment(marked[name])
    return marked
