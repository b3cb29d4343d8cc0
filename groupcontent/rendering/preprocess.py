"""Builds template variables from a group content entity."""

import logging
from typing import Any, Optional, cast

from markdown_it import MarkdownIt
from markupsafe import Markup

from groupcontent.core.models import Field, GroupContent
from groupcontent.rendering.attributes import Attribute, html_class
from groupcontent.rendering.markup import escape

logger = logging.getLogger(__name__)

FULL_VIEW_MODE = "full"


def _markdown() -> MarkdownIt:
    """markdown parser with raw HTML disabled."""
    md = MarkdownIt()
    md.enable("table")
    # disables HTML to prevent injection attacks
    md.disable("html_inline")
    md.disable("html_block")
    return md


def render_field(field: Field) -> Markup:
    """
    renders a single field into its wrapper div.

    Args:
        field: field to render

    Returns:
        safe markup for the field
    """
    if field.format == "markdown":
        body = Markup(cast(str, _markdown().render(str(field.value))).rstrip("\n"))
    elif field.format == "html":
        # html fields are trusted, same as fragments
        body = Markup(str(field.value))
    elif isinstance(field.value, list):
        body = Markup("").join(
            Markup("<div>{}</div>").format(item) for item in field.value
        )
    else:
        body = escape(field.value)

    wrapper = Attribute({"class": ["field", f"field--name-{html_class(field.name)}"]})
    return Markup("<div{}>{}</div>").format(wrapper, body)


def render_content(entity: GroupContent) -> Markup:
    """renders all fields of the entity, one per line."""
    return Markup("\n").join(render_field(f) for f in entity.fields.values())


def preprocess(entity: GroupContent, view_mode: Optional[str] = None) -> dict[str, Any]:
    """
    prepares the template context for an entity.

    Args:
        entity: group content entity
        view_mode: overrides the entity's own view mode

    Returns:
        dict with the variables the group content template reads
    """
    mode = view_mode or entity.view_mode
    logger.debug("Preprocessing group content %s (%s)", entity.id, mode)

    attributes = Attribute(
        {
            "class": [
                "group-content",
                f"group-content--{html_class(entity.bundle)}",
                f"group-content--{html_class(mode)}",
            ]
        }
    )

    return {
        "group_content": entity,
        "label": entity.label,
        "url": entity.canonical_url,
        "view_mode": mode,
        "page": mode == FULL_VIEW_MODE,
        "attributes": attributes,
        "title_attributes": Attribute(),
        "content_attributes": Attribute(),
        "title_prefix": Markup(""),
        "title_suffix": Markup(""),
        "content": render_content(entity),
    }
