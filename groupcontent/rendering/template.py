"""Group content template rendering."""

import logging
from typing import Any, Optional, TextIO

from groupcontent.rendering.markup import mark_fragments
from groupcontent.rendering.sandbox import (
    GroupSandboxedEnvironment,
    NotAllowedFilterError,
    NotAllowedFunctionError,
    NotAllowedTagError,
    SecurityPolicyViolation,
    collect_usage,
)

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "group-content.html.twig"

# variables the template reads, all supplied by the caller
CONTEXT_VARIABLES = (
    "attributes",
    "title_prefix",
    "page",
    "title_attributes",
    "url",
    "label",
    "title_suffix",
    "content_attributes",
    "content",
)


class GroupContentTemplate:
    """renders the group content HTML fragment from a context mapping."""

    def __init__(
        self,
        env: Optional[GroupSandboxedEnvironment] = None,
        name: str = TEMPLATE_NAME,
    ) -> None:
        self.env = env or GroupSandboxedEnvironment()
        self.name = name

        source, _filename, _uptodate = self.env.loader.get_source(  # type: ignore[union-attr]
            self.env, name
        )
        self.source: str = source
        self.usage = collect_usage(self.env.parse(source, name))
        self._template = self.env.get_template(name)

    def _check_security(self) -> None:
        """runs the policy gate, attaching template name and line on rejection."""
        try:
            self.env.check_security(
                self.usage.tags, self.usage.filters, self.usage.functions
            )
        except SecurityPolicyViolation as e:
            e.set_template_name(self.name)

            if isinstance(e, NotAllowedTagError) and e.tag_name in self.usage.tags:
                e.set_lineno(self.usage.tags[e.tag_name])
            elif (
                isinstance(e, NotAllowedFilterError)
                and e.filter_name in self.usage.filters
            ):
                e.set_lineno(self.usage.filters[e.filter_name])
            elif (
                isinstance(e, NotAllowedFunctionError)
                and e.function_name in self.usage.functions
            ):
                e.set_lineno(self.usage.functions[e.function_name])

            logger.debug("Security policy rejected %s: %s", self.name, e)
            raise

    def render(self, context: dict[str, Any]) -> str:
        """
        renders the fragment.

        Args:
            context: template variables (see CONTEXT_VARIABLES); missing ones
                render empty and a missing page flag counts as false

        Returns:
            HTML string

        Raises:
            SecurityPolicyViolation: if the environment's policy rejects the template
        """
        self._check_security()
        return self._template.render(mark_fragments(context))

    def display(self, context: dict[str, Any], stream: TextIO) -> None:
        """writes the rendered fragment to a text stream."""
        stream.write(self.render(context))


_default_template: Optional[GroupContentTemplate] = None


def get_template() -> GroupContentTemplate:
    """returns the shared template using the default sandboxed environment."""
    global _default_template  # pylint: disable=global-statement
    if _default_template is None:
        _default_template = GroupContentTemplate()
    return _default_template


def render(context: dict[str, Any]) -> str:
    """renders a group content fragment with the default template."""
    return get_template().render(context)
