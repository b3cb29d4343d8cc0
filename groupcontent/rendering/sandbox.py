"""Sandboxed Jinja2 environment with a tag/filter/function policy gate."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from jinja2 import BaseLoader, PackageLoader, nodes
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment

DEFAULT_ALLOWED_TAGS = frozenset(["if", "for", "set"])
DEFAULT_ALLOWED_FILTERS = frozenset(
    ["escape", "e", "default", "join", "length", "lower", "upper", "trim"]
)
DEFAULT_ALLOWED_FUNCTIONS: frozenset[str] = frozenset()

# statement node type -> tag name as written in templates
TAG_NODES: dict[type[nodes.Node], str] = {
    nodes.If: "if",
    nodes.For: "for",
    nodes.Assign: "set",
    nodes.AssignBlock: "set",
    nodes.Macro: "macro",
    nodes.CallBlock: "call",
    nodes.FilterBlock: "filter",
    nodes.Block: "block",
    nodes.Extends: "extends",
    nodes.Include: "include",
    nodes.Import: "import",
    nodes.FromImport: "from",
    nodes.With: "with",
    nodes.ScopedEvalContextModifier: "autoescape",
}


class SecurityPolicyViolation(SecurityError):
    """raised when a template uses a construct the security policy rejects."""

    kind = "construct"

    def __init__(self, name: str) -> None:
        self.name = name
        self.template_name: Optional[str] = None
        self.lineno: Optional[int] = None
        super().__init__(name)

    def set_template_name(self, template_name: str) -> None:
        """attaches the name of the template that triggered the violation."""
        self.template_name = template_name
        self.args = (str(self),)

    def set_lineno(self, lineno: int) -> None:
        """attaches the template line of the offending construct."""
        self.lineno = lineno
        self.args = (str(self),)

    def __str__(self) -> str:
        message = f'{self.kind.capitalize()} "{self.name}" is not allowed'
        if self.template_name:
            message += f' in "{self.template_name}"'
            if self.lineno is not None:
                message += f" at line {self.lineno}"
        return message


class NotAllowedTagError(SecurityPolicyViolation):
    """tag rejected by the policy."""

    kind = "tag"

    @property
    def tag_name(self) -> str:
        return self.name


class NotAllowedFilterError(SecurityPolicyViolation):
    """filter rejected by the policy."""

    kind = "filter"

    @property
    def filter_name(self) -> str:
        return self.name


class NotAllowedFunctionError(SecurityPolicyViolation):
    """function rejected by the policy."""

    kind = "function"

    @property
    def function_name(self) -> str:
        return self.name


@dataclass
class TemplateUsage:
    """first line each tag, filter and function is used on in a template."""

    tags: dict[str, int] = field(default_factory=dict)
    filters: dict[str, int] = field(default_factory=dict)
    functions: dict[str, int] = field(default_factory=dict)


def collect_usage(ast: nodes.Template) -> TemplateUsage:
    """
    walks a parsed template and records the constructs it uses.

    Args:
        ast: template AST from Environment.parse

    Returns:
        TemplateUsage with name -> first line number maps
    """
    usage = TemplateUsage()

    for node in ast.find_all(nodes.Node):
        tag = TAG_NODES.get(type(node))
        if tag is not None:
            usage.tags.setdefault(tag, node.lineno)
        elif isinstance(node, nodes.Filter) and node.name:
            usage.filters.setdefault(node.name, node.lineno)
        elif isinstance(node, nodes.Call) and isinstance(node.node, nodes.Name):
            usage.functions.setdefault(node.node.name, node.lineno)

    return usage


class SecurityPolicy:
    """allow-lists of tags, filters and functions a template may use."""

    def __init__(
        self,
        allowed_tags: Iterable[str] = DEFAULT_ALLOWED_TAGS,
        allowed_filters: Iterable[str] = DEFAULT_ALLOWED_FILTERS,
        allowed_functions: Iterable[str] = DEFAULT_ALLOWED_FUNCTIONS,
    ) -> None:
        self.allowed_tags = frozenset(allowed_tags)
        self.allowed_filters = frozenset(allowed_filters)
        self.allowed_functions = frozenset(allowed_functions)

    def check_security(
        self,
        tags: Iterable[str],
        filters: Iterable[str],
        functions: Iterable[str],
    ) -> None:
        """
        checks constructs against the allow-lists.

        Raises:
            NotAllowedTagError: tag not allowed
            NotAllowedFilterError: filter not allowed
            NotAllowedFunctionError: function not allowed
        """
        for tag in tags:
            if tag not in self.allowed_tags:
                raise NotAllowedTagError(tag)
        for filter_name in filters:
            if filter_name not in self.allowed_filters:
                raise NotAllowedFilterError(filter_name)
        for function in functions:
            if function not in self.allowed_functions:
                raise NotAllowedFunctionError(function)


def _finalize(value: Any) -> Any:
    """renders None as empty output."""
    return "" if value is None else value


class GroupSandboxedEnvironment(SandboxedEnvironment):
    """sandboxed HTML environment carrying a SecurityPolicy."""

    def __init__(
        self,
        loader: Optional[BaseLoader] = None,
        policy: Optional[SecurityPolicy] = None,
        **options: Any,
    ) -> None:
        options.setdefault("autoescape", True)
        options.setdefault("trim_blocks", True)
        options.setdefault("lstrip_blocks", True)
        options.setdefault("finalize", _finalize)
        super().__init__(
            loader=loader or PackageLoader("groupcontent", "templates"), **options
        )
        self.policy = policy or SecurityPolicy()

    def check_security(
        self,
        tags: Iterable[str],
        filters: Iterable[str],
        functions: Iterable[str],
    ) -> None:
        """delegates to the policy."""
        self.policy.check_security(tags, filters, functions)
