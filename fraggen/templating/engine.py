"""Placeholder template engine for hand-authored fragment markup.

Templates use two constructs:

``{{field}}``
    substituted with the bound value of a declared placeholder.
``{{#repeater}} ... {{/repeater}}``
    expanded once per element of the bound sequence. Inside the block only the
    repeater's own child fields resolve; outer placeholders are not visible and
    child fields do not leak outside the block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from markupsafe import escape

from ..errors import TemplateSyntaxError, UnknownPlaceholder
from ..models import PlaceholderSpec, PlaceholderType

TOKEN_PATTERN = re.compile(r"\{\{\s*([#/]?)\s*([A-Za-z_][A-Za-z0-9_-]*)\s*\}\}")


@dataclass
class TextNode:
    text: str


@dataclass
class FieldNode:
    name: str
    source: str


@dataclass
class SectionNode:
    name: str
    source: str
    children: List["Node"] = field(default_factory=list)


Node = Union[TextNode, FieldNode, SectionNode]


@dataclass(frozen=True)
class Reference:
    """A token occurrence together with the repeater scope it appears in."""

    name: str
    scope: Tuple[str, ...]
    is_section: bool


@dataclass
class Template:
    source: str
    nodes: List[Node]

    def references(self) -> List[Reference]:
        return list(_walk_references(self.nodes, ()))

    def token_names(self) -> List[str]:
        seen: List[str] = []
        for reference in self.references():
            if reference.name not in seen:
                seen.append(reference.name)
        return seen


def parse_template(source: str) -> Template:
    """Parse template text into a node tree, validating block balance."""
    root: List[Node] = []
    # (section, children list, start offset of the opening token)
    stack: List[Tuple[SectionNode, List[Node], int]] = []
    current = root
    position = 0

    for match in TOKEN_PATTERN.finditer(source):
        if match.start() > position:
            current.append(TextNode(source[position : match.start()]))
        sigil, name = match.group(1), match.group(2)
        if sigil == "#":
            section = SectionNode(name=name, source="")
            current.append(section)
            stack.append((section, current, match.start()))
            current = section.children
        elif sigil == "/":
            if not stack:
                raise TemplateSyntaxError(f"closing tag '{{{{/{name}}}}}' has no matching opening tag")
            section, parent, start = stack.pop()
            if section.name != name:
                raise TemplateSyntaxError(
                    f"closing tag '{{{{/{name}}}}}' does not match open repeater '{section.name}'"
                )
            section.source = source[start : match.end()]
            current = parent
        else:
            current.append(FieldNode(name=name, source=match.group(0)))
        position = match.end()

    if stack:
        raise TemplateSyntaxError(f"repeater '{stack[-1][0].name}' is never closed")
    if position < len(source):
        current.append(TextNode(source[position:]))
    return Template(source=source, nodes=root)


def check_placeholders(
    template: Template,
    specs: Sequence[PlaceholderSpec],
    *,
    component_id: Optional[str] = None,
) -> None:
    """Ensure every token resolves to a spec in its scope.

    Unused specs are allowed; undeclared tokens raise ``UnknownPlaceholder``.
    """
    _check_nodes(template.nodes, specs, None, component_id)


def render_template(
    template: Template,
    specs: Sequence[PlaceholderSpec],
    values: Mapping[str, Any],
    *,
    preserve_tokens: bool = False,
    component_id: Optional[str] = None,
) -> str:
    """Substitute bound ``values`` into ``template``.

    With ``preserve_tokens`` unbound top-level placeholders are emitted as their
    original ``{{token}}`` (or the whole repeater block) so a host can fill them
    later; otherwise unbound placeholders fall back to their spec default.
    """
    parts: List[str] = []
    _render_nodes(
        template.nodes,
        specs,
        values,
        parts,
        scope=None,
        preserve_tokens=preserve_tokens,
        component_id=component_id,
    )
    return "".join(parts)


def format_value(spec: PlaceholderSpec, value: Any) -> str:
    """Return the HTML-safe substitution text for a scalar placeholder value."""
    if spec.type is PlaceholderType.BOOLEAN:
        return "true" if value else "false"
    if value is None:
        return ""
    if spec.type is PlaceholderType.RICHTEXT:
        return str(value)
    return str(escape(value))


def _lookup(
    name: str,
    specs: Sequence[PlaceholderSpec],
    scope: Optional[str],
    component_id: Optional[str],
) -> PlaceholderSpec:
    for spec in specs:
        if spec.id == name:
            return spec
    raise UnknownPlaceholder(name, component_id=component_id, scope=scope)


def _check_nodes(
    nodes: Sequence[Node],
    specs: Sequence[PlaceholderSpec],
    scope: Optional[str],
    component_id: Optional[str],
) -> None:
    for node in nodes:
        if isinstance(node, FieldNode):
            spec = _lookup(node.name, specs, scope, component_id)
            if spec.is_repeater:
                raise TemplateSyntaxError(
                    f"repeater '{node.name}' used as a plain field",
                    component_id=component_id,
                )
        elif isinstance(node, SectionNode):
            spec = _lookup(node.name, specs, scope, component_id)
            if not spec.is_repeater:
                raise TemplateSyntaxError(
                    f"'{node.name}' is a {spec.type.value} placeholder and cannot open a block",
                    component_id=component_id,
                )
            _check_nodes(node.children, spec.fields, node.name, component_id)


def _render_nodes(
    nodes: Sequence[Node],
    specs: Sequence[PlaceholderSpec],
    values: Mapping[str, Any],
    parts: List[str],
    *,
    scope: Optional[str],
    preserve_tokens: bool,
    component_id: Optional[str],
) -> None:
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.text)
            continue

        spec = _lookup(node.name, specs, scope, component_id)
        bound = node.name in values
        if isinstance(node, FieldNode):
            if spec.is_repeater:
                raise TemplateSyntaxError(
                    f"repeater '{node.name}' used as a plain field",
                    component_id=component_id,
                )
            if preserve_tokens and not bound:
                parts.append(node.source)
            else:
                parts.append(format_value(spec, values.get(node.name, spec.default)))
            continue

        if not spec.is_repeater:
            raise TemplateSyntaxError(
                f"'{node.name}' is a {spec.type.value} placeholder and cannot open a block",
                component_id=component_id,
            )
        if preserve_tokens and not bound:
            parts.append(node.source)
            continue
        for item in values.get(node.name, spec.default) or ():
            _render_nodes(
                node.children,
                spec.fields,
                item,
                parts,
                scope=node.name,
                preserve_tokens=False,
                component_id=component_id,
            )


def _walk_references(nodes: Sequence[Node], scope: Tuple[str, ...]) -> Iterator[Reference]:
    for node in nodes:
        if isinstance(node, FieldNode):
            yield Reference(name=node.name, scope=scope, is_section=False)
        elif isinstance(node, SectionNode):
            yield Reference(name=node.name, scope=scope, is_section=True)
            yield from _walk_references(node.children, scope + (node.name,))


__all__ = [
    "FieldNode",
    "Reference",
    "SectionNode",
    "Template",
    "TextNode",
    "check_placeholders",
    "format_value",
    "parse_template",
    "render_template",
]
