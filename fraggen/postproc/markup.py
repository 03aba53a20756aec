"""Markup parsing, cleanup and canonical formatting for rendered fragments."""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..errors import MarkupError

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})
PHRASING_ELEMENTS = frozenset(
    {
        "a",
        "abbr",
        "b",
        "br",
        "cite",
        "code",
        "em",
        "i",
        "img",
        "mark",
        "q",
        "s",
        "small",
        "span",
        "strong",
        "sub",
        "sup",
        "time",
        "u",
        "wbr",
    }
)
KEEP_EMPTY_ATTRIBUTES = frozenset({"alt", "value"})
DROPPED_ATTRIBUTES = frozenset({"data-node-id"})
# HTML whitespace only; U+00A0 and other Unicode spaces are content.
_WHITESPACE = re.compile(r"[ \t\r\n\f]+")

Attribute = Tuple[str, Optional[str]]


@dataclass
class Text:
    data: str


@dataclass
class Comment:
    data: str


@dataclass
class Element:
    tag: str
    attrs: List[Attribute] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def get(self, name: str) -> Optional[str]:
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    @property
    def classes(self) -> List[str]:
        return (self.get("class") or "").split()

    def iter(self) -> Iterator["Element"]:
        """Yield this element and every descendant element in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find_all(self, predicate: Callable[["Element"], bool]) -> List["Element"]:
        return [element for element in self.iter() if predicate(element)]

    def text(self) -> str:
        """Return the whitespace-collapsed text content."""
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.data)
            elif isinstance(child, Element):
                parts.append(child.text())
        return " ".join(" ".join(parts).split())


Node = Union[Element, Text, Comment]
MarkupTransform = Callable[[Element], None]


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Element(tag="#root")
        self._stack: List[Element] = [self.root]

    def handle_starttag(self, tag: str, attrs: List[Attribute]) -> None:
        element = Element(tag=tag, attrs=list(attrs))
        self._stack[-1].children.append(element)
        if tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Attribute]) -> None:
        self._stack[-1].children.append(Element(tag=tag, attrs=list(attrs)))

    def handle_endtag(self, tag: str) -> None:
        if tag in VOID_ELEMENTS:
            return
        current = self._stack[-1]
        if current is self.root:
            raise MarkupError(f"unexpected closing tag </{tag}>")
        if current.tag != tag:
            raise MarkupError(f"closing tag </{tag}> does not match open <{current.tag}>")
        self._stack.pop()

    def handle_data(self, data: str) -> None:
        self._stack[-1].children.append(Text(data))

    def handle_comment(self, data: str) -> None:
        self._stack[-1].children.append(Comment(data))

    def finish(self) -> Element:
        self.close()
        if len(self._stack) > 1:
            raise MarkupError(f"element <{self._stack[-1].tag}> is never closed")
        return self.root


def parse_markup(source: str) -> Element:
    """Parse an HTML snippet into an element tree rooted at a ``#root`` node."""
    builder = _TreeBuilder()
    builder.feed(source)
    return builder.finish()


def clean_markup(root: Element) -> Element:
    """Drop empty and design-tool attributes in place."""
    for element in root.iter():
        cleaned: List[Attribute] = []
        seen: set[str] = set()
        for name, value in element.attrs:
            if name in seen or name in DROPPED_ATTRIBUTES:
                continue
            if name == "class" and value is not None:
                value = " ".join(value.split())
            if value == "" and name not in KEEP_EMPTY_ATTRIBUTES:
                continue
            seen.add(name)
            cleaned.append((name, value))
        element.attrs = cleaned
    return root


class MarkupFormatter:
    """Serialises markup with canonical indentation so output diffs stay stable."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def format(self, markup: str, *, transforms: Sequence[MarkupTransform] = ()) -> str:
        root = clean_markup(parse_markup(markup))
        for transform in transforms:
            transform(root)
        return self.serialize(root)

    def serialize(self, root: Element) -> str:
        lines: List[str] = []
        children = root.children if root.tag == "#root" else [root]
        for child in children:
            self._emit(child, 0, lines)
        return "\n".join(lines)

    def _emit(self, node: Node, depth: int, lines: List[str]) -> None:
        pad = " " * (self.indent * depth)
        if isinstance(node, Text):
            collapsed = _collapse(node.data).strip(" ")
            if collapsed:
                lines.append(pad + _escape_text(collapsed))
            return
        if isinstance(node, Comment):
            lines.append(f"{pad}<!-- {node.data.strip()} -->")
            return

        open_tag = _open_tag(node)
        if node.tag in VOID_ELEMENTS:
            lines.append(pad + open_tag)
            return
        close_tag = f"</{node.tag}>"
        if node.tag in RAW_TEXT_ELEMENTS:
            body = "".join(child.data for child in node.children if isinstance(child, Text))
            if not body.strip():
                lines.append(pad + open_tag + close_tag)
                return
            lines.append(pad + open_tag)
            lines.extend(self._raw_lines(body, " " * (self.indent * (depth + 1))))
            lines.append(pad + close_tag)
            return
        if _keeps_inline(node):
            inline = "".join(_inline(child) for child in node.children)
            lines.append(pad + open_tag + inline.strip(" ") + close_tag)
            return
        lines.append(pad + open_tag)
        for child in node.children:
            self._emit(child, depth + 1, lines)
        lines.append(pad + close_tag)

    @staticmethod
    def _raw_lines(data: str, pad: str) -> Iterable[str]:
        body = textwrap.dedent(data).strip("\n")
        return [(pad + line) if line.strip() else "" for line in body.splitlines()]


def _keeps_inline(element: Element) -> bool:
    """Text-only elements, and text mixed with phrasing elements, stay on one line.

    Breaking mixed content across lines would add visible spaces between a word
    and the markup around it.
    """
    if any(isinstance(child, Comment) for child in element.children):
        return False
    elements = [child for child in element.children if isinstance(child, Element)]
    if not elements:
        return True
    has_text = any(
        isinstance(child, Text) and _collapse(child.data).strip(" ")
        for child in element.children
    )
    return has_text and all(_is_phrasing(child) for child in elements)


def _is_phrasing(element: Element) -> bool:
    if element.tag not in PHRASING_ELEMENTS:
        return False
    return all(
        not isinstance(child, Element) or _is_phrasing(child) for child in element.children
    )


def _inline(node: Node) -> str:
    if isinstance(node, Text):
        return _escape_text(_collapse(node.data))
    if isinstance(node, Comment):
        return f"<!-- {node.data.strip()} -->"
    if node.tag in VOID_ELEMENTS:
        return _open_tag(node)
    inner = "".join(_inline(child) for child in node.children)
    return f"{_open_tag(node)}{inner}</{node.tag}>"


def _collapse(value: str) -> str:
    return _WHITESPACE.sub(" ", value)


def _open_tag(element: Element) -> str:
    parts = [element.tag]
    for name, value in element.attrs:
        if value is None:
            parts.append(name)
        else:
            parts.append(f'{name}="{_escape_attribute(value)}"')
    return "<" + " ".join(parts) + ">"


def _escape_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\xa0", "&nbsp;")
    )


def _escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


__all__ = [
    "Comment",
    "Element",
    "MarkupFormatter",
    "Text",
    "clean_markup",
    "parse_markup",
]
