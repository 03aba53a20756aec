"""Component-scoped class names for stylesheets and markup.

Local class selectors ``.name`` become ``.{component_id}__name`` so several
fragments can share one host page. ``:global(...)`` wrappers are unwrapped and
their contents left untouched.

Unwrapped globals look like any other class afterwards, so a rewritten
stylesheet starts with a ``/* fraggen:namespaced:<id> */`` comment and
``transform`` returns marked input unchanged. Markup class tokens that already
carry the component prefix are skipped.
"""

from __future__ import annotations

import re
from typing import Callable, List

from .markup import Element

_IDENT_START = re.compile(r"[A-Za-z_-]")
_IDENT = re.compile(r"-?[A-Za-z_][A-Za-z0-9_-]*")
_GLOBAL = ":global("
NAMESPACED_MARKER = "/* fraggen:namespaced:{component_id} */"


def class_prefix(component_id: str) -> str:
    return f"{component_id}__"


def namespace_class(name: str, component_id: str) -> str:
    prefix = class_prefix(component_id)
    if name.startswith(prefix):
        return name
    return prefix + name


class StyleNamespacer:
    """Rewrites class selectors in a stylesheet without a full CSS parse.

    The scanner tracks only what it needs: comments and strings are copied
    verbatim, text before ``{`` is a prelude (rewritten unless it starts an
    at-rule), and everything ended by ``;`` or ``}`` is declarations.
    """

    def __init__(self, component_id: str) -> None:
        self.component_id = component_id
        self.marker = NAMESPACED_MARKER.format(component_id=component_id)

    def transform(self, css: str) -> str:
        """Namespace ``css`` once; already-marked stylesheets come back as is."""
        if css.lstrip().startswith(self.marker):
            return css
        return self.marker + "\n" + self.rewrite(css)

    def rewrite(self, css: str) -> str:
        output: List[str] = []
        pending: List[str] = []
        index = 0
        length = len(css)
        while index < length:
            char = css[index]
            if css.startswith("/*", index):
                end = css.find("*/", index + 2)
                end = length if end == -1 else end + 2
                pending.append(css[index:end])
                index = end
                continue
            if char in {'"', "'"}:
                end = _string_end(css, index)
                pending.append(css[index:end])
                index = end
                continue
            if char == "{":
                prelude = "".join(pending)
                pending = []
                if prelude.lstrip().startswith("@"):
                    output.append(prelude)
                else:
                    output.append(self.rewrite_selector(prelude))
                output.append(char)
            elif char in {";", "}"}:
                output.append("".join(pending))
                pending = []
                output.append(char)
            else:
                pending.append(char)
            index += 1
        output.append("".join(pending))
        return "".join(output)

    def rewrite_selector(self, selector: str) -> str:
        """Prefix every class in a selector (list), unwrapping ``:global()``."""
        output: List[str] = []
        index = 0
        length = len(selector)
        while index < length:
            char = selector[index]
            if selector.startswith("/*", index):
                end = selector.find("*/", index + 2)
                end = length if end == -1 else end + 2
                output.append(selector[index:end])
                index = end
            elif selector.startswith(_GLOBAL, index):
                close = _matching_paren(selector, index + len(_GLOBAL) - 1)
                output.append(selector[index + len(_GLOBAL) : close])
                index = close + 1
            elif char == "[":
                close = _attribute_end(selector, index)
                output.append(selector[index:close])
                index = close
            elif char in {'"', "'"}:
                end = _string_end(selector, index)
                output.append(selector[index:end])
                index = end
            elif char == "." and index + 1 < length and _IDENT_START.match(selector[index + 1]):
                match = _IDENT.match(selector, index + 1)
                if match is None:
                    output.append(char)
                    index += 1
                    continue
                output.append("." + namespace_class(match.group(0), self.component_id))
                index = match.end()
            else:
                output.append(char)
                index += 1
        return "".join(output)


def namespace_stylesheet(css: str, component_id: str) -> str:
    return StyleNamespacer(component_id).transform(css)


def markup_class_namespacer(component_id: str) -> Callable[[Element], None]:
    """Return a markup transform that prefixes ``class`` tokens in place."""

    def _transform(root: Element) -> None:
        for element in root.iter():
            if not element.attrs:
                continue
            rewritten = []
            for name, value in element.attrs:
                if name == "class" and value:
                    value = " ".join(
                        namespace_class(token, component_id) for token in value.split()
                    )
                rewritten.append((name, value))
            element.attrs = rewritten

    return _transform


def _string_end(text: str, start: int) -> int:
    quote = text[start]
    index = start + 1
    while index < len(text):
        if text[index] == "\\":
            index += 2
            continue
        if text[index] == quote:
            return index + 1
        index += 1
    return len(text)


def _matching_paren(text: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return len(text) - 1


def _attribute_end(text: str, start: int) -> int:
    index = start + 1
    while index < len(text):
        char = text[index]
        if char in {'"', "'"}:
            index = _string_end(text, index)
            continue
        if char == "]":
            return index + 1
        index += 1
    return len(text)


__all__ = [
    "NAMESPACED_MARKER",
    "StyleNamespacer",
    "class_prefix",
    "markup_class_namespacer",
    "namespace_class",
    "namespace_stylesheet",
]
