"""Theme tokens and their projection onto CSS custom properties.

The nested schema (``colors.text.primary`` and friends) is canonical. Files in
the older flat-token layout (``{"name": ..., "tokens": {"color-primary": ...}}``)
are accepted by :func:`load_theme_file` and converted on import only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, is_dataclass, replace
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, get_type_hints

from ..errors import ThemeError

_DATA_DIR = Path(__file__).with_name("data")


class ThemeName(str, Enum):
    CELLCOLABS = "cellcolabs"
    CELLCOLABS_CLINICAL = "cellcolabsclinical"

    @classmethod
    def parse(cls, value: "str | ThemeName") -> "ThemeName":
        try:
            return cls(value)
        except ValueError as exc:
            options = ", ".join(member.value for member in cls)
            raise ThemeError(f"unknown theme '{value}' (expected one of: {options})") from exc


THEME_NAMES: Tuple[str, ...] = tuple(member.value for member in ThemeName)


@dataclass(frozen=True)
class TextColors:
    primary: str
    secondary: str
    inverse: str


@dataclass(frozen=True)
class BackgroundColors:
    primary: str
    secondary: str
    section: str
    dark: str


@dataclass(frozen=True)
class BorderColors:
    light: str
    medium: str


@dataclass(frozen=True)
class Colors:
    primary: str
    secondary: str
    accent: str
    text: TextColors
    background: BackgroundColors
    border: BorderColors


@dataclass(frozen=True)
class FontFamily:
    heading: str
    body: str


@dataclass(frozen=True)
class FontScale:
    h1: str
    h2: str
    h3: str
    body: str
    small: str


@dataclass(frozen=True)
class FontSize:
    mobile: FontScale
    desktop: FontScale


@dataclass(frozen=True)
class FontWeight:
    regular: str
    medium: str
    bold: str


@dataclass(frozen=True)
class LineHeight:
    tight: str
    normal: str
    relaxed: str


@dataclass(frozen=True)
class Typography:
    font_family: FontFamily
    font_size: FontSize
    font_weight: FontWeight
    line_height: LineHeight


@dataclass(frozen=True)
class ContainerPadding:
    mobile: str
    tablet: str
    desktop: str


@dataclass(frozen=True)
class Spacing:
    unit: str
    xs: str
    sm: str
    md: str
    lg: str
    xl: str
    xxl: str
    container_padding: ContainerPadding


@dataclass(frozen=True)
class Breakpoints:
    mobile: str
    tablet: str
    desktop: str
    wide: str


@dataclass(frozen=True)
class BorderRadius:
    sm: str
    md: str
    lg: str
    full: str


@dataclass(frozen=True)
class Shadows:
    sm: str
    md: str
    lg: str


@dataclass(frozen=True)
class Theme:
    """Immutable design tokens for one brand theme."""

    name: str
    colors: Colors
    typography: Typography
    spacing: Spacing
    breakpoints: Breakpoints
    border_radius: BorderRadius
    shadows: Shadows


# CSS custom property -> attribute path on Theme. The flat legacy token names
# are the same names without the leading dashes.
CSS_VARIABLES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("--color-primary", ("colors", "primary")),
    ("--color-secondary", ("colors", "secondary")),
    ("--color-accent", ("colors", "accent")),
    ("--color-text-primary", ("colors", "text", "primary")),
    ("--color-text-secondary", ("colors", "text", "secondary")),
    ("--color-text-inverse", ("colors", "text", "inverse")),
    ("--color-bg-primary", ("colors", "background", "primary")),
    ("--color-bg-secondary", ("colors", "background", "secondary")),
    ("--color-bg-section", ("colors", "background", "section")),
    ("--color-bg-dark", ("colors", "background", "dark")),
    ("--color-border-light", ("colors", "border", "light")),
    ("--color-border-medium", ("colors", "border", "medium")),
    ("--font-heading", ("typography", "font_family", "heading")),
    ("--font-body", ("typography", "font_family", "body")),
    ("--font-weight-regular", ("typography", "font_weight", "regular")),
    ("--font-weight-medium", ("typography", "font_weight", "medium")),
    ("--font-weight-bold", ("typography", "font_weight", "bold")),
    ("--spacing-xs", ("spacing", "xs")),
    ("--spacing-sm", ("spacing", "sm")),
    ("--spacing-md", ("spacing", "md")),
    ("--spacing-lg", ("spacing", "lg")),
    ("--spacing-xl", ("spacing", "xl")),
    ("--spacing-xxl", ("spacing", "xxl")),
    ("--radius-sm", ("border_radius", "sm")),
    ("--radius-md", ("border_radius", "md")),
    ("--radius-lg", ("border_radius", "lg")),
    ("--radius-full", ("border_radius", "full")),
    ("--shadow-sm", ("shadows", "sm")),
    ("--shadow-md", ("shadows", "md")),
    ("--shadow-lg", ("shadows", "lg")),
    ("--breakpoint-tablet", ("breakpoints", "tablet")),
    ("--breakpoint-desktop", ("breakpoints", "desktop")),
    ("--breakpoint-wide", ("breakpoints", "wide")),
)


@lru_cache(maxsize=None)
def load_theme(name: "str | ThemeName") -> Theme:
    """Load one of the bundled themes by name."""
    theme_name = ThemeName.parse(name)
    return load_theme_file(_DATA_DIR / f"{theme_name.value}.json")


def load_theme_file(path: Path, *, base: Optional[Theme] = None) -> Theme:
    """Load a theme JSON file in either the nested or the legacy flat layout."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ThemeError(f"theme file not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ThemeError(f"failed to read theme {path.name}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ThemeError(f"{path.name} must contain a JSON object")
    if isinstance(payload.get("tokens"), dict):
        return theme_from_flat_tokens(payload, base=base or load_theme(ThemeName.CELLCOLABS))
    return theme_from_dict(payload)


def theme_from_dict(payload: Mapping[str, Any]) -> Theme:
    """Build a Theme from the canonical nested JSON layout."""
    return _build(Theme, payload, ())


def theme_from_flat_tokens(payload: Mapping[str, Any], *, base: Theme) -> Theme:
    """Convert a legacy flat-token theme, taking unmapped tokens from ``base``."""
    tokens = payload.get("tokens")
    if not isinstance(tokens, Mapping):
        raise ThemeError("flat theme must define a 'tokens' object")
    paths = {variable.lstrip("-"): path for variable, path in CSS_VARIABLES}
    theme = base
    for token, value in tokens.items():
        path = paths.get(str(token))
        if path is None:
            raise ThemeError(f"unknown theme token '{token}'")
        theme = _replace_path(theme, path, str(value))
    name = payload.get("name")
    if isinstance(name, str) and name:
        theme = replace(theme, name=name)
    return theme


def theme_variables(theme: Theme) -> Dict[str, str]:
    """Flatten a theme onto the CSS custom properties fragments consume."""
    return {variable: _resolve(theme, path) for variable, path in CSS_VARIABLES}


def theme_stylesheet(
    default: "str | ThemeName",
    others: Iterable["str | ThemeName"] = (),
    *,
    loader=None,
) -> str:
    """Return the variable block prepended to fragment stylesheets.

    The default theme is declared on ``:root``; every other theme is scoped to
    ``[data-theme="<name>"]`` so a component's ``data-theme`` attribute selects it.
    """
    load = loader or load_theme
    default_name = ThemeName.parse(default)
    blocks: List[str] = [
        "/* Theme variables - the host page may override these */",
        _declaration_block(":root", theme_variables(load(default_name))),
    ]
    for other in others:
        name = ThemeName.parse(other)
        if name is default_name:
            continue
        selector = f'[data-theme="{name.value}"]'
        blocks.append(_declaration_block(selector, theme_variables(load(name))))
    return "\n\n".join(blocks) + "\n"


def _declaration_block(selector: str, variables: Mapping[str, str]) -> str:
    lines = [f"{selector} {{"]
    lines.extend(f"  {name}: {value};" for name, value in variables.items())
    lines.append("}")
    return "\n".join(lines)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _build(cls: type, payload: Any, path: Tuple[str, ...]) -> Any:
    where = ".".join(path) or "theme"
    if not isinstance(payload, Mapping):
        raise ThemeError(f"{where} must be an object")
    hints = get_type_hints(cls)
    values: Dict[str, Any] = {}
    for item in fields(cls):
        key = _camel(item.name)
        if key not in payload:
            raise ThemeError(f"{where} is missing '{key}'")
        hint = hints[item.name]
        if is_dataclass(hint):
            values[item.name] = _build(hint, payload[key], path + (key,))
        else:
            value = payload[key]
            if not isinstance(value, (str, int, float)):
                raise ThemeError(f"{where}.{key} must be a string")
            values[item.name] = str(value)
    return cls(**values)


def _resolve(theme: Any, path: Tuple[str, ...]) -> str:
    value = theme
    for part in path:
        value = getattr(value, part)
    return value


def _replace_path(node: Any, path: Tuple[str, ...], value: str) -> Any:
    head, *rest = path
    if not rest:
        return replace(node, **{head: value})
    return replace(node, **{head: _replace_path(getattr(node, head), tuple(rest), value)})


__all__ = [
    "CSS_VARIABLES",
    "THEME_NAMES",
    "Theme",
    "ThemeName",
    "load_theme",
    "load_theme_file",
    "theme_from_dict",
    "theme_from_flat_tokens",
    "theme_stylesheet",
    "theme_variables",
]
