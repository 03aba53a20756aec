"""Site navigation bar with brand mark, menu links and a mobile toggle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ..models import choice, repeater, text, url
from ..templating import default_values
from .base import THEME_NAMES, render_template

PLACEHOLDERS = (
    text("brand_text", "Cellcolabs Clinical", label="Brand Text"),
    repeater(
        "menu_items",
        (
            text("label", "Menu Item"),
            url("href", "#"),
        ),
        default=(
            {"label": "Treatments", "href": "#treatments"},
            {"label": "About", "href": "#about"},
            {"label": "Partners", "href": "#partners"},
            {"label": "Contact", "href": "#contact"},
        ),
        label="Menu Items",
    ),
    choice("theme", "cellcolabs", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class MenuItem:
    label: str
    href: str


@dataclass(frozen=True)
class NavigationConfig:
    brand_text: str
    menu_items: Tuple[MenuItem, ...]
    theme: str

    @property
    def brand_parts(self) -> Tuple[str, str]:
        """Split the brand into its bold first word and the regular remainder."""
        bold, _, regular = self.brand_text.partition(" ")
        return bold, regular


def default_config() -> NavigationConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> NavigationConfig:
    return NavigationConfig(
        brand_text=values["brand_text"],
        menu_items=tuple(
            MenuItem(label=item["label"], href=item["href"]) for item in values["menu_items"]
        ),
        theme=values["theme"],
    )


def render(config: NavigationConfig) -> str:
    return render_template("navigation.html.j2", config=config, toggle_dots=15)


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))
