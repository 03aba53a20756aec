"""Call-to-action button in several styles, sizes and alignments.

``button-multi-variant`` renders the same markup under its own component id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..models import boolean, choice, text, url
from ..templating import default_values
from .base import THEME_NAMES, class_names, render_template

STYLES = ("primary", "secondary", "outline", "outline-white")
SIZES = ("small", "default", "large")
ALIGNMENTS = ("left", "center", "right")

PLACEHOLDERS = (
    text("text", "Click here", label="Button Text"),
    url("url", "#", label="Button URL"),
    choice("style", "primary", STYLES, label="Button Style"),
    choice("size", "default", SIZES, label="Button Size"),
    choice("alignment", "left", ALIGNMENTS, label="Button Alignment"),
    boolean("open_in_new_tab", False, label="Open in new tab"),
    choice("theme", "cellcolabsclinical", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class ButtonConfig:
    text: str
    url: str
    style: str
    size: str
    alignment: str
    open_in_new_tab: bool
    theme: str

    @property
    def wrapper_class(self) -> str:
        return class_names(["buttonWrapper", f"align-{self.alignment}"])

    @property
    def button_class(self) -> str:
        return class_names(["button", f"button-{self.style}", f"button-{self.size}"])

    @property
    def target(self) -> str:
        return "_blank" if self.open_in_new_tab else "_self"

    @property
    def rel(self) -> Optional[str]:
        return "noopener noreferrer" if self.open_in_new_tab else None


def default_config() -> ButtonConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> ButtonConfig:
    return ButtonConfig(
        text=values["text"],
        url=values["url"],
        style=values["style"],
        size=values["size"],
        alignment=values["alignment"],
        open_in_new_tab=values["open_in_new_tab"],
        theme=values["theme"],
    )


def render(config: ButtonConfig, *, component: str = "button") -> str:
    return render_template("button.html.j2", config=config, component=component)


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))


def render_multi_variant_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values), component="button-multi-variant")
