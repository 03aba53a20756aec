"""Checklist of reasons to choose the clinic, laid out for desktop and mobile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ..models import choice, repeater, text
from ..templating import default_values
from .base import THEME_NAMES, render_template

PLACEHOLDERS = (
    text("title", "Excellence in every cell", label="Title"),
    repeater(
        "items",
        (text("title", "Item title"), text("description", "Item description")),
        default=(
            {
                "title": "Highest quality stem cells",
                "description": "GMP-certified and produced under the world's strictest safety standards.",
            },
            {
                "title": "Personal health insights",
                "description": "In-depth biomarker testing gives you a clearer picture of your body and wellbeing.",
            },
            {
                "title": "Continuous health monitoring",
                "description": "We follow your progress closely, supporting you throughout the journey.",
            },
            {
                "title": "Expert medical care",
                "description": "A dedicated team of experienced doctors by your side.",
            },
        ),
        label="Items",
    ),
    choice("theme", "cellcolabsclinical", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class WhyUsItem:
    title: str
    description: str


@dataclass(frozen=True)
class WhyUsConfig:
    title: str
    items: Tuple[WhyUsItem, ...]
    theme: str


def default_config() -> WhyUsConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> WhyUsConfig:
    return WhyUsConfig(
        title=values["title"],
        items=tuple(
            WhyUsItem(title=item["title"], description=item["description"])
            for item in values["items"]
        ),
        theme=values["theme"],
    )


def render(config: WhyUsConfig) -> str:
    return render_template("why_us.html.j2", config=config)


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))
