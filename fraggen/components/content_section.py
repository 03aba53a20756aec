"""Titled section with a grid of image cards that expand on "Read more"."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ..models import choice, image, repeater, richtext, text
from ..templating import default_values
from .base import THEME_NAMES, render_template

_PLACEHOLDER_IMAGE = "https://via.placeholder.com/343x228"

PLACEHOLDERS = (
    text("title", "Our clinical research programs", label="Section Title"),
    richtext(
        "subtitle",
        "We conduct patient-funded clinical trials exploring stem cell treatments with "
        "potential to protect your heart, restore mobility, and support healthy aging.",
        label="Section Subtitle",
    ),
    repeater(
        "cards",
        (
            text("headline", "Headline"),
            richtext("description", "Description text..."),
            image("image_url", _PLACEHOLDER_IMAGE),
            text("image_alt", "Image description"),
        ),
        default=(
            {
                "headline": "Headline",
                "description": "If the trial is a good fit, you'll receive an offer with the "
                "participation details. Once you're ready, a date is booked and arrangements confirmed.",
                "image_alt": "Clinical research image",
            },
            {
                "headline": "Headline",
                "description": "Begin with a simple sign-up online. This allows us to share more "
                "information and see if a trial may be right for you.",
                "image_alt": "Clinical research image",
            },
            {
                "headline": "Headline",
                "description": "If the trial is a good fit, you'll receive an offer with the "
                "participation details. Once you're ready, a date is booked and arrangements confirmed.",
                "image_alt": "Clinical research image",
            },
        ),
        label="Content Cards",
    ),
    choice("theme", "cellcolabs", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class ContentCard:
    headline: str
    description: str
    image_url: str
    image_alt: str


@dataclass(frozen=True)
class ContentSectionConfig:
    title: str
    subtitle: str
    cards: Tuple[ContentCard, ...]
    theme: str


def default_config() -> ContentSectionConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> ContentSectionConfig:
    return ContentSectionConfig(
        title=values["title"],
        subtitle=values["subtitle"],
        cards=tuple(
            ContentCard(
                headline=card["headline"],
                description=card["description"],
                image_url=card["image_url"],
                image_alt=card["image_alt"],
            )
            for card in values["cards"]
        ),
        theme=values["theme"],
    )


def render(config: ContentSectionConfig) -> str:
    return render_template("content_section.html.j2", config=config)


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))
