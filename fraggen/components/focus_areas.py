"""Image card grids: the four-up focus areas strip and the 2x2 card grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ..models import PlaceholderSpec, choice, image, repeater, text, url
from ..templating import default_values
from .base import THEME_NAMES, render_template

_CHEST_IMAGE = "https://via.placeholder.com/600x800?text=Chest"
_MUSCLE_IMAGE = "https://via.placeholder.com/600x800?text=Muscle"

_CARD_COPY = (
    (
        "Prevention in heart health",
        "Exploring how MSCs can lower the risk of cardiovascular disease.",
    ),
    (
        "Rediscovering ease in motion",
        "Studying how MSCs may support cartilage health and ease joint pain in osteoarthritis.",
    ),
    (
        "Strengthening joint & muscle",
        "Investigating how MSCs may aid recovery after injury and maintain musculoskeletal strength.",
    ),
    (
        "Staying active as you age",
        "Researching how MSCs could support performance and promote healthier lives as we grow older.",
    ),
)


def _placeholders(images: Tuple[str, ...]) -> Tuple[PlaceholderSpec, ...]:
    return (
        text("badge_text", "Focus areas", label="Badge Text"),
        text("link_text", "Learn more ↗", label="Link Text"),
        repeater(
            "cards",
            (
                text("title", "Card title"),
                text("description", "Card description"),
                image("image_url", _CHEST_IMAGE),
                url("link_url", "#"),
            ),
            default=tuple(
                {"title": title, "description": description, "image_url": image_url, "link_url": "#"}
                for (title, description), image_url in zip(_CARD_COPY, images)
            ),
            label="Cards",
        ),
        choice("theme", "cellcolabs", THEME_NAMES, label="Theme"),
    )


PLACEHOLDERS = _placeholders((_CHEST_IMAGE,) * 4)
GRID_PLACEHOLDERS = _placeholders((_MUSCLE_IMAGE, _MUSCLE_IMAGE, _CHEST_IMAGE, _CHEST_IMAGE))


@dataclass(frozen=True)
class ImageCard:
    title: str
    description: str
    image_url: str
    link_url: str


@dataclass(frozen=True)
class CardGridConfig:
    badge_text: str
    link_text: str
    cards: Tuple[ImageCard, ...]
    theme: str


def default_config() -> CardGridConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def default_grid_config() -> CardGridConfig:
    return config_from_values(default_values(GRID_PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> CardGridConfig:
    return CardGridConfig(
        badge_text=values["badge_text"],
        link_text=values["link_text"],
        cards=tuple(
            ImageCard(
                title=card["title"],
                description=card["description"],
                image_url=card["image_url"],
                link_url=card["link_url"],
            )
            for card in values["cards"]
        ),
        theme=values["theme"],
    )


def render(
    config: CardGridConfig, *, component: str = "focus-areas", root_class: str = "focusAreas"
) -> str:
    return render_template(
        "card_grid.html.j2", config=config, component=component, root_class=root_class
    )


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))


def render_grid_values(values: Mapping[str, Any]) -> str:
    return render(
        config_from_values(values),
        component="grid-2x2-card-image",
        root_class="grid2x2CardImage",
    )
