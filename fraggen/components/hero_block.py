"""Two-column hero with heading, body copy, call to action and image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import choice, image, richtext, text, url
from ..templating import default_values
from .base import THEME_NAMES, class_names, render_template

PLACEHOLDERS = (
    text("heading", "Transform Healthcare with Advanced Cell Therapy", label="Heading"),
    richtext(
        "body_text",
        "Discover cutting-edge cellular treatments that are revolutionizing patient care. "
        "Our innovative therapies offer new hope for challenging medical conditions.",
        label="Body Text",
    ),
    text("cta_text", "Learn More", label="Button Text"),
    url("cta_url", "#learn-more", label="Button URL"),
    image("image_url", "https://via.placeholder.com/600x400", label="Image"),
    text("image_alt", "Cell therapy illustration", label="Image Description"),
    choice("image_position", "right", ("left", "right"), label="Image Position"),
    choice("theme", "cellcolabs", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class HeroBlockConfig:
    heading: str
    body_text: str
    cta_text: str
    cta_url: str
    image_url: str
    image_alt: str
    image_position: str
    theme: str

    @property
    def root_class(self) -> str:
        position = "imageLeft" if self.image_position == "left" else "imageRight"
        return class_names(["heroBlock", position])


def default_config() -> HeroBlockConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> HeroBlockConfig:
    return HeroBlockConfig(
        heading=values["heading"],
        body_text=values["body_text"],
        cta_text=values["cta_text"],
        cta_url=values["cta_url"],
        image_url=values["image_url"],
        image_alt=values["image_alt"],
        image_position=values["image_position"],
        theme=values["theme"],
    )


def render(config: HeroBlockConfig) -> str:
    return render_template("hero_block.html.j2", config=config)


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))
