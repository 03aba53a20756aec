"""Tabbed image carousel presenting the clinic locations.

The first location is active in the static markup; the shared fragment script
switches tabs, slides, progress dots and the description panel on click.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ..models import choice, image, repeater, richtext, text, url
from ..templating import default_values
from .base import THEME_NAMES, render_template

PLACEHOLDERS = (
    text("eyebrow_text", "Locations", label="Eyebrow Text"),
    text("main_title", "Stem cell therapy\nin the Bahamas", label="Main Title"),
    richtext(
        "main_description",
        "At Cellcolabs Clinical, we conduct our patient-funded clinical trials in the Bahamas, "
        "a destination recognized both for tourism and for its role as a hub of regenerative "
        "medicine. All trials are approved by the Bahamas National Stem Cell Ethics Committee "
        "and carried out by experienced local physicians, ensuring both safety and expertise.",
        label="Main Description",
    ),
    repeater(
        "locations",
        (
            text("name", "Location"),
            text("title", "Location title"),
            richtext("description", "Location description"),
            image("image_url", "https://via.placeholder.com/1136x638"),
            text("image_alt", "Location image"),
            text("link_text", "Learn more ↗"),
            url("link_url", "#"),
        ),
        default=(
            {
                "name": "Cellcolabs by Live Well",
                "title": "Cellcolabs by Live Well",
                "description": "Our clinic at The Albany resort is designed to make every participant "
                "feel cared for in a calm and private environment. Situated within The Albany, one of "
                "Nassau's most renowned resort communities, the clinic is surrounded by nearby "
                "accommodations, wellness amenities, and convenient travel access.",
                "image_url": "https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=1136&h=638&fit=crop",
                "image_alt": "Cellcolabs by Live Well clinic interior",
                "link_text": "Get directions ↗",
                "link_url": "#",
            },
            {
                "name": "The Albany Resort",
                "title": "The Albany Resort",
                "description": "Experience world-class facilities at The Albany Resort, featuring "
                "state-of-the-art medical equipment and luxurious accommodations. Our partnership "
                "with this premier destination ensures you receive exceptional care in an "
                "unparalleled setting.",
                "image_url": "https://images.unsplash.com/photo-1584132967334-10e028bd69f7?w=1136&h=638&fit=crop",
                "image_alt": "The Albany Resort facilities",
                "link_text": "Learn more ↗",
                "link_url": "#",
            },
        ),
        label="Locations",
    ),
    choice("theme", "cellcolabsclinical", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class Location:
    name: str
    title: str
    description: str
    image_url: str
    image_alt: str
    link_text: str
    link_url: str


@dataclass(frozen=True)
class LocationsCarouselConfig:
    eyebrow_text: str
    main_title: str
    main_description: str
    locations: Tuple[Location, ...]
    theme: str

    @property
    def title_lines(self) -> Tuple[str, ...]:
        return tuple(self.main_title.splitlines())


def default_config() -> LocationsCarouselConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> LocationsCarouselConfig:
    return LocationsCarouselConfig(
        eyebrow_text=values["eyebrow_text"],
        main_title=values["main_title"],
        main_description=values["main_description"],
        locations=tuple(
            Location(
                name=item["name"],
                title=item["title"],
                description=item["description"],
                image_url=item["image_url"],
                image_alt=item["image_alt"],
                link_text=item["link_text"],
                link_url=item["link_url"],
            )
            for item in values["locations"]
        ),
        theme=values["theme"],
    )


def render(config: LocationsCarouselConfig, *, active_index: int = 0) -> str:
    return render_template(
        "locations_carousel.html.j2", config=config, active_index=active_index
    )


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))
