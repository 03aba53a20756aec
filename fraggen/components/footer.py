"""Site footer: brand blurb, link columns, contact block and copyright."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ..models import choice, repeater, richtext, text, url
from ..templating import default_values
from .base import THEME_NAMES, render_template


def _links(*pairs: Tuple[str, str]) -> Tuple[Mapping[str, str], ...]:
    return tuple({"label": label, "href": href} for label, href in pairs)


PLACEHOLDERS = (
    text("brand_text", "Cellcolabs Clinical", label="Brand Text"),
    richtext(
        "brand_description",
        "World-leading stem cell research and clinical trials using GMP-certified, "
        "donor-derived mesenchymal stem cells.",
        label="Brand Description",
    ),
    repeater(
        "sections",
        (
            text("title", "Section Title"),
            repeater("links", (text("label", "Link"), url("href", "#"))),
        ),
        default=(
            {
                "title": "Product",
                "links": _links(
                    ("Stem cells", "#stem-cells"),
                    ("Trials", "#trials"),
                    ("Clinics", "#clinics"),
                    ("Consultation", "#consultation"),
                ),
            },
            {
                "title": "Company",
                "links": _links(
                    ("About", "#about"),
                    ("FAQ", "#faq"),
                    ("Partnerships", "#partnerships"),
                    ("Career", "#career"),
                    ("Privacy policy", "#privacy"),
                ),
            },
            {"title": "Support", "links": _links(("Contact us", "#contact"))},
            {
                "title": "Social",
                "links": _links(
                    ("Instagram", "#instagram"),
                    ("Facebook", "#facebook"),
                    ("LinkedIn", "#linkedin"),
                    ("LINE", "#line"),
                ),
            },
        ),
        label="Footer Sections",
    ),
    text("contact_title", "Contact", label="Contact Title"),
    richtext(
        "contact_address",
        "Registered office Dominion<br>House, 60 Montrose Avenue<br>"
        "P.O. Box N-9932<br>Nassau, New Providence, The Bahamas",
        label="Contact Address",
    ),
    text("copyright_text", "© 2025 Cellcolabs Clinical", label="Copyright Text"),
    choice("theme", "cellcolabsclinical", THEME_NAMES, label="Theme"),
)


@dataclass(frozen=True)
class FooterLink:
    label: str
    href: str


@dataclass(frozen=True)
class FooterSection:
    title: str
    links: Tuple[FooterLink, ...]

    @property
    def slug(self) -> str:
        return "-".join(self.title.lower().split())


@dataclass(frozen=True)
class FooterConfig:
    brand_text: str
    brand_description: str
    sections: Tuple[FooterSection, ...]
    contact_title: str
    contact_address: str
    copyright_text: str
    theme: str


def default_config() -> FooterConfig:
    return config_from_values(default_values(PLACEHOLDERS))


def config_from_values(values: Mapping[str, Any]) -> FooterConfig:
    return FooterConfig(
        brand_text=values["brand_text"],
        brand_description=values["brand_description"],
        sections=tuple(
            FooterSection(
                title=section["title"],
                links=tuple(
                    FooterLink(label=link["label"], href=link["href"]) for link in section["links"]
                ),
            )
            for section in values["sections"]
        ),
        contact_title=values["contact_title"],
        contact_address=values["contact_address"],
        copyright_text=values["copyright_text"],
        theme=values["theme"],
    )


def render(config: FooterConfig) -> str:
    return render_template("footer.html.j2", config=config)


def render_values(values: Mapping[str, Any]) -> str:
    return render(config_from_values(values))
