"""Statically declared component descriptors.

Navigation, content section, footer and button ship hand-authored templates
so the host sees ``{{token}}`` placeholders; the other components are rendered
live from the component layer. Templates use local class names, which the
renderer namespaces together with the stylesheet.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from .components import (
    button,
    content_section,
    focus_areas,
    footer,
    hero_block,
    locations_carousel,
    navigation,
    why_us,
)
from .models import ComponentDescriptor, LiveRender, PlaceholderSpec
from .registry import ComponentRegistry

_TOGGLE_DOTS = "\n".join('          <span class="dot"></span>' for _ in range(15))

NAVIGATION_TEMPLATE = f"""\
<nav class="navigation" data-component="navigation" data-theme="{{{{theme}}}}">
  <div class="container">
    <div class="content">
      <div class="brand" data-placeholder="brand_text">
        <span class="brandText">{{{{brand_text}}}}</span>
      </div>
      <button class="mobileToggle" type="button" aria-label="Toggle menu" aria-expanded="false">
        <div class="dotsGrid">
{_TOGGLE_DOTS}
        </div>
      </button>
      <ul class="menu" data-placeholder="menu_items">
        {{{{#menu_items}}}}
        <li class="menuItem">
          <a href="{{{{href}}}}" class="menuLink">{{{{label}}}}</a>
        </li>
        {{{{/menu_items}}}}
      </ul>
    </div>
  </div>
</nav>
"""

CONTENT_SECTION_TEMPLATE = """\
<section class="contentSection" data-component="content-section" data-theme="{{theme}}">
  <div class="container">
    <div class="header">
      <h2 class="title" data-placeholder="title">{{title}}</h2>
      <p class="subtitle" data-placeholder="subtitle">{{subtitle}}</p>
    </div>
    <div class="cardsGrid" data-placeholder="cards">
      {{#cards}}
      <div class="card">
        <div class="cardImage">
          <img src="{{image_url}}" alt="{{image_alt}}">
        </div>
        <div class="cardContent">
          <div class="cardTextContent">
            <h3 class="cardHeadline">{{headline}}</h3>
            <p class="cardDescription">{{description}}</p>
          </div>
          <button class="readMoreButton" type="button" data-expand="false">Read more</button>
        </div>
      </div>
      {{/cards}}
    </div>
  </div>
</section>
"""

FOOTER_TEMPLATE = """\
<footer class="footer" data-component="footer" data-theme="{{theme}}">
  <div class="container">
    <div class="content">
      <div class="mobileBrandSection">
        <h2 class="brandTitle" data-placeholder="brand_text">{{brand_text}}</h2>
        <p class="brandDescription" data-placeholder="brand_description">{{brand_description}}</p>
      </div>
      <div class="desktopLogo">
        <span class="logoText">cell</span>
        <span class="logoText">colabs</span>
        <span class="logoSubtext">CLINICAL</span>
      </div>
      <div class="sectionsGrid" data-placeholder="sections">
        {{#sections}}
        <div class="section">
          <h3 class="sectionTitle">{{title}}</h3>
          <ul class="sectionLinks">
            {{#links}}
            <li><a href="{{href}}" class="link">{{label}}</a></li>
            {{/links}}
          </ul>
        </div>
        {{/sections}}
      </div>
      <div class="mobileContactSection">
        <h3 class="contactTitle" data-placeholder="contact_title">{{contact_title}}</h3>
        <address class="address" data-placeholder="contact_address">{{contact_address}}</address>
      </div>
      <div class="copyright" data-placeholder="copyright_text">{{copyright_text}}</div>
    </div>
  </div>
</footer>
"""

BUTTON_TEMPLATE = """\
<div class="buttonWrapper align-{{alignment}}" data-component="button" data-theme="{{theme}}">
  <a href="{{url}}" class="button button-{{style}} button-{{size}}" target="_self" data-new-tab="{{open_in_new_tab}}" data-placeholder="text">{{text}}</a>
</div>
"""


def _static(
    id: str,
    name: str,
    stylesheet: Optional[str],
    placeholders: Sequence[PlaceholderSpec],
    template: str,
) -> ComponentDescriptor:
    return ComponentDescriptor(
        id=id,
        name=name,
        stylesheet=stylesheet,
        placeholders=tuple(placeholders),
        template=template,
    )


def _live(
    id: str,
    name: str,
    stylesheet: Optional[str],
    placeholders: Sequence[PlaceholderSpec],
    render: LiveRender,
) -> ComponentDescriptor:
    return ComponentDescriptor(
        id=id,
        name=name,
        stylesheet=stylesheet,
        placeholders=tuple(placeholders),
        render=render,
    )


def live_descriptors() -> List[ComponentDescriptor]:
    """Every component rendered through the component layer, in build order."""
    return [
        _live(
            "navigation",
            "Navigation",
            "Navigation.module.css",
            navigation.PLACEHOLDERS,
            navigation.render_values,
        ),
        _live(
            "hero-block",
            "Hero Block",
            "HeroBlock.module.css",
            hero_block.PLACEHOLDERS,
            hero_block.render_values,
        ),
        _live(
            "content-section",
            "Content Section",
            "ContentSection.module.css",
            content_section.PLACEHOLDERS,
            content_section.render_values,
        ),
        _live(
            "focus-areas",
            "Focus Areas",
            "FocusAreas.module.css",
            focus_areas.PLACEHOLDERS,
            focus_areas.render_values,
        ),
        _live(
            "grid-2x2-card-image",
            "Grid 2x2 Card Image",
            "Grid2x2CardImage.module.css",
            focus_areas.GRID_PLACEHOLDERS,
            focus_areas.render_grid_values,
        ),
        _live(
            "why-us-section",
            "Why Us Section",
            "WhyUsSection.module.css",
            why_us.PLACEHOLDERS,
            why_us.render_values,
        ),
        _live(
            "locations-carousel",
            "Locations Carousel",
            "LocationsCarousel.module.css",
            locations_carousel.PLACEHOLDERS,
            locations_carousel.render_values,
        ),
        _live(
            "button",
            "Button",
            "Button.module.css",
            button.PLACEHOLDERS,
            button.render_values,
        ),
        _live(
            "button-multi-variant",
            "Button Multi Variant",
            "Button.module.css",
            button.PLACEHOLDERS,
            button.render_multi_variant_values,
        ),
        _live(
            "footer",
            "Footer",
            "Footer.module.css",
            footer.PLACEHOLDERS,
            footer.render_values,
        ),
    ]


_STATIC_TEMPLATES: Dict[str, str] = {
    "navigation": NAVIGATION_TEMPLATE,
    "content-section": CONTENT_SECTION_TEMPLATE,
    "footer": FOOTER_TEMPLATE,
    "button": BUTTON_TEMPLATE,
}


def mixed_descriptors() -> List[ComponentDescriptor]:
    """Live descriptors with the hand-authored templates swapped in where they exist."""
    descriptors = []
    for descriptor in live_descriptors():
        template = _STATIC_TEMPLATES.get(descriptor.id)
        if template is None:
            descriptors.append(descriptor)
        else:
            descriptors.append(
                _static(
                    descriptor.id,
                    descriptor.name,
                    descriptor.stylesheet,
                    descriptor.placeholders,
                    template,
                )
            )
    return descriptors


def default_registry() -> ComponentRegistry:
    return ComponentRegistry(mixed_descriptors())


def live_registry() -> ComponentRegistry:
    return ComponentRegistry(live_descriptors())


REGISTRY_FACTORIES: Dict[str, Callable[[], ComponentRegistry]] = {
    "mixed": default_registry,
    "live": live_registry,
}


def registry_for(strategy: str) -> ComponentRegistry:
    try:
        factory = REGISTRY_FACTORIES[strategy]
    except KeyError as exc:
        raise ValueError(f"unknown render strategy '{strategy}'") from exc
    return factory()


__all__ = [
    "BUTTON_TEMPLATE",
    "CONTENT_SECTION_TEMPLATE",
    "FOOTER_TEMPLATE",
    "NAVIGATION_TEMPLATE",
    "default_registry",
    "live_descriptors",
    "live_registry",
    "mixed_descriptors",
    "registry_for",
]
