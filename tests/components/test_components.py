"""Tests for the Jinja2 component layer."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List

import pytest

from fraggen.components import (
    button,
    content_section,
    focus_areas,
    footer,
    hero_block,
    locations_carousel,
    navigation,
    why_us,
)
from fraggen.components.navigation import MenuItem
from fraggen.postproc.markup import Element, parse_markup
from fraggen.templating import default_values


def _by_class(root: Element, name: str) -> List[Element]:
    return root.find_all(lambda element: name in element.classes)


@pytest.mark.parametrize(
    "render",
    [
        lambda: navigation.render(navigation.default_config()),
        lambda: footer.render(footer.default_config()),
        lambda: content_section.render(content_section.default_config()),
        lambda: hero_block.render(hero_block.default_config()),
        lambda: button.render(button.default_config()),
        lambda: focus_areas.render(focus_areas.default_config()),
        lambda: focus_areas.render_grid_values(default_values(focus_areas.GRID_PLACEHOLDERS)),
        lambda: why_us.render(why_us.default_config()),
        lambda: locations_carousel.render(locations_carousel.default_config()),
    ],
)
def test_default_render_is_well_formed_and_deterministic(render: Callable[[], str]) -> None:
    first = render()
    assert parse_markup(first).children
    assert render() == first
    assert "onclick" not in first


def test_navigation_splits_brand_and_lists_menu_items_in_order() -> None:
    config = replace(
        navigation.default_config(),
        menu_items=(MenuItem("Home", "/"), MenuItem("Blog", "/blog")),
    )

    root = parse_markup(navigation.render(config))

    assert [el.text() for el in _by_class(root, "brandBold")] == ["Cellcolabs"]
    assert [el.text() for el in _by_class(root, "brandRegular")] == ["Clinical"]
    links = _by_class(root, "menuLink")
    assert [(link.get("href"), link.text()) for link in links] == [("/", "Home"), ("/blog", "Blog")]
    assert len(_by_class(root, "dot")) == 15


def test_navigation_single_word_brand_has_no_regular_part() -> None:
    values = default_values(navigation.PLACEHOLDERS)
    values["brand_text"] = "Acme"

    root = parse_markup(navigation.render_values(values))

    assert _by_class(root, "brandRegular") == []
    (brand,) = root.find_all(lambda el: el.get("data-placeholder") == "brand_text")
    assert brand.text() == "Acme"


def test_text_is_escaped_but_richtext_is_not() -> None:
    values = default_values(content_section.PLACEHOLDERS)
    values["title"] = "<script>alert(1)</script>"
    values["subtitle"] = "Line one<br>Line two"

    html = content_section.render_values(values)

    assert "&lt;script&gt;" in html
    assert "Line one<br>Line two" in html


def test_hero_block_image_position_selects_layout_class() -> None:
    config = replace(hero_block.default_config(), image_position="left")

    (section,) = parse_markup(hero_block.render(config)).children

    assert isinstance(section, Element)
    assert section.classes == ["heroBlock", "imageLeft"]
    assert hero_block.default_config().root_class == "heroBlock imageRight"


def test_button_variants_and_new_tab() -> None:
    config = replace(
        button.default_config(), style="outline-white", size="large", open_in_new_tab=True
    )

    root = parse_markup(button.render(config))

    (link,) = root.find_all(lambda el: el.tag == "a")
    assert link.classes == ["button", "button-outline-white", "button-large"]
    assert link.get("target") == "_blank"
    assert link.get("rel") == "noopener noreferrer"


def test_button_same_tab_has_no_rel() -> None:
    root = parse_markup(button.render(button.default_config()))
    (link,) = root.find_all(lambda el: el.tag == "a")
    assert link.get("target") == "_self"
    assert link.get("rel") is None


def test_button_multi_variant_renders_under_its_own_component_id() -> None:
    values = default_values(button.PLACEHOLDERS)
    html = button.render_multi_variant_values(values)
    assert 'data-component="button-multi-variant"' in html


def test_grid_uses_its_own_root_class() -> None:
    html = focus_areas.render_grid_values(default_values(focus_areas.GRID_PLACEHOLDERS))
    assert 'class="grid2x2CardImage"' in html
    assert 'data-component="grid-2x2-card-image"' in html


def test_empty_repeater_renders_no_cards() -> None:
    config = replace(content_section.default_config(), cards=())
    root = parse_markup(content_section.render(config))
    assert _by_class(root, "card") == []


def test_why_us_renders_items_for_both_layouts() -> None:
    root = parse_markup(why_us.render(why_us.default_config()))
    assert len(_by_class(root, "item")) == 2 * len(why_us.default_config().items)


def test_locations_carousel_marks_first_location_active() -> None:
    config = locations_carousel.default_config()

    root = parse_markup(locations_carousel.render(config))

    tabs = _by_class(root, "tab")
    assert [tab.get("aria-selected") for tab in tabs] == ["true", "false"]
    assert "tabActive" in tabs[0].classes
    panels = _by_class(root, "bottomContentInner")
    assert [panel.get("data-location-index") for panel in panels] == ["0", "1"]
    assert [any(name == "hidden" for name, _ in panel.attrs) for panel in panels] == [False, True]
    (title,) = _by_class(root, "mainTitle")
    assert any(isinstance(child, Element) and child.tag == "br" for child in title.children)
    assert config.title_lines == ("Stem cell therapy", "in the Bahamas")


def test_footer_renders_every_section_with_links() -> None:
    config = footer.default_config()
    root = parse_markup(footer.render(config))
    sections = _by_class(root, "section")
    assert [section.get("data-section") for section in sections] == [
        section.slug for section in config.sections
    ]
    assert len(_by_class(root, "link")) == sum(len(section.links) for section in config.sections)
