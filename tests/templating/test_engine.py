"""Tests for the placeholder template engine."""

from __future__ import annotations

import pytest

from fraggen.errors import TemplateSyntaxError, UnknownPlaceholder
from fraggen.models import boolean, repeater, richtext, text, url
from fraggen.templating import check_placeholders, parse_template, render_template

MENU = (
    text("brand", "Acme"),
    repeater("items", (text("label", "Item"), url("href", "#"))),
)


def test_parse_template_collects_tokens_with_scope() -> None:
    template = parse_template("<b>{{brand}}</b>{{#items}}<a href='{{href}}'>{{ label }}</a>{{/items}}")

    references = [(ref.name, ref.scope, ref.is_section) for ref in template.references()]
    assert references == [
        ("brand", (), False),
        ("items", (), True),
        ("href", ("items",), False),
        ("label", ("items",), False),
    ]
    assert template.token_names() == ["brand", "items", "href", "label"]


@pytest.mark.parametrize(
    "source",
    [
        "{{#items}}<li></li>",
        "<li></li>{{/items}}",
        "{{#items}}{{#links}}{{/items}}{{/links}}",
    ],
)
def test_parse_template_rejects_unbalanced_blocks(source: str) -> None:
    with pytest.raises(TemplateSyntaxError):
        parse_template(source)


def test_render_substitutes_bound_values_and_escapes_text() -> None:
    template = parse_template("<h1>{{brand}}</h1>")
    html = render_template(template, MENU, {"brand": "Tom & <Jerry>"})
    assert html == "<h1>Tom &amp; &lt;Jerry&gt;</h1>"


def test_render_keeps_richtext_markup() -> None:
    specs = (richtext("body", "<p>x</p>"),)
    template = parse_template("<div>{{body}}</div>")
    assert render_template(template, specs, {"body": "Line<br>two"}) == "<div>Line<br>two</div>"


def test_render_formats_booleans() -> None:
    specs = (boolean("flag", False),)
    template = parse_template('<a data-flag="{{flag}}"></a>')
    assert render_template(template, specs, {"flag": True}) == '<a data-flag="true"></a>'
    assert render_template(template, specs, {}) == '<a data-flag="false"></a>'


def test_render_falls_back_to_defaults_when_unbound() -> None:
    template = parse_template("<h1>{{brand}}</h1>")
    assert render_template(template, MENU, {}) == "<h1>Acme</h1>"


def test_render_expands_repeater_once_per_item_in_order() -> None:
    template = parse_template("<ul>{{#items}}<li><a href=\"{{href}}\">{{label}}</a></li>{{/items}}</ul>")
    html = render_template(
        template,
        MENU,
        {"items": [{"label": "One", "href": "/1"}, {"label": "Two", "href": "/2"}]},
    )
    assert html == '<ul><li><a href="/1">One</a></li><li><a href="/2">Two</a></li></ul>'


def test_render_empty_repeater_emits_no_copies() -> None:
    template = parse_template("<ul>{{#items}}<li>{{label}}</li>{{/items}}</ul>")
    assert render_template(template, MENU, {"items": []}) == "<ul></ul>"


def test_render_nested_repeaters() -> None:
    specs = (
        repeater(
            "sections",
            (text("title", "T"), repeater("links", (text("label", "L"),))),
        ),
    )
    template = parse_template(
        "{{#sections}}<h3>{{title}}</h3>{{#links}}<i>{{label}}</i>{{/links}}{{/sections}}"
    )
    values = {
        "sections": [
            {"title": "A", "links": [{"label": "a1"}, {"label": "a2"}]},
            {"title": "B", "links": []},
        ]
    }
    assert render_template(template, specs, values) == "<h3>A</h3><i>a1</i><i>a2</i><h3>B</h3>"


def test_preserve_tokens_keeps_unbound_fields_and_blocks() -> None:
    source = "<h1>{{brand}}</h1><ul>{{#items}}<li>{{label}}</li>{{/items}}</ul>"
    template = parse_template(source)
    assert render_template(template, MENU, {}, preserve_tokens=True) == source

    html = render_template(template, MENU, {"brand": "Acme Co"}, preserve_tokens=True)
    assert html == "<h1>Acme Co</h1><ul>{{#items}}<li>{{label}}</li>{{/items}}</ul>"


def test_check_placeholders_rejects_undeclared_token() -> None:
    template = parse_template("<p>{{missing}}</p>")
    with pytest.raises(UnknownPlaceholder) as excinfo:
        check_placeholders(template, MENU, component_id="navigation")
    assert excinfo.value.placeholder == "missing"
    assert excinfo.value.component_id == "navigation"
    assert str(excinfo.value).startswith("navigation: ")


def test_outer_placeholder_is_not_visible_inside_repeater() -> None:
    template = parse_template("{{#items}}<li>{{brand}}</li>{{/items}}")
    with pytest.raises(UnknownPlaceholder) as excinfo:
        check_placeholders(template, MENU)
    assert excinfo.value.scope == "items"


def test_child_field_is_not_visible_outside_repeater() -> None:
    template = parse_template("<li>{{label}}</li>")
    with pytest.raises(UnknownPlaceholder):
        check_placeholders(template, MENU)


def test_unused_specs_are_permitted() -> None:
    check_placeholders(parse_template("<p>static</p>"), MENU)


def test_repeater_used_as_field_is_rejected() -> None:
    with pytest.raises(TemplateSyntaxError):
        check_placeholders(parse_template("{{items}}"), MENU)


def test_scalar_placeholder_cannot_open_block() -> None:
    with pytest.raises(TemplateSyntaxError):
        check_placeholders(parse_template("{{#brand}}x{{/brand}}"), MENU)
