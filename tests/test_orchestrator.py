"""End-to-end tests for the fragment generation pipeline."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping

import pytest

from fraggen.catalog import default_registry
from fraggen.errors import (
    MissingStylesheet,
    ReadFailed,
    RenderFailed,
    UnknownPlaceholder,
    WriteFailed,
)
from fraggen.models import ComponentDescriptor, text
from fraggen.orchestrator import FragmentGenerator
from fraggen.postproc.markup import parse_markup
from fraggen.registry import ComponentRegistry
from tests._fixtures.project_builder import ProjectBuilder

Clock = Callable[[], datetime]


def _generator(
    project_builder: ProjectBuilder,
    frozen_clock: Clock,
    registry: ComponentRegistry | None = None,
    **changes: Any,
) -> FragmentGenerator:
    config = project_builder.config(**changes)
    return FragmentGenerator(registry, config, clock=frozen_clock)


def _read_tree(root: Path) -> Mapping[str, str]:
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_navigation_end_to_end(project_builder: ProjectBuilder, frozen_clock: Clock) -> None:
    menu = [
        {"label": "Products", "href": "/products"},
        {"label": "Pricing", "href": "/pricing"},
        {"label": "Docs", "href": "/docs"},
        {"label": "Support", "href": "/support"},
    ]
    registry = ComponentRegistry([default_registry().get("navigation")])
    generator = _generator(
        project_builder,
        frozen_clock,
        registry,
        overrides={"navigation": {"brand_text": "Acme", "theme": "cellcolabs", "menu_items": menu}},
    )

    result = generator.run()

    html = (result.output_root / "navigation" / "v1" / "fragment.html").read_text(encoding="utf-8")
    assert 'data-theme="cellcolabs"' in html
    root = parse_markup(html)
    (brand,) = root.find_all(lambda el: el.get("data-placeholder") == "brand_text")
    assert brand.text() == "Acme"
    links = root.find_all(lambda el: "navigation__menuLink" in el.classes)
    assert [link.text() for link in links] == ["Products", "Pricing", "Docs", "Support"]
    assert [link.get("href") for link in links] == [item["href"] for item in menu]


def test_full_build_writes_tree_and_root_manifest(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    result = _generator(project_builder, frozen_clock).run()
    root = result.output_root

    manifest = json.loads((root / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["version"] == "1.0.0"
    assert manifest["generated"] == "2025-01-15T12:30:45.123Z"
    ids = [entry["id"] for entry in manifest["components"]]
    assert ids == list(default_registry().ids())
    for entry in manifest["components"]:
        assert entry["path"] == f"{entry['id']}/v1/manifest.json"
        assert (root / entry["path"]).is_file()
        directory = (root / entry["path"]).parent
        assert (directory / "fragment.html").is_file()
        assert (directory / "styles.css").is_file()


def test_component_manifest_schema(project_builder: ProjectBuilder, frozen_clock: Clock) -> None:
    result = _generator(project_builder, frozen_clock).run()

    payload = json.loads(
        (result.output_root / "button" / "v1" / "manifest.json").read_text(encoding="utf-8")
    )

    assert payload["id"] == "button"
    assert payload["name"] == "Button"
    assert payload["version"] == "1.0.0"
    assert payload["files"] == {"html": "fragment.html", "css": "styles.css"}
    assert payload["responsive"] is True
    assert payload["themes"] == ["cellcolabs", "cellcolabsclinical"]
    by_id = {spec["id"]: spec for spec in payload["placeholders"]}
    assert by_id["style"]["options"] == ["primary", "secondary", "outline", "outline-white"]
    assert by_id["open_in_new_tab"] == {
        "id": "open_in_new_tab",
        "type": "boolean",
        "label": "Open in new tab",
        "default": False,
    }


def test_fragment_html_layout(project_builder: ProjectBuilder, frozen_clock: Clock) -> None:
    result = _generator(project_builder, frozen_clock).run()

    html = (result.output_root / "footer" / "v1" / "fragment.html").read_text(encoding="utf-8")
    lines = html.splitlines()

    assert lines[0] == "<!-- Fragment: Footer -->"
    assert lines[1] == "<!-- Generated: 2025-01-15T12:30:45.123Z -->"
    assert lines[2] == '<div class="fragment-footer" data-fragment="footer" data-version="1.0.0">'
    assert lines[3].startswith('<footer class="footer__footer"')
    assert lines[-1] == "<!-- End Fragment: Footer -->"
    assert "<script>" in html
    assert "onclick" not in html


def test_stylesheet_is_namespaced_after_theme_block(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    result = _generator(project_builder, frozen_clock).run()

    css = (result.output_root / "navigation" / "v1" / "styles.css").read_text(encoding="utf-8")

    assert css.startswith("/* Theme variables")
    assert ":root {" in css
    assert '[data-theme="cellcolabsclinical"]' in css
    assert ".navigation__menuLink:hover" in css
    assert ".navigation__menu.navigation__menuOpen" in css
    assert "\n.menuLink" not in css


def test_runs_with_frozen_clock_are_byte_identical(
    project_builder: ProjectBuilder, frozen_clock: Clock, tmp_path: Path
) -> None:
    first = _generator(project_builder, frozen_clock, output_dir=tmp_path / "a").run()
    second = _generator(project_builder, frozen_clock, output_dir=tmp_path / "b").run()

    assert _read_tree(first.output_root) == _read_tree(second.output_root)


def test_missing_stylesheet_yields_empty_css(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    styles = project_builder.copy_bundled_styles()
    (styles / "Footer.module.css").unlink()
    generator = _generator(project_builder, frozen_clock, styles_dir=styles)

    with pytest.warns(MissingStylesheet):
        result = generator.run()

    css_path = result.output_root / "footer" / "v1" / "styles.css"
    assert css_path.is_file()
    assert css_path.read_text(encoding="utf-8") == ""
    assert (result.output_root / "navigation" / "v1" / "styles.css").read_text(encoding="utf-8")


def test_empty_repeater_renders_zero_copies(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    generator = _generator(
        project_builder, frozen_clock, overrides={"navigation": {"menu_items": []}}
    )

    result = generator.run()

    html = (result.output_root / "navigation" / "v1" / "fragment.html").read_text(encoding="utf-8")
    assert "navigation__menuItem" not in html
    assert '<ul class="navigation__menu" data-placeholder="menu_items"></ul>' in html


def test_tokens_binding_leaves_placeholders_for_the_host(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    result = _generator(project_builder, frozen_clock, binding="tokens").run()

    html = (result.output_root / "navigation" / "v1" / "fragment.html").read_text(encoding="utf-8")
    assert "{{brand_text}}" in html
    assert 'data-theme="{{theme}}"' in html
    assert "{{#menu_items}}" in html


def test_validation_runs_for_all_components_before_any_output(
    project_builder: ProjectBuilder, frozen_clock: Clock, tmp_path: Path
) -> None:
    good = default_registry().get("button")
    bad = ComponentDescriptor(
        id="broken",
        name="Broken",
        stylesheet=None,
        placeholders=(text("title", "x"),),
        template="<p>{{subtitle}}</p>",
    )
    output = tmp_path / "out"
    generator = _generator(
        project_builder, frozen_clock, ComponentRegistry([good, bad]), output_dir=output
    )

    with pytest.raises(UnknownPlaceholder) as excinfo:
        generator.run()

    assert excinfo.value.component_id == "broken"
    assert not output.exists()


def test_render_failure_aborts_run_and_keeps_earlier_fragments(
    project_builder: ProjectBuilder,
    frozen_clock: Clock,
    tmp_path: Path,
) -> None:
    def explode(values: Mapping[str, Any]) -> str:
        raise RuntimeError("template exploded")

    good = default_registry().get("button")
    bad = ComponentDescriptor(
        id="explosive",
        name="Explosive",
        stylesheet=None,
        placeholders=(text("title", "x"),),
        render=explode,
    )
    output = tmp_path / "out"
    generator = _generator(
        project_builder, frozen_clock, ComponentRegistry([good, bad]), output_dir=output
    )

    with pytest.raises(RenderFailed) as excinfo:
        generator.run()

    assert excinfo.value.component_id == "explosive"
    assert (output / "button" / "v1" / "fragment.html").is_file()
    assert not (output / "explosive").exists()
    assert not (output / "manifest.json").exists()


def test_preview_renders_requested_theme(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    generator = _generator(project_builder, frozen_clock)

    markup, css = generator.preview("hero-block", theme="cellcolabsclinical")

    assert 'data-theme="cellcolabsclinical"' in markup
    assert ":root {\n  --color-primary: #1B3A4B;" in css


def test_version_directory_follows_major_version(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    registry = ComponentRegistry([default_registry().get("button")])
    result = _generator(project_builder, frozen_clock, registry, version="2.3.0").run()

    assert result.manifest.components[0].path == "button/v2/manifest.json"
    payload = json.loads((result.output_root / "button" / "v2" / "manifest.json").read_text("utf-8"))
    assert payload["version"] == "2.3.0"


def test_config_overrides_reach_live_components(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    registry = ComponentRegistry([default_registry().get("hero-block")])
    generator = _generator(
        project_builder,
        frozen_clock,
        registry,
        overrides={"hero-block": {"heading": "Hello there", "image_position": "left"}},
    )

    result = generator.run()

    html = (result.output_root / "hero-block" / "v1" / "fragment.html").read_text(encoding="utf-8")
    assert "Hello there" in html
    assert 'class="hero-block__heroBlock hero-block__imageLeft"' in html


def test_unreadable_stylesheet_aborts_with_component_id(
    project_builder: ProjectBuilder, frozen_clock: Clock, tmp_path: Path
) -> None:
    styles = project_builder.copy_bundled_styles()
    (styles / "Button.module.css").write_bytes(b"\xff\xfe.button { color: red; }")
    registry = ComponentRegistry([default_registry().get("button")])
    output = tmp_path / "out"
    generator = _generator(
        project_builder, frozen_clock, registry, styles_dir=styles, output_dir=output
    )

    with pytest.raises(ReadFailed) as excinfo:
        generator.run()

    assert excinfo.value.component_id == "button"
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
    assert str(excinfo.value).startswith("button: failed to read stylesheet")
    assert not (output / "button").exists()


def test_stylesheet_path_that_is_a_directory_is_a_read_failure(
    project_builder: ProjectBuilder, frozen_clock: Clock
) -> None:
    styles = project_builder.copy_bundled_styles()
    (styles / "Button.module.css").unlink()
    (styles / "Button.module.css").mkdir()
    registry = ComponentRegistry([default_registry().get("button")])
    generator = _generator(project_builder, frozen_clock, registry, styles_dir=styles)

    with pytest.raises(ReadFailed) as excinfo:
        generator.run()

    assert isinstance(excinfo.value.__cause__, OSError)


def test_failed_write_keeps_previous_component_files_together(
    project_builder: ProjectBuilder, frozen_clock: Clock, tmp_path: Path
) -> None:
    registry = ComponentRegistry([default_registry().get("button")])
    output = tmp_path / "out"
    _generator(project_builder, frozen_clock, registry, output_dir=output).run()
    directory = output / "button" / "v1"
    before = _read_tree(directory)
    (directory / "styles.css.tmp").mkdir()

    generator = _generator(
        project_builder,
        frozen_clock,
        registry,
        output_dir=output,
        overrides={"button": {"text": "Changed label"}},
    )
    with pytest.raises(WriteFailed) as excinfo:
        generator.run()

    assert excinfo.value.component_id == "button"
    assert _read_tree(directory) == before
    assert not (directory / "fragment.html.tmp").exists()
