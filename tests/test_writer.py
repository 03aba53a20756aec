"""Tests for the fragment output writer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fraggen.errors import WriteFailed
from fraggen.writer import FragmentWriter


def test_write_text_creates_parent_directories(tmp_path: Path) -> None:
    writer = FragmentWriter(tmp_path / "out")
    target = writer.component_dir("navigation", "v1") / "fragment.html"

    writer.write_text(target, "<nav></nav>\n")
    writer.write_text(target, "<nav>again</nav>\n")

    assert target.read_text(encoding="utf-8") == "<nav>again</nav>\n"
    assert not target.with_name("fragment.html.tmp").exists()
    assert writer.relative(target) == "navigation/v1/fragment.html"


def test_write_json_uses_two_space_indent_and_keeps_unicode(tmp_path: Path) -> None:
    writer = FragmentWriter(tmp_path)
    path = writer.write_json(tmp_path / "manifest.json", {"name": "Learn more ↗", "items": [1]})

    content = path.read_text(encoding="utf-8")
    assert content == '{\n  "name": "Learn more ↗",\n  "items": [\n    1\n  ]\n}\n'
    assert json.loads(content)["items"] == [1]


def test_write_failure_is_wrapped(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    writer = FragmentWriter(tmp_path)

    with pytest.raises(WriteFailed) as excinfo:
        writer.write_text(blocker / "v1" / "styles.css", "")

    assert isinstance(excinfo.value.__cause__, OSError)


def test_write_files_replaces_nothing_when_staging_fails(tmp_path: Path) -> None:
    writer = FragmentWriter(tmp_path)
    directory = writer.component_dir("footer", "v1")
    html, css = directory / "fragment.html", directory / "styles.css"
    writer.write_files({html: "<footer>old</footer>\n", css: ".old {}\n"})
    (directory / "styles.css.tmp").mkdir()

    with pytest.raises(WriteFailed):
        writer.write_files({html: "<footer>new</footer>\n", css: ".new {}\n"})

    assert html.read_text(encoding="utf-8") == "<footer>old</footer>\n"
    assert css.read_text(encoding="utf-8") == ".old {}\n"
    assert not (directory / "fragment.html.tmp").exists()
    assert (directory / "styles.css.tmp").is_dir()


def test_write_files_writes_every_file(tmp_path: Path) -> None:
    writer = FragmentWriter(tmp_path)
    directory = writer.component_dir("button", "v1")
    files = {directory / "fragment.html": "<a></a>\n", directory / "manifest.json": "{}\n"}

    written = writer.write_files(files)

    assert written == list(files)
    assert sorted(path.name for path in directory.iterdir()) == ["fragment.html", "manifest.json"]
