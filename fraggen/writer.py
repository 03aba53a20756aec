"""Output tree writer for generated fragments."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping

from .errors import WriteFailed

FRAGMENT_HTML = "fragment.html"
FRAGMENT_CSS = "styles.css"
MANIFEST_JSON = "manifest.json"


def json_text(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


class FragmentWriter:
    """Writes files below ``output_root``, creating directories as needed.

    Each file goes to a sibling ``.tmp`` path first and is then renamed over
    the target, so readers never observe a half-written file.
    """

    def __init__(self, output_root: Path | str) -> None:
        self.output_root = Path(output_root)

    def component_dir(self, component_id: str, version_dir: str) -> Path:
        return self.output_root / component_id / version_dir

    def relative(self, path: Path) -> str:
        """Return ``path`` relative to the output root with forward slashes."""
        return path.relative_to(self.output_root).as_posix()

    def write_text(self, path: Path, content: str) -> Path:
        self.write_files({path: content})
        return path

    def write_json(self, path: Path, payload: Mapping[str, Any]) -> Path:
        return self.write_text(path, json_text(payload))

    def write_files(self, files: Mapping[Path, str]) -> List[Path]:
        """Write a group of files, staging every one before replacing any.

        A failure while staging leaves all targets as they were.
        """
        staged: List[Path] = []
        current = None
        try:
            for path, content in files.items():
                current = path
                path.parent.mkdir(parents=True, exist_ok=True)
                temp_path = _temp_path(path)
                staged.append(temp_path)
                temp_path.write_text(content, encoding="utf-8")
            for path in files:
                current = path
                _temp_path(path).replace(path)
                staged.remove(_temp_path(path))
        except OSError as exc:
            for temp_path in staged:
                if temp_path.is_file():
                    temp_path.unlink()
            raise WriteFailed(f"failed to write {current}: {exc}") from exc
        return list(files)


def _temp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


__all__ = ["FRAGMENT_CSS", "FRAGMENT_HTML", "MANIFEST_JSON", "FragmentWriter", "json_text"]
