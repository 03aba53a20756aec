"""Fragment generation pipeline: validate, render, namespace, write."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .catalog import registry_for
from .components import STYLES_DIR
from .config import FragGenConfig, default_config
from .errors import FragmentError, MissingStylesheet, ReadFailed
from .logging import get_logger
from .models import (
    ComponentDescriptor,
    Fragment,
    FragmentFiles,
    Manifest,
    ManifestEntry,
)
from .postproc.markers import FragmentContent, MarkerManager
from .postproc.markup import MarkupFormatter
from .postproc.namespacing import namespace_stylesheet
from .postproc.script import INTERACTIVITY_SCRIPT
from .registry import ComponentRegistry
from .renderer import MarkupRenderer
from .themes import THEME_NAMES, theme_stylesheet
from .writer import FRAGMENT_CSS, FRAGMENT_HTML, MANIFEST_JSON, FragmentWriter, json_text

Clock = Callable[[], datetime]
Overrides = Mapping[str, Mapping[str, Any]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RenderedFragment:
    """All three artifacts of one component, held in memory until written."""

    fragment: Fragment
    html: str
    css: str


@dataclass
class BuildResult:
    """Outcome of a full generation run."""

    output_root: Path
    manifest: Manifest
    manifest_path: Path
    fragments: List[Fragment] = field(default_factory=list)


class FragmentGenerator:
    """Builds every registered component into the fragment output tree.

    Components are processed sequentially in registry order. All templates are
    validated before anything is rendered, and each component is rendered
    completely in memory before its files are written. The first failure
    aborts the run; fragments already written stay on disk.
    """

    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        config: FragGenConfig | None = None,
        *,
        clock: Clock | None = None,
        renderer: MarkupRenderer | None = None,
        writer: FragmentWriter | None = None,
        marker_manager: MarkerManager | None = None,
        script: str = INTERACTIVITY_SCRIPT,
    ) -> None:
        self.config = config or default_config()
        self.registry = registry if registry is not None else registry_for(self.config.strategy)
        self.clock = clock or utc_now
        self.renderer = renderer or MarkupRenderer(
            MarkupFormatter(indent=self.config.format.indent), binding=self.config.binding
        )
        self.writer = writer or FragmentWriter(self.config.output_dir)
        self.marker_manager = marker_manager or MarkerManager()
        self.script = script
        self.styles_dir = self.config.styles_dir or STYLES_DIR
        self.logger = get_logger("orchestrator")

    def run(self, overrides: Optional[Overrides] = None) -> BuildResult:
        """Regenerate the whole output tree and its root manifest."""
        generated_at = self.clock()
        self.logger.info(
            "Generating %d fragments into %s", len(self.registry), self.writer.output_root
        )
        current: Optional[str] = None
        try:
            self.registry.validate()
            fragments: List[Fragment] = []
            entries: List[ManifestEntry] = []
            for descriptor in self.registry:
                current = descriptor.id
                rendered = self.build_fragment(
                    descriptor, generated_at, self._overrides_for(descriptor.id, overrides)
                )
                manifest_path = self._write_fragment(rendered)
                fragments.append(rendered.fragment)
                entries.append(
                    ManifestEntry(
                        id=descriptor.id,
                        name=descriptor.name,
                        path=self.writer.relative(manifest_path),
                    )
                )
                self.logger.info(
                    "Generated fragment %s -> %s", descriptor.id, manifest_path.parent
                )
            current = None
            manifest = Manifest(
                version=self.config.version, generated_at=generated_at, components=entries
            )
            root_manifest = self.writer.write_json(
                self.writer.output_root / MANIFEST_JSON, manifest.to_dict()
            )
        except FragmentError as exc:
            if current is not None:
                exc.with_component(current)
            self.logger.error("Fragment generation aborted: %s", exc)
            raise
        self.logger.debug("Root manifest written to %s", root_manifest)
        return BuildResult(
            output_root=self.writer.output_root,
            manifest=manifest,
            manifest_path=root_manifest,
            fragments=fragments,
        )

    def build_fragment(
        self,
        descriptor: ComponentDescriptor,
        generated_at: datetime,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> RenderedFragment:
        markup = self.renderer.render(descriptor, overrides)
        content = FragmentContent(
            id=descriptor.id, name=descriptor.name, version=self.config.version, body=markup
        )
        html = self.marker_manager.wrap(content, generated_at, script=self.script)
        css = self.render_stylesheet(descriptor)
        fragment = Fragment(
            id=descriptor.id,
            name=descriptor.name,
            version=self.config.version,
            generated_at=generated_at,
            placeholders=list(descriptor.placeholders),
            files=FragmentFiles(html=FRAGMENT_HTML, css=FRAGMENT_CSS),
            themes=list(THEME_NAMES),
        )
        return RenderedFragment(fragment=fragment, html=html, css=css)

    def render_stylesheet(
        self, descriptor: ComponentDescriptor, *, theme: Optional[str] = None
    ) -> str:
        """Theme variables followed by the namespaced component rules.

        A missing stylesheet yields an empty string, never an error.
        """
        source = self.read_stylesheet(descriptor)
        if source is None:
            return ""
        variables = theme_stylesheet(theme or self.config.default_theme, THEME_NAMES)
        return variables + "\n" + namespace_stylesheet(source, descriptor.id)

    def read_stylesheet(self, descriptor: ComponentDescriptor) -> Optional[str]:
        if descriptor.stylesheet is None:
            self.logger.debug("%s declares no stylesheet", descriptor.id)
            return None
        path = Path(self.styles_dir) / descriptor.stylesheet
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            message = f"{descriptor.id}: stylesheet {path} not found; writing empty styles.css"
            self.logger.warning(message)
            warnings.warn(message, MissingStylesheet, stacklevel=2)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadFailed(
                f"failed to read stylesheet {path}: {exc}", component_id=descriptor.id
            ) from exc

    def preview(self, component_id: str, *, theme: Optional[str] = None) -> Tuple[str, str]:
        """Return namespaced markup and CSS for one component without writing."""
        descriptor = self.registry.get(component_id)
        overrides: Dict[str, Any] = dict(self.config.overrides_for(component_id))
        if theme is not None and descriptor.placeholder("theme") is not None:
            overrides["theme"] = theme
        markup = self.renderer.render(descriptor, overrides)
        return markup, self.render_stylesheet(descriptor, theme=theme)

    def _overrides_for(
        self, component_id: str, overrides: Optional[Overrides]
    ) -> Dict[str, Any]:
        merged: Dict[str, Any] = dict(self.config.overrides_for(component_id))
        if overrides:
            merged.update(overrides.get(component_id, {}))
        return merged

    def _write_fragment(self, rendered: RenderedFragment) -> Path:
        fragment = rendered.fragment
        directory = self.writer.component_dir(fragment.id, self.config.version_dir)
        manifest_path = directory / MANIFEST_JSON
        self.writer.write_files(
            {
                directory / FRAGMENT_HTML: rendered.html,
                directory / FRAGMENT_CSS: rendered.css,
                manifest_path: json_text(fragment.to_dict()),
            }
        )
        return manifest_path


__all__ = ["BuildResult", "Clock", "FragmentGenerator", "RenderedFragment", "utc_now"]
