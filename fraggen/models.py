"""Core data models shared across fraggen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple


class PlaceholderType(str, Enum):
    """Kinds of editor-supplied slots a fragment can expose."""

    TEXT = "text"
    RICHTEXT = "richtext"
    IMAGE = "image"
    URL = "url"
    CHOICE = "choice"
    BOOLEAN = "boolean"
    REPEATER = "repeater"


@dataclass(frozen=True)
class PlaceholderSpec:
    """Named, typed slot in a component template."""

    id: str
    type: PlaceholderType
    default: Any
    label: Optional[str] = None
    options: Tuple[str, ...] = ()
    fields: Tuple["PlaceholderSpec", ...] = ()

    @property
    def is_repeater(self) -> bool:
        return self.type is PlaceholderType.REPEATER

    def child(self, field_id: str) -> Optional["PlaceholderSpec"]:
        for child in self.fields:
            if child.id == field_id:
                return child
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "type": self.type.value}
        if self.label is not None:
            payload["label"] = self.label
        if not self.is_repeater:
            payload["default"] = self.default
        elif self.default:
            payload["default"] = [dict(item) for item in self.default]
        if self.options:
            payload["options"] = list(self.options)
        if self.fields:
            payload["fields"] = [child.to_dict() for child in self.fields]
        return payload


def text(id: str, default: str, label: str | None = None) -> PlaceholderSpec:
    return PlaceholderSpec(id=id, type=PlaceholderType.TEXT, default=default, label=label)


def richtext(id: str, default: str, label: str | None = None) -> PlaceholderSpec:
    return PlaceholderSpec(id=id, type=PlaceholderType.RICHTEXT, default=default, label=label)


def image(id: str, default: str, label: str | None = None) -> PlaceholderSpec:
    return PlaceholderSpec(id=id, type=PlaceholderType.IMAGE, default=default, label=label)


def url(id: str, default: str, label: str | None = None) -> PlaceholderSpec:
    return PlaceholderSpec(id=id, type=PlaceholderType.URL, default=default, label=label)


def boolean(id: str, default: bool, label: str | None = None) -> PlaceholderSpec:
    return PlaceholderSpec(id=id, type=PlaceholderType.BOOLEAN, default=default, label=label)


def choice(
    id: str, default: str, options: Tuple[str, ...], label: str | None = None
) -> PlaceholderSpec:
    return PlaceholderSpec(
        id=id, type=PlaceholderType.CHOICE, default=default, options=tuple(options), label=label
    )


def repeater(
    id: str,
    fields: Tuple[PlaceholderSpec, ...],
    default: Tuple[Mapping[str, Any], ...] = (),
    label: str | None = None,
) -> PlaceholderSpec:
    return PlaceholderSpec(
        id=id,
        type=PlaceholderType.REPEATER,
        default=tuple(default),
        fields=tuple(fields),
        label=label,
    )


LiveRender = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class ComponentDescriptor:
    """Statically declared component: identity, render source, stylesheet, slots.

    Exactly one of ``render`` (live strategy) or ``template`` (static strategy)
    is set.
    """

    id: str
    name: str
    stylesheet: Optional[str]
    placeholders: Tuple[PlaceholderSpec, ...]
    template: Optional[str] = None
    render: Optional[LiveRender] = None

    def __post_init__(self) -> None:
        if (self.template is None) == (self.render is None):
            raise ValueError(
                f"component '{self.id}' must define exactly one of template or render"
            )

    @property
    def strategy(self) -> str:
        return "static" if self.template is not None else "live"

    def placeholder(self, placeholder_id: str) -> Optional[PlaceholderSpec]:
        for spec in self.placeholders:
            if spec.id == placeholder_id:
                return spec
        return None


@dataclass
class FragmentFiles:
    html: str
    css: str


@dataclass
class Fragment:
    """Build output for one (component, version) pair."""

    id: str
    name: str
    version: str
    generated_at: datetime
    placeholders: List[PlaceholderSpec]
    files: FragmentFiles
    themes: List[str]
    responsive: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "generated": format_timestamp(self.generated_at),
            "placeholders": [spec.to_dict() for spec in self.placeholders],
            "files": {"html": self.files.html, "css": self.files.css},
            "responsive": self.responsive,
            "themes": list(self.themes),
        }


@dataclass
class ManifestEntry:
    id: str
    name: str
    path: str


@dataclass
class Manifest:
    """Root index over every fragment produced by a run."""

    version: str
    generated_at: datetime
    components: List[ManifestEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "generated": format_timestamp(self.generated_at),
            "components": [
                {"id": entry.id, "name": entry.name, "path": entry.path}
                for entry in self.components
            ],
        }


def format_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ISO8601 with a trailing ``Z``."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
