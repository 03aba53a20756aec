"""Shared Jinja2 environment and helpers for the component layer."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..themes import THEME_NAMES

TEMPLATES_DIR = Path(__file__).with_name("templates")
STYLES_DIR = Path(__file__).with_name("styles")


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.globals["cx"] = class_names
    return env


def render_template(name: str, **context: Any) -> str:
    """Render a component template; markup is static, handlers are never emitted."""
    return get_environment().get_template(name).render(**context)


def class_names(names: Iterable[Optional[str]]) -> str:
    """Join the truthy class names, mirroring the conditional class idiom."""
    return " ".join(name for name in names if name)


__all__ = [
    "STYLES_DIR",
    "TEMPLATES_DIR",
    "THEME_NAMES",
    "class_names",
    "get_environment",
    "render_template",
]
