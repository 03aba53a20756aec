"""Presentational components rendered to static markup with Jinja2.

Every module exposes ``PLACEHOLDERS``, a frozen config dataclass whose fields are
all required, ``default_config()``, ``config_from_values()`` and a pure
``render(config)``.
"""

from . import (
    button,
    content_section,
    focus_areas,
    footer,
    hero_block,
    locations_carousel,
    navigation,
    why_us,
)
from .base import STYLES_DIR, TEMPLATES_DIR, class_names, get_environment, render_template

__all__ = [
    "STYLES_DIR",
    "TEMPLATES_DIR",
    "button",
    "class_names",
    "content_section",
    "focus_areas",
    "footer",
    "get_environment",
    "hero_block",
    "locations_carousel",
    "navigation",
    "render_template",
    "why_us",
]
