"""Placeholder templates and value binding."""

from .bindings import bind_values, default_values, token_values, validate_specs, validate_value
from .engine import Template, check_placeholders, format_value, parse_template, render_template

__all__ = [
    "Template",
    "bind_values",
    "check_placeholders",
    "default_values",
    "format_value",
    "parse_template",
    "render_template",
    "token_values",
    "validate_specs",
    "validate_value",
]
