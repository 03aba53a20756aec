"""Post-processing passes applied to rendered fragments."""

from .markers import FragmentContent, MarkerManager
from .markup import Element, MarkupFormatter, clean_markup, parse_markup
from .namespacing import StyleNamespacer, markup_class_namespacer, namespace_stylesheet
from .script import INTERACTIVITY_SCRIPT

__all__ = [
    "Element",
    "FragmentContent",
    "INTERACTIVITY_SCRIPT",
    "MarkerManager",
    "MarkupFormatter",
    "StyleNamespacer",
    "clean_markup",
    "markup_class_namespacer",
    "namespace_stylesheet",
    "parse_markup",
]
