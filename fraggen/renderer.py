"""Markup renderer with live and static strategies.

Both strategies hand their output to the canonical formatter, which parses it
(rejecting malformed markup), drops empty and design-tool attributes and
namespaces class tokens with the component id.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .errors import FragmentError, RenderFailed
from .logging import get_logger
from .models import ComponentDescriptor
from .postproc.markup import MarkupFormatter
from .postproc.namespacing import markup_class_namespacer
from .templating import bind_values, parse_template, render_template, token_values

BINDING_DEFAULTS = "defaults"
BINDING_TOKENS = "tokens"


class MarkupRenderer:
    """Turns a descriptor plus overrides into formatted, namespaced markup.

    ``binding="defaults"`` fills every placeholder with its default unless
    overridden. ``binding="tokens"`` leaves ``{{id}}`` tokens in place of
    unbound string placeholders so the host can substitute them later.
    """

    def __init__(
        self,
        formatter: MarkupFormatter | None = None,
        *,
        binding: str = BINDING_DEFAULTS,
    ) -> None:
        if binding not in (BINDING_DEFAULTS, BINDING_TOKENS):
            raise ValueError(f"unknown binding mode '{binding}'")
        self.formatter = formatter or MarkupFormatter()
        self.binding = binding
        self.logger = get_logger("renderer")

    def render(
        self,
        descriptor: ComponentDescriptor,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> str:
        raw = self.render_raw(descriptor, overrides)
        try:
            return self.formatter.format(
                raw, transforms=(markup_class_namespacer(descriptor.id),)
            )
        except FragmentError as exc:
            raise exc.with_component(descriptor.id)

    def render_raw(
        self,
        descriptor: ComponentDescriptor,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render without formatting or namespacing."""
        if descriptor.template is not None:
            return self._render_static(descriptor, overrides)
        return self._render_live(descriptor, overrides)

    def _render_static(
        self, descriptor: ComponentDescriptor, overrides: Optional[Mapping[str, Any]]
    ) -> str:
        self.logger.debug("Rendering %s from its static template", descriptor.id)
        specs = descriptor.placeholders
        try:
            bound = bind_values(specs, overrides, component_id=descriptor.id)
            preserve = self.binding == BINDING_TOKENS
            values: Dict[str, Any] = (
                {key: bound[key] for key in (overrides or {})} if preserve else bound
            )
            template = parse_template(descriptor.template or "")
            return render_template(
                template,
                specs,
                values,
                preserve_tokens=preserve,
                component_id=descriptor.id,
            )
        except FragmentError as exc:
            raise exc.with_component(descriptor.id)

    def _render_live(
        self, descriptor: ComponentDescriptor, overrides: Optional[Mapping[str, Any]]
    ) -> str:
        self.logger.debug("Rendering %s through its component", descriptor.id)
        specs = descriptor.placeholders
        try:
            if self.binding == BINDING_TOKENS:
                values = token_values(specs, overrides, component_id=descriptor.id)
            else:
                values = bind_values(specs, overrides, component_id=descriptor.id)
        except FragmentError as exc:
            raise exc.with_component(descriptor.id)

        try:
            return descriptor.render(values)
        except FragmentError as exc:
            raise exc.with_component(descriptor.id)
        except Exception as exc:
            raise RenderFailed(
                f"render function raised {type(exc).__name__}: {exc}",
                component_id=descriptor.id,
            ) from exc


__all__ = ["BINDING_DEFAULTS", "BINDING_TOKENS", "MarkupRenderer"]
