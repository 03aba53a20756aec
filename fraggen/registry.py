"""Immutable registry of component descriptors."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple

from .errors import ComponentNotFound, FragmentError, InvalidPlaceholder
from .models import ComponentDescriptor
from .templating import check_placeholders, parse_template, validate_specs


class ComponentRegistry:
    """Ordered, read-only collection of descriptors built once per run.

    Registration order is build order. Use :meth:`validate` before rendering;
    it checks every component so a bad template fails the run before any
    output is produced.
    """

    def __init__(self, descriptors: Iterable[ComponentDescriptor]) -> None:
        ordered: Dict[str, ComponentDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in ordered:
                raise InvalidPlaceholder(
                    "component registered twice", component_id=descriptor.id
                )
            ordered[descriptor.id] = descriptor
        self._descriptors: Tuple[ComponentDescriptor, ...] = tuple(ordered.values())
        self._by_id = ordered

    def get(self, component_id: str) -> ComponentDescriptor:
        try:
            return self._by_id[component_id]
        except KeyError:
            raise ComponentNotFound(component_id) from None

    def list(self) -> Tuple[ComponentDescriptor, ...]:
        return self._descriptors

    def ids(self) -> Tuple[str, ...]:
        return tuple(descriptor.id for descriptor in self._descriptors)

    def validate(self) -> None:
        """Check placeholder specs and static template tokens for all components."""
        for descriptor in self._descriptors:
            validate_descriptor(descriptor)

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._by_id


def validate_descriptor(descriptor: ComponentDescriptor) -> None:
    try:
        validate_specs(descriptor.placeholders, component_id=descriptor.id)
        if descriptor.template is not None:
            template = parse_template(descriptor.template)
            check_placeholders(template, descriptor.placeholders, component_id=descriptor.id)
    except FragmentError as exc:
        raise exc.with_component(descriptor.id)


__all__ = ["ComponentRegistry", "validate_descriptor"]
