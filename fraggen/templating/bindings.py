"""Default filling and override binding for component placeholders."""

from __future__ import annotations

import re
from collections.abc import Mapping as MappingABC, Sequence as SequenceABC
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..errors import InvalidPlaceholder
from ..models import PlaceholderSpec, PlaceholderType

_ID_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_STRING_TYPES = {
    PlaceholderType.TEXT,
    PlaceholderType.RICHTEXT,
    PlaceholderType.IMAGE,
    PlaceholderType.URL,
    PlaceholderType.CHOICE,
}


def validate_specs(
    specs: Sequence[PlaceholderSpec], *, component_id: Optional[str] = None
) -> None:
    """Check ids are unique identifiers and every default fits its type."""
    _ensure_unique(specs, component_id=component_id, parent=None)
    for spec in specs:
        validate_spec(spec, component_id=component_id)


def validate_spec(spec: PlaceholderSpec, *, component_id: Optional[str] = None) -> None:
    if not _ID_PATTERN.match(spec.id):
        raise InvalidPlaceholder(
            f"placeholder id '{spec.id}' is not a valid token name", component_id=component_id
        )
    if spec.type is PlaceholderType.CHOICE and not spec.options:
        raise InvalidPlaceholder(
            f"choice placeholder '{spec.id}' declares no options", component_id=component_id
        )
    if spec.is_repeater:
        if not spec.fields:
            raise InvalidPlaceholder(
                f"repeater '{spec.id}' declares no fields", component_id=component_id
            )
        _ensure_unique(spec.fields, component_id=component_id, parent=spec.id)
        for child in spec.fields:
            validate_spec(child, component_id=component_id)
    elif spec.options and spec.type is not PlaceholderType.CHOICE:
        raise InvalidPlaceholder(
            f"only choice placeholders may declare options ('{spec.id}')",
            component_id=component_id,
        )
    validate_value(spec, spec.default, component_id=component_id)


def validate_value(
    spec: PlaceholderSpec, value: Any, *, component_id: Optional[str] = None
) -> None:
    """Raise ``InvalidPlaceholder`` when ``value`` cannot be bound to ``spec``."""
    if spec.type in _STRING_TYPES:
        if not isinstance(value, str):
            raise InvalidPlaceholder(
                f"placeholder '{spec.id}' expects a string, got {type(value).__name__}",
                component_id=component_id,
            )
        if spec.type is PlaceholderType.CHOICE and value not in spec.options:
            options = ", ".join(spec.options)
            raise InvalidPlaceholder(
                f"'{value}' is not an option of '{spec.id}' ({options})",
                component_id=component_id,
            )
    elif spec.type is PlaceholderType.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidPlaceholder(
                f"placeholder '{spec.id}' expects a boolean, got {type(value).__name__}",
                component_id=component_id,
            )
    elif spec.is_repeater:
        for item in _as_items(spec, value, component_id):
            for key in item:
                if spec.child(key) is None:
                    raise InvalidPlaceholder(
                        f"repeater '{spec.id}' has no field '{key}'", component_id=component_id
                    )
            for child in spec.fields:
                if child.id in item:
                    validate_value(child, item[child.id], component_id=component_id)


def default_values(specs: Iterable[PlaceholderSpec]) -> Dict[str, Any]:
    """Return every placeholder bound to its default, repeaters fully expanded."""
    return {spec.id: _fill(spec, spec.default) for spec in specs}


def bind_values(
    specs: Sequence[PlaceholderSpec],
    overrides: Mapping[str, Any] | None = None,
    *,
    component_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Merge caller overrides onto the defaults after validating them."""
    values = default_values(specs)
    for key, value in (overrides or {}).items():
        spec = _find(specs, key)
        if spec is None:
            raise InvalidPlaceholder(
                f"override for undeclared placeholder '{key}'", component_id=component_id
            )
        validate_value(spec, value, component_id=component_id)
        values[key] = _fill(spec, value)
    return values


def token_values(
    specs: Sequence[PlaceholderSpec],
    overrides: Mapping[str, Any] | None = None,
    *,
    component_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Bind every string placeholder to its own ``{{id}}`` token.

    Booleans and repeaters keep their defaults since a token cannot stand in for
    them inside a component's own logic. Overrides still win.
    """
    values = bind_values(specs, overrides, component_id=component_id)
    supplied = set(overrides or {})
    for spec in specs:
        if spec.type in _STRING_TYPES and spec.id not in supplied:
            values[spec.id] = "{{" + spec.id + "}}"
    return values


def _fill(spec: PlaceholderSpec, value: Any) -> Any:
    if not spec.is_repeater:
        return value
    filled: List[Dict[str, Any]] = []
    for item in value or ():
        entry: Dict[str, Any] = {}
        for child in spec.fields:
            entry[child.id] = _fill(child, item.get(child.id, child.default))
        filled.append(entry)
    return filled


def _as_items(
    spec: PlaceholderSpec, value: Any, component_id: Optional[str]
) -> List[Mapping[str, Any]]:
    if isinstance(value, (str, bytes)) or not isinstance(value, SequenceABC):
        raise InvalidPlaceholder(
            f"repeater '{spec.id}' expects a sequence of field maps", component_id=component_id
        )
    items: List[Mapping[str, Any]] = []
    for item in value:
        if not isinstance(item, MappingABC):
            raise InvalidPlaceholder(
                f"repeater '{spec.id}' items must be mappings, got {type(item).__name__}",
                component_id=component_id,
            )
        items.append(item)
    return items


def _ensure_unique(
    specs: Sequence[PlaceholderSpec], *, component_id: Optional[str], parent: Optional[str]
) -> None:
    seen: set[str] = set()
    for spec in specs:
        if spec.id in seen:
            where = f" in repeater '{parent}'" if parent else ""
            raise InvalidPlaceholder(
                f"placeholder '{spec.id}' declared twice{where}", component_id=component_id
            )
        seen.add(spec.id)


def _find(specs: Sequence[PlaceholderSpec], key: str) -> Optional[PlaceholderSpec]:
    for spec in specs:
        if spec.id == key:
            return spec
    return None


__all__ = [
    "bind_values",
    "default_values",
    "token_values",
    "validate_spec",
    "validate_specs",
    "validate_value",
]
