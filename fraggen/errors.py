"""Error taxonomy for fragment generation runs."""

from __future__ import annotations

from typing import Optional


class FragmentError(RuntimeError):
    """Base class for failures that abort a generation run."""

    def __init__(self, message: str, *, component_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.component_id = component_id

    def with_component(self, component_id: str) -> "FragmentError":
        if self.component_id is None:
            self.component_id = component_id
        return self

    def __str__(self) -> str:
        if self.component_id:
            return f"{self.component_id}: {self.message}"
        return self.message


class UnknownPlaceholder(FragmentError):
    """Raised when a template references a placeholder that has no spec."""

    def __init__(
        self,
        placeholder: str,
        *,
        component_id: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> None:
        where = f" inside repeater '{scope}'" if scope else ""
        super().__init__(
            f"template references undeclared placeholder '{placeholder}'{where}",
            component_id=component_id,
        )
        self.placeholder = placeholder
        self.scope = scope


class TemplateSyntaxError(FragmentError):
    """Raised for unbalanced or mismatched repeater blocks."""


class InvalidPlaceholder(FragmentError):
    """Raised when a placeholder spec or a bound value is not usable."""


class RenderFailed(FragmentError):
    """Raised when a component render function fails."""


class MarkupError(FragmentError):
    """Raised when rendered markup is not well-formed."""


class ReadFailed(FragmentError):
    """Raised when a source file exists but cannot be read."""


class WriteFailed(FragmentError):
    """Raised when an output file cannot be written."""


class ThemeError(FragmentError):
    """Raised when theme data is missing or malformed."""


class ComponentNotFound(FragmentError, KeyError):
    """Raised when the registry has no descriptor for an id."""

    def __init__(self, component_id: str) -> None:
        super().__init__(f"no component registered with id '{component_id}'")
        self.missing_id = component_id

    def __str__(self) -> str:
        return self.message


class MissingStylesheet(UserWarning):
    """Stylesheet source is absent; the fragment ships an empty CSS file."""


__all__ = [
    "ComponentNotFound",
    "FragmentError",
    "InvalidPlaceholder",
    "MarkupError",
    "MissingStylesheet",
    "ReadFailed",
    "RenderFailed",
    "TemplateSyntaxError",
    "ThemeError",
    "UnknownPlaceholder",
    "WriteFailed",
]
