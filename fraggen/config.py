"""Configuration loading for fraggen (.fraggen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .themes import THEME_NAMES

CONFIG_FILENAME = ".fraggen.yml"
DEFAULT_OUTPUT_DIR = "dist/fragments"
DEFAULT_VERSION = "1.0.0"
DEFAULT_THEME = "cellcolabs"
STRATEGIES = ("mixed", "live")
BINDINGS = ("defaults", "tokens")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class FormatConfig:
    """Markup formatter settings."""

    indent: int = 2


@dataclass(frozen=True)
class FragGenConfig:
    """Represents the settings defined in .fraggen.yml."""

    root: Path
    output_dir: Path
    styles_dir: Optional[Path] = None
    version: str = DEFAULT_VERSION
    default_theme: str = DEFAULT_THEME
    strategy: str = "mixed"
    binding: str = "defaults"
    format: FormatConfig = field(default_factory=FormatConfig)
    overrides: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    @property
    def version_dir(self) -> str:
        """Directory segment for the configured version (``1.0.0`` -> ``v1``)."""
        major = self.version.split(".", 1)[0]
        return f"v{major}"

    def overrides_for(self, component_id: str) -> Mapping[str, Any]:
        return self.overrides.get(component_id, {})


def default_config(root: Path | str = ".") -> FragGenConfig:
    root_path = Path(root).expanduser().resolve()
    return FragGenConfig(root=root_path, output_dir=root_path / DEFAULT_OUTPUT_DIR)


def load_config(config_path: Path | str) -> FragGenConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return default_config(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir = root / (_as_str(data.get("output_dir")) or DEFAULT_OUTPUT_DIR)
    styles_dir_str = _as_str(data.get("styles_dir"))
    styles_dir = root / styles_dir_str if styles_dir_str else None

    version = _as_str(data.get("version")) or DEFAULT_VERSION
    if not version.split(".", 1)[0].isdigit():
        raise ConfigError(f"version must start with a numeric major part, got '{version}'")

    default_theme = _choice(data, "default_theme", THEME_NAMES, DEFAULT_THEME)
    strategy = _choice(data, "strategy", STRATEGIES, "mixed")
    binding = _choice(data, "binding", BINDINGS, "defaults")

    format_data = _as_dict(data.get("format"))
    indent = format_data.get("indent", 2)
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigError("format.indent must be a non-negative integer")

    overrides: Dict[str, Dict[str, Any]] = {}
    raw_overrides = data.get("overrides")
    if raw_overrides is not None and not isinstance(raw_overrides, dict):
        raise ConfigError("overrides must map component ids to placeholder values")
    for component_id, values in (raw_overrides or {}).items():
        if not isinstance(values, dict):
            raise ConfigError(f"overrides for '{component_id}' must be a mapping")
        overrides[str(component_id)] = {str(key): value for key, value in values.items()}

    return FragGenConfig(
        root=root,
        output_dir=output_dir,
        styles_dir=styles_dir,
        version=version,
        default_theme=default_theme,
        strategy=strategy,
        binding=binding,
        format=FormatConfig(indent=indent),
        overrides=overrides,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _choice(data: Mapping[str, Any], key: str, options: tuple, default: str) -> str:
    value = _as_str(data.get(key)) or default
    if value not in options:
        raise ConfigError(f"{key} must be one of {', '.join(options)}, got '{value}'")
    return value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "FormatConfig",
    "FragGenConfig",
    "default_config",
    "load_config",
]
