"""Generator configuration: defaults, normalization and config file loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from .shared.errors import ConfigError
from .shared.spec_loader import parse_document

API_OUTPUT_PATH: Final[str] = "data-access/web-service"

# camelCase config keys -> CodegenOptions fields
_OPTION_KEYS: Final[dict[str, str]] = {
    "indentation": "indentation",
    "cleanOutputDir": "clean_output_dir",
    "filesToKeep": "files_to_keep",
    "useStrictTypes": "use_strict_types",
    "generateComments": "generate_comments",
    "generateJsDoc": "generate_js_doc",
    "outputPath": "output_path",
}


@dataclass(frozen=True, slots=True)
class CodegenOptions:
    """Options shared by every generator."""

    indentation: int = 2
    clean_output_dir: bool = False
    files_to_keep: tuple[str, ...] = ("config.json",)
    use_strict_types: bool = True
    generate_comments: bool = True
    generate_js_doc: bool = True
    output_path: str = API_OUTPUT_PATH

    def __post_init__(self) -> None:
        if isinstance(self.indentation, bool) or not isinstance(self.indentation, int):
            raise ConfigError(f"'indentation' must be an integer, got {self.indentation!r}")
        if isinstance(self.files_to_keep, str):
            raise ConfigError("'filesToKeep' must be a list of strings")
        object.__setattr__(self, "indentation", max(1, self.indentation))
        object.__setattr__(self, "files_to_keep", tuple(self.files_to_keep))


@dataclass(frozen=True, slots=True)
class EndpointEntry:
    """One API specification and the path patterns generated from it."""

    url: str
    paths: tuple[str, ...] = (".*",)


@dataclass(slots=True)
class CodegenConfig:
    """Normalized configuration."""

    endpoints: list[EndpointEntry]
    options: CodegenOptions = field(default_factory=CodegenOptions)
    verbose: bool = False


def _parse_options(raw: Any) -> CodegenOptions:
    if raw is None:
        return CodegenOptions()
    if not isinstance(raw, dict):
        raise ConfigError("'options' must be a mapping")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _OPTION_KEYS.get(key)
        if name is None:
            raise ConfigError(f"Unknown option '{key}'")
        values[name] = value
    return CodegenOptions(**values)


def _parse_endpoint(raw: Any) -> EndpointEntry:
    if not isinstance(raw, dict) or not isinstance(raw.get("url"), str):
        raise ConfigError("Each endpoint must be a mapping with a 'url' string")

    paths = raw.get("paths") or [".*"]
    if isinstance(paths, str) or not all(isinstance(p, str) for p in paths):
        raise ConfigError(f"'paths' of {raw['url']} must be a list of patterns")
    return EndpointEntry(url=raw["url"], paths=tuple(paths))


def create_config(raw: Any) -> CodegenConfig:
    """Create a normalized configuration by merging defaults with user options."""
    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping")

    endpoints = raw.get("endpoints")
    if not isinstance(endpoints, list):
        raise ConfigError("Configuration must include an 'endpoints' list")

    return CodegenConfig(
        endpoints=[_parse_endpoint(entry) for entry in endpoints],
        options=_parse_options(raw.get("options")),
    )


def load_config(path: Path) -> CodegenConfig:
    """Read and validate a JSON or YAML configuration file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", str(path)) from e

    try:
        data = parse_document(raw, prefer_yaml=path.suffix.lower() in {".yml", ".yaml"})
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file: {e}", str(path)) from e

    try:
        return create_config(data)
    except ConfigError as e:
        raise ConfigError(str(e), str(path)) from e
