"""Shared utilities for the code generator."""

from .errors import (
    CodegenError,
    ConfigError,
    GenerationError,
    SpecFetchError,
)
from .naming import (
    create_correct_path,
    camelize,
    get_model_path_and_name,
    join_path,
    ref_name,
    regex_filter,
    sanitize_property_name,
    to_pascal_case,
)
from .spec_loader import (
    fetch_spec,
    load_spec,
)

__all__ = [
    # Errors
    "CodegenError",
    "ConfigError",
    "GenerationError",
    "SpecFetchError",
    # Naming utilities
    "create_correct_path",
    "camelize",
    "get_model_path_and_name",
    "join_path",
    "ref_name",
    "regex_filter",
    "sanitize_property_name",
    "to_pascal_case",
    # Spec loading
    "fetch_spec",
    "load_spec",
]
