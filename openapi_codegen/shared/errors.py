"""Custom exceptions for the code generator."""

from __future__ import annotations


class CodegenError(Exception):
    """Base exception for code generation errors."""

    def __init__(self, message: str, context: str | None = None) -> None:
        self.context = context
        full_message = f"{message}" if not context else f"[{context}] {message}"
        super().__init__(full_message)


class ConfigError(CodegenError):
    """Raised when the command line or the configuration file is invalid."""

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        super().__init__(message, config_path)


class SpecFetchError(CodegenError):
    """Raised when an API specification cannot be retrieved or parsed."""

    def __init__(self, message: str, url: str) -> None:
        self.url = url
        super().__init__(message, url)


class GenerationError(CodegenError):
    """Raised when producing the output of one path pattern fails."""

    def __init__(self, message: str, path_pattern: str) -> None:
        self.path_pattern = path_pattern
        super().__init__(message, path_pattern)
