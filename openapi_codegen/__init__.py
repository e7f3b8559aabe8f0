"""Generate TypeScript models and request wrappers from OpenAPI specifications."""

__version__ = "1.0.0"
