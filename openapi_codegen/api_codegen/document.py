"""Dialect-independent view over an OpenAPI 3.x or Swagger 2.0 document.

Swagger 2.0 and OpenAPI 3.x keep the same information in different places:

- schema dictionary: ``definitions`` vs ``components.schemas``
- base path: ``basePath`` vs ``servers[0].url``
- request body: ``in: body`` parameter vs ``requestBody.content``
- responses: ``schema`` vs ``content.<media type>.schema``
- parameter typing: ``type`` vs ``schema.type`` / ``schema.format``

``ApiDocument`` is computed once per document and is the only place that
branches on the dialect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final, Iterator, Mapping

from ..shared.naming import regex_filter
from .models import ParameterType

# HTTP methods that produce request wrappers
HTTP_METHODS: Final[tuple[str, ...]] = ("get", "post", "put", "delete")


@dataclass(frozen=True, slots=True)
class ApiDocument:
    """Read-only accessors over a parsed spec document."""

    spec: Mapping[str, Any]
    is_openapi3: bool
    definitions: Mapping[str, Any] = field(repr=False)
    base_path: str = ""

    @classmethod
    def from_spec(cls, spec: Mapping[str, Any]) -> ApiDocument:
        """Build the view, detecting the dialect from the ``openapi`` key."""
        is_openapi3 = bool(spec.get("openapi"))
        if is_openapi3:
            definitions = (spec.get("components") or {}).get("schemas") or {}
            servers = spec.get("servers") or []
            base_path = servers[0].get("url", "") if servers else ""
        else:
            definitions = spec.get("definitions") or {}
            base_path = spec.get("basePath") or ""
        return cls(
            spec=spec,
            is_openapi3=is_openapi3,
            definitions=definitions,
            base_path=base_path,
        )

    @property
    def paths(self) -> Mapping[str, Any]:
        return self.spec.get("paths") or {}

    def schema(self, name: str) -> Mapping[str, Any] | None:
        """Look up a named model in the schema dictionary."""
        return self.definitions.get(name)

    def matching_paths(self, pattern: str | None) -> Iterator[tuple[str, Mapping[str, Any]]]:
        """Yield ``(path, path item)`` pairs whose path fully matches ``pattern``."""
        for path, item in self.paths.items():
            if isinstance(item, dict) and regex_filter(path, pattern):
                yield path, item

    @staticmethod
    def operations(item: Mapping[str, Any]) -> Iterator[tuple[str, Mapping[str, Any]]]:
        """Yield ``(method, operation)`` pairs defined on a path item."""
        for method in HTTP_METHODS:
            operation = item.get(method)
            if isinstance(operation, dict):
                yield method, operation

    @staticmethod
    def parameters(item: Mapping[str, Any], operation: Mapping[str, Any]) -> list[Mapping[str, Any]]:
        """Path-level parameters followed by operation-level parameters."""
        return [*(item.get("parameters") or []), *(operation.get("parameters") or [])]

    def request_body_schemas(self, operation: Mapping[str, Any]) -> list[Mapping[str, Any]]:
        """Schemas of every request body media type, in declaration order.

        Swagger 2.0 bodies travel as ``in: body`` parameters and are reached
        through :meth:`parameters` instead.
        """
        if not self.is_openapi3:
            return []
        body = operation.get("requestBody") or {}
        return [
            media["schema"]
            for media in (body.get("content") or {}).values()
            if isinstance(media, dict) and media.get("schema")
        ]

    def response_schemas(self, operation: Mapping[str, Any]) -> list[list[Mapping[str, Any] | None]]:
        """Schemas per declared response, in declaration order.

        Each inner list holds one schema per media type (OpenAPI 3.x) or the
        single direct schema (Swagger 2.0); ``[None]`` marks a response
        without any schema.
        """
        result: list[list[Mapping[str, Any] | None]] = []
        for response in (operation.get("responses") or {}).values():
            if not isinstance(response, dict):
                continue
            content = response.get("content") if self.is_openapi3 else None
            if content:
                result.append([
                    media.get("schema") if isinstance(media, dict) else None
                    for media in content.values()
                ])
            elif response.get("schema"):
                result.append([response["schema"]])
            else:
                result.append([None])
        return result

    def parameter_type(self, param: Mapping[str, Any]) -> str | ParameterType:
        """Type description of a parameter in the document's dialect."""
        if self.is_openapi3:
            schema = param.get("schema") or {"type": "string"}
            return ParameterType(schema.get("type") or "string", schema.get("format"))
        return param.get("type") or "string"

