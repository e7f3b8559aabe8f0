"""Discovery of the data models reachable from a filtered set of endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..shared.naming import ref_name
from .document import ApiDocument

logger = logging.getLogger(__name__)


class ModelReferenceWalker:
    """Walks the schema reference graph of an API document.

    Expansion is keyed by model name, so the walk terminates on cyclic
    schema graphs and visits a shared schema only once. State is reset on
    every :meth:`discover` call.
    """

    def __init__(self, document: ApiDocument) -> None:
        self.document = document
        self._model_refs: dict[str, None] = {}
        self._expanded: set[str] = set()

    def discover(self, path_pattern: str | None = None) -> set[str]:
        """Return the names of every model reachable from matching paths."""
        return set(self.discover_model_paths(path_pattern))

    def discover_model_paths(self, path_pattern: str | None = None) -> list[str]:
        """Like :meth:`discover`, ordered by first discovery."""
        self._model_refs = {}
        self._expanded = set()

        for _, item in self.document.matching_paths(path_pattern):
            for _, operation in self.document.operations(item):
                self._process_operation(item, operation)

        logger.debug("Discovered %d model references for %s", len(self._model_refs), path_pattern)
        return list(self._model_refs)

    def _process_operation(self, item: Mapping[str, Any], operation: Mapping[str, Any]) -> None:
        for param in self.document.parameters(item, operation):
            if isinstance(param, dict) and param.get("schema"):
                self._process_schema(param["schema"])

        for schema in self.document.request_body_schemas(operation):
            self._process_schema(schema)

        for schemas in self.document.response_schemas(operation):
            for schema in schemas:
                if schema:
                    self._process_schema(schema)

    def _process_schema(self, schema: Any) -> None:
        if not isinstance(schema, dict):
            return

        ref = schema.get("$ref")
        if ref:
            name = ref_name(ref)
            self._model_refs.setdefault(name, None)
            if name not in self._expanded:
                self._expanded.add(name)
                referenced = self.document.schema(name)
                if referenced:
                    self._process_schema(referenced)
            return

        if schema.get("type") == "array" and schema.get("items"):
            self._process_schema(schema["items"])
            return

        for key in ("allOf", "oneOf", "anyOf"):
            for sub_schema in schema.get(key) or []:
                self._process_schema(sub_schema)

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            self._process_schema(additional)

        for prop_schema in (schema.get("properties") or {}).values():
            self._process_schema(prop_schema)


def discover_models(spec: Mapping[str, Any], path_pattern: str | None = None) -> set[str]:
    """Discover the model names reachable from endpoints matching ``path_pattern``."""
    return ModelReferenceWalker(ApiDocument.from_spec(spec)).discover(path_pattern)
