"""Helpers shared by the model and request-wrapper generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Final, Iterable, Mapping, Sequence

from ...config import CodegenOptions
from ...shared.naming import (
    create_correct_path,
    get_model_path_and_name,
    join_path,
    ref_name,
)
from ..code_builder import CodeBuilder
from ..models import GeneratedOutput, ImportStatement

# Capitalized primitive names produced by normalize_schema_type for non-$ref schemas
PRIMITIVE_PLACEHOLDERS: Final[frozenset[str]] = frozenset({
    "String", "Integer", "Number", "Boolean", "Object", "Array", "File",
})

# Base classes of the generated wrappers live next to the web-service layer
DATA_SERVICE_PATH: Final[str] = "data-access/data-service"

_PRIMITIVE_TYPES: Final[dict[str, str]] = {
    "integer": "number",
    "number": "number",
    "string": "string",
    "boolean": "boolean",
    "object": "Record<string, any>",
    "array": "Array<any>",
    # Swagger 2.0 only
    "file": "Blob",
}


def map_primitive_type(schema_type: str | None, schema_format: str | None = None) -> str:
    """Map an OpenAPI primitive type to its TypeScript spelling.

    Examples:
        >>> map_primitive_type("integer")
        'number'
        >>> map_primitive_type("string", "binary")
        'Blob'
    """
    if schema_type == "string" and schema_format == "binary":
        return "Blob"
    return _PRIMITIVE_TYPES.get(schema_type or "", "any")


def normalize_schema_type(schema: Mapping[str, Any] | None) -> str:
    """Reduce a response schema to a model name or primitive placeholder.

    ``$ref`` schemas become the referenced dictionary key, typed schemas the
    capitalized primitive (``String``, ``Array``...), anything else ``void``.
    """
    if not schema:
        return "void"
    if schema.get("$ref"):
        return ref_name(schema["$ref"])
    schema_type = schema.get("type")
    if isinstance(schema_type, str) and schema_type:
        return schema_type[0].upper() + schema_type[1:]
    return "void"


def is_pdf_response(response_type: str) -> bool:
    """Whether a response is treated as a binary document stream.

    This is a substring match on the type name, so any model whose name
    contains ``Stream`` is routed to the PDF base class.
    """
    return "Stream" in response_type


def resolve_property_type(schema: Mapping[str, Any]) -> str:
    """TypeScript type of a property schema."""
    if schema.get("$ref"):
        return get_model_path_and_name(ref_name(schema["$ref"])).model_name

    schema_type = schema.get("type")
    if schema_type == "array":
        items = schema.get("items") or {}
        if items.get("$ref"):
            item_type = get_model_path_and_name(ref_name(items["$ref"])).model_name
        else:
            item_type = map_primitive_type(items.get("type") or "any", items.get("format"))
        return f"{item_type}[]"

    additional = schema.get("additionalProperties")
    if schema_type == "object" and additional:
        value_type = resolve_property_type(additional) if isinstance(additional, dict) else "any"
        return f"Record<string, {value_type}>"

    return map_primitive_type(schema_type, schema.get("format"))


def property_refs(schema: Mapping[str, Any]) -> list[str]:
    """Model names a property schema needs imported."""
    if schema.get("$ref"):
        return [ref_name(schema["$ref"])]
    if schema.get("type") == "array":
        items = schema.get("items") or {}
        return [ref_name(items["$ref"])] if items.get("$ref") else []
    additional = schema.get("additionalProperties")
    if schema.get("type") == "object" and isinstance(additional, dict):
        return property_refs(additional)
    return []


def parent_refs(schema: Mapping[str, Any]) -> list[str]:
    """Full dictionary names of the ``allOf`` members that are references."""
    return [
        ref_name(member["$ref"])
        for member in schema.get("allOf") or []
        if isinstance(member, dict) and member.get("$ref")
    ]


def own_properties(schema: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Properties and required names declared by the schema itself.

    Inline ``allOf`` members contribute too; referenced parents do not.
    """
    members = [schema]
    members.extend(
        member
        for member in schema.get("allOf") or []
        if isinstance(member, dict) and not member.get("$ref")
    )

    properties: dict[str, Any] = {}
    required: list[str] = []
    for member in members:
        properties.update(member.get("properties") or {})
        for name in member.get("required") or []:
            if name not in required:
                required.append(name)
    return properties, required


def collect_property_names(
    definitions: Mapping[str, Any],
    model_name: str,
    _seen: set[str] | None = None,
) -> list[str]:
    """Every property name of a model, inherited ones first."""
    seen = _seen if _seen is not None else set()
    if model_name in seen:
        return []
    seen.add(model_name)

    schema = definitions.get(model_name)
    if not schema:
        return []

    names: list[str] = []
    for parent in parent_refs(schema):
        for name in collect_property_names(definitions, parent, seen):
            if name not in names:
                names.append(name)
    for name in own_properties(schema)[0]:
        if name not in names:
            names.append(name)
    return names


class BaseGenerator(ABC):
    """Common plumbing: options, builder creation, header and imports."""

    def __init__(self, options: CodegenOptions, source: str | None = None) -> None:
        self.options = options
        self.source = source

    @abstractmethod
    def generate(self, items: Iterable[str]) -> list[GeneratedOutput]:
        """Produce the output records for ``items``."""

    def new_builder(self) -> CodeBuilder:
        return CodeBuilder(self.options.indentation)

    def doc(self, text: str | Sequence[str] | None) -> str | Sequence[str] | None:
        """Pass documentation through only when JSDoc output is enabled."""
        return text if self.options.generate_js_doc else None

    def add_file_header(self, builder: CodeBuilder) -> None:
        if self.options.generate_comments:
            builder.create_file_header(self.source)
            builder.append_empty_line()

    def add_import_statements(
        self,
        builder: CodeBuilder,
        imports: Iterable[ImportStatement],
        current_name: str,
    ) -> None:
        """Write imports, dropping duplicates and imports of the file itself."""
        unique: list[ImportStatement] = []
        seen: set[tuple[str, str]] = set()
        for imp in imports:
            key = (imp.name, imp.path)
            if imp.name == current_name or key in seen:
                continue
            seen.add(key)
            unique.append(imp)
        builder.create_imports(unique)

    def dto_directory(self, model: str) -> str:
        model_path, _ = get_model_path_and_name(model)
        return join_path(self.options.output_path, "dto", create_correct_path(model_path))

    def dto_import(self, model: str) -> ImportStatement:
        """Named import of a model from its generated declaration file."""
        model_name = get_model_path_and_name(model).model_name
        return ImportStatement(model_name, join_path(self.dto_directory(model), model_name))

    @staticmethod
    def base_class_import(name: str) -> ImportStatement:
        return ImportStatement(name, join_path(DATA_SERVICE_PATH, name), is_default=True)
