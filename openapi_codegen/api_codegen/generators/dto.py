"""Generator for the data-model declarations (DTOs)."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from ...config import CodegenOptions
from ...shared.naming import get_model_path_and_name, join_path, sanitize_property_name
from ..code_builder import CodeBuilder
from ..models import GeneratedOutput, ImportStatement, ModelProperty
from .base import (
    BaseGenerator,
    own_properties,
    parent_refs,
    property_refs,
    resolve_property_type,
)

logger = logging.getLogger(__name__)


class DTOGenerator(BaseGenerator):
    """Emits one TypeScript declaration file per model.

    ``allOf`` schemas become intersection types whose referenced parents are
    emitted first; everything else becomes an interface. Each model is
    emitted at most once per generator instance, and a model that is still
    being emitted higher up the call stack is skipped, which breaks cycles.
    """

    def __init__(
        self,
        definitions: Mapping[str, Any],
        options: CodegenOptions,
        source: str | None = None,
    ) -> None:
        super().__init__(options, source)
        self.definitions = definitions
        self._processed: set[str] = set()
        self._in_progress: set[str] = set()
        self._outputs: list[GeneratedOutput] = []

    def generate(self, items: Iterable[str]) -> list[GeneratedOutput]:
        """Emit every named model, parents ahead of their children."""
        start = len(self._outputs)
        for model in items:
            self.emit(model)
        return self._outputs[start:]

    def emit(self, model: str) -> GeneratedOutput | None:
        """Emit one model by its full dictionary name.

        Returns ``None`` when the model was already emitted, is in flight,
        or has no definition.
        """
        if model in self._processed or model in self._in_progress:
            return None

        definition = self.definitions.get(model)
        if not isinstance(definition, dict):
            logger.warning("Definition not found for model: %s", model)
            return None

        self._in_progress.add(model)
        try:
            output = self._build_output(model, definition)
        finally:
            self._in_progress.discard(model)

        self._processed.add(model)
        self._outputs.append(output)
        return output

    def _build_output(self, model: str, definition: Mapping[str, Any]) -> GeneratedOutput:
        model_name = get_model_path_and_name(model).model_name
        imports: list[ImportStatement] = []

        base_type = ""
        for parent in parent_refs(definition):
            self.emit(parent)
            imports.append(self.dto_import(parent))
            parent_name = get_model_path_and_name(parent).model_name
            base_type = f"{base_type} & {parent_name}" if base_type else parent_name

        properties, property_imports = self._collect_properties(definition)
        imports.extend(property_imports)

        builder = self.new_builder()
        self.add_file_header(builder)
        self.add_import_statements(builder, imports, model_name)

        if base_type:
            self._generate_type_definition(builder, model_name, properties, base_type)
        else:
            self._generate_interface_definition(builder, model_name, properties)

        return GeneratedOutput(
            content=builder.build(),
            path=join_path(self.dto_directory(model), f"{model_name}.ts"),
            filename=model_name,
        )

    def _collect_properties(
        self, definition: Mapping[str, Any]
    ) -> tuple[list[ModelProperty], list[ImportStatement]]:
        schemas, required = own_properties(definition)

        properties: list[ModelProperty] = []
        imports: list[ImportStatement] = []
        for name, schema in schemas.items():
            if not isinstance(schema, dict):
                schema = {}
            is_optional = name not in required or bool(schema.get("nullable"))
            imports.extend(self.dto_import(ref) for ref in property_refs(schema))
            properties.append(ModelProperty(
                property_name=sanitize_property_name(name),
                type=resolve_property_type(schema),
                is_optional=is_optional,
                description=schema.get("description"),
            ))
        return properties, imports

    def _generate_interface_definition(
        self,
        builder: CodeBuilder,
        model_name: str,
        properties: list[ModelProperty],
    ) -> None:
        with builder.create_interface(
            model_name,
            description=self.doc(f"Interface representing a {model_name} model"),
        ):
            for prop in properties:
                builder.create_interface_property(
                    prop.property_name,
                    prop.type,
                    optional=prop.is_optional,
                    description=self.doc(prop.description),
                )

    def _generate_type_definition(
        self,
        builder: CodeBuilder,
        model_name: str,
        properties: list[ModelProperty],
        base_type: str,
    ) -> None:
        description = self.doc(f"Type representing a {model_name} model")
        if not properties:
            builder.create_type_alias(model_name, base_type, description=description)
            return

        if description:
            builder.create_jsdoc_block(description)
        with builder.block(f"export type {model_name} = {base_type} &", closing="};"):
            for prop in properties:
                builder.create_interface_property(
                    prop.property_name,
                    prop.type,
                    optional=prop.is_optional,
                    description=self.doc(prop.description),
                )
