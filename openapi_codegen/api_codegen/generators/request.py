"""Generators for the typed request-wrapper classes.

Two variants exist: read-style wrappers (GET, DELETE) carry only URL
parameters, write-style wrappers (POST, PUT) additionally carry a payload
copied into the request body by ``setupBody``.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Iterable, Mapping

from ...config import CodegenOptions
from ...shared.naming import (
    create_correct_path,
    get_model_path_and_name,
    join_path,
    ref_name,
    sanitize_property_name,
    to_pascal_case,
)
from ..code_builder import CodeBuilder, MethodParam
from ..document import ApiDocument
from ..models import (
    EndpointDefinition,
    EndpointParameter,
    GeneratedOutput,
    ImportStatement,
)
from .base import (
    PRIMITIVE_PLACEHOLDERS,
    BaseGenerator,
    collect_property_names,
    is_pdf_response,
    map_primitive_type,
    normalize_schema_type,
)

logger = logging.getLogger(__name__)

JSON_BASE_CLASS: Final[str] = "JsonWebServiceRequest"
PDF_BASE_CLASS: Final[str] = "PdfWebServiceRequest"


class RequestGenerator(BaseGenerator):
    """Resolution and emission shared by both wrapper variants."""

    default_method: str = "get"

    def __init__(
        self,
        document: ApiDocument,
        options: CodegenOptions,
        method: str | None = None,
        source: str | None = None,
    ) -> None:
        super().__init__(options, source)
        self.document = document
        self.method = method or self.default_method

    def generate(self, items: str | Iterable[str]) -> list[GeneratedOutput]:
        """Emit a wrapper for every endpoint matching any of the patterns."""
        patterns = [items] if isinstance(items, str) else list(items)
        return [
            self.emit(endpoint, self.document.base_path)
            for pattern in patterns
            for endpoint in self.resolve(pattern)
        ]

    def resolve(self, path_pattern: str | None) -> list[EndpointDefinition]:
        """Endpoints of this generator's method whose path fully matches."""
        endpoints: list[EndpointDefinition] = []
        for path, item in self.document.matching_paths(path_pattern):
            operation = item.get(self.method)
            if not isinstance(operation, dict):
                continue
            endpoints.append(EndpointDefinition(
                path=path,
                method=self.method,
                name=self.endpoint_name(path, item),
                parameters=self.extract_parameters(item, operation),
                response_types=self.extract_response_types(operation),
                request_body=self.extract_request_body(item, operation),
                operation_id=operation.get("operationId"),
                summary=operation.get("summary"),
                description=operation.get("description"),
            ))
        return endpoints

    def emit(self, endpoint: EndpointDefinition, base_path: str) -> GeneratedOutput:
        """Render one wrapper file."""
        endpoint_dir = get_model_path_and_name(endpoint.path, "/").model_path
        builder = self.new_builder()

        self.add_file_header(builder)
        self.add_import_statements(builder, self.generate_imports(endpoint), endpoint.wrapper_name)

        if endpoint.url_parameters:
            self._generate_query_params_interface(builder, endpoint)

        with builder.create_class(
            endpoint.wrapper_name,
            extends=self.base_class(endpoint),
            description=self.doc(self._class_description(endpoint)),
        ):
            self.generate_class_body(builder, endpoint, base_path)

        builder.append_empty_line()
        builder.append_line(f"export default {endpoint.wrapper_name};")

        api_name = base_path.rstrip("/")
        api_name = api_name[api_name.rfind("/") + 1:]
        return GeneratedOutput(
            content=builder.build(),
            path=join_path(
                self.options.output_path,
                "request",
                create_correct_path(api_name),
                create_correct_path(endpoint_dir),
                f"{endpoint.wrapper_name}.ts",
            ),
            filename=endpoint.wrapper_name,
        )

    # -------------------- Resolution ---------------------------------

    def endpoint_name(self, path: str, item: Mapping[str, Any]) -> str:
        """Identifier prefix of the wrapper for ``path``.

        PUT and DELETE wrappers, and POST wrappers next to a GET on the same
        path, get the method appended so every pair owns its own file.
        """
        leaf = to_pascal_case(get_model_path_and_name(path, "/").model_name) or "Root"
        if self.method in ("put", "delete") or (
            self.method == "post" and isinstance(item.get("get"), dict)
        ):
            leaf += self.method.capitalize()
        return leaf

    def extract_parameters(
        self, item: Mapping[str, Any], operation: Mapping[str, Any]
    ) -> tuple[EndpointParameter, ...]:
        return tuple(
            EndpointParameter(
                name=param.get("name", ""),
                location=param.get("in", "query"),
                is_optional=not param.get("required", False),
                type=self.document.parameter_type(param),
                description=param.get("description"),
            )
            for param in self.document.parameters(item, operation)
            if isinstance(param, dict)
        )

    def extract_response_types(self, operation: Mapping[str, Any]) -> tuple[str, ...]:
        return tuple(
            normalize_schema_type(schema)
            for schemas in self.document.response_schemas(operation)
            for schema in schemas
        )

    def extract_request_body(
        self, item: Mapping[str, Any], operation: Mapping[str, Any]
    ) -> str | None:
        return None

    # -------------------- Emission -----------------------------------

    def response_model(self, endpoint: EndpointDefinition) -> str | None:
        """Full name of the response model, if the response is a model."""
        response = endpoint.response_type
        if response == "void" or response in PRIMITIVE_PLACEHOLDERS:
            return None
        return response

    def base_class(self, endpoint: EndpointDefinition) -> str:
        """The ``extends`` clause of the wrapper class.

        No-content responses and stream responses extend the base class
        without a generic argument.
        """
        response = endpoint.response_type
        if is_pdf_response(response):
            return PDF_BASE_CLASS
        if response == "void":
            return JSON_BASE_CLASS
        if response in PRIMITIVE_PLACEHOLDERS:
            return f"{JSON_BASE_CLASS}<{map_primitive_type(response.lower())}>"
        return f"{JSON_BASE_CLASS}<{get_model_path_and_name(response).model_name}>"

    def generate_imports(self, endpoint: EndpointDefinition) -> list[ImportStatement]:
        is_pdf = is_pdf_response(endpoint.response_type)
        imports = [self.base_class_import(PDF_BASE_CLASS if is_pdf else JSON_BASE_CLASS)]
        response = self.response_model(endpoint)
        if response and not is_pdf:
            imports.append(self.dto_import(response))
        return imports

    def generate_class_body(
        self, builder: CodeBuilder, endpoint: EndpointDefinition, base_path: str
    ) -> None:
        if endpoint.url_parameters:
            self._generate_query_params_property(builder, endpoint)
        self._generate_constructor(builder, endpoint, base_path)
        if endpoint.url_parameters:
            builder.append_empty_line()
            self._generate_setup_url_method(builder, endpoint)

    def _class_description(self, endpoint: EndpointDefinition) -> list[str]:
        lines = [f"Request class for {endpoint.path}"]
        if endpoint.summary:
            lines.append(endpoint.summary)
        return lines

    def _generate_constructor(
        self, builder: CodeBuilder, endpoint: EndpointDefinition, base_path: str
    ) -> None:
        with builder.create_method("constructor"):
            builder.append_line(
                f"super('{endpoint.method.upper()}', '{base_path}{endpoint.path}');"
            )

    def _generate_query_params_interface(
        self, builder: CodeBuilder, endpoint: EndpointDefinition
    ) -> None:
        with builder.create_interface(
            endpoint.query_params_name,
            description=self.doc(f"Query parameters for {endpoint.name} request"),
        ):
            for param in endpoint.url_parameters:
                builder.create_interface_property(
                    sanitize_property_name(param.name),
                    self._parameter_type(param),
                    optional=param.is_optional,
                    description=self.doc(param.description),
                )
        builder.append_empty_line()

    def _generate_query_params_property(
        self, builder: CodeBuilder, endpoint: EndpointDefinition
    ) -> None:
        builder.create_property(
            "queryParams",
            endpoint.query_params_name,
            optional=not self.options.use_strict_types,
            description=self.doc("Query parameters"),
        )
        builder.append_empty_line()

    def _generate_setup_url_method(
        self, builder: CodeBuilder, endpoint: EndpointDefinition
    ) -> None:
        with builder.create_method(
            "setupURL",
            params=[MethodParam("url", "URL")],
            return_type="void",
            description=self.doc("Appends query parameters to the URL"),
        ):
            for param in endpoint.url_parameters:
                chain = "?" if param.is_optional or not self.options.use_strict_types else ""
                builder.append_line(
                    f"this.appendIfNotEmpty(url, '{param.name}', "
                    f"this.queryParams{chain}.{sanitize_property_name(param.name)});"
                )

    @staticmethod
    def _parameter_type(param: EndpointParameter) -> str:
        if isinstance(param.type, str):
            return map_primitive_type(param.type)
        return map_primitive_type(param.type.type, param.type.format)


class ReadRequestGenerator(RequestGenerator):
    """GET and DELETE wrappers: URL parameters only."""

    default_method = "get"


class WriteRequestGenerator(RequestGenerator):
    """POST and PUT wrappers: URL parameters plus a request payload."""

    default_method = "post"

    def extract_request_body(
        self, item: Mapping[str, Any], operation: Mapping[str, Any]
    ) -> str | None:
        """Model name of the first referenced request body schema."""
        for schema in self.document.request_body_schemas(operation):
            if schema.get("$ref"):
                return ref_name(schema["$ref"])

        if not self.document.is_openapi3:
            for param in self.document.parameters(item, operation):
                if not isinstance(param, dict) or param.get("in") != "body":
                    continue
                schema = param.get("schema")
                if isinstance(schema, dict) and schema.get("$ref"):
                    return ref_name(schema["$ref"])
        return None

    def generate_imports(self, endpoint: EndpointDefinition) -> list[ImportStatement]:
        is_pdf = is_pdf_response(endpoint.response_type)
        imports = [self.base_class_import(PDF_BASE_CLASS if is_pdf else JSON_BASE_CLASS)]

        payload_name = None
        if endpoint.request_body:
            imports.append(self.dto_import(endpoint.request_body))
            payload_name = get_model_path_and_name(endpoint.request_body).model_name

        response = self.response_model(endpoint)
        if response and not is_pdf and get_model_path_and_name(response).model_name != payload_name:
            imports.append(self.dto_import(response))
        return imports

    def generate_class_body(
        self, builder: CodeBuilder, endpoint: EndpointDefinition, base_path: str
    ) -> None:
        if endpoint.request_body:
            builder.create_property(
                "data",
                get_model_path_and_name(endpoint.request_body).model_name,
                optional=not self.options.use_strict_types,
                description=self.doc("Request data"),
            )
            builder.append_empty_line()

        super().generate_class_body(builder, endpoint, base_path)
        builder.append_empty_line()
        self._generate_setup_body_method(builder, endpoint)

    def _generate_setup_body_method(
        self, builder: CodeBuilder, endpoint: EndpointDefinition
    ) -> None:
        names: list[str] = []
        if endpoint.request_body:
            names = collect_property_names(self.document.definitions, endpoint.request_body)
            if endpoint.request_body not in self.document.definitions:
                logger.warning(
                    "Definition not found for request body %s of %s",
                    endpoint.request_body,
                    endpoint.path,
                )

        chain = "" if self.options.use_strict_types else "?"
        with builder.create_method(
            "setupBody",
            params=[MethodParam("body", "Record<string, any>")],
            return_type="void",
            description=self.doc("Sets up request body"),
        ):
            for name in names:
                builder.append_line(
                    f"this.setIfNotEmpty(body, '{name}', "
                    f"this.data{chain}.{sanitize_property_name(name)});"
                )


ENDPOINT_GENERATORS: Final[dict[str, type[RequestGenerator]]] = {
    "get": ReadRequestGenerator,
    "post": WriteRequestGenerator,
    "put": WriteRequestGenerator,
    "delete": ReadRequestGenerator,
}


def create_request_generator(
    method: str,
    document: ApiDocument,
    options: CodegenOptions,
    source: str | None = None,
) -> RequestGenerator:
    """Instantiate the wrapper variant registered for ``method``."""
    try:
        generator_class = ENDPOINT_GENERATORS[method]
    except KeyError:
        raise ValueError(f"Unsupported HTTP method: {method}") from None
    return generator_class(document, options, method=method, source=source)
