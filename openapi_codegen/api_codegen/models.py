"""Value objects passed between the generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ParameterLocation = Literal["path", "query", "header", "cookie", "body"]


@dataclass(frozen=True, slots=True)
class GeneratedOutput:
    """One generated file, ready to be written by the caller."""

    content: str
    path: str
    filename: str


@dataclass(frozen=True, slots=True)
class ImportStatement:
    """An import of ``name`` from module ``path``."""

    name: str
    path: str
    is_default: bool = False
    is_type_only: bool = False


@dataclass(frozen=True, slots=True)
class ModelProperty:
    """A property of a generated model declaration."""

    property_name: str
    type: str
    is_optional: bool
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ParameterType:
    """OpenAPI 3.x parameter type taken from the parameter's schema."""

    type: str
    format: str | None = None


@dataclass(frozen=True, slots=True)
class EndpointParameter:
    """A request parameter normalized across spec dialects."""

    name: str
    location: ParameterLocation
    is_optional: bool
    type: str | ParameterType = "string"
    description: str | None = None

    @property
    def in_url(self) -> bool:
        return self.location in ("query", "path")


@dataclass(frozen=True, slots=True)
class EndpointDefinition:
    """One endpoint/method pair selected for wrapper generation."""

    path: str
    method: str
    name: str
    parameters: tuple[EndpointParameter, ...] = ()
    response_types: tuple[str, ...] = ()
    request_body: str | None = None
    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    url_parameters: tuple[EndpointParameter, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "url_parameters", tuple(p for p in self.parameters if p.in_url)
        )

    @property
    def response_type(self) -> str:
        """The response type that drives the wrapper: the first one declared."""
        return self.response_types[0] if self.response_types else "void"

    @property
    def wrapper_name(self) -> str:
        return f"{self.name}WebServiceRequest"

    @property
    def query_params_name(self) -> str:
        return f"{self.name}QueryParams"
