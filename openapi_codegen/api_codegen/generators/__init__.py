"""TypeScript generators for models and request wrappers."""

from .dto import DTOGenerator
from .request import (
    ENDPOINT_GENERATORS,
    ReadRequestGenerator,
    RequestGenerator,
    WriteRequestGenerator,
    create_request_generator,
)

__all__ = [
    "DTOGenerator",
    "ENDPOINT_GENERATORS",
    "ReadRequestGenerator",
    "RequestGenerator",
    "WriteRequestGenerator",
    "create_request_generator",
]
