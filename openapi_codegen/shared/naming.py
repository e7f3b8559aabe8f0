"""Naming and path utilities for code generation."""

from __future__ import annotations

import posixpath
import re
from functools import lru_cache
from typing import NamedTuple

# Legacy .NET collection wrapper, e.g.
# System.Collections.Generic.IEnumerable`1[[Api.Models.User, Api, Version=1.0]]
COLLECTION_WRAPPER: str = "System.Collections.Generic.IEnumerable"

_CAMELIZE_PATTERN = re.compile(r"(?:^\w|[A-Z]|\b\w)")
_IDENTIFIER_PARTS = re.compile(r"[A-Za-z0-9]+")


class ModelPathAndName(NamedTuple):
    """A qualified name split into its hierarchical path and leaf name."""

    model_path: str
    model_name: str


@lru_cache(maxsize=1024)
def get_model_path_and_name(model: str, divider: str = ".") -> ModelPathAndName:
    """Split a qualified model name on the last divider.

    Examples:
        >>> get_model_path_and_name("Namespace.Sub.Model")
        ModelPathAndName(model_path='Namespace.Sub', model_name='Model')
        >>> get_model_path_and_name("/auth/Login", "/")
        ModelPathAndName(model_path='/auth', model_name='Login')
    """
    if COLLECTION_WRAPPER in model:
        start = model.rfind("[[") + 2
        end = model.find(",", start)
        model = model[start:end] if end != -1 else model[start:].rstrip("]")

    last_index = model.rfind(divider)
    if last_index == -1:
        return ModelPathAndName("", model)
    return ModelPathAndName(model[:last_index], model[last_index + 1:])


def ref_name(ref: str) -> str:
    """Return the dictionary key a ``$ref`` string points at."""
    return ref[ref.rfind("/") + 1:]


@lru_cache(maxsize=1024)
def camelize(value: str) -> str:
    """Lower-case the first character and upper-case every word start.

    Examples:
        >>> camelize("MyNamespace")
        'myNamespace'
        >>> camelize("user profile")
        'userProfile'
    """

    def _replace(match: re.Match[str]) -> str:
        word = match.group(0)
        return word.lower() if match.start() == 0 else word.upper()

    return re.sub(r"\s+", "", _CAMELIZE_PATTERN.sub(_replace, value))


@lru_cache(maxsize=1024)
def create_correct_path(model_path: str) -> str:
    """Convert a dotted or slashed model path into an output directory path.

    All-uppercase segments are lower-cased, other segments are camelized and
    path-template braces are dropped.

    Examples:
        >>> create_correct_path("Api.DTO.UserAccount")
        'api/dto/userAccount'
    """
    segments = model_path.replace(".", "/").split("/")
    result = []
    for segment in segments:
        segment = segment.strip("{}")
        if segment == segment.upper():
            result.append(segment.lower())
        else:
            result.append(camelize(segment))
    return "/".join(result)


def join_path(*parts: str) -> str:
    """Join output path fragments, ignoring empty ones."""
    cleaned = [part.strip("/") for part in parts if part and part.strip("/")]
    if not cleaned:
        return ""
    joined = posixpath.join(*cleaned)
    return "/" + joined if parts[0].startswith("/") else joined


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert an arbitrary path segment into a PascalCase identifier.

    Examples:
        >>> to_pascal_case("Login")
        'Login'
        >>> to_pascal_case("{userId}")
        'UserId'
        >>> to_pascal_case("reset-password")
        'ResetPassword'
    """
    parts = _IDENTIFIER_PARTS.findall(value)
    result = "".join(part[0].upper() + part[1:] for part in parts)
    if result and result[0].isdigit():
        result = f"_{result}"
    return result


@lru_cache(maxsize=1024)
def sanitize_property_name(name: str) -> str:
    """Sanitize a schema property name for use as a TypeScript member."""
    return name.replace(".", "_")


def regex_filter(text: str, pattern: str | None) -> bool:
    """Check whether ``text`` matches ``pattern`` anchored at both ends."""
    if pattern is None:
        return True
    return re.fullmatch(pattern, text) is not None
