"""TypeScript source assembly with consistent indentation.

``CodeBuilder`` is a stateful text buffer: generators append lines, open
braced blocks and emit declaration shapes, then call :meth:`CodeBuilder.build`
to take the accumulated text, which also resets the builder.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final, Iterable, Iterator, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from .models import ImportStatement

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def _file_header_template() -> Template:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        auto_reload=False,
    )
    return env.get_template("file_header.ts.j2")


def _comment_lines(lines: Iterable[str]) -> list[str]:
    """Split multi-line text and escape ``*/`` so it cannot close the comment."""
    return [
        part.replace("*/", "*\\/")
        for line in lines
        for part in str(line).splitlines() or [""]
    ]


@dataclass(frozen=True, slots=True)
class MethodParam:
    """A parameter in a generated method signature."""

    name: str
    type: str
    optional: bool = False
    default_value: str | None = None

    def render(self) -> str:
        rendered = f"{self.name}{'?' if self.optional else ''}: {self.type}"
        if self.default_value:
            rendered += f" = {self.default_value}"
        return rendered


class CodeBuilder:
    """Accumulates TypeScript source text."""

    __slots__ = ("_indent_string", "_indent_level", "_lines")

    def __init__(self, indent_size: int = 2) -> None:
        self._indent_string = " " * max(1, indent_size)
        self._indent_level = 0
        self._lines: list[str] = []

    # -------------------- Buffer -------------------------------------

    def append_line(self, line: str) -> CodeBuilder:
        self._lines.append(self._indent_string * self._indent_level + line)
        return self

    def append_lines(self, lines: Iterable[str]) -> CodeBuilder:
        for line in lines:
            self.append_line(line)
        return self

    def append_empty_line(self) -> CodeBuilder:
        self._lines.append("")
        return self

    def indent_by(self, count: int) -> CodeBuilder:
        """Change the indentation level, never going below zero."""
        self._indent_level = max(0, self._indent_level + count)
        return self

    def set_indent_level(self, level: int) -> CodeBuilder:
        self._indent_level = max(0, level)
        return self

    def build(self, reset: bool = True) -> str:
        """Return the accumulated text, resetting the builder by default."""
        result = "".join(f"{line}\n" for line in self._lines)
        if reset:
            self.reset()
        return result

    def reset(self) -> CodeBuilder:
        self._indent_level = 0
        self._lines = []
        return self

    @contextmanager
    def block(self, opening_line: str, closing: str = "}") -> Iterator[CodeBuilder]:
        """Open a braced block; the body is indented one level."""
        self.append_line(f"{opening_line} {{")
        self.indent_by(1)
        try:
            yield self
        finally:
            self.indent_by(-1)
            self.append_line(closing)

    # -------------------- Documentation ------------------------------

    def create_jsdoc_block(
        self,
        description: str | Sequence[str] | None = None,
        tags: Sequence[tuple[str, str]] = (),
    ) -> CodeBuilder:
        self.append_line("/**")
        desc_lines = _comment_lines(
            [description] if isinstance(description, str) else list(description or [])
        )
        for line in desc_lines:
            self.append_line(f" * {line}".rstrip())
        if tags and desc_lines:
            self.append_line(" *")
        for tag, text in tags:
            self.append_line(f" * @{tag} {text}")
        self.append_line(" */")
        return self

    def create_comment_block(self, lines: Sequence[str]) -> CodeBuilder:
        if not lines:
            return self
        self.append_line("/*")
        for line in _comment_lines(lines):
            self.append_line(f" * {line}".rstrip())
        self.append_line(" */")
        return self

    def create_comment(self, text: str) -> CodeBuilder:
        return self.append_line(f"// {text}")

    def create_file_header(self, source: str | None = None) -> CodeBuilder:
        """Append the generated-file notice."""
        rendered = _file_header_template().render(source=source)
        return self.append_lines(rendered.splitlines())

    def create_imports(self, imports: Sequence[ImportStatement]) -> CodeBuilder:
        """Append import statements grouped by module path.

        Default imports come before named imports; a group whose items are
        all type-only becomes ``import type``.
        """
        if not imports:
            return self

        by_path: dict[str, list[ImportStatement]] = {}
        for imp in imports:
            by_path.setdefault(imp.path, []).append(imp)

        for path, items in by_path.items():
            type_prefix = "type " if all(i.is_type_only for i in items) else ""
            defaults = [i.name for i in items if i.is_default]
            named = [i.name for i in items if not i.is_default]

            clause = ", ".join(defaults)
            if named:
                clause += (", " if clause else "") + f"{{ {', '.join(named)} }}"
            self.append_line(f"import {type_prefix}{clause} from '{path}';")

        return self.append_empty_line()

    # -------------------- Declarations -------------------------------

    def _description(self, description: str | Sequence[str] | None) -> None:
        if description:
            self.create_jsdoc_block(description)

    @contextmanager
    def create_class(
        self,
        name: str,
        *,
        exported: bool = True,
        extends: str | None = None,
        implements: Sequence[str] = (),
        type_params: str | None = None,
        abstract: bool = False,
        description: str | Sequence[str] | None = None,
        decorators: Sequence[str] = (),
    ) -> Iterator[CodeBuilder]:
        self._description(description)
        self.append_lines(decorators)

        declaration = "abstract " if abstract else ""
        declaration += "export " if exported else ""
        declaration += f"class {name}"
        if type_params:
            declaration += f"<{type_params}>"
        if extends:
            declaration += f" extends {extends}"
        if implements:
            declaration += f" implements {', '.join(implements)}"

        with self.block(declaration):
            yield self

    @contextmanager
    def create_method(
        self,
        name: str,
        *,
        params: Sequence[MethodParam] = (),
        return_type: str | None = None,
        access: str | None = None,
        static: bool = False,
        is_async: bool = False,
        override: bool = False,
        description: str | None = None,
        param_descriptions: dict[str, str] | None = None,
        return_description: str | None = None,
    ) -> Iterator[CodeBuilder]:
        if description or param_descriptions or return_description:
            tags: list[tuple[str, str]] = []
            for param in params:
                if param_descriptions and param.name in param_descriptions:
                    tags.append(("param", f"{param.name} - {param_descriptions[param.name]}"))
            if return_type and return_type != "void" and return_description:
                tags.append(("returns", return_description))
            self.create_jsdoc_block(description, tags)

        modifiers = [
            modifier
            for modifier, enabled in (
                ("override", override),
                (access, bool(access)),
                ("static", static),
                ("async", is_async),
            )
            if enabled
        ]
        signature = " ".join([*modifiers, name])
        signature += f"({', '.join(p.render() for p in params)})"
        if return_type:
            signature += f": {return_type}"

        with self.block(signature):
            yield self

    def create_property(
        self,
        name: str,
        type: str,
        *,
        access: str | None = None,
        static: bool = False,
        readonly: bool = False,
        optional: bool = False,
        initializer: str | None = None,
        description: str | None = None,
    ) -> CodeBuilder:
        self._description(description)
        declaration = f"{access} " if access else ""
        declaration += "static " if static else ""
        declaration += "readonly " if readonly else ""
        declaration += f"{name}{'?' if optional else ''}: {type}"
        if initializer:
            declaration += f" = {initializer}"
        return self.append_line(f"{declaration};")

    @contextmanager
    def create_interface(
        self,
        name: str,
        *,
        exported: bool = True,
        extends: Sequence[str] = (),
        type_params: str | None = None,
        description: str | None = None,
    ) -> Iterator[CodeBuilder]:
        self._description(description)
        declaration = "export " if exported else ""
        declaration += f"interface {name}"
        if type_params:
            declaration += f"<{type_params}>"
        if extends:
            declaration += f" extends {', '.join(extends)}"

        with self.block(declaration):
            yield self

    def create_interface_property(
        self,
        name: str,
        type: str,
        *,
        optional: bool = False,
        readonly: bool = False,
        description: str | None = None,
    ) -> CodeBuilder:
        self._description(description)
        declaration = "readonly " if readonly else ""
        declaration += f"{name}{'?' if optional else ''}: {type};"
        return self.append_line(declaration)

    def create_type_alias(
        self,
        name: str,
        type: str,
        *,
        exported: bool = True,
        type_params: str | None = None,
        description: str | None = None,
    ) -> CodeBuilder:
        self._description(description)
        declaration = "export " if exported else ""
        declaration += f"type {name}"
        if type_params:
            declaration += f"<{type_params}>"
        self.append_line(f"{declaration} = {type};")
        return self.append_empty_line()
