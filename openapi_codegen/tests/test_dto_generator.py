import logging

import pytest

from openapi_codegen.api_codegen.generators.base import (
    collect_property_names,
    map_primitive_type,
    normalize_schema_type,
    resolve_property_type,
)
from openapi_codegen.api_codegen.generators.dto import DTOGenerator
from openapi_codegen.config import CodegenOptions

BARE = CodegenOptions(generate_comments=False, generate_js_doc=False)


def _generator(definitions, options=BARE):
    return DTOGenerator(definitions, options)


class TestMapPrimitiveType:
    @pytest.mark.parametrize(
        "schema_type,schema_format,expected",
        [
            ("integer", None, "number"),
            ("number", "double", "number"),
            ("string", None, "string"),
            ("string", "date-time", "string"),
            ("string", "binary", "Blob"),
            ("boolean", None, "boolean"),
            ("object", None, "Record<string, any>"),
            ("array", None, "Array<any>"),
            ("file", None, "any"),
            (None, None, "any"),
        ],
    )
    def test_map_primitive_type(self, schema_type, schema_format, expected):
        assert map_primitive_type(schema_type, schema_format) == expected


class TestResolvePropertyType:
    @pytest.mark.parametrize(
        "schema,expected",
        [
            ({"$ref": "#/definitions/Api.Models.User"}, "User"),
            ({"type": "array", "items": {"$ref": "#/definitions/Role"}}, "Role[]"),
            ({"type": "array", "items": {"type": "integer"}}, "number[]"),
            ({"type": "array"}, "any[]"),
            ({"type": "object", "additionalProperties": True}, "Record<string, any>"),
            ({"type": "object", "additionalProperties": {"type": "integer"}}, "Record<string, number>"),
            ({"type": "object", "additionalProperties": {"$ref": "#/definitions/X"}}, "Record<string, X>"),
            ({"type": "object"}, "Record<string, any>"),
            ({"type": "string", "format": "binary"}, "Blob"),
            ({}, "any"),
        ],
    )
    def test_resolve_property_type(self, schema, expected):
        assert resolve_property_type(schema) == expected


class TestNormalizeSchemaType:
    @pytest.mark.parametrize(
        "schema,expected",
        [
            ({"$ref": "#/components/schemas/Api.Models.User"}, "Api.Models.User"),
            ({"type": "string"}, "String"),
            ({"type": "array", "items": {"type": "string"}}, "Array"),
            ({}, "void"),
            (None, "void"),
        ],
    )
    def test_normalize_schema_type(self, schema, expected):
        assert normalize_schema_type(schema) == expected


class TestCollectPropertyNames:
    def test_parents_first(self, users_spec):
        definitions = users_spec["components"]["schemas"]
        assert collect_property_names(definitions, "Api.Models.User") == [
            "id", "name", "nickname", "tags", "roles",
        ]

    def test_missing_model(self):
        assert collect_property_names({}, "Ghost") == []

    def test_inheritance_cycle(self):
        definitions = {
            "A": {"allOf": [{"$ref": "#/definitions/B"}], "properties": {"a": {"type": "string"}}},
            "B": {"allOf": [{"$ref": "#/definitions/A"}], "properties": {"b": {"type": "string"}}},
        }
        assert collect_property_names(definitions, "A") == ["b", "a"]


class TestDTOGenerator:
    def test_plain_interface(self, login_spec):
        outputs = _generator(login_spec["definitions"]).generate(["LoginRequest"])

        assert len(outputs) == 1
        output = outputs[0]
        assert output.filename == "LoginRequest"
        assert output.path == "data-access/web-service/dto/LoginRequest.ts"
        assert output.content == (
            "export interface LoginRequest {\n"
            "  username: string;\n"
            "  password: string;\n"
            "}\n"
        )

    def test_header_and_docs(self, login_spec):
        output = _generator(login_spec["definitions"], CodegenOptions()).emit("LoginResponse")
        assert output.content.startswith(
            "/**\n * This code was generated using a code generation tool.\n"
        )
        assert "/**\n * Interface representing a LoginResponse model\n */\n" in output.content
        assert "  token?: string;\n" in output.content

    def test_optionality(self):
        definitions = {
            "M": {
                "type": "object",
                "required": ["a", "b"],
                "properties": {
                    "a": {"type": "string"},
                    "b": {"type": "string", "nullable": True},
                    "c": {"type": "string"},
                },
            }
        }
        content = _generator(definitions).emit("M").content
        assert "  a: string;\n" in content
        assert "  b?: string;\n" in content
        assert "  c?: string;\n" in content

    def test_inheritance_linearization(self):
        definitions = {
            "Base": {"type": "object", "properties": {"id": {"type": "integer"}}},
            "Child": {
                "allOf": [
                    {"$ref": "#/definitions/Base"},
                    {"properties": {"x": {"type": "string"}}},
                ]
            },
        }
        outputs = _generator(definitions).generate(["Child"])

        assert [o.filename for o in outputs] == ["Base", "Child"]
        assert outputs[1].content == (
            "import { Base } from 'data-access/web-service/dto/Base';\n"
            "\n"
            "export type Child = Base & {\n"
            "  x?: string;\n"
            "};\n"
        )

    def test_inheritance_without_own_properties(self):
        definitions = {
            "A": {"type": "object"},
            "B": {"type": "object"},
            "AB": {"allOf": [{"$ref": "#/definitions/A"}, {"$ref": "#/definitions/B"}]},
        }
        outputs = _generator(definitions).generate(["AB"])
        assert [o.filename for o in outputs] == ["A", "B", "AB"]
        assert "export type AB = A & B;\n" in outputs[2].content

    def test_namespaced_models(self, users_spec):
        definitions = users_spec["components"]["schemas"]
        outputs = _generator(definitions, CodegenOptions(generate_comments=False)).generate(
            ["Api.Models.User"]
        )

        entity, user = outputs
        assert entity.path == "data-access/web-service/dto/api/models/Entity.ts"
        assert "  id: number;\n" in entity.content
        assert user.path == "data-access/web-service/dto/api/models/User.ts"
        assert user.content == (
            "import { Entity } from 'data-access/web-service/dto/api/models/Entity';\n"
            "import { Role } from 'data-access/web-service/dto/api/models/Role';\n"
            "\n"
            "/**\n"
            " * Type representing a User model\n"
            " */\n"
            "export type User = Entity & {\n"
            "  /**\n"
            "   * Display name\n"
            "   */\n"
            "  name: string;\n"
            "  nickname?: string;\n"
            "  tags?: string[];\n"
            "  roles?: Role[];\n"
            "};\n"
        )

    def test_mutual_references(self, cyclic_spec):
        definitions = cyclic_spec["components"]["schemas"]
        outputs = _generator(definitions).generate(["A", "B"])

        assert [o.filename for o in outputs] == ["A", "B"]
        assert "import { B } from 'data-access/web-service/dto/B';" in outputs[0].content
        assert "import { A } from 'data-access/web-service/dto/A';" in outputs[1].content

    def test_inheritance_cycle_terminates(self):
        definitions = {
            "A": {"allOf": [{"$ref": "#/definitions/B"}], "properties": {"a": {"type": "string"}}},
            "B": {"allOf": [{"$ref": "#/definitions/A"}], "properties": {"b": {"type": "string"}}},
        }
        outputs = _generator(definitions).generate(["A"])
        assert sorted(o.filename for o in outputs) == ["A", "B"]

    def test_self_reference_not_imported(self):
        definitions = {
            "Node": {
                "type": "object",
                "properties": {"children": {"type": "array", "items": {"$ref": "#/definitions/Node"}}},
            }
        }
        content = _generator(definitions).emit("Node").content
        assert "import" not in content
        assert "  children?: Node[];\n" in content

    def test_duplicate_imports_collapsed(self):
        definitions = {
            "Pair": {
                "type": "object",
                "properties": {
                    "left": {"$ref": "#/definitions/Item"},
                    "right": {"$ref": "#/definitions/Item"},
                },
            },
            "Item": {"type": "object"},
        }
        content = _generator(definitions).emit("Pair").content
        assert content.count("import { Item }") == 1

    def test_idempotent(self, login_spec):
        generator = _generator(login_spec["definitions"])
        assert len(generator.generate(["LoginRequest", "LoginResponse"])) == 2
        assert generator.generate(["LoginRequest", "LoginResponse"]) == []
        assert generator.emit("LoginRequest") is None

    def test_missing_definition_logged(self, caplog):
        generator = _generator({"Known": {"type": "object"}})
        with caplog.at_level(logging.WARNING):
            outputs = generator.generate(["Ghost", "Known"])

        assert [o.filename for o in outputs] == ["Known"]
        assert "Definition not found for model: Ghost" in caplog.text

    def test_sanitized_property_names(self):
        definitions = {"M": {"type": "object", "properties": {"meta.version": {"type": "integer"}}}}
        assert "  meta_version?: number;\n" in _generator(definitions).emit("M").content

    def test_collection_wrapper_name(self):
        name = "System.Collections.Generic.IEnumerable`1[[Api.Models.User, Api, Version=1.0.0.0]]"
        output = _generator({name: {"type": "object"}}).emit(name)
        assert output.filename == "User"
        assert output.path == "data-access/web-service/dto/api/models/User.ts"

    def test_custom_output_path_and_indentation(self, login_spec):
        options = CodegenOptions(
            generate_comments=False, generate_js_doc=False, indentation=4, output_path="src/gen"
        )
        output = _generator(login_spec["definitions"], options).emit("LoginRequest")
        assert output.path == "src/gen/dto/LoginRequest.ts"
        assert "    username: string;\n" in output.content
