import pytest

from openapi_codegen.shared.naming import (
    ModelPathAndName,
    camelize,
    create_correct_path,
    get_model_path_and_name,
    join_path,
    ref_name,
    regex_filter,
    sanitize_property_name,
    to_pascal_case,
)


class TestGetModelPathAndName:
    @pytest.mark.parametrize(
        "model,expected",
        [
            ("Namespace.Sub.Model", ("Namespace.Sub", "Model")),
            ("Model", ("", "Model")),
            (
                "System.Collections.Generic.IEnumerable`1[[Api.Models.User, Api, Version=1.0.0.0]]",
                ("Api.Models", "User"),
            ),
        ],
    )
    def test_dotted(self, model, expected):
        assert get_model_path_and_name(model) == expected

    def test_slash_divider(self):
        result = get_model_path_and_name("/auth/Login", "/")
        assert result == ModelPathAndName("/auth", "Login")
        assert result.model_path == "/auth"
        assert result.model_name == "Login"


class TestRefName:
    def test_components_ref(self):
        assert ref_name("#/components/schemas/Api.Models.User") == "Api.Models.User"

    def test_definitions_ref(self):
        assert ref_name("#/definitions/LoginRequest") == "LoginRequest"

    def test_bare_name(self):
        assert ref_name("User") == "User"


class TestCamelize:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("MyNamespace", "myNamespace"),
            ("user profile", "userProfile"),
            ("auth", "auth"),
            ("", ""),
        ],
    )
    def test_camelize(self, value, expected):
        assert camelize(value) == expected


class TestCreateCorrectPath:
    @pytest.mark.parametrize(
        "model_path,expected",
        [
            ("Api.DTO.UserAccount", "api/dto/userAccount"),
            ("Api.Models", "api/models"),
            ("/auth", "/auth"),
            ("/users/{userId}", "/users/userId"),
            ("", ""),
        ],
    )
    def test_create_correct_path(self, model_path, expected):
        assert create_correct_path(model_path) == expected


class TestJoinPath:
    def test_skips_empty_parts(self):
        assert join_path("data-access/web-service", "dto", "", "User.ts") == "data-access/web-service/dto/User.ts"

    def test_strips_inner_slashes(self):
        assert join_path("out/", "request", "/auth", "Login.ts") == "out/request/auth/Login.ts"

    def test_keeps_leading_slash(self):
        assert join_path("/abs", "file.ts") == "/abs/file.ts"

    def test_all_empty(self):
        assert join_path("", "/") == ""


class TestToPascalCase:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Login", "Login"),
            ("login", "Login"),
            ("{userId}", "UserId"),
            ("reset-password", "ResetPassword"),
            ("2fa", "_2fa"),
            ("", ""),
        ],
    )
    def test_to_pascal_case(self, value, expected):
        assert to_pascal_case(value) == expected


class TestSanitizePropertyName:
    def test_replaces_dots(self):
        assert sanitize_property_name("include.details") == "include_details"

    def test_plain_name_unchanged(self):
        assert sanitize_property_name("username") == "username"


class TestRegexFilter:
    def test_none_matches_everything(self):
        assert regex_filter("/anything", None)

    def test_full_match(self):
        assert regex_filter("/auth/Login", "/auth/.*")

    def test_anchored_at_both_ends(self):
        assert not regex_filter("/v2/auth/Login", "/auth/.*")
        assert not regex_filter("/auth/Login/extra", "/auth/Login")
