import pytest

from openapi_codegen.config import CodegenOptions


@pytest.fixture
def options():
    return CodegenOptions()


@pytest.fixture
def login_spec():
    """Swagger 2.0 document with a single POST /auth/Login endpoint."""
    return {
        "swagger": "2.0",
        "basePath": "/api",
        "paths": {
            "/auth/Login": {
                "post": {
                    "operationId": "Login",
                    "parameters": [
                        {
                            "name": "request",
                            "in": "body",
                            "required": True,
                            "schema": {"$ref": "#/definitions/LoginRequest"},
                        }
                    ],
                    "responses": {
                        "200": {
                            "description": "OK",
                            "schema": {"$ref": "#/definitions/LoginResponse"},
                        }
                    },
                }
            }
        },
        "definitions": {
            "LoginRequest": {
                "type": "object",
                "required": ["username", "password"],
                "properties": {
                    "username": {"type": "string"},
                    "password": {"type": "string"},
                },
            },
            "LoginResponse": {
                "type": "object",
                "properties": {"token": {"type": "string"}},
            },
        },
    }


@pytest.fixture
def cyclic_spec():
    """OpenAPI 3 document whose models A and B reference each other."""
    return {
        "openapi": "3.0.1",
        "servers": [{"url": "https://example.com/api/v1"}],
        "paths": {
            "/a": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "OK",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/A"}
                                }
                            },
                        }
                    }
                }
            }
        },
        "components": {
            "schemas": {
                "A": {
                    "type": "object",
                    "properties": {"b": {"$ref": "#/components/schemas/B"}},
                },
                "B": {
                    "type": "object",
                    "properties": {"a": {"$ref": "#/components/schemas/A"}},
                },
            }
        },
    }


@pytest.fixture
def users_spec():
    """OpenAPI 3 document exercising parameters, inheritance and every method."""
    return {
        "openapi": "3.0.1",
        "servers": [{"url": "https://example.com/UsersApi"}],
        "paths": {
            "/users/{userId}": {
                "parameters": [
                    {"name": "userId", "in": "path", "required": True, "schema": {"type": "integer"}}
                ],
                "get": {
                    "summary": "Get a user",
                    "parameters": [
                        {"name": "include.details", "in": "query", "schema": {"type": "boolean"}},
                        {"name": "X-Trace", "in": "header", "schema": {"type": "string"}},
                    ],
                    "responses": {
                        "200": {
                            "description": "OK",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Api.Models.User"}
                                }
                            },
                        }
                    },
                },
                "put": {
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Api.Models.User"}
                            }
                        }
                    },
                    "responses": {
                        "200": {
                            "description": "OK",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Api.Models.User"}
                                }
                            },
                        }
                    },
                },
                "delete": {"responses": {"204": {"description": "No Content"}}},
            },
            "/users/{userId}/avatar": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "OK",
                            "content": {
                                "application/octet-stream": {
                                    "schema": {"$ref": "#/components/schemas/FileStream"}
                                }
                            },
                        }
                    }
                }
            },
            "/health": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "OK",
                            "content": {"text/plain": {"schema": {"type": "string"}}},
                        }
                    }
                }
            },
        },
        "components": {
            "schemas": {
                "Api.Models.Entity": {
                    "type": "object",
                    "required": ["id"],
                    "properties": {"id": {"type": "integer", "format": "int64"}},
                },
                "Api.Models.User": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Api.Models.Entity"},
                        {
                            "type": "object",
                            "required": ["name", "nickname"],
                            "properties": {
                                "name": {"type": "string", "description": "Display name"},
                                "nickname": {"type": "string", "nullable": True},
                                "tags": {"type": "array", "items": {"type": "string"}},
                                "roles": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/Api.Models.Role"},
                                },
                            },
                        },
                    ]
                },
                "Api.Models.Role": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                },
                "FileStream": {"type": "object", "properties": {}},
            }
        },
    }
