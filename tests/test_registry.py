"""Tests for the tool registry and the user tool definitions."""

import pytest
from pydantic import BaseModel

from user_mcp.errors import DuplicateToolError, RegistryFrozenError
from user_mcp.mcp import ToolRegistry, build_registry


class EchoParams(BaseModel):
    text: str


async def echo(params, ctx):
    return params.text


class TestToolRegistry:
    def test_empty_registry_lists_nothing(self):
        assert ToolRegistry().list_all() == []

    def test_register_and_lookup(self):
        registry = ToolRegistry()
        registry.register("echo", "Echo text", EchoParams, echo)

        tool = registry.lookup("echo")
        assert tool is not None
        assert tool.description == "Echo text"
        assert tool.handler is echo
        assert registry.lookup("missing") is None

    def test_duplicate_name_rejected(self):
        registry = ToolRegistry()
        registry.register("echo", "Echo text", EchoParams, echo)
        with pytest.raises(DuplicateToolError) as exc_info:
            registry.register("echo", "Again", EchoParams, echo)
        assert exc_info.value.name == "echo"
        assert registry.lookup("echo").description == "Echo text"

    def test_internal_state_not_settable_through_constructor(self):
        with pytest.raises(TypeError):
            ToolRegistry(_frozen=False)
        with pytest.raises(TypeError):
            ToolRegistry(_tools={})

    def test_frozen_registry_rejects_registration(self):
        registry = ToolRegistry().freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register("echo", "Echo text", EchoParams, echo)

    def test_list_all_keeps_registration_order(self):
        registry = ToolRegistry()
        for name in ["zeta", "alpha", "mid"]:
            registry.register(name, f"{name} tool", EchoParams, echo)
        assert [t["name"] for t in registry.list_all()] == ["zeta", "alpha", "mid"]

    def test_input_schema_from_params_model(self):
        registry = ToolRegistry()
        registry.register("echo", "Echo text", EchoParams, echo)
        schema = registry.list_all()[0]["inputSchema"]
        assert schema["type"] == "object"
        assert schema["properties"]["text"]["type"] == "string"
        assert schema["required"] == ["text"]


class TestUserTools:
    def test_exact_tool_set_in_order(self):
        registry = build_registry()
        assert registry.names() == ["list_users", "get_user", "create_user"]
        assert registry.frozen

    def test_descriptions(self):
        tools = {t["name"]: t["description"] for t in build_registry().list_all()}
        assert tools == {
            "list_users": "List all users",
            "get_user": "Get a user by ID",
            "create_user": "Create a new user",
        }

    def test_schemas(self):
        tools = {t["name"]: t["inputSchema"] for t in build_registry().list_all()}
        assert tools["list_users"]["properties"] == {}
        id_types = {option["type"] for option in tools["get_user"]["properties"]["id"]["anyOf"]}
        assert id_types == {"integer", "number"}
        assert sorted(tools["create_user"]["required"]) == ["email", "name", "role"]

    def test_each_build_is_independent(self):
        assert build_registry() is not build_registry()
