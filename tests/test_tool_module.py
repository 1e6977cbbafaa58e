"""
Tests for tool module mechanics.

Tests cover:
- @tool_operation declarations and catalog generation
- Exact-name dispatch and unknown tool errors
- Failure wrapping ("Failed to <action>: <cause>") and soft failures
- Result helpers (_unwrap, _require, _pick)
- ModuleOperationTool (MCP wrapper) results and annotations
- Catalog/dispatch consistency of every HighLevel module
"""

import json
from unittest.mock import AsyncMock

import pytest

from ghl_mcp.integrations.base import (
    ApiResult,
    ErrorPolicy,
    IntegrationError,
    NotFoundError,
)
from ghl_mcp.tools import (
    ALL_MODULES,
    ContactTools,
    ConversationTools,
    EmailTools,
    EmailVerificationTools,
    LocationTools,
    MediaTools,
    ModuleOperationTool,
    OpportunityTools,
    ToolExecutionError,
    ToolModule,
    UnknownToolError,
    WorkflowTools,
    tool_operation,
)
from ghl_mcp.tools.base import ContentType, ToolResult

EMPTY_SCHEMA = {"type": "object", "properties": {}}


# =============================================================================
# Test Module
# =============================================================================


class EchoTools(ToolModule):
    """Small module exercising every dispatch path."""

    module_name = "echo"

    @tool_operation(
        name="get_echo",
        description="Echo the text back",
        input_schema={"type": "object", "properties": {"text": {"type": "string"}}},
    )
    async def get_echo(self, args):
        return {"success": True, "text": args.get("text"), "message": "Echoed"}

    @tool_operation(
        name="delete_echo",
        description="Delete an echo",
        input_schema=EMPTY_SCHEMA,
        action="remove echo",
    )
    async def delete_echo(self, args):
        raise NotFoundError(
            "GHL API Error (404): Echo not found", "highlevel", status_code=404
        )

    @tool_operation(
        name="check_echo",
        description="Check an echo without raising",
        input_schema=EMPTY_SCHEMA,
        error_policy=ErrorPolicy.RETURN_RESULT,
    )
    async def check_echo(self, args):
        raise IntegrationError("GHL API Error (500): down", "highlevel")

    @tool_operation(
        name="list_echoes",
        description="List echoes as bare data",
        input_schema=EMPTY_SCHEMA,
    )
    async def list_echoes(self, args):
        return ["a", "b"]


class LoudEchoTools(EchoTools):
    """Subclass adding one operation."""

    module_name = "loud echo"

    @tool_operation(name="shout_echo", description="Shout", input_schema=EMPTY_SCHEMA)
    async def shout_echo(self, args):
        return {"success": True, "text": str(args.get("text", "")).upper()}


@pytest.fixture
def echo_tools():
    return EchoTools(AsyncMock())


# =============================================================================
# Declaration Tests
# =============================================================================


class TestToolOperation:
    """Tests for @tool_operation declarations."""

    def test_catalog_in_declaration_order(self, echo_tools):
        assert echo_tools.tool_names() == ["get_echo", "delete_echo", "check_echo", "list_echoes"]

    def test_catalog_entry_shape(self, echo_tools):
        entry = echo_tools.list_tools()[0]

        assert entry == {
            "name": "get_echo",
            "description": "Echo the text back",
            "inputSchema": {"type": "object", "properties": {"text": {"type": "string"}}},
        }

    def test_catalog_is_stable_and_copied(self, echo_tools):
        """Mutating a returned catalog does not change later listings."""
        first = echo_tools.list_tools()
        first[0]["inputSchema"]["properties"]["injected"] = {"type": "string"}

        assert echo_tools.list_tools() == EchoTools(AsyncMock()).list_tools()
        assert "injected" not in echo_tools.list_tools()[0]["inputSchema"]["properties"]

    def test_action_defaults_to_name(self, echo_tools):
        actions = {op.name: op.action for op in echo_tools.operations}

        assert actions["get_echo"] == "get echo"
        assert actions["delete_echo"] == "remove echo"

    def test_annotations(self, echo_tools):
        annotations = {op.name: op.annotations for op in echo_tools.operations}

        assert annotations["get_echo"].read_only_hint is True
        assert annotations["get_echo"].idempotent_hint is True
        assert annotations["delete_echo"].destructive_hint is True
        assert annotations["check_echo"].read_only_hint is False
        assert annotations["check_echo"].destructive_hint is False
        assert annotations["get_echo"].title == "Get echo"

    def test_subclass_inherits_operations(self):
        tools = LoudEchoTools(AsyncMock())

        assert tools.tool_names()[-1] == "shout_echo"
        assert tools.has_tool("get_echo")
        assert not EchoTools(AsyncMock()).has_tool("shout_echo")


# =============================================================================
# Dispatch Tests
# =============================================================================


class TestDispatch:
    """Tests for execute_tool."""

    @pytest.mark.asyncio
    async def test_dispatches_by_exact_name(self, echo_tools):
        result = await echo_tools.execute_tool("get_echo", {"text": "hi"})

        assert result == {"success": True, "text": "hi", "message": "Echoed"}

    @pytest.mark.asyncio
    async def test_missing_args_default_to_empty(self, echo_tools):
        result = await echo_tools.execute_tool("get_echo")

        assert result["text"] is None

    @pytest.mark.asyncio
    async def test_unknown_tool(self, echo_tools):
        with pytest.raises(UnknownToolError, match="Unknown echo tool: Get_Echo") as exc_info:
            await echo_tools.execute_tool("Get_Echo", {})

        assert exc_info.value.name == "Get_Echo"
        echo_tools.client.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_is_wrapped_with_action(self, echo_tools):
        with pytest.raises(ToolExecutionError) as exc_info:
            await echo_tools.execute_tool("delete_echo", {})

        assert str(exc_info.value) == "Failed to remove echo: GHL API Error (404): Echo not found"
        assert isinstance(exc_info.value.__cause__, NotFoundError)

    @pytest.mark.asyncio
    async def test_return_result_policy_is_soft(self, echo_tools):
        result = await echo_tools.execute_tool("check_echo", {})

        assert result == {
            "success": False,
            "message": "Failed to check echo: GHL API Error (500): down",
        }


# =============================================================================
# Helper Tests
# =============================================================================


class TestHelpers:
    """Tests for result helpers."""

    def test_unwrap_success(self):
        assert ToolModule._unwrap(ApiResult.ok({"id": "1"})) == {"id": "1"}

    def test_unwrap_failure_raises(self):
        with pytest.raises(IntegrationError, match="GHL API Error") as exc_info:
            ToolModule._unwrap(ApiResult.fail("GHL API Error (400): bad", 400, {"x": 1}))

        assert exc_info.value.status_code == 400
        assert exc_info.value.response_body == {"x": 1}

    def test_require_rejects_empty_data(self):
        with pytest.raises(ValueError, match="API request failed: Unknown API error"):
            ToolModule._require(ApiResult.ok(None))

    def test_pick_skips_none(self):
        assert ToolModule._pick({"a": 1, "b": None, "c": ""}, "a", "b", "c", "d") == {
            "a": 1,
            "c": "",
        }


# =============================================================================
# MCP Wrapper Tests
# =============================================================================


class TestModuleOperationTool:
    """Tests for the MCP Tool wrapper."""

    def _tool(self, module, name):
        return next(tool for tool in module.as_tools() if tool.name == name)

    def test_wraps_every_operation(self, echo_tools):
        tools = echo_tools.as_tools()

        assert [tool.name for tool in tools] == echo_tools.tool_names()
        assert all(isinstance(tool, ModuleOperationTool) for tool in tools)

    def test_mcp_schema(self, echo_tools):
        schema = self._tool(echo_tools, "get_echo").to_mcp_schema()

        assert schema["name"] == "get_echo"
        assert schema["inputSchema"]["type"] == "object"
        assert schema["annotations"]["readOnlyHint"] is True

    def test_annotations_omit_defaults(self, echo_tools):
        read = self._tool(echo_tools, "get_echo").to_mcp_schema()["annotations"]
        delete = self._tool(echo_tools, "delete_echo").to_mcp_schema()["annotations"]

        assert read == {
            "title": "Get echo",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        }
        assert delete == {"title": "Remove echo", "openWorldHint": True}

    @pytest.mark.asyncio
    async def test_success_result(self, echo_tools):
        result = await self._tool(echo_tools, "get_echo").execute({"text": "hi"})

        assert result.is_error is False
        assert result.structured_content["text"] == "hi"
        assert json.loads(result.text) == result.structured_content

    @pytest.mark.asyncio
    async def test_bare_data_is_wrapped(self, echo_tools):
        result = await self._tool(echo_tools, "list_echoes").execute({})

        assert result.is_error is False
        assert result.structured_content == {"result": ["a", "b"]}

    def test_null_response_is_structured(self):
        result = ToolResult.from_response(None)

        assert result.is_error is False
        assert result.text == "null"
        assert result.to_dict()["structuredContent"] == {"result": None}

    @pytest.mark.asyncio
    async def test_failure_becomes_error_result(self, echo_tools):
        result = await self._tool(echo_tools, "delete_echo").execute({})

        assert result.is_error is True
        assert result.text == "Error: Failed to remove echo: GHL API Error (404): Echo not found"

    @pytest.mark.asyncio
    async def test_soft_failure_keeps_structure(self, echo_tools):
        result = await self._tool(echo_tools, "check_echo").execute({})

        assert result.is_error is True
        assert result.structured_content["success"] is False
        assert result.content[0].type == ContentType.TEXT


# =============================================================================
# HighLevel Module Catalog Tests
# =============================================================================


EXPECTED_MODULES = [
    (ContactTools, "contacts", 31),
    (ConversationTools, "conversations", 20),
    (OpportunityTools, "opportunity", 10),
    (LocationTools, "location", 24),
    (EmailTools, "email", 5),
    (EmailVerificationTools, "email verification", 1),
    (MediaTools, "media", 3),
    (WorkflowTools, "workflow", 1),
]


class TestHighLevelCatalogs:
    """Every HighLevel module lists only tools it can dispatch."""

    def test_all_modules_registered(self):
        assert list(ALL_MODULES) == [module_cls for module_cls, _, _ in EXPECTED_MODULES]

    @pytest.mark.parametrize("module_cls,module_name,count", EXPECTED_MODULES)
    def test_catalog(self, module_cls, module_name, count):
        module = module_cls(AsyncMock())
        catalog = module.list_tools()

        assert module.module_name == module_name
        assert len(catalog) == count
        assert len({entry["name"] for entry in catalog}) == count
        for entry in catalog:
            assert entry["description"]
            assert entry["inputSchema"]["type"] == "object"
            assert isinstance(entry["inputSchema"]["properties"], dict)
            for required in entry["inputSchema"].get("required", []):
                assert required in entry["inputSchema"]["properties"]

    @pytest.mark.parametrize("module_cls,module_name,count", EXPECTED_MODULES)
    @pytest.mark.asyncio
    async def test_every_listed_tool_dispatches(
        self, module_cls, module_name, count, ghl_client, mock_api
    ):
        """Listed names reach a handler; failures are never 'unknown tool'."""
        module = module_cls(ghl_client)

        for entry in module.list_tools():
            try:
                await module.execute_tool(entry["name"], {})
            except ToolExecutionError:
                # Empty API responses do not satisfy every handler
                pass

        assert mock_api.requests

    @pytest.mark.parametrize("module_cls,module_name,count", EXPECTED_MODULES)
    @pytest.mark.asyncio
    async def test_unknown_names_rejected_before_client(
        self, module_cls, module_name, count, ghl_client, mock_api
    ):
        module = module_cls(ghl_client)

        with pytest.raises(UnknownToolError, match=f"Unknown {module_name} tool: nope"):
            await module.execute_tool("nope", {})

        assert mock_api.requests == []

    def test_tool_names_unique_across_modules(self):
        names = [
            name for module_cls in ALL_MODULES for name in module_cls(AsyncMock()).tool_names()
        ]

        assert len(names) == len(set(names)) == 95
