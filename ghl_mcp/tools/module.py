"""
Tool Modules.

A tool module groups the agent-facing operations of one HighLevel domain
(contacts, conversations, ...). Each operation is one decorated handler
method; the module's catalog (``list_tools``), its dispatcher
(``execute_tool``) and the MCP ``Tool`` wrappers are all derived from
those declarations, so a listed tool is always dispatchable.

Usage:
    class PipelineTools(ToolModule):
        module_name = "pipeline"

        @tool_operation(
            name="get_pipelines",
            description="List sales pipelines",
            input_schema={"type": "object", "properties": {}},
            action="get pipelines",
        )
        async def get_pipelines(self, args: dict) -> dict:
            result = await self.client.get_pipelines()
            return {"success": True, "pipelines": self._unwrap(result)["pipelines"]}

    tools = PipelineTools(client)
    tools.list_tools()                              # [{"name", "description", "inputSchema"}]
    await tools.execute_tool("get_pipelines", {})   # {"success": True, ...}

Error Handling:
    - Unknown tool names raise UnknownToolError before any client call
    - THROW_ON_ERROR operations raise ToolExecutionError
      ("Failed to <action>: <upstream message>")
    - RETURN_RESULT operations return ``{"success": False, ..., "message"}``
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from ghl_mcp.integrations.base import ApiResult, ErrorPolicy, IntegrationError
from ghl_mcp.tools.base import ContentBlock, Tool, ToolAnnotations, ToolResult

if TYPE_CHECKING:
    from ghl_mcp.integrations.highlevel import HighLevelClient

logger = logging.getLogger(__name__)

# Attribute name stored on decorated handler methods
_OPERATION_ATTR = "_tool_operation"

_READ_ONLY_PREFIXES = ("get_", "search_", "list_", "download_", "ghl_get_")
_DESTRUCTIVE_PREFIXES = ("delete_", "remove_", "cancel_")


# =============================================================================
# Exceptions
# =============================================================================


class ToolError(Exception):
    """Base exception for tool module errors."""


class UnknownToolError(ToolError):
    """Raised when a tool name is not in the module's catalog."""

    def __init__(self, name: str, module: str):
        super().__init__(f"Unknown {module} tool: {name}")
        self.name = name
        self.module = module


class ToolExecutionError(ToolError):
    """Raised when a tool's remote call fails ("Failed to <action>: <cause>")."""

    def __init__(self, action: str, cause: str = ""):
        message = f"Failed to {action}: {cause}" if cause else f"Failed to {action}"
        super().__init__(message)
        self.action = action
        self.cause = cause


# =============================================================================
# Operation declarations
# =============================================================================


@dataclass(frozen=True, slots=True)
class ToolOperation:
    """
    Declaration of one module operation.

    Attributes:
        name: Tool name exposed to agents
        description: Description for LLM understanding
        input_schema: JSON Schema of the arguments (advisory only)
        action: Verb phrase used in failure messages ("get opportunity")
        error_policy: Raise on failure or return a soft failure dict
        handler: Name of the handler method on the module
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    action: str
    error_policy: ErrorPolicy = ErrorPolicy.THROW_ON_ERROR
    handler: str = ""

    @property
    def annotations(self) -> ToolAnnotations:
        """Behavioral hints derived from the operation name."""
        read_only = self.name.startswith(_READ_ONLY_PREFIXES)
        return ToolAnnotations(
            title=self.action.capitalize(),
            read_only_hint=read_only,
            destructive_hint=self.name.startswith(_DESTRUCTIVE_PREFIXES),
            idempotent_hint=read_only,
            open_world_hint=True,
        )

    def to_catalog_entry(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


Handler = Callable[[Any, dict[str, Any]], Awaitable[Any]]


def tool_operation(
    name: str,
    description: str,
    input_schema: dict[str, Any],
    action: str | None = None,
    error_policy: ErrorPolicy = ErrorPolicy.THROW_ON_ERROR,
) -> Callable[[Handler], Handler]:
    """
    Declare a handler method as a module operation.

    Args:
        name: Tool name
        description: Tool description
        input_schema: JSON Schema of the arguments
        action: Verb phrase for failure messages (defaults to the name with
            underscores replaced by spaces)
        error_policy: THROW_ON_ERROR (default) or RETURN_RESULT

    Returns:
        Decorator that attaches the declaration to the method
    """

    def decorator(func: Handler) -> Handler:
        setattr(
            func,
            _OPERATION_ATTR,
            ToolOperation(
                name=name,
                description=description,
                input_schema=input_schema,
                action=action or name.replace("_", " "),
                error_policy=error_policy,
                handler=func.__name__,
            ),
        )
        return func

    return decorator


# =============================================================================
# Module base
# =============================================================================


class ToolModule:
    """
    Base class for HighLevel tool modules.

    Subclasses set ``module_name`` and declare operations with
    ``@tool_operation``. Operations are collected in declaration order
    when the subclass is created.
    """

    module_name: ClassVar[str] = "highlevel"
    _operations: ClassVar[dict[str, ToolOperation]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        operations: dict[str, ToolOperation] = {}
        for klass in reversed(cls.__mro__):
            for attr in vars(klass).values():
                operation = getattr(attr, _OPERATION_ATTR, None)
                if isinstance(operation, ToolOperation):
                    operations[operation.name] = operation
        cls._operations = operations

    def __init__(self, client: HighLevelClient):
        """
        Initialize the module.

        Args:
            client: Shared HighLevel API client
        """
        self.client = client

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    @property
    def operations(self) -> tuple[ToolOperation, ...]:
        return tuple(self._operations.values())

    def list_tools(self) -> list[dict[str, Any]]:
        """Return the tool catalog: ``[{name, description, inputSchema}]``."""
        return [operation.to_catalog_entry() for operation in self._operations.values()]

    def tool_names(self) -> list[str]:
        return list(self._operations)

    def has_tool(self, name: str) -> bool:
        return name in self._operations

    def as_tools(self) -> list[Tool]:
        """Wrap every operation as an MCP Tool."""
        return [ModuleOperationTool(self, operation) for operation in self._operations.values()]

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def execute_tool(self, name: str, args: dict[str, Any] | None = None) -> Any:
        """
        Execute a tool by exact name.

        Args:
            name: Tool name from ``list_tools()``
            args: Tool arguments (not validated here)

        Returns:
            Tool response, usually a dict with a ``success`` flag

        Raises:
            UnknownToolError: If the name is not in the catalog
            ToolExecutionError: If a THROW_ON_ERROR operation fails
        """
        operation = self._operations.get(name)
        if operation is None:
            raise UnknownToolError(name, self.module_name)

        handler = getattr(self, operation.handler)
        args = args or {}

        try:
            return await handler(args)
        except ToolError:
            raise
        except Exception as e:
            logger.error(f"[{self.module_name}_tools] {name} failed: {e}")
            if operation.error_policy is ErrorPolicy.RETURN_RESULT:
                return self._soft_failure(operation, args, str(e))
            raise ToolExecutionError(operation.action, str(e)) from e

    def _soft_failure(
        self, operation: ToolOperation, args: dict[str, Any], message: str
    ) -> dict[str, Any]:
        """Response for a failed RETURN_RESULT operation."""
        return {"success": False, "message": f"Failed to {operation.action}: {message}"}

    def extra_content(self, name: str, response: Any) -> tuple[ContentBlock, ...]:
        """Non-text content blocks (audio, resource links) for a successful response."""
        return ()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _unwrap(result: ApiResult[Any]) -> Any:
        """
        Return the data of a successful result.

        Raises:
            IntegrationError: If the result is a failure
        """
        if not result.success:
            error = result.error
            raise IntegrationError(
                error.message if error else "Unknown error",
                "highlevel",
                status_code=error.status_code if error else None,
                response_body=error.details if error else None,
            )
        return result.data

    @classmethod
    def _require(cls, result: ApiResult[Any]) -> Any:
        """
        Return the data of a successful result that must carry data.

        Raises:
            IntegrationError: If the result is a failure
            ValueError: If the result carries no data
        """
        data = cls._unwrap(result)
        if data is None:
            raise ValueError("API request failed: Unknown API error")
        return data

    @staticmethod
    def _pick(args: dict[str, Any], *keys: str) -> dict[str, Any]:
        """Copy the given keys from ``args`` when present and not None."""
        return {key: args[key] for key in keys if args.get(key) is not None}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} tools={len(self._operations)}>"


# =============================================================================
# MCP Tool wrapper
# =============================================================================


class ModuleOperationTool(Tool):
    """
    A Tool backed by one module operation.

    ``execute()`` dispatches through the module and reports failures in
    the result rather than raising, as MCP hosts expect.
    """

    def __init__(self, module: ToolModule, operation: ToolOperation):
        self._module = module
        self._operation = operation

    @property
    def name(self) -> str:
        return self._operation.name

    @property
    def description(self) -> str:
        return self._operation.description

    @property
    def input_schema(self) -> dict[str, Any]:
        return self._operation.input_schema

    @property
    def annotations(self) -> ToolAnnotations:
        return self._operation.annotations

    @property
    def client(self) -> HighLevelClient:
        """Client the backing module calls (shared by a factory build)."""
        return self._module.client

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            response = await self._module.execute_tool(self.name, arguments)
        except ToolError as e:
            return ToolResult.error(str(e))

        if isinstance(response, dict) and response.get("success") is False:
            return ToolResult.from_response(response)
        return ToolResult.from_response(
            response, additional_content=self._module.extra_content(self.name, response)
        )
