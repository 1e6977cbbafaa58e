"""
Tool Registry.

The registry holds the HighLevel tools a host server exposes:
- Registration with validation (names are unique across modules)
- Lookup by name, and by owning module
- Schema export for MCP hosts and LLM tool calling

Usage:
    registry = ToolRegistry()
    for module in factory.build_modules():
        registry.register_module(module)

    tool = registry.get("search_contacts")
    schemas = registry.to_mcp_schemas()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .base import Tool
    from .module import ToolModule

logger = logging.getLogger(__name__)


class ToolRegistryError(Exception):
    """Error in tool registry operations."""

    pass


def _schema_problem(tool: Tool) -> str | None:
    """First reason a tool cannot be published, or None."""
    if not tool.name or not isinstance(tool.name, str):
        return f"Tool must have a valid name: {tool}"
    if not tool.description or not isinstance(tool.description, str):
        return f"Tool '{tool.name}' must have a description"

    schema = tool.input_schema
    if not isinstance(schema, dict):
        return f"Tool '{tool.name}' input_schema must be a dict"
    if schema.get("type") != "object":
        return f"Tool '{tool.name}' input_schema must have type: 'object'"
    if "properties" not in schema:
        return f"Tool '{tool.name}' input_schema must have 'properties'"
    return None


class ToolRegistry:
    """
    Registry of available tools.

    Tools registered through ``register_module`` remember the module
    they came from, so a host can list or drop one domain at a time.

    Example:
        registry = ToolRegistry()
        registry.register_module(ContactTools(client))

        tool = registry.get_required("get_contact")
        result = await tool.execute({"contactId": "c_1"})
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._owners: dict[str, str] = {}

    def register(self, tool: Tool, module: str | None = None) -> None:
        """
        Register a tool, optionally tagged with its module name.

        Raises:
            ToolRegistryError: If the name is taken or the tool is invalid
        """
        if tool.name in self._tools:
            owner = self._owners.get(tool.name)
            where = f" by {owner} tools" if owner else ""
            raise ToolRegistryError(f"Tool '{tool.name}' already registered{where}")

        problem = _schema_problem(tool)
        if problem:
            raise ToolRegistryError(problem)

        self._tools[tool.name] = tool
        if module:
            self._owners[tool.name] = module
        logger.debug(f"[tool_registry] Registered tool: {tool.name}")

    def register_module(self, module: ToolModule) -> int:
        """
        Register every operation of a tool module.

        Nothing is registered when any of the module's names collides or
        any of its tools is invalid.

        Returns:
            Number of tools registered
        """
        tools = module.as_tools()
        clashes = [tool.name for tool in tools if tool.name in self._tools]
        if clashes:
            raise ToolRegistryError(
                f"Cannot register {module.module_name} tools, names already registered: {clashes}"
            )
        problems = [problem for problem in map(_schema_problem, tools) if problem]
        if problems:
            raise ToolRegistryError(
                f"Cannot register {module.module_name} tools: {'; '.join(problems)}"
            )

        for tool in tools:
            self.register(tool, module.module_name)
        logger.info(f"[tool_registry] Registered {len(tools)} tools from {module.module_name}")
        return len(tools)

    def unregister(self, name: str) -> bool:
        """
        Unregister a tool by name.

        Returns:
            True if the tool was registered
        """
        if self._tools.pop(name, None) is None:
            return False
        self._owners.pop(name, None)
        logger.info(f"[tool_registry] Unregistered tool: {name}")
        return True

    def unregister_module(self, module_name: str) -> int:
        """Drop every tool registered from ``module_name``; returns how many."""
        names = self.module_tools(module_name)
        for name in names:
            self.unregister(name)
        return len(names)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_required(self, name: str) -> Tool:
        """
        Get a tool by name.

        Raises:
            ToolRegistryError: If no tool has that name
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolRegistryError(
                f"Tool '{name}' not found. Available tools: {self.list_names()}"
            ) from None

    def module_of(self, name: str) -> str | None:
        """Module a tool was registered from, if any."""
        return self._owners.get(name)

    def module_tools(self, module_name: str) -> list[str]:
        """Tool names registered from one module, in registration order."""
        return [name for name, owner in self._owners.items() if owner == module_name]

    def list_tools(self) -> list[Tool]:
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        return list(self._tools)

    def to_llm_schemas(self) -> list[dict[str, Any]]:
        """Schemas in ``{name, description, input_schema}`` form for LLM tool use."""
        return [tool.to_llm_schema() for tool in self._tools.values()]

    def to_mcp_schemas(self) -> list[dict[str, Any]]:
        """Schemas in MCP ``tools/list`` form."""
        return [tool.to_mcp_schema() for tool in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __repr__(self) -> str:
        return f"<ToolRegistry tools={len(self._tools)} modules={len(set(self._owners.values()))}>"
