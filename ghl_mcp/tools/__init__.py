"""
ghl-mcp Tools.

Agent-facing HighLevel operations, grouped into one ToolModule per
domain. Each module exposes an MCP-style catalog (``list_tools``) and a
dispatcher (``execute_tool``); ``as_tools()`` wraps every operation as a
``Tool`` for a ToolRegistry.

MCP Alignment:
    Tool interface follows Model Context Protocol standards.
    See: https://modelcontextprotocol.io/specification/

Usage:
    from ghl_mcp.tools import ContactTools, HighLevelToolFactory

    contacts = ContactTools(client)
    contacts.list_tools()
    await contacts.execute_tool("get_contact", {"contactId": "c_1"})

    registry = HighLevelToolFactory().build_registry()
    result = await registry.get_required("search_contacts").execute({"query": "ada"})
"""

from .base import (
    ContentBlock,
    ContentType,
    Tool,
    ToolAnnotations,
    ToolResult,
)
from .contacts import ContactTools
from .conversations import ConversationTools
from .email import EmailTools
from .email_verification import EmailVerificationTools
from .factory import ALL_MODULES, HighLevelToolFactory, ToolContext
from .locations import LocationTools
from .media import MediaTools
from .module import (
    ModuleOperationTool,
    ToolError,
    ToolExecutionError,
    ToolModule,
    ToolOperation,
    UnknownToolError,
    tool_operation,
)
from .opportunities import OpportunityTools
from .registry import ToolRegistry, ToolRegistryError
from .workflows import WorkflowTools

__all__ = [
    # Base
    "Tool",
    "ToolResult",
    "ToolAnnotations",
    "ContentBlock",
    "ContentType",
    # Modules
    "ToolModule",
    "ToolOperation",
    "ModuleOperationTool",
    "tool_operation",
    "ToolError",
    "ToolExecutionError",
    "UnknownToolError",
    # Domains
    "ContactTools",
    "ConversationTools",
    "OpportunityTools",
    "LocationTools",
    "EmailTools",
    "EmailVerificationTools",
    "MediaTools",
    "WorkflowTools",
    # Registry / factory
    "ToolRegistry",
    "ToolRegistryError",
    "HighLevelToolFactory",
    "ToolContext",
    "ALL_MODULES",
]
