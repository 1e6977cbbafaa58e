"""
MCP tool protocol for the HighLevel tool modules.

Each tool module operation is published as a ``Tool`` (see
``ModuleOperationTool``). Executing it yields a ``ToolResult``: a JSON
text block, the structured response, and for recordings or uploaded
media an extra audio or resource-link block. ``ToolAnnotations`` carry
the read-only/destructive hints MCP hosts show to users.

A hand-written tool only needs a name, a description, an input schema
and ``execute``:

    class PingTool(Tool):
        name = "ghl_ping"
        description = "Check the HighLevel connection"
        input_schema = {"type": "object", "properties": {}}

        async def execute(self, arguments: dict) -> ToolResult:
            return ToolResult.success("connected")
"""

from __future__ import annotations

import base64
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ContentType(Enum):
    """Type of content in a tool result (MCP-aligned)."""

    TEXT = "text"
    AUDIO = "audio"
    RESOURCE_LINK = "resource_link"


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """
    Content block in tool result (MCP-aligned).

    - TEXT: JSON or plain text result
    - AUDIO: Call recordings (base64-encoded on serialization)
    - RESOURCE_LINK: URI of an uploaded media file
    """

    type: ContentType
    text_content: str | None = None
    data: bytes | None = None
    mime_type: str | None = None
    uri: str | None = None
    name: str | None = None

    @classmethod
    def from_text(cls, content: str) -> ContentBlock:
        """Create a text content block."""
        return cls(type=ContentType.TEXT, text_content=content)

    @classmethod
    def from_audio(cls, data: bytes, mime_type: str = "audio/x-wav") -> ContentBlock:
        """Create an audio content block."""
        return cls(type=ContentType.AUDIO, data=data, mime_type=mime_type)

    @classmethod
    def from_resource_link(
        cls,
        uri: str,
        name: str | None = None,
        mime_type: str | None = None,
    ) -> ContentBlock:
        """Create a resource link content block."""
        return cls(type=ContentType.RESOURCE_LINK, uri=uri, name=name, mime_type=mime_type)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {"type": self.type.value}

        if self.text_content is not None:
            result["text"] = self.text_content
        if self.data is not None:
            result["data"] = base64.b64encode(self.data).decode()
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        if self.uri is not None:
            result["uri"] = self.uri
        if self.name is not None:
            result["name"] = self.name

        return result


@dataclass(frozen=True, slots=True)
class ToolAnnotations:
    """
    MCP tool annotations.

    HighLevel operations derive these from their names: ``get_``/``search_``
    tools are read-only, ``delete_``/``remove_``/``cancel_`` tools are
    destructive, and every operation talks to the remote CRM.
    """

    title: str | None = None
    read_only_hint: bool = False
    destructive_hint: bool = True
    idempotent_hint: bool = False
    open_world_hint: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Camel-cased hints, omitting those left at the MCP default."""
        hints = {
            "readOnlyHint": (self.read_only_hint, False),
            "destructiveHint": (self.destructive_hint, True),
            "idempotentHint": (self.idempotent_hint, False),
            "openWorldHint": (self.open_world_hint, False),
        }
        result: dict[str, Any] = {} if self.title is None else {"title": self.title}
        result.update({key: value for key, (value, default) in hints.items() if value != default})
        return result


@dataclass(frozen=True, slots=True)
class ToolResult:
    """
    MCP ``tools/call`` result.

    ``content`` always starts with one text block; ``structured_content``
    holds the tool module's response dict so hosts need not re-parse the
    text. Failures carry ``is_error`` and an ``Error: ...`` text block:

        ToolResult.error("Failed to get opportunity: GHL API Error (404): Not found")
    """

    content: tuple[ContentBlock, ...]
    is_error: bool = False
    structured_content: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        text: str,
        *,
        structured: dict[str, Any] | None = None,
        additional_content: tuple[ContentBlock, ...] | None = None,
    ) -> ToolResult:
        """
        Create a successful result.

        Args:
            text: Result text (usually the JSON-encoded response)
            structured: Structured response for programmatic use
            additional_content: Additional content blocks (audio, links)
        """
        content = [ContentBlock.from_text(text)]
        if additional_content:
            content.extend(additional_content)

        return cls(content=tuple(content), is_error=False, structured_content=structured)

    @classmethod
    def error(
        cls,
        message: str,
        *,
        structured: dict[str, Any] | None = None,
    ) -> ToolResult:
        """Create an error result."""
        return cls(
            content=(ContentBlock.from_text(f"Error: {message}"),),
            is_error=True,
            structured_content=structured,
        )

    @classmethod
    def from_response(
        cls,
        response: Any,
        *,
        additional_content: tuple[ContentBlock, ...] | None = None,
    ) -> ToolResult:
        """
        Wrap a tool module response.

        The text block is the JSON-encoded response. Anything other than a
        dict (a list or None) is structured as ``{"result": ...}``. A
        response with ``success: False`` becomes an error result that
        keeps its structure.
        """
        text = json.dumps(response, default=str)
        structured = response if isinstance(response, dict) else {"result": response}
        if structured.get("success") is False:
            return cls.error(structured.get("message") or text, structured=structured)
        return cls.success(text, structured=structured, additional_content=additional_content)

    @property
    def text(self) -> str:
        """Get the primary text content (convenience accessor)."""
        for block in self.content:
            if block.type == ContentType.TEXT and block.text_content:
                return block.text_content
        return ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "content": [block.to_dict() for block in self.content],
        }

        if self.is_error:
            result["isError"] = True
        if self.structured_content is not None:
            result["structuredContent"] = self.structured_content

        return result


class Tool(ABC):
    """A callable MCP tool; names are unique across a ToolRegistry."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """
        JSON Schema defining expected input arguments.

        Must be a JSON Schema object with ``type: "object"`` and
        ``properties``; ``required`` lists the mandatory arguments.
        """
        ...

    @property
    def annotations(self) -> ToolAnnotations:
        """Behavioral hints for the tool."""
        return ToolAnnotations()

    @abstractmethod
    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """Run the tool; failures come back as ``ToolResult.error`` rather than raising."""
        ...

    def to_llm_schema(self) -> dict[str, Any]:
        """Snake-cased ``input_schema`` entry for LLM tool calling."""
        return dict(name=self.name, description=self.description, input_schema=self.input_schema)

    def to_mcp_schema(self) -> dict[str, Any]:
        """MCP ``tools/list`` entry; ``annotations`` only when some hint is set."""
        schema = dict(name=self.name, description=self.description, inputSchema=self.input_schema)
        annotations = self.annotations.to_dict()
        if annotations:
            schema["annotations"] = annotations
        return schema

    def __repr__(self) -> str:
        return f"<Tool {self.name}>"
