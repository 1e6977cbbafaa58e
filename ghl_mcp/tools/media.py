"""
Media Library Tools.

List, upload and delete files and folders in a location's media library.
Uploads either send file content directly or register a hosted file URL;
the two modes are checked before any request is made.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.tools.base import ContentBlock
from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import boolean, number, obj, string

logger = logging.getLogger(__name__)

_ALT_TYPE = string(
    "Context type (location or agency)", enum=["location", "agency"], default="location"
)
_ALT_ID = string("Location or Agency ID (uses default location if not provided)")


class MediaTools(ToolModule):
    """Tools for /medias endpoints."""

    module_name = "media"

    @tool_operation(
        name="get_media_files",
        description=(
            "Get list of files and folders from the media library with filtering "
            "and search capabilities"
        ),
        input_schema=obj(
            {
                "offset": number("Number of files to skip in listing", minimum=0),
                "limit": number(
                    "Number of files to show in the listing (max 100)", minimum=1, maximum=100
                ),
                "sortBy": string(
                    "Field to sort the file listing by (e.g., createdAt, name, size)",
                    default="createdAt",
                ),
                "sortOrder": string(
                    "Direction to sort files (asc or desc)", enum=["asc", "desc"], default="desc"
                ),
                "type": string("Filter by type (file or folder)", enum=["file", "folder"]),
                "query": string("Search query text to filter files by name"),
                "altType": _ALT_TYPE,
                "altId": _ALT_ID,
                "parentId": string("Parent folder ID to list files within a specific folder"),
            }
        ),
    )
    async def get_media_files(self, args: dict[str, Any]) -> dict[str, Any]:
        params = {
            "sortBy": args.get("sortBy") or "createdAt",
            "sortOrder": args.get("sortOrder") or "desc",
            "altType": args.get("altType") or "location",
            "altId": args.get("altId") or self.client.location_id,
            **self._pick(args, "offset", "limit"),
            **{key: args[key] for key in ("type", "query", "parentId") if args.get(key)},
        }
        data = self._require(await self.client.get_media_files(params))
        files = data.get("files")
        if not isinstance(files, list):
            files = []
        return {
            "success": True,
            "files": files,
            "total": data.get("total"),
            "message": f"Retrieved {len(files)} media files/folders",
        }

    @tool_operation(
        name="upload_media_file",
        description=(
            "Upload a file to the media library or add a hosted file URL "
            "(max 25MB for direct uploads)"
        ),
        input_schema=obj(
            {
                "file": string("File data (binary) for direct upload"),
                "hosted": boolean(
                    "Set to true if providing a fileUrl instead of direct file upload",
                    default=False,
                ),
                "fileUrl": string("URL of hosted file (required if hosted=true)"),
                "name": string("Custom name for the uploaded file"),
                "parentId": string("Parent folder ID to upload file into"),
                "altType": _ALT_TYPE,
                "altId": _ALT_ID,
            }
        ),
    )
    async def upload_media_file(self, args: dict[str, Any]) -> dict[str, Any]:
        hosted = bool(args.get("hosted"))
        if hosted and not args.get("fileUrl"):
            raise ValueError("fileUrl is required when hosted=true")
        if not hosted and not args.get("file"):
            raise ValueError("file is required when hosted=false or not specified")

        result = await self.client.upload_media_file(
            file=args.get("file"),
            file_url=args.get("fileUrl"),
            hosted=hosted,
            name=args.get("name") or None,
            parent_id=args.get("parentId") or None,
        )
        data = self._require(result)
        return {
            "success": True,
            "fileId": data.get("fileId"),
            "url": data.get("url"),
            "message": f"File uploaded successfully with ID: {data.get('fileId')}",
        }

    @tool_operation(
        name="delete_media_file",
        description="Delete a specific file or folder from the media library",
        input_schema=obj(
            {
                "id": string("ID of the file or folder to delete"),
                "altType": _ALT_TYPE,
                "altId": _ALT_ID,
            },
            required=["id"],
        ),
    )
    async def delete_media_file(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.delete_media_file(
            args.get("id"), args.get("altType") or "location", args.get("altId")
        )
        self._unwrap(result)
        return {"success": True, "message": "Media file/folder deleted successfully"}

    def extra_content(self, name: str, response: Any) -> tuple[ContentBlock, ...]:
        if name == "upload_media_file" and response.get("url"):
            return (ContentBlock.from_resource_link(response["url"], name=response.get("fileId")),)
        return ()
