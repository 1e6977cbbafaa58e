"""Media library API: list, upload (multipart) and delete files and folders."""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class MediaAPI(HighLevelCore):
    """Endpoints under /medias."""

    async def get_media_files(self, params: dict[str, Any]) -> ApiResult[Any]:
        """
        GET /medias/files.

        Args:
            params: ``sortBy``, ``sortOrder``, ``altType``, ``altId`` and
                optional ``offset``, ``limit``, ``type``, ``query``, ``parentId``
        """
        query = {
            "sortBy": params.get("sortBy"),
            "sortOrder": params.get("sortOrder"),
            "altType": params.get("altType"),
            "altId": params.get("altId"),
            "offset": params.get("offset"),
            "limit": params.get("limit"),
            "type": params.get("type"),
            "query": params.get("query"),
            "parentId": params.get("parentId"),
        }
        return await self._call("GET", "/medias/files", params=compact(query))

    async def upload_media_file(
        self,
        *,
        file: bytes | str | None = None,
        file_url: str | None = None,
        hosted: bool = False,
        name: str | None = None,
        parent_id: str | None = None,
    ) -> ApiResult[Any]:
        """
        POST /medias/upload-file as multipart form data.

        Either ``hosted=True`` with ``file_url`` or a ``file`` payload is
        required; anything else is rejected before a request is made.

        Raises:
            ValueError: If neither a hosted URL nor a file is given
        """
        if hosted and file_url:
            fields: dict[str, Any] = {"hosted": True, "fileUrl": file_url}
        elif file:
            content = file.encode("utf-8") if isinstance(file, str) else file
            fields = {"hosted": False, "file": (name or "upload", content)}
        else:
            raise ValueError("Either file or fileUrl (with hosted=true) must be provided")

        fields["name"] = name
        fields["parentId"] = parent_id
        return await self._call("POST", "/medias/upload-file", files=self._form_fields(fields))

    async def delete_media_file(
        self, file_id: str, alt_type: str = "location", alt_id: str | None = None
    ) -> ApiResult[dict[str, Any]]:
        await self._call(
            "DELETE",
            f"/medias/{file_id}",
            params={"altType": alt_type, "altId": alt_id or self.location_id},
        )
        return ApiResult.ok({"success": True, "message": "Media file deleted successfully"})
