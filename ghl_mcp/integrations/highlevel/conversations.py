"""
Conversations API (version 2021-04-15).

Conversation CRUD, messages (SMS, email, inbound, outbound call),
scheduling, attachments, recordings and transcriptions, live chat.

Every call here sends the conversations API version header except the
email message lookups, which live on the primary version.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore

logger = logging.getLogger(__name__)

DEFAULT_RECORDING_CONTENT_TYPE = "audio/x-wav"
DEFAULT_RECORDING_DISPOSITION = "attachment; filename=audio.wav"


class ConversationsAPI(HighLevelCore):
    """Endpoints under /conversations."""

    # =========================================================================
    # Conversations
    # =========================================================================

    async def search_conversations(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """GET /conversations/search (``locationId`` defaults to the configured one)."""
        return await self._call(
            "GET",
            "/conversations/search",
            params=compact(self._with_location(params)),
            headers=self._conversation_headers(),
        )

    async def get_conversation(self, conversation_id: str) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/conversations/{conversation_id}", headers=self._conversation_headers()
        )

    async def create_conversation(self, conversation: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/conversations/",
            json=self._with_location(conversation),
            headers=self._conversation_headers(),
            unwrap="conversation",
        )

    async def update_conversation(
        self, conversation_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT",
            f"/conversations/{conversation_id}",
            json=self._with_location(updates),
            headers=self._conversation_headers(),
            unwrap="conversation",
        )

    async def delete_conversation(self, conversation_id: str) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/conversations/{conversation_id}", headers=self._conversation_headers()
        )

    async def get_conversation_messages(
        self,
        conversation_id: str,
        *,
        last_message_id: str | None = None,
        limit: int | None = None,
        message_type: str | None = None,
    ) -> ApiResult[Any]:
        """GET /conversations/{id}/messages (``type`` is a comma-separated list)."""
        params = compact(
            {"lastMessageId": last_message_id, "limit": limit or None, "type": message_type}
        )
        return await self._call(
            "GET",
            f"/conversations/{conversation_id}/messages",
            params=params,
            headers=self._conversation_headers(),
        )

    # =========================================================================
    # Messages
    # =========================================================================

    async def get_message(self, message_id: str) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/conversations/messages/{message_id}", headers=self._conversation_headers()
        )

    async def send_message(self, message: dict[str, Any]) -> ApiResult[Any]:
        """POST /conversations/messages (any channel; ``type`` picks it)."""
        return await self._call(
            "POST",
            "/conversations/messages",
            json=compact(message),
            headers=self._conversation_headers(),
        )

    async def send_sms(
        self,
        contact_id: str,
        message: str,
        from_number: str | None = None,
    ) -> ApiResult[Any]:
        return await self.send_message(
            {"type": "SMS", "contactId": contact_id, "message": message, "fromNumber": from_number}
        )

    async def send_email(
        self,
        contact_id: str,
        subject: str,
        message: str | None = None,
        html: str | None = None,
        **options: Any,
    ) -> ApiResult[Any]:
        """
        Send an email through the conversations API.

        Args:
            contact_id: Recipient contact
            subject: Email subject
            message: Plain-text body
            html: HTML body
            **options: ``emailFrom``, ``emailCc``, ``emailBcc``, ``attachments``, ...
        """
        return await self.send_message(
            {
                "type": "Email",
                "contactId": contact_id,
                "subject": subject,
                "message": message,
                "html": html,
                **options,
            }
        )

    async def get_email_message(self, email_message_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/conversations/messages/email/{email_message_id}")

    async def cancel_scheduled_email(self, email_message_id: str) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/conversations/messages/email/{email_message_id}/schedule"
        )

    async def add_inbound_message(self, message: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/conversations/messages/inbound",
            json=compact(message),
            headers=self._conversation_headers(),
        )

    async def add_outbound_call(self, message: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/conversations/messages/outbound",
            json=compact(message),
            headers=self._conversation_headers(),
        )

    async def cancel_scheduled_message(self, message_id: str) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/conversations/messages/{message_id}/schedule",
            headers=self._conversation_headers(),
        )

    async def upload_message_attachments(self, upload: dict[str, Any]) -> ApiResult[Any]:
        """POST /conversations/messages/upload as multipart form data."""
        return await self._call(
            "POST",
            "/conversations/messages/upload",
            files=self._form_fields(upload),
            headers=self._conversation_headers(),
        )

    async def update_message_status(
        self, message_id: str, status: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT",
            f"/conversations/messages/{message_id}/status",
            json=compact(status),
            headers=self._conversation_headers(),
        )

    # =========================================================================
    # Recordings and transcriptions
    # =========================================================================

    async def get_message_recording(
        self, message_id: str, location_id: str | None = None
    ) -> ApiResult[dict[str, Any]]:
        """
        Download a call recording.

        Returns:
            ApiResult with ``audioData`` (raw bytes), ``contentType`` and
            ``contentDisposition``
        """
        response = await self._request(
            "GET",
            f"/conversations/messages/{message_id}/locations/{self._loc(location_id)}/recording",
            headers=self._conversation_headers(),
        )
        return ApiResult.ok(
            {
                "audioData": response.content,
                "contentType": response.headers.get("content-type")
                or DEFAULT_RECORDING_CONTENT_TYPE,
                "contentDisposition": response.headers.get("content-disposition")
                or DEFAULT_RECORDING_DISPOSITION,
            }
        )

    async def get_message_transcription(
        self, message_id: str, location_id: str | None = None
    ) -> ApiResult[dict[str, Any]]:
        result = await self._call(
            "GET",
            f"/conversations/locations/{self._loc(location_id)}/messages/{message_id}"
            "/transcription",
            headers=self._conversation_headers(),
        )
        return ApiResult.ok({"transcriptions": result.data})

    async def download_message_transcription(
        self, message_id: str, location_id: str | None = None
    ) -> ApiResult[str]:
        """Download a transcription as plain text."""
        response = await self._request(
            "GET",
            f"/conversations/locations/{self._loc(location_id)}/messages/{message_id}"
            "/transcription/download",
            headers=self._conversation_headers(),
        )
        return ApiResult.ok(response.text)

    # =========================================================================
    # Live chat
    # =========================================================================

    async def live_chat_typing(self, typing: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/conversations/providers/live-chat/typing",
            json=typing,
            headers=self._conversation_headers(),
        )
