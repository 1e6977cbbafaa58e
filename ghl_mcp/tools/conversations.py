"""
Conversation Tools.

Messaging for agents: SMS/email sending, conversation search and
management, message records, call recordings and transcriptions,
scheduled-message cancellation and live chat typing indicators.

Responses reshape the API data into ``{"success": True, ..., "message"}``
with a human-readable summary. Call recordings are returned base64-encoded
and additionally attached as an audio content block on the MCP result.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from ghl_mcp.tools.base import ContentBlock
from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import array, boolean, mapping, number, obj, string, string_list

logger = logging.getLogger(__name__)

MESSAGE_TYPES = [
    "TYPE_SMS",
    "TYPE_EMAIL",
    "TYPE_CALL",
    "TYPE_FACEBOOK",
    "TYPE_INSTAGRAM",
    "TYPE_WHATSAPP",
    "TYPE_LIVE_CHAT",
]

INBOUND_MESSAGE_TYPES = [
    "SMS",
    "Email",
    "WhatsApp",
    "GMB",
    "IG",
    "FB",
    "Custom",
    "WebChat",
    "Live_Chat",
    "Call",
]

CALL_STATUSES = [
    "pending",
    "completed",
    "answered",
    "busy",
    "no-answer",
    "failed",
    "canceled",
    "voicemail",
]

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_MESSAGE_LIMIT = 20
DEFAULT_RECENT_LIMIT = 10


class ConversationTools(ToolModule):
    """Tools for /conversations endpoints."""

    module_name = "conversations"

    # =========================================================================
    # Sending
    # =========================================================================

    @tool_operation(
        name="send_sms",
        description="Send an SMS message to a contact in GoHighLevel",
        input_schema=obj(
            {
                "contactId": string("The unique ID of the contact to send SMS to"),
                "message": {
                    **string("The SMS message content to send"),
                    "maxLength": 1600,
                },
                "fromNumber": string(
                    "Optional: Phone number to send from (must be configured in GHL)"
                ),
            },
            required=["contactId", "message"],
        ),
        action="send SMS",
    )
    async def send_sms(self, args: dict[str, Any]) -> dict[str, Any]:
        contact_id = args.get("contactId")
        result = await self.client.send_sms(contact_id, args.get("message"), args.get("fromNumber"))
        data = self._unwrap(result) or {}
        return {
            "success": True,
            "messageId": data.get("messageId"),
            "conversationId": data.get("conversationId"),
            "message": f"SMS sent successfully to contact {contact_id}",
        }

    @tool_operation(
        name="send_email",
        description="Send an email message to a contact in GoHighLevel",
        input_schema=obj(
            {
                "contactId": string("The unique ID of the contact to send email to"),
                "subject": string("Email subject line"),
                "message": string("Plain text email content"),
                "html": string("HTML email content (optional, takes precedence over message)"),
                "emailFrom": {
                    **string("Optional: Email address to send from (must be configured in GHL)"),
                    "format": "email",
                },
                "attachments": string_list("Optional: Array of attachment URLs"),
                "emailCc": string_list("Optional: Array of CC email addresses"),
                "emailBcc": string_list("Optional: Array of BCC email addresses"),
            },
            required=["contactId", "subject"],
        ),
    )
    async def send_email(self, args: dict[str, Any]) -> dict[str, Any]:
        contact_id = args.get("contactId")
        result = await self.client.send_email(
            contact_id,
            args.get("subject"),
            args.get("message"),
            args.get("html"),
            **self._pick(args, "emailFrom", "emailCc", "emailBcc", "attachments"),
        )
        data = self._unwrap(result) or {}
        return {
            "success": True,
            "messageId": data.get("messageId"),
            "conversationId": data.get("conversationId"),
            "emailMessageId": data.get("emailMessageId"),
            "message": f"Email sent successfully to contact {contact_id}",
        }

    # =========================================================================
    # Conversations
    # =========================================================================

    @tool_operation(
        name="search_conversations",
        description="Search conversations in GoHighLevel with various filters",
        input_schema=obj(
            {
                "contactId": string("Filter conversations for a specific contact"),
                "query": string("Search query to filter conversations"),
                "status": string(
                    "Filter conversations by read status",
                    enum=["all", "read", "unread", "starred", "recents"],
                    default="all",
                ),
                "limit": number(
                    "Maximum number of conversations to return (default: 20, max: 100)",
                    minimum=1,
                    maximum=100,
                    default=DEFAULT_SEARCH_LIMIT,
                ),
                "assignedTo": string("Filter by user ID assigned to conversations"),
            }
        ),
    )
    async def search_conversations(self, args: dict[str, Any]) -> dict[str, Any]:
        params = {
            "contactId": args.get("contactId"),
            "query": args.get("query"),
            "status": args.get("status") or "all",
            "limit": args.get("limit") or DEFAULT_SEARCH_LIMIT,
            "assignedTo": args.get("assignedTo"),
        }
        data = self._unwrap(await self.client.search_conversations(params)) or {}
        conversations = data.get("conversations") or []
        total = data.get("total", len(conversations))
        return {
            "success": True,
            "conversations": conversations,
            "total": total,
            "message": f"Found {len(conversations)} conversations ({total} total)",
        }

    @tool_operation(
        name="get_conversation",
        description="Get detailed conversation information including message history",
        input_schema=obj(
            {
                "conversationId": string("The unique ID of the conversation to retrieve"),
                "limit": number(
                    "Maximum number of messages to return (default: 20)",
                    minimum=1,
                    maximum=100,
                    default=DEFAULT_MESSAGE_LIMIT,
                ),
                "messageTypes": array(
                    "Filter messages by type (optional)",
                    items={"type": "string", "enum": MESSAGE_TYPES},
                ),
            },
            required=["conversationId"],
        ),
    )
    async def get_conversation(self, args: dict[str, Any]) -> dict[str, Any]:
        conversation_id = args.get("conversationId")
        conversation = self._unwrap(await self.client.get_conversation(conversation_id))

        message_types = args.get("messageTypes")
        messages_result = await self.client.get_conversation_messages(
            conversation_id,
            limit=args.get("limit") or DEFAULT_MESSAGE_LIMIT,
            message_type=",".join(message_types) if message_types else None,
        )
        messages_data = self._unwrap(messages_result) or {}
        messages = messages_data.get("messages") or []
        return {
            "success": True,
            "conversation": conversation,
            "messages": messages,
            "hasMoreMessages": messages_data.get("nextPage"),
            "message": f"Retrieved conversation with {len(messages)} messages",
        }

    @tool_operation(
        name="create_conversation",
        description="Create a new conversation with a contact",
        input_schema=obj(
            {"contactId": string("The unique ID of the contact to create conversation with")},
            required=["contactId"],
        ),
    )
    async def create_conversation(self, args: dict[str, Any]) -> dict[str, Any]:
        contact_id = args.get("contactId")
        result = await self.client.create_conversation({"contactId": contact_id})
        conversation = self._unwrap(result) or {}
        return {
            "success": True,
            "conversationId": conversation.get("id"),
            "message": f"Conversation created successfully with contact {contact_id}",
        }

    @tool_operation(
        name="update_conversation",
        description="Update conversation properties (star, mark read, etc.)",
        input_schema=obj(
            {
                "conversationId": string("The unique ID of the conversation to update"),
                "starred": boolean("Star or unstar the conversation"),
                "unreadCount": number(
                    "Set the unread message count (0 to mark as read)", minimum=0
                ),
            },
            required=["conversationId"],
        ),
    )
    async def update_conversation(self, args: dict[str, Any]) -> dict[str, Any]:
        updates = self._pick(args, "starred", "unreadCount")
        result = await self.client.update_conversation(args.get("conversationId"), updates)
        return {
            "success": True,
            "conversation": self._unwrap(result),
            "message": "Conversation updated successfully",
        }

    @tool_operation(
        name="get_recent_messages",
        description="Get recent messages across all conversations for monitoring",
        input_schema=obj(
            {
                "limit": number(
                    "Maximum number of conversations to check (default: 10)",
                    minimum=1,
                    maximum=50,
                    default=DEFAULT_RECENT_LIMIT,
                ),
                "status": string(
                    "Filter by conversation status", enum=["all", "unread"], default="unread"
                ),
            }
        ),
    )
    async def get_recent_messages(self, args: dict[str, Any]) -> dict[str, Any]:
        status = args.get("status")
        params = {
            "limit": args.get("limit") or DEFAULT_RECENT_LIMIT,
            "status": status if status in ("all", "unread") else "unread",
            "sortBy": "last_message_date",
            "sort": "desc",
        }
        data = self._unwrap(await self.client.search_conversations(params)) or {}
        conversations = [
            {
                "conversationId": conv.get("id"),
                "contactName": conv.get("fullName") or conv.get("contactName"),
                "contactEmail": conv.get("email"),
                "contactPhone": conv.get("phone"),
                "lastMessageBody": conv.get("lastMessageBody"),
                "lastMessageType": conv.get("lastMessageType"),
                "unreadCount": conv.get("unreadCount"),
                "starred": conv.get("starred"),
            }
            for conv in data.get("conversations") or []
        ]
        return {
            "success": True,
            "conversations": conversations,
            "message": f"Retrieved {len(conversations)} recent conversations",
        }

    @tool_operation(
        name="delete_conversation",
        description="Delete a conversation permanently",
        input_schema=obj(
            {"conversationId": string("The unique ID of the conversation to delete")},
            required=["conversationId"],
        ),
    )
    async def delete_conversation(self, args: dict[str, Any]) -> dict[str, Any]:
        self._unwrap(await self.client.delete_conversation(args.get("conversationId")))
        return {"success": True, "message": "Conversation deleted successfully"}

    # =========================================================================
    # Messages
    # =========================================================================

    @tool_operation(
        name="get_email_message",
        description="Get detailed email message information by email message ID",
        input_schema=obj(
            {"emailMessageId": string("The unique ID of the email message to retrieve")},
            required=["emailMessageId"],
        ),
    )
    async def get_email_message(self, args: dict[str, Any]) -> dict[str, Any]:
        email_message_id = args.get("emailMessageId")
        result = await self.client.get_email_message(email_message_id)
        return {
            "success": True,
            "emailMessage": self._unwrap(result),
            "message": f"Retrieved email message with ID {email_message_id}",
        }

    @tool_operation(
        name="get_message",
        description="Get detailed message information by message ID",
        input_schema=obj(
            {"messageId": string("The unique ID of the message to retrieve")},
            required=["messageId"],
        ),
    )
    async def get_message(self, args: dict[str, Any]) -> dict[str, Any]:
        message_id = args.get("messageId")
        result = await self.client.get_message(message_id)
        return {
            "success": True,
            "messageData": self._unwrap(result),
            "message": f"Retrieved message with ID {message_id}",
        }

    @tool_operation(
        name="upload_message_attachments",
        description="Upload file attachments for use in messages",
        input_schema=obj(
            {
                "conversationId": string("The conversation ID to upload attachments for"),
                "attachmentUrls": string_list("Array of file URLs to upload as attachments"),
            },
            required=["conversationId", "attachmentUrls"],
        ),
    )
    async def upload_message_attachments(self, args: dict[str, Any]) -> dict[str, Any]:
        conversation_id = args.get("conversationId")
        upload = {
            "conversationId": conversation_id,
            "locationId": self.client.location_id,
            "attachmentUrls": args.get("attachmentUrls") or [],
        }
        data = self._unwrap(await self.client.upload_message_attachments(upload)) or {}
        return {
            "success": True,
            "uploadedFiles": data.get("uploadedFiles"),
            "message": f"Attachments uploaded successfully to conversation {conversation_id}",
        }

    @tool_operation(
        name="update_message_status",
        description="Update the delivery status of a message",
        input_schema=obj(
            {
                "messageId": string("The unique ID of the message to update"),
                "status": string(
                    "New status for the message", enum=["delivered", "failed", "pending", "read"]
                ),
                "error": mapping(
                    "Error details if status is failed",
                    {
                        "code": {"type": "string"},
                        "type": {"type": "string"},
                        "message": {"type": "string"},
                    },
                ),
                "emailMessageId": string("Email message ID if updating email status"),
                "recipients": string_list("Email delivery status for additional recipients"),
            },
            required=["messageId", "status"],
        ),
    )
    async def update_message_status(self, args: dict[str, Any]) -> dict[str, Any]:
        status = self._pick(args, "status", "error", "emailMessageId", "recipients")
        self._unwrap(await self.client.update_message_status(args.get("messageId"), status))
        return {
            "success": True,
            "message": f"Message status updated to {args.get('status')} successfully",
        }

    @tool_operation(
        name="add_inbound_message",
        description="Manually add an inbound message to a conversation",
        input_schema=obj(
            {
                "type": string("Type of inbound message to add", enum=INBOUND_MESSAGE_TYPES),
                "conversationId": string("The conversation to add the message to"),
                "conversationProviderId": string("Conversation provider ID for the message"),
                "message": string("Message content (for text-based messages)"),
                "attachments": string_list("Array of attachment URLs"),
                "html": string("HTML content for email messages"),
                "subject": string("Subject line for email messages"),
                "emailFrom": string("From email address"),
                "emailTo": string("To email address"),
                "emailCc": string_list("CC email addresses"),
                "emailBcc": string_list("BCC email addresses"),
                "emailMessageId": string("Email message ID for threading"),
                "altId": string("External provider message ID"),
                "date": string("Date of the message (ISO format)"),
                "call": mapping(
                    "Call details for call-type messages",
                    {
                        "to": string("Called number"),
                        "from": string("Caller number"),
                        "status": string("Call status", enum=CALL_STATUSES),
                    },
                ),
            },
            required=["type", "conversationId", "conversationProviderId"],
        ),
    )
    async def add_inbound_message(self, args: dict[str, Any]) -> dict[str, Any]:
        conversation_id = args.get("conversationId")
        message = self._pick(
            args,
            "type",
            "conversationId",
            "conversationProviderId",
            "message",
            "attachments",
            "html",
            "subject",
            "emailFrom",
            "emailTo",
            "emailCc",
            "emailBcc",
            "emailMessageId",
            "altId",
            "date",
            "call",
        )
        data = self._unwrap(await self.client.add_inbound_message(message)) or {}
        return {
            "success": True,
            "messageId": data.get("messageId"),
            "conversationId": data.get("conversationId"),
            "message": f"Inbound message added successfully to conversation {conversation_id}",
        }

    @tool_operation(
        name="add_outbound_call",
        description="Manually add an outbound call record to a conversation",
        input_schema=obj(
            {
                "conversationId": string("The conversation to add the call to"),
                "conversationProviderId": string("Conversation provider ID for the call"),
                "to": string("Called phone number"),
                "from": string("Caller phone number"),
                "status": string("Call completion status", enum=CALL_STATUSES),
                "attachments": string_list("Array of attachment URLs"),
                "altId": string("External provider call ID"),
                "date": string("Date of the call (ISO format)"),
            },
            required=["conversationId", "conversationProviderId", "to", "from", "status"],
        ),
    )
    async def add_outbound_call(self, args: dict[str, Any]) -> dict[str, Any]:
        conversation_id = args.get("conversationId")
        call = {
            "type": "Call",
            **self._pick(
                args, "conversationId", "conversationProviderId", "attachments", "altId", "date"
            ),
            "call": self._pick(args, "to", "from", "status"),
        }
        data = self._unwrap(await self.client.add_outbound_call(call)) or {}
        return {
            "success": True,
            "messageId": data.get("messageId"),
            "conversationId": data.get("conversationId"),
            "message": f"Outbound call added successfully to conversation {conversation_id}",
        }

    # =========================================================================
    # Recordings and transcriptions
    # =========================================================================

    @tool_operation(
        name="get_message_recording",
        description="Get call recording audio for a message",
        input_schema=obj(
            {"messageId": string("The unique ID of the call message to get recording for")},
            required=["messageId"],
        ),
    )
    async def get_message_recording(self, args: dict[str, Any]) -> dict[str, Any]:
        message_id = args.get("messageId")
        recording = self._unwrap(await self.client.get_message_recording(message_id))
        return {
            "success": True,
            "recording": base64.b64encode(recording["audioData"]).decode(),
            "contentType": recording["contentType"],
            "message": f"Retrieved call recording for message {message_id}",
        }

    @tool_operation(
        name="get_message_transcription",
        description="Get call transcription text for a message",
        input_schema=obj(
            {"messageId": string("The unique ID of the call message to get transcription for")},
            required=["messageId"],
        ),
    )
    async def get_message_transcription(self, args: dict[str, Any]) -> dict[str, Any]:
        message_id = args.get("messageId")
        data = self._unwrap(await self.client.get_message_transcription(message_id))
        return {
            "success": True,
            "transcriptions": data["transcriptions"],
            "message": f"Retrieved call transcription for message {message_id}",
        }

    @tool_operation(
        name="download_transcription",
        description="Download call transcription as a text file",
        input_schema=obj(
            {
                "messageId": string(
                    "The unique ID of the call message to download transcription for"
                )
            },
            required=["messageId"],
        ),
    )
    async def download_transcription(self, args: dict[str, Any]) -> dict[str, Any]:
        message_id = args.get("messageId")
        result = await self.client.download_message_transcription(message_id)
        return {
            "success": True,
            "transcription": self._unwrap(result),
            "message": f"Downloaded call transcription for message {message_id}",
        }

    # =========================================================================
    # Scheduling and live chat
    # =========================================================================

    @tool_operation(
        name="cancel_scheduled_message",
        description="Cancel a scheduled message before it is sent",
        input_schema=obj(
            {"messageId": string("The unique ID of the scheduled message to cancel")},
            required=["messageId"],
        ),
    )
    async def cancel_scheduled_message(self, args: dict[str, Any]) -> dict[str, Any]:
        data = self._unwrap(await self.client.cancel_scheduled_message(args.get("messageId")))
        data = data if isinstance(data, dict) else {}
        return {
            "success": True,
            "status": data.get("status"),
            "message": data.get("message") or "Scheduled message cancelled successfully",
        }

    @tool_operation(
        name="cancel_scheduled_email",
        description="Cancel a scheduled email before it is sent",
        input_schema=obj(
            {"emailMessageId": string("The unique ID of the scheduled email to cancel")},
            required=["emailMessageId"],
        ),
    )
    async def cancel_scheduled_email(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.cancel_scheduled_email(args.get("emailMessageId"))
        data = self._unwrap(result)
        data = data if isinstance(data, dict) else {}
        return {
            "success": True,
            "status": data.get("status"),
            "message": data.get("message") or "Scheduled email cancelled successfully",
        }

    @tool_operation(
        name="live_chat_typing",
        description="Send typing indicator for live chat conversations",
        input_schema=obj(
            {
                "visitorId": string("Unique visitor ID for the live chat session"),
                "conversationId": string("The conversation ID for the live chat"),
                "isTyping": boolean("Whether the agent is currently typing"),
            },
            required=["visitorId", "conversationId", "isTyping"],
        ),
        action="send live chat typing indicator",
    )
    async def live_chat_typing(self, args: dict[str, Any]) -> dict[str, Any]:
        is_typing = bool(args.get("isTyping"))
        typing = {
            "locationId": self.client.location_id,
            "isTyping": is_typing,
            "visitorId": args.get("visitorId"),
            "conversationId": args.get("conversationId"),
        }
        data = self._unwrap(await self.client.live_chat_typing(typing))
        data = data if isinstance(data, dict) else {}
        state = "enabled" if is_typing else "disabled"
        return {
            "success": bool(data.get("success", True)),
            "message": f"Live chat typing indicator {state} successfully",
        }

    # =========================================================================
    # MCP content
    # =========================================================================

    def extra_content(self, name: str, response: Any) -> tuple[ContentBlock, ...]:
        if name == "get_message_recording":
            return (
                ContentBlock.from_audio(
                    base64.b64decode(response["recording"]), response["contentType"]
                ),
            )
        return ()
