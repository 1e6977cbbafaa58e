"""
Tests for ConversationTools.

Tests cover:
- SMS and email sending
- Conversation search and detail (conversation + messages)
- Recent message summaries
- Call recordings (base64 + audio content block) and transcriptions
"""

import base64

import pytest

from ghl_mcp.tools import ConversationTools, ToolExecutionError
from ghl_mcp.tools.base import ContentType

RECORDING_PATH = "/conversations/messages/msg_1/locations/loc_default/recording"


@pytest.fixture
def conversation_tools(ghl_client):
    return ConversationTools(ghl_client)


# =============================================================================
# Messaging Tests
# =============================================================================


class TestSending:
    """Tests for send_sms and send_email."""

    @pytest.mark.asyncio
    async def test_send_sms(self, conversation_tools, mock_api):
        mock_api.add(
            "POST",
            "/conversations/messages",
            json={"conversationId": "conv_1", "messageId": "msg_1"},
        )

        result = await conversation_tools.execute_tool(
            "send_sms", {"contactId": "contact_123", "message": "Hi!"}
        )

        assert mock_api.body(mock_api.last) == {
            "type": "SMS",
            "contactId": "contact_123",
            "message": "Hi!",
        }
        assert result == {
            "success": True,
            "messageId": "msg_1",
            "conversationId": "conv_1",
            "message": "SMS sent successfully to contact contact_123",
        }

    @pytest.mark.asyncio
    async def test_send_email(self, conversation_tools, mock_api):
        mock_api.add(
            "POST",
            "/conversations/messages",
            json={"conversationId": "conv_1", "messageId": "msg_2", "emailMessageId": "em_1"},
        )

        result = await conversation_tools.execute_tool(
            "send_email",
            {
                "contactId": "contact_123",
                "subject": "Welcome",
                "html": "<p>Hello</p>",
                "emailCc": ["cc@example.com"],
            },
        )

        body = mock_api.body(mock_api.last)
        assert body["type"] == "Email"
        assert body["subject"] == "Welcome"
        assert body["html"] == "<p>Hello</p>"
        assert body["emailCc"] == ["cc@example.com"]
        assert result["emailMessageId"] == "em_1"
        assert result["message"] == "Email sent successfully to contact contact_123"

    @pytest.mark.asyncio
    async def test_send_failure(self, conversation_tools, mock_api):
        mock_api.add(
            "POST",
            "/conversations/messages",
            status=400,
            json={"message": "Contact has no phone number"},
        )

        with pytest.raises(ToolExecutionError) as exc_info:
            await conversation_tools.execute_tool(
                "send_sms", {"contactId": "contact_123", "message": "Hi!"}
            )

        assert str(exc_info.value) == (
            "Failed to send SMS: GHL API Error (400): Contact has no phone number"
        )


# =============================================================================
# Conversation Tests
# =============================================================================


class TestConversations:
    """Tests for search_conversations, get_conversation and get_recent_messages."""

    @pytest.mark.asyncio
    async def test_search_defaults(self, conversation_tools, mock_api):
        mock_api.add(
            "GET",
            "/conversations/search",
            json={"conversations": [{"id": "conv_1"}], "total": 4},
        )

        result = await conversation_tools.execute_tool("search_conversations", {})

        assert dict(mock_api.last.url.params) == {
            "locationId": "loc_default",
            "status": "all",
            "limit": "20",
        }
        assert result["total"] == 4
        assert result["message"] == "Found 1 conversations (4 total)"

    @pytest.mark.asyncio
    async def test_get_conversation_with_messages(self, conversation_tools, mock_api):
        mock_api.add("GET", "/conversations/conv_1", json={"id": "conv_1", "contactId": "c_1"})
        mock_api.add(
            "GET",
            "/conversations/conv_1/messages",
            json={"messages": [{"id": "m1"}, {"id": "m2"}], "nextPage": True},
        )

        result = await conversation_tools.execute_tool(
            "get_conversation",
            {"conversationId": "conv_1", "messageTypes": ["TYPE_SMS", "TYPE_EMAIL"]},
        )

        assert [request.url.path for request in mock_api.requests] == [
            "/conversations/conv_1",
            "/conversations/conv_1/messages",
        ]
        assert dict(mock_api.last.url.params) == {"limit": "20", "type": "TYPE_SMS,TYPE_EMAIL"}
        assert result["conversation"]["id"] == "conv_1"
        assert result["hasMoreMessages"] is True
        assert result["message"] == "Retrieved conversation with 2 messages"

    @pytest.mark.asyncio
    async def test_recent_messages(self, conversation_tools, mock_api):
        mock_api.add(
            "GET",
            "/conversations/search",
            json={
                "conversations": [
                    {
                        "id": "conv_1",
                        "fullName": "Ada Lovelace",
                        "email": "ada@example.com",
                        "phone": "+15555550100",
                        "lastMessageBody": "See you soon",
                        "lastMessageType": "TYPE_SMS",
                        "unreadCount": 2,
                        "starred": False,
                        "internal": "dropped",
                    }
                ]
            },
        )

        result = await conversation_tools.execute_tool(
            "get_recent_messages", {"status": "starred"}
        )

        params = mock_api.last.url.params
        assert params["limit"] == "10"
        assert params["status"] == "unread"
        assert params["sortBy"] == "last_message_date"
        assert params["sort"] == "desc"
        assert result["conversations"] == [
            {
                "conversationId": "conv_1",
                "contactName": "Ada Lovelace",
                "contactEmail": "ada@example.com",
                "contactPhone": "+15555550100",
                "lastMessageBody": "See you soon",
                "lastMessageType": "TYPE_SMS",
                "unreadCount": 2,
                "starred": False,
            }
        ]
        assert result["message"] == "Retrieved 1 recent conversations"


# =============================================================================
# Call Recording Tests
# =============================================================================


class TestCallArtifacts:
    """Tests for recordings and transcriptions."""

    @pytest.mark.asyncio
    async def test_recording_is_base64(self, conversation_tools, mock_api):
        mock_api.add(
            "GET", RECORDING_PATH, content=b"RIFF....WAVE", headers={"content-type": "audio/wav"}
        )

        result = await conversation_tools.execute_tool(
            "get_message_recording", {"messageId": "msg_1"}
        )

        assert base64.b64decode(result["recording"]) == b"RIFF....WAVE"
        assert result["contentType"] == "audio/wav"

    @pytest.mark.asyncio
    async def test_recording_tool_adds_audio_block(self, conversation_tools, mock_api):
        mock_api.add("GET", RECORDING_PATH, content=b"RIFF....WAVE")
        tool = next(
            t for t in conversation_tools.as_tools() if t.name == "get_message_recording"
        )

        result = await tool.execute({"messageId": "msg_1"})

        assert result.is_error is False
        audio = result.content[-1]
        assert audio.type == ContentType.AUDIO
        assert audio.data == b"RIFF....WAVE"

    @pytest.mark.asyncio
    async def test_transcription(self, conversation_tools, mock_api):
        mock_api.add(
            "GET",
            "/conversations/locations/loc_default/messages/msg_1/transcription",
            json=[{"sentenceIndex": 0, "transcript": "Hello"}],
        )

        result = await conversation_tools.execute_tool(
            "get_message_transcription", {"messageId": "msg_1"}
        )

        assert result["transcriptions"][0]["transcript"] == "Hello"
        assert result["message"] == "Retrieved call transcription for message msg_1"
