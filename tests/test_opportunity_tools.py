"""
Tests for OpportunityTools.

Tests cover:
- Search argument mapping and defaults
- Pipelines (stable across calls)
- 404 handling on get_opportunity
- Create/update/upsert shaping
- Followers
"""

import pytest
from unittest.mock import AsyncMock, patch

from ghl_mcp.integrations.base import ApiResult
from ghl_mcp.tools import OpportunityTools, ToolExecutionError


@pytest.fixture
def opportunity_tools(ghl_client):
    return OpportunityTools(ghl_client)


# =============================================================================
# Search Tests
# =============================================================================


class TestSearchOpportunities:
    """Tests for search_opportunities."""

    @pytest.mark.asyncio
    async def test_defaults(self, opportunity_tools, mock_api):
        """Location and a page size of 20 are always sent."""
        mock_api.add(
            "GET",
            "/opportunities/search",
            json={"opportunities": [{"id": "opp_1"}], "meta": {"total": 7}},
        )

        result = await opportunity_tools.execute_tool("search_opportunities", {})

        assert dict(mock_api.last.url.params) == {"location_id": "loc_default", "limit": "20"}
        assert result["success"] is True
        assert result["opportunities"] == [{"id": "opp_1"}]
        assert result["message"] == "Found 1 opportunities (7 total)"

    @pytest.mark.asyncio
    async def test_maps_arguments_to_query_names(self, opportunity_tools, mock_api):
        await opportunity_tools.execute_tool(
            "search_opportunities",
            {
                "query": "acme",
                "pipelineId": "pipe_1",
                "pipelineStageId": "stage_1",
                "contactId": "contact_123",
                "status": "open",
                "assignedTo": "user_1",
                "limit": 5,
            },
        )

        assert dict(mock_api.last.url.params) == {
            "location_id": "loc_default",
            "limit": "5",
            "q": "acme",
            "pipeline_id": "pipe_1",
            "pipeline_stage_id": "stage_1",
            "contact_id": "contact_123",
            "status": "open",
            "assigned_to": "user_1",
        }

    @pytest.mark.asyncio
    async def test_total_falls_back_to_count(self, opportunity_tools, mock_api):
        mock_api.add("GET", "/opportunities/search", json={"opportunities": [{"id": "a"}]})

        result = await opportunity_tools.execute_tool("search_opportunities", {})

        assert result["message"] == "Found 1 opportunities (1 total)"


# =============================================================================
# Pipeline Tests
# =============================================================================


class TestPipelines:
    """Tests for get_pipelines."""

    @pytest.mark.asyncio
    async def test_pipelines(self, opportunity_tools, mock_api, sample_pipelines):
        mock_api.add("GET", "/opportunities/pipelines", json=sample_pipelines)

        result = await opportunity_tools.execute_tool("get_pipelines", {})

        assert mock_api.last.url.params["locationId"] == "loc_default"
        assert result["pipelines"] == sample_pipelines["pipelines"]
        assert result["message"] == "Retrieved 2 pipelines"

    @pytest.mark.asyncio
    async def test_consecutive_calls_are_identical(
        self, opportunity_tools, mock_api, sample_pipelines
    ):
        mock_api.add("GET", "/opportunities/pipelines", json=sample_pipelines)

        first = await opportunity_tools.execute_tool("get_pipelines", {})
        second = await opportunity_tools.execute_tool("get_pipelines", {})

        assert {p["id"] for p in first["pipelines"]} == {p["id"] for p in second["pipelines"]}
        assert first == second


# =============================================================================
# Opportunity Tests
# =============================================================================


class TestOpportunityCrud:
    """Tests for single-opportunity tools."""

    @pytest.mark.asyncio
    async def test_get_opportunity(self, opportunity_tools, mock_api):
        mock_api.add("GET", "/opportunities/opp_1", json={"opportunity": {"id": "opp_1"}})

        result = await opportunity_tools.execute_tool("get_opportunity", {"opportunityId": "opp_1"})

        assert result == {
            "success": True,
            "opportunity": {"id": "opp_1"},
            "message": "Opportunity retrieved successfully",
        }

    @pytest.mark.asyncio
    async def test_get_opportunity_not_found(self, opportunity_tools, mock_api):
        """A remote 404 names both the action and the upstream error."""
        mock_api.add(
            "GET", "/opportunities/missing", status=404, json={"message": "Opportunity not found"}
        )

        with pytest.raises(ToolExecutionError) as exc_info:
            await opportunity_tools.execute_tool("get_opportunity", {"opportunityId": "missing"})

        message = str(exc_info.value)
        assert "Failed to get opportunity" in message
        assert "404" in message
        assert "Opportunity not found" in message

    @pytest.mark.asyncio
    async def test_missing_envelope_is_an_error(self, opportunity_tools, mock_api):
        """A success body without the opportunity field is reported as a failure."""
        mock_api.add("GET", "/opportunities/opp_1", json={})

        with pytest.raises(ToolExecutionError, match="Unknown API error"):
            await opportunity_tools.execute_tool("get_opportunity", {"opportunityId": "opp_1"})

    @pytest.mark.asyncio
    async def test_create_defaults_status_open(self, opportunity_tools, ghl_client):
        with patch.object(
            ghl_client,
            "create_opportunity",
            new_callable=AsyncMock,
            return_value=ApiResult.ok({"id": "opp_new"}),
        ) as mock_create:
            result = await opportunity_tools.execute_tool(
                "create_opportunity",
                {"name": "Deal", "pipelineId": "pipe_1", "contactId": "contact_123"},
            )

        sent = mock_create.call_args.args[0]
        assert sent["status"] == "open"
        assert sent["name"] == "Deal"
        assert result["success"] is True
        assert result["opportunity"] == {"id": "opp_new"}

    @pytest.mark.asyncio
    async def test_update_keeps_zero_monetary_value(self, opportunity_tools, ghl_client):
        with patch.object(
            ghl_client,
            "update_opportunity",
            new_callable=AsyncMock,
            return_value=ApiResult.ok({"id": "opp_1"}),
        ) as mock_update:
            await opportunity_tools.execute_tool(
                "update_opportunity",
                {"opportunityId": "opp_1", "name": "", "monetaryValue": 0, "status": "won"},
            )

        mock_update.assert_called_once_with("opp_1", {"status": "won", "monetaryValue": 0})

    @pytest.mark.asyncio
    async def test_update_status(self, opportunity_tools, mock_api):
        mock_api.add("PUT", "/opportunities/opp_1/status", json={"succeded": True})

        result = await opportunity_tools.execute_tool(
            "update_opportunity_status", {"opportunityId": "opp_1", "status": "lost"}
        )

        assert mock_api.body(mock_api.last) == {"status": "lost"}
        assert result["success"] is True

    @pytest.mark.asyncio
    async def test_delete_failure_message(self, opportunity_tools, mock_api):
        mock_api.add(
            "DELETE", "/opportunities/opp_1", status=403, json={"message": "Forbidden"}
        )

        with pytest.raises(ToolExecutionError) as exc_info:
            await opportunity_tools.execute_tool("delete_opportunity", {"opportunityId": "opp_1"})

        assert str(exc_info.value) == (
            "Failed to delete opportunity: GHL API Error (403): Forbidden"
        )


# =============================================================================
# Follower Tests
# =============================================================================


class TestFollowers:
    """Tests for follower tools."""

    @pytest.mark.asyncio
    async def test_add_followers(self, opportunity_tools, mock_api):
        mock_api.add(
            "POST",
            "/opportunities/opp_1/followers",
            json={"followers": ["u1", "u2"], "followersAdded": ["u2"]},
        )

        result = await opportunity_tools.execute_tool(
            "add_opportunity_followers", {"opportunityId": "opp_1", "followers": ["u2"]}
        )

        assert mock_api.body(mock_api.last) == {"followers": ["u2"]}
        assert result["followersAdded"] == ["u2"]
        assert result["message"] == "Added 1 followers to opportunity"
