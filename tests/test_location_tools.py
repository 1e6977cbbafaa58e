"""
Tests for LocationTools.

Tests cover:
- Location search defaults
- Tag create/get round trip
- Task search body shaping
- Custom field failures
- Templates and timezones
"""

import httpx
import pytest

from ghl_mcp.tools import LocationTools, ToolExecutionError


@pytest.fixture
def location_tools(ghl_client):
    return LocationTools(ghl_client)


# =============================================================================
# Location Tests
# =============================================================================


class TestLocations:
    """Tests for location tools."""

    @pytest.mark.asyncio
    async def test_search_defaults(self, location_tools, mock_api):
        """Search without arguments pages from the start in ascending order."""
        mock_api.add(
            "GET",
            "/locations/search",
            json={"locations": [{"id": "loc_1"}, {"id": "loc_2"}]},
        )

        result = await location_tools.execute_tool("search_locations", {})

        assert dict(mock_api.last.url.params) == {"skip": "0", "limit": "10", "order": "asc"}
        assert result["locations"] == [{"id": "loc_1"}, {"id": "loc_2"}]
        assert result["message"] == "Found 2 locations"

    @pytest.mark.asyncio
    async def test_search_filters(self, location_tools, mock_api):
        await location_tools.execute_tool(
            "search_locations",
            {"companyId": "comp_1", "limit": 3, "order": "desc", "email": "a@example.com"},
        )

        params = mock_api.last.url.params
        assert params["companyId"] == "comp_1"
        assert params["limit"] == "3"
        assert params["order"] == "desc"
        assert params["email"] == "a@example.com"

    @pytest.mark.asyncio
    async def test_create_location_message(self, location_tools, mock_api):
        mock_api.add("POST", "/locations/", json={"id": "loc_new", "name": "Acme"})

        result = await location_tools.execute_tool(
            "create_location", {"name": "Acme", "companyId": "comp_1", "phone": None}
        )

        assert mock_api.body(mock_api.last) == {"name": "Acme", "companyId": "comp_1"}
        assert result["location"]["id"] == "loc_new"
        assert result["message"] == 'Location "Acme" created successfully'

    @pytest.mark.asyncio
    async def test_update_location_strips_path_id(self, location_tools, mock_api):
        await location_tools.execute_tool(
            "update_location", {"locationId": "loc_1", "companyId": "comp_1", "city": "Austin"}
        )

        assert mock_api.last.method == "PUT"
        assert mock_api.last.url.path == "/locations/loc_1"
        assert mock_api.body(mock_api.last) == {"companyId": "comp_1", "city": "Austin"}

    @pytest.mark.asyncio
    async def test_delete_location(self, location_tools, mock_api):
        result = await location_tools.execute_tool(
            "delete_location", {"locationId": "loc_1", "deleteTwilioAccount": True}
        )

        assert mock_api.last.method == "DELETE"
        assert mock_api.last.url.params["deleteTwilioAccount"] == "true"
        assert result == {"success": True, "message": "Location deleted successfully"}

    @pytest.mark.asyncio
    async def test_delete_location_uses_remote_message(self, location_tools, mock_api):
        mock_api.add(
            "DELETE", "/locations/loc_1", json={"succeded": True, "message": "Queued for deletion"}
        )

        result = await location_tools.execute_tool(
            "delete_location", {"locationId": "loc_1", "deleteTwilioAccount": False}
        )

        assert mock_api.last.url.params["deleteTwilioAccount"] == "false"
        assert result["message"] == "Queued for deletion"


# =============================================================================
# Tag Tests
# =============================================================================


class TestTags:
    """Tests for location tag tools."""

    @pytest.mark.asyncio
    async def test_created_tag_can_be_fetched(self, location_tools, mock_api):
        """A tag created by name is returned under the same name by ID."""
        tags = {}

        def create(request):
            tag = {"id": f"tag_{len(tags) + 1}", "name": mock_api.body(request)["name"]}
            tags[tag["id"]] = tag
            return httpx.Response(201, json={"tag": tag})

        def fetch(request):
            tag_id = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(200, json={"tag": tags[tag_id]})

        mock_api.add_handler("POST", "/locations/loc_1/tags", create)
        mock_api.add_handler("GET", "/locations/loc_1/tags/tag_1", fetch)

        created = await location_tools.execute_tool(
            "create_location_tag", {"locationId": "loc_1", "name": "VIP"}
        )
        fetched = await location_tools.execute_tool(
            "get_location_tag", {"locationId": "loc_1", "tagId": created["tag"]["id"]}
        )

        assert created["message"] == 'Tag "VIP" created successfully'
        assert fetched["tag"]["name"] == "VIP"
        assert fetched["message"] == "Location tag retrieved successfully"

    @pytest.mark.asyncio
    async def test_list_tags(self, location_tools, mock_api):
        mock_api.add(
            "GET",
            "/locations/loc_1/tags",
            json={"tags": [{"id": "t1", "name": "a"}, {"id": "t2", "name": "b"}]},
        )

        result = await location_tools.execute_tool("get_location_tags", {"locationId": "loc_1"})

        assert result["message"] == "Retrieved 2 location tags"

    @pytest.mark.asyncio
    async def test_update_tag_sends_name_only(self, location_tools, mock_api):
        await location_tools.execute_tool(
            "update_location_tag", {"locationId": "loc_1", "tagId": "t1", "name": "Gold"}
        )

        assert mock_api.last.url.path == "/locations/loc_1/tags/t1"
        assert mock_api.body(mock_api.last) == {"name": "Gold"}


# =============================================================================
# Task Tests
# =============================================================================


class TestTaskSearch:
    """Tests for search_location_tasks."""

    @pytest.mark.asyncio
    async def test_body_excludes_location(self, location_tools, mock_api):
        mock_api.add(
            "POST", "/locations/loc_1/tasks/search", json={"tasks": [{"id": "task_1"}]}
        )

        result = await location_tools.execute_tool(
            "search_location_tasks",
            {"locationId": "loc_1", "completed": False, "assignedTo": ["u1"], "limit": 5},
        )

        assert mock_api.body(mock_api.last) == {
            "completed": False,
            "assignedTo": ["u1"],
            "limit": 5,
        }
        assert result["message"] == "Found 1 tasks"


# =============================================================================
# Custom Field and Value Tests
# =============================================================================


class TestCustomFields:
    """Tests for custom field and value tools."""

    @pytest.mark.asyncio
    async def test_model_filter(self, location_tools, mock_api):
        mock_api.add(
            "GET", "/locations/loc_1/customFields", json={"customFields": [{"id": "cf_1"}]}
        )

        result = await location_tools.execute_tool(
            "get_location_custom_fields", {"locationId": "loc_1", "model": "contact"}
        )

        assert mock_api.last.url.params["model"] == "contact"
        assert result["message"] == "Retrieved 1 custom fields"

    @pytest.mark.asyncio
    async def test_create_failure_names_action(self, location_tools, mock_api):
        mock_api.add(
            "POST",
            "/locations/loc_1/customFields",
            status=422,
            json={"message": ["dataType must be a valid enum value"]},
        )

        with pytest.raises(ToolExecutionError) as exc_info:
            await location_tools.execute_tool(
                "create_location_custom_field",
                {"locationId": "loc_1", "name": "Budget", "dataType": "MONEYZ"},
            )

        assert str(exc_info.value) == (
            "Failed to create custom field: "
            "GHL API Error (422): dataType must be a valid enum value"
        )

    @pytest.mark.asyncio
    async def test_create_custom_value(self, location_tools, mock_api):
        mock_api.add(
            "POST",
            "/locations/loc_1/customValues",
            json={"customValue": {"id": "cv_1", "name": "Hours", "value": "9-5"}},
        )

        result = await location_tools.execute_tool(
            "create_location_custom_value",
            {"locationId": "loc_1", "name": "Hours", "value": "9-5"},
        )

        assert mock_api.body(mock_api.last) == {"name": "Hours", "value": "9-5"}
        assert result["customValue"]["id"] == "cv_1"
        assert result["message"] == 'Custom value "Hours" created successfully'


# =============================================================================
# Template and Timezone Tests
# =============================================================================


class TestTemplatesAndTimezones:
    """Tests for template and timezone tools."""

    @pytest.mark.asyncio
    async def test_templates_defaults(self, location_tools, mock_api):
        mock_api.add(
            "GET",
            "/locations/loc_1/templates",
            json={"templates": [{"id": "tpl_1"}], "totalCount": 12},
        )

        result = await location_tools.execute_tool(
            "get_location_templates", {"locationId": "loc_1", "originId": "origin_1"}
        )

        assert dict(mock_api.last.url.params) == {
            "originId": "origin_1",
            "deleted": "false",
            "skip": "0",
            "limit": "25",
        }
        assert result["totalCount"] == 12
        assert result["message"] == "Retrieved 1 templates (12 total)"

    @pytest.mark.asyncio
    async def test_delete_template_with_empty_body(self, location_tools, mock_api):
        mock_api.add("DELETE", "/locations/loc_1/templates/tpl_1", content=b"")

        result = await location_tools.execute_tool(
            "delete_location_template", {"locationId": "loc_1", "templateId": "tpl_1"}
        )

        assert result == {"success": True, "message": "Template deleted successfully"}

    @pytest.mark.asyncio
    async def test_timezones_for_location(self, location_tools, mock_api):
        mock_api.add(
            "GET", "/locations/loc_1/timezones", json=["US/Central", "Europe/London"]
        )

        result = await location_tools.execute_tool("get_timezones", {"locationId": "loc_1"})

        assert result["timezones"] == ["US/Central", "Europe/London"]
        assert result["message"] == "Retrieved 2 available timezones"

    @pytest.mark.asyncio
    async def test_timezones_without_location(self, location_tools, mock_api):
        await location_tools.execute_tool("get_timezones", {})

        assert mock_api.last.url.path == "/locations/timezones"
