"""
Tests for HighLevel endpoint families.

Tests cover request shaping per family:
- Default location substitution (locationId / altId + altType)
- Stripping of unset optional fields
- Query defaults (search, listing and paging)
- Envelope unwrapping
- Multipart uploads and argument validation
"""

import asyncio

import pytest


# =============================================================================
# Contacts
# =============================================================================


class TestContactsAPI:
    """Tests for contact endpoints."""

    @pytest.mark.asyncio
    async def test_create_contact_defaults_location(self, ghl_client, mock_api, sample_contact):
        """create_contact fills in the configured location and unwraps the contact."""
        mock_api.add("POST", "/contacts/", json={"contact": sample_contact})

        result = await ghl_client.create_contact({"firstName": "Ada"})

        assert mock_api.body(mock_api.last) == {"firstName": "Ada", "locationId": "loc_default"}
        assert result.data == sample_contact

    @pytest.mark.asyncio
    async def test_create_contact_keeps_explicit_location(self, ghl_client, mock_api):
        await ghl_client.create_contact({"firstName": "Ada", "locationId": "loc_other"})

        assert mock_api.body(mock_api.last)["locationId"] == "loc_other"

    @pytest.mark.asyncio
    async def test_search_contacts_minimal_payload(self, ghl_client, mock_api):
        """Only the location and page size are sent by default."""
        await ghl_client.search_contacts()

        assert mock_api.body(mock_api.last) == {"locationId": "loc_default", "pageLimit": 25}

    @pytest.mark.asyncio
    async def test_search_contacts_trims_and_drops_empty_filters(self, ghl_client, mock_api):
        """Blank strings and empty tag lists never reach the API."""
        await ghl_client.search_contacts(
            query="  ada  ",
            limit=5,
            start_after_id="   ",
            filters={"email": " ada@example.com ", "phone": "", "tags": []},
        )

        assert mock_api.body(mock_api.last) == {
            "locationId": "loc_default",
            "pageLimit": 5,
            "query": "ada",
            "filters": {"email": "ada@example.com"},
        }

    @pytest.mark.asyncio
    async def test_search_contacts_omits_filters_when_all_empty(self, ghl_client, mock_api):
        await ghl_client.search_contacts(filters={"email": " ", "tags": []})

        assert "filters" not in mock_api.body(mock_api.last)

    @pytest.mark.asyncio
    async def test_duplicate_contact_none(self, ghl_client, mock_api):
        """No duplicate yields None."""
        mock_api.add("GET", "/contacts/search/duplicate", json={"contact": None})

        result = await ghl_client.get_duplicate_contact(email="ada@example.com")

        params = mock_api.last.url.params
        assert params["locationId"] == "loc_default"
        assert params["email"] == "ada@example.com"
        assert "number" not in params
        assert result.success is True
        assert result.data is None

    @pytest.mark.asyncio
    async def test_remove_tags_sends_body_with_delete(self, ghl_client, mock_api):
        await ghl_client.remove_contact_tags("contact_123", ["vip", "lead"])

        assert mock_api.last.method == "DELETE"
        assert mock_api.last.url.path == "/contacts/contact_123/tags"
        assert mock_api.body(mock_api.last) == {"tags": ["vip", "lead"]}

    @pytest.mark.asyncio
    async def test_business_contacts_paging_defaults(self, ghl_client, mock_api):
        await ghl_client.get_contacts_by_business("biz_1")

        assert dict(mock_api.last.url.params) == {"limit": "25", "skip": "0"}

    @pytest.mark.asyncio
    async def test_task_completion_unwraps_task(self, ghl_client, mock_api):
        path = "/contacts/contact_123/tasks/task_1/completed"
        mock_api.add("PUT", path, json={"task": {"id": "task_1", "completed": True}})

        result = await ghl_client.update_task_completion("contact_123", "task_1", True)

        assert mock_api.body(mock_api.last) == {"completed": True}
        assert result.data == {"id": "task_1", "completed": True}

    @pytest.mark.asyncio
    async def test_workflow_enrollment_event_time(self, ghl_client, mock_api):
        await ghl_client.add_contact_to_workflow(
            "contact_123", "wf_1", event_start_time="2024-01-01T10:00:00Z"
        )

        assert mock_api.last.url.path == "/contacts/contact_123/workflow/wf_1"
        assert mock_api.body(mock_api.last) == {"eventStartTime": "2024-01-01T10:00:00Z"}


# =============================================================================
# Locations
# =============================================================================


class TestLocationsAPI:
    """Tests for location endpoints."""

    @pytest.mark.asyncio
    async def test_search_locations_defaults(self, ghl_client, mock_api):
        await ghl_client.search_locations()

        assert dict(mock_api.last.url.params) == {"skip": "0", "limit": "10", "order": "asc"}

    @pytest.mark.asyncio
    async def test_delete_location_twilio_flag(self, ghl_client, mock_api):
        await ghl_client.delete_location("loc_9")

        assert mock_api.last.url.params["deleteTwilioAccount"] == "false"

    @pytest.mark.asyncio
    async def test_templates_defaults(self, ghl_client, mock_api):
        await ghl_client.get_location_templates("loc_9", "origin_1")

        assert dict(mock_api.last.url.params) == {
            "originId": "origin_1",
            "deleted": "false",
            "skip": "0",
            "limit": "25",
        }

    @pytest.mark.asyncio
    async def test_timezones_path(self, ghl_client, mock_api):
        await ghl_client.get_timezones("loc_9")
        assert mock_api.last.url.path == "/locations/loc_9/timezones"

        await ghl_client.get_timezones()
        assert mock_api.last.url.path == "/locations/timezones"


# =============================================================================
# Opportunities
# =============================================================================


class TestOpportunitiesAPI:
    """Tests for opportunity endpoints."""

    @pytest.mark.asyncio
    async def test_search_always_sends_location(self, ghl_client, mock_api):
        await ghl_client.search_opportunities()

        assert dict(mock_api.last.url.params) == {"location_id": "loc_default"}

    @pytest.mark.asyncio
    async def test_search_filters_and_flags(self, ghl_client, mock_api):
        """Falsy filters are dropped; boolean flags are sent even when False."""
        await ghl_client.search_opportunities(
            {"q": "  renewal ", "status": "open", "pipeline_id": "", "getTasks": False}
        )

        assert dict(mock_api.last.url.params) == {
            "location_id": "loc_default",
            "q": "renewal",
            "status": "open",
            "getTasks": "false",
        }

    @pytest.mark.asyncio
    async def test_update_status_body(self, ghl_client, mock_api):
        await ghl_client.update_opportunity_status("opp_1", "won")

        assert mock_api.last.method == "PUT"
        assert mock_api.last.url.path == "/opportunities/opp_1/status"
        assert mock_api.body(mock_api.last) == {"status": "won"}


# =============================================================================
# Conversations
# =============================================================================


class TestConversationsAPI:
    """Tests for conversation endpoints."""

    @pytest.mark.asyncio
    async def test_send_sms_payload(self, ghl_client, mock_api):
        """Unset sender numbers are not sent."""
        await ghl_client.send_sms(contact_id="contact_123", message="Hi!")

        assert mock_api.body(mock_api.last) == {
            "type": "SMS",
            "contactId": "contact_123",
            "message": "Hi!",
        }

    @pytest.mark.asyncio
    async def test_messages_query(self, ghl_client, mock_api):
        await ghl_client.get_conversation_messages("conv_1", limit=20, message_type="TYPE_SMS")

        assert mock_api.last.url.path == "/conversations/conv_1/messages"
        assert dict(mock_api.last.url.params) == {"limit": "20", "type": "TYPE_SMS"}


# =============================================================================
# Media
# =============================================================================


class TestMediaAPI:
    """Tests for media endpoints."""

    @pytest.mark.asyncio
    async def test_hosted_upload_is_multipart(self, ghl_client, mock_api):
        await ghl_client.upload_media_file(
            hosted=True, file_url="https://cdn.example.com/logo.png", name="logo.png"
        )

        body = mock_api.last.content.decode()
        assert 'name="hosted"' in body
        assert "https://cdn.example.com/logo.png" in body
        assert 'name="name"' in body

    @pytest.mark.asyncio
    async def test_upload_without_file_raises_before_request(self, ghl_client, mock_api):
        with pytest.raises(ValueError, match="Either file or fileUrl"):
            await ghl_client.upload_media_file(hosted=True)

        assert mock_api.requests == []

    @pytest.mark.asyncio
    async def test_delete_defaults_alt(self, ghl_client, mock_api):
        result = await ghl_client.delete_media_file("file_1")

        assert dict(mock_api.last.url.params) == {"altType": "location", "altId": "loc_default"}
        assert result.data["success"] is True


# =============================================================================
# Email
# =============================================================================


class TestEmailsAPI:
    """Tests for email builder and verification endpoints."""

    @pytest.mark.asyncio
    async def test_create_template_defaults_html(self, ghl_client, mock_api):
        await ghl_client.create_email_template({"title": "Welcome", "html": "<p>Hi</p>"})

        assert mock_api.body(mock_api.last) == {
            "locationId": "loc_default",
            "type": "html",
            "title": "Welcome",
            "html": "<p>Hi</p>",
        }

    @pytest.mark.asyncio
    async def test_update_template_uses_html_editor(self, ghl_client, mock_api):
        await ghl_client.update_email_template("tpl_1", {"html": "<p>New</p>"})

        assert mock_api.last.url.path == "/emails/builder/data"
        assert mock_api.body(mock_api.last)["editorType"] == "html"
        assert mock_api.body(mock_api.last)["templateId"] == "tpl_1"

    @pytest.mark.asyncio
    async def test_verify_email_query(self, ghl_client, mock_api):
        await ghl_client.verify_email("loc_9", {"type": "email", "verify": "ada@example.com"})

        assert mock_api.last.url.params["locationId"] == "loc_9"
        assert mock_api.body(mock_api.last) == {"type": "email", "verify": "ada@example.com"}


# =============================================================================
# Commerce (products, payments, invoices, store)
# =============================================================================


class TestCommerceAPIs:
    """Tests for products, payments, invoices and store endpoints."""

    @pytest.mark.asyncio
    async def test_products_list_params(self, ghl_client, mock_api):
        """expand repeats, collectionIds is comma-joined."""
        await ghl_client.list_products(
            {"expand": ["tax", "store"], "collectionIds": ["col_1", "col_2"]}
        )

        params = mock_api.last.url.params
        assert params["locationId"] == "loc_default"
        assert params.get_list("expand") == ["tax", "store"]
        assert params["collectionIds"] == "col_1,col_2"

    @pytest.mark.asyncio
    async def test_payments_stringify_params(self, ghl_client, mock_api):
        await ghl_client.list_orders({"altId": "loc_default", "limit": 5, "paymentMode": None})

        assert dict(mock_api.last.url.params) == {"altId": "loc_default", "limit": "5"}

    @pytest.mark.asyncio
    async def test_invoices_paging_defaults(self, ghl_client, mock_api):
        await ghl_client.list_invoices()

        assert dict(mock_api.last.url.params) == {
            "limit": "10",
            "offset": "0",
            "altId": "loc_default",
            "altType": "location",
        }

    @pytest.mark.asyncio
    async def test_store_alt_scope(self, ghl_client, mock_api):
        await ghl_client.create_shipping_zone({"name": "Domestic"})

        assert mock_api.body(mock_api.last) == {
            "name": "Domestic",
            "altId": "loc_default",
            "altType": "location",
        }


# =============================================================================
# Other families
# =============================================================================


class TestOtherAPIs:
    """Tests for calendars, social, objects, blogs and workflows."""

    @pytest.mark.asyncio
    async def test_calendar_events_window(self, ghl_client, mock_api):
        await ghl_client.get_calendar_events(
            {"startTime": "1700000000000", "endTime": "1700086400000", "calendarId": "cal_1"}
        )

        assert dict(mock_api.last.url.params) == {
            "locationId": "loc_default",
            "startTime": "1700000000000",
            "endTime": "1700086400000",
            "calendarId": "cal_1",
        }

    @pytest.mark.asyncio
    async def test_social_paths_are_location_scoped(self, ghl_client, mock_api):
        await ghl_client.get_social_post("post_1")

        assert mock_api.last.url.path == "/social-media-posting/loc_default/posts/post_1"

    @pytest.mark.asyncio
    async def test_object_record_search_defaults_location(self, ghl_client, mock_api):
        await ghl_client.search_object_records("custom_objects.pets", {"query": "rex"})

        assert mock_api.last.url.path == "/objects/custom_objects.pets/records/search"
        assert mock_api.body(mock_api.last) == {"query": "rex", "locationId": "loc_default"}

    @pytest.mark.asyncio
    async def test_blog_slug_check(self, ghl_client, mock_api):
        await ghl_client.check_url_slug_exists("hello-world")

        assert dict(mock_api.last.url.params) == {
            "locationId": "loc_default",
            "urlSlug": "hello-world",
        }

    @pytest.mark.asyncio
    async def test_workflows_location(self, ghl_client, mock_api):
        await ghl_client.get_workflows()

        assert mock_api.last.url.params["locationId"] == "loc_default"


# =============================================================================
# Concurrency
# =============================================================================


class TestConcurrency:
    """Concurrent calls share only configuration."""

    @pytest.mark.asyncio
    async def test_concurrent_searches_send_own_payloads(self, ghl_client, mock_api):
        queries = [f"query-{i}" for i in range(10)]

        results = await asyncio.gather(
            *(ghl_client.search_contacts(query=query) for query in queries)
        )

        assert all(result.success for result in results)
        sent = sorted(mock_api.body(request)["query"] for request in mock_api.requests)
        assert sent == sorted(queries)

    @pytest.mark.asyncio
    async def test_clients_are_independent(self, make_client, mock_api):
        """Two clients with different locations do not affect each other."""
        first = make_client(mock_api, location_id="loc_a")
        second = make_client(mock_api, location_id="loc_b")

        await asyncio.gather(first.search_contacts(), second.search_contacts())

        locations = sorted(mock_api.body(request)["locationId"] for request in mock_api.requests)
        assert locations == ["loc_a", "loc_b"]
