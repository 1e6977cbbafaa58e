"""
Contact Tools.

Contact management for agents: CRUD, search, tags, tasks, notes,
followers, and campaign/workflow enrollment. Every tool returns
``{"success": True, <entity>: ..., "message": ...}`` and raises
ToolExecutionError on failure.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import (
    CONTACT_ID,
    NOTE_ID,
    TASK_ID,
    boolean,
    number,
    obj,
    string,
    string_list,
)

logger = logging.getLogger(__name__)

_CONTACT_FIELDS = ("firstName", "lastName", "email", "phone", "tags")

_TASK_PROPERTIES = {
    "contactId": CONTACT_ID,
    "title": string("Task title"),
    "body": string("Task description"),
    "dueDate": string("Due date (ISO format)"),
    "completed": boolean("Task completion status"),
    "assignedTo": string("User ID to assign task to"),
}


def _ok(message: str, **fields: Any) -> dict[str, Any]:
    return {"success": True, **fields, "message": message}


def _items(data: Any, key: str | None = None) -> list[Any]:
    """List payload, either bare or under ``key``."""
    if key is not None:
        data = data.get(key) if isinstance(data, dict) else None
    return data if isinstance(data, list) else []


class ContactTools(ToolModule):
    """Tools for /contacts endpoints."""

    module_name = "contacts"

    # =========================================================================
    # Contacts
    # =========================================================================

    @tool_operation(
        name="create_contact",
        description="Create a new contact in GoHighLevel",
        input_schema=obj(
            {
                "firstName": string("Contact first name"),
                "lastName": string("Contact last name"),
                "email": string("Contact email address"),
                "phone": string("Contact phone number"),
                "tags": string_list("Tags to assign to contact"),
                "source": string("Source of the contact"),
            },
            required=["email"],
        ),
    )
    async def create_contact(self, args: dict[str, Any]) -> dict[str, Any]:
        contact = self._pick(args, *_CONTACT_FIELDS, "source")
        created = self._unwrap(await self.client.create_contact(contact))
        return _ok("Contact created successfully", contact=created)

    @tool_operation(
        name="search_contacts",
        description="Search for contacts with advanced filtering options",
        input_schema=obj(
            {
                "query": string("Search query string"),
                "email": string("Filter by email address"),
                "phone": string("Filter by phone number"),
                "limit": number("Maximum number of results (default: 25)"),
            }
        ),
    )
    async def search_contacts(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.search_contacts(
            query=args.get("query"),
            limit=args.get("limit"),
            filters=self._pick(args, "email", "phone"),
        )
        data = self._unwrap(result)
        contacts = _items(data, "contacts")
        total = (data or {}).get("total") or len(contacts)
        return _ok(
            f"Found {len(contacts)} contacts ({total} total)", contacts=contacts, total=total
        )

    @tool_operation(
        name="get_contact",
        description="Get detailed information about a specific contact",
        input_schema=obj({"contactId": CONTACT_ID}, required=["contactId"]),
    )
    async def get_contact(self, args: dict[str, Any]) -> dict[str, Any]:
        contact = self._unwrap(await self.client.get_contact(args.get("contactId")))
        return _ok("Contact retrieved successfully", contact=contact)

    @tool_operation(
        name="update_contact",
        description="Update contact information",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "firstName": string("Contact first name"),
                "lastName": string("Contact last name"),
                "email": string("Contact email address"),
                "phone": string("Contact phone number"),
                "tags": string_list("Tags to assign to contact"),
            },
            required=["contactId"],
        ),
    )
    async def update_contact(self, args: dict[str, Any]) -> dict[str, Any]:
        updates = self._pick(args, *_CONTACT_FIELDS)
        contact = self._unwrap(await self.client.update_contact(args.get("contactId"), updates))
        return _ok("Contact updated successfully", contact=contact)

    @tool_operation(
        name="delete_contact",
        description="Delete a contact from GoHighLevel",
        input_schema=obj({"contactId": CONTACT_ID}, required=["contactId"]),
    )
    async def delete_contact(self, args: dict[str, Any]) -> dict[str, Any]:
        self._unwrap(await self.client.delete_contact(args.get("contactId")))
        return _ok("Contact deleted successfully")

    @tool_operation(
        name="add_contact_tags",
        description="Add tags to a contact",
        input_schema=obj(
            {"contactId": CONTACT_ID, "tags": string_list("Tags to add")},
            required=["contactId", "tags"],
        ),
    )
    async def add_contact_tags(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.add_contact_tags(args.get("contactId"), args.get("tags") or [])
        tags = _items(self._unwrap(result), "tags")
        return _ok(f"Contact now has {len(tags)} tags", tags=tags)

    @tool_operation(
        name="remove_contact_tags",
        description="Remove tags from a contact",
        input_schema=obj(
            {"contactId": CONTACT_ID, "tags": string_list("Tags to remove")},
            required=["contactId", "tags"],
        ),
    )
    async def remove_contact_tags(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.remove_contact_tags(
            args.get("contactId"), args.get("tags") or []
        )
        tags = _items(self._unwrap(result), "tags")
        return _ok(f"Contact now has {len(tags)} tags", tags=tags)

    # =========================================================================
    # Tasks
    # =========================================================================

    @tool_operation(
        name="get_contact_tasks",
        description="Get all tasks for a contact",
        input_schema=obj({"contactId": CONTACT_ID}, required=["contactId"]),
    )
    async def get_contact_tasks(self, args: dict[str, Any]) -> dict[str, Any]:
        tasks = _items(self._unwrap(await self.client.get_contact_tasks(args.get("contactId"))))
        return _ok(f"Retrieved {len(tasks)} tasks", tasks=tasks)

    @tool_operation(
        name="create_contact_task",
        description="Create a new task for a contact",
        input_schema=obj(_TASK_PROPERTIES, required=["contactId", "title", "dueDate"]),
    )
    async def create_contact_task(self, args: dict[str, Any]) -> dict[str, Any]:
        task = self._pick(args, "title", "body", "dueDate", "assignedTo")
        task["completed"] = bool(args.get("completed", False))
        result = await self.client.create_contact_task(args.get("contactId"), task)
        return _ok("Task created successfully", task=self._unwrap(result))

    @tool_operation(
        name="get_contact_task",
        description="Get a specific task for a contact",
        input_schema=obj(
            {"contactId": CONTACT_ID, "taskId": TASK_ID}, required=["contactId", "taskId"]
        ),
    )
    async def get_contact_task(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_contact_task(args.get("contactId"), args.get("taskId"))
        return _ok("Task retrieved successfully", task=self._unwrap(result))

    @tool_operation(
        name="update_contact_task",
        description="Update a task for a contact",
        input_schema=obj(
            {**_TASK_PROPERTIES, "taskId": TASK_ID}, required=["contactId", "taskId"]
        ),
    )
    async def update_contact_task(self, args: dict[str, Any]) -> dict[str, Any]:
        updates = self._pick(args, "title", "body", "dueDate", "completed", "assignedTo")
        result = await self.client.update_contact_task(
            args.get("contactId"), args.get("taskId"), updates
        )
        return _ok("Task updated successfully", task=self._unwrap(result))

    @tool_operation(
        name="delete_contact_task",
        description="Delete a task for a contact",
        input_schema=obj(
            {"contactId": CONTACT_ID, "taskId": TASK_ID}, required=["contactId", "taskId"]
        ),
    )
    async def delete_contact_task(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.delete_contact_task(args.get("contactId"), args.get("taskId"))
        self._unwrap(result)
        return _ok("Task deleted successfully")

    @tool_operation(
        name="update_task_completion",
        description="Update task completion status",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "taskId": TASK_ID,
                "completed": boolean("Completion status"),
            },
            required=["contactId", "taskId", "completed"],
        ),
    )
    async def update_task_completion(self, args: dict[str, Any]) -> dict[str, Any]:
        completed = bool(args.get("completed"))
        result = await self.client.update_task_completion(
            args.get("contactId"), args.get("taskId"), completed
        )
        state = "completed" if completed else "incomplete"
        return _ok(f"Task marked as {state}", task=self._unwrap(result))

    # =========================================================================
    # Notes
    # =========================================================================

    @tool_operation(
        name="get_contact_notes",
        description="Get all notes for a contact",
        input_schema=obj({"contactId": CONTACT_ID}, required=["contactId"]),
    )
    async def get_contact_notes(self, args: dict[str, Any]) -> dict[str, Any]:
        notes = _items(self._unwrap(await self.client.get_contact_notes(args.get("contactId"))))
        return _ok(f"Retrieved {len(notes)} notes", notes=notes)

    @tool_operation(
        name="create_contact_note",
        description="Create a new note for a contact",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "body": string("Note content"),
                "userId": string("User ID creating the note"),
            },
            required=["contactId", "body"],
        ),
    )
    async def create_contact_note(self, args: dict[str, Any]) -> dict[str, Any]:
        note = self._pick(args, "body", "userId")
        result = await self.client.create_contact_note(args.get("contactId"), note)
        return _ok("Note created successfully", note=self._unwrap(result))

    @tool_operation(
        name="get_contact_note",
        description="Get a specific note for a contact",
        input_schema=obj(
            {"contactId": CONTACT_ID, "noteId": NOTE_ID}, required=["contactId", "noteId"]
        ),
    )
    async def get_contact_note(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_contact_note(args.get("contactId"), args.get("noteId"))
        return _ok("Note retrieved successfully", note=self._unwrap(result))

    @tool_operation(
        name="update_contact_note",
        description="Update a note for a contact",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "noteId": NOTE_ID,
                "body": string("Note content"),
                "userId": string("User ID updating the note"),
            },
            required=["contactId", "noteId", "body"],
        ),
    )
    async def update_contact_note(self, args: dict[str, Any]) -> dict[str, Any]:
        updates = self._pick(args, "body", "userId")
        result = await self.client.update_contact_note(
            args.get("contactId"), args.get("noteId"), updates
        )
        return _ok("Note updated successfully", note=self._unwrap(result))

    @tool_operation(
        name="delete_contact_note",
        description="Delete a note for a contact",
        input_schema=obj(
            {"contactId": CONTACT_ID, "noteId": NOTE_ID}, required=["contactId", "noteId"]
        ),
    )
    async def delete_contact_note(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.delete_contact_note(args.get("contactId"), args.get("noteId"))
        self._unwrap(result)
        return _ok("Note deleted successfully")

    # =========================================================================
    # Advanced operations
    # =========================================================================

    @tool_operation(
        name="upsert_contact",
        description="Create or update contact based on email/phone (smart merge)",
        input_schema=obj(
            {
                "firstName": string("Contact first name"),
                "lastName": string("Contact last name"),
                "email": string("Contact email address"),
                "phone": string("Contact phone number"),
                "tags": string_list("Tags to assign to contact"),
                "source": string("Source of the contact"),
                "assignedTo": string("User ID to assign contact to"),
            }
        ),
    )
    async def upsert_contact(self, args: dict[str, Any]) -> dict[str, Any]:
        contact = self._pick(
            args,
            "firstName",
            "lastName",
            "name",
            "email",
            "phone",
            "city",
            "state",
            "country",
            "postalCode",
            "website",
            "timezone",
            "companyName",
            "tags",
            "customFields",
            "source",
            "assignedTo",
        )
        if args.get("address") is not None:
            contact["address1"] = args["address"]
        data = self._unwrap(await self.client.upsert_contact(contact)) or {}
        is_new = bool(data.get("new"))
        message = "Contact created successfully" if is_new else "Contact updated successfully"
        return _ok(message, contact=data.get("contact"), isNew=is_new)

    @tool_operation(
        name="get_duplicate_contact",
        description="Check for duplicate contacts by email or phone",
        input_schema=obj(
            {
                "email": string("Email to check for duplicates"),
                "phone": string("Phone to check for duplicates"),
            }
        ),
        action="check for duplicate contact",
    )
    async def get_duplicate_contact(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_duplicate_contact(args.get("email"), args.get("phone"))
        contact = self._unwrap(result)
        if contact is None:
            return _ok("No duplicate contact found", contact=None, isDuplicate=False)
        return _ok("Duplicate contact found", contact=contact, isDuplicate=True)

    @tool_operation(
        name="get_contacts_by_business",
        description="Get contacts associated with a specific business",
        input_schema=obj(
            {
                "businessId": string("Business ID"),
                "limit": number("Maximum number of results"),
                "skip": number("Number of results to skip"),
                "query": string("Search query"),
            },
            required=["businessId"],
        ),
    )
    async def get_contacts_by_business(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_contacts_by_business(
            args.get("businessId"),
            limit=args.get("limit"),
            skip=args.get("skip"),
            query=args.get("query"),
        )
        contacts = _items(self._unwrap(result), "contacts")
        return _ok(f"Found {len(contacts)} contacts for business", contacts=contacts)

    @tool_operation(
        name="get_contact_appointments",
        description="Get all appointments for a contact",
        input_schema=obj({"contactId": CONTACT_ID}, required=["contactId"]),
    )
    async def get_contact_appointments(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_contact_appointments(args.get("contactId"))
        appointments = _items(self._unwrap(result))
        return _ok(f"Retrieved {len(appointments)} appointments", appointments=appointments)

    # =========================================================================
    # Bulk operations
    # =========================================================================

    @tool_operation(
        name="bulk_update_contact_tags",
        description="Bulk add or remove tags from multiple contacts",
        input_schema=obj(
            {
                "contactIds": string_list("Array of contact IDs"),
                "tags": string_list("Tags to add or remove"),
                "operation": string("Operation to perform", enum=["add", "remove"]),
                "removeAllTags": boolean("Remove all existing tags before adding new ones"),
            },
            required=["contactIds", "tags", "operation"],
        ),
    )
    async def bulk_update_contact_tags(self, args: dict[str, Any]) -> dict[str, Any]:
        contact_ids = args.get("contactIds") or []
        result = await self.client.bulk_update_contact_tags(
            contact_ids,
            args.get("tags") or [],
            args.get("operation"),
            args.get("removeAllTags"),
        )
        return _ok(
            f"Bulk tag {args.get('operation')} applied to {len(contact_ids)} contacts",
            result=self._unwrap(result),
        )

    @tool_operation(
        name="bulk_update_contact_business",
        description="Bulk update business association for multiple contacts",
        input_schema=obj(
            {
                "contactIds": string_list("Array of contact IDs"),
                "businessId": string("Business ID (null to remove from business)"),
            },
            required=["contactIds"],
        ),
    )
    async def bulk_update_contact_business(self, args: dict[str, Any]) -> dict[str, Any]:
        contact_ids = args.get("contactIds") or []
        result = await self.client.bulk_update_contact_business(
            contact_ids, args.get("businessId")
        )
        return _ok(
            f"Business association updated for {len(contact_ids)} contacts",
            result=self._unwrap(result),
        )

    # =========================================================================
    # Followers
    # =========================================================================

    @tool_operation(
        name="add_contact_followers",
        description="Add followers to a contact",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "followers": string_list("Array of user IDs to add as followers"),
            },
            required=["contactId", "followers"],
        ),
    )
    async def add_contact_followers(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.add_contact_followers(
            args.get("contactId"), args.get("followers") or []
        )
        followers = _items(self._unwrap(result), "followers")
        return _ok(f"Contact now has {len(followers)} followers", followers=followers)

    @tool_operation(
        name="remove_contact_followers",
        description="Remove followers from a contact",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "followers": string_list("Array of user IDs to remove as followers"),
            },
            required=["contactId", "followers"],
        ),
    )
    async def remove_contact_followers(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.remove_contact_followers(
            args.get("contactId"), args.get("followers") or []
        )
        followers = _items(self._unwrap(result), "followers")
        return _ok(f"Contact now has {len(followers)} followers", followers=followers)

    # =========================================================================
    # Campaigns and workflows
    # =========================================================================

    @tool_operation(
        name="add_contact_to_campaign",
        description="Add contact to a marketing campaign",
        input_schema=obj(
            {"contactId": CONTACT_ID, "campaignId": string("Campaign ID")},
            required=["contactId", "campaignId"],
        ),
    )
    async def add_contact_to_campaign(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.add_contact_to_campaign(
            args.get("contactId"), args.get("campaignId")
        )
        self._unwrap(result)
        return _ok("Contact added to campaign")

    @tool_operation(
        name="remove_contact_from_campaign",
        description="Remove contact from a specific campaign",
        input_schema=obj(
            {"contactId": CONTACT_ID, "campaignId": string("Campaign ID")},
            required=["contactId", "campaignId"],
        ),
    )
    async def remove_contact_from_campaign(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.remove_contact_from_campaign(
            args.get("contactId"), args.get("campaignId")
        )
        self._unwrap(result)
        return _ok("Contact removed from campaign")

    @tool_operation(
        name="remove_contact_from_all_campaigns",
        description="Remove contact from all campaigns",
        input_schema=obj({"contactId": CONTACT_ID}, required=["contactId"]),
    )
    async def remove_contact_from_all_campaigns(self, args: dict[str, Any]) -> dict[str, Any]:
        self._unwrap(await self.client.remove_contact_from_all_campaigns(args.get("contactId")))
        return _ok("Contact removed from all campaigns")

    @tool_operation(
        name="add_contact_to_workflow",
        description="Add contact to a workflow",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "workflowId": string("Workflow ID"),
                "eventStartTime": string("Event start time (ISO format)"),
            },
            required=["contactId", "workflowId"],
        ),
    )
    async def add_contact_to_workflow(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.add_contact_to_workflow(
            args.get("contactId"), args.get("workflowId"), args.get("eventStartTime")
        )
        self._unwrap(result)
        return _ok("Contact added to workflow")

    @tool_operation(
        name="remove_contact_from_workflow",
        description="Remove contact from a workflow",
        input_schema=obj(
            {
                "contactId": CONTACT_ID,
                "workflowId": string("Workflow ID"),
                "eventStartTime": string("Event start time (ISO format)"),
            },
            required=["contactId", "workflowId"],
        ),
    )
    async def remove_contact_from_workflow(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.remove_contact_from_workflow(
            args.get("contactId"), args.get("workflowId"), args.get("eventStartTime")
        )
        self._unwrap(result)
        return _ok("Contact removed from workflow")
