"""Resolution of task assignee references against the contacts directory."""

from __future__ import annotations

from joinboard.models import AssignedContact, Contact, Task
from joinboard.repositories import ContactDirectory

DEFAULT_VISIBLE_ASSIGNEES = 4


class ContactReferenceResolver:
    """Filters assignee references down to contacts that still exist.

    Nothing is memoized: every call reads the directory's current snapshot
    and the task as passed in.
    """

    def __init__(self, directory: ContactDirectory, max_visible: int = DEFAULT_VISIBLE_ASSIGNEES):
        self.directory = directory
        self.max_visible = max_visible

    def exists(self, contact_id: str) -> bool:
        return any(contact.id == contact_id for contact in self.directory.contacts)

    def valid_assignees(self, task: Task) -> list[AssignedContact]:
        """Assignees whose contact exists, in assignment order."""
        known = {contact.id for contact in self.directory.contacts}
        return [ref for ref in task.assigned_to if ref.contact_id in known]

    def existing_assignees(self, task: Task) -> list[AssignedContact]:
        """The first ``max_visible`` valid assignees."""
        return self.valid_assignees(task)[: self.max_visible]

    def overflow_count(self, task: Task) -> int:
        """Number of valid assignees beyond the visible ones (the "+N" badge)."""
        return max(len(self.valid_assignees(task)) - self.max_visible, 0)

    def resolve(self, task: Task) -> list[Contact]:
        """Contacts for the visible assignees, for display."""
        by_id = {contact.id: contact for contact in self.directory.contacts}
        return [by_id[ref.contact_id] for ref in self.existing_assignees(task)]
