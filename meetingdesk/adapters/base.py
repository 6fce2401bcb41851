"""Protocols for the collaborators meetingdesk relies on.

Persistence, the user/role directory, mail delivery and the document
registries live outside this package. Adapters implement these protocols
by structural subtyping; they don't need to inherit, just implement the
methods.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from meetingdesk.models.meeting import Meeting
from meetingdesk.models.user import UserProfile


class ReminderEmail(BaseModel):
    """A rendered reminder ready for the mail dispatcher."""

    model_config = ConfigDict(str_strip_whitespace=True)

    meeting_id: str = Field(description="Meeting the reminder is for")
    sender: str = Field(description="User the mail is sent on behalf of")
    subject: str
    body: str
    recipients: list[str] = Field(
        default_factory=list,
        description="Resolved recipient ids or addresses",
    )
    role: str | None = Field(
        default=None,
        description="Role the recipients were resolved from, if any",
    )


class LinkedReference(BaseModel):
    """Display name and location of a linked document or action item."""

    name: str
    url: str | None = None


@runtime_checkable
class MeetingRepository(Protocol):
    """Loads and saves whole meeting graphs."""

    async def get(self, meeting_id: str) -> Meeting | None:
        """Load a meeting with its agenda and proposed times."""
        ...

    async def save(self, meeting: Meeting) -> None:
        """Persist a meeting graph as a unit."""
        ...

    async def list_meetings(self) -> list[Meeting]:
        """Load every meeting the reminder poller should consider."""
        ...


@runtime_checkable
class RoleDirectory(Protocol):
    """Resolves roles to members and users to profiles."""

    def list_roles(self) -> list[str]:
        """Names of all roles, in directory order."""
        ...

    def get_role_members(self, role: str) -> list[str] | None:
        """Member ids of a role, or None if the role does not exist."""
        ...

    def lookup_user(self, user_id: str) -> UserProfile | None:
        """Profile for any of a user's ids."""
        ...


@runtime_checkable
class MailDispatcher(Protocol):
    """Delivers rendered e-mail."""

    async def send(self, message: ReminderEmail) -> bool:
        """Deliver the message.

        Returns:
            True if delivery succeeded
        """
        ...


@runtime_checkable
class DocumentRegistry(Protocol):
    """Resolves document and action item references for exports."""

    def resolve_document(self, doc_id: str) -> LinkedReference | None: ...

    def resolve_action_item(self, item_id: str) -> LinkedReference | None: ...
