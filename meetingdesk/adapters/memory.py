"""In-process implementations of the collaborator protocols.

Meetings are stored as JSON so every load returns a fresh graph, the same
way a durable store would. Used for local runs and tests.
"""

import structlog

from meetingdesk.adapters.base import ReminderEmail
from meetingdesk.models.meeting import Meeting
from meetingdesk.models.user import UserProfile

logger = structlog.get_logger()


class InMemoryMeetingRepository:
    """MeetingRepository backed by a dict of JSON documents."""

    def __init__(self, meetings: list[Meeting] | None = None):
        self._documents: dict[str, str] = {}
        for meeting in meetings or []:
            self._documents[meeting.id] = meeting.model_dump_json()

    async def get(self, meeting_id: str) -> Meeting | None:
        document = self._documents.get(meeting_id)
        if document is None:
            return None
        return Meeting.model_validate_json(document)

    async def save(self, meeting: Meeting) -> None:
        self._documents[meeting.id] = meeting.model_dump_json()
        logger.debug("meeting saved", meeting_id=meeting.id)

    async def list_meetings(self) -> list[Meeting]:
        return [Meeting.model_validate_json(doc) for doc in self._documents.values()]


class StaticRoleDirectory:
    """RoleDirectory over fixed role and user tables."""

    def __init__(
        self,
        roles: dict[str, list[str]] | None = None,
        users: list[UserProfile] | None = None,
    ):
        """Initialize with role memberships and user profiles.

        Args:
            roles: Role name -> member ids, in directory order
            users: Known user profiles
        """
        self._roles = dict(roles or {})
        self._users = list(users or [])

    def list_roles(self) -> list[str]:
        return list(self._roles)

    def get_role_members(self, role: str) -> list[str] | None:
        members = self._roles.get(role)
        return list(members) if members is not None else None

    def lookup_user(self, user_id: str) -> UserProfile | None:
        for profile in self._users:
            if profile.to_ref().has_any_id(user_id):
                return profile
        return None


class RecordingMailDispatcher:
    """MailDispatcher that keeps every message instead of sending it."""

    def __init__(self, succeed: bool = True):
        self.sent: list[ReminderEmail] = []
        self._succeed = succeed

    async def send(self, message: ReminderEmail) -> bool:
        if self._succeed:
            self.sent.append(message)
        logger.info(
            "reminder mail recorded",
            meeting_id=message.meeting_id,
            recipients=len(message.recipients),
            success=self._succeed,
        )
        return self._succeed
