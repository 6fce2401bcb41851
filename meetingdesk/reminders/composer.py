"""Compose reminder e-mails from a Jinja2 template."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from meetingdesk.adapters.base import ReminderEmail, RoleDirectory
from meetingdesk.agenda.ordering import sorted_agenda
from meetingdesk.config import settings
from meetingdesk.exceptions import InvalidConfigurationError
from meetingdesk.meetings.lifecycle import format_time, resolve_timezone, verify_target_role
from meetingdesk.models.meeting import Meeting

SUBJECT_PREFIX = "Reminder for meeting: "


class ReminderComposer:
    """Builds the reminder message for a meeting.

    Recipients are the meeting's explicit participants, or the members of
    its target role when there are none.
    """

    def __init__(
        self,
        directory: RoleDirectory,
        template_dir: str | Path | None = None,
        template_name: str = "reminder.txt.j2",
    ):
        """Initialize composer.

        Args:
            directory: Role and user directory
            template_dir: Directory holding the .j2 templates.
                          Defaults to the packaged templates.
            template_name: Template file for the body
        """
        self._directory = directory
        self.template_name = template_name
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or settings.template_dir)),
            autoescape=select_autoescape(["html", "htm"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def compose(self, meeting: Meeting) -> ReminderEmail:
        """Render the reminder for meeting.

        Raises:
            InvalidConfigurationError: If the meeting has no owner, or has
                no participants and no role can be resolved
        """
        if not meeting.owner:
            msg = f"The owner of meeting {meeting.id} has not been set"
            raise InvalidConfigurationError(msg)

        recipients, role = self.resolve_recipients(meeting)
        owner = self._directory.lookup_user(meeting.owner)
        tz = resolve_timezone(owner.timezone if owner else None)

        body = self.env.get_template(self.template_name).render(
            meeting=meeting,
            owner_name=owner.name if owner else meeting.owner,
            start=format_time(meeting.start_time, tz, "%H:%M %Z on %d-%b-%Y"),
            agenda=[item for item in sorted_agenda(meeting) if not item.proposed],
        )
        return ReminderEmail(
            meeting_id=meeting.id,
            sender=meeting.owner,
            subject=f"{SUBJECT_PREFIX}{meeting.name}",
            body=body,
            recipients=recipients,
            role=role,
        )

    def resolve_recipients(self, meeting: Meeting) -> tuple[list[str], str | None]:
        """Participants if any, else the target role's members.

        Returns:
            Tuple of (recipient ids, role name or None)
        """
        if meeting.participants:
            return list(meeting.participants), None
        role = verify_target_role(meeting, self._directory)
        members = self._directory.get_role_members(role) or []
        return members, role
