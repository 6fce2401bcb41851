"""Jinja2-based Markdown renderer for agendas and minutes."""

from pathlib import Path
from zoneinfo import ZoneInfo

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from pydantic import BaseModel, Field

from meetingdesk.adapters.base import DocumentRegistry, LinkedReference, RoleDirectory
from meetingdesk.agenda.ordering import sorted_agenda
from meetingdesk.config import settings
from meetingdesk.meetings.lifecycle import format_time, name_and_date, resolve_timezone
from meetingdesk.models.base import MILLIS_PER_MINUTE
from meetingdesk.models.meeting import Meeting


class AgendaLine(BaseModel):
    """One agenda item prepared for display."""

    number: int | None = Field(description="None for spacer items")
    subject: str
    description: str = ""
    starts: str
    ends: str
    duration: int
    presenters: list[str] = Field(default_factory=list)
    minutes: str = ""
    documents: list[LinkedReference] = Field(default_factory=list)
    action_items: list[LinkedReference] = Field(default_factory=list)


class MeetingRenderContext(BaseModel):
    """Everything the templates see."""

    title: str
    name: str
    when: str
    description: str
    meeting_url: str | None = None
    items: list[AgendaLine] = Field(default_factory=list)


class MeetingRenderer:
    """Render a meeting's agenda and minutes as Markdown.

    Item time ranges are laid out back to back from the meeting start,
    in the owner's timezone. Linked documents and action items that the
    registry cannot resolve are left out.
    """

    def __init__(
        self,
        directory: RoleDirectory,
        documents: DocumentRegistry | None = None,
        template_dir: str | Path | None = None,
    ):
        """Initialize renderer.

        Args:
            directory: Resolves the owner timezone and presenter names
            documents: Resolves linked documents and action items
            template_dir: Path to directory containing .md.j2 templates.
                          Defaults to the packaged templates.
        """
        self._directory = directory
        self._documents = documents
        self.template_dir = Path(template_dir or settings.template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "htm"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_agenda(self, meeting: Meeting) -> str:
        """Render the agenda as Markdown.

        Raises:
            TemplateNotFound: If agenda.md.j2 is missing
        """
        context = self.build_context(meeting)
        return self.env.get_template("agenda.md.j2").render(context.model_dump())

    def render_minutes(self, meeting: Meeting, meeting_url: str | None = None) -> str:
        """Render minutes with per-item notes and linked references.

        Raises:
            TemplateNotFound: If minutes.md.j2 is missing
        """
        context = self.build_context(meeting, meeting_url=meeting_url)
        return self.env.get_template("minutes.md.j2").render(context.model_dump())

    def build_context(
        self,
        meeting: Meeting,
        meeting_url: str | None = None,
    ) -> MeetingRenderContext:
        owner = self._directory.lookup_user(meeting.owner) if meeting.owner else None
        tz = resolve_timezone(owner.timezone if owner else None)

        items = []
        item_time = meeting.start_time
        for item in sorted_agenda(meeting):
            finish = item_time + item.duration * MILLIS_PER_MINUTE
            items.append(
                AgendaLine(
                    number=None if item.is_spacer else item.number,
                    subject=item.subject,
                    description=item.description,
                    starts=self._clock(meeting, item_time, tz),
                    ends=self._clock(meeting, finish, tz),
                    duration=item.duration,
                    presenters=[self._display_name(p) for p in item.presenters],
                    minutes=item.minutes,
                    documents=self._resolve(item.doc_list, documents=True),
                    action_items=self._resolve(item.action_items, documents=False),
                )
            )
            item_time = finish

        return MeetingRenderContext(
            title=name_and_date(meeting, tz),
            name=meeting.name,
            when=format_time(meeting.start_time, tz, "%H:%M %Z on %d-%b-%Y"),
            description=meeting.description,
            meeting_url=meeting_url,
            items=items,
        )

    @staticmethod
    def _clock(meeting: Meeting, value: int, tz: ZoneInfo) -> str:
        if not meeting.is_scheduled:
            return "(tbd)"
        return format_time(value, tz, "%H:%M")

    def _display_name(self, user_id: str) -> str:
        profile = self._directory.lookup_user(user_id)
        return profile.name if profile else user_id

    def _resolve(self, ids: list[str], documents: bool) -> list[LinkedReference]:
        if self._documents is None:
            return []
        resolved = []
        for ref_id in ids:
            if documents:
                ref = self._documents.resolve_document(ref_id)
            else:
                ref = self._documents.resolve_action_item(ref_id)
            if ref is not None:
                resolved.append(ref)
        return resolved


__all__ = ["MeetingRenderer", "TemplateNotFound"]
