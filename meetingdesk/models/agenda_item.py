"""AgendaItem model for the ordered agenda of a meeting."""

from pydantic import ConfigDict, Field

from meetingdesk.models.base import BaseEntity, StrippedStr

# Newly created items start here so the next renumber moves them to the end.
NEW_ITEM_POSITION = 99999
SPACER_NUMBER = -1


class AgendaItem(BaseEntity):
    """A single entry on a meeting agenda.

    Agenda items carry:
    - Ordering state (position, user-visible number)
    - Workflow flags (proposed, spacer)
    - Linked documents and action items
    - A discussion timer that accumulates elapsed time
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    subject: StrippedStr = Field(default="", description="Short title of the item")
    description: str = Field(default="", description="Longer description")
    position: int = Field(
        default=NEW_ITEM_POSITION,
        description="1-based ordering position after renumbering",
    )
    number: int = Field(
        default=0,
        description="Sequential number shown to users, -1 for spacers",
    )
    proposed: bool = Field(
        default=False,
        description="Tentative item, sorted after all accepted items",
    )
    is_spacer: bool = Field(
        default=False,
        description="Visual separator, never numbered",
    )
    duration: int = Field(default=0, ge=0, description="Planned minutes")
    presenters: list[str] = Field(default_factory=list)
    doc_list: list[str] = Field(
        default_factory=list,
        description="Universal ids of linked documents",
    )
    action_items: list[str] = Field(
        default_factory=list,
        description="Ids of linked action items",
    )
    topic_link: str | None = Field(default=None, description="Linked discussion topic")
    notes: str = Field(default="", description="Free-form notes")
    minutes: str = Field(default="", description="Minutes recorded for this item")

    timer_running: bool = Field(default=False)
    timer_start: int = Field(default=0, description="Epoch millis the timer started")
    timer_elapsed: int = Field(
        default=0,
        ge=0,
        description="Accumulated discussion time in millis",
    )

    def start_timer(self, now: int) -> None:
        """Start the timer unless it is already running."""
        if self.timer_running:
            return
        self.timer_start = now
        self.timer_running = True

    def stop_timer(self, now: int) -> None:
        """Stop the timer and fold the running span into elapsed time."""
        if not self.timer_running:
            return
        self.timer_elapsed += max(0, now - self.timer_start)
        self.timer_running = False

    def current_elapsed(self, now: int) -> int:
        """Elapsed millis including the span still running."""
        if self.timer_running:
            return self.timer_elapsed + max(0, now - self.timer_start)
        return self.timer_elapsed

    def links_document(self, doc_id: str) -> bool:
        """Check whether the document is attached to this item."""
        return doc_id in self.doc_list
