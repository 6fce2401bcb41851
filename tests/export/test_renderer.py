"""Tests for Markdown agenda and minutes rendering."""

import pytest

from meetingdesk.adapters.base import LinkedReference
from meetingdesk.export.renderer import MeetingRenderer, TemplateNotFound
from meetingdesk.models.agenda_item import AgendaItem
from meetingdesk.models.meeting import Meeting

T0 = 1_767_225_600_000


class FakeDocuments:
    """DocumentRegistry knowing one document and one action item."""

    def resolve_document(self, doc_id):
        if doc_id == "doc-1":
            return LinkedReference(name="Budget sheet", url="https://docs.example.com/1")
        return None

    def resolve_action_item(self, item_id):
        if item_id == "ai-1":
            return LinkedReference(name="Send invoice")
        return None


@pytest.fixture
def meeting() -> Meeting:
    return Meeting(
        id="m1",
        name="Weekly sync",
        description="Regular check-in",
        owner="alice",
        start_time=T0,
        agenda=[
            AgendaItem(
                id="b",
                subject="Budget",
                position=3,
                number=2,
                duration=20,
                doc_list=["doc-1", "doc-missing"],
                action_items=["ai-1"],
                minutes="Approved as drafted",
            ),
            AgendaItem(id="s", subject="Break", position=2, number=-1, is_spacer=True),
            AgendaItem(
                id="a",
                subject="Intro",
                position=1,
                number=1,
                duration=5,
                presenters=["bob", "stranger"],
            ),
        ],
    )


@pytest.fixture
def renderer(directory) -> MeetingRenderer:
    return MeetingRenderer(directory, documents=FakeDocuments())


class TestBuildContext:
    """Tests for the template context."""

    def test_items_laid_out_from_start(self, renderer, meeting):
        context = renderer.build_context(meeting)

        assert [line.subject for line in context.items] == ["Intro", "Break", "Budget"]
        assert [(line.starts, line.ends) for line in context.items] == [
            ("00:00", "00:05"),
            ("00:05", "00:05"),
            ("00:05", "00:25"),
        ]

    def test_spacer_has_no_number(self, renderer, meeting):
        numbers = [line.number for line in renderer.build_context(meeting).items]
        assert numbers == [1, None, 2]

    def test_presenter_names(self, renderer, meeting):
        intro = renderer.build_context(meeting).items[0]
        assert intro.presenters == ["Bob Brown", "stranger"]

    def test_unresolved_references_skipped(self, renderer, meeting):
        budget = renderer.build_context(meeting).items[2]
        assert [ref.name for ref in budget.documents] == ["Budget sheet"]
        assert [ref.name for ref in budget.action_items] == ["Send invoice"]

    def test_without_registry(self, directory, meeting):
        budget = MeetingRenderer(directory).build_context(meeting).items[2]
        assert budget.documents == []
        assert budget.action_items == []

    def test_unscheduled_times(self, renderer, meeting):
        meeting.start_time = 0
        context = renderer.build_context(meeting)
        assert {line.starts for line in context.items} == {"(tbd)"}
        assert {line.ends for line in context.items} == {"(tbd)"}
        assert context.title == "Weekly sync @ (to be determined)"

    def test_owner_timezone(self, renderer, meeting):
        meeting.owner = "bob"
        context = renderer.build_context(meeting)
        assert context.items[0].starts == "01:00"
        assert context.when == "01:00 CET on 01-Jan-2026"


class TestRenderAgenda:
    """Tests for render_agenda."""

    def test_renders_markdown(self, renderer, meeting):
        text = renderer.render_agenda(meeting)

        assert text.startswith("# Weekly sync")
        assert "## 00:00 UTC on 01-Jan-2026" in text
        assert "Regular check-in" in text
        assert "### 1. Intro" in text
        assert "### Break" in text
        assert "### 2. Budget" in text
        assert "00:05 - 00:25 (20 minutes)" in text
        assert "Presented by: Bob Brown, stranger" in text
        assert text.index("Intro") < text.index("Break") < text.index("Budget")

    def test_missing_template(self, directory, meeting, tmp_path):
        renderer = MeetingRenderer(directory, template_dir=tmp_path)
        with pytest.raises(TemplateNotFound):
            renderer.render_agenda(meeting)


class TestRenderMinutes:
    """Tests for render_minutes."""

    def test_renders_minutes_and_links(self, renderer, meeting):
        text = renderer.render_minutes(meeting, meeting_url="https://meet.example.com/m1")

        assert text.startswith("# Meeting: Weekly sync @ 00:00 UTC on 01-Jan-2026")
        assert "[Weekly sync @ 00:00 UTC on 01-Jan-2026](https://meet.example.com/m1)" in text
        assert "* Attachment: [Budget sheet](https://docs.example.com/1)" in text
        assert "* Action Item: Send invoice" in text
        assert "Approved as drafted" in text
        assert "doc-missing" not in text

    def test_without_url(self, renderer, meeting):
        text = renderer.render_minutes(meeting)
        assert "See original meeting" not in text
