"""Tests for agenda ordering and renumbering."""

import pytest

from meetingdesk.agenda.ordering import (
    agenda_sort_key,
    create_agenda_item,
    document_linked_items,
    find_agenda_item,
    find_agenda_item_or_none,
    move_agenda_item,
    open_position,
    remove_agenda_item,
    renumber_items,
    sorted_agenda,
)
from meetingdesk.exceptions import NotFoundError
from meetingdesk.models.agenda_item import NEW_ITEM_POSITION, AgendaItem
from meetingdesk.models.meeting import Meeting


def make_item(item_id: str, position: int, **fields) -> AgendaItem:
    return AgendaItem(id=item_id, subject=f"Item {item_id}", position=position, **fields)


@pytest.fixture
def mixed_meeting() -> Meeting:
    """Agenda with proposed items, a spacer and irregular positions."""
    return Meeting(
        agenda=[
            make_item("a", 3, proposed=True),
            make_item("b", 1),
            make_item("c", 5, is_spacer=True),
            make_item("d", 2, proposed=True),
            make_item("e", 4),
        ]
    )


def assignment(meeting: Meeting) -> list[tuple[str, int, int]]:
    return [(item.id, item.position, item.number) for item in meeting.agenda]


class TestAgendaSortKey:
    """Tests for the ordering function on its own."""

    def test_accepted_before_proposed(self):
        accepted = make_item("x", 50)
        proposed = make_item("y", 1, proposed=True)
        assert agenda_sort_key(accepted) < agenda_sort_key(proposed)

    def test_position_within_group(self):
        assert agenda_sort_key(make_item("x", 1)) < agenda_sort_key(make_item("y", 2))

    def test_ties_keep_input_order(self):
        """Items equal on both keys stay in their original order."""
        meeting = Meeting(agenda=[make_item("first", 4), make_item("second", 4)])
        assert [i.id for i in sorted_agenda(meeting)] == ["first", "second"]

    def test_sorted_agenda_does_not_mutate(self, mixed_meeting):
        before = assignment(mixed_meeting)
        sorted_agenda(mixed_meeting)
        assert assignment(mixed_meeting) == before


class TestRenumberItems:
    """Tests for renumber_items."""

    def test_orders_and_numbers(self, mixed_meeting):
        """Accepted items by position, then proposed; spacer unnumbered."""
        renumber_items(mixed_meeting)

        assert assignment(mixed_meeting) == [
            ("b", 1, 1),
            ("e", 2, 2),
            ("c", 3, -1),
            ("d", 4, 3),
            ("a", 5, 4),
        ]

    def test_positions_are_dense(self, mixed_meeting):
        renumber_items(mixed_meeting)
        positions = [item.position for item in mixed_meeting.agenda]
        assert positions == list(range(1, len(positions) + 1))

    def test_numbers_skip_spacers(self):
        meeting = Meeting(
            agenda=[
                make_item("s1", 1, is_spacer=True),
                make_item("x", 2),
                make_item("s2", 3, is_spacer=True),
                make_item("y", 4),
                make_item("z", 5, proposed=True, is_spacer=True),
            ]
        )
        renumber_items(meeting)

        spacers = [i for i in meeting.agenda if i.is_spacer]
        others = [i for i in meeting.agenda if not i.is_spacer]
        assert all(i.number == -1 for i in spacers)
        assert sorted(i.number for i in others) == [1, 2]

    def test_idempotent(self, mixed_meeting):
        renumber_items(mixed_meeting)
        first = assignment(mixed_meeting)
        renumber_items(mixed_meeting)
        assert assignment(mixed_meeting) == first

    def test_repairs_duplicate_positions(self):
        meeting = Meeting(
            agenda=[make_item("x", 2), make_item("y", 2), make_item("z", 2)]
        )
        renumber_items(meeting)
        assert assignment(meeting) == [("x", 1, 1), ("y", 2, 2), ("z", 3, 3)]

    def test_empty_agenda(self):
        meeting = Meeting()
        renumber_items(meeting)
        assert meeting.agenda == []

    def test_promoting_proposed_item(self, mixed_meeting):
        """Flipping the proposed flag moves the item into the accepted group."""
        renumber_items(mixed_meeting)
        find_agenda_item(mixed_meeting, "d").proposed = False
        renumber_items(mixed_meeting)

        order = [item.id for item in mixed_meeting.agenda]
        assert order == ["b", "e", "c", "d", "a"]
        assert find_agenda_item(mixed_meeting, "d").number == 3


class TestOpenPosition:
    """Tests for open_position."""

    def test_shifts_items_at_or_after(self):
        meeting = Meeting(agenda=[make_item("x", 1), make_item("y", 2), make_item("z", 3)])
        open_position(meeting, 2)
        assert [i.position for i in meeting.agenda] == [1, 3, 4]

    def test_keeps_numbers(self):
        meeting = Meeting(agenda=[make_item("x", 1, number=1), make_item("y", 2, number=2)])
        open_position(meeting, 1)
        assert [i.number for i in meeting.agenda] == [1, 2]

    def test_insert_workflow(self):
        """open_position, place the new item, renumber."""
        meeting = Meeting(agenda=[make_item("x", 1), make_item("y", 2), make_item("z", 3)])
        new = create_agenda_item(meeting, id="new", subject="Inserted")
        open_position(meeting, 2)
        new.position = 2
        renumber_items(meeting)
        assert [i.id for i in meeting.agenda] == ["x", "new", "y", "z"]
        assert [i.position for i in meeting.agenda] == [1, 2, 3, 4]


class TestCreateAndRemove:
    """Tests for creating, finding, moving and removing items."""

    def test_new_item_goes_last(self):
        meeting = Meeting(agenda=[make_item("x", 1), make_item("y", 2)])
        item = create_agenda_item(meeting, subject="Later")
        assert item.position == NEW_ITEM_POSITION
        renumber_items(meeting)
        assert meeting.agenda[-1] is item
        assert item.position == 3
        assert item.number == 3

    def test_find_missing_raises(self):
        meeting = Meeting(agenda=[make_item("x", 1)])
        assert find_agenda_item_or_none(meeting, "nope") is None
        with pytest.raises(NotFoundError):
            find_agenda_item(meeting, "nope")

    def test_remove_renumbers(self):
        meeting = Meeting(agenda=[make_item("x", 1), make_item("y", 2), make_item("z", 3)])
        assert remove_agenda_item(meeting, "y") is True
        assert assignment(meeting) == [("x", 1, 1), ("z", 2, 2)]

    def test_remove_missing(self):
        meeting = Meeting(agenda=[make_item("x", 1)])
        assert remove_agenda_item(meeting, "nope") is False
        assert len(meeting.agenda) == 1

    def test_move_item(self):
        meeting = Meeting(agenda=[make_item("x", 1), make_item("y", 2), make_item("z", 3)])
        move_agenda_item(meeting, "z", 1)
        assert [i.id for i in meeting.agenda] == ["z", "x", "y"]
        assert [i.position for i in meeting.agenda] == [1, 2, 3]


class TestDocumentLinkedItems:
    """Tests for document_linked_items."""

    def test_returns_linked_items_in_order(self):
        meeting = Meeting(
            agenda=[
                make_item("x", 2, doc_list=["doc-1"]),
                make_item("y", 1, doc_list=["doc-2"]),
                make_item("z", 1, proposed=True, doc_list=["doc-1", "doc-2"]),
                make_item("w", 3, doc_list=["doc-1"]),
            ]
        )
        linked = document_linked_items(meeting, "doc-1")
        assert [i.id for i in linked] == ["x", "w", "z"]

    def test_no_links(self):
        meeting = Meeting(agenda=[make_item("x", 1)])
        assert document_linked_items(meeting, "doc-1") == []
