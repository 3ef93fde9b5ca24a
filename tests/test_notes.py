"""Note service tests."""

from __future__ import annotations

import pytest

from productivity_os.errors import NoteNotFound, ValidationError


def test_create_note_defaults(note_service, user):
    note = note_service.create_note(user_id=user.id, title="Ideas", content="Ship it", tags=["a", "a", "b"])

    assert note.id is not None
    assert note.color == "#FFFFFF"
    assert note.is_pinned is False
    assert note.tags == ["a", "b"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"title": " ", "content": "body"},
        {"title": "t", "content": ""},
        {"title": "t", "content": "x" * 5001},
        {"title": "t", "content": "body", "color": "white"},
    ],
)
def test_create_note_validation(note_service, user, kwargs):
    with pytest.raises(ValidationError):
        note_service.create_note(user_id=user.id, **kwargs)


def test_pinned_notes_list_first_then_newest(note_service, clock, user):
    first = note_service.create_note(user_id=user.id, title="first", content="one")
    clock.advance(minutes=1)
    pinned = note_service.create_note(user_id=user.id, title="pinned", content="two", is_pinned=True)
    clock.advance(minutes=1)
    latest = note_service.create_note(user_id=user.id, title="latest", content="three")

    assert [n.id for n in note_service.list_notes(user_id=user.id)] == [pinned.id, latest.id, first.id]


def test_search_matches_title_or_content_case_insensitively(note_service, user):
    note_service.create_note(user_id=user.id, title="Groceries", content="milk, eggs")
    note_service.create_note(user_id=user.id, title="Reading", content="Finish the MILK book")
    note_service.create_note(user_id=user.id, title="Other", content="nothing here")

    found = note_service.list_notes(user_id=user.id, search="  Milk ")
    assert {n.title for n in found} == {"Groceries", "Reading"}
    assert len(note_service.list_notes(user_id=user.id, search="   ")) == 3


def test_tag_filter_and_all_tags(note_service, user, other_user):
    note_service.create_note(user_id=user.id, title="a", content="a", tags=["work", "ideas"])
    note_service.create_note(user_id=user.id, title="b", content="b", tags=["home"])
    note_service.create_note(user_id=other_user.id, title="c", content="c", tags=["secret"])

    assert [n.title for n in note_service.list_notes(user_id=user.id, tag="work")] == ["a"]
    assert note_service.all_tags(user_id=user.id) == ["home", "ideas", "work"]


def test_update_note(note_service, clock, user):
    note = note_service.create_note(user_id=user.id, title="Draft", content="v1")
    clock.advance(hours=1)

    updated = note_service.update_note(note.id, user_id=user.id, content="v2", is_pinned=True, tags=[])

    assert updated.title == "Draft"
    assert updated.content == "v2"
    assert updated.is_pinned is True
    assert updated.tags == []
    assert updated.updated_at > updated.created_at


def test_missing_notes(note_service, user, other_user):
    note = note_service.create_note(user_id=user.id, title="Mine", content="private")

    with pytest.raises(NoteNotFound):
        note_service.get_note(note.id, user_id=other_user.id)
    with pytest.raises(NoteNotFound):
        note_service.update_note(note.id, user_id=other_user.id, title="stolen")

    note_service.delete_note(note.id, user_id=user.id)
    with pytest.raises(NoteNotFound):
        note_service.delete_note(note.id, user_id=user.id)


@pytest.mark.parametrize("wildcard", ["%", "_"])
def test_search_treats_like_wildcards_literally(note_service, user, wildcard):
    note_service.create_note(user_id=user.id, title="Plain", content="nothing special")
    note_service.create_note(user_id=user.id, title="Sale", content="50% off snake_case mugs")

    found = note_service.list_notes(user_id=user.id, search=wildcard)

    assert [n.title for n in found] == ["Sale"]
