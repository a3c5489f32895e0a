"""Unit tests for the note service and repository against an in-memory database."""
import pytest
from bson import ObjectId

from notes_api.api.schemas.note import NoteCreate, NoteUpdate
from notes_api.core.exceptions import BadRequestError, NotFoundError
from notes_api.repositories import note_repo
from notes_api.services import note_service


USER_A = str(ObjectId())
USER_B = str(ObjectId())


def _create(db, user_id=USER_A, **fields):
    fields.setdefault("title", "T")
    fields.setdefault("content", "C")
    return note_service.add_note(db, user_id, NoteCreate(**fields))


class TestAddNote:

    def test_defaults_and_owner(self, db):
        note = _create(db)
        assert isinstance(note["_id"], ObjectId)
        assert note["user_id"] == USER_A
        assert note["tags"] == []
        assert note["is_pinned"] is False
        assert note["created_at"] == note["updated_at"]


class TestGetAndEdit:

    def test_get_scoped_to_owner(self, db):
        note = _create(db)
        assert note_service.get_note(db, USER_A, str(note["_id"]))["title"] == "T"
        with pytest.raises(NotFoundError):
            note_service.get_note(db, USER_B, str(note["_id"]))

    def test_edit_applies_partial_changes(self, db):
        note = _create(db, tags=["x"])
        updated = note_service.edit_note(db, USER_A, str(note["_id"]), NoteUpdate(title="New"))
        assert updated["title"] == "New"
        assert updated["content"] == "C"
        assert updated["tags"] == ["x"]

    def test_edit_without_changes(self, db):
        note = _create(db)
        with pytest.raises(BadRequestError):
            note_service.edit_note(db, USER_A, str(note["_id"]), NoteUpdate())

    def test_edit_by_other_owner_leaves_note_untouched(self, db):
        note = _create(db)
        with pytest.raises(NotFoundError):
            note_service.edit_note(db, USER_B, str(note["_id"]), NoteUpdate(title="X"))
        assert db["note"].find_one({"_id": note["_id"]})["title"] == "T"


class TestListNotes:

    def test_only_own_notes_pinned_first(self, db):
        a1 = _create(db, title="a1")
        a2 = _create(db, title="a2", is_pinned=True)
        _create(db, user_id=USER_B, title="b1", is_pinned=True)
        a3 = _create(db, title="a3")

        titles = [n["title"] for n in note_service.list_notes(db, USER_A)]

        assert titles == [a2["title"], a1["title"], a3["title"]]


class TestDeleteNote:

    def test_delete_then_not_found(self, db):
        note = _create(db)
        note_service.delete_note(db, USER_A, str(note["_id"]))
        with pytest.raises(NotFoundError):
            note_service.delete_note(db, USER_A, str(note["_id"]))

    def test_delete_by_other_owner(self, db):
        note = _create(db)
        with pytest.raises(NotFoundError):
            note_service.delete_note(db, USER_B, str(note["_id"]))
        assert db["note"].count_documents({}) == 1


class TestRepoIds:

    @pytest.mark.parametrize("bad_id", ["", "xyz", "123", None])
    def test_malformed_ids_behave_as_missing(self, db, bad_id):
        _create(db)
        assert note_repo.get_note(db, bad_id, USER_A) is None
        assert note_repo.update_note(db, bad_id, USER_A, {"title": "x"}) is None
        assert note_repo.delete_note(db, bad_id, USER_A) is False
