import asyncio
import json

from notekeeper.core.models.collection import CollectionKind, Notebook, TagEntity
from notekeeper.core.models.note import Note
from notekeeper.core.repositories.implementations.filesystem.collection_repository import (
    FileCollectionRepository,
)


def test_note_round_trip_on_disk(note_repo, storage_root) -> None:
    note = Note(user_id="user-1", title="Groceries", content="- milk\n- eggs", tags=["home"])
    asyncio.run(note_repo.create(note))

    note_dir = storage_root / "user-1" / note.id
    assert (note_dir / "note.md").read_text(encoding="utf-8") == "- milk\n- eggs"
    meta = json.loads((note_dir / "metadata.json").read_text(encoding="utf-8"))
    assert "content" not in meta
    assert meta["tags"] == ["home"]

    loaded = asyncio.run(note_repo.get("user-1", note.id))
    assert loaded == note


def test_get_missing_or_unsafe_id_returns_none(note_repo) -> None:
    assert asyncio.run(note_repo.get("user-1", "nope")) is None
    assert asyncio.run(note_repo.get("user-1", "../user-2")) is None


def test_list_is_scoped_to_user_and_includes_trash(note_repo) -> None:
    asyncio.run(note_repo.create(Note(user_id="user-1", title="a")))
    asyncio.run(note_repo.create(Note(user_id="user-1", title="b", deleted=True)))
    asyncio.run(note_repo.create(Note(user_id="user-2", title="c")))

    titles = sorted(n.title for n in asyncio.run(note_repo.list(user_id="user-1")))
    assert titles == ["a", "b"]
    assert asyncio.run(note_repo.list(user_id="nobody")) == []


def test_corrupt_metadata_is_skipped(note_repo, storage_root) -> None:
    asyncio.run(note_repo.create(Note(user_id="user-1", title="fine")))
    broken = storage_root / "user-1" / "broken"
    broken.mkdir()
    (broken / "metadata.json").write_text("{not json", encoding="utf-8")

    notes = asyncio.run(note_repo.list(user_id="user-1"))
    assert [n.title for n in notes] == ["fine"]


def test_update_fields_keeps_identity(note_repo) -> None:
    note = asyncio.run(note_repo.create(Note(user_id="user-1", title="old", tags=["x"])))
    updated = asyncio.run(
        note_repo.update_fields("user-1", note.id, {"title": "new", "id": "hijack", "user_id": "user-2"})
    )
    assert updated.title == "new"
    assert updated.id == note.id
    assert updated.user_id == "user-1"
    assert updated.tags == ["x"]
    assert asyncio.run(note_repo.update_fields("user-1", "missing", {"title": "x"})) is None


def test_delete_removes_directory(note_repo, storage_root) -> None:
    note = asyncio.run(note_repo.create(Note(user_id="user-1")))
    assert asyncio.run(note_repo.delete("user-1", note.id)) is True
    assert not (storage_root / "user-1" / note.id).exists()
    assert asyncio.run(note_repo.delete("user-1", note.id)) is False


def test_collection_upsert_and_order(tag_repo, storage_root) -> None:
    second = TagEntity(user_id="user-1", name="second", sort_order=1)
    first = TagEntity(user_id="user-1", name="first", sort_order=0)
    asyncio.run(tag_repo.save(second))
    asyncio.run(tag_repo.save(first))

    assert [t.name for t in asyncio.run(tag_repo.list("user-1"))] == ["first", "second"]
    assert (storage_root / "user-1" / "tags.json").is_file()

    renamed = first.model_copy(update={"name": "renamed"})
    asyncio.run(tag_repo.save(renamed))
    tags = asyncio.run(tag_repo.list("user-1"))
    assert [t.name for t in tags] == ["renamed", "second"]
    assert isinstance(tags[0], TagEntity)


def test_collection_delete(tag_repo) -> None:
    tag = asyncio.run(tag_repo.save(TagEntity(user_id="user-1", name="gone")))
    assert asyncio.run(tag_repo.delete("user-1", tag.id)) is True
    assert asyncio.run(tag_repo.get("user-1", tag.id)) is None
    assert asyncio.run(tag_repo.delete("user-1", tag.id)) is False


def test_kinds_use_separate_files(storage_root) -> None:
    notebooks = FileCollectionRepository(storage_root, CollectionKind.NOTEBOOK)
    asyncio.run(notebooks.save(Notebook(user_id="user-1", name="Work")))

    assert (storage_root / "user-1" / "notebooks.json").is_file()
    assert not (storage_root / "user-1" / "tags.json").exists()
    assert isinstance(asyncio.run(notebooks.list("user-1"))[0], Notebook)
