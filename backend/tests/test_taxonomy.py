from types import SimpleNamespace

import pytest

from notekeeper.core.errors import InvalidInputError, NotFoundError
from notekeeper.core.models.note import Note
from notekeeper.core.services.taxonomy_service import compute_tags, is_uuid_tag, remove_tag, tag_key

UUID_TAG = "a1b2c3d4-e5f6-7890-abcd-ef1234567890"


def make_note(note_id: str, tags: list, deleted: bool = False) -> Note:
    return Note(id=note_id, user_id="user-1", title=f"Note {note_id}", tags=tags, deleted=deleted)


@pytest.fixture
def scenario_notes():
    yield [
        make_note("1", [UUID_TAG, "work"]),
        make_note("2", ["work", "home"]),
        make_note("3", ["home"], deleted=True),
    ]


@pytest.mark.parametrize(
    "value",
    [
        UUID_TAG,
        UUID_TAG.upper(),
        "00000000-0000-0000-0000-000000000000",
        "A1b2C3d4-E5f6-7890-aBcD-eF1234567890",
    ],
)
def test_is_uuid_tag_matches_canonical_layout(value) -> None:
    assert is_uuid_tag(value)


@pytest.mark.parametrize(
    "value",
    [
        "work",
        "",
        "fake-uuid-1234-5678-9abc-def012345678",
        "a1b2c3d4e5f67890abcdef1234567890",
        f" {UUID_TAG}",
        f"{UUID_TAG}\n",
        f"tag-{UUID_TAG}",
        "g1b2c3d4-e5f6-7890-abcd-ef1234567890",
        "a1b2c3d4-e5f6-7890-abcd-ef123456789",
        None,
        42,
    ],
)
def test_is_uuid_tag_rejects_everything_else(value) -> None:
    assert not is_uuid_tag(value)


def test_scenario_counts(scenario_notes) -> None:
    assert compute_tags(scenario_notes) == {"work": 2, "home": 1}


def test_empty_input_gives_empty_projection() -> None:
    assert compute_tags([]) == {}


def test_none_input_is_invalid() -> None:
    with pytest.raises(InvalidInputError):
        compute_tags(None)


def test_uuid_tags_never_counted_however_common() -> None:
    notes = [make_note(str(i), [UUID_TAG]) for i in range(10)]
    assert compute_tags(notes) == {}


def test_tag_only_on_deleted_notes_is_absent() -> None:
    notes = [make_note("1", ["archive-me"], deleted=True), make_note("2", ["kept"])]
    assert compute_tags(notes) == {"kept": 1}


def test_duplicate_tag_on_one_note_counts_once() -> None:
    notes = [make_note("1", ["work", "work", "work"]), make_note("2", ["work"])]
    assert compute_tags(notes) == {"work": 2}


def test_case_sensitive_tags_are_distinct() -> None:
    notes = [make_note("1", ["Work"]), make_note("2", ["work"])]
    assert compute_tags(notes) == {"Work": 1, "work": 1}


def test_order_is_first_seen() -> None:
    notes = [make_note("1", ["b", "a"]), make_note("2", ["c", "a"])]
    assert list(compute_tags(notes)) == ["b", "a", "c"]


def test_idempotent_and_pure(scenario_notes) -> None:
    before = [n.model_copy(deep=True) for n in scenario_notes]
    first = compute_tags(scenario_notes)
    second = compute_tags(scenario_notes)
    assert first == second
    assert list(first.items()) == list(second.items())
    assert scenario_notes == before


def test_non_string_and_empty_tags_are_opaque() -> None:
    notes = [
        SimpleNamespace(tags=["", 7, UUID_TAG], deleted=False),
        SimpleNamespace(tags=[7], deleted=False),
    ]
    assert compute_tags(notes) == {"": 1, 7: 2}


def test_unhashable_tag_objects_are_counted_by_value() -> None:
    tag_object = {"id": "x", "name": "work"}
    notes = [
        SimpleNamespace(tags=[tag_object, "home", {"name": "work", "id": "x"}], deleted=False),
        SimpleNamespace(tags=[dict(tag_object), ["a", "b"]], deleted=False),
    ]

    counts = compute_tags(notes)

    assert counts == {
        tag_key(tag_object): 2,
        "home": 1,
        tag_key(["a", "b"]): 1,
    }
    assert tag_key(tag_object) == tag_key({"name": "work", "id": "x"})
    assert remove_tag(notes[0], tag_object) == ["home"]


def test_remove_tag_drops_every_occurrence_without_mutating() -> None:
    note = make_note("1", ["normal-tag", "keep", "normal-tag"])
    assert remove_tag(note, "normal-tag") == ["keep"]
    assert note.tags == ["normal-tag", "keep", "normal-tag"]


def test_remove_tag_handles_uuid_values_like_any_other() -> None:
    note = make_note("1", [UUID_TAG, "work"])
    assert remove_tag(note, UUID_TAG) == ["work"]


def test_remove_absent_tag_returns_same_list() -> None:
    note = make_note("1", ["work"])
    assert remove_tag(note, "missing") == ["work"]


def test_remove_tag_on_missing_note() -> None:
    with pytest.raises(NotFoundError):
        remove_tag(None, "work")


def test_count_transitions_across_removals(scenario_notes) -> None:
    note1, note2, note3 = scenario_notes

    note1 = note1.model_copy(update={"tags": remove_tag(note1, "work")})
    assert compute_tags([note1, note2, note3]) == {"work": 1, "home": 1}

    note2 = note2.model_copy(update={"tags": remove_tag(note2, "work")})
    assert compute_tags([note1, note2, note3]) == {"home": 1}

    # Other notes' lists are untouched by each removal.
    assert note3.tags == ["home"]
    assert note1.tags == [UUID_TAG]
