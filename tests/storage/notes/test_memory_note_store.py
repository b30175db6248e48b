"""Unit tests for the in-memory note store."""

import pytest

from rag_notes.storage.notes.memory import InMemoryNoteStore


@pytest.fixture
def note_store():
    return InMemoryNoteStore()


@pytest.mark.asyncio
async def test_create_assigns_sequential_ids(note_store):
    first = await note_store.create("Pepperoni is the best pizza topping")
    second = await note_store.create("Pineapple divides opinion", {"tag": "pizza"})

    assert first.id == "1"
    assert second.id == "2"
    assert second.metadata == {"tag": "pizza"}
    assert await note_store.count() == 2


@pytest.mark.asyncio
async def test_create_with_same_key_returns_existing(note_store):
    first = await note_store.create("a note", idempotency_key="wf-1")
    again = await note_store.create("a note", idempotency_key="wf-1")

    assert again.id == first.id
    assert await note_store.count() == 1


@pytest.mark.asyncio
async def test_get_and_get_many(note_store):
    a = await note_store.create("a")
    b = await note_store.create("b")

    assert (await note_store.get(a.id)).text == "a"
    assert await note_store.get("999") is None

    notes = await note_store.get_many([a.id, b.id, "999"])
    assert sorted(n.id for n in notes) == [a.id, b.id]


@pytest.mark.asyncio
async def test_delete(note_store):
    note = await note_store.create("a", idempotency_key="wf-1")

    assert await note_store.delete(note.id) is True
    assert await note_store.delete(note.id) is False
    assert await note_store.get(note.id) is None

    # The key is released with the note
    recreated = await note_store.create("a", idempotency_key="wf-1")
    assert recreated.id != note.id
