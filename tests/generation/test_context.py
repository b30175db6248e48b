"""Tests for context assembly and message composition."""

from casual_llm import SystemMessage, UserMessage

from rag_notes.generation import SYSTEM_INSTRUCTION, assemble, build_messages
from rag_notes.models import Note


def test_assemble_bullets_in_given_order():
    notes = [Note(id="2", text="best match"), Note(id="1", text="second match")]

    assert assemble(notes) == "Context:\n- best match\n- second match"


def test_assemble_no_notes():
    assert assemble([]) == ""


def test_build_messages_with_context():
    messages = build_messages("What toppings?", "Context:\n- Pepperoni")

    assert [type(m) for m in messages] == [SystemMessage, SystemMessage, UserMessage]
    assert messages[0].content == "Context:\n- Pepperoni"
    assert messages[1].content == SYSTEM_INSTRUCTION
    assert messages[2].content == "What toppings?"


def test_build_messages_omits_empty_context():
    for context in (None, ""):
        messages = build_messages("What is the capital of France?", context)

        assert [type(m) for m in messages] == [SystemMessage, UserMessage]
        assert messages[0].content == SYSTEM_INSTRUCTION
