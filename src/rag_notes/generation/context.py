"""
Context assembly.

Turns retrieved notes into the context block sent to the language model and
builds the message sequence around it.
"""

from typing import List, Optional, Sequence

from casual_llm import ChatMessage, SystemMessage, UserMessage

from rag_notes.generation.prompts import CONTEXT_HEADER, SYSTEM_INSTRUCTION
from rag_notes.models import Note


def assemble(notes: Sequence[Note]) -> str:
    """
    Format notes as a bulleted context block, one bullet per note.

    Notes keep the order they were given in (best match first). No notes
    gives an empty string.
    """
    if not notes:
        return ""
    return "\n".join([CONTEXT_HEADER, *(f"- {note.text}" for note in notes)])


def build_messages(question: str, context_block: Optional[str] = None) -> List[ChatMessage]:
    """
    Build the messages for a generation call.

    The context block and the fixed instruction are two separate system
    messages. The context message is left out entirely when there is no
    context.
    """
    messages: List[ChatMessage] = []
    if context_block:
        messages.append(SystemMessage(content=context_block))
    messages.append(SystemMessage(content=SYSTEM_INSTRUCTION))
    messages.append(UserMessage(content=question))
    return messages
