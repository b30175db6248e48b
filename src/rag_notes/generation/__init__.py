"""
Generation: context assembly and answer generation.
"""

from rag_notes.generation.context import assemble, build_messages
from rag_notes.generation.generator import (
    AnswerGenerator,
    GeneratedAnswer,
    GenerationModel,
    resolve_variant,
)
from rag_notes.generation.prompts import SYSTEM_INSTRUCTION

__all__ = [
    "AnswerGenerator",
    "GeneratedAnswer",
    "GenerationModel",
    "SYSTEM_INSTRUCTION",
    "assemble",
    "build_messages",
    "resolve_variant",
]
