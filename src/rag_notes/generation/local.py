"""
Local stand-in for a hosted language model.

Answers without any model by quoting the context it was given. Selected with
``RAG_NOTES_LLM_PROVIDER=echo`` for local development and tests.
"""

from typing import List

from casual_llm import AssistantMessage, ChatMessage, SystemMessage, UserMessage

from rag_notes.generation.prompts import CONTEXT_HEADER


class EchoProvider:
    """Implements the ``chat`` call of casual_llm's LLMProvider."""

    def __init__(self, model_name: str = "echo"):
        self.model_name = model_name

    async def chat(self, messages: List[ChatMessage], response_format: str = "text", **kwargs):
        question = ""
        context_lines: List[str] = []

        for message in messages:
            content = getattr(message, "content", "") or ""
            if isinstance(message, UserMessage):
                question = content
            elif isinstance(message, SystemMessage) and content.startswith(CONTEXT_HEADER):
                context_lines = [
                    line[2:] for line in content.splitlines()[1:] if line.startswith("- ")
                ]

        if context_lines:
            answer = f"[{self.model_name}] {question}\nRelevant notes: " + "; ".join(context_lines)
        else:
            answer = f"[{self.model_name}] {question}\nNo relevant notes found."

        return AssistantMessage(content=answer)
