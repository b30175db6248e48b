"""
Answer generation.

Selects a generation model by variant and calls it with the composed
message sequence.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from casual_llm import LLMProvider

from rag_notes.errors import GenerationError
from rag_notes.generation.context import build_messages
from rag_notes.models import ModelVariant

logger = logging.getLogger(__name__)

DEFAULT_VARIANT: ModelVariant = "fast"

# Tokens accepted on the HTTP surface, mapped to variants
VARIANT_ALIASES: Dict[str, ModelVariant] = {
    "fast": "fast",
    "advanced": "advanced",
    "llama": "fast",
    "llama-70b": "advanced",
}


def resolve_variant(token: Optional[str]) -> ModelVariant:
    """Map a caller-supplied token to a variant. Unknown tokens fall back to "fast"."""
    if not token:
        return DEFAULT_VARIANT
    return VARIANT_ALIASES.get(token.strip().lower(), DEFAULT_VARIANT)


@dataclass(frozen=True)
class GenerationModel:
    """A model identifier and the provider that serves it."""

    name: str
    provider: LLMProvider


@dataclass
class GeneratedAnswer:
    text: str
    model: str


class AnswerGenerator:
    """
    Generates answers with a low-latency ("fast") or a high-capability
    ("advanced") model.

    Selection never fails: an unrecognized variant degrades to "fast". The
    resolved model name is returned with the answer so callers can report
    which model answered.
    """

    def __init__(self, fast: GenerationModel, advanced: Optional[GenerationModel] = None):
        self.models: Dict[ModelVariant, GenerationModel] = {
            "fast": fast,
            "advanced": advanced or fast,
        }
        logger.info(
            f"AnswerGenerator initialized: fast={fast.name}, "
            f"advanced={self.models['advanced'].name}"
        )

    def select(self, variant: Optional[str]) -> GenerationModel:
        return self.models[resolve_variant(variant)]

    def resolve_model(self, variant: Optional[str]) -> str:
        """Model identifier that ``variant`` resolves to."""
        return self.select(variant).name

    async def generate(
        self,
        question: str,
        context_block: Optional[str] = None,
        variant: Optional[str] = DEFAULT_VARIANT,
    ) -> GeneratedAnswer:
        """
        Answer ``question``, using ``context_block`` as a system message when given.

        Raises:
            GenerationError: If the model call fails or returns no text
        """
        model = self.select(variant)
        messages = build_messages(question, context_block)

        try:
            response = await model.provider.chat(messages, response_format="text")
        except Exception as e:
            logger.error(f"Generation failed (model={model.name}): {e}")
            raise GenerationError(f"Generation failed: {e}") from e

        text = getattr(response, "content", None)
        if not text or not str(text).strip():
            logger.error(f"Generation returned no text (model={model.name})")
            raise GenerationError("Generation returned no text")

        logger.debug(
            f"Generated answer: model={model.name}, context={bool(context_block)}, "
            f"chars={len(text)}"
        )
        return GeneratedAnswer(text=str(text), model=model.name)
