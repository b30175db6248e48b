"""
Deterministic local embedding.

Feature-hashes word tokens into a fixed number of buckets. It has no model
weights and no network access, which makes it the embedding used by the
"local" configuration and by the test suite. Texts that share words get a
positive cosine similarity; texts with no words in common score 0.
"""

import hashlib
import logging
import math
import re
from typing import List

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9]+")

STOPWORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "do", "for", "from",
        "how", "i", "in", "is", "it", "of", "on", "or", "that", "the", "this",
        "to", "was", "what", "which", "who", "with",
    }
)


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens with stopwords removed and a naive plural strip."""
    tokens = []
    for token in _TOKEN_RE.findall(text.lower()):
        if token in STOPWORDS:
            continue
        if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
            token = token[:-1]
        tokens.append(token)
    return tokens


class HashEmbedding:
    """Bag-of-words feature hashing, L2 normalized."""

    def __init__(self, dimension: int = 768):
        if dimension < 1:
            raise ValueError("dimension must be positive")
        self._dimension = dimension
        logger.info(f"HashEmbedding initialized ({dimension} dimensions)")

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return f"hash-bow-{self._dimension}"

    def _bucket(self, token: str) -> int:
        digest = hashlib.md5(token.encode()).hexdigest()
        return int(digest[:8], 16) % self._dimension

    def _embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        vector = [0.0] * self._dimension
        for token in tokenize(text):
            vector[self._bucket(token)] += 1.0

        norm = math.sqrt(sum(v * v for v in vector))
        if norm == 0:
            return vector
        return [v / norm for v in vector]

    async def embed_document(self, text: str) -> List[float]:
        return self._embed(text)

    async def embed_query(self, text: str) -> List[float]:
        return self._embed(text)
