"""
Models for ingestion and deletion results.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class IngestionResult:
    """
    Result of a completed ingestion pipeline instance.

    Attributes:
        success: True when all three steps completed
        record_id: Id of the persisted note (also the vector id)
        text: The stored note text
        metadata: Metadata stored on the vector entry
        timestamp: ISO-8601 time the vector entry was written
        instance_id: Pipeline instance that produced this result

    Examples:
        >>> result = IngestionResult(
        ...     success=True,
        ...     record_id="42",
        ...     text="Pepperoni is the best pizza topping",
        ...     timestamp="2024-01-01T12:00:00",
        ... )
    """

    success: bool
    record_id: Optional[str]
    text: str
    metadata: dict = field(default_factory=dict)
    timestamp: Optional[str] = None
    instance_id: Optional[str] = None


@dataclass
class IngestionStatus:
    instance_id: str
    completed_steps: list[str] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return "index" in self.completed_steps
