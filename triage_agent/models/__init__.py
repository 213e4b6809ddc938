from .classification import ClassificationResult, DocumentFormat, Intent
from .extraction import (
    DEFAULT_RECIPIENTS,
    EmailExtraction,
    EmailIntent,
    JsonAnalysis,
    JsonExtraction,
    Urgency,
)
from .memory import LogEntry, MemoryRecord, MemoryResult

__all__ = [
    # Classification
    "ClassificationResult",
    "DocumentFormat",
    "Intent",
    # Extraction
    "DEFAULT_RECIPIENTS",
    "EmailExtraction",
    "EmailIntent",
    "JsonAnalysis",
    "JsonExtraction",
    "Urgency",
    # Memory
    "LogEntry",
    "MemoryRecord",
    "MemoryResult",
]
