"""
Classification models.

ClassificationResult doubles as the validation model for the classifier's
inference output: every field is required and confidence is bounded.
"""

from enum import Enum

from pydantic import BaseModel, Field


class DocumentFormat(str, Enum):
    """Structural category of an input document."""

    JSON = "JSON"  # structured data
    EMAIL = "Email"  # correspondence
    PDF = "PDF"  # scanned document
    PLAIN_TEXT = "PlainText"  # free text


class Intent(str, Enum):
    """Business purpose of an input document."""

    INVOICE = "Invoice"
    RFQ = "RFQ"
    COMPLAINT = "Complaint"
    REGULATION = "Regulation"
    QUERY = "Query"
    OTHER = "Other"


class ClassificationResult(BaseModel):
    format: DocumentFormat
    intent: Intent
    confidence: float = Field(ge=0, le=1)
    reasoning: str

    def to_memory(self) -> dict:
        """The part of the classification kept in shared memory (reasoning is only logged)."""
        return {
            "format": self.format.value,
            "intent": self.intent.value,
            "confidence": self.confidence,
        }
