"""
Extraction result models produced by the format agents.

The outer envelope of each result is typed; the open mappings inside it
(extracted fields, standardized format, CRM format) hold arbitrary JSON values
whose shape is decided by the provider at runtime. Wire keys are camelCase.
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_RECIPIENTS = ["support@company.com"]


class JsonExtraction(BaseModel):
    """Result of the JSON agent. Fallback results carry the parsed input verbatim."""

    model_config = ConfigDict(populate_by_name=True)

    extracted_fields: Any = Field(alias="extractedFields")
    missing_fields: List[str] = Field(alias="missingFields")
    anomalies: List[str]
    standardized_format: Any = Field(alias="standardizedFormat")

    def field_count(self) -> int:
        if isinstance(self.extracted_fields, (dict, list)):
            return len(self.extracted_fields)
        return 0

    def to_memory(self) -> dict:
        return {
            "agent": "JSON",
            "extractedFields": self.extracted_fields,
            "standardizedFormat": self.standardized_format,
        }


class JsonAnalysis(JsonExtraction):
    """Inference output for the JSON agent: both open fields must be objects."""

    extracted_fields: Dict[str, Any] = Field(alias="extractedFields")
    standardized_format: Dict[str, Any] = Field(alias="standardizedFormat")


class EmailIntent(str, Enum):
    INQUIRY = "Inquiry"
    RFQ = "RFQ"
    COMPLAINT = "Complaint"
    INFORMATION = "Information"
    OTHER = "Other"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EmailExtraction(BaseModel):
    """Result of the email agent. Recipients are optional and default to a placeholder."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str
    recipients: List[str] = Field(default_factory=lambda: list(DEFAULT_RECIPIENTS))
    subject: str
    intent: EmailIntent
    urgency: Urgency
    key_points: List[str] = Field(alias="keyPoints")
    crm_format: Dict[str, Any] = Field(alias="crmFormat")

    def to_memory(self) -> dict:
        return {
            "agent": "Email",
            "sender": self.sender,
            "subject": self.subject,
            "intent": self.intent.value,
            "urgency": self.urgency.value,
            "keyPoints": list(self.key_points),
        }
