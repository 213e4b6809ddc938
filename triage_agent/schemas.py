"""
JSON Schemas for Structured LLM Output

These schemas are passed to OpenAI's API through the response_format
parameter. The JSON and email analyses contain open objects, so they cannot
use strict mode; the returned data is validated with pydantic afterwards.
"""

# Schema for the classifier agent
CLASSIFICATION_SCHEMA = {
    "type": "json_schema",
    "json_schema": {
        "name": "document_classification",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "format": {
                    "type": "string",
                    "enum": ["JSON", "Email", "PDF", "PlainText"],
                    "description": "The detected format of the input content",
                },
                "intent": {
                    "type": "string",
                    "enum": ["Invoice", "RFQ", "Complaint", "Regulation", "Query", "Other"],
                    "description": "The detected intent of the content",
                },
                "confidence": {
                    "type": "number",
                    "description": "Confidence score of the classification, between 0 and 1",
                },
                "reasoning": {
                    "type": "string",
                    "description": "Explanation for the classification decision",
                },
            },
            "required": ["format", "intent", "confidence", "reasoning"],
            "additionalProperties": False,
        },
    },
}

# Schema for the JSON agent
JSON_ANALYSIS_SCHEMA = {
    "type": "json_schema",
    "json_schema": {
        "name": "json_analysis",
        "strict": False,
        "schema": {
            "type": "object",
            "properties": {
                "extractedFields": {
                    "type": "object",
                    "description": "Key fields extracted from the JSON",
                },
                "missingFields": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Fields that appear to be missing but would be expected",
                },
                "anomalies": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Any anomalies or unusual values detected",
                },
                "standardizedFormat": {
                    "type": "object",
                    "description": "The JSON reformatted to a standard schema",
                },
            },
            "required": ["extractedFields", "missingFields", "anomalies", "standardizedFormat"],
        },
    },
}

# Schema for the email agent
EMAIL_ANALYSIS_SCHEMA = {
    "type": "json_schema",
    "json_schema": {
        "name": "email_analysis",
        "strict": False,
        "schema": {
            "type": "object",
            "properties": {
                "sender": {
                    "type": "string",
                    "description": "The email sender extracted from the From field",
                },
                "recipients": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "List of recipients",
                },
                "subject": {"type": "string", "description": "The email subject"},
                "intent": {
                    "type": "string",
                    "enum": ["Inquiry", "RFQ", "Complaint", "Information", "Other"],
                    "description": "The detected intent of the email",
                },
                "urgency": {
                    "type": "string",
                    "enum": ["low", "medium", "high"],
                    "description": "The urgency level of the email",
                },
                "keyPoints": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Key points extracted from the email body",
                },
                "crmFormat": {
                    "type": "object",
                    "description": "The email formatted for CRM usage",
                },
            },
            "required": ["sender", "subject", "intent", "urgency", "keyPoints", "crmFormat"],
        },
    },
}
