"""
Email Agent - Extracts sender, subject, intent and urgency from correspondence.

Also handles plain text. Without the LLM it falls back to reading the
From:/Subject: header lines and filling the rest with fixed defaults.
"""

import logging
from typing import Optional

from ..base_agent import BaseAgent
from ..errors import ServiceUnavailableError
from ..models.extraction import (
    DEFAULT_RECIPIENTS,
    EmailExtraction,
    EmailIntent,
    Urgency,
)
from ..prompts import EMAIL_AGENT_PROMPT
from ..schemas import EMAIL_ANALYSIS_SCHEMA

logger = logging.getLogger(__name__)

UNKNOWN_SENDER = "unknown@example.com"
NO_SUBJECT = "No subject"


def _header_value(lines: list, header: str) -> Optional[str]:
    """Return the trimmed remainder of the first line starting with `header` (any case)."""
    for line in lines:
        if line.lower().startswith(header):
            return line[len(header):].strip()
    return None


def fallback_extraction(content: str) -> EmailExtraction:
    """Build an extraction from the From:/Subject: lines alone."""
    lines = content.split("\n")
    sender = _header_value(lines, "from:")
    subject = _header_value(lines, "subject:")

    sender = sender if sender is not None else UNKNOWN_SENDER
    subject = subject if subject is not None else NO_SUBJECT

    return EmailExtraction(
        sender=sender,
        recipients=list(DEFAULT_RECIPIENTS),
        subject=subject,
        intent=EmailIntent.OTHER,
        urgency=Urgency.MEDIUM,
        key_points=["Email content analysis"],
        crm_format={
            "contactEmail": sender,
            "category": "General",
            "priority": "medium",
            "summary": "Email processed with fallback method",
        },
    )


class EmailAgent(BaseAgent):
    """Agent for documents classified as Email or PlainText."""

    name = "Email"

    async def execute(self, *args, **kwargs):
        return await self.process(
            content=kwargs.get("content", ""),
            session_id=kwargs.get("session_id", ""),
        )

    async def process(self, content: str, session_id: str) -> EmailExtraction:
        """
        Analyze an email and store the result in shared memory.

        Args:
            content: Raw document text
            session_id: Shared memory key for this session

        Returns:
            EmailExtraction with sender, subject, intent, urgency and key points
        """
        user_prompt = f"""Analyze the following email content:

{content}

Extract the sender, recipients, subject, determine the intent and urgency, identify key points, and format for CRM usage."""

        try:
            result = await self.llm.infer(
                EMAIL_AGENT_PROMPT,
                user_prompt,
                EMAIL_ANALYSIS_SCHEMA,
                EmailExtraction,
            )
        except ServiceUnavailableError as e:
            logger.warning(f"[{session_id}] Email agent LLM unavailable, using fallback: {e}")
            result = fallback_extraction(content)
            await self.memory.write(session_id, result.to_memory())
            await self.record(
                "Fallback Processing",
                f"Used fallback processing for email from {result.sender}",
            )
            return result

        await self.memory.write(session_id, result.to_memory())
        await self.record(
            "Processing",
            f'Processed email from {result.sender} with subject "{result.subject}". '
            f"Intent: {result.intent.value}, Urgency: {result.urgency.value}",
        )
        return result
