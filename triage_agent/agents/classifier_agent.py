"""
Classifier Agent - Detects the format and intent of an input document.

Uses the LLM when it is reachable and a deterministic rule cascade when it is
not, so classification never stops the pipeline.
"""

import logging

from ..base_agent import BaseAgent
from ..config import CLASSIFIER_MAX_CHARS
from ..errors import ServiceUnavailableError
from ..models.classification import ClassificationResult, DocumentFormat, Intent
from ..prompts import CLASSIFIER_PROMPT
from ..schemas import CLASSIFICATION_SCHEMA
from ..utils import strict_json_loads

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.5
FALLBACK_REASONING = "Fallback classification due to AI service unavailability"
EMAIL_MARKERS = ("from:", "subject:")


def parses_as_json(content: str) -> bool:
    try:
        strict_json_loads(content)
    except ValueError:
        return False
    return True


def fallback_classification(content: str) -> ClassificationResult:
    """Classify without the LLM.

    1. Valid JSON -> JSON / Query
    2. Contains "from:" or "subject:" (any case) -> Email / Query
    3. Anything else -> PlainText / Other
    """
    if parses_as_json(content):
        doc_format, intent = DocumentFormat.JSON, Intent.QUERY
    elif any(marker in content.lower() for marker in EMAIL_MARKERS):
        doc_format, intent = DocumentFormat.EMAIL, Intent.QUERY
    else:
        doc_format, intent = DocumentFormat.PLAIN_TEXT, Intent.OTHER

    return ClassificationResult(
        format=doc_format,
        intent=intent,
        confidence=FALLBACK_CONFIDENCE,
        reasoning=FALLBACK_REASONING,
    )


class ClassifierAgent(BaseAgent):
    """
    Agent that decides which format agent should handle a document.

    Writes exactly one activity log entry per classification.
    """

    name = "Classifier"

    async def execute(self, *args, **kwargs):
        return await self.classify(kwargs.get("content", args[0] if args else ""))

    async def classify(self, content: str) -> ClassificationResult:
        user_prompt = f"""Analyze the following content and determine its format and intent.

Content:
{content[:CLASSIFIER_MAX_CHARS]}

Provide your classification with a confidence score and reasoning."""

        try:
            result = await self.llm.infer(
                CLASSIFIER_PROMPT,
                user_prompt,
                CLASSIFICATION_SCHEMA,
                ClassificationResult,
            )
        except ServiceUnavailableError as e:
            logger.warning(f"Classifier LLM unavailable, using fallback: {e}")
            result = fallback_classification(content)
            await self.record(
                "Fallback Classification",
                f"Used fallback classification: {result.format.value} format "
                f"with {result.intent.value} intent",
            )
            return result

        logger.info(f"Classified as {result.format.value}/{result.intent.value} ({result.reasoning})")
        await self.record(
            "Classification",
            f"Detected {result.format.value} format with {result.intent.value} intent "
            f"({round(result.confidence * 100)}% confidence)",
        )
        return result
