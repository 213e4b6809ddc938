"""
JSON Agent - Extracts and standardizes fields from structured data.

Input that does not parse as JSON is a terminal error for the session. When
the LLM is unavailable the parsed data is passed through unchanged.
"""

import json
import logging

from ..base_agent import BaseAgent
from ..errors import MalformedInputError, ServiceUnavailableError
from ..models.extraction import JsonAnalysis, JsonExtraction
from ..prompts import JSON_AGENT_PROMPT
from ..schemas import JSON_ANALYSIS_SCHEMA
from ..utils import strict_json_loads

logger = logging.getLogger(__name__)


class JSONAgent(BaseAgent):
    """Agent for documents classified as JSON."""

    name = "JSON"

    async def execute(self, *args, **kwargs):
        return await self.process(
            content=kwargs.get("content", ""),
            session_id=kwargs.get("session_id", ""),
        )

    async def process(self, content: str, session_id: str) -> JsonExtraction:
        """
        Analyze JSON content and store the result in shared memory.

        Args:
            content: Raw document text
            session_id: Shared memory key for this session

        Returns:
            JsonExtraction with extracted, missing, anomalous and standardized fields

        Raises:
            MalformedInputError: content is not valid JSON
        """
        try:
            data = strict_json_loads(content)
        except ValueError as e:
            raise MalformedInputError("Invalid JSON format") from e

        user_prompt = f"""Analyze the following JSON data:

{json.dumps(data, indent=2)}

Extract key fields, identify any missing fields that would typically be expected, detect anomalies, and reformat to a standardized schema."""

        try:
            result = await self.llm.infer(
                JSON_AGENT_PROMPT,
                user_prompt,
                JSON_ANALYSIS_SCHEMA,
                JsonAnalysis,
            )
        except ServiceUnavailableError as e:
            logger.warning(f"[{session_id}] JSON agent LLM unavailable, using fallback: {e}")
            result = JsonExtraction(
                extracted_fields=data,
                missing_fields=[],
                anomalies=[],
                standardized_format=data,
            )
            await self.memory.write(session_id, result.to_memory())
            await self.record(
                "Fallback Processing",
                f"Used fallback processing for JSON with {result.field_count()} fields",
            )
            return result

        await self.memory.write(session_id, result.to_memory())
        await self.record(
            "Processing",
            f"Extracted {result.field_count()} fields, found {len(result.missing_fields)} "
            f"missing fields and {len(result.anomalies)} anomalies",
        )
        return result
