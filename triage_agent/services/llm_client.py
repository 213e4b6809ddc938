"""
LLM Client for the Triage agent system.

Wrapper around AsyncOpenAI for structured, schema-validated completions.
Every failure mode (missing key, provider error, timeout, malformed JSON,
schema mismatch) surfaces as ServiceUnavailableError so the agents can switch
to their deterministic fallbacks.
"""

import asyncio
import logging
import re
from typing import Optional, Type, TypeVar

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from ..config import LLM_MAX_RETRIES, LLM_TIMEOUT_SECONDS, MODEL, OPENAI_API_KEY
from ..errors import ServiceUnavailableError
from ..utils import strict_json_loads

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class LLMClient:
    """
    Async LLM client using the OpenAI API.

    Provides a simple interface for agents to get completions.
    """

    def __init__(
        self,
        model: str = None,
        api_key: str = None,
        timeout: float = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model or MODEL
        self.api_key = OPENAI_API_KEY if api_key is None else api_key
        self.timeout = timeout or LLM_TIMEOUT_SECONDS
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise ServiceUnavailableError("OPENAI_API_KEY is not configured")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=LLM_MAX_RETRIES,
            )
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: dict = None,
    ) -> str:
        """
        Get a completion from the LLM.

        Args:
            system_prompt: System instructions for the model
            user_prompt: User message/query
            response_format: Optional OpenAI response_format (json_schema)

        Returns:
            Model's response as a string
        """
        client = self._get_client()

        kwargs = {}
        if response_format is not None:
            kwargs["response_format"] = response_format

        try:
            response = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    temperature=0,
                    **kwargs,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ServiceUnavailableError(f"LLM call timed out after {self.timeout}s") from e
        except OpenAIError as e:
            raise ServiceUnavailableError(f"LLM call failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ServiceUnavailableError("LLM returned an empty response")
        return response.choices[0].message.content.strip()

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: dict = None,
    ) -> dict:
        """
        Get a JSON completion from the LLM.

        Returns:
            Parsed JSON response as a dict
        """
        text = await self.complete(system_prompt, user_prompt, response_format)

        # Clean up markdown code blocks
        if text.startswith("```"):
            text = text.split("```")[1]
            if text.startswith("json"):
                text = text[4:]
        text = text.strip()

        try:
            result = strict_json_loads(text)
        except ValueError:
            # Try to extract JSON object
            json_match = re.search(r"\{[\s\S]*\}", text)
            if not json_match:
                raise ServiceUnavailableError("LLM response is not JSON")
            try:
                result = strict_json_loads(json_match.group())
            except ValueError as e:
                raise ServiceUnavailableError("LLM response is not JSON") from e

        if not isinstance(result, dict):
            raise ServiceUnavailableError("LLM response is not a JSON object")
        return result

    async def infer(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: dict,
        output_model: Type[M],
    ) -> M:
        """
        Get a completion validated against `output_model`.

        Raises:
            ServiceUnavailableError: on any failure, including a response
                that does not match the schema
        """
        result = await self.complete_json(system_prompt, user_prompt, response_format)
        try:
            return output_model.model_validate(result)
        except ValidationError as e:
            raise ServiceUnavailableError(
                f"LLM response failed {output_model.__name__} validation: {e.error_count()} errors"
            ) from e
