"""
Manager Agent for Triage document processing.

Orchestrates the specialized agents for one input document:
1. ClassifierAgent - Detects format and intent (never fails)
2. JSONAgent - Handles JSON documents
3. EmailAgent - Handles Email and PlainText documents

Every step records its results in SharedMemory under a fresh session id.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from .agents import ClassifierAgent, EmailAgent, JSONAgent
from .config import SESSION_PREFIX
from .errors import MalformedInputError, ProcessingError, UnsupportedFormatError
from .models.classification import DocumentFormat, Intent
from .models.extraction import EmailExtraction, JsonExtraction
from .services import LLMClient, SharedMemory

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    """Short random session id, e.g. conversation_1a2b3c4d."""
    return f"{SESSION_PREFIX}{uuid.uuid4().hex[:8]}"


@dataclass
class ProcessResult:
    """Outcome of one processing session."""

    format: DocumentFormat
    intent: Intent
    routed_to: str
    session_id: str
    details: Union[JsonExtraction, EmailExtraction]

    def to_dict(self) -> dict:
        return {
            "format": self.format.value,
            "intent": self.intent.value,
            "routed_to": self.routed_to,
            "memory_id": self.session_id,
            "details": self.details.model_dump(by_alias=True, mode="json"),
        }


class ManagerAgent:
    """
    Manager agent that classifies a document and routes it to a format agent.

    JSON goes to the JSONAgent; Email and PlainText go to the EmailAgent.
    Any other format aborts the session after the classification is stored.
    """

    def __init__(self, memory: SharedMemory = None, llm_client: LLMClient = None):
        self.memory = memory or SharedMemory()
        self.llm = llm_client or LLMClient()
        self.classifier = ClassifierAgent(self.memory, self.llm)
        self.json_agent = JSONAgent(self.memory, self.llm)
        self.email_agent = EmailAgent(self.memory, self.llm)
        self._routes = {
            DocumentFormat.JSON: ("JSONAgent", self.json_agent),
            DocumentFormat.EMAIL: ("EmailAgent", self.email_agent),
            DocumentFormat.PLAIN_TEXT: ("EmailAgent", self.email_agent),
        }

    async def process_input(self, content: str) -> ProcessResult:
        """
        Run the full pipeline for one document.

        Args:
            content: Raw document text

        Returns:
            ProcessResult with format, intent, routed agent, session id and details

        Raises:
            ProcessingError: the content is malformed for its format, or the
                format has no agent. The classification stays in memory.
        """
        session_id = new_session_id()
        logger.info(f"[{session_id}] Processing {len(content)} chars")

        # Step 1: Classify the input
        classification = await self.classifier.classify(content)

        await self.memory.write(
            session_id,
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "classification": classification.to_memory(),
            },
        )

        # Step 2: Route to the agent for this format
        try:
            route = self._routes.get(classification.format)
            if route is None:
                raise UnsupportedFormatError(classification.format.value)
            routed_to, agent = route

            logger.info(f"[{session_id}] Routing {classification.format.value} to {routed_to}")
            details = await agent.process(content, session_id)
        except (MalformedInputError, UnsupportedFormatError) as e:
            logger.warning(f"[{session_id}] Processing failed: {e}")
            raise ProcessingError(f"Failed to process input: {e}", cause=e) from e

        return ProcessResult(
            format=classification.format,
            intent=classification.intent,
            routed_to=routed_to,
            session_id=session_id,
            details=details,
        )


# Quick run: python -m triage_agent.manager "<content>" (or @path/to/file)
if __name__ == "__main__":
    import asyncio
    import json
    import sys
    from pathlib import Path

    from .config import LOG_FORMAT, LOG_LEVEL
    from .services import select_backend

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    async def main(argv: list) -> int:
        if not argv or argv[0] in ("--help", "-h"):
            print('Usage: python -m triage_agent.manager "<content>" | @path/to/file')
            return 1

        raw = " ".join(argv)
        if raw.startswith("@"):
            raw = Path(raw[1:]).read_text(encoding="utf-8")

        memory = SharedMemory(select_backend())
        await memory.initialize()
        manager = ManagerAgent(memory)
        try:
            result = await manager.process_input(raw)
        except ProcessingError as e:
            print(f"ERROR: {e}")
            return 2
        finally:
            await memory.close()

        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0

    sys.exit(asyncio.run(main(sys.argv[1:])))
