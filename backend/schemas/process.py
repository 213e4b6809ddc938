"""Document processing Pydantic schemas."""

from pydantic import BaseModel, Field


class ProcessRequest(BaseModel):
    """A document to classify and route."""
    content: str = Field(min_length=1)
