from typing import Any

from pydantic import BaseModel, Field


class PromptTooLargeDetail(BaseModel):
    """Error body for prompts over the token budget."""

    message: str
    estimated_tokens: int = Field(serialization_alias="estimatedTokens")
    max_tokens: int = Field(serialization_alias="maxTokens")


class ProcessingErrorDetail(BaseModel):
    message: str


class TemplateListResponse(BaseModel):
    templates: list[str]


InputSchema = dict[str, Any]
