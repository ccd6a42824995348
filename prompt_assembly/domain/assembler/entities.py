"""Configuration, input and result models for the prompt assembler.

Field names are snake_case in Python and camelCase on the wire, so the same
models parse host JSON (``templateId``, ``contextSettings``) and render
responses (``renderedText``, ``estimatedTokens``).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ContextSettings(_CamelModel):
    """Context policy: token budget and how much history to prepend."""

    max_tokens: int = Field(default=2000, gt=0, description="Token budget for the rendered prompt.")
    include_history: bool = Field(default=True, description="Prepend prior context items.")
    history_length: int = Field(default=5, ge=0, description="How many trailing context items to keep.")


class AssemblerConfig(_CamelModel):
    """Immutable configuration owned by one PromptAssembler."""

    templates: dict[str, str] = Field(default_factory=dict)
    default_variables: dict[str, Any] = Field(default_factory=dict, alias="variables")
    context_settings: ContextSettings = Field(default_factory=ContextSettings)


class InvocationInput(_CamelModel):
    """Per-call input. Never persisted. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    template_id: Optional[str] = Field(default=None, description="ID of the prompt template to use")
    prompt: Optional[str] = Field(default=None, description="Direct prompt text (alternative to templateId)")
    variables: Optional[dict[str, Any]] = Field(default=None, description="Variables to replace in the prompt template")
    context: Optional[list[Any]] = Field(default=None, description="Context information to include")


class InvocationMetadata(_CamelModel):
    template_used: Optional[str] = None
    variables_replaced_count: int = Field(ge=0)
    estimated_tokens: int = Field(ge=0)
    context_included: bool


class InvocationResult(_CamelModel):
    rendered_text: str
    metadata: InvocationMetadata
