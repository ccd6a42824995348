"""Prompt assembler.

Turns a template (or raw prompt), variables and optional prior context into
one finalized prompt plus metadata:

    resolve template -> merge/substitute variables -> prefix context -> size check

The assembler performs no I/O and no logging. It keeps nothing between calls
beyond its configuration, so one instance can serve concurrent callers.
"""

from __future__ import annotations

from typing import Any

from prompt_assembly.core.errors import PromptProcessingError, PromptTooLargeError
from prompt_assembly.domain.assembler import (
    AssemblerConfig,
    InvocationInput,
    InvocationMetadata,
    InvocationResult,
    to_variable_value,
)
from prompt_assembly.runtime.context import build_context_block
from prompt_assembly.runtime.renderer import PromptRenderer
from prompt_assembly.runtime.resolution import ResolvedTemplate, Resolution, resolve_template
from prompt_assembly.runtime.schema import describe_input_schema
from prompt_assembly.runtime.tokens import estimate_tokens


class PromptAssembler:
    """Render final prompts against a fixed configuration."""

    def __init__(self, config: AssemblerConfig, renderer: PromptRenderer | None = None) -> None:
        # Deep copy so later edits to the caller's dicts cannot leak in.
        self._config = config.model_copy(deep=True)
        self._renderer = renderer or PromptRenderer()

    @property
    def config(self) -> AssemblerConfig:
        return self._config

    def resolve(self, payload: InvocationInput) -> Resolution:
        return resolve_template(self._config.templates, payload.template_id, payload.prompt)

    def invoke(self, payload: InvocationInput) -> InvocationResult:
        """Assemble a prompt.

        Equivalent to ``assemble(payload, self.resolve(payload))``.

        Args:
            payload: Per-call template id or prompt, variables and context.

        Returns:
            Rendered text with metadata.

        Raises:
            PromptTooLargeError: If the estimated token count exceeds
                ``context_settings.max_tokens``.
            PromptProcessingError: If a variable or context item cannot be
                serialized to text.
        """
        return self.assemble(payload, self.resolve(payload))

    def assemble(self, payload: InvocationInput, resolution: Resolution) -> InvocationResult:
        """Assemble a prompt from an already resolved template or raw prompt."""
        working_text = resolution.body if isinstance(resolution, ResolvedTemplate) else resolution.text

        variables: dict[str, Any] = {**self._config.default_variables, **(payload.variables or {})}
        settings = self._config.context_settings

        try:
            rendered = self._renderer.render(
                working_text,
                {name: to_variable_value(value) for name, value in variables.items()},
            )
            context_block = ""
            if settings.include_history and payload.context:
                context_block = build_context_block(payload.context, settings.history_length)
        except (TypeError, ValueError, RecursionError) as exc:
            raise PromptProcessingError(exc) from exc

        if context_block:
            rendered = f"{context_block}\n\n{rendered}"

        estimated = estimate_tokens(rendered)
        if estimated > settings.max_tokens:
            raise PromptTooLargeError(estimated_tokens=estimated, max_tokens=settings.max_tokens)

        return InvocationResult(
            rendered_text=rendered,
            metadata=InvocationMetadata(
                template_used=resolution.template_id if isinstance(resolution, ResolvedTemplate) else None,
                variables_replaced_count=len(variables),
                estimated_tokens=estimated,
                context_included=bool(context_block),
            ),
        )

    def describe_input_schema(self) -> dict[str, Any]:
        return describe_input_schema()
