"""Host-side wrapper around the assembler: tracing and config swaps.

The assembler stays pure. This service is where invocations get a trace id,
a span and structured log events, and where a new configuration replaces the
old one by swapping the assembler reference.
"""

from __future__ import annotations

from prompt_assembly.core.errors import PromptProcessingError, PromptTooLargeError
from prompt_assembly.domain.assembler import AssemblerConfig, InvocationInput, InvocationResult
from prompt_assembly.observability.tracing import Span, log_event, new_trace_id
from prompt_assembly.runtime.assembler import PromptAssembler
from prompt_assembly.runtime.resolution import RawPrompt


class PromptService:
    """Coordinates prompt invocations for the HTTP layer and the CLI."""

    def __init__(self, assembler: PromptAssembler) -> None:
        self._assembler = assembler

    @classmethod
    def from_config(cls, config: AssemblerConfig) -> "PromptService":
        return cls(PromptAssembler(config))

    @property
    def assembler(self) -> PromptAssembler:
        return self._assembler

    def swap_config(self, config: AssemblerConfig) -> PromptAssembler:
        """Replace the active assembler; in-flight calls keep the old one."""
        assembler = PromptAssembler(config)
        self._assembler = assembler
        return assembler

    def invoke(self, payload: InvocationInput, *, trace_id: str | None = None) -> InvocationResult:
        trace_id = trace_id or new_trace_id()
        # One reference per call, so a concurrent swap cannot split a call.
        assembler = self._assembler

        log_event(
            'prompt.invoke.started',
            trace_id=trace_id,
            template_id=payload.template_id,
            context_items=len(payload.context or []),
        )

        resolution = assembler.resolve(payload)
        if isinstance(resolution, RawPrompt) and resolution.requested_template_id is not None:
            log_event(
                'prompt.template.fallback',
                trace_id=trace_id,
                template_id=resolution.requested_template_id,
            )

        span = Span(name='prompt.invoke', trace_id=trace_id)
        try:
            result = assembler.assemble(payload, resolution)
        except PromptTooLargeError as exc:
            span.end()
            log_event(
                'prompt.invoke.rejected',
                trace_id=trace_id,
                span=span,
                estimated_tokens=exc.estimated_tokens,
                max_tokens=exc.max_tokens,
            )
            raise
        except PromptProcessingError as exc:
            span.end()
            log_event('prompt.invoke.failed', trace_id=trace_id, span=span, error=str(exc))
            raise

        span.end(**result.metadata.model_dump())
        log_event('prompt.invoke.completed', trace_id=trace_id, span=span)
        return result
