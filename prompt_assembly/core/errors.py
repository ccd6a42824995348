# ---------------------------------
# TYPED EXCEPTIONS
# ---------------------------------

PROCESSING_FAILED_PREFIX = "Prompt processing failed"


class PromptAssemblyError(RuntimeError):
    """Base class for every error raised while assembling a prompt."""


class PromptTooLargeError(PromptAssemblyError):
    """Raised when the rendered prompt exceeds the configured token budget.

    The caller can shrink variables or context and retry; it is never retried
    automatically.
    """

    def __init__(self, estimated_tokens: int, max_tokens: int):
        self.estimated_tokens = estimated_tokens
        self.max_tokens = max_tokens
        super().__init__(
            f"Processed prompt exceeds maximum token limit "
            f"(estimated {estimated_tokens}, max {max_tokens})"
        )


class PromptProcessingError(PromptAssemblyError):
    """Raised when a variable or context item cannot be rendered to text."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"{PROCESSING_FAILED_PREFIX}: {cause}")


class ConfigurationError(PromptAssemblyError):
    """Raised when assembler configuration cannot be loaded."""


class TemplateNotFoundError(LookupError):
    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")
