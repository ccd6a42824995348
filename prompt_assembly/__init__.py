"""Prompt assembly engine: templates + variables + context -> final prompt."""
from prompt_assembly.core.errors import (
    ConfigurationError,
    PromptAssemblyError,
    PromptProcessingError,
    PromptTooLargeError,
    TemplateNotFoundError,
)
from prompt_assembly.domain.assembler import (
    AssemblerConfig,
    ContextSettings,
    InvocationInput,
    InvocationMetadata,
    InvocationResult,
)
from prompt_assembly.runtime import PromptAssembler, describe_input_schema

__version__ = "1.0.0"
