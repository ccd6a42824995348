"""Prompt assembly runtime."""
from .assembler import PromptAssembler
from .renderer import PromptRenderer
from .resolution import RawPrompt, ResolvedTemplate, resolve_template
from .schema import describe_input_schema
from .tokens import estimate_tokens
