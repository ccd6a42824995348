"""Data model of the prompt assembler."""
from .entities import (
    AssemblerConfig,
    ContextSettings,
    InvocationInput,
    InvocationMetadata,
    InvocationResult,
)
from .values import (
    BoolValue,
    NumberValue,
    StringValue,
    StructuredValue,
    VariableValue,
    to_json_text,
    to_variable_value,
)
