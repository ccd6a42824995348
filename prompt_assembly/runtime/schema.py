"""Static description of the assembler's accepted input."""

from __future__ import annotations

import copy
from typing import Any

_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "templateId": {
            "type": "string",
            "description": "ID of the prompt template to use",
        },
        "prompt": {
            "type": "string",
            "description": "Direct prompt text (alternative to templateId)",
        },
        "variables": {
            "type": "object",
            "description": "Variables to replace in the prompt template",
        },
        "context": {
            "type": "array",
            "description": "Context information to include",
        },
    },
    "required": [],
    "additionalProperties": False,
}


def describe_input_schema() -> dict[str, Any]:
    """Return the input shape as a JSON-schema-like dict.

    The result does not depend on any configuration; callers get their own
    copy and may mutate it freely.
    """
    return copy.deepcopy(_INPUT_SCHEMA)
