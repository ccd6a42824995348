from __future__ import annotations

from typing import Any, Sequence

from prompt_assembly.domain.assembler.values import to_json_text


def build_context_block(context: Sequence[Any], history_length: int) -> str:
    """Render the trailing ``history_length`` context items, oldest first.

    Each line reads ``Context <n>: <json>`` with ``n`` counted from 1 within the
    kept window. Returns an empty string when nothing is kept.
    """
    if history_length <= 0 or not context:
        return ""
    window = list(context)[-history_length:]
    return "\n".join(
        f"Context {index}: {to_json_text(item)}"
        for index, item in enumerate(window, start=1)
    )
