"""Prompt renderer (literal ``{{name}}`` placeholder substitution).

We keep rendering separate so:
- it can be tested independently
- substituted values are never re-scanned for placeholders
- unknown placeholders survive untouched for a later pass or for the model
"""

from __future__ import annotations

from typing import Mapping

from prompt_assembly.domain.assembler.values import VariableValue

OPEN = "{{"
CLOSE = "}}"


class PromptRenderer:
    """Render prompt templates by a single left-to-right scan."""

    def render(self, template: str, variables: Mapping[str, VariableValue]) -> str:
        """Render a prompt template.

        Args:
            template: Prompt text containing ``{{var}}`` placeholders.
            variables: Mapping of variable names to values.

        Returns:
            Rendered prompt. Placeholders naming unknown variables are kept
            verbatim.

        Raises:
            ValueError: If a non-string value holds a non-finite number.
            TypeError: If a structured value is not JSON serializable.
        """
        out: list[str] = []
        pos = 0
        length = len(template)
        longest = max(map(len, variables), default=0)

        while pos < length:
            start = template.find(OPEN, pos)
            if start == -1:
                break
            end, value = self._match(template, start, variables, longest)
            if value is None:
                # Step past one brace only, so "{{{name}}}" still matches at +1.
                out.append(template[pos:start + 1])
                pos = start + 1
                continue

            out.append(template[pos:start])
            out.append(value.to_display_text())
            pos = end + len(CLOSE)

        out.append(template[pos:])
        return "".join(out)

    @staticmethod
    def _match(
        template: str,
        start: int,
        variables: Mapping[str, VariableValue],
        longest: int,
    ) -> tuple[int, VariableValue | None]:
        """Find the first ``}}`` after ``start`` that closes a known name.

        Names may themselves contain ``}}``, so later closers are tried too,
        up to the longest known name.
        """
        name_start = start + len(OPEN)
        end = template.find(CLOSE, name_start)
        while end != -1 and end - name_start <= longest:
            value = variables.get(template[name_start:end])
            if value is not None:
                return end, value
            end = template.find(CLOSE, end + 1)
        return -1, None
