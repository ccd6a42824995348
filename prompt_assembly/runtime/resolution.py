"""Template resolution: a known template wins, otherwise the raw prompt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union


@dataclass(frozen=True)
class ResolvedTemplate:
    template_id: str
    body: str


@dataclass(frozen=True)
class RawPrompt:
    text: str
    # Set when a template id was requested but is not in the catalog.
    requested_template_id: Optional[str] = None


Resolution = Union[ResolvedTemplate, RawPrompt]


def resolve_template(
    templates: Mapping[str, str],
    template_id: Optional[str],
    prompt: Optional[str],
) -> Resolution:
    """Pick the working text for an invocation.

    An unknown ``template_id`` is not an error: it falls back to ``prompt``
    exactly as if no id had been given.
    """
    if template_id is not None and template_id in templates:
        return ResolvedTemplate(template_id=template_id, body=templates[template_id])
    return RawPrompt(text=prompt or "", requested_template_id=template_id)
