"""Minimal tracing primitives.

Hosts wrap assembler calls in spans and write one JSON line per event. The
assembler itself never logs.
"""

from __future__ import annotations

import json
import sys
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, TextIO


@dataclass
class Span:
    name: str
    trace_id: str
    span_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    start_ns: int = field(default_factory=time.perf_counter_ns)
    end_ns: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def end(self, **attributes: Any) -> None:
        self.attributes.update(attributes)
        self.end_ns = time.perf_counter_ns()

    @property
    def duration_ms(self) -> float | None:
        if self.end_ns is None:
            return None
        return (self.end_ns - self.start_ns) / 1_000_000.0

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'span_id': self.span_id,
            'duration_ms': self.duration_ms,
            'attributes': self.attributes,
        }


def new_trace_id() -> str:
    return uuid.uuid4().hex


def log_event(
    event: str,
    *,
    trace_id: str,
    span: Span | None = None,
    stream: TextIO | None = None,
    **fields: Any,
) -> None:
    payload: dict[str, Any] = {'event': event, 'trace_id': trace_id, **fields}
    if span is not None:
        payload['span'] = span.to_dict()
    # Fields may carry values JSON cannot encode.
    print(json.dumps(payload, ensure_ascii=False, default=repr), file=stream or sys.stdout)
