"""
Response formatter: turns operation results into JSON-safe values and
human-readable text blocks for the output sink.
"""

import json
from typing import Any, Callable

Sink = Callable[[str], None]


def to_json_safe(value: Any) -> Any:
    """Public entry point for single results (documents, counts, ``None``)."""
    return _sanitise_value(value)


def _sanitise_value(obj: Any) -> Any:
    """Recursively convert non-JSON-safe types to safe representations."""
    if isinstance(obj, dict):
        return {k: _sanitise_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitise_value(item) for item in obj]
    if isinstance(obj, bytes):
        try:
            return obj.decode("utf-8")
        except UnicodeDecodeError:
            return f"[binary {len(obj)} bytes]"
    if isinstance(obj, (int, float, str, bool, type(None))):
        return obj
    # datetime, ObjectId, Decimal128, etc.
    return str(obj)


def format_block(heading: str, value: Any) -> str:
    """Heading line followed by the indented JSON rendering of *value*."""
    body = json.dumps(_sanitise_value(value), indent=2, ensure_ascii=False)
    return f"\n{heading}\n{body}"


def emit(sink: Sink, heading: str, value: Any) -> None:
    sink(format_block(heading, value))
