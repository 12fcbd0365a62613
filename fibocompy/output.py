"""
Record rendering for command line output.

A record is a flat mapping of field names to plain values; it renders
either as compact JSON or as labeled lines carrying the same fields.
"""

import json
from typing import Any, Mapping


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, Mapping):
        return ", ".join(f"{k}={_format_value(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(_format_value(v) for v in value)
    return str(value)


def format_record(record: Mapping[str, Any], as_json: bool = False) -> str:
    """
    Render a record.

    Args:
        record: Field name to value mapping
        as_json: Compact JSON instead of labeled lines

    Returns:
        Rendered text (no trailing newline)
    """
    if as_json:
        return json.dumps(record, separators=(",", ":"), ensure_ascii=False)

    if not record:
        return ""

    width = max(len(key) for key in record) + 1
    return "\n".join(
        f"{key + ':':<{width}} {_format_value(value)}" for key, value in record.items()
    )


def format_list(items: list[Any], as_json: bool = False) -> str:
    """Render a list, one item per line or as a JSON array."""
    if as_json:
        return json.dumps(items, separators=(",", ":"), ensure_ascii=False)
    return "\n".join(_format_value(item) for item in items)
