"""
Strict JSON parsing.

Python's json module accepts the non-standard NaN, Infinity and -Infinity
literals. Documents using them are not valid JSON and cannot be stored in a
JSONB column, so they are rejected here.
"""

import json
from typing import Any


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def strict_json_loads(text: str) -> Any:
    """json.loads that raises ValueError on NaN / Infinity / -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)
