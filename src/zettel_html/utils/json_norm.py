"""Canonical JSON serialization for CLI output.

Guarantees:
  - Stable key ordering (``sort_keys=True``)
  - Trailing newline at EOF
  - Non-ASCII text is kept as is
"""

from __future__ import annotations

import json
from typing import Any, Mapping


def _to_builtin(obj: Any) -> Any:
    """Convert mappings and sequences into JSON-safe builtins."""
    if obj is None or isinstance(obj, (str, int, bool, float)):
        return obj
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(v) for v in obj]
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Canonical JSON text of *obj* with a trailing newline."""
    s = json.dumps(_to_builtin(obj), indent=indent, sort_keys=True, ensure_ascii=False)
    return s + "\n"
