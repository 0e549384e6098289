"""Load and validate generic JSON trees against the bundled schema.

Usage::

    from zettel_html.contracts.load import validate_tree, validate_file

    validate_tree(tree)
    validate_file(Path("doc.zjson"))
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"
TREE_SCHEMA = "zjson.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/zettel_html/data/schemas/`` relative to this file
    2. installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical
    with resources.as_file(resources.files("zettel_html") / SCHEMA_DIR / name) as p:
        return p


@lru_cache(maxsize=None)
def load_schema(name: str = TREE_SCHEMA) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_tree(tree: Any) -> None:
    """Validate a generic tree (a block array).

    Raises ``jsonschema.ValidationError`` on failure.
    """
    jsonschema.validate(instance=tree, schema=load_schema(TREE_SCHEMA))


def tree_errors(tree: Any) -> list[str]:
    """All schema violations of *tree*, as ``path: message`` lines."""
    schema = load_schema(TREE_SCHEMA)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    out = []
    for err in sorted(validator.iter_errors(tree), key=lambda e: list(e.absolute_path)):
        where = "/".join(str(p) for p in err.absolute_path) or "<root>"
        out.append(f"{where}: {err.message}")
    return out


def validate_file(instance_path: Path) -> None:
    """Load a JSON file and validate it as a generic tree."""
    validate_tree(json.loads(instance_path.read_text(encoding="utf-8")))
