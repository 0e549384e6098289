"""Shared utilities for zettel_html."""

from zettel_html.utils.exit_codes import ExitCode
from zettel_html.utils.json_norm import stable_json_dumps

__all__ = ["ExitCode", "stable_json_dumps"]
