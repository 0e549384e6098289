"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success: the tree rendered (or validated) cleanly
  1   Violation: render error recorded, or schema validation failed
  2   Error: usage error, missing file, unreadable input
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
