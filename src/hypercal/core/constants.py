"""Core constants for hypercal.

The description format is part of the public contract: log lines and test
fixtures compare against it, so changing either token is a breaking change.
"""

from __future__ import annotations

# describe() format: "a=1;b=2.5", names sorted
DESCRIPTION_DELIMITER = ";"
ASSIGNMENT_TOKEN = "="

# Text rendering of an objective score: "name:value"
SCORE_TEXT_SEPARATOR = ":"

DEFAULT_SEED = 42
