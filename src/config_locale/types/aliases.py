"""Type aliases using modern PEP 695 syntax.

This module defines the type aliases shared by the combination generator,
the stem builder, the loaders and the merge engine.
"""

from typing import Any

# Ordered classifier values, e.g. ("db", "1", "qa") for a host db-1-qa
type Identity = tuple[str, ...]

# One candidate specificity level, already wildcard-filled or shortened
type Combination = tuple[str, ...]

# Parsed configuration mapping; values are whatever the file format produced
type ConfigDict = dict[str, Any]  # pyright: ignore[reportExplicitAny] # Config systems need flexible types
