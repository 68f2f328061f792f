"""Combination generation for identity-driven configuration lookup.

An identity such as ``("db", "1", "qa")`` is expanded into the ordered list of
combinations whose stems are probed for configuration files. The order is
least specific first and directly determines merge precedence, so both
algorithms are pure functions with a fixed, documented output order.

NESTED keeps the position of every identity value::

    >>> nested_combinations(("db", "1", "qa"), wildcard="all")
    [('all', 'all', 'all'), ('all', 'all', 'qa'), ('all', '1', 'all'), ...]

PERMUTE ignores positions and yields every ordering of every subset of the
identity values, grouped by size.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import override

from config_locale.types.aliases import Combination

logger = logging.getLogger(__name__)

DEFAULT_WILDCARD = "all"


class Algorithm(str, Enum):
    """Strategy used to derive combinations from an identity."""

    NESTED = "NESTED"
    PERMUTE = "PERMUTE"

    @override
    def __str__(self) -> str:
        """Return string representation."""
        return self.value


def nested_combinations(
    identity: Sequence[str],
    wildcard: str | None = DEFAULT_WILDCARD,
) -> list[Combination]:
    """Generate position-preserving combinations of an identity.

    Every position is either the wildcard or its concrete value, with the
    last position varying fastest. With a wildcard this yields exactly
    ``2 ** len(identity)`` combinations, all-wildcard first and all-concrete
    last. Without a wildcard the non-concrete positions are dropped, which
    shortens combinations, and the resulting empty combination is discarded.

    Args:
        identity: Ordered identity values
        wildcard: Placeholder for omitted positions, or None to drop them

    Returns:
        Combinations ordered from least to most specific
    """
    options = [(wildcard, value) for value in identity]

    combinations: list[Combination] = []
    for product in itertools.product(*options):
        combination = tuple(part for part in product if part is not None)
        # Without a wildcard the all-omitted product collapses to nothing
        if wildcard is None and not combination:
            continue
        combinations.append(combination)

    return combinations


def permute_combinations(
    identity: Sequence[str],
    wildcard: str | None = None,  # pyright: ignore[reportUnusedParameter] # Shared signature with nested_combinations
) -> list[Combination]:
    """Generate every ordering of every subset of the identity values.

    The odometer over present/absent positions is reduced to distinct value
    sets, stably grouped by size, and each set is expanded into its
    permutations in lexicographic order starting from the sorted arrangement.
    The wildcard is ignored.

    Args:
        identity: Identity values; position does not matter
        wildcard: Accepted for signature compatibility and ignored

    Returns:
        Combinations ordered by size, then odometer order, then permutation order
    """
    options = [(None, value) for value in identity]

    bases: list[Combination] = []
    seen: set[Combination] = set()
    for product in itertools.product(*options):
        base = tuple(sorted({part for part in product if part is not None}))
        if base in seen:
            continue
        seen.add(base)
        bases.append(base)

    bases.sort(key=len)

    combinations: list[Combination] = []
    for base in bases:
        combinations.extend(itertools.permutations(base))

    return combinations


_GENERATORS: dict[Algorithm, Callable[[Sequence[str], str | None], list[Combination]]] = {
    Algorithm.NESTED: nested_combinations,
    Algorithm.PERMUTE: permute_combinations,
}


def generate_combinations(
    identity: Sequence[str],
    wildcard: str | None = DEFAULT_WILDCARD,
    algorithm: Algorithm = Algorithm.NESTED,
) -> list[Combination]:
    """Generate combinations for an identity using the selected algorithm.

    Args:
        identity: Ordered identity values
        wildcard: Placeholder for omitted positions (NESTED only)
        algorithm: Combination strategy

    Returns:
        Combinations ordered from least to most specific
    """
    generator = _GENERATORS[Algorithm(algorithm)]
    combinations = generator(identity, wildcard)
    logger.debug(
        "Generated %d %s combinations for identity %s",
        len(combinations),
        algorithm,
        list(identity),
    )
    return combinations
