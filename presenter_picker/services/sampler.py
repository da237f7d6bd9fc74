# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Sampling logic — pure computation, no side effects.
"""

import random
from typing import Optional, Sequence

from presenter_picker.models.domain import ROLE_COUNT


def distinct_indices(
    population_size: int,
    count: int,
    rng: Optional[random.Random] = None,
) -> set[int]:
    """
    Return min(count, population_size) distinct indices drawn uniformly
    from [0, population_size) by rejection sampling.
    """
    rng = rng or random
    target = max(0, min(count, population_size))
    indices: set[int] = set()
    while len(indices) < target:
        indices.add(rng.randrange(population_size))
    return indices


def draw_winners(
    candidates: Sequence[str],
    role_count: int = ROLE_COUNT,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """
    Shuffle a copy of the candidates uniformly and take the first
    `role_count`; role i receives winner i.
    Raises ValueError if there are fewer candidates than roles.
    """
    if len(candidates) < role_count:
        raise ValueError(
            f"Cannot fill {role_count} roles from {len(candidates)} candidates"
        )
    shuffled = list(candidates)
    (rng or random).shuffle(shuffled)
    return shuffled[:role_count]
