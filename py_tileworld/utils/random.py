"""
Random number generation utilities.

Generation stages take an explicit ``AleaPRNG``. This module keeps a
process-wide fallback instance for callers that do not inject one, and the
roulette-wheel helper shared by biome registries and spawn tables.
"""

from typing import Optional, Sequence, Tuple, TypeVar, Union

from ..core.alea_prng import AleaPRNG

T = TypeVar("T")

# Global PRNG instance
_prng = None


def set_random_seed(seed: Union[str, int]) -> None:
    """
    Reset the process-wide PRNG.

    Args:
        seed: Seed string or number to use
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the process-wide PRNG instance, creating it on first use.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG("default")
    return _prng


def resolve_prng(
    prng: Optional[AleaPRNG] = None, seed: Optional[Union[str, int]] = None
) -> AleaPRNG:
    """Pick the injected PRNG, else a fresh one for ``seed``, else the global one."""
    if prng is not None:
        return prng
    if seed is not None:
        return AleaPRNG(seed)
    return get_prng()


def roulette(entries: Sequence[Tuple[T, float]], prng: AleaPRNG) -> T:
    """
    Weighted roulette-wheel pick over ``(item, weight)`` pairs.

    Draws r in [0, total), subtracts weights in order and returns the first
    item where the remainder drops to zero or below. Floating point leftovers
    fall back to the first entry.
    """
    if not entries:
        raise ValueError("Cannot sample from an empty weighted table")

    total = sum(weight for _, weight in entries)
    r = prng.random() * total

    for item, weight in entries:
        r -= weight
        if r <= 0:
            return item
    return entries[0][0]
