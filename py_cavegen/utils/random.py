"""
Seed resolution helpers.

Every stage that needs randomness gets its own ``AleaPRNG`` built from the
resolved seed string; there is no process-wide generator.
"""

from typing import Optional

from ..core.alea_prng import AleaPRNG, seed_from_time


def resolve_seed(seed: Optional[str], use_random_seed: bool = False) -> str:
    """
    Pick the seed string for a generation pass.

    Args:
        seed: Seed requested by the caller
        use_random_seed: Ignore ``seed`` and derive one from the current time

    Returns:
        Seed string (a time-derived one when requested or when none is given)
    """
    if use_random_seed or seed is None:
        return seed_from_time()
    return str(seed)


def create_prng(seed: str) -> AleaPRNG:
    """Create a fresh generator for one pipeline stage."""
    return AleaPRNG(seed)
