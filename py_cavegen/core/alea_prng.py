"""
String-seeded Alea PRNG used for every stochastic step of cave generation.

Johannes Baagøe's Alea algorithm. A cave seed is an arbitrary string, and
Python's built-in ``hash()`` is salted per process, so string seeds are mixed
through Alea's ``mash`` function instead. The same seed string therefore
yields the same tile stream on every run and every machine.
"""

import time


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def seed_from_time() -> str:
    """Derive a seed string from the current wall clock."""
    return str(time.time_ns())


class AleaPRNG:
    """
    Alea generator seeded from a string (or any value coerced to one).

    Attributes:
        seed: The seed string the generator was created from
        call_count: Number of values drawn so far
    """

    def __init__(self, seed):
        self.seed = str(seed)
        self.call_count = 0

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            for char in str(data):
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(self.seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(self.seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(self.seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def next_int(self, low: int, high: int) -> int:
        """
        Draw an integer in ``[low, high)``.

        Exactly one underlying draw is consumed per call, which keeps tile
        streams aligned with the grid traversal order.
        """
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return low + int(self.random() * (high - low))

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.next_int(0, len(seq))]
