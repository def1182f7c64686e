"""
Seeded Generator - Deterministic float source for sprite rendering

Every creature render owns exactly one generator from start to finish.
Each stage of the pipeline consumes draws from it in a fixed order, so the
same seed always replays the same creature.

USAGE:
    from critter.rng import create_rng

    rng = create_rng("my-pet-seed")
    value = rng()        # float in [0, 1)
    rng.draws            # how many values have been consumed so far
"""

import hashlib
import re
import socket
from typing import Callable, Optional


# A generator is anything callable that returns a float in [0, 1).
# Tests pass plain lambdas; the pipeline always passes a Mulberry32.
Rng = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_GOLDEN = 0x6D2B79F5

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]{8}")


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32x32 multiply."""
    return (a * b) & _MASK32


def seed_to_state(seed: str) -> int:
    """
    Turn a seed string into a 32-bit generator state.

    Seeds from generate_seed() are already SHA-256 hex, so their first 8 hex
    digits are the state. Any other string is hashed first.
    """
    if _HEX_PREFIX.match(seed):
        return int(seed[:8], 16)
    digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


class Mulberry32:
    """
    Mulberry32 pseudorandom generator.

    Small, fast and fully reproducible across platforms. Calling the
    instance returns the next float in [0, 1) and advances the state.
    """

    def __init__(self, state: int):
        self._state = state & _MASK32
        self.draws = 0

    @classmethod
    def from_seed(cls, seed: str) -> 'Mulberry32':
        """Create a generator whose state is derived from a seed string."""
        return cls(seed_to_state(seed))

    def __call__(self) -> float:
        self._state = (self._state + _GOLDEN) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), 1 | t)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        self.draws += 1
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0

    @property
    def state(self) -> int:
        return self._state

    def __repr__(self) -> str:
        return f"Mulberry32(state=0x{self._state:08x}, draws={self.draws})"


def create_rng(seed: str) -> Mulberry32:
    """Factory: fresh generator for one render call."""
    return Mulberry32.from_seed(seed)


def generate_seed(machine_id: Optional[str] = None, pet_id: Optional[str] = None) -> str:
    """
    Build a creature identity seed.

    Args:
        machine_id: Stable machine identifier (defaults to the host name)
        pet_id: Pet identifier (defaults to "default")

    Returns:
        SHA-256 hex digest of "machine:pet"
    """
    machine = machine_id if machine_id is not None else socket.gethostname()
    pet = pet_id if pet_id is not None else "default"
    return hashlib.sha256(f"{machine}:{pet}".encode("utf-8")).hexdigest()
