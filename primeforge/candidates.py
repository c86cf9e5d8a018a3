# primeforge/candidates.py
# Random candidates and witness bases. The RNG is always passed in; nothing here
# touches the module-level `random` state.

from __future__ import annotations
import random, time
from typing import Optional

from .fixed_width import FixedInt, Width
from .modmath import reduce

def default_rng(seed: Optional[int] = None) -> random.Random:
    """Fresh generator, seeded from the clock unless a seed is given."""
    return random.Random(time.time_ns() if seed is None else seed)

def random_odd_of_bit_length(bits: int, width: Width, rng: random.Random) -> FixedInt:
    """Uniform odd value with exactly `bits` bits (top bit set)."""
    if bits < 2:
        raise ValueError("bits must be >= 2")
    if bits > width.bits:
        raise ValueError(f"bits must be <= {width.bits} for this width")
    low = FixedInt.random(width, rng).mask_bits(bits - 1)   # [0, 2^(bits-1) - 1]
    top = FixedInt.one(width).shl(bits - 1)
    value, _ = low.add(top)
    return value.force_odd()

def random_base_in_range(n: FixedInt, rng: random.Random) -> FixedInt:
    """Witness base in [2, n-2]; base 2 when n <= 4."""
    w = n.width
    two = FixedInt.from_int(2, w)
    if n <= FixedInt.from_int(4, w):
        return two
    span = n.sub(FixedInt.from_int(3, w))
    r = reduce(FixedInt.random(w, rng), span)
    return r.add(two)[0]
