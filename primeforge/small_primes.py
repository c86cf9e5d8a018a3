# primeforge/small_primes.py
# Small-prime sieve: the first 46 primes, checked before any Miller-Rabin round.

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .fixed_width import FixedInt

SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29,
    31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113,
    127, 131, 137, 139, 149, 151, 157, 163, 167, 173,
    179, 181, 191, 193, 197, 199,
)

@dataclass(frozen=True)
class SieveHit:
    prime: int
    equals: bool    # n is the table prime itself, so n is prime

def divisible_by_any(n: FixedInt) -> Optional[SieveHit]:
    """First table prime dividing n, or None when n survives the sieve."""
    for p in SMALL_PRIMES:
        if n.mod_small(p) == 0:
            return SieveHit(prime=p, equals=n.to_int() == p)
    return None
