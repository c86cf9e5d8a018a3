# primeforge/miller_rabin.py
# Miller-Rabin probable-prime test on FixedInt
# - pure single-base witness test
# - k-round aggregation with fresh random bases, small-prime sieve first
# - `test` keeps a per-round log for display

from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import ROUNDS
from .fixed_width import FixedInt
from .modmath import mulmod, powmod, reduce
from .small_primes import divisible_by_any
from .candidates import default_rng, random_base_in_range

# ---------- Reports ----------

@dataclass(frozen=True)
class RoundLog:
    base: FixedInt
    passed: bool

@dataclass
class TestReport:
    __test__ = False    # not a pytest class

    n: FixedInt
    is_probable_prime: bool
    reason: str                      # below-two | small-prime | divisible | witness | passed
    small_prime: Optional[int] = None
    rounds: List[RoundLog] = field(default_factory=list)

    @property
    def per_round_log(self) -> List[Tuple[FixedInt, bool]]:
        return [(r.base, r.passed) for r in self.rounds]

# ---------- Witness ----------

def decompose(n_minus_1: FixedInt) -> Tuple[FixedInt, int]:
    """n-1 = d * 2^s with d odd."""
    d, s = n_minus_1, 0
    while d.is_even() and not d.is_zero():
        d = d.shr1()
        s += 1
    return d, s

def miller_rabin_witness(n: FixedInt, a: FixedInt) -> bool:
    """One strong round for base a. False means n is definitely composite."""
    if n.to_int() < 2:
        raise ValueError("witness test needs n >= 2")
    a = reduce(a, n)
    if a.is_zero():
        return True
    n_minus_1 = n.sub(FixedInt.one(n.width))
    d, s = decompose(n_minus_1)
    x = powmod(a, d, n)
    if x.is_one() or x == n_minus_1:
        return True
    for _ in range(s - 1):
        x = mulmod(x, x, n)
        if x == n_minus_1:
            return True
    return False

def run_witness_rounds(n: FixedInt, rounds: int, rng: random.Random,
                       log: Optional[List[RoundLog]] = None) -> bool:
    """`rounds` fresh random bases; stops at the first failing one."""
    for _ in range(rounds):
        a = random_base_in_range(n, rng)
        passed = miller_rabin_witness(n, a)
        if log is not None:
            log.append(RoundLog(a, passed))
        if not passed:
            return False
    return True

# ---------- Public API ----------

def test(n: FixedInt, rounds: int = ROUNDS, rng: Optional[random.Random] = None) -> TestReport:
    if rounds < 0:
        raise ValueError("rounds must be >= 0")
    if n.to_int() < 2:
        return TestReport(n, False, "below-two")
    hit = divisible_by_any(n)
    if hit is not None:
        if hit.equals:
            return TestReport(n, True, "small-prime", small_prime=hit.prime)
        return TestReport(n, False, "divisible", small_prime=hit.prime)
    if rng is None:
        rng = default_rng()
    log: List[RoundLog] = []
    ok = run_witness_rounds(n, rounds, rng, log)
    return TestReport(n, ok, "passed" if ok else "witness", rounds=log)

test.__test__ = False   # keep pytest from collecting it when imported into test modules

def is_probable_prime(n: FixedInt, k: int = ROUNDS, rng: Optional[random.Random] = None) -> bool:
    return test(n, k, rng).is_probable_prime
