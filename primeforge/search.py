# primeforge/search.py
# Prime search: generate -> sieve -> Miller-Rabin, with a wall-clock reseed policy.

from __future__ import annotations
import random, time
from dataclasses import dataclass
from typing import Callable, Optional

from . import config
from .fixed_width import FixedInt, Width, NARROW, width_for_bits
from .small_primes import divisible_by_any
from .miller_rabin import run_witness_rounds
from .candidates import default_rng, random_odd_of_bit_length

ProgressFn = Callable[[int, float], None]

@dataclass
class GenerateResult:
    prime: FixedInt
    attempts: int
    elapsed_seconds: float
    reseeds: int = 0
    width: Optional[Width] = None

    def __post_init__(self):
        if self.width is None:
            self.width = self.prime.width

    @property
    def bits(self) -> int:
        return self.prime.bit_length()

class ReseedPolicy:
    """Reseeds the RNG each time `limit_s` passes without a prime, then restarts the window."""

    def __init__(self, limit_s: float, clock: Callable[[], float] = time.monotonic):
        self.limit_s = limit_s
        self.clock = clock
        self.reseeds = 0
        self.window_start = clock()

    def due(self) -> bool:
        return self.clock() - self.window_start > self.limit_s

    def reseed(self, rng: random.Random, attempts: int):
        rng.seed(time.time_ns() ^ (attempts * 0x9E3779B97F4A7C15))
        self.reseeds += 1
        self.window_start = self.clock()

def _is_narrow(width: Width) -> bool:
    return width.bits <= NARROW.bits

def generate(bits: int,
             rounds: int = config.ROUNDS,
             time_limit_seconds: Optional[float] = None,
             *,
             width: Optional[Width] = None,
             rng: Optional[random.Random] = None,
             progress: Optional[ProgressFn] = None,
             progress_every: Optional[int] = None,
             max_attempts: Optional[int] = None,
             clock: Callable[[], float] = time.monotonic) -> Optional[GenerateResult]:
    """
    Search for a probable prime of exactly `bits` bits.
    Unbounded unless `max_attempts` (or PRIMEFORGE_MAX_ATTEMPTS) is set; returns None when the cap is hit.
    """
    if rounds < 0:
        raise ValueError("rounds must be >= 0")
    if width is None:
        width = width_for_bits(bits)
    narrow = _is_narrow(width)
    if time_limit_seconds is None:
        time_limit_seconds = config.NARROW_TIME_LIMIT_S if narrow else config.WIDE_TIME_LIMIT_S
    if progress_every is None:
        progress_every = 0 if narrow else config.WIDE_PROGRESS_EVERY
    if max_attempts is None:
        max_attempts = config.MAX_ATTEMPTS or None
    if rng is None:
        rng = default_rng()

    t0 = clock()
    policy = ReseedPolicy(time_limit_seconds, clock)
    attempts = 0
    while True:
        if max_attempts is not None and attempts >= max_attempts:
            return None
        if policy.due():
            policy.reseed(rng, attempts)
        attempts += 1
        if progress is not None and progress_every and attempts % progress_every == 0:
            progress(attempts, clock() - t0)

        candidate = random_odd_of_bit_length(bits, width, rng)
        hit = divisible_by_any(candidate)
        if hit is not None and not hit.equals:
            continue
        if hit is not None or run_witness_rounds(candidate, rounds, rng):
            return GenerateResult(candidate, attempts, clock() - t0, policy.reseeds, width)
