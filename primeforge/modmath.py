# primeforge/modmath.py
# Modular arithmetic on FixedInt
# - addmod that never overflows the width
# - two mulmod strategies: peasant (double-and-add) and schoolbook + long-division remainder
# - square-and-multiply powmod, exponent bits low to high

from __future__ import annotations
from typing import Callable, Dict

from .fixed_width import FixedInt

# ---------- Reduction ----------

def reduce(a: FixedInt, n: FixedInt) -> FixedInt:
    """a mod n by binary long division, keeping only the remainder."""
    if n.is_zero():
        raise ValueError("modulus must be non-zero")
    if a < n:
        return a
    # line n's top bit up with a's, then walk back down one bit at a time
    shift = a.bit_length() - n.bit_length()
    m = n.shl(shift)
    rem = a
    while shift >= 0:
        if rem >= m:
            rem = rem.sub(m)
        m = m.shr1()
        shift -= 1
    return rem

def addmod(a: FixedInt, b: FixedInt, n: FixedInt) -> FixedInt:
    """(a + b) mod n for a, b < n, without ever leaving the width."""
    t = n.sub(b)
    if a >= t:
        return a.sub(t)
    return a.add(b)[0]

# ---------- Multiplication ----------

def mulmod_peasant(a: FixedInt, b: FixedInt, n: FixedInt) -> FixedInt:
    """Double-and-add over b's bits; intermediates stay below 2n."""
    acc = FixedInt.zero(n.width)
    a = reduce(a, n)
    while not b.is_zero():
        if b.is_odd():
            acc = addmod(acc, a, n)
        a = addmod(a, a, n)
        b = b.shr1()
    return acc

def mulmod_schoolbook(a: FixedInt, b: FixedInt, n: FixedInt) -> FixedInt:
    """Full 2W-bit product, reduced against the widened modulus, then narrowed."""
    prod = a.mul_wide(b)
    return reduce(prod, n.widen(prod.width)).narrow(n.width)

MULMOD_STRATEGIES: Dict[str, Callable[[FixedInt, FixedInt, FixedInt], FixedInt]] = {
    "peasant": mulmod_peasant,
    "schoolbook": mulmod_schoolbook,
}

def mulmod(a: FixedInt, b: FixedInt, n: FixedInt) -> FixedInt:
    try:
        fn = MULMOD_STRATEGIES[n.width.mulmod]
    except KeyError:
        raise ValueError(f"unknown mulmod strategy: {n.width.mulmod!r}") from None
    return fn(a, b, n)

# ---------- Exponentiation ----------

def powmod(base: FixedInt, exp: FixedInt, mod: FixedInt) -> FixedInt:
    if mod.is_zero():
        raise ValueError("modulus must be non-zero")
    if mod.is_one():
        return FixedInt.zero(mod.width)
    result = FixedInt.one(mod.width)
    b = reduce(base, mod)
    e = exp
    while not e.is_zero():
        if e.is_odd():
            result = mulmod(result, b, mod)
        e = e.shr1()
        if not e.is_zero():
            b = mulmod(b, b, mod)
    return result
