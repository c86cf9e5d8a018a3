import random
import gmpy2
import pytest

from primeforge.fixed_width import FixedInt, Width, NARROW, WIDE
from primeforge.modmath import (
    addmod, mulmod, mulmod_peasant, mulmod_schoolbook, powmod, reduce,
)

W128 = Width(4, mulmod="schoolbook")
P64 = (1 << 64) - 59          # largest 64-bit prime
M127 = (1 << 127) - 1

def fx(v, w=NARROW):
    return FixedInt.from_int(v, w)

def test_reduce_matches_int_mod():
    rng = random.Random(1)
    for _ in range(50):
        a = rng.getrandbits(64)
        n = rng.getrandbits(rng.randrange(1, 65)) or 1
        assert reduce(fx(a), fx(n)).to_int() == a % n

def test_reduce_zero_modulus():
    with pytest.raises(ValueError):
        reduce(fx(5), fx(0))

def test_addmod_near_top_of_width():
    a, b = P64 - 1, P64 - 2
    assert addmod(fx(a), fx(b), fx(P64)).to_int() == (a + b) % P64

def test_peasant_mulmod_does_not_overflow():
    rng = random.Random(2)
    for _ in range(20):
        a, b = rng.randrange(P64), rng.randrange(P64)
        assert mulmod_peasant(fx(a), fx(b), fx(P64)).to_int() == a * b % P64

def test_schoolbook_reduces_the_full_product():
    # operands whose product needs every bit of the double width
    rng = random.Random(3)
    n = rng.getrandbits(128) | (1 << 127) | 1
    a, b = n - 1, n - 2
    got = mulmod_schoolbook(fx(a, W128), fx(b, W128), fx(n, W128))
    assert got.to_int() == a * b % n
    assert got.width == W128

def test_strategies_agree():
    rng = random.Random(4)
    w = Width(2, mulmod="schoolbook")
    for _ in range(20):
        n = rng.getrandbits(64) | 1
        a, b = rng.randrange(n), rng.randrange(n)
        assert mulmod(fx(a), fx(b), fx(n)) == mulmod(fx(a, w), fx(b, w), fx(n, w)).narrow(NARROW)

def test_unknown_strategy():
    w = Width(2, mulmod="karatsuba")
    with pytest.raises(ValueError):
        mulmod(fx(2, w), fx(3, w), fx(5, w))

@pytest.mark.parametrize("n", [2, 3, 97, P64, (1 << 64) - 1])
def test_powmod_zero_exponent_is_one(n):
    assert powmod(fx(12345), fx(0), fx(n)).is_one()

def test_powmod_mod_one_is_zero():
    assert powmod(fx(12345), fx(678), fx(1)).is_zero()
    assert powmod(fx(0), fx(0), fx(1)).is_zero()

def test_powmod_narrow_matches_gmpy2():
    rng = random.Random(5)
    for _ in range(10):
        n = rng.getrandbits(64) | 1
        a, e = rng.getrandbits(64), rng.getrandbits(64)
        assert powmod(fx(a), fx(e), fx(n)).to_int() == int(gmpy2.powmod(a, e, n))

def test_powmod_128_matches_gmpy2():
    rng = random.Random(6)
    for _ in range(5):
        n = rng.getrandbits(128) | 1
        a, e = rng.getrandbits(128), rng.getrandbits(128)
        assert powmod(fx(a, W128), fx(e, W128), fx(n, W128)).to_int() == int(gmpy2.powmod(a, e, n))

def test_powmod_fermat_on_mersenne_in_wide_mode():
    base = fx(3, WIDE)
    assert powmod(base, fx(M127 - 1, WIDE), fx(M127, WIDE)).is_one()

def test_powmod_wide_full_width_operands():
    rng = random.Random(8)
    n = FixedInt.random(WIDE, rng).force_odd()
    a = FixedInt.random(WIDE, rng)
    got = powmod(a, fx(3, WIDE), n)
    assert got.to_int() == pow(a.to_int(), 3, n.to_int())

def test_inputs_are_not_mutated():
    a, b, n = fx(10 ** 15), fx(10 ** 14), fx(P64)
    before = (a.to_int(), b.to_int(), n.to_int())
    mulmod(a, b, n)
    powmod(a, b, n)
    assert (a.to_int(), b.to_int(), n.to_int()) == before
