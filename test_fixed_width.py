import random
import pytest

from primeforge.fixed_width import FixedInt, Width, NARROW, WIDE, width_for_bits

def fx(v, w=NARROW):
    return FixedInt.from_int(v, w)

def test_words_are_least_significant_first():
    assert fx(0x1_0000_0002).words == (2, 1)
    assert FixedInt.from_words([2, 1], NARROW) == fx(0x1_0000_0002)
    assert len(FixedInt.zero(WIDE).words) == 32

def test_from_int_rejects_out_of_range():
    with pytest.raises(ValueError):
        fx(-1)
    with pytest.raises(ValueError):
        fx(1 << 64)
    with pytest.raises(ValueError):
        FixedInt.from_words([0, 0, 1], NARROW)
    with pytest.raises(ValueError):
        FixedInt.from_words([1 << 32], NARROW)

def test_predicates():
    assert FixedInt.zero(NARROW).is_zero()
    assert FixedInt.one(WIDE).is_one()
    assert fx(10).is_even() and not fx(11).is_even()
    assert fx(11).is_odd()

def test_compare_is_total():
    a, b = fx(0x1_0000_0000), fx(0xFFFF_FFFF)
    assert a.compare(b) == 1
    assert b.compare(a) == -1
    assert a.compare(a.copy()) == 0
    assert b < a and a >= b and a != b

def test_mixed_widths_are_rejected():
    with pytest.raises(ValueError):
        fx(1).add(fx(1, WIDE))
    assert fx(1) != fx(1, WIDE)

def test_add_reports_carry_and_wraps():
    top = fx((1 << 64) - 1)
    s, carry = top.add(FixedInt.one(NARROW))
    assert s.is_zero() and carry == 1
    s, carry = fx(40).add(fx(2))
    assert s == fx(42) and carry == 0

def test_sub_requires_ordering():
    assert fx(10).sub(fx(3)) == fx(7)
    with pytest.raises(ValueError):
        fx(3).sub(fx(10))

def test_shifts():
    assert fx(1 << 63).shl1().is_zero()          # top bit falls off
    assert fx(0x8000_0000).shl1().words == (0, 1)  # carries across limbs
    assert fx(0x1_0000_0000).shr1().words == (0x8000_0000, 0)
    assert fx(0b1011).mask_bits(2) == fx(0b11)
    assert fx(8).force_odd() == fx(9)

def test_mul_wide_keeps_full_product():
    m = (1 << 64) - 1
    p = fx(m).mul_wide(fx(m))
    assert p.width == NARROW.doubled()
    assert p.to_int() == m * m
    assert fx(m).mul_low(fx(m)).to_int() == (m * m) & m

def test_mul_wide_matches_int_on_wide_width():
    rng = random.Random(7)
    a, b = FixedInt.random(WIDE, rng), FixedInt.random(WIDE, rng)
    assert a.mul_wide(b).to_int() == a.to_int() * b.to_int()

def test_mod_small_horner():
    rng = random.Random(3)
    v = FixedInt.random(WIDE, rng)
    for p in (2, 3, 7, 197, 199, 65521):
        assert v.mod_small(p) == v.to_int() % p

def test_random_fill_is_reproducible():
    a = FixedInt.random(WIDE, random.Random(99))
    b = FixedInt.random(WIDE, random.Random(99))
    assert a == b
    assert all(0 <= w <= 0xFFFF_FFFF for w in a.words)

def test_width_for_bits():
    assert width_for_bits(30) is NARROW
    assert width_for_bits(64) is NARROW
    assert width_for_bits(65) is WIDE
    assert width_for_bits(1024) is WIDE
    with pytest.raises(ValueError):
        width_for_bits(1025)

def test_width_properties():
    assert NARROW.bits == 64 and WIDE.bits == 1024
    w = Width(4, mulmod="schoolbook")
    assert w.doubled() == Width(8, mulmod="schoolbook")
    with pytest.raises(ValueError):
        Width(0)
