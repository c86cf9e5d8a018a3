# primeforge/fixed_width.py
# Fixed-width unsigned integers built from 32-bit limbs.
# - One type for every width; NARROW (64-bit) and WIDE (1024-bit) differ only in limb count
# - Values are immutable: every operation hands back a fresh FixedInt
# - Schoolbook multiply keeps the full double-width product

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, Tuple

# ---------- Widths ----------

@dataclass(frozen=True)
class Width:
    """Limb count + word size. `mulmod` names the modular-multiply strategy for this width."""
    limbs: int
    word_bits: int = 32
    mulmod: str = "peasant"

    def __post_init__(self):
        if self.limbs < 1 or self.word_bits < 1:
            raise ValueError("width needs at least one limb of at least one bit")

    @property
    def bits(self) -> int:
        return self.limbs * self.word_bits

    @property
    def word_mask(self) -> int:
        return (1 << self.word_bits) - 1

    @property
    def value_mask(self) -> int:
        return (1 << self.bits) - 1

    def doubled(self) -> Width:
        return Width(self.limbs * 2, self.word_bits, self.mulmod)

NARROW = Width(2, mulmod="peasant")       # 64-bit mode
WIDE = Width(32, mulmod="schoolbook")     # 1024-bit mode

def width_for_bits(bits: int) -> Width:
    """Narrowest built-in width holding `bits` bits."""
    if bits <= NARROW.bits:
        return NARROW
    if bits <= WIDE.bits:
        return WIDE
    raise ValueError(f"{bits} bits exceeds the widest mode ({WIDE.bits} bits)")

# ---------- FixedInt ----------

class FixedInt:
    __slots__ = ("width", "_v")

    def __init__(self, width: Width, value: int = 0):
        if value < 0:
            raise ValueError("FixedInt is unsigned")
        if value > width.value_mask:
            raise ValueError(f"value does not fit in {width.bits} bits")
        self.width = width
        self._v = value

    @classmethod
    def _make(cls, width: Width, value: int) -> FixedInt:
        # trusted constructor: value already in range
        obj = cls.__new__(cls)
        obj.width = width
        obj._v = value
        return obj

    # --- construction ---

    @classmethod
    def zero(cls, width: Width) -> FixedInt:
        return cls._make(width, 0)

    @classmethod
    def one(cls, width: Width) -> FixedInt:
        return cls._make(width, 1)

    @classmethod
    def from_int(cls, value: int, width: Width) -> FixedInt:
        return cls(width, int(value))

    @classmethod
    def from_words(cls, words: Iterable[int], width: Width) -> FixedInt:
        """Build from limbs, least-significant first. Missing high limbs are zero."""
        words = list(words)
        if len(words) > width.limbs:
            raise ValueError(f"{len(words)} words do not fit in {width.limbs} limbs")
        v = 0
        for i, w in enumerate(words):
            if w < 0 or w > width.word_mask:
                raise ValueError(f"word {i} out of range: {w}")
            v |= w << (i * width.word_bits)
        return cls._make(width, v)

    @classmethod
    def random(cls, width: Width, rng: random.Random) -> FixedInt:
        """Every limb drawn independently and uniformly from `rng`."""
        return cls.from_words((rng.getrandbits(width.word_bits) for _ in range(width.limbs)), width)

    # --- views ---

    @property
    def words(self) -> Tuple[int, ...]:
        wb, mask = self.width.word_bits, self.width.word_mask
        return tuple((self._v >> (i * wb)) & mask for i in range(self.width.limbs))

    def to_int(self) -> int:
        return self._v

    def __int__(self) -> int:
        return self._v

    def __index__(self) -> int:
        return self._v

    def bit_length(self) -> int:
        return self._v.bit_length()

    def test_bit(self, i: int) -> bool:
        return (self._v >> i) & 1 == 1

    def copy(self) -> FixedInt:
        return FixedInt._make(self.width, self._v)

    def widen(self, width: Width) -> FixedInt:
        if width.bits < self.width.bits:
            raise ValueError("widen() needs a width at least as large")
        return FixedInt._make(width, self._v)

    def narrow(self, width: Width) -> FixedInt:
        """Reinterpret in a smaller width; the value must already fit."""
        return FixedInt(width, self._v)

    # --- predicates ---

    def is_zero(self) -> bool:
        return self._v == 0

    def is_one(self) -> bool:
        return self._v == 1

    def is_even(self) -> bool:
        return self._v & 1 == 0

    def is_odd(self) -> bool:
        return self._v & 1 == 1

    # --- comparison ---

    def _same(self, other: FixedInt):
        if self.width != other.width:
            raise ValueError(f"width mismatch: {self.width.bits} vs {other.width.bits} bits")

    def compare(self, other: FixedInt) -> int:
        """1 if self > other, 0 if equal, -1 if less."""
        self._same(other)
        if self._v > other._v: return 1
        if self._v < other._v: return -1
        return 0

    def __eq__(self, other):
        if not isinstance(other, FixedInt):
            return NotImplemented
        return self.width == other.width and self._v == other._v

    def __hash__(self):
        return hash((self.width, self._v))

    def __lt__(self, other: FixedInt) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: FixedInt) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: FixedInt) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: FixedInt) -> bool:
        return self.compare(other) >= 0

    # --- arithmetic ---

    def add(self, other: FixedInt) -> Tuple[FixedInt, int]:
        """Returns (sum mod 2^W, carry-out bit)."""
        self._same(other)
        s = self._v + other._v
        return FixedInt._make(self.width, s & self.width.value_mask), s >> self.width.bits

    def sub(self, other: FixedInt) -> FixedInt:
        """self - other; requires self >= other."""
        self._same(other)
        if self._v < other._v:
            raise ValueError("subtract requires a >= b")
        return FixedInt._make(self.width, self._v - other._v)

    def shl1(self) -> FixedInt:
        return self.shl(1)

    def shl(self, k: int) -> FixedInt:
        """Left shift by k bits; bits pushed past the top are dropped."""
        return FixedInt._make(self.width, (self._v << k) & self.width.value_mask)

    def shr1(self) -> FixedInt:
        return FixedInt._make(self.width, self._v >> 1)

    def mask_bits(self, k: int) -> FixedInt:
        """Keep only the low k bits."""
        return FixedInt._make(self.width, self._v & ((1 << k) - 1))

    def force_odd(self) -> FixedInt:
        return FixedInt._make(self.width, self._v | 1)

    def mul_wide(self, other: FixedInt) -> FixedInt:
        """Schoolbook product over limbs; result has the doubled width so nothing is lost."""
        self._same(other)
        a, b = self.words, other.words
        wb, mask = self.width.word_bits, self.width.word_mask
        n = len(b)
        out = [0] * (len(a) + n)
        for i, ai in enumerate(a):
            if not ai:
                continue
            carry = 0
            for j, bj in enumerate(b):
                t = ai * bj + out[i + j] + carry
                out[i + j] = t & mask
                carry = t >> wb
            out[i + n] = carry
        return FixedInt.from_words(out, self.width.doubled())

    def mul_low(self, other: FixedInt) -> FixedInt:
        """Low W bits of the product. Not safe as input to a modular reduction."""
        return FixedInt._make(self.width, self.mul_wide(other)._v & self.width.value_mask)

    def mod_small(self, p: int) -> int:
        """Remainder by a single-word divisor, Horner-style from the top limb down."""
        if p <= 0:
            raise ValueError("divisor must be positive")
        wb = self.width.word_bits
        rem = 0
        for w in reversed(self.words):
            rem = ((rem << wb) | w) % p
        return rem

    def __repr__(self):
        return f"FixedInt({self.width.bits}, 0x{self._v:x})"
