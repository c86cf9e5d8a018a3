from .fixed_width import FixedInt, Width, NARROW, WIDE, width_for_bits
from .modmath import mulmod, powmod, reduce
from .small_primes import SMALL_PRIMES, divisible_by_any
from .miller_rabin import TestReport, is_probable_prime, miller_rabin_witness, test
from .candidates import default_rng, random_base_in_range, random_odd_of_bit_length
from .search import GenerateResult, ReseedPolicy, generate
from .hexio import format_hex, parse_hex, save_prime
__all__ = [
    "FixedInt", "Width", "NARROW", "WIDE", "width_for_bits",
    "mulmod", "powmod", "reduce",
    "SMALL_PRIMES", "divisible_by_any",
    "TestReport", "is_probable_prime", "miller_rabin_witness", "test",
    "default_rng", "random_base_in_range", "random_odd_of_bit_length",
    "GenerateResult", "ReseedPolicy", "generate",
    "format_hex", "parse_hex", "save_prime",
]
