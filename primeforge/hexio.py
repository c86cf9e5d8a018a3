# primeforge/hexio.py
# Hex text <-> FixedInt, and writing a found prime to disk.

from __future__ import annotations
import sys
from typing import Optional, Union

from .fixed_width import FixedInt, Width, width_for_bits

def parse_hex(text: Union[str, bytes], width: Optional[Width] = None) -> FixedInt:
    """'0x1f', '1F', ' 0x3b0c_1abd ' -> FixedInt. Width defaults to the narrowest mode that fits."""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode()
    s = text.strip().replace("_", "")
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    if not s:
        raise ValueError("empty hex input")
    if s[0] in "+-":
        raise ValueError("hex input must be unsigned")
    try:
        v = int(s, 16)
    except ValueError:
        raise ValueError(f"not a hex number: {text!r}") from None
    if width is None:
        width = width_for_bits(v.bit_length())
    return FixedInt.from_int(v, width)

def format_hex(value: Union[FixedInt, int]) -> str:
    return f"0x{int(value):x}"

def save_prime(value: Union[FixedInt, int], path: str) -> bool:
    """Write '0x...' + newline. A failed write is a warning, never an exception."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(format_hex(value) + "\n")
    except OSError as e:
        print(f"warning: failed to write {path}: {e}", file=sys.stderr, flush=True)
        return False
    return True
