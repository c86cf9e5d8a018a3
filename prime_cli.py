#!/usr/bin/env python3
# prime_cli.py: test hex numbers for primality, generate primes, or run the interactive menu
#
#   python prime_cli.py test 0x1f 0x1d7
#   python prime_cli.py gen --bits 30 --out prime.txt
#   python prime_cli.py gen --wide
#   python prime_cli.py            (menu)

import sys, json, argparse
from datetime import datetime
from typing import Optional

from primeforge import config
from primeforge import NARROW, WIDE, default_rng, generate, test
from primeforge.hexio import format_hex, parse_hex, save_prime

def now():
    return datetime.now().isoformat(timespec="seconds")

def log(event: str, **payload):
    """Append one line to PRIMEFORGE_LOG (when set) and echo it."""
    if not config.LOG_PATH:
        return
    line = f"{now()} {event} {json.dumps(payload, sort_keys=True)}"
    try:
        with open(config.LOG_PATH, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as e:
        print(f"warning: log write failed: {e}", file=sys.stderr, flush=True)
    print(line, flush=True)

def show_progress(attempts: int, elapsed: float):
    print(f"\rAttempts: {attempts}, Time: {elapsed:.1f} seconds", end="", flush=True)

# ---------- commands ----------

def run_test(text: str, rounds: int, wide: bool, rng) -> bool:
    try:
        n = parse_hex(text, WIDE if wide else None)
    except ValueError as e:
        print(f"# skip: {e}", file=sys.stderr)
        return False
    print(f"Testing input n = {format_hex(n)}")
    rep = test(n, rounds, rng)
    if rep.reason == "small-prime":
        print(f"Number equals small prime {rep.small_prime} -> prime")
    elif rep.reason == "divisible":
        print(f"Divisible by small prime {rep.small_prime} -> composite")
    elif rep.reason == "below-two":
        print("Numbers below 2 are not prime")
    for i, r in enumerate(rep.rounds, 1):
        print(f"  base {i:2d}: {format_hex(r.base)} -> {'probably prime' if r.passed else 'composite'}")
    print(f"Overall result: {'probably prime' if rep.is_probable_prime else 'composite'}")
    log("test", n=format_hex(n), result=rep.is_probable_prime, reason=rep.reason,
        rounds=len(rep.rounds))
    return rep.is_probable_prime

def run_gen(bits: int, rounds: int, wide: bool, out: Optional[str], time_limit: Optional[float],
            max_attempts: Optional[int], rng) -> int:
    width = WIDE if (wide or bits > NARROW.bits) else NARROW
    if out is None:
        out = config.WIDE_OUT if width is WIDE else config.NARROW_OUT
    print(f"Generating {bits}-bit prime ...", flush=True)
    log("gen_start", bits=bits, rounds=rounds, width=width.bits)
    try:
        res = generate(bits, rounds, time_limit, width=width, rng=rng,
                       progress=show_progress, max_attempts=max_attempts)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if res is None:
        print(f"\nNo prime found within {max_attempts} attempts.")
        log("gen_exhausted", bits=bits, max_attempts=max_attempts)
        return 1
    print(f"\nFound probable {bits}-bit prime after {res.attempts} attempts "
          f"in {res.elapsed_seconds:.1f} seconds")
    print(f"  p = {format_hex(res.prime)}")
    print(f"Bit length: {res.bits} bits")
    if save_prime(res.prime, out):
        print(f"Saved prime in hex to {out}")
    log("gen_done", bits=bits, prime=format_hex(res.prime), attempts=res.attempts,
        elapsed_s=round(res.elapsed_seconds, 3), reseeds=res.reseeds, saved=out)
    return 0

MENU = """
 -------------------------------------------------------------
| Select option:                                              |
|   1) Test a number (hex input) for primality                |
|   2) Generate a random 30-bit prime and save to {narrow:<12} |
|   3) Generate a random 1024-bit prime and save to {wide:<10} |
|   4) Exit                                                   |
 -------------------------------------------------------------"""

def menu(rng, rounds: int = config.ROUNDS) -> int:
    while True:
        print(MENU.format(narrow=config.NARROW_OUT, wide=config.WIDE_OUT))
        try:
            choice = input("Enter choice: ").strip()
        except EOFError:
            return 0
        if choice == "1":
            text = input("Enter number in hex (e.g. 0x1f,0x3b0c1abd): ")
            run_test(text, rounds, False, rng)
        elif choice == "2":
            run_gen(30, rounds, False, None, None, None, rng)
        elif choice == "3":
            run_gen(WIDE.bits, rounds, True, None, None, None, rng)
        elif choice == "4":
            return 0
        else:
            print("Invalid choice")

# ---------- entry ----------

def build_parser():
    ap = argparse.ArgumentParser(description="Miller-Rabin prime testing and generation")
    ap.add_argument("--seed", type=int, default=None, help="rng seed for reproducibility")
    sub = ap.add_subparsers(dest="cmd")

    t = sub.add_parser("test", help="test hex numbers for primality")
    t.add_argument("N", nargs="*", help="hex integers (0x prefix optional); stdin when omitted")
    t.add_argument("--rounds", type=int, default=config.ROUNDS)
    t.add_argument("--wide", action="store_true", help="parse into the 1024-bit width")

    g = sub.add_parser("gen", help="generate a probable prime and save it")
    g.add_argument("--bits", type=int, default=None, help="bit length (30, or 1024 with --wide)")
    g.add_argument("--rounds", type=int, default=config.ROUNDS)
    g.add_argument("--wide", action="store_true", help="1024-bit width (default bits become 1024)")
    g.add_argument("--out", default=None, help="output file")
    g.add_argument("--time-limit", type=float, default=None, help="seconds before reseeding")
    g.add_argument("--max-attempts", type=int, default=None, help="give up after this many candidates")

    sub.add_parser("menu", help="interactive menu")
    return ap

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    rng = default_rng(args.seed)

    if args.cmd == "test":
        items = args.N or [ln.strip() for ln in sys.stdin if ln.strip()]
        rc = 0
        for text in items:
            if not run_test(text, args.rounds, args.wide, rng):
                rc = 1
        return rc
    if args.cmd == "gen":
        bits = args.bits if args.bits is not None else (WIDE.bits if args.wide else 30)
        return run_gen(bits, args.rounds, args.wide, args.out, args.time_limit,
                       args.max_attempts, rng)
    return menu(rng)

if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        print("Exiting.")
        sys.exit()
