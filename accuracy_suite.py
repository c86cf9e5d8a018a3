#!/usr/bin/env python3
# accuracy_suite.py: cross-check primeforge against sympy on random primes and composites
import csv, random, time, argparse
from concurrent.futures import ThreadPoolExecutor, as_completed
import numpy as np
from sympy import randprime, isprime

from primeforge import FixedInt, NARROW, WIDE, test, width_for_bits
from primeforge.hexio import format_hex

def rand_prime(bits):
    return int(randprime(1 << (bits - 1), 1 << bits))

def rand_semiprime(bits):
    # two factors of roughly half the bits each
    b1 = max(2, bits // 2)
    b2 = max(2, bits - b1)
    return rand_prime(b1) * rand_prime(b2)

def rand_small_factor_composite(bits):
    # a multiple of a table prime; must be caught by the sieve
    n = random.getrandbits(bits) | (1 << (bits - 1))
    return n - n % 7 + 7 if n % 7 else n

def run_case(n, expect, rounds, seed):
    width = width_for_bits(n.bit_length())
    t0 = time.perf_counter()
    rep = test(FixedInt.from_int(n, width), rounds, random.Random(seed))
    ms = (time.perf_counter() - t0) * 1000
    truth = isprime(n)
    return {
        "n": format_hex(n),
        "bits": n.bit_length(),
        "expect": expect,
        "got": rep.is_probable_prime,
        "reason": rep.reason,
        "rounds_used": len(rep.rounds),
        "ms": round(ms, 3),
        "ok": rep.is_probable_prime == truth,
    }

def build_jobs(bit_sizes, per_size):
    jobs = [(31, "prime"), (469, "composite"), (561, "composite"), (2**61 - 1, "prime")]
    for bits in bit_sizes:
        for _ in range(per_size):
            jobs.append((rand_prime(bits), "prime"))
            jobs.append((rand_semiprime(bits), "composite"))
            jobs.append((rand_small_factor_composite(bits), "composite"))
    return jobs

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--bits", type=int, nargs="+", default=[16, 30, 48, 64])
    ap.add_argument("--per-size", type=int, default=5)
    ap.add_argument("--rounds", type=int, default=10)
    ap.add_argument("--workers", type=int, default=4)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--out", default="accuracy_failures.csv")
    args = ap.parse_args()

    random.seed(args.seed)
    for b in args.bits:
        if not 2 < b <= WIDE.bits:
            ap.error(f"bit size {b} out of range")
    jobs = build_jobs(args.bits, args.per_size)

    results = []
    with ThreadPoolExecutor(max_workers=args.workers) as ex:
        futs = [ex.submit(run_case, n, tag, args.rounds, args.seed + i) for i, (n, tag) in enumerate(jobs)]
        for fut in as_completed(futs):
            results.append(fut.result())

    total = len(results)
    ok = sum(1 for r in results if r["ok"])
    print("\n=== SUMMARY ===")
    print(f"Total: {total} | PASS: {ok} | FAIL: {total-ok}")
    for bits in sorted({r["bits"] for r in results}):
        ms = np.array([r["ms"] for r in results if r["bits"] == bits])
        mode = "narrow" if bits <= NARROW.bits else "wide"
        print(f"  {bits:5d} bits ({mode})  n={ms.size:3d}  mean_ms={ms.mean():9.3f}  p95_ms={np.percentile(ms, 95):9.3f}")

    fails = [r for r in results if not r["ok"]]
    if fails:
        with open(args.out, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=list(fails[0].keys()))
            w.writeheader()
            w.writerows(fails)
        print(f"\nWrote details for {len(fails)} failures to {args.out}")
        return 1
    print("\nNo failures recorded.")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
