import time
from rq import get_current_job

from primeforge import default_rng, generate, width_for_bits
from primeforge.hexio import format_hex

def _report_progress(attempts: int, elapsed: float):
    job = get_current_job()
    if job is None:
        return
    job.meta["attempts"] = attempts
    job.meta["elapsed_s"] = round(elapsed, 3)
    job.meta["updated"] = time.time()
    job.save_meta()

def generate_job(bits, rounds=10, time_limit=None, max_attempts=None, seed=None, progress_every=None):
    """
    RQ job: search for a probable prime of `bits` bits.
    Returns: dict with status, prime (hex), attempts, elapsed_seconds, reseeds
    """
    bits = int(bits)
    res = generate(bits, int(rounds), time_limit,
                   width=width_for_bits(bits),
                   rng=default_rng(seed),
                   progress=_report_progress,
                   progress_every=progress_every,
                   max_attempts=max_attempts)
    if res is None:
        return {"status": "exhausted", "bits": bits, "max_attempts": max_attempts}
    return {
        "status": "ok",
        "bits": bits,
        "prime": format_hex(res.prime),
        "attempts": res.attempts,
        "elapsed_seconds": round(res.elapsed_seconds, 3),
        "reseeds": res.reseeds,
    }
