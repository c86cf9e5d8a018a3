import os, time
from flask import Flask, request, jsonify
from werkzeug.exceptions import BadRequest

from primeforge import config
from primeforge import WIDE, default_rng, generate, test, width_for_bits
from primeforge.hexio import format_hex, parse_hex
from gen_api import gen_bp

app = Flask(__name__)
app.register_blueprint(gen_bp)

def _payload() -> dict:
    data = request.get_json(force=True, silent=True)
    if data is None:
        data = request.form.to_dict() or request.args.to_dict()
    if not isinstance(data, dict):
        raise BadRequest("expected a JSON object")
    return data

def _int_field(data: dict, key: str, default, lo: int, hi: int):
    raw = data.get(key, default)
    if raw in (None, ""):
        return default
    try:
        v = int(raw)
    except (TypeError, ValueError):
        raise BadRequest(f"{key} must be an integer")
    if not lo <= v <= hi:
        raise BadRequest(f"{key} must be in [{lo}, {hi}]")
    return v

@app.get("/api/health")
def api_health():
    return jsonify(ok=True, rounds=config.ROUNDS, sync_max_bits=config.SYNC_MAX_BITS)

@app.post("/api/test")
def api_test():
    data = _payload()
    rounds = _int_field(data, "rounds", config.ROUNDS, 0, 64)
    seed = _int_field(data, "seed", None, 0, 2**63 - 1)
    wide = str(data.get("wide", "")).lower() in ("1", "true", "yes")
    try:
        n = parse_hex(str(data.get("n", "")), WIDE if wide else None)
    except ValueError as e:
        raise BadRequest(f"invalid n: {e}")
    t0 = time.perf_counter()
    rep = test(n, rounds, default_rng(seed))
    return jsonify({
        "n": format_hex(n),
        "width": n.width.bits,
        "is_probable_prime": rep.is_probable_prime,
        "reason": rep.reason,
        "small_prime": rep.small_prime,
        "rounds": [{"base": format_hex(b), "passed": ok} for b, ok in rep.per_round_log],
        "duration_ms": int((time.perf_counter() - t0) * 1000),
    })

@app.post("/api/generate")
def api_generate():
    data = _payload()
    bits = _int_field(data, "bits", 30, 2, config.SYNC_MAX_BITS)
    rounds = _int_field(data, "rounds", config.ROUNDS, 0, 64)
    time_limit = _int_field(data, "time_limit", None, 1, 3600)
    max_attempts = _int_field(data, "max_attempts", None, 1, 10_000_000)
    seed = _int_field(data, "seed", None, 0, 2**63 - 1)
    res = generate(bits, rounds, time_limit, width=width_for_bits(bits),
                   rng=default_rng(seed), max_attempts=max_attempts)
    if res is None:
        return jsonify({"status": "exhausted", "bits": bits, "max_attempts": max_attempts})
    return jsonify({
        "status": "ok",
        "bits": bits,
        "prime": format_hex(res.prime),
        "attempts": res.attempts,
        "elapsed_seconds": round(res.elapsed_seconds, 6),
        "reseeds": res.reseeds,
    })

if __name__ == "__main__":
    app.run(os.getenv("PRIMEFORGE_HOST", "127.0.0.1"), int(os.getenv("PRIMEFORGE_PORT", "8080")))
