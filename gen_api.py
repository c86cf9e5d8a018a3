import time
from datetime import datetime
from flask import Blueprint, request, jsonify
from redis import Redis
from rq import Queue
from rq.job import Job
from rq.exceptions import InvalidJobOperation, NoSuchJobError

from primeforge import config, WIDE

gen_bp = Blueprint("gen_bp", __name__)

# Redis / RQ (connection is lazy; nothing talks to redis until a route runs)
redis_conn = Redis.from_url(config.REDIS_URL)
gen_q = Queue("primegen", connection=redis_conn, default_timeout=60*60*6)  # 6h

# ------------------ helpers ------------------
def _age_secs(dt: datetime | None) -> float | None:
    if not dt:
        return None
    return max(0.0, time.time() - dt.timestamp())

def _job_dict(job: Job) -> dict:
    d = {
        "job_id": job.id,
        "status": job.get_status(),
        "meta": job.meta or {},
        "enqueued_at": job.enqueued_at.isoformat() if job.enqueued_at else None,
        "started_at": job.started_at.isoformat() if job.started_at else None,
        "ended_at": job.ended_at.isoformat() if job.ended_at else None,
        "age_sec": _age_secs(job.enqueued_at),
    }
    if job.is_finished:
        d["result"] = job.return_value()
    if job.is_failed:
        d["exc_info"] = (job.exc_info or "")[-1024:]
    return d

# ------------------ API ------------------
@gen_bp.get("/api/gen/health")
def gen_health():
    ok, msg = True, "ok"
    try:
        redis_conn.ping()
    except Exception as e:
        ok, msg = False, f"redis error: {e.__class__.__name__}"
    return jsonify({"ok": ok, "msg": msg, "queue": {"name": gen_q.name}, "time": int(time.time())})

@gen_bp.post("/api/gen/submit")
def gen_submit():
    data = request.get_json(silent=True) or {}
    try:
        bits = int(data.get("bits", WIDE.bits))
        rounds = int(data.get("rounds", config.ROUNDS))
        max_attempts = int(data["max_attempts"]) if data.get("max_attempts") not in (None, "") else None
    except (TypeError, ValueError):
        return jsonify({"error": "bits, rounds and max_attempts must be integers"}), 400
    if not 2 <= bits <= WIDE.bits:
        return jsonify({"error": f"bits must be in [2, {WIDE.bits}]"}), 400
    if not 0 <= rounds <= 64:
        return jsonify({"error": "rounds must be in [0, 64]"}), 400
    if max_attempts is not None and max_attempts < 1:
        return jsonify({"error": "max_attempts must be >= 1"}), 400

    job = gen_q.enqueue("gen_worker.generate_job", bits, rounds, None, max_attempts,
                        meta={"bits": bits, "rounds": rounds, "submitted": time.time()})
    note = "Wide-mode generation runs in pure Python and can take several minutes." if bits > 64 else ""
    return jsonify({"job_id": job.id, "status": job.get_status(), "bits": bits, "note": note})

@gen_bp.get("/api/job/<job_id>")
def job_status(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    return jsonify(_job_dict(job))

@gen_bp.post("/api/job/<job_id>/abort")
def job_abort(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    try:
        if job.get_status() == "started":
            from rq.command import send_stop_job_command
            send_stop_job_command(redis_conn, job_id)
        else:
            job.cancel()
    except InvalidJobOperation as e:
        return jsonify({"error": f"abort failed: {e}", "job_id": job_id}), 400
    return jsonify({"ok": True, "job_id": job_id, "status": job.get_status()})
