#!/usr/bin/env python3
# gen_client.py: submit a prime-generation job to prime_server and poll until it finishes
import os, sys, time, json, random, requests

BASE_URL     = (os.getenv("PRIMEFORGE_URL", "http://127.0.0.1:8080") or "http://127.0.0.1:8080").rstrip("/")
BITS         = int(os.getenv("PRIMEFORGE_BITS", "1024"))
ROUNDS       = int(os.getenv("PRIMEFORGE_ROUNDS", "10"))
READ_TIMEOUT = float(os.getenv("READ_TIMEOUT", "30"))
MAX_TRIES    = int(os.getenv("MAX_TRIES", "4"))
POLL_S       = float(os.getenv("POLL_S", "2"))
TASK_BUDGET_S = float(os.getenv("TASK_BUDGET_S", "3600"))

def make_session() -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": "primeforge-client/1.0", "Accept": "application/json"})
    return s

def backoff_s(try_no: int) -> float:
    # small exponential backoff with jitter
    return min(15.0, (2 ** try_no) + random.uniform(0, 2))

def submit(session: requests.Session, bits: int, rounds: int) -> str | None:
    for t in range(1, MAX_TRIES + 1):
        try:
            r = session.post(f"{BASE_URL}/api/gen/submit", json={"bits": bits, "rounds": rounds},
                             timeout=READ_TIMEOUT)
            if r.ok:
                data = r.json()
                print("submitted", data.get("job_id"), data.get("note", ""), flush=True)
                return data.get("job_id")
            print("HTTP", r.status_code, (r.text or "")[:300], flush=True)
            if r.status_code < 500:
                return None
        except requests.RequestException as e:
            print("requests_error", f"try={t}", "err=" + repr(e), flush=True)
        time.sleep(backoff_s(t))
    return None

def poll(session: requests.Session, job_id: str, deadline: float) -> dict | None:
    while time.time() < deadline:
        try:
            r = session.get(f"{BASE_URL}/api/job/{job_id}", timeout=READ_TIMEOUT)
            j = r.json()
        except (requests.RequestException, ValueError) as e:
            print("poll_error", repr(e), flush=True)
            time.sleep(POLL_S)
            continue
        status = j.get("status")
        meta = j.get("meta") or {}
        print(f"[{status}] attempts={meta.get('attempts', 0)} elapsed_s={meta.get('elapsed_s', 0)}", flush=True)
        if status == "finished":
            return j.get("result")
        if status in ("failed", "canceled", "stopped"):
            return None
        time.sleep(POLL_S)
    print("stopping_before_timeout", flush=True)
    return None

def main() -> int:
    session = make_session()
    try:
        session.get(f"{BASE_URL}/api/health", timeout=5)
    except requests.RequestException as e:
        print("health_error", repr(e), flush=True)

    job_id = submit(session, BITS, ROUNDS)
    if not job_id:
        print("final_error", "submit failed", flush=True)
        return 2
    result = poll(session, job_id, time.time() + TASK_BUDGET_S)
    if not result:
        return 2
    print(json.dumps(result, indent=2))
    return 0 if result.get("status") == "ok" else 1

if __name__ == "__main__":
    sys.exit(main())
