import pytest

from prime_server import app
import gen_api
import gen_worker
from rq.exceptions import InvalidJobOperation

@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c

def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200 and r.get_json()["ok"] is True

def test_table_prime(client):
    j = client.post("/api/test", json={"n": "0x1f"}).get_json()
    assert j["is_probable_prime"] is True
    assert j["reason"] == "small-prime" and j["rounds"] == []

def test_composite_by_sieve(client):
    j = client.post("/api/test", json={"n": "0x1D7"}).get_json()
    assert j["is_probable_prime"] is False and j["small_prime"] == 7

def test_rounds_are_logged(client):
    j = client.post("/api/test", json={"n": "0x1fffffffffffffff", "rounds": 3, "seed": 9}).get_json()
    assert j["is_probable_prime"] is True and j["width"] == 64
    assert len(j["rounds"]) == 3 and all(r["passed"] for r in j["rounds"])

def test_wide_flag(client):
    j = client.post("/api/test", json={"n": "0x1f", "wide": True}).get_json()
    assert j["width"] == 1024

@pytest.mark.parametrize("body", [{"n": "zz"}, {"n": ""}, {"n": "0x1f", "rounds": "many"}, {"n": "0x1f", "rounds": 1000}])
def test_bad_test_requests(client, body):
    assert client.post("/api/test", json=body).status_code == 400

def test_generate(client):
    j = client.post("/api/generate", json={"bits": 30, "seed": 7}).get_json()
    assert j["status"] == "ok"
    assert int(j["prime"], 16).bit_length() == 30
    assert j["attempts"] >= 1

@pytest.mark.parametrize("bits", [1, 200, "x"])
def test_generate_rejects_bits(client, bits):
    assert client.post("/api/generate", json={"bits": bits}).status_code == 400

def test_worker_job_without_queue():
    res = gen_worker.generate_job(30, rounds=10, seed=11, progress_every=1)
    assert res["status"] == "ok"
    assert int(res["prime"], 16).bit_length() == 30

def test_worker_job_attempt_cap():
    res = gen_worker.generate_job(64, rounds=10, seed=12, max_attempts=0)
    assert res == {"status": "exhausted", "bits": 64, "max_attempts": 0}

@pytest.mark.parametrize("body", [{"bits": 5000}, {"bits": 1}, {"bits": "x"}, {"bits": 64, "rounds": -1}, {"bits": 64, "max_attempts": -3}, {"bits": 64, "max_attempts": 0}])
def test_queue_submit_validates_before_enqueue(client, body):
    assert client.post("/api/gen/submit", json=body).status_code == 400

def test_queue_health_reports_redis_state(client):
    r = client.get("/api/gen/health")
    assert r.status_code == 200
    assert "ok" in r.get_json() and r.get_json()["queue"]["name"] == "primegen"

class StuckJob:
    """Stands in for an rq Job whose cancel/stop is refused."""
    def __init__(self, status):
        self.status = status
    def get_status(self):
        return self.status
    def cancel(self):
        raise InvalidJobOperation("Cannot cancel already canceled job")

@pytest.mark.parametrize("status", ["canceled", "started"])
def test_abort_refused_by_queue_is_a_client_error(client, monkeypatch, status):
    def refuse(connection, job_id):
        raise InvalidJobOperation("Job is not currently executing")
    class FakeJob:
        @staticmethod
        def fetch(job_id, connection=None):
            return StuckJob(status)
    monkeypatch.setattr(gen_api, "Job", FakeJob)
    monkeypatch.setattr("rq.command.send_stop_job_command", refuse)
    r = client.post("/api/job/abc123/abort")
    assert r.status_code == 400
    assert "abort failed" in r.get_json()["error"]
