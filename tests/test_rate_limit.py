from fastapi import FastAPI
from fastapi.testclient import TestClient

from jobsolution.config.errors import ErrorMessages
from jobsolution.middleware.rate_limit import RateLimitMiddleware, TokenBucket


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_bucket_refills_over_time():
    clock = FakeClock()
    bucket = TokenBucket(capacity=2, period=10, clock=clock)

    assert bucket.consume()
    assert bucket.consume()
    assert not bucket.consume()

    clock.now = 5
    assert bucket.consume()
    assert not bucket.consume()

    # refill never exceeds capacity
    clock.now = 1000
    assert bucket.consume()
    assert bucket.consume()
    assert not bucket.consume()


def test_middleware_returns_429_until_refilled():
    clock = FakeClock()
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, requests=2, period=60, clock=clock)

    @app.get("/ping")
    def ping():
        return {"ok": True}

    client = TestClient(app)
    assert client.get("/ping").status_code == 200
    assert client.get("/ping").status_code == 200

    resp = client.get("/ping")
    assert resp.status_code == 429
    assert resp.json()["detail"] == ErrorMessages.RATE_LIMIT_EXCEEDED

    clock.now = 30
    assert client.get("/ping").status_code == 200
