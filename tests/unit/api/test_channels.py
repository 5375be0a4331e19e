"""
API tests for the channel and equilibrium endpoints.

Each test gets a fresh application (and therefore a fresh registry).
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.equilibrium.registry import ChannelRegistry
from app.main import create_app

MINUTE = 60 * 1000


# ======================================================================
# Helpers
# ======================================================================


class _OverlapRegistry(ChannelRegistry):
    """Registry that records how many apply_sample calls run at once."""

    def __init__(self, config) -> None:
        super().__init__(config)
        self.active = 0
        self.max_active = 0
        self.applied = 0
        self._counter = threading.Lock()

    def apply_sample(self, key, sample):
        with self._counter:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(0.005)
            return super().apply_sample(key, sample)
        finally:
            with self._counter:
                self.active -= 1
                self.applied += 1


def _post_raw(client: TestClient, url: str, body: str):
    """POST a literal body; the client refuses to encode NaN or Infinity itself."""
    return client.post(url, content=body, headers={"content-type": "application/json"})


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings(STRAIN_MIN_ACTIVATION_MS=0, STRAIN_MIN_DOMINANCE_MS=0)))


# ======================================================================
# Application shell
# ======================================================================


class TestShell:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"
        assert r.json()["channels"] == 0

    def test_root(self, client):
        assert client.get("/").json()["status"] == "healthy"


# ======================================================================
# Channels
# ======================================================================


class TestChannels:
    def test_unknown_channel_reads_initial_state(self, client):
        r = client.get("/api/v1/channels/anything")
        assert r.status_code == 200
        body = r.json()
        assert body["key"] == "anything"
        assert body["heat"] == 0.0
        assert body["state"]["strain"] == 0.0
        assert body["state"]["panel"] == "equilibrium"
        assert body["state"]["last_t"] is None

    def test_apply_samples(self, client):
        for m in range(3):
            r = client.post("/api/v1/channels/consistency_vs_adaptation/samples", json={"t": m * MINUTE, "x": -0.9})
            assert r.status_code == 200

        state = r.json()["state"]
        assert state["panel"] == "out_of_equilibrium"
        assert state["dominant"] == "B"
        assert state["target"] == "A"
        assert state["strain"] > 0
        assert 0.0 <= r.json()["heat"] <= 1.0

        assert client.get("/api/v1/channels").json() == ["consistency_vs_adaptation"]

    def test_out_of_range_x_is_clamped_not_rejected(self, client):
        r = client.post("/api/v1/channels/k/samples", json={"t": 0, "x": 7.5})
        assert r.status_code == 200
        assert r.json()["state"]["panel"] == "out_of_equilibrium"

    def test_malformed_sample_is_rejected(self, client):
        r = client.post("/api/v1/channels/k/samples", json={"t": "soon"})
        assert r.status_code == 422

    @pytest.mark.parametrize(
        "body",
        [
            '{"t": NaN, "x": 0.5}',
            '{"t": Infinity, "x": 0.5}',
            '{"t": 0, "x": NaN}',
            '{"t": 0, "x": -Infinity}',
        ],
    )
    def test_non_finite_sample_is_rejected(self, client, body):
        r = _post_raw(client, "/api/v1/channels/k/samples", body)
        assert r.status_code == 422
        assert "k" not in client.get("/api/v1/channels").json()

    def test_channel_stays_usable_after_non_finite_sample(self, client):
        client.post("/api/v1/channels/k/samples", json={"t": 0, "x": 0.5})
        assert _post_raw(client, "/api/v1/channels/k/samples", '{"t": NaN, "x": 0.5}').status_code == 422

        r = client.post("/api/v1/channels/k/samples", json={"t": MINUTE, "x": 0.5})
        state = r.json()["state"]
        assert state["outside_ms"] == MINUTE
        assert state["dominance_ms"] == MINUTE
        assert state["last_t"] == MINUTE
        assert state["strain"] > 0

    def test_non_finite_tick_is_rejected(self, client):
        r = _post_raw(client, "/api/v1/channels/tick", '{"t": 0, "tensions": {"a": NaN}}')
        assert r.status_code == 422
        assert client.get("/api/v1/channels").json() == []

    def test_concurrent_samples_on_one_channel_are_serialised(self):
        app = create_app(Settings(STRAIN_MIN_ACTIVATION_MS=0, STRAIN_MIN_DOMINANCE_MS=0))
        registry = _OverlapRegistry(app.state.registry.config)
        app.state.registry = registry
        client = TestClient(app)

        def post(m):
            return client.post("/api/v1/channels/k/samples", json={"t": m * MINUTE, "x": 0.9})

        with ThreadPoolExecutor(max_workers=8) as pool:
            responses = list(pool.map(post, range(24)))

        assert all(r.status_code == 200 for r in responses)
        assert registry.applied == 24
        assert registry.max_active == 1

    def test_tick(self, client):
        r = client.post("/api/v1/channels/tick", json={"t": 0, "tensions": {"a": 0.05, "b": -0.02}})
        assert r.status_code == 200
        body = r.json()
        assert body["panel"] == "equilibrium"
        assert body["verdict"] == "equilibrium"
        assert [c["key"] for c in body["channels"]] == ["a", "b"]

        r = client.post("/api/v1/channels/tick", json={"t": MINUTE, "tensions": {"a": 0.6, "b": -0.02}})
        body = r.json()
        assert body["panel"] == "out_of_equilibrium"
        assert body["verdict"] == "out_of_equilibrium"
        assert "out of equilibrium" in body["headline"]

        r = client.post("/api/v1/channels/tick", json={"t": 2 * MINUTE, "tensions": {"a": 0.3, "b": 0.0}})
        assert r.json()["panel"] == "returning_to_equilibrium"

    def test_apps_do_not_share_registries(self):
        first = TestClient(create_app(Settings()))
        second = TestClient(create_app(Settings()))
        first.post("/api/v1/channels/k/samples", json={"t": 0, "x": 0.5})
        assert first.get("/api/v1/channels").json() == ["k"]
        assert second.get("/api/v1/channels").json() == []


# ======================================================================
# Equilibrium
# ======================================================================


class TestEquilibrium:
    def test_dichotomies(self, client):
        body = client.get("/api/v1/equilibrium/dichotomies").json()
        assert len(body) == 5
        assert body[0]["key"] == "training_load_vs_readiness"
        assert body[0]["top_label"] == "Training Load"

    def test_classify(self, client):
        r = client.post("/api/v1/equilibrium/classify",
                        json={"tension_now": 0.5, "tension_prev": 0.9, "epsilon": 0.12, "delta": 0.03})
        assert r.status_code == 200
        assert r.json()["state"] == "returning"
        assert r.json()["is_out_of_equilibrium"] is True

    def test_classify_hold(self, client):
        r = client.post("/api/v1/equilibrium/classify",
                        json={"tension_now": 0.5, "tension_prev": 0.5, "epsilon": 0.12, "delta": 0.03,
                              "prev_state": "returning"})
        assert r.json()["state"] == "returning"

    def test_classify_rejects_negative_band(self, client):
        r = client.post("/api/v1/equilibrium/classify",
                        json={"tension_now": 0.5, "tension_prev": 0.5, "epsilon": -1, "delta": 0.03})
        assert r.status_code == 422

    def test_classify_rejects_non_finite_tension(self, client):
        r = _post_raw(client, "/api/v1/equilibrium/classify",
                      '{"tension_now": NaN, "tension_prev": 0.5, "epsilon": 0.12, "delta": 0.03}')
        assert r.status_code == 422
        assert r.json()["detail"][0]["loc"] == ["body", "tension_now"]
