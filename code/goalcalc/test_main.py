import pytest
from fastapi.testclient import TestClient

from goalcalc.core import pipeline
from goalcalc.core.sample_payloads import SAMPLE_CONTRIBUTION_REQUEST, SAMPLE_TIME_REQUEST
from goalcalc.main import app


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_simulate_contribution(client):
    resp = client.post("/simulate", json=SAMPLE_CONTRIBUTION_REQUEST)
    assert resp.status_code == 200
    body = resp.json()
    assert body["period_in_months"] == 240
    assert body["outcome"] == "solved"
    assert body["annual_history"][-1]["year"] == 20
    assert body["history"][0] == {"month": 0, "total_accumulated": 0.0, "total_invested": 0.0, "total_interest": 0.0}


def test_simulate_goal_already_met(client):
    payload = dict(SAMPLE_TIME_REQUEST, initial_value=1_000_000, monthly_contribution=1000)
    resp = client.post("/simulate", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["period_in_months"] == 0
    assert body["outcome"] == "already_met"


def test_negative_values_are_rejected(client):
    payload = dict(SAMPLE_CONTRIBUTION_REQUEST, initial_value=-10)
    resp = client.post("/simulate", json=payload)
    assert resp.status_code == 422
    assert "detail" in resp.json()


def test_unknown_mode_is_rejected(client):
    payload = dict(SAMPLE_CONTRIBUTION_REQUEST, calculation_type="BOTH")
    resp = client.post("/simulate", json=payload)
    assert resp.status_code == 422


def test_oversized_horizon_is_rejected(client):
    payload = dict(SAMPLE_CONTRIBUTION_REQUEST, period=1e9)
    resp = client.post("/simulate", json=payload)
    assert resp.status_code == 422


def test_horizon_past_limit_returns_empty_series(client):
    payload = dict(SAMPLE_TIME_REQUEST, initial_value=0, monthly_contribution=0.0001, interest_rate=0)
    resp = client.post("/simulate", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["outcome"] == "unreachable"
    assert body["period_in_months"] == 0
    assert len(body["history"]) == 1


def test_commentary_endpoint_uses_fallback(client, monkeypatch):
    def failing_query(prompt):
        raise RuntimeError("offline")

    monkeypatch.setattr(pipeline, "query_llm", failing_query)
    resp = client.post("/commentary", json=SAMPLE_TIME_REQUEST)
    assert resp.status_code == 200
    assert resp.json() == {"summary": pipeline.FAILED_COMMENTARY, "source": "fallback"}
