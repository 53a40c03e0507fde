"""API tests for training load, readiness and adaptation settings."""

import datetime

_DAY = datetime.date(2026, 10, 18)


def _log_load(client, headers, day: datetime.date, tss: float):
    return client.post("/api/v1/training-load", json={
        "log_date": day.isoformat(),
        "total_tss": tss,
        "total_duration_minutes": 60,
        "session_rpe_avg": 6,
    }, headers=headers)


# ======================================================================
# Training load
# ======================================================================


class TestTrainingLoadApi:
    def test_log_and_summarize(self, client, auth_headers):
        for offset, tss in enumerate([80, 0, 95, 60]):
            response = _log_load(client, auth_headers, _DAY - datetime.timedelta(days=offset), tss)
            assert response.status_code == 201

        response = client.get("/api/v1/training-load", params={"end": _DAY.isoformat(), "days": 14},
                              headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert len(body["history"]) == 4
        assert len(body["series"]) == 15
        summary = body["summary"]
        assert summary["weekly_tss"] == 235.0
        assert summary["current_tsb"] == summary["current_ctl"] - summary["current_atl"]
        assert summary["tsb_range"]["band"] in {"tired", "fatigued", "very_fatigued", "optimal"}

    def test_write_response(self, client, auth_headers):
        body = _log_load(client, auth_headers, _DAY, 70).json()
        assert body["atl"] == 17.5
        assert body["record"]["training_load"] == 360.0

    def test_validation(self, client, auth_headers):
        response = client.post("/api/v1/training-load", json={"log_date": _DAY.isoformat(), "total_tss": -5},
                               headers=auth_headers)
        assert response.status_code == 422

    def test_requires_auth(self, client):
        assert client.get("/api/v1/training-load").status_code == 401


# ======================================================================
# Readiness
# ======================================================================


class TestReadinessApi:
    def test_log_and_list(self, client, auth_headers):
        response = client.post("/api/v1/readiness", json={
            "assessment_date": _DAY.isoformat(), "subjective_readiness": 7, "hrv_reading": 64,
        }, headers=auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["result"]["score"] == 70
        assert body["result"]["factors"]["hrv"] is None
        assert body["baselines"] is None

        listing = client.get("/api/v1/readiness", headers=auth_headers).json()
        assert len(listing["assessments"]) == 1
        assert listing["baselines"]["avg_hrv"] == 64.0

        by_date = client.get("/api/v1/readiness", params={"date": _DAY.isoformat()}, headers=auth_headers).json()
        assert by_date["assessments"][0]["calculated_readiness_score"] == 70

    def test_baseline_before_any_assessment(self, client, auth_headers):
        response = client.get("/api/v1/readiness/baseline", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"baselines": None}

    def test_subjective_is_required(self, client, auth_headers):
        response = client.post("/api/v1/readiness", json={"assessment_date": _DAY.isoformat()},
                               headers=auth_headers)
        assert response.status_code == 422

    def test_subjective_range(self, client, auth_headers):
        response = client.post("/api/v1/readiness", json={"subjective_readiness": 11}, headers=auth_headers)
        assert response.status_code == 422


# ======================================================================
# Adaptation settings
# ======================================================================


class TestAdaptationApi:
    def test_defaults(self, client, auth_headers):
        body = client.get("/api/v1/adaptation/settings", headers=auth_headers).json()
        assert body["is_default"] is True
        assert body["day_of_readiness_threshold"] == 50

    def test_update(self, client, auth_headers):
        response = client.patch("/api/v1/adaptation/settings", json={"day_of_readiness_threshold": 65},
                                headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["day_of_readiness_threshold"] == 65
        assert client.get("/api/v1/adaptation/settings", headers=auth_headers).json()["is_default"] is False

    def test_out_of_range(self, client, auth_headers):
        response = client.patch("/api/v1/adaptation/settings", json={"weekly_review_day": 9},
                                headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "weekly_review_day must be 0-6 (Sunday-Saturday)"

    def test_empty(self, client, auth_headers):
        response = client.patch("/api/v1/adaptation/settings", json={}, headers=auth_headers)
        assert response.status_code == 400
