"""API tests for plans, the day-of evaluation and recommendations.

Recommendations expire at the end of their day and responding checks
against the wall clock, so these tests schedule everything for tomorrow.
"""

import datetime

_DAY = datetime.datetime.utcnow().date() + datetime.timedelta(days=1)


def _create_plan(client, headers) -> int:
    response = client.post("/api/v1/plans", json={
        "name": "Strength block", "start_date": (_DAY - datetime.timedelta(days=7)).isoformat(),
    }, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


def _add_workout(client, headers, plan_id: int, **overrides) -> dict:
    payload = {
        "suggested_date": _DAY.isoformat(),
        "name": "Back squat",
        "category": "strength",
        "primary_intensity": "heavy",
    }
    payload.update(overrides)
    response = client.post(f"/api/v1/plans/{plan_id}/workouts", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def _log_readiness(client, headers, subjective: int):
    response = client.post("/api/v1/readiness", json={
        "assessment_date": _DAY.isoformat(), "subjective_readiness": subjective,
    }, headers=headers)
    assert response.status_code == 201


def _day_of(client, headers, plan_id: int):
    as_of = datetime.datetime.combine(_DAY, datetime.time(7, 0)).isoformat()
    return client.get(f"/api/v1/plans/{plan_id}/day-of", params={"as_of": as_of}, headers=headers)


# ======================================================================
# Plans
# ======================================================================


class TestPlansApi:
    def test_create_and_list(self, client, auth_headers):
        plan_id = _create_plan(client, auth_headers)
        plans = client.get("/api/v1/plans", headers=auth_headers).json()
        assert [p["id"] for p in plans] == [plan_id]
        assert plans[0]["status"] == "active"

    def test_workouts_by_date(self, client, auth_headers):
        plan_id = _create_plan(client, auth_headers)
        _add_workout(client, auth_headers, plan_id)
        _add_workout(client, auth_headers, plan_id, name="Recovery ride", category="cardio",
                     suggested_date=(_DAY + datetime.timedelta(days=1)).isoformat())

        response = client.get(f"/api/v1/plans/{plan_id}/workouts", params={"date": _DAY.isoformat()},
                              headers=auth_headers)
        assert [w["name"] for w in response.json()] == ["Back squat"]

    def test_invalid_category(self, client, auth_headers):
        plan_id = _create_plan(client, auth_headers)
        response = client.post(f"/api/v1/plans/{plan_id}/workouts", json={
            "suggested_date": _DAY.isoformat(), "name": "Yoga", "category": "dance",
        }, headers=auth_headers)
        assert response.status_code == 422

    def test_unknown_plan(self, client, auth_headers):
        assert client.get("/api/v1/plans/999/workouts", headers=auth_headers).status_code == 404


# ======================================================================
# Day-of and recommendations
# ======================================================================


class TestDayOfFlow:
    def test_low_readiness_round_trip(self, client, auth_headers):
        plan_id = _create_plan(client, auth_headers)
        workout = _add_workout(client, auth_headers, plan_id)
        _log_readiness(client, auth_headers, subjective=3)

        first = _day_of(client, auth_headers, plan_id)
        assert first.status_code == 200
        body = first.json()
        assert body["result"]["has_recommendation"] is True
        assert body["result"]["recommended_intensity"] == "reduce"
        rec_id = body["recommendation_id"]

        again = _day_of(client, auth_headers, plan_id).json()
        assert again["recommendation_id"] == rec_id

        listing = client.get("/api/v1/recommendations", headers=auth_headers).json()
        assert listing["pending_count"] == 1
        assert listing["recommendations"][0]["target_workout_id"] == workout["id"]

        response = client.post(f"/api/v1/recommendations/{rec_id}/respond",
                               json={"action": "modify", "modified_changes": {"adjustment_factor": 5.0}},
                               headers=auth_headers)
        assert response.status_code == 422

        response = client.post(f"/api/v1/recommendations/{rec_id}/respond", json={"action": "accept"},
                               headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["applied"] is True
        assert response.json()["recommendation"]["status"] == "accepted"

        workouts = client.get(f"/api/v1/plans/{plan_id}/workouts", headers=auth_headers).json()
        assert workouts[0]["readiness_adjusted"] is True
        assert workouts[0]["adjustment_factor"] < 1.0

        response = client.post(f"/api/v1/recommendations/{rec_id}/respond", json={"action": "dismiss"},
                               headers=auth_headers)
        assert response.status_code == 400

    def test_good_readiness(self, client, auth_headers):
        plan_id = _create_plan(client, auth_headers)
        _add_workout(client, auth_headers, plan_id)
        _log_readiness(client, auth_headers, subjective=8)

        body = _day_of(client, auth_headers, plan_id).json()
        assert body["result"]["has_recommendation"] is False
        assert body["recommendation_id"] is None
        assert [w["name"] for w in body["result"]["workouts"]] == ["Back squat"]

    def test_with_recommendations_endpoint(self, client, auth_headers):
        plan_id = _create_plan(client, auth_headers)
        _add_workout(client, auth_headers, plan_id)

        response = client.post("/api/v1/readiness/with-recommendations", json={
            "assessment_date": _DAY.isoformat(), "subjective_readiness": 2,
        }, headers=auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["result"]["score"] == 20
        assert body["day_of"]["has_recommendation"] is True

        rec = client.get(f"/api/v1/recommendations/{body['recommendation_id']}", headers=auth_headers)
        assert rec.status_code == 200
        assert rec.json()["priority"] == 1

    def test_unknown_recommendation(self, client, auth_headers):
        assert client.get("/api/v1/recommendations/404", headers=auth_headers).status_code == 404

    def test_respond_validates_action(self, client, auth_headers):
        response = client.post("/api/v1/recommendations/1/respond", json={"action": "ignore"},
                               headers=auth_headers)
        assert response.status_code == 422
