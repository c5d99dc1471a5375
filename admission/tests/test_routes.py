"""
End-to-end tests for the admission API over the seeded sample store.
"""


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# =============================================================================
# PREDICTIONS
# =============================================================================

def test_probability_against_latest_cutoff(client):
    response = client.get("/api/predictions/probability",
                          params={"mark": 186, "college_id": 1, "course_id": 1, "community": "OC"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["probability"] == 50
    assert body["data"]["year"] == 2024


def test_probability_without_category_band(client):
    response = client.get("/api/predictions/probability",
                          params={"mark": 186, "college_id": 1, "course_id": 1, "community": "ST"})

    data = response.json()["data"]
    assert data["probability"] == 0
    assert data["message"]


def test_probability_without_cutoffs(client):
    response = client.get("/api/predictions/probability",
                          params={"mark": 186, "college_id": 1, "course_id": 2})

    data = response.json()["data"]
    assert data["probability"] == 0
    assert data["message"] == "No cutoff data available"


def test_out_of_range_mark_is_client_error(client):
    response = client.get("/api/predictions/probability",
                          params={"mark": 250, "college_id": 1, "course_id": 1})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_input"


def test_unknown_community_is_client_error(client):
    response = client.get("/api/predictions/cutoff",
                          params={"college_id": 1, "course_id": 1, "community": "GEN"})
    assert response.status_code == 400


def test_cutoff_prediction(client):
    response = client.get("/api/predictions/cutoff", params={"college_id": 1, "course_id": 1})

    data = response.json()["data"]
    assert data["predicted"] == 198
    assert data["year"] == 2025
    assert data["trend"] == "increasing"
    assert data["confidence"] == 68
    assert [p["actual"] for p in data["historical"]] == [180, 183, 185, 189, 191]


def test_cutoff_prediction_with_one_point(client):
    response = client.get("/api/predictions/cutoff", params={"college_id": 3, "course_id": 3})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["predicted"] is None
    assert data["points"] == 1
    assert data["message"] == "Insufficient historical data for prediction"


def test_recommendations(client):
    response = client.post("/api/predictions/recommendations", json={
        "mark": 182,
        "community": "OC",
        "preferences": {"district": "Chennai"},
    })

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    assert body["year"] == 2024
    assert [r["course"]["id"] for r in body["data"]] == [4, 1, 2]
    assert [r["match_score"] for r in body["data"]] == [30, 30, 10]
    assert [r["admission_probability"] for r in body["data"]] == [33, 10, 54]


def test_recommendations_reject_unknown_college_type(client):
    response = client.post("/api/predictions/recommendations", json={
        "mark": 182,
        "community": "OC",
        "preferences": {"college_type": "Deemed"},
    })
    assert response.status_code == 400


def test_recommendations_for_year_without_data(client):
    response = client.post("/api/predictions/recommendations", json={
        "mark": 182,
        "community": "OC",
        "preferences": {"year": 2019},
    })

    body = response.json()
    assert body["data"] == []
    assert body["count"] == 0


# =============================================================================
# CUTOFFS
# =============================================================================

def test_cutoff_trends(client):
    response = client.get("/api/cutoffs/trends", params={"college_id": 1, "course_id": 1})

    data = response.json()["data"]
    assert [p["year"] for p in data] == [2020, 2021, 2022, 2023, 2024]
    assert data[-1]["closing"] == 191


def test_within_range(client):
    response = client.get("/api/cutoffs/within-range", params={"mark": 182})

    body = response.json()
    assert body["count"] == 4
    assert body["year"] == 2024
    assert body["data"][0]["cutoffs"]["OC"]["closing"] == 191
    # 118 of 120 seats filled from 2400 applications
    assert body["data"][0]["seat_metrics"] == {
        "filling_percentage": 98,
        "vacancy_percentage": 2,
        "competition_ratio": 20,
    }


# =============================================================================
# COMPARISON
# =============================================================================

def test_compare_requires_two_ids(client):
    response = client.post("/api/comparison/colleges", json={"college_ids": [1]})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "too_few_ids"


def test_compare_rejects_duplicates(client):
    response = client.post("/api/comparison/colleges", json={"college_ids": [1, 1]})
    assert response.json()["detail"]["code"] == "duplicate_ids"


def test_compare_colleges(client):
    response = client.post("/api/comparison/colleges", json={"college_ids": [2, 1]})

    assert response.status_code == 200
    psg, ceg = response.json()["data"]
    assert psg["college"]["id"] == 2
    assert ceg["latest_cutoff_year"] == 2024
    assert [c["id"] for c in ceg["courses"]] == [1, 4]
    assert [m["category"] for m in ceg["category_metrics"]] == ["OC", "BC"]
    assert ceg["placement_statistics"]["average_placement_percentage"] == 90.0


def test_compare_unknown_or_inactive_college(client):
    assert client.post("/api/comparison/colleges", json={"college_ids": [1, 99]}).status_code == 404

    response = client.post("/api/comparison/colleges", json={"college_ids": [1, 4]})
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "college_not_found"


def test_compare_courses(client):
    response = client.post("/api/comparison/courses", json={"course_ids": [1, 2]})

    data = response.json()["data"]
    assert [b["course"]["id"] for b in data] == [1, 2]
    assert data[1]["college"]["name"] == "PSG College of Technology"


def test_comparison_suggestions(client):
    response = client.get("/api/comparison/suggestions/1")
    assert [c["id"] for c in response.json()["data"]] == [2, 3]

    assert client.get("/api/comparison/suggestions/99").status_code == 404


# =============================================================================
# PLACEMENTS
# =============================================================================

def test_placement_statistics(client):
    data = client.get("/api/placements/statistics").json()["data"]

    assert data["total_colleges"] == 2
    assert data["total_courses"] == 3
    assert data["total_companies"] == 410


def test_placement_statistics_filtered(client):
    data = client.get("/api/placements/statistics",
                      params={"district": "Chennai", "college_type": "government"}).json()["data"]

    assert data["total_colleges"] == 1
    assert data["total_students"] == 285
