from datetime import datetime, timedelta

from subify.utils.date_utils import add_months, utcnow


def _create(client, **overrides):
    payload = {
        "customerEmail": "api@example.com",
        "requestedPlanId": "plan-standard",
        "durationMonths": 12,
        **overrides,
    }
    return client.post("/api/submissions", json=payload)


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_create_submission(client):
    response = _create(client, resellerId="reseller-002")

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "Pending"
    assert data["startDate"] is None
    assert data["endDate"] is None
    assert data["resellerName"] == "Reseller Two"
    assert "_id" not in data


def test_create_submission_validation_errors(client):
    response = _create(client, durationMonths=0)

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "durationMonths"


def test_create_submission_bad_email(client):
    response = _create(client, customerEmail="nope")

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "customerEmail"


def test_create_submission_unknown_plan(client):
    response = _create(client, requestedPlanId="plan-gone")

    assert response.status_code == 404


def test_approve_and_read_back(client):
    submission_id = _create(client).json()["id"]

    response = client.put(f"/api/submissions/{submission_id}/status", json={"status": "Successful"})

    assert response.status_code == 200
    data = response.json()
    start = datetime.fromisoformat(data["startDate"])
    assert datetime.fromisoformat(data["endDate"]) == add_months(start, 12)

    fetched = client.get(f"/api/submissions/{submission_id}").json()
    assert fetched["status"] == "Successful"
    assert fetched["endDate"] == data["endDate"]


def test_approve_with_duration_override(client):
    submission_id = _create(client).json()["id"]

    data = client.put(
        f"/api/submissions/{submission_id}/status",
        json={"status": "Successful", "durationMonths": 3},
    ).json()

    assert data["durationMonths"] == 3
    assert datetime.fromisoformat(data["endDate"]) == add_months(datetime.fromisoformat(data["startDate"]), 3)


def test_transition_unknown_submission(client):
    response = client.put("/api/submissions/nonexistent-id/status", json={"status": "Successful"})

    assert response.status_code == 404


def test_transition_invalid_status(client):
    submission_id = _create(client).json()["id"]

    response = client.put(f"/api/submissions/{submission_id}/status", json={"status": "Approved"})

    assert response.status_code == 422


def test_renew(client):
    submission_id = _create(client, durationMonths=1).json()["id"]

    data = client.post(f"/api/submissions/{submission_id}/renew", json={"extraMonths": 2}).json()

    assert data["status"] == "Successful"
    assert data["durationMonths"] == 2


def test_profile_name(client):
    submission_id = _create(client).json()["id"]

    named = client.put(f"/api/submissions/{submission_id}/profile-name", json={"profileName": " Seat 1 "})
    cleared = client.put(f"/api/submissions/{submission_id}/profile-name", json={"profileName": "   "})

    assert named.json()["profileName"] == "Seat 1"
    assert cleared.json()["profileName"] is None


def test_list_and_filter(client):
    first = _create(client, customerEmail="one@example.com").json()["id"]
    _create(client, customerEmail="two@example.com", resellerId="reseller-001")
    client.put(f"/api/submissions/{first}/status", json={"status": "Canceled"})

    assert len(client.get("/api/submissions").json()) == 2
    assert [s["id"] for s in client.get("/api/submissions", params={"status": "Canceled"}).json()] == [first]
    reseller_rows = client.get("/api/resellers/reseller-001/submissions").json()
    assert [s["customerEmail"] for s in reseller_rows] == ["two@example.com"]


def test_approved_submission_and_emails(client):
    response = client.post(
        "/api/submissions/approved",
        json={"resellerId": "reseller-001", "customerEmail": "direct@example.com", "durationMonths": 1},
    )

    assert response.status_code == 201
    assert response.json()["status"] == "Successful"
    assert client.get("/api/submissions/approved-emails").json() == ["direct@example.com"]


def test_expiry_and_notifications(client, db):
    created = client.post(
        "/api/submissions/approved",
        json={"resellerId": "reseller-001", "customerEmail": "soon@example.com", "durationMonths": 1},
    ).json()
    db.submissions.update_one({"id": created["id"]}, {"$set": {"endDate": utcnow() + timedelta(days=3)}})

    expiring = client.get("/api/expiry/expiring").json()
    assert [s["id"] for s in expiring] == [created["id"]]

    classification = client.get(f"/api/expiry/{created['id']}/classification").json()
    assert classification["state"] == "ExpiringSoon"

    summary = client.get("/api/expiry/summary").json()
    assert summary["expiringSoon"] == 1
    assert summary["windowDays"] == 7

    assert len(client.get("/api/notifications/expiring").json()) == 1
    read = client.post(f"/api/notifications/{created['id']}/read")
    assert read.json()["success"] is True
    assert client.get("/api/notifications/expiring").json() == []


def test_expired_listing(client, db):
    created = client.post(
        "/api/submissions/approved",
        json={"resellerId": "reseller-002", "customerEmail": "late@example.com"},
    ).json()
    db.submissions.update_one({"id": created["id"]}, {"$set": {"endDate": utcnow() - timedelta(hours=1)}})

    assert [s["id"] for s in client.get("/api/expiry/expired").json()] == [created["id"]]
    assert client.get("/api/expiry/expiring").json() == []


def test_mark_read_unknown(client):
    assert client.post("/api/notifications/sub-missing/read").status_code == 404


def test_plans_and_resellers(client):
    plans = client.get("/api/plans").json()
    assert {p["id"] for p in plans} == {"plan-basic", "plan-standard", "plan-premium", "plan-enterprise"}
    assert client.get("/api/plans/plan-enterprise").json()["durationMonths"] == 36
    assert client.get("/api/plans/plan-none").status_code == 404

    resellers = client.get("/api/resellers").json()
    assert {r["id"] for r in resellers} == {"reseller-001", "reseller-002"}
    assert all("password" not in r for r in resellers)
    assert client.get("/api/resellers/admin-001").status_code == 404


def test_create_submission_duration_above_limit(client):
    response = _create(client, durationMonths=120000)

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "durationMonths"
    assert client.get("/api/submissions").json() == []


def test_approve_stored_duration_out_of_range_is_422(client, db):
    submission_id = _create(client).json()["id"]
    db.submissions.update_one({"id": submission_id}, {"$set": {"durationMonths": 120000}})

    response = client.put(f"/api/submissions/{submission_id}/status", json={"status": "Successful"})

    assert response.status_code == 422
    assert client.get(f"/api/submissions/{submission_id}").json()["status"] == "Pending"


def test_duration_override_on_cancel_is_422(client):
    submission_id = _create(client).json()["id"]

    response = client.put(
        f"/api/submissions/{submission_id}/status",
        json={"status": "Canceled", "durationMonths": 3},
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "durationMonths"


def test_renew_above_limit_is_422(client):
    submission_id = _create(client).json()["id"]

    response = client.post(f"/api/submissions/{submission_id}/renew", json={"extraMonths": 1201})

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "extraMonths"


def test_reseller_administration(client):
    client.post(
        "/api/submissions/approved",
        json={"resellerId": "reseller-002", "customerEmail": "gone@example.com"},
    )

    banned = client.put("/api/resellers/reseller-002/ban", json={"banned": True})
    assert banned.status_code == 200
    assert banned.json()["banned"] is True

    updated = client.put("/api/resellers/reseller-002", json={"name": "Renamed", "phone": "0170"})
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["phone"] == "0170"

    taken = client.put("/api/resellers/reseller-002", json={"email": "reseller@example.com"})
    assert taken.status_code == 409

    deleted = client.delete("/api/resellers/reseller-002")
    assert deleted.json() == {"success": True, "resellerId": "reseller-002", "deletedSubmissions": 1}
    assert client.get("/api/resellers/reseller-002").status_code == 404
    assert client.get("/api/submissions/approved-emails").json() == []
    assert client.delete("/api/resellers/reseller-002").status_code == 404
