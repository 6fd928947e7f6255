import json
from datetime import datetime, timezone

import pytest


def _submit(client, path, payload):
    resp = client.post(f"/api/{path}/submit", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_submit_then_get_pension(client, pension_payload):
    before = datetime.now(timezone.utc)
    resp = client.post("/api/pension/submit", json=pension_payload)
    after = datetime.now(timezone.utc)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Pension application submitted successfully"

    record = client.get(f"/api/pension/{body['id']}").json()
    assert record["id"] == body["id"]
    assert record["status"] == "pending"
    assert record["employeeId"] == "EMP001"
    assert record["basicPay"] == 45000
    assert record["dateOfBirth"] == "1960-05-15"
    assert record["bankDetails"]["ifscCode"] == "SBIN0001234"
    assert before <= datetime.fromisoformat(record["submittedAt"]) <= after


def test_submit_family_pension_and_contact_defaults(client, family_pension_payload, contact_payload):
    fam_id = _submit(client, "family-pension", family_pension_payload)
    contact_id = _submit(client, "contact", contact_payload)
    assert client.get(f"/api/family-pension/{fam_id}").json()["status"] == "pending"
    assert client.get(f"/api/contact/{contact_id}").json()["status"] == "unread"


def test_submit_validation_error_lists_every_field(client):
    resp = client.post("/api/contact/submit", json={"name": "", "email": "nope"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} == {"name", "email", "phone", "subject", "message"}


def test_submit_rejects_non_json_body(client):
    resp = client.post(
        "/api/contact/submit", content="not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400


def test_duplicate_employee_id_conflicts(client, pension_payload):
    _submit(client, "pension", pension_payload)
    resp = client.post("/api/pension/submit", json=pension_payload)
    assert resp.status_code == 409


@pytest.mark.parametrize("literal", ["Infinity", "NaN"])
def test_non_finite_basic_pay_is_not_stored(client, auth_headers, pension_payload, literal):
    pension_payload["basicPay"] = 0
    body = json.dumps(pension_payload).replace('"basicPay": 0', f'"basicPay": {literal}')
    resp = client.post(
        "/api/pension/submit", content=body, headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["basicPay"]

    assert client.get("/api/pension/all", headers=auth_headers).json() == []
    assert client.get("/api/admin/dashboard", headers=auth_headers).status_code == 200


@pytest.mark.parametrize("record_id", ["0" * 24, "not-an-object-id"])
def test_get_unknown_record(client, record_id):
    resp = client.get(f"/api/contact/{record_id}")
    assert resp.status_code == 404
    assert "message" in resp.json()


def test_status_update_requires_token(client, contact_payload):
    contact_id = _submit(client, "contact", contact_payload)
    resp = client.patch(f"/api/contact/{contact_id}/status", json={"status": "read"})
    assert resp.status_code == 401


def test_approving_pension_moves_dashboard_counts(client, auth_headers, pension_payload):
    app_id = _submit(client, "pension", pension_payload)
    before = client.get("/api/admin/dashboard", headers=auth_headers).json()["statistics"]["pension"]

    resp = client.patch(
        f"/api/pension/{app_id}/status", json={"status": "approved"}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json()["record"]["status"] == "approved"
    assert client.get(f"/api/pension/{app_id}").json()["status"] == "approved"

    after = client.get("/api/admin/dashboard", headers=auth_headers).json()["statistics"]["pension"]
    assert after["pending"] == before["pending"] - 1
    assert after["approved"] == before["approved"] + 1
    assert after["total"] == before["total"]


def test_invalid_status_leaves_record_unchanged(client, auth_headers, pension_payload):
    app_id = _submit(client, "pension", pension_payload)
    resp = client.patch(
        f"/api/pension/{app_id}/status", json={"status": "replied"}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert client.get(f"/api/pension/{app_id}").json()["status"] == "pending"


def test_status_update_unknown_record(client, auth_headers):
    resp = client.patch(
        f"/api/family-pension/{'0' * 24}/status", json={"status": "approved"}, headers=auth_headers
    )
    assert resp.status_code == 404


def test_status_update_keeps_notes(client, auth_headers, contact_payload):
    contact_id = _submit(client, "contact", contact_payload)
    resp = client.patch(
        f"/api/contact/{contact_id}/status",
        json={"status": "replied", "notes": "Replied by email"},
        headers=auth_headers,
    )
    record = resp.json()["record"]
    assert record["notes"] == "Replied by email"
    assert record["updatedAt"] is not None


def test_contact_filter_follows_status(client, auth_headers, contact_payload):
    contact_id = _submit(client, "contact", contact_payload)

    unread = client.get("/api/admin/applications/contact?status=unread", headers=auth_headers).json()
    assert contact_id in [m["id"] for m in unread]

    client.patch(f"/api/contact/{contact_id}/status", json={"status": "read"}, headers=auth_headers)

    unread = client.get("/api/admin/applications/contact?status=unread", headers=auth_headers).json()
    assert contact_id not in [m["id"] for m in unread]
    read = client.get("/api/admin/applications/contact?status=read", headers=auth_headers).json()
    assert contact_id in [m["id"] for m in read]


def test_contact_search(client, auth_headers, contact_payload):
    _submit(client, "contact", contact_payload)
    _submit(client, "contact", {**contact_payload, "name": "Meera Desai", "subject": "Documents"})
    found = client.get("/api/admin/applications/contact?search=meera", headers=auth_headers).json()
    assert [m["name"] for m in found] == ["Meera Desai"]


def test_admin_list_rejects_unknown_status(client, auth_headers):
    resp = client.get("/api/admin/applications/pension?status=unread", headers=auth_headers)
    assert resp.status_code == 400


def test_admin_lists_and_all_routes(client, auth_headers, pension_payload, family_pension_payload):
    _submit(client, "pension", pension_payload)
    _submit(client, "family-pension", family_pension_payload)
    assert len(client.get("/api/admin/applications/pension", headers=auth_headers).json()) == 1
    fams = client.get("/api/admin/applications/family-pension", headers=auth_headers).json()
    assert fams[0]["documentsSubmitted"][0]["documentType"] == "death_certificate"
    assert len(client.get("/api/pension/all", headers=auth_headers).json()) == 1
    assert client.get("/api/pension/all").status_code == 401


@pytest.mark.parametrize(
    "path",
    [
        "/api/admin/dashboard",
        "/api/admin/charts/status-distribution",
        "/api/admin/charts/applications-over-time",
        "/api/admin/applications/contact",
        "/api/admin/export",
    ],
)
def test_admin_routes_require_bearer(client, path):
    assert client.get(path).status_code == 401
    assert client.get(path, headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_dashboard_recent(client, auth_headers, contact_payload):
    for i in range(7):
        _submit(client, "contact", {**contact_payload, "name": f"Sender {i}"})
    data = client.get("/api/admin/dashboard", headers=auth_headers).json()
    assert data["statistics"]["contact"] == {"total": 7, "unread": 7, "read": 0, "replied": 0}
    assert len(data["recent"]["contact"]) == 5
    assert data["recent"]["pension"] == []


def test_status_distribution_chart(client, auth_headers, pension_payload):
    _submit(client, "pension", pension_payload)
    data = client.get("/api/admin/charts/status-distribution", headers=auth_headers).json()
    assert data["pension"] == {"pending": 1, "approved": 0, "rejected": 0}
    assert set(data) == {"pension", "familyPension", "contact"}


def test_applications_over_time_chart(client, auth_headers, pension_payload):
    _submit(client, "pension", pension_payload)
    data = client.get("/api/admin/charts/applications-over-time", headers=auth_headers).json()
    pension = data["pensionApplications"]
    assert len(pension) == 6
    assert len(data["familyPensionApplications"]) == 6
    now = datetime.now(timezone.utc)
    assert (pension[-1]["year"], pension[-1]["month"]) == (now.year, now.month)
    assert pension[-1]["count"] == 1
    assert sum(b["count"] for b in pension) == 1

    three = client.get(
        "/api/admin/charts/applications-over-time?months=3", headers=auth_headers
    ).json()
    assert len(three["pensionApplications"]) == 3
    bad = client.get("/api/admin/charts/applications-over-time?months=0", headers=auth_headers)
    assert bad.status_code == 400


def test_chart_months_follow_configured_timezone(client, auth_headers, monkeypatch):
    from apps.api.deps import get_settings
    from core.config import settings
    from services.reporting import aggregation

    zones = []
    real = aggregation.monthly_series

    def recording(store, kind, months=6, now=None, tz=None):
        zones.append(tz)
        return real(store, kind, months=months, now=now, tz=tz)

    monkeypatch.setattr(aggregation, "monthly_series", recording)
    client.app.dependency_overrides[get_settings] = lambda: settings.model_copy(
        update={"REPORT_TIMEZONE": "Asia/Kolkata"}
    )
    resp = client.get("/api/admin/charts/applications-over-time", headers=auth_headers)
    assert resp.status_code == 200
    assert zones == ["Asia/Kolkata", "Asia/Kolkata"]


def test_export_csv(client, auth_headers, pension_payload, contact_payload):
    _submit(client, "contact", contact_payload)
    _submit(client, "pension", pension_payload)
    resp = client.get("/api/admin/export", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=pension-data-" in resp.headers["content-disposition"]
    lines = resp.text.splitlines()
    assert lines[0] == "Application Type,Name,Employee ID,Status,Submitted Date"
    assert lines[1].startswith("Pension,Rajesh Kumar,EMP001,pending,")
    assert lines[2].startswith("Contact,Vikram Singh,N/A,unread,")


def test_export_xlsx(client, auth_headers, pension_payload):
    _submit(client, "pension", pension_payload)
    resp = client.get("/api/admin/export?format=xlsx", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.content[:2] == b"PK"
    assert resp.headers["content-disposition"].endswith(".xlsx")
