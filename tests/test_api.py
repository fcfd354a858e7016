import uuid

import pytest

COMPLAINT = {
    "bldg_name": "Tower A",
    "flat_no": "101",
    "mobile_no": "555-0101",
    "preferred_time": "10:00 - 11:00",
    "category": "plumbing",
    "description": "leak",
}


def job_payload(complaint_id, outcome, **overrides):
    payload = {
        "complaint_id": complaint_id,
        "date_attended": "2024-07-22",
        "time_attended": "14:30",
        "staff_attended": ["Staff A"],
        "job_card_no": "JC001",
        "materials_used": [{"code": "P001", "qty": 1}],
        "outcome": outcome,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def tenant_headers(client):
    response = client.post(
        "/auth/tenants/signup",
        json={"mobile_no": "555-0101", "building_name": "Tower A", "room_no": "101", "password": "secret123"},
    )
    assert response.status_code == 201, response.text
    response = client.post("/auth/tenants/login", json={"mobile_no": "555-0101", "password": "secret123"})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_root(client):
    assert client.get("/").json() == {"message": "Tenant Maintenance Tracker API running"}


class TestAuth:

    def test_signup_does_not_expose_password(self, client):
        response = client.post(
            "/auth/tenants/signup",
            json={"mobile_no": "555-0300", "building_name": "Tower C", "room_no": "3", "password": "secret123"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["building_name"] == "Tower C"
        assert "password" not in body and "password_hash" not in body

    def test_duplicate_mobile_conflicts(self, client, tenant_headers):
        response = client.post(
            "/auth/tenants/signup",
            json={"mobile_no": "555-0101", "building_name": "Tower B", "room_no": "9", "password": "another1"},
        )
        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_wrong_password_is_rejected(self, client, tenant_headers):
        response = client.post("/auth/tenants/login", json={"mobile_no": "555-0101", "password": "wrong-one"})
        assert response.status_code == 401

    def test_unknown_building_is_rejected(self, client):
        response = client.post(
            "/auth/tenants/signup",
            json={"mobile_no": "555-0400", "building_name": "Tower Z", "room_no": "1", "password": "secret123"},
        )
        assert response.status_code == 422

    def test_short_password_is_rejected(self, client):
        response = client.post(
            "/auth/tenants/signup",
            json={"mobile_no": "555-0500", "building_name": "Tower A", "room_no": "5", "password": "abc"},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_FAILED"

    def test_staff_login_reports_role(self, client, supervisor_headers):
        me = client.get("/auth/me", headers=supervisor_headers).json()
        assert me["role"] == "supervisor"
        assert me["tenant_id"] is None

    def test_bad_staff_credentials(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "123"})
        assert response.status_code == 401

    def test_requests_without_token_are_rejected(self, client):
        assert client.get("/complaints/").status_code == 401

    def test_garbage_token_is_rejected(self, client):
        response = client.get("/complaints/", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestComplaintWorkflow:

    def test_tenant_not_available_opens_follow_up(self, client, tenant_headers, admin_headers):
        created = client.post("/complaints/", json=COMPLAINT, headers=tenant_headers)
        assert created.status_code == 201, created.text
        complaint = created.json()
        assert complaint["status"] == "Pending"
        assert complaint["duplicate_generated"] is False
        assert complaint["tenant_id"] is not None

        response = client.post(
            "/admin/jobs",
            json=job_payload(complaint["id"], "Tenant Not Available", reason="no one home"),
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        job = response.json()
        assert job["reason_not_completed"] == "no one home"
        assert job["materials_used"] == [{"code": "P001", "name": "PVC Pipe 1/2 inch", "qty": 1.0}]

        original = client.get(f"/complaints/{complaint['id']}", headers=admin_headers).json()
        assert original["status"] == "Tenant Not Available"
        assert original["duplicate_generated"] is True
        assert [j["id"] for j in original["jobs"]] == [job["id"]]

        mine = client.get("/complaints/", headers=tenant_headers).json()
        assert len(mine) == 2
        [follow_up] = [c for c in mine if c["id"] != complaint["id"]]
        assert follow_up["status"] == "Pending"
        assert follow_up["tenant_id"] == complaint["tenant_id"]
        assert complaint["id"] in follow_up["description"]
        assert "no one home" in follow_up["description"]

    def test_completed_job_then_supervisor_approval(self, client, admin_headers, supervisor_headers):
        complaint = client.post("/complaints/", json=COMPLAINT, headers=admin_headers).json()
        job = client.post(
            "/admin/jobs",
            json=job_payload(complaint["id"], "Completed", time_completed="15:30"),
            headers=admin_headers,
        ).json()

        response = client.patch(f"/supervisor/jobs/{job['id']}/approve", headers=supervisor_headers)
        assert response.status_code == 200
        assert response.json()["approved"] is True

        again = client.patch(f"/supervisor/jobs/{job['id']}/approve", headers=supervisor_headers)
        assert again.status_code == 200

        listed = client.get("/complaints/", headers=admin_headers).json()
        assert len(listed) == 1
        assert listed[0]["status"] == "Completed"
        assert listed[0]["jobs"][0]["approved"] is True

    def test_pending_is_not_a_valid_outcome(self, client, admin_headers):
        complaint = client.post("/complaints/", json=COMPLAINT, headers=admin_headers).json()

        response = client.post("/admin/jobs", json=job_payload(complaint["id"], "Pending"), headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_FAILED"

    def test_job_for_missing_complaint(self, client, admin_headers):
        response = client.post("/admin/jobs", json=job_payload(str(uuid.uuid4()), "Completed"), headers=admin_headers)
        assert response.status_code == 404

    def test_approving_missing_job(self, client, supervisor_headers):
        response = client.patch(f"/supervisor/jobs/{uuid.uuid4()}/approve", headers=supervisor_headers)
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_missing_complaint_is_404(self, client, admin_headers):
        assert client.get(f"/complaints/{uuid.uuid4()}", headers=admin_headers).status_code == 404


class TestRoles:

    def test_tenant_cannot_submit_jobs(self, client, tenant_headers):
        complaint = client.post("/complaints/", json=COMPLAINT, headers=tenant_headers).json()
        response = client.post("/admin/jobs", json=job_payload(complaint["id"], "Completed"), headers=tenant_headers)
        assert response.status_code == 403

    def test_admin_cannot_approve(self, client, admin_headers):
        response = client.patch(f"/supervisor/jobs/{uuid.uuid4()}/approve", headers=admin_headers)
        assert response.status_code == 403

    def test_supervisor_cannot_file_complaints(self, client, supervisor_headers):
        response = client.post("/complaints/", json=COMPLAINT, headers=supervisor_headers)
        assert response.status_code == 403

    def test_tenant_does_not_see_walk_in_complaints(self, client, tenant_headers, admin_headers):
        walk_in = client.post("/complaints/", json=COMPLAINT, headers=admin_headers).json()

        assert client.get("/complaints/", headers=tenant_headers).json() == []
        assert client.get(f"/complaints/{walk_in['id']}", headers=tenant_headers).status_code == 404

    def test_audit_log_is_admin_only(self, client, admin_headers, supervisor_headers):
        client.post("/complaints/", json=COMPLAINT, headers=admin_headers)

        entries = client.get("/admin/audit-log", headers=admin_headers).json()
        assert [e["action"] for e in entries] == ["created_complaint"]
        assert client.get("/admin/audit-log", headers=supervisor_headers).status_code == 403


class TestReference:

    def test_materials_and_staff(self, client, supervisor_headers):
        materials = client.get("/reference/materials", headers=supervisor_headers).json()
        staff = client.get("/reference/staff", headers=supervisor_headers).json()

        assert [m["code"] for m in materials] == ["A002", "E001", "P001"]
        assert [s["name"] for s in staff] == ["Staff A", "Staff B"]

    def test_admin_imports_materials(self, client, admin_headers, supervisor_headers):
        payload = [{"code": "P004", "name": "Sink Trap"}]

        assert client.post("/reference/materials/import", json=payload, headers=supervisor_headers).status_code == 403
        response = client.post("/reference/materials/import", json=payload, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["count"] == 1
        codes = [m["code"] for m in client.get("/reference/materials", headers=admin_headers).json()]
        assert "P004" in codes
