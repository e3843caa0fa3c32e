"""
Tests — Report submission, visibility and listing.

Covers:
    - Submit only to active programs; reports start pending
    - Report visible to its hacker and the owning organization only
    - Per-user report listing with filters
"""

from conftest import report_payload


class TestSubmit:
    def test_submit_starts_pending(self, hacker_client, program):
        res = hacker_client.post("/api/reports", json=report_payload(program["id"]))
        assert res.status_code == 201
        data = res.get_json()
        assert data["status"] == "pending"
        assert data["reward_amount"] is None
        assert data["triage_notes"] is None
        assert data["hacker_id"] == hacker_client.user["id"]
        assert data["program_title"] == program["title"]

    def test_client_cannot_choose_status(self, hacker_client, program):
        res = hacker_client.post("/api/reports", json=report_payload(
            program["id"], status="accepted", reward_amount=9999,
        ))
        assert res.status_code == 201
        assert res.get_json()["status"] == "pending"
        assert res.get_json()["reward_amount"] is None

    def test_draft_program_rejected_until_active(self, org_client, hacker_client, other_hacker_client):
        res = org_client.post("/api/programs", json={
            "title": "Draft Program", "description": "Not launched", "industry": "SaaS",
            "scope": "staging only", "rules": "none", "status": "draft",
        })
        program_id = res.get_json()["id"]

        res = hacker_client.post("/api/reports", json=report_payload(program_id))
        assert res.status_code == 400
        assert "inactive program" in res.get_json()["error"]

        org_client.patch(f"/api/programs/{program_id}/status", json={"status": "active"})
        res = hacker_client.post("/api/reports", json=report_payload(program_id))
        assert res.status_code == 201
        report_id = res.get_json()["id"]

        assert org_client.get(f"/api/reports/{report_id}").status_code == 200
        assert other_hacker_client.get(f"/api/reports/{report_id}").status_code == 403

    def test_inactive_program_rejected(self, org_client, hacker_client, program):
        org_client.patch(f"/api/programs/{program['id']}/status", json={"status": "inactive"})
        res = hacker_client.post("/api/reports", json=report_payload(program["id"]))
        assert res.status_code == 400

    def test_missing_program(self, hacker_client):
        res = hacker_client.post("/api/reports", json=report_payload(4242))
        assert res.status_code == 404

    def test_invalid_payload(self, hacker_client, program):
        res = hacker_client.post("/api/reports", json={"program_id": program["id"], "severity": "catastrophic"})
        assert res.status_code == 400
        details = res.get_json()["details"]
        assert {"title", "description", "steps_to_reproduce", "impact", "severity"} <= set(details)

    def test_non_string_severity(self, hacker_client, program):
        res = hacker_client.post("/api/reports", json=report_payload(program["id"], severity={"x": 1}))
        assert res.status_code == 400
        assert set(res.get_json()["details"]) == {"severity"}

    def test_anonymous_cannot_submit(self, client, program):
        assert client.post("/api/reports", json=report_payload(program["id"])).status_code == 401


class TestVisibility:
    def test_submitter_can_read(self, hacker_client, report):
        res = hacker_client.get(f"/api/reports/{report['id']}")
        assert res.status_code == 200
        assert res.get_json()["title"] == report["title"]

    def test_owner_organization_can_read(self, org_client, report):
        assert org_client.get(f"/api/reports/{report['id']}").status_code == 200

    def test_other_hacker_forbidden(self, other_hacker_client, report):
        res = other_hacker_client.get(f"/api/reports/{report['id']}")
        assert res.status_code == 403
        assert res.get_json()["code"] == "ERR_FORBIDDEN"

    def test_other_organization_forbidden(self, make_user, report):
        assert make_user("organization").get(f"/api/reports/{report['id']}").status_code == 403

    def test_anonymous_unauthorized(self, client, report):
        assert client.get(f"/api/reports/{report['id']}").status_code == 401

    def test_unknown_report(self, hacker_client):
        assert hacker_client.get("/api/reports/31337").status_code == 404


class TestListing:
    def test_hacker_sees_own_reports(self, hacker_client, other_hacker_client, program):
        hacker_client.post("/api/reports", json=report_payload(program["id"]))
        other_hacker_client.post("/api/reports", json=report_payload(program["id"], severity="low"))

        body = hacker_client.get("/api/reports").get_json()
        assert body["total"] == 1
        assert body["items"][0]["hacker_id"] == hacker_client.user["id"]

    def test_organization_sees_program_reports(self, org_client, hacker_client, other_hacker_client, program):
        hacker_client.post("/api/reports", json=report_payload(program["id"]))
        other_hacker_client.post("/api/reports", json=report_payload(program["id"], severity="low"))

        assert org_client.get("/api/reports").get_json()["total"] == 2

    def test_severity_filter(self, org_client, hacker_client, program):
        hacker_client.post("/api/reports", json=report_payload(program["id"], severity="critical"))
        hacker_client.post("/api/reports", json=report_payload(program["id"], severity="low"))

        items = org_client.get("/api/reports?severity=critical").get_json()["items"]
        assert [r["severity"] for r in items] == ["critical"]

    def test_listing_requires_login(self, client):
        assert client.get("/api/reports").status_code == 401
