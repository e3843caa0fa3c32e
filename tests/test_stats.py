"""
Tests — Dashboard statistics and leaderboard.
"""

from conftest import report_payload


def _accept(org_client, report_id, **extra):
    res = org_client.patch(f"/api/reports/{report_id}/status", json={"status": "accepted", **extra})
    assert res.status_code == 200


class TestHackerStats:
    def test_counts_and_earnings(self, org_client, hacker_client, client, program):
        ids = [
            hacker_client.post("/api/reports", json=report_payload(program["id"], severity=s)).get_json()["id"]
            for s in ("critical", "low", "medium")
        ]
        _accept(org_client, ids[0], reward_amount=5000)
        _accept(org_client, ids[1], reward_amount=100)

        stats = client.get(f"/api/stats/hacker/{hacker_client.user['id']}").get_json()
        assert stats["submissions"] == 3
        assert stats["accepted_reports"] == 2
        assert stats["earnings"] == 5100
        assert stats["reputation"] == 55
        assert stats["active_hunts"] == 1

    def test_organization_id_not_a_hacker(self, org_client, client):
        assert client.get(f"/api/stats/hacker/{org_client.user['id']}").status_code == 404


class TestOrganizationStats:
    def test_counts(self, org_client, hacker_client, client, program):
        first = hacker_client.post("/api/reports", json=report_payload(program["id"])).get_json()
        hacker_client.post("/api/reports", json=report_payload(program["id"], severity="low"))
        _accept(org_client, first["id"], reward_amount=2000)
        org_client.patch(f"/api/reports/{first['id']}/status", json={"status": "fixed"})

        stats = client.get(f"/api/stats/organization/{org_client.user['id']}").get_json()
        assert stats["total_programs"] == 1
        assert stats["active_programs"] == 1
        assert stats["total_reports"] == 2
        assert stats["resolved_reports"] == 1
        assert stats["pending_reports"] == 1
        assert stats["rewards_paid"] == 2000

    def test_unknown_organization(self, client):
        assert client.get("/api/stats/organization/777").status_code == 404


class TestLeaderboard:
    def test_ranked_by_reputation(self, org_client, hacker_client, other_hacker_client, client, program):
        low = other_hacker_client.post("/api/reports", json=report_payload(program["id"], severity="low")).get_json()
        high = hacker_client.post("/api/reports", json=report_payload(program["id"], severity="critical")).get_json()
        _accept(org_client, low["id"])
        _accept(org_client, high["id"], reward_amount=5000)

        rows = client.get("/api/leaderboard").get_json()["items"]
        assert [r["id"] for r in rows] == [hacker_client.user["id"], other_hacker_client.user["id"]]
        assert rows[0]["rank"] == 1
        assert rows[0]["reputation"] == 50
        assert rows[0]["earnings"] == 5000
        assert rows[0]["reports_count"] == 1
        assert "email" not in rows[0]

    def test_limit(self, make_user, client):
        for _ in range(3):
            make_user("hacker")
        assert len(client.get("/api/leaderboard?limit=2").get_json()["items"]) == 2

    def test_organizations_excluded(self, org_client, client):
        assert client.get("/api/leaderboard").get_json()["items"] == []
