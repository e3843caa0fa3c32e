"""
Tests — Report comment threads.

Only the submitting hacker and the owning organization may read or post.
"""


def _comments_url(report):
    return f"/api/reports/{report['id']}/comments"


class TestComments:
    def test_thread_between_parties(self, org_client, hacker_client, report):
        res = hacker_client.post(_comments_url(report), json={"content": "PoC video attached"})
        assert res.status_code == 201
        assert res.get_json()["author_type"] == "hacker"

        res = org_client.post(_comments_url(report), json={"content": "Thanks, reproducing now"})
        assert res.status_code == 201
        assert res.get_json()["author_username"] == org_client.user["username"]

        body = hacker_client.get(_comments_url(report)).get_json()
        assert body["total"] == 2
        assert [c["content"] for c in body["items"]] == ["PoC video attached", "Thanks, reproducing now"]

    def test_other_hacker_cannot_read(self, hacker_client, other_hacker_client, report):
        hacker_client.post(_comments_url(report), json={"content": "secret detail"})
        assert other_hacker_client.get(_comments_url(report)).status_code == 403

    def test_other_hacker_cannot_post(self, other_hacker_client, report):
        res = other_hacker_client.post(_comments_url(report), json={"content": "me too"})
        assert res.status_code == 403

    def test_anonymous(self, client, report):
        assert client.get(_comments_url(report)).status_code == 401

    def test_empty_content(self, hacker_client, report):
        res = hacker_client.post(_comments_url(report), json={"content": "   "})
        assert res.status_code == 400
        assert res.get_json()["details"] == {"content": "required"}

    def test_unknown_report(self, hacker_client):
        res = hacker_client.post("/api/reports/404/comments", json={"content": "hello"})
        assert res.status_code == 404
