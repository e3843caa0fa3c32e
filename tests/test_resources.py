"""
Tests — Learning resources.
"""

_RESOURCE = {
    "title": "API Security Best Practices",
    "description": "Learn about securing your APIs",
    "content": "Always validate object-level authorization...",
    "category": "Best Practices",
}


class TestResources:
    def test_publish_and_list(self, hacker_client, client):
        res = hacker_client.post("/api/resources", json=_RESOURCE)
        assert res.status_code == 201
        assert res.get_json()["author_name"] == hacker_client.user["full_name"]

        body = client.get("/api/resources").get_json()
        assert body["total"] == 1
        assert body["items"][0]["title"] == _RESOURCE["title"]

    def test_category_filter(self, org_client, client):
        org_client.post("/api/resources", json=_RESOURCE)
        org_client.post("/api/resources", json={**_RESOURCE, "title": "Mobile Testing", "category": "Tutorials"})

        items = client.get("/api/resources?category=tutorials").get_json()["items"]
        assert [r["title"] for r in items] == ["Mobile Testing"]

    def test_publish_requires_login(self, client):
        assert client.post("/api/resources", json=_RESOURCE).status_code == 401

    def test_missing_fields(self, hacker_client):
        res = hacker_client.post("/api/resources", json={"title": "Only title"})
        assert res.status_code == 400
        assert set(res.get_json()["details"]) == {"description", "content", "category"}

    def test_category_filter_ignores_wildcards(self, org_client, client):
        org_client.post("/api/resources", json=_RESOURCE)
        assert client.get("/api/resources?category=%25").get_json()["total"] == 0
        assert client.get("/api/resources?category=Best_Practices").get_json()["total"] == 0
