"""Tests for tutorial endpoints (F4)."""


class TestListTutorials:
    """Tests for GET /api/tutorials."""

    def test_newest_first(self, client):
        data = client.get("/api/tutorials").json()
        assert data["count"] == 3
        assert [t["slug"] for t in data["tutorials"]] == [
            "trigger-framework",
            "batch-jobs",
            "datatable",
        ]

    def test_filters(self, client):
        by_category = client.get("/api/tutorials", params={"category": "lwc"}).json()
        assert [t["slug"] for t in by_category["tutorials"]] == ["datatable"]

        by_tag = client.get("/api/tutorials", params={"tag": "async"}).json()
        assert [t["slug"] for t in by_tag["tutorials"]] == ["batch-jobs"]

        featured = client.get("/api/tutorials", params={"featured": "true"}).json()
        assert featured["count"] == 2

    def test_categories(self, client):
        data = client.get("/api/tutorials/categories").json()
        assert data["count"] == 4
        counts = {c["id"]: c["tutorial_count"] for c in data["categories"]}
        assert counts == {"apex": 2, "lwc": 1, "integration": 0, "testing": 0}

    def test_tags(self, client):
        data = client.get("/api/tutorials/tags").json()
        assert data["tags"] == ["async", "patterns", "triggers", "ui"]


class TestGetTutorial:
    """Tests for GET /api/tutorials/{slug}."""

    def test_tutorial_detail(self, client):
        data = client.get("/api/tutorials/trigger-framework").json()
        assert data["category"] == "apex"
        assert data["featured"] is True
        assert "<h1" in data["html"]
        assert [t["slug"] for t in data["related"]] == ["batch-jobs", "datatable"]

    def test_wrong_category(self, client):
        response = client.get("/api/tutorials/datatable", params={"category": "apex"})
        assert response.status_code == 404

    def test_category_cannot_leave_content_tree(self, client, data_dir):
        outside = data_dir.parent / "outside"
        outside.mkdir()
        (outside / "secret.md").write_text("---\ntitle: SECRET\n---\n", encoding="utf-8")

        response = client.get("/api/tutorials/secret", params={"category": "../../../outside"})
        assert response.status_code == 404

    def test_not_found(self, client):
        assert client.get("/api/tutorials/nope").status_code == 404
