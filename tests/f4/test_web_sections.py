"""Tests for section endpoints (F4)."""


class TestListSections:
    """Tests for GET /api/sections."""

    def test_list_in_navigation_order(self, client):
        response = client.get("/api/sections")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 5
        assert [s["id"] for s in data["sections"]] == [
            "basics",
            "apex",
            "lwc",
            "integration",
            "testing",
        ]

    def test_topic_counts(self, client):
        data = client.get("/api/sections").json()
        counts = {s["id"]: s["topic_count"] for s in data["sections"]}
        assert counts == {"basics": 1, "apex": 3, "lwc": 1, "integration": 0, "testing": 0}


class TestGetSection:
    """Tests for GET /api/sections/{id}."""

    def test_section_detail(self, client):
        response = client.get("/api/sections/apex")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "apex"
        assert data["topic_count"] == 3
        assert [t["slug"] for t in data["topics"]] == ["variables", "loops", "triggers"]
        assert data["progress"] == {"completed": 0, "total": 3, "percentage": 0}
        assert data["learning_path"]["current"]["slug"] == "variables"
        assert data["learning_path"]["progress"] == 33

    def test_section_detail_with_learner(self, client):
        client.post("/api/progress/ana/completed", json={"slug": "variables"})

        data = client.get("/api/sections/apex", params={"learner_id": "ana"}).json()
        assert data["progress"]["completed"] == 1
        assert data["progress"]["percentage"] == 33
        assert data["learning_path"]["current"]["slug"] == "loops"
        assert data["learning_path"]["previous"]["slug"] == "variables"

    def test_empty_section(self, client):
        data = client.get("/api/sections/integration").json()
        assert data["topics"] == []
        assert data["learning_path"]["current"] is None

    def test_section_not_found(self, client):
        response = client.get("/api/sections/unknown")
        assert response.status_code == 404
