import pytest
from fastapi.testclient import TestClient

from capacity_tracker.models.project import Project

def create_resource(client: TestClient, project_id: int, name: str = "Ann", **extra):
    payload = {"project_id": project_id, "name": name, "role": "Developer", **extra}
    return client.post("/resources/", json=payload)

def upsert_week(client: TestClient, resource_id: int, week: str, availability: float, workload: float, **extra):
    payload = {
        "resource_id": resource_id,
        "week_start_date": week,
        "availability": availability,
        "workload": workload,
        **extra
    }
    return client.post("/resources/workload", json=payload)

class TestProjectRoutes:
    def test_create_and_get_project(self, client: TestClient):
        response = client.post("/projects/", json={"name": "Hermes"})
        assert response.status_code == 201
        project_id = response.json()["id"]

        response = client.get(f"/projects/{project_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Hermes"

    def test_get_missing_project(self, client: TestClient):
        response = client.get("/projects/999")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

class TestResourceCreateRoutes:
    def test_create_resource(self, client: TestClient, project: Project):
        response = create_resource(client, project.id, weekly_availability=40, weekly_workload=32, skills=["go"])

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Ann"
        assert data["role"] == "Developer"
        assert data["load_percentage"] == 80.0
        assert data["rag_status"] == "amber"
        assert data["skills"] == ["go"]
        assert data["is_archived"] is False

    def test_create_resource_unknown_project(self, client: TestClient):
        response = create_resource(client, 4242)

        assert response.status_code == 404
        assert "Project with ID 4242 not found" in response.json()["detail"]

    def test_create_resource_duplicate_name(self, client: TestClient, project: Project):
        create_resource(client, project.id)
        response = create_resource(client, project.id)

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "ConflictError"
        assert "already exists" in data["detail"]

    def test_create_other_role_without_custom_name(self, client: TestClient, project: Project):
        response = client.post("/resources/", json={"project_id": project.id, "name": "Zed", "role": "Other"})

        assert response.status_code == 409
        assert "Custom role name is required" in response.json()["detail"]

    def test_create_negative_hours_rejected(self, client: TestClient, project: Project):
        response = create_resource(client, project.id, weekly_workload=-5)
        assert response.status_code == 422

class TestResourceRegisterRoutes:
    def test_list_and_archive(self, client: TestClient, project: Project):
        bob_id = create_resource(client, project.id, name="Bob").json()["id"]
        create_resource(client, project.id, name="Ann")

        response = client.patch(f"/resources/{bob_id}/archive")
        assert response.status_code == 200
        assert response.json()["is_archived"] is True

        active = client.get("/resources/", params={"project_id": project.id}).json()
        assert [r["name"] for r in active] == ["Ann"]

        everything = client.get("/resources/", params={"project_id": project.id, "include_archived": True}).json()
        assert [r["name"] for r in everything] == ["Ann", "Bob"]

    def test_filter(self, client: TestClient, project: Project):
        create_resource(client, project.id, name="Ann", weekly_workload=36)
        create_resource(client, project.id, name="Joanna", weekly_workload=10)
        client.post("/resources/", json={"project_id": project.id, "name": "Max", "role": "QA", "weekly_workload": 38})

        response = client.get("/resources/filter", params={"project_id": project.id, "name": "ANN"})
        assert [r["name"] for r in response.json()] == ["Ann", "Joanna"]

        response = client.get("/resources/filter", params={"project_id": project.id, "min_load": 80})
        assert [r["name"] for r in response.json()] == ["Ann", "Max"]

        response = client.get("/resources/filter", params={"project_id": project.id, "role": "QA"})
        assert [r["name"] for r in response.json()] == ["Max"]

    def test_update_resource(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]

        response = client.patch(f"/resources/{resource_id}", json={"weekly_workload": 50})

        assert response.status_code == 200
        data = response.json()
        assert data["weekly_availability"] == 40.0
        assert data["load_percentage"] == 125.0
        assert data["rag_status"] == "red"

    def test_update_missing_resource(self, client: TestClient):
        response = client.patch("/resources/999", json={"notes": "x"})
        assert response.status_code == 404

    def test_update_to_other_requires_custom_name(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]
        response = client.patch(f"/resources/{resource_id}", json={"role": "Other"})
        assert response.status_code == 409

    def test_get_resource_detail(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]
        upsert_week(client, resource_id, "2025-02-10", 40, 20)
        upsert_week(client, resource_id, "2025-02-03", 40, 30)

        response = client.get(f"/resources/{resource_id}")

        assert response.status_code == 200
        weeks = [w["week_start_date"] for w in response.json()["workloads"]]
        assert weeks == ["2025-02-03", "2025-02-10"]

    def test_delete_resource(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]
        upsert_week(client, resource_id, "2025-02-03", 40, 20)

        response = client.delete(f"/resources/{resource_id}")
        assert response.status_code == 204

        assert client.get(f"/resources/{resource_id}").status_code == 404
        assert client.get(f"/resources/{resource_id}/workload").status_code == 404

class TestWorkloadRoutes:
    def test_upsert_creates_then_updates(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]

        first = upsert_week(client, resource_id, "2025-01-06", 40, 32, notes="a")
        assert first.status_code == 201
        data = first.json()
        assert data["week_end_date"] == "2025-01-12"
        assert data["load_percentage"] == 80.0
        assert data["rag_status"] == "amber"

        second = upsert_week(client, resource_id, "2025-01-06", 40, 20)
        assert second.status_code == 201
        data = second.json()
        assert data["id"] == first.json()["id"]
        assert data["load_percentage"] == 50.0
        assert data["rag_status"] == "green"
        assert data["notes"] == "a"

        rows = client.get(f"/resources/{resource_id}/workload").json()
        assert len(rows) == 1

    def test_upsert_archived_resource(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]
        client.patch(f"/resources/{resource_id}/archive")

        response = upsert_week(client, resource_id, "2025-01-06", 40, 10)

        assert response.status_code == 409
        assert "archived" in response.json()["detail"]

    def test_upsert_missing_resource(self, client: TestClient):
        response = upsert_week(client, 31337, "2025-01-06", 40, 10)
        assert response.status_code == 404

    def test_upsert_invalid_date(self, client: TestClient, project: Project):
        resource_id = create_resource(client, project.id).json()["id"]
        response = upsert_week(client, resource_id, "not-a-date", 40, 10)
        assert response.status_code == 422

class TestReportRoutes:
    @pytest.fixture
    def populated(self, client: TestClient, project: Project):
        r1 = create_resource(client, project.id, name="R1", weekly_workload=20).json()["id"]
        r2 = create_resource(client, project.id, name="R2", weekly_workload=36).json()["id"]
        create_resource(client, project.id, name="R3", weekly_workload=48)
        upsert_week(client, r1, "2025-01-06", 40, 20)
        upsert_week(client, r1, "2025-01-13", 40, 42)
        upsert_week(client, r1, "2025-01-27", 40, 10)
        return r1, r2

    def test_heatmap(self, client: TestClient, project: Project, populated):
        r1, r2 = populated
        response = client.get("/resources/heatmap", params={
            "project_id": project.id,
            "start_date": "2025-01-06",
            "end_date": "2025-01-13"
        })

        assert response.status_code == 200
        rows = response.json()
        assert [row["resource_name"] for row in rows] == ["R1", "R2", "R3"]
        assert rows[0]["resource_id"] == r1
        assert rows[0]["role"] == "Developer"
        assert [w["week_start_date"] for w in rows[0]["weekly_data"]] == ["2025-01-06", "2025-01-13"]
        assert rows[0]["weekly_data"][1]["rag_status"] == "red"
        assert rows[1]["weekly_data"] == []

    def test_heatmap_unknown_project_is_empty(self, client: TestClient):
        response = client.get("/resources/heatmap", params={
            "project_id": 999,
            "start_date": "2025-01-01",
            "end_date": "2025-12-31"
        })
        assert response.status_code == 200
        assert response.json() == []

    def test_capacity_summary(self, client: TestClient, project: Project, populated):
        response = client.get("/resources/summary", params={"project_id": project.id})

        assert response.status_code == 200
        assert response.json() == {
            "total_resources": 3,
            "underutilized": 1,
            "ideal": 1,
            "overloaded": 1,
            "rag_distribution": {"green": 1, "amber": 1, "red": 1}
        }

class TestHealth:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}
