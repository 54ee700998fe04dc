"""Tests for API endpoints."""

from fastapi.testclient import TestClient

from .conftest import SOURCE_DDL, TARGET_DDL


def _upload_both(test_client: TestClient):
    for side, name, dialect, content in [
        ("source", "source.sql", "db2", SOURCE_DDL),
        ("target", "target.sql", "bigquery", TARGET_DDL),
    ]:
        response = test_client.post("/api/upload/files", json={
            "name": name, "side": side, "dialect": dialect, "content": content,
        })
        assert response.status_code == 200


class TestProjectEndpoints:

    def test_health(self, test_client: TestClient):
        assert test_client.get("/api/health").json() == {"status": "healthy"}

    def test_list_projects(self, test_client: TestClient):
        data = test_client.get("/api/projects").json()
        assert data["total"] == 3

    def test_create_project_becomes_current(self, test_client: TestClient):
        response = test_client.post("/api/projects", json={"name": "API project", "template": "template-1"})

        assert response.status_code == 200
        current = test_client.get("/api/projects/current").json()
        assert current["id"] == response.json()["id"]
        assert current["status"] == "draft"

    def test_create_project_without_dialects(self, test_client: TestClient):
        response = test_client.post("/api/projects", json={"name": "Nope"})
        assert response.status_code == 400

    def test_select_unknown_project(self, test_client: TestClient):
        response = test_client.put("/api/projects/current", json={"project_id": "proj-404"})
        assert response.status_code == 404

    def test_select_project_jumps_to_its_phase(self, test_client: TestClient):
        test_client.put("/api/projects/current", json={"project_id": "proj-1"})
        assert test_client.get("/api/wizard/phase").json()["current_phase"] == "mapping"

    def test_no_current_project(self, test_client: TestClient):
        assert test_client.get("/api/projects/current").status_code == 404


class TestWizardFlow:

    def test_closed_gate_returns_conflict(self, test_client: TestClient):
        test_client.post("/api/projects", json={"name": "Flow", "template": "template-1"})

        response = test_client.put("/api/wizard/phase", json={"phase": "discovery"})

        assert response.status_code == 409
        assert test_client.get("/api/wizard/phase").json()["current_phase"] == "upload"

    def test_full_flow(self, test_client: TestClient):
        test_client.post("/api/projects", json={"name": "Flow", "template": "template-1"})

        _upload_both(test_client)
        files = test_client.get("/api/upload/files").json()
        assert [f["status"] for f in files["source_files"]] == ["completed"]
        assert files["can_proceed"] is True

        phase = test_client.put("/api/wizard/phase", json={"phase": "discovery"}).json()
        assert phase["completed_phases"] == ["upload"]

        test_client.post("/api/discovery/run")
        discovery = test_client.get("/api/discovery").json()
        assert discovery["progress"] == 100
        assert test_client.get("/api/discovery/tables/DB2_CUSTOMERS").status_code == 200
        assert test_client.put("/api/wizard/phase", json={"phase": "mapping"}).status_code == 200

        test_client.post("/api/mapping/run")
        bulk = test_client.post("/api/mapping/bulk-accept").json()
        assert bulk["approved"] == 6
        test_client.post("/api/mapping/complete")
        assert test_client.put("/api/wizard/phase", json={"phase": "codegen"}).status_code == 200

        test_client.post("/api/codegen/run", json={"platform": "bigquery"})
        code = test_client.get("/api/codegen/bigquery")
        assert code.status_code == 200
        assert code.json()["file_name"] == "bigquery_migration.sql"
        test_client.post("/api/codegen/complete")
        assert test_client.put("/api/wizard/phase", json={"phase": "validation"}).status_code == 200

        assert test_client.post("/api/validation/complete").status_code == 409
        for item in ["code_reviewed", "stakeholder_approval", "backup_strategy", "rollback_plan"]:
            test_client.patch(f"/api/validation/checklist/{item}", json={"completed": True})
        project = test_client.post("/api/validation/complete").json()["current_project"]
        assert project["status"] == "completed"
        assert project["progress"]["completed_phases"] == [
            "upload", "discovery", "mapping", "codegen", "validation",
        ]

    def test_notifications_after_upload(self, test_client: TestClient):
        test_client.post("/api/projects", json={"name": "Flow", "template": "template-1"})
        _upload_both(test_client)

        data = test_client.get("/api/wizard/notifications").json()
        assert data["total"] == 2
        assert data["notifications"][0]["title"] == "File processed"


class TestMappingEndpoints:

    def test_invalid_transition(self, test_client: TestClient):
        test_client.post("/api/mapping/run")
        assert test_client.post("/api/mapping/suggestions/map-1/accept").status_code == 200

        response = test_client.post("/api/mapping/suggestions/map-1/reject")
        assert response.status_code == 409

    def test_partial_update(self, test_client: TestClient):
        test_client.post("/api/mapping/run")

        response = test_client.patch("/api/mapping/suggestions/map-2", json={"formula": "LOWER(email)"})

        assert response.status_code == 200
        assert response.json()["formula"] == "LOWER(email)"
        assert response.json()["status"] == "suggested"

    def test_unknown_suggestion(self, test_client: TestClient):
        assert test_client.post("/api/mapping/suggestions/nope/accept").status_code == 404

    def test_manual_mapping(self, test_client: TestClient):
        test_client.put("/api/mapping/selection", json={
            "source_table_id": "customers", "target_table_id": "dim_customer",
        })
        response = test_client.post("/api/mapping/field-mappings", json={
            "source_table_id": "customers",
            "source_column_id": "phone",
            "target_table_id": "dim_customer",
            "target_column_id": "phone_number",
        })

        assert response.status_code == 200
        assert response.json()["status"] == "manual"
        assert response.json()["id"].startswith("manual-")


class TestProfileEndpoints:

    def test_sign_in_and_out(self, test_client: TestClient):
        profile = test_client.put("/api/profile", json={"name": "Sam Lee", "email": "sam@example.com"}).json()
        assert profile["authenticated"] is True

        profile = test_client.delete("/api/profile").json()
        assert profile["name"] == "Alex Chen"
        assert profile["authenticated"] is False
