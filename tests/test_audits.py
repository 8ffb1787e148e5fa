"""Tests for audits."""

from fastapi.testclient import TestClient


def _seed_related(fake_supabase) -> None:
    fake_supabase.seed("clients", {"id": "c1", "name": "ABC Şirketi"})
    fake_supabase.seed("tasks", {"id": "t1", "title": "2024 Mali Denetimi", "client_id": "c1", "status": "in_progress"})
    fake_supabase.seed("form_templates", {"id": "f1", "name": "Mali", "template_type": "financial_audit", "content": {}})


class TestAuditRoutes:
    def test_create_starts_as_draft_with_joins(self, test_client: TestClient, fake_supabase, team_headers) -> None:
        _seed_related(fake_supabase)
        created = test_client.post(
            "/api/v1/audits",
            json={"client_id": "c1", "task_id": "t1", "form_template_id": "f1"},
            headers=team_headers,
        )
        assert created.status_code == 201
        assert created.json()["status"] == "draft"
        assert created.json()["form_data"] == {}

        audit = test_client.get(f"/api/v1/audits/{created.json()['id']}", headers=team_headers).json()

        assert audit["clients"]["name"] == "ABC Şirketi"
        assert audit["tasks"]["title"] == "2024 Mali Denetimi"
        assert audit["form_templates"]["template_type"] == "financial_audit"

    def test_form_data_and_status(self, test_client: TestClient, fake_supabase, team_headers) -> None:
        audit = test_client.post("/api/v1/audits", json={}, headers=team_headers).json()

        saved = test_client.put(
            f"/api/v1/audits/{audit['id']}/form-data",
            json={"form_data": {"company_name": "ABC"}},
            headers=team_headers,
        )
        assert saved.json()["form_data"] == {"company_name": "ABC"}

        skipped = test_client.patch(f"/api/v1/audits/{audit['id']}/status", json={"status": "completed"}, headers=team_headers)
        assert skipped.status_code == 409

        started = test_client.patch(f"/api/v1/audits/{audit['id']}/status", json={"status": "in_progress"}, headers=team_headers)
        assert started.status_code == 200
        assert started.json()["status"] == "in_progress"

    def test_list_without_relations(self, test_client: TestClient, fake_supabase, team_headers) -> None:
        fake_supabase.seed("audits", {"id": "a1", "status": "draft", "form_data": {}, "client_id": None, "task_id": None, "form_template_id": None})
        audits = test_client.get("/api/v1/audits", headers=team_headers).json()
        assert audits[0]["clients"] is None
        assert audits[0]["tasks"] is None

