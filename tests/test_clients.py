"""Tests for client management and admin-only access."""

from fastapi.testclient import TestClient


class TestClientRoutes:
    def test_team_member_cannot_create_client(self, test_client: TestClient, fake_supabase, team_headers) -> None:
        response = test_client.post("/api/v1/clients", json={"name": "Nope Ltd"}, headers=team_headers)

        assert response.status_code == 403
        assert "manage_clients" in response.json()["detail"]
        assert fake_supabase.rows("clients") == []

    def test_team_member_can_read_clients(self, test_client: TestClient, fake_supabase, team_headers) -> None:
        fake_supabase.seed("clients", {"id": "c1", "name": "Visible"})
        response = test_client.get("/api/v1/clients", headers=team_headers)
        assert response.status_code == 200
        assert response.json()[0]["name"] == "Visible"

    def test_admin_creates_and_updates(self, test_client: TestClient, fake_supabase, admin_headers) -> None:
        created = test_client.post(
            "/api/v1/clients",
            json={"name": "ABC Şirketi", "contact_person": "Ahmet Yılmaz"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        client_id = created.json()["id"]

        updated = test_client.put(f"/api/v1/clients/{client_id}", json={"phone": "+90 212 555 0001"}, headers=admin_headers)

        assert updated.status_code == 200
        assert updated.json()["phone"] == "+90 212 555 0001"
        assert updated.json()["contact_person"] == "Ahmet Yılmaz"
        assert updated.json()["updated_at"] is not None
        assert [row["action"] for row in fake_supabase.rows("activity_log")] == ["create", "update"]

    def test_list_ordered_by_name(self, test_client: TestClient, fake_supabase, admin_headers) -> None:
        fake_supabase.seed("clients", {"id": "c1", "name": "Zeta"}, {"id": "c2", "name": "Alfa"})
        response = test_client.get("/api/v1/clients?order_by=name", headers=admin_headers)
        assert [c["name"] for c in response.json()] == ["Alfa", "Zeta"]

    def test_delete_keeps_tasks(self, test_client: TestClient, fake_supabase, admin_headers) -> None:
        fake_supabase.seed("clients", {"id": "c1", "name": "Leaving"})
        fake_supabase.seed("tasks", {"id": "t1", "title": "Stays", "client_id": "c1", "status": "pending"})

        response = test_client.delete("/api/v1/clients/c1?confirm=true", headers=admin_headers)

        assert response.status_code == 204
        assert fake_supabase.rows("clients") == []
        assert [t["id"] for t in fake_supabase.rows("tasks")] == ["t1"]
        tasks = test_client.get("/api/v1/tasks", headers=admin_headers).json()
        assert tasks[0]["clients"] is None

    def test_delete_without_confirmation(self, test_client: TestClient, fake_supabase, admin_headers) -> None:
        fake_supabase.seed("clients", {"id": "c1", "name": "Staying"})
        response = test_client.delete("/api/v1/clients/c1", headers=admin_headers)
        assert response.status_code == 400
        assert len(fake_supabase.rows("clients")) == 1

    def test_missing_client_is_404(self, test_client: TestClient, admin_headers) -> None:
        response = test_client.get("/api/v1/clients/unknown", headers=admin_headers)
        assert response.status_code == 404

    def test_null_name_is_422(self, test_client: TestClient, fake_supabase, admin_headers) -> None:
        fake_supabase.seed("clients", {"id": "c1", "name": "Kept"})
        response = test_client.put("/api/v1/clients/c1", json={"name": None}, headers=admin_headers)
        assert response.status_code == 422
        assert fake_supabase.rows("clients")[0]["name"] == "Kept"


class TestFormTemplateRoutes:
    def test_team_member_cannot_delete_template(self, test_client: TestClient, fake_supabase, team_headers) -> None:
        fake_supabase.seed("form_templates", {"id": "t1", "name": "Mali", "template_type": "financial_audit", "content": {}})
        response = test_client.delete("/api/v1/form-templates/t1?confirm=true", headers=team_headers)
        assert response.status_code == 403
        assert len(fake_supabase.rows("form_templates")) == 1

    def test_admin_creates_template(self, test_client: TestClient, admin_headers) -> None:
        response = test_client.post(
            "/api/v1/form-templates",
            json={"name": "Uyum", "template_type": "compliance_audit", "content": {"sections": []}},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["content"] == {"sections": []}

    def test_null_template_fields_are_422(self, test_client: TestClient, fake_supabase, admin_headers) -> None:
        fake_supabase.seed("form_templates", {"id": "t1", "name": "Mali", "template_type": "financial_audit", "content": {}})
        for field in ("name", "template_type", "content"):
            response = test_client.put("/api/v1/form-templates/t1", json={field: None}, headers=admin_headers)
            assert response.status_code == 422
