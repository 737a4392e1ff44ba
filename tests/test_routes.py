"""HTTP-level tests for the API routers."""

from __future__ import annotations

import pytest


async def create(client, payload):
    response = await client.post("/projects/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestProjectRoutes:
    """Test /projects endpoints."""

    @pytest.mark.asyncio
    async def test_create_returns_detail(self, client, project_payload):
        body = await create(client, project_payload)

        assert body["name"] == "North warehouse"
        assert body["status"] == "planning"
        assert body["string_configuration"] == "3x3"
        assert body["total_items"] == 11
        assert len(body["checklist_items"]) == 11
        assert body["checklist_items"][0]["category"] == "safety"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"panel_count": 0},
            {"panel_count": 201},
            {"inverter_power_kw": 2.9},
            {"inverter_power_kw": 100.5},
            {"roof_type": "thatch"},
            {"name": ""},
        ],
    )
    async def test_create_rejects_invalid_input(self, client, project_payload, overrides):
        response = await client.post("/projects/", json={**project_payload, **overrides})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_requires_generator_inputs(self, client):
        response = await client.post("/projects/", json={"name": "Incomplete"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_and_get(self, client, project_payload):
        created = await create(client, project_payload)

        listing = await client.get("/projects")
        detail = await client.get(f"/projects/{created['id']}")

        assert listing.status_code == 200
        assert [p["id"] for p in listing.json()] == [created["id"]]
        assert detail.json()["checklist_items"] == created["checklist_items"]

    @pytest.mark.asyncio
    async def test_missing_project_is_404(self, client):
        assert (await client.get("/projects/999")).status_code == 404
        assert (await client.patch("/projects/999", json={"name": "x"})).status_code == 404
        assert (await client.patch("/projects/999/status", json={"status": "completed"})).status_code == 404
        assert (await client.delete("/projects/999")).status_code == 404
        assert (await client.post("/projects/999/analyze")).status_code == 404
        assert (await client.post("/projects/999/report")).status_code == 404

    @pytest.mark.asyncio
    async def test_patch_regenerates_on_panel_change(self, client, project_payload):
        created = await create(client, project_payload)

        response = await client.patch(f"/projects/{created['id']}", json={"panel_count": 6})

        body = response.json()
        assert response.status_code == 200
        assert body["panel_count"] == 6
        assert body["string_configuration"] == "2x2"
        assert "MC4 connectors (3 pairs)" in [i["title"] for i in body["checklist_items"]]

    @pytest.mark.asyncio
    async def test_platform_access_fields_round_trip(self, client, project_payload):
        created = await create(
            client,
            {
                **project_payload,
                "platform_url": "https://monitor.example.com",
                "platform_login": "warehouse01",
                "platform_notes": "Gateway behind the main panel",
            },
        )

        body = (await client.get(f"/projects/{created['id']}")).json()

        assert body["platform_url"] == "https://monitor.example.com"
        assert body["platform_login"] == "warehouse01"
        assert body["platform_notes"] == "Gateway behind the main panel"

    @pytest.mark.asyncio
    async def test_full_edit_form_payload(self, client, project_payload):
        """Every field at once, as the dashboard edit form sends it."""
        created = await create(client, project_payload)
        item_id = created["checklist_items"][0]["id"]
        await client.patch(f"/checklist-items/{item_id}", json={"is_completed": True})

        response = await client.patch(
            f"/projects/{created['id']}",
            json={
                "name": "North warehouse extension",
                "panel_count": 20,
                "inverter_power_kw": 11.0,
                "roof_type": "fiber-cement",
                "status": "in-progress",
                "inverter_brand": "Fronius",
                "installer": "Ana",
                "address": None,
                "phone": "555-0100",
                "installation_date": "2026-11-03",
                "platform_url": "https://monitor.example.com",
                "platform_login": "warehouse01",
                "platform_notes": None,
            },
        )

        body = response.json()
        titles = [i["title"] for i in body["checklist_items"]]
        assert response.status_code == 200
        assert body["name"] == "North warehouse extension"
        assert body["installation_date"] == "2026-11-03"
        assert body["platform_login"] == "warehouse01"
        assert body["total_items"] == 12
        assert "Structural reinforcement" in titles
        assert body["checklist_items"][0]["is_completed"] is True
        assert body["completed_items"] == 1

    @pytest.mark.asyncio
    async def test_status_endpoint(self, client, project_payload):
        created = await create(client, project_payload)

        response = await client.patch(
            f"/projects/{created['id']}/status", json={"status": "in-progress"}
        )
        invalid = await client.patch(
            f"/projects/{created['id']}/status", json={"status": "archived"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "in-progress"
        assert invalid.status_code == 422

    @pytest.mark.asyncio
    async def test_delete(self, client, project_payload):
        created = await create(client, project_payload)

        response = await client.delete(f"/projects/{created['id']}")

        assert response.status_code == 200
        assert (await client.get(f"/projects/{created['id']}")).status_code == 404


class TestChecklistItemRoutes:
    """Test /checklist-items endpoints."""

    @pytest.mark.asyncio
    async def test_toggle_moves_project_to_in_progress(self, client, project_payload):
        created = await create(client, project_payload)
        item_id = created["checklist_items"][0]["id"]

        response = await client.patch(f"/checklist-items/{item_id}", json={"is_completed": True})
        project = (await client.get(f"/projects/{created['id']}")).json()

        assert response.status_code == 200
        assert response.json()["is_completed"] is True
        assert project["status"] == "in-progress"
        assert project["completed_items"] == 1
        assert project["progress_percent"] == 9

    @pytest.mark.asyncio
    async def test_missing_item_is_404(self, client):
        response = await client.patch("/checklist-items/999", json={"is_completed": True})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_body_is_required(self, client, project_payload):
        created = await create(client, project_payload)
        item_id = created["checklist_items"][0]["id"]

        response = await client.patch(f"/checklist-items/{item_id}", json={})

        assert response.status_code == 422


class TestAnalysisRoutes:
    """Test AI endpoints with an analyzer that has no credentials."""

    @pytest.mark.asyncio
    async def test_analyze_falls_back(self, client, project_payload):
        created = await create(client, project_payload)

        response = await client.post(f"/projects/{created['id']}/analyze")

        body = response.json()
        assert response.status_code == 200
        assert body["efficiency_score"] == 85
        assert len(body["recommendations"]) == 3
        assert len(body["installation_tips"]) == 3

    @pytest.mark.asyncio
    async def test_report_falls_back(self, client, project_payload):
        created = await create(client, project_payload)

        response = await client.post(f"/projects/{created['id']}/report")

        report = response.json()["report"]
        assert response.status_code == 200
        assert report.startswith("Technical Report - North warehouse")
        assert "- Solar panels: 20 units" in report


class TestReportRoutes:
    """Test /reports endpoints."""

    @pytest.mark.asyncio
    async def test_summary(self, client, project_payload):
        empty = (await client.get("/reports/summary")).json()
        await create(client, project_payload)

        summary = (await client.get("/reports/summary")).json()

        assert empty["total_projects"] == 0
        assert summary["total_projects"] == 1
        assert summary["planning_projects"] == 1
        assert summary["total_panels"] == 20
        assert summary["total_panel_power_kw"] == 11.0
        assert summary["total_checklist_items"] == 11
        assert summary["completed_checklist_items"] == 0

    @pytest.mark.asyncio
    async def test_export(self, client, project_payload):
        created = await create(client, project_payload)

        response = await client.get(f"/reports/projects/{created['id']}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "attachment" in response.headers["content-disposition"]
        assert response.text.startswith("SOLAR PROJECT REPORT\nNorth warehouse\n")

    @pytest.mark.asyncio
    async def test_export_missing_project_is_404(self, client):
        response = await client.get("/reports/projects/999/export")

        assert response.status_code == 404


class TestHealthRoutes:
    """Test health and root endpoints."""

    @pytest.mark.asyncio
    async def test_ready(self, client):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "database": "ok"}

    @pytest.mark.asyncio
    async def test_live_and_health(self, client):
        live = await client.get("/health/live")
        health = await client.get("/health/")

        assert live.json() == {"status": "alive"}
        assert health.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
