"""
Tests for admin version history endpoints.
"""

import pytest

from rest_api.services.domain import VersionHistoryService


@pytest.fixture
def job_versions(db_session, seed_job):
    """Two versions of seed_job: created (pending), then approved."""
    service = VersionHistoryService(db_session)
    first = service.create_snapshot("job", seed_job, change_type="create", changed_by=1).version
    service.update_with_history("job", seed_job, {"status": "approved"}, changed_by=1)
    second = service.create_snapshot("job", seed_job, changed_by=2).version
    return first, second


class TestVersionHistoryAuth:

    def test_unauthenticated(self, client):
        response = client.get("/api/admin/version-history/stats")
        assert response.status_code == 401

    def test_requires_admin(self, client, moderator_headers):
        response = client.get("/api/admin/version-history/entity-types", headers=moderator_headers)
        assert response.status_code == 403


class TestVersionHistoryEndpoints:

    def test_entity_types(self, client, auth_headers):
        response = client.get("/api/admin/version-history/entity-types", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 18
        assert {"value": "membership-plan", "label": "Membership plan"} in data

    def test_entity_history(self, client, auth_headers, seed_job, job_versions):
        response = client.get(
            f"/api/admin/version-history/job/{seed_job.id}?page=1&limit=2",
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert [v["version"] for v in data["versions"]] == [3, 2]
        assert data["versions"][1]["change_summary"] == ["Status: pending → approved"]
        assert data["versions"][1]["change_type"] == "status_change"

    def test_entity_history_unknown_type(self, client, auth_headers):
        response = client.get("/api/admin/version-history/widget/1", headers=auth_headers)
        assert response.status_code == 400

    def test_get_version(self, client, auth_headers, job_versions):
        first, _ = job_versions

        response = client.get(f"/api/admin/version-history/version/{first.id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == 1
        assert data["snapshot"]["status"] == "pending"
        assert data["metadata"]["title"] == "Head Coach"

    def test_get_version_missing(self, client, auth_headers):
        response = client.get("/api/admin/version-history/version/9999", headers=auth_headers)
        assert response.status_code == 404

    def test_compare(self, client, auth_headers, job_versions):
        first, second = job_versions

        response = client.get(
            f"/api/admin/version-history/compare/{first.id}/{second.id}", headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["differences"] == [
            {"field": "status", "old_value": "pending", "new_value": "approved"}
        ]
        assert data["version1"]["version"] == 1
        assert data["version2"]["version"] == 3

    def test_restore(self, client, auth_headers, seed_job, job_versions):
        first, _ = job_versions

        response = client.post(
            f"/api/admin/version-history/restore/{first.id}", headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Restored to version 1"
        assert data["entity"]["status"] == "pending"
        assert data["version"]["change_type"] == "restore"
        assert data["version"]["restored_from_version"] == 1
        assert data["version"]["changed_by"] == 1
        assert data["version"]["changed_by_email"] == "admin@test.com"

    def test_restore_missing_version(self, client, auth_headers):
        response = client.post("/api/admin/version-history/restore/9999", headers=auth_headers)
        assert response.status_code == 404

    def test_restore_after_entity_deleted(self, client, auth_headers, seed_job, job_versions):
        first, _ = job_versions
        client.delete(f"/api/admin/entities/job/{seed_job.id}", headers=auth_headers)

        response = client.post(
            f"/api/admin/version-history/restore/{first.id}", headers=auth_headers
        )

        assert response.status_code == 410

    def test_recent_and_stats(self, client, auth_headers, job_versions):
        recent = client.get("/api/admin/version-history/recent?changed_by=2", headers=auth_headers)
        stats = client.get("/api/admin/version-history/stats", headers=auth_headers)

        assert recent.status_code == 200
        assert [v["version"] for v in recent.json()["versions"]] == [3]
        assert recent.json()["limit"] == 50

        assert stats.status_code == 200
        assert stats.json()["total_versions"] == 3
        assert stats.json()["by_entity_type"] == {"job": 3}
        assert stats.json()["recent_changes"] == 3

    def test_delete_history(self, client, auth_headers, seed_job, job_versions):
        response = client.delete(f"/api/admin/version-history/job/{seed_job.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["deleted"] == 3

        after = client.get(f"/api/admin/version-history/job/{seed_job.id}", headers=auth_headers)
        assert after.json()["total"] == 0
