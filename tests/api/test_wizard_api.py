"""
Wizard and public page flow over HTTP.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

ADA = {"name": "Ada Lovelace", "title": "Engineer", "bio": "Building things."}


def project(idx: int) -> dict[str, Any]:
    return {
        "id": f"p{idx}",
        "title": f"Project {idx}",
        "short_description": "A project worth describing at length.",
        "techs": ["Python"],
    }


def walk_to_publish(client: TestClient, headers: dict[str, str], template_id: str) -> str:
    draft_id = client.post("/api/wizard", headers=headers).json()["id"]
    assert client.post(
        f"/api/wizard/{draft_id}/template", json={"template_id": template_id}, headers=headers
    ).status_code == 200
    client.post(f"/api/wizard/{draft_id}/next", headers=headers)

    payloads = [ADA, [], [project(1)], [], {}, {}]
    sections = ["personal", "experience", "projects", "skills", "socials", "theme"]
    for section, payload in zip(sections, payloads, strict=True):
        response = client.put(
            f"/api/wizard/{draft_id}/sections/{section}", json=payload, headers=headers
        )
        assert response.status_code == 200, response.json()
        response = client.post(f"/api/wizard/{draft_id}/next", headers=headers)
        assert response.status_code == 200, response.json()

    assert response.json()["current_step"] == 8
    return draft_id


class TestWizardSteps:
    def test_start_and_get(self, client: TestClient, free_headers) -> None:
        response = client.post("/api/wizard", headers=free_headers)
        assert response.status_code == 201
        draft = response.json()
        assert draft["current_step"] == 1
        assert draft["owner_id"] == "acct-free"

        fetched = client.get(f"/api/wizard/{draft['id']}", headers=free_headers)
        assert fetched.json()["id"] == draft["id"]

    def test_other_account_cannot_see_draft(
        self, client: TestClient, free_headers, pro_headers
    ) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        assert client.get(f"/api/wizard/{draft_id}", headers=pro_headers).status_code == 404

    def test_next_requires_template(self, client: TestClient, free_headers) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        response = client.post(f"/api/wizard/{draft_id}/next", headers=free_headers)
        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["field"] == "template_id"

    def test_invalid_section_payload(self, client: TestClient, free_headers) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        response = client.put(
            f"/api/wizard/{draft_id}/sections/personal",
            json={**ADA, "bio": "x" * 201},
            headers=free_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["field"] == "personal.bio"

    def test_unknown_section(self, client: TestClient, free_headers) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        response = client.put(
            f"/api/wizard/{draft_id}/sections/hobbies", json={}, headers=free_headers
        )
        assert response.status_code == 404

    def test_project_quota_needs_upgrade(self, client: TestClient, free_headers) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        response = client.put(
            f"/api/wizard/{draft_id}/sections/projects",
            json=[project(i) for i in range(7)],
            headers=free_headers,
        )
        assert response.status_code == 403
        assert response.json()["detail"]["upgrade_required"] is True

    def test_prev_and_discard(self, client: TestClient, free_headers) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        response = client.post(f"/api/wizard/{draft_id}/prev", headers=free_headers)
        assert response.json()["current_step"] == 1

        assert client.delete(f"/api/wizard/{draft_id}", headers=free_headers).status_code == 204
        assert client.get(f"/api/wizard/{draft_id}", headers=free_headers).status_code == 404

    def test_preview_uses_sample_content(self, client: TestClient, free_headers) -> None:
        draft_id = client.post("/api/wizard", headers=free_headers).json()["id"]
        assert client.get(
            f"/api/wizard/{draft_id}/preview", headers=free_headers
        ).status_code == 400

        client.post(
            f"/api/wizard/{draft_id}/template",
            json={"template_id": "designstudio"},
            headers=free_headers,
        )
        response = client.get(f"/api/wizard/{draft_id}/preview/about", headers=free_headers)
        assert response.status_code == 200
        assert "Jordan Rivera" in response.text


class TestSubmitAndPublicPages:
    def test_publish_and_view(self, client: TestClient, free_headers) -> None:
        draft_id = walk_to_publish(client, free_headers, "devfolio")
        response = client.post(
            f"/api/wizard/{draft_id}/submit", json={"slug": "ada"}, headers=free_headers
        )
        assert response.status_code == 201
        portfolio = response.json()["portfolio"]
        assert portfolio["slug"] == "ada"
        assert portfolio["is_published"] is True

        # draft is gone once submitted
        assert client.get(f"/api/wizard/{draft_id}", headers=free_headers).status_code == 404

        home = client.get("/u/ada")
        assert home.status_code == 200
        assert home.headers["content-type"].startswith("text/html")
        assert "Ada Lovelace" in home.text
        assert "Made with Folio" in home.text

        assert client.get("/u/ada/about").status_code == 200
        assert client.get("/u/ada/projects/p1").status_code == 200

    @pytest.mark.parametrize("path", ["/u/nobody", "/u/ada/blog", "/u/ada/projects/zzz"])
    def test_missing_pages_look_alike(self, client: TestClient, free_headers, path) -> None:
        draft_id = walk_to_publish(client, free_headers, "minimal")
        client.post(f"/api/wizard/{draft_id}/submit", json={"slug": "ada"}, headers=free_headers)

        response = client.get(path)
        assert response.status_code == 404
        assert response.text == "Not found"

    def test_slug_conflict_returns_suggestion(
        self, client: TestClient, free_headers, pro_headers
    ) -> None:
        first = walk_to_publish(client, free_headers, "minimal")
        client.post(f"/api/wizard/{first}/submit", json={"slug": "ada"}, headers=free_headers)

        second = walk_to_publish(client, pro_headers, "minimal")
        response = client.post(
            f"/api/wizard/{second}/submit", json={"slug": "ada"}, headers=pro_headers
        )
        assert response.status_code == 409
        assert response.json()["detail"]["suggestion"] == "ada-1"

        # the draft survives a failed submission
        assert client.get(f"/api/wizard/{second}", headers=pro_headers).status_code == 200

    def test_save_unpublished(self, client: TestClient, free_headers) -> None:
        draft_id = walk_to_publish(client, free_headers, "minimal")
        response = client.post(
            f"/api/wizard/{draft_id}/submit",
            json={"slug": "ada", "publish": False},
            headers=free_headers,
        )
        assert response.status_code == 201
        assert response.json()["portfolio"]["is_published"] is False
        assert client.get("/u/ada").status_code == 404
