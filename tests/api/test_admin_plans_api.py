from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.deps import Settings, get_plan_policies, get_settings
from src.components.plans import PlanPolicy, PlanPolicyStore, load_config_from_rules
from src.rules.loader import load_rules

RULES_TEXT = Path("rules.yaml").read_text()


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(RULES_TEXT)
    return path


@pytest.fixture
def policies(app: FastAPI, rules_file: Path) -> PlanPolicyStore:
    """A policy store private to the test, reading rules from a temp file."""
    store = PlanPolicyStore(PlanPolicy(load_config_from_rules(load_rules(rules_file))))
    settings = Settings()
    settings.rules_path = rules_file
    app.dependency_overrides[get_plan_policies] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    return store


def test_requires_admin(client: TestClient, policies, free_headers) -> None:
    assert client.post("/api/admin/plans/reload").status_code == 401
    assert client.post("/api/admin/plans/reload", headers=free_headers).status_code == 403
    assert client.get("/api/admin/plans", headers=free_headers).status_code == 403


def test_current_policy(client: TestClient, policies, admin_headers) -> None:
    body = client.get("/api/admin/plans", headers=admin_headers).json()
    assert body["pricing_mode"] == "freemium"
    assert body["plans"]["free"]["projects"] == 6
    assert body["plans"]["pro"]["templates_access"] == "all"


def test_reload_applies_new_limits(
    client: TestClient, policies, rules_file: Path, admin_headers, free_headers
) -> None:
    rules_file.write_text(RULES_TEXT.replace("    projects: 6\n", "    projects: 3\n"))

    response = client.post("/api/admin/plans/reload", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["plans"]["free"]["projects"] == 3

    mine = client.get("/api/me/limits", headers=free_headers).json()
    assert mine["projects"] == 3


def test_switch_to_free_pricing(
    client: TestClient, policies, rules_file: Path, admin_headers, free_headers
) -> None:
    rules_file.write_text(RULES_TEXT.replace("mode: freemium", "mode: free"))

    assert client.post("/api/admin/plans/reload", headers=admin_headers).status_code == 200

    mine = client.get("/api/me/limits", headers=free_headers).json()
    assert mine["watermark"] is False
    assert mine["templates_access"] == "all"


def test_invalid_rules_keep_current_policy(
    client: TestClient, policies, rules_file: Path, admin_headers
) -> None:
    before = policies.current()
    rules_file.write_text("plans: [")

    response = client.post("/api/admin/plans/reload", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["code"] == "invalid_rules"
    assert policies.current() is before
