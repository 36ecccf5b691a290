from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_templates(client: TestClient) -> None:
    response = client.get("/api/templates")
    assert response.status_code == 200
    ids = {t["id"] for t in response.json()}
    assert ids == {"devfolio", "designstudio", "minimal"}


def test_filter_by_category(client: TestClient) -> None:
    response = client.get("/api/templates", params={"category": "designer"})
    assert [t["id"] for t in response.json()] == ["designstudio"]


def test_unknown_category_rejected(client: TestClient) -> None:
    assert client.get("/api/templates", params={"category": "chef"}).status_code == 422


def test_get_by_slug(client: TestClient) -> None:
    body = client.get("/api/templates/devfolio").json()
    assert body["category"] == "developer"
    assert body["available_pages"][0] == "home"
    assert body["features"] == {"project_detail": True, "dark_mode": True}
    assert client.get("/api/templates/nope").status_code == 404


def test_my_limits(client: TestClient, free_headers, pro_headers) -> None:
    free = client.get("/api/me/limits", headers=free_headers).json()
    assert free["plan"] == "free"
    assert free["projects"] == 6
    assert free["watermark"] is True
    assert free["templates_access"] == ["designstudio", "devfolio", "minimal"]

    pro = client.get("/api/me/limits", headers=pro_headers).json()
    assert pro["templates_access"] == "all"
    assert pro["dark_mode"] is True


def test_limits_require_auth(client: TestClient) -> None:
    assert client.get("/api/me/limits").status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/me/limits", headers=bad).status_code == 401
