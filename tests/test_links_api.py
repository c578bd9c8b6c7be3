import pytest
from unittest.mock import patch

from tinylink.core.errors import CodeGenerationExhausted
from tinylink.models.models import Link
from tinylink.services.codegen import is_valid_code


def test_shorten_url(client):
    """Test creating a short link with a generated code."""
    response = client.post("/api/links", json={"targetUrl": "https://example.com/page"})

    assert response.status_code == 201
    data = response.json()
    assert set(data) == {"id", "code", "targetUrl", "clickCount", "lastClickedAt", "createdAt"}
    assert is_valid_code(data["code"])
    assert data["targetUrl"] == "https://example.com/page"
    assert data["clickCount"] == 0
    assert data["lastClickedAt"] is None


def test_shorten_url_custom_code(client):
    response = client.post(
        "/api/links", json={"targetUrl": "https://example.com", "code": "Custom12"}
    )

    assert response.status_code == 201
    assert response.json()["code"] == "Custom12"


def test_shorten_url_code_conflict(client, test_link):
    response = client.post(
        "/api/links", json={"targetUrl": "https://example.com", "code": "test123"}
    )

    assert response.status_code == 409
    assert "test123" in response.json()["detail"]


def test_shorten_url_invalid_url(client, db_session):
    response = client.post("/api/links", json={"targetUrl": "not a url"})

    assert response.status_code == 400
    assert db_session.query(Link).count() == 0


def test_shorten_url_invalid_code(client):
    response = client.post("/api/links", json={"targetUrl": "https://example.com", "code": "a!"})
    assert response.status_code == 400


@pytest.mark.parametrize("payload", [{}, {"code": "abc123"}, {"targetUrl": 12}])
def test_shorten_url_malformed_body(client, payload):
    """Request bodies failing schema validation are reported as 400."""
    response = client.post("/api/links", json=payload)

    assert response.status_code == 400
    assert isinstance(response.json()["detail"], list)


def test_shorten_url_generation_exhausted(client):
    with patch(
        "tinylink.services.link_service.allocate_unique_code",
        side_effect=CodeGenerationExhausted(10),
    ):
        response = client.post("/api/links", json={"targetUrl": "https://example.com"})

    assert response.status_code == 503
    assert response.headers["retry-after"] == "1"


def test_get_link_info(client, test_link):
    response = client.get("/api/links/test123")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == test_link.id
    assert data["code"] == "test123"
    assert data["targetUrl"] == "https://example.com/landing"
    assert "deleted" not in data


def test_get_link_not_found(client, make_link):
    make_link("gone123", deleted=True)

    assert client.get("/api/links/nothere").status_code == 404
    assert client.get("/api/links/gone123").status_code == 404


def test_delete_link(client, test_link):
    response = client.delete("/api/links/test123")

    assert response.status_code == 204
    assert client.get("/api/links/test123").status_code == 404
    assert client.delete("/api/links/test123").status_code == 404


def test_delete_link_not_found(client):
    response = client.delete("/api/links/nothere")
    assert response.status_code == 404


def test_list_links(client, make_link):
    make_link("aaa111", click_count=3)
    make_link("bbb222", click_count=0)
    make_link("ccc333", click_count=7)
    make_link("ddd444", click_count=50, deleted=True)

    response = client.get("/api/links")

    assert response.status_code == 200
    data = response.json()
    assert data["linksCount"] == 3
    assert data["totalClicks"] == 10
    assert data["averageClicks"] == pytest.approx(10 / 3)
    assert [link["code"] for link in data["links"]] == ["ccc333", "bbb222", "aaa111"]


def test_list_links_empty(client):
    response = client.get("/api/links")

    assert response.status_code == 200
    assert response.json() == {
        "linksCount": 0,
        "totalClicks": 0,
        "averageClicks": 0.0,
        "links": [],
    }


def test_create_then_list(client):
    created = client.post("/api/links", json={"targetUrl": "https://example.com"}).json()

    data = client.get("/api/links").json()
    assert data["linksCount"] == 1
    assert data["links"][0]["code"] == created["code"]


def test_shorten_url_reserved_code(client):
    """A code shadowed by /healthz is refused and /healthz keeps serving health."""
    response = client.post(
        "/api/links", json={"targetUrl": "https://example.com", "code": "healthz"}
    )

    assert response.status_code == 409
    health = client.get("/healthz", follow_redirects=False)
    assert health.status_code == 200
    assert "location" not in health.headers


def test_shorten_url_empty_code(client):
    response = client.post("/api/links", json={"targetUrl": "https://example.com", "code": ""})
    assert response.status_code == 400
