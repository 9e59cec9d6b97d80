"""Tests for banner and announcement API endpoints."""

from fastapi.testclient import TestClient

BANNER = {
    "desktop_img": "https://cdn.example.com/d.png",
    "mobile_img": "https://cdn.example.com/m.png",
    "heading": "Spring Sale",
    "cta": {"text": "Shop now", "link": "/products"},
}


class TestBannersApi:
    """Tests for /banners."""

    def test_create_and_list_active(self, client: TestClient) -> None:
        response = client.post("/banners", json=BANNER)
        assert response.status_code == 201
        assert response.json()["status"] == "active"
        assert response.json()["cta"]["text"] == "Shop now"

        client.post("/banners", json={**BANNER, "heading": "Draft", "status": "inactive"})

        assert [b["heading"] for b in client.get("/banners/active").json()] == ["Spring Sale"]
        assert len(client.get("/banners").json()) == 2

    def test_heading_too_long(self, client: TestClient) -> None:
        response = client.post("/banners", json={**BANNER, "heading": "x" * 101})
        assert response.status_code == 422

    def test_get_update_delete(self, client: TestClient) -> None:
        banner_id = client.post("/banners", json=BANNER).json()["id"]

        response = client.patch(f"/banners/{banner_id}", json={"order": 2})
        assert response.json()["order"] == 2
        assert response.json()["heading"] == "Spring Sale"

        assert client.delete(f"/banners/{banner_id}").status_code == 200
        assert client.get(f"/banners/{banner_id}").status_code == 404


class TestAnnouncementsApi:
    """Tests for /announcements."""

    def test_create_defaults(self, client: TestClient) -> None:
        response = client.post(
            "/announcements",
            json={"title": "Free shipping", "message": "On orders over $50"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "info"
        assert data["link_text"] == "Learn More"
        assert data["background_color"] == "#1e40af"
        assert data["text_color"] == "#ffffff"
        assert data["start_date"] is not None
        assert data["end_date"] is None

    def test_active_window(self, client: TestClient) -> None:
        client.post(
            "/announcements",
            json={"title": "Live", "message": "m", "start_date": "2020-01-01T00:00:00"},
        )
        client.post(
            "/announcements",
            json={
                "title": "Over",
                "message": "m",
                "start_date": "2020-01-01T00:00:00",
                "end_date": "2021-01-01T00:00:00",
            },
        )
        client.post(
            "/announcements",
            json={"title": "Later", "message": "m", "start_date": "2999-01-01T00:00:00"},
        )

        assert [a["title"] for a in client.get("/announcements/active").json()] == ["Live"]
        assert len(client.get("/announcements").json()) == 3

    def test_invalid_type(self, client: TestClient) -> None:
        response = client.post(
            "/announcements",
            json={"title": "t", "message": "m", "type": "shout"},
        )
        assert response.status_code == 422

    def test_toggle_update_delete(self, client: TestClient) -> None:
        announcement_id = client.post(
            "/announcements",
            json={"title": "Sale", "message": "m", "start_date": "2020-01-01T00:00:00"},
        ).json()["id"]

        response = client.patch(f"/announcements/{announcement_id}/toggle")
        assert response.json()["is_active"] is False
        assert client.get("/announcements/active").json() == []

        response = client.patch(f"/announcements/{announcement_id}", json={"priority": 3})
        assert response.json()["priority"] == 3

        assert client.delete(f"/announcements/{announcement_id}").status_code == 200
        assert client.get(f"/announcements/{announcement_id}").status_code == 404
