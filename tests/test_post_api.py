"""
Tests for the post API.

Posts are created inside categories created through the API. AI
summaries use fake providers wired through dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

BASE = "/api/v1/posts"


@pytest.fixture
def category_id(client: TestClient) -> int:
    response = client.post("/api/v1/categories", json={"name": "Backend"})
    return response.json()["data"]["id"]


def _create(client: TestClient, category_id: int, title: str = "Hello", content: str = "Body") -> dict:
    response = client.post(BASE, json={"title": title, "content": content, "category_id": category_id})
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreatePost:
    def test_create_returns_201(self, client: TestClient, category_id: int) -> None:
        post = _create(client, category_id, title="First post", content="Some text")
        assert post["title"] == "First post"
        assert post["content"] == "Some text"
        assert post["category_id"] == category_id
        assert post["category_name"] == "Backend"
        assert post["summary"] is None

    def test_unknown_category_is_404(self, client: TestClient) -> None:
        response = client.post(BASE, json={"title": "t", "content": "c", "category_id": 42})
        assert response.status_code == 404
        assert response.json() == {"success": False, "data": None, "message": "Category not found"}

    def test_blank_title_and_missing_category_are_400(self, client: TestClient) -> None:
        response = client.post(BASE, json={"title": "", "content": "c"})
        assert response.status_code == 400
        message = response.json()["message"]
        assert message.startswith("title: ")
        assert ", category_id: Field required" in message


class TestReadPost:
    def test_get_unknown_is_404(self, client: TestClient) -> None:
        response = client.get(f"{BASE}/12345")
        assert response.status_code == 404
        assert response.json()["message"] == "Post not found"

    def test_non_numeric_id_is_400(self, client: TestClient) -> None:
        response = client.get(f"{BASE}/abc")
        assert response.status_code == 400
        assert response.json()["message"].startswith("post_id: ")

    def test_list_filters_by_category(self, client: TestClient, category_id: int) -> None:
        other = client.post("/api/v1/categories", json={"name": "Frontend"}).json()["data"]["id"]
        _create(client, category_id, title="API design")
        _create(client, other, title="CSS grid")

        body = client.get(BASE, params={"category_id": other}).json()["data"]
        assert body["total"] == 1
        assert [post["title"] for post in body["items"]] == ["CSS grid"]

    def test_list_pages(self, client: TestClient, category_id: int) -> None:
        for number in range(3):
            _create(client, category_id, title=f"Post {number}")
        body = client.get(BASE, params={"page": 2, "size": 2}).json()["data"]
        assert body["total"] == 3
        assert body["page"] == 2
        assert len(body["items"]) == 1

    def test_list_unknown_category_is_404(self, client: TestClient) -> None:
        assert client.get(BASE, params={"category_id": 77}).status_code == 404


class TestUpdateAndDeletePost:
    def test_update_moves_category(self, client: TestClient, category_id: int) -> None:
        other = client.post("/api/v1/categories", json={"name": "Ops"}).json()["data"]["id"]
        post = _create(client, category_id)
        response = client.put(
            f"{BASE}/{post['id']}",
            json={"title": "Renamed", "content": "Body", "category_id": other},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Renamed"
        assert data["category_name"] == "Ops"

    def test_update_unknown_is_404(self, client: TestClient, category_id: int) -> None:
        response = client.put(
            f"{BASE}/999", json={"title": "x", "content": "y", "category_id": category_id}
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Post not found"

    def test_delete(self, client: TestClient, category_id: int) -> None:
        post = _create(client, category_id)
        response = client.delete(f"{BASE}/{post['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": None, "message": None}
        assert client.get(f"{BASE}/{post['id']}").status_code == 404

    def test_delete_unknown_is_404(self, client: TestClient) -> None:
        assert client.delete(f"{BASE}/999").status_code == 404


class TestSummarizePost:
    def test_summary_stored_from_first_working_provider(
        self, client: TestClient, category_id: int, fake_providers: list
    ) -> None:
        post = _create(client, category_id, content="Long article text")
        response = client.post(f"{BASE}/{post['id']}/summary", json={"max_sentences": 2})
        assert response.status_code == 200
        assert response.json()["data"]["summary"] == "A short summary of the post."
        assert fake_providers[1].prompts[0].user == "Long article text"

        stored = client.get(f"{BASE}/{post['id']}").json()["data"]
        assert stored["summary"] == "A short summary of the post."

    def test_all_providers_failing_is_502(
        self, client: TestClient, category_id: int, fake_providers: list
    ) -> None:
        for provider in fake_providers:
            provider.fail = True
        post = _create(client, category_id)
        response = client.post(f"{BASE}/{post['id']}/summary", json={})
        assert response.status_code == 502
        assert response.json()["message"] == "All AI providers failed"
        assert client.get(f"{BASE}/{post['id']}").json()["data"]["summary"] is None
