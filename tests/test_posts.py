"""Post endpoints: create, list, detail, partial update and delete."""

import pytest

from conftest import assert_bad_request, assert_unauthorized

POSTS = [{"title": f"Post title {i}", "content": f"Post content {i}"} for i in range(1, 16)]


@pytest.fixture
def created_posts(client, auth_headers):
    for post in POSTS:
        response = client.post("/posts", json=post, headers=auth_headers)
        assert response.status_code == 201
    return POSTS


@pytest.mark.parametrize(
    "method, url",
    [
        ("POST", "/posts"),
        ("GET", "/posts"),
        ("GET", "/posts/900"),
        ("PATCH", "/posts/3434"),
        ("DELETE", "/posts/3434"),
    ],
)
def test_unauthorized_without_token(client, method, url):
    assert_unauthorized(client.request(method, url, json={"title": "t", "content": "c"}))


def test_unauthorized_precedes_malformed_input(client):
    response = client.request(
        "PATCH", "/posts/abc", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert_unauthorized(response)


class TestCreatePost:
    def test_validation_messages(self, client, auth_headers):
        response = client.post("/posts", headers=auth_headers)
        assert_bad_request(response, ["title must be a string", "content must be a string"])

    def test_returns_created_post(self, client, auth_headers, registered_user):
        response = client.post("/posts", json=POSTS[0], headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["id"] == 1
        assert data["title"] == POSTS[0]["title"]
        assert data["content"] == POSTS[0]["content"]
        assert data["comments"] == []
        assert data["user_id"] == registered_user["id"]

    def test_malformed_json(self, client, auth_headers):
        response = client.post(
            "/posts",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert_bad_request(response, ["body must be valid JSON"])


class TestListPosts:
    def test_returns_posts_in_id_order(self, client, auth_headers, created_posts):
        response = client.get("/posts", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == len(created_posts)
        for index, post in enumerate(created_posts):
            assert body["data"][index]["id"] == index + 1
            assert body["data"][index]["title"] == post["title"]
            assert body["data"][index]["content"] == post["content"]
            assert body["data"][index]["comments"] == []

    def test_empty(self, client, auth_headers):
        response = client.get("/posts", headers=auth_headers)
        assert response.json() == {"success": True, "data": []}


class TestGetPost:
    def test_returns_each_post(self, client, auth_headers, created_posts):
        for index, post in enumerate(created_posts):
            response = client.get(f"/posts/{index + 1}", headers=auth_headers)
            assert response.status_code == 200
            assert response.json()["data"]["title"] == post["title"]
            assert response.json()["data"]["content"] == post["content"]

    def test_not_found(self, client, auth_headers, created_posts):
        response = client.get("/posts/42", headers=auth_headers)

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        assert body["message"] == "Post not found"

    def test_non_numeric_id(self, client, auth_headers):
        response = client.get("/posts/abc", headers=auth_headers)
        assert_bad_request(response, ["id must be a number conforming to the specified constraints"])

    @pytest.mark.parametrize("method", ["GET", "PATCH", "DELETE"])
    @pytest.mark.parametrize("post_id", ["99999999999999999999", str(2**63), "0", "-1"])
    def test_ids_outside_assigned_range_are_not_found(self, client, auth_headers, created_posts, method, post_id):
        response = client.request(method, f"/posts/{post_id}", json={"title": "t"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["data"] is None


class TestUpdatePost:
    def test_not_found_even_without_body(self, client, auth_headers, created_posts):
        response = client.patch("/posts/42", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["data"] is None

    def test_validation_messages(self, client, auth_headers, created_posts):
        response = client.patch("/posts/1", json={"title": False, "content": 42}, headers=auth_headers)
        assert_bad_request(response, ["title must be a string", "content must be a string"])

    def test_returns_updated_post(self, client, auth_headers, created_posts):
        updated = {"title": "updated title", "content": "updated content"}
        response = client.patch("/posts/1", json=updated, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["title"] == updated["title"]
        assert body["data"]["content"] == updated["content"]

        detail = client.get("/posts/1", headers=auth_headers).json()["data"]
        assert detail["title"] == updated["title"]
        assert detail["content"] == updated["content"]

        listed = next(p for p in client.get("/posts", headers=auth_headers).json()["data"] if p["id"] == 1)
        assert listed["title"] == updated["title"]
        assert listed["content"] == updated["content"]

    def test_partial_patch_keeps_omitted_fields(self, client, auth_headers, created_posts):
        response = client.patch("/posts/2", json={"content": "only content"}, headers=auth_headers)
        assert response.status_code == 200

        detail = client.get("/posts/2", headers=auth_headers).json()["data"]
        assert detail["title"] == created_posts[1]["title"]
        assert detail["content"] == "only content"

    def test_id_is_immutable(self, client, auth_headers, created_posts):
        response = client.patch("/posts/3", json={"id": 99, "title": "x"}, headers=auth_headers)

        assert response.json()["data"]["id"] == 3
        assert client.get("/posts/99", headers=auth_headers).status_code == 404


class TestDeletePost:
    def test_not_found(self, client, auth_headers, created_posts):
        response = client.delete("/posts/42", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["data"] is None

    def test_removes_post(self, client, auth_headers, created_posts):
        response = client.delete("/posts/1", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Post deleted successfully"}

        assert client.get("/posts/1", headers=auth_headers).status_code == 404
        listed = client.get("/posts", headers=auth_headers).json()["data"]
        assert all(p["id"] != 1 for p in listed)
        assert [p["id"] for p in listed] == list(range(2, len(created_posts) + 1))

    def test_deleted_id_is_not_reused(self, client, auth_headers, created_posts):
        last = len(created_posts)
        client.delete(f"/posts/{last}", headers=auth_headers)

        response = client.post("/posts", json={"title": "new", "content": "new"}, headers=auth_headers)
        assert response.json()["data"]["id"] == last + 1

    def test_second_delete_is_not_found(self, client, auth_headers, created_posts):
        assert client.delete("/posts/5", headers=auth_headers).status_code == 200
        assert client.delete("/posts/5", headers=auth_headers).status_code == 404
