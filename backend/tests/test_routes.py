"""
BlogNest Backend — HTTP Endpoint Tests
========================================

What:  The JSON envelope, payload keys and status codes of every endpoint.
How:   HTTPX AsyncClient over ASGITransport against create_app() wired to the
       per-test SQLite store.
"""

import uuid

import pytest

API = "/api/v1"


async def _register(client, username="alice", email="a@x.com", password="pw123"):
    response = await client.post(
        f"{API}/user/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def _create_blog(client, user_id, title="T"):
    response = await client.post(
        f"{API}/blog/create-blog",
        json={"title": title, "description": "D", "image": "img.png", "user": user_id},
    )
    assert response.status_code == 201, response.text
    return response.json()["newBlog"]


class TestUserEndpoints:

    @pytest.mark.asyncio
    async def test_register_envelope_has_no_password(self, test_client):
        response = await test_client.post(
            f"{API}/user/register",
            json={"username": "alice", "email": "a@x.com", "password": "pw123"},
        )

        body = response.json()
        assert response.status_code == 201
        assert body["success"] is True
        assert body["message"]
        assert body["user"]["username"] == "alice"
        assert set(body["user"]) == {"id", "username", "email", "blogs", "createdAt", "updatedAt"}
        assert "pw123" not in response.text
        assert "$2b$" not in response.text

    @pytest.mark.asyncio
    async def test_register_duplicate_is_409(self, test_client):
        await _register(test_client)

        response = await test_client.post(
            f"{API}/user/register",
            json={"username": "again", "email": "a@x.com", "password": "x"},
        )

        body = response.json()
        assert response.status_code == 409
        assert body["success"] is False
        assert body["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_register_missing_field_is_400(self, test_client):
        response = await test_client.post(
            f"{API}/user/register", json={"username": "alice", "email": "a@x.com"}
        )

        body = response.json()
        assert response.status_code == 400
        assert body["success"] is False
        assert body["error"] == "validation_error"
        assert body["details"]["fields"] == ["password"]

    @pytest.mark.asyncio
    async def test_register_blank_field_is_400(self, test_client):
        response = await test_client.post(
            f"{API}/user/register", json={"username": " ", "email": "a@x.com", "password": "pw"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["username"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [("username", "u" * 101), ("email", "e" * 250 + "@x.com")],
    )
    async def test_register_too_long_field_is_400(self, test_client, field, value):
        body = {"username": "alice", "email": "a@x.com", "password": "pw123"}
        body[field] = value

        response = await test_client.post(f"{API}/user/register", json=body)

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == [field]

    @pytest.mark.asyncio
    async def test_register_oversized_password_is_400(self, test_client):
        response = await test_client.post(
            f"{API}/user/register",
            json={"username": "alice", "email": "a@x.com", "password": "p" * 5000},
        )

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["password"]

    @pytest.mark.asyncio
    async def test_login_success_and_failure(self, test_client):
        user = await _register(test_client)

        ok = await test_client.post(f"{API}/user/login", json={"email": "a@x.com", "password": "pw123"})
        bad = await test_client.post(f"{API}/user/login", json={"email": "a@x.com", "password": "wrong"})

        assert ok.status_code == 200
        assert ok.json()["user"]["id"] == user["id"]
        assert bad.status_code == 401
        assert bad.json()["success"] is False
        assert bad.json()["error"] == "auth_error"

    @pytest.mark.asyncio
    async def test_get_all_users(self, test_client):
        await _register(test_client)
        await _register(test_client, "bob", "b@x.com")

        response = await test_client.get(f"{API}/user/get-all-user")

        body = response.json()
        assert response.status_code == 200
        assert body["userCount"] == 2
        assert [u["username"] for u in body["users"]] == ["alice", "bob"]


class TestBlogEndpoints:

    @pytest.mark.asyncio
    async def test_create_blog(self, test_client):
        user = await _register(test_client)

        response = await test_client.post(
            f"{API}/blog/create-blog",
            json={"title": "T", "description": "D", "image": "img.png", "user": user["id"]},
        )

        body = response.json()
        assert response.status_code == 201
        assert body["success"] is True
        assert body["newBlog"]["title"] == "T"
        assert body["newBlog"]["user"] == user["id"]

    @pytest.mark.asyncio
    async def test_create_blog_missing_field_is_400(self, test_client):
        user = await _register(test_client)

        response = await test_client.post(
            f"{API}/blog/create-blog",
            json={"title": "T", "description": "D", "user": user["id"]},
        )

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["image"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,limit", [("title", 255), ("image", 2048)])
    async def test_create_blog_too_long_field_is_400(self, test_client, field, limit):
        user = await _register(test_client)
        body = {"title": "T", "description": "D", "image": "img.png", "user": user["id"]}
        body[field] = "x" * (limit + 1)

        response = await test_client.post(f"{API}/blog/create-blog", json=body)

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == [field]

    @pytest.mark.asyncio
    async def test_update_blog_too_long_title_is_400(self, test_client):
        user = await _register(test_client)
        blog = await _create_blog(test_client, user["id"])

        response = await test_client.put(
            f"{API}/blog/update-blog/{blog['id']}", json={"title": "x" * 256}
        )

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["title"]

    @pytest.mark.asyncio
    async def test_timestamps_carry_utc_offset(self, test_client):
        user = await _register(test_client)
        await _create_blog(test_client, user["id"])

        listing = await test_client.get(f"{API}/blog/get-all-blogs")

        blog = listing.json()["blogs"][0]
        for stamp in (blog["createdAt"], blog["updatedAt"], blog["user"]["createdAt"]):
            assert stamp.endswith(("Z", "+00:00")), stamp

    @pytest.mark.asyncio
    async def test_create_blog_unknown_user_is_404(self, test_client):
        response = await test_client.post(
            f"{API}/blog/create-blog",
            json={"title": "T", "description": "D", "image": "i", "user": str(uuid.uuid4())},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

        listing = await test_client.get(f"{API}/blog/get-all-blogs")
        assert listing.json()["Blogcount"] == 0

    @pytest.mark.asyncio
    async def test_get_all_blogs_expands_author(self, test_client):
        user = await _register(test_client)
        await _create_blog(test_client, user["id"])

        response = await test_client.get(f"{API}/blog/get-all-blogs")

        body = response.json()
        assert response.status_code == 200
        assert body["Blogcount"] == 1
        assert body["blogs"][0]["user"]["username"] == "alice"
        assert "password" not in body["blogs"][0]["user"]

    @pytest.mark.asyncio
    async def test_update_blog(self, test_client):
        user = await _register(test_client)
        blog = await _create_blog(test_client, user["id"])

        response = await test_client.put(
            f"{API}/blog/update-blog/{blog['id']}",
            json={"title": "X", "user": str(uuid.uuid4())},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["blog"]["title"] == "X"
        assert body["blog"]["description"] == "D"
        assert body["blog"]["user"] == user["id"]

    @pytest.mark.asyncio
    async def test_update_unknown_blog_is_404(self, test_client):
        response = await test_client.put(
            f"{API}/blog/update-blog/{uuid.uuid4()}", json={"title": "X"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_blog_and_delete(self, test_client):
        user = await _register(test_client)
        blog = await _create_blog(test_client, user["id"])

        found = await test_client.get(f"{API}/blog/get-blog/{blog['id']}")
        deleted = await test_client.delete(f"{API}/blog/delete-blog/{blog['id']}")
        gone = await test_client.get(f"{API}/blog/get-blog/{blog['id']}")
        again = await test_client.delete(f"{API}/blog/delete-blog/{blog['id']}")

        assert found.status_code == 200
        assert found.json()["blog"]["id"] == blog["id"]
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Blog deleted"}
        assert gone.status_code == 404
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_user_blog(self, test_client):
        user = await _register(test_client)
        blog = await _create_blog(test_client, user["id"])

        response = await test_client.get(f"{API}/blog/user-blog/{user['id']}")

        body = response.json()
        assert response.status_code == 200
        assert body["userBlog"]["id"] == user["id"]
        assert [b["id"] for b in body["userBlog"]["blogs"]] == [blog["id"]]

    @pytest.mark.asyncio
    async def test_user_blog_unknown_user_is_404(self, test_client):
        response = await test_client.get(f"{API}/blog/user-blog/{uuid.uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        response = await test_client.get(f"{API}/blog/get-blog/not-an-id")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get(
            f"{API}/blog/get-all-blogs", headers={"X-Request-ID": "abc123"}
        )
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_error_envelope_carries_request_id(self, test_client):
        response = await test_client.get(
            f"{API}/blog/get-blog/{uuid.uuid4()}", headers={"X-Request-ID": "trace-1"}
        )
        assert response.json()["request_id"] == "trace-1"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, test_client):
        response = await test_client.get(f"{API}/nope")

        assert response.status_code == 404
        assert response.json()["success"] is False
