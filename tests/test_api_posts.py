import uuid

import pytest


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def walt(register, login):
    user = register()
    user["token"] = login().get_json()["token"]
    return user


@pytest.fixture
def jesse(register, login):
    user = register(email="jesse@example.com")
    user["token"] = login(email="jesse@example.com").get_json()["token"]
    return user


def create(client, user, body):
    return client.post("/api/posts", json={"body": body}, headers=bearer(user["token"]))


class TestCreatePost:
    def test_create_as_token_owner(self, client, walt):
        resp = create(client, walt, "I am the one who knocks")

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["user_id"] == walt["id"]
        assert body["body"] == "I am the one who knocks"

    def test_profanity_is_censored(self, client, walt):
        resp = create(client, walt, "What a Kerfuffle this sharbert is, fornax!")
        # punctuation-attached words are left alone
        assert resp.get_json()["body"] == "What a **** this **** is, fornax!"

    def test_too_long(self, client, walt):
        resp = create(client, walt, "x" * 141)

        assert resp.status_code == 422
        assert "body" in resp.get_json()["details"]

    def test_exactly_max_length(self, client, walt):
        assert create(client, walt, "x" * 140).status_code == 201

    def test_requires_valid_access_token(self, client, walt):
        assert client.post("/api/posts", json={"body": "hi"}).status_code == 401
        resp = client.post("/api/posts", json={"body": "hi"}, headers=bearer("not.a.valid.jwt"))
        assert resp.status_code == 401

    def test_token_of_deleted_account_is_unauthorized(self, client, walt):
        assert client.post("/admin/reset").status_code == 200

        resp = create(client, walt, "still here?")

        assert resp.status_code == 401
        assert resp.get_json()["message"] == "Unauthorized"
        assert client.get("/api/posts").get_json() == []


class TestReadPosts:
    def test_list_in_creation_order(self, client, walt, jesse):
        for text in ("one", "two", "three"):
            create(client, walt, text)

        resp = client.get("/api/posts")
        assert [p["body"] for p in resp.get_json()] == ["one", "two", "three"]

        resp = client.get("/api/posts?sort=desc")
        assert [p["body"] for p in resp.get_json()] == ["three", "two", "one"]

    def test_filter_by_author(self, client, walt, jesse):
        create(client, walt, "from walt")
        create(client, jesse, "from jesse")

        resp = client.get(f"/api/posts?author_id={jesse['id']}")
        assert [p["body"] for p in resp.get_json()] == ["from jesse"]

    def test_bad_sort(self, client):
        assert client.get("/api/posts?sort=sideways").status_code == 400

    def test_get_single(self, client, walt):
        post = create(client, walt, "say my name").get_json()

        resp = client.get(f"/api/posts/{post['id']}")
        assert resp.status_code == 200
        assert resp.get_json()["body"] == "say my name"

    def test_get_missing(self, client):
        assert client.get(f"/api/posts/{uuid.uuid4()}").status_code == 404

    def test_get_bad_id(self, client):
        assert client.get("/api/posts/not-a-uuid").status_code == 400


class TestDeletePost:
    def test_owner_can_delete(self, client, walt):
        post = create(client, walt, "temporary").get_json()

        resp = client.delete(f"/api/posts/{post['id']}", headers=bearer(walt["token"]))
        assert resp.status_code == 204
        assert client.get(f"/api/posts/{post['id']}").status_code == 404

    def test_other_user_is_forbidden(self, client, walt, jesse):
        post = create(client, walt, "mine").get_json()

        resp = client.delete(f"/api/posts/{post['id']}", headers=bearer(jesse["token"]))
        assert resp.status_code == 403
        assert client.get(f"/api/posts/{post['id']}").status_code == 200

    def test_delete_missing(self, client, walt):
        resp = client.delete(f"/api/posts/{uuid.uuid4()}", headers=bearer(walt["token"]))
        assert resp.status_code == 404

    def test_delete_requires_token(self, client, walt):
        post = create(client, walt, "mine").get_json()
        assert client.delete(f"/api/posts/{post['id']}").status_code == 401
