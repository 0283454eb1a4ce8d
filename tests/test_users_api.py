"""Integration tests for user endpoints via TestClient."""

from bson import ObjectId


def _user(store, email):
    return next(u for u in store.collections["users"] if u["email"] == email)


class TestCreateUser:
    def test_new_user_gets_customer_role(self, client, store):
        response = client.post("/users", json={"email": "c@x.com", "name": "Carol"})

        assert response.status_code == 200
        body = response.json()
        assert body["acknowledged"] is True
        assert body["insertedId"] == _user(store, "c@x.com")["_id"]
        assert _user(store, "c@x.com")["role"] == "customer"

    def test_second_sign_in_inserts_nothing(self, client, store):
        client.post("/users", json={"email": "c@x.com"})
        count = len(store.collections["users"])

        response = client.post("/users", json={"email": "c@x.com"})

        assert response.status_code == 200
        assert response.json()["message"] == "user already added"
        assert response.json()["insertedId"] is None
        assert len(store.collections["users"]) == count

    def test_client_cannot_choose_role(self, client):
        response = client.post("/users", json={"email": "c@x.com", "role": "admin"})
        assert response.status_code == 422

    def test_email_is_required(self, client):
        assert client.post("/users", json={"name": "Carol"}).status_code == 422


class TestAdminUserManagement:
    def test_list_users(self, admin_client):
        response = admin_client.get("/users")

        assert response.status_code == 200
        roles = {u["email"]: u["role"] for u in response.json()}
        assert roles == {"a@x.com": "admin", "b@x.com": "customer"}

    def test_list_users_with_unrecognised_role(self, admin_client, store):
        store.collections["users"].append({"_id": str(ObjectId()), "email": "chef@x.com", "role": "chef"})

        response = admin_client.get("/users")

        assert response.status_code == 200
        assert {"email": "chef@x.com", "role": "chef"}.items() <= response.json()[-1].items()

    def test_unrecognised_role_fails_admin_gate(self, client, store):
        store.collections["users"].append({"_id": str(ObjectId()), "email": "chef@x.com", "role": "chef"})
        client.post("/create-token", json={"email": "chef@x.com"})

        assert client.get("/users").status_code == 403

    def test_make_admin(self, admin_client, store):
        user_id = _user(store, "b@x.com")["_id"]

        response = admin_client.patch(f"/users/make-admin/{user_id}")

        assert response.status_code == 200
        assert response.json()["matchedCount"] == 1
        assert response.json()["modifiedCount"] == 1
        assert _user(store, "b@x.com")["role"] == "admin"

    def test_make_admin_missing_user_does_not_insert(self, admin_client, store):
        response = admin_client.patch(f"/users/make-admin/{ObjectId()}")

        assert response.json()["matchedCount"] == 0
        assert response.json()["upsertedCount"] == 0
        assert len(store.collections["users"]) == 2

    def test_delete_user(self, admin_client, store):
        user_id = _user(store, "b@x.com")["_id"]

        response = admin_client.delete(f"/users/{user_id}")

        assert response.json() == {"acknowledged": True, "deletedCount": 1}
        assert [u["email"] for u in store.collections["users"]] == ["a@x.com"]

    def test_promoted_user_passes_admin_gate(self, client, store):
        client.post("/create-token", json={"email": "a@x.com"})
        client.patch(f"/users/make-admin/{_user(store, 'b@x.com')['_id']}")

        client.post("/create-token", json={"email": "b@x.com"})
        assert client.get("/users").status_code == 200


class TestAdminCheck:
    def test_admin_checks_self(self, admin_client):
        response = admin_client.get("/users/admin/a@x.com")
        assert response.status_code == 200
        assert response.json() == {"admin": True}

    def test_customer_checks_self(self, customer_client):
        response = customer_client.get("/users/admin/b@x.com")
        assert response.json() == {"admin": False}

    def test_unregistered_user_is_not_admin(self, client):
        client.post("/create-token", json={"email": "new@x.com"})
        assert client.get("/users/admin/new@x.com").json() == {"admin": False}

    def test_other_email_is_401(self, customer_client):
        response = customer_client.get("/users/admin/a@x.com")

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized Access"}

    def test_requires_token(self, client):
        assert client.get("/users/admin/a@x.com").status_code == 401
