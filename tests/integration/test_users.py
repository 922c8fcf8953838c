import pytest

from tests.conftest import ADMIN_ROLE_ID, login, register_user


def test_register_returns_user_without_password(client):
    resp = register_user(client, email="Jane@Example.com", username="jane")

    assert resp.status_code == 201, resp.text
    user = resp.json()
    assert user["email"] == "jane@example.com"
    assert user["username"] == "jane"
    assert user["roles_id"] == ADMIN_ROLE_ID
    assert user["role"]["role_name"] == "admin"
    assert user["is_active"] is True
    assert "password" not in user


def test_duplicate_email_is_rejected(client):
    assert register_user(client).status_code == 201

    resp = register_user(client, email="ADMIN@example.com")

    assert resp.status_code == 409
    assert resp.json() == {"error": "Email Already in Use"}


@pytest.mark.parametrize(
    "password, message",
    [
        ("short", "password needs to be at least 8 characters long"),
        ("secret123!", "Password Not Compliant: min 1 Maj"),
        ("Secret1234", "Password Not Compliant: min 1 special"),
    ],
)
def test_weak_password_is_rejected_with_rule_message(client, password, message):
    resp = register_user(client, password=password)

    assert resp.status_code == 400
    assert resp.json() == {"error": message}


def test_unknown_role_is_rejected(client):
    resp = register_user(client, roles_id=999)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Role not found"}


def test_invalid_email_is_invalid_data(client):
    resp = register_user(client, email="not-an-email")

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid Data"}


def test_list_and_get_users(client, auth_headers):
    users = client.get("/users", headers=auth_headers).json()
    assert [u["email"] for u in users] == ["admin@example.com"]

    resp = client.get(f"/users/{users[0]['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["role"]["id"] == ADMIN_ROLE_ID


def test_get_missing_user(client, auth_headers):
    resp = client.get("/users/999", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


@pytest.mark.parametrize("bad_id", ["abc", "0", "-3"])
def test_malformed_id_is_invalid_id(client, auth_headers, bad_id):
    resp = client.get(f"/users/{bad_id}", headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid ID"}


def test_partial_update_keeps_other_fields(client, auth_headers):
    user_id = client.get("/users", headers=auth_headers).json()[0]["id"]

    resp = client.put(f"/users/{user_id}", json={"username": "boss"}, headers=auth_headers)

    assert resp.status_code == 200, resp.text
    assert resp.json()["username"] == "boss"
    assert resp.json()["email"] == "admin@example.com"


def test_update_password_is_policy_checked_and_rehashed(client, auth_headers):
    user_id = client.get("/users", headers=auth_headers).json()[0]["id"]

    weak = client.put(f"/users/{user_id}", json={"password": "weak"}, headers=auth_headers)
    assert weak.status_code == 400

    ok = client.put(f"/users/{user_id}", json={"password": "Changed456!"}, headers=auth_headers)
    assert ok.status_code == 200

    assert login(client).status_code == 401
    assert login(client, password="Changed456!").status_code == 200


def test_update_email_must_stay_unique(client, auth_headers):
    register_user(client, email="other@example.com", username="other")
    users = client.get("/users", headers=auth_headers).json()
    other_id = users[1]["id"]

    taken = client.put(f"/users/{other_id}", json={"email": "admin@example.com"}, headers=auth_headers)
    assert taken.status_code == 409
    assert taken.json() == {"error": "Email Already in Use"}

    # Re-sending one's own email is not a conflict
    same = client.put(f"/users/{other_id}", json={"email": "other@example.com"}, headers=auth_headers)
    assert same.status_code == 200


def test_update_role_returns_new_nested_role(client, auth_headers):
    cashier = client.post("/roles", json={"role_name": "cashier"}, headers=auth_headers).json()
    user_id = client.get("/users", headers=auth_headers).json()[0]["id"]

    resp = client.put(f"/users/{user_id}", json={"roles_id": cashier["id"]}, headers=auth_headers)

    assert resp.status_code == 200, resp.text
    assert resp.json()["roles_id"] == cashier["id"]
    assert resp.json()["role"]["id"] == cashier["id"]
    assert resp.json()["role"]["role_name"] == "cashier"


def test_update_to_unknown_role_is_rejected(client, auth_headers):
    user_id = client.get("/users", headers=auth_headers).json()[0]["id"]

    resp = client.put(f"/users/{user_id}", json={"roles_id": 42}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Role not found"}


def test_delete_user(client, auth_headers):
    register_user(client, email="temp@example.com", username="temp")
    temp_id = client.get("/users", headers=auth_headers).json()[1]["id"]

    resp = client.delete(f"/users/{temp_id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "User deleted"}

    assert client.get(f"/users/{temp_id}", headers=auth_headers).status_code == 404
    assert client.delete(f"/users/{temp_id}", headers=auth_headers).status_code == 404
