import pytest


@pytest.fixture
def option(client, auth_headers, product) -> dict:
    resp = client.post(
        "/options",
        json={"product_id": product["id"], "name": "Size", "selection_mode": "single", "is_required": True},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def add_values(client, headers, option_id, *values):
    return client.post(
        f"/options/{option_id}/values",
        json=[{"value": v, "option_price": 0.5} for v in values],
        headers=headers,
    )


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def test_create_option(option, product):
    assert option["product_id"] == product["id"]
    assert option["selection_mode"] == "single"
    assert option["is_required"] is True


def test_selection_mode_is_restricted(client, auth_headers, product):
    resp = client.post(
        "/options",
        json={"product_id": product["id"], "name": "Sauce", "selection_mode": "several"},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "selection_mode must be 'single' or 'multiple'"}


def test_option_requires_existing_product(client, auth_headers):
    resp = client.post(
        "/options",
        json={"product_id": 404, "name": "Size", "selection_mode": "single"},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Product not found"}


def test_option_name_is_unique_per_product(client, auth_headers, category, product, option):
    duplicate = client.post(
        "/options",
        json={"product_id": product["id"], "name": "Size", "selection_mode": "multiple"},
        headers=auth_headers,
    )
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Option already exists for this product"}

    fries = client.post(
        "/products",
        json={"name": "Fries", "category_id": category["id"], "price": 2.0},
        headers=auth_headers,
    ).json()
    elsewhere = client.post(
        "/options",
        json={"product_id": fries["id"], "name": "Size", "selection_mode": "single"},
        headers=auth_headers,
    )
    assert elsewhere.status_code == 201


def test_update_option(client, auth_headers, option):
    resp = client.put(
        f"/options/{option['id']}",
        json={"selection_mode": "multiple", "is_required": False},
        headers=auth_headers,
    )

    assert resp.status_code == 200, resp.text
    assert resp.json()["selection_mode"] == "multiple"
    assert resp.json()["name"] == "Size"


def test_update_option_rejects_bad_mode(client, auth_headers, option):
    resp = client.put(f"/options/{option['id']}", json={"selection_mode": "any"}, headers=auth_headers)

    assert resp.status_code == 400


def test_moving_option_checks_uniqueness_on_target_product(client, auth_headers, category, product, option):
    fries = client.post(
        "/products",
        json={"name": "Fries", "category_id": category["id"], "price": 2.0},
        headers=auth_headers,
    ).json()
    client.post(
        "/options",
        json={"product_id": fries["id"], "name": "Size", "selection_mode": "single"},
        headers=auth_headers,
    )

    resp = client.put(f"/options/{option['id']}", json={"product_id": fries["id"]}, headers=auth_headers)

    assert resp.status_code == 409
    assert resp.json() == {"error": "Option name already exists for this product"}


def test_options_by_product(client, auth_headers, product, option):
    resp = client.get(f"/options/product/{product['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [option["id"]]

    missing = client.get("/options/product/999", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Product not found"}


def test_delete_option_removes_its_values(client, auth_headers, option):
    values = add_values(client, auth_headers, option["id"], "Small", "Large").json()

    resp = client.delete(f"/options/{option['id']}", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Option deleted"}
    assert client.get(f"/options/{option['id']}", headers=auth_headers).status_code == 404
    for value in values:
        assert client.get(f"/options/values/{value['id']}", headers=auth_headers).status_code == 404


# ---------------------------------------------------------------------------
# Option values
# ---------------------------------------------------------------------------

def test_add_values_in_batch(client, auth_headers, option):
    resp = add_values(client, auth_headers, option["id"], "Small", "Medium", "Large")

    assert resp.status_code == 201, resp.text
    assert [v["value"] for v in resp.json()] == ["Small", "Medium", "Large"]
    assert all(v["option_id"] == option["id"] for v in resp.json())

    listed = client.get(f"/options/{option['id']}/values", headers=auth_headers).json()
    assert [v["value"] for v in listed] == ["Small", "Medium", "Large"]


def test_batch_with_internal_duplicate_stores_nothing(client, auth_headers, option):
    resp = add_values(client, auth_headers, option["id"], "Small", "Small")

    assert resp.status_code == 409
    assert resp.json() == {"error": "Value 'Small' already exists for this option"}
    assert client.get(f"/options/{option['id']}/values", headers=auth_headers).json() == []


def test_batch_clashing_with_stored_value_stores_nothing(client, auth_headers, option):
    add_values(client, auth_headers, option["id"], "Large")

    resp = add_values(client, auth_headers, option["id"], "Small", "Large")

    assert resp.status_code == 409
    assert resp.json() == {"error": "Value 'Large' already exists for this option"}
    listed = client.get(f"/options/{option['id']}/values", headers=auth_headers).json()
    assert [v["value"] for v in listed] == ["Large"]


def test_values_body_must_be_an_array(client, auth_headers, option):
    resp = client.post(
        f"/options/{option['id']}/values",
        json={"value": "Small"},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid Data"}


def test_empty_batch_is_rejected(client, auth_headers, option):
    resp = client.post(f"/options/{option['id']}/values", json=[], headers=auth_headers)

    assert resp.status_code == 400


def test_values_for_missing_option(client, auth_headers):
    resp = add_values(client, auth_headers, 999, "Small")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Option not found"}
    assert client.get("/options/999/values", headers=auth_headers).status_code == 404


def test_update_and_delete_value(client, auth_headers, option):
    small, large = add_values(client, auth_headers, option["id"], "Small", "Large").json()

    updated = client.put(
        f"/options/values/{small['id']}",
        json={"option_price": 0.0, "value": "Regular"},
        headers=auth_headers,
    )
    assert updated.status_code == 200, updated.text
    assert updated.json()["value"] == "Regular"
    assert updated.json()["option_price"] == 0.0

    clash = client.put(f"/options/values/{small['id']}", json={"value": "Large"}, headers=auth_headers)
    assert clash.status_code == 409
    assert clash.json() == {"error": "Value already exists for this option"}

    moved = client.put(f"/options/values/{small['id']}", json={"option_id": 999}, headers=auth_headers)
    assert moved.status_code == 400
    assert moved.json() == {"error": "Option not found"}

    deleted = client.delete(f"/options/values/{large['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Option value deleted"}
    assert client.get(f"/options/values/{large['id']}", headers=auth_headers).status_code == 404
