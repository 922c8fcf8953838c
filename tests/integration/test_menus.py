import pytest


@pytest.fixture
def menu(client, auth_headers) -> dict:
    resp = client.post(
        "/menus",
        json={"name": "Best Of", "description": "Burger, fries, drink", "price": 9.9},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def fries(client, auth_headers, category) -> dict:
    return client.post(
        "/products",
        json={"name": "Fries", "category_id": category["id"], "price": 2.5},
        headers=auth_headers,
    ).json()


def test_create_menu(menu):
    assert menu["name"] == "Best Of"
    assert menu["is_available"] is True
    assert menu["menu_products"] == []


def test_menu_name_is_unique(client, auth_headers, menu):
    resp = client.post("/menus", json={"name": "Best Of", "price": 1.0}, headers=auth_headers)

    assert resp.status_code == 409
    assert resp.json() == {"error": "Menu already exists"}


def test_menu_price_is_required(client, auth_headers):
    resp = client.post("/menus", json={"name": "Free lunch"}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid Data"}


def test_update_menu(client, auth_headers, menu):
    resp = client.put(f"/menus/{menu['id']}", json={"price": 10.5}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["price"] == 10.5
    assert resp.json()["name"] == "Best Of"

    other = client.post("/menus", json={"name": "Maxi", "price": 12}, headers=auth_headers).json()
    clash = client.put(f"/menus/{other['id']}", json={"name": "Best Of"}, headers=auth_headers)
    assert clash.status_code == 409
    assert clash.json() == {"error": "Menu name already exists"}


def test_toggle_menu_availability(client, auth_headers, menu):
    resp = client.patch(f"/menus/{menu['id']}/availability", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["is_available"] is False


def test_add_products_to_menu(client, auth_headers, menu, product, fries):
    first = client.post(
        f"/menus/{menu['id']}/products",
        json={"product_id": fries["id"], "display_order": 2, "is_optional": True},
        headers=auth_headers,
    )
    assert first.status_code == 201, first.text
    assert first.json()["quantity"] == 1

    client.post(
        f"/menus/{menu['id']}/products",
        json={"product_id": product["id"], "display_order": 1},
        headers=auth_headers,
    )

    entries = client.get(f"/menus/{menu['id']}/products", headers=auth_headers).json()
    assert [e["product_id"] for e in entries] == [product["id"], fries["id"]]

    loaded = client.get(f"/menus/{menu['id']}", headers=auth_headers).json()
    assert [e["product_id"] for e in loaded["menu_products"]] == [product["id"], fries["id"]]


def test_product_appears_once_per_menu(client, auth_headers, menu, product):
    client.post(f"/menus/{menu['id']}/products", json={"product_id": product["id"]}, headers=auth_headers)

    resp = client.post(f"/menus/{menu['id']}/products", json={"product_id": product["id"]}, headers=auth_headers)

    assert resp.status_code == 409
    assert resp.json() == {"error": "Product already in menu"}


def test_add_missing_product_to_menu(client, auth_headers, menu):
    resp = client.post(f"/menus/{menu['id']}/products", json={"product_id": 999}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Product not found"}


def test_add_product_to_missing_menu(client, auth_headers, product):
    resp = client.post("/menus/999/products", json={"product_id": product["id"]}, headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"error": "Menu not found"}


def test_remove_menu_product(client, auth_headers, menu, product):
    entry = client.post(
        f"/menus/{menu['id']}/products", json={"product_id": product["id"]}, headers=auth_headers
    ).json()

    resp = client.delete(f"/menus/products/{entry['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Menu product deleted"}
    assert client.get(f"/menus/{menu['id']}/products", headers=auth_headers).json() == []

    again = client.delete(f"/menus/products/{entry['id']}", headers=auth_headers)
    assert again.status_code == 404
    assert again.json() == {"error": "Menu product not found"}


def test_delete_menu_cascades_to_entries_only(client, auth_headers, menu, product):
    client.post(f"/menus/{menu['id']}/products", json={"product_id": product["id"]}, headers=auth_headers)

    resp = client.delete(f"/menus/{menu['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Menu deleted"}

    assert client.get(f"/menus/{menu['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/products/{product['id']}", headers=auth_headers).status_code == 200
    # The product is no longer referenced and can go
    assert client.delete(f"/products/{product['id']}", headers=auth_headers).status_code == 200
