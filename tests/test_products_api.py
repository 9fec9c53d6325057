from __future__ import annotations

import pytest

from conftest import bearer
from storefront.core.tokens import create_token
from storefront.domain.ids import EntityId
from storefront.domain.records import ADMIN, CUSTOMER

ENDPOINT = "/api/products"


@pytest.fixture()
def admin_headers():
    return bearer(create_token(role=ADMIN))


def test_catalogue_is_public(client, app):
    book = app.state.product_service.create("Eloquent JavaScript", 20.99)

    listing = client.get(ENDPOINT)
    assert listing.status_code == 200
    assert listing.json()["data"] == [book.to_dict()]
    assert client.get(f"{ENDPOINT}?name=eloquent").json()["data"][0]["id"] == str(book.id)
    assert client.get(f"{ENDPOINT}/{book.id}").json()["data"]["price"] == 20.99


@pytest.mark.parametrize("product_id", ["oo-oo-aa-aa", EntityId.new().value])
def test_unknown_product_is_404(client, admin_headers, product_id):
    assert client.get(f"{ENDPOINT}/{product_id}").status_code == 404
    assert client.put(f"{ENDPOINT}/{product_id}", json={"price": 1}, headers=admin_headers).status_code == 404
    assert client.delete(f"{ENDPOINT}/{product_id}", headers=admin_headers).status_code == 404


def test_mutations_require_admin(client, app):
    book = app.state.product_service.create("Book", 10)
    customer = bearer(create_token(role=CUSTOMER, username="someone"))
    assert client.post(ENDPOINT, json={"name": "X", "price": 1}).status_code == 403
    assert client.post(ENDPOINT, json={"name": "X", "price": 1}, headers=customer).status_code == 403
    assert client.put(f"{ENDPOINT}/{book.id}", json={"price": 1}, headers=customer).status_code == 403
    assert client.delete(f"{ENDPOINT}/{book.id}", headers=customer).status_code == 403


def test_admin_manages_products(client, admin_headers):
    created = client.post(ENDPOINT, json={"name": "Fluent Python", "price": 45.5}, headers=admin_headers)
    assert created.status_code == 201
    product_id = created.json()["data"]["id"]

    assert client.post(ENDPOINT, json={"name": "Bad", "price": -1}, headers=admin_headers).status_code == 400
    assert client.put(f"{ENDPOINT}/{product_id}", json={}, headers=admin_headers).status_code == 400

    updated = client.put(f"{ENDPOINT}/{product_id}", json={"price": 39.9}, headers=admin_headers)
    assert updated.json()["data"]["price"] == 39.9

    deleted = client.delete(f"{ENDPOINT}/{product_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.get(f"{ENDPOINT}/{product_id}").status_code == 404


@pytest.mark.parametrize("body", [[], "Fluent Python"])
def test_create_with_non_object_body_is_400(client, admin_headers, body):
    response = client.post(ENDPOINT, json=body, headers=admin_headers)
    assert response.status_code == 400
    assert set(response.json()) == {"status", "message"}
