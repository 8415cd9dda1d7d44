# tests/step_definitions/conftest.py
import pytest
from pytest_bdd import given, then, parsers
from fastapi.testclient import TestClient

from common_steps import API, create_order
from storefront.main import app


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def scenario_data():
    return {"products": {}}


# ---------- GIVEN ----------
@given("the Storefront API is available")
def step_api_available(client):
    assert client.get("/health").status_code == 200


@given(parsers.parse('the catalog contains product "{name}" priced {price:d} in category "{category}"'))
def step_catalog_contains(client, scenario_data, name, price, category):
    resp = client.post(
        f"{API}/products",
        json={"name": name, "description": f"{name} part", "price": price, "category": category},
    )
    assert resp.status_code == 201
    scenario_data["products"][name] = resp.json()["id"]


@given(parsers.parse('an order exists with {quantity:d} units of product "{product}"'))
def step_order_exists(client, scenario_data, quantity, product):
    resp = create_order(client, scenario_data, product, quantity, total=100)
    assert resp.status_code == 201
    scenario_data["order_id"] = resp.json()["id"]


@given(parsers.parse('a customer with phone "{phone}" ordered {quantity:d} units of product "{product}"'))
def step_order_exists_for_phone(client, scenario_data, phone, quantity, product):
    resp = create_order(client, scenario_data, product, quantity, total=100, phone=phone)
    assert resp.status_code == 201


# ---------- THEN ----------
@then(parsers.parse("the response status code should be {status_code:d}"))
def step_status_code(scenario_data, status_code):
    assert scenario_data["response"].status_code == status_code
