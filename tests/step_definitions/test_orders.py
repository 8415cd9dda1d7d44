from pytest_bdd import when, then, parsers, scenarios

from common_steps import API, create_order

scenarios("../features/orders.feature")


# ---------- WHEN ----------
@when(parsers.parse('I create an order with {quantity:d} units of product "{product}" and total {total:d}'))
def step_when_create_order(client, scenario_data, quantity, product, total):
    scenario_data["response"] = create_order(client, scenario_data, product, quantity, total)


@when(parsers.parse('I update the status of the order to "{new_status}"'))
def step_when_update_status(client, scenario_data, new_status):
    order_id = scenario_data["order_id"]
    scenario_data["response"] = client.put(f"{API}/orders/{order_id}/status", json={"status": new_status})


@when("I delete the order")
def step_when_delete_order(client, scenario_data):
    scenario_data["response"] = client.delete(f"{API}/orders/{scenario_data['order_id']}")


@when(parsers.parse('I list the orders for phone "{phone}"'))
def step_when_list_by_phone(client, scenario_data, phone):
    scenario_data["response"] = client.get(f"{API}/orders/phone/{phone}")


# ---------- THEN ----------
@then(parsers.parse('the order should have status "{status}"'))
def step_then_order_status(scenario_data, status):
    assert scenario_data["response"].json()["status"] == status


@then(parsers.parse('the order should contain {quantity:d} units of product "{product}"'))
def step_then_order_contains(scenario_data, quantity, product):
    items = scenario_data["response"].json()["items"]
    assert [(i["product"]["id"], i["quantity"]) for i in items] == [
        (scenario_data["products"][product], quantity)
    ]


@then("no order should be stored")
def step_then_no_order(client):
    assert client.get(f"{API}/orders").json() == []


@then(parsers.parse('retrieving the order should show status "{status}"'))
def step_then_stored_status(client, scenario_data, status):
    resp = client.get(f"{API}/orders/{scenario_data['order_id']}")
    assert resp.status_code == 200
    assert resp.json()["status"] == status


@then(parsers.parse("retrieving the order should fail with status code {status_code:d}"))
def step_then_get_fails(client, scenario_data, status_code):
    assert client.get(f"{API}/orders/{scenario_data['order_id']}").status_code == status_code


@then(parsers.parse("{count:d} orders should be returned"))
def step_then_order_count(scenario_data, count):
    assert len(scenario_data["response"].json()) == count
