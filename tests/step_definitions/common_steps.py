# tests/step_definitions/common_steps.py
"""Helpers shared by the step definitions."""

API = "/api"

CUSTOMER = {
    "firstName": "Awa",
    "lastName": "Ngono",
    "phone": "690000001",
    "address": "Rue 12",
    "city": "Douala",
    "quarter": "Akwa",
}


def create_order(client, scenario_data, product, quantity, total, phone=None):
    """POST an order for a product created earlier in the scenario (unknown names map to a missing id)."""
    customer = dict(CUSTOMER, phone=phone) if phone else CUSTOMER
    product_id = scenario_data["products"].get(product, 999999)
    return client.post(
        f"{API}/orders",
        json={
            "customerInfo": customer,
            "items": [{"productId": product_id, "quantity": quantity}],
            "total": total,
        },
    )
