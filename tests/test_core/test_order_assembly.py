import pytest

from storefront.core.database import SessionLocal
from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.models.order_models import Order, OrderItem, OrderStatus
from storefront.repositories.order_repositories import OrderRepository
from storefront.repositories.product_repositories import ProductRepository
from storefront.schemas.order_schemas import OrderCreate
from storefront.schemas.product_schemas import ProductUpdate
from storefront.services.order_services import OrderService
from storefront.services.product_services import ProductService


def _customer(phone="690000001"):
    return {
        "lastName": "Ngono",
        "phone": phone,
        "address": "Rue 12",
        "city": "Douala",
        "quarter": "Akwa",
    }


def _order_in(items, total=200, phone="690000001"):
    return OrderCreate(customerInfo=_customer(phone), items=items, total=total)


@pytest.fixture
def service(db):
    return OrderService(OrderRepository(db), ProductRepository(db))


def _count(model):
    with SessionLocal() as fresh:
        return fresh.query(model).count()


def test_created_order_matches_request(service, make_product):
    a = make_product("A", 100)
    b = make_product("B", 200, category="y")

    order = service.create_order(
        _order_in([{"productId": a.id, "quantity": 2}, {"productId": b.id, "quantity": 1}], total=400)
    )

    stored = service.get_order(order.id)
    assert stored.status == OrderStatus.PENDING
    assert [(i.product.id, i.quantity) for i in stored.items] == [(a.id, 2), (b.id, 1)]
    assert all(i.id is not None for i in stored.items)
    assert _count(OrderItem) == 2


def test_single_item_scenario(service, make_product):
    a = make_product("A", 100)

    order = service.create_order(_order_in([{"productId": a.id, "quantity": 2}], total=200))

    assert order.status == OrderStatus.PENDING
    assert order.items[0].quantity == 2
    assert order.items[0].product.id == a.id


def test_unknown_product_leaves_store_unchanged(service, make_product):
    a = make_product("A", 100)

    with pytest.raises(NotFoundError):
        service.create_order(
            _order_in([{"productId": a.id, "quantity": 1}, {"productId": 9999, "quantity": 1}])
        )

    assert _count(Order) == 0
    assert _count(OrderItem) == 0


def test_order_without_items_is_accepted(service):
    order = service.create_order(_order_in([], total=50))
    assert service.get_order(order.id).items == []


def test_orders_are_listed_newest_first(service, make_product):
    a = make_product("A", 100)
    ids = [
        service.create_order(_order_in([{"productId": a.id, "quantity": 1}], total=100)).id
        for _ in range(3)
    ]

    assert len(set(ids)) == 3
    assert [o.id for o in service.get_all_orders()] == list(reversed(ids))


def test_orders_by_phone(service, make_product):
    a = make_product("A", 100)
    first = service.create_order(_order_in([{"productId": a.id, "quantity": 1}], phone="111"))
    service.create_order(_order_in([{"productId": a.id, "quantity": 1}], phone="222"))
    second = service.create_order(_order_in([{"productId": a.id, "quantity": 3}], phone="111"))

    assert [o.id for o in service.get_orders_by_phone("111")] == [second.id, first.id]
    assert service.get_orders_by_phone("333") == []


def test_line_items_follow_later_product_edits(db, service, make_product):
    a = make_product("A", 100)
    order = service.create_order(_order_in([{"productId": a.id, "quantity": 2}], total=200))

    ProductService(ProductRepository(db)).update_product(a.id, ProductUpdate(price=150))

    with SessionLocal() as fresh:
        reread = OrderRepository(fresh).get(order.id)
        assert reread.items[0].product.price == 150
        assert reread.items_total == 300
        assert reread.total == 200


def test_status_update_round_trip(service, make_product):
    a = make_product("A", 100)
    order = service.create_order(_order_in([{"productId": a.id, "quantity": 1}], total=100))

    service.update_order_status(order.id, "confirmed")
    assert service.get_order(order.id).status == OrderStatus.CONFIRMED

    with pytest.raises(ValidationError):
        service.update_order_status(order.id, "bogus")
    with SessionLocal() as fresh:
        assert OrderRepository(fresh).get(order.id).status == OrderStatus.CONFIRMED


def test_delete_order_removes_its_items(service, make_product):
    a = make_product("A", 100)
    order = service.create_order(_order_in([{"productId": a.id, "quantity": 1}], total=100))

    service.delete_order(order.id)

    with pytest.raises(NotFoundError):
        service.get_order(order.id)
    assert _count(OrderItem) == 0


def test_referenced_product_cannot_be_deleted(db, service, make_product):
    a = make_product("A", 100)
    service.create_order(_order_in([{"productId": a.id, "quantity": 1}], total=100))

    with pytest.raises(ValidationError):
        ProductService(ProductRepository(db)).delete_product(a.id)
