import pytest

from mercadosim.customers import (
    CYCLE_MINUTES,
    Customer,
    CustomerRecord,
    CustomerState,
    Product,
    next_base_customer_id,
)


def _products():
    return [
        Product(1, "Leite", 1.5, 3, 2),
        Product(2, "Pao", 0.5, 2, 1),
        Product(3, "Queijo", 4.0, 5, 3),
        Product(4, "Agua", 0.5, 1, 1),
    ]


def _customer():
    customer = Customer(id=7, name="Ana", products=_products())
    customer.compute_derived()
    return customer


def test_new_customer_defaults():
    customer = Customer()
    assert customer.state is CustomerState.SHOPPING
    assert customer.register_id is None
    assert customer.queue_entered_at is None
    assert customer.received_offer is False
    assert customer.n_products == 0


def test_compute_derived_matches_products():
    products = _products()
    customer = _customer()
    assert customer.total_shopping_time == sum(p.search_time for p in products)
    assert customer.total_payment_time == sum(p.payment_time for p in products)
    assert customer.total_value == pytest.approx(sum(p.price for p in products))


def test_compute_derived_empty():
    customer = Customer()
    customer.compute_derived()
    assert customer.total_shopping_time == 0
    assert customer.total_payment_time == 0
    assert customer.total_value == 0.0


def test_sort_products_by_price_is_stable():
    customer = _customer()
    customer.sort_products_by_price()
    prices = [p.price for p in customer.products]
    assert prices == sorted(prices)
    cheap_names = [p.name for p in customer.products if p.price == 0.5]
    assert cheap_names == ["Pao", "Agua"]


def test_cheapest_index_first_of_ties():
    customer = _customer()
    assert customer.cheapest_product_index() == 1
    assert Customer().cheapest_product_index() is None


def test_enter_queue_and_wait_time():
    customer = _customer()
    customer.register_id = 2
    customer.enter_queue(10)
    assert customer.state is CustomerState.IN_QUEUE
    assert customer.register_id is None
    assert customer.wait_time(10) == 0
    assert customer.wait_time(15) == 5
    assert customer.wait_time(5) == 0


def test_wait_time_never_queued():
    assert _customer().wait_time(100) == 0


def test_service_cycle():
    customer = _customer()
    customer.enter_queue(0)
    customer.start_service(4)
    assert customer.state is CustomerState.IN_SERVICE
    assert customer.service_started_at == 4
    assert customer.remaining_service == customer.total_payment_time
    before = customer.remaining_service
    customer.tick_service()
    assert customer.remaining_service == before - CYCLE_MINUTES
    while not customer.service_finished():
        customer.tick_service()
    assert customer.remaining_service == 0
    customer.tick_service()
    assert customer.remaining_service == 0
    customer.register_id = 1
    customer.finish_service(20)
    assert customer.state is CustomerState.SERVED
    assert customer.service_ended_at == 20
    assert customer.register_id is None
    assert customer.service_finished() is False


def test_tick_ignored_when_not_in_service():
    customer = _customer()
    customer.remaining_service = 3
    customer.tick_service()
    assert customer.remaining_service == 3


def test_entitled_to_offer():
    customer = _customer()
    customer.enter_queue(0)
    assert customer.entitled_to_offer(20, 20) is False
    assert customer.entitled_to_offer(20, 21) is True
    customer.apply_offer()
    assert customer.entitled_to_offer(20, 100) is False


def test_apply_offer_gives_cheapest_once():
    customer = _customer()
    customer.apply_offer()
    assert customer.received_offer is True
    assert customer.offered_product_name == "Pao"
    assert customer.offer_value == 0.5
    customer.products[0].price = 0.01
    customer.apply_offer()
    assert customer.offered_product_name == "Pao"


def test_apply_offer_without_products():
    customer = Customer()
    customer.apply_offer()
    assert customer.received_offer is False
    assert customer.offer_value == 0.0


def test_mark_queue_change():
    customer = Customer()
    customer.mark_queue_change()
    assert customer.changed_queue is True


def test_next_base_customer_id():
    assert next_base_customer_id([]) == 1
    records = [CustomerRecord(4, "Rui"), CustomerRecord(9, "Eva")]
    assert next_base_customer_id(records) == 10