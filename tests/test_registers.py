import pytest

from mercadosim.customers import Customer, CustomerState, Product
from mercadosim.registers import Register, RegisterState
from mercadosim.staff import Collaborator


def _customer(customer_id, payment_times, prices=None):
    prices = prices or [1.0] * len(payment_times)
    products = [
        Product(id=i, name=f"p{i}", price=price, search_time=1, payment_time=pay)
        for i, (pay, price) in enumerate(zip(payment_times, prices))
    ]
    customer = Customer(id=customer_id, name=f"c{customer_id}", products=products)
    customer.compute_derived()
    return customer


def test_new_register_is_closed_and_empty():
    register = Register(3)
    assert register.is_closed()
    assert not register.is_open()
    assert not register.is_closing()
    assert not register.accepts_customers()
    assert not register.has_customers()
    assert register.customer_count() == 0
    assert register.estimated_time() == 0


def test_only_open_register_accepts():
    register = Register(0, state=RegisterState.CLOSING)
    assert register.is_closing()
    assert not register.accepts_customers()
    register.state = RegisterState.OPEN
    assert register.accepts_customers()


def test_add_customer_to_closed_register_refused():
    register = Register(0)
    customer = _customer(1, [2])
    assert register.add_customer(customer, 5) is False
    assert len(register.queue) == 0
    assert customer.state is CustomerState.SHOPPING


def test_add_customer_queues_and_updates_estimate():
    register = Register(2, state=RegisterState.OPEN)
    first = _customer(1, [2, 3])
    second = _customer(2, [4])
    assert register.add_customer(first, 7)
    assert register.add_customer(second, 8)
    assert first.state is CustomerState.IN_QUEUE
    assert first.queue_entered_at == 7
    assert first.register_id == 2
    assert list(register.queue) == [first, second]
    assert register.estimated_queue_time == (
        first.total_payment_time + second.total_payment_time
    )
    assert register.customer_count() == 2
    assert register.has_customers()


def test_add_missing_customer_raises():
    register = Register(0, state=RegisterState.OPEN)
    with pytest.raises(ValueError):
        register.add_customer(None, 0)


def test_estimate_includes_current_remaining():
    register = Register(0, state=RegisterState.OPEN)
    current = _customer(1, [5])
    current.start_service(0)
    current.tick_service()
    register.current = current
    queued = _customer(2, [3])
    register.add_customer(queued, 1)
    assert register.remaining_current_time() == current.remaining_service
    assert register.estimated_time() == current.remaining_service + queued.total_payment_time
    assert register.customer_count() == 2


def test_remaining_current_time_never_negative():
    register = Register(0)
    current = _customer(1, [1])
    current.remaining_service = -4
    register.current = current
    assert register.remaining_current_time() == 0
    assert register.has_customers()


def test_refresh_estimate_returns_stored_value():
    register = Register(0, state=RegisterState.OPEN)
    register.add_customer(_customer(1, [6]), 0)
    register.estimated_queue_time = 0
    assert register.refresh_estimate() == register.estimated_queue_time
    assert register.estimated_queue_time == register.estimated_time()


def test_record_served_without_offer():
    register = Register(1)
    customer = _customer(9, [1, 1, 1], prices=[1.5, 2.0, 0.5])
    register.record_served(customer)
    assert register.served == 1
    assert register.products_sold == customer.n_products
    assert register.value_sold == pytest.approx(customer.total_value)
    assert register.products_offered == 0
    assert register.value_offered == 0.0
    assert register.history == [customer]


def test_record_served_with_offer():
    register = Register(1)
    customer = _customer(9, [1, 1], prices=[3.0, 0.5])
    customer.apply_offer()
    register.record_served(customer)
    assert register.products_offered == 1
    assert register.value_offered == pytest.approx(0.5)
    other = _customer(10, [1], prices=[2.0])
    register.record_served(other)
    assert register.history == [customer, other]
    assert register.served == 2


def test_operator_is_kept():
    operator = Collaborator(id=5, name="Ana")
    register = Register(0, operator=operator)
    assert register.operator is operator