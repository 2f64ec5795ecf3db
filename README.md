# mercadosim

Building blocks for simulating a supermarket one minute at a time. The library covers
customers drawn from a customer base, their random products and shopping times, and the
checkout registers with their queues. Registers are opened and closed on request, either
automatically or under a manager's manual control. Statistics are kept as you go, and
plain-text data files and reports can be read and written.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `mercadosim.config`: `Config` holds the simulation parameters and their defaults.
  `Config.apply(key, value)` sets a parameter by its file key and ignores unknown keys.
  `Config.validate()` raises `ConfigError` when a parameter is out of range.
  `read_pairs(stream)` yields whitespace-separated key/value pairs. `load_config(path)`
  reads a file over the defaults and validates the result. It raises `ConfigError` if
  the file cannot be read or the values are invalid.
- `mercadosim.customers`: `Product`, `CustomerRecord`, `CustomerState` and `Customer`.
  - A customer computes its shopping time, payment time and total value from its
    products (`compute_derived`).
  - It tracks queue and service timing (`enter_queue`, `wait_time`, `start_service`,
    `tick_service`, `service_finished`, `finish_service`).
  - It can receive one offer of its cheapest product (`entitled_to_offer`,
    `apply_offer`).
  - `next_base_customer_id(records)` gives the id after the last record, or 1 if there
    are no records.
- `mercadosim.queues`: `CustomerQueue` is the FIFO line at a register (`push`, `pop`,
  `remove_by_id`).
- `mercadosim.shopping`: `ShoppingList` keeps the customers who are still shopping,
  ordered by `expected_shopping_end`. Ties keep their arrival order.
  `finished_shopping(customer, instant)` tells whether a customer is done.
- `mercadosim.hashtable`: `CustomerTable` is a bucketed table of customers keyed by id.
  `insert` refuses duplicate ids.
- `mercadosim.history`: `ActionLog` collects timestamped `LogEntry` records in order.
- `mercadosim.staff`: `Collaborator` is a register operator. Use `find_by_id` and
  `find_by_register` to look one up.
- `mercadosim.registers`: `Register` and `RegisterState`. A register holds its queue,
  the customer being served, its estimated remaining time, its sales and offer totals,
  and the list of customers it has served.
- `mercadosim.statistics`: `Statistics` holds the running totals. It computes the
  average wait and picks the registers and operators that served the most or the
  fewest customers.
- `mercadosim.market`: `Market` brings everything together. Its registers are numbered
  from 0, and the first two start open. A manual request to close moves the waiting
  customers to other registers. `Market` provides:
  - routing a customer to the register with the shortest estimated wait
    (`route_customer`);
  - opening, draining and closing registers (`open_register`, `begin_closing`,
    `close_register`, `set_automatic`);
  - starting and finishing service (`start_service_if_needed`,
    `finish_service_if_done`);
  - generating random customers (`generate_customers`), with a 25% chance per call and
    at most 200 customers present at once.

  `Market.register(id)` raises `KeyError` for an unknown id.
- `mercadosim.files`: loads the customer, product and collaborator bases. Each of these
  files has a header line, and malformed lines are skipped. It also saves the bases and
  writes the history CSV, the statistics report and one report per register.

## Example

The market has no clock of its own. Each cycle, the caller sets `market.time` and
drives the steps:

```python
import random

from mercadosim.config import load_config
from mercadosim.files import (
    clear_reports_folder, load_collaborators, load_customer_records, load_products,
    write_all_register_reports, write_statistics_report,
)
from mercadosim.market import Market
from mercadosim.shopping import finished_shopping

config = load_config("config.txt")
market = Market(
    config,
    customer_records=load_customer_records("clientes.txt"),
    products=load_products("produtos.txt"),
    collaborators=load_collaborators("colaboradores.txt"),
    rng=random.Random(1),
)
market.assign_collaborators()

for minute in range(120):
    market.time = minute
    market.generate_customers()
    market.shopping.update_remaining(market.time)

    while (customer := market.shopping.peek()) is not None and finished_shopping(
        customer, market.time
    ):
        if not market.route_customer(customer):
            break
        market.shopping.pop()

    for register in market.registers:
        for waiting in register.queue:
            if waiting.entitled_to_offer(config.max_wait, market.time):
                waiting.apply_offer()
        if register.current is not None:
            register.current.tick_service()
        market.finish_service_if_done(register)
        market.start_service_if_needed(register)

stats = market.statistics
stats.simulation_time = market.time
stats.compute_average_wait()
stats.update_registers(market.registers)
stats.update_operators(market.registers)

clear_reports_folder("relatorios")
write_statistics_report(market, "relatorios/estatisticas.txt")
write_all_register_reports(market, "relatorios")
```

`clear_reports_folder` deletes the folder with everything in it and creates it again,
empty. The report writers do not create missing folders.

### Configuration file

The file is a sequence of whitespace-separated keys and values, usually one pair per
line:

```
MAX_ESPERA 20
N_CAIXAS 5
MAX_PRECO 40.0
MAX_FILA 7
MIN_FILA 3
DIFERENCA_TEMPO_CAIXAS 10
MAX_PRODUTOS_CLIENTE 10
MIN_NOVOS_CLIENTES_POR_CICLO 1
MAX_NOVOS_CLIENTES_POR_CICLO 5
```

These are the defaults. Keys that are left out keep their default values, and unknown
keys are ignored. Numbers are read leniently: text after a leading number is ignored,
and a value with no number reads as 0.

## What the package does not do

- There is no command-line program and no interactive manager menu. The package is a
  library only.
- There is no built-in simulation loop. The caller advances `market.time` and calls the
  steps, as in the example above.
- Registers are never opened or closed on their own. `Config` stores `max_queue`,
  `min_queue` and `register_time_difference`, but no code here acts on them.
  `Statistics.record_auto_opening`, `record_auto_closing` and `record_queue_change` are
  counters for the caller to use.
- Customers never move between queues on their own. `Customer.mark_queue_change` only
  sets a flag.
- `Market` does not keep an `ActionLog`. Create one and fill it yourself if you want a
  history CSV.