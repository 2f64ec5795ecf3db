"""Reading and writing the market's data files and reports."""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Iterable, Iterator

from mercadosim.customers import CustomerRecord, Product
from mercadosim.history import ActionLog
from mercadosim.market import Market
from mercadosim.registers import Register
from mercadosim.staff import Collaborator, find_by_id

MAX_NAME_LENGTH = 99
"""Longest name kept for customers, products and collaborators."""

_PRODUCT_NAME_SCAN = 127

HISTORY_CSV_HEADER = "instante;descricao\n"
REGISTER_REPORT_PREFIX = "caixa_"
REPORT_EXTENSION = ".txt"

CUSTOMERS_HEADER = "id     nome\n"
PRODUCTS_HEADER = (
    "id     nome                       preco   tempoDeProcura  tempoDePagamento\n"
)

_INVALID_ID = -1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LINE_END = re.compile(r"[\r\n]")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def _scan_id_and_name(text: str, width: int) -> tuple[int, str] | None:
    """Read a leading integer and then up to ``width`` characters of the rest of the line."""
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    rest = text[match.end():].lstrip()
    name = rest.split("\n", 1)[0][:width]
    if not name:
        return None
    return int(match.group(1)), name


def _data_lines(path: str | Path) -> Iterator[str]:
    """Yield every line after the header; nothing if the file is empty."""
    with open(path, encoding="utf-8") as stream:
        if not stream.readline():
            return
        yield from stream


def _cut_last_token(text: str) -> tuple[str, str, bool]:
    """Split off the last blank-separated token; the flag says whether anything precedes it."""
    cut = max(text.rfind(" "), text.rfind("\t"))
    return text[:cut], text[cut + 1:], cut >= 0


def load_customer_records(path: str | Path) -> list[CustomerRecord]:
    """Load the customer base, skipping the header and malformed lines."""
    records = []
    for line in _data_lines(path):
        scanned = _scan_id_and_name(line, MAX_NAME_LENGTH)
        if scanned is not None:
            records.append(CustomerRecord(*scanned))
    return records


def parse_product_line(line: str) -> Product | None:
    """Parse ``id name price search_time payment_time``; the name may hold blanks.

    Returns None for a line that does not have that shape.
    """
    text = _LINE_END.split(line, maxsplit=1)[0]

    text = text.rstrip(" \t")
    if not text:
        return None
    text, payment_token, _ = _cut_last_token(text)

    text = text.rstrip(" \t")
    if not text:
        return None
    text, search_token, _ = _cut_last_token(text)

    text = text.rstrip(" \t")
    if not text:
        return None
    prefix, price_token, has_prefix = _cut_last_token(text)
    if not has_prefix:
        return None

    scanned = _scan_id_and_name(prefix, _PRODUCT_NAME_SCAN)
    if scanned is None:
        return None
    product_id, name = scanned
    return Product(
        id=product_id,
        name=name.rstrip(" \t")[:MAX_NAME_LENGTH],
        price=_atof(price_token),
        search_time=_atoi(search_token),
        payment_time=_atoi(payment_token),
    )


def load_products(path: str | Path) -> list[Product]:
    """Load the product base, skipping the header and malformed lines."""
    products = []
    for line in _data_lines(path):
        product = parse_product_line(line)
        if product is not None:
            products.append(product)
    return products


def load_collaborators(path: str | Path) -> list[Collaborator]:
    """Load the collaborators, all inactive and without a register."""
    collaborators = []
    for line in _data_lines(path):
        scanned = _scan_id_and_name(line, MAX_NAME_LENGTH)
        if scanned is not None:
            collaborator_id, name = scanned
            collaborators.append(Collaborator(id=collaborator_id, name=name))
    return collaborators


def save_customer_records(records: Iterable[CustomerRecord], path: str | Path) -> None:
    """Write the customer base with zero-padded ids."""
    with open(path, "w", encoding="utf-8") as stream:
        stream.write(CUSTOMERS_HEADER)
        for record in records:
            stream.write(f"{record.id:06d} {record.name}\n")


def save_products(products: Iterable[Product], path: str | Path) -> None:
    """Write the product base as aligned columns."""
    with open(path, "w", encoding="utf-8") as stream:
        stream.write(PRODUCTS_HEADER)
        for product in products:
            stream.write(
                f"{product.id} {product.name:<26} {product.price:<7.2f} "
                f"{product.search_time:<15d} {product.payment_time:<15d}\n"
            )


def write_history_csv(log: ActionLog, path: str | Path) -> None:
    """Write the action log as ``instant;description`` rows under a header."""
    with open(path, "w", encoding="utf-8") as stream:
        stream.write(HISTORY_CSV_HEADER)
        for entry in log:
            stream.write(f"{entry.instant};{entry.description}\n")


def _id_or_invalid(value: int | None) -> int:
    return _INVALID_ID if value is None else value


def write_statistics_report(market: Market, path: str | Path) -> None:
    """Write the overall statistics, best and worst operators and customers."""
    biggest = None
    smallest = None
    for register in market.registers:
        for customer in register.history:
            if biggest is None or customer.total_value > biggest.total_value:
                biggest = customer
            if smallest is None or customer.total_value < smallest.total_value:
                smallest = customer

    stats = market.statistics
    lines = [
        f"Tempo de simulacao: {stats.simulation_time}",
        f"Clientes gerados: {stats.generated}",
        f"Clientes atendidos: {stats.served}",
        f"Produtos vendidos: {stats.products_sold}",
        f"Valor total vendido: {stats.value_sold:.2f}",
        f"Produtos oferecidos: {stats.products_offered}",
        f"Valor total oferecido: {stats.value_offered:.2f}",
        f"Receita liquida: {stats.net_revenue:.2f}",
        f"Mudancas de fila: {stats.queue_changes}",
        f"Aberturas automaticas: {stats.auto_openings}",
        f"Encerramentos automaticos: {stats.auto_closings}",
        f"Soma tempos espera: {stats.wait_sum:.2f}",
        f"Tempo medio espera: {stats.average_wait:.2f}",
        f"Caixa com mais clientes: {_id_or_invalid(stats.register_most_customers)}",
        f"Caixa com mais produtos: {_id_or_invalid(stats.register_most_products)}",
    ]

    for label, operator_id in (
        ("Operador com menos atendimentos", stats.operator_fewest_services),
        ("Operador com mais atendimentos", stats.operator_most_services),
    ):
        operator = (
            find_by_id(market.collaborators, operator_id)
            if operator_id is not None
            else None
        )
        if operator is not None:
            lines.append(
                f"{label}: {operator.id} - {operator.name} "
                f"({operator.served} atendimentos)"
            )
        else:
            lines.append(f"{label}: {_id_or_invalid(operator_id)}")

    for label, customer in (
        ("Cliente que mais gastou", biggest),
        ("Cliente que menos gastou", smallest),
    ):
        if customer is not None:
            lines.append(
                f"{label}: {customer.id:06d} - {customer.name} "
                f"({customer.total_value:.2f})"
            )
        else:
            lines.append(f"{label}: nenhum cliente atendido")

    with open(path, "w", encoding="utf-8") as stream:
        stream.write("".join(line + "\n" for line in lines))


def write_register_report(register: Register, path: str | Path) -> None:
    """Write one register's operator, served customers and totals."""
    lines = [f"Caixa {register.id}"]
    if register.operator is not None:
        lines.append(f"Codigo do atendente: {register.operator.id}")
        lines.append(f"Nome do atendente: {register.operator.name}")
    else:
        lines.append("Codigo do atendente: N/A")
        lines.append("Nome do atendente: N/A")

    lines.append("")
    lines.append("Pessoas atendidas:")
    if not register.history:
        lines.append("Nenhum cliente atendido.")
    else:
        lines.extend(f"  {c.id} - {c.name}" for c in register.history)

    lines.append("")
    lines.append(f"Clientes atendidos: {register.served}")
    lines.append(f"Produtos vendidos: {register.products_sold}")
    lines.append(f"Valor vendido: {register.value_sold:.2f}")
    lines.append(f"Produtos oferecidos: {register.products_offered}")
    lines.append(f"Valor oferecido: {register.value_offered:.2f}")

    with open(path, "w", encoding="utf-8") as stream:
        stream.write("".join(line + "\n" for line in lines))


def write_all_register_reports(market: Market, directory: str | Path) -> list[Path]:
    """Write one report per register into ``directory``; return the paths written."""
    folder = Path(directory)
    paths = []
    for register in market.registers:
        path = folder / f"{REGISTER_REPORT_PREFIX}{register.id}{REPORT_EXTENSION}"
        write_register_report(register, path)
        paths.append(path)
    return paths


def clear_reports_folder(directory: str | Path) -> None:
    """Delete the reports folder with everything in it and create it again, empty."""
    folder = Path(directory)
    shutil.rmtree(folder, ignore_errors=True)
    folder.mkdir(parents=True, exist_ok=True)