"""Simulation configuration: defaults, key/value file parsing and validation."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

_TOKEN_LIMIT = 63

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class ConfigError(ValueError):
    """Raised when a configuration cannot be loaded or is invalid."""


def _parse_int(text: str) -> int:
    """Read a leading integer the lenient way: junk after it is ignored, none gives 0."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _parse_float(text: str) -> float:
    """Read a leading decimal number; anything unparsable gives 0.0."""
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class Config:
    """Tunable parameters of the market simulation."""

    max_wait: int = 20
    n_registers: int = 5
    max_price: float = 40.0
    max_queue: int = 7
    min_queue: int = 3
    register_time_difference: int = 10
    max_products_per_customer: int = 10
    min_new_customers_per_cycle: int = 1
    max_new_customers_per_cycle: int = 5

    def validate(self) -> None:
        """Raise ConfigError if any parameter is outside its accepted range."""
        rules = (
            (self.max_wait > 0, "MAX_ESPERA must be positive"),
            (self.n_registers > 0, "N_CAIXAS must be positive"),
            (self.max_price > 0.0, "MAX_PRECO must be positive"),
            (self.max_queue >= 0, "MAX_FILA must not be negative"),
            (self.min_queue >= 0, "MIN_FILA must not be negative"),
            (self.min_queue <= self.max_queue, "MIN_FILA must not exceed MAX_FILA"),
            (
                self.register_time_difference >= 0,
                "DIFERENCA_TEMPO_CAIXAS must not be negative",
            ),
            (self.max_products_per_customer > 0, "MAX_PRODUTOS_CLIENTE must be positive"),
            (
                self.min_new_customers_per_cycle >= 0,
                "MIN_NOVOS_CLIENTES_POR_CICLO must not be negative",
            ),
            (
                self.max_new_customers_per_cycle >= self.min_new_customers_per_cycle,
                "MAX_NOVOS_CLIENTES_POR_CICLO must not be below the minimum",
            ),
        )
        for ok, message in rules:
            if not ok:
                raise ConfigError(message)

    def apply(self, key: str, value: str) -> None:
        """Set the parameter named by a file key; unknown keys are ignored."""
        entry = _KEYS.get(key)
        if entry is None:
            return
        attribute, parse = entry
        setattr(self, attribute, parse(value))


_KEYS: dict[str, tuple[str, Callable[[str], object]]] = {
    "MAX_ESPERA": ("max_wait", _parse_int),
    "N_CAIXAS": ("n_registers", _parse_int),
    "MAX_PRECO": ("max_price", _parse_float),
    "MAX_FILA": ("max_queue", _parse_int),
    "MIN_FILA": ("min_queue", _parse_int),
    "DIFERENCA_TEMPO_CAIXAS": ("register_time_difference", _parse_int),
    "MAX_PRODUTOS_CLIENTE": ("max_products_per_customer", _parse_int),
    "MIN_NOVOS_CLIENTES_POR_CICLO": ("min_new_customers_per_cycle", _parse_int),
    "MAX_NOVOS_CLIENTES_POR_CICLO": ("max_new_customers_per_cycle", _parse_int),
}

assert {attr for attr, _ in _KEYS.values()} == {f.name for f in fields(Config)}


def _tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        for word in line.split():
            for start in range(0, len(word), _TOKEN_LIMIT):
                yield word[start:start + _TOKEN_LIMIT]


def read_pairs(stream: TextIO) -> Iterator[tuple[str, str]]:
    """Yield whitespace-separated (key, value) pairs; a trailing lone token is dropped.

    Tokens longer than 63 characters are split into 63-character pieces.
    """
    tokens = _tokens(stream)
    for key in tokens:
        value = next(tokens, None)
        if value is None:
            return
        yield key, value


def load_config(path: str | Path) -> Config:
    """Load a configuration file over the defaults and validate the result."""
    config = Config()
    try:
        with open(path, encoding="utf-8") as stream:
            for key, value in read_pairs(stream):
                config.apply(key, value)
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {path}: {exc}") from exc
    config.validate()
    return config