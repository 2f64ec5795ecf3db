import io

import pytest

from mercadosim.config import Config, ConfigError, load_config, read_pairs


def test_load_overrides_defaults(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text("MAX_ESPERA 30\nN_CAIXAS 4\nMAX_PRECO 12.5\n", encoding="utf-8")
    config = load_config(path)
    assert config.max_wait == 30
    assert config.n_registers == 4
    assert config.max_price == 12.5
    assert config.max_queue == Config().max_queue


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.txt")


def test_load_invalid_values_raise(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text("N_CAIXAS 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_min_queue_above_max_is_invalid():
    config = Config()
    config.apply("MIN_FILA", "9")
    config.apply("MAX_FILA", "2")
    with pytest.raises(ConfigError):
        config.validate()


def test_new_customers_range_is_checked():
    config = Config()
    config.apply("MIN_NOVOS_CLIENTES_POR_CICLO", "6")
    config.apply("MAX_NOVOS_CLIENTES_POR_CICLO", "3")
    with pytest.raises(ConfigError):
        config.validate()


def test_defaults_are_valid():
    config = Config()
    config.validate()
    assert config.min_queue <= config.max_queue


def test_apply_uses_leading_integer():
    config = Config()
    config.apply("MAX_FILA", "12abc")
    assert config.max_queue == 12
    config.apply("MAX_FILA", "abc")
    assert config.max_queue == 0


def test_apply_float_with_exponent():
    config = Config()
    config.apply("MAX_PRECO", "1e2")
    assert config.max_price == 100.0


def test_unknown_key_is_ignored():
    config = Config()
    config.apply("SOMETHING_ELSE", "5")
    assert config == Config()


def test_read_pairs_drops_lone_token():
    pairs = list(read_pairs(io.StringIO("a b\nc")))
    assert pairs == [("a", "b")]


def test_read_pairs_splits_long_tokens():
    text = "x" * 70 + " v"
    pairs = list(read_pairs(io.StringIO(text)))
    assert pairs == [("x" * 63, "x" * 7)]