import pytest

from mercadosim.history import ActionLog, LogEntry


def test_add_returns_entry_and_keeps_order():
    log = ActionLog()
    first = log.add(1, "ABRIR", "caixa 0 aberta")
    second = log.add(3, "FECHAR", "caixa 1 fechada")
    assert first == LogEntry(1, "ABRIR", "caixa 0 aberta")
    assert list(log) == [first, second]
    assert len(log) == 2


def test_missing_text_raises():
    log = ActionLog()
    with pytest.raises(ValueError):
        log.add(0, None, "x")
    with pytest.raises(ValueError):
        log.add(0, "x", None)
    assert len(log) == 0


def test_clear_empties_log():
    log = ActionLog()
    log.add(0, "a", "b")
    log.clear()
    assert len(log) == 0
    assert list(log) == []
    log.add(2, "c", "d")
    assert [entry.instant for entry in log] == [2]


def test_entries_are_immutable():
    log = ActionLog()
    entry = log.add(5, "a", "b")
    with pytest.raises(AttributeError):
        entry.instant = 6
    assert entry.instant == 5
    assert [item.instant for item in log] == [5]