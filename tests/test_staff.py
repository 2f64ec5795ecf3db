from mercadosim.staff import Collaborator, find_by_id, find_by_register


def _team():
    return [
        Collaborator(11, "Joana"),
        Collaborator(12, "Pedro", register_id=0),
        Collaborator(13, "Marta", register_id=1),
        Collaborator(14, "Luis", register_id=1),
    ]


def test_defaults():
    collaborator = Collaborator(1, "Ines")
    assert collaborator.served == 0
    assert collaborator.register_id is None
    assert collaborator.active is False


def test_activate_and_deactivate():
    collaborator = Collaborator(1, "Ines")
    collaborator.activate(3)
    assert collaborator.active is True
    assert collaborator.register_id == 3
    collaborator.deactivate()
    assert collaborator.active is False
    assert collaborator.register_id == 3


def test_record_service_counts():
    collaborator = Collaborator(1, "Ines")
    for _ in range(4):
        collaborator.record_service()
    assert collaborator.served == 4


def test_find_by_id():
    team = _team()
    assert find_by_id(team, 13) is team[2]
    assert find_by_id(team, 99) is None
    assert find_by_id([], 11) is None


def test_find_by_register_returns_first():
    team = _team()
    assert find_by_register(team, 1) is team[2]
    assert find_by_register(team, 0) is team[1]
    assert find_by_register(team, 5) is None


def test_find_by_register_after_activation():
    team = _team()
    team[0].activate(4)
    assert find_by_register(team, 4) is team[0]