"""Test mine generation and collision checks."""
import pytest
from engine.minefield import Minefield
from engine.model import Position, Unit
from engine.rng import DRNG
from engine.roster import Roster


def test_generate_exact_count_in_bounds():
    field = Minefield.generate(35, DRNG(7))
    assert len(field) == 35
    assert all(0 <= m.x < 10 and 0 <= m.y < 10 for m in field)


def test_generate_zero_and_negative():
    assert len(Minefield.generate(0, DRNG(1))) == 0
    with pytest.raises(ValueError):
        Minefield.generate(-1, DRNG(1))


def test_generate_is_deterministic_per_seed():
    a = Minefield.generate(20, DRNG(42)).positions
    b = Minefield.generate(20, DRNG(42)).positions
    c = Minefield.generate(20, DRNG(43)).positions
    assert a == b
    assert a != c


def test_unit_on_mine_is_killed_and_others_spared():
    roster = Roster()
    roster.register(Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(5, 0)))
    roster.register(Unit(id="S2", name="Soldier 2", unit_type_id="SOLDIER", pos=Position(6, 0)))
    field = Minefield([Position(5, 0)])
    assert Position(5, 0) in field

    assert field.check(roster, ["S1", "S2"]) == ["S1"]
    assert not roster.get("S1").alive
    assert roster.get("S2").alive


def test_mines_are_not_consumed():
    roster = Roster()
    roster.register(Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(2, 2)))
    roster.register(Unit(id="S2", name="Soldier 2", unit_type_id="SOLDIER", pos=Position(2, 1)))
    field = Minefield([Position(2, 2)])
    assert field.check(roster, ["S1", "S2"]) == ["S1"]

    roster.move_forward("S2")
    assert field.check(roster, ["S1", "S2"]) == ["S2"]
    # Dead units are not hit again
    assert field.check(roster, ["S1", "S2"]) == []


def test_only_listed_units_are_checked():
    roster = Roster()
    roster.register(Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(0, 0)))
    field = Minefield([Position(0, 0)])
    assert field.check(roster, []) == []
    assert roster.get("S1").alive
