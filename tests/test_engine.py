"""Test the turn-based engine."""
from dataclasses import replace
import pytest
from engine.engine import Engine
from engine.minefield import Minefield
from engine.model import UNIT_TYPES, Capability, Position, State, Unit, UnitClass, UnitStatus, UnitType
from engine.outcome import check_result
from runtime.scenario import build_default_scenario


def always(_units) -> bool:
    return True


def make_state(units, field_size=10, mines=()) -> State:
    return State(field_size=field_size, units={u.id: u for u in units},
                 field_ids=[u.id for u in units], minefield=Minefield(mines))


def test_unit_on_mine_dies_before_moving():
    """Field 10, one mine at (5,0), one movable unit starting on it."""
    seen = []

    def evaluator(units):
        seen.append([u.status for u in units])
        return any(u.alive for u in units)

    s = make_state([Unit(id="T1", name="Tank 1", unit_type_id="TANK", pos=Position(5, 0))],
                   mines=[Position(5, 0)])
    eng = Engine(seed=1, initial_state=s, check_results=evaluator)
    assert eng.step() is False
    assert seen == [[UnitStatus.KILLED]]
    assert s.units["T1"].pos == Position(5, 0)


def test_four_unarmed_movers_keep_going(monkeypatch):
    """4 movable non-shooters, policy 'four soldiers alive', field 1, no mines."""
    monkeypatch.setitem(UNIT_TYPES, "RUNNER", UnitType(
        name="Runner", unit_class=UnitClass.SOLDIER, capabilities=Capability.MOVABLE, speed=8))
    units = [Unit(id=f"R{i}", name=f"Runner {i}", unit_type_id="RUNNER", pos=Position(i, 0))
             for i in range(4)]
    eng = Engine(seed=1, initial_state=make_state(units, field_size=1), check_results=check_result)
    assert len(eng.state.minefield) == 0
    assert eng.step() is True
    assert all(u.pos.y == 1 for u in units)


def test_each_movable_unit_advances_once_per_step():
    units = [
        Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(0, 0)),
        Unit(id="G1", name="Gun 1", unit_type_id="GUN", pos=Position(1, 0)),
    ]
    eng = Engine(seed=1, initial_state=make_state(units), check_results=always)
    for _ in range(3):
        eng.step()
    assert units[0].pos == Position(0, 3)
    # Guns only move when towed
    assert units[1].pos == Position(1, 0)
    assert eng.state.current_line == 3


def test_towed_gun_follows_tower_through_steps():
    units = [
        Unit(id="B1", name="BTR 1", unit_type_id="BTR", pos=Position(4, 0), hooked_id="G1"),
        Unit(id="G1", name="Gun 1", unit_type_id="GUN", pos=Position(4, 0)),
    ]
    eng = Engine(seed=1, initial_state=make_state(units), check_results=always)
    eng.step()
    eng.step()
    assert units[1].pos == Position(4, 2)


def test_mine_checked_after_movement():
    s = make_state([Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(3, 0))],
                   mines=[Position(3, 1)])
    eng = Engine(seed=1, initial_state=s, check_results=always)
    eng.step()
    assert not s.units["S1"].alive
    kinds = [e.kind for e in eng.pop_events()]
    assert "Blast" in kinds and "Killed" in kinds


def test_finished_engine_never_mutates():
    units = [Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(0, 0))]
    eng = Engine(seed=1, initial_state=make_state(units, field_size=2), check_results=always)
    assert eng.step() and eng.step()
    assert eng.finished
    before = replace(units[0])
    for _ in range(3):
        assert eng.step() is False
    assert units[0] == before
    assert eng.state.current_line == 2


def test_zero_field_is_finished_immediately():
    units = [Unit(id="S1", name="Soldier 1", unit_type_id="SOLDIER", pos=Position(0, 0))]
    eng = Engine(seed=1, initial_state=make_state(units, field_size=0), check_results=always)
    assert eng.step() is False
    assert units[0].pos == Position(0, 0)


def test_negative_field_size_rejected():
    with pytest.raises(ValueError):
        Engine(seed=1, initial_state=State(field_size=-1), check_results=always)


def test_generated_minefield_when_none_given():
    s = State(field_size=10)
    eng = Engine(seed=3, initial_state=s, check_results=always, mine_count=35)
    assert len(eng.state.minefield) == 35


def test_engine_determinism():
    """Same seed should produce identical battles."""
    def play(seed):
        sc = build_default_scenario(seed)
        eng = Engine(seed, sc.state, check_result, mine_count=35)
        verdicts = [eng.step() for _ in range(10)]
        return verdicts, {uid: (u.status, u.pos) for uid, u in sc.state.units.items()}

    assert play(42) == play(42)
