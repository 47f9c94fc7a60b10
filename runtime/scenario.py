"""Default battle setup: who is on the field, who rides in which squad, who tows what."""
from dataclasses import dataclass, field
from typing import List
from engine.model import Position, State, Unit
from engine.rng import DRNG
from engine.roster import Roster

@dataclass
class Scenario:
    state: State
    tracked_ids: List[str] = field(default_factory=list)  # Units counted by the final check

def build_default_scenario(seed: int = 42, field_size: int = 10) -> Scenario:
    """Four soldiers (two in a squad), three BTRs, two tanks and two towed guns.

    Every unit starts on line 0 at a random column in [0, 10).
    """
    rng = DRNG(seed)
    roster = Roster()

    def start() -> Position:
        return Position(rng.integer(0, 10), 0)

    for i, rank in enumerate(["private", "private", "private", "corporal"], start=1):
        roster.register(Unit(id=f"S{i}", name=f"Soldier {i}", unit_type_id="SOLDIER",
                             pos=start(), rank=rank))
    roster.register(Unit(id="SQ1", name="Squad 1", unit_type_id="SQUAD", pos=start()))
    roster.add("SQ1", "S1")
    roster.add("SQ1", "S2")
    for i in range(1, 4):
        roster.register(Unit(id=f"B{i}", name=f"BTR {i}", unit_type_id="BTR",
                             pos=start(), model="BTR-90"))
    for i in range(1, 3):
        roster.register(Unit(id=f"T{i}", name=f"Tank {i}", unit_type_id="TANK",
                             pos=start(), model="T-90"))
    for i in range(1, 3):
        roster.register(Unit(id=f"G{i}", name=f"Gun {i}", unit_type_id="GUN", pos=start()))
    roster.hook("SQ1", "G1")
    roster.hook("B2", "G2")

    state = State(
        field_size=field_size,
        units=roster.units,
        field_ids=["S3", "S4", "SQ1", "B1", "B2", "B3", "T1", "T2", "G1", "G2"],
    )
    tracked = ["S1", "S2", "S3", "S4", "B1", "B2", "B3", "T1", "T2", "G1", "G2"]
    return Scenario(state=state, tracked_ids=tracked)
