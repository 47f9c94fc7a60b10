"""Outcome policies: decide after each tick whether the battle is still acceptable."""
from typing import Callable, Dict, Iterable, List
from .model import Unit, UnitClass

ResultFunction = Callable[[List[Unit]], bool]

def count_alive(units: Iterable[Unit]) -> Dict[UnitClass, int]:
    """Tally alive units per class."""
    counts: Dict[UnitClass, int] = {c: 0 for c in UnitClass}
    for u in units:
        if u.alive:
            counts[u.get_type().unit_class] += 1
    return counts

def make_policy(min_soldiers: int = 4, min_tanks: int = 2) -> ResultFunction:
    """Build a policy that holds while enough soldiers OR enough tanks survive."""
    def check(units: List[Unit]) -> bool:
        counts = count_alive(units)
        return counts[UnitClass.SOLDIER] >= min_soldiers or counts[UnitClass.TANK] >= min_tanks
    return check

check_result: ResultFunction = make_policy()
