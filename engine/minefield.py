from typing import Iterable, Iterator, List, Tuple
from .model import Position
from .rng import DRNG
from .roster import Roster

class Minefield:
    """Fixed set of mine positions. Mines are never consumed."""

    def __init__(self, positions: Iterable[Position] = ()):
        self._positions: Tuple[Position, ...] = tuple(positions)

    @classmethod
    def generate(cls, count: int, rng: DRNG, extent: int = 10) -> "Minefield":
        """Lay exactly `count` mines uniformly over [0, extent) x [0, extent)."""
        if count < 0:
            raise ValueError(f"mine count must be >= 0, got {count}")
        return cls(Position(x, y) for x, y in rng.coords(count, extent))

    @property
    def positions(self) -> Tuple[Position, ...]:
        return self._positions

    def __contains__(self, pos: Position) -> bool:
        return pos in self._positions

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def check(self, roster: Roster, unit_ids: Iterable[str]) -> List[str]:
        """Kill every alive unit standing on a mine. Returns the ids killed."""
        ids = list(unit_ids)
        killed: List[str] = []
        for m in self._positions:
            for uid in ids:
                u = roster.get(uid)
                if u.alive and u.pos == m:
                    roster.kill(uid)
                    killed.append(uid)
        return killed
