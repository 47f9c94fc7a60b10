from typing import List
from .minefield import Minefield
from .model import Event, State, Unit
from .outcome import ResultFunction
from .rng import DRNG
from .roster import Roster

class Engine:
    """Turn-based engine: one forward line per step, mines checked around movement."""

    def __init__(self, seed: int, initial_state: State, check_results: ResultFunction,
                 mine_count: int = 0, mine_extent: int = 10):
        if initial_state.field_size < 0:
            raise ValueError(f"field size must be >= 0, got {initial_state.field_size}")
        self.state = initial_state
        self._rng = DRNG(seed)
        self.check_results = check_results
        self.roster = Roster(initial_state.units)
        self.roster.line = initial_state.current_line
        if self.state.minefield is None:
            self.state.minefield = Minefield.generate(mine_count, self._rng, mine_extent)
        self._events: List[Event] = []

    @property
    def finished(self) -> bool:
        return self.state.current_line == self.state.field_size

    def field_units(self) -> List[Unit]:
        """Units the engine was given, in order."""
        return [self.state.units[uid] for uid in self.state.field_ids]

    def _check_mines(self) -> bool:
        """Detonate mines under alive field units. Returns True on any blast."""
        killed = self.state.minefield.check(self.roster, self.state.field_ids)
        self._collect()
        for uid in killed:
            print(f"[Engine] Blast on line {self.state.current_line}: {uid}")
            self._events.append(Event("Blast", self.state.current_line,
                                      {"unit_id": uid, "pos": self.state.units[uid].pos.to_dict()}))
        return bool(killed)

    def _move(self) -> None:
        """Advance every movable field unit exactly one line."""
        for u in self.field_units():
            if u.is_movable:
                self.roster.move_forward(u.id)

    def _collect(self) -> None:
        self._events += self.roster.pop_events()

    def step(self) -> bool:
        """Advance one line. Returns the outcome policy's verdict, False once finished."""
        if self.finished:
            return False
        self._check_mines()
        self._move()
        self._collect()
        self.state.current_line += 1
        self.roster.line = self.state.current_line
        self._events.append(Event("LineAdvanced", self.state.current_line, {}))
        self._check_mines()
        return bool(self.check_results(self.field_units()))

    def pop_events(self) -> List[Event]:
        """Return and clear events produced since the last call."""
        self._collect()
        evts, self._events = self._events, []
        return evts

    def snapshot(self) -> State:
        """Return current state."""
        return self.state
