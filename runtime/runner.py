import asyncio
from dataclasses import dataclass
from typing import List, Optional
from engine.engine import Engine
from engine.model import Event, State, Unit
from engine.outcome import ResultFunction
from .eventlog import EventLog

@dataclass
class BattleReport:
    steps_run: int = 0
    lost_at_step: Optional[int] = None
    won: Optional[bool] = None  # Decided by the final check once the loop ends
    finished: bool = False

    def to_dict(self) -> dict:
        return {"steps_run": self.steps_run, "lost_at_step": self.lost_at_step,
                "won": self.won, "finished": self.finished}

class TickRunner:
    """Drives the engine step by step up to a fixed bound and keeps the report.

    `step_once` is the synchronous caller loop body; the async loop runs it on
    a tick cadence. The final check is evaluated after the loop ends, loss or
    not, over `final_units` (the engine's field units if not given).
    """

    def __init__(self, engine: Engine, max_steps: int = 10,
                 final_check: Optional[ResultFunction] = None,
                 final_units: Optional[List[Unit]] = None,
                 tick_ms: int = 500, time_compression: float = 30.0):
        self.engine = engine
        self.max_steps = max_steps
        self.final_check = final_check or engine.check_results
        self.final_units = final_units
        self.tick_ms = tick_ms
        self.time_compression = time_compression
        self.sleep_s = (tick_ms / 1000.0) / max(1.0, time_compression)
        self.events = EventLog()
        self.report = BattleReport()
        self._task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    def step_once(self) -> bool:
        """Run one step. Returns False once the battle is over."""
        if self.report.finished:
            return False
        if self.report.steps_run >= self.max_steps:
            self._finish()
            return False
        ok = self.engine.step()
        self.report.steps_run += 1
        evts: List[Event] = self.engine.pop_events()
        self.events.append_many(evts)
        if not ok:
            print(f"[TickRunner] We lost on step {self.report.steps_run}!")
            self.report.lost_at_step = self.report.steps_run
            self._finish()
        elif self.report.steps_run >= self.max_steps:
            self._finish()
        return ok and not self.report.finished

    def _finish(self) -> None:
        units = self.final_units if self.final_units is not None else self.engine.field_units()
        self.report.won = bool(self.final_check(units))
        self.report.finished = True
        if self.report.won:
            print("[TickRunner] We won!!!")

    def run(self) -> BattleReport:
        """Run synchronously to the end."""
        while not self.report.finished:
            self.step_once()
        return self.report

    async def start(self):
        """Start the tick loop."""
        if self._task:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop the tick loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def wait(self) -> BattleReport:
        """Wait for a started loop to finish."""
        if self._task:
            await self._task
        return self.report

    async def step(self) -> bool:
        """Run one step, serialized with the tick loop."""
        async with self._lock:
            return self.step_once()

    async def _loop(self):
        """Main tick loop - step engine, log events, until the battle ends."""
        while not self.report.finished:
            async with self._lock:
                self.step_once()
            await asyncio.sleep(self.sleep_s)

    async def snapshot(self) -> State:
        """Get current state (serialized with the tick loop)."""
        async with self._lock:
            return self.engine.snapshot()

    def set_time_compression(self, time_compression: float):
        """Update time compression factor (1.0 = real-time, higher = faster)."""
        self.time_compression = max(0.1, min(1000.0, time_compression))
        self.sleep_s = (self.tick_ms / 1000.0) / max(1.0, self.time_compression)
        print(f"[TickRunner] Time compression set to {self.time_compression}x (sleep: {self.sleep_s:.4f}s)")

def run_battle(engine: Engine, max_steps: int = 10,
               final_check: Optional[ResultFunction] = None,
               final_units: Optional[List[Unit]] = None) -> BattleReport:
    """Step up to `max_steps` times, stop on the first False, then run the final check."""
    return TickRunner(engine, max_steps, final_check, final_units).run()
