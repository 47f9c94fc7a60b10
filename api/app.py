from typing import Optional
from fastapi import FastAPI, HTTPException
from engine.engine import Engine
from engine.outcome import make_policy
from runtime.runner import TickRunner
from runtime.scenario import build_default_scenario
from .schemas import BattleConfig, EventsResponse, StepResponse

app = FastAPI(title="Minefield March")
runner: TickRunner | None = None

def _make_runner(cfg: BattleConfig) -> TickRunner:
    """Build engine and runner for the default scenario."""
    scenario = build_default_scenario(seed=cfg.seed, field_size=cfg.field_size)
    policy = make_policy(cfg.min_soldiers, cfg.min_tanks)
    eng = Engine(seed=cfg.seed, initial_state=scenario.state, check_results=policy,
                 mine_count=cfg.mine_count)
    tracked = [scenario.state.units[uid] for uid in scenario.tracked_ids]
    return TickRunner(eng, max_steps=cfg.max_steps, final_check=policy, final_units=tracked,
                      tick_ms=cfg.tick_ms, time_compression=cfg.time_compression)

def _require_runner() -> TickRunner:
    if not runner:
        raise HTTPException(400, "Battle not started")
    return runner

@app.get("/")
async def root():
    """API root endpoint."""
    return {"message": "Minefield March API - visit /docs for API documentation"}

@app.on_event("shutdown")
async def shutdown():
    """Stop the tick loop on app shutdown."""
    global runner
    if runner:
        await runner.stop()

@app.post("/battle/start")
async def start_battle(cfg: Optional[BattleConfig] = None):
    """Start a new battle. Nothing moves until step or run is called."""
    await shutdown()
    global runner
    cfg = cfg or BattleConfig()
    runner = _make_runner(cfg)
    print(f"[API] Battle started (seed {cfg.seed}, {len(runner.engine.snapshot().minefield)} mines)")
    return {"battle_id": "local"}

@app.post("/battle/local/step", response_model=StepResponse)
async def step_battle():
    """Advance the battle by one line."""
    r = _require_runner()
    if r.report.finished:
        raise HTTPException(409, "Battle already finished")
    ok = await r.step()
    s = r.engine.snapshot()
    return StepResponse(ok=ok, current_line=s.current_line, finished=r.report.finished)

@app.post("/battle/local/run")
async def run_battle():
    """Run the remaining steps on the tick cadence in the background."""
    r = _require_runner()
    await r.start()
    return {"running": not r.report.finished}

@app.get("/battle/local/state")
async def get_state():
    """Get current battle state snapshot."""
    r = _require_runner()
    s = await r.snapshot()
    return {
        "field_size": s.field_size,
        "current_line": s.current_line,
        "mines": [m.to_dict() for m in s.minefield],
        "field": list(s.field_ids),
        "units": {uid: u.to_dict() for uid, u in s.units.items()},
    }

@app.get("/battle/local/events")
async def get_events(since: int = 0, limit: int = 500, kind: Optional[str] = None):
    """Get events since offset."""
    r = _require_runner()
    evts, next_offset = r.events.since(since, limit, kind)
    return EventsResponse(
        next_offset=next_offset,
        events=[{"kind": e.kind, "line": e.line, "data": e.data} for e in evts]
    )

@app.get("/battle/local/report")
async def get_report():
    """Get the loss/win report so far."""
    return _require_runner().report.to_dict()

@app.post("/battle/local/time-control")
async def set_time_control(time_compression: float):
    """Set simulation time compression (1.0 = real-time, higher = faster)."""
    r = _require_runner()
    r.set_time_compression(time_compression)
    return {"time_compression": r.time_compression}

@app.get("/battle/local/time-control")
async def get_time_control():
    """Get current time compression setting."""
    return {"time_compression": _require_runner().time_compression}
