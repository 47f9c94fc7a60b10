from pydantic import BaseModel, Field

class BattleConfig(BaseModel):
    """Battle start request schema."""
    seed: int = 42
    field_size: int = Field(default=10, ge=0)
    mine_count: int = Field(default=35, ge=0)
    max_steps: int = Field(default=10, ge=0)
    min_soldiers: int = Field(default=4, ge=0)
    min_tanks: int = Field(default=2, ge=0)
    tick_ms: int = Field(default=500, gt=0)
    time_compression: float = Field(default=30.0, gt=0)

class StepResponse(BaseModel):
    """Result of advancing one line."""
    ok: bool
    current_line: int
    finished: bool

class EventsResponse(BaseModel):
    """Events response schema."""
    next_offset: int
    events: list[dict]
