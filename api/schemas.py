from typing import Literal
from pydantic import BaseModel, Field

class StartRequest(BaseModel):
    """Simulation start request schema."""
    seed: int | None = None
    time_compression: float = Field(default=1.0, gt=0)

class GankOutcomeIn(BaseModel):
    """Observed gank outcome."""
    lane: Literal["top", "mid", "bot"]
    success: bool

class ReportsResponse(BaseModel):
    """Report log page schema."""
    next_offset: int
    reports: list[dict]

class WaveResponse(BaseModel):
    game_time: float
    next_wave_at: float
    time_left: float
    countdown: str
    is_siege: bool
    clock_risk: Literal["low", "medium", "high"]
