import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from tactics.model import (GameFactors, GameState, GankAlert, LanePressure, Objective, Player,
                           RiskTier, Ward)
from tactics.risk import RiskModel
from tactics.tracker import RoleTracker
from tactics.waves import format_clock, next_wave, risk_by_clock
from .telemetry import TelemetryError, TelemetrySource

logger = logging.getLogger(__name__)

WAITING_NARRATIVE = "Waiting for match..."
UNKNOWN_ROLE = "Unknown"
NO_WAVE = "--:--"

@dataclass
class TickReport:
    """Everything the presentation side needs for one tick."""
    game_state: GameState
    game_time: float = 0.0
    wave_countdown: str = NO_WAVE
    is_siege: bool = False
    clock_risk: RiskTier = RiskTier.LOW
    risk_tier: RiskTier = RiskTier.LOW
    narrative: str = WAITING_NARRATIVE
    role_name: str = UNKNOWN_ROLE
    alerts: List[GankAlert] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    wards: List[Ward] = field(default_factory=list)
    objectives: List[Objective] = field(default_factory=list)
    lane_pressures: List[LanePressure] = field(default_factory=list)
    error: Optional[str] = None
    error_type: Optional[str] = None

class InferencePipeline:
    """One inference cycle per call: role update, risk scoring, hypothesis.

    The lock makes the pipeline the single owner of tracker and risk-model
    state; overlapping calls run one after the other.
    """

    def __init__(self, source: TelemetrySource, tracker: RoleTracker, risk_model: RiskModel):
        self.source = source
        self.tracker = tracker
        self.risk_model = risk_model
        self._lock = asyncio.Lock()

    async def use_source(self, source: TelemetrySource) -> None:
        """Swap the telemetry source between cycles."""
        async with self._lock:
            self.source = source

    async def run_tick(self) -> TickReport:
        async with self._lock:
            try:
                return await self._run()
            except TelemetryError as e:
                logger.warning("Telemetry failed, no new data this tick: %s", e.message)
                return TickReport(game_state=GameState.NOT_ACTIVE, error=e.message, error_type=e.kind)

    async def _run(self) -> TickReport:
        game_state = await self.source.game_state()
        game_time = await self.source.game_time()
        report = TickReport(game_state=game_state, game_time=game_time or 0.0)

        if game_state == GameState.NOT_ACTIVE:
            err = getattr(self.source, "last_error", None)
            if err is not None:
                report.error = err.message
                report.error_type = err.kind
            return report

        report.players = await self.source.roster()
        state = self.tracker.update(report.players)
        if state is not None:
            report.role_name = state.character_id

        report.wards = await self.source.wards()
        report.objectives = await self.source.objectives()
        report.lane_pressures = await self.source.lane_pressures()

        factors = GameFactors.assemble(state, report.wards, report.objectives,
                                       report.lane_pressures, game_time)
        hypothesis = self.risk_model.generate_hypothesis(factors)
        report.risk_tier = hypothesis.risk_tier
        report.narrative = hypothesis.narrative
        report.alerts = self.risk_model.predict_alerts(state)

        wave = next_wave(factors.game_time)
        report.wave_countdown = format_clock(wave.time_left)
        report.is_siege = wave.is_siege
        report.clock_risk = risk_by_clock(factors.game_time)
        return report
