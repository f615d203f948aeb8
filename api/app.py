import logging
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from tactics.model import GankAlert, Lane, LanePressure, Objective, Player, Ward
from tactics.profiles import PathingProfileCatalog
from tactics.risk import RiskModel
from tactics.rng import DRNG
from tactics.tracker import RoleTracker
from tactics.waves import format_clock, next_wave, risk_by_clock
from runtime.monitor import Monitor
from runtime.pipeline import InferencePipeline, TickReport
from runtime.settings import get_settings
from runtime.telemetry import LiveClientTelemetry, SimulatedTelemetry
from .schemas import GankOutcomeIn, ReportsResponse, StartRequest, WaveResponse

settings = get_settings()
logging.basicConfig(level=settings.log_level,
                    format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Gank Radar API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

catalog = PathingProfileCatalog()
live_source = LiveClientTelemetry(settings.live_client_url, timeout_s=settings.request_timeout_s)
sim_source = SimulatedTelemetry(catalog, tick_s=settings.sim_tick_s)
risk_model = RiskModel(rng=DRNG(settings.default_seed))
pipeline = InferencePipeline(
    sim_source if settings.use_simulator else live_source,
    RoleTracker(catalog),
    risk_model,
)
monitor = Monitor(pipeline, poll_interval_s=settings.live_poll_interval_s,
                  max_reports=settings.max_reports)

def _idle_source():
    return sim_source if settings.use_simulator else live_source

def _player(p: Player) -> dict:
    return {
        "summoner_name": p.summoner_name,
        "character_id": p.character_id,
        "team": p.team,
        "pos": {"x": p.position.x, "y": p.position.y} if p.position else None,
        "spell_ids": list(p.spell_ids),
        "is_dead": p.is_dead,
        "level": p.level,
        "kills": p.kills,
        "deaths": p.deaths,
        "assists": p.assists,
        "creep_score": p.creep_score,
    }

def _ward(w: Ward) -> dict:
    return {
        "id": w.id,
        "pos": {"x": w.position.x, "y": w.position.y},
        "kind": w.kind.value,
        "team": w.team,
        "placed_at": w.placed_at,
        "duration_s": w.duration_s,
    }

def _objective(o: Objective) -> dict:
    return {"kind": o.kind.value, "alive": o.alive, "killed_at": o.killed_at, "respawn_at": o.respawn_at}

def _lane(lp: LanePressure) -> dict:
    return {
        "lane": lp.lane.value,
        "pressure": lp.pressure.value,
        "outer_turret_hp": lp.outer_turret_hp,
        "inner_turret_hp": lp.inner_turret_hp,
    }

def _alert(a: GankAlert) -> dict:
    return {
        "risk": a.risk.value,
        "target_lane": a.target_lane.value,
        "estimated_arrival_s": a.estimated_arrival_s,
        "reason": a.reason,
        "timestamp": a.timestamp,
    }

def _report_payload(r: TickReport) -> dict:
    return {
        "game_state": r.game_state.value,
        "game_time": r.game_time,
        "wave_countdown": r.wave_countdown,
        "is_siege": r.is_siege,
        "clock_risk": r.clock_risk.value,
        "risk_tier": r.risk_tier.value,
        "narrative": r.narrative,
        "role_name": r.role_name,
        "alerts": [_alert(a) for a in r.alerts],
        "players": [_player(p) for p in r.players],
        "wards": [_ward(w) for w in r.wards],
        "objectives": [_objective(o) for o in r.objectives],
        "lane_pressures": [_lane(lp) for lp in r.lane_pressures],
        "error": r.error,
        "error_type": r.error_type,
    }

@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Gank Radar API",
        "docs": "/docs",
        "simulating": sim_source.simulating,
    }

@app.on_event("startup")
async def startup():
    """Start polling telemetry; optionally boot straight into a simulation."""
    if settings.use_simulator:
        await sim_source.start_simulation(settings.default_seed)
        monitor.set_poll_interval(settings.sim_poll_interval_s)
    await monitor.start()

@app.on_event("shutdown")
async def shutdown():
    """Stop polling and any running simulation."""
    await monitor.stop()
    await sim_source.stop_simulation()
    await live_source.close()

@app.get("/report")
async def get_report(refresh: bool = False):
    """Latest tick report; runs a cycle now if asked or if none exists yet."""
    report = monitor.latest
    if refresh or report is None:
        report = await monitor.run_once()
    return _report_payload(report)

@app.get("/reports")
async def get_reports(since: int = 0, limit: int = 500):
    """Get reports since offset."""
    reports, next_offset = monitor.reports.since(since, limit)
    return ReportsResponse(next_offset=next_offset, reports=[_report_payload(r) for r in reports])

@app.post("/simulation/start")
async def start_simulation(req: StartRequest):
    """Start a new simulated match, replacing any running one."""
    seed = req.seed if req.seed is not None else settings.default_seed
    await sim_source.start_simulation(seed, time_compression=req.time_compression)
    await pipeline.use_source(sim_source)
    monitor.set_poll_interval(settings.sim_poll_interval_s)
    return {"simulating": True, "seed": seed}

@app.post("/simulation/stop")
async def stop_simulation():
    """Stop the simulated match and fall back to the idle source."""
    await sim_source.stop_simulation()
    await pipeline.use_source(_idle_source())
    monitor.set_poll_interval(settings.live_poll_interval_s)
    return {"simulating": False}

@app.post("/simulation/time-control")
async def set_time_control(time_compression: float):
    """Set simulation time compression (1.0 = real-time, higher = faster)."""
    if not sim_source.runner:
        raise HTTPException(400, "Simulation not running")
    sim_source.runner.set_time_compression(time_compression)
    return {"time_compression": sim_source.runner.time_compression}

@app.get("/simulation/time-control")
async def get_time_control():
    """Get current time compression setting."""
    if not sim_source.runner:
        raise HTTPException(400, "Simulation not running")
    return {"time_compression": sim_source.runner.time_compression}

@app.get("/waves/{game_time}")
async def get_wave(game_time: float):
    """Next minion wave and clock-based gank risk at a given game time."""
    wave = next_wave(game_time)
    return WaveResponse(
        game_time=game_time,
        next_wave_at=wave.next_wave_at,
        time_left=wave.time_left,
        countdown=format_clock(wave.time_left),
        is_siege=wave.is_siege,
        clock_risk=risk_by_clock(game_time).value,
    )

@app.post("/ganks")
async def record_gank(outcome: GankOutcomeIn):
    """Record an observed gank outcome for the risk model's history."""
    entry = risk_model.record_outcome(Lane(outcome.lane), outcome.success)
    logger.info("Recorded gank on %s (success=%s)", entry.lane.value, entry.success)
    return {"recorded": True, "history_size": len(risk_model.history)}
