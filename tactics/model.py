from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple
from enum import Enum

Team = Literal["ORDER", "CHAOS"]

MAP_MIN = 0.0
MAP_MAX = 15000.0

@dataclass(frozen=True)
class Position:
    x: float
    y: float

class MapRegion(Enum):
    """Named map zone"""
    BASE = "base"
    TOP_JUNGLE = "top_jungle"
    MID_JUNGLE = "mid_jungle"
    BOT_JUNGLE = "bot_jungle"
    TOP_LANE = "top_lane"
    MID_LANE = "mid_lane"
    BOT_LANE = "bot_lane"
    RIVER = "river"

    @property
    def is_jungle(self) -> bool:
        return "jungle" in self.value

    @property
    def side(self) -> str:
        """Map side derived from the zone name (base and river count as mid)."""
        if self.value.startswith("top"):
            return "top"
        if self.value.startswith("bot"):
            return "bot"
        return "mid"

class Lane(Enum):
    TOP = "top"
    MID = "mid"
    BOT = "bot"

class PressureState(Enum):
    PUSHING = "pushing"
    NEUTRAL = "neutral"
    RECEDING = "receding"

class WardKind(Enum):
    VISION = "vision"  # Stealth ward, short lived
    PINK = "pink"      # Control ward

class ObjectiveKind(Enum):
    DRAGON = "dragon"
    BARON = "baron"
    HERALD = "herald"

class GameState(Enum):
    """What the telemetry source reports about the match"""
    NOT_ACTIVE = "not_active"
    LOADING = "loading"
    IN_GAME = "in_game"

class RiskTier(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

# Seconds between a kill and the objective becoming available again
RESPAWN_DELAYS: Dict[ObjectiveKind, float] = {
    ObjectiveKind.DRAGON: 300,
    ObjectiveKind.BARON: 360,
    ObjectiveKind.HERALD: 480,
}

WARD_DURATIONS: Dict[WardKind, float] = {
    WardKind.VISION: 90,
    WardKind.PINK: 150,
}

@dataclass(frozen=True)
class PathingProfile:
    """Behavioural preset for a character playing the roaming role"""
    character_id: str
    preferred_region_cycle: Tuple[MapRegion, ...]
    gank_frequency: float  # Ganks per minute, roughly 0-1
    aggression_level: int  # 1-10
    common_target_lanes: Tuple[Lane, ...]
    average_gank_duration_s: float

@dataclass
class Player:
    summoner_name: str
    character_id: str
    team: Team
    position: Optional[Position]  # None when the source reports no coordinates
    spell_ids: Tuple[int, int]  # Utility-ability slot ids
    is_dead: bool = False
    level: int = 1
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    creep_score: int = 0

@dataclass
class TrackedRoleState:
    character_id: str
    position: Optional[Position]
    region: Optional[MapRegion]
    last_seen: float
    profile: PathingProfile
    visible: bool = True

@dataclass(frozen=True)
class Ward:
    id: str
    position: Position
    kind: WardKind
    team: Team
    placed_at: float
    duration_s: float

    def age(self, now: float) -> float:
        return now - self.placed_at

    def is_expired(self, now: float) -> bool:
        return self.age(now) >= self.duration_s

@dataclass
class Objective:
    kind: ObjectiveKind
    alive: bool = True
    killed_at: Optional[float] = None
    respawn_at: Optional[float] = None

    def kill(self, now: float) -> None:
        """Mark the objective taken; respawn follows the fixed delay for its kind."""
        self.alive = False
        self.killed_at = now
        self.respawn_at = now + RESPAWN_DELAYS[self.kind]

    def refresh(self, now: float) -> bool:
        """Bring the objective back once its respawn time is reached."""
        if self.alive or self.respawn_at is None or now < self.respawn_at:
            return False
        self.alive = True
        self.killed_at = None
        self.respawn_at = None
        return True

@dataclass
class LanePressure:
    lane: Lane
    pressure: PressureState
    outer_turret_hp: Optional[float] = None
    inner_turret_hp: Optional[float] = None

@dataclass(frozen=True)
class GameFactors:
    """Read-only snapshot consumed by the risk model once per tick"""
    role_state: Optional[TrackedRoleState]
    wards: Tuple[Ward, ...] = ()
    objectives: Tuple[Objective, ...] = ()
    lane_pressures: Tuple[LanePressure, ...] = ()
    game_time: float = 0.0

    @classmethod
    def assemble(cls, role_state: Optional[TrackedRoleState], wards: List[Ward],
                 objectives: List[Objective], lane_pressures: List[LanePressure],
                 game_time: Optional[float]) -> "GameFactors":
        return cls(
            role_state=role_state,
            wards=tuple(wards or ()),
            objectives=tuple(objectives or ()),
            lane_pressures=tuple(lane_pressures or ()),
            game_time=float(game_time or 0.0),
        )

    def pressure_of(self, lane: Lane) -> Optional[PressureState]:
        for lp in self.lane_pressures:
            if lp.lane == lane:
                return lp.pressure
        return None

    def objective(self, kind: ObjectiveKind) -> Optional[Objective]:
        for o in self.objectives:
            if o.kind == kind:
                return o
        return None

@dataclass(frozen=True)
class GankHistoryEntry:
    timestamp: float
    lane: Lane
    success: bool

@dataclass
class GankAlert:
    risk: RiskTier
    target_lane: Lane
    estimated_arrival_s: int
    reason: str
    timestamp: float

@dataclass
class Hypothesis:
    risk_tier: RiskTier
    narrative: str
    target_lane: Optional[Lane] = None

@dataclass
class WaveInfo:
    next_wave_at: float
    time_left: float
    is_siege: bool
