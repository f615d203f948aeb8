import copy
from typing import List, Optional, Tuple
from .geometry import clamp_to_map, region_anchor
from .model import (WARD_DURATIONS, LanePressure, Lane, Objective, ObjectiveKind, PathingProfile,
                    Player, Position, PressureState, Team, Ward, WardKind)
from .profiles import PathingProfileCatalog
from .rng import DRNG, RandomSource
from .tracker import SMITE_ID

FLASH_ID = 4
HEAL_ID = 7
TELEPORT_ID = 12
IGNITE_ID = 14

STAY_TICKS = 30
TRAVEL_TICKS = 20
STAY_JITTER_M = 250.0  # 500-unit spread around the anchor
DRIFT_M = 50.0

WARD_SPAWN_CHANCE = 0.10
OBJECTIVE_KILL_CHANCE = 0.05
LANE_REROLL_CHANCE = 0.20

WARD_CHOKEPOINTS: Tuple[Position, ...] = (
    Position(4600, 10200),  # Top river brush
    Position(10200, 4600),  # Bot river brush
    Position(6500, 8400),   # Mid lane, top-side brush
    Position(8400, 6500),   # Mid lane, bot-side brush
)

TEAMS: Tuple[Team, ...] = ("ORDER", "CHAOS")

def _roster() -> List[Player]:
    """Two five-member teams at plausible early-game spots. ORDER's jungler comes first."""
    def p(name, champ, team, x, y, spells, level, cs):
        return Player(summoner_name=name, character_id=champ, team=team, position=Position(x, y),
                      spell_ids=spells, level=level, creep_score=cs)

    return [
        p("SimOrder1", "LeeSin", "ORDER", 0, 0, (SMITE_ID, FLASH_ID), 7, 45),
        p("SimOrder2", "Garen", "ORDER", 2500, 12500, (FLASH_ID, TELEPORT_ID), 6, 52),
        p("SimOrder3", "Ahri", "ORDER", 7200, 7300, (FLASH_ID, IGNITE_ID), 6, 48),
        p("SimOrder4", "Jinx", "ORDER", 12300, 2200, (FLASH_ID, HEAL_ID), 5, 55),
        p("SimOrder5", "Thresh", "ORDER", 12000, 2600, (FLASH_ID, IGNITE_ID), 4, 8),
        p("SimChaos1", "Elise", "CHAOS", 11500, 9000, (SMITE_ID, FLASH_ID), 6, 40),
        p("SimChaos2", "Darius", "CHAOS", 3000, 13500, (FLASH_ID, TELEPORT_ID), 6, 50),
        p("SimChaos3", "Syndra", "CHAOS", 7800, 7700, (FLASH_ID, TELEPORT_ID), 6, 46),
        p("SimChaos4", "Caitlyn", "CHAOS", 12800, 3000, (FLASH_ID, HEAL_ID), 5, 58),
        p("SimChaos5", "Leona", "CHAOS", 13000, 3300, (FLASH_ID, IGNITE_ID), 4, 6),
    ]

class MatchSimulator:
    """Synthetic match telemetry, advanced one simulated second per tick.

    Deterministic for a given seed. The tracked jungler walks its profile's
    region cycle (stay, travel, advance) while everyone else drifts slightly;
    wards, objectives and lane pressure change at fixed per-tick odds.
    """

    def __init__(self, seed: int, catalog: Optional[PathingProfileCatalog] = None,
                 rng: Optional[RandomSource] = None):
        self.catalog = catalog if catalog is not None else PathingProfileCatalog()
        self.seed = seed
        self._injected_rng = rng
        self._rng = rng if rng is not None else DRNG(seed)
        self._running = False
        self._reset()

    def _reset(self) -> None:
        # An injected source is left alone; the seeded one replays from the start
        if self._injected_rng is None:
            self._rng = DRNG(self.seed)
        self._game_time = 0
        self._players = _roster()
        self._jungler_index = 0
        self._profile: PathingProfile = self.catalog.lookup(self._players[0].character_id)
        self._path_index = 0
        self._time_in_region = 0
        self._travel_time = 0
        self._players[0].position = region_anchor(self._profile.preferred_region_cycle[0])
        self._wards: List[Ward] = []
        self._ward_seq = 0
        self._objectives = [Objective(kind) for kind in ObjectiveKind]
        self._lanes = [
            LanePressure(Lane.TOP, PressureState.NEUTRAL, outer_turret_hp=100.0, inner_turret_hp=100.0),
            LanePressure(Lane.MID, PressureState.PUSHING, outer_turret_hp=100.0, inner_turret_hp=100.0),
            LanePressure(Lane.BOT, PressureState.NEUTRAL, outer_turret_hp=100.0, inner_turret_hp=100.0),
        ]

    def start(self) -> None:
        """Begin a fresh simulated match; restarts from zero if already running."""
        self._reset()
        self._running = True

    def stop(self) -> None:
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def _move_jungler(self) -> None:
        cycle = self._profile.preferred_region_cycle
        if not cycle:
            return
        jungler = self._players[self._jungler_index]
        current = region_anchor(cycle[self._path_index])
        nxt = region_anchor(cycle[(self._path_index + 1) % len(cycle)])

        if self._time_in_region < STAY_TICKS:
            self._time_in_region += 1
            jungler.position = clamp_to_map(
                current.x + self._rng.uniform(-STAY_JITTER_M, STAY_JITTER_M),
                current.y + self._rng.uniform(-STAY_JITTER_M, STAY_JITTER_M),
            )
        elif self._travel_time < TRAVEL_TICKS:
            self._travel_time += 1
            t = self._travel_time / TRAVEL_TICKS
            jungler.position = Position(
                current.x + (nxt.x - current.x) * t,
                current.y + (nxt.y - current.y) * t,
            )
        else:
            # Arrived; next tick starts the stay phase in the new region
            self._path_index = (self._path_index + 1) % len(cycle)
            self._time_in_region = 0
            self._travel_time = 0

    def _drift_others(self) -> None:
        for i, player in enumerate(self._players):
            if i == self._jungler_index:
                continue
            player.position = clamp_to_map(
                player.position.x + self._rng.uniform(-DRIFT_M, DRIFT_M),
                player.position.y + self._rng.uniform(-DRIFT_M, DRIFT_M),
            )

    def _update_wards(self) -> None:
        now = self._game_time
        self._wards = [w for w in self._wards if not w.is_expired(now)]
        if not self._rng.bernoulli(WARD_SPAWN_CHANCE):
            return
        kind = self._rng.choice(list(WardKind))
        self._ward_seq += 1
        self._wards.append(Ward(
            id=f"W{self._ward_seq}",
            position=self._rng.choice(WARD_CHOKEPOINTS),
            kind=kind,
            team=self._rng.choice(TEAMS),
            placed_at=now,
            duration_s=WARD_DURATIONS[kind],
        ))

    def _update_objectives(self) -> None:
        now = self._game_time
        for o in self._objectives:
            o.refresh(now)
        if not self._rng.bernoulli(OBJECTIVE_KILL_CHANCE):
            return
        alive = [o for o in self._objectives if o.alive]
        if alive:
            self._rng.choice(alive).kill(now)

    def _update_lanes(self) -> None:
        states = list(PressureState)
        for lp in self._lanes:
            if self._rng.bernoulli(LANE_REROLL_CHANCE):
                lp.pressure = self._rng.choice(states)

    def tick(self) -> bool:
        """Advance one simulated second. Returns False when not running."""
        if not self._running:
            return False
        self._game_time += 1
        self._move_jungler()
        self._drift_others()
        self._update_wards()
        self._update_objectives()
        self._update_lanes()
        return True

    @property
    def game_time(self) -> int:
        return self._game_time

    def players(self) -> List[Player]:
        return copy.deepcopy(self._players)

    def wards(self) -> List[Ward]:
        return copy.deepcopy(self._wards)

    def objectives(self) -> List[Objective]:
        return copy.deepcopy(self._objectives)

    def lane_pressures(self) -> List[LanePressure]:
        return copy.deepcopy(self._lanes)
