import time
from collections import deque
from typing import Callable, Deque, List, Optional
from .geometry import distance, nearest_lane
from .model import (GameFactors, GankAlert, GankHistoryEntry, Hypothesis, Lane, Objective,
                    ObjectiveKind, PressureState, RiskTier, TrackedRoleState, Ward)
from .rng import DRNG, RandomSource

HISTORY_LIMIT = 20
HISTORY_WINDOW_S = 300.0
ALERT_THRESHOLD = 0.3

OBJECTIVE_LOOKBACK_S = 60.0
OBJECTIVE_IMMINENT_S = 30.0
WARD_RANGE_M = 2000.0
WARD_FRESH_S = 30.0

OPPOSITE_LANE = {"top": Lane.BOT, "bot": Lane.TOP}

def tier_for(probability: float) -> RiskTier:
    if probability > 0.7:
        return RiskTier.HIGH
    if probability > 0.5:
        return RiskTier.MEDIUM
    return RiskTier.LOW

class RiskModel:
    """Scores gank likelihood and explains it.

    Holds a bounded history of observed gank outcomes; the recent success rate
    feeds back into the probability score.
    """

    def __init__(self, rng: Optional[RandomSource] = None, clock: Callable[[], float] = time.time):
        self._rng = rng if rng is not None else DRNG(0)
        self._clock = clock
        self._history: Deque[GankHistoryEntry] = deque(maxlen=HISTORY_LIMIT)

    @property
    def history(self) -> List[GankHistoryEntry]:
        return list(self._history)

    def record_outcome(self, lane: Lane, success: bool) -> GankHistoryEntry:
        """Append an observed gank; the oldest entry drops off past the limit."""
        entry = GankHistoryEntry(timestamp=self._clock(), lane=lane, success=success)
        self._history.append(entry)
        return entry

    def recent_success_rate(self) -> float:
        now = self._clock()
        recent = [g for g in self._history if now - g.timestamp < HISTORY_WINDOW_S]
        if not recent:
            return 0.0
        return sum(1 for g in recent if g.success) / len(recent)

    def probability(self, state: Optional[TrackedRoleState]) -> float:
        if state is None:
            return 0.0
        profile = state.profile
        p = profile.gank_frequency * 0.4
        p += (profile.aggression_level / 10) * 0.3
        if state.region is not None and state.region.is_jungle:
            p += 0.2
        p += self.recent_success_rate() * 0.1
        return min(p, 1.0)

    def likely_targets(self, state: Optional[TrackedRoleState]) -> List[Lane]:
        if state is None:
            return []
        return list(state.profile.common_target_lanes)

    def predict_alerts(self, state: Optional[TrackedRoleState]) -> List[GankAlert]:
        """Per-lane alerts from the character's usual targets."""
        if state is None:
            return []
        p = self.probability(state)
        if p < ALERT_THRESHOLD:
            return []

        risk = tier_for(p)
        now = self._clock()
        alerts: List[GankAlert] = []
        for lane in self.likely_targets(state):
            alerts.append(GankAlert(
                risk=risk,
                target_lane=lane,
                estimated_arrival_s=self._rng.integers(10, 40),
                reason=f"Jungler {state.character_id} is likely heading for {lane.value} lane",
                timestamp=now,
            ))
        return alerts

    def generate_hypothesis(self, factors: GameFactors) -> Hypothesis:
        """Pick the first matching scenario and narrate it."""
        state = factors.role_state
        if state is None or not state.visible:
            return self._unseen_hypothesis(factors)

        ward = self._fresh_ward_near(state, factors)
        if ward is not None:
            return self._warded_hypothesis(state, factors)
        return self._unwarded_hypothesis(state, factors)

    def _unseen_hypothesis(self, factors: GameFactors) -> Hypothesis:
        now = factors.game_time
        recent: List[Objective] = [
            o for o in factors.objectives
            if not o.alive and o.killed_at is not None
            and 0 <= now - o.killed_at < OBJECTIVE_LOOKBACK_S
        ]
        recent.sort(key=lambda o: o.killed_at, reverse=True)
        if recent and now - recent[0].killed_at < OBJECTIVE_IMMINENT_S:
            obj = recent[0]
            ago = int(now - obj.killed_at)
            return Hypothesis(
                risk_tier=RiskTier.HIGH,
                narrative=(f"{obj.kind.value.capitalize()} was taken {ago}s ago. "
                           f"Expect the jungler to collapse near the {obj.kind.value} pit; "
                           f"an ambush there is imminent."),
            )

        for lp in factors.lane_pressures:
            if lp.pressure == PressureState.PUSHING:
                return Hypothesis(
                    risk_tier=RiskTier.MEDIUM,
                    narrative=(f"Jungler not sighted. {lp.lane.value.capitalize()} lane is pushing "
                               f"and is the most exposed target."),
                    target_lane=lp.lane,
                )

        return Hypothesis(
            risk_tier=RiskTier.LOW,
            narrative="Jungler has not been sighted recently. Nothing on the map points to a gank yet.",
        )

    def _fresh_ward_near(self, state: TrackedRoleState, factors: GameFactors) -> Optional[Ward]:
        for w in factors.wards:
            if (distance(w.position, state.position) <= WARD_RANGE_M
                    and 0 <= w.age(factors.game_time) < WARD_FRESH_S):
                return w
        return None

    def _warded_hypothesis(self, state: TrackedRoleState, factors: GameFactors) -> Hypothesis:
        side = state.region.side
        dragon = factors.objective(ObjectiveKind.DRAGON)
        if dragon is None:
            dragon_note = "Dragon status is unknown."
        elif dragon.alive:
            dragon_note = "Dragon is up."
        else:
            dragon_note = "Dragon is down."

        narrative = f"{state.character_id} was spotted by a fresh ward on the {side} side. {dragon_note}"
        opposite = OPPOSITE_LANE.get(side)
        if opposite is not None:
            pushing = factors.pressure_of(opposite) == PressureState.PUSHING
            verb = "is pushing" if pushing else "is not pushing"
            narrative += f" {opposite.value.capitalize()} lane on the far side {verb}."
        return Hypothesis(risk_tier=RiskTier.MEDIUM, narrative=narrative, target_lane=nearest_lane(state.region))

    def _unwarded_hypothesis(self, state: TrackedRoleState, factors: GameFactors) -> Hypothesis:
        lane = nearest_lane(state.region)
        pressure = factors.pressure_of(lane)
        pressure_text = pressure.value if pressure is not None else "unknown"
        region_text = state.region.value.replace("_", " ")
        return Hypothesis(
            risk_tier=RiskTier.HIGH,
            narrative=(f"{state.character_id} is in the {region_text} with no fresh ward on them. "
                       f"{lane.value.capitalize()} lane is {pressure_text}; it is the likely gank target."),
            target_lane=lane,
        )
