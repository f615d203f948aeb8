"""Tests for gank probability, alerts and hypothesis generation."""
import pytest
from tactics.model import (GameFactors, Lane, LanePressure, MapRegion, Objective, ObjectiveKind,
                           PathingProfile, Position, PressureState, RiskTier, TrackedRoleState,
                           Ward, WardKind)
from tactics.profiles import PathingProfileCatalog
from tactics.risk import HISTORY_LIMIT, RiskModel
from tactics.rng import DRNG

CATALOG = PathingProfileCatalog()


class FixedRng:
    """Random source that always draws the same values."""

    def __init__(self, value: int = 17):
        self.value = value

    def bernoulli(self, p):
        return False

    def uniform(self, a, b):
        return a

    def integers(self, low, high):
        return self.value

    def choice(self, items):
        return items[0]


class Clock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_state(region=MapRegion.BOT_JUNGLE, pos=Position(11000, 2500), champ="LeeSin",
               profile=None, visible=True) -> TrackedRoleState:
    return TrackedRoleState(
        character_id=champ,
        position=pos,
        region=region,
        last_seen=0.0,
        profile=profile or CATALOG.lookup(champ),
        visible=visible,
    )


def make_profile(freq: float, aggression: int) -> PathingProfile:
    return PathingProfile(
        character_id="Test",
        preferred_region_cycle=(MapRegion.MID_JUNGLE,),
        gank_frequency=freq,
        aggression_level=aggression,
        common_target_lanes=(Lane.MID,),
        average_gank_duration_s=20,
    )


def lanes(top=PressureState.NEUTRAL, mid=PressureState.NEUTRAL, bot=PressureState.NEUTRAL):
    return [LanePressure(Lane.TOP, top), LanePressure(Lane.MID, mid), LanePressure(Lane.BOT, bot)]


@pytest.fixture
def clock():
    return Clock(1000.0)


@pytest.fixture
def model(clock):
    return RiskModel(rng=FixedRng(), clock=clock)


# --- probability -----------------------------------------------------------

def test_probability_example(model):
    """0.8*0.4 + 0.9*0.3 + 0.2 for a jungle position with no history."""
    assert model.probability(make_state()) == pytest.approx(0.79)


def test_probability_without_state(model):
    assert model.probability(None) == 0


def test_probability_outside_jungle(model):
    state = make_state(region=MapRegion.MID_LANE, pos=Position(7500, 7500))
    assert model.probability(state) == pytest.approx(0.59)


def test_probability_clamped(model):
    state = make_state(profile=make_profile(2.0, 10))
    assert model.probability(state) == 1.0


def test_recent_success_raises_probability(model, clock):
    model.record_outcome(Lane.MID, True)
    assert model.probability(make_state()) == pytest.approx(0.89)


def test_old_history_is_ignored(model, clock):
    clock.now = 0.0
    model.record_outcome(Lane.TOP, True)
    clock.now = 400.0
    model.record_outcome(Lane.TOP, False)
    clock.now = 450.0
    # Only the failure is inside the 300s window
    assert model.recent_success_rate() == 0.0
    assert model.probability(make_state()) == pytest.approx(0.79)


def test_history_is_bounded_fifo(model, clock):
    for i in range(25):
        clock.now = float(i)
        model.record_outcome(Lane.BOT, i % 2 == 0)

    history = model.history
    assert len(history) == HISTORY_LIMIT
    assert history[0].timestamp == 5.0
    assert history[-1].timestamp == 24.0


# --- alerts ----------------------------------------------------------------

def test_alerts_for_each_common_target(model):
    alerts = model.predict_alerts(make_state())
    assert [a.target_lane for a in alerts] == [Lane.MID, Lane.TOP]
    assert all(a.risk == RiskTier.HIGH for a in alerts)
    assert all(a.estimated_arrival_s == 17 for a in alerts)
    assert "LeeSin" in alerts[0].reason


def test_no_alerts_below_threshold(model):
    state = make_state(region=MapRegion.MID_LANE, profile=make_profile(0.1, 1))
    assert model.predict_alerts(state) == []
    assert model.predict_alerts(None) == []


@pytest.mark.parametrize("freq, aggression, region, tier", [
    (0.5, 5, MapRegion.MID_JUNGLE, RiskTier.MEDIUM),  # 0.55
    (0.5, 5, MapRegion.MID_LANE, RiskTier.LOW),       # 0.35
])
def test_alert_tiers(model, freq, aggression, region, tier):
    alerts = model.predict_alerts(make_state(region=region, profile=make_profile(freq, aggression)))
    assert len(alerts) == 1
    assert alerts[0].risk == tier


def test_alert_arrival_from_seeded_source(clock):
    model = RiskModel(rng=DRNG(3), clock=clock)
    for _ in range(20):
        for alert in model.predict_alerts(make_state()):
            assert 10 <= alert.estimated_arrival_s < 40


# --- hypothesis ------------------------------------------------------------

def test_absent_role_after_fresh_objective_is_high(model):
    dragon = Objective(ObjectiveKind.DRAGON)
    dragon.kill(90)
    factors = GameFactors.assemble(None, [], [dragon], lanes(), 100)

    h = model.generate_hypothesis(factors)
    assert h.risk_tier == RiskTier.HIGH
    assert "Dragon" in h.narrative
    assert "dragon pit" in h.narrative


def test_absent_role_with_older_objective_falls_back_to_lanes(model):
    baron = Objective(ObjectiveKind.BARON)
    baron.kill(100)
    factors = GameFactors.assemble(None, [], [baron], lanes(mid=PressureState.PUSHING), 145)

    h = model.generate_hypothesis(factors)
    assert h.risk_tier == RiskTier.MEDIUM
    assert "Mid lane is pushing" in h.narrative
    assert h.target_lane == Lane.MID


def test_absent_role_with_nothing_happening_is_low(model):
    h = model.generate_hypothesis(GameFactors.assemble(None, [], [], [], None))
    assert h.risk_tier == RiskTier.LOW
    assert "not been sighted" in h.narrative


def test_hidden_role_uses_unseen_scenario(model):
    state = make_state(visible=False)
    h = model.generate_hypothesis(GameFactors.assemble(state, [], [], lanes(), 300))
    assert h.risk_tier == RiskTier.LOW


def test_alive_objectives_without_timestamps_are_ignored(model):
    factors = GameFactors.assemble(None, [], [Objective(k) for k in ObjectiveKind], [], 20)
    assert model.generate_hypothesis(factors).risk_tier == RiskTier.LOW


def test_fresh_ward_near_visible_role_is_medium(model):
    state = make_state(region=MapRegion.TOP_JUNGLE, pos=Position(2500, 11000))
    ward = Ward("W1", Position(3000, 11500), WardKind.VISION, "CHAOS", placed_at=90, duration_s=90)
    factors = GameFactors.assemble(state, [ward], [Objective(ObjectiveKind.DRAGON)],
                                   lanes(bot=PressureState.PUSHING), 100)

    h = model.generate_hypothesis(factors)
    assert h.risk_tier == RiskTier.MEDIUM
    assert "top side" in h.narrative
    assert "Dragon is up" in h.narrative
    assert "Bot lane on the far side is pushing" in h.narrative


def test_fresh_ward_mentions_downed_dragon(model):
    state = make_state()
    dragon = Objective(ObjectiveKind.DRAGON)
    dragon.kill(50)
    ward = Ward("W2", Position(11200, 2700), WardKind.PINK, "ORDER", placed_at=95, duration_s=150)
    h = model.generate_hypothesis(GameFactors.assemble(state, [ward], [dragon], lanes(), 100))

    assert h.risk_tier == RiskTier.MEDIUM
    assert "bot side" in h.narrative
    assert "Dragon is down" in h.narrative
    assert "Top lane on the far side is not pushing" in h.narrative


def test_stale_ward_gives_high_risk_on_nearest_lane(model):
    state = make_state(region=MapRegion.TOP_JUNGLE, pos=Position(2500, 11000))
    ward = Ward("W1", Position(3000, 11500), WardKind.VISION, "CHAOS", placed_at=50, duration_s=90)
    h = model.generate_hypothesis(GameFactors.assemble(state, [ward], [], lanes(), 100))

    assert h.risk_tier == RiskTier.HIGH
    assert h.target_lane == Lane.TOP
    assert "Top lane is neutral" in h.narrative


def test_far_ward_does_not_corroborate(model):
    state = make_state()
    ward = Ward("W1", Position(2000, 12000), WardKind.VISION, "CHAOS", placed_at=99, duration_s=90)
    h = model.generate_hypothesis(GameFactors.assemble(state, [ward], [], [], 100))

    assert h.risk_tier == RiskTier.HIGH
    assert h.target_lane == Lane.BOT
    assert "Bot lane is unknown" in h.narrative
