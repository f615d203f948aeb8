"""Tests for jungler identification and tracking."""
import pytest
from tactics.model import MapRegion, Player, Position
from tactics.profiles import PathingProfileCatalog
from tactics.tracker import SMITE_ID, RoleTracker

FLASH = 4
EXHAUST = 3


def make_player(champ: str, x: float, y: float, spells=(FLASH, EXHAUST)) -> Player:
    return Player(summoner_name="", character_id=champ, team="ORDER",
                  position=Position(x, y), spell_ids=spells)


@pytest.fixture
def tracker():
    return RoleTracker(PathingProfileCatalog(), clock=lambda: 123.0)


def test_identifies_jungler_by_smite(tracker):
    roster = [
        make_player("LeeSin", 7000, 7000, spells=(SMITE_ID, FLASH)),
        make_player("Ahri", 7500, 7500),
    ]
    tracker.update(roster)
    state = tracker.get_state()

    assert state is not None
    assert state.character_id == "LeeSin"
    assert state.region == MapRegion.MID_JUNGLE
    assert state.last_seen == 123.0
    assert state.visible
    assert state.profile.aggression_level == 9


def test_smite_in_second_slot(tracker):
    tracker.update([make_player("Elise", 2000, 11000, spells=(FLASH, SMITE_ID))])
    assert tracker.get_state().character_id == "Elise"
    assert tracker.get_state().region == MapRegion.TOP_JUNGLE


def test_no_jungler_found(tracker):
    tracker.update([make_player("Ahri", 7500, 7500)])
    assert tracker.get_state() is None


def test_state_cleared_when_jungler_disappears(tracker):
    tracker.update([make_player("LeeSin", 7000, 7000, spells=(SMITE_ID, FLASH))])
    assert tracker.get_state() is not None
    tracker.update([make_player("Ahri", 7500, 7500)])
    assert tracker.get_state() is None


def test_empty_or_missing_roster(tracker):
    assert tracker.update([]) is None
    assert tracker.update(None) is None


def test_two_smite_holders_takes_first_encountered(tracker):
    """Ambiguous roster: no tie-break beyond roster order."""
    roster = [
        make_player("Kindred", 2000, 11000, spells=(SMITE_ID, FLASH)),
        make_player("Nidalee", 12000, 2000, spells=(SMITE_ID, FLASH)),
    ]
    tracker.update(roster)
    assert tracker.get_state().character_id == "Kindred"


def test_unmapped_character_uses_default_profile(tracker):
    tracker.update([make_player("Shaco", 7000, 7000, spells=(SMITE_ID, FLASH))])
    assert tracker.get_state().profile.character_id == "Shaco"
    assert tracker.get_state().profile.gank_frequency == 0.7


def test_is_near_anchor(tracker):
    tracker.update([make_player("LeeSin", 2500, 13000, spells=(SMITE_ID, FLASH))])

    assert tracker.is_near_anchor(MapRegion.TOP_LANE)
    assert not tracker.is_near_anchor(MapRegion.BOT_LANE)
    # No anchor defined for jungle, base or river
    assert not tracker.is_near_anchor(MapRegion.TOP_JUNGLE)
    assert not tracker.is_near_anchor(MapRegion.RIVER)


def test_is_near_anchor_without_state(tracker):
    assert not tracker.is_near_anchor(MapRegion.MID_LANE)


def test_jungler_without_position_is_not_visible(tracker):
    unplaced = Player(summoner_name="", character_id="LeeSin", team="ORDER",
                      position=None, spell_ids=(SMITE_ID, FLASH))
    state = tracker.update([unplaced])

    assert state.character_id == "LeeSin"
    assert not state.visible
    assert state.position is None
    assert state.region is None
    assert not tracker.is_near_anchor(MapRegion.TOP_LANE)


def test_lost_position_keeps_last_sighting():
    times = iter([10.0, 20.0])
    tracker = RoleTracker(PathingProfileCatalog(), clock=lambda: next(times))
    tracker.update([make_player("LeeSin", 2000, 11000, spells=(SMITE_ID, FLASH))])
    unplaced = Player(summoner_name="", character_id="LeeSin", team="ORDER",
                      position=None, spell_ids=(SMITE_ID, FLASH))
    state = tracker.update([unplaced])

    assert not state.visible
    assert state.region == MapRegion.TOP_JUNGLE
    assert state.last_seen == 10.0
