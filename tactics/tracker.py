import time
from typing import Callable, Iterable, Optional
from .geometry import classify_position, distance, lane_anchor
from .model import MapRegion, Player, TrackedRoleState
from .profiles import PathingProfileCatalog

SMITE_ID = 11
NEAR_ANCHOR_M = 2000.0

def carries_smite(player: Player) -> bool:
    return SMITE_ID in tuple(player.spell_ids or ())

class RoleTracker:
    """Finds the roaming jungle role in a roster and remembers where it was.

    The first roster member carrying Smite in either slot is taken as the
    jungler. When two members qualify the first one wins; nothing else
    disambiguates them.
    """

    def __init__(self, catalog: PathingProfileCatalog, clock: Callable[[], float] = time.time):
        self.catalog = catalog
        self._clock = clock
        self._state: Optional[TrackedRoleState] = None

    def update(self, roster: Optional[Iterable[Player]]) -> Optional[TrackedRoleState]:
        """Rebuild the tracked state from a fresh roster snapshot."""
        jungler = next((p for p in roster or () if carries_smite(p)), None)
        if jungler is None:
            self._state = None
            return None

        if jungler.position is None:
            self._state = self._unsighted(jungler)
            return self._state

        self._state = TrackedRoleState(
            character_id=jungler.character_id,
            position=jungler.position,
            region=classify_position(jungler.position),
            last_seen=self._clock(),
            profile=self.catalog.lookup(jungler.character_id),
            visible=True,
        )
        return self._state

    def _unsighted(self, jungler: Player) -> TrackedRoleState:
        """Jungler present but without coordinates; keep the last sighting if it was the same one."""
        previous = self._state
        if previous is not None and previous.character_id == jungler.character_id:
            return TrackedRoleState(
                character_id=previous.character_id,
                position=previous.position,
                region=previous.region,
                last_seen=previous.last_seen,
                profile=previous.profile,
                visible=False,
            )
        return TrackedRoleState(
            character_id=jungler.character_id,
            position=None,
            region=None,
            last_seen=self._clock(),
            profile=self.catalog.lookup(jungler.character_id),
            visible=False,
        )

    def get_state(self) -> Optional[TrackedRoleState]:
        return self._state

    def is_near_anchor(self, region: MapRegion) -> bool:
        """True when the tracked jungler is within range of a lane's anchor."""
        if self._state is None or self._state.position is None:
            return False
        anchor = lane_anchor(region)
        if anchor is None:
            return False
        return distance(self._state.position, anchor) < NEAR_ANCHOR_M
