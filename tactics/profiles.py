import logging
from typing import Dict, Iterable, Optional
from .model import Lane, MapRegion, PathingProfile

logger = logging.getLogger(__name__)

# Predefined pathing presets, keyed by lowercase character name
PATHING_PROFILES: Dict[str, PathingProfile] = {
    "leesin": PathingProfile(
        character_id="LeeSin",
        preferred_region_cycle=(MapRegion.BOT_JUNGLE, MapRegion.TOP_JUNGLE, MapRegion.MID_JUNGLE),
        gank_frequency=0.8,
        aggression_level=9,
        common_target_lanes=(Lane.MID, Lane.TOP),
        average_gank_duration_s=25,
    ),
    "elise": PathingProfile(
        character_id="Elise",
        preferred_region_cycle=(MapRegion.TOP_JUNGLE, MapRegion.BOT_JUNGLE, MapRegion.MID_JUNGLE),
        gank_frequency=0.6,
        aggression_level=4,
        common_target_lanes=(Lane.BOT,),
        average_gank_duration_s=20,
    ),
    "kindred": PathingProfile(
        character_id="Kindred",
        preferred_region_cycle=(MapRegion.TOP_JUNGLE, MapRegion.MID_JUNGLE, MapRegion.BOT_JUNGLE),
        gank_frequency=0.7,
        aggression_level=7,
        common_target_lanes=(Lane.TOP, Lane.MID),
        average_gank_duration_s=22,
    ),
    "nidalee": PathingProfile(
        character_id="Nidalee",
        preferred_region_cycle=(MapRegion.BOT_JUNGLE, MapRegion.MID_JUNGLE, MapRegion.TOP_JUNGLE),
        gank_frequency=0.9,
        aggression_level=8,
        common_target_lanes=(Lane.MID, Lane.BOT),
        average_gank_duration_s=28,
    ),
    "rengar": PathingProfile(
        character_id="Rengar",
        preferred_region_cycle=(MapRegion.TOP_JUNGLE, MapRegion.BOT_JUNGLE, MapRegion.MID_JUNGLE),
        gank_frequency=1.0,
        aggression_level=10,  # Always looking for a pick
        common_target_lanes=(Lane.TOP, Lane.MID, Lane.BOT),
        average_gank_duration_s=30,
    ),
}

def default_profile(character_id: str) -> PathingProfile:
    """Moderate preset for characters with no dedicated entry."""
    return PathingProfile(
        character_id=character_id,
        preferred_region_cycle=(MapRegion.TOP_JUNGLE, MapRegion.MID_JUNGLE, MapRegion.BOT_JUNGLE),
        gank_frequency=0.7,
        aggression_level=6,
        common_target_lanes=(Lane.MID,),
        average_gank_duration_s=25,
    )

class PathingProfileCatalog:
    """Case-insensitive lookup of pathing presets with a default fallback."""

    def __init__(self, profiles: Optional[Iterable[PathingProfile]] = None):
        if profiles is None:
            profiles = PATHING_PROFILES.values()
        self._profiles: Dict[str, PathingProfile] = {
            p.character_id.lower(): p for p in profiles
        }

    def __contains__(self, character_id: str) -> bool:
        return character_id.lower() in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def lookup(self, character_id: str) -> PathingProfile:
        profile = self._profiles.get((character_id or "").lower())
        if profile is not None:
            return profile
        logger.debug("No pathing preset for %r, using default", character_id)
        return default_profile(character_id)
