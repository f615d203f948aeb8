import math
from typing import List, Tuple
from .model import RiskTier, WaveInfo

WAVE_INTERVAL_S = 30
SIEGE_START_S = 90      # 1:30
SIEGE_INTERVAL_S = 180  # Every third wave

# Typical gank timings, inclusive second ranges
HIGH_RISK_WINDOWS: List[Tuple[int, int]] = [
    (165, 200),  # 2:45 - 3:20
    (345, 380),  # 5:45 - 6:20
    (525, 560),  # 8:45 - 9:20
    (705, 740),  # 11:45 - 12:20
]

MEDIUM_RISK_WINDOWS: List[Tuple[int, int]] = [
    (120, 165),  # 2:00 - 2:45
    (200, 240),  # 3:20 - 4:00
    (300, 345),  # 5:00 - 5:45
    (380, 420),  # 6:20 - 7:00
    (480, 525),  # 8:00 - 8:45
    (560, 600),  # 9:20 - 10:00
    (660, 705),  # 11:00 - 11:45
    (740, 780),  # 12:20 - 13:00
]

def next_wave(game_time: float) -> WaveInfo:
    """Time until the next minion wave and whether it carries a siege minion."""
    next_at = math.ceil(game_time / WAVE_INTERVAL_S) * WAVE_INTERVAL_S
    is_siege = next_at >= SIEGE_START_S and (next_at - SIEGE_START_S) % SIEGE_INTERVAL_S == 0
    return WaveInfo(next_wave_at=next_at, time_left=next_at - game_time, is_siege=is_siege)

def risk_by_clock(game_time: float) -> RiskTier:
    for start, end in HIGH_RISK_WINDOWS:
        if start <= game_time <= end:
            return RiskTier.HIGH
    for start, end in MEDIUM_RISK_WINDOWS:
        if start <= game_time <= end:
            return RiskTier.MEDIUM
    return RiskTier.LOW

def format_clock(seconds: float) -> str:
    """Format seconds as M:SS."""
    mins = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{mins}:{secs:02d}"
