import logging
from typing import Any, Dict, List, Literal, Optional, Protocol
import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tactics.model import GameState, LanePressure, Objective, Player, Position, Ward
from tactics.profiles import PathingProfileCatalog
from tactics.simulator import MatchSimulator
from .runner import TickRunner

logger = logging.getLogger(__name__)

# Summoner spell ids for payloads that only carry display names
SPELL_IDS_BY_NAME: Dict[str, int] = {
    "cleanse": 1,
    "exhaust": 3,
    "flash": 4,
    "ghost": 6,
    "heal": 7,
    "smite": 11,
    "teleport": 12,
    "clarity": 13,
    "ignite": 14,
    "barrier": 21,
}

class TelemetryError(Exception):
    """A fetch from the telemetry source failed.

    kind is one of connect_refused, timeout, not_found, http_error, malformed.
    """

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

class TelemetrySource(Protocol):
    last_error: Optional[TelemetryError]

    async def game_state(self) -> GameState: ...

    async def game_time(self) -> Optional[float]: ...

    async def roster(self) -> List[Player]: ...

    async def wards(self) -> List[Ward]: ...

    async def objectives(self) -> List[Objective]: ...

    async def lane_pressures(self) -> List[LanePressure]: ...

class _SpellPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    display_name: str = Field(default="", alias="displayName")

    def resolve_id(self) -> int:
        if self.id is not None:
            return self.id
        name = self.display_name.lower()
        for key, spell_id in SPELL_IDS_BY_NAME.items():
            if key in name:
                return spell_id
        return 0

class _ScoresPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kills: int = 0
    deaths: int = 0
    assists: int = 0
    creep_score: int = Field(default=0, alias="creepScore")

class _PositionPayload(BaseModel):
    x: float = 0.0
    y: float = 0.0

class _PlayerPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    champion_name: str = Field(alias="championName")
    summoner_name: str = Field(default="", alias="summonerName")
    team: Literal["ORDER", "CHAOS"] = "ORDER"
    is_dead: bool = Field(default=False, alias="isDead")
    level: int = 1
    position: Optional[_PositionPayload] = None
    scores: _ScoresPayload = Field(default_factory=_ScoresPayload)
    summoner_spells: Dict[str, _SpellPayload] = Field(default_factory=dict, alias="summonerSpells")

    def to_player(self) -> Player:
        one = self.summoner_spells.get("summonerSpellOne", _SpellPayload())
        two = self.summoner_spells.get("summonerSpellTwo", _SpellPayload())
        return Player(
            summoner_name=self.summoner_name,
            character_id=self.champion_name,
            team=self.team,
            position=Position(self.position.x, self.position.y) if self.position else None,
            spell_ids=(one.resolve_id(), two.resolve_id()),
            is_dead=self.is_dead,
            level=self.level,
            kills=self.scores.kills,
            deaths=self.scores.deaths,
            assists=self.scores.assists,
            creep_score=self.scores.creep_score,
        )

def parse_roster(payload: Any) -> List[Player]:
    """Convert a playerlist payload, skipping members that fail validation."""
    if not isinstance(payload, list):
        return []
    players: List[Player] = []
    for item in payload:
        try:
            players.append(_PlayerPayload.model_validate(item).to_player())
        except ValidationError as e:
            logger.warning("Skipping malformed roster entry: %d errors", e.error_count())
    return players

def _classify(exc: Exception, path: str) -> TelemetryError:
    if isinstance(exc, httpx.ConnectError):
        return TelemetryError("connect_refused", f"Connection refused at {path}: {exc}")
    if isinstance(exc, httpx.TimeoutException):
        return TelemetryError("timeout", f"Timeout connecting to {path}")
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        kind = "not_found" if status == 404 else "http_error"
        return TelemetryError(kind, f"Status Code: {status} for {path}")
    if isinstance(exc, ValueError):
        return TelemetryError("malformed", f"Malformed payload from {path}: {exc}")
    return TelemetryError("http_error", f"Request to {path} failed: {exc}")

class LiveClientTelemetry:
    """Polls the game client's local live-data endpoint.

    The client serves a self-signed certificate, so verification is off. Any
    failed request degrades to a default value and is remembered in
    last_error for the caller to surface.
    """

    def __init__(self, base_url: str, timeout_s: float = 2.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.last_error: Optional[TelemetryError] = None
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                verify=False,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _fetch_json(self, path: str) -> Any:
        try:
            client = await self._get_client()
            response = await client.get(path)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise _classify(e, path) from e

    async def game_state(self) -> GameState:
        self.last_error = None
        try:
            # Full game data is only served once the match is running
            await self._fetch_json("/allgamedata")
            return GameState.IN_GAME
        except TelemetryError as e:
            self.last_error = e

        try:
            # The player list is already available on the loading screen
            players = await self._fetch_json("/playerlist")
            if isinstance(players, list) and players:
                return GameState.LOADING
        except TelemetryError as e:
            if self.last_error is None:
                self.last_error = e

        return GameState.NOT_ACTIVE

    async def game_time(self) -> Optional[float]:
        try:
            data = await self._fetch_json("/gamestats")
            if isinstance(data, dict) and isinstance(data.get("gameTime"), (int, float)):
                return float(data["gameTime"])
        except TelemetryError as e:
            logger.debug("gamestats unavailable: %s", e.message)

        try:
            data = await self._fetch_json("/allgamedata")
            game_data = data.get("gameData") if isinstance(data, dict) else None
            if isinstance(game_data, dict) and isinstance(game_data.get("gameTime"), (int, float)):
                return float(game_data["gameTime"])
        except TelemetryError as e:
            logger.debug("allgamedata unavailable: %s", e.message)

        return None

    async def roster(self) -> List[Player]:
        try:
            return parse_roster(await self._fetch_json("/playerlist"))
        except TelemetryError as e:
            logger.warning("Roster fetch failed: %s", e.message)
            self.last_error = e
            return []

    # The live client does not report wards, objectives or lane state
    async def wards(self) -> List[Ward]:
        return []

    async def objectives(self) -> List[Objective]:
        return []

    async def lane_pressures(self) -> List[LanePressure]:
        return []

class SimulatedTelemetry:
    """Telemetry served from a running MatchSimulator.

    Only one simulation runs at a time; starting a new one stops the previous
    simulator and its tick driver first.
    """

    def __init__(self, catalog: PathingProfileCatalog, tick_s: float = 1.0):
        self.catalog = catalog
        self.tick_s = tick_s
        self.last_error: Optional[TelemetryError] = None
        self.simulator: Optional[MatchSimulator] = None
        self.runner: Optional[TickRunner] = None

    @property
    def simulating(self) -> bool:
        return self.simulator is not None and self.simulator.is_running

    async def start_simulation(self, seed: int, time_compression: float = 1.0) -> MatchSimulator:
        await self.stop_simulation()
        self.simulator = MatchSimulator(seed, catalog=self.catalog)
        self.runner = TickRunner(self.simulator, tick_s=self.tick_s, time_compression=time_compression)
        self.simulator.start()
        await self.runner.start()
        logger.info("Simulation started with seed %s", seed)
        return self.simulator

    async def stop_simulation(self):
        if self.runner:
            await self.runner.stop()
        if self.simulator:
            self.simulator.stop()
            logger.info("Simulation stopped at t=%ss", self.simulator.game_time)
        self.runner = None
        self.simulator = None

    async def game_state(self) -> GameState:
        return GameState.IN_GAME if self.simulating else GameState.NOT_ACTIVE

    async def game_time(self) -> Optional[float]:
        if not self.simulating:
            return None
        return float(self.simulator.game_time)

    async def roster(self) -> List[Player]:
        return self.simulator.players() if self.simulating else []

    async def wards(self) -> List[Ward]:
        return self.simulator.wards() if self.simulating else []

    async def objectives(self) -> List[Objective]:
        return self.simulator.objectives() if self.simulating else []

    async def lane_pressures(self) -> List[LanePressure]:
        return self.simulator.lane_pressures() if self.simulating else []
