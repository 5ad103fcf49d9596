"""
Station Sim — World State
The single mutable aggregate the engine owns.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from .store import ResourceLedger, ResourceRate, ResourceType, empty_rates
from .module import ModuleGrid, ModuleType, StationModule
from ..crew.crew_model import CrewMember, create_default_crew
from ..systems.trading import TradeOffer
from ..config import STATION, StationConfig

logger = logging.getLogger(__name__)


@dataclass
class ShieldState:
    """Shield charge. `last_hit` is a wall-clock timestamp for presentation."""
    charge: float = 0.0
    max_charge: float = 100.0
    last_hit: float = 0.0

    def add(self, amount: float):
        self.charge = min(self.max_charge, self.charge + amount)

    def drain(self, amount: float):
        self.charge = max(0.0, self.charge - amount)


@dataclass
class WorldState:
    """
    Everything the simulation knows about the station.

    `rates` is a derived snapshot overwritten every tick. `unlocked_research`
    only ever grows.
    """
    resources: ResourceLedger = field(default_factory=ResourceLedger)
    modules: ModuleGrid = field(default_factory=ModuleGrid)
    crew: List[CrewMember] = field(default_factory=list)
    unlocked_research: List[str] = field(default_factory=list)
    trade_offers: List[TradeOffer] = field(default_factory=list)
    shield: ShieldState = field(default_factory=ShieldState)

    # Clock
    tick: int = 0
    day_cycle: int = 50

    # Control flags
    is_paused: bool = False
    speed: float = 1.0
    game_over: bool = False

    # Derived, informational only
    rates: Dict[ResourceType, ResourceRate] = field(default_factory=empty_rates)

    # Cooldown markers for manual actions
    last_salvage_tick: int = -100
    last_analyze_tick: int = -100

    @property
    def crew_count(self) -> int:
        return len(self.crew)

    def get_crew(self, crew_id: str) -> Optional[CrewMember]:
        for member in self.crew:
            if member.crew_id == crew_id:
                return member
        return None

    def get_offer(self, offer_id: str) -> Optional[TradeOffer]:
        for offer in self.trade_offers:
            if offer.offer_id == offer_id:
                return offer
        return None

    def is_unlocked(self, node_id: str) -> bool:
        return node_id in self.unlocked_research

    def unlock(self, node_id: str):
        if node_id not in self.unlocked_research:
            self.unlocked_research.append(node_id)

    def snapshot(self) -> Dict:
        """Plain-data copy of the world for observers."""
        return {
            "tick": self.tick,
            "day_cycle": self.day_cycle,
            "is_paused": self.is_paused,
            "speed": self.speed,
            "game_over": self.game_over,
            "resources": self.resources.get_all_status(),
            "modules": self.modules.get_all_status(),
            "crew": [c.get_status() for c in self.crew],
            "unlocked_research": list(self.unlocked_research),
            "trade_offers": [o.get_status() for o in self.trade_offers],
            "shield": {
                "charge": self.shield.charge,
                "max_charge": self.shield.max_charge,
                "last_hit": self.shield.last_hit,
            },
            "rates": {
                rt.name: {"production": r.production, "consumption": r.consumption}
                for rt, r in self.rates.items()
            },
            "last_salvage_tick": self.last_salvage_tick,
            "last_analyze_tick": self.last_analyze_tick,
        }


def create_initial_world(config: StationConfig = STATION) -> WorldState:
    """A fresh station: core hub, one solar array, one O2 generator, three crew."""
    grid = ModuleGrid(
        width=config.engine.grid_width,
        height=config.engine.grid_height,
        modules=[
            StationModule("core", ModuleType.CORE, x=2, y=2, construction_progress=100),
            StationModule("solar1", ModuleType.SOLAR, x=2, y=1, construction_progress=100),
            StationModule("oxy1", ModuleType.OXYGEN_GENERATOR, x=2, y=3, construction_progress=100),
        ],
    )
    world = WorldState(
        resources=ResourceLedger(),
        modules=grid,
        crew=create_default_crew(),
        shield=ShieldState(charge=0.0, max_charge=config.shield.max_charge),
        day_cycle=config.engine.initial_day_cycle,
        last_salvage_tick=config.manual.initial_last_used_tick,
        last_analyze_tick=config.manual.initial_last_used_tick,
    )
    logger.info("Station world initialized")
    return world
