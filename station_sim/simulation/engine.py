"""
Station Sim — Simulation Engine
Owns the world state, the station log, and the hazard records, and exposes
the command and query surface used by the rendering layer.
"""

from typing import Callable, Dict, List, Optional
import logging
import random

from ..config import STATION, StationConfig
from ..core.event_log import EventLog, LogCategory, LogEntry, LogLevel
from ..core.module import ModuleType
from ..core.store import ResourceType
from ..core.world import WorldState, create_initial_world
from ..narrative.service import NarrativeService
from ..systems.research import ResearchNode, available_research, buildable_modules
from .commands import CommandHandlers, ManualAction
from .events import EventRegistry, GameEvent, HazardInjector
from .resolver import resolve_tick

logger = logging.getLogger(__name__)


class StationEngine:
    """
    Main simulation engine.

    Manages:
    - The clock step (day cycle, resolver, construction, game over)
    - Hazard injection and narrative enrichment
    - Player commands
    - Read-only snapshots
    """

    def __init__(
        self,
        config: StationConfig = STATION,
        world: Optional[WorldState] = None,
        rng: Optional[random.Random] = None,
        narrative: Optional[NarrativeService] = None,
        seed: Optional[int] = None,
    ):
        self.config = config
        self.rng = rng or random.Random(seed)
        self.world = world or create_initial_world(config)

        self.log = EventLog(max_entries=config.engine.max_log_entries)
        self.events = EventRegistry(max_events=config.engine.max_event_records)
        self.injector = HazardInjector(self.rng, config)
        self.commands = CommandHandlers(self.world, self.log, config)
        self.narrative = narrative or NarrativeService(config=config.narrative, rng=self.rng)

        # Callbacks
        self.on_tick_complete: Optional[Callable[[WorldState], None]] = None
        self.on_event_triggered: Optional[Callable[[GameEvent], None]] = None
        self.on_game_over: Optional[Callable[[WorldState], None]] = None

        logger.info("Station engine initialized")

    @property
    def is_running(self) -> bool:
        return not self.world.is_paused and not self.world.game_over

    @property
    def current_tick(self) -> int:
        return self.world.tick

    # =========================================================================
    # CLOCK
    # =========================================================================

    def tick(self) -> bool:
        """
        Execute one resource tick.

        Returns:
            False if the tick was skipped (paused or game over).
        """
        if not self.is_running:
            return False

        world = self.world
        engine_cfg = self.config.engine

        world.day_cycle = (world.day_cycle + 1) % engine_cfg.day_cycle_period
        world.tick += 1

        resolve_tick(world, self.config, self.rng, self.log)

        for module in world.modules:
            module.advance_construction(engine_cfg.construction_rate)

        self._check_game_over()

        if self.on_tick_complete:
            self.on_tick_complete(world)
        return True

    def _check_game_over(self):
        """Oxygen at zero past the grace period ends the game with a small chance each tick."""
        world = self.world
        engine_cfg = self.config.engine
        if world.resources[ResourceType.OXYGEN] > 0 or world.tick <= engine_cfg.game_over_grace_ticks:
            return
        if self.rng.random() < engine_cfg.game_over_chance:
            world.game_over = True
            self.log.add("Life support failure. Station lost.", LogLevel.CRITICAL, LogCategory.SYSTEM, tick=world.tick)
            logger.info(f"Game over at tick {world.tick}")
            if self.on_game_over:
                self.on_game_over(world)

    def run(self, ticks: int) -> int:
        """Run resource and event ticks back to back. Returns ticks executed."""
        executed = 0
        for _ in range(ticks):
            if not self.tick():
                break
            self.event_tick()
            executed += 1
        return executed

    # =========================================================================
    # EVENTS
    # =========================================================================

    def event_tick(self) -> Optional[GameEvent]:
        """Roll for a hazard. The returned event already has its effect applied."""
        if not self.is_running:
            return None

        event = self.injector.trigger(self.world, self.log)
        if event is None:
            return None

        self.events.add(event)
        if self.on_event_triggered:
            self.on_event_triggered(event)
        return event

    async def narrate(self, event: GameEvent) -> GameEvent:
        """
        Fetch narrative text and attach it to the event record.

        Only the record's text changes; the hazard's effect is never revisited.
        """
        narrative = await self.narrative.event_narrative(event.hazard, event.context)
        self.events.attach_narrative(event.event_id, narrative)
        return event

    async def request_crew_chatter(self, crew_id: str) -> Optional[str]:
        member = self.world.get_crew(crew_id)
        if member is None:
            return None
        return await self.narrative.crew_chatter(member.role.value, member.tone(self.config.crew))

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def build(self, module_type: ModuleType) -> bool:
        return self.commands.build(module_type)

    def repair(self, module_id: str) -> bool:
        return self.commands.repair(module_id)

    def toggle_power(self, module_id: str) -> bool:
        return self.commands.toggle_power(module_id)

    def research(self, node_id: str) -> bool:
        return self.commands.research(node_id)

    def salvage(self) -> bool:
        return self.commands.salvage()

    def analyze(self) -> bool:
        return self.commands.analyze()

    def trade(self, offer_id: str) -> bool:
        return self.commands.trade(offer_id)

    def train_crew(self, crew_id: str) -> bool:
        return self.commands.train_crew(crew_id)

    def toggle_pause(self) -> bool:
        return self.commands.toggle_pause()

    def set_speed(self, speed: float) -> bool:
        return self.commands.set_speed(speed)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def snapshot(self) -> Dict:
        return self.world.snapshot()

    @property
    def logs(self) -> List[LogEntry]:
        return list(self.log.entries)

    def available_modules(self) -> List[ModuleType]:
        return buildable_modules(self.world.unlocked_research)

    def available_research(self) -> List[ResearchNode]:
        return available_research(self.world.unlocked_research)

    def cooldown_remaining(self, action: ManualAction) -> int:
        return self.commands.cooldown_remaining(action)

    def get_status(self) -> Dict:
        return {
            "tick": self.world.tick,
            "day_cycle": self.world.day_cycle,
            "is_paused": self.world.is_paused,
            "speed": self.world.speed,
            "game_over": self.world.game_over,
            "modules": len(self.world.modules),
            "operational_modules": len(self.world.modules.get_operational_modules()),
            "trade_offers": len(self.world.trade_offers),
            "events": len(self.events),
            "narrative_online": self.narrative.online,
        }
