"""
Station Sim — Hazard Injection
Random hazards and their immediate effects on the station.

Each event tick rolls once against the hazard chance. A triggered hazard
applies its numeric effect right away; narrative text is attached to the
event record later, if it arrives at all.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import random
import time
import uuid

from ..config import HAZARD_SEVERITY, STATION, EventSeverity, HazardType, StationConfig
from ..core.event_log import EventLog, LogCategory, LogLevel
from ..core.store import ResourceType
from ..core.world import WorldState
from ..narrative.fallback import Narrative, fallback_narrative

logger = logging.getLogger(__name__)


@dataclass
class GameEvent:
    """
    A hazard that has happened.

    Starts with offline text; `attach_narrative` replaces it once a
    narrative arrives. `narrated` is True only for generated text.
    """
    event_id: str
    hazard: HazardType
    title: str
    description: str
    severity: EventSeverity
    tick: int
    context: str = ""
    timestamp: float = field(default_factory=time.time)
    narrated: bool = False

    def attach_narrative(self, narrative: Narrative):
        self.title = narrative.title
        self.description = narrative.description
        self.narrated = narrative.generated

    def to_dict(self) -> Dict:
        return {
            "id": self.event_id,
            "hazard": self.hazard.value,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.name.lower(),
            "tick": self.tick,
            "timestamp": self.timestamp,
            "narrated": self.narrated,
        }


class HazardInjector:
    """
    Memoryless hazard roller.

    Holds no state between draws: every hazard type can fire on any tick.
    """

    def __init__(self, rng: Optional[random.Random] = None, config: StationConfig = STATION):
        self.rng = rng or random.Random()
        self.config = config

    def roll(self) -> bool:
        return self.rng.random() < self.config.hazard.event_chance_per_tick

    def choose_hazard(self) -> HazardType:
        return self.rng.choice(list(HazardType))

    def trigger(self, world: WorldState, log: EventLog) -> Optional[GameEvent]:
        """Roll for a hazard and inject it on success."""
        if not self.roll():
            return None
        return self.inject(world, self.choose_hazard(), log)

    def inject(self, world: WorldState, hazard: HazardType, log: EventLog) -> GameEvent:
        """Record a hazard and apply its effect immediately."""
        narrative = fallback_narrative(hazard)
        severity = HAZARD_SEVERITY[hazard]
        event = GameEvent(
            event_id=uuid.uuid4().hex[:9],
            hazard=hazard,
            title=narrative.title,
            description=narrative.description,
            severity=severity,
            tick=world.tick,
            context=f"Shields: {int(world.shield.charge)}%",
        )

        level = LogLevel.CRITICAL if severity == EventSeverity.CRITICAL else LogLevel.ALERT
        log.add(f"EVENT: {event.title}", level, LogCategory.EVENT, tick=world.tick)

        self.apply_effect(world, hazard, log)
        return event

    def apply_effect(self, world: WorldState, hazard: HazardType, log: EventLog):
        if hazard == HazardType.METEOR_SHOWER:
            self._meteor_shower(world, log)
        elif hazard == HazardType.SYSTEM_MALFUNCTION:
            self._system_malfunction(world)
        elif hazard == HazardType.SOLAR_FLARE:
            self._solar_flare(world, log)
        # Space debris and alien scans carry no numeric effect

    def _meteor_shower(self, world: WorldState, log: EventLog):
        shield_cfg = self.config.shield
        if world.shield.charge > shield_cfg.absorb_threshold:
            world.shield.drain(shield_cfg.absorb_cost)
            world.shield.last_hit = time.time()
            log.add("Shields absorbed meteor impact!", LogLevel.SUCCESS, LogCategory.SYSTEM, tick=world.tick)
            return

        modules = world.modules.modules
        if not modules:
            return
        hazard_cfg = self.config.hazard
        count = self.rng.randint(hazard_cfg.meteor_min_targets, hazard_cfg.meteor_max_targets)
        targets = self.rng.sample(modules, min(count, len(modules)))
        for module in targets:
            module.damage(hazard_cfg.meteor_damage)
            logger.debug(f"Meteor hit {module.module_id}: integrity now {module.integrity}")
        log.add("Hull breach detected! Modules damaged.", LogLevel.CRITICAL, LogCategory.SYSTEM, tick=world.tick)

    def _system_malfunction(self, world: WorldState):
        modules = world.modules.modules
        if not modules:
            return
        target = self.rng.choice(modules)
        target.is_active = False
        logger.info(f"Malfunction forced {target.spec.name} ({target.module_id}) offline")

    def _solar_flare(self, world: WorldState, log: EventLog):
        energy = world.resources[ResourceType.ENERGY]
        world.resources.set(ResourceType.ENERGY, float(int(energy * self.config.hazard.solar_flare_factor)))
        log.add("Energy surge! Batteries drained.", LogLevel.ALERT, LogCategory.SYSTEM, tick=world.tick)


class EventRegistry:
    """
    Hazard records, updated in place by id when narrative text arrives.

    Keeps at most `max_events` records; the oldest are dropped first.
    """

    def __init__(self, max_events: Optional[int] = None):
        self.events: List[GameEvent] = []
        self.max_events = max_events

    def add(self, event: GameEvent):
        self.events.append(event)
        if self.max_events is not None and len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]

    def get(self, event_id: str) -> Optional[GameEvent]:
        for event in self.events:
            if event.event_id == event_id:
                return event
        return None

    def attach_narrative(self, event_id: str, narrative: Narrative) -> bool:
        event = self.get(event_id)
        if event is None:
            return False
        event.attach_narrative(narrative)
        return True

    @property
    def latest(self) -> Optional[GameEvent]:
        return self.events[-1] if self.events else None

    def __len__(self) -> int:
        return len(self.events)
