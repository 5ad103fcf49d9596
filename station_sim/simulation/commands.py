"""
Station Sim — Command Handlers
Player actions. Each handler checks all of its preconditions before
touching the world, so it either applies fully or not at all.

Handlers return True when the action was applied. A rejected action is
never an exception; at most it leaves a line in the event log.
"""

from typing import Callable, Optional
from enum import Enum, auto
import logging

from ..config import STATION, StationConfig
from ..core.event_log import EventLog, LogCategory, LogLevel
from ..core.module import MODULE_SPECS, ModuleType
from ..core.store import ResourceType
from ..core.world import WorldState
from ..systems.research import get_node, is_module_unlocked, prerequisite_met

logger = logging.getLogger(__name__)


class ManualAction(Enum):
    """Cooldown-gated actions."""
    SALVAGE = auto()
    ANALYZE = auto()


class CommandHandlers:
    """The write surface available to the rendering layer."""

    def __init__(self, world: WorldState, log: EventLog, config: StationConfig = STATION):
        self.world = world
        self.log = log
        self.config = config

        # Called after pause or speed changes so timers can be rescheduled
        self.on_schedule_changed: Optional[Callable[[], None]] = None

    def _alert(self, message: str, category: LogCategory = LogCategory.SYSTEM):
        self.log.add(message, LogLevel.ALERT, category, tick=self.world.tick)

    def _success(self, message: str, category: LogCategory = LogCategory.SYSTEM):
        self.log.add(message, LogLevel.SUCCESS, category, tick=self.world.tick)

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    def build(self, module_type: ModuleType) -> bool:
        """Start construction of a module at the first free grid cell."""
        world = self.world
        spec = MODULE_SPECS[module_type]

        if not spec.buildable:
            self._alert(f"{spec.name} cannot be built.")
            return False

        if not is_module_unlocked(module_type, world.unlocked_research):
            self._alert(f"{spec.name} is locked. Research required.")
            return False

        if not world.resources.has(ResourceType.MATERIALS, spec.materials_cost):
            self._alert(f"Insufficient materials to build {spec.name}.")
            return False

        if world.modules.find_free_cell() is None:
            self._alert("No space available for new module.")
            return False

        world.resources.remove(ResourceType.MATERIALS, spec.materials_cost)
        world.modules.place(module_type)
        self.log.add(f"Construction started: {spec.name}", LogLevel.INFO, LogCategory.SYSTEM, tick=world.tick)
        return True

    def repair(self, module_id: str) -> bool:
        world = self.world
        module = world.modules.get(module_id)
        cost = self.config.maintenance.repair_cost

        if module is None or module.integrity >= 100 or not world.resources.has(ResourceType.MATERIALS, cost):
            logger.debug(f"Repair of {module_id} rejected")
            return False

        world.resources.remove(ResourceType.MATERIALS, cost)
        module.repair(self.config.maintenance.repair_amount)
        self._success(f"Repaired {module.spec.name}", LogCategory.CREW)
        return True

    def toggle_power(self, module_id: str) -> bool:
        module = self.world.modules.get(module_id)
        if module is None:
            logger.debug(f"Toggle power: unknown module {module_id}")
            return False
        module.is_active = not module.is_active
        logger.info(f"{module.spec.name} ({module_id}) powered {'on' if module.is_active else 'off'}")
        return True

    # =========================================================================
    # RESEARCH
    # =========================================================================

    def research(self, node_id: str) -> bool:
        world = self.world
        node = get_node(node_id)

        if (
            node is None
            or world.is_unlocked(node_id)
            or not prerequisite_met(node, world.unlocked_research)
            or not world.resources.has(ResourceType.SCIENCE, node.cost)
        ):
            logger.debug(f"Research of {node_id} rejected")
            return False

        world.resources.remove(ResourceType.SCIENCE, node.cost)
        world.unlock(node_id)
        self._success(f"Research Complete: {node.name}")
        return True

    # =========================================================================
    # MANUAL ACTIONS
    # =========================================================================

    def cooldown_remaining(self, action: ManualAction) -> int:
        """Ticks until the action can be used again."""
        if action == ManualAction.SALVAGE:
            last_used_tick = self.world.last_salvage_tick
        else:
            last_used_tick = self.world.last_analyze_tick
        return max(0, self.config.manual.cooldown_ticks - (self.world.tick - last_used_tick))

    def _manual_action(self, last_used_tick: int, resource: ResourceType, amount: float) -> bool:
        world = self.world
        manual = self.config.manual

        if world.tick - last_used_tick < manual.cooldown_ticks:
            return False
        if not world.resources.has(ResourceType.ENERGY, manual.energy_cost):
            return False

        world.resources.remove(ResourceType.ENERGY, manual.energy_cost)
        world.resources.add(resource, amount)
        return True

    def salvage(self) -> bool:
        """Spend energy to recover materials."""
        applied = self._manual_action(
            self.world.last_salvage_tick, ResourceType.MATERIALS, self.config.manual.salvage_yield,
        )
        if applied:
            self.world.last_salvage_tick = self.world.tick
        return applied

    def analyze(self) -> bool:
        """Spend energy to produce science."""
        applied = self._manual_action(
            self.world.last_analyze_tick, ResourceType.SCIENCE, self.config.manual.analyze_yield,
        )
        if applied:
            self.world.last_analyze_tick = self.world.tick
        return applied

    # =========================================================================
    # TRADE AND CREW
    # =========================================================================

    def trade(self, offer_id: str) -> bool:
        world = self.world
        offer = world.get_offer(offer_id)
        if offer is None:
            logger.debug(f"Trade offer {offer_id} no longer available")
            return False

        if not world.resources.has(offer.cost_resource, offer.cost_amount):
            self._alert("Insufficient resources for trade.")
            return False

        world.resources.remove(offer.cost_resource, offer.cost_amount)
        world.resources.add(offer.gain_resource, offer.gain_amount)
        world.trade_offers = [o for o in world.trade_offers if o.offer_id != offer_id]
        self._success("Trade executed successfully.", LogCategory.EVENT)
        return True

    def train_crew(self, crew_id: str) -> bool:
        world = self.world
        training = self.config.training
        member = world.get_crew(crew_id)
        if member is None:
            return False

        if not world.modules.has_available(ModuleType.TRAINING_SIM, training.min_integrity):
            self._alert("Training Simulation module required.", LogCategory.CREW)
            return False

        if not world.resources.has(ResourceType.ENERGY, training.energy_cost):
            self._alert("Insufficient energy for simulation.", LogCategory.CREW)
            return False

        world.resources.remove(ResourceType.ENERGY, training.energy_cost)
        member.train(training.efficiency_gain, training.morale_cost)
        self._success(f"{member.name} completed training. Efficiency improved.", LogCategory.CREW)
        return True

    # =========================================================================
    # SIMULATION CONTROL
    # =========================================================================

    def _schedule_changed(self):
        if self.on_schedule_changed:
            self.on_schedule_changed()

    def toggle_pause(self) -> bool:
        self.world.is_paused = not self.world.is_paused
        logger.info(f"Simulation {'paused' if self.world.is_paused else 'resumed'}")
        self._schedule_changed()
        return True

    def set_speed(self, speed: float) -> bool:
        if speed <= 0:
            self._alert(f"Invalid simulation speed: {speed}")
            return False
        self.world.speed = speed
        logger.info(f"Simulation speed set to {speed}x")
        self._schedule_changed()
        return True
