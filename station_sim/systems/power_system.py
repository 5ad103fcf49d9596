"""
Station Sim — Power System
Energy demand, brownouts, and shield charging.

Energy is settled before any production is credited: if the station cannot
cover the tick's demand, the grid browns out and energy drops to zero.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
import logging

from ..config import STATION, StationConfig
from ..core.module import ModuleGrid, ModuleType
from ..core.store import ResourceType

if TYPE_CHECKING:
    from ..core.world import WorldState

logger = logging.getLogger(__name__)


@dataclass
class PowerState:
    """Energy demand and outcome for one tick."""
    module_demand: float = 0.0
    shield_demand: float = 0.0
    standby_demand: float = 0.0
    shield_powered: bool = False
    training_standby: bool = False
    brownout: bool = False

    @property
    def total_demand(self) -> float:
        return self.module_demand + self.shield_demand + self.standby_demand


def shield_generator_powered(modules: ModuleGrid, config: StationConfig = STATION) -> bool:
    return modules.has_available(ModuleType.SHIELD_GENERATOR, config.shield.min_integrity)


def training_sim_on_standby(modules: ModuleGrid, config: StationConfig = STATION) -> bool:
    return modules.has_available(ModuleType.TRAINING_SIM, config.training.standby_min_integrity)


def compute_demand(modules: ModuleGrid, config: StationConfig = STATION) -> PowerState:
    """Energy required this tick by operational modules and powered subsystems."""
    state = PowerState()
    state.module_demand = sum(m.spec.energy_cost for m in modules.get_operational_modules())

    state.shield_powered = shield_generator_powered(modules, config)
    if state.shield_powered:
        state.shield_demand = config.shield.energy_cost_per_tick

    state.training_standby = training_sim_on_standby(modules, config)
    if state.training_standby:
        state.standby_demand = config.training.standby_energy

    return state


def settle_energy(world: "WorldState", power: PowerState, config: StationConfig = STATION) -> PowerState:
    """
    Debit the tick's energy demand and update shield charge.

    On brownout energy is forced to 0 and shields lose the brownout penalty.
    Otherwise a powered generator recharges shields and an unpowered one
    lets them leak.
    """
    energy = world.resources.get(ResourceType.ENERGY)
    required = power.total_demand

    if energy.amount < required:
        power.brownout = True
        energy.set(0.0)
        world.shield.drain(config.shield.brownout_penalty)
        logger.debug(f"Brownout: demand {required:.1f} exceeds stored energy")
    else:
        energy.remove(required)
        if power.shield_powered:
            world.shield.add(config.shield.recharge_rate)
        else:
            world.shield.drain(config.shield.passive_leak)

    return power
