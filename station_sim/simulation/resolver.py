"""
Station Sim — Tick Resolver
Advances the station economy by one tick.

Order of operations:
1. Maintenance decay on operational modules
2. Research multipliers
3. Consumption (crew life support, module energy, shield and standby draw)
4. Production (integrity-scaled, solar only in sunlight, research-buffed)
5. Energy settlement (brownout or debit, shield charge)
6. Apply production, capped
7. Apply life support consumption, floored
8. Critical depletion alerts
9. Trade offer lifecycle
"""

from typing import Dict, Optional
import logging
import random

from ..config import STATION, StationConfig
from ..core.event_log import EventLog, LogCategory, LogLevel
from ..core.module import ModuleType
from ..core.store import LIFE_SUPPORT, ResourceRate, ResourceType, empty_rates
from ..core.world import WorldState
from ..systems.power_system import PowerState, compute_demand, settle_energy
from ..systems.research import production_multipliers
from ..systems.trading import TradeOfferGenerator

logger = logging.getLogger(__name__)


def apply_decay(world: WorldState, rng: random.Random, config: StationConfig = STATION) -> int:
    """Wear down operational modules. Returns the number of modules that lost integrity."""
    decayed = 0
    for module in world.modules.get_operational_modules():
        if module.spec.advanced:
            chance = config.maintenance.advanced_decay_chance
        else:
            chance = config.maintenance.base_decay_chance
        if rng.random() < chance:
            module.damage(1)
            decayed += 1
    return decayed


def accumulate_consumption(
    world: WorldState,
    rates: Dict[ResourceType, ResourceRate],
    power: PowerState,
    config: StationConfig = STATION,
):
    crew = world.crew_count
    rates[ResourceType.OXYGEN].consumption += crew * config.crew.oxygen_per_crew
    rates[ResourceType.WATER].consumption += crew * config.crew.water_per_crew
    rates[ResourceType.FOOD].consumption += crew * config.crew.food_per_crew
    rates[ResourceType.ENERGY].consumption += power.total_demand


def accumulate_production(
    world: WorldState,
    rates: Dict[ResourceType, ResourceRate],
    multipliers: Dict[ResourceType, float],
    config: StationConfig = STATION,
):
    sunlight = config.engine.is_sunlight(world.day_cycle)
    maintenance = config.maintenance

    for module in world.modules.get_operational_modules():
        if module.module_type == ModuleType.SOLAR and not sunlight:
            continue
        if module.integrity >= maintenance.full_efficiency_integrity:
            efficiency = 1.0
        else:
            efficiency = maintenance.degraded_efficiency
        for resource, amount in module.spec.produces.items():
            rates[resource].production += amount * efficiency

    for resource, multiplier in multipliers.items():
        rates[resource].production *= multiplier


def update_trade_offers(
    world: WorldState,
    rng: random.Random,
    log: EventLog,
    config: StationConfig = STATION,
):
    """Clear offers without a trading post; periodically replace them with one."""
    if not world.modules.has_available(ModuleType.TRADING_POST, config.trade.min_integrity):
        world.trade_offers = []
        return

    generator = TradeOfferGenerator(rng, config.trade)
    if generator.should_refresh(world.tick):
        world.trade_offers = generator.generate_batch()
        if world.trade_offers:
            log.add("Incoming transmission: Trade vessel docked.", LogLevel.INFO, LogCategory.EVENT, tick=world.tick)


def resolve_tick(
    world: WorldState,
    config: StationConfig = STATION,
    rng: Optional[random.Random] = None,
    log: Optional[EventLog] = None,
) -> WorldState:
    """
    Apply one tick of decay, consumption, production and trading to `world`.

    Mutates and returns `world`. Never raises for any reachable state.
    """
    rng = rng or random.Random()
    log = log if log is not None else EventLog()

    apply_decay(world, rng, config)
    multipliers = production_multipliers(world.unlocked_research)

    rates = empty_rates()
    power = compute_demand(world.modules, config)
    accumulate_consumption(world, rates, power, config)
    accumulate_production(world, rates, multipliers, config)

    settle_energy(world, power, config)
    if power.brownout and rng.random() < config.hazard.brownout_log_chance:
        log.add("WARNING: Power Overload. Systems failing.", LogLevel.ALERT, LogCategory.SYSTEM, tick=world.tick)

    for resource in ResourceType:
        production = rates[resource].production
        if production > 0:
            world.resources.add(resource, production)

    for resource in LIFE_SUPPORT:
        world.resources.remove(resource, rates[resource].consumption)

    for resource in world.resources.empty_resources(LIFE_SUPPORT):
        if rng.random() < config.hazard.critical_log_chance:
            log.add(f"CRITICAL: {resource.name} DEPLETED", LogLevel.CRITICAL, LogCategory.SYSTEM, tick=world.tick)

    update_trade_offers(world, rng, log, config)

    world.rates = rates
    return world
