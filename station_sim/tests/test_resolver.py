"""
Tests for the tick resolver:
- Production and day cycle
- Consumption and life support floors
- Energy priority and shields
- Maintenance decay and degraded efficiency
- Trade offer lifecycle
"""

import random

import pytest

from station_sim.config import StationConfig
from station_sim.core.module import ModuleGrid, ModuleType, StationModule
from station_sim.core.event_log import EventLog
from station_sim.core.store import ResourceType
from station_sim.core.world import WorldState, create_initial_world
from station_sim.simulation.resolver import apply_decay, resolve_tick
from station_sim.systems.trading import TradeOffer


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self):
        return self.value


# Never passes a probability roll
NO_LUCK = 0.99


def built(module_id, module_type, x, y, integrity=100):
    return StationModule(module_id, module_type, x, y, integrity=integrity, construction_progress=100)


def station(*modules, day_cycle=50, crew=None):
    return WorldState(modules=ModuleGrid(modules=list(modules)), crew=crew or [], day_cycle=day_cycle)


def make_offer(cost_amount=30.0):
    return TradeOffer("o1", ResourceType.MATERIALS, cost_amount, ResourceType.FOOD, 80.0, "Trader ABC")


# =============================================================================
# PRODUCTION
# =============================================================================

class TestProduction:
    """Module output, sunlight and research buffs."""

    def test_solar_in_sunlight(self):
        """A lone solar array adds 40 energy in daylight."""
        world = station(built("s", ModuleType.SOLAR, 0, 0))
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 1040.0
        assert world.rates[ResourceType.ENERGY].production == 40.0
        assert world.rates[ResourceType.ENERGY].consumption == 0.0

    def test_solar_output_capped(self):
        world = station(built("s", ModuleType.SOLAR, 0, 0))
        world.resources.set(ResourceType.ENERGY, 1990.0)
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 2000.0

    @pytest.mark.parametrize("day_cycle", [0, 10, 25, 75, 99])
    def test_solar_dark_outside_sunlight(self, day_cycle):
        world = station(built("s", ModuleType.SOLAR, 0, 0), day_cycle=day_cycle)
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 1000.0

    def test_degraded_module_produces_half(self):
        """Integrity 49 yields exactly half of integrity 100."""
        healthy = station(built("o", ModuleType.OXYGEN_GENERATOR, 0, 0, integrity=100))
        worn = station(built("o", ModuleType.OXYGEN_GENERATOR, 0, 0, integrity=49))

        resolve_tick(healthy, rng=FixedRandom(NO_LUCK))
        resolve_tick(worn, rng=FixedRandom(NO_LUCK))

        gain_healthy = healthy.resources[ResourceType.OXYGEN] - 1000.0
        gain_worn = worn.resources[ResourceType.OXYGEN] - 1000.0
        assert gain_healthy == 2.5
        assert gain_worn == 1.25

    def test_integrity_fifty_is_full_efficiency(self):
        world = station(built("o", ModuleType.OXYGEN_GENERATOR, 0, 0, integrity=50))
        resolve_tick(world, rng=FixedRandom(NO_LUCK))
        assert world.resources[ResourceType.OXYGEN] == 1002.5

    def test_inactive_and_unbuilt_modules_idle(self):
        off = built("o", ModuleType.OXYGEN_GENERATOR, 0, 0)
        off.is_active = False
        unbuilt = StationModule("w", ModuleType.WATER_RECYCLER, 1, 0, construction_progress=95)
        world = station(off, unbuilt)

        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.OXYGEN] == 1000.0
        assert world.resources[ResourceType.WATER] == 1000.0
        assert world.resources[ResourceType.ENERGY] == 1000.0

    def test_research_buff_multiplies_production(self):
        world = station(built("s", ModuleType.SOLAR, 0, 0))
        world.unlock("res_solar")
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 1060.0


# =============================================================================
# CONSUMPTION
# =============================================================================

class TestConsumption:
    """Crew life support and module energy draw."""

    def test_crew_life_support(self):
        world = create_initial_world()
        world.modules.get("oxy1").is_active = False
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.OXYGEN] == pytest.approx(998.5)
        assert world.resources[ResourceType.WATER] == pytest.approx(998.5)
        assert world.resources[ResourceType.FOOD] == pytest.approx(499.7)

    def test_initial_station_tick(self):
        """Core and O2 generator draw 25 energy; solar returns 40 in daylight."""
        world = create_initial_world()
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == pytest.approx(1015.0)
        assert world.resources[ResourceType.OXYGEN] == pytest.approx(1001.0)
        assert world.rates[ResourceType.ENERGY].consumption == 25.0

    def test_life_support_floored_at_zero(self):
        world = create_initial_world()
        world.modules.get("oxy1").is_active = False
        world.resources.set(ResourceType.OXYGEN, 1.0)
        world.resources.set(ResourceType.FOOD, 0.0)
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.OXYGEN] == 0.0
        assert world.resources[ResourceType.FOOD] == 0.0

    def test_depletion_alert_logged_on_roll(self):
        world = create_initial_world()
        world.resources.set(ResourceType.WATER, 0.0)
        log = EventLog()
        resolve_tick(world, rng=FixedRandom(0.01), log=log)

        assert "CRITICAL: WATER DEPLETED" in log.messages()


# =============================================================================
# ENERGY AND SHIELDS
# =============================================================================

class TestEnergyPriority:
    """Energy is settled before production is credited."""

    def test_brownout_zeroes_energy_and_drains_shield(self):
        world = create_initial_world()
        world.day_cycle = 10
        world.shield.charge = 20.0
        world.resources.set(ResourceType.ENERGY, 10.0)

        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 0.0
        assert world.shield.charge == 15.0

    def test_brownout_production_still_credited(self):
        world = create_initial_world()
        world.resources.set(ResourceType.ENERGY, 10.0)

        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 40.0

    def test_brownout_warning_on_roll(self):
        world = create_initial_world()
        world.resources.set(ResourceType.ENERGY, 0.0)
        log = EventLog()
        resolve_tick(world, rng=FixedRandom(0.1), log=log)

        assert "WARNING: Power Overload. Systems failing." in log.messages()

    def test_shield_generator_charges(self):
        world = station(built("g", ModuleType.SHIELD_GENERATOR, 0, 0))
        world.shield.charge = 50.0
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.shield.charge == 53.0
        assert world.resources[ResourceType.ENERGY] == 1000.0 - 80.0 - 8.0

    def test_shield_charge_capped(self):
        world = station(built("g", ModuleType.SHIELD_GENERATOR, 0, 0))
        world.shield.charge = 99.0
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.shield.charge == 100.0

    def test_weak_generator_leaks(self):
        """A generator at integrity 20 still draws its upkeep but cannot charge."""
        world = station(built("g", ModuleType.SHIELD_GENERATOR, 0, 0, integrity=20))
        world.shield.charge = 50.0
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.shield.charge == 49.0
        assert world.resources[ResourceType.ENERGY] == 1000.0 - 80.0

    def test_shield_never_negative(self):
        world = station()
        resolve_tick(world, rng=FixedRandom(NO_LUCK))
        assert world.shield.charge == 0.0

    def test_training_sim_standby_draw(self):
        world = station(built("t", ModuleType.TRAINING_SIM, 0, 0))
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.resources[ResourceType.ENERGY] == 1000.0 - 30.0 - 5.0


# =============================================================================
# MAINTENANCE
# =============================================================================

class TestDecay:
    """Random wear on operational modules."""

    def test_all_operational_modules_decay_on_roll(self):
        world = create_initial_world()
        unbuilt = StationModule("new", ModuleType.BATTERY, 0, 0, construction_progress=10)
        world.modules.add_module(unbuilt)

        decayed = apply_decay(world, FixedRandom(0.0))

        assert decayed == 3
        assert all(world.modules.get(mid).integrity == 99 for mid in ("core", "solar1", "oxy1"))
        assert unbuilt.integrity == 100

    def test_advanced_modules_decay_faster(self):
        basic = built("b", ModuleType.BATTERY, 0, 0)
        advanced = built("f", ModuleType.FUSION_REACTOR, 1, 0)
        world = station(basic, advanced)

        apply_decay(world, FixedRandom(0.06))

        assert basic.integrity == 100
        assert advanced.integrity == 99

    def test_integrity_bounds_over_many_ticks(self):
        world = create_initial_world()
        rng = random.Random(7)
        for _ in range(500):
            resolve_tick(world, rng=rng)
            for module in world.modules:
                assert 0 <= module.integrity <= 100
            for rt in ResourceType:
                assert 0.0 <= world.resources[rt] <= world.resources.capacity(rt)


# =============================================================================
# TRADE OFFERS
# =============================================================================

class TestTradeLifecycle:
    """Offers only exist while a trading post is available."""

    def test_offers_cleared_without_trading_post(self):
        world = create_initial_world()
        world.trade_offers = [make_offer()]
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.trade_offers == []

    def test_offers_cleared_when_post_worn(self):
        world = station(built("t", ModuleType.TRADING_POST, 0, 0, integrity=50))
        world.trade_offers = [make_offer()]
        resolve_tick(world, rng=FixedRandom(NO_LUCK))

        assert world.trade_offers == []

    def test_offers_kept_between_refreshes(self):
        world = station(built("t", ModuleType.TRADING_POST, 0, 0))
        world.tick = 57
        offer = make_offer()
        world.trade_offers = [offer]
        resolve_tick(world, rng=FixedRandom(0.0))

        assert world.trade_offers == [offer]

    def test_offers_refreshed_on_interval(self):
        world = station(built("t", ModuleType.TRADING_POST, 0, 0))
        world.tick = 100
        log = EventLog()
        resolve_tick(world, rng=FixedRandom(0.0), log=log)

        assert 1 <= len(world.trade_offers) <= 3
        assert "Incoming transmission: Trade vessel docked." in log.messages()
        for offer in world.trade_offers:
            assert 20 <= offer.cost_amount <= 69
            assert 50 <= offer.gain_amount <= 149


class TestResolverTotality:
    """The resolver handles degenerate worlds without raising."""

    def test_empty_world(self):
        world = WorldState()
        result = resolve_tick(world, StationConfig())
        assert result is world

    def test_everything_empty(self):
        world = create_initial_world()
        for rt in ResourceType:
            world.resources.set(rt, 0.0)
        for module in world.modules:
            module.integrity = 0
        resolve_tick(world, rng=random.Random(3))

        assert world.resources[ResourceType.ENERGY] == 0.0
