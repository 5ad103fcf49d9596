"""
Test: Station Systems
Verifies the research tree, power demand and trade offer generation.
"""

import sys
import os
# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import random

import pytest

from station_sim.config import TradeConfig
from station_sim.core.module import ModuleGrid, ModuleType, StationModule
from station_sim.core.store import ResourceType
from station_sim.systems.research import (
    RESEARCH_TREE,
    RESEARCH_BY_ID,
    ProductionBuff,
    ResearchNode,
    available_research,
    buildable_modules,
    is_module_unlocked,
    production_multipliers,
)
from station_sim.systems.power_system import compute_demand
from station_sim.systems.trading import (
    TRADE_COST_RESOURCES,
    TRADE_GAIN_RESOURCES,
    TradeOfferGenerator,
)


def test_research_tree_shape():
    """Test the tree has ten nodes with valid prerequisites."""
    print("Testing research tree...")

    assert len(RESEARCH_TREE) == 10
    for node in RESEARCH_TREE:
        assert (node.unlocks_module is None) != (node.buff is None), f"{node.node_id} needs one effect"
        if node.prerequisite_id is not None:
            assert node.prerequisite_id in RESEARCH_BY_ID

    assert RESEARCH_BY_ID["res_fusion"].prerequisite_id == "res_shields"
    assert RESEARCH_BY_ID["res_fusion"].cost == 800

    print("  ✓ Research tree tests passed")


def test_research_node_needs_one_effect():
    with pytest.raises(ValueError):
        ResearchNode("bad", "Bad", "", cost=1)
    with pytest.raises(ValueError):
        ResearchNode(
            "bad", "Bad", "", cost=1,
            unlocks_module=ModuleType.LAB,
            buff=ProductionBuff(ResourceType.FOOD, 2.0),
        )


def test_production_multipliers():
    """Test buffs fold into per-resource multipliers."""
    assert production_multipliers([]) == {}
    assert production_multipliers(["res_botany", "res_mining"]) == {ResourceType.FOOD: 1.5}
    assert production_multipliers(["res_solar", "res_recycling"]) == {
        ResourceType.ENERGY: 1.5,
        ResourceType.WATER: 1.5,
    }


def test_available_research_follows_prerequisites():
    """Test availability as the tree unlocks."""
    print("Testing research availability...")

    ids = {n.node_id for n in available_research(["res_solar"])}
    assert ids == {"res_botany", "res_recycling", "res_mining", "res_shields", "res_trade"}

    ids = {n.node_id for n in available_research(["res_solar", "res_shields"])}
    assert "res_fusion" in ids
    assert "res_shields" not in ids

    print("  ✓ Research availability tests passed")


def test_module_unlocks():
    assert is_module_unlocked(ModuleType.SOLAR, [])
    assert not is_module_unlocked(ModuleType.FUSION_REACTOR, ["res_solar", "res_shields"])
    assert is_module_unlocked(ModuleType.FUSION_REACTOR, ["res_fusion"])

    buildable = buildable_modules([])
    assert ModuleType.CORE not in buildable
    assert buildable == [
        ModuleType.SOLAR,
        ModuleType.BATTERY,
        ModuleType.HYDROPONICS,
        ModuleType.WATER_RECYCLER,
        ModuleType.OXYGEN_GENERATOR,
        ModuleType.QUARTERS,
        ModuleType.LAB,
    ]


def test_power_demand():
    """Test demand counts only operational modules plus powered subsystems."""
    print("Testing power demand...")

    offline = StationModule("o", ModuleType.LAB, 0, 0, construction_progress=100, is_active=False)
    broken = StationModule("b", ModuleType.LAB, 1, 0, construction_progress=100, integrity=0)
    unbuilt = StationModule("u", ModuleType.LAB, 2, 0, construction_progress=40)
    shield = StationModule("s", ModuleType.SHIELD_GENERATOR, 3, 0, construction_progress=100, integrity=21)
    training = StationModule("t", ModuleType.TRAINING_SIM, 4, 0, construction_progress=100, integrity=21)
    grid = ModuleGrid(modules=[offline, broken, unbuilt, shield, training])

    power = compute_demand(grid)

    assert power.module_demand == 80 + 30
    assert power.shield_powered
    assert power.shield_demand == 8.0
    assert power.training_standby
    assert power.standby_demand == 5.0
    assert power.total_demand == 123.0
    assert not power.brownout

    print("  ✓ Power demand tests passed")


def test_trade_offer_bands():
    """Test offers stay inside the configured bands."""
    print("Testing trade offers...")

    generator = TradeOfferGenerator(random.Random(5))
    for _ in range(200):
        batch = generator.generate_batch()
        assert 1 <= len(batch) <= 3
        for offer in batch:
            assert offer.cost_resource in TRADE_COST_RESOURCES
            assert offer.gain_resource in TRADE_GAIN_RESOURCES
            assert 20 <= offer.cost_amount <= 69
            assert 50 <= offer.gain_amount <= 149

    print("  ✓ Trade offer tests passed")


def test_trade_refresh_window():
    generator = TradeOfferGenerator(random.Random(5), TradeConfig(refresh_chance=1.0))
    assert generator.should_refresh(100)
    assert generator.should_refresh(300)
    assert not generator.should_refresh(150)

    generator = TradeOfferGenerator(random.Random(5), TradeConfig(refresh_chance=0.0))
    assert not generator.should_refresh(100)


def run_all_tests():
    """Run all systems tests."""
    print("\n" + "="*50)
    print("STATION SIM — Systems Tests")
    print("="*50 + "\n")

    try:
        test_research_tree_shape()
        test_research_node_needs_one_effect()
        test_production_multipliers()
        test_available_research_follows_prerequisites()
        test_module_unlocks()
        test_power_demand()
        test_trade_offer_bands()
        test_trade_refresh_window()

        print("\n" + "="*50)
        print("ALL TESTS PASSED ✓")
        print("="*50 + "\n")
        return True

    except AssertionError as e:
        print(f"\n✗ TEST FAILED: {e}")
        return False


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
