"""
Station Sim — Research Tree
Tech nodes that unlock module types or buff resource production.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
import logging

from ..core.module import MODULE_SPECS, ModuleType
from ..core.store import ResourceType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductionBuff:
    """Multiply a resource's total production."""
    resource: ResourceType
    multiplier: float


@dataclass(frozen=True)
class ResearchNode:
    """
    A node in the research tree.

    Each node has at most one prerequisite and exactly one effect: either
    `unlocks_module` or `buff`.
    """
    node_id: str
    name: str
    description: str
    cost: float
    prerequisite_id: Optional[str] = None
    unlocks_module: Optional[ModuleType] = None
    buff: Optional[ProductionBuff] = None

    def __post_init__(self):
        if (self.unlocks_module is None) == (self.buff is None):
            raise ValueError(f"{self.node_id}: a research node needs exactly one effect")


RESEARCH_TREE: List[ResearchNode] = [
    ResearchNode(
        "res_botany", "Adv. Hydroponics",
        "Improves plant growth. Food production +50%.",
        cost=50,
        buff=ProductionBuff(ResourceType.FOOD, 1.5),
    ),
    ResearchNode(
        "res_recycling", "Water Purification",
        "Advanced filters. Water production +50%.",
        cost=75,
        buff=ProductionBuff(ResourceType.WATER, 1.5),
    ),
    ResearchNode(
        "res_solar", "Photovoltaic Cells",
        "Higher efficiency panels. Solar Energy +50%.",
        cost=100,
        buff=ProductionBuff(ResourceType.ENERGY, 1.5),
    ),
    ResearchNode(
        "res_mining", "Asteroid Mining",
        "Unlocks Ore Processors for automated material generation.",
        cost=200, prerequisite_id="res_solar",
        unlocks_module=ModuleType.ORE_PROCESSOR,
    ),
    ResearchNode(
        "res_drones", "Drone Automation",
        "Unlocks Drone Hangars for rapid material collection.",
        cost=300, prerequisite_id="res_mining",
        unlocks_module=ModuleType.DRONE_HANGAR,
    ),
    ResearchNode(
        "res_training", "Crew Training",
        "Unlocks Training Simulators to improve crew efficiency.",
        cost=150, prerequisite_id="res_botany",
        unlocks_module=ModuleType.TRAINING_SIM,
    ),
    ResearchNode(
        "res_adv_support", "Adv. Life Support",
        "Unlocks high-efficiency Advanced O2 Scrubbers.",
        cost=250, prerequisite_id="res_recycling",
        unlocks_module=ModuleType.ADVANCED_O2,
    ),
    ResearchNode(
        "res_shields", "Defensive Grids",
        "Unlocks Shield Generators to protect from meteors.",
        cost=400, prerequisite_id="res_solar",
        unlocks_module=ModuleType.SHIELD_GENERATOR,
    ),
    ResearchNode(
        "res_trade", "Interstellar Commerce",
        "Unlocks Trading Posts to barter with passing ships.",
        cost=150, prerequisite_id="res_solar",
        unlocks_module=ModuleType.TRADING_POST,
    ),
    ResearchNode(
        "res_fusion", "Cold Fusion",
        "Unlocks Fusion Reactor technology.",
        cost=800, prerequisite_id="res_shields",
        unlocks_module=ModuleType.FUSION_REACTOR,
    ),
]

RESEARCH_BY_ID: Dict[str, ResearchNode] = {node.node_id: node for node in RESEARCH_TREE}


def get_node(node_id: str) -> Optional[ResearchNode]:
    return RESEARCH_BY_ID.get(node_id)


def production_multipliers(unlocked: Iterable[str]) -> Dict[ResourceType, float]:
    """
    Fold unlocked production buffs into one multiplier per resource.

    Several buffs on the same resource compose multiplicatively. Resources
    without a buff are absent from the result.
    """
    multipliers: Dict[ResourceType, float] = {}
    for node_id in unlocked:
        node = RESEARCH_BY_ID.get(node_id)
        if node is None or node.buff is None:
            continue
        resource = node.buff.resource
        multipliers[resource] = multipliers.get(resource, 1.0) * node.buff.multiplier
    return multipliers


def prerequisite_met(node: ResearchNode, unlocked: Iterable[str]) -> bool:
    return node.prerequisite_id is None or node.prerequisite_id in set(unlocked)


def available_research(unlocked: Iterable[str]) -> List[ResearchNode]:
    """Nodes not yet unlocked whose prerequisite is met."""
    done = set(unlocked)
    return [
        node for node in RESEARCH_TREE
        if node.node_id not in done and prerequisite_met(node, done)
    ]


def is_module_unlocked(module_type: ModuleType, unlocked: Iterable[str]) -> bool:
    """Default module types are always unlocked; others need their research node."""
    if MODULE_SPECS[module_type].unlocked_by_default:
        return True
    done = set(unlocked)
    return any(
        node.unlocks_module == module_type and node.node_id in done
        for node in RESEARCH_TREE
    )


def buildable_modules(unlocked: Iterable[str]) -> List[ModuleType]:
    done = set(unlocked)
    return [
        module_type for module_type, spec in MODULE_SPECS.items()
        if spec.buildable and is_module_unlocked(module_type, done)
    ]
