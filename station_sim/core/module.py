"""
Station Sim — Station Modules
Module catalog, module records, and the placement grid.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
from enum import Enum
import logging
import uuid

from .store import ResourceType

logger = logging.getLogger(__name__)


class ModuleType(Enum):
    """Buildable station module kinds."""
    CORE = "Core Command"
    SOLAR = "Solar Array"
    BATTERY = "Battery Bank"
    HYDROPONICS = "Hydroponics"
    WATER_RECYCLER = "Water Recycler"
    OXYGEN_GENERATOR = "O2 Generator"
    QUARTERS = "Living Quarters"
    LAB = "Science Lab"
    ORE_PROCESSOR = "Ore Processor"
    FUSION_REACTOR = "Fusion Reactor"
    ADVANCED_O2 = "Adv. O2 Scrubber"
    DRONE_HANGAR = "Drone Hangar"
    SHIELD_GENERATOR = "Shield Generator"
    TRAINING_SIM = "Training Sim"
    TRADING_POST = "Trading Post"


@dataclass
class ModuleSpec:
    """Static catalog entry for a module type."""
    module_type: ModuleType
    description: str
    materials_cost: float
    energy_cost: float = 0.0                    # Drawn every tick while operational
    produces: Dict[ResourceType, float] = field(default_factory=dict)
    advanced: bool = False                      # Decays faster
    unlocked_by_default: bool = True
    buildable: bool = True

    @property
    def name(self) -> str:
        return self.module_type.value


MODULE_SPECS: Dict[ModuleType, ModuleSpec] = {
    ModuleType.CORE: ModuleSpec(
        ModuleType.CORE,
        "Central station hub. Provides basic life support.",
        materials_cost=0, energy_cost=5, buildable=False,
    ),
    ModuleType.SOLAR: ModuleSpec(
        ModuleType.SOLAR,
        "Generates 40 Energy per tick during daylight.",
        materials_cost=60, energy_cost=0,
        produces={ResourceType.ENERGY: 40.0},
    ),
    ModuleType.BATTERY: ModuleSpec(
        ModuleType.BATTERY,
        "Stores excess energy for use during eclipse.",
        materials_cost=50, energy_cost=1,
    ),
    ModuleType.HYDROPONICS: ModuleSpec(
        ModuleType.HYDROPONICS,
        "Grows 0.4 Food per tick.",
        materials_cost=80, energy_cost=15,
        produces={ResourceType.FOOD: 0.4},
    ),
    ModuleType.WATER_RECYCLER: ModuleSpec(
        ModuleType.WATER_RECYCLER,
        "Purifies 1.5 Water per tick.",
        materials_cost=90, energy_cost=20,
        produces={ResourceType.WATER: 1.5},
    ),
    ModuleType.OXYGEN_GENERATOR: ModuleSpec(
        ModuleType.OXYGEN_GENERATOR,
        "Generates 2.5 Oxygen per tick.",
        materials_cost=100, energy_cost=20,
        produces={ResourceType.OXYGEN: 2.5},
    ),
    ModuleType.QUARTERS: ModuleSpec(
        ModuleType.QUARTERS,
        "Houses crew members. Essential for morale.",
        materials_cost=120, energy_cost=10,
    ),
    ModuleType.LAB: ModuleSpec(
        ModuleType.LAB,
        "Generates 0.1 Science points per tick.",
        materials_cost=200, energy_cost=35,
        produces={ResourceType.SCIENCE: 0.1},
    ),
    ModuleType.ORE_PROCESSOR: ModuleSpec(
        ModuleType.ORE_PROCESSOR,
        "Automates mining. +0.2 Materials/tick.",
        materials_cost=250, energy_cost=50,
        produces={ResourceType.MATERIALS: 0.2},
        unlocked_by_default=False,
    ),
    ModuleType.FUSION_REACTOR: ModuleSpec(
        ModuleType.FUSION_REACTOR,
        "Massive power output. +200 Energy/tick.",
        materials_cost=500, energy_cost=0,
        produces={ResourceType.ENERGY: 200.0},
        advanced=True, unlocked_by_default=False,
    ),
    ModuleType.ADVANCED_O2: ModuleSpec(
        ModuleType.ADVANCED_O2,
        "High-tech scrubber. +5.0 Oxygen/tick.",
        materials_cost=200, energy_cost=40,
        produces={ResourceType.OXYGEN: 5.0},
        advanced=True, unlocked_by_default=False,
    ),
    ModuleType.DRONE_HANGAR: ModuleSpec(
        ModuleType.DRONE_HANGAR,
        "Deploys salvage drones. +0.8 Materials/tick.",
        materials_cost=300, energy_cost=60,
        produces={ResourceType.MATERIALS: 0.8},
        advanced=True, unlocked_by_default=False,
    ),
    ModuleType.SHIELD_GENERATOR: ModuleSpec(
        ModuleType.SHIELD_GENERATOR,
        "Generates a force field. Consumes power to charge.",
        materials_cost=400, energy_cost=80,
        advanced=True, unlocked_by_default=False,
    ),
    ModuleType.TRAINING_SIM: ModuleSpec(
        ModuleType.TRAINING_SIM,
        "Trains crew. Consumes 5 Energy/tick + 50 per session.",
        materials_cost=150, energy_cost=30,
        unlocked_by_default=False,
    ),
    ModuleType.TRADING_POST: ModuleSpec(
        ModuleType.TRADING_POST,
        "Attracts passing trade vessels.",
        materials_cost=250, energy_cost=20,
        unlocked_by_default=False,
    ),
}


def new_module_id() -> str:
    return uuid.uuid4().hex[:9]


@dataclass
class StationModule:
    """
    A placed module.

    Records are never deleted; integrity can reach 0 but the module stays
    on the grid.
    """
    module_id: str
    module_type: ModuleType
    x: int
    y: int
    integrity: int = 100
    is_active: bool = True
    construction_progress: int = 0

    @property
    def spec(self) -> ModuleSpec:
        return MODULE_SPECS[self.module_type]

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_constructed(self) -> bool:
        return self.construction_progress >= 100

    @property
    def is_operational(self) -> bool:
        return self.is_constructed and self.integrity > 0 and self.is_active

    def is_available(self, min_integrity: int) -> bool:
        """Operational and above a per-feature integrity bar."""
        return self.is_operational and self.integrity > min_integrity

    def damage(self, amount: int) -> int:
        """Reduce integrity (floor 0). Returns the integrity lost."""
        before = self.integrity
        self.integrity = max(0, self.integrity - amount)
        return before - self.integrity

    def repair(self, amount: int) -> int:
        before = self.integrity
        self.integrity = min(100, self.integrity + amount)
        return self.integrity - before

    def advance_construction(self, amount: int):
        self.construction_progress = min(100, self.construction_progress + amount)

    def get_status(self) -> Dict:
        return {
            "id": self.module_id,
            "type": self.module_type.name,
            "name": self.spec.name,
            "integrity": self.integrity,
            "is_active": self.is_active,
            "construction_progress": self.construction_progress,
            "is_operational": self.is_operational,
            "x": self.x,
            "y": self.y,
        }


class ModuleGrid:
    """
    All station modules, placed on a fixed-size grid.
    """

    def __init__(self, width: int = 6, height: int = 6, modules: Optional[List[StationModule]] = None):
        self.width = width
        self.height = height
        self.modules: List[StationModule] = []
        for module in modules or []:
            self.add_module(module)

    def __iter__(self) -> Iterator[StationModule]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    def get(self, module_id: str) -> Optional[StationModule]:
        for module in self.modules:
            if module.module_id == module_id:
                return module
        return None

    def is_occupied(self, x: int, y: int) -> bool:
        return any(m.x == x and m.y == y for m in self.modules)

    def add_module(self, module: StationModule):
        """Register a module at its position."""
        if self.is_occupied(module.x, module.y):
            raise ValueError(f"Grid cell ({module.x}, {module.y}) is already occupied")
        self.modules.append(module)

    def find_free_cell(self) -> Optional[Tuple[int, int]]:
        """First unoccupied cell, scanning row by row."""
        occupied = {m.position for m in self.modules}
        for y in range(self.height):
            for x in range(self.width):
                if (x, y) not in occupied:
                    return (x, y)
        return None

    def place(self, module_type: ModuleType) -> Optional[StationModule]:
        """
        Place a new module under construction at the first free cell.

        Returns:
            The new module, or None if the grid is full.
        """
        cell = self.find_free_cell()
        if cell is None:
            return None
        module = StationModule(
            module_id=new_module_id(),
            module_type=module_type,
            x=cell[0],
            y=cell[1],
            integrity=100,
            is_active=True,
            construction_progress=0,
        )
        self.modules.append(module)
        logger.info(f"Placed {module_type.value} at ({module.x}, {module.y})")
        return module

    def get_operational_modules(self) -> List[StationModule]:
        return [m for m in self.modules if m.is_operational]

    def get_by_type(self, module_type: ModuleType) -> List[StationModule]:
        return [m for m in self.modules if m.module_type == module_type]

    def has_available(self, module_type: ModuleType, min_integrity: int) -> bool:
        """True if any module of the type is operational above min_integrity."""
        return any(m.is_available(min_integrity) for m in self.get_by_type(module_type))

    def get_all_status(self) -> List[Dict]:
        return [m.get_status() for m in self.modules]
