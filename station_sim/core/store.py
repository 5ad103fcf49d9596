"""
Station Sim — Resource Store
Tracks the six station resources with hard caps and per-tick rates.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class ResourceType(Enum):
    """Resources tracked by the station ledger."""
    OXYGEN = auto()
    WATER = auto()
    ENERGY = auto()
    FOOD = auto()
    MATERIALS = auto()
    SCIENCE = auto()

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Life support resources consumed by the crew every tick
LIFE_SUPPORT = (ResourceType.OXYGEN, ResourceType.WATER, ResourceType.FOOD)

INITIAL_AMOUNTS: Dict[ResourceType, float] = {
    ResourceType.OXYGEN: 1000.0,
    ResourceType.WATER: 1000.0,
    ResourceType.ENERGY: 1000.0,
    ResourceType.FOOD: 500.0,
    ResourceType.MATERIALS: 100.0,
    ResourceType.SCIENCE: 0.0,
}

BASE_CAPACITY = 2000.0

INITIAL_CAPACITIES: Dict[ResourceType, float] = {
    ResourceType.OXYGEN: BASE_CAPACITY,
    ResourceType.WATER: BASE_CAPACITY,
    ResourceType.ENERGY: BASE_CAPACITY,
    ResourceType.FOOD: BASE_CAPACITY,
    ResourceType.MATERIALS: 500.0,
    ResourceType.SCIENCE: 1000.0,
}


@dataclass
class ResourceRate:
    """Production and consumption of one resource during the last tick."""
    production: float = 0.0
    consumption: float = 0.0

    @property
    def net(self) -> float:
        return self.production - self.consumption


@dataclass
class Store:
    """
    A single resource with a cap.

    The amount is clamped to [0, capacity] after every mutation.
    """

    resource_type: ResourceType
    capacity: float
    amount: float = 0.0

    def __post_init__(self):
        """Validate initial state."""
        if self.capacity < 0:
            raise ValueError(f"{self.resource_type.name}: capacity cannot be negative ({self.capacity})")
        if self.amount > self.capacity:
            logger.warning(f"{self.resource_type.name}: Initial amount {self.amount} exceeds capacity {self.capacity}")
        self.amount = self._clamp(self.amount)

    def _clamp(self, value: float) -> float:
        return max(0.0, min(self.capacity, value))

    @property
    def free_capacity(self) -> float:
        return self.capacity - self.amount

    @property
    def fill_fraction(self) -> float:
        if self.capacity == 0:
            return 0.0
        return self.amount / self.capacity

    @property
    def is_empty(self) -> bool:
        return self.amount <= 0.0

    @property
    def is_full(self) -> bool:
        return self.amount >= self.capacity

    def add(self, amount: float) -> float:
        """
        Add to the store, capped at capacity.

        Returns:
            Amount actually added.
        """
        if amount < 0:
            raise ValueError(f"Cannot add negative amount: {amount}")
        before = self.amount
        self.amount = self._clamp(self.amount + amount)
        return self.amount - before

    def remove(self, amount: float) -> float:
        """
        Remove from the store, floored at zero.

        Returns:
            Amount actually removed.
        """
        if amount < 0:
            raise ValueError(f"Cannot remove negative amount: {amount}")
        before = self.amount
        self.amount = self._clamp(self.amount - amount)
        return before - self.amount

    def set(self, amount: float):
        self.amount = self._clamp(amount)

    def get_status(self) -> dict:
        return {
            "resource_type": self.resource_type.name,
            "amount": self.amount,
            "capacity": self.capacity,
            "fill_fraction": self.fill_fraction,
        }

    def __repr__(self) -> str:
        return f"Store({self.resource_type.name}: {self.amount:.1f}/{self.capacity:.1f})"


class ResourceLedger:
    """
    The station's six resources, indexed by ResourceType.
    """

    def __init__(
        self,
        amounts: Optional[Dict[ResourceType, float]] = None,
        capacities: Optional[Dict[ResourceType, float]] = None,
    ):
        amounts = {**INITIAL_AMOUNTS, **(amounts or {})}
        capacities = {**INITIAL_CAPACITIES, **(capacities or {})}
        self.stores: Dict[ResourceType, Store] = {
            rt: Store(rt, capacity=capacities[rt], amount=amounts[rt])
            for rt in ResourceType
        }

    def __getitem__(self, resource_type: ResourceType) -> float:
        return self.stores[resource_type].amount

    def get(self, resource_type: ResourceType) -> Store:
        return self.stores[resource_type]

    def capacity(self, resource_type: ResourceType) -> float:
        return self.stores[resource_type].capacity

    def has(self, resource_type: ResourceType, amount: float) -> bool:
        """True if at least `amount` is held."""
        return self.stores[resource_type].amount >= amount

    def add(self, resource_type: ResourceType, amount: float) -> float:
        return self.stores[resource_type].add(amount)

    def remove(self, resource_type: ResourceType, amount: float) -> float:
        return self.stores[resource_type].remove(amount)

    def set(self, resource_type: ResourceType, amount: float):
        self.stores[resource_type].set(amount)

    def empty_resources(self, resource_types=LIFE_SUPPORT):
        return [rt for rt in resource_types if self.stores[rt].is_empty]

    def get_all_status(self) -> Dict[str, dict]:
        return {rt.name: store.get_status() for rt, store in self.stores.items()}

    def __repr__(self) -> str:
        inner = ", ".join(f"{rt.name}={s.amount:.1f}" for rt, s in self.stores.items())
        return f"ResourceLedger({inner})"


def empty_rates() -> Dict[ResourceType, ResourceRate]:
    """Zeroed rate snapshot for every resource."""
    return {rt: ResourceRate() for rt in ResourceType}
