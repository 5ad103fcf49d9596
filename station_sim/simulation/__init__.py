"""
Station Sim — Simulation Package
Tick resolution, hazard injection, player commands, the engine facade,
and the asyncio scheduler.
"""

from .resolver import resolve_tick

from .events import (
    GameEvent,
    HazardInjector,
    EventRegistry,
)

from .commands import (
    CommandHandlers,
    ManualAction,
)

from .engine import StationEngine
from .scheduler import StationScheduler

__all__ = [
    # Resolver
    "resolve_tick",

    # Events
    "GameEvent",
    "HazardInjector",
    "EventRegistry",

    # Commands
    "CommandHandlers",
    "ManualAction",

    # Engine
    "StationEngine",
    "StationScheduler",
]
