"""
Station Sim — Core Module
Resource ledger, station modules, event log, and world state.
"""

from .store import ResourceType, ResourceRate, Store, ResourceLedger, LIFE_SUPPORT
from .module import ModuleType, ModuleSpec, MODULE_SPECS, StationModule, ModuleGrid
from .event_log import EventLog, LogEntry, LogLevel, LogCategory
from .world import WorldState, ShieldState, create_initial_world

__all__ = [
    # Store
    "ResourceType",
    "ResourceRate",
    "Store",
    "ResourceLedger",
    "LIFE_SUPPORT",

    # Module
    "ModuleType",
    "ModuleSpec",
    "MODULE_SPECS",
    "StationModule",
    "ModuleGrid",

    # Log
    "EventLog",
    "LogEntry",
    "LogLevel",
    "LogCategory",

    # World
    "WorldState",
    "ShieldState",
    "create_initial_world",
]
