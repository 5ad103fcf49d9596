"""
Station Sim — Orbital Station Simulation Engine

A tick-driven resource economy for a small orbital station: modules,
crew, research, trading, random hazards, and optional generated
narrative for alerts and crew chatter.
"""

__version__ = "1.0.0"

from .config import (
    STATION,
    ENGINE,
    NARRATIVE,
    StationConfig,
    HazardType,
    EventSeverity,
)

from .core import (
    ResourceType,
    ResourceLedger,
    ModuleType,
    ModuleSpec,
    ModuleGrid,
    StationModule,
    EventLog,
    LogEntry,
    LogLevel,
    LogCategory,
    WorldState,
    create_initial_world,
)

from .crew import (
    CrewMember,
    CrewRole,
)

from .narrative import (
    NarrativeClient,
    NarrativeService,
    NarrativeError,
    QuotaExceededError,
)

from .simulation import (
    resolve_tick,
    GameEvent,
    HazardInjector,
    CommandHandlers,
    ManualAction,
    StationEngine,
    StationScheduler,
)

__all__ = [
    # Version info
    "__version__",

    # Config
    "STATION",
    "ENGINE",
    "NARRATIVE",
    "StationConfig",
    "HazardType",
    "EventSeverity",

    # Core classes
    "ResourceType",
    "ResourceLedger",
    "ModuleType",
    "ModuleSpec",
    "ModuleGrid",
    "StationModule",
    "EventLog",
    "LogEntry",
    "LogLevel",
    "LogCategory",
    "WorldState",
    "create_initial_world",

    # Crew
    "CrewMember",
    "CrewRole",

    # Narrative
    "NarrativeClient",
    "NarrativeService",
    "NarrativeError",
    "QuotaExceededError",

    # Simulation
    "resolve_tick",
    "GameEvent",
    "HazardInjector",
    "CommandHandlers",
    "ManualAction",
    "StationEngine",
    "StationScheduler",
]
