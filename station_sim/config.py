"""
Station Sim — Configuration
Tick timing, balancing constants, and collaborator settings.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
import os


class HazardType(Enum):
    """Random hazards the event injector can trigger."""
    METEOR_SHOWER = "Meteor Shower"
    SYSTEM_MALFUNCTION = "System Malfunction"
    SOLAR_FLARE = "Solar Flare"
    SPACE_DEBRIS = "Space Debris"
    ALIEN_SCAN = "Alien Scan"


class EventSeverity(Enum):
    """Severity of a hazard, used by the acknowledgement UI only."""
    LOW = auto()
    MEDIUM = auto()
    CRITICAL = auto()


HAZARD_SEVERITY = {
    HazardType.METEOR_SHOWER: EventSeverity.CRITICAL,
    HazardType.SYSTEM_MALFUNCTION: EventSeverity.CRITICAL,
    HazardType.SOLAR_FLARE: EventSeverity.MEDIUM,
    HazardType.SPACE_DEBRIS: EventSeverity.MEDIUM,
    HazardType.ALIEN_SCAN: EventSeverity.MEDIUM,
}


@dataclass
class EngineConfig:
    """Clock, grid and end-state parameters."""

    # Timing
    tick_period_s: float = 1.0       # Resource tick at speed 1
    event_period_s: float = 1.0      # Event injection tick at speed 1

    # Day cycle
    day_cycle_period: int = 100
    initial_day_cycle: int = 50
    sunlight_start: int = 25         # Exclusive
    sunlight_end: int = 75           # Exclusive

    # Construction
    construction_rate: int = 5       # Progress points per tick
    grid_width: int = 6
    grid_height: int = 6

    # Game over (oxygen depleted past the grace period)
    game_over_grace_ticks: int = 100
    game_over_chance: float = 0.01

    # Retention for long unattended sessions
    max_log_entries: int = 500
    max_event_records: int = 200

    def is_sunlight(self, day_cycle: int) -> bool:
        return self.sunlight_start < day_cycle < self.sunlight_end


@dataclass
class MaintenanceConfig:
    """Wear and repair parameters."""
    base_decay_chance: float = 0.05
    advanced_decay_chance: float = 0.08
    repair_cost: float = 10.0        # Materials
    repair_amount: int = 50
    full_efficiency_integrity: int = 50
    degraded_efficiency: float = 0.5


@dataclass
class ShieldConfig:
    """Shield generator parameters."""
    max_charge: float = 100.0
    energy_cost_per_tick: float = 8.0
    recharge_rate: float = 3.0
    brownout_penalty: float = 5.0
    passive_leak: float = 1.0
    min_integrity: int = 20          # Generator must be above this to draw/charge

    # Meteor interaction
    absorb_threshold: float = 20.0
    absorb_cost: float = 30.0


@dataclass
class ManualActionConfig:
    """Cooldown-gated salvage and analyze actions."""
    cooldown_ticks: int = 10
    energy_cost: float = 10.0
    salvage_yield: float = 15.0
    analyze_yield: float = 8.0
    initial_last_used_tick: int = -100


@dataclass
class TradeConfig:
    """Trading post offer generation."""
    refresh_interval_ticks: int = 100
    refresh_chance: float = 0.5
    min_offers: int = 1
    max_offers: int = 3
    cost_amount_min: int = 20
    cost_amount_max: int = 69
    gain_amount_min: int = 50
    gain_amount_max: int = 149
    min_integrity: int = 50          # Trading post must be above this


@dataclass
class TrainingConfig:
    """Training simulator parameters."""
    energy_cost: float = 50.0
    efficiency_gain: float = 0.1
    morale_cost: float = 5.0
    min_integrity: int = 50          # Required to run a session
    standby_energy: float = 5.0
    standby_min_integrity: int = 20  # Standby draw applies above this


@dataclass
class HazardConfig:
    """Event injection and logging probabilities."""
    event_chance_per_tick: float = 0.008
    meteor_damage: int = 50
    meteor_min_targets: int = 1
    meteor_max_targets: int = 2
    solar_flare_factor: float = 0.2
    brownout_log_chance: float = 0.2
    critical_log_chance: float = 0.05


@dataclass
class CrewConfig:
    """Per-capita consumption per tick."""
    oxygen_per_crew: float = 0.5
    water_per_crew: float = 0.5
    food_per_crew: float = 0.1
    optimistic_morale: float = 70.0
    neutral_morale: float = 30.0


@dataclass
class NarrativeConfig:
    """Narrative text generator connection."""
    api_key: str = field(default_factory=lambda: os.environ.get("STATION_NARRATIVE_API_KEY", ""))
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-2.5-flash"
    timeout_s: float = 3.0

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass
class StationConfig:
    """All engine tunables in one place."""
    engine: EngineConfig = field(default_factory=EngineConfig)
    maintenance: MaintenanceConfig = field(default_factory=MaintenanceConfig)
    shield: ShieldConfig = field(default_factory=ShieldConfig)
    manual: ManualActionConfig = field(default_factory=ManualActionConfig)
    trade: TradeConfig = field(default_factory=TradeConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    hazard: HazardConfig = field(default_factory=HazardConfig)
    crew: CrewConfig = field(default_factory=CrewConfig)
    narrative: NarrativeConfig = field(default_factory=NarrativeConfig)


# Default configurations
ENGINE = EngineConfig()
MAINTENANCE = MaintenanceConfig()
SHIELD = ShieldConfig()
MANUAL = ManualActionConfig()
TRADE = TradeConfig()
TRAINING = TrainingConfig()
HAZARD = HazardConfig()
CREW = CrewConfig()
NARRATIVE = NarrativeConfig()

STATION = StationConfig(
    engine=ENGINE,
    maintenance=MAINTENANCE,
    shield=SHIELD,
    manual=MANUAL,
    trade=TRADE,
    training=TRAINING,
    hazard=HAZARD,
    crew=CREW,
    narrative=NARRATIVE,
)
