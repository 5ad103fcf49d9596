"""
Station Sim — Crew Model
Crew members, their roles, and training progression.
"""

from dataclasses import dataclass
from typing import Dict, List
from enum import Enum
import logging

from ..config import CREW, CrewConfig

logger = logging.getLogger(__name__)


class CrewRole(Enum):
    """Crew member roles."""
    COMMANDER = "Commander"
    ENGINEER = "Engineer"
    SCIENTIST = "Scientist"
    MEDIC = "Medic"


@dataclass
class CrewMember:
    """
    A crew member aboard the station.

    Health and morale range 0-100. Efficiency starts at 1.0 and only
    ever rises through training.
    """
    crew_id: str
    name: str
    role: CrewRole
    health: float = 100.0
    morale: float = 100.0
    activity: str = "Idle"
    efficiency: float = 1.0

    def train(self, efficiency_gain: float, morale_cost: float):
        """Complete a training session."""
        self.efficiency += max(0.0, efficiency_gain)
        self.morale = max(0.0, self.morale - morale_cost)
        logger.info(f"{self.name}: training complete, efficiency now {self.efficiency:.2f}")

    def tone(self, config: CrewConfig = CREW) -> str:
        """Mood descriptor used for crew chatter."""
        if self.morale > config.optimistic_morale:
            return "optimistic"
        if self.morale > config.neutral_morale:
            return "neutral"
        return "panicked"

    def get_status(self) -> Dict:
        return {
            "id": self.crew_id,
            "name": self.name,
            "role": self.role.value,
            "health": self.health,
            "morale": self.morale,
            "activity": self.activity,
            "efficiency": self.efficiency,
        }


def create_default_crew() -> List[CrewMember]:
    """The founding crew of a new station."""
    return [
        CrewMember("c1", "Cmdr. Shepard", CrewRole.COMMANDER, activity="Idle"),
        CrewMember("c2", "Eng. Isaac", CrewRole.ENGINEER, activity="Maintenance"),
        CrewMember("c3", "Sci. Ripley", CrewRole.SCIENTIST, activity="Research"),
    ]
