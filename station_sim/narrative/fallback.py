"""
Station Sim — Offline Narrative
Static text used whenever the narrative service is unavailable.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import random

from ..config import HazardType


@dataclass(frozen=True)
class Narrative:
    """Flavor text attached to a hazard."""
    title: str
    description: str
    generated: bool = False


FALLBACK_NARRATIVES: Dict[HazardType, Narrative] = {
    HazardType.METEOR_SHOWER: Narrative(
        "Meteor Alert",
        "Dense debris field detected on collision vector. Impact imminent.",
    ),
    HazardType.SYSTEM_MALFUNCTION: Narrative(
        "System Failure",
        "Critical component malfunction detected. Maintenance required immediately.",
    ),
    HazardType.SOLAR_FLARE: Narrative(
        "Solar Warning",
        "High energy radiation wave incoming from local star. Shield systems stressed.",
    ),
    HazardType.SPACE_DEBRIS: Narrative(
        "Collision Warning",
        "Space junk approaching station perimeter at high velocity.",
    ),
    HazardType.ALIEN_SCAN: Narrative(
        "Unknown Signal",
        "High frequency scan detected from unidentified source in deep space.",
    ),
}


def fallback_narrative(kind: Optional[HazardType], label: str = "") -> Narrative:
    if kind in FALLBACK_NARRATIVES:
        return FALLBACK_NARRATIVES[kind]
    return Narrative("Station Alert", f"Anomaly detected: {label or 'unknown'}. Check station status.")


COMMON_CHATTER: List[str] = [
    "Systems nominal.",
    "Did you hear that noise?",
    "Coffee machine is broken again.",
    "Just another rotation.",
    "Hull integrity at 98%.",
    "I need a vacation.",
    "Reading some strange interference.",
    "All decks secure.",
]

ROLE_CHATTER: Dict[str, List[str]] = {
    "Commander": [
        "Maintain discipline people.",
        "Watch those monitors.",
        "Status report?",
        "Keep the station in one piece.",
    ],
    "Engineer": [
        "Checking the power couplings.",
        "Fixing a leak in module 3.",
        "I can reroute the power.",
        "That shouldn't be making that sound.",
    ],
    "Scientist": [
        "Fascinating readings.",
        "Analyzing the samples.",
        "The data is inconclusive.",
        "I need more power for the lab.",
    ],
    "Medic": [
        "Vitals look stable.",
        "Don't forget your daily exercise.",
        "Medical bay is clean.",
        "Stay hydrated.",
    ],
}


def fallback_chatter(role: str, rng: Optional[random.Random] = None) -> str:
    """A random line from the common pool plus the role's own lines."""
    rng = rng or random.Random()
    pool = COMMON_CHATTER + ROLE_CHATTER.get(role, [])
    return rng.choice(pool)
