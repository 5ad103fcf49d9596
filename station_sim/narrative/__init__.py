"""
Station Sim — Narrative Package
Flavor text for hazards and crew chatter, with offline fallbacks.
"""

from .client import NarrativeClient, NarrativeError, QuotaExceededError
from .fallback import Narrative, FALLBACK_NARRATIVES, fallback_narrative, fallback_chatter
from .service import NarrativeService

__all__ = [
    'NarrativeClient', 'NarrativeError', 'QuotaExceededError',
    'Narrative', 'FALLBACK_NARRATIVES', 'fallback_narrative', 'fallback_chatter',
    'NarrativeService',
]
