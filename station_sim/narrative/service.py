"""
Station Sim — Narrative Service
Async wrapper around the narrative client with a timeout and offline
fallback. Never raises to the caller.
"""

from typing import Optional
import asyncio
import logging
import random

from ..config import NARRATIVE, HazardType, NarrativeConfig
from .client import NarrativeClient, NarrativeError, QuotaExceededError
from .fallback import Narrative, fallback_chatter, fallback_narrative

logger = logging.getLogger(__name__)


class NarrativeService:
    """
    Requests flavor text off the event loop.

    The blocking client call runs in the default executor, bounded by
    `timeout_s`. One attempt per request; any failure returns fallback text.
    """

    def __init__(
        self,
        client: Optional[NarrativeClient] = None,
        config: NarrativeConfig = NARRATIVE,
        rng: Optional[random.Random] = None,
    ):
        if client is None and config.enabled:
            client = NarrativeClient.from_config(config)
        self.client = client
        self.timeout_s = config.timeout_s
        self.rng = rng or random.Random()

        if self.client is None:
            logger.info("Narrative service offline; using static narrative")

    @property
    def online(self) -> bool:
        return self.client is not None

    async def _call(self, func, *args):
        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(loop.run_in_executor(None, func, *args), timeout=self.timeout_s)

    async def event_narrative(self, hazard: HazardType, context: str) -> Narrative:
        """Title and description for a hazard, generated or static."""
        if self.client is None:
            return fallback_narrative(hazard)

        try:
            data = await self._call(self.client.generate_event_narrative, hazard.value, context)
            return Narrative(data["title"], data["description"], generated=True)
        except asyncio.TimeoutError:
            logger.warning(f"Narrative request for {hazard.value} timed out after {self.timeout_s}s")
        except QuotaExceededError:
            logger.warning("Narrative quota limit reached. Switching to offline narrative protocols.")
        except NarrativeError as e:
            logger.error(f"Narrative generation failed: {e}")

        return fallback_narrative(hazard)

    async def crew_chatter(self, role: str, tone: str) -> str:
        """A short remark from a crew member."""
        if self.client is None:
            return fallback_chatter(role, self.rng)

        try:
            return await self._call(self.client.generate_crew_chatter, role, tone)
        except asyncio.TimeoutError:
            logger.debug(f"Chatter request for {role} timed out")
        except QuotaExceededError:
            pass
        except NarrativeError as e:
            logger.error(f"Crew chatter failed: {e}")

        return fallback_chatter(role, self.rng)
