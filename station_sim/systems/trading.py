"""
Station Sim — Trading
Trade offers brought by passing vessels while a trading post is online.
"""

from dataclasses import dataclass
from typing import Dict, List
import logging
import random
import uuid

from ..config import TRADE, TradeConfig
from ..core.store import ResourceType

logger = logging.getLogger(__name__)


# Resources a trader asks for, and resources a trader pays with
TRADE_COST_RESOURCES = (ResourceType.MATERIALS, ResourceType.SCIENCE)
TRADE_GAIN_RESOURCES = (ResourceType.FOOD, ResourceType.ENERGY)


@dataclass
class TradeOffer:
    """A one-shot barter offer."""
    offer_id: str
    cost_resource: ResourceType
    cost_amount: float
    gain_resource: ResourceType
    gain_amount: float
    description: str

    def get_status(self) -> Dict:
        return {
            "id": self.offer_id,
            "cost_resource": self.cost_resource.name,
            "cost_amount": self.cost_amount,
            "gain_resource": self.gain_resource.name,
            "gain_amount": self.gain_amount,
            "description": self.description,
        }


class TradeOfferGenerator:
    """
    Generates batches of random trade offers.

    Each offer pairs a cost from TRADE_COST_RESOURCES with a gain from
    TRADE_GAIN_RESOURCES, with magnitudes inside the configured bands.
    """

    def __init__(self, rng: random.Random, config: TradeConfig = TRADE):
        self.rng = rng
        self.config = config

    def _offer_id(self) -> str:
        return uuid.uuid4().hex[:9]

    def generate_offer(self) -> TradeOffer:
        cfg = self.config
        trader = uuid.uuid4().hex[:3].upper()
        return TradeOffer(
            offer_id=self._offer_id(),
            cost_resource=TRADE_COST_RESOURCES[0] if self.rng.random() < 0.5 else TRADE_COST_RESOURCES[1],
            cost_amount=float(self.rng.randint(cfg.cost_amount_min, cfg.cost_amount_max)),
            gain_resource=TRADE_GAIN_RESOURCES[0] if self.rng.random() < 0.5 else TRADE_GAIN_RESOURCES[1],
            gain_amount=float(self.rng.randint(cfg.gain_amount_min, cfg.gain_amount_max)),
            description=f"Trader {trader}",
        )

    def generate_batch(self) -> List[TradeOffer]:
        count = self.rng.randint(self.config.min_offers, self.config.max_offers)
        offers = [self.generate_offer() for _ in range(count)]
        logger.debug(f"Generated {len(offers)} trade offers")
        return offers

    def should_refresh(self, tick: int) -> bool:
        """Refresh window reached and the refresh roll succeeded."""
        if tick % self.config.refresh_interval_ticks != 0:
            return False
        return self.rng.random() < self.config.refresh_chance
