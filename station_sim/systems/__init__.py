"""
Station Sim — Systems Package
Research, power and shields, and trading.
"""

from .research import (
    ResearchNode,
    ProductionBuff,
    RESEARCH_TREE,
    RESEARCH_BY_ID,
    production_multipliers,
    available_research,
    is_module_unlocked,
    buildable_modules,
)
from .power_system import PowerState, compute_demand, settle_energy
from .trading import TradeOffer, TradeOfferGenerator

__all__ = [
    # Research
    'ResearchNode', 'ProductionBuff', 'RESEARCH_TREE', 'RESEARCH_BY_ID',
    'production_multipliers', 'available_research', 'is_module_unlocked',
    'buildable_modules',
    # Power
    'PowerState', 'compute_demand', 'settle_energy',
    # Trading
    'TradeOffer', 'TradeOfferGenerator',
]
