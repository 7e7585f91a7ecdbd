# app/services/market_data.py
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from app.models.base import utcnow
from app.schemas.base import CamelModel

logger = logging.getLogger(__name__)


class MarketData(CamelModel):
    industry: str
    growth_rate: float
    competitive_index: int
    demand_score: int
    volatility: float
    last_updated: datetime


class MarketDataProvider(ABC):
    @abstractmethod
    async def get_market_data(self, industry: str) -> MarketData:
        """Current market indicators for an industry."""


class StaticMarketDataProvider(MarketDataProvider):
    """Fixed table keyed by lower-cased industry name; unknown industries get the software row."""

    TABLE = {
        "software": (15.2, 78, 92, 0.23),
        "fintech": (12.8, 85, 89, 0.31),
        "healthcare": (8.5, 65, 88, 0.18),
        "ecommerce": (6.2, 91, 82, 0.35),
    }
    FALLBACK = "software"

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    async def get_market_data(self, industry: str) -> MarketData:
        key = (industry or "").strip().lower()
        if key not in self.TABLE:
            logger.debug("No market row for %r, using %s", industry, self.FALLBACK)
        growth_rate, competitive, demand, volatility = self.TABLE.get(key, self.TABLE[self.FALLBACK])
        return MarketData(
            industry=industry,
            growth_rate=growth_rate,
            competitive_index=competitive,
            demand_score=demand,
            volatility=volatility,
            last_updated=self.clock(),
        )
