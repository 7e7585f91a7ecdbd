# app/schemas/scoring.py
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel

Priority = Literal["high", "medium", "low"]


class LeadInput(CamelModel):
    """Free-text lead attributes fed to the scorer. Every field may be blank."""

    company: str = ""
    website: str = ""
    employees: str = ""
    revenue: str = ""
    industry: str = ""
    tech_stack: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value


class ScoreRequest(LeadInput):
    lead_id: Optional[str] = None


class ScoreFactors(CamelModel):
    company_size: int = Field(ge=0, le=100)
    industry: int = Field(ge=0, le=100)
    technology: int = Field(ge=0, le=100)
    funding: int = Field(ge=0, le=100)
    growth: int = Field(ge=0, le=100)
    engagement: int = Field(ge=0, le=100)


class MarketTrends(CamelModel):
    industry_growth: int
    competitive_index: int
    demand_score: int


class ScoreResult(CamelModel):
    overall: int = Field(ge=0, le=100)
    factors: ScoreFactors
    recommendation: str
    priority: Priority
    conversion_probability: int = Field(ge=0, le=100)
    predicted_deal_size: str
    time_to_close: str
    similar_companies: List[str]
    recommendations: List[str]
    risk_factors: List[str]
    market_trends: MarketTrends
