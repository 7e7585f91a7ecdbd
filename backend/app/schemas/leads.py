# app/schemas/leads.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.models.leads import Lead, LeadScoreRecord, LeadStatus
from app.schemas.base import CamelModel
from app.schemas.enrichment import CompanyProfile
from app.schemas.scoring import ScoreResult
from app.services.market_data import MarketData


class LeadCreate(CamelModel):
    company: str = Field(min_length=1)
    website: str = ""
    industry: str = ""
    location: str = ""
    employees: str = ""
    revenue: str = ""
    tech_stack: str = ""
    status: LeadStatus = LeadStatus.NEW


class LeadUpdate(CamelModel):
    company: Optional[str] = Field(default=None, min_length=1)
    website: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    employees: Optional[str] = None
    revenue: Optional[str] = None
    tech_stack: Optional[str] = None
    status: Optional[LeadStatus] = None


class ScrapeRequest(CamelModel):
    industry: Optional[str] = None
    location: Optional[str] = None
    keywords: Optional[str] = None


class LeadListResponse(CamelModel):
    leads: List[Lead]
    total: int
    page: int
    limit: int


class LeadsResponse(CamelModel):
    success: bool = True
    leads: List[Lead]
    timestamp: datetime


class LeadResponse(CamelModel):
    success: bool = True
    data: Lead


class LeadScoresResponse(CamelModel):
    success: bool = True
    data: List[LeadScoreRecord]


class ScoreResponse(CamelModel):
    success: bool = True
    lead_id: str
    score: ScoreResult
    market_data: MarketData
    timestamp: datetime


class EnrichResponse(CamelModel):
    success: bool = True
    data: CompanyProfile
    timestamp: datetime


class StatsResponse(CamelModel):
    success: bool = True
    data: Dict[str, Any]
