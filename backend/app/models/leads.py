# app/models/leads.py
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from app.models.base import new_id, utcnow
from app.schemas.base import CamelModel
from app.schemas.scoring import ScoreResult


class LeadStatus(str, Enum):
    NEW = "new"
    QUALIFIED = "qualified"
    CONTACTED = "contacted"
    CONVERTED = "converted"
    LOST = "lost"


class Lead(CamelModel):
    id: str = Field(default_factory=lambda: new_id("lead"))

    # Company Information
    company: str
    website: str = ""
    industry: str = ""
    location: str = ""
    employees: str = ""
    revenue: str = ""
    tech_stack: str = ""

    # Qualification
    score: Optional[int] = None
    status: LeadStatus = LeadStatus.NEW

    # Scraping Metadata
    source: Optional[str] = None
    confidence: Optional[float] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class LeadScoreRecord(CamelModel):
    lead_id: str
    score: ScoreResult
    timestamp: datetime = Field(default_factory=utcnow)


class EnrichedRecord(CamelModel):
    id: str = Field(default_factory=lambda: new_id("enriched"))
    company: str
    data: Dict[str, Any]
    timestamp: datetime = Field(default_factory=utcnow)
