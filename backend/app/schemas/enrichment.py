# app/schemas/enrichment.py
from typing import List, Optional

from app.models.contacts import Contact
from app.schemas.base import CamelModel


class EnrichRequest(CamelModel):
    company: str = ""
    website: str = ""


class SocialMedia(CamelModel):
    linkedin: str = ""
    twitter: str = ""


class NewsItem(CamelModel):
    title: str
    date: str
    source: str
    url: str


class FinancialData(CamelModel):
    funding: str = ""
    investors: List[str] = []
    valuation: str = ""


class RealTimeSignals(CamelModel):
    website_traffic: int = 0
    social_mentions: int = 0
    job_postings: int = 0
    tech_stack_changes: List[str] = []


class CompanyProfile(CamelModel):
    company: str
    website: str = ""
    domain: str = ""
    description: str = ""
    industry: str = ""
    founded: str = ""
    employees: str = ""
    revenue: str = ""
    location: str = ""
    technologies: List[str] = []
    social_media: SocialMedia = SocialMedia()
    key_contacts: List[Contact] = []
    phones: List[str] = []
    recent_news: List[NewsItem] = []
    financial_data: FinancialData = FinancialData()
    real_time_signals: RealTimeSignals = RealTimeSignals()
    sentiment_score: float = 0.0
    quality_score: float = 0.0
    method: str = "demo_data"
    source_url: Optional[str] = None
