# app/services/lead_service.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.core.database import InMemoryDatabase, LeadFilters, LeadPage
from app.core.exceptions import NotFoundError
from app.models.leads import Lead, LeadScoreRecord, LeadStatus
from app.schemas.scoring import LeadInput, ScoreResult
from app.services.scoring import LeadScorer

logger = logging.getLogger(__name__)

SCRAPE_SOURCES = ("apollo", "zoominfo", "linkedin", "crunchbase")


class LeadSource(ABC):
    @abstractmethod
    async def fetch(self, source: str, params: Dict[str, Any]) -> List[Lead]:
        """Leads matching ``params`` from one upstream provider."""


class DemoLeadSource(LeadSource):
    """Two fabricated leads per provider, shaped by the search params."""

    async def fetch(self, source: str, params: Dict[str, Any]) -> List[Lead]:
        brand = source.capitalize()
        return [
            Lead(
                company=f"{brand} Corp",
                website=f"https://{source}corp.com",
                industry=params.get("industry") or "Software Development",
                location=params.get("location") or "San Francisco, CA",
                employees="50-200",
                revenue="$5M-$10M",
                confidence=92.0,
                source=source,
            ),
            Lead(
                company=f"{brand} Solutions",
                website=f"https://{source}solutions.io",
                industry=params.get("industry") or "FinTech",
                location=params.get("location") or "New York, NY",
                employees="100-500",
                revenue="$10M-$50M",
                confidence=84.0,
                source=source,
            ),
        ]


def deduplicate_leads(leads: List[Lead]) -> List[Lead]:
    """Keep the first lead for each (company, website) pair."""
    seen = set()
    unique = []
    for lead in leads:
        key = (lead.company.lower(), lead.website)
        if key in seen:
            continue
        seen.add(key)
        unique.append(lead)
    return unique


def lead_input(lead: Lead) -> LeadInput:
    return LeadInput(
        company=lead.company,
        website=lead.website,
        employees=lead.employees,
        revenue=lead.revenue,
        industry=lead.industry,
        tech_stack=lead.tech_stack,
    )


class LeadService:
    def __init__(self, db: InMemoryDatabase, scorer: LeadScorer, source: Optional[LeadSource] = None):
        self.db = db
        self.scorer = scorer
        self.source = source or DemoLeadSource()

    async def get_leads(self, page: int = 1, limit: int = 10, filters: Optional[LeadFilters] = None) -> LeadPage:
        return await self.db.get_leads(page=page, limit=limit, filters=filters)

    async def get_lead(self, lead_id: str) -> Lead:
        lead = await self.db.get_lead(lead_id)
        if lead is None:
            raise NotFoundError("Lead not found")
        return lead

    async def create_lead(self, lead: Lead) -> Lead:
        lead = await self.db.create_lead(lead)

        if lead.company and lead.industry:
            try:
                await self.score_and_record(lead_input(lead), lead.id)
            except Exception:
                logger.exception("Auto-scoring failed for lead %s", lead.id)
            lead = await self.db.get_lead(lead.id) or lead

        return lead

    async def update_lead(self, lead_id: str, updates: Dict[str, Any]) -> Lead:
        lead = await self.db.update_lead(lead_id, updates)
        if lead is None:
            raise NotFoundError("Lead not found")
        return lead

    async def delete_lead(self, lead_id: str) -> None:
        if not await self.db.delete_lead(lead_id):
            raise NotFoundError("Lead not found")

    async def search_leads(self, query: str) -> List[Lead]:
        return await self.db.search_leads(query)

    async def get_lead_scores(self, lead_id: str) -> List[LeadScoreRecord]:
        await self.get_lead(lead_id)
        return await self.db.get_lead_scores(lead_id)

    async def get_lead_stats(self, time_range: str = "24h") -> Dict[str, Any]:
        return await self.db.get_lead_stats(time_range)

    async def score_and_record(self, lead: LeadInput, lead_id: str) -> ScoreResult:
        score = self.scorer.score(lead)
        await self.db.save_lead_score(LeadScoreRecord(lead_id=lead_id, score=score))
        return score

    async def scrape_leads(self, params: Dict[str, Any]) -> List[Lead]:
        fetched: List[Lead] = []
        for source in SCRAPE_SOURCES:
            fetched.extend(await self.source.fetch(source, params))

        saved = []
        for lead in deduplicate_leads(fetched):
            saved.append(await self.create_lead(lead.model_copy(update={"status": LeadStatus.NEW})))

        logger.info("Scraped %d leads (%d after de-duplication)", len(fetched), len(saved))
        return saved
