# app/core/database.py
import asyncio
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from app.models.base import utcnow
from app.models.leads import EnrichedRecord, Lead, LeadScoreRecord, LeadStatus

TIME_RANGES = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}


@dataclass
class LeadFilters:
    industry: Optional[str] = None
    location: Optional[str] = None
    score_min: Optional[int] = None
    status: Optional[LeadStatus] = None

    def matches(self, lead: Lead) -> bool:
        if self.industry and self.industry.lower() not in lead.industry.lower():
            return False
        if self.location and self.location.lower() not in lead.location.lower():
            return False
        if self.score_min is not None and (lead.score or 0) < self.score_min:
            return False
        if self.status and lead.status != self.status:
            return False
        return True


@dataclass
class LeadPage:
    leads: List[Lead]
    total: int
    page: int
    limit: int


class InMemoryDatabase:
    """Leads, score history and enrichment cache, held in process memory."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock
        self._leads: Dict[str, Lead] = {}
        self._scores: Dict[str, List[LeadScoreRecord]] = {}
        self._enriched: List[EnrichedRecord] = []
        self._lock = asyncio.Lock()

    # Leads

    async def get_leads(self, page: int = 1, limit: int = 10, filters: Optional[LeadFilters] = None) -> LeadPage:
        leads = list(self._leads.values())
        if filters:
            leads = [lead for lead in leads if filters.matches(lead)]
        leads.sort(key=lambda lead: lead.updated_at, reverse=True)

        start = (page - 1) * limit
        return LeadPage(
            leads=[lead.model_copy() for lead in leads[start:start + limit]],
            total=len(leads),
            page=page,
            limit=limit,
        )

    async def get_lead(self, lead_id: str) -> Optional[Lead]:
        lead = self._leads.get(lead_id)
        return lead.model_copy() if lead else None

    async def create_lead(self, lead: Lead) -> Lead:
        now = self.clock()
        stored = lead.model_copy(update={"created_at": now, "updated_at": now})
        async with self._lock:
            self._leads[stored.id] = stored
        return stored.model_copy()

    async def update_lead(self, lead_id: str, updates: Dict[str, Any]) -> Optional[Lead]:
        async with self._lock:
            lead = self._leads.get(lead_id)
            if lead is None:
                return None
            updates = {key: value for key, value in updates.items() if key not in ("id", "created_at")}
            updated = lead.model_copy(update={**updates, "updated_at": self.clock()})
            self._leads[lead_id] = updated
        return updated.model_copy()

    async def delete_lead(self, lead_id: str) -> bool:
        async with self._lock:
            self._scores.pop(lead_id, None)
            return self._leads.pop(lead_id, None) is not None

    async def search_leads(self, query: str) -> List[Lead]:
        term = query.lower()
        return [
            lead.model_copy()
            for lead in self._leads.values()
            if term in lead.company.lower()
            or term in lead.industry.lower()
            or term in lead.location.lower()
            or term in lead.website.lower()
        ]

    # Scores

    async def save_lead_score(self, record: LeadScoreRecord) -> None:
        async with self._lock:
            self._scores.setdefault(record.lead_id, []).append(record)
            lead = self._leads.get(record.lead_id)
            if lead is not None:
                lead.score = record.score.overall
                lead.updated_at = self.clock()

    async def get_lead_scores(self, lead_id: str) -> List[LeadScoreRecord]:
        return list(self._scores.get(lead_id, []))

    # Enrichment cache

    async def save_enriched_data(self, company: str, data: Dict[str, Any]) -> EnrichedRecord:
        record = EnrichedRecord(company=company, data=data, timestamp=self.clock())
        async with self._lock:
            self._enriched.append(record)
        return record

    async def get_enriched_data(self, company: str) -> Optional[EnrichedRecord]:
        key = company.lower()
        for record in reversed(self._enriched):
            if record.company.lower() == key:
                return record
        return None

    # Reporting

    async def get_lead_stats(self, time_range: str = "24h") -> Dict[str, Any]:
        now = self.clock()
        start = now - TIME_RANGES.get(time_range, TIME_RANGES["24h"])
        leads = [lead for lead in self._leads.values() if lead.created_at >= start]

        total = len(leads)
        qualified = sum(1 for lead in leads if (lead.score or 0) >= 70)
        converted = sum(1 for lead in leads if lead.status == LeadStatus.CONVERTED)
        avg_score = sum(lead.score or 0 for lead in leads) / (total or 1)

        return {
            "totalLeads": total,
            "qualifiedLeads": qualified,
            "convertedLeads": converted,
            "conversionRate": (converted / total) * 100 if total else 0,
            "avgScore": round(avg_score, 1),
            "industryBreakdown": dict(Counter(lead.industry for lead in leads)),
            "timeRange": time_range,
            "generatedAt": now.isoformat(),
        }

    async def seed_demo_leads(self) -> None:
        now = self.clock()
        demo = [
            Lead(
                id="lead_1",
                company="TechFlow Solutions",
                website="https://techflow.com",
                industry="Software Development",
                location="San Francisco, CA",
                employees="50-200",
                revenue="$5M-$10M",
                score=87,
                status=LeadStatus.QUALIFIED,
                created_at=now - timedelta(hours=24),
                updated_at=now,
            ),
            Lead(
                id="lead_2",
                company="DataVision Analytics",
                website="https://datavision.io",
                industry="Data Analytics",
                location="Austin, TX",
                employees="25-50",
                revenue="$1M-$5M",
                score=73,
                status=LeadStatus.NEW,
                created_at=now - timedelta(hours=12),
                updated_at=now,
            ),
            Lead(
                id="lead_3",
                company="CloudScale Systems",
                website="https://cloudscale.net",
                industry="Cloud Services",
                location="Seattle, WA",
                employees="100-500",
                revenue="$10M-$50M",
                score=91,
                status=LeadStatus.CONTACTED,
                created_at=now - timedelta(hours=6),
                updated_at=now,
            ),
        ]
        async with self._lock:
            for lead in demo:
                self._leads.setdefault(lead.id, lead)
