# app/api/routes/leads.py
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_enrichment_service, get_lead_service, get_market_data, require_user
from app.core.database import LeadFilters
from app.core.exceptions import ValidationError
from app.models.base import utcnow
from app.models.leads import Lead, LeadStatus
from app.schemas.enrichment import EnrichRequest
from app.schemas.leads import (
    EnrichResponse,
    LeadCreate,
    LeadListResponse,
    LeadResponse,
    LeadScoresResponse,
    LeadsResponse,
    LeadUpdate,
    ScoreResponse,
    ScrapeRequest,
    StatsResponse,
)
from app.schemas.scoring import LeadInput, ScoreRequest
from app.services.enrichment import EnrichmentService
from app.services.lead_service import LeadService
from app.services.market_data import MarketDataProvider

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("", response_model=LeadListResponse, dependencies=[Depends(require_user)])
async def list_leads(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    industry: Optional[str] = None,
    location: Optional[str] = None,
    score_min: Optional[int] = Query(None, alias="scoreMin"),
    status: Optional[LeadStatus] = None,
    service: LeadService = Depends(get_lead_service),
):
    filters = LeadFilters(industry=industry, location=location, score_min=score_min, status=status)
    result = await service.get_leads(page=page, limit=limit, filters=filters)
    return LeadListResponse(leads=result.leads, total=result.total, page=result.page, limit=result.limit)


@router.post("", response_model=LeadResponse, dependencies=[Depends(require_user)])
async def create_lead(body: LeadCreate, service: LeadService = Depends(get_lead_service)):
    lead = await service.create_lead(Lead(**body.model_dump()))
    return LeadResponse(data=lead)


@router.get("/search", response_model=List[Lead], dependencies=[Depends(require_user)])
async def search_leads(q: str = Query(..., min_length=1), service: LeadService = Depends(get_lead_service)):
    return await service.search_leads(q)


@router.get("/stats", response_model=StatsResponse, dependencies=[Depends(require_user)])
async def lead_stats(
    time_range: str = Query("24h", alias="timeRange"),
    service: LeadService = Depends(get_lead_service),
):
    return StatsResponse(data=await service.get_lead_stats(time_range))


@router.post("/scrape", response_model=LeadsResponse, dependencies=[Depends(require_user)])
async def scrape_leads(body: ScrapeRequest, service: LeadService = Depends(get_lead_service)):
    leads = await service.scrape_leads(body.model_dump(exclude_none=True))
    return LeadsResponse(leads=leads, timestamp=utcnow())


@router.post("/score", response_model=ScoreResponse)
async def score_lead(
    body: ScoreRequest,
    service: LeadService = Depends(get_lead_service),
    market: MarketDataProvider = Depends(get_market_data),
):
    lead_id = body.lead_id or f"lead_{int(time.time() * 1000)}"
    market_data = await market.get_market_data(body.industry)
    score = await service.score_and_record(LeadInput(**body.model_dump(exclude={"lead_id"})), lead_id)
    return ScoreResponse(lead_id=lead_id, score=score, market_data=market_data, timestamp=utcnow())


@router.post("/enrich", response_model=EnrichResponse)
async def enrich_company(body: EnrichRequest, service: EnrichmentService = Depends(get_enrichment_service)):
    company, website = body.company.strip(), body.website.strip()
    if not company and not website:
        raise ValidationError("Company name or website is required")
    profile = await service.enrich_company(company, website)
    return EnrichResponse(data=profile, timestamp=utcnow())


@router.get("/{lead_id}", response_model=LeadResponse, dependencies=[Depends(require_user)])
async def get_lead(lead_id: str, service: LeadService = Depends(get_lead_service)):
    return LeadResponse(data=await service.get_lead(lead_id))


@router.patch("/{lead_id}", response_model=LeadResponse, dependencies=[Depends(require_user)])
async def update_lead(lead_id: str, body: LeadUpdate, service: LeadService = Depends(get_lead_service)):
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    return LeadResponse(data=await service.update_lead(lead_id, updates))


@router.delete("/{lead_id}", dependencies=[Depends(require_user)])
async def delete_lead(lead_id: str, service: LeadService = Depends(get_lead_service)):
    await service.delete_lead(lead_id)
    return {"success": True}


@router.get("/{lead_id}/scores", response_model=LeadScoresResponse, dependencies=[Depends(require_user)])
async def lead_scores(lead_id: str, service: LeadService = Depends(get_lead_service)):
    return LeadScoresResponse(data=await service.get_lead_scores(lead_id))
