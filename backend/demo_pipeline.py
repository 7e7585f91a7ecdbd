# demo_pipeline.py
import asyncio
from typing import Optional

from app.core.database import InMemoryDatabase
from app.services.enrichment import DemoEnrichmentProvider, EnrichmentService
from app.services.lead_service import LeadService
from app.services.scoring import LeadScorer


async def run_demo(industry: Optional[str] = None, seed: Optional[int] = None) -> dict:
    """Scrape -> score -> enrich walkthrough against in-memory services."""
    print("🚀 Lead Generation Demo - Scrape, Score, Enrich")
    print("=" * 65)
    print()

    db = InMemoryDatabase()
    leads = LeadService(db, LeadScorer(seed=seed))
    enrichment = EnrichmentService(DemoEnrichmentProvider(), db)

    params = {"industry": industry} if industry else {}
    print("1️⃣ Scraping leads from demo sources...")
    scraped = await leads.scrape_leads(params)
    print(f"   ✅ {len(scraped)} unique leads saved")
    print()

    print("2️⃣ Scores")
    print("-" * 40)
    for lead in sorted(scraped, key=lambda lead: lead.score or 0, reverse=True):
        history = await db.get_lead_scores(lead.id)
        latest = history[-1].score
        print(f"   • {lead.company:<24} {latest.overall:>3}  {latest.priority:<6} {latest.predicted_deal_size}")
    print()

    top = max(scraped, key=lambda lead: lead.score or 0)
    print(f"3️⃣ Enriching top lead: {top.company}")
    profile = await enrichment.enrich_company(top.company, top.website)
    print(f"   🌐 Domain: {profile.domain}")
    print(f"   👥 Key contacts: {len(profile.key_contacts)}")
    print(f"   🔧 Technologies: {', '.join(profile.technologies)}")
    print(f"   ⭐ Quality score: {profile.quality_score:.2f}")
    print()

    stats = await db.get_lead_stats("24h")
    print("📊 Summary")
    print(f"   • Total leads: {stats['totalLeads']}")
    print(f"   • Qualified (score >= 70): {stats['qualifiedLeads']}")
    print(f"   • Average score: {stats['avgScore']}")
    print()
    print("🎉 Demo completed")

    return {"leads": len(scraped), "top": top.company, "stats": stats}


if __name__ == "__main__":
    asyncio.run(run_demo())
