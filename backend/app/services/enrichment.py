"""
Company enrichment.

``EnrichmentProvider`` is the seam for third-party enrichment APIs. Two
implementations ship: ``DemoEnrichmentProvider`` fabricates a plausible
profile without touching the network, ``WebsiteEnrichmentProvider`` reads the
company's homepage and falls back to the demo profile when that fails.
``EnrichmentService`` adds a freshness cache on top of either.
"""

import asyncio
import logging
import re
import ssl
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Optional

import aiohttp
from bs4 import BeautifulSoup
from textblob import TextBlob

from app.core.database import InMemoryDatabase
from app.models.base import utcnow
from app.models.contacts import Contact
from app.schemas.enrichment import (
    CompanyProfile,
    FinancialData,
    NewsItem,
    RealTimeSignals,
    SocialMedia,
)

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def domain_from_website(website: str) -> str:
    domain = re.sub(r"^https?://", "", (website or "").strip().lower())
    domain = domain.split("/")[0]
    return domain[4:] if domain.startswith("www.") else domain


def slugify(company: str, separator: str = "-") -> str:
    return re.sub(r"\s+", separator, company.strip().lower())


def contact_role(local_part: str) -> str:
    """Guess a contact's role from the local part of a role mailbox."""
    local_part = local_part.lower()
    if "support" in local_part:
        return "Support Manager"
    if "sales" in local_part:
        return "Sales Representative"
    if "partnerships" in local_part or "partners" in local_part:
        return "Partnerships Manager"
    if "api" in local_part or "developer" in local_part:
        return "Developer Relations"
    if any(word in local_part for word in ("info", "contact", "feedback")):
        return "General Contact"
    return "Contact"


def contact_from_email(email: str) -> Contact:
    local_part = email.split("@")[0]
    if "." in local_part:
        parts = local_part.split(".")
        name = f"{parts[0].title()} {parts[-1].title()}"
    else:
        name = local_part.title()
    return Contact(name=name.strip(), title=contact_role(local_part), email=email)


class EnrichmentProvider(ABC):
    @abstractmethod
    async def enrich(self, company: str, website: str) -> CompanyProfile:
        """Build a profile for a company."""


class DemoEnrichmentProvider(EnrichmentProvider):
    """Deterministic stand-in for Clearbit/Apollo/Crunchbase style lookups."""

    async def enrich(self, company: str, website: str) -> CompanyProfile:
        domain = domain_from_website(website) or f"{slugify(company, '')}.com"
        name = company or domain
        return CompanyProfile(
            company=name,
            website=website,
            domain=domain,
            description=(
                f"{name} is a leading provider of innovative solutions in their industry, "
                "focusing on cutting-edge technology and exceptional customer service."
            ),
            industry="Software Development",
            founded="2018",
            employees="150-200",
            revenue="$15M-$25M",
            location="San Francisco, CA",
            technologies=["React", "Node.js", "Python", "AWS", "Docker", "Kubernetes"],
            social_media=SocialMedia(
                linkedin=f"https://linkedin.com/company/{slugify(name)}",
                twitter=f"https://twitter.com/{slugify(name, '')}",
            ),
            key_contacts=[
                Contact(
                    name="Sarah Chen",
                    title="CEO & Founder",
                    email=f"sarah.chen@{domain}",
                    linkedin="https://linkedin.com/in/sarahchen",
                ),
                Contact(
                    name="Michael Rodriguez",
                    title="VP of Sales",
                    email=f"michael.r@{domain}",
                    linkedin="https://linkedin.com/in/mrodriguez",
                ),
                Contact(
                    name="Emily Watson",
                    title="Head of Marketing",
                    email=f"emily.watson@{domain}",
                    linkedin="https://linkedin.com/in/emilywatson",
                ),
            ],
            recent_news=[
                NewsItem(
                    title=f"{name} Raises $10M Series A",
                    date="7 days ago",
                    source="TechCrunch",
                    url="https://techcrunch.com/example",
                ),
                NewsItem(
                    title=f"{name} Launches New AI Platform",
                    date="14 days ago",
                    source="Business Wire",
                    url="https://businesswire.com/example",
                ),
            ],
            financial_data=FinancialData(
                funding="$10M Series A",
                investors=["Sequoia Capital", "Andreessen Horowitz", "First Round Capital"],
                valuation="$50M",
            ),
            real_time_signals=RealTimeSignals(
                website_traffic=75000,
                social_mentions=300,
                job_postings=12,
                tech_stack_changes=["Added Kubernetes", "Migrated to AWS", "Implemented GraphQL"],
            ),
            quality_score=0.7,
            method="demo_data",
        )


class WebsiteEnrichmentProvider(EnrichmentProvider):
    """Scrapes the company homepage; any fetch failure falls back to demo data."""

    def __init__(self, timeout_seconds: int = 20, fallback: Optional[EnrichmentProvider] = None):
        self.timeout_seconds = timeout_seconds
        self.fallback = fallback or DemoEnrichmentProvider()

    async def enrich(self, company: str, website: str) -> CompanyProfile:
        domain = domain_from_website(website)
        if not domain:
            return await self.fallback.enrich(company, website)

        url = f"https://{domain}"
        # Plenty of small-company sites have broken certificate chains
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE

        connector = aiohttp.TCPConnector(ssl=ssl_context)
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(connector=connector, timeout=timeout) as session:
                async with session.get(url, headers=REQUEST_HEADERS) as response:
                    if response.status != 200:
                        logger.warning("HTTP %s for %s, using fallback data", response.status, domain)
                        return await self.fallback.enrich(company, website)
                    html = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.warning("Scraping error for %s: %s", domain, e)
            return await self.fallback.enrich(company, website)

        return self.parse_homepage(company, website, domain, html)

    def parse_homepage(self, company: str, website: str, domain: str, html: str) -> CompanyProfile:
        soup = BeautifulSoup(html, "html.parser")

        description = ""
        meta_desc = soup.find("meta", attrs={"name": "description"})
        if meta_desc and meta_desc.get("content"):
            description = meta_desc["content"][:500]
        elif soup.title:
            description = soup.title.get_text(strip=True)[:200]

        text_content = soup.get_text(" ")
        domain_name = domain.split(".")[0]
        emails = sorted(
            {email for email in EMAIL_RE.findall(text_content) if domain_name in email.lower()}
        )[:5]
        phones = sorted({phone.strip() for phone in PHONE_RE.findall(text_content)})[:3]

        sentiment = TextBlob(description).sentiment.polarity if description else 0.0

        quality = 0.2
        if description:
            quality += 0.3
        if emails:
            quality += 0.3
        if phones:
            quality += 0.2

        return CompanyProfile(
            company=company or domain,
            website=website,
            domain=domain,
            description=description,
            key_contacts=[contact_from_email(email) for email in emails],
            phones=phones,
            sentiment_score=round(sentiment, 3),
            quality_score=round(min(quality, 1.0), 2),
            method="website_scrape",
            source_url=f"https://{domain}",
        )


class EnrichmentService:
    """Serves cached profiles younger than ``max_age``; otherwise enriches and caches."""

    def __init__(
        self,
        provider: EnrichmentProvider,
        db: InMemoryDatabase,
        max_age: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.provider = provider
        self.db = db
        self.max_age = max_age
        self.clock = clock

    async def enrich_company(self, company: str, website: str) -> CompanyProfile:
        cache_key = company or domain_from_website(website)
        cached = await self.db.get_enriched_data(cache_key)
        if cached and self.clock() - cached.timestamp < self.max_age:
            logger.debug("Enrichment cache hit for %s", cache_key)
            return CompanyProfile.model_validate(cached.data)

        profile = await self.provider.enrich(company, website)
        await self.db.save_enriched_data(cache_key, profile.model_dump())
        logger.info("Enriched %s via %s", cache_key, profile.method)
        return profile


def build_enrichment_provider(name: str, timeout_seconds: int = 20) -> EnrichmentProvider:
    if name == "website":
        return WebsiteEnrichmentProvider(timeout_seconds=timeout_seconds)
    if name != "demo":
        logger.warning("Unknown enrichment provider %r, using demo", name)
    return DemoEnrichmentProvider()
