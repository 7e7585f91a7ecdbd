"""
Heuristic lead scoring.

Maps the free-text attributes of a lead to six factor scores, a weighted
overall score and a set of derived predictions (priority, conversion
probability, deal size, time to close, narrative recommendations).

Nothing here is trained: every number comes from the fixed tables below.
The only non-arithmetic part is the deal-size pick and the similar-company
sample, both drawn from a ``random.Random`` seeded either explicitly or from
a digest of the lead, so the same lead always gets the same result.
"""

import hashlib
import logging
import math
import random
import re
from typing import List, Optional, Tuple

from app.schemas.scoring import LeadInput, MarketTrends, Priority, ScoreFactors, ScoreResult

logger = logging.getLogger(__name__)

COMPANY_SIZE_RANGES = {
    "1-10": 45,
    "11-50": 72,
    "51-200": 88,
    "201-1000": 95,
    "1000+": 85,
}
DEFAULT_COMPANY_SIZE_SCORE = 60

# First match wins, order matters
INDUSTRY_SCORES: List[Tuple[Tuple[str, ...], int]] = [
    (("software", "saas"), 92),
    (("fintech", "financial"), 88),
    (("healthcare", "medical"), 85),
    (("ecommerce", "retail"), 78),
    (("ai", "machine learning"), 95),
    (("manufacturing",), 65),
]
DEFAULT_INDUSTRY_SCORE = 70

TECH_STACK_POINTS = {
    "react": 15,
    "node.js": 12,
    "python": 18,
    "aws": 20,
    "docker": 10,
    "kubernetes": 15,
    "ai": 25,
    "machine learning": 22,
    "blockchain": 8,
}
BASE_TECHNOLOGY_SCORE = 50

REVENUE_SCORES: List[Tuple[Tuple[str, ...], int]] = [
    (("$100m", "$1b"), 95),
    (("$50m",), 92),
    (("$25m",), 88),
    (("$10m",), 85),
    (("$5m",), 80),
    (("$1m",), 75),
]
DEFAULT_FUNDING_SCORE = 70
EMPTY_FUNDING_SCORE = 60

GROWTH_YEAR_TOKENS = ("2020", "2021", "2022", "2023")

FACTOR_WEIGHTS = {
    "company_size": 0.20,
    "industry": 0.25,
    "technology": 0.15,
    "funding": 0.15,
    "growth": 0.15,
    "engagement": 0.10,
}

# (growth, competitive, demand), probed in this order
MARKET_TRENDS = {
    "software": (85, 78, 92),
    "fintech": (88, 85, 89),
    "healthcare": (75, 65, 88),
    "ecommerce": (70, 90, 82),
    "ai": (95, 88, 94),
}
DEFAULT_MARKET_TREND = (65, 70, 70)

DEAL_SIZES = {
    "small": ("$5K", "$15K", "$25K"),
    "medium": ("$50K", "$100K", "$150K"),
    "large": ("$250K", "$500K", "$750K"),
    "enterprise": ("$1M", "$2M", "$5M"),
}

SIMILAR_COMPANIES = (
    "TechFlow Solutions",
    "DataVision Analytics",
    "CloudScale Systems",
    "InnovateTech Corp",
    "NextGen Software",
    "Digital Transform Co",
    "SmartData Inc",
    "FutureTech Solutions",
    "AgileCloud Systems",
)

_RANGE_TOKEN = re.compile(r"\d+\s*-\s*\d+|\d+\s*\+")
_INTEGER = re.compile(r"\d+")


def _clamp(value: float, low: int = 0, high: int = 100) -> int:
    return int(max(low, min(high, value)))


def score_company_size(employees: str) -> int:
    """Exact range token first, then the first integer, then the default."""
    text = (employees or "").replace(",", "")

    for token in _RANGE_TOKEN.findall(text):
        normalized = re.sub(r"\s+", "", token)
        if normalized in COMPANY_SIZE_RANGES:
            return COMPANY_SIZE_RANGES[normalized]

    match = _INTEGER.search(text)
    if not match:
        return DEFAULT_COMPANY_SIZE_SCORE

    size = int(match.group())
    if size < 10:
        return 45
    if size < 50:
        return 72
    if size < 200:
        return 88
    if size < 1000:
        return 95
    return 85


def score_industry(industry: str) -> int:
    industry_lower = (industry or "").lower()
    for keywords, score in INDUSTRY_SCORES:
        if any(keyword in industry_lower for keyword in keywords):
            return score
    return DEFAULT_INDUSTRY_SCORE


def score_technology(tech_stack: str) -> int:
    if not tech_stack:
        return BASE_TECHNOLOGY_SCORE

    tech_lower = tech_stack.lower()
    score = BASE_TECHNOLOGY_SCORE
    for tech, points in TECH_STACK_POINTS.items():
        if tech in tech_lower:
            score += points
    return _clamp(score)


def score_funding(revenue: str) -> int:
    if not revenue:
        return EMPTY_FUNDING_SCORE

    # Earliest keyword in the text wins, so a range scores by its lower bound
    revenue_lower = revenue.lower()
    hits = [
        (revenue_lower.find(keyword), rank, score)
        for rank, (keywords, score) in enumerate(REVENUE_SCORES)
        for keyword in keywords
        if keyword in revenue_lower
    ]
    if not hits:
        return DEFAULT_FUNDING_SCORE
    return min(hits)[2]


def score_growth(lead: LeadInput) -> int:
    score = 70
    if any(year in lead.company for year in GROWTH_YEAR_TOKENS):
        score += 15

    tech_lower = lead.tech_stack.lower()
    if "cloud" in tech_lower or "aws" in tech_lower or "kubernetes" in tech_lower:
        score += 10

    industry_lower = lead.industry.lower()
    if "ai" in industry_lower or "fintech" in industry_lower:
        score += 8

    return _clamp(score)


def score_engagement(website: str, tech_stack: str) -> int:
    score = 60
    website_lower = (website or "").lower()
    if ".com" in website_lower or ".io" in website_lower:
        score += 10

    tech_lower = (tech_stack or "").lower()
    if "react" in tech_lower or "node" in tech_lower:
        score += 15
    if "api" in tech_lower or "rest" in tech_lower:
        score += 7

    return _clamp(score)


def weighted_overall(factors: ScoreFactors) -> int:
    total = sum(getattr(factors, name) * weight for name, weight in FACTOR_WEIGHTS.items())
    # Round half up
    return int(math.floor(total + 0.5))


def market_trends_for(industry: str) -> MarketTrends:
    industry_lower = (industry or "").lower()
    growth, competitive, demand = next(
        (trend for key, trend in MARKET_TRENDS.items() if key in industry_lower),
        DEFAULT_MARKET_TREND,
    )
    return MarketTrends(industry_growth=growth, competitive_index=competitive, demand_score=demand)


def determine_priority(overall: int, trends: MarketTrends) -> Priority:
    adjusted = overall + (trends.industry_growth + trends.demand_score) / 20
    if adjusted >= 80:
        return "high"
    if adjusted >= 60:
        return "medium"
    return "low"


def conversion_probability(overall: int) -> int:
    return max(5, min(95, 25 + math.floor((overall - 50) * 0.8)))


def deal_size_bracket(company_size: int) -> str:
    if company_size >= 85:
        return "enterprise"
    if company_size >= 75:
        return "large"
    if company_size >= 65:
        return "medium"
    return "small"


def time_to_close(overall: int) -> str:
    if overall > 80:
        return "2-3 months"
    if overall > 60:
        return "3-6 months"
    return "6-12 months"


def recommendation_for(overall: int, industry: str) -> str:
    if overall >= 85:
        return (
            f"Exceptional lead with {overall}% match score. This {industry or 'target'} company shows "
            "strong indicators for immediate engagement. Recommend priority outreach with "
            "executive-level messaging and custom demo preparation."
        )
    if overall >= 70:
        return (
            f"Strong lead candidate with {overall}% match score. Good alignment with our target "
            "profile. Recommend personalized outreach within 24-48 hours with industry-specific "
            "value proposition."
        )
    if overall >= 55:
        return (
            f"Moderate potential lead with {overall}% match score. Some alignment but may require "
            "longer nurturing cycle. Recommend educational content approach and relationship building."
        )
    return (
        f"Lower priority lead with {overall}% match score. Limited alignment with ideal customer "
        "profile. Consider for long-term nurturing campaign or deprioritize for higher-value prospects."
    )


def action_recommendations(overall: int, factors: ScoreFactors) -> List[str]:
    if overall > 80:
        actions = [
            "Schedule demo within 48 hours - high conversion probability",
            "Prepare enterprise-level proposal with custom pricing",
        ]
    elif overall > 60:
        actions = [
            "Send personalized case study relevant to their industry",
            "Offer free trial or pilot program",
        ]
    else:
        actions = [
            "Nurture with educational content for 2-3 months",
            "Focus on building relationship before pitching",
        ]

    if factors.technology > 80:
        actions.append("Highlight technical integration capabilities")
    if factors.growth > 80:
        actions.append("Emphasize scalability and growth support features")
    return actions


def risk_factors(lead: LeadInput, factors: ScoreFactors) -> List[str]:
    risks = []
    if factors.company_size < 60:
        risks.append("Small company size may indicate budget constraints")
    if factors.technology < 60:
        risks.append("Limited technical infrastructure may slow implementation")
    if factors.engagement < 60:
        risks.append("Low digital engagement suggests longer sales cycle")
    if "manufacturing" in lead.industry.lower():
        risks.append("Traditional industry may have longer decision-making process")
    return risks


def seed_for(lead: LeadInput) -> int:
    """Stable seed derived from the lead's own attributes."""
    key = "|".join(
        value.strip().lower()
        for value in (lead.company, lead.website, lead.employees, lead.revenue, lead.industry, lead.tech_stack)
    )
    return int.from_bytes(hashlib.sha256(key.encode("utf-8")).digest()[:8], "big")


class LeadScorer:
    """
    Computes a ``ScoreResult`` for a lead.

    Args:
        seed: Fixed seed for the deal-size pick and similar-company sample.
            When omitted each lead seeds its own generator from its content.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def score(self, lead: LeadInput) -> ScoreResult:
        factors = ScoreFactors(
            company_size=score_company_size(lead.employees),
            industry=score_industry(lead.industry),
            technology=score_technology(lead.tech_stack),
            funding=score_funding(lead.revenue),
            growth=score_growth(lead),
            engagement=score_engagement(lead.website, lead.tech_stack),
        )
        overall = weighted_overall(factors)
        trends = market_trends_for(lead.industry)
        rng = random.Random(self.seed if self.seed is not None else seed_for(lead))

        result = ScoreResult(
            overall=overall,
            factors=factors,
            recommendation=recommendation_for(overall, lead.industry),
            priority=determine_priority(overall, trends),
            conversion_probability=conversion_probability(overall),
            predicted_deal_size=rng.choice(DEAL_SIZES[deal_size_bracket(factors.company_size)]),
            time_to_close=time_to_close(overall),
            similar_companies=rng.sample(SIMILAR_COMPANIES, 3 + rng.randrange(2)),
            recommendations=action_recommendations(overall, factors),
            risk_factors=risk_factors(lead, factors),
            market_trends=trends,
        )
        logger.debug("Scored %r: overall=%s priority=%s", lead.company, overall, result.priority)
        return result


def score_lead(lead: LeadInput, seed: Optional[int] = None) -> ScoreResult:
    return LeadScorer(seed=seed).score(lead)
