from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    PROJECT_NAME: str = "SaaSquatch Leads API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    # Sessions
    SESSION_COOKIE_NAME: str = "session-token"
    SESSION_TTL_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    # Seed data (in-memory only, lost on restart)
    SEED_DEMO_USERS: bool = True
    SEED_DEMO_LEADS: bool = True

    # Scoring
    SCORING_SEED: Optional[int] = None  # None = derive seed from the lead itself

    # Enrichment
    ENRICHMENT_PROVIDER: str = "demo"  # demo | website
    ENRICHMENT_CACHE_TTL_HOURS: int = 24
    TIMEOUT_SECONDS: int = 20

    # External APIs (read, never called)
    CLEARBIT_API_KEY: Optional[str] = None
    HUNTER_IO_API_KEY: Optional[str] = None
    APOLLO_API_KEY: Optional[str] = None
    BUILTWITH_API_KEY: Optional[str] = None
    CRUNCHBASE_API_KEY: Optional[str] = None
    SIMILARWEB_API_KEY: Optional[str] = None

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Monitoring
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def session_max_age(self) -> int:
        return self.SESSION_TTL_HOURS * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()
