from typing import List, Optional, Union
from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Court Filing Alert API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "API for scraping Ontario court filings and generating real estate opportunity alerts"
    API_V1_STR: str = "/api/v1"

    # CORS
    # Set to True to allow requests from any origin (useful for development)
    ALLOW_ALL_ORIGINS: bool = True

    BACKEND_CORS_ORIGINS: List[Union[str, AnyHttpUrl]] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Database
    # DATABASE_URL wins when set, otherwise the DB_* parts build a PostgreSQL URL
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "court_alerts"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"

    # Shared secret checked by the scrape trigger; empty rejects every request
    SCRAPER_SECRET: str = ""

    # Court feeds
    COURT_FEED_TIMEOUT_SECONDS: float = 30.0
    COURT_FEED_USER_AGENT: str = "AgentRadar/1.0 (Real Estate Intelligence Platform; +https://agentradar.app/bot)"
    MAX_CANDIDATES_PER_SOURCE: int = 5
    CANDIDATE_DELAY_SECONDS: float = 1.0
    ONTARIO_BULLETIN_URL: str = "https://www.ontariocourts.ca/scj/civil/weekly-court-lists/"

    # "deterministic" scores from the matched rules, "random" draws within the same bounds
    OPPORTUNITY_SCORING: str = "deterministic"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "logs/app.log"

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"  # Allow extra fields in the .env file

settings = Settings()
