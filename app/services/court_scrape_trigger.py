import secrets
from typing import Optional
from loguru import logger
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.court_feeds import get_court_feeds
from app.services.alert_service import AlertService
from app.services.court_filing_service import CourtFilingService
from app.services.court_ingestion_service import CourtIngestionService, IngestionResult
from app.services.scraping_log_service import ScrapingLogService
from app.utils.feed_fetcher import CourtFeedFetcher, FeedFetcher
from app.utils.opportunity_scoring import OpportunityScorer

def is_authorized(secret: Optional[str]) -> bool:
    """Compare a caller's secret with SCRAPER_SECRET; an unset secret authorizes nobody"""
    if not settings.SCRAPER_SECRET or not secret:
        return False
    return secrets.compare_digest(secret.encode("utf-8"), settings.SCRAPER_SECRET.encode("utf-8"))

async def scrape_court_filings(
    db: Session,
    region: str = "gta",
    fetcher: Optional[FeedFetcher] = None,
) -> IngestionResult:
    """
    Run one ingestion pass over the region's court feeds and log each feed's outcome.

    Raises UnknownRegionError when the region has no feeds configured.
    """
    feeds = get_court_feeds(region)
    logger.info(f"Starting court scraping for region: {region} ({len(feeds)} feeds)")

    service = CourtIngestionService(
        filing_store=CourtFilingService(db),
        alert_store=AlertService(db),
        fetcher=fetcher or CourtFeedFetcher(),
        max_candidates=settings.MAX_CANDIDATES_PER_SOURCE,
        candidate_delay=settings.CANDIDATE_DELAY_SECONDS,
        scorer=OpportunityScorer(settings.OPPORTUNITY_SCORING),
    )
    result = await service.run(feeds)
    ScrapingLogService(db).record_ingestion(result)
    return result
