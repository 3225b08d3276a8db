import asyncio
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from loguru import logger

from app.core.database import get_db
from app.core.exceptions import UnknownRegionError
from app.schemas.court_filing import CourtFiling
from app.schemas.court_scrape import CourtScrapeRequest, CourtScrapeResponse
from app.services.court_filing_service import CourtFilingService
from app.services.court_scrape_trigger import is_authorized, scrape_court_filings
from app.utils.feed_fetcher import CourtFeedFetcher, FeedFetcher

router = APIRouter()

def get_feed_fetcher() -> FeedFetcher:
    return CourtFeedFetcher()

@router.get("/", response_model=List[CourtFiling], operation_id="get_court_filings")
def get_court_filings(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """Get stored court filings, newest first"""
    service = CourtFilingService(db)
    return service.get_all_court_filings(skip=skip, limit=limit)

@router.get("/{filing_id}", response_model=CourtFiling, operation_id="get_court_filing_by_id")
def get_court_filing(
    filing_id: str,
    db: Session = Depends(get_db)
):
    """Get a specific court filing by id"""
    service = CourtFilingService(db)
    filing = service.get_court_filing(filing_id)
    if not filing:
        raise HTTPException(status_code=404, detail="Court filing not found")
    return filing

@router.post(
    "/scrape",
    response_model=CourtScrapeResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    operation_id="scrape_court_filings",
)
def scrape_court_filings_endpoint(
    request: CourtScrapeRequest,
    db: Session = Depends(get_db),
    fetcher: FeedFetcher = Depends(get_feed_fetcher),
):
    """
    Scrape the region's court feeds, store new filings and generate alerts
    """
    if not is_authorized(request.secret):
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        # sync endpoint: FastAPI runs the pass, session work included, in its threadpool
        result = asyncio.run(scrape_court_filings(db, region=request.region, fetcher=fetcher))
    except UnknownRegionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Court scraping error: {str(e)}")
        logger.exception("Full traceback:")
        raise HTTPException(status_code=500, detail=f"Court scraping failed: {e}")

    return result.to_response()
