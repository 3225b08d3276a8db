from fastapi import APIRouter

from app.api.v1.endpoints import court_filings, alerts, scraping_logs

api_router = APIRouter()

api_router.include_router(court_filings.router, prefix="/court-filings", tags=["court-filings"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
api_router.include_router(scraping_logs.router, prefix="/scraping-logs", tags=["scraping-logs"])
