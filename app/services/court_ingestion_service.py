"""
Court filing ingestion.

One pass visits each configured court feed in turn: fetch, extract candidate
links, skip links already stored, store the rest as filings, classify them and
turn the relevant ones into alerts. A failing feed is recorded and the pass
moves on to the next one.
"""
import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional
from urllib.parse import urlparse

from loguru import logger

from app.core.court_feeds import CourtFeed
from app.core.exceptions import DuplicateFilingError, FeedFetchError, StoreError
from app.schemas.alert import AlertCreate, AlertStatus, AlertType, DataSource
from app.schemas.court_filing import CourtFilingCreate, CourtType
from app.services.stores import AlertStore, FilingStore
from app.utils.estate_notice_parser import parse_estate_notice, score_executor_contact
from app.utils.feed_fetcher import FeedFetcher
from app.utils.filing_classifier import Classification, classify_filing
from app.utils.link_extractor import Candidate, extract_links
from app.utils.opportunity_scoring import OpportunityScorer

DEFAULT_SUMMARY = "Automated scrape from court RSS feed"
CONTACT_CATEGORIES = (AlertType.ESTATE_SALE, AlertType.PROBATE_FILING)


class SourceState(str, Enum):
    PENDING = "PENDING"
    FETCHING = "FETCHING"
    FETCHED = "FETCHED"
    FETCH_FAILED = "FETCH_FAILED"
    EXTRACTING = "EXTRACTING"
    EXTRACTED = "EXTRACTED"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass
class SourceResult:
    source: str
    state: SourceState = SourceState.PENDING
    candidates_seen: int = 0
    skipped: int = 0
    filings_created: int = 0
    alerts_generated: int = 0
    error: Optional[str] = None


@dataclass
class IngestionResult:
    sources: List[SourceResult] = field(default_factory=list)

    @property
    def total_cases_processed(self) -> int:
        return sum(source.filings_created for source in self.sources)

    @property
    def new_alerts_generated(self) -> int:
        return sum(source.alerts_generated for source in self.sources)

    @property
    def feeds_processed(self) -> int:
        return len(self.sources)

    @property
    def errors(self) -> List[str]:
        return [f"{source.source}: {source.error}" for source in self.sources if source.error]

    def to_response(self) -> dict:
        response = {
            "success": True,
            "message": "Court scraping completed",
            "stats": {
                "totalCasesProcessed": self.total_cases_processed,
                "newAlertsGenerated": self.new_alerts_generated,
                "feedsProcessed": self.feeds_processed,
                "errors": len(self.errors),
            },
        }
        if self.errors:
            response["errors"] = self.errors
        return response


def parse_publish_date(value: Optional[str]) -> datetime:
    """Parse an RSS (RFC 822) or Atom (ISO 8601) date, falling back to now"""
    if value:
        try:
            return parsedate_to_datetime(value)
        except (TypeError, ValueError):
            pass
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Could not parse publish date: {value}")
    return datetime.now(timezone.utc)


def court_file_number(url: str) -> str:
    path = urlparse(url).path.rstrip("/")
    return path.split("/")[-1] if path else url


class CourtIngestionService:
    def __init__(
        self,
        filing_store: FilingStore,
        alert_store: AlertStore,
        fetcher: FeedFetcher,
        max_candidates: int = 5,
        candidate_delay: float = 1.0,
        scorer: Optional[OpportunityScorer] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_candidates < 0:
            raise ValueError("max_candidates must not be negative")
        self.filing_store = filing_store
        self.alert_store = alert_store
        self.fetcher = fetcher
        self.max_candidates = max_candidates
        self.candidate_delay = candidate_delay
        self.scorer = scorer or OpportunityScorer()
        self.sleep = sleep

    def build_filing(self, feed: CourtFeed, candidate: Candidate) -> CourtFilingCreate:
        publish_date = parse_publish_date(candidate.published)
        title = candidate.title or f"Court Case - {feed.court} - {publish_date.date().isoformat()}"
        return CourtFilingCreate(
            guid=candidate.guid or candidate.url,
            title=title,
            court=CourtType(feed.court),
            source=feed.name,
            publish_date=publish_date,
            case_url=candidate.url,
            summary=candidate.summary or DEFAULT_SUMMARY,
        )

    def build_alert(
        self,
        feed: CourtFeed,
        filing: CourtFilingCreate,
        filing_id: str,
        classification: Classification,
        summary: Optional[str],
    ) -> AlertCreate:
        assessment = self.scorer.assess(classification)
        description = f"New court filing detected that may relate to real estate opportunities: {filing.title}"

        if classification.category in CONTACT_CATEGORIES and summary:
            contact = parse_estate_notice(summary)
            if contact.describe():
                confidence = score_executor_contact(contact)
                description += f" ({contact.describe()}; contact confidence {confidence:.2f})"

        return AlertCreate(
            title=f"Court Filing Alert - {feed.court}",
            description=description,
            address="Various Properties",
            city=feed.city,
            province="ON",
            alert_type=classification.category,
            source=DataSource.ONTARIO_COURT_BULLETINS,
            status=AlertStatus.ACTIVE,
            priority=assessment.priority,
            opportunity_score=assessment.score,
            timeline_months=assessment.timeline_months,
            court_filing_id=filing_id,
            court_file_number=court_file_number(filing.case_url),
        )

    async def ingest_source(self, feed: CourtFeed) -> SourceResult:
        """Run one ingestion pass over a single feed; never raises for fetch or store failures"""
        result = SourceResult(source=feed.name)
        try:
            result.state = SourceState.FETCHING
            content = await self.fetcher.fetch(feed.url)
            result.state = SourceState.FETCHED

            result.state = SourceState.EXTRACTING
            candidates = extract_links(content, feed.base_url or feed.url, feed.link_filter)
            result.state = SourceState.EXTRACTED

            batch = candidates[:self.max_candidates]
            logger.info(f"Processing {len(batch)} of {len(candidates)} candidates from {feed.name}")

            for index, candidate in enumerate(batch):
                result.candidates_seen += 1
                if await self.filing_store.exists(candidate.url, candidate.guid or candidate.url):
                    logger.debug(f"Skipping known filing {candidate.url}")
                    result.skipped += 1
                    continue

                filing = self.build_filing(feed, candidate)
                try:
                    stored = await self.filing_store.create(filing)
                except DuplicateFilingError as e:
                    # stored by a concurrent pass after the existence check
                    logger.warning(f"Skipping duplicate filing {candidate.url}: {e}")
                    result.skipped += 1
                    continue
                result.filings_created += 1

                classification = classify_filing(filing.title, candidate.summary)
                await self.filing_store.mark_classified(stored.id)

                if classification.is_relevant:
                    await self.alert_store.create(
                        self.build_alert(feed, filing, stored.id, classification, candidate.summary)
                    )
                    result.alerts_generated += 1
                    logger.info(f"Generated {classification.category.value} alert for case: {filing.title}")

                # Rate limiting
                if index < len(batch) - 1:
                    await self.sleep(self.candidate_delay)

            result.state = SourceState.DONE

        except FeedFetchError as e:
            result.state = SourceState.FETCH_FAILED
            result.error = str(e)
            logger.error(f"Error fetching feed {feed.name}: {e}")
        except StoreError as e:
            result.state = SourceState.FAILED
            result.error = str(e)
            logger.error(f"Error storing records from feed {feed.name}: {e}")

        return result

    async def run(self, feeds: List[CourtFeed]) -> IngestionResult:
        """Ingest every feed in order and summarise the pass"""
        ingestion = IngestionResult()
        try:
            for feed in feeds:
                logger.info(f"Processing feed: {feed.name}")
                ingestion.sources.append(await self.ingest_source(feed))
        finally:
            await self.fetcher.close()

        logger.info(
            f"Court scraping completed. Processed: {ingestion.total_cases_processed}, "
            f"Alerts: {ingestion.new_alerts_generated}, Errors: {len(ingestion.errors)}"
        )
        return ingestion
