"""Court feed descriptors grouped by region.

Each region maps to the ordered list of sources one ingestion pass visits.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from app.core.config import settings
from app.core.exceptions import UnknownRegionError


def is_court_list_document(url: str) -> bool:
    """Weekly court-list pages link PDFs or other court-list pages"""
    return url.lower().endswith(".pdf") or "court-lists" in url


@dataclass(frozen=True)
class CourtFeed:
    """One external feed the ingestion service reads from"""
    name: str
    url: str
    court: str  # CourtType value: ONSC, ONCA, ONCJ, ONSCDC, OLT
    city: str = "Toronto"
    base_url: Optional[str] = None  # defaults to url for resolving relative links
    link_filter: Optional[Callable[[str], bool]] = None


CANLII_FEEDS = [
    CourtFeed(
        name="Ontario Superior Court of Justice",
        url="https://www.canlii.org/en/on/onsc/rss_new.xml",
        court="ONSC",
    ),
    CourtFeed(
        name="Ontario Court of Appeal",
        url="https://www.canlii.org/en/on/onca/rss_new.xml",
        court="ONCA",
    ),
    CourtFeed(
        name="Ontario Court of Justice",
        url="https://www.canlii.org/en/on/oncj/rss_new.xml",
        court="ONCJ",
    ),
]

ONTARIO_WEEKLY_COURT_LISTS = CourtFeed(
    name="Ontario Superior Court Weekly Court Lists",
    url=settings.ONTARIO_BULLETIN_URL,
    court="ONSC",
    base_url="https://www.ontariocourts.ca/",
    link_filter=is_court_list_document,
)

COURT_FEEDS_BY_REGION: Dict[str, List[CourtFeed]] = {
    "gta": CANLII_FEEDS,
    "ontario": CANLII_FEEDS + [ONTARIO_WEEKLY_COURT_LISTS],
}


def get_court_feeds(region: str) -> List[CourtFeed]:
    try:
        return list(COURT_FEEDS_BY_REGION[region.lower()])
    except KeyError:
        raise UnknownRegionError(f"No court feeds configured for region: {region}")
