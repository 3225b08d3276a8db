import requests
from typing import List
from loguru import logger

from app.core.config import settings
from app.core.court_feeds import is_court_list_document
from app.core.exceptions import FeedFetchError
from app.utils.link_extractor import Candidate, extract_links

ONTARIO_COURTS_BASE_URL = "https://www.ontariocourts.ca/"

def parse_court_bulletin(html: str) -> List[Candidate]:
    """
    Parse the Superior Court weekly court-list page into unique PDF / court-list links.
    """
    return extract_links(html, ONTARIO_COURTS_BASE_URL, link_filter=is_court_list_document)

def fetch_ontario_court_bulletins(url: str = None) -> List[Candidate]:
    """
    Download the weekly court-list page and return its court-list documents.
    """
    url = url or settings.ONTARIO_BULLETIN_URL
    try:
        logger.info(f"Fetching Ontario court bulletins from {url}")
        response = requests.get(
            url,
            headers={'User-Agent': settings.COURT_FEED_USER_AGENT},
            timeout=settings.COURT_FEED_TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Error making request: {e}")
        raise FeedFetchError(f"Failed to fetch bulletin: {e}") from e

    if not response.ok:
        raise FeedFetchError(f"Failed to fetch bulletin: {response.status_code} {response.reason}")

    filings = parse_court_bulletin(response.text)
    logger.info(f"Fetched {len(filings)} court-list documents")
    return filings

if __name__ == "__main__":
    for filing in fetch_ontario_court_bulletins():
        print(f"{filing.title}\t{filing.url}")
