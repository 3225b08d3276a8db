"""Extract candidate filing links from court pages and feeds.

HTML pages yield one candidate per ``<a href>``; RSS and Atom feeds yield one
candidate per ``<item>``/``<entry>``. Candidates are deduplicated on their
absolute URL and keep the order in which they first appear.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, ParserRejectedMarkup
from loguru import logger

FEED_ROOT_PATTERN = re.compile(r"^\s*(<\?xml|<rss|<feed|<rdf:RDF)", re.IGNORECASE)
BOM = "\ufeff"


@dataclass(frozen=True)
class Candidate:
    """A link found on a court page, before it becomes a filing"""
    title: str
    url: str
    guid: Optional[str] = None
    summary: Optional[str] = None
    published: Optional[str] = None


def is_feed(content: str) -> bool:
    return bool(FEED_ROOT_PATTERN.match(content.lstrip(BOM)))


def _resolve(base_url: str, href: str) -> Optional[str]:
    href = href.strip()
    if not href:
        return None
    try:
        return urljoin(base_url, href)
    except ValueError:
        logger.warning(f"Skipping unresolvable link: {href[:100]}")
        return None


def _child_text(element, *names: str) -> Optional[str]:
    for name in names:
        child = element.find(name)
        if child is not None:
            text = child.get_text(strip=True)
            if text:
                return text
    return None


def _strip_markup(text: Optional[str]) -> Optional[str]:
    # feed descriptions are often escaped HTML
    if not text:
        return None
    return BeautifulSoup(text, "html.parser").get_text(" ", strip=True) or None


def _feed_candidates(soup: BeautifulSoup, base_url: str):
    for item in soup.find_all(["item", "entry"]):
        link = item.find("link")
        if link is None:
            continue
        href = link.get("href") or link.get_text(strip=True)
        url = _resolve(base_url, href)
        if not url:
            continue
        title_tag = item.find("title")
        yield Candidate(
            title=title_tag.get_text(strip=True) if title_tag is not None else "",
            url=url,
            guid=_child_text(item, "guid", "id"),
            summary=_strip_markup(_child_text(item, "description", "summary")),
            published=_child_text(item, "pubDate", "published", "updated"),
        )


def _anchor_candidates(soup: BeautifulSoup, base_url: str):
    for anchor in soup.find_all("a", href=True):
        url = _resolve(base_url, anchor["href"])
        if url:
            yield Candidate(title=anchor.get_text(strip=True), url=url)


def extract_links(
    content: str,
    base_url: str,
    link_filter: Optional[Callable[[str], bool]] = None,
) -> List[Candidate]:
    """
    Parse HTML or RSS/Atom text into an ordered, deduplicated list of candidates.

    Args:
        content: Raw markup as fetched
        base_url: URL used to resolve relative links
        link_filter: Optional predicate on the absolute URL; rejected links are dropped

    Returns:
        Candidates in first-seen order, unique by absolute URL. Never raises on
        malformed markup; unusable input produces an empty list.
    """
    if not content:
        return []
    # aiohttp keeps a UTF-8 byte order mark in the decoded text
    content = content.lstrip(BOM)
    if not content.strip():
        return []

    try:
        if is_feed(content):
            soup = BeautifulSoup(content, "xml")
            found = list(_feed_candidates(soup, base_url))
            if not found:
                found = list(_anchor_candidates(soup, base_url))
        else:
            soup = BeautifulSoup(content, "html.parser")
            found = list(_anchor_candidates(soup, base_url))
    except ParserRejectedMarkup as e:
        logger.warning(f"Could not parse markup from {base_url}: {e}")
        return []

    seen = set()
    candidates = []
    for candidate in found:
        if candidate.url in seen:
            continue
        if link_filter is not None and not link_filter(candidate.url):
            continue
        seen.add(candidate.url)
        candidates.append(candidate)

    logger.info(f"Extracted {len(candidates)} unique links from {base_url}")
    return candidates
