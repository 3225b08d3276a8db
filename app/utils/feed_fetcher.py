import asyncio
from abc import ABC, abstractmethod

import aiohttp
from loguru import logger

from app.core.config import settings
from app.core.exceptions import FeedFetchError


class FeedFetcher(ABC):
    """Port for reading raw court feed content"""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """Return the body of url or raise FeedFetchError"""

    async def close(self) -> None:
        pass


class CourtFeedFetcher(FeedFetcher):
    """aiohttp fetcher with a bounded total timeout and no retries"""

    def __init__(self, timeout_seconds: float = None, user_agent: str = None):
        self.timeout_seconds = timeout_seconds or settings.COURT_FEED_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.COURT_FEED_USER_AGENT
        self.session = None

    async def init_session(self):
        """Initialize aiohttp session"""
        if not self.session:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                headers={
                    'User-Agent': self.user_agent,
                    'Accept': 'application/rss+xml,application/xml;q=0.9,text/html;q=0.8,*/*;q=0.5',
                    'Accept-Language': 'en-CA,en;q=0.5',
                },
            )

    async def close(self):
        """Close aiohttp session"""
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch(self, url: str) -> str:
        await self.init_session()
        logger.info(f"Fetching court feed {url}")
        try:
            async with self.session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FeedFetchError(f"Failed to fetch {url}: {response.status} {response.reason}")
                body = await response.text()
        except asyncio.TimeoutError as e:
            raise FeedFetchError(f"Timed out fetching {url} after {self.timeout_seconds}s") from e
        except aiohttp.ClientError as e:
            raise FeedFetchError(f"Error fetching {url}: {e}") from e

        logger.info(f"Fetched {len(body)} bytes from {url}")
        return body
