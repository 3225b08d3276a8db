"""
Ports for the records the ingestion service writes.

The ingestion service only depends on these interfaces, so the SQLAlchemy
services and in-memory test doubles are interchangeable.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from app.schemas.alert import AlertCreate
from app.schemas.court_filing import CourtFilingCreate


class FilingStore(ABC):
    """Port for court filing storage"""

    @abstractmethod
    async def exists(self, url: str, guid: Optional[str] = None) -> bool:
        """Check if a filing with this URL or GUID was already ingested"""
        pass

    @abstractmethod
    async def create(self, filing: CourtFilingCreate) -> Any:
        """Persist a new filing and return it (with an id).

        Must reject a duplicate URL or GUID even when exists() raced.
        """
        pass

    @abstractmethod
    async def mark_classified(self, filing_id: str) -> None:
        """Set the classified processing flag"""
        pass


class AlertStore(ABC):
    """Port for alert storage"""

    @abstractmethod
    async def create(self, alert: AlertCreate) -> Any:
        """Persist a new alert and return it"""
        pass
