import os
import socket
import sys
import urllib.request
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

# Prefer repo sources over any installed package.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# Settings are read at import time, so the test environment must be in place first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCRAPER_SECRET"] = "test-secret"
os.environ["CANDIDATE_DELAY_SECONDS"] = "0"
os.environ["LOG_FILE"] = ""

from app.core.base import Base  # noqa: E402
from app.core.database import create_db_engine  # noqa: E402
from app.models.alert import Alert  # noqa: E402,F401
from app.models.court_filing import CourtFiling  # noqa: E402,F401
from app.models.scraping_log import ScrapingLog  # noqa: E402,F401
from sqlalchemy.orm import sessionmaker  # noqa: E402


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    if os.getenv("LIVE") == "1":
        return

    real_connect = socket.socket.connect

    def guarded_connect(sock, address):
        host = address[0] if isinstance(address, tuple) else address
        if host not in ("127.0.0.1", "localhost", "::1"):
            raise RuntimeError("Network access blocked in tests")
        return real_connect(sock, address)

    monkeypatch.setattr(socket.socket, "connect", guarded_connect)
    monkeypatch.setattr(
        urllib.request,
        "urlopen",
        lambda *args, **kwargs: (_ for _ in ()).throw(
            RuntimeError("Network access blocked in tests")
        ),
    )


@pytest.fixture
def db_engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()
