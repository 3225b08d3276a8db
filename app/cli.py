import argparse
import asyncio
import json
import time
from typing import List, Optional

from loguru import logger

from app.core.database import SessionLocal, init_db
from app.core.exceptions import FeedFetchError, UnknownRegionError
from app.core.logging import configure_logging
from app.services.court_scrape_trigger import scrape_court_filings
from app.utils.ontario_court_bulletins import fetch_ontario_court_bulletins

def run_scrape(region: str) -> dict:
    """Run one ingestion pass with a fresh session and return the trigger response"""
    db = SessionLocal()
    try:
        result = asyncio.run(scrape_court_filings(db, region=region))
        return result.to_response()
    finally:
        db.close()

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="court-alerts")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_scrape = sub.add_parser("scrape", help="Ingest court feeds once or in a loop")
    p_scrape.add_argument("--region", default="gta", help="Feed region (gta, ontario)")
    p_scrape.add_argument("--loop", action="store_true", help="Run forever with sleep interval")
    p_scrape.add_argument("--interval-seconds", type=int, default=86400, help="Loop interval in seconds")

    sub.add_parser("bulletins", help="List this week's Ontario court-list documents")
    sub.add_parser("init-db", help="Create database tables")

    args = parser.parse_args(argv)
    configure_logging()

    if args.cmd == "init-db":
        init_db()
        logger.info("Database initialization completed successfully")
        return 0

    if args.cmd == "bulletins":
        try:
            filings = fetch_ontario_court_bulletins()
        except FeedFetchError as e:
            logger.error(f"Error fetching bulletins: {e}")
            return 1
        print(json.dumps([{"title": f.title, "url": f.url} for f in filings], indent=2))
        return 0

    if args.cmd == "scrape":
        while True:
            try:
                response = run_scrape(args.region)
            except UnknownRegionError as e:
                logger.error(str(e))
                return 2
            print(json.dumps(response, indent=2))
            if not args.loop:
                return 1 if response.get("errors") else 0
            logger.info(f"Sleeping {args.interval_seconds}s until next court scrape")
            time.sleep(args.interval_seconds)

    return 2

if __name__ == "__main__":
    raise SystemExit(main())
