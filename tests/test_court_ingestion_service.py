import asyncio
import random

import pytest

import app.services.court_ingestion_service as ingestion_module
from app.core.court_feeds import CourtFeed
from app.core.exceptions import FeedFetchError
from app.schemas.alert import AlertStatus, AlertType, Priority
from app.services.court_ingestion_service import (
    CourtIngestionService,
    SourceState,
    court_file_number,
    parse_publish_date,
)
from app.utils.opportunity_scoring import OpportunityScorer
from fakes import (
    FailingAlertStore,
    FakeFeedFetcher,
    InMemoryAlertStore,
    InMemoryFilingStore,
    SleepRecorder,
    rss_feed,
)

ONSC = CourtFeed(name="Ontario Superior Court of Justice", url="https://feeds.test/onsc.xml", court="ONSC")
ONCA = CourtFeed(name="Ontario Court of Appeal", url="https://feeds.test/onca.xml", court="ONCA")
ONCJ = CourtFeed(name="Ontario Court of Justice", url="https://feeds.test/oncj.xml", court="ONCJ")

POWER_OF_SALE_URL = "https://www.canlii.org/en/on/onsc/doc/2025/2025onsc1001/2025onsc1001.html"
CRIMINAL_URL = "https://www.canlii.org/en/on/onsc/doc/2025/2025onsc1002/2025onsc1002.html"
ESTATE_URL = "https://www.canlii.org/en/on/onsc/doc/2025/2025onsc1003/2025onsc1003.html"

ONSC_FEED = rss_feed(
    ("Royal Bank v. Smith - Power of Sale", POWER_OF_SALE_URL, "2025onsc1001",
     "Motion for possession following power of sale."),
    ("R. v. Jones", CRIMINAL_URL, "2025onsc1002", "Sentencing reasons."),
    ("Estate of Mary Brown", ESTATE_URL, "2025onsc1003",
     "Executor: John Brown, Phone: 416-555-0100, Email: john.brown@example.com."),
)


def _feed_for(court, count):
    return rss_feed(*[
        (f"Mortgage enforcement {court} {i}", f"https://www.canlii.org/en/on/{court}/doc/{i}.html", f"{court}-{i}", "")
        for i in range(count)
    ])


def _service(fetcher, filing_store=None, alert_store=None, **kwargs):
    kwargs.setdefault("sleep", SleepRecorder())
    return CourtIngestionService(
        filing_store=filing_store or InMemoryFilingStore(),
        alert_store=alert_store or InMemoryAlertStore(),
        fetcher=fetcher,
        **kwargs,
    )


def test_relevant_filings_become_alerts():
    filings, alerts = InMemoryFilingStore(), InMemoryAlertStore()
    service = _service(FakeFeedFetcher({ONSC.url: ONSC_FEED}), filings, alerts)

    result = asyncio.run(service.run([ONSC]))

    assert result.total_cases_processed == 3
    assert result.new_alerts_generated == 2
    assert result.feeds_processed == 1
    assert result.errors == []
    assert set(filings.by_url) == {POWER_OF_SALE_URL, CRIMINAL_URL, ESTATE_URL}
    assert all(record.classified for record in filings.by_url.values())
    assert all(not record.is_processed for record in filings.by_url.values())

    power_of_sale, estate = alerts.alerts
    assert power_of_sale.alert_type == AlertType.POWER_OF_SALE
    assert power_of_sale.status == AlertStatus.ACTIVE
    assert power_of_sale.priority == Priority.URGENT
    assert power_of_sale.opportunity_score == 90
    assert power_of_sale.timeline_months == 3
    assert power_of_sale.court_filing_id == filings.by_url[POWER_OF_SALE_URL].id
    assert power_of_sale.court_file_number == "2025onsc1001.html"
    assert power_of_sale.title == "Court Filing Alert - ONSC"
    assert power_of_sale.city == "Toronto"

    assert estate.alert_type == AlertType.ESTATE_SALE
    assert "Executor: John Brown" in estate.description
    assert "john.brown@example.com" in estate.description


def test_filing_fields_come_from_the_feed_item():
    filings = InMemoryFilingStore()
    asyncio.run(_service(FakeFeedFetcher({ONSC.url: ONSC_FEED}), filings).run([ONSC]))

    record = filings.by_url[POWER_OF_SALE_URL]
    assert record.guid == "2025onsc1001"
    assert record.title == "Royal Bank v. Smith - Power of Sale"
    assert record.court == "ONSC"
    assert record.source == ONSC.name
    assert record.publish_date.year == 2025
    assert record.summary == "Motion for possession following power of sale."


def test_irrelevant_filing_is_stored_without_alert():
    feed = rss_feed(("Brown v. Green", "https://www.canlii.org/doc/1.html", "g1", ""))
    filings, alerts = InMemoryFilingStore(), InMemoryAlertStore()

    result = asyncio.run(_service(FakeFeedFetcher({ONSC.url: feed}), filings, alerts).run([ONSC]))

    assert result.total_cases_processed == 1
    assert result.new_alerts_generated == 0
    assert len(filings.by_url) == 1
    assert alerts.alerts == []
    assert filings.by_url["https://www.canlii.org/doc/1.html"].summary == ingestion_module.DEFAULT_SUMMARY


def test_second_run_on_unchanged_feed_creates_nothing():
    filings, alerts = InMemoryFilingStore(), InMemoryAlertStore()
    fetcher = FakeFeedFetcher({ONSC.url: ONSC_FEED})

    first = asyncio.run(_service(fetcher, filings, alerts).run([ONSC]))
    second = asyncio.run(_service(fetcher, filings, alerts).run([ONSC]))

    assert first.total_cases_processed == 3
    assert second.total_cases_processed == 0
    assert second.new_alerts_generated == 0
    assert second.sources[0].skipped == 3
    assert len(filings.by_url) == 3
    assert len(alerts.alerts) == 2


def test_known_url_is_skipped_before_classification(monkeypatch):
    classified = []
    real_classify = ingestion_module.classify_filing

    def recording_classify(title, summary=None):
        classified.append(title)
        return real_classify(title, summary)

    monkeypatch.setattr(ingestion_module, "classify_filing", recording_classify)

    filings = InMemoryFilingStore()
    feed = rss_feed(("Foreclosure action", "https://www.canlii.org/doc/x.html", "x", ""))
    fetcher = FakeFeedFetcher({ONSC.url: feed})

    asyncio.run(_service(fetcher, filings).run([ONSC]))
    asyncio.run(_service(fetcher, filings).run([ONSC]))

    assert classified == ["Foreclosure action"]


def test_one_failing_source_does_not_stop_the_others():
    fetcher = FakeFeedFetcher({
        ONSC.url: _feed_for("onsc", 2),
        ONCA.url: FeedFetchError("Timed out fetching https://feeds.test/onca.xml after 30s"),
        ONCJ.url: _feed_for("oncj", 2),
    })

    result = asyncio.run(_service(fetcher).run([ONSC, ONCA, ONCJ]))

    assert fetcher.requested == [ONSC.url, ONCA.url, ONCJ.url]
    assert result.feeds_processed == 3
    assert result.total_cases_processed == 4
    assert result.new_alerts_generated == 4
    assert result.errors == ["Ontario Court of Appeal: Timed out fetching https://feeds.test/onca.xml after 30s"]
    assert [s.state for s in result.sources] == [SourceState.DONE, SourceState.FETCH_FAILED, SourceState.DONE]


def test_candidates_are_capped_per_source():
    filings = InMemoryFilingStore()
    result = asyncio.run(
        _service(FakeFeedFetcher({ONSC.url: _feed_for("onsc", 8)}), filings, max_candidates=5).run([ONSC])
    )

    assert result.total_cases_processed == 5
    assert sorted(filings.by_url) == sorted(f"https://www.canlii.org/en/on/onsc/doc/{i}.html" for i in range(5))


def test_cap_counts_skipped_candidates():
    filings = InMemoryFilingStore()
    fetcher = FakeFeedFetcher({ONSC.url: _feed_for("onsc", 4)})

    asyncio.run(_service(fetcher, filings, max_candidates=2).run([ONSC]))
    result = asyncio.run(_service(fetcher, filings, max_candidates=2).run([ONSC]))

    assert result.total_cases_processed == 0
    assert result.sources[0].skipped == 2


def test_delay_between_new_candidates():
    sleep = SleepRecorder()
    service = _service(FakeFeedFetcher({ONSC.url: ONSC_FEED}), candidate_delay=1.5, sleep=sleep)

    asyncio.run(service.run([ONSC]))

    assert sleep.delays == [1.5, 1.5]


def test_no_delay_after_skipped_candidates():
    filings = InMemoryFilingStore()
    fetcher = FakeFeedFetcher({ONSC.url: ONSC_FEED})
    asyncio.run(_service(fetcher, filings).run([ONSC]))

    sleep = SleepRecorder()
    asyncio.run(_service(fetcher, filings, sleep=sleep).run([ONSC]))

    assert sleep.delays == []


def test_store_failure_stops_only_that_source():
    filings = InMemoryFilingStore()
    fetcher = FakeFeedFetcher({ONSC.url: ONSC_FEED, ONCJ.url: rss_feed(("Brown v. Green", "https://x.test/1", "1", ""))})
    service = _service(fetcher, filings, FailingAlertStore())

    result = asyncio.run(service.run([ONSC, ONCJ]))

    onsc, oncj = result.sources
    assert onsc.state == SourceState.FAILED
    assert onsc.filings_created == 1
    assert result.errors == ["Ontario Superior Court of Justice: connection lost"]
    # the filing written before the failure stays
    assert POWER_OF_SALE_URL in filings.by_url
    assert CRIMINAL_URL not in filings.by_url
    assert oncj.state == SourceState.DONE
    assert oncj.filings_created == 1


def test_unparseable_content_is_zero_candidates_not_an_error():
    fetcher = FakeFeedFetcher({ONSC.url: "\x00\x01 not markup at all <<<"})

    result = asyncio.run(_service(fetcher).run([ONSC]))

    assert result.errors == []
    assert result.total_cases_processed == 0
    assert result.sources[0].state == SourceState.DONE


def test_fetcher_is_closed_after_run():
    fetcher = FakeFeedFetcher({})
    result = asyncio.run(_service(fetcher).run([ONSC]))
    assert fetcher.closed
    assert result.sources[0].state == SourceState.FETCH_FAILED


def test_untitled_links_get_a_court_title():
    html = '<a href="/scj/civil/weekly-court-lists/list1.pdf"></a>'
    feed = CourtFeed(
        name="Weekly Court Lists",
        url="https://www.ontariocourts.ca/scj/civil/weekly-court-lists/",
        court="ONSC",
        base_url="https://www.ontariocourts.ca/",
    )
    filings = InMemoryFilingStore()

    asyncio.run(_service(FakeFeedFetcher({feed.url: html}), filings).run([feed]))

    (record,) = filings.by_url.values()
    assert record.title.startswith("Court Case - ONSC - ")
    assert record.guid == "https://www.ontariocourts.ca/scj/civil/weekly-court-lists/list1.pdf"


def test_random_scoring_stays_within_bounds():
    feed = _feed_for("onsc", 20)
    alerts = InMemoryAlertStore()
    service = _service(
        FakeFeedFetcher({ONSC.url: feed}),
        alert_store=alerts,
        max_candidates=20,
        scorer=OpportunityScorer(mode="random", rng=random.Random(3)),
    )

    asyncio.run(service.run([ONSC]))

    assert len(alerts.alerts) == 20
    assert all(60 <= a.opportunity_score <= 100 for a in alerts.alerts)
    assert all(3 <= a.timeline_months <= 9 for a in alerts.alerts)


def test_misconfigured_court_propagates():
    feed = CourtFeed(name="Unknown", url="https://feeds.test/x.xml", court="NOPE")
    fetcher = FakeFeedFetcher({feed.url: _feed_for("x", 1)})
    with pytest.raises(ValueError):
        asyncio.run(_service(fetcher).run([feed]))
    assert fetcher.closed


def test_negative_cap_rejected():
    with pytest.raises(ValueError):
        _service(FakeFeedFetcher({}), max_candidates=-1)


def test_response_shape():
    fetcher = FakeFeedFetcher({ONSC.url: ONSC_FEED})
    response = asyncio.run(_service(fetcher).run([ONSC, ONCA])).to_response()

    assert response["success"] is True
    assert response["stats"] == {
        "totalCasesProcessed": 3,
        "newAlertsGenerated": 2,
        "feedsProcessed": 2,
        "errors": 1,
    }
    assert response["errors"] == ["Ontario Court of Appeal: Failed to fetch https://feeds.test/onca.xml: 404 Not Found"]


def test_publish_date_parsing():
    assert parse_publish_date("Sun, 07 Sep 2025 08:00:00 GMT").day == 7
    assert parse_publish_date("2025-09-07T08:00:00Z").month == 9
    assert parse_publish_date("yesterday-ish").tzinfo is not None
    assert parse_publish_date(None).tzinfo is not None


def test_court_file_number_is_last_path_segment():
    assert court_file_number("https://www.canlii.org/en/on/onsc/doc/2025/2025onsc1001/") == "2025onsc1001"
    assert court_file_number("https://example.org") == "https://example.org"


def test_known_guid_at_a_new_url_is_skipped():
    filings, alerts = InMemoryFilingStore(), InMemoryAlertStore()
    first_feed = rss_feed(("Foreclosure A", "https://www.canlii.org/doc/a.html", "g-1", ""))
    moved_feed = rss_feed(
        ("Foreclosure A", "https://www.canlii.org/doc/a.html?resultIndex=1", "g-1", ""),
        ("Foreclosure B", "https://www.canlii.org/doc/b.html", "g-2", ""),
        ("Foreclosure C", "https://www.canlii.org/doc/c.html", "g-3", ""),
    )

    asyncio.run(_service(FakeFeedFetcher({ONSC.url: first_feed}), filings, alerts).run([ONSC]))
    second = asyncio.run(_service(FakeFeedFetcher({ONSC.url: moved_feed}), filings, alerts).run([ONSC]))
    third = asyncio.run(_service(FakeFeedFetcher({ONSC.url: moved_feed}), filings, alerts).run([ONSC]))

    assert second.sources[0].state == SourceState.DONE
    assert second.errors == []
    assert second.sources[0].skipped == 1
    assert second.total_cases_processed == 2
    assert third.total_cases_processed == 0
    assert third.sources[0].skipped == 3
    assert sorted(f.guid for f in filings.by_url.values()) == ["g-1", "g-2", "g-3"]


class RacingFilingStore(InMemoryFilingStore):
    """Reports every filing as new, so only create() sees the duplicate"""

    async def exists(self, url, guid=None):
        return False


def test_duplicate_rejected_on_create_is_skipped():
    filings = RacingFilingStore()
    feed = rss_feed(
        ("Foreclosure A", "https://www.canlii.org/doc/a.html", "g-1", ""),
        ("Foreclosure A again", "https://www.canlii.org/doc/a-copy.html", "g-1", ""),
        ("Foreclosure B", "https://www.canlii.org/doc/b.html", "g-2", ""),
    )
    sleep = SleepRecorder()

    result = asyncio.run(_service(FakeFeedFetcher({ONSC.url: feed}), filings, sleep=sleep).run([ONSC]))

    source = result.sources[0]
    assert source.state == SourceState.DONE
    assert source.skipped == 1
    assert source.filings_created == 2
    assert len(sleep.delays) == 1
