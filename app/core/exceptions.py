class IngestionError(Exception):
    """Expected failure while ingesting one court feed; recorded, never fatal to the run"""


class FeedFetchError(IngestionError):
    """Network failure, timeout or non-success HTTP status while fetching a feed"""


class StoreError(IngestionError):
    """A filing or alert could not be written"""


class DuplicateFilingError(StoreError):
    """The storage layer rejected a filing whose URL or GUID already exists"""


class UnknownRegionError(ValueError):
    """No court feeds are configured for the requested region"""
