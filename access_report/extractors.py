"""Dimension extractors — map one LogEntry to one classification label."""

import logging
from typing import Protocol

from access_report.geo import GeoLocator
from access_report.models import LogEntry, OTHER_LABEL, UNKNOWN_LABEL
from access_report.user_agent import UserAgentService

logger = logging.getLogger(__name__)


class DimensionExtractor(Protocol):
    dimension_name: str

    def extract(self, entry: LogEntry) -> str:
        ...


def _normalize_family(value: str | None) -> str:
    """Blank values and the parser's generic "Other" placeholder become Unknown."""
    if value is None or not value.strip() or value == OTHER_LABEL:
        return UNKNOWN_LABEL
    return value


class CountryExtractor:
    """Country of the client IP, cached per address for the lifetime of the instance.

    Owns the GeoLocator it is given and closes it on ``close()`` or when used
    as a context manager.
    """

    dimension_name = "Country"

    def __init__(self, locator: GeoLocator):
        self._locator = locator
        self._cache: dict[str, str] = {}

    @classmethod
    def from_database(cls, database_path: str) -> "CountryExtractor":
        return cls(GeoLocator(database_path))

    def extract(self, entry: LogEntry) -> str:
        cached = self._cache.get(entry.ip_address)
        if cached is not None:
            return cached

        result = self._locator.lookup_country(entry.ip_address)
        if result.ok:
            country = result.country.strip() if result.country else ""
            label = country or UNKNOWN_LABEL
        else:
            logger.debug("Country lookup failed for %s: %s", entry.ip_address, result.error)
            label = UNKNOWN_LABEL

        self._cache[entry.ip_address] = label
        return label

    def close(self):
        self._locator.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class OsExtractor:
    dimension_name = "OS"

    def __init__(self, ua_service: UserAgentService):
        self._ua_service = ua_service

    def extract(self, entry: LogEntry) -> str:
        return _normalize_family(self._ua_service.decompose(entry.user_agent).os_family)


class BrowserExtractor:
    dimension_name = "Browser"

    def __init__(self, ua_service: UserAgentService):
        self._ua_service = ua_service

    def extract(self, entry: LogEntry) -> str:
        return _normalize_family(self._ua_service.decompose(entry.user_agent).browser_family)
