"""Shared pytest fixtures and fakes for the access-report test suite."""

import os
from types import SimpleNamespace

import geoip2.errors
import pytest

from access_report.models import LogEntry

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")
SAMPLE_LOG = os.path.join(FIXTURES_DIR, "access.log")


def make_entry(ip="10.0.0.1", user_agent="Mozilla/5.0", status_code=200, method="GET") -> LogEntry:
    return LogEntry(
        ip_address=ip,
        user_agent=user_agent,
        status_code=status_code,
        request_method=method,
    )


def make_line(ip="10.0.0.1", user_agent="Mozilla/5.0", status="200", method="GET") -> str:
    return (
        f'{ip} - - [17/May/2015:10:05:03 +0000] "{method} /index.html HTTP/1.1" '
        f'{status} 1024 "-" "{user_agent}"\n'
    )


class FakeGeoReader:
    """Stands in for geoip2.database.Reader, backed by an ip -> country-name dict."""

    def __init__(self, countries: dict):
        self.countries = countries
        self.calls = []
        self.closed = False

    def country(self, ip_address):
        self.calls.append(ip_address)
        if ip_address not in self.countries:
            if ":" not in ip_address and not ip_address.replace(".", "").isdigit():
                raise ValueError(f"{ip_address!r} does not appear to be an IPv4 or IPv6 address")
            raise geoip2.errors.AddressNotFoundError(f"The address {ip_address} is not in the database.")
        return SimpleNamespace(country=SimpleNamespace(name=self.countries[ip_address]))

    def close(self):
        self.closed = True


class FakeUserAgentParser:
    """Stands in for user_agents.parse, backed by a ua -> (os, browser) dict."""

    def __init__(self, families: dict):
        self.families = families
        self.calls = []

    def __call__(self, user_agent):
        self.calls.append(user_agent)
        os_family, browser_family = self.families.get(user_agent, ("Other", "Other"))
        return SimpleNamespace(
            os=SimpleNamespace(family=os_family),
            browser=SimpleNamespace(family=browser_family),
        )


class LabelExtractor:
    """Extractor that labels entries by looking up their IP in a dict."""

    dimension_name = "Test"

    def __init__(self, labels: dict | None = None):
        self.labels = labels or {}

    def extract(self, entry):
        return self.labels.get(entry.ip_address, entry.ip_address)


def entries_from_counts(counts: dict) -> list[LogEntry]:
    """Build entries whose IP is the label, repeated count times."""
    entries = []
    for label, count in counts.items():
        entries.extend(make_entry(ip=label) for _ in range(count))
    return entries


@pytest.fixture()
def sample_log() -> str:
    return SAMPLE_LOG


@pytest.fixture()
def write_log(tmp_path):
    """Write the given lines to a temp log file and return its path."""

    def _write(lines, name="access.log"):
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return str(path)

    return _write
