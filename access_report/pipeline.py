"""Report pipeline — parse once, then run every extractor over the same entries."""

import logging
from contextlib import ExitStack
from dataclasses import dataclass

from access_report.aggregator import aggregate
from access_report.config import Config
from access_report.extractors import (
    BrowserExtractor,
    CountryExtractor,
    DimensionExtractor,
    OsExtractor,
)
from access_report.models import DimensionReport
from access_report.parser import AccessLogParser
from access_report.user_agent import UserAgentService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportRun:
    reports: tuple[DimensionReport, ...]
    total_entries: int
    skipped_lines: int


def build_extractors(config: Config, stack: ExitStack) -> list[DimensionExtractor]:
    """Create one fresh extractor per configured dimension, in config order.

    The country extractor is registered on *stack* so its database handle is
    released however the run ends.
    """
    ua_service = UserAgentService()
    extractors: list[DimensionExtractor] = []
    for dimension in config.dimensions:
        if dimension == "country":
            extractors.append(stack.enter_context(CountryExtractor.from_database(config.geoip_db)))
        elif dimension == "os":
            extractors.append(OsExtractor(ua_service))
        elif dimension == "browser":
            extractors.append(BrowserExtractor(ua_service))
    return extractors


def run_report(config: Config, extractor_factory=build_extractors) -> ReportRun:
    """Compute every configured report. Nothing is returned unless all of them succeed."""
    parser = AccessLogParser()
    entries = list(parser.parse(config.log_file))

    if parser.skipped_lines:
        logger.info("Skipped %d unparseable lines in %s", parser.skipped_lines, config.log_file)

    with ExitStack() as stack:
        extractors = extractor_factory(config, stack)
        reports = tuple(aggregate(entries, e, config.threshold) for e in extractors)

    return ReportRun(
        reports=reports,
        total_entries=len(entries),
        skipped_lines=parser.skipped_lines,
    )
