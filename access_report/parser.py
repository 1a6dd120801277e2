"""Access log parser — compiled regex + lazy line-by-line generator."""

import logging
import re
from typing import Iterator

from access_report.models import LogEntry

logger = logging.getLogger(__name__)

# ip ident user [time] "METHOD path protocol" status size "referer" "user-agent"
LOG_PATTERN = re.compile(
    r'^(?P<ip>\S+)\s+\S+\s+\S+\s+'
    r'\[.*?\]\s+'
    r'"(?P<method>\S+)\s+\S+\s+\S+"\s+'
    r'(?P<status>\d{3})\s+'
    r'\S+\s+'
    r'".*?"\s+'
    r'"(?P<user_agent>.*?)"$'
)


def _safe_int(value: str) -> int:
    """Convert a status capture to int, returning 0 for anything non-numeric."""
    try:
        return int(value)
    except ValueError:
        return 0


def parse_line(line: str) -> LogEntry | None:
    """Parse a single access log line into a LogEntry. Returns None for unparseable lines."""
    match = LOG_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None

    return LogEntry(
        ip_address=match.group("ip"),
        user_agent=match.group("user_agent"),
        status_code=_safe_int(match.group("status")),
        request_method=match.group("method"),
    )


class AccessLogParser:
    """Yields LogEntry objects from an access log and counts the lines it skipped.

    ``skipped_lines`` is reset whenever a new ``parse`` generator starts and is
    only final once that generator has been fully consumed.
    """

    def __init__(self):
        self.skipped_lines = 0

    def parse(self, file_path: str) -> Iterator[LogEntry]:
        self.skipped_lines = 0
        parsed = 0

        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            for line_number, line in enumerate(f, start=1):
                entry = parse_line(line)
                if entry is None:
                    self.skipped_lines += 1
                    logger.debug("Skipping unparseable line %d in %s", line_number, file_path)
                    continue
                parsed += 1
                yield entry

        logger.info(
            "Parsed %d entries from %s (%d skipped)",
            parsed, file_path, self.skipped_lines,
        )
