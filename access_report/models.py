"""Value types shared by the parser, extractors and aggregator."""

from dataclasses import dataclass

UNKNOWN_LABEL = "Unknown"
OTHER_LABEL = "Other"


@dataclass(frozen=True)
class LogEntry:
    ip_address: str
    user_agent: str
    status_code: int
    request_method: str


@dataclass(frozen=True)
class DimensionEntry:
    label: str
    percentage: float


@dataclass(frozen=True)
class DimensionReport:
    """One dimension's distribution, ordered by descending percentage.

    A synthetic ``Other`` entry, when present, is always last.
    """

    dimension_name: str
    entries: tuple[DimensionEntry, ...] = ()

    def labels(self) -> list[str]:
        return [e.label for e in self.entries]

    def total_percentage(self) -> float:
        return round(sum(e.percentage for e in self.entries), 2)
