"""User-agent decomposition with a per-service cache."""

import logging
from dataclasses import dataclass

from user_agents import parse as ua_parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSignature:
    os_family: str
    browser_family: str


class UserAgentService:
    """Parses user-agent strings once and hands the same decomposition to every caller.

    One instance is shared between the OS and Browser extractors so each
    distinct user-agent string is parsed a single time per run.
    """

    def __init__(self, parse_fn=ua_parse):
        self._parse = parse_fn
        self._cache: dict[str, ClientSignature] = {}

    def decompose(self, user_agent: str) -> ClientSignature:
        cached = self._cache.get(user_agent)
        if cached is not None:
            return cached

        parsed = self._parse(user_agent)
        signature = ClientSignature(
            os_family=parsed.os.family or "",
            browser_family=parsed.browser.family or "",
        )
        self._cache[user_agent] = signature
        logger.debug("Decomposed user agent %r -> %s", user_agent, signature)
        return signature

    @property
    def cache_size(self) -> int:
        return len(self._cache)
