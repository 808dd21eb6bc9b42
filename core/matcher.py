"""Per-technology matching over body, header and file-presence evidence."""
import logging
from typing import Awaitable, Callable, Optional
from core.context import Evidence
from models.detection import DetectionResult
from models.technology import Body, Check, FilePresence, Header, TechnologyRule

logger = logging.getLogger(__name__)

# Async callable answering "is this URL reachable?"
Probe = Callable[[str], Awaitable[bool]]


class Matcher:
    """Evaluates a technology's checks in order and stops at the first hit."""

    def __init__(self, probe: Probe):
        self.probe = probe

    async def match(self, rule: TechnologyRule, evidence: Evidence) -> DetectionResult:
        for check in rule.checks:
            location = await self._evaluate(check, rule, evidence)
            if location:
                logger.debug(f"{rule.name} matched in {location}")
                return DetectionResult(name=rule.name, detected=True, location=location)
        return DetectionResult.not_detected(rule.name)

    async def _evaluate(self, check: Check, rule: TechnologyRule, evidence: Evidence) -> Optional[str]:
        channel = check.channel
        if isinstance(channel, Body):
            return match_body(check, evidence)
        if isinstance(channel, Header):
            return match_header(check, evidence)
        if isinstance(channel, FilePresence):
            return await self._probe_files(rule, evidence)
        raise TypeError(f"Unknown evidence channel: {channel!r}")

    async def _probe_files(self, rule: TechnologyRule, evidence: Evidence) -> Optional[str]:
        for path in rule.file_paths:
            url = evidence.resolve(path)
            if await self.probe(url):
                return f"file:{path}"
        return None


def match_body(check: Check, evidence: Evidence) -> Optional[str]:
    if check.pattern.search(evidence.body):
        return "body"
    return None


def match_header(check: Check, evidence: Evidence) -> Optional[str]:
    # A header the server did not send makes the check inapplicable, not failed
    value = evidence.header(check.channel.name)
    if value is None:
        return None
    if check.pattern.search(value):
        return f"header:{check.channel.key}"
    return None
