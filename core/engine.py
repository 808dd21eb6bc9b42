import logging
from functools import partial
from typing import List, Optional, Sequence
import httpx
from core.context import Evidence
from core.matcher import Matcher, Probe
from core.report import render_report
from fetch.header_parser import parse_headers
from fetch.http_client import fetch_page, file_exists
from models.detection import DetectionResult
from models.technology import TechnologyRule
from rules.rules_loader import load_rules


class Engine:
    def __init__(self, rules: Optional[Sequence[TechnologyRule]] = None):
        """Initialize the engine with a technology catalog.

        Args:
            rules: Ordered technology rules; the packaged catalog when omitted
        """
        self.logger = logging.getLogger(__name__)
        self.rules = tuple(rules) if rules is not None else tuple(load_rules())
        self.logger.info(f"Loaded {len(self.rules)} technology rules")

    async def scan_url(self, client: httpx.AsyncClient, url: str) -> Optional[Evidence]:
        """Fetch the target once; None when there is nothing to analyze."""
        self.logger.info(f"Fetching {url}...")
        body, raw_headers = await fetch_page(client, url, capture_headers=True)
        if not body:
            self.logger.warning(f"No content retrieved from {url}, skipping detection")
            return None

        headers = parse_headers(raw_headers)
        self.logger.debug(f"Body length: {len(body)} bytes, {len(headers)} headers")
        return Evidence(base_url=url, body=body, headers=headers)

    async def detect(self, evidence: Evidence, probe: Probe) -> List[DetectionResult]:
        """Run every rule against the evidence; results follow catalog order."""
        matcher = Matcher(probe)
        results: List[DetectionResult] = []
        for rule in self.rules:
            results.append(await matcher.match(rule, evidence))

        found = sum(1 for r in results if r.detected)
        self.logger.info(f"Analysis complete, {found} of {len(results)} technologies detected")
        return results

    async def run(self, client: httpx.AsyncClient, url: str) -> Optional[List[str]]:
        """Fetch, detect and render. None when the fetch produced no content."""
        evidence = await self.scan_url(client, url)
        if evidence is None:
            return None

        results = await self.detect(evidence, partial(file_exists, client))
        return render_report(results)
