from dataclasses import dataclass, field
from typing import List

import pytest
from core.context import Evidence
from core.matcher import Matcher, match_body, match_header
from models.technology import Check, TechnologyRule


@dataclass(frozen=True)
class CountingEvidence(Evidence):
    """Evidence that records header lookups made against it."""
    lookups: List[str] = field(default_factory=list)

    def header(self, name):
        self.lookups.append(name)
        return super().header(name)


@pytest.fixture
def wordpress_rule():
    return TechnologyRule(
        name="WordPress",
        checks=(
            Check.body("wp-(content|includes)"),
            Check.header("X-Powered-By", "wordpress"),
            Check.files(),
        ),
        file_paths=("/wp-login.php", "/wp-admin/", "/wp-content/"),
    )


@pytest.mark.asyncio
async def test_empty_check_list_is_never_detected(make_probe):
    probe = make_probe(reachable={"https://example.com/anything"})
    evidence = Evidence(base_url="https://example.com", body="anything", headers={"Server": "anything"})

    result = await Matcher(probe).match(TechnologyRule(name="Nothing"), evidence)

    assert result.detected is False
    assert result.location is None
    assert probe.calls == []


@pytest.mark.asyncio
async def test_first_matching_check_wins_and_later_checks_are_skipped(wordpress_rule, make_probe):
    probe = make_probe(reachable={"https://example.com/wp-login.php"})
    evidence = CountingEvidence(
        base_url="https://example.com",
        body='<script src="/wp-content/themes/x.js"></script>',
        headers={"X-Powered-By": "WordPress"},
    )

    result = await Matcher(probe).match(wordpress_rule, evidence)

    assert result.location == "body"
    assert evidence.lookups == []
    assert probe.calls == []


@pytest.mark.asyncio
async def test_header_match_stops_before_file_probes(wordpress_rule, make_probe):
    probe = make_probe(reachable={"https://example.com/wp-login.php"})
    evidence = CountingEvidence(
        base_url="https://example.com",
        body="<html></html>",
        headers={"X-Powered-By": "WordPress 6.4"},
    )

    result = await Matcher(probe).match(wordpress_rule, evidence)

    assert result.detected is True
    assert result.location == "header:x-powered-by"
    assert evidence.lookups == ["X-Powered-By"]
    assert probe.calls == []


@pytest.mark.asyncio
async def test_missing_header_falls_through_to_next_check(make_probe):
    rule = TechnologyRule(
        name="Laravel",
        checks=(Check.header("Set-Cookie", "laravel_session"), Check.body("laravel")),
    )
    evidence = Evidence(base_url="https://example.com", body="Built with Laravel")

    result = await Matcher(make_probe()).match(rule, evidence)

    assert result.location == "body"


@pytest.mark.asyncio
async def test_file_presence_probes_paths_in_order_until_reachable(wordpress_rule, make_probe):
    probe = make_probe(reachable={"https://example.com/wp-admin/", "https://example.com/wp-content/"})
    evidence = Evidence(base_url="https://example.com/", body="")

    result = await Matcher(probe).match(wordpress_rule, evidence)

    assert result.location == "file:/wp-admin/"
    assert probe.calls == ["https://example.com/wp-login.php", "https://example.com/wp-admin/"]


@pytest.mark.asyncio
async def test_unreachable_files_fall_through_to_later_checks(make_probe):
    rule = TechnologyRule(
        name="PHP",
        checks=(Check.files(), Check.header("X-Powered-By", "PHP/")),
        file_paths=("/index.php", "/info.php"),
    )
    probe = make_probe()
    evidence = Evidence(base_url="https://example.com", body="", headers={"x-powered-by": "PHP/8.2"})

    result = await Matcher(probe).match(rule, evidence)

    assert result.location == "header:x-powered-by"
    assert len(probe.calls) == 2


@pytest.mark.asyncio
async def test_files_check_without_paths_fails(make_probe):
    rule = TechnologyRule(name="Ghost", checks=(Check.files(),))
    probe = make_probe()

    result = await Matcher(probe).match(rule, Evidence(base_url="https://example.com"))

    assert result.detected is False
    assert probe.calls == []


@pytest.mark.parametrize("header_name", ["server", "SERVER", "Server"])
def test_header_lookup_is_case_insensitive(header_name):
    evidence = Evidence(base_url="https://example.com", headers={"Server": "nginx/1.2"})

    assert match_header(Check.header(header_name, "nginx"), evidence) == "header:server"


def test_header_present_but_not_matching():
    evidence = Evidence(base_url="https://example.com", headers={"server": "Apache/2.4"})

    assert match_header(Check.header("Server", "nginx"), evidence) is None


def test_body_patterns_ignore_case():
    evidence = Evidence(base_url="https://example.com", body="<script src='/js/JQUERY-3.6.0.MIN.JS'>")

    assert match_body(Check.body(r"jquery[-.\d]*(?:\.min)?\.js"), evidence) == "body"


def test_pattern_required_for_body_and_header_checks():
    with pytest.raises(ValueError):
        Check(None, Check.body("x").channel)
