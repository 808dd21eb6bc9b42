import os
import re
import logging
import yaml
from typing import List, Dict, Any, Set
from models.technology import Check, TechnologyRule, Body, Header, FilePresence

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = os.path.join(os.path.dirname(os.path.abspath(__file__)), "technologies.yaml")


class RuleCatalogError(ValueError):
    """Raised when the technology catalog cannot be built."""


def _build_check(tech_name: str, item: Dict[str, Any]) -> Check:
    if not isinstance(item, dict):
        raise RuleCatalogError(f"{tech_name}: evidence entries must be mappings, got {item!r}")

    evidence_type = item.get("type")
    if evidence_type == "files":
        return Check(None, FilePresence())

    pattern = item.get("pattern")
    if not pattern:
        raise RuleCatalogError(f"{tech_name}: '{evidence_type}' evidence requires a pattern")
    try:
        compiled = re.compile(str(pattern), re.IGNORECASE)
    except re.error as e:
        raise RuleCatalogError(f"{tech_name}: invalid pattern {pattern!r}: {e}") from e

    if evidence_type == "body":
        return Check(compiled, Body())
    if evidence_type == "header":
        header_name = item.get("name")
        if not header_name:
            raise RuleCatalogError(f"{tech_name}: header evidence requires a header name")
        return Check(compiled, Header(str(header_name)))

    raise RuleCatalogError(f"{tech_name}: unknown evidence type {evidence_type!r}")


def parse_rules(rules_data: Any) -> List[TechnologyRule]:
    """
    Builds TechnologyRule objects from already-parsed YAML data, keeping file order.
    """
    if not isinstance(rules_data, list):
        raise RuleCatalogError("Technology catalog must be a list of technologies")

    technologies: List[TechnologyRule] = []
    seen: Set[str] = set()
    for rule_data in rules_data:
        if not isinstance(rule_data, dict) or not rule_data.get("name"):
            raise RuleCatalogError(f"Technology entry without a name: {rule_data!r}")

        name = str(rule_data["name"])
        if name in seen:
            raise RuleCatalogError(f"Duplicate technology name: {name}")
        seen.add(name)

        checks = tuple(_build_check(name, item) for item in rule_data.get("evidence") or [])
        file_paths = tuple(str(p) for p in rule_data.get("files") or [])
        if any(isinstance(c.channel, FilePresence) for c in checks) and not file_paths:
            logger.warning(f"{name} declares a files check but no candidate files")

        technologies.append(TechnologyRule(name=name, checks=checks, file_paths=file_paths))
    return technologies


def load_rules(path: str = DEFAULT_CATALOG) -> List[TechnologyRule]:
    """
    Loads the technology catalog from a YAML file.

    Raises:
        RuleCatalogError: if the file is missing, malformed or contains invalid rules
    """
    try:
        with open(path, "r") as f:
            rules_data = yaml.safe_load(f)
    except OSError as e:
        raise RuleCatalogError(f"Cannot read technology catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RuleCatalogError(f"Invalid YAML in technology catalog {path}: {e}") from e

    technologies = parse_rules(rules_data)
    logger.debug(f"Loaded {len(technologies)} technologies from {path}")
    return technologies
