from __future__ import annotations

import logging
import re
from typing import Iterable

from semantic_checker.catalog import operable, perceivable, robust, understandable
from semantic_checker.errors import CatalogError, ConfigError
from semantic_checker.models import LEVELS, Rule

logger = logging.getLogger(__name__)

GROUPS = (perceivable, operable, understandable, robust)

_RULE_ID = re.compile(r"^R(\d+)$")


def _rule_number(rule: Rule) -> int:
    match = _RULE_ID.match(rule.id)
    return int(match.group(1)) if match else 0


def validate_catalog(rules: Iterable[Rule]) -> tuple[Rule, ...]:
    catalog = tuple(rules)
    if not catalog:
        raise CatalogError("Rule catalog is empty")

    seen: set[str] = set()
    for rule in catalog:
        if not isinstance(rule, Rule):
            raise CatalogError(f"Catalog entry is not a Rule: {rule!r}")
        if not _RULE_ID.match(rule.id):
            raise CatalogError(f"Rule id must look like R<number>: {rule.id!r}")
        if rule.id in seen:
            raise CatalogError(f"Duplicate rule id: {rule.id}")
        seen.add(rule.id)
        if rule.level not in LEVELS:
            raise CatalogError(f"{rule.id}: unknown level {rule.level!r}")
        if not isinstance(rule.pattern, re.Pattern):
            raise CatalogError(f"{rule.id}: pattern must be a compiled regular expression")
        if not callable(rule.applies):
            raise CatalogError(f"{rule.id}: predicate is not callable")
        if rule.fix is not None and not callable(rule.fix):
            raise CatalogError(f"{rule.id}: fix is not callable")
    return catalog


def load_catalog(disabled: Iterable[str] = ()) -> tuple[Rule, ...]:
    """Return the full rule catalog in id order, minus ``disabled`` ids.

    Unknown ids in ``disabled`` are a configuration mistake and raise.
    """
    rules: list[Rule] = []
    for group in GROUPS:
        rules.extend(group.RULES)
    catalog = validate_catalog(sorted(rules, key=_rule_number))

    skipped = {item.strip().upper() for item in disabled if item and item.strip()}
    unknown = skipped - {rule.id for rule in catalog}
    if unknown:
        raise ConfigError(f"Unknown rule ids in disabled_rules: {', '.join(sorted(unknown))}")
    if skipped:
        logger.info("Disabled rules: %s", ", ".join(sorted(skipped)))
    return validate_catalog(rule for rule in catalog if rule.id not in skipped)


def rule_index(catalog: Iterable[Rule]) -> dict[str, Rule]:
    return {rule.id: rule for rule in catalog}
