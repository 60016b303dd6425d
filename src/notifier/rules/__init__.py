"""Subscription rules and the matcher that evaluates them."""

from src.notifier.rules.matcher import RuleMatch, RuleMatcher
from src.notifier.rules.models import (
    DEFAULT_RULE_TABLE,
    MentionRule,
    ProjectColumnRule,
    RuleTable,
)

__all__ = [
    "DEFAULT_RULE_TABLE",
    "MentionRule",
    "ProjectColumnRule",
    "RuleMatch",
    "RuleMatcher",
    "RuleTable",
]
