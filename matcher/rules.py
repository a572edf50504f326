"""Resolve crawl permission for a (user-agent, path) pair against a RuleSet."""

from __future__ import annotations

from typing import Sequence

from core.models import AgentRules, DecisionReason, RobotsDecision, RuleSet
from matcher.wildcard import match_pattern


def _first_match(patterns: Sequence[str], candidate: str) -> str | None:
    """Return the first matching pattern; on a longest-first list that is the most specific."""
    for pattern in patterns:
        if match_pattern(pattern, candidate):
            return pattern
    return None


def resolve_agent(ruleset: RuleSet, user_agent: str) -> str | None:
    """Return the agent-pattern whose block governs `user_agent`, if any."""
    return _first_match(ruleset.agent_index, user_agent)


def _decide(rules: AgentRules, path: str) -> tuple[bool, str | None, str | None, DecisionReason]:
    best_allow = _first_match(rules.allow, path)
    best_disallow = _first_match(rules.disallow, path)

    if best_allow is None and best_disallow is None:
        return True, None, None, DecisionReason.NO_MATCHING_RULE
    if best_disallow is None:
        return True, best_allow, None, DecisionReason.ALLOW_ONLY
    if best_allow is None:
        return False, None, best_disallow, DecisionReason.DISALLOW_ONLY
    # Equal length goes to disallow.
    if len(best_allow) > len(best_disallow):
        return True, best_allow, best_disallow, DecisionReason.ALLOW_LONGER
    return False, best_allow, best_disallow, DecisionReason.DISALLOW_LONGER_OR_EQUAL


def evaluate(ruleset: RuleSet, user_agent: str, path: str) -> RobotsDecision:
    """Return the full decision, including which agent block and patterns applied."""
    agent = resolve_agent(ruleset, user_agent)
    if agent is None:
        return RobotsDecision(
            allowed=True,
            user_agent=user_agent,
            path=path,
            reason=DecisionReason.NO_MATCHING_AGENT,
        )

    allowed, best_allow, best_disallow, reason = _decide(ruleset.rules[agent], path)
    return RobotsDecision(
        allowed=allowed,
        user_agent=user_agent,
        path=path,
        matched_agent=agent,
        matched_allow=best_allow,
        matched_disallow=best_disallow,
        reason=reason,
    )


def is_allowed(ruleset: RuleSet, user_agent: str, path: str) -> bool:
    """Return True when `user_agent` may fetch `path`."""
    agent = resolve_agent(ruleset, user_agent)
    if agent is None:
        return True
    allowed, _, _, _ = _decide(ruleset.rules[agent], path)
    return allowed
