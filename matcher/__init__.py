"""Matcher subsystem: wildcard engine, agent resolution and rule precedence."""

from matcher.rules import evaluate, is_allowed, resolve_agent
from matcher.wildcard import match_pattern

__all__ = [
    "evaluate",
    "is_allowed",
    "match_pattern",
    "resolve_agent",
]
