"""Wildcard matching for agent- and path-patterns."""

from __future__ import annotations

from core.config import RobotsConfig


def match_pattern(pattern: str, candidate: str) -> bool:
    """
    Match `candidate` against a robots.txt pattern.

    Rules:
    - No wildcard in `pattern`: plain prefix match
    - Otherwise '*' matches any run of characters (including '/' and the
      empty string) and the whole pattern must consume the whole candidate
    - No '$' anchoring; every other character matches only itself
    """
    if RobotsConfig.WILDCARD not in pattern:
        return candidate.startswith(pattern)
    return _match_wildcard(pattern, candidate)


def _match_wildcard(pattern: str, candidate: str) -> bool:
    """Full-string glob match where the wildcard is the only metacharacter."""
    wildcard = RobotsConfig.WILDCARD
    p = c = 0
    star = -1  # pattern index of the last wildcard seen
    resume = 0  # candidate index that wildcard currently extends to

    while c < len(candidate):
        if p < len(pattern) and pattern[p] == wildcard:
            star = p
            resume = c
            p += 1
        elif p < len(pattern) and pattern[p] == candidate[c]:
            p += 1
            c += 1
        elif star >= 0:
            # Let the last wildcard swallow one more character and retry.
            resume += 1
            c = resume
            p = star + 1
        else:
            return False

    while p < len(pattern) and pattern[p] == wildcard:
        p += 1
    return p == len(pattern)
