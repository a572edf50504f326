"""robots.txt parser producing an immutable RuleSet.

Parsing never fails: lines that are blank, comments, unsupported directives,
or rules given before any User-agent line are discarded. `inspect` keeps a
record of what was discarded so callers can surface it.
"""

from __future__ import annotations

from typing import Iterator

from core.config import RobotsConfig
from core.models import (
    AgentRules,
    Directive,
    DirectiveKind,
    IgnoredLine,
    IgnoreReason,
    ParseReport,
    RuleSet,
)


_KIND_BY_KEYWORD = {kind.value: kind for kind in DirectiveKind}


def _strip_prefix(line: str, prefix: str) -> str | None:
    """Return the text after `prefix` when `line` starts with it, ignoring ASCII case."""
    head = line[: len(prefix)]
    if len(head) < len(prefix) or not head.isascii():
        return None
    if head.lower() != prefix:
        return None
    return line[len(prefix) :]


def _is_bare_keyword(line: str) -> bool:
    """True for lines like 'Disallow:' that name a directive but carry no value."""
    if not line.isascii():
        return False
    return line.lower() in {f"{keyword}:" for keyword in RobotsConfig.DIRECTIVE_PREFIXES}


def _classify(line_number: int, raw_line: str) -> Directive | IgnoredLine:
    """Classify one line on its own, without agent context."""
    line = raw_line.strip()
    if not line:
        return IgnoredLine(line_number=line_number, reason=IgnoreReason.BLANK, text=line)
    if line.startswith(RobotsConfig.COMMENT_PREFIX):
        return IgnoredLine(line_number=line_number, reason=IgnoreReason.COMMENT, text=line)

    for keyword, prefix in RobotsConfig.DIRECTIVE_PREFIXES.items():
        rest = _strip_prefix(line, prefix)
        if rest is None:
            continue
        value = rest.strip()
        if not value:
            return IgnoredLine(line_number=line_number, reason=IgnoreReason.EMPTY_VALUE, text=line)
        return Directive(line_number=line_number, kind=_KIND_BY_KEYWORD[keyword], value=value)

    if _is_bare_keyword(line):
        return IgnoredLine(line_number=line_number, reason=IgnoreReason.EMPTY_VALUE, text=line)
    return IgnoredLine(line_number=line_number, reason=IgnoreReason.UNKNOWN, text=line)


def tokenize(text: str) -> Iterator[Directive | IgnoredLine]:
    """Yield one Directive or IgnoredLine per input line, in order."""
    for index, raw_line in enumerate(text.splitlines(), start=1):
        yield _classify(index, raw_line)


def inspect(text: str) -> ParseReport:
    """Parse robots.txt text and report every discarded line."""
    current_agent: str | None = None
    patterns: dict[str, dict[DirectiveKind, list[str]]] = {}
    sitemaps: list[str] = []
    ignored: list[IgnoredLine] = []
    line_count = 0

    for item in tokenize(text):
        line_count += 1
        if isinstance(item, IgnoredLine):
            ignored.append(item)
            continue

        if item.kind is DirectiveKind.USER_AGENT:
            current_agent = item.value
        elif item.kind is DirectiveKind.SITEMAP:
            sitemaps.append(item.value)
        elif current_agent is None:
            ignored.append(
                IgnoredLine(
                    line_number=item.line_number,
                    reason=IgnoreReason.NO_USER_AGENT,
                    text=f"{item.kind.value}: {item.value}",
                )
            )
        else:
            record = patterns.setdefault(
                current_agent,
                {DirectiveKind.ALLOW: [], DirectiveKind.DISALLOW: []},
            )
            record[item.kind].append(item.value)

    # AgentRules sorts each sequence longest-first; RuleSet derives the agent index.
    rules = {
        agent: AgentRules(
            allow=record[DirectiveKind.ALLOW],
            disallow=record[DirectiveKind.DISALLOW],
        )
        for agent, record in patterns.items()
    }
    ruleset = RuleSet(rules=rules, sitemaps=sitemaps)
    return ParseReport(ruleset=ruleset, ignored=ignored, line_count=line_count)


def parse(text: str) -> RuleSet:
    """
    Parse robots.txt text into a RuleSet.

    Example:
        >>> ruleset = parse("User-agent: *\\nDisallow: /private/\\n")
        >>> ruleset.rules["*"].disallow
        ('/private/',)
    """
    return inspect(text).ruleset
