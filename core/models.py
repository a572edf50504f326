"""
Core Pydantic models for robots-interpreter.

Design principles:
- A RuleSet is built once by the parser and never mutated afterwards
- Pattern sequences are tuples, ordered longest-first at construction time
- Exports are deterministic (stable ordering, JSON-safe)
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


# ============================================================================
# Enums
# ============================================================================

class DirectiveKind(str, Enum):
    """Which robots.txt directive a line carries."""
    USER_AGENT = "user-agent"
    ALLOW = "allow"
    DISALLOW = "disallow"
    SITEMAP = "sitemap"


class IgnoreReason(str, Enum):
    """Why did the parser discard a line?"""
    BLANK = "blank"
    COMMENT = "comment"
    UNKNOWN = "unknown"  # Not one of the supported "<keyword>: " prefixes
    NO_USER_AGENT = "no_user_agent"  # Allow/Disallow before any User-agent
    EMPTY_VALUE = "empty_value"  # Bare "<keyword>:" with nothing after it


class DecisionReason(str, Enum):
    """Which branch of the precedence table produced a decision."""
    NO_MATCHING_AGENT = "no_matching_agent"
    NO_MATCHING_RULE = "no_matching_rule"
    ALLOW_ONLY = "allow_only"
    DISALLOW_ONLY = "disallow_only"
    ALLOW_LONGER = "allow_longer"
    DISALLOW_LONGER_OR_EQUAL = "disallow_longer_or_equal"


def longest_first(patterns: Iterable[str]) -> Tuple[str, ...]:
    """Stable sort by descending length; equal lengths keep their order."""
    return tuple(sorted(patterns, key=len, reverse=True))


# ============================================================================
# Rule Table
# ============================================================================

class AgentRules(BaseModel):
    """
    Allow/disallow path-patterns for one agent-pattern.

    Both sequences are sorted longest-first, so the first pattern that
    matches a path is also the most specific one.
    """
    model_config = ConfigDict(frozen=True)

    allow: Tuple[str, ...] = ()
    disallow: Tuple[str, ...] = ()

    @field_validator("allow", "disallow")
    @classmethod
    def sort_longest_first(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return longest_first(v)


class RuleSet(BaseModel):
    """
    A parsed robots.txt file.

    Example:
      rules = {"*": AgentRules(disallow=("/",)), "KirbyBot": AgentRules(allow=("/",))}
      agent_index = ("KirbyBot", "*")  # longest agent-pattern first
      sitemaps = ("https://example.com/sitemap.xml",)
    """
    model_config = ConfigDict(frozen=True)

    # Read-only view; the parser's working dict never escapes
    rules: Mapping[str, AgentRules] = Field(default_factory=dict, validate_default=True)

    # Every key of `rules` exactly once, longest first (first-seen order on ties)
    agent_index: Tuple[str, ...] = ()

    # Source order, duplicates kept
    sitemaps: Tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def build_agent_index(cls, data: Any) -> Any:
        """Derive the agent index from the rule keys when it is not supplied."""
        if isinstance(data, dict) and data.get("agent_index") is None:
            rules = data.get("rules") or {}
            data = {**data, "agent_index": longest_first(rules)}
        return data

    @field_validator("rules")
    @classmethod
    def freeze_rules(cls, v: Mapping[str, AgentRules]) -> Mapping[str, AgentRules]:
        return MappingProxyType(dict(v))

    @field_serializer("rules")
    def dump_rules(self, rules: Mapping[str, AgentRules]) -> Dict[str, AgentRules]:
        return dict(rules)

    @model_validator(mode="after")
    def check_agent_index(self) -> "RuleSet":
        if len(set(self.agent_index)) != len(self.agent_index):
            raise ValueError("agent_index lists an agent more than once")
        if set(self.agent_index) != set(self.rules):
            raise ValueError("agent_index must list every agent in rules exactly once")
        if self.agent_index != longest_first(self.agent_index):
            raise ValueError("agent_index must be sorted by descending length")
        return self

    @property
    def agents(self) -> Tuple[str, ...]:
        """Agent-patterns in resolution order."""
        return self.agent_index

    def get_rules(self, agent: str) -> Optional[AgentRules]:
        """Exact lookup of an agent-pattern's rules (no wildcard resolution)."""
        return self.rules.get(agent)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe export matching robots_interpreter/schemas/ruleset.schema.json."""
        return self.model_dump(mode="json")


# ============================================================================
# Parse Diagnostics
# ============================================================================

class Directive(BaseModel):
    """One recognised robots.txt line."""
    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=1)
    kind: DirectiveKind
    value: str  # Trimmed, case preserved


class IgnoredLine(BaseModel):
    """One line the parser discarded, and why."""
    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=1)
    reason: IgnoreReason
    text: str  # Trimmed line text


class ParseReport(BaseModel):
    """
    Result of inspecting a robots.txt file.

    `ruleset` is exactly what parse() returns for the same text; the report
    only adds the discarded lines.
    """
    model_config = ConfigDict(frozen=True)

    ruleset: RuleSet
    ignored: Tuple[IgnoredLine, ...] = ()
    line_count: int = 0

    @property
    def problems(self) -> Tuple[IgnoredLine, ...]:
        """Discarded lines other than blanks and comments."""
        harmless = {IgnoreReason.BLANK, IgnoreReason.COMMENT}
        return tuple(line for line in self.ignored if line.reason not in harmless)


# ============================================================================
# Decisions
# ============================================================================

class RobotsDecision(BaseModel):
    """
    Full answer to "may user_agent fetch path?".

    matched_allow / matched_disallow are the most specific matching patterns
    of the governing agent block (None when nothing matched).
    """
    model_config = ConfigDict(frozen=True)

    allowed: bool
    user_agent: str
    path: str
    matched_agent: Optional[str] = None
    matched_allow: Optional[str] = None
    matched_disallow: Optional[str] = None
    reason: DecisionReason
