"""Core module for robots-interpreter."""

from core.models import (
    AgentRules,
    DecisionReason,
    Directive,
    DirectiveKind,
    IgnoredLine,
    IgnoreReason,
    ParseReport,
    RobotsDecision,
    RuleSet,
)
from core.config import RobotsConfig
from core.structured_logging import emit_json_event, render_json_event

__all__ = [
    "AgentRules",
    "DecisionReason",
    "Directive",
    "DirectiveKind",
    "IgnoredLine",
    "IgnoreReason",
    "ParseReport",
    "RobotsDecision",
    "RuleSet",
    "RobotsConfig",
    "emit_json_event",
    "render_json_event",
]
