"""
Default interpreter configuration for robots-interpreter.

These settings are IMMUTABLE and describe the subset of the robots exclusion
protocol that the parser recognises, plus the limits the CLI applies when it
reads a file from disk.

Design: the parser and matcher are total functions over text. Nothing in
here can make them raise; the limits only apply to the CLI wrapper.
"""

from typing import Dict, Tuple


class RobotsConfig:
    """
    Immutable interpreter settings.
    """

    # ========================================================================
    # Directive Recognition (Non-negotiable)
    # ========================================================================

    # Keywords are matched case-insensitively against a fixed prefix.
    # The colon must be followed by a single space, exactly as written here.
    DIRECTIVE_PREFIXES: Dict[str, str] = {
        "user-agent": "user-agent: ",
        "allow": "allow: ",
        "disallow": "disallow: ",
        "sitemap": "sitemap: ",
    }
    """Supported directive keyword -> lowercase prefix (colon-space required)."""

    COMMENT_PREFIX: str = "#"
    """Lines starting with this (after trimming) are comments."""

    WILDCARD: str = "*"
    """Matches zero or more characters, including '/'."""

    # ========================================================================
    # CLI Defaults
    # ========================================================================

    DEFAULT_USER_AGENT: str = "robots-interpreter/0.1"
    """User-agent queried by `robots-interpreter check` when none is given."""

    # Same ceiling major crawlers apply to robots.txt bodies.
    MAX_ROBOTS_BYTES: int = 500_000
    """Max bytes the CLI reads from a robots.txt file. The core has no limit."""

    FILE_ENCODING: str = "utf-8"
    """Encoding used to decode files (undecodable bytes are replaced)."""

    SUPPORTED_KINDS: Tuple[str, ...] = ("user-agent", "allow", "disallow", "sitemap")
    """Directive kinds, in the order they are documented."""

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration at startup.

        Raises:
            AssertionError: If any constraint is violated.
        """
        assert (
            set(cls.DIRECTIVE_PREFIXES) == set(cls.SUPPORTED_KINDS)
        ), "DIRECTIVE_PREFIXES must cover exactly SUPPORTED_KINDS"

        assert all(
            prefix == f"{keyword}: " for keyword, prefix in cls.DIRECTIVE_PREFIXES.items()
        ), "Directive prefixes must be '<keyword>: ' in lowercase"

        assert (
            all(prefix.isascii() for prefix in cls.DIRECTIVE_PREFIXES.values())
        ), "Directive prefixes must be ASCII"

        assert len(cls.WILDCARD) == 1, "WILDCARD must be a single character"

        assert cls.MAX_ROBOTS_BYTES > 0, "MAX_ROBOTS_BYTES must be > 0"

        assert cls.DEFAULT_USER_AGENT.strip(), "DEFAULT_USER_AGENT must not be blank"


# Validate at module import time
RobotsConfig.validate()
