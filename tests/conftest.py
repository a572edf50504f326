"""
Shared pytest fixtures and configuration for robots-interpreter tests.
"""

import pytest
from pathlib import Path

from core.models import RuleSet
from parser import parse


# ============================================================================
# Fixtures: robots.txt Text
# ============================================================================

KIRBY_ROBOTS_TXT = """
# Prevent everyone from crawling anything
User-agent: *
Disallow: /

# Allow KirbyBot to crawl everything but /prevented/
User-agent: KirbyBot
Allow: /
Disallow: /prevented/

Sitemap: https://example.com/sitemap.xml
"""


@pytest.fixture
def kirby_robots_txt() -> str:
    """Well-formed robots.txt with a catch-all block and one named agent."""
    return KIRBY_ROBOTS_TXT


@pytest.fixture
def messy_robots_txt() -> str:
    """Badly formatted robots.txt mixing garbage, case and orphan rules."""
    return (
        "This is just wrong\n"
        "// Definitely not a robots.txt comment...\n"
        "# The allow is ignored because no user-agent is provided yet\n"
        "Allow: /allowed\n"
        "Sitemap: https://www.example.com/sitemap.xml\n"
        "\n"
        "user-agent: Kirby\n"
        "ALLOW: /\n"
        "DisALLow: /\n"
        "Allow: /something\n"
        "Crawl-delay: 10\n"
        "Disallow:\n"
    )


# ============================================================================
# Fixtures: Parsed RuleSets
# ============================================================================

@pytest.fixture
def kirby_ruleset(kirby_robots_txt: str) -> RuleSet:
    """Parsed form of kirby_robots_txt."""
    return parse(kirby_robots_txt)


@pytest.fixture
def robots_file(tmp_path: Path, kirby_robots_txt: str) -> Path:
    """kirby_robots_txt written to disk for CLI tests."""
    path = tmp_path / "robots.txt"
    path.write_text(kirby_robots_txt, encoding="utf-8")
    return path


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "contract: contract schema compliance tests")
    config.addinivalue_line("markers", "integration: end-to-end integration tests")
    config.addinivalue_line("markers", "unit: unit tests")
