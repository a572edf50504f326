"""Integration tests for parser/robots.py."""

from __future__ import annotations

import pytest

from core.models import AgentRules, Directive, DirectiveKind, IgnoredLine, IgnoreReason
from parser import inspect, parse, tokenize


@pytest.mark.integration
def test_parse_well_formatted_robots_txt(kirby_robots_txt: str):
    """Both agent blocks and the sitemap should be collected."""
    ruleset = parse(kirby_robots_txt)

    assert set(ruleset.rules) == {"*", "KirbyBot"}
    assert ruleset.rules["*"] == AgentRules(allow=(), disallow=("/",))
    assert ruleset.rules["KirbyBot"].allow == ("/",)
    assert ruleset.rules["KirbyBot"].disallow == ("/prevented/",)
    assert ruleset.agents == ("KirbyBot", "*")
    assert ruleset.sitemaps == ("https://example.com/sitemap.xml",)


@pytest.mark.integration
def test_parse_badly_formatted_robots_txt(messy_robots_txt: str):
    """Garbage and orphan rules are dropped; keywords match in any case."""
    ruleset = parse(messy_robots_txt)

    assert list(ruleset.rules) == ["Kirby"]
    assert ruleset.rules["Kirby"].allow == ("/something", "/")
    assert ruleset.rules["Kirby"].disallow == ("/",)
    assert ruleset.sitemaps == ("https://www.example.com/sitemap.xml",)


@pytest.mark.integration
def test_parse_without_user_agent_keeps_only_sitemaps():
    """Allow/Disallow need an agent context; Sitemap does not."""
    ruleset = parse(
        "Allow: /a\n"
        "Disallow: /b\n"
        "Sitemap: https://example.com/one.xml\n"
        "Sitemap: https://example.com/two.xml\n"
        "Sitemap: https://example.com/one.xml\n"
    )

    assert ruleset.rules == {}
    assert ruleset.agents == ()
    assert ruleset.sitemaps == (
        "https://example.com/one.xml",
        "https://example.com/two.xml",
        "https://example.com/one.xml",
    )


@pytest.mark.integration
@pytest.mark.parametrize("keyword", ["user-agent", "USER-AGENT", "User-Agent", "uSeR-aGeNt"])
def test_directive_keywords_are_case_insensitive(keyword: str):
    """Keyword case does not matter; agent and pattern values keep their case."""
    ruleset = parse(f"{keyword}: MixedCaseBot\nDISALLOW: /Private/Docs\n")

    assert ruleset.agents == ("MixedCaseBot",)
    assert ruleset.rules["MixedCaseBot"].disallow == ("/Private/Docs",)


@pytest.mark.integration
def test_colon_space_is_required_after_keyword():
    """'Disallow:/x' and 'Disallow : /x' are not recognised directives."""
    ruleset = parse("User-agent: *\nDisallow:/x\nDisallow : /y\nAllow:\t/z\n")

    assert ruleset.rules == {}
    assert ruleset.agents == ()


@pytest.mark.integration
def test_values_and_lines_are_trimmed():
    """Surrounding whitespace on lines and values is ignored."""
    ruleset = parse("   User-agent:    Spaced Bot   \n\t Disallow:   /tmp/  \n")

    assert ruleset.agents == ("Spaced Bot",)
    assert ruleset.rules["Spaced Bot"].disallow == ("/tmp/",)


@pytest.mark.integration
def test_patterns_are_sorted_longest_first_with_stable_ties():
    """Longer patterns come first; equal lengths keep source order."""
    ruleset = parse(
        "User-agent: *\n"
        "Disallow: /b\n"
        "Disallow: /longest/\n"
        "Disallow: /a\n"
        "Allow: /x*\n"
        "Allow: /public/\n"
        "Allow: /y*\n"
    )

    assert ruleset.rules["*"].disallow == ("/longest/", "/b", "/a")
    assert ruleset.rules["*"].allow == ("/public/", "/x*", "/y*")


@pytest.mark.integration
def test_agent_index_orders_longest_first_then_first_seen():
    """The agent index is sorted by length; ties keep first-seen order."""
    ruleset = parse(
        "User-agent: BBB\nDisallow: /\n"
        "User-agent: *\nDisallow: /\n"
        "User-agent: AAA\nDisallow: /\n"
        "User-agent: LongerBot\nDisallow: /\n"
    )

    assert ruleset.agents == ("LongerBot", "BBB", "AAA", "*")
    assert set(ruleset.agents) == set(ruleset.rules)


@pytest.mark.integration
def test_repeated_user_agent_accumulates_rules():
    """A second block for the same agent appends to the first one."""
    ruleset = parse(
        "User-agent: Kirby\n"
        "Disallow: /one\n"
        "User-agent: Other\n"
        "Disallow: /other\n"
        "User-agent: Kirby\n"
        "Disallow: /two/\n"
    )

    assert ruleset.agents == ("Kirby", "Other")
    assert ruleset.rules["Kirby"].disallow == ("/two/", "/one")
    assert ruleset.rules["Other"].disallow == ("/other",)


@pytest.mark.integration
def test_user_agent_without_rules_creates_no_record():
    """Agent records only exist once a rule is added under them."""
    ruleset = parse("User-agent: Lonely\nUser-agent: Busy\nDisallow: /\n")

    assert ruleset.agents == ("Busy",)
    assert ruleset.get_rules("Lonely") is None


@pytest.mark.integration
@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n\n\n",
        "User-agent",
        ":",
        "::::",
        "\x00\x01\x02�� garbage",
        "USER-AGENT: bot\r\nDISALLOW: /x",
        "User-agent: *\rDisallow: /old-mac\r",
        "Kser-agent: kelvin\nDisallow: /",
        "Disallow: " + "/a" * 5000,
    ],
)
def test_parse_is_total(text: str):
    """Any text parses without raising."""
    ruleset = parse(text)

    assert set(ruleset.agents) == set(ruleset.rules)


@pytest.mark.integration
def test_input_without_trailing_newline_and_mixed_line_endings():
    """Last line is parsed even without a newline; CRLF and CR both split lines."""
    ruleset = parse("User-agent: a\r\nDisallow: /x\rAllow: /y")

    assert ruleset.rules["a"].disallow == ("/x",)
    assert ruleset.rules["a"].allow == ("/y",)


@pytest.mark.integration
def test_tokenize_classifies_each_line(messy_robots_txt: str):
    """tokenize yields one item per line without agent context."""
    items = list(tokenize(messy_robots_txt))

    assert len(items) == 12
    assert items[0] == IgnoredLine(line_number=1, reason=IgnoreReason.UNKNOWN, text="This is just wrong")
    assert items[2].reason == IgnoreReason.COMMENT
    assert items[3] == Directive(line_number=4, kind=DirectiveKind.ALLOW, value="/allowed")
    assert items[5].reason == IgnoreReason.BLANK
    assert items[6] == Directive(line_number=7, kind=DirectiveKind.USER_AGENT, value="Kirby")
    assert items[10].reason == IgnoreReason.UNKNOWN
    assert items[11].reason == IgnoreReason.EMPTY_VALUE


@pytest.mark.integration
def test_inspect_reports_discarded_lines(messy_robots_txt: str):
    """inspect records why each line was dropped and matches parse()."""
    report = inspect(messy_robots_txt)

    assert report.ruleset == parse(messy_robots_txt)
    assert report.line_count == 12
    assert len(report.ignored) == 7
    assert [(line.line_number, line.reason) for line in report.problems] == [
        (1, IgnoreReason.UNKNOWN),
        (2, IgnoreReason.UNKNOWN),
        (4, IgnoreReason.NO_USER_AGENT),
        (11, IgnoreReason.UNKNOWN),
        (12, IgnoreReason.EMPTY_VALUE),
    ]


@pytest.mark.integration
def test_inspect_clean_file_has_no_problems(kirby_robots_txt: str):
    """Blank and comment lines are ignored but not reported as problems."""
    report = inspect(kirby_robots_txt)

    assert report.line_count == 11
    assert report.problems == ()
    assert {line.reason for line in report.ignored} == {IgnoreReason.BLANK, IgnoreReason.COMMENT}
