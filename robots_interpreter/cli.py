"""Minimal CLI entrypoint for robots-interpreter."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any
from typing import Sequence
from uuid import uuid4

from core.config import RobotsConfig
from core.structured_logging import emit_json_event
from matcher import evaluate
from parser import inspect, parse
from robots_interpreter.export import RULESET_SCHEMA_PATH, export_ruleset


def _resolve_command_run_id(args: argparse.Namespace) -> str:
    """Resolve run_id from CLI args or create one for command-level tracing."""
    explicit = getattr(args, "run_id", None)
    if explicit:
        return str(explicit)
    return str(uuid4())


def _emit_cli_event(
    event_type: str,
    *,
    run_id: str,
    command: str,
    **payload: Any,
) -> str:
    """Emit one structured CLI event line with standard fields."""
    return emit_json_event(
        event_type=event_type,
        run_id=run_id,
        command=command,
        **payload,
    )


def _read_robots_file(path: Path, *, run_id: str, command: str) -> str:
    """Read and decode a robots.txt file, truncating oversized input."""
    if not path.exists():
        raise FileNotFoundError(f"robots.txt file not found: {path}")

    raw = path.read_bytes()
    if len(raw) > RobotsConfig.MAX_ROBOTS_BYTES:
        _emit_cli_event(
            "cli_input_truncated",
            run_id=run_id,
            command=command,
            level="warning",
            file=str(path),
            bytes_read=len(raw),
            bytes_kept=RobotsConfig.MAX_ROBOTS_BYTES,
        )
        raw = raw[: RobotsConfig.MAX_ROBOTS_BYTES]
    return raw.decode(RobotsConfig.FILE_ENCODING, errors="replace")


def _cmd_check(args: argparse.Namespace, run_id: str) -> int:
    """Answer allow/disallow for each path; exit 1 when any path is disallowed."""
    robots_file = Path(args.robots_file)
    ruleset = parse(_read_robots_file(robots_file, run_id=run_id, command="check"))

    disallowed = 0
    for path in args.paths:
        decision = evaluate(ruleset, args.user_agent, path)
        if not decision.allowed:
            disallowed += 1
        _emit_cli_event(
            "cli_check_decision",
            run_id=run_id,
            command="check",
            **decision.model_dump(mode="json"),
        )

    _emit_cli_event(
        "cli_check_completed",
        run_id=run_id,
        command="check",
        file=str(robots_file),
        user_agent=args.user_agent,
        checked=len(args.paths),
        disallowed=disallowed,
    )
    return 0 if disallowed == 0 else 1


def _cmd_sitemaps(args: argparse.Namespace, run_id: str) -> int:
    """List Sitemap URLs in source order."""
    robots_file = Path(args.robots_file)
    ruleset = parse(_read_robots_file(robots_file, run_id=run_id, command="sitemaps"))
    _emit_cli_event(
        "cli_sitemaps_completed",
        run_id=run_id,
        command="sitemaps",
        file=str(robots_file),
        sitemaps=list(ruleset.sitemaps),
    )
    return 0


def _cmd_dump(args: argparse.Namespace, run_id: str) -> int:
    """Write the parsed RuleSet as schema-validated JSON."""
    robots_file = Path(args.robots_file)
    ruleset = parse(_read_robots_file(robots_file, run_id=run_id, command="dump"))
    output = Path(args.output)
    export_ruleset(ruleset, output)
    _emit_cli_event(
        "cli_dump_completed",
        run_id=run_id,
        command="dump",
        file=str(robots_file),
        output=str(output),
        agents=list(ruleset.agents),
        sitemap_count=len(ruleset.sitemaps),
    )
    return 0


def _cmd_lint(args: argparse.Namespace, run_id: str) -> int:
    """Report lines the parser discards; exit 1 when any were discarded for cause."""
    robots_file = Path(args.robots_file)
    report = inspect(_read_robots_file(robots_file, run_id=run_id, command="lint"))

    for line in report.problems:
        _emit_cli_event(
            "cli_lint_ignored_line",
            run_id=run_id,
            command="lint",
            level="warning",
            line_number=line.line_number,
            reason=line.reason.value,
            text=line.text,
        )

    _emit_cli_event(
        "cli_lint_completed",
        run_id=run_id,
        command="lint",
        file=str(robots_file),
        line_count=report.line_count,
        ignored=len(report.ignored),
        problems=len(report.problems),
        agents=list(report.ruleset.agents),
    )
    return 0 if not report.problems else 1


def _validate_schema_file(path: Path) -> None:
    """Validate that a JSON schema file is well-formed and has required top-level keys."""
    data = json.loads(path.read_text(encoding="utf-8"))
    required_keys = {"$schema", "type", "properties", "required"}
    missing = required_keys.difference(data)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ValueError(f"{path.name} missing required schema keys: {missing_str}")


def _cmd_validate_schemas(args: argparse.Namespace, run_id: str) -> int:
    """Validate schema files for basic structural correctness."""
    if not RULESET_SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {RULESET_SCHEMA_PATH}")
    _validate_schema_file(RULESET_SCHEMA_PATH)
    _emit_cli_event(
        "cli_validate_schemas_completed",
        run_id=run_id,
        command="validate-schemas",
        schema_files=[str(RULESET_SCHEMA_PATH)],
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create argument parser for the robots-interpreter CLI."""
    parser = argparse.ArgumentParser(
        prog="robots-interpreter",
        description="Parse robots.txt files and answer crawl-permission queries",
    )
    parser.add_argument("--version", action="version", version="robots-interpreter 0.1.0")

    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser(
        "check",
        help="Decide whether a user-agent may fetch one or more paths",
    )
    check_parser.add_argument("robots_file", help="Path to a robots.txt file")
    check_parser.add_argument("paths", nargs="+", help="Normalized URL paths, e.g. /private/doc")
    check_parser.add_argument(
        "--user-agent",
        default=RobotsConfig.DEFAULT_USER_AGENT,
        help="User-agent to resolve against the agent blocks",
    )
    check_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    check_parser.set_defaults(func=_cmd_check)

    sitemaps_parser = subparsers.add_parser(
        "sitemaps",
        help="List Sitemap URLs declared in a robots.txt file",
    )
    sitemaps_parser.add_argument("robots_file", help="Path to a robots.txt file")
    sitemaps_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    sitemaps_parser.set_defaults(func=_cmd_sitemaps)

    dump_parser = subparsers.add_parser(
        "dump",
        help="Write the parsed rule set as JSON with schema validation",
    )
    dump_parser.add_argument("robots_file", help="Path to a robots.txt file")
    dump_parser.add_argument("--output", required=True, help="Output JSON path")
    dump_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    dump_parser.set_defaults(func=_cmd_dump)

    lint_parser = subparsers.add_parser(
        "lint",
        help="Report lines the parser discards",
    )
    lint_parser.add_argument("robots_file", help="Path to a robots.txt file")
    lint_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    lint_parser.set_defaults(func=_cmd_lint)

    validate_parser = subparsers.add_parser(
        "validate-schemas",
        help="Validate the JSON schema used for rule set exports",
    )
    validate_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    validate_parser.set_defaults(func=_cmd_validate_schemas)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Execute CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # One run_id per invocation, shared by every event including cli_error.
    run_id = _resolve_command_run_id(args)
    try:
        return int(args.func(args, run_id))
    except Exception as exc:
        _emit_cli_event(
            "cli_error",
            run_id=run_id,
            command=str(getattr(args, "command", "unknown")),
            level="error",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return 1


def cli() -> None:
    """Console-script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
