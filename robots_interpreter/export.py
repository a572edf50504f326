"""RuleSet JSON export with schema validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from core.models import RuleSet


# Shipped as package data so installed copies find it too.
SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"
RULESET_SCHEMA_PATH = SCHEMAS_DIR / "ruleset.schema.json"


def load_ruleset_schema() -> dict[str, Any]:
    """Load the RuleSet JSON schema bundled with the package."""
    if not RULESET_SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {RULESET_SCHEMA_PATH}")
    return json.loads(RULESET_SCHEMA_PATH.read_text(encoding="utf-8"))


def export_ruleset(ruleset: RuleSet, output_path: str | Path) -> dict[str, Any]:
    """
    Write a RuleSet as pretty-printed JSON and return the written payload.

    The payload is validated before anything is written; on an invalid
    payload raises ValueError and leaves the output untouched.
    """
    payload = ruleset.to_dict()
    try:
        jsonschema.validate(payload, load_ruleset_schema())
    except jsonschema.ValidationError as exc:
        raise ValueError(f"RuleSet export validation failed: {exc.message}") from exc

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return payload
