"""Fact record validation using a bundled JSON schema.

Usage:
    from patch_facts.validation import validate_fact_data

    result = validate_fact_data(facts.to_fact_dict())
    if not result.valid:
        print(f"Validation failed: {result.error_message} at {result.error_path}")
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import jsonschema

from patch_facts.logging_config import logger

PACKAGE_DIR = Path(__file__).parent
FACT_SCHEMA = PACKAGE_DIR / "schemas" / "patch_facts.schema.json"

_schema_cache: dict[str, dict] = {}


@dataclass
class ValidationResult:
    """Result of fact validation."""

    valid: bool
    error_message: Optional[str] = None
    error_path: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failure(cls, error_message: str, error_path: Optional[str] = None) -> "ValidationResult":
        return cls(valid=False, error_message=error_message, error_path=error_path)


def _load_schema(schema_path: Path) -> dict:
    """Load a JSON schema from disk with caching."""
    cache_key = str(schema_path)
    if cache_key not in _schema_cache:
        with open(schema_path, encoding="utf-8") as f:
            _schema_cache[cache_key] = json.load(f)
    return _schema_cache[cache_key]


def validate_fact_data(data: dict) -> ValidationResult:
    """
    Validate a rendered fact record against the bundled schema.

    Args:
        data: Fact record as produced by PatchFacts.to_fact_dict()

    Returns:
        ValidationResult
    """
    schema = _load_schema(FACT_SCHEMA)
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or None
        logger.debug(f"Fact validation failed at {path}: {e.message}")
        return ValidationResult.failure(e.message, path)
    return ValidationResult.success()
