"""Fact record serialization and persistence.

The fact file is a single-line JSON object. It is written to a temporary file
in the facts directory and renamed into place, so readers never see a
partial record.
"""

import json
import os
import stat
import tempfile
from pathlib import Path

from .exceptions import FactValidationError, FileProcessingError
from .facts import PatchFacts
from .logging_config import logger
from .validation import validate_fact_data

FACT_SUFFIX = ".fact"


def serialize_facts(facts: PatchFacts) -> str:
    """
    Render the fact record as one line of JSON.

    Raises:
        FactValidationError: If the rendered record does not match the schema
    """
    data = facts.to_fact_dict()
    result = validate_fact_data(data)
    if not result.valid:
        raise FactValidationError(f"Invalid fact record ({result.error_path}): {result.error_message}")
    return json.dumps(data) + "\n"


def fact_file_path(facts_dir: Path, fact_name: str) -> Path:
    """Path of the fact file, e.g. ``/etc/ansible/facts.d/os_patch_status.fact``."""
    return Path(facts_dir) / f"{fact_name}{FACT_SUFFIX}"


def ensure_facts_dir(facts_dir: Path) -> None:
    """Create the facts directory if it does not exist."""
    try:
        Path(facts_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileProcessingError(f"Could not create facts directory {facts_dir}: {e}")


def write_fact_file(facts: PatchFacts, facts_dir: Path, fact_name: str) -> Path:
    """
    Serialize and atomically write the fact file, replacing any previous one.

    Args:
        facts: Assembled fact record
        facts_dir: Directory the fact consumer reads
        fact_name: Fact name; the file is ``<fact_name>.fact``

    Returns:
        Path of the written file

    Raises:
        FactValidationError: If the record is invalid (nothing is written)
        FileProcessingError: If the file cannot be written
    """
    content = serialize_facts(facts)
    ensure_facts_dir(facts_dir)
    path = fact_file_path(facts_dir, fact_name)

    try:
        fd, temp = tempfile.mkstemp(dir=str(facts_dir), prefix=f".{fact_name}.", suffix=".tmp")
    except OSError as e:
        raise FileProcessingError(f"Could not create a temporary file in {facts_dir}: {e}")

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            fp.write(content)
        # Ansible executes facts.d files that carry an exec bit
        os.chmod(temp, stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH)
        os.replace(temp, path)
    except OSError as e:
        if os.path.exists(temp):
            os.unlink(temp)
        raise FileProcessingError(f"Could not write fact file {path}: {e}")

    logger.info(f"Wrote fact file: {path}")
    return path
