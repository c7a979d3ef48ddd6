"""
Record parsing for tagged YAML blocks.

Each block is a single YAML document describing one record. Identifiers are
normalized here so that `id: 7` and `id: "0007"` refer to the same record.
Failures are returned as Skipped outcomes, never raised.
"""

import logging
from typing import Any

from core.settings import ID_WIDTH
from ruamel.yaml import YAML
from ruamel.yaml.constructor import DuplicateKeyError, SafeConstructor
from ruamel.yaml.error import YAMLError

from domain.entities.npc_models import Parsed, ParseOutcome, Skipped
from domain.value_objects.enums import SkipReason

logger = logging.getLogger("RecordParser")


class RecordConstructor(SafeConstructor):
    """Safe constructor that leaves timestamps as the text they were written as."""


RecordConstructor.add_constructor("tag:yaml.org,2002:timestamp", RecordConstructor.construct_yaml_str)

# YAML 1.2: "0010" is decimal 10, not octal
yaml = YAML(typ="safe", pure=True)
yaml.Constructor = RecordConstructor


def normalize_id(value: Any) -> Any:
    """
    Convert a non-string identifier to its canonical string form.

    Numbers become zero-padded strings (7 -> "0007"). Strings are returned
    unchanged and None is left as None (treated as missing by callers).
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value)
    return text.rjust(ID_WIDTH, "0")


def normalize_ids(value: Any) -> Any:
    """Apply normalize_id to every "id" key, at any depth."""
    if isinstance(value, dict):
        return {key: normalize_id(item) if key == "id" else normalize_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize_ids(item) for item in value]
    return value


def parse_record(content: str) -> ParseOutcome:
    """
    Parse the inner text of one tag block into a record.

    Args:
        content: Raw YAML text

    Returns:
        Parsed(record) or Skipped(reason)
    """
    try:
        data = yaml.load(content)
    except (YAMLError, DuplicateKeyError) as e:
        logger.debug(f"Discarding block with invalid YAML: {e}")
        return Skipped(SkipReason.PARSE_ERROR, str(e))

    if not isinstance(data, dict):
        logger.debug(f"Discarding block that is not a mapping ({type(data).__name__})")
        return Skipped(SkipReason.NOT_A_MAPPING, type(data).__name__)

    record = normalize_ids(data)
    if not record.get("id"):
        logger.debug("Discarding block without an id")
        return Skipped(SkipReason.MISSING_ID)

    return Parsed(record)
