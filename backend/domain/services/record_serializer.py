"""
YAML serialization of record categories for prompt injection.

Output is a stream of YAML documents, one per record, each preceded by the
category header (a YAML comment). String values are double-quoted with
JSON-compatible escapes so multi-line text stays on one line.
"""

from typing import Any, Iterable, Optional, Sequence, Tuple

import yaml
from core.settings import get_settings

from domain.entities.npc_models import CategorySpec, Record

DOCUMENT_SEPARATOR = "\n---\n\n"


class _QuotedString(str):
    """Marker type for string values that must be double-quoted."""


class RecordDumper(yaml.SafeDumper):
    """SafeDumper that double-quotes marked strings."""


def _represent_quoted(dumper: yaml.SafeDumper, data: _QuotedString):
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')


RecordDumper.add_representer(_QuotedString, _represent_quoted)


def _quote_values(value: Any) -> Any:
    """Mark every string value (not mapping keys) for double quoting."""
    if isinstance(value, dict):
        return {key: _quote_values(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_quote_values(item) for item in value]
    if isinstance(value, str):
        return _QuotedString(value)
    return value


def dump_record(record: Record, line_width: Optional[int] = None) -> str:
    """
    Serialize one record as a YAML mapping.

    Args:
        record: Record to serialize (key order is preserved)
        line_width: Maximum line width; defaults to the configured width

    Returns:
        YAML text ending with a newline
    """
    if line_width is None:
        line_width = get_settings().yaml_line_width
    return yaml.dump(
        _quote_values(record),
        Dumper=RecordDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=line_width,
    )


def serialize_categories(
    categories: Iterable[Tuple[CategorySpec, Sequence[Record]]],
    only: Optional[str] = None,
    line_width: Optional[int] = None,
) -> str:
    """
    Render categories as concatenated YAML documents.

    Args:
        categories: (spec, records) pairs in serialization order
        only: Restrict output to the category with this name
        line_width: Passed to dump_record

    Returns:
        The full prompt text; empty when there are no records
    """
    parts = []
    for spec, records in categories:
        if only is not None and spec.name != only:
            continue
        for record in records:
            parts.append(DOCUMENT_SEPARATOR)
            parts.append(spec.header + "\n")
            parts.append(dump_record(record, line_width))
    return "".join(parts)
