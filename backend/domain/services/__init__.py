"""
Domain services - pure domain logic (stateless, no I/O).
"""

from .block_extractor import extract_blocks, replace_blocks, tag_pattern
from .record_parser import normalize_id, normalize_ids, parse_record
from .record_serializer import DOCUMENT_SEPARATOR, RecordDumper, dump_record, serialize_categories

__all__ = [
    # block_extractor.py
    "extract_blocks",
    "replace_blocks",
    "tag_pattern",
    # record_parser.py
    "normalize_id",
    "normalize_ids",
    "parse_record",
    # record_serializer.py
    "DOCUMENT_SEPARATOR",
    "RecordDumper",
    "dump_record",
    "serialize_categories",
]
