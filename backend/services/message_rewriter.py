"""
Message ingestion: pull record blocks out of a message and rewrite it.

Tags are processed category by category, tag by tag, each against the text
left by the previous tag. Consumed blocks are replaced with a status line;
blocks that fail to parse stay in the text as written.
"""

import logging
from typing import List, Tuple

from domain.entities.npc_models import BlockOutcome, IngestResult, Parsed, TagBlock
from domain.services.block_extractor import extract_blocks, replace_blocks
from domain.services.record_parser import parse_record

from services.record_store import RecordStore

logger = logging.getLogger("MessageRewriter")


def ingest_message(text: str, store: RecordStore, collapse_tag_status: bool = False) -> IngestResult:
    """
    Merge every record block of a message into the store.

    Args:
        text: Message text
        store: Record store to merge into
        collapse_tag_status: Legacy mode; every consumed block of a tag is
            replaced with the status line of the last consumed block of that tag

    Returns:
        IngestResult with the rewritten text and per-block outcomes
    """
    result = IngestResult(text=text)
    if not text:
        return result

    for category, tag in store.tag_routes():
        blocks = extract_blocks(result.text, tag)
        if not blocks:
            continue

        replacements: List[Tuple[TagBlock, str]] = []
        for block in blocks:
            outcome = parse_record(block.content)
            block_outcome = BlockOutcome(category=category.name, block=block, outcome=outcome)
            result.outcomes.append(block_outcome)

            if isinstance(outcome, Parsed):
                block_outcome.result = category.upsert(outcome.record)
                block_outcome.status_line = block_outcome.result.status_line(category.spec.noun)
                replacements.append((block, block_outcome.status_line))
            else:
                logger.debug(f"Skipped <{tag}> block: {outcome.reason}")

        if not replacements:
            continue

        if collapse_tag_status:
            last_line = replacements[-1][1]
            replacements = [(block, last_line) for block, _ in replacements]

        result.text = replace_blocks(result.text, replacements)
        result.changed = True

    if result.changed:
        result.text = result.text.strip()

    return result
