import logging
from typing import List

from coursereqs.catalog import Catalog
from coursereqs.schemas.requirements import CollectionRequirement, Requirement, is_throwaway

from .grouping import Arena, group_parens, trim
from .matchers import ParseContext, parse_group

logger = logging.getLogger(__name__)


def split_chunks(text: str) -> List[str]:
    """Split a requisite statement on period-space boundaries."""
    chunks = []
    for chunk in trim(text).split(". "):
        chunk = trim(chunk.rstrip("."))
        if chunk:
            chunks.append(chunk)
    return chunks


def parse_chunk(catalog: Catalog, chunk: str) -> Requirement:
    """
    Parse one chunk bottom-up: every parenthesized group first, innermost
    first, then the text left around them.
    """
    logger.debug("parsing chunk '%s'", chunk)
    text, groups = group_parens(chunk)
    ctx = ParseContext(catalog=catalog, arena=Arena.from_groups(groups))
    for grp in groups:
        ctx.arena.push(parse_group(ctx, grp))
    return parse_group(ctx, text)


def parse_statement(catalog: Catalog, text: str) -> CollectionRequirement | None:
    """Parse a whole requisite statement; None when nothing survives."""
    parsed = []
    for chunk in split_chunks(text):
        req = parse_chunk(catalog, chunk)
        if not is_throwaway(req):
            parsed.append(req)
    if not parsed:
        return None
    return CollectionRequirement(name="REQUISITES", required=len(parsed), options=parsed)
