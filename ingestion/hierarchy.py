import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

_BYTE_ORDER_MARK = "\ufeff"


@dataclass
class OutlineLine:
    line_number: int
    indent: int
    name: str


@dataclass
class PlannedCategory:
    """A category to insert, with its parent already resolved."""

    id: str
    parent_id: Optional[str]
    name: str
    line_number: int


def parse_outline(source: str) -> List[OutlineLine]:
    """
    Split indentation-formatted text into outline lines.

    Expected format:
    - One category name per line
    - Nesting expressed by leading whitespace; every tab or space counts as
      one column, tabs are not expanded
    - Blank lines are ignored and do not affect nesting
    """
    outline = []
    if source.startswith(_BYTE_ORDER_MARK):
        source = source[len(_BYTE_ORDER_MARK):]

    for line_number, raw_line in enumerate(source.split("\n"), start=1):
        name = raw_line.strip()
        if not name:
            continue

        if not any(ch.isprintable() for ch in name):
            logger.warning(f"Skipping malformed line {line_number}: {raw_line!r}")
            continue

        indent = len(raw_line) - len(raw_line.lstrip())
        outline.append(OutlineLine(line_number=line_number, indent=indent, name=name))

    return outline


def plan_insertions(
    outline: List[OutlineLine],
    anchor_parent_id: Optional[str],
    new_id: Callable[[], str],
) -> List[PlannedCategory]:
    """Resolve each outline line to a parent in a single pass.

    A stack holds the (id, indent) path of open ancestors. Entries at the same
    or deeper indentation than the current line are closed first, so a line at
    the same indent as the top becomes its sibling. Lines with no open
    ancestor go under anchor_parent_id.

    Args:
        outline: Lines from parse_outline().
        anchor_parent_id: Parent for top-level lines, or None for roots.
        new_id: Callable returning a fresh category ID.

    Returns:
        Planned insertions in input order; every parent precedes its children.
    """
    planned = []
    stack: List[Tuple[str, int]] = []

    for line in outline:
        while stack and stack[-1][1] >= line.indent:
            stack.pop()

        parent_id = stack[-1][0] if stack else anchor_parent_id
        category_id = new_id()
        planned.append(
            PlannedCategory(
                id=category_id,
                parent_id=parent_id,
                name=line.name,
                line_number=line.line_number,
            )
        )
        stack.append((category_id, line.indent))

    return planned


def ingest(
    source: str, anchor_parent_id: Optional[str], new_id: Callable[[], str]
) -> List[PlannedCategory]:
    """Parse bulk text and plan the insertions it describes."""
    outline = parse_outline(source)
    planned = plan_insertions(outline, anchor_parent_id, new_id)
    logger.info(f"Parsed {len(planned)} categories from bulk text")
    return planned
