"""Outline construction.

Turns a flat, document-ordered stream of headings into a nested :class:`OutlineNode` tree.

The builder keeps an upside-down stack of open containers: ``stack[0]`` is the most deeply
nested list currently open, ``stack[-1]`` is the root. Headings deeper than the previous one
open a nested list under the last item (if there is one); shallower headings pop back up, but
never past the root. Any level sequence, including skipped and out-of-order levels, yields a
well-formed tree.
"""

from __future__ import annotations

from typing import Iterable

from htmltoc.logging import get_logger
from htmltoc.models.heading import HeadingRecord
from htmltoc.models.outline import OutlineNode

logger = get_logger(__name__)

LevelStack = list[OutlineNode]


def adjust_stack(
    stack: LevelStack, level: int, current_level: int
) -> tuple[LevelStack, OutlineNode]:
    """Move ``stack`` to the container a heading at ``level`` belongs in.

    Args:
        stack: Open containers, top first. Mutated in place.
        level: Level of the incoming heading.
        current_level: Level of the previous heading (0 before the first one).

    Returns:
        The stack and the container the heading should be appended to (``stack[0]``).
    """

    if level > current_level:
        # Only nest when there is an item to nest under; skipped levels stay flat.
        top = stack[0]
        if top.children:
            stack.insert(0, top.children[-1])
    else:
        del stack[: min(current_level - level, len(stack) - 1)]
    return stack, stack[0]


class OutlineBuilder:
    """Incrementally builds an outline, one heading at a time.

    ``root`` may already hold children (items present before the first heading); a deeper
    first heading then nests under the last of them.
    """

    def __init__(self, root: OutlineNode | None = None) -> None:
        self.root = root if root is not None else OutlineNode()
        self.stack: LevelStack = [self.root]
        self.current_level = 0

    def push(self, text: str, heading_id: str, level: int) -> OutlineNode:
        """Add a heading and return the node created for it."""

        self.stack, container = adjust_stack(self.stack, level, self.current_level)
        node = OutlineNode(text=text, id=heading_id)
        container.children.append(node)
        self.current_level = level
        logger.debug(
            "Placed %r at level %d (stack height %d)", heading_id, level, len(self.stack)
        )
        return node

    def add(self, record: HeadingRecord) -> OutlineNode:
        return self.push(record.text, record.anchor, record.level)


def build_outline(records: Iterable[HeadingRecord]) -> OutlineNode:
    """Build a tree from records that already carry their ids.

    Returns:
        The synthetic root node.
    """

    builder = OutlineBuilder()
    for record in records:
        builder.add(record)
    return builder.root
