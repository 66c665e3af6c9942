"""Outline models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OutlineNode(BaseModel):
    """One entry of the table of contents.

    The root of a built outline is a synthetic container with empty ``text`` and ``id``;
    only its ``children`` are rendered.
    """

    text: str = ""
    id: str = ""
    children: list["OutlineNode"] = Field(default_factory=list)

    def iter_nodes(self) -> list["OutlineNode"]:
        """Return all descendants in document (pre-)order, excluding ``self``."""

        out: list[OutlineNode] = []
        for child in self.children:
            out.append(child)
            out.extend(child.iter_nodes())
        return out

    def depth(self) -> int:
        """Number of nested list levels below this node."""

        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)
