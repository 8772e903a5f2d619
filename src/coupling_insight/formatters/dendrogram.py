"""Plain-text dendrogram listing.

Children are printed before their merge line, indented by depth:

    - A
    - B
  [merge sim=0.600] {A, B}
"""

from typing import Optional

from ..clustering.models import DendrogramNode


def render_dendrogram_text(root: Optional[DendrogramNode], indent: str = "  ") -> str:
    if root is None:
        return ""
    lines: list[str] = []
    _render(root, 0, indent, lines)
    return "\n".join(lines) + "\n"


def _render(node: DendrogramNode, depth: int, indent: str, lines: list[str]) -> None:
    if node.is_leaf:
        lines.append(f"{indent * depth}- {node.ordered_members[0]}")
        return
    for child in node.children:
        _render(child, depth + 1, indent, lines)
    members = ", ".join(sorted(node.members))
    lines.append(f"{indent * depth}[merge sim={node.similarity:.3f}] {{{members}}}")


def dendrogram_to_dict(node: DendrogramNode, precision: int = 4) -> dict:
    """Nested dict form of a dendrogram for JSON output."""
    if node.is_leaf:
        return {"unit": node.ordered_members[0]}
    return {
        "similarity": round(node.similarity, precision),
        "members": sorted(node.members),
        "children": [dendrogram_to_dict(child, precision) for child in node.children],
    }
