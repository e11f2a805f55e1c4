"""Expand/select state for category trees.

``expanded`` controls disclosure and ``selected`` controls filter membership.
The two never influence each other: a row click only expands, a checkbox
click only selects. Parent-to-descendant inclusion is resolved when the
filter runs, so ``selected`` holds exactly the ids the user ticked.

The header navigation uses the same state with selection disabled and
hover transitions instead of clicks.
"""

from typing import Sequence

from pydantic import BaseModel, ConfigDict

from storefront.catalog.tree import category_path, index_tree, iter_tree
from storefront.schemas.category import CategoryNode, TreeRow


def _toggle(ids: frozenset[int], node_id: int) -> frozenset[int]:
    return ids - {node_id} if node_id in ids else ids | {node_id}


class CategoryTreeState(BaseModel):
    model_config = ConfigDict(frozen=True)

    expanded: frozenset[int] = frozenset()
    selected: frozenset[int] = frozenset()
    selection_enabled: bool = True

    @classmethod
    def navigation(cls) -> "CategoryTreeState":
        """State for menus that navigate but never filter."""
        return cls(selection_enabled=False)

    # Click gestures

    def click_row(self, roots: Sequence[CategoryNode], node_id: int) -> "CategoryTreeState":
        node = index_tree(roots).get(node_id)
        if node is None or not node.has_children:
            return self
        return self.model_copy(update={"expanded": _toggle(self.expanded, node_id)})

    def click_checkbox(self, node_id: int) -> "CategoryTreeState":
        if not self.selection_enabled:
            return self
        return self.model_copy(update={"selected": _toggle(self.selected, node_id)})

    def reset(self) -> "CategoryTreeState":
        """Clear the selection; disclosure state is left alone."""
        return self.model_copy(update={"selected": frozenset()})

    # Hover gestures (flyout menus)

    def hover(self, roots: Sequence[CategoryNode], node_id: int) -> "CategoryTreeState":
        path = category_path(roots, node_id)
        if not path:
            return self
        return self.model_copy(update={"expanded": frozenset(path)})

    def leave(self) -> "CategoryTreeState":
        return self.model_copy(update={"expanded": frozenset()})

    # Derived views

    def prune(self, roots: Sequence[CategoryNode]) -> "CategoryTreeState":
        """Drop ids that no longer exist after the tree was rebuilt."""
        known = frozenset(index_tree(roots))
        return self.model_copy(
            update={
                "expanded": self.expanded & known,
                "selected": self.selected & known,
            }
        )

    def rows(self, roots: Sequence[CategoryNode]) -> list[TreeRow]:
        """Visible rows in display order; children of collapsed nodes are hidden."""
        out: list[TreeRow] = []
        hidden_below: int | None = None
        for node, depth in iter_tree(roots):
            if hidden_below is not None:
                if depth > hidden_below:
                    continue
                hidden_below = None

            is_open = node.has_children and node.id in self.expanded
            out.append(
                TreeRow(
                    id=node.id,
                    name=node.name,
                    slug=node.slug,
                    depth=depth,
                    has_children=node.has_children,
                    is_open=is_open,
                    is_checked=self.selection_enabled and node.id in self.selected,
                )
            )
            if not is_open:
                hidden_below = depth
        return out

    def summary(self) -> str:
        if not self.selected:
            return "All categories selected."
        return f"{len(self.selected)} category selected."
