"""Category tree models.

The tree is held as an arena: every category lives in a single id -> Category
mapping and refers to its children by id. Snapshots are immutable; each
``with_*``/``without_*`` method returns a new ``CategoryTree`` that reuses every
untouched ``Category`` by reference. The node mapping is exposed read-only.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from errors import CategoryNotFoundError


@dataclass(frozen=True)
class CategoryLink:
    """One endpoint of a symmetric cross-link.

    Attributes:
        id: ID of the category on the other end of the link.
        name: Display label, identical on both endpoints.
    """

    id: str
    name: str


@dataclass(frozen=True)
class Category:
    """A named node in the category hierarchy.

    Attributes:
        id: Unique identifier, assigned at creation.
        name: Display name.
        parent_id: ID of the owning parent, or None for a root.
        children: Child category IDs in creation order.
        linked_ids: Cross-links to other categories.
    """

    id: str
    name: str
    parent_id: Optional[str] = None
    children: Tuple[str, ...] = ()
    linked_ids: Tuple[CategoryLink, ...] = ()

    def link_to(self, target_id: str) -> Optional[CategoryLink]:
        """Get this category's link entry for target_id, if any."""
        for link in self.linked_ids:
            if link.id == target_id:
                return link
        return None


@dataclass(frozen=True)
class FlatCategory:
    """A category with its depth in a pre-order listing (0 for roots)."""

    category: Category
    depth: int


@dataclass(frozen=True)
class CategoryTree:
    """Immutable snapshot of the whole category hierarchy."""

    nodes: Mapping[str, Category] = field(default_factory=dict)
    roots: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.nodes, MappingProxyType):
            object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    def __contains__(self, category_id) -> bool:
        return category_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, category_id: Optional[str]) -> Optional[Category]:
        if category_id is None:
            return None
        return self.nodes.get(category_id)

    def require(self, category_id: str) -> Category:
        """Get a category, raising CategoryNotFoundError when absent."""
        category = self.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def root_categories(self) -> List[Category]:
        return [self.nodes[root_id] for root_id in self.roots]

    def children_of(self, category_id: str) -> List[Category]:
        return [self.nodes[child_id] for child_id in self.require(category_id).children]

    def with_category(self, category: Category) -> "CategoryTree":
        """Insert a new category under its parent (or as a root).

        Raises:
            CategoryNotFoundError: If the category's parent is not in the tree.
            ValueError: If the category's ID is already taken.
        """
        return self.with_categories([category])

    def with_categories(self, categories: Iterable[Category]) -> "CategoryTree":
        """Insert several new categories in order, copying the node map once.

        A category may name an earlier category of the same batch as its
        parent. Children are appended to their parent in batch order.

        Raises:
            CategoryNotFoundError: If a category's parent is not in the tree or
                earlier in the batch.
            ValueError: If a category's ID is already taken.
        """
        nodes: Dict[str, Category] = dict(self.nodes)
        roots = list(self.roots)
        appended: Dict[str, List[str]] = {}
        for category in categories:
            if category.id in nodes:
                raise ValueError(f"Category ID {category.id} already exists")
            if category.parent_id is None:
                roots.append(category.id)
            elif category.parent_id in nodes:
                appended.setdefault(category.parent_id, []).append(category.id)
            else:
                raise CategoryNotFoundError(category.parent_id)
            nodes[category.id] = category

        for parent_id, child_ids in appended.items():
            parent = nodes[parent_id]
            nodes[parent_id] = replace(parent, children=parent.children + tuple(child_ids))
        return CategoryTree(nodes=MappingProxyType(nodes), roots=tuple(roots))

    def with_replaced(self, categories: Iterable[Category]) -> "CategoryTree":
        """Swap in new values for existing categories (same IDs, same structure)."""
        nodes: Dict[str, Category] = dict(self.nodes)
        for category in categories:
            if category.id not in nodes:
                raise CategoryNotFoundError(category.id)
            nodes[category.id] = category
        return CategoryTree(nodes=MappingProxyType(nodes), roots=self.roots)

    def without_subtree(self, category_id: str) -> Tuple["CategoryTree", Set[str]]:
        """Remove a category and all of its descendants.

        Returns:
            Tuple of (new tree, set of removed IDs). The tree is returned
            unchanged with an empty set when the category is not found.
        """
        category = self.get(category_id)
        if category is None:
            return self, set()

        removed: Set[str] = set()
        pending = [category_id]
        while pending:
            current = pending.pop()
            removed.add(current)
            pending.extend(self.nodes[current].children)

        nodes = {
            node_id: node for node_id, node in self.nodes.items() if node_id not in removed
        }
        roots = self.roots
        if category.parent_id is None:
            roots = tuple(root_id for root_id in roots if root_id != category_id)
        else:
            parent = nodes[category.parent_id]
            nodes[parent.id] = replace(
                parent,
                children=tuple(c for c in parent.children if c != category_id),
            )
        return CategoryTree(nodes=MappingProxyType(nodes), roots=roots), removed
