"""Category service owning the canonical category tree snapshot."""

from dataclasses import replace
from typing import List, Optional, Set

from errors import CategoryNotFoundError
from ingestion import ingest
from logger import get_logger
from models.category import Category, CategoryTree, FlatCategory
from tools import traversal
from tools.ids import IdGenerator
from tools.links import drop_links_to

logger = get_logger()


class CategoryService:
    """Service for managing the category hierarchy.

    Every mutation builds a new CategoryTree from the current one and commits
    it; snapshots handed out earlier are never modified.

    Args:
        ids: Identifier generator for new categories.
        tree: Initial snapshot (empty when omitted).
    """

    def __init__(self, ids: IdGenerator, tree: Optional[CategoryTree] = None):
        self.ids = ids
        self.tree = tree if tree is not None else CategoryTree()

    def commit(self, tree: CategoryTree) -> None:
        """Replace the current snapshot."""
        self.tree = tree

    def find(self, category_id: str) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        return traversal.find_by_id(self.tree, category_id)

    def find_all(self) -> List[FlatCategory]:
        """Get all categories in pre-order with their depth."""
        return traversal.flatten(self.tree)

    flatten = find_all

    def roots(self) -> List[Category]:
        return self.tree.root_categories()

    def children(self, category_id: str) -> List[Category]:
        return self.tree.children_of(category_id)

    def ancestors(self, category_id: str) -> Set[str]:
        return traversal.ancestors_of(self.tree, category_id)

    def descendants(self, category_id: str) -> Set[str]:
        return traversal.descendants_of(self.tree, category_id)

    def search(self, query: str) -> List[FlatCategory]:
        """Find categories whose name contains query (case-insensitive)."""
        return traversal.search(self.tree, query)

    def path(self, category_id: str) -> List[str]:
        """Get category names from the root down to category_id."""
        return traversal.path_of(self.tree, category_id)

    def add(self, parent_id: Optional[str], name: str) -> Category:
        """Create a new category.

        Args:
            parent_id: Parent category ID, or None to create a root.
            name: Display name.

        Returns:
            The created Category.

        Raises:
            ValueError: If name is blank.
            CategoryNotFoundError: If parent_id is given but not in the tree.
        """
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty")

        category = Category(id=self.ids.new_id(), name=name, parent_id=parent_id)
        self.commit(self.tree.with_category(category))
        logger.info(f"Created category '{category.name}' (ID: {category.id})")
        return category

    def rename(self, category_id: str, new_name: str) -> bool:
        """Rename a category.

        Link labels are left untouched, including labels derived from the old
        name.

        Returns:
            True if the category was renamed, False if not found.

        Raises:
            ValueError: If new_name is blank.
        """
        new_name = new_name.strip()
        if not new_name:
            raise ValueError("Category name cannot be empty")

        category = self.tree.get(category_id)
        if category is None:
            logger.debug(f"Rename skipped, category {category_id} not found")
            return False

        self.commit(self.tree.with_replaced([replace(category, name=new_name)]))
        logger.info(f"Renamed category {category_id} '{category.name}' -> '{new_name}'")
        return True

    def delete(self, category_id: str) -> Set[str]:
        """Delete a category together with its whole subtree.

        Link entries elsewhere in the tree pointing into the removed subtree
        are removed as well. Data attached to the removed categories in other
        stores is not touched; use the returned IDs to clean it up.

        Returns:
            Set of removed category IDs, empty if the category was not found.
        """
        tree, removed = self.tree.without_subtree(category_id)
        if not removed:
            logger.debug(f"Delete skipped, category {category_id} not found")
            return removed

        self.commit(drop_links_to(tree, removed))
        logger.info(f"Deleted category {category_id} and {len(removed) - 1} descendants")
        return removed

    def bulk_upload(self, text: str, anchor_parent_id: Optional[str] = None) -> List[Category]:
        """Create a hierarchy of categories from indentation-formatted text.

        The whole batch is inserted into one working snapshot and committed once,
        so a failure leaves the current tree untouched.

        Args:
            text: One category per line, nesting given by leading whitespace.
            anchor_parent_id: Parent for top-level lines, or None for roots.

        Returns:
            The created categories in input order.

        Raises:
            CategoryNotFoundError: If anchor_parent_id is given but not in the tree.
        """
        if anchor_parent_id is not None and anchor_parent_id not in self.tree:
            raise CategoryNotFoundError(anchor_parent_id)

        created = [
            Category(id=planned.id, name=planned.name, parent_id=planned.parent_id)
            for planned in ingest(text, anchor_parent_id, self.ids.new_id)
        ]
        working = self.tree.with_categories(created)

        self.commit(working)
        logger.info(f"Bulk upload created {len(created)} categories")
        return [working.nodes[category.id] for category in created]
