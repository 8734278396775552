"""Link service for named cross-links between categories."""

from typing import List, Optional, Tuple

from config import DEFAULT_LINK_LABEL_SEPARATOR
from logger import get_logger
from models.category import Category, CategoryLink, FlatCategory
from services.categories import CategoryService
from tools import links

logger = get_logger()


class LinkService:
    """Service for linking categories outside the hierarchy.

    Links are symmetric and named: both endpoints always carry the same label.
    A category can never be linked to itself, its ancestors or its descendants.

    Args:
        categories: Category service holding the current snapshot.
        label_separator: Separator used when deriving a default link label.
    """

    def __init__(
        self,
        categories: CategoryService,
        label_separator: str = DEFAULT_LINK_LABEL_SEPARATOR,
    ):
        self.categories = categories
        self.label_separator = label_separator

    def link(
        self, source_id: str, target_id: str, name: Optional[str] = None
    ) -> CategoryLink:
        """Link two categories.

        Linking an already-linked pair changes nothing, even when a different
        name is given.

        Args:
            source_id: Category the link is created from.
            target_id: Category the link points to.
            name: Link label. When omitted or blank, the label is built from
                both categories' current names.

        Returns:
            The source's link entry for target.

        Raises:
            CategoryNotFoundError: If either category does not exist.
            LinkRejectedError: If target is source or in source's lineage.
        """
        tree = self.categories.tree
        links.check_linkable(tree, source_id, target_id)

        label = (name or "").strip()
        if not label:
            source = tree.nodes[source_id]
            target = tree.nodes[target_id]
            label = f"{source.name}{self.label_separator}{target.name}"

        updated = links.add_link(tree, source_id, target_id, label)
        if updated is tree:
            logger.debug(f"Categories {source_id} and {target_id} already linked")
        else:
            self.categories.commit(updated)
            logger.info(f"Linked {source_id} <-> {target_id} as '{label}'")
        return updated.nodes[source_id].link_to(target_id)

    def unlink(self, source_id: str, target_id: str) -> bool:
        """Remove the link between two categories.

        Returns:
            True if a link was removed, False if there was none.
        """
        tree = self.categories.tree
        updated = links.remove_link(tree, source_id, target_id)
        if updated is tree:
            return False

        self.categories.commit(updated)
        logger.info(f"Unlinked {source_id} <-> {target_id}")
        return True

    def rename_link(self, source_id: str, target_id: str, new_name: str) -> bool:
        """Change the label of an existing link on both endpoints.

        Returns:
            True if the link was relabelled, False if the categories are not linked.

        Raises:
            ValueError: If new_name is blank.
        """
        if not new_name.strip():
            raise ValueError("Link name cannot be empty")

        tree = self.categories.tree
        updated = links.relabel_link(tree, source_id, target_id, new_name)
        if updated is tree:
            return False

        self.categories.commit(updated)
        logger.info(f"Renamed link {source_id} <-> {target_id} to '{new_name}'")
        return True

    def linked(self, category_id: str) -> List[Tuple[CategoryLink, Category]]:
        """Get a category's links paired with the categories they point to.

        Returns an empty list for unknown categories.
        """
        tree = self.categories.tree
        category = tree.get(category_id)
        if category is None:
            return []
        return [
            (link, tree.nodes[link.id])
            for link in category.linked_ids
            if link.id in tree
        ]

    def candidates(self, source_id: str, query: Optional[str] = None) -> List[FlatCategory]:
        """List the categories source_id may still be linked to.

        Raises:
            CategoryNotFoundError: If source_id does not exist.
        """
        return links.link_candidates(self.categories.tree, source_id, query)
