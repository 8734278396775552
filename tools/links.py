"""Pure operations on the symmetric cross-link relation.

A link between A and B is stored twice: A holds {id: B, name: N} and B holds
{id: A, name: N}. Every function here takes a snapshot and returns a new one
with both entries updated together.
"""

from dataclasses import replace
from typing import Iterable, List, Optional, Set

from errors import LinkRejectedError
from models.category import Category, CategoryLink, CategoryTree, FlatCategory
from tools.traversal import ancestors_of, descendants_of, flatten


def link_exclusions(tree: CategoryTree, category_id: str) -> Set[str]:
    """Get the IDs a category may never be linked to: itself and its lineage."""
    return (
        {category_id}
        | ancestors_of(tree, category_id)
        | descendants_of(tree, category_id)
    )


def check_linkable(tree: CategoryTree, source_id: str, target_id: str) -> None:
    """Reject self-links and links that repeat tree containment.

    Raises:
        CategoryNotFoundError: If either category is missing.
        LinkRejectedError: If target is source, or an ancestor or descendant of it.
    """
    tree.require(source_id)
    tree.require(target_id)
    if source_id == target_id:
        raise LinkRejectedError(f"Category {source_id} cannot be linked to itself")
    if target_id in ancestors_of(tree, source_id):
        raise LinkRejectedError(
            f"Category {target_id} is an ancestor of {source_id} and cannot be linked"
        )
    if target_id in descendants_of(tree, source_id):
        raise LinkRejectedError(
            f"Category {target_id} is a descendant of {source_id} and cannot be linked"
        )


def add_link(tree: CategoryTree, source_id: str, target_id: str, name: str) -> CategoryTree:
    """Add the entry pair for a link unless the categories are already linked.

    If only one side holds an entry, its label is copied to the missing side
    so both ends agree.
    """
    source = tree.require(source_id)
    target = tree.require(target_id)
    existing = source.link_to(target_id) or target.link_to(source_id)
    label = existing.name if existing else name

    updated: List[Category] = []
    if source.link_to(target_id) is None:
        updated.append(
            replace(source, linked_ids=source.linked_ids + (CategoryLink(target_id, label),))
        )
    if target.link_to(source_id) is None:
        updated.append(
            replace(target, linked_ids=target.linked_ids + (CategoryLink(source_id, label),))
        )
    if not updated:
        return tree
    return tree.with_replaced(updated)


def remove_link(tree: CategoryTree, source_id: str, target_id: str) -> CategoryTree:
    """Remove both entries of a link; missing entries or categories are ignored."""
    updated: List[Category] = []
    for own_id, other_id in ((source_id, target_id), (target_id, source_id)):
        category = tree.get(own_id)
        if category is not None and category.link_to(other_id) is not None:
            updated.append(
                replace(
                    category,
                    linked_ids=tuple(l for l in category.linked_ids if l.id != other_id),
                )
            )
    if not updated:
        return tree
    return tree.with_replaced(updated)


def relabel_link(
    tree: CategoryTree, source_id: str, target_id: str, new_name: str
) -> CategoryTree:
    """Set the same label on both entries of an existing link."""
    updated: List[Category] = []
    for own_id, other_id in ((source_id, target_id), (target_id, source_id)):
        category = tree.get(own_id)
        if category is not None and category.link_to(other_id) is not None:
            updated.append(
                replace(
                    category,
                    linked_ids=tuple(
                        CategoryLink(l.id, new_name) if l.id == other_id else l
                        for l in category.linked_ids
                    ),
                )
            )
    if not updated:
        return tree
    return tree.with_replaced(updated)


def drop_links_to(tree: CategoryTree, removed_ids: Iterable[str]) -> CategoryTree:
    """Strip every link entry that points at one of removed_ids."""
    removed = set(removed_ids)
    updated = [
        replace(
            category,
            linked_ids=tuple(l for l in category.linked_ids if l.id not in removed),
        )
        for category in tree.nodes.values()
        if any(l.id in removed for l in category.linked_ids)
    ]
    if not updated:
        return tree
    return tree.with_replaced(updated)


def link_candidates(
    tree: CategoryTree, source_id: str, query: Optional[str] = None
) -> List[FlatCategory]:
    """List the categories a source may be linked to, in pre-order.

    Excludes the source, its ancestors, its descendants and anything it is
    already linked to. An optional query filters by case-insensitive name.
    """
    source = tree.require(source_id)
    excluded = link_exclusions(tree, source_id) | {l.id for l in source.linked_ids}
    needle = (query or "").strip().lower()
    return [
        entry
        for entry in flatten(tree)
        if entry.category.id not in excluded
        and (not needle or needle in entry.category.name.lower())
    ]
