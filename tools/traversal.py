"""Read-only queries over a category tree snapshot.

Every function takes the snapshot it works on; nothing here keeps state.
"""

from typing import List, Optional, Set

from models.category import Category, CategoryTree, FlatCategory


def flatten(tree: CategoryTree) -> List[FlatCategory]:
    """List every category in pre-order with its depth.

    Parents come before their children, children in stored order, and roots
    have depth 0.

    Args:
        tree: Snapshot to walk.

    Returns:
        List of FlatCategory entries.
    """
    result: List[FlatCategory] = []
    stack = [(root_id, 0) for root_id in reversed(tree.roots)]
    while stack:
        category_id, depth = stack.pop()
        category = tree.nodes[category_id]
        result.append(FlatCategory(category=category, depth=depth))
        stack.extend((child_id, depth + 1) for child_id in reversed(category.children))
    return result


def find_by_id(tree: CategoryTree, category_id: str) -> Optional[Category]:
    return tree.get(category_id)


def ancestors_of(tree: CategoryTree, category_id: str) -> Set[str]:
    """Get the IDs of every ancestor of a category, up to its root.

    Returns an empty set for roots and for unknown IDs.
    """
    ancestors: Set[str] = set()
    category = tree.get(category_id)
    while category is not None and category.parent_id is not None:
        ancestors.add(category.parent_id)
        category = tree.get(category.parent_id)
    return ancestors


def descendants_of(tree: CategoryTree, category_id: str) -> Set[str]:
    """Get the IDs of every category below this one (not including itself)."""
    descendants: Set[str] = set()
    category = tree.get(category_id)
    if category is None:
        return descendants

    pending = list(category.children)
    while pending:
        current = pending.pop()
        descendants.add(current)
        pending.extend(tree.nodes[current].children)
    return descendants


def search(tree: CategoryTree, query: str) -> List[FlatCategory]:
    """Filter the flattened listing by case-insensitive substring on name.

    A blank query matches everything.
    """
    needle = query.strip().lower()
    entries = flatten(tree)
    if not needle:
        return entries
    return [entry for entry in entries if needle in entry.category.name.lower()]


def path_of(tree: CategoryTree, category_id: str) -> List[str]:
    """Get the names from the root down to (and including) a category."""
    names: List[str] = []
    category = tree.get(category_id)
    while category is not None:
        names.append(category.name)
        category = tree.get(category.parent_id)
    names.reverse()
    return names
