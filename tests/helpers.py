"""Helper utilities for tests."""

from typing import List, Tuple

from models.category import CategoryTree
from tools.traversal import flatten

ELECTRONICS_OUTLINE = """Electronics
  Computers
    Laptops
  Phones
Clothing
"""


def shape(tree: CategoryTree) -> List[Tuple[str, int]]:
    """Get (name, depth) pairs of the flattened tree."""
    return [(entry.category.name, entry.depth) for entry in flatten(tree)]


def assert_links_symmetric(tree: CategoryTree) -> None:
    """Assert every link entry has a matching entry with the same label on the other side."""
    for category in tree.nodes.values():
        for link in category.linked_ids:
            assert link.id in tree, f"{category.id} links to missing {link.id}"
            back = tree.nodes[link.id].link_to(category.id)
            assert back is not None, f"{link.id} lacks a link back to {category.id}"
            assert back.name == link.name


def assert_structure_valid(tree: CategoryTree) -> None:
    """Assert parent pointers agree with children lists and every node is reachable."""
    for root_id in tree.roots:
        assert tree.nodes[root_id].parent_id is None
    for category in tree.nodes.values():
        for child_id in category.children:
            assert tree.nodes[child_id].parent_id == category.id
    assert len(flatten(tree)) == len(tree.nodes)
