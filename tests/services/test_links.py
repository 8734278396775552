import pytest

from errors import CategoryNotFoundError, LinkRejectedError
from models.category import CategoryLink
from tests.helpers import ELECTRONICS_OUTLINE, assert_links_symmetric


@pytest.fixture
def outline(services):
    """Import the Electronics/Clothing outline and index it by name."""
    services.categories.bulk_upload(ELECTRONICS_OUTLINE)
    return {e.category.name: e.category.id for e in services.categories.find_all()}


class TestLinkService:
    """Tests for LinkService."""

    def test_link_adds_entry_on_both_sides(self, services, outline):
        """Test that linking stores a matching entry on both categories."""
        link = services.links.link(outline["Laptops"], outline["Clothing"], "Bags")

        assert link == CategoryLink(id=outline["Clothing"], name="Bags")
        tree = services.categories.tree
        assert tree.nodes[outline["Laptops"]].linked_ids == (
            CategoryLink(outline["Clothing"], "Bags"),
        )
        assert tree.nodes[outline["Clothing"]].linked_ids == (
            CategoryLink(outline["Laptops"], "Bags"),
        )

    def test_link_default_name_uses_current_names(self, services, outline):
        """Test that an omitted or blank name is derived from both category names."""
        first = services.links.link(outline["Phones"], outline["Clothing"])
        second = services.links.link(outline["Laptops"], outline["Clothing"], "  ")

        assert first.name == "Phones ↔ Clothing"
        assert second.name == "Laptops ↔ Clothing"

    def test_link_uses_configured_separator(self, services, outline):
        """Test that the default label separator comes from the service setting."""
        services.links.label_separator = " / "

        link = services.links.link(outline["Phones"], outline["Clothing"])

        assert link.name == "Phones / Clothing"

    def test_link_is_idempotent(self, services, outline):
        """Test that linking twice keeps a single entry pair and the first label."""
        services.links.link(outline["Phones"], outline["Clothing"], "x")
        before = services.categories.tree

        link = services.links.link(outline["Phones"], outline["Clothing"], "other")
        reverse = services.links.link(outline["Clothing"], outline["Phones"], "y")

        assert link.name == "x"
        assert reverse.name == "x"
        assert services.categories.tree is before
        assert len(before.nodes[outline["Phones"]].linked_ids) == 1
        assert len(before.nodes[outline["Clothing"]].linked_ids) == 1

    def test_unlink_after_double_link_removes_relation(self, services, outline):
        """Test that one unlink fully removes a link created twice."""
        services.links.link(outline["Phones"], outline["Clothing"], "x")
        services.links.link(outline["Phones"], outline["Clothing"], "x")

        assert services.links.unlink(outline["Clothing"], outline["Phones"]) is True

        tree = services.categories.tree
        assert tree.nodes[outline["Phones"]].linked_ids == ()
        assert tree.nodes[outline["Clothing"]].linked_ids == ()

    def test_unlink_missing_link_is_noop(self, services, outline):
        """Test that unlinking unlinked or unknown categories changes nothing."""
        before = services.categories.tree

        assert services.links.unlink(outline["Phones"], outline["Clothing"]) is False
        assert services.links.unlink("missing", outline["Clothing"]) is False
        assert services.categories.tree is before

    def test_rename_link_updates_both_sides(self, services, outline):
        """Test that renaming a link relabels both entries identically."""
        services.links.link(outline["Phones"], outline["Clothing"], "x")

        assert services.links.rename_link(outline["Clothing"], outline["Phones"], "Y") is True

        tree = services.categories.tree
        assert tree.nodes[outline["Phones"]].link_to(outline["Clothing"]).name == "Y"
        assert tree.nodes[outline["Clothing"]].link_to(outline["Phones"]).name == "Y"

    def test_rename_link_not_linked(self, services, outline):
        """Test that renaming a non-existent link is a no-op."""
        before = services.categories.tree

        assert services.links.rename_link(outline["Phones"], outline["Clothing"], "Y") is False
        assert services.categories.tree is before

    def test_rename_link_blank_name_raises(self, services, outline):
        """Test that a blank link name is rejected."""
        services.links.link(outline["Phones"], outline["Clothing"], "x")

        with pytest.raises(ValueError):
            services.links.rename_link(outline["Phones"], outline["Clothing"], " ")

    def test_self_link_rejected(self, services, outline):
        """Test that a category cannot be linked to itself."""
        with pytest.raises(LinkRejectedError, match="itself"):
            services.links.link(outline["Phones"], outline["Phones"])

    def test_link_to_ancestor_rejected(self, services, outline):
        """Test that a category cannot be linked to one of its ancestors."""
        with pytest.raises(LinkRejectedError, match="ancestor"):
            services.links.link(outline["Laptops"], outline["Electronics"])

    def test_link_to_descendant_rejected(self, services, outline):
        """Test that a category cannot be linked to one of its descendants."""
        before = services.categories.tree

        with pytest.raises(LinkRejectedError, match="descendant"):
            services.links.link(outline["Electronics"], outline["Laptops"])

        assert services.categories.tree is before

    def test_link_missing_category_raises(self, services, outline):
        """Test that linking to an unknown category raises not-found."""
        with pytest.raises(CategoryNotFoundError):
            services.links.link(outline["Phones"], "missing")
        with pytest.raises(CategoryNotFoundError):
            services.links.link("missing", outline["Phones"])

    def test_links_stay_symmetric(self, services, outline):
        """Test symmetry after a mix of link, rename-link and unlink calls."""
        links = services.links
        links.link(outline["Laptops"], outline["Phones"], "a")
        links.link(outline["Laptops"], outline["Clothing"], "b")
        links.link(outline["Computers"], outline["Clothing"])
        links.rename_link(outline["Clothing"], outline["Laptops"], "c")
        links.unlink(outline["Phones"], outline["Laptops"])
        links.link(outline["Phones"], outline["Computers"], "d")

        assert_links_symmetric(services.categories.tree)

    def test_linked_returns_targets(self, services, outline):
        """Test listing a category's links with the linked categories."""
        services.links.link(outline["Clothing"], outline["Phones"], "p")
        services.links.link(outline["Clothing"], outline["Laptops"], "l")

        linked = services.links.linked(outline["Clothing"])

        assert [(link.name, category.name) for link, category in linked] == [
            ("p", "Phones"),
            ("l", "Laptops"),
        ]
        assert services.links.linked("missing") == []

    def test_candidates_exclude_lineage_and_linked(self, services, outline):
        """Test that candidates omit self, ancestors, descendants and linked categories."""
        services.links.link(outline["Computers"], outline["Clothing"])

        names = [e.category.name for e in services.links.candidates(outline["Computers"])]

        assert names == ["Phones"]

    def test_candidates_filter_by_query(self, services, outline):
        """Test that candidates can be filtered by a case-insensitive name query."""
        names = [
            e.category.name
            for e in services.links.candidates(outline["Laptops"], query="PHO")
        ]

        assert names == ["Phones"]

    def test_candidates_missing_source_raises(self, services):
        """Test that asking candidates for an unknown category raises not-found."""
        with pytest.raises(CategoryNotFoundError):
            services.links.candidates("missing")
