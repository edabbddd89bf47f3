"""Tests for the star hierarchy."""

import pytest

from stellarforge.models import HierarchyNode, NodeKind, SystemHierarchy
from stellarforge.models.hierarchy import get_total_mass_kg
from stellarforge.utils import AU


def build_triple() -> SystemHierarchy:
    a = HierarchyNode.create_star("node-star-0", "star-0")
    b = HierarchyNode.create_star("node-star-1", "star-1")
    c = HierarchyNode.create_star("node-star-2", "star-2")
    inner = HierarchyNode.create_barycenter("barycenter-0", a, b, 23 * AU, 0.52)
    outer = HierarchyNode.create_barycenter("barycenter-1", inner, c, 13000 * AU)
    return SystemHierarchy(outer)


class TestHierarchyNode:
    """Test node construction."""

    def test_star_leaf(self):
        """Test a star leaf."""
        node = HierarchyNode.create_star("node-star-0", "star-0")
        assert node.kind == NodeKind.STAR
        assert node.is_star()
        assert node.left is None

    def test_star_requires_star_id(self):
        """Test a star leaf without a star id is rejected."""
        with pytest.raises(ValueError, match="requires a star_id"):
            HierarchyNode(id="n", kind=NodeKind.STAR)

    def test_barycenter_requires_two_children(self):
        """Test a barycenter without children is rejected."""
        with pytest.raises(ValueError, match="exactly two children"):
            HierarchyNode(id="b", kind=NodeKind.BARYCENTER)

    def test_barycenter_eccentricity_range(self):
        """Test eccentricity must be below 1."""
        a = HierarchyNode.create_star("a", "star-0")
        b = HierarchyNode.create_star("b", "star-1")
        with pytest.raises(ValueError, match="Invalid eccentricity"):
            HierarchyNode.create_barycenter("bc", a, b, AU, eccentricity=1.0)

    def test_barycenter_negative_separation(self):
        """Test separation must be non-negative."""
        a = HierarchyNode.create_star("a", "star-0")
        b = HierarchyNode.create_star("b", "star-1")
        with pytest.raises(ValueError, match="Invalid separation_m"):
            HierarchyNode.create_barycenter("bc", a, b, -1.0)

    def test_set_period(self):
        """Test the orbital period can be filled in later."""
        a = HierarchyNode.create_star("a", "star-0")
        b = HierarchyNode.create_star("b", "star-1")
        barycenter = HierarchyNode.create_barycenter("bc", a, b, AU)
        barycenter.set_orbital_period_s(3.0e7)
        assert barycenter.orbital_period_s == 3.0e7

    def test_star_has_no_period(self):
        """Test star leaves reject a period."""
        with pytest.raises(ValueError, match="has no orbital period"):
            HierarchyNode.create_star("a", "star-0").set_orbital_period_s(1.0)

    def test_negative_period(self):
        """Test negative periods are rejected."""
        a = HierarchyNode.create_star("a", "star-0")
        b = HierarchyNode.create_star("b", "star-1")
        barycenter = HierarchyNode.create_barycenter("bc", a, b, AU)
        with pytest.raises(ValueError, match="Invalid orbital_period_s"):
            barycenter.set_orbital_period_s(-1.0)


class TestSystemHierarchy:
    """Test hierarchy views."""

    def test_triple_counts(self):
        """Test a hierarchical triple has three stars and depth three."""
        hierarchy = build_triple()
        assert hierarchy.is_valid()
        assert hierarchy.get_star_count() == 3
        assert hierarchy.get_depth() == 3

    def test_single_star(self):
        """Test a lone star has depth one."""
        hierarchy = SystemHierarchy(HierarchyNode.create_star("node-star-0", "star-0"))
        assert hierarchy.get_star_count() == 1
        assert hierarchy.get_depth() == 1
        assert hierarchy.get_all_barycenters() == []

    def test_star_id_order(self):
        """Test star ids come out left to right."""
        assert build_triple().get_all_star_ids() == ["star-0", "star-1", "star-2"]

    def test_flattened_views(self):
        """Test barycenter and leaf views."""
        hierarchy = build_triple()
        assert [n.id for n in hierarchy.get_all_barycenters()] == ["barycenter-1", "barycenter-0"]
        assert len(hierarchy.get_all_star_leaves()) == 3
        assert len(hierarchy.get_all_nodes()) == 5

    def test_find_node(self):
        """Test lookup by node id."""
        hierarchy = build_triple()
        assert hierarchy.find_node("barycenter-0").separation_m == 23 * AU
        assert hierarchy.find_node("node-star-2").star_id == "star-2"
        assert hierarchy.find_node("missing") is None

    def test_total_mass(self):
        """Test mass summed under a node."""
        hierarchy = build_triple()
        masses = {"star-0": 2.0, "star-1": 1.5, "star-2": 0.25}
        assert get_total_mass_kg(hierarchy.root, masses) == 3.75
        assert get_total_mass_kg(hierarchy.find_node("barycenter-0"), masses) == 3.5

    def test_empty(self):
        """Test an empty hierarchy is invalid with empty views."""
        hierarchy = SystemHierarchy()
        assert not hierarchy.is_valid()
        assert hierarchy.get_star_count() == 0
        assert hierarchy.get_depth() == 0
        assert hierarchy.get_all_nodes() == []
        assert hierarchy.find_node("barycenter-0") is None
