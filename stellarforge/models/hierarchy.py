"""Binary hierarchy of stars in a multi-star system.

Every node is either a star leaf or a barycenter joining exactly two child
nodes. Barycenters may nest, which describes hierarchical triples and
beyond (e.g. a close binary orbited by a distant third star).
"""

from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    """Variant tag of a hierarchy node."""

    STAR = "star"
    BARYCENTER = "barycenter"


@dataclass(frozen=True)
class HierarchyNode:
    """Tagged hierarchy node.

    Star leaves carry ``star_id``; barycenters carry ``children`` plus the
    separation and eccentricity of the pair. Nodes are immutable apart from
    ``orbital_period_s``, which can be filled in after construction with
    ``set_orbital_period_s``.

    Build nodes with ``create_star`` and ``create_barycenter``.
    """

    id: str
    kind: NodeKind
    star_id: str | None = None
    children: tuple["HierarchyNode", "HierarchyNode"] | None = None
    separation_m: float = 0.0
    eccentricity: float = 0.0
    orbital_period_s: float | None = None

    def __post_init__(self):
        """Validate the payload against the variant tag."""
        if not self.id:
            raise ValueError("Hierarchy node id must be a non-empty string")
        if self.kind == NodeKind.STAR:
            if not self.star_id:
                raise ValueError(f"Star node '{self.id}' requires a star_id")
            if self.children is not None:
                raise ValueError(f"Star node '{self.id}' cannot have children")
        else:
            if self.children is None or len(self.children) != 2:
                raise ValueError(f"Barycenter '{self.id}' requires exactly two children")
            if self.star_id is not None:
                raise ValueError(f"Barycenter '{self.id}' cannot carry a star_id")
            if self.separation_m < 0:
                raise ValueError(
                    f"Invalid separation_m: {self.separation_m} (must be >= 0)"
                )
            if not (0.0 <= self.eccentricity < 1.0):
                raise ValueError(
                    f"Invalid eccentricity: {self.eccentricity} (must be in [0, 1))"
                )

    @classmethod
    def create_star(cls, id: str, star_id: str) -> "HierarchyNode":
        return cls(id=id, kind=NodeKind.STAR, star_id=star_id)

    @classmethod
    def create_barycenter(
        cls,
        id: str,
        left: "HierarchyNode",
        right: "HierarchyNode",
        separation_m: float,
        eccentricity: float = 0.0,
    ) -> "HierarchyNode":
        return cls(
            id=id,
            kind=NodeKind.BARYCENTER,
            children=(left, right),
            separation_m=separation_m,
            eccentricity=eccentricity,
        )

    @property
    def left(self) -> "HierarchyNode | None":
        return self.children[0] if self.children else None

    @property
    def right(self) -> "HierarchyNode | None":
        return self.children[1] if self.children else None

    def is_star(self) -> bool:
        return self.kind == NodeKind.STAR

    def is_barycenter(self) -> bool:
        return self.kind == NodeKind.BARYCENTER

    def set_orbital_period_s(self, period_s: float | None) -> None:
        """Record the pair's orbital period (the only post-construction edit).

        Raises:
            ValueError: If called on a star leaf or with a negative period
        """
        if not self.is_barycenter():
            raise ValueError(f"Star node '{self.id}' has no orbital period")
        if period_s is not None and period_s < 0:
            raise ValueError(f"Invalid orbital_period_s: {period_s} (must be >= 0)")
        object.__setattr__(self, "orbital_period_s", period_s)


def get_star_count(node: HierarchyNode) -> int:
    """Number of star leaves under a node."""
    if node.is_star():
        return 1
    return get_star_count(node.left) + get_star_count(node.right)


def get_depth(node: HierarchyNode) -> int:
    """1 for a leaf, 1 + the deeper child's depth for a barycenter."""
    if node.is_star():
        return 1
    return 1 + max(get_depth(node.left), get_depth(node.right))


def get_all_star_ids(node: HierarchyNode) -> list[str]:
    """Star ids in left-then-right traversal order."""
    if node.is_star():
        return [node.star_id]
    return get_all_star_ids(node.left) + get_all_star_ids(node.right)


def get_all_nodes(node: HierarchyNode) -> list[HierarchyNode]:
    """Every node under (and including) this one, depth-first, parents first."""
    if node.is_star():
        return [node]
    return [node] + get_all_nodes(node.left) + get_all_nodes(node.right)


def find_node(node: HierarchyNode, node_id: str) -> HierarchyNode | None:
    """Depth-first search by node id."""
    if node.id == node_id:
        return node
    if node.is_star():
        return None
    return find_node(node.left, node_id) or find_node(node.right, node_id)


def get_total_mass_kg(node: HierarchyNode, star_masses: dict[str, float]) -> float:
    """Summed mass of the stars under a node.

    Raises:
        KeyError: If a star id is missing from star_masses
    """
    return sum(star_masses[star_id] for star_id in get_all_star_ids(node))


class SystemHierarchy:
    """Root wrapper with flattened views of the hierarchy.

    Views are rebuilt by traversal on every call. An empty hierarchy (no
    root) is invalid and yields empty views.
    """

    def __init__(self, root: HierarchyNode | None = None):
        self.root = root

    def __repr__(self) -> str:
        return f"SystemHierarchy(root={self.root!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SystemHierarchy):
            return NotImplemented
        return self.root == other.root

    def is_valid(self) -> bool:
        return self.root is not None

    def get_all_nodes(self) -> list[HierarchyNode]:
        return get_all_nodes(self.root) if self.root else []

    def get_all_barycenters(self) -> list[HierarchyNode]:
        return [n for n in self.get_all_nodes() if n.is_barycenter()]

    def get_all_star_leaves(self) -> list[HierarchyNode]:
        return [n for n in self.get_all_nodes() if n.is_star()]

    def get_all_star_ids(self) -> list[str]:
        return get_all_star_ids(self.root) if self.root else []

    def get_star_count(self) -> int:
        return get_star_count(self.root) if self.root else 0

    def get_depth(self) -> int:
        return get_depth(self.root) if self.root else 0

    def find_node(self, node_id: str) -> HierarchyNode | None:
        return find_node(self.root, node_id) if self.root else None
