# Node, Frame2D, Support and load records (frozen dataclasses)

from dataclasses import dataclass, field
from typing import Iterator, Tuple

from .errors import InvalidGeometryError, InvalidLoadReferenceError


@dataclass(frozen=True)
class Node:
    x: float
    y: float


@dataclass(frozen=True)
class Frame2D:
    """
    2D frame element (Euler–Bernoulli): 2 nodes, 3 DOF per node: (ux, uy, rz)

    ni, nj are indices into the owning Structure's node list.
    EA is the axial stiffness, EI the bending stiffness.
    """
    ni: int
    nj: int
    EA: float
    EI: float

    @classmethod
    def from_section(cls, ni: int, nj: int, E: float, A: float, I: float) -> "Frame2D":
        return cls(ni, nj, EA=E * A, EI=E * I)


@dataclass(frozen=True)
class Support:
    """
    Boundary condition at a node. Each flag restrains one DOF:
    fx -> ux, fy -> uy, m -> rz. Restrained DOFs have zero displacement.
    """
    node: int
    fx: bool = False
    fy: bool = False
    m: bool = False

    def __post_init__(self):
        if not (self.fx or self.fy or self.m):
            raise InvalidGeometryError(
                f"Support at node {self.node} restrains nothing."
            )

    @classmethod
    def fixed(cls, node: int) -> "Support":
        return cls(node, fx=True, fy=True, m=True)

    @classmethod
    def pinned(cls, node: int) -> "Support":
        return cls(node, fx=True, fy=True)

    @classmethod
    def roller_x(cls, node: int) -> "Support":
        """Roller free to slide along global X (restrains uy only)."""
        return cls(node, fy=True)

    @classmethod
    def roller_y(cls, node: int) -> "Support":
        """Roller free to slide along global Y (restrains ux only)."""
        return cls(node, fx=True)

    def restrained(self) -> Iterator[int]:
        """Local DOF indices (0=ux, 1=uy, 2=rz) of the set flags, in that order."""
        for local_dof, flag in enumerate((self.fx, self.fy, self.m)):
            if flag:
                yield local_dof


@dataclass(frozen=True)
class NodalLoad:
    node: int
    fx: float = 0.0
    fy: float = 0.0
    m: float = 0.0


@dataclass(frozen=True)
class DistributedLoad:
    """
    Linearly varying load on one element, per unit member length.

    w0, w1 : intensity at node i and node j
    global_plane : True -> acts along global +Y; False -> element local axes
    axial : with global_plane=False, act along local +x instead of local +y
    """
    element: int
    w0: float
    w1: float
    global_plane: bool = False
    axial: bool = False

    @classmethod
    def uniform(cls, element: int, w: float, global_plane: bool = False) -> "DistributedLoad":
        return cls(element, w, w, global_plane=global_plane)


@dataclass(frozen=True)
class ElementEndMoment:
    """Concentrated moment applied at end 0 (node i) or end 1 (node j) of an element."""
    element: int
    end: int
    m: float

    def __post_init__(self):
        if self.end not in (0, 1):
            raise InvalidLoadReferenceError(
                f"End moment on element {self.element} refers to end {self.end}; expected 0 or 1."
            )


@dataclass(frozen=True)
class LoadSet:
    """The three independent load collections passed to a solve."""
    nodal: Tuple[NodalLoad, ...] = field(default_factory=tuple)
    distributed: Tuple[DistributedLoad, ...] = field(default_factory=tuple)
    end_moments: Tuple[ElementEndMoment, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # accept any iterable, store tuples
        object.__setattr__(self, "nodal", tuple(self.nodal))
        object.__setattr__(self, "distributed", tuple(self.distributed))
        object.__setattr__(self, "end_moments", tuple(self.end_moments))

    def __add__(self, other: "LoadSet") -> "LoadSet":
        if not isinstance(other, LoadSet):
            return NotImplemented
        return LoadSet(
            self.nodal + other.nodal,
            self.distributed + other.distributed,
            self.end_moments + other.end_moments,
        )

    def __len__(self) -> int:
        return len(self.nodal) + len(self.distributed) + len(self.end_moments)

    def distributed_on(self, element_id: int) -> Tuple[DistributedLoad, ...]:
        return tuple(w for w in self.distributed if w.element == element_id)
