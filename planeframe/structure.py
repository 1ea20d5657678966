# planeframe/structure.py
"""
STRUCTURE: Nodes, Elements, Supports and Their Equations
========================================================

A Structure owns the geometry of one plane frame:

    nodes     tuple of Node, a node's id is its position
    elements  tuple of Frame2D, referencing nodes by id
    supports  tuple of Support, at most one per node

It is validated once at construction and never mutated afterwards;
`with_node` returns a moved copy. Element matrices are derived on demand
from the current geometry, so they can never go stale.

Loads are not part of a Structure. They are passed to `assemble`/`solve`
and only read during the call.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .elements import (
    element_geometry,
    frame2d_global_stiffness,
    frame2d_local_stiffness,
    frame2d_transform,
)
from .errors import InvalidGeometryError, InvalidLoadReferenceError
from .kernel import DOF_2D_FRAME, assemble_global_K
from .loads import assemble_load_vector
from .model import (
    DistributedLoad,
    ElementEndMoment,
    Frame2D,
    LoadSet,
    NodalLoad,
    Node,
    Support,
)
from .solve import solve as solve_structure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Structure:
    nodes: Tuple[Node, ...]
    elements: Tuple[Frame2D, ...]
    supports: Tuple[Support, ...] = ()
    config: SolverConfig = CONFIG

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "elements", tuple(self.elements))
        object.__setattr__(self, "supports", tuple(self.supports))
        self._validate()

    def _validate(self) -> None:
        n_nodes = len(self.nodes)
        for eid, e in enumerate(self.elements):
            for end, node_id in (("ni", e.ni), ("nj", e.nj)):
                if not 0 <= node_id < n_nodes:
                    raise InvalidGeometryError(
                        f"Element {eid} {end}={node_id} is not a node (have {n_nodes})."
                    )
            if e.ni == e.nj:
                raise InvalidGeometryError(f"Element {eid} connects node {e.ni} to itself.")
            if not (e.EA > 0.0 and e.EI > 0.0):
                raise InvalidGeometryError(
                    f"Element {eid} needs positive stiffness (EA={e.EA}, EI={e.EI})."
                )
            # raises for coincident end nodes
            element_geometry(self.nodes, e, eid, self.config.zero_length_tol)

        seen = set()
        for support in self.supports:
            if not 0 <= support.node < n_nodes:
                raise InvalidGeometryError(
                    f"Support at node {support.node} is not a node (have {n_nodes})."
                )
            if support.node in seen:
                raise InvalidGeometryError(f"Node {support.node} has more than one support.")
            seen.add(support.node)

        logger.debug(
            "Structure: %d nodes, %d elements, %d supports",
            n_nodes, len(self.elements), len(self.supports),
        )

    # ------------------------------------------------------------------
    # DOF bookkeeping
    # ------------------------------------------------------------------

    @property
    def ndof(self) -> int:
        return DOF_2D_FRAME.ndof(len(self.nodes))

    def element_equations(self, eid: int) -> List[int]:
        """[Fx0, Fy0, M0, Fx1, Fy1, M1] global equations of one element."""
        e = self.elements[eid]
        return DOF_2D_FRAME.element_dof_map([e.ni, e.nj])

    def restrained_dofs(self) -> List[int]:
        """Restrained equations in reaction order: support by support, then ux, uy, rz."""
        return [
            DOF_2D_FRAME.idx(support.node, local_dof)
            for support in self.supports
            for local_dof in support.restrained()
        ]

    # ------------------------------------------------------------------
    # Element matrices
    # ------------------------------------------------------------------

    def element_geometry(self, eid: int):
        return element_geometry(self.nodes, self.elements[eid], eid, self.config.zero_length_tol)

    def element_length(self, eid: int) -> float:
        return self.element_geometry(eid)[0]

    def element_local_stiffness(self, eid: int) -> np.ndarray:
        e = self.elements[eid]
        return frame2d_local_stiffness(e.EA, e.EI, self.element_length(eid))

    def element_transform(self, eid: int) -> np.ndarray:
        _, c, s = self.element_geometry(eid)
        return frame2d_transform(c, s)

    def element_global_stiffness(self, eid: int) -> np.ndarray:
        return frame2d_global_stiffness(self.nodes, self.elements[eid], eid)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def with_node(self, node_id: int, x: float, y: float) -> "Structure":
        """Copy of this structure with one node moved (revalidated)."""
        if not 0 <= node_id < len(self.nodes):
            raise InvalidGeometryError(f"Node {node_id} does not exist.")
        nodes = list(self.nodes)
        nodes[node_id] = Node(x, y)
        return dataclasses.replace(self, nodes=tuple(nodes))

    # ------------------------------------------------------------------
    # Loads, assembly, solve
    # ------------------------------------------------------------------

    def validate_loads(self, loads: LoadSet) -> None:
        """Raise InvalidLoadReferenceError for any load pointing nowhere."""
        n_nodes = len(self.nodes)
        n_elements = len(self.elements)
        for i, load in enumerate(loads.nodal):
            if not 0 <= load.node < n_nodes:
                raise InvalidLoadReferenceError(
                    f"Nodal load {i} references node {load.node} (have {n_nodes})."
                )
        for i, load in enumerate(loads.distributed):
            if not 0 <= load.element < n_elements:
                raise InvalidLoadReferenceError(
                    f"Distributed load {i} references element {load.element} (have {n_elements})."
                )
        for i, moment in enumerate(loads.end_moments):
            if not 0 <= moment.element < n_elements:
                raise InvalidLoadReferenceError(
                    f"End moment {i} references element {moment.element} (have {n_elements})."
                )

    def assemble_stiffness(self) -> np.ndarray:
        contributions = [
            (self.element_equations(eid), self.element_global_stiffness(eid))
            for eid in range(len(self.elements))
        ]
        return assemble_global_K(self.ndof, contributions)

    def assemble(self, loads: LoadSet) -> Tuple[np.ndarray, np.ndarray]:
        """Global K and F for a load set."""
        self.validate_loads(loads)
        K = self.assemble_stiffness()
        F = assemble_load_vector(self.nodes, self.elements, loads, DOF_2D_FRAME)
        return K, F

    def solve(
        self,
        nodal_loads: Iterable[NodalLoad] = (),
        distributed_loads: Iterable[DistributedLoad] = (),
        end_moments: Iterable[ElementEndMoment] = (),
        config: Optional[SolverConfig] = None,
    ):
        """Linear static solve; returns a FrameResult. See planeframe.solve.solve."""
        loads = LoadSet(nodal_loads, distributed_loads, end_moments)
        return solve_structure(self, loads, config)


def build_structure(
    nodes: Sequence[Tuple[float, float]],
    elements: Sequence[Frame2D],
    supports: Sequence[Support] = (),
    config: SolverConfig = CONFIG,
) -> Structure:
    """Convenience constructor from bare (x, y) coordinate pairs."""
    return Structure(tuple(Node(float(x), float(y)) for x, y in nodes), elements, supports, config)
