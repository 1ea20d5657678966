# planeframe/results.py
"""Immutable result of one linear static solve."""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import pandas as pd

from .diagrams import MemberDiagram
from .kernel import DOF_2D_FRAME

_COMPONENTS = ('ux', 'uy', 'rz')
_REACTION_COMPONENTS = ('Rx', 'Ry', 'Mz')


def _frozen(arr) -> np.ndarray:
    arr = np.array(arr, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class FrameResult:
    """
    Output contract of a solve.

    Attributes:
    -----------
    displacements : np.ndarray
        Length 3·n_nodes, indexed by global DOF. Restrained DOFs are 0.
    reactions : np.ndarray
        One entry per restrained DOF, ordered by support, then (Fx, Fy, M)
        among the flags that are set.
    reaction_dofs : tuple of int
        Global DOF of each entry in `reactions`.
    internal_loads : tuple of np.ndarray
        Per element, [Fx0, Fy0, M0, Fx1, Fy1, M1] acting on the member in its
        local frame, fixed-end correction applied.
    diagrams : tuple of MemberDiagram
        Per element polynomial coefficients for N, V, M, v and axial displacement.

    Arrays are read-only and nothing refers back to the Structure.
    """
    displacements: np.ndarray
    reactions: np.ndarray
    reaction_dofs: Tuple[int, ...]
    internal_loads: Tuple[np.ndarray, ...]
    diagrams: Tuple[MemberDiagram, ...]

    @classmethod
    def build(cls, displacements, reactions, reaction_dofs, internal_loads, diagrams) -> "FrameResult":
        return cls(
            displacements=_frozen(displacements),
            reactions=_frozen(reactions),
            reaction_dofs=tuple(int(dof) for dof in reaction_dofs),
            internal_loads=tuple(_frozen(f) for f in internal_loads),
            diagrams=tuple(diagrams),
        )

    @property
    def n_nodes(self) -> int:
        return len(self.displacements) // DOF_2D_FRAME.dof_per_node

    def node_displacement(self, node_id: int) -> np.ndarray:
        """[ux, uy, rz] of one node."""
        return self.displacements[DOF_2D_FRAME.node_dofs(node_id)]

    def support_reactions(self) -> Dict[int, Dict[str, float]]:
        """Mapping of support node to {'Rx', 'Ry', 'Mz'}; unrestrained components are 0."""
        result: Dict[int, Dict[str, float]] = {}
        for value, dof in zip(self.reactions, self.reaction_dofs):
            node_id = DOF_2D_FRAME.node_of(dof)
            entry = result.setdefault(node_id, {key: 0.0 for key in _REACTION_COMPONENTS})
            entry[_REACTION_COMPONENTS[dof % DOF_2D_FRAME.dof_per_node]] = float(value)
        return result

    def displacement_table(self) -> pd.DataFrame:
        """One row per node: ux, uy, rz."""
        data = self.displacements.reshape(self.n_nodes, DOF_2D_FRAME.dof_per_node)
        df = pd.DataFrame(data, columns=list(_COMPONENTS))
        df.index.name = 'node'
        return df

    def reaction_table(self) -> pd.DataFrame:
        """One row per restrained DOF, in reaction-vector order."""
        rows = []
        for value, dof in zip(self.reactions, self.reaction_dofs):
            rows.append({
                'node': DOF_2D_FRAME.node_of(dof),
                'component': _REACTION_COMPONENTS[dof % DOF_2D_FRAME.dof_per_node],
                'dof': dof,
                'value': float(value),
            })
        return pd.DataFrame(rows, columns=['node', 'component', 'dof', 'value'])

    def end_force_table(self) -> pd.DataFrame:
        """One row per element: local end forces plus extreme N, V, M along the span."""
        rows = []
        for diagram in self.diagrams:
            f = diagram.end_forces
            row = {
                'element': diagram.element_id,
                'length': diagram.length,
                'Fx0': f[0], 'Fy0': f[1], 'M0': f[2],
                'Fx1': f[3], 'Fy1': f[4], 'M1': f[5],
            }
            row.update(diagram.extremes())
            rows.append(row)
        return pd.DataFrame(rows).set_index('element') if rows else pd.DataFrame()
