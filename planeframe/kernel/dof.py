# planeframe/kernel/dof.py
"""
DOF MANAGER: Equation Numbering
===============================

Every node owns `dof_per_node` consecutive global equations, numbered in
increasing node order:

    node 0 -> [0, 1, 2]     (ux, uy, rz)
    node 1 -> [3, 4, 5]
    node k -> [3k, 3k+1, 3k+2]

An element's equation list is the concatenation of its end nodes' lists,
so a Frame2D from node 2 to node 5 scatters into [6, 7, 8, 15, 16, 17].
"""

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class DOFManager:
    """
    Maps (node_id, local_dof) to a global equation number.

    Examples:
    ---------
    >>> dof = DOFManager(dof_per_node=3)
    >>> dof.idx(1, 0)
    3
    >>> dof.ndof(4)
    12
    >>> dof.element_dof_map([2, 5])
    [6, 7, 8, 15, 16, 17]
    """
    dof_per_node: int

    def idx(self, node_id: int, local_dof: int) -> int:
        """
        Global equation for one DOF of one node.

        local_dof : 0=ux, 1=uy, 2=rz for a plane frame
        """
        if not 0 <= local_dof < self.dof_per_node:
            raise IndexError(
                f"Local DOF {local_dof} out of range [0, {self.dof_per_node - 1}]"
            )
        return self.dof_per_node * node_id + local_dof

    def ndof(self, n_nodes: int) -> int:
        """Total system size (rows of K)."""
        return self.dof_per_node * n_nodes

    def node_dofs(self, node_id: int) -> List[int]:
        base = self.dof_per_node * node_id
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: Sequence[int]) -> List[int]:
        """
        Flattened equation list for an element connecting `node_ids`.
        Used to scatter element matrices into K and gather from d.
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result

    def node_of(self, dof: int) -> int:
        """Inverse lookup: which node owns a global equation."""
        return dof // self.dof_per_node


DOF_2D_FRAME = DOFManager(dof_per_node=3)   # ux, uy, rz
