# planeframe/kernel/assemble.py
"""
ASSEMBLY: Scatter-Add into Global Matrices
==========================================

For each element we are handed (dof_map, matrix) where dof_map is the
element's list of global equations. Entry (a, b) of the element matrix is
added to K[dof_map[a], dof_map[b]]; load vectors scatter the same way.
Contributions always accumulate: two elements (or two loads) touching the
same equation add, they never overwrite.

    K = zeros(ndof x ndof)
    for each element:
        for each (a, b):
            K[dof_map[a], dof_map[b]] += ke[a, b]
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def assemble_global_K(
    ndof: int,
    contributions: Sequence[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix.

    Parameters:
    -----------
    ndof : int
        System size (3 x n_nodes for a plane frame)
    contributions : sequence of (dof_map, ke)
        ke in global coordinates, shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        K, shape (ndof, ndof). Symmetric positive semi-definite until
        supports are applied.
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)
        if ke.shape != (n_element_dofs, n_element_dofs):
            raise ValueError(
                f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"
            )
        idx = np.asarray(dof_map, dtype=int)
        # np.add.at accumulates repeated indices instead of overwriting
        np.add.at(K, np.ix_(idx, idx), ke)

    logger.debug("Assembled K: %d equations from %d elements", ndof, len(contributions))
    return K


def assemble_global_F(
    ndof: int,
    contributions: Sequence[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble a global load vector from element contributions
    (equivalent nodal loads of distributed loads, already in global coords).
    """
    F = np.zeros(ndof, dtype=float)

    for dof_map, fe in contributions:
        n_element_dofs = len(dof_map)
        if fe.shape != (n_element_dofs,):
            raise ValueError(
                f"Element fe shape {fe.shape} doesn't match dof_map length {n_element_dofs}"
            )
        np.add.at(F, np.asarray(dof_map, dtype=int), fe)

    return F


def add_nodal_load(
    F: np.ndarray,
    node_id: int,
    load_vector: Sequence[float],
    dof_per_node: int
) -> None:
    """
    Add a nodal load to the global load vector (in-place).

    load_vector : [Fx, Fy, Mz] for a plane frame

    >>> F = np.zeros(6)
    >>> add_nodal_load(F, node_id=1, load_vector=[1000.0, 0.0, 0.0], dof_per_node=3)
    >>> float(F[3])
    1000.0
    """
    base_dof = dof_per_node * node_id
    for i, val in enumerate(load_vector):
        F[base_dof + i] += val
