# element end forces, nodal displacements, reactions, equilibrium residual

from typing import Dict, Optional, Sequence

import numpy as np

from .elements import element_geometry, frame2d_local_stiffness, frame2d_transform
from .kernel import DOF_2D_FRAME
from .model import Frame2D, LoadSet, Node, Support


def element_local_displacements(
    nodes: Sequence[Node],
    element: Frame2D,
    d_global: np.ndarray,
    eid: Optional[int] = None,
) -> np.ndarray:
    """Gather an element's 6 global displacements and rotate them to local axes."""
    _, c, s = element_geometry(nodes, element, eid)
    dof_map = DOF_2D_FRAME.element_dof_map([element.ni, element.nj])
    d_elem_global = d_global[dof_map]
    return frame2d_transform(c, s) @ d_elem_global


def element_end_forces_local(
    nodes: Sequence[Node],
    element: Frame2D,
    d_global: np.ndarray,
    f_fixed_end: Optional[np.ndarray] = None,
    eid: Optional[int] = None,
) -> np.ndarray:
    """
    Compute element end forces in LOCAL coordinates from global displacements.

    The process:
    1. Extract element's global displacements
    2. Transform to local coordinates
    3. Compute forces using f = k × d
    4. Subtract the element's own equivalent nodal loads (f_fixed_end)

    Step 4 matters: the equivalent loads were added to F during assembly, so
    k × d alone is the superposed equivalent system, not the member's true
    end actions.

    Returns:
    --------
    np.ndarray
        Shape (6,): [Fx0, Fy0, M0, Fx1, Fy1, M1], forces acting on the member
        in its local frame.
    """
    L, c, s = element_geometry(nodes, element, eid)
    d_local = element_local_displacements(nodes, element, d_global, eid)
    k_local = frame2d_local_stiffness(element.EA, element.EI, L)
    f_local = k_local @ d_local
    if f_fixed_end is not None:
        f_local = f_local - f_fixed_end
    return f_local


def compute_nodal_displacements(
    nodes: Sequence[Node],
    d_global: np.ndarray,
) -> Dict[int, Dict[str, float]]:
    """
    Mapping of node index to {'ux', 'uy', 'rz', 'magnitude'}.
    """
    result = {}
    for node_id in range(len(nodes)):
        ux, uy, rz = d_global[DOF_2D_FRAME.node_dofs(node_id)]
        result[node_id] = {
            'ux': float(ux),
            'uy': float(uy),
            'rz': float(rz),
            'magnitude': float(np.hypot(ux, uy)),
        }
    return result


def compute_reactions(
    reactions: np.ndarray,
    supports: Sequence[Support],
) -> Dict[int, Dict[str, float]]:
    """
    Per-support reaction components from the ordered reaction vector.

    The vector is laid out support by support, and within a support in
    (Fx, Fy, M) order for the restrained flags only. Free components of a
    support report 0.0.
    """
    keys = ('Rx', 'Ry', 'Mz')
    result = {}
    pos = 0
    for support in supports:
        entry = {key: 0.0 for key in keys}
        for local_dof in support.restrained():
            entry[keys[local_dof]] = float(reactions[pos])
            pos += 1
        result[support.node] = entry
    return result


def global_equilibrium_residual(
    nodes: Sequence[Node],
    elements: Sequence[Frame2D],
    loads: LoadSet,
    reactions: np.ndarray,
    reaction_dofs: Sequence[int],
) -> np.ndarray:
    """
    [ΣFx, ΣFy, ΣM about the origin] of applied loads plus reactions.

    Distributed loads enter through their resultants (trapezoid area at its
    centroid), not through equivalent nodal loads, so this is an independent
    check on assembly and solve. Zero up to round-off for a solved structure.

    reactions, reaction_dofs : ordered reaction vector and the global DOF
        each entry belongs to
    """
    total = np.zeros(3, dtype=float)

    def add_force(x, y, fx, fy, m=0.0):
        total[0] += fx
        total[1] += fy
        total[2] += m + x * fy - y * fx

    for load in loads.nodal:
        node = nodes[load.node]
        add_force(node.x, node.y, load.fx, load.fy, load.m)

    for moment in loads.end_moments:
        total[2] += moment.m

    for load in loads.distributed:
        element = elements[load.element]
        L, c, s = element_geometry(nodes, element, load.element)
        ni = nodes[element.ni]
        resultant = 0.5 * (load.w0 + load.w1) * L
        if resultant == 0.0:
            # equal and opposite ends: pure couple
            arm = 0.0
        else:
            arm = L * (load.w0 + 2.0 * load.w1) / (3.0 * (load.w0 + load.w1))
        if load.global_plane:
            ux, uy = 0.0, 1.0
        elif load.axial:
            ux, uy = c, s
        else:
            ux, uy = -s, c
        x, y = ni.x + c * arm, ni.y + s * arm
        add_force(x, y, resultant * ux, resultant * uy)
        if resultant == 0.0 and load.w0 != 0.0:
            # antisymmetric linear load w0 -> -w0: couple of magnitude w0·L²/6
            couple = -load.w0 * L * L / 6.0
            total[2] += couple * (c * uy - s * ux)

    for value, dof in zip(reactions, reaction_dofs):
        node_id = DOF_2D_FRAME.node_of(dof)
        node = nodes[node_id]
        component = [0.0, 0.0, 0.0]
        component[dof - DOF_2D_FRAME.idx(node_id, 0)] = float(value)
        add_force(node.x, node.y, *component)

    return total
