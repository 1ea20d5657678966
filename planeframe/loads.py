# loads.py - Equivalent nodal loads for nodal, distributed and end-moment loads

import logging
from typing import Iterable, Sequence, Tuple

import numpy as np

from .elements import element_geometry, frame2d_transform
from .kernel import DOF_2D_FRAME, DOFManager, add_nodal_load, assemble_global_F
from .model import DistributedLoad, Frame2D, LoadSet, Node

logger = logging.getLogger(__name__)


def trapezoidal_transverse_load(L: float, w0: float, w1: float) -> np.ndarray:
    """
    Equivalent nodal loads for a linearly varying transverse load in LOCAL
    element coordinates.

    The load acts along local +y with intensity w(x) = w0 + (w1 - w0)·x/L.
    The returned forces are work-equivalent (cubic Hermite weighting), so
    they are the negatives of the fixed-end reactions:

        Fy_i = L(7w0 + 3w1)/20      Mz_i =  L²(3w0 + 2w1)/60
        Fy_j = L(3w0 + 7w1)/20      Mz_j = -L²(2w0 + 3w1)/60

    For w0 == w1 == w this reduces to the familiar wL/2 and ±wL²/12.

    Returns:
    --------
    np.ndarray
        Shape (6,): [Fx_i, Fy_i, Mz_i, Fx_j, Fy_j, Mz_j]
    """
    L2 = L * L
    return np.array([
        0.0,
        L * (7.0 * w0 + 3.0 * w1) / 20.0,
        L2 * (3.0 * w0 + 2.0 * w1) / 60.0,
        0.0,
        L * (3.0 * w0 + 7.0 * w1) / 20.0,
        -L2 * (2.0 * w0 + 3.0 * w1) / 60.0,
    ], dtype=float)


def linear_axial_load(L: float, p0: float, p1: float) -> np.ndarray:
    """
    Equivalent nodal loads for a linearly varying axial load p(x) along
    local +x (linear shape functions).
    """
    return np.array([
        L * (2.0 * p0 + p1) / 6.0,
        0.0,
        0.0,
        L * (p0 + 2.0 * p1) / 6.0,
        0.0,
        0.0,
    ], dtype=float)


def frame2d_equiv_nodal_load_udl(L: float, w: float) -> np.ndarray:
    """
    Uniform transverse load w (local +y): [0, wL/2, wL²/12, 0, wL/2, -wL²/12].

    >>> frame2d_equiv_nodal_load_udl(4.0, -1000.0)[1]
    -2000.0
    """
    return trapezoidal_transverse_load(L, w, w)


def local_load_components(load: DistributedLoad, c: float, s: float) -> Tuple[float, float, float, float]:
    """
    Split a distributed load into local transverse (q) and axial (p) intensities.

    A global-plane load acts along global +Y. Global +Y expressed in the
    element frame is (s, c), so the member sees q = w·c across it and
    p = w·s along it.

    Returns (q0, q1, p0, p1).
    """
    if load.global_plane:
        return load.w0 * c, load.w1 * c, load.w0 * s, load.w1 * s
    if load.axial:
        return 0.0, 0.0, load.w0, load.w1
    return load.w0, load.w1, 0.0, 0.0


def element_load_intensities(
    loads: Iterable[DistributedLoad], c: float, s: float
) -> Tuple[float, float, float, float]:
    """Sum (q0, q1, p0, p1) over every distributed load on one element."""
    q0 = q1 = p0 = p1 = 0.0
    for load in loads:
        dq0, dq1, dp0, dp1 = local_load_components(load, c, s)
        q0 += dq0
        q1 += dq1
        p0 += dp0
        p1 += dp1
    return q0, q1, p0, p1


def element_equivalent_load_local(
    L: float, c: float, s: float, loads: Iterable[DistributedLoad]
) -> np.ndarray:
    """
    Equivalent nodal loads of all distributed loads on one element, LOCAL coords.

    Contributions accumulate. This is also the fixed-end correction
    subtracted when recovering member end forces.
    """
    q0, q1, p0, p1 = element_load_intensities(loads, c, s)
    f_local = np.zeros(6, dtype=float)
    if q0 or q1:
        f_local += trapezoidal_transverse_load(L, q0, q1)
    if p0 or p1:
        f_local += linear_axial_load(L, p0, p1)
    return f_local


def assemble_load_vector(
    nodes: Sequence[Node],
    elements: Sequence[Frame2D],
    loads: LoadSet,
    dof: DOFManager = DOF_2D_FRAME,
) -> np.ndarray:
    """
    Build the global load vector F.

    - Nodal loads go straight onto their node's (ux, uy, rz) equations.
    - Distributed loads become local equivalent nodal loads, are rotated to
      global with T.T and scattered onto both end nodes.
    - End moments go onto the rotational equation of the chosen end.
      A moment is the same in every plane frame, so no rotation is needed.

    Load references are assumed valid (Structure.validate_loads).
    """
    ndof = dof.ndof(len(nodes))

    contributions = []
    for eid, element in enumerate(elements):
        on_element = loads.distributed_on(eid)
        if not on_element:
            continue
        L, c, s = element_geometry(nodes, element, eid)
        f_local = element_equivalent_load_local(L, c, s, on_element)
        T = frame2d_transform(c, s)
        dof_map = dof.element_dof_map([element.ni, element.nj])
        contributions.append((dof_map, T.T @ f_local))

    F = assemble_global_F(ndof, contributions)

    for load in loads.nodal:
        add_nodal_load(F, load.node, (load.fx, load.fy, load.m), dof.dof_per_node)

    for moment in loads.end_moments:
        element = elements[moment.element]
        node_id = element.ni if moment.end == 0 else element.nj
        F[dof.idx(node_id, 2)] += moment.m

    logger.debug(
        "Load vector: %d nodal, %d distributed, %d end moments",
        len(loads.nodal), len(loads.distributed), len(loads.end_moments),
    )
    return F
