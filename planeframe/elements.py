# Frame2D element stiffness + transformation

from typing import Optional, Sequence

import numpy as np

from .config import CONFIG
from .errors import InvalidGeometryError
from .model import Node, Frame2D


def element_geometry(
    nodes: Sequence[Node],
    e: Frame2D,
    eid: Optional[int] = None,
    tol: float = CONFIG.zero_length_tol,
):
    """
    Length and direction cosines of an element.

    Returns (L, c, s) with c = cos(theta), s = sin(theta), theta = atan2(dy, dx).
    """
    ni = nodes[e.ni]
    nj = nodes[e.nj]
    dx = nj.x - ni.x
    dy = nj.y - ni.y
    L = float(np.hypot(dx, dy))
    if L <= tol:
        label = "Element" if eid is None else f"Element {eid}"
        raise InvalidGeometryError(
            f"{label} ({e.ni} -> {e.nj}) has zero length."
        )
    c = dx / L
    s = dy / L
    return L, c, s


def frame2d_local_stiffness(EA: float, EI: float, L: float) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [uix, uiy, rzi, ujx, ujy, rzj]
    """
    EA_L = EA / L
    L2 = L * L
    L3 = L2 * L

    k = np.array([
        [ EA_L,      0.0,        0.0,    -EA_L,      0.0,        0.0],
        [  0.0,  12*EI/L3,   6*EI/L2,      0.0, -12*EI/L3,   6*EI/L2],
        [  0.0,   6*EI/L2,    4*EI/L,      0.0,  -6*EI/L2,    2*EI/L],
        [-EA_L,      0.0,        0.0,     EA_L,      0.0,        0.0],
        [  0.0, -12*EI/L3,  -6*EI/L2,      0.0,  12*EI/L3,  -6*EI/L2],
        [  0.0,   6*EI/L2,    2*EI/L,      0.0,  -6*EI/L2,    4*EI/L],
    ], dtype=float)
    return k


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs.
    Orthogonal, so T.T maps local back to global.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def frame2d_global_stiffness(nodes: Sequence[Node], e: Frame2D, eid: Optional[int] = None) -> np.ndarray:
    L, c, s = element_geometry(nodes, e, eid)
    k_local = frame2d_local_stiffness(e.EA, e.EI, L)
    T = frame2d_transform(c, s)
    k_global = T.T @ k_local @ T
    return k_global
