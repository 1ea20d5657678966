# planeframe/diagrams.py
"""
FORCE DIAGRAM COEFFICIENTS
==========================

Every member's axial force, shear force, bending moment and deflection is
a polynomial of degree <= 3 in the local coordinate u (0 <= u <= L). This
module turns the solved end forces, the member's distributed loads and its
local end displacements into those polynomials, stored as four
coefficients (constant, linear, quadratic, cubic), so consumers evaluate
the curves anywhere instead of reading pre-sampled points.

SIGN CONVENTIONS (local frame):
-------------------------------
End forces f = [Fx0, Fy0, M0, Fx1, Fy1, M1] act ON the member. Cutting at u
and keeping the piece [0, u]:

- N(u) = -Fx0 - ∫p             tension positive,   N(L) =  Fx1
- V(u) =  Fy0 + ∫q                                  V(L) = -Fy1
- M(u) = -M0 + Fy0·u + ∫∫q     sagging positive,   M(L) =  M1

with q(u), p(u) the transverse and axial load intensities, so dM/du = V.

For a simply supported member with downward UDL w: V(0) = wL/2 and
M(L/2) = wL²/8.

DEFLECTION:
-----------
Transverse v(u) is the cubic Hermite interpolant of (v0, θ0, v1, θ1);
axial displacement is linear between u0 and u1.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.polynomial import polynomial as P

from .config import CONFIG

QUANTITIES = ("axial", "shear", "moment", "deflection", "axial_displacement")


@dataclass(frozen=True)
class DiagramPoint:
    """A single point on a force diagram."""
    x_local: float      # Position along element (0 to L)
    x_global: float     # Global X coordinate (undeformed)
    y_global: float     # Global Y coordinate (undeformed)
    N: float            # Axial force
    V: float            # Shear force
    M: float            # Bending moment
    v: float            # Transverse deflection (local y)


@dataclass(frozen=True)
class DeflectedPoint:
    """A point on the deflected shape curve."""
    x: float
    y: float


def hermite_shape_functions(xi: float) -> Tuple[float, float, float, float]:
    """
    Hermite cubic shape functions, xi = u / L in [0, 1].

    v(xi) = N1*v_i + N2*theta_i*L + N3*v_j + N4*theta_j*L
    """
    N1 = 1 - 3*xi**2 + 2*xi**3
    N2 = xi - 2*xi**2 + xi**3
    N3 = 3*xi**2 - 2*xi**3
    N4 = -xi**2 + xi**3
    return N1, N2, N3, N4


def axial_coefficients(f_local: np.ndarray, L: float, p0: float, p1: float) -> np.ndarray:
    return np.array([-f_local[0], -p0, -(p1 - p0) / (2.0 * L), 0.0])


def shear_coefficients(f_local: np.ndarray, L: float, q0: float, q1: float) -> np.ndarray:
    return np.array([f_local[1], q0, (q1 - q0) / (2.0 * L), 0.0])


def moment_coefficients(f_local: np.ndarray, L: float, q0: float, q1: float) -> np.ndarray:
    # integral of the shear polynomial, constant fixed by the end moment
    return np.array([-f_local[2], f_local[1], q0 / 2.0, (q1 - q0) / (6.0 * L)])


def deflection_coefficients(d_local: np.ndarray, L: float) -> np.ndarray:
    """Hermite cubic v(u) = a0 + a1·u + a2·u² + a3·u³ from local end displacements."""
    v0, t0, v1, t1 = d_local[1], d_local[2], d_local[4], d_local[5]
    L2 = L * L
    return np.array([
        v0,
        t0,
        (-3.0 * v0 - 2.0 * t0 * L + 3.0 * v1 - t1 * L) / L2,
        (2.0 * v0 + t0 * L - 2.0 * v1 + t1 * L) / (L2 * L),
    ])


def axial_displacement_coefficients(d_local: np.ndarray, L: float) -> np.ndarray:
    return np.array([d_local[0], (d_local[3] - d_local[0]) / L, 0.0, 0.0])


def _abs_max(coeffs: np.ndarray, L: float) -> float:
    """Largest |f(u)| on [0, L]: ends plus interior stationary points."""
    candidates = [0.0, L]
    deriv = P.polytrim(P.polyder(coeffs), tol=0.0)
    if len(deriv) > 1:
        for root in P.polyroots(deriv):
            if abs(root.imag) < 1e-12 and 0.0 < root.real < L:
                candidates.append(float(root.real))
    return float(max(abs(P.polyval(u, coeffs)) for u in candidates))


@dataclass(frozen=True, eq=False)
class MemberDiagram:
    """
    Polynomial description of one member's response.

    Coefficient arrays are ordered (constant, linear, quadratic, cubic)
    in the local coordinate u. origin and direction (c, s) locate the
    member in the global frame; there is no reference back to a Structure.
    """
    element_id: int
    length: float
    origin: Tuple[float, float]
    direction: Tuple[float, float]
    end_forces: np.ndarray
    axial: np.ndarray
    shear: np.ndarray
    moment: np.ndarray
    deflection: np.ndarray
    axial_displacement: np.ndarray

    def coefficients(self, quantity: str) -> np.ndarray:
        if quantity not in QUANTITIES:
            raise KeyError(f"Unknown diagram quantity {quantity!r}; expected one of {QUANTITIES}")
        return getattr(self, quantity)

    def evaluate(self, quantity: str, u):
        """Value of `quantity` at local coordinate(s) u."""
        return P.polyval(u, self.coefficients(quantity))

    def to_global(self, u: float) -> Tuple[float, float]:
        c, s = self.direction
        return self.origin[0] + c * u, self.origin[1] + s * u

    def sample(self, n_points: Optional[int] = None) -> List[DiagramPoint]:
        """N, V, M and v at n_points evenly spaced stations (ends included)."""
        if n_points is None:
            n_points = CONFIG.diagram_points
        points = []
        for u in np.linspace(0.0, self.length, n_points):
            x_global, y_global = self.to_global(u)
            points.append(DiagramPoint(
                x_local=float(u),
                x_global=float(x_global),
                y_global=float(y_global),
                N=float(P.polyval(u, self.axial)),
                V=float(P.polyval(u, self.shear)),
                M=float(P.polyval(u, self.moment)),
                v=float(P.polyval(u, self.deflection)),
            ))
        return points

    def deflected_shape(self, scale: float = 1.0, n_points: int = 21) -> List[DeflectedPoint]:
        """Global coordinates of the deformed member, deformations scaled by `scale`."""
        c, s = self.direction
        shape = []
        for u in np.linspace(0.0, self.length, n_points):
            du = P.polyval(u, self.axial_displacement)
            dv = P.polyval(u, self.deflection)
            x_undef, y_undef = self.to_global(u)
            shape.append(DeflectedPoint(
                x=float(x_undef + scale * (c * du - s * dv)),
                y=float(y_undef + scale * (s * du + c * dv)),
            ))
        return shape

    def extremes(self) -> Dict[str, float]:
        """Maximum absolute axial force, shear, moment and deflection along the member."""
        return {
            "max_N": _abs_max(self.axial, self.length),
            "max_V": _abs_max(self.shear, self.length),
            "max_M": _abs_max(self.moment, self.length),
            "max_v": _abs_max(self.deflection, self.length),
        }


def member_diagram(
    element_id: int,
    L: float,
    c: float,
    s: float,
    origin: Tuple[float, float],
    f_local: np.ndarray,
    d_local: np.ndarray,
    intensities: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0),
) -> MemberDiagram:
    """
    Build a MemberDiagram.

    f_local : end forces acting on the member (fixed-end correction applied)
    d_local : end displacements in local coordinates
    intensities : summed (q0, q1, p0, p1) of the member's distributed loads
    """
    q0, q1, p0, p1 = intensities
    arrays = {
        "end_forces": np.array(f_local, dtype=float),
        "axial": axial_coefficients(f_local, L, p0, p1),
        "shear": shear_coefficients(f_local, L, q0, q1),
        "moment": moment_coefficients(f_local, L, q0, q1),
        "deflection": deflection_coefficients(d_local, L),
        "axial_displacement": axial_displacement_coefficients(d_local, L),
    }
    for arr in arrays.values():
        arr.setflags(write=False)
    return MemberDiagram(
        element_id=element_id,
        length=float(L),
        origin=(float(origin[0]), float(origin[1])),
        direction=(float(c), float(s)),
        **arrays,
    )


def get_frame_summary(diagrams: Sequence[MemberDiagram]) -> Dict[str, Optional[float]]:
    """
    Largest absolute internal forces over the frame, and where they occur.
    """
    if not diagrams:
        return {
            "max_axial_force": 0.0,
            "max_shear_force": 0.0,
            "max_moment": 0.0,
            "critical_element_N": None,
            "critical_element_V": None,
            "critical_element_M": None,
        }

    extremes = [(d.element_id, d.extremes()) for d in diagrams]
    max_N_elem = max(extremes, key=lambda item: item[1]["max_N"])
    max_V_elem = max(extremes, key=lambda item: item[1]["max_V"])
    max_M_elem = max(extremes, key=lambda item: item[1]["max_M"])

    return {
        "max_axial_force": max_N_elem[1]["max_N"],
        "max_shear_force": max_V_elem[1]["max_V"],
        "max_moment": max_M_elem[1]["max_M"],
        "critical_element_N": max_N_elem[0],
        "critical_element_V": max_V_elem[0],
        "critical_element_M": max_M_elem[0],
    }
