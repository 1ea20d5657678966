# planeframe/kernel/solve.py
"""Linear system solver with boundary conditions and mechanism detection."""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.linalg import LinAlgError, cho_factor, cho_solve

from ..errors import UnstableStructureError

logger = logging.getLogger(__name__)


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: Sequence[int],
    cond_limit: float = 1e12,
    d_prescribed: Optional[np.ndarray] = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve K·d = F with fixed boundary conditions via partitioning.

        K_UU · d_U = F_U - K_UR · d_R
        R          = K · d - F        (non-zero only at restrained DOFs)

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,)
        fixed_dofs: Restrained DOF indices
        cond_limit: Max condition number of K_UU before raising
        d_prescribed: Displacements at fixed_dofs (same order). None means
            rigid supports, d_R = 0.

    Returns:
        d: Displacement vector (ndof,)
        R: Reaction vector (ndof,)
        free: Array of free DOF indices

    Raises:
        UnstableStructureError: K_UU singular, not positive definite, or
            cond(K_UU) > cond_limit
    """
    ndof = K.shape[0]

    # Partition DOFs
    fixed_list = list(fixed_dofs)
    fixed_set = set(fixed_list)
    free = np.array([i for i in range(ndof) if i not in fixed_set], dtype=int)
    fixed = np.array(fixed_list, dtype=int)

    d = np.zeros(ndof, dtype=float)
    if d_prescribed is not None:
        d_prescribed = np.asarray(d_prescribed, dtype=float)
        if d_prescribed.shape != fixed.shape:
            raise ValueError(
                f"d_prescribed has shape {d_prescribed.shape}, expected {fixed.shape}"
            )
        d[fixed] = d_prescribed

    if free.size:
        Kff = K[np.ix_(free, free)]
        Ff = F[free] - K[np.ix_(free, fixed)] @ d[fixed]

        # Check conditioning
        cond = np.linalg.cond(Kff)
        logger.debug("Reduced system: %d free DOFs, cond=%.3e", free.size, cond)
        if not np.isfinite(cond) or cond > cond_limit:
            raise UnstableStructureError(
                f"Unstable system (cond={cond:.2e}). Check supports. Need cond < {cond_limit:.0e}."
            )
        if cond > 0.01 * cond_limit:
            logger.warning(
                "Reduced stiffness is poorly conditioned (cond=%.2e, limit %.0e)", cond, cond_limit
            )

        # K_UU is symmetric; Cholesky fails if it is not positive definite
        try:
            factor = cho_factor(Kff)
        except LinAlgError as exc:
            raise UnstableStructureError(
                f"Reduced stiffness is not positive definite: {exc}"
            ) from exc
        d[free] = cho_solve(factor, Ff)

    # Compute reactions: R = K·d - F
    R = K @ d - F

    return d, R, free
