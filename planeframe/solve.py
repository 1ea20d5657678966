# planeframe/solve.py
"""
SOLVE: Linear Static Analysis of a Plane Frame
==============================================

    1. Assemble K and F (element stiffness, equivalent nodal loads)
    2. Partition equations into restrained (R) and free (U)
    3. Solve K_UU · D_U = F_U          (rigid supports, D_R = 0)
    4. Reactions R = K_RU · D_U - F_R
    5. Per element: d_local = T · d, f_local = k_local · d_local - f_fixed_end
    6. Package everything in an immutable FrameResult

Either a complete result comes back or an error is raised; nothing
half-solved escapes.
"""

import logging
from typing import Optional

import numpy as np

from .config import SolverConfig
from .diagrams import member_diagram
from .errors import UnderConstrainedError, UnstableStructureError
from .kernel import solve_linear
from .loads import element_equivalent_load_local, element_load_intensities
from .model import LoadSet
from .post import element_end_forces_local, element_local_displacements
from .results import FrameResult

logger = logging.getLogger(__name__)


def solve(structure, loads: LoadSet, config: Optional[SolverConfig] = None) -> FrameResult:
    """
    Solve a Structure under one LoadSet.

    Parameters:
    -----------
    structure : Structure
    loads : LoadSet
        Nodal loads, distributed loads and element end moments. Only read.
    config : SolverConfig, optional
        Falls back to the structure's config.

    Returns:
    --------
    FrameResult

    Raises:
    -------
    InvalidLoadReferenceError
        A load references a missing node or element.
    UnderConstrainedError
        Fewer restrained DOFs than config.min_restraints.
    UnstableStructureError
        Reduced stiffness singular or too poorly conditioned (mechanism).
    """
    cfg = config or structure.config

    K, F = structure.assemble(loads)

    fixed = structure.restrained_dofs()
    if len(fixed) < cfg.min_restraints:
        raise UnderConstrainedError(
            f"Only {len(fixed)} restrained DOF(s); a plane frame needs at least "
            f"{cfg.min_restraints} to prevent rigid-body motion."
        )

    # Supports are rigid. Non-zero settlements would go in here.
    d_prescribed = np.zeros(len(fixed), dtype=float)
    d, R, free = solve_linear(K, F, fixed, cfg.cond_limit, d_prescribed=d_prescribed)
    if not np.all(np.isfinite(d)):
        raise UnstableStructureError("Solve produced non-finite displacements.")

    reactions = R[fixed]

    internal_loads = []
    diagrams = []
    for eid, element in enumerate(structure.elements):
        L, c, s = structure.element_geometry(eid)
        on_element = loads.distributed_on(eid)
        f_fixed_end = element_equivalent_load_local(L, c, s, on_element)
        f_local = element_end_forces_local(structure.nodes, element, d, f_fixed_end, eid)
        d_local = element_local_displacements(structure.nodes, element, d, eid)
        ni = structure.nodes[element.ni]
        internal_loads.append(f_local)
        diagrams.append(member_diagram(
            eid, L, c, s, (ni.x, ni.y), f_local, d_local,
            element_load_intensities(on_element, c, s),
        ))

    logger.debug(
        "Solved %d equations (%d free, %d restrained), max |d| = %.3e",
        structure.ndof, len(free), len(fixed), float(np.max(np.abs(d))) if d.size else 0.0,
    )

    return FrameResult.build(d, reactions, fixed, internal_loads, diagrams)
