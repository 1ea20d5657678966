# planeframe/kernel - Element-agnostic analysis plumbing
"""
KERNEL
======

Assembly and solving don't care what an element is. They need:
- a map (node_id, local_dof) -> global equation number
- element matrices with their equation lists
- the restrained equation list
- a load vector

The Frame2D specifics (stiffness, transform, fixed-end forces) live one
level up in the package; this layer only scatters, partitions and solves.
"""

from .dof import DOFManager, DOF_2D_FRAME
from .assemble import assemble_global_K, assemble_global_F, add_nodal_load
from .solve import solve_linear

__all__ = [
    'DOFManager',
    'DOF_2D_FRAME',
    'assemble_global_K',
    'assemble_global_F',
    'add_nodal_load',
    'solve_linear',
]
