# planeframe - Linear static analysis of plane frames
"""
PLANEFRAME: Direct Stiffness Analysis of 2D Frames
==================================================

Given nodes, Euler-Bernoulli frame members, supports and loads (nodal
forces, linearly varying distributed loads, member end moments), compute
nodal displacements, support reactions, member end forces and the
polynomial coefficients of every member's N, V, M and deflection curves.

ARCHITECTURE:
-------------
    kernel/         DOF numbering, scatter-add assembly, partitioned solve
    model.py        Node, Frame2D, Support, load records, LoadSet
    elements.py     Frame2D stiffness and transformation matrices
    loads.py        Equivalent nodal loads (trapezoidal, axial, end moments)
    structure.py    Structure aggregate: validation, equations, assembly
    solve.py        solve(structure, loads) -> FrameResult
    post.py         End forces, reactions, equilibrium residual
    diagrams.py     Per-member polynomial coefficients
    results.py      Immutable FrameResult (+ pandas tables)

USAGE:
------
    >>> from planeframe import Structure, Node, Frame2D, Support, NodalLoad
    >>> s = Structure([Node(0, 0), Node(3, 0)],
    ...               [Frame2D(0, 1, EA=2.1e9, EI=1.68e6)],
    ...               [Support.fixed(0)])
    >>> result = s.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)])
"""

import logging

from .config import CONFIG, SolverConfig
from .errors import (
    InvalidGeometryError,
    InvalidLoadReferenceError,
    MechanismError,
    StructureError,
    UnderConstrainedError,
    UnstableStructureError,
)
from .kernel import DOFManager, solve_linear
from .model import (
    DistributedLoad,
    ElementEndMoment,
    Frame2D,
    LoadSet,
    NodalLoad,
    Node,
    Support,
)
from .diagrams import MemberDiagram
from .results import FrameResult
from .solve import solve
from .structure import Structure, build_structure

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'CONFIG',
    'SolverConfig',
    'StructureError',
    'InvalidGeometryError',
    'InvalidLoadReferenceError',
    'UnstableStructureError',
    'UnderConstrainedError',
    'MechanismError',
    'DOFManager',
    'solve_linear',
    'Node',
    'Frame2D',
    'Support',
    'NodalLoad',
    'DistributedLoad',
    'ElementEndMoment',
    'LoadSet',
    'MemberDiagram',
    'FrameResult',
    'Structure',
    'build_structure',
    'solve',
]
