# planeframe/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Numerical settings shared by assembly, solve and post-processing."""

    # Max condition number of the reduced stiffness before the model is
    # reported as a mechanism
    cond_limit: float = 1e12

    # Elements shorter than this are rejected
    zero_length_tol: float = 1e-12

    # A planar body has 3 rigid-body modes
    min_restraints: int = 3

    # Sample count used by MemberDiagram.sample()
    diagram_points: int = 21


# Global config instance
CONFIG = SolverConfig()
