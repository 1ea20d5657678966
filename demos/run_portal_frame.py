# File: demos/run_portal_frame.py
"""
DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS)
============================================

Two columns and a roof beam with pinned bases:
- Gravity: uniform load on the beam (global -Y)
- Lateral: point load at the top of the left column

Prints drift, support reactions, member end forces and the peak
internal forces of every member.
"""

import logging

import pandas as pd

from planeframe import DistributedLoad, Frame2D, NodalLoad, Node, Structure, Support
from planeframe.diagrams import get_frame_summary


def main():
    print("=" * 70)
    print("DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS)")
    print("=" * 70)
    print()

    # Geometry and section (steel)
    L = 6.0       # beam span (m)
    H = 3.0       # column height (m)
    E = 210e9     # Pa
    I = 8.0e-6    # m^4
    A = 0.01      # m^2

    w = 2000.0    # gravity UDL on the beam (N/m)
    P = 1000.0    # lateral load at the left eave (N)

    nodes = [Node(0.0, 0.0), Node(0.0, H), Node(L, H), Node(L, 0.0)]
    elements = [
        Frame2D.from_section(0, 1, E=E, A=A, I=I),   # left column
        Frame2D.from_section(1, 2, E=E, A=A, I=I),   # beam
        Frame2D.from_section(2, 3, E=E, A=A, I=I),   # right column
    ]
    structure = Structure(nodes, elements, [Support.pinned(0), Support.pinned(3)])

    result = structure.solve(
        nodal_loads=[NodalLoad(1, fx=P)],
        distributed_loads=[DistributedLoad.uniform(1, -w, global_plane=True)],
    )

    drift = result.node_displacement(1)[0]
    print(f"Eave drift:        {drift * 1000:.3f} mm  (H/{H / abs(drift):.0f})")
    print()

    print("Support reactions:")
    print(result.reaction_table().to_string(index=False))
    print()

    print("Member end forces (local axes, acting on the member):")
    with pd.option_context("display.float_format", "{:,.1f}".format):
        print(result.end_force_table())
    print()

    summary = get_frame_summary(result.diagrams)
    print(f"Max |M| = {summary['max_moment']:,.1f} N·m on element {summary['critical_element_M']}")
    print(f"Max |V| = {summary['max_shear_force']:,.1f} N on element {summary['critical_element_V']}")
    print(f"Max |N| = {summary['max_axial_force']:,.1f} N on element {summary['critical_element_N']}")

    total_Ry = sum(r["Ry"] for r in result.support_reactions().values())
    print()
    print(f"Check: sum Ry = {total_Ry:,.1f} N, applied gravity = {w * L:,.1f} N")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
