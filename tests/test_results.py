"""
FrameResult layout: reaction ordering, lookups, pandas tables.
"""

import numpy as np
import pandas as pd
import pytest

from planeframe import Frame2D, InvalidGeometryError, NodalLoad, Node, Structure, Support, build_structure
from planeframe.post import compute_nodal_displacements, compute_reactions

E, I, A = 210e9, 8.0e-6, 0.01
P = 1200.0


def propped_beam():
    """Fixed at node 0, pinned at node 2, listed pin first."""
    return build_structure(
        [(0.0, 0.0), (3.0, 0.0), (6.0, 0.0)],
        [Frame2D.from_section(0, 1, E=E, A=A, I=I), Frame2D.from_section(1, 2, E=E, A=A, I=I)],
        [Support.pinned(2), Support.fixed(0)],
    )


def test_reactions_follow_support_order():
    structure = propped_beam()
    assert structure.restrained_dofs() == [6, 7, 0, 1, 2]

    result = structure.solve(nodal_loads=[NodalLoad(1, fy=-P)])
    assert result.reaction_dofs == (6, 7, 0, 1, 2)
    assert result.reactions.shape == (5,)

    # propped cantilever, point load at midspan: R_pin = 5P/16, R_fixed = 11P/16, M = 3PL/16
    span = 6.0
    np.testing.assert_allclose(result.reactions[1], 5 * P / 16, rtol=1e-9)
    np.testing.assert_allclose(result.reactions[3], 11 * P / 16, rtol=1e-9)
    np.testing.assert_allclose(result.reactions[4], 3 * P * span / 16, rtol=1e-9)
    np.testing.assert_allclose(result.reactions[[0, 2]], 0.0, atol=1e-9)


def test_partial_supports_report_only_set_flags():
    structure = build_structure(
        [(0.0, 0.0), (5.0, 0.0)],
        [Frame2D.from_section(0, 1, E=E, A=A, I=I)],
        [Support.roller_x(1), Support(0, fx=True, m=True)],
    )
    assert structure.restrained_dofs() == [4, 0, 2]


def test_support_reactions_mapping():
    structure = propped_beam()
    result = structure.solve(nodal_loads=[NodalLoad(1, fy=-P)])
    mapping = result.support_reactions()
    assert list(mapping) == [2, 0]
    assert mapping[2]["Mz"] == 0.0
    assert mapping[2]["Ry"] == pytest.approx(5 * P / 16, rel=1e-9)
    assert mapping == compute_reactions(result.reactions, structure.supports)


def test_node_displacement_and_zero_restraints():
    result = propped_beam().solve(nodal_loads=[NodalLoad(1, fy=-P)])
    assert result.n_nodes == 3
    np.testing.assert_array_equal(result.node_displacement(0), 0.0)
    assert result.node_displacement(2)[1] == 0.0
    assert result.node_displacement(1)[1] < 0.0

    table = compute_nodal_displacements(propped_beam().nodes, result.displacements)
    assert table[1]["uy"] == result.node_displacement(1)[1]
    assert table[1]["magnitude"] == pytest.approx(abs(table[1]["uy"]))


def test_displacement_table():
    result = propped_beam().solve(nodal_loads=[NodalLoad(1, fy=-P)])
    df = result.displacement_table()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["ux", "uy", "rz"]
    assert df.index.name == "node"
    assert df.shape == (3, 3)
    assert df.loc[1, "uy"] == result.displacements[4]


def test_reaction_table():
    result = propped_beam().solve(nodal_loads=[NodalLoad(1, fy=-P)])
    df = result.reaction_table()
    assert list(df["node"]) == [2, 2, 0, 0, 0]
    assert list(df["component"]) == ["Rx", "Ry", "Rx", "Ry", "Mz"]
    assert list(df["dof"]) == [6, 7, 0, 1, 2]
    assert df["value"].sum() == pytest.approx(P + 3 * P * 6.0 / 16, rel=1e-9)


def test_end_force_table():
    result = propped_beam().solve(nodal_loads=[NodalLoad(1, fy=-P)])
    df = result.end_force_table()
    assert list(df.index) == [0, 1]
    for column in ("length", "Fx0", "Fy0", "M0", "Fx1", "Fy1", "M1", "max_N", "max_V", "max_M", "max_v"):
        assert column in df.columns
    # fixed-end moment 3PL/16 governs; under the load it is 5PL/32
    assert df.loc[0, "max_M"] == pytest.approx(3 * P * 6.0 / 16, rel=1e-9)
    assert df.loc[1, "max_M"] == pytest.approx(5 * P * 6.0 / 32, rel=1e-9)


def test_result_arrays_are_read_only():
    result = propped_beam().solve(nodal_loads=[NodalLoad(1, fy=-P)])
    with pytest.raises(ValueError):
        result.displacements[0] = 1.0
    with pytest.raises(ValueError):
        result.reactions[0] = 1.0
    with pytest.raises(ValueError):
        result.internal_loads[0][0] = 1.0


def test_with_node_returns_new_structure():
    structure = propped_beam()
    raised = structure.with_node(1, 3.0, 0.5)
    assert raised is not structure
    assert structure.nodes[1] == Node(3.0, 0.0)
    assert raised.nodes[1] == Node(3.0, 0.5)
    assert raised.supports == structure.supports
    assert raised.element_length(0) == pytest.approx(np.hypot(3.0, 0.5))

    before = structure.solve(nodal_loads=[NodalLoad(1, fy=-P)])
    after = raised.solve(nodal_loads=[NodalLoad(1, fy=-P)])
    # the raised node makes a shallow arch: stiffer than the straight beam
    assert abs(after.node_displacement(1)[1]) < abs(before.node_displacement(1)[1])


def test_with_node_rejects_missing_node():
    with pytest.raises(InvalidGeometryError):
        propped_beam().with_node(7, 0.0, 0.0)


def test_structure_equations():
    structure = propped_beam()
    assert structure.ndof == 9
    assert structure.element_equations(1) == [3, 4, 5, 6, 7, 8]
    assert isinstance(structure.nodes, tuple)
