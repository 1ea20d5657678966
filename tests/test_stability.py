"""
Ill-posed models must fail loudly: bad geometry at construction,
rigid-body freedom at solve time.
"""

import dataclasses

import numpy as np
import pytest

from planeframe import (
    CONFIG,
    Frame2D,
    InvalidGeometryError,
    NodalLoad,
    Node,
    SolverConfig,
    Structure,
    StructureError,
    Support,
    UnderConstrainedError,
    UnstableStructureError,
    solve_linear,
)
from planeframe.model import LoadSet

EA, EI = 2.1e9, 1.68e6


def two_span_beam(supports):
    nodes = [Node(0.0, 0.0), Node(4.0, 0.0), Node(8.0, 0.0)]
    elements = [Frame2D(0, 1, EA, EI), Frame2D(1, 2, EA, EI)]
    return Structure(nodes, elements, supports)


# ---------------------------------------------------------------------------
# Rigid-body detection
# ---------------------------------------------------------------------------

def test_no_supports_is_under_constrained():
    with pytest.raises(UnderConstrainedError):
        two_span_beam([]).solve(nodal_loads=[NodalLoad(1, fy=-1000.0)])


def test_two_restraints_is_under_constrained():
    structure = two_span_beam([Support.roller_x(0), Support.roller_x(2)])
    with pytest.raises(UnderConstrainedError):
        structure.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)])


def test_three_rollers_slide_horizontally():
    """Three vertical restraints leave the beam free to slide along X."""
    structure = two_span_beam([Support.roller_x(0), Support.roller_x(1), Support.roller_x(2)])
    with pytest.raises(UnstableStructureError) as excinfo:
        structure.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)])
    assert not isinstance(excinfo.value, UnderConstrainedError)


def test_concurrent_restraints_are_a_mechanism():
    """Pin at one end, horizontal roller at the other: free to rotate about the pin."""
    structure = two_span_beam([Support.pinned(0), Support.roller_y(2)])
    with pytest.raises(UnstableStructureError):
        structure.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)])


def test_mechanism_detected_without_loads():
    structure = two_span_beam([Support.roller_x(0), Support.roller_x(1), Support.roller_x(2)])
    with pytest.raises(UnstableStructureError):
        structure.solve()


def test_instability_is_a_structure_error():
    with pytest.raises(StructureError):
        two_span_beam([]).solve()


def test_min_restraints_follows_config():
    strict = SolverConfig(min_restraints=4)
    structure = two_span_beam([Support.pinned(0), Support.roller_x(2)])
    with pytest.raises(UnderConstrainedError):
        structure.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)], config=strict)
    # the default config accepts the same model
    result = structure.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)])
    assert np.all(np.isfinite(result.displacements))


def test_cond_limit_from_config():
    structure = two_span_beam([Support.pinned(0), Support.roller_x(2)])
    with pytest.raises(UnstableStructureError):
        structure.solve(nodal_loads=[NodalLoad(1, fy=-1000.0)], config=SolverConfig(cond_limit=1.0))


def test_solve_linear_detects_singular_system():
    K = np.array([[1.0, -1.0], [-1.0, 1.0]])
    with pytest.raises(UnstableStructureError):
        solve_linear(K, np.array([0.0, 1.0]), fixed_dofs=[])


def test_solve_linear_all_fixed():
    K = np.array([[2.0, -1.0], [-1.0, 2.0]])
    F = np.array([1.0, 0.0])
    d, R, free = solve_linear(K, F, fixed_dofs=[0, 1])
    assert free.size == 0
    np.testing.assert_array_equal(d, 0.0)
    np.testing.assert_array_equal(R, -F)


def test_solve_linear_prescribed_displacement():
    K = np.array([[2.0, -1.0], [-1.0, 2.0]])
    d, R, _ = solve_linear(K, np.zeros(2), fixed_dofs=[0], d_prescribed=[1.0])
    np.testing.assert_allclose(d, [1.0, 0.5])
    np.testing.assert_allclose(R, [1.5, 0.0], atol=1e-12)


def test_solve_linear_rejects_mismatched_prescribed():
    K = np.eye(3)
    with pytest.raises(ValueError):
        solve_linear(K, np.zeros(3), fixed_dofs=[0, 1], d_prescribed=[0.0])


# ---------------------------------------------------------------------------
# Geometry validation
# ---------------------------------------------------------------------------

def test_zero_length_element():
    with pytest.raises(InvalidGeometryError):
        Structure([Node(1.0, 2.0), Node(1.0, 2.0)], [Frame2D(0, 1, EA, EI)], [Support.fixed(0)])


def test_element_references_missing_node():
    with pytest.raises(InvalidGeometryError):
        Structure([Node(0.0, 0.0), Node(3.0, 0.0)], [Frame2D(0, 2, EA, EI)], [Support.fixed(0)])


def test_element_connecting_node_to_itself():
    with pytest.raises(InvalidGeometryError):
        Structure([Node(0.0, 0.0), Node(3.0, 0.0)], [Frame2D(1, 1, EA, EI)])


@pytest.mark.parametrize("ea, ei", [(0.0, EI), (EA, -1.0), (-EA, EI)])
def test_non_positive_stiffness(ea, ei):
    with pytest.raises(InvalidGeometryError):
        Structure([Node(0.0, 0.0), Node(3.0, 0.0)], [Frame2D(0, 1, ea, ei)])


def test_support_on_missing_node():
    with pytest.raises(InvalidGeometryError):
        Structure([Node(0.0, 0.0), Node(3.0, 0.0)], [Frame2D(0, 1, EA, EI)], [Support.fixed(5)])


def test_duplicate_support():
    with pytest.raises(InvalidGeometryError):
        Structure(
            [Node(0.0, 0.0), Node(3.0, 0.0)],
            [Frame2D(0, 1, EA, EI)],
            [Support.pinned(0), Support.fixed(0)],
        )


def test_support_without_flags():
    with pytest.raises(InvalidGeometryError):
        Support(0)


def test_geometry_errors_are_value_errors():
    with pytest.raises(ValueError):
        Support(3, fx=False, fy=False, m=False)


def test_moving_node_onto_neighbour_is_rejected():
    structure = two_span_beam([Support.fixed(0)])
    with pytest.raises(InvalidGeometryError):
        structure.with_node(1, 0.0, 0.0)


def test_structure_is_frozen():
    structure = two_span_beam([Support.fixed(0)])
    with pytest.raises(dataclasses.FrozenInstanceError):
        structure.nodes = ()


def test_default_config():
    assert two_span_beam([Support.fixed(0)]).config is CONFIG
    assert CONFIG.cond_limit == 1e12


def test_empty_loadset_on_stable_structure():
    result = two_span_beam([Support.pinned(0), Support.roller_x(2)]).solve()
    assert result.displacements.shape == (9,)
    assert LoadSet().nodal == ()
    np.testing.assert_array_equal(result.reactions, 0.0)
