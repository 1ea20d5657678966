"""
Kernel: equation numbering and scatter-add assembly.
"""

import numpy as np
import pytest

from planeframe.kernel import (
    DOF_2D_FRAME,
    DOFManager,
    add_nodal_load,
    assemble_global_F,
    assemble_global_K,
)


def test_dof_numbering():
    dof = DOFManager(dof_per_node=3)
    assert dof.idx(0, 0) == 0
    assert dof.idx(2, 2) == 8
    assert dof.ndof(4) == 12
    assert dof.node_dofs(1) == [3, 4, 5]
    assert dof.element_dof_map([2, 5]) == [6, 7, 8, 15, 16, 17]
    assert dof.node_of(8) == 2
    assert DOF_2D_FRAME == dof


def test_dof_rejects_bad_local_index():
    with pytest.raises(IndexError):
        DOF_2D_FRAME.idx(0, 3)
    with pytest.raises(IndexError):
        DOF_2D_FRAME.idx(0, -1)


def test_shared_node_contributions_add():
    ke = np.arange(36, dtype=float).reshape(6, 6)
    ke = ke + ke.T
    K = assemble_global_K(9, [([0, 1, 2, 3, 4, 5], ke), ([3, 4, 5, 6, 7, 8], ke)])

    np.testing.assert_array_equal(K[3:6, 3:6], ke[3:, 3:] + ke[:3, :3])
    np.testing.assert_array_equal(K[0:3, 0:3], ke[:3, :3])
    np.testing.assert_array_equal(K[6:9, 6:9], ke[3:, 3:])
    np.testing.assert_array_equal(K[0:3, 6:9], 0.0)


def test_assemble_K_shape_mismatch():
    with pytest.raises(ValueError):
        assemble_global_K(6, [([0, 1, 2], np.eye(6))])


def test_load_vector_accumulates():
    F = assemble_global_F(6, [([0, 1, 2, 3, 4, 5], np.ones(6)), ([3, 4, 5, 0, 1, 2], np.full(6, 2.0))])
    np.testing.assert_array_equal(F, np.full(6, 3.0))

    add_nodal_load(F, node_id=1, load_vector=[10.0, 0.0, -5.0], dof_per_node=3)
    add_nodal_load(F, node_id=1, load_vector=[1.0, 0.0, 0.0], dof_per_node=3)
    np.testing.assert_array_equal(F, [3.0, 3.0, 3.0, 14.0, 3.0, -2.0])


def test_assemble_F_shape_mismatch():
    with pytest.raises(ValueError):
        assemble_global_F(6, [([0, 1, 2], np.ones(6))])
