# rubik_anim/tests/test_visual.py
import math
import unittest

import numpy as np

from rubik_anim.core import CubePermutation
from rubik_anim.core.quaternion import (
    quat_from_axis_angle,
    quat_identity,
    quat_multiply,
    quat_rotate,
    quat_to_gl_matrix,
    quat_turn,
)
from rubik_anim.logic.visual import perm_to_quat

BASIS = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


class TestPermToQuat(unittest.TestCase):
    def test_is_deterministic(self):
        for p in CubePermutation.ALL:
            self.assertTrue(np.array_equal(perm_to_quat(p), perm_to_quat(p)))

    def test_unit_is_identity(self):
        self.assertTrue(np.array_equal(perm_to_quat(CubePermutation.UNIT), quat_identity()))

    def test_rotates_like_matrix(self):
        for p in CubePermutation.ALL:
            q = perm_to_quat(p)
            self.assertAlmostEqual(float(np.linalg.norm(q)), 1.0)
            for e in BASIS:
                self.assertTrue(
                    np.allclose(quat_rotate(q, e), p.apply(e), atol=1e-9),
                    msg=f"{p!r} sobre {e}",
                )

    def test_distinct_rotations(self):
        quats = [perm_to_quat(p) for p in CubePermutation.ALL]
        for i in range(len(quats)):
            for j in range(i + 1, len(quats)):
                self.assertLess(abs(float(np.dot(quats[i], quats[j]))), 1.0 - 1e-6)


class TestQuaternion(unittest.TestCase):
    def test_turn_endpoints(self):
        q0 = quat_identity()
        q1 = quat_from_axis_angle((1.0, 0.0, 0.0), math.pi / 2)
        self.assertTrue(np.allclose(quat_turn(q0, (1.0, 0.0, 0.0), math.pi / 2, 0.0), q0))
        self.assertTrue(np.allclose(quat_turn(q0, (1.0, 0.0, 0.0), math.pi / 2, 1.0), q1))

    def test_turn_is_applied_in_world_frame(self):
        q0 = quat_from_axis_angle((0.0, 0.0, 1.0), math.pi / 2)
        got = quat_turn(q0, (1.0, 0.0, 0.0), -math.pi / 2, 1.0)
        expected = quat_multiply(quat_from_axis_angle((1.0, 0.0, 0.0), -math.pi / 2), q0)
        self.assertTrue(np.allclose(got, expected))

    def test_turn_clamps_parameter(self):
        q0 = quat_identity()
        q1 = quat_from_axis_angle((0.0, 0.0, 1.0), math.pi / 2)
        self.assertTrue(np.allclose(quat_turn(q0, (0.0, 0.0, 1.0), math.pi / 2, 1.3), q1))
        self.assertTrue(np.allclose(quat_turn(q0, (0.0, 0.0, 1.0), math.pi / 2, -0.2), q0))

    def test_zero_axis_rejected(self):
        with self.assertRaises(ValueError):
            quat_from_axis_angle((0.0, 0.0, 0.0), 1.0)

    def test_gl_matrix_is_column_major(self):
        q = quat_from_axis_angle((0.0, 0.0, 1.0), math.pi / 2)
        m = quat_to_gl_matrix(q)
        # columna 0 = imagen de x = +y
        self.assertTrue(np.allclose(m[0, :3], (0.0, 1.0, 0.0), atol=1e-6))
        self.assertEqual(m.dtype, np.float32)


if __name__ == "__main__":
    unittest.main()
