# rubik_anim/tests/test_transform.py
import unittest

from rubik_anim.core import CubePermutation, CubePosition, Layer, LayerTransform, Rubik
from rubik_anim.logic.moves import parse_sequence


class TestLayerTransform(unittest.TestCase):
    def test_inverse_pairs(self):
        for t in LayerTransform:
            self.assertEqual(t.inverse.inverse, t)
            self.assertNotEqual(t.inverse, t)
            self.assertEqual(t.inverse.layer, t.layer)
            self.assertEqual(t.rotation.compose(t.inverse.rotation), CubePermutation.UNIT)

    def test_apply_on_position_is_bijection(self):
        for t in LayerTransform:
            images = {t.apply_on_position(p) for p in CubePosition}
            self.assertEqual(len(images), 27, msg=t)

    def test_apply_on_position_keeps_layer(self):
        for t in LayerTransform:
            for p in CubePosition:
                q = t.apply_on_position(p)
                self.assertEqual(t.layer.contains(p), t.layer.contains(q))
                if not t.layer.contains(p):
                    self.assertEqual(p, q)

    def test_R_clockwise(self):
        t = LayerTransform.R
        self.assertEqual(t.apply_on_position(CubePosition.UFR), CubePosition.UBR)
        self.assertEqual(t.apply_on_position(CubePosition.UBR), CubePosition.DBR)
        self.assertEqual(t.apply_on_position(CubePosition.R), CubePosition.R)
        self.assertEqual(t.rotation, CubePermutation.X_3)

    def test_U_clockwise(self):
        t = LayerTransform.U
        self.assertEqual(t.apply_on_position(CubePosition.UFR), CubePosition.UFL)
        self.assertEqual(t.apply_on_position(CubePosition.UBR), CubePosition.UFR)

    def test_axis_and_angle(self):
        self.assertEqual(LayerTransform.R.axis, (1.0, 0.0, 0.0))
        self.assertLess(LayerTransform.R.angle, 0.0)
        self.assertGreater(LayerTransform.L.angle, 0.0)
        self.assertEqual(LayerTransform.U.axis, (0.0, 1.0, 0.0))
        self.assertEqual(LayerTransform.FI.axis, (0.0, 0.0, 1.0))
        self.assertGreater(LayerTransform.FI.angle, 0.0)

    def test_for_layer(self):
        self.assertEqual(LayerTransform.for_layer(Layer.R), LayerTransform.R)
        self.assertEqual(LayerTransform.for_layer(Layer.R, inverse=True), LayerTransform.RI)


class TestRubik(unittest.TestCase):
    def test_starts_solved(self):
        self.assertTrue(Rubik().is_solved())

    def test_transform_then_inverse_returns(self):
        for t in LayerTransform:
            c = Rubik()
            for s in parse_sequence("R U F' D L B'"):
                c.execute(s)
            before = c.placement()
            c.execute(t)
            self.assertNotEqual(before, c.placement())
            c.execute(t.inverse)
            self.assertEqual(before, c.placement(), msg=t)

    def test_four_quarter_turns_restore(self):
        for t in LayerTransform:
            c = Rubik()
            for _ in range(4):
                t.execute(c)
            self.assertTrue(c.is_solved(), msg=t)

    def test_single_turn_scrambles(self):
        c = Rubik()
        c.execute(LayerTransform.R)
        self.assertFalse(c.is_solved())
        home, perm = c.block_at(CubePosition.UBR)
        self.assertEqual(home, CubePosition.UFR)
        self.assertEqual(perm, CubePermutation.X_3)

    def test_positions_follow_orientation(self):
        c = Rubik()
        for s in parse_sequence("R U R' U' F2 D B L'"):
            c.execute(s)
        placement = c.placement()
        self.assertEqual(len({pos for pos, _ in placement.values()}), 27)
        for home, (pos, perm) in placement.items():
            self.assertEqual(perm.apply(home.centered), pos.centered)


if __name__ == "__main__":
    unittest.main()
