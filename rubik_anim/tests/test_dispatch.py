# rubik_anim/tests/test_dispatch.py
import unittest

import numpy as np

from rubik_anim.config import AnimationConfig
from rubik_anim.core import CubePermutation, CubePosition, InvariantViolation, Layer, LayerTransform
from rubik_anim.core.quaternion import quat_identity
from rubik_anim.logic.dispatch import handle_key_events, handle_permutation_input
from rubik_anim.logic.moves import KeyPress
from rubik_anim.logic.scene import RubikScene
from rubik_anim.logic.visual import perm_to_quat

R_LABELS = {p.name for p in Layer.R.positions()}


class TestMoveDispatch(unittest.TestCase):
    def setUp(self):
        self.scene = RubikScene(AnimationConfig(duration=0.25))

    def test_R_moves_exactly_nine_blocks(self):
        applied = self.scene.handle_trigger(LayerTransform.R)
        self.assertEqual(applied, LayerTransform.R)
        self.assertEqual(set(self.scene.animations), R_LABELS)

        for label, block in self.scene.blocks.items():
            if label in R_LABELS:
                self.assertEqual(block.position, LayerTransform.R.apply_on_position(block.home))
                self.assertEqual(block.perm, CubePermutation.UNIT.compose(CubePermutation.X_3))
                anim = self.scene.animations[label]
                self.assertEqual(anim.s, 0.0)
                self.assertTrue(np.array_equal(anim.from_rot, perm_to_quat(CubePermutation.UNIT)))
                self.assertTrue(np.array_equal(anim.to_rot, perm_to_quat(block.perm)))
                # la rotación visual todavía no cambia
                self.assertTrue(np.array_equal(block.rotation, quat_identity()))
            else:
                self.assertEqual(block.position, block.home)
                self.assertEqual(block.perm, CubePermutation.UNIT)
                self.assertFalse(self.scene.is_animating(label))

        self.assertEqual(self.scene.blocks["UFR"].position, CubePosition.UBR)
        self.scene.check_consistency()

    def test_inverse_modifier_applies_without_animation(self):
        applied = self.scene.handle_trigger(LayerTransform.R, inverse=True)
        self.assertEqual(applied, LayerTransform.RI)
        self.assertEqual(self.scene.animations, {})

        home, perm = self.scene.rubik.block_at(CubePosition.DFR)
        self.assertEqual(home, CubePosition.UFR)
        self.assertEqual(perm, CubePermutation.X_1)

        block = self.scene.blocks["UFR"]
        self.assertEqual(block.position, CubePosition.DFR)
        self.assertTrue(np.array_equal(block.rotation, perm_to_quat(CubePermutation.X_1)))
        self.scene.check_consistency()

    def test_trigger_on_busy_layer_is_rejected_whole(self):
        self.scene.handle_trigger(LayerTransform.R)
        self.scene.step(0.1)
        before = {l: (b.position, b.perm) for l, b in self.scene.blocks.items()}
        tasks = dict(self.scene.animations)

        self.assertIsNone(self.scene.handle_trigger(LayerTransform.R))
        self.assertIsNone(self.scene.handle_trigger(LayerTransform.U))
        self.assertIsNone(self.scene.handle_trigger(LayerTransform.R, inverse=True))

        after = {l: (b.position, b.perm) for l, b in self.scene.blocks.items()}
        self.assertEqual(before, after)
        self.assertEqual(set(tasks), set(self.scene.animations))
        for label, anim in tasks.items():
            self.assertIs(self.scene.animations[label], anim)
        self.scene.check_consistency()

    def test_disjoint_layer_runs_in_parallel(self):
        self.scene.handle_trigger(LayerTransform.R)
        self.assertEqual(self.scene.handle_trigger(LayerTransform.L), LayerTransform.L)
        self.assertEqual(len(self.scene.animations), 18)
        self.scene.check_consistency()

    def test_trigger_after_completion(self):
        self.scene.handle_trigger(LayerTransform.R)
        self.scene.step(1.0)
        self.assertEqual(self.scene.handle_trigger(LayerTransform.U), LayerTransform.U)

        block = self.scene.blocks["UFR"]
        self.assertEqual(block.position, CubePosition.UFR)
        self.assertEqual(block.perm, CubePermutation.X_3.compose(CubePermutation.Y_3))
        self.scene.check_consistency()

    def test_four_turns_restore(self):
        for _ in range(4):
            self.scene.handle_trigger(LayerTransform.F)
            self.scene.step(1.0)
        self.assertTrue(self.scene.is_solved())
        for block in self.scene.blocks.values():
            self.assertEqual(block.perm, CubePermutation.UNIT)
            self.assertTrue(np.array_equal(block.rotation, quat_identity()))

    def test_missing_scene_is_noop(self):
        self.assertIsNone(handle_permutation_input(None, LayerTransform.R))
        self.assertIsNone(handle_key_events(None, [KeyPress("R")]))

    def test_corrupted_state_detected(self):
        self.scene.blocks["UFR"].position = CubePosition.UFL
        with self.assertRaises(InvariantViolation):
            self.scene.check_consistency()


class TestKeyEvents(unittest.TestCase):
    def setUp(self):
        self.scene = RubikScene()

    def test_only_first_move_key_is_processed(self):
        events = [KeyPress("X"), KeyPress("r"), KeyPress("U")]
        applied = handle_key_events(self.scene, events)
        self.assertEqual(applied, LayerTransform.R)
        self.assertEqual(set(self.scene.animations), R_LABELS)
        self.assertFalse(self.scene.is_animating("UFL"))

    def test_unknown_keys_ignored(self):
        self.assertIsNone(handle_key_events(self.scene, [KeyPress("Q"), KeyPress("1")]))
        self.assertTrue(self.scene.is_idle())

    def test_modifier_key(self):
        applied = handle_key_events(self.scene, [KeyPress("D", inverse=True)])
        self.assertEqual(applied, LayerTransform.DI)
        self.assertEqual(self.scene.animations, {})


class TestSceneFrame(unittest.TestCase):
    def setUp(self):
        self.scene = RubikScene(AnimationConfig(duration=0.25))

    def test_pending_moves_wait_for_layer(self):
        self.scene.enqueue([LayerTransform.R, LayerTransform.U])
        self.assertEqual(self.scene.frame([], 0.0), LayerTransform.R)
        self.assertIsNone(self.scene.frame([], 0.0))
        self.assertIsNone(self.scene.frame([], 1.0))
        self.assertEqual(self.scene.frame([], 0.0), LayerTransform.U)
        self.scene.frame([], 1.0)
        self.assertTrue(self.scene.is_idle())
        self.scene.check_consistency()

    def test_key_has_priority_over_pending(self):
        self.scene.enqueue([LayerTransform.U])
        self.assertEqual(self.scene.frame([KeyPress("D")], 0.0), LayerTransform.D)
        self.assertFalse(self.scene.is_idle())
        self.assertEqual(self.scene.frame([], 0.0), LayerTransform.U)

    def test_frame_advances_after_trigger(self):
        self.scene.frame([KeyPress("F")], 0.1)
        anim = self.scene.animations["UF"]
        self.assertAlmostEqual(anim.s, 0.4)

    def test_animating_count_follows_frames(self):
        self.assertEqual(self.scene.animating_count(), 0)
        self.scene.frame([KeyPress("R")], 0.1)
        self.assertEqual(self.scene.animating_count(), 9)
        self.scene.frame([KeyPress("L")], 0.0)
        self.assertEqual(self.scene.animating_count(), 18)
        self.scene.frame([], 0.2)
        self.assertEqual(self.scene.animating_count(), 9)
        self.scene.frame([], 0.1)
        self.assertEqual(self.scene.animating_count(), 0)


if __name__ == "__main__":
    unittest.main()
