import unittest
from handstake.control.action_dispatcher import ActionDispatcher
from handstake.control.controller import GestureController
from handstake.control.wallet_actions import SimulatedWallet
from handstake.core.gesture_interpreter import GestureInterpreter
from handstake.core.region_registry import RegionRegistry
from handstake.core.state_manager import UIStateController
from handstake.core.types import ActionId, HandFrame, RegionId
from handstake.ui.layout import StakeScreenLayout
from handstake.config import CONFIG

W, H = 1000, 800


def hand_at(x, y, pinch=False):
    """Hand whose palm maps to screen pixel (x, y)."""
    points = [(0.5, 0.5, 0.0)] * 21
    points[9] = (1.0 - x / W, y / H, 0.0)
    points[4] = (0.2, 0.2, 0.0)
    points[8] = (0.21, 0.2, 0.0) if pinch else (0.4, 0.2, 0.0)
    return HandFrame.from_points(points)


class TestGestureController(unittest.TestCase):
    def setUp(self):
        CONFIG["PINCH_THRESHOLD"] = 0.05
        CONFIG["ACTION_COOLDOWN"] = 1.0
        CONFIG["EDGE_TRIGGERED_CLICK"] = False
        CONFIG["STAKE_OPTIONS"] = (0.01, 0.05, 0.1)

        self.layout = StakeScreenLayout(W, H)
        self.registry = RegionRegistry()
        self.ui = UIStateController(self.layout.bounds_for, self.registry)
        self.wallet = SimulatedWallet(rate=1000.0)
        self.wallet.on_connection_change(self.ui.on_connection_change)
        self.dispatcher = ActionDispatcher(self.wallet, on_expand_stake=self.ui.expand_stake_menu)
        self.rendered = []
        self.controller = GestureController(
            GestureInterpreter(W, H), self.registry, self.ui, self.dispatcher,
            on_render=self.rendered.append,
        )

    def center_of(self, region_id):
        c = self.layout.rect(region_id).center
        return c.x, c.y

    def test_pinch_on_connect_connects_wallet(self):
        state = self.controller.process(hand_at(*self.center_of(RegionId.CONNECT_WALLET), pinch=True), now=0.0)
        self.assertEqual(state.fired_action, ActionId.CONNECT_WALLET)
        self.assertTrue(self.wallet.connected)
        self.assertTrue(self.ui.is_connected)
        self.assertEqual(state.pressed_region_id, RegionId.CONNECT_WALLET)

    def test_render_projection_every_tick(self):
        self.controller.process(hand_at(*self.center_of(RegionId.CONNECT_WALLET)), now=0.0)
        self.controller.process(hand_at(10, 10), now=0.1)
        self.assertEqual(len(self.rendered), 2)
        self.assertEqual(self.rendered[0].hovered_region_id, RegionId.CONNECT_WALLET)
        self.assertFalse(self.rendered[0].is_pinching)
        self.assertIsNone(self.rendered[1].hovered_region_id)

    def test_stake_sub_regions_clickable_on_next_tick(self):
        """Hover on tick N expands; tick N+1 can already hit and fire a sub-button."""
        self.wallet.connect_wallet()
        sub_id = RegionId.stake_option(0.01)

        self.controller.process(hand_at(*self.center_of(RegionId.STAKE_AREA)), now=0.0)
        self.assertTrue(self.ui.stake_expanded)

        state = self.controller.process(hand_at(*self.center_of(sub_id), pinch=True), now=0.033)
        self.assertEqual(state.hovered_region_id, sub_id)
        self.assertEqual(state.fired_action, ActionId.STAKE)
        self.assertEqual(self.wallet.transactions, [{"function": "stake", "value": 0.01}])

    def test_no_hand_holds_state(self):
        self.wallet.connect_wallet()
        self.controller.process(hand_at(*self.center_of(RegionId.STAKE_AREA)), now=0.0)
        before = (self.ui.hovered_region_id, self.ui.stake_expanded, self.registry.ids())

        self.assertIsNone(self.controller.process(None, now=0.1))
        self.assertEqual((self.ui.hovered_region_id, self.ui.stake_expanded, self.registry.ids()), before)
        self.assertFalse(self.controller.hand_present)
        self.assertEqual(len(self.rendered), 1)

    def test_pinch_on_stake_area_expands_menu_without_firing(self):
        self.wallet.connect_wallet()
        # Point inside the area but outside every sub-button
        area = self.layout.rect(RegionId.STAKE_AREA)
        state = self.controller.process(hand_at(area.center.x, area.bottom - 5, pinch=True), now=0.0)
        self.assertIsNone(state.fired_action)
        self.assertTrue(state.stake_expanded)
        self.assertEqual(self.dispatcher.last_fire, float("-inf"))

    def test_pinch_entering_stake_area_does_not_block_sub_button(self):
        self.wallet.connect_wallet()
        area = self.layout.rect(RegionId.STAKE_AREA)
        self.controller.process(hand_at(area.center.x, area.bottom - 5, pinch=True), now=0.0)
        state = self.controller.process(hand_at(*self.center_of(RegionId.stake_option(0.01)), pinch=True), now=0.5)
        self.assertEqual(state.hovered_region_id, RegionId.stake_option(0.01))
        self.assertEqual(state.fired_action, ActionId.STAKE)
        self.assertEqual(self.wallet.transactions, [{"function": "stake", "value": 0.01}])

    def test_render_callback_failure_is_contained(self):
        def broken_render(state):
            raise RuntimeError("window closed")
        self.controller.on_render = broken_render
        with self.assertLogs("handstake.control.controller", level="ERROR"):
            state = self.controller.process(hand_at(*self.center_of(RegionId.CONNECT_WALLET), pinch=True), now=0.0)
        self.assertEqual(state.fired_action, ActionId.CONNECT_WALLET)
        self.assertIs(self.controller.last_render, state)

    def test_cooldown_spans_regions(self):
        self.controller.process(hand_at(*self.center_of(RegionId.CONNECT_WALLET), pinch=True), now=0.0)
        state = self.controller.process(hand_at(*self.center_of(RegionId.UNSTAKE), pinch=True), now=0.5)
        self.assertIsNone(state.fired_action)
        state = self.controller.process(hand_at(*self.center_of(RegionId.UNSTAKE), pinch=True), now=1.2)
        self.assertEqual(state.fired_action, ActionId.REQUEST_EXIT)
        self.assertEqual(self.wallet.transactions, [{"function": "requestExit", "args": (self.wallet.exit_shares(),)}])


if __name__ == '__main__':
    unittest.main()
