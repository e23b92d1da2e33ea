"""
HandStake Controller.
Acts as the central nervous system: one call to `process` is one tick.

Tick ordering (two-phase):
    1. Interpret the HandFrame (cursor + pinch).
    2. Hit-test against the region set left by the *previous* tick.
    3. Update UI state. Any region change is applied to the registry now,
       so tick N+1 hit-tests against it without a dropped frame.
    4. Dispatch (cooldown-gated) on this tick's hover.
    5. Emit the render projection.
A tick without a hand stops after step 1 and leaves all state as it was.
"""

import logging
import time
from typing import Callable, Optional

from handstake.control.action_dispatcher import ActionDispatcher
from handstake.core.gesture_interpreter import GestureInterpreter
from handstake.core.hit_tester import HitTester
from handstake.core.region_registry import RegionRegistry
from handstake.core.state_manager import UIStateController
from handstake.core.types import HandFrame, RenderState

logger = logging.getLogger(__name__)

RenderCallback = Callable[[RenderState], None]


class GestureController:
    def __init__(self, interpreter: GestureInterpreter, registry: RegionRegistry,
                 ui_state: UIStateController, dispatcher: ActionDispatcher,
                 hit_tester: Optional[HitTester] = None, on_render: Optional[RenderCallback] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.interpreter = interpreter
        self.registry = registry
        self.ui = ui_state
        self.dispatcher = dispatcher
        self.hit_tester = hit_tester or HitTester()
        self.on_render = on_render
        self.clock = clock

        # Persisted for the HUD between ticks
        self.last_render: Optional[RenderState] = None
        self.hand_present = False

    def process(self, hand: Optional[HandFrame], now: Optional[float] = None) -> Optional[RenderState]:
        now = self.clock() if now is None else now

        # 1. Interpret
        cursor = self.interpreter.interpret(hand)
        if cursor is None:
            if self.hand_present:
                logger.debug("Hand lost, holding UI state")
            self.hand_present = False
            return None
        self.hand_present = True

        # 2. Hit-test (registry as left by the previous tick)
        hovered = self.hit_tester.hit_test(cursor.position, self.registry.snapshot())

        # 3. UI state (may re-register regions for the next tick)
        self.ui.update(hovered)

        # 4. Dispatch
        fired = self.dispatcher.tick(hovered, cursor.is_pinching, now, self.ui.stake_expanded)
        if fired is not None:
            self.ui.mark_pressed(hovered, now)

        # 5. Project
        state = RenderState(
            cursor_position=cursor.position,
            is_pinching=cursor.is_pinching,
            hovered_region_id=self.ui.hovered_region_id,
            stake_expanded=self.ui.stake_expanded,
            pressed_region_id=self.ui.pressed_region(now),
            fired_action=fired,
            hand_frame=hand,
        )
        self.last_render = state
        if self.on_render is not None:
            try:
                self.on_render(state)
            except Exception:
                logger.exception("Render callback failed")
        return state
