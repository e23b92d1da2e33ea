"""
HandStake - Main Entry Point.
=============================

Bootloader for the gesture-controlled staking screen. Wiring order:
1. Perception Layer (camera stream + MediaPipe, via LandmarkSource).
2. Engine (GestureInterpreter, RegionRegistry/HitTester, UIStateController).
3. Actuator (ActionDispatcher -> wallet layer).
4. Feedback Loop (HUD).

If the camera or the model is unavailable the screen still runs; gesture
control is simply shown as offline.

Usage:
    $ python -m handstake.main
"""
import logging
import time

import cv2

from handstake.config import CONFIG, init_environment
from handstake.control.action_dispatcher import ActionDispatcher
from handstake.control.controller import GestureController
from handstake.control.wallet_actions import SimulatedWallet
from handstake.core.gesture_interpreter import GestureInterpreter
from handstake.core.region_registry import RegionRegistry
from handstake.core.state_manager import UIStateController
from handstake.ui.hud import HUD
from handstake.ui.layout import StakeScreenLayout
from handstake.vision.camera import acquire_video_stream
from handstake.vision.hand_detector import MediaPipeHandDetector
from handstake.vision.landmark_source import LandmarkSource

logger = logging.getLogger(__name__)


def main():
    # 1. Boot Sequence
    init_environment()
    print("🚀 HANDSTAKE: ONLINE")
    print("   -> Pinch (thumb + index) to click")
    print("   -> Press 'ESC' to Exit")
    print("   -> Press 'V' to Toggle Camera Preview")

    # 2. Presentation + Wallet
    layout = StakeScreenLayout()
    hud = HUD(layout)
    wallet = SimulatedWallet(notifier=hud)

    # 3. Engine
    registry = RegionRegistry()
    ui = UIStateController(layout.bounds_for, registry)
    wallet.on_connection_change(ui.on_connection_change)
    dispatcher = ActionDispatcher(wallet, on_expand_stake=ui.expand_stake_menu)
    controller = GestureController(GestureInterpreter(layout.width, layout.height), registry, ui, dispatcher)

    def on_input_lost(reason):
        hud.gesture_online = False
        hud.notify("Camera unavailable - gesture control disabled", "error")

    # 4. Perception
    source = LandmarkSource(
        stream_factory=lambda: acquire_video_stream(CONFIG["CAMERA_INDEX"]),
        detector_factory=MediaPipeHandDetector,
        on_hand_frame=controller.process,
        on_input_lost=on_input_lost,
    )
    source.start()

    window_name = "HandStake"
    cv2.namedWindow(window_name)
    prev_time = 0.0

    try:
        while True:
            # --- PERCEPTION + ENGINE ---
            source.pump()

            # --- FEEDBACK ---
            frame = source.stream.read() if source.active else None
            state = controller.last_render if controller.hand_present else None
            canvas = hud.render(ui, state, camera_frame=frame, address=wallet.short_address)

            curr = time.time()
            fps = 1 / (curr - prev_time) if (curr - prev_time) > 0 else 0
            prev_time = curr
            hud.draw_fps(canvas, fps)

            cv2.imshow(window_name, canvas)

            k = cv2.waitKey(1)
            if k == 27: break  # ESC
            elif k in (ord('v'), ord('V')): hud.show_preview = not hud.show_preview
    finally:
        # Graceful Shutdown
        source.close()
        cv2.destroyAllWindows()
        print("🔴 SYSTEM OFFLINE")


if __name__ == "__main__":
    main()
