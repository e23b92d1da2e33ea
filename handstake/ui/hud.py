"""
HandStake HUD.
Draws the staking screen, the gesture cursor and the webcam preview with OpenCV.
Purely a projection: it reads engine state and never writes to it.
"""

import time
from collections import deque
from typing import Optional

import cv2
import numpy as np

from handstake.config import CONFIG
from handstake.core.state_manager import UIStateController
from handstake.core.types import Rect, RegionId, RenderState
from handstake.ui.layout import StakeScreenLayout


class HUD:
    def __init__(self, layout: StakeScreenLayout):
        self.layout = layout
        self.labels = layout.labels()
        self.show_preview = True
        self.gesture_online = True

        # --- THEME COLORS (BGR) ---
        self.C_BLUE    = (193, 79, 17)    # Buttons / cursor
        self.C_PRESSED = (114, 50, 15)    # Button just fired
        self.C_WHITE   = (255, 255, 255)
        self.C_BLACK   = (0, 0, 0)
        self.C_BG      = (245, 240, 235)
        self.C_GREEN   = (80, 175, 76)    # Success toast
        self.C_RED     = (60, 60, 220)    # Error toast
        self.C_DARK    = (20, 20, 20)     # Info toast / panels

        # --- TOASTS ---
        self.toasts = deque(maxlen=4)

    # --- NOTIFICATIONS (Notifier protocol) ---
    def notify(self, message: str, kind: str = "info"):
        self.toasts.append((message, kind, time.monotonic()))

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.6):
        """Draws a semi-transparent 'Glass' background."""
        if y + h > img.shape[0] or x + w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        color_rect = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, color_rect, alpha, 1.0)
        cv2.rectangle(img, (x, y), (x+w, y+h), color, 1)

    def _draw_button(self, img, rect: Rect, label: str, hovered: bool, pressed: bool, font_scale=0.8):
        if hovered:
            rect = rect.scaled(1.1)
        p1 = (int(rect.left), int(rect.top))
        p2 = (int(rect.right), int(rect.bottom))
        cv2.rectangle(img, p1, p2, self.C_PRESSED if pressed else self.C_BLUE, -1)
        cv2.rectangle(img, p1, p2, self.C_WHITE, 2)

        (tw, th), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, 2)
        c = rect.center
        cv2.putText(img, label, (int(c.x - tw / 2), int(c.y + th / 2)),
                    cv2.FONT_HERSHEY_SIMPLEX, font_scale, self.C_WHITE, 2)

    def render(self, ui: UIStateController, state: Optional[RenderState],
               camera_frame: Optional[np.ndarray] = None, address: Optional[str] = None) -> np.ndarray:
        W, H = int(self.layout.width), int(self.layout.height)
        canvas = np.full((H, W, 3), self.C_BG, dtype=np.uint8)
        now = time.monotonic()

        hovered = ui.hovered_region_id
        pressed = ui.pressed_region(now)

        # 1. HEADER
        cv2.putText(canvas, "HandStake", (30, int(0.06 * H)), cv2.FONT_HERSHEY_SIMPLEX, 1.0, self.C_BLACK, 2)
        if address:
            rect = self.layout.rect(RegionId.DISCONNECT)
            cv2.putText(canvas, address, (int(rect.left) - 200, int(rect.center.y) + 6),
                        cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_BLACK, 1)

        # 2. REGIONS (only what is registered is drawn)
        if not ui.is_connected:
            title = "Stake your crypto without hands"
            (tw, _), _ = cv2.getTextSize(title, cv2.FONT_HERSHEY_SIMPLEX, 1.3, 3)
            cv2.putText(canvas, title, ((W - tw) // 2, int(0.24 * H)), cv2.FONT_HERSHEY_SIMPLEX, 1.3, self.C_BLACK, 3)

        for region_id in ui.registry.ids():
            rect = self.layout.rect(region_id)
            if rect is None: continue
            if region_id == RegionId.STAKE_AREA:
                # Collapsed: one big "Stake" button. Expanded: just the outline, sub-buttons on top.
                if ui.stake_expanded:
                    cv2.rectangle(canvas, (int(rect.left), int(rect.top)), (int(rect.right), int(rect.bottom)),
                                  self.C_BLUE, 1)
                else:
                    inner = Rect(rect.left + 0.05 * rect.width, rect.center.y - 0.1 * rect.height,
                                 rect.right - 0.05 * rect.width, rect.center.y + 0.1 * rect.height)
                    self._draw_button(canvas, inner, self.labels[region_id], hovered == region_id,
                                      pressed == region_id, font_scale=1.0)
                continue
            self._draw_button(canvas, rect, self.labels.get(region_id, region_id),
                              hovered == region_id, pressed == region_id)

        # 3. WEBCAM PREVIEW (bottom-left, mirrored)
        if self.show_preview and camera_frame is not None:
            self._draw_preview(canvas, camera_frame, state)

        # 4. STATUS
        if not self.gesture_online:
            self._draw_glass_panel(canvas, 20, H - 60, 360, 40, self.C_DARK, 0.7)
            cv2.putText(canvas, "GESTURE CONTROL OFFLINE", (35, H - 32), cv2.FONT_HERSHEY_PLAIN, 1.3, self.C_WHITE, 1)

        # 5. TOASTS
        self._draw_toasts(canvas, now)

        # 6. CURSOR
        if state is not None:
            cx, cy = int(state.cursor_position.x), int(state.cursor_position.y)
            cv2.circle(canvas, (cx, cy), 10, self.C_WHITE if state.is_pinching else self.C_BLUE, -1)
            cv2.circle(canvas, (cx, cy), 11, self.C_WHITE, 2)

        return canvas

    def _draw_preview(self, canvas, frame, state: Optional[RenderState]):
        H, W = canvas.shape[:2]
        pw, ph = int(0.2 * W), int(0.2 * H)
        x0, y0 = 16, H - ph - 16
        preview = cv2.resize(cv2.flip(frame, 1), (pw, ph))

        if state is not None and state.hand_frame is not None:
            for lm in state.hand_frame.landmarks:
                cv2.circle(preview, (int((1.0 - lm.x) * pw), int(lm.y * ph)), 3, self.C_WHITE, -1)

        canvas[y0:y0+ph, x0:x0+pw] = preview
        cv2.rectangle(canvas, (x0, y0), (x0 + pw, y0 + ph), self.C_DARK, 1)

    def _draw_toasts(self, canvas, now):
        ttl = CONFIG["TOAST_SECONDS"]
        while self.toasts and (now - self.toasts[0][2]) > ttl:
            self.toasts.popleft()

        W = canvas.shape[1]
        colors = {"success": self.C_GREEN, "error": self.C_RED}
        for i, (message, kind, _) in enumerate(self.toasts):
            y = 90 + i * 50
            self._draw_glass_panel(canvas, W - 520, y, 500, 40, colors.get(kind, self.C_DARK), 0.8)
            cv2.putText(canvas, message[:60], (W - 505, y + 26), cv2.FONT_HERSHEY_PLAIN, 1.1, self.C_WHITE, 1)

    def draw_fps(self, canvas, fps):
        cv2.putText(canvas, f"{int(fps)} FPS", (canvas.shape[1]-100, canvas.shape[0]-20),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_GREEN, 1)
