"""
HandStake Gesture Interpreter.
=============================

Turns one HandFrame into the two signals the rest of the engine needs:
1. **Cursor:** the palm reference (landmark 9) mapped to viewport pixels.
   The X axis is mirrored so the cursor follows the hand like a mirror.
2. **Click:** a pinch, i.e. thumb tip (4) and index tip (8) closer than
   `PINCH_THRESHOLD` in normalized landmark space.

No smoothing, no hysteresis, no history: the same frame always yields the
same CursorState.
"""
import math
from typing import Optional

from handstake.config import CONFIG
from handstake.core.types import CursorState, HandFrame, ScreenPoint


class GestureInterpreter:
    def __init__(self, viewport_width: Optional[float] = None, viewport_height: Optional[float] = None,
                 pinch_threshold: Optional[float] = None):
        self.viewport_width = viewport_width or CONFIG["VIEWPORT_WIDTH"]
        self.viewport_height = viewport_height or CONFIG["VIEWPORT_HEIGHT"]
        self.pinch_threshold = pinch_threshold if pinch_threshold is not None else CONFIG["PINCH_THRESHOLD"]

        self.palm_idx = CONFIG["PALM_LANDMARK"]
        self.thumb_idx = CONFIG["THUMB_TIP"]
        self.index_idx = CONFIG["INDEX_TIP"]

    def resize(self, width: float, height: float) -> None:
        """Viewport changed (window resize)."""
        self.viewport_width, self.viewport_height = width, height

    def cursor_position(self, hand: HandFrame) -> ScreenPoint:
        palm = hand[self.palm_idx]
        return ScreenPoint((1.0 - palm.x) * self.viewport_width, palm.y * self.viewport_height)

    def pinch_distance(self, hand: HandFrame) -> float:
        """Planar Euclidean distance between Thumb(4) and Index(8)."""
        thumb, index = hand[self.thumb_idx], hand[self.index_idx]
        return math.hypot(thumb.x - index.x, thumb.y - index.y)

    def is_pinching(self, distance: float) -> bool:
        return distance < self.pinch_threshold

    def interpret(self, hand: Optional[HandFrame]) -> Optional[CursorState]:
        """
        Args:
            hand: The tracked hand, or None when nothing was detected.

        Returns:
            CursorState, or None when there is no hand.
        """
        if hand is None:
            return None
        distance = self.pinch_distance(hand)
        return CursorState(
            position=self.cursor_position(hand),
            is_pinching=self.is_pinching(distance),
            pinch_distance=distance,
        )
