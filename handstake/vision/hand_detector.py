"""
HandStake Hand Detector.
MediaPipe Hands behind `IHandDetector`, configured for single-hand tracking.
"""
import logging
from typing import Optional

import cv2
import mediapipe as mp
import numpy as np

from handstake.config import CONFIG
from handstake.core.errors import DetectorInitError
from handstake.core.interfaces import IHandDetector
from handstake.core.types import HandFrame

logger = logging.getLogger(__name__)


class MediaPipeHandDetector(IHandDetector):
    def __init__(self):
        try:
            self.hands = mp.solutions.hands.Hands(
                max_num_hands=CONFIG["MAX_NUM_HANDS"],
                model_complexity=CONFIG["MODEL_COMPLEXITY"],
                min_detection_confidence=CONFIG["MIN_DETECTION_CONFIDENCE"],
                min_tracking_confidence=CONFIG["MIN_TRACKING_CONFIDENCE"],
            )
        except Exception as e:
            raise DetectorInitError(f"MediaPipe Hands failed to start: {e}") from e
        logger.info("🧠 Hand detector ready (max %d hand)", CONFIG["MAX_NUM_HANDS"])

    def detect(self, frame: np.ndarray) -> Optional[HandFrame]:
        """
        Args:
            frame: BGR image straight from OpenCV (not mirrored).

        Returns:
            The first detected hand, or None.
        """
        # MediaPipe requires RGB; OpenCV uses BGR
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.hands.process(rgb)
        if not results.multi_hand_landmarks:
            return None
        return HandFrame.from_points(results.multi_hand_landmarks[0].landmark)

    def close(self) -> None:
        self.hands.close()
