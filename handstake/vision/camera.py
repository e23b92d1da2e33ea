"""
HandStake Camera Access.
=======================

`acquire_video_stream` is the only way the engine touches the webcam.
It raises `CameraUnavailableError` when the device cannot be opened
(no permission, no device, busy), which LandmarkSource turns into
"gesture control disabled".
"""
import logging
import threading
from typing import Optional

import cv2
import numpy as np

from handstake.config import CONFIG
from handstake.core.errors import CameraUnavailableError
from handstake.core.interfaces import IVideoStream

logger = logging.getLogger(__name__)


class ThreadedCamera(IVideoStream):
    """
    High-Performance Camera Reader.

    cv2.VideoCapture.read() is blocking and the driver buffers frames, so a
    slow detector would always see stale images. A daemon thread keeps only
    the freshest frame; `read` returns it without blocking.
    """
    def __init__(self, cap: "cv2.VideoCapture"):
        self.cap = cap
        self.cap.set(cv2.CAP_PROP_FPS, CONFIG.get("TARGET_FPS", 30))

        self.ret, self.frame = self.cap.read()
        self.running = True
        self.lock = threading.Lock()

        self._thread = threading.Thread(target=self._reader, daemon=True)
        self._thread.start()

    def _reader(self):
        """Background thread loop for frame grabbing."""
        while self.running:
            ret, frame = self.cap.read()
            if not ret:
                logger.warning("Camera stream dropped")
                with self.lock:
                    self.ret, self.frame = False, None
                self.running = False
                break
            with self.lock:
                self.ret, self.frame = ret, frame

    def read(self) -> Optional[np.ndarray]:
        """Most recent frame, or None once the stream has dropped."""
        with self.lock:
            if not self.ret or self.frame is None:
                return None
            return self.frame.copy()

    def release(self):
        """Stops the thread and releases hardware."""
        self.running = False
        self._thread.join(timeout=1.0)
        self.cap.release()


def acquire_video_stream(index: Optional[int] = None) -> ThreadedCamera:
    index = CONFIG["CAMERA_INDEX"] if index is None else index
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        raise CameraUnavailableError(f"Camera {index} could not be opened (permission denied or no device)")

    ok, _ = cap.read()
    if not ok:
        cap.release()
        raise CameraUnavailableError(f"Camera {index} opened but delivers no frames")

    logger.info("📷 Camera %s acquired", index)
    return ThreadedCamera(cap)
