"""
HandStake Landmark Source (The Perception Layer).
================================================

Owns the lifecycle of the camera stream and the hand detector and feeds
HandFrames to the engine, one at a time.

Why a worker thread:
Landmark inference takes tens of milliseconds. Running it on a single
background worker keeps the host loop (rendering, key handling) responsive.

Back-pressure:
At most one detection is in flight. The next frame is only captured after
the previous result has been handed to `on_hand_frame`, so results never
overlap and never arrive out of order.

Teardown:
`close()` cancels the liveness token first. A detection that finishes
afterwards is dropped before it can reach the engine.
"""
import logging
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Callable, Optional

from handstake.core.errors import CameraUnavailableError, DetectorInitError
from handstake.core.interfaces import IHandDetector, IVideoStream
from handstake.core.types import HandFrame

logger = logging.getLogger(__name__)

HandFrameCallback = Callable[[Optional[HandFrame]], None]
InputLostCallback = Callable[[str], None]


class LivenessToken:
    """Cancelled once, never revived. A new start() gets a new token."""
    __slots__ = ["_alive"]

    def __init__(self):
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def cancel(self):
        self._alive = False


class LandmarkSource:
    """
    Args:
        stream_factory: Acquires the capture stream; raises CameraUnavailableError.
        detector_factory: Builds the detector; raises DetectorInitError.
        on_hand_frame: Receives each detection result (None = no hand this frame).
        on_input_lost: Told once, with a reason, when gesture input becomes unavailable.
    """
    def __init__(self, stream_factory: Callable[[], IVideoStream],
                 detector_factory: Callable[[], IHandDetector],
                 on_hand_frame: HandFrameCallback,
                 on_input_lost: Optional[InputLostCallback] = None):
        self._stream_factory = stream_factory
        self._detector_factory = detector_factory
        self.on_hand_frame = on_hand_frame
        self.on_input_lost = on_input_lost

        self.stream: Optional[IVideoStream] = None
        self.detector: Optional[IHandDetector] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._token: Optional[LivenessToken] = None
        self._pending: Optional[Future] = None
        self._input_lost_reported = False

    @property
    def active(self) -> bool:
        return self._token is not None and self._token.alive

    # --- LIFECYCLE ---
    def start(self) -> bool:
        """
        Returns:
            True if gesture input is live, False if it had to be disabled.
        """
        if self.active:
            return True

        try:
            self.stream = self._stream_factory()
        except CameraUnavailableError as e:
            self._report_input_lost(str(e))
            return False

        try:
            self.detector = self._detector_factory()
        except DetectorInitError as e:
            self.stream.release()
            self.stream = None
            self._report_input_lost(str(e))
            return False

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hand-detector")
        self._token = LivenessToken()
        logger.info("✋ Gesture input ONLINE")
        return True

    def close(self) -> None:
        """Stops capture and releases the detector. Safe to call twice."""
        if self._token is not None:
            self._token.cancel()
        self._pending = None

        if self._executor is not None:
            # Queued behind any running detection, on the same worker thread
            if self.detector is not None:
                self._executor.submit(self.detector.close)
            self._executor.shutdown(wait=False)
            self._executor = None
        elif self.detector is not None:
            self.detector.close()
        self.detector = None

        if self.stream is not None:
            self.stream.release()
            self.stream = None

    # --- HOST LOOP ---
    def pump(self) -> bool:
        """
        Called by the host loop as often as it likes.

        Returns:
            True if a detection result was delivered during this call.
        """
        token = self._token
        if token is None or not token.alive:
            return False

        delivered = False
        if self._pending is not None:
            if not self._pending.done():
                return False
            future, self._pending = self._pending, None
            delivered = self._deliver(token, future)
            # on_hand_frame may have torn us down
            if not token.alive:
                return delivered

        frame = self.stream.read()
        if frame is None:
            self._report_input_lost("Camera stream dropped")
            self.close()
            return delivered

        self._pending = self._executor.submit(self.detector.detect, frame)
        return delivered

    def _deliver(self, token: LivenessToken, future: Future) -> bool:
        if not token.alive:
            logger.debug("Late detection result dropped after teardown")
            return False
        try:
            hand = future.result()
        except CancelledError:
            return False
        except Exception:
            logger.debug("Detection failed, frame skipped", exc_info=True)
            return False
        self.on_hand_frame(hand)
        return True

    def _report_input_lost(self, reason: str) -> None:
        if self._input_lost_reported:
            return
        self._input_lost_reported = True
        logger.warning("⚠️ Gesture control disabled: %s", reason)
        if self.on_input_lost is not None:
            self.on_input_lost(reason)
