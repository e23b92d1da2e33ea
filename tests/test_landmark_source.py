import threading
import unittest
from handstake.core.errors import CameraUnavailableError, DetectorInitError
from handstake.core.interfaces import IHandDetector, IVideoStream
from handstake.core.types import HandFrame
from handstake.vision.landmark_source import LandmarkSource

HAND = HandFrame.from_points([(0.5, 0.5, 0.0)] * 21)


class MockStream(IVideoStream):
    def __init__(self, frames=None):
        # None entries simulate a dropped stream
        self.frames = list(frames) if frames is not None else None
        self.released = False
    def read(self):
        if self.frames is None:
            return "frame"
        return self.frames.pop(0) if self.frames else None
    def release(self):
        self.released = True


class MockDetector(IHandDetector):
    def __init__(self, result=HAND, gate=None, error=None):
        self.result = result
        self.gate = gate      # threading.Event the detection waits on
        self.error = error
        self.calls = 0
        self.closed = False
    def detect(self, frame):
        self.calls += 1
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.result
    def close(self):
        self.closed = True


class TestLandmarkSource(unittest.TestCase):
    def setUp(self):
        self.received = []
        self.lost = []
        self.stream = MockStream()
        self.detector = MockDetector()

    def make_source(self, stream_factory=None, detector_factory=None):
        return LandmarkSource(
            stream_factory=stream_factory or (lambda: self.stream),
            detector_factory=detector_factory or (lambda: self.detector),
            on_hand_frame=self.received.append,
            on_input_lost=self.lost.append,
        )

    def pump_until_delivered(self, source, attempts=200):
        for _ in range(attempts):
            if source.pump():
                return True
            if source._pending is not None:
                source._pending.result(timeout=5)
        return False

    def test_delivers_detections(self):
        source = self.make_source()
        self.assertTrue(source.start())
        self.assertTrue(self.pump_until_delivered(source))
        self.assertEqual(self.received, [HAND])
        source.close()

    def test_no_hand_is_delivered_as_none(self):
        self.detector = MockDetector(result=None)
        source = self.make_source()
        source.start()
        self.assertTrue(self.pump_until_delivered(source))
        self.assertEqual(self.received, [None])
        source.close()

    def test_single_detection_in_flight(self):
        """Back-pressure: no new capture while the previous detection is running."""
        gate = threading.Event()
        self.detector = MockDetector(gate=gate)
        source = self.make_source()
        source.start()
        source.pump()
        first = source._pending
        for _ in range(5):
            self.assertFalse(source.pump())
        self.assertIs(source._pending, first)
        gate.set()
        first.result(timeout=5)
        self.assertTrue(source.pump())
        # Next capture is submitted only after the delivery
        self.assertIsNotNone(source._pending)
        self.assertIsNot(source._pending, first)
        source._pending.result(timeout=5)
        self.assertEqual(self.detector.calls, 2)
        source.close()

    def test_camera_unavailable_disables_gesture_control(self):
        def denied():
            raise CameraUnavailableError("Permission denied")
        source = self.make_source(stream_factory=denied)
        self.assertFalse(source.start())
        self.assertFalse(source.active)
        self.assertFalse(source.pump())
        self.assertEqual(self.lost, ["Permission denied"])

    def test_detector_init_failure_releases_stream(self):
        def broken():
            raise DetectorInitError("no model")
        source = self.make_source(detector_factory=broken)
        self.assertFalse(source.start())
        self.assertTrue(self.stream.released)
        self.assertEqual(self.lost, ["no model"])

    def test_stream_drop_reported_once(self):
        self.stream = MockStream(frames=["f1"])
        source = self.make_source()
        source.start()
        self.assertTrue(self.pump_until_delivered(source))
        source.pump()
        source.pump()
        self.assertFalse(source.active)
        self.assertEqual(self.lost, ["Camera stream dropped"])
        self.assertTrue(self.stream.released)

    def test_failed_detection_is_skipped(self):
        self.detector = MockDetector(error=RuntimeError("inference crashed"))
        source = self.make_source()
        source.start()
        source.pump()
        source._pending.exception(timeout=5)
        self.assertFalse(source.pump())
        self.assertEqual(self.received, [])
        self.assertTrue(source.active)  # loop continues on the next frame
        source.close()

    def test_late_result_after_teardown_is_dropped(self):
        gate = threading.Event()
        self.detector = MockDetector(gate=gate)
        source = self.make_source()
        source.start()
        token = source._token
        source.pump()
        pending = source._pending

        source.close()
        gate.set()
        pending.result(timeout=5)

        self.assertFalse(source.pump())
        self.assertFalse(source._deliver(token, pending))
        self.assertEqual(self.received, [])
        self.assertTrue(self.stream.released)

    def test_close_is_idempotent(self):
        source = self.make_source()
        source.start()
        source.close()
        source.close()
        self.assertFalse(source.active)


if __name__ == '__main__':
    unittest.main()
