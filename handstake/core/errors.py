"""HandStake error taxonomy."""


class HandStakeError(Exception):
    """Base class for gesture-pipeline failures."""


class CameraUnavailableError(HandStakeError):
    """Camera permission denied, device missing or stream dropped."""


class DetectorInitError(HandStakeError):
    """The hand-landmark model could not be created."""
